"""Frontmatter tokenizer.

Detects an optional preamble fenced by delimiter lines at the very start of
the document and emits one token per interior line:

    ---                 <- opening delimiter, must be line 1 at offset 0
    title: Notes        <- FrontmatterToken(KEY)
    tags:               <- FrontmatterToken(KEY)
      - draft           <- FrontmatterToken(LIST_ITEM, indent=2)
    ---                 <- closing delimiter
    # Body starts here

Lines are never interpreted; the token kind is a lexical hint only.
An opening delimiter without a closing one is fatal.

Thread Safety:
FrontmatterLexer instances are single-use. Create one per source string.

"""

from __future__ import annotations

from dataclasses import dataclass

from mdtree.errors import UnterminatedFrontmatter
from mdtree.tokens import FrontmatterToken, FrontmatterTokenKind
from mdtree.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class FrontmatterScan:
    """Result of scanning for frontmatter.

    Attributes:
        tokens: One token per interior line, in source order
        body_offset: Offset where the body begins (0 when absent)
        body_lineno: Line number where the body begins
        present: Whether the document opened with a delimiter line

    """

    tokens: tuple[FrontmatterToken, ...]
    body_offset: int
    body_lineno: int
    present: bool


_ABSENT = FrontmatterScan(tokens=(), body_offset=0, body_lineno=1, present=False)


class FrontmatterLexer:
    """Line-window lexer for the frontmatter block.

    Usage:
            >>> scan = FrontmatterLexer("---\\ntitle: x\\n---\\nbody").tokenize()
            >>> scan.tokens
            (FrontmatterToken(KEY, 'title: x', 2),)
            >>> scan.body_offset
            17

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_pos",
        "_lineno",
        "_delimiter",
        "_tab_width",
        "_source_file",
    )

    def __init__(
        self,
        source: str,
        *,
        delimiter: str = "---",
        tab_width: int = 4,
        source_file: str | None = None,
    ) -> None:
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._lineno = 1
        self._delimiter = delimiter
        self._tab_width = tab_width
        self._source_file = source_file

    def tokenize(self) -> FrontmatterScan:
        """Scan the source for a frontmatter block.

        Returns:
            FrontmatterScan describing the tokens and where the body begins.

        Raises:
            UnterminatedFrontmatter: The opening delimiter is never closed.
        """
        line_end = self._find_line_end()
        if self._line_text(line_end) != self._delimiter:
            return _ABSENT

        self._commit_to(line_end)
        tokens: list[FrontmatterToken] = []

        while self._pos < self._source_len:
            line_end = self._find_line_end()
            text = self._line_text(line_end)
            if text == self._delimiter:
                self._commit_to(line_end)
                logger.debug(
                    "frontmatter: %d lines, body at offset %d", len(tokens), self._pos
                )
                return FrontmatterScan(
                    tokens=tuple(tokens),
                    body_offset=self._pos,
                    body_lineno=self._lineno,
                    present=True,
                )
            tokens.append(self._make_token(text))
            self._commit_to(line_end)

        raise UnterminatedFrontmatter(
            self._delimiter, lineno=1, source_file=self._source_file
        )

    # =========================================================================
    # Window navigation helpers
    # =========================================================================

    def _find_line_end(self) -> int:
        """Find the end of the current line (position of \\n or EOF)."""
        idx = self._source.find("\n", self._pos)
        return idx if idx != -1 else self._source_len

    def _line_text(self, line_end: int) -> str:
        """Current line without its terminator (a trailing \\r is dropped)."""
        text = self._source[self._pos : line_end]
        if text.endswith("\r"):
            text = text[:-1]
        return text

    def _commit_to(self, line_end: int) -> None:
        """Advance past line_end, consuming the newline if present."""
        self._pos = line_end
        if self._pos < self._source_len and self._source[self._pos] == "\n":
            self._pos += 1
        self._lineno += 1

    def _make_token(self, text: str) -> FrontmatterToken:
        indent = 0
        for char in text:
            if char == " ":
                indent += 1
            elif char == "\t":
                indent += self._tab_width - (indent % self._tab_width)
            else:
                break
        return FrontmatterToken(
            kind=_classify(text.lstrip(" \t")),
            text=text,
            indent=indent,
            lineno=self._lineno,
            offset=self._pos,
            end_offset=self._pos + len(text),
            source_file=self._source_file,
        )


def _classify(content: str) -> FrontmatterTokenKind:
    """Lexical shape of a frontmatter line (indentation already removed)."""
    if not content.strip():
        return FrontmatterTokenKind.BLANK
    if content == "-" or content.startswith(("- ", "-\t")):
        return FrontmatterTokenKind.LIST_ITEM
    colon = content.find(":")
    if colon > 0 and (colon + 1 == len(content) or content[colon + 1] in " \t"):
        return FrontmatterTokenKind.KEY
    return FrontmatterTokenKind.TEXT


def tokenize_frontmatter(
    source: str,
    *,
    delimiter: str = "---",
    tab_width: int = 4,
    source_file: str | None = None,
) -> FrontmatterScan:
    """Tokenize the frontmatter block at the start of ``source``, if any.

    Args:
        source: Full document text
        delimiter: Line that opens and closes the block
        tab_width: Tab stop width for measuring token indentation
        source_file: Optional source file path for error messages

    Returns:
        FrontmatterScan; ``present`` is False and ``body_offset`` is 0 when the
        first line is not exactly the delimiter.

    Raises:
        UnterminatedFrontmatter: The opening delimiter is never closed.
    """
    return FrontmatterLexer(
        source, delimiter=delimiter, tab_width=tab_width, source_file=source_file
    ).tokenize()
