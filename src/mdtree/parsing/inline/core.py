"""Core inline parsing for mdtree.

Provides the main inline tokenization and AST building logic.

Inline grammar handled here:
- Backslash + ASCII punctuation makes that character literal
- [text](href "title"), ![alt](src "title"), [^note]
- * and _ delimiter runs (only with emphasis_enabled)
- Everything else is literal text

Anything that fails to parse degrades to literal text: the opening marker
is kept as text and scanning resumes right after it. Adjacent text is
coalesced, so ``[a](b`` yields a single Text node.

Thread Safety:
All methods are stateless or use instance-local state only.
Safe for concurrent use when each parser instance is used by one thread.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mdtree.nodes import Inline, Text
from mdtree.parsing.charsets import (
    ASCII_PUNCTUATION,
    EMPHASIS_DELIMITERS,
    INLINE_SPECIAL,
)
from mdtree.parsing.inline.tokens import (
    DelimiterToken,
    InlineState,
    InlineToken,
    NodeToken,
    TextToken,
)
from mdtree.parsing.results import Fallback, Recognized

if TYPE_CHECKING:
    from mdtree.parsing.offsets import OffsetMap

# Characters that stop a text run when emphasis is disabled
_SPECIAL_NO_EMPHASIS: frozenset[str] = INLINE_SPECIAL - EMPHASIS_DELIMITERS


class InlineParsingCoreMixin:
    """Core inline parsing methods.

    Required Host Attributes:
        - _footnotes_enabled: bool
        - _emphasis_enabled: bool

    Required Host Methods (from other mixins):
        - _try_parse_bracketed(text, pos, offsets) -> Outcome[Inline]
        - _scan_delimiter_run(text, pos) -> DelimiterToken
        - _process_emphasis(tokens, offsets) -> list[InlineToken]

    """

    # Required host attributes (documented, not declared, to avoid override conflicts)
    # _footnotes_enabled: bool
    # _emphasis_enabled: bool

    def _parse_inline(self, text: str, offsets: OffsetMap) -> tuple[Inline, ...]:
        """Parse block text into inline nodes.

        Args:
            text: Block text with markers and indentation removed
            offsets: Map from positions in ``text`` to source locations

        Returns:
            Inline nodes covering the whole of ``text``.
        """
        if not text:
            return ()

        # Phase 1: Tokenize
        tokens = self._tokenize_inline(text, offsets)

        # Phase 2: Pair delimiter runs
        if self._emphasis_enabled and any(isinstance(t, DelimiterToken) for t in tokens):
            tokens = self._process_emphasis(tokens, offsets)

        # Phase 3: Build AST
        return self._build_inline_ast(tokens, offsets)

    def _tokenize_inline(self, text: str, offsets: OffsetMap) -> list[InlineToken]:
        """Tokenize inline content with a small state machine."""
        tokens: list[InlineToken] = []
        run_parts: list[str] = []
        run_start = 0
        pos = 0
        text_len = len(text)
        state = InlineState.NORMAL
        special = INLINE_SPECIAL if self._emphasis_enabled else _SPECIAL_NO_EMPHASIS

        while pos < text_len:
            char = text[pos]

            match state:
                case InlineState.NORMAL:
                    if char not in special:
                        next_pos = pos + 1
                        while next_pos < text_len and text[next_pos] not in special:
                            next_pos += 1
                        run_parts.append(text[pos:next_pos])
                        pos = next_pos
                    elif char == "\\":
                        state = InlineState.ESCAPED
                    elif char in EMPHASIS_DELIMITERS:
                        state = InlineState.DELIMITER_RUN
                    elif char == "!" and not text.startswith("![", pos):
                        run_parts.append(char)
                        pos += 1
                    else:
                        outcome = self._try_parse_bracketed(text, pos, offsets)
                        match outcome:
                            case Recognized(node=node, end=end):
                                self._flush_text(tokens, run_parts, run_start, pos)
                                tokens.append(NodeToken(node, pos, end))
                                pos = run_start = end
                            case Fallback():
                                marker = "![" if char == "!" else "["
                                run_parts.append(marker)
                                pos += len(marker)

                case InlineState.ESCAPED:
                    if pos + 1 < text_len and text[pos + 1] in ASCII_PUNCTUATION:
                        run_parts.append(text[pos + 1])
                        pos += 2
                    else:
                        run_parts.append(char)
                        pos += 1
                    state = InlineState.NORMAL

                case InlineState.DELIMITER_RUN:
                    delimiter = self._scan_delimiter_run(text, pos)
                    self._flush_text(tokens, run_parts, run_start, pos)
                    tokens.append(delimiter)
                    pos = run_start = delimiter.end
                    state = InlineState.NORMAL

        self._flush_text(tokens, run_parts, run_start, text_len)
        return tokens

    def _flush_text(
        self, tokens: list[InlineToken], parts: list[str], start: int, end: int
    ) -> None:
        if parts:
            tokens.append(TextToken("".join(parts), start, end))
            parts.clear()

    def _build_inline_ast(
        self, tokens: list[InlineToken], offsets: OffsetMap
    ) -> tuple[Inline, ...]:
        """Build inline nodes, rendering leftover delimiters as text."""
        nodes: list[Inline] = []
        text_parts: list[str] = []
        text_start = text_end = 0

        for token in tokens:
            match token:
                case TextToken(value=value, start=start, end=end):
                    if not text_parts:
                        text_start = start
                    text_parts.append(value)
                    text_end = end
                case DelimiterToken(char=char, count=count, start=start):
                    if not text_parts:
                        text_start = start
                    text_parts.append(char * count)
                    text_end = token.end
                case NodeToken(node=node):
                    if text_parts:
                        nodes.append(self._text_node(text_parts, text_start, text_end, offsets))
                        text_parts = []
                    nodes.append(node)

        if text_parts:
            nodes.append(self._text_node(text_parts, text_start, text_end, offsets))
        return tuple(nodes)

    def _text_node(
        self, parts: list[str], start: int, end: int, offsets: OffsetMap
    ) -> Text:
        return Text(location=offsets.location(start, end), value="".join(parts))

