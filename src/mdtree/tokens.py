"""Token and span definitions produced by the mdtree lexers.

Two lexers feed the parser:

- The frontmatter tokenizer emits one FrontmatterToken per preamble line.
  These tokens are part of the final Document and are never interpreted.
- The block segmenter emits Span objects: type-hinted groups of raw body
  lines. Spans are transient and consumed entirely by the block parser.

Thread Safety:
All classes here are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from mdtree.location import SourceLocation


class FrontmatterTokenKind(Enum):
    """Lexical shape of a frontmatter line.

    A hint for materializers only; the token text is never split or
    interpreted by the core.

    """

    BLANK = auto()  # whitespace only
    KEY = auto()  # key: ...
    LIST_ITEM = auto()  # - ...
    TEXT = auto()  # anything else


@dataclass(frozen=True, slots=True)
class FrontmatterToken:
    """One line of the frontmatter block.

    Attributes:
        kind: Lexical shape of the line
        text: Raw line content without its line terminator, indentation included
        indent: Leading whitespace width in columns
        lineno: Line number in the source (1-indexed)
        offset: Absolute start offset of the line
        end_offset: Absolute offset of the line end (before the terminator)
        source_file: Optional source file path

    """

    kind: FrontmatterTokenKind
    text: str
    indent: int
    lineno: int
    offset: int
    end_offset: int
    source_file: str | None = None

    @property
    def content(self) -> str:
        """Line content with leading indentation removed."""
        return self.text.lstrip(" \t")

    @property
    def location(self) -> SourceLocation:
        """Source location of the whole line."""
        return SourceLocation(
            lineno=self.lineno,
            col_offset=1,
            offset=self.offset,
            end_offset=self.end_offset,
            end_lineno=self.lineno,
            end_col_offset=self.end_offset - self.offset + 1,
            source_file=self.source_file,
        )

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.text
        if len(val) > 20:
            val = val[:17] + "..."
        return f"FrontmatterToken({self.kind.name}, {val!r}, {self.lineno})"


class SpanType(Enum):
    """Block type hint assigned by the segmenter."""

    HEADING = auto()  # # Heading
    UNORDERED_ITEM = auto()  # - item, * item, + item
    ORDERED_ITEM = auto()  # 1. item
    TEXT = auto()  # no marker matched
    FENCE = auto()  # ``` ... ```
    FOOTNOTE_DEF = auto()  # [^id]: text

    @property
    def is_item(self) -> bool:
        """Whether this hint belongs to a list item."""
        return self is SpanType.UNORDERED_ITEM or self is SpanType.ORDERED_ITEM


@dataclass(frozen=True, slots=True)
class SpanLine:
    """A single physical source line inside a span.

    Attributes:
        raw: Line text without its terminator (indentation included)
        indent: Indentation width in columns (tabs expanded)
        content_start: Index into raw where content begins
        offset: Absolute source offset of raw[0]
        lineno: Line number (1-indexed)

    """

    raw: str
    indent: int
    content_start: int
    offset: int
    lineno: int

    @property
    def content(self) -> str:
        """Line text with indentation removed."""
        return self.raw[self.content_start :]

    @property
    def content_offset(self) -> int:
        """Absolute source offset where content begins."""
        return self.offset + self.content_start

    @property
    def end_offset(self) -> int:
        """Absolute source offset of the line end."""
        return self.offset + len(self.raw)


@dataclass(frozen=True, slots=True)
class Span:
    """A type-hinted group of consecutive non-blank lines.

    Attributes:
        type: Block type hint
        lines: Raw lines in source order (never empty)
        indent: Indentation column of the first line
        source_file: Optional source file path

    """

    type: SpanType
    lines: tuple[SpanLine, ...]
    indent: int
    source_file: str | None = None

    @property
    def first(self) -> SpanLine:
        """The line that decided the type hint."""
        return self.lines[0]

    @property
    def start_line(self) -> int:
        """First source line number."""
        return self.lines[0].lineno

    @property
    def end_line(self) -> int:
        """Last source line number (inclusive)."""
        return self.lines[-1].lineno

    @property
    def offset(self) -> int:
        """Absolute start offset of the first line's content."""
        return self.lines[0].content_offset

    @property
    def end_offset(self) -> int:
        """Absolute end offset of the last line."""
        return self.lines[-1].end_offset

    @property
    def location(self) -> SourceLocation:
        """Source location covering the whole span."""
        last = self.lines[-1]
        return SourceLocation(
            lineno=self.start_line,
            col_offset=self.first.content_start + 1,
            offset=self.offset,
            end_offset=self.end_offset,
            end_lineno=last.lineno,
            end_col_offset=len(last.raw) + 1,
            source_file=self.source_file,
        )

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.first.content
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Span({self.type.name}, {val!r}, {self.start_line}-{self.end_line}, indent={self.indent})"
