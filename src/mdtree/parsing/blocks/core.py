"""Core block parsing for mdtree.

Provides span dispatch and the simple block constructors (headings,
paragraphs, fenced code). Lists and footnote definitions live in their own
mixins.

Every constructor returns Recognized or Fallback. On Fallback the span's
raw text is inline-parsed into a Paragraph; no block failure is fatal.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from mdtree.location import SourceLocation
from mdtree.nodes import Block, FencedCode, Heading, Inline, Paragraph
from mdtree.parsing.charsets import HEADING_MARKER, MARKER_TERMINATORS, fence_run
from mdtree.parsing.inline.links import process_escapes
from mdtree.parsing.offsets import OffsetMap
from mdtree.parsing.results import Fallback, FallbackReason, Outcome, Recognized
from mdtree.tokens import Span, SpanLine, SpanType
from mdtree.utils.logger import get_logger

if TYPE_CHECKING:
    from mdtree.nodes import List

logger = get_logger(__name__)

_MAX_HEADING_LEVEL = 6


class BlockParsingCoreMixin:
    """Core block parsing methods.

    Required Host Attributes:
        - _source_file: str | None

    Required Host Methods:
        - _parse_inline(text, offsets) -> tuple[Inline, ...]
        - _parse_list(spans, pos, depth) -> tuple[Outcome[List], int]
        - _build_footnote_def(span) -> Outcome[FootnoteDef]

    """

    # Required host attributes (documented, not declared, to avoid override conflicts)
    # _source_file: str | None

    def _parse_blocks(self, spans: Sequence[Span], depth: int = 0) -> tuple[Block, ...]:
        """Parse a run of spans into blocks, in source order.

        Args:
            spans: Spans from the segmenter (or an item's nested spans)
            depth: Current list nesting depth (0 at document level)
        """
        blocks: list[Block] = []
        pos = 0
        while pos < len(spans):
            span = spans[pos]
            if span.type.is_item:
                outcome, next_pos = self._parse_list(spans, pos, depth)
                match outcome:
                    case Recognized(node=node):
                        blocks.append(node)
                        pos = next_pos
                    case Fallback() as fallback:
                        blocks.append(self._degrade(span, fallback))
                        pos += 1
                continue

            match self._parse_span(span):
                case Recognized(node=node):
                    blocks.append(node)
                case Fallback() as fallback:
                    blocks.append(self._degrade(span, fallback))
            pos += 1
        return tuple(blocks)

    def _parse_span(self, span: Span) -> Outcome[Block]:
        """Dispatch a non-item span to its constructor."""
        match span.type:
            case SpanType.HEADING:
                return self._build_heading(span)
            case SpanType.FENCE:
                return self._build_fenced_code(span)
            case SpanType.FOOTNOTE_DEF:
                return self._build_footnote_def(span)
            case SpanType.TEXT:
                return Recognized(self._build_paragraph(span.lines))
            case _:
                return Fallback(FallbackReason.INVALID_MARKER)

    # =========================================================================
    # Constructors
    # =========================================================================

    def _build_heading(self, span: Span) -> Outcome[Heading]:
        """Build a heading from a single-line span.

        Level is the length of the # run, clamped to 6. Leading and
        trailing whitespace around the text is not part of the content.
        """
        line = span.first
        content = line.content
        run = 0
        while run < len(content) and content[run] == HEADING_MARKER:
            run += 1
        if run == 0 or (run < len(content) and content[run] not in MARKER_TERMINATORS):
            return Fallback(FallbackReason.INVALID_MARKER, line.content_offset)

        text, offsets = self._line_pieces([line], skip=run)
        level = min(run, _MAX_HEADING_LEVEL)
        return Recognized(
            Heading(
                location=span.location,
                level=level,  # type: ignore[arg-type]
                content=self._parse_inline(text, offsets),
            )
        )

    def _build_paragraph(self, lines: Sequence[SpanLine], skip: int = 0) -> Paragraph:
        """Inline-parse lines into a Paragraph."""
        text, offsets = self._line_pieces(lines, skip=skip)
        return Paragraph(
            location=self._lines_location(lines),
            content=self._parse_inline(text, offsets),
        )

    def _build_fenced_code(self, span: Span) -> Outcome[FencedCode]:
        """Build fenced code from a span that runs opening to closing fence.

        Code lines lose up to the opening fence's indentation in spaces.
        The info string is the text after the opening run, escapes resolved.
        """
        first = span.first
        char, count = fence_run(first.content)
        if count < 3 or len(span.lines) < 2:
            return Fallback(FallbackReason.UNTERMINATED_FENCE, first.content_offset)

        last = span.lines[-1]
        close_char, close_count = fence_run(last.content)
        if close_char != char or close_count < count or last.content[close_count:].strip():
            return Fallback(FallbackReason.UNTERMINATED_FENCE, last.offset)

        info = process_escapes(first.content[count:].strip()) or None
        code = "".join(
            _strip_indent(line.raw, first.indent) + "\n" for line in span.lines[1:-1]
        )
        return Recognized(
            FencedCode(
                location=span.location,
                code=code,
                info=info,
                marker=char,  # type: ignore[arg-type]
            )
        )

    # =========================================================================
    # Degrade path
    # =========================================================================

    def _degrade(self, span: Span, fallback: Fallback) -> Paragraph:
        """Inline-parse the span's raw text as a paragraph."""
        logger.debug(
            "%s span at line %d degraded to paragraph: %s",
            span.type.name,
            span.start_line,
            fallback.reason.name,
        )
        return self._build_paragraph(span.lines)

    # =========================================================================
    # Text assembly
    # =========================================================================

    def _line_pieces(
        self, lines: Sequence[SpanLine], skip: int = 0
    ) -> tuple[str, OffsetMap]:
        """Join line contents for inline parsing.

        The first line loses ``skip`` characters (a block marker) and any
        whitespace after them. Every line loses trailing whitespace.
        """
        pieces: list[tuple[str, int, int, int]] = []
        for index, line in enumerate(lines):
            start = line.content_start
            if index == 0 and skip:
                start += skip
                while start < len(line.raw) and line.raw[start] in MARKER_TERMINATORS:
                    start += 1
            text = line.raw[start:].rstrip(" \t")
            pieces.append((text, line.offset + start, line.lineno, start + 1))
        return OffsetMap.from_pieces(pieces, self._source_file)

    def _lines_location(self, lines: Sequence[SpanLine]) -> SourceLocation:
        first, last = lines[0], lines[-1]
        return SourceLocation(
            lineno=first.lineno,
            col_offset=first.content_start + 1,
            offset=first.content_offset,
            end_offset=last.end_offset,
            end_lineno=last.lineno,
            end_col_offset=len(last.raw) + 1,
            source_file=self._source_file,
        )

    # Host stubs (implemented in other mixins)

    def _parse_inline(self, text: str, offsets: OffsetMap) -> tuple[Inline, ...]:
        raise NotImplementedError

    def _parse_list(
        self, spans: Sequence[Span], pos: int, depth: int
    ) -> tuple[Outcome[List], int]:
        raise NotImplementedError

    def _build_footnote_def(self, span: Span) -> Outcome[Block]:
        raise NotImplementedError


def _strip_indent(raw: str, width: int) -> str:
    """Remove up to ``width`` leading spaces."""
    pos = 0
    while pos < width and pos < len(raw) and raw[pos] == " ":
        pos += 1
    return raw[pos:]
