"""Footnote definition parsing for mdtree.

    [^note]: The note text.
      A continuation line indented two or more columns.

The identifier must be non-empty with no whitespace or brackets; an
invalid one degrades the span to a paragraph.
"""

from __future__ import annotations

from mdtree.nodes import FootnoteDef, Paragraph
from mdtree.parsing.charsets import WHITESPACE
from mdtree.parsing.results import Fallback, FallbackReason, Outcome, Recognized
from mdtree.tokens import Span


class FootnoteParsingMixin:
    """Footnote definition constructor.

    Required Host Methods:
        - _line_pieces(lines, skip) -> tuple[str, OffsetMap]
        - _parse_inline(text, offsets) -> tuple[Inline, ...]

    """

    def _build_footnote_def(self, span: Span) -> Outcome[FootnoteDef]:
        first = span.first
        content = first.content
        close = content.find("]:", 2)
        identifier = content[2:close] if close != -1 else ""
        if not identifier or any(c in WHITESPACE or c in "[]" for c in identifier):
            return Fallback(FallbackReason.INVALID_LABEL, first.content_offset + 2)

        text, offsets = self._line_pieces(span.lines, skip=close + 2)
        body: tuple[Paragraph, ...] = ()
        if text:
            body = (
                Paragraph(
                    location=offsets.location(0, len(text)),
                    content=self._parse_inline(text, offsets),
                ),
            )
        return Recognized(
            FootnoteDef(location=span.location, identifier=identifier, content=body)
        )
