"""Block mode scanner mixin."""

from __future__ import annotations

from collections.abc import Iterator

from mdtree.tokens import Span, SpanLine, SpanType


class BlockScannerMixin:
    """Mixin providing block mode scanning logic.

    Scans one line per call using the window approach:
    1. Find end of current line (window)
    2. Classify the line content (pure logic)
    3. Commit position (always advances)
    4. Extend the pending span or close it and open a new one

    """

    # These will be set by the Segmenter class
    _source: str
    _pos: int
    _lineno: int
    _fenced_code_enabled: bool
    _footnotes_enabled: bool
    _pending_type: SpanType | None
    _pending_lines: list[SpanLine]

    def _find_line_end(self) -> int:
        raise NotImplementedError

    def _read_line(self, line_end: int) -> SpanLine:
        raise NotImplementedError

    def _commit_to(self, line_end: int) -> None:
        raise NotImplementedError

    def _flush(self) -> Iterator[Span]:
        raise NotImplementedError

    def _open(self, span_type: SpanType, line: SpanLine) -> None:
        raise NotImplementedError

    # Classifier methods (provided by classifier mixins)
    def _try_classify_fence_start(self, content: str, indent: int) -> bool:
        raise NotImplementedError

    def _try_classify_heading(self, content: str) -> bool:
        raise NotImplementedError

    def _try_classify_list_marker(self, content: str) -> SpanType | None:
        raise NotImplementedError

    def _try_classify_footnote_def(self, content: str) -> bool:
        raise NotImplementedError

    def _scan_block(self) -> Iterator[Span]:
        """Scan one line in BLOCK mode."""
        line_end = self._find_line_end()
        line = self._read_line(line_end)
        self._commit_to(line_end)

        content = line.content
        if not content or content.isspace():
            yield from self._flush()
            return

        span_type = self._classify_line(content, line.indent)

        if self._extends_pending(span_type, line):
            self._pending_lines.append(line)
            return

        yield from self._flush()
        self._open(span_type, line)

        # Headings never span more than one line
        if span_type is SpanType.HEADING:
            yield from self._flush()

    def _classify_line(self, content: str, indent: int) -> SpanType:
        """Pick the type hint for a non-blank line.

        Order matters: fence, heading, list marker, footnote definition,
        then plain text.
        """
        if self._fenced_code_enabled and self._try_classify_fence_start(content, indent):
            return SpanType.FENCE

        if self._try_classify_heading(content):
            return SpanType.HEADING

        item_type = self._try_classify_list_marker(content)
        if item_type is not None:
            return item_type

        if self._footnotes_enabled and self._try_classify_footnote_def(content):
            return SpanType.FOOTNOTE_DEF

        return SpanType.TEXT

    def _extends_pending(self, span_type: SpanType, line: SpanLine) -> bool:
        """One-line lookahead: does this line continue the pending span?

        - text continues text at the same indentation
        - text indented past an item marker continues that item
        - text indented two or more columns continues a footnote definition
        """
        pending = self._pending_type
        if pending is None or span_type is not SpanType.TEXT:
            return False

        pending_indent = self._pending_lines[0].indent
        if pending is SpanType.TEXT:
            return line.indent == pending_indent
        if pending.is_item:
            return line.indent > pending_indent
        if pending is SpanType.FOOTNOTE_DEF:
            return line.indent >= pending_indent + 2
        return False
