"""Block segmenter with O(n) line-window scanning.

Partitions the document body into ordered Span objects: groups of raw lines
sharing a block type hint and indentation. Blank lines and marker or
indentation changes end a span. Lists are segmented item by item; grouping
items into lists is left to the block parser.

No regex in the hot path.

Thread Safety:
Segmenter instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from mdtree.config import get_parse_config
from mdtree.lexer.classifiers import (
    FenceClassifierMixin,
    FootnoteClassifierMixin,
    HeadingClassifierMixin,
    ListClassifierMixin,
)
from mdtree.lexer.modes import LexerMode
from mdtree.lexer.scanners import BlockScannerMixin, FenceScannerMixin
from mdtree.tokens import Span, SpanLine, SpanType


class Segmenter(
    # Classifiers (pure logic, no position mutation)
    HeadingClassifierMixin,
    ListClassifierMixin,
    FenceClassifierMixin,
    FootnoteClassifierMixin,
    # Scanners (mode-specific scanning logic)
    BlockScannerMixin,
    FenceScannerMixin,
):
    """Line-window block segmenter.

    Scans from ``start`` to the end of ``source``. Offsets in the produced
    spans are absolute positions in ``source``, so a segmenter started after
    the frontmatter still reports document coordinates.

    Usage:
            >>> spans = list(Segmenter("# Hello\\n\\n- a\\n- b").segment())
            >>> [s.type.name for s in spans]
            ['HEADING', 'UNORDERED_ITEM', 'UNORDERED_ITEM']

    Configuration:
        Reads tab_width, fenced_code_enabled and footnotes_enabled from the
        active ParseConfig when constructed.

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_pos",
        "_lineno",
        "_mode",
        "_source_file",
        "_tab_width",
        "_fenced_code_enabled",
        "_footnotes_enabled",
        "_fence_char",
        "_fence_count",
        "_fence_indent",
        "_fence_lines",
        "_fence_reach",
        "_pending_type",
        "_pending_lines",
    )

    def __init__(
        self,
        source: str,
        *,
        start: int = 0,
        lineno: int = 1,
        source_file: str | None = None,
    ) -> None:
        """Initialize segmenter.

        Args:
            source: Full document text
            start: Offset where the body begins
            lineno: Line number of the line at ``start``
            source_file: Optional source file path
        """
        config = get_parse_config()
        self._source = source
        self._source_len = len(source)
        self._pos = start
        self._lineno = lineno
        self._mode = LexerMode.BLOCK
        self._source_file = source_file
        self._tab_width = config.tab_width
        self._fenced_code_enabled = config.fenced_code_enabled
        self._footnotes_enabled = config.footnotes_enabled

        # Fenced code state
        self._fence_char: str = ""
        self._fence_count: int = 0
        self._fence_indent: int = 0
        self._fence_lines: dict[str, tuple[list[int], list[int], list[int]]] | None = None
        self._fence_reach: dict[tuple[str, int], list[int]] = {}

        # Span under construction
        self._pending_type: SpanType | None = None
        self._pending_lines: list[SpanLine] = []

    def segment(self) -> Iterator[Span]:
        """Segment the body into spans.

        Yields:
            Span objects in source order.

        Complexity: O(n) where n = len(source), plus one indexing pass over the
        lines for closing-capable fence lines and one table over those per
        distinct opener indent. Each fence opening is then a binary search.
        """
        while self._pos < self._source_len:
            if self._mode is LexerMode.CODE_FENCE:
                yield from self._scan_code_fence_content()
            else:
                yield from self._scan_block()
        yield from self._flush()

    # =========================================================================
    # Span assembly
    # =========================================================================

    def _open(self, span_type: SpanType, line: SpanLine) -> None:
        self._pending_type = span_type
        self._pending_lines = [line]

    def _flush(self) -> Iterator[Span]:
        """Close the pending span, if any."""
        if self._pending_type is None:
            return
        lines = tuple(self._pending_lines)
        span_type = self._pending_type
        self._pending_type = None
        self._pending_lines = []
        yield Span(
            type=span_type,
            lines=lines,
            indent=lines[0].indent,
            source_file=self._source_file,
        )

    # =========================================================================
    # Window navigation helpers
    # =========================================================================

    def _find_line_end(self) -> int:
        """Find the end of the current line (position of \\n or EOF).

        Uses str.find for O(n) with low constant factor (C implementation).
        """
        idx = self._source.find("\n", self._pos)
        return idx if idx != -1 else self._source_len

    def _read_line(self, line_end: int) -> SpanLine:
        """Build a SpanLine for the current window (a trailing \\r is dropped)."""
        raw = self._source[self._pos : line_end]
        if raw.endswith("\r"):
            raw = raw[:-1]
        indent, content_start = self._calc_indent(raw)
        return SpanLine(
            raw=raw,
            indent=indent,
            content_start=content_start,
            offset=self._pos,
            lineno=self._lineno,
        )

    def _calc_indent(self, line: str) -> tuple[int, int]:
        """Calculate indent level and content start position.

        Spaces count as 1, tabs expand to the next tab stop.

        Args:
            line: Line content

        Returns:
            (indent_columns, content_start_index)
        """
        indent = 0
        pos = 0
        line_len = len(line)
        tab_width = self._tab_width
        while pos < line_len:
            char = line[pos]
            if char == " ":
                indent += 1
            elif char == "\t":
                indent += tab_width - (indent % tab_width)
            else:
                break
            pos += 1
        return indent, pos

    def _commit_to(self, line_end: int) -> None:
        """Commit position to line_end, consuming the newline if present."""
        self._pos = line_end
        if self._pos < self._source_len and self._source[self._pos] == "\n":
            self._pos += 1
        self._lineno += 1


def segment(
    source: str,
    *,
    start: int = 0,
    lineno: int = 1,
    source_file: str | None = None,
) -> tuple[Span, ...]:
    """Segment ``source`` from ``start`` into spans using the active config."""
    return tuple(
        Segmenter(source, start=start, lineno=lineno, source_file=source_file).segment()
    )
