"""Fenced code mode scanner mixin."""

from collections.abc import Iterator

from mdtree.lexer.modes import LexerMode
from mdtree.tokens import Span, SpanLine


class FenceScannerMixin:
    """Mixin providing fenced code mode scanning logic.

    Collects lines verbatim (blank lines included) into the pending fence
    span until the closing fence, which is part of the span.

    """

    # These will be set by the Segmenter class
    _mode: LexerMode
    _fence_char: str
    _fence_count: int
    _fence_indent: int
    _pending_lines: list[SpanLine]

    def _find_line_end(self) -> int:
        raise NotImplementedError

    def _read_line(self, line_end: int) -> SpanLine:
        raise NotImplementedError

    def _commit_to(self, line_end: int) -> None:
        raise NotImplementedError

    def _flush(self) -> Iterator[Span]:
        raise NotImplementedError

    def _is_closing_fence(self, line: str) -> bool:
        """Check if line is a closing fence. Implemented by FenceClassifierMixin."""
        raise NotImplementedError

    def _scan_code_fence_content(self) -> Iterator[Span]:
        """Scan one line inside a fenced code block."""
        line_end = self._find_line_end()
        line = self._read_line(line_end)
        self._commit_to(line_end)
        self._pending_lines.append(line)

        if self._is_closing_fence(line.raw):
            self._mode = LexerMode.BLOCK
            self._fence_char = ""
            self._fence_count = 0
            self._fence_indent = 0
            yield from self._flush()
