"""Mapping from block text positions back to source coordinates.

The inline parser works on a block's text with indentation and markers
removed and lines joined by newlines. An OffsetMap translates positions in
that text back to absolute offsets, line and column in the document, so
every inline node can report exactly where it came from.

Thread Safety:
OffsetMap is immutable after construction.

"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable
from typing import NamedTuple

from mdtree.location import SourceLocation


class _Segment(NamedTuple):
    """One contiguous piece of block text and where it sits in the source."""

    text_pos: int
    source_offset: int
    lineno: int
    col: int


class OffsetMap:
    """Translate block-text positions to source locations.

    Usage:
            >>> text, offsets = OffsetMap.from_pieces([("foo", 10, 2, 3), ("bar", 16, 3, 3)])
            >>> text
            'foo\\nbar'
            >>> offsets.offset(4)
            16

    """

    __slots__ = ("_segments", "_starts", "_length", "_source_file")

    def __init__(
        self,
        segments: list[_Segment],
        length: int,
        source_file: str | None = None,
    ) -> None:
        self._segments = segments
        self._starts = [seg.text_pos for seg in segments]
        self._length = length
        self._source_file = source_file

    @classmethod
    def from_pieces(
        cls,
        pieces: Iterable[tuple[str, int, int, int]],
        source_file: str | None = None,
    ) -> tuple[str, OffsetMap]:
        """Join line pieces with newlines and build the matching map.

        Args:
            pieces: (text, source_offset, lineno, col) for each line, in order
            source_file: Optional source file path

        Returns:
            (joined_text, offset_map)
        """
        parts: list[str] = []
        segments: list[_Segment] = []
        pos = 0
        for text, source_offset, lineno, col in pieces:
            if segments:
                parts.append("\n")
                pos += 1
            segments.append(_Segment(pos, source_offset, lineno, col))
            parts.append(text)
            pos += len(text)
        if not segments:
            segments.append(_Segment(0, 0, 1, 1))
        return "".join(parts), cls(segments, pos, source_file)

    @classmethod
    def for_text(cls, text: str, source_file: str | None = None) -> OffsetMap:
        """Map for standalone text: offsets are positions in ``text`` itself."""
        pieces = []
        offset = 0
        for lineno, line in enumerate(text.split("\n"), start=1):
            pieces.append((line, offset, lineno, 1))
            offset += len(line) + 1
        return cls.from_pieces(pieces, source_file)[1]

    def _segment(self, pos: int) -> _Segment:
        index = bisect_right(self._starts, pos) - 1
        return self._segments[max(index, 0)]

    def offset(self, pos: int) -> int:
        """Absolute source offset of text position ``pos``."""
        seg = self._segment(pos)
        return seg.source_offset + (pos - seg.text_pos)

    def location(self, start: int, end: int) -> SourceLocation:
        """Source location covering text positions ``start`` to ``end``."""
        first = self._segment(start)
        last = self._segment(end)
        return SourceLocation(
            lineno=first.lineno,
            col_offset=first.col + (start - first.text_pos),
            offset=first.source_offset + (start - first.text_pos),
            end_offset=last.source_offset + (end - last.text_pos),
            end_lineno=last.lineno,
            end_col_offset=last.col + (end - last.text_pos),
            source_file=self._source_file,
        )
