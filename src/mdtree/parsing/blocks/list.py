"""List parsing for mdtree.

Groups consecutive item spans of the same marker class into one List,
whatever their indentation. Each item span becomes one ListItem: a
Paragraph of the item's text, followed by the blocks parsed from any spans
indented deeper than that item. Those spans are the item's children, so the
next item span left over is always a sibling.

    - one               <- item span (indent 0)
      more of one       <- same span (continuation)
      - nested          <- child span (indent 2) -> nested List
    - two               <- item span (indent 0)
    1. three            <- class switch: a new List

Ordered numerals may appear in any order or with gaps; the first one is
kept as List.start.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from mdtree.nodes import Block, List, ListItem, Paragraph
from mdtree.parsing.charsets import (
    DIGITS,
    MARKER_TERMINATORS,
    MAX_ORDERED_DIGITS,
    ORDERED_LIST_DELIMITER,
    UNORDERED_LIST_MARKERS,
)
from mdtree.parsing.results import Fallback, FallbackReason, Outcome, Recognized
from mdtree.tokens import Span
from mdtree.utils.logger import get_logger

logger = get_logger(__name__)


class ListMarker(NamedTuple):
    """A validated list marker.

    Attributes:
        ordered: Whether the marker is a numeral
        number: The numeral value (None for bullets)
        width: Length of the marker text (``-`` is 1, ``12.`` is 3)

    """

    ordered: bool
    number: int | None
    width: int


def read_marker(content: str) -> Outcome[ListMarker]:
    """Validate the marker at the start of an item line.

    Numerals longer than nine digits are rejected so the item degrades to
    a paragraph instead of producing an unbounded start value.

    Args:
        content: Item line with indentation removed
    """
    if content and content[0] in UNORDERED_LIST_MARKERS:
        return Recognized(ListMarker(ordered=False, number=None, width=1))

    digits = 0
    while digits < len(content) and content[digits] in DIGITS:
        digits += 1
    if digits == 0 or content[digits : digits + 1] != ORDERED_LIST_DELIMITER:
        return Fallback(FallbackReason.INVALID_MARKER, 0)
    if digits > MAX_ORDERED_DIGITS:
        return Fallback(FallbackReason.INVALID_MARKER, digits)
    return Recognized(ListMarker(ordered=True, number=int(content[:digits]), width=digits + 1))


def extract_task_marker(text: str) -> tuple[bool | None, int]:
    """Detect a ``[ ]`` / ``[x]`` / ``[X]`` checkbox at the start of item text.

    Returns:
        (checked, consumed): checked is None and consumed is 0 when absent.
    """
    if (
        len(text) >= 3
        and text[0] == "["
        and text[2] == "]"
        and text[1] in " xX"
        and (len(text) == 3 or text[3] in MARKER_TERMINATORS)
    ):
        return text[1] != " ", 3
    return None, 0


class ListParsingMixin:
    """List grouping and item construction.

    Required Host Attributes:
        - _task_lists_enabled: bool
        - _max_nesting_depth: int

    Required Host Methods:
        - _parse_blocks(spans, depth) -> tuple[Block, ...]
        - _build_paragraph(lines, skip) -> Paragraph
        - _line_pieces(lines, skip) -> tuple[str, OffsetMap]
        - _parse_inline(text, offsets) -> tuple[Inline, ...]

    """

    # Required host attributes (documented, not declared, to avoid override conflicts)
    # _task_lists_enabled: bool
    # _max_nesting_depth: int

    def _parse_list(
        self, spans: Sequence[Span], pos: int, depth: int
    ) -> tuple[Outcome[List], int]:
        """Parse the list that starts with the item span at ``pos``.

        Returns:
            (outcome, next_pos). On Fallback nothing is consumed.
        """
        first = spans[pos]
        items: list[ListItem] = []
        ordered = False
        start = 1

        while pos < len(spans):
            span = spans[pos]
            if span.type is not first.type:
                break

            match read_marker(span.first.content):
                case Recognized(node=marker):
                    pass
                case Fallback() as fallback:
                    if not items:
                        return fallback, pos
                    break

            end = pos + 1
            while end < len(spans) and spans[end].indent > span.indent:
                end += 1

            if not items:
                ordered = marker.ordered
                start = marker.number if marker.number is not None else 1
            items.append(self._build_list_item(span, marker, spans[pos + 1 : end], depth))
            pos = end

        location = items[0].location.span_to(items[-1].location)
        return Recognized(List(location=location, ordered=ordered, items=tuple(items), start=start)), pos

    def _build_list_item(
        self,
        span: Span,
        marker: ListMarker,
        children: Sequence[Span],
        depth: int,
    ) -> ListItem:
        """Build one item from its span and the deeper spans that follow it."""
        checked: bool | None = None
        skip = marker.width
        if self._task_lists_enabled and not marker.ordered:
            after = span.first.content[marker.width :]
            rest = after.lstrip(" \t")
            checked, consumed = extract_task_marker(rest)
            if checked is not None:
                skip += len(after) - len(rest) + consumed

        content: list[Block] = []
        text, offsets = self._line_pieces(span.lines, skip=skip)
        if text:
            content.append(
                Paragraph(
                    location=offsets.location(0, len(text)),
                    content=self._parse_inline(text, offsets),
                )
            )

        location = span.location
        if children:
            location = location.span_to(children[-1].location)
            if depth + 1 > self._max_nesting_depth:
                logger.debug(
                    "nesting depth %d exceeded at line %d; %d spans kept as paragraphs",
                    self._max_nesting_depth,
                    children[0].start_line,
                    len(children),
                )
                content.extend(self._build_paragraph(child.lines) for child in children)
            else:
                content.extend(self._parse_blocks(children, depth + 1))

        return ListItem(location=location, content=tuple(content), checked=checked)
