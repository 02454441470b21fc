"""List marker classifier mixin."""

from __future__ import annotations

from mdtree.parsing.charsets import (
    DIGITS,
    MARKER_TERMINATORS,
    ORDERED_LIST_DELIMITER,
    UNORDERED_LIST_MARKERS,
)
from mdtree.tokens import SpanType


class ListClassifierMixin:
    """Mixin providing list marker classification.

    Only the marker class matters for segmentation. Ordered numerals are
    accepted at any length here; the block parser validates them.

    """

    def _try_classify_list_marker(self, content: str) -> SpanType | None:
        """Classify content as an unordered or ordered item line.

        Args:
            content: Line content with leading whitespace stripped

        Returns:
            UNORDERED_ITEM, ORDERED_ITEM, or None when no marker matches.
        """
        if not content:
            return None

        # Unordered: -, *, +
        if content[0] in UNORDERED_LIST_MARKERS:
            if len(content) == 1 or content[1] in MARKER_TERMINATORS:
                return SpanType.UNORDERED_ITEM
            return None

        # Ordered: 1.
        if content[0] in DIGITS:
            pos = 0
            while pos < len(content) and content[pos] in DIGITS:
                pos += 1
            if pos < len(content) and content[pos] == ORDERED_LIST_DELIMITER:
                pos += 1
                if pos == len(content) or content[pos] in MARKER_TERMINATORS:
                    return SpanType.ORDERED_ITEM
        return None
