"""Block parsing subsystem for mdtree.

Provides mixins for turning segmenter spans into block nodes:
- Headings, paragraphs and fenced code (core)
- Lists, task items and nested content
- Footnote definitions

"""

from __future__ import annotations

from mdtree.parsing.blocks.core import BlockParsingCoreMixin
from mdtree.parsing.blocks.footnote import FootnoteParsingMixin
from mdtree.parsing.blocks.list import (
    ListMarker,
    ListParsingMixin,
    extract_task_marker,
    read_marker,
)


class BlockParsingMixin(
    ListParsingMixin,
    FootnoteParsingMixin,
    BlockParsingCoreMixin,
):
    """Combined block parsing mixin.

    Required Host Attributes:
        - _source_file: str | None
        - _task_lists_enabled: bool
        - _max_nesting_depth: int

    """

    pass


__all__ = [
    "BlockParsingMixin",
    "BlockParsingCoreMixin",
    "FootnoteParsingMixin",
    "ListParsingMixin",
    "ListMarker",
    "extract_task_marker",
    "read_marker",
]
