"""Parsing subsystem for mdtree.

Turns segmenter spans into block nodes and block text into inline nodes.

Modules:
    blocks/: Block constructors (headings, lists, fenced code, footnotes)
    inline/: Inline scanner (text, links, images, footnote refs, emphasis)
    offsets: Block text to source location mapping
    results: Recognized/Fallback constructor results
    charsets: Character sets shared with the lexer

"""

from __future__ import annotations

from mdtree.parsing.blocks import BlockParsingMixin
from mdtree.parsing.inline import InlineParsingMixin
from mdtree.parsing.offsets import OffsetMap
from mdtree.parsing.results import Fallback, FallbackReason, Outcome, Recognized

__all__ = [
    "BlockParsingMixin",
    "Fallback",
    "FallbackReason",
    "InlineParsingMixin",
    "OffsetMap",
    "Outcome",
    "Recognized",
]
