"""Inline parsing subsystem for mdtree.

Provides mixins for parsing inline content:
- Literal text and backslash escapes
- Links and images
- Footnote references
- Emphasis and strong (*, _), opt-in

Architecture:
A three-phase pass: tokenize with a small state machine, pair delimiter
runs, then build nodes and coalesce adjacent text.

"""

from __future__ import annotations

from mdtree.parsing.inline.core import InlineParsingCoreMixin
from mdtree.parsing.inline.emphasis import EmphasisMixin
from mdtree.parsing.inline.links import (
    LinkParsingMixin,
    process_escapes,
    try_footnote_ref,
    try_image,
    try_link,
)
from mdtree.parsing.inline.tokens import (
    DelimiterToken,
    InlineState,
    InlineToken,
    NodeToken,
    TextToken,
)


class InlineParsingMixin(
    InlineParsingCoreMixin,
    EmphasisMixin,
    LinkParsingMixin,
):
    """Combined inline parsing mixin.

    Combines all inline parsing functionality into a single mixin
    that can be inherited by the Parser class.

    Required Host Attributes:
        - _footnotes_enabled: bool
        - _emphasis_enabled: bool

    """

    pass


__all__ = [
    # Mixins
    "InlineParsingMixin",
    "InlineParsingCoreMixin",
    "EmphasisMixin",
    "LinkParsingMixin",
    # Constructors
    "process_escapes",
    "try_footnote_ref",
    "try_image",
    "try_link",
    # Typed tokens
    "InlineState",
    "InlineToken",
    "DelimiterToken",
    "TextToken",
    "NodeToken",
]
