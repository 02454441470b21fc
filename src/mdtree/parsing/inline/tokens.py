"""Typed inline tokens and scanner states for mdtree.

The inline scanner turns block text into a flat list of tokens, which the
emphasis pass and the AST builder then consume. Every token records the
block-text range it covers so locations can be recovered through the
block's OffsetMap.

Thread Safety:
All tokens are immutable and safe to share across threads.

Usage:
    match token:
        case DelimiterToken(char="*", count=count):
            print(f"Asterisk run of {count}")
        case TextToken(value=value):
            print(value)

"""

from __future__ import annotations

from enum import Enum, auto
from typing import Literal, NamedTuple

from mdtree.nodes import Inline

# PEP 695 type alias for delimiter characters
type DelimiterChar = Literal["*", "_"]


class InlineState(Enum):
    """States of the inline scanner.

    NORMAL accumulates literal text. ESCAPED handles the character after a
    backslash. IN_BRACKET and IN_PAREN scan a link label and destination.
    DELIMITER_RUN measures a run of * or _.

    """

    NORMAL = auto()
    ESCAPED = auto()
    IN_BRACKET = auto()
    IN_PAREN = auto()
    DELIMITER_RUN = auto()


class TextToken(NamedTuple):
    """Literal text with escapes already resolved.

    Attributes:
        value: Text as it should appear in the AST.
        start: Block-text position of the first character.
        end: Block-text position just past the last character.

    """

    value: str
    start: int
    end: int


class NodeToken(NamedTuple):
    """A finished inline node (link, image, footnote ref, emphasis)."""

    node: Inline
    start: int
    end: int


class DelimiterToken(NamedTuple):
    """A run of emphasis delimiter characters.

    Attributes:
        char: The delimiter character ("*" or "_").
        count: Run length.
        start: Block-text position of the run.
        can_open: Followed by non-whitespace.
        can_close: Preceded by non-whitespace.

    """

    char: DelimiterChar
    count: int
    start: int
    can_open: bool
    can_close: bool

    @property
    def end(self) -> int:
        """Block-text position just past the run."""
        return self.start + self.count


# PEP 695 type alias for all inline tokens
type InlineToken = TextToken | NodeToken | DelimiterToken


__all__ = [
    "DelimiterChar",
    "DelimiterToken",
    "InlineState",
    "InlineToken",
    "NodeToken",
    "TextToken",
]
