"""Recognized/fallback results returned by every constructor.

Block and inline constructors never raise to signal malformed markup.
They return either ``Recognized`` (carrying the built node) or
``Fallback`` (carrying the reason), and the caller applies the documented
degrade: literal text for inline constructs, a paragraph for block spans.

Usage:
    match try_link(text, pos, offsets):
        case Recognized(node=link, end=end):
            ...
        case Fallback(reason=reason):
            ...

Thread Safety:
All results are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class FallbackReason(Enum):
    """Why a constructor declined to build a node."""

    UNBALANCED_BRACKET = auto()  # [ without its ]
    MISSING_DESTINATION = auto()  # [text] not followed by (
    UNBALANCED_PAREN = auto()  # ( without its )
    EMPTY_DESTINATION = auto()  # [text]() or ![alt]()
    MALFORMED_TITLE = auto()  # unterminated or trailing junk after a title
    INVALID_LABEL = auto()  # [^] or [^has space]
    INVALID_MARKER = auto()  # block marker the constructor cannot accept
    UNTERMINATED_FENCE = auto()  # fence span without its closing line


@dataclass(frozen=True, slots=True)
class Recognized[T]:
    """A construct was recognized.

    Attributes:
        node: The node that was built
        end: Position just past the construct (inline constructors only)

    """

    node: T
    end: int = 0


@dataclass(frozen=True, slots=True)
class Fallback:
    """A construct was not recognized and must degrade.

    Attributes:
        reason: Why the constructor declined
        position: Where in the input the problem was detected

    """

    reason: FallbackReason
    position: int = 0


type Outcome[T] = Recognized[T] | Fallback
