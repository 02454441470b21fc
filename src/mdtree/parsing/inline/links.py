"""Link, image and footnote reference parsing for mdtree.

Handles inline links, images, and footnote references:

    [text](href "title")
    ![alt](src 'title')
    [^note]

Each constructor takes the block text and the position of its opening
bracket and returns Recognized (with the node and the position just past
it) or Fallback (with the reason). The caller emits the opening marker as
literal text on Fallback and resumes scanning after it.

Destination rules:
- Raw destinations only: no spaces, balanced parentheses
- An optional title follows whitespace, quoted with " or '
- Backslash escapes work in labels, destinations and titles
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, NamedTuple

from mdtree.nodes import FootnoteRef, Image, Inline, Link
from mdtree.parsing.charsets import ASCII_PUNCTUATION, TITLE_QUOTES, WHITESPACE
from mdtree.parsing.inline.tokens import InlineState
from mdtree.parsing.results import Fallback, FallbackReason, Outcome, Recognized

if TYPE_CHECKING:
    from mdtree.parsing.offsets import OffsetMap


# Pattern to find backslash escapes
_ESCAPE_PATTERN = re.compile(r"\\([!\"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~])")


def process_escapes(text: str) -> str:
    """Replace each backslash + ASCII punctuation pair with the literal char.

    A backslash before anything else stays as written.

    """
    if "\\" not in text:
        return text
    return _ESCAPE_PATTERN.sub(r"\1", text)


class _Reference(NamedTuple):
    """The pieces of a bracket + paren construct, escapes resolved."""

    label: str
    href: str
    title: str | None


def _scan_reference(text: str, open_pos: int) -> Outcome[_Reference]:
    """Scan ``[label](destination "title")`` starting at the ``[``.

    Brackets nest in the label and parentheses nest in the destination.
    Parentheses inside a quoted title do not count.
    """
    text_len = len(text)
    state = InlineState.IN_BRACKET
    depth = 0
    pos = open_pos
    label_end = -1
    dest_start = -1
    quote: str | None = None

    while pos < text_len:
        char = text[pos]
        if char == "\\" and pos + 1 < text_len and text[pos + 1] in ASCII_PUNCTUATION:
            pos += 2
            continue

        match state:
            case InlineState.IN_BRACKET:
                if char == "[":
                    depth += 1
                elif char == "]":
                    depth -= 1
                    if depth == 0:
                        label_end = pos
                        if pos + 1 >= text_len or text[pos + 1] != "(":
                            return Fallback(FallbackReason.MISSING_DESTINATION, pos + 1)
                        state = InlineState.IN_PAREN
                        depth = 1
                        pos += 2
                        dest_start = pos
                        continue
            case InlineState.IN_PAREN:
                if quote is not None:
                    if char == quote:
                        quote = None
                elif char in TITLE_QUOTES and pos > dest_start and text[pos - 1] in WHITESPACE:
                    quote = char
                elif char == "(":
                    depth += 1
                elif char == ")":
                    depth -= 1
                    if depth == 0:
                        return _split_destination(
                            text[open_pos + 1 : label_end], text[dest_start:pos], pos + 1
                        )
        pos += 1

    if state is InlineState.IN_BRACKET:
        return Fallback(FallbackReason.UNBALANCED_BRACKET, open_pos)
    return Fallback(FallbackReason.UNBALANCED_PAREN, dest_start - 1)


def _split_destination(label: str, inner: str, end: int) -> Outcome[_Reference]:
    """Split the text between the parentheses into destination and title."""
    inner = inner.strip()
    if not inner:
        return Fallback(FallbackReason.EMPTY_DESTINATION, end - 1)

    split = 0
    while split < len(inner) and inner[split] not in WHITESPACE:
        split += 1
    href = process_escapes(inner[:split])
    rest = inner[split:].strip()

    title: str | None = None
    if rest:
        title = _parse_title(rest)
        if title is None:
            return Fallback(FallbackReason.MALFORMED_TITLE, end - 1)

    return Recognized(_Reference(process_escapes(label), href, title), end=end)


def _parse_title(rest: str) -> str | None:
    """Parse a quoted title that must make up all of ``rest``."""
    quote = rest[0]
    if quote not in TITLE_QUOTES:
        return None
    pos = 1
    while pos < len(rest):
        char = rest[pos]
        if char == "\\" and pos + 1 < len(rest):
            pos += 2
            continue
        if char == quote:
            if pos != len(rest) - 1:
                return None
            return process_escapes(rest[1:pos])
        pos += 1
    return None


def try_link(text: str, pos: int, offsets: OffsetMap) -> Outcome[Link]:
    """Try to parse ``[text](href "title")`` at ``pos``."""
    match _scan_reference(text, pos):
        case Recognized(node=ref, end=end):
            return Recognized(
                Link(
                    location=offsets.location(pos, end),
                    text=ref.label,
                    href=ref.href,
                    title=ref.title,
                ),
                end=end,
            )
        case Fallback() as fallback:
            return fallback


def try_image(text: str, pos: int, offsets: OffsetMap) -> Outcome[Image]:
    """Try to parse ``![alt](src "title")`` at ``pos`` (the ``!``)."""
    match _scan_reference(text, pos + 1):
        case Recognized(node=ref, end=end):
            return Recognized(
                Image(
                    location=offsets.location(pos, end),
                    alt=ref.label,
                    src=ref.href,
                    title=ref.title,
                ),
                end=end,
            )
        case Fallback() as fallback:
            return fallback


def try_footnote_ref(text: str, pos: int, offsets: OffsetMap) -> Outcome[FootnoteRef]:
    """Try to parse ``[^identifier]`` at ``pos``.

    The identifier runs to the first ``]`` and must be non-empty with no
    whitespace or brackets.
    """
    close = text.find("]", pos + 2)
    if close == -1:
        return Fallback(FallbackReason.UNBALANCED_BRACKET, pos)
    identifier = text[pos + 2 : close]
    if not identifier or any(c in WHITESPACE or c == "[" for c in identifier):
        return Fallback(FallbackReason.INVALID_LABEL, pos + 2)
    return Recognized(
        FootnoteRef(location=offsets.location(pos, close + 1), identifier=identifier),
        end=close + 1,
    )


class LinkParsingMixin:
    """Bracket construct dispatch for the inline scanner.

    Required Host Attributes:
        - _footnotes_enabled: bool

    """

    _footnotes_enabled: bool

    def _try_parse_bracketed(
        self, text: str, pos: int, offsets: OffsetMap
    ) -> Outcome[Inline]:
        """Parse the construct opening at ``pos`` (``[`` or ``![``).

        Footnote references are tried before links, so ``[^a](b)`` is a
        footnote reference followed by literal text.
        """
        if text[pos] == "!":
            return try_image(text, pos, offsets)
        if self._footnotes_enabled and text.startswith("[^", pos):
            outcome = try_footnote_ref(text, pos, offsets)
            if isinstance(outcome, Recognized):
                return outcome
        return try_link(text, pos, offsets)


__all__ = [
    "LinkParsingMixin",
    "process_escapes",
    "try_footnote_ref",
    "try_image",
    "try_link",
]
