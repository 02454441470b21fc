"""Character sets for O(1) classification.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Usage:
    from mdtree.parsing.charsets import ASCII_PUNCTUATION

    if char in ASCII_PUNCTUATION:  # O(1) lookup
        ...
"""

import unicodedata

# Characters a backslash can make literal
ASCII_PUNCTUATION: frozenset[str] = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")

# ASCII whitespace for basic checks
WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v")


def is_unicode_whitespace(char: str) -> bool:
    """Check if character is Unicode whitespace.

    Treats the empty string as whitespace so that text boundaries behave
    like spaces in flanking checks.

    """
    if not char:
        return True
    if char in WHITESPACE:
        return True
    return unicodedata.category(char) == "Zs"


# Characters that stop a plain text run in the inline scanner
INLINE_SPECIAL: frozenset[str] = frozenset("\\[!*_")

# Emphasis delimiter characters (only active with emphasis_enabled)
EMPHASIS_DELIMITERS: frozenset[str] = frozenset("*_")

# Link title quotes
TITLE_QUOTES: frozenset[str] = frozenset("\"'")

# ASCII digits (ordered list numerals)
DIGITS: frozenset[str] = frozenset("0123456789")

# Block markers
HEADING_MARKER = "#"
UNORDERED_LIST_MARKERS: frozenset[str] = frozenset("-*+")
ORDERED_LIST_DELIMITER = "."
FENCE_CHARS: frozenset[str] = frozenset("`~")

# What may follow a block marker for it to count as one
MARKER_TERMINATORS: frozenset[str] = frozenset(" \t")

# Longest ordered-list numeral accepted by the block parser
MAX_ORDERED_DIGITS = 9


def fence_run(content: str) -> tuple[str, int]:
    """Return the fence character and run length opening ``content``.

    Returns ("", 0) when content does not start with a fence character.
    """
    if not content or content[0] not in FENCE_CHARS:
        return "", 0
    fence_char = content[0]
    count = 0
    while count < len(content) and content[count] == fence_char:
        count += 1
    return fence_char, count
