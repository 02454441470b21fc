"""Typed AST nodes for mdtree.

All AST nodes are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: Safe sharing across threads; nothing is mutated after parse
- Pattern matching: consumers dispatch with ``match`` over the
  ``Block`` / ``Inline`` unions and close with ``assert_never``

Node Hierarchy:
Node (base)
├── Document
├── Block
│   ├── Heading
│   ├── Paragraph
│   ├── List
│   ├── ListItem
│   ├── FencedCode
│   └── FootnoteDef
└── Inline
    ├── Text
    ├── Link
    ├── Image
    ├── FootnoteRef
    ├── Emphasis
    └── Strong

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from mdtree.location import SourceLocation
from mdtree.tokens import FrontmatterToken

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track their source location for diagnostics.

    """

    location: SourceLocation


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal text, including any markup that degraded to text.

    May contain newlines when a paragraph spans several lines.

    """

    value: str


@dataclass(frozen=True, slots=True)
class Link(Node):
    """Hyperlink.

    Markdown: [text](href "title")

    ``href`` is never empty; ``[text]()`` degrades to Text.

    """

    text: str
    href: str
    title: str | None = None


@dataclass(frozen=True, slots=True)
class Image(Node):
    """Image.

    Markdown: ![alt](src "title")

    ``src`` is never empty; ``![alt]()`` degrades to Text.

    """

    alt: str
    src: str
    title: str | None = None


@dataclass(frozen=True, slots=True)
class FootnoteRef(Node):
    """Footnote reference.

    Markdown: [^note]

    """

    identifier: str


@dataclass(frozen=True, slots=True)
class Emphasis(Node):
    """Emphasized text. Only produced when emphasis_enabled is set.

    Markdown: *text* or _text_

    ``marker`` is the delimiter character the source used; None for
    constructed nodes, which let the renderer choose.

    """

    content: tuple[Inline, ...]
    marker: Literal["*", "_"] | None = None


@dataclass(frozen=True, slots=True)
class Strong(Node):
    """Strong text. Only produced when emphasis_enabled is set.

    Markdown: **text** or __text__

    """

    content: tuple[Inline, ...]
    marker: Literal["*", "_"] | None = None


# PEP 695 type alias for inline elements
type Inline = Text | Link | Image | FootnoteRef | Emphasis | Strong


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Heading(Node):
    """ATX heading.

    Markdown: # Heading

    The level is the number of leading # characters, clamped to 1-6.

    """

    level: Literal[1, 2, 3, 4, 5, 6]
    content: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Paragraph block.

    Markdown: Text separated by blank lines

    """

    content: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class ListItem(Node):
    """List item.

    Content is a block sequence: the item's own text as a Paragraph,
    followed by any nested blocks from deeper-indented lines.

    """

    content: tuple[Block, ...]
    checked: bool | None = None  # For task lists: True/False/None


@dataclass(frozen=True, slots=True)
class List(Node):
    """Ordered or unordered list.

    Markdown: - item or 1. item

    ``items`` is never empty.

    """

    ordered: bool
    items: tuple[ListItem, ...]
    start: int = 1  # Numeral of the first ordered item, as written


@dataclass(frozen=True, slots=True)
class FencedCode(Node):
    """Fenced code block.

    Markdown:
        ```python
        code
        ```

    """

    code: str
    info: str | None = None
    marker: Literal["`", "~"] = "`"


@dataclass(frozen=True, slots=True)
class FootnoteDef(Node):
    """Footnote definition.

    Markdown: [^1]: Footnote content here.

    """

    identifier: str
    content: tuple[Block, ...]


# PEP 695 type alias for block elements
type Block = Heading | Paragraph | List | ListItem | FencedCode | FootnoteDef


# =============================================================================
# Document
# =============================================================================


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root document node.

    ``frontmatter`` is None when the document has no preamble, and a
    (possibly empty) tuple of line tokens when it has one.

    """

    frontmatter: tuple[FrontmatterToken, ...] | None
    body: tuple[Block, ...]
