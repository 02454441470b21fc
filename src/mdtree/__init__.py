"""
mdtree: Markdown-like document parser producing a typed AST

Splits a document into an optional frontmatter block (tokenized line by line,
never interpreted) and a body parsed into immutable block and inline nodes.
Malformed markup degrades to literal text; the only fatal error is an
unterminated frontmatter block. Zero runtime dependencies.

Quick Start:
    >>> from mdtree import parse, render_markdown
    >>> doc = parse("---\\ntitle: Notes\\n---\\n# Hello [World](https://example.com)")
    >>> doc.frontmatter[0].text
    'title: Notes'
    >>> doc.body[0].level
    1
    >>> render_markdown(doc)
    '---\\ntitle: Notes\\n---\\n# Hello [World](https://example.com)\\n'

Configuration:
    >>> from mdtree import ParseConfig
    >>> doc = parse("*hi*", config=ParseConfig(emphasis_enabled=True))
    >>> type(doc.body[0].content[0]).__name__
    'Emphasis'
"""

from collections.abc import Iterable

from mdtree.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from mdtree.errors import MdtreeError, ParseError, RenderError, UnterminatedFrontmatter
from mdtree.lexer import FrontmatterScan, Segmenter, tokenize_frontmatter
from mdtree.location import SourceLocation
from mdtree.nodes import (
    Block,
    Document,
    Emphasis,
    FencedCode,
    FootnoteDef,
    FootnoteRef,
    Heading,
    Image,
    Inline,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strong,
    Text,
)
from mdtree.parser import Parser
from mdtree.renderers.markdown import MarkdownRenderer, render_markdown
from mdtree.renderers.protocol import ASTRenderer
from mdtree.serialization import from_dict, from_json, to_dict, to_json
from mdtree.tokens import FrontmatterToken, FrontmatterTokenKind, Span, SpanType
from mdtree.visitor import BaseVisitor, plain_text, transform

__version__ = "0.1.0"


def _parse_document(source: str, source_file: str | None) -> Document:
    """Parse one document under the active config."""
    config = get_parse_config()
    scan = tokenize_frontmatter(
        source,
        delimiter=config.frontmatter_delimiter,
        tab_width=config.tab_width,
        source_file=source_file,
    )
    parser = Parser(
        source,
        source_file=source_file,
        start=scan.body_offset,
        lineno=scan.body_lineno,
    )
    blocks = parser.parse()
    loc = SourceLocation(
        lineno=1,
        col_offset=1,
        offset=0,
        end_offset=len(source),
        source_file=source_file,
    )
    return Document(
        location=loc,
        frontmatter=scan.tokens if scan.present else None,
        body=blocks,
    )


def parse(
    source: str,
    *,
    source_file: str | None = None,
    config: ParseConfig | None = None,
) -> Document:
    """Parse a document into a typed AST.

    Args:
        source: Full document text, frontmatter included
        source_file: Optional source file path for locations and errors
        config: Parse configuration. When None, the config active in the
            current context is used (see parse_config_context).

    Returns:
        Document AST root node

    Raises:
        UnterminatedFrontmatter: The document opens a frontmatter block
            that is never closed.

    Example:
        >>> doc = parse("# Hello\\n\\n- one\\n- two")
        >>> [type(b).__name__ for b in doc.body]
        ['Heading', 'List']
    """
    if config is None:
        return _parse_document(source, source_file)
    with parse_config_context(config):
        return _parse_document(source, source_file)


def parse_many(
    sources: Iterable[str],
    *,
    config: ParseConfig | None = None,
) -> list[Document]:
    """Parse multiple documents.

    Sets config once, parses all, restores once.

    Args:
        sources: Iterable of document strings
        config: Parse configuration applied to every document

    Returns:
        List of Document AST nodes, in input order

    Example:
        >>> docs = parse_many(["# Doc 1", "# Doc 2", "# Doc 3"])
        >>> len(docs)
        3
    """
    if config is None:
        return [_parse_document(source, None) for source in sources]
    with parse_config_context(config):
        return [_parse_document(source, None) for source in sources]


def parse_inline(text: str, *, config: ParseConfig | None = None) -> tuple[Inline, ...]:
    """Parse standalone text as inline content.

    Locations are positions within ``text``.

    Example:
        >>> parse_inline("see [docs](https://example.com)")[1].href
        'https://example.com'
    """
    if config is None:
        return Parser(text).parse_inline(text)
    with parse_config_context(config):
        return Parser(text).parse_inline(text)


__all__ = [  # noqa: RUF022 (grouped by category)
    # Version
    "__version__",
    # Core API
    "parse",
    "parse_many",
    "parse_inline",
    "tokenize_frontmatter",
    "render_markdown",
    # Block nodes
    "Block",
    "Document",
    "FencedCode",
    "FootnoteDef",
    "Heading",
    "List",
    "ListItem",
    "Paragraph",
    # Inline nodes
    "Inline",
    "Emphasis",
    "FootnoteRef",
    "Image",
    "Link",
    "Strong",
    "Text",
    "Node",
    # Parser components
    "FrontmatterScan",
    "Segmenter",
    "Parser",
    # Renderer
    "MarkdownRenderer",
    "ASTRenderer",
    # Visitor + Transform
    "BaseVisitor",
    "plain_text",
    "transform",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Configuration (ContextVar-based)
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Location
    "SourceLocation",
    # Tokens
    "FrontmatterToken",
    "FrontmatterTokenKind",
    "Span",
    "SpanType",
    # Errors
    "MdtreeError",
    "ParseError",
    "UnterminatedFrontmatter",
    "RenderError",
]
