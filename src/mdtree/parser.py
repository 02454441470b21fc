"""Span-driven parser producing a typed AST.

Runs the block segmenter over the document body and turns its spans into
immutable (frozen) dataclass nodes.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `InlineParsingMixin`: Inline content (text, links, images, footnote refs)
- `BlockParsingMixin`: Block-level content (headings, lists, fences)

Thread Safety:
- Parser produces immutable AST (frozen dataclasses)
- Configuration is read from ContextVar (thread-local)
- Safe to share AST across threads

"""

from __future__ import annotations

from mdtree.config import ParseConfig, get_parse_config
from mdtree.lexer import segment
from mdtree.nodes import Block, Inline
from mdtree.parsing import BlockParsingMixin, InlineParsingMixin
from mdtree.parsing.offsets import OffsetMap
from mdtree.utils.logger import get_logger

logger = get_logger(__name__)


class Parser(
    InlineParsingMixin,
    BlockParsingMixin,
):
    """Parser for the document body.

    Usage:
            >>> parser = Parser("# Hello\\n\\nWorld")
            >>> blocks = parser.parse()
            >>> blocks[0]
        Heading(location=..., level=1, content=(Text(location=..., value='Hello'),))

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. Configuration is read from ContextVar (thread-local).
        The resulting AST is immutable and thread-safe.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_start",
        "_lineno",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
        *,
        start: int = 0,
        lineno: int = 1,
    ) -> None:
        """Initialize parser with source text.

        Configuration is read from ContextVar, not passed as parameters.
        Use set_parse_config() or parse_config_context() before creating
        a Parser if you need non-default configuration.

        Args:
            source: Full document text
            source_file: Optional source file path for locations
            start: Offset where the body begins (after any frontmatter)
            lineno: Line number of the line at ``start``
        """
        self._source = source
        self._source_file = source_file
        self._start = start
        self._lineno = lineno

    # =========================================================================
    # Configuration Properties (read from ContextVar)
    # =========================================================================

    @property
    def _config(self) -> ParseConfig:
        """Get current parse configuration (thread-local)."""
        return get_parse_config()

    @property
    def _task_lists_enabled(self) -> bool:
        """Whether - [ ] / - [x] task items set ListItem.checked."""
        return self._config.task_lists_enabled

    @property
    def _footnotes_enabled(self) -> bool:
        """Whether [^id] references are recognized."""
        return self._config.footnotes_enabled

    @property
    def _emphasis_enabled(self) -> bool:
        """Whether * and _ runs pair into Emphasis/Strong."""
        return self._config.emphasis_enabled

    @property
    def _max_nesting_depth(self) -> int:
        """Deepest list nesting attached as child blocks."""
        return self._config.max_nesting_depth

    def parse(self) -> tuple[Block, ...]:
        """Parse the body into AST blocks.

        Returns:
            Blocks in source order.

        Thread Safety:
            Returns immutable AST (frozen dataclasses).
        """
        spans = segment(
            self._source,
            start=self._start,
            lineno=self._lineno,
            source_file=self._source_file,
        )
        blocks = self._parse_blocks(spans)
        logger.debug("parsed %d spans into %d blocks", len(spans), len(blocks))
        return blocks

    def parse_inline(self, text: str) -> tuple[Inline, ...]:
        """Parse standalone text as inline content.

        Locations are positions in ``text`` itself.
        """
        return self._parse_inline(text, OffsetMap.for_text(text, self._source_file))
