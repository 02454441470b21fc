"""ContextVar-based parse configuration for mdtree.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per parse call and read by every component involved
(frontmatter tokenizer, segmenter, block and inline parsers).

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    # Through the public API
    doc = mdtree.parse(source, config=ParseConfig(emphasis_enabled=True))

    # Direct parser usage
    from mdtree.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(footnotes_enabled=False)):
        blocks = Parser(source).parse()

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Note: source_file is intentionally excluded; it is per-call state,
    not configuration.

    Attributes:
        frontmatter_delimiter: Line that opens and closes the frontmatter block
        tab_width: Tab stop width used when measuring indentation
        fenced_code_enabled: Recognize ``` / ~~~ fenced code blocks
        task_lists_enabled: Recognize - [ ] / - [x] task list items
        footnotes_enabled: Recognize [^id] references and [^id]: definitions
        emphasis_enabled: Pair * and _ delimiter runs into Emphasis/Strong
        max_nesting_depth: Deepest list nesting attached as child blocks

    """

    frontmatter_delimiter: str = "---"
    tab_width: int = 4
    fenced_code_enabled: bool = True
    task_lists_enabled: bool = True
    footnotes_enabled: bool = True
    emphasis_enabled: bool = False
    max_nesting_depth: int = 16

    def __post_init__(self) -> None:
        if not self.frontmatter_delimiter or "\n" in self.frontmatter_delimiter:
            msg = "frontmatter_delimiter must be a non-empty single line"
            raise ValueError(msg)
        if self.tab_width < 1:
            msg = f"tab_width must be positive, got {self.tab_width}"
            raise ValueError(msg)
        if self.max_nesting_depth < 0:
            msg = f"max_nesting_depth must be >= 0, got {self.max_nesting_depth}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                ParseConfig attribute names.

        Returns:
            New ParseConfig instance with values from dict.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "emphasis_enabled": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.emphasis_enabled
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "mdtree_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local).

    Returns:
        The active ParseConfig for this thread/context.

    """
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Args:
        config: ParseConfig instance to use for this context.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: ParseConfig to use within the context.

    Yields:
        None

    Example:
        >>> with parse_config_context(ParseConfig(emphasis_enabled=True)):
        ...     inlines = parse_inline("*hi*")
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
