"""Tests for ContextVar-based parse configuration.

Validates defaults, validation, context manager behavior, and thread
isolation.
"""

import dataclasses
from threading import Thread

import pytest

from mdtree import (
    ParseConfig,
    Parser,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from mdtree.nodes import Emphasis, Text


class TestParseConfigDataclass:
    """Test ParseConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = ParseConfig()
        assert config.frontmatter_delimiter == "---"
        assert config.tab_width == 4
        assert config.fenced_code_enabled is True
        assert config.task_lists_enabled is True
        assert config.footnotes_enabled is True
        assert config.emphasis_enabled is False
        assert config.max_nesting_depth == 16

    def test_frozen(self) -> None:
        config = ParseConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.tab_width = 8  # type: ignore[misc]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"tab_width": 0},
            {"frontmatter_delimiter": ""},
            {"frontmatter_delimiter": "---\n"},
            {"max_nesting_depth": -1},
        ],
    )
    def test_invalid_values(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            ParseConfig(**kwargs)

    def test_zero_nesting_depth_allowed(self) -> None:
        assert ParseConfig(max_nesting_depth=0).max_nesting_depth == 0


class TestFromDict:
    def test_known_keys(self) -> None:
        config = ParseConfig.from_dict({"emphasis_enabled": True, "tab_width": 2})
        assert config.emphasis_enabled is True
        assert config.tab_width == 2

    def test_unknown_keys_ignored(self) -> None:
        config = ParseConfig.from_dict({"unknown_key": "ignored", "footnotes_enabled": False})
        assert config.footnotes_enabled is False

    def test_empty_dict_is_default(self) -> None:
        assert ParseConfig.from_dict({}) == ParseConfig()


class TestContextFunctions:
    def test_default_active(self) -> None:
        assert get_parse_config() == ParseConfig()

    def test_set_and_reset(self) -> None:
        try:
            set_parse_config(ParseConfig(emphasis_enabled=True))
            assert get_parse_config().emphasis_enabled is True
        finally:
            reset_parse_config()
        assert get_parse_config().emphasis_enabled is False

    def test_context_manager_restores(self) -> None:
        outer = ParseConfig(tab_width=2)
        with parse_config_context(outer):
            with parse_config_context(ParseConfig(tab_width=8)):
                assert get_parse_config().tab_width == 8
            assert get_parse_config() is outer
        assert get_parse_config() == ParseConfig()

    def test_context_manager_restores_on_exception(self) -> None:
        with pytest.raises(RuntimeError):
            with parse_config_context(ParseConfig(tab_width=2)):
                raise RuntimeError("boom")
        assert get_parse_config().tab_width == 4

    def test_parser_reads_active_config(self) -> None:
        with parse_config_context(ParseConfig(emphasis_enabled=True)):
            (node,) = Parser("*a*").parse_inline("*a*")
        assert isinstance(node, Emphasis)
        (node,) = Parser("*a*").parse_inline("*a*")
        assert isinstance(node, Text)


class TestThreadIsolation:
    def test_config_set_in_thread_does_not_leak(self) -> None:
        seen: dict[str, int] = {}

        def worker() -> None:
            set_parse_config(ParseConfig(tab_width=2))
            seen["worker"] = get_parse_config().tab_width

        with parse_config_context(ParseConfig(tab_width=8)):
            thread = Thread(target=worker)
            thread.start()
            thread.join()
            seen["main"] = get_parse_config().tab_width

        assert seen == {"worker": 2, "main": 8}
