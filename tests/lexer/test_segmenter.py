"""Tests for the block segmenter."""

import pytest

from mdtree.config import ParseConfig, parse_config_context
from mdtree.lexer import Segmenter, segment
from mdtree.tokens import SpanType

H = SpanType.HEADING
T = SpanType.TEXT
U = SpanType.UNORDERED_ITEM
O = SpanType.ORDERED_ITEM  # noqa: E741
F = SpanType.FENCE
FN = SpanType.FOOTNOTE_DEF


def _types(source: str) -> list[SpanType]:
    return [span.type for span in segment(source)]


class TestClassification:
    """One type hint per line."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("# Heading", H),
            ("###### Six", H),
            ("####### Seven", H),
            ("#", H),
            ("#\tTabbed", H),
            ("#hashtag", T),
            ("- item", U),
            ("* item", U),
            ("+ item", U),
            ("-", U),
            ("-item", T),
            ("1. item", O),
            ("42. item", O),
            ("1.", O),
            ("1.5 million", T),
            ("1) item", T),
            ("[^note]: text", FN),
            ("[^note] text", T),
            ("plain text", T),
        ],
    )
    def test_line(self, line: str, expected: SpanType) -> None:
        assert _types(line) == [expected]

    def test_indented_marker_keeps_type(self) -> None:
        spans = segment("  - nested")
        assert spans[0].type is U
        assert spans[0].indent == 2

    def test_footnotes_disabled(self) -> None:
        with parse_config_context(ParseConfig(footnotes_enabled=False)):
            assert _types("[^note]: text") == [T]


class TestSpanExtension:
    """Which lines join the pending span."""

    def test_blank_line_ends_span(self) -> None:
        spans = segment("a\nb\n\nc")
        assert [s.type for s in spans] == [T, T]
        assert len(spans[0].lines) == 2
        assert len(spans[1].lines) == 1

    def test_whitespace_only_line_is_blank(self) -> None:
        assert len(segment("a\n   \nb")) == 2

    def test_indent_change_starts_new_text_span(self) -> None:
        spans = segment("a\n  b")
        assert [(s.type, s.indent) for s in spans] == [(T, 0), (T, 2)]

    def test_heading_is_single_line(self) -> None:
        assert _types("# a\nb") == [H, T]
        assert _types("a\n# b") == [T, H]

    def test_items_segmented_one_per_span(self) -> None:
        assert _types("- a\n- b\n1. c\n2. d") == [U, U, O, O]

    def test_item_continuation(self) -> None:
        spans = segment("- a\n  more\n- b")
        assert [s.type for s in spans] == [U, U]
        assert [line.content for line in spans[0].lines] == ["- a", "more"]

    def test_unindented_text_after_item_is_separate(self) -> None:
        assert _types("- a\nb") == [U, T]

    def test_tab_continuation(self) -> None:
        spans = segment("- a\n\tb")
        assert len(spans) == 1
        assert spans[0].lines[1].indent == 4

    def test_footnote_continuation(self) -> None:
        spans = segment("[^n]: note\n  more\nnext")
        assert [s.type for s in spans] == [FN, T]
        assert len(spans[0].lines) == 2

    def test_footnote_continuation_needs_two_columns(self) -> None:
        assert _types("[^n]: note\n more") == [FN, T]


class TestFences:
    """Fence spans run from opening to closing line."""

    def test_fence_span_keeps_blank_lines(self) -> None:
        spans = segment("```py\ncode\n\nmore\n```\nafter")
        assert [s.type for s in spans] == [F, T]
        assert len(spans[0].lines) == 5

    def test_markers_inside_fence_are_code(self) -> None:
        spans = segment("```\n# not a heading\n- not an item\n```")
        assert [s.type for s in spans] == [F]

    def test_unclosed_fence_is_text(self) -> None:
        spans = segment("```\nno close")
        assert [s.type for s in spans] == [T]
        assert len(spans[0].lines) == 2

    def test_closing_needs_same_char(self) -> None:
        assert _types("```\ncode\n~~~") == [T]

    def test_closing_may_be_longer(self) -> None:
        assert _types("```\ncode\n`````") == [F]

    def test_backtick_info_with_backtick_is_not_fence(self) -> None:
        assert _types("```a`b\n```")[0] is T

    def test_closing_indented_four_past_opening(self) -> None:
        assert _types("```\ncode\n    ```") == [T, T]

    def test_nested_fence_closes_at_its_own_indent(self) -> None:
        source = "- a\n\n    - b\n\n      ```\n      x\n      ```"
        spans = segment(source)
        assert [(s.type, s.indent) for s in spans] == [(U, 0), (U, 4), (F, 6)]

    def test_shrinking_unclosed_openers_stay_text(self) -> None:
        source = "\n".join("`" * n for n in range(200, 2, -1))
        spans = segment(source)
        assert [s.type for s in spans] == [T]
        assert len(spans[0].lines) == 198

    def test_shorter_run_inside_longer_fence_is_code(self) -> None:
        assert _types("````\n```\nx\n````") == [F]

    def test_closing_line_before_opener_does_not_count(self) -> None:
        assert _types("```\na\n```\n```\nb") == [F, T]

    def test_deep_opener_closes_at_shallower_line(self) -> None:
        spans = segment("      ```\nx\n```")
        assert [s.type for s in spans] == [F]

    def test_fences_disabled(self) -> None:
        with parse_config_context(ParseConfig(fenced_code_enabled=False)):
            spans = segment("```\nx\n```")
        assert [s.type for s in spans] == [T]
        assert len(spans[0].lines) == 3


class TestPositions:
    """Spans report document coordinates."""

    def test_start_after_frontmatter(self) -> None:
        source = "---\nk: v\n---\n# T"
        spans = list(Segmenter(source, start=13, lineno=4).segment())
        assert spans[0].type is H
        assert spans[0].start_line == 4
        assert spans[0].offset == 13

    def test_indented_location(self) -> None:
        span = segment("  hello")[0]
        loc = span.location
        assert loc.offset == 2
        assert loc.col_offset == 3
        assert loc.end_offset == 7

    def test_crlf_dropped_from_raw(self) -> None:
        span = segment("a\r\nb")[0]
        assert [line.raw for line in span.lines] == ["a", "b"]
        assert span.lines[1].offset == 3

    def test_source_file(self) -> None:
        span = segment("x", source_file="doc.md")[0]
        assert span.location.source_file == "doc.md"

    def test_empty_source(self) -> None:
        assert segment("") == ()
        assert segment("\n\n\n") == ()
