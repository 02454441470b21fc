"""Property-based tests for parser invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from mdtree import ParseConfig, parse, parse_inline, render_markdown, to_dict
from mdtree.lexer import Segmenter
from mdtree.nodes import Block, List

# Lines are short so ordered numerals stay within the accepted digit count
_LINE = st.text(alphabet="ab 019#-*+.[]()!^:\\`~_\"'", max_size=8)
_INDENTED_LINE = st.tuples(st.integers(min_value=0, max_value=5), _LINE).map(
    lambda pair: " " * pair[0] + pair[1]
)
_DOCUMENT = st.lists(_INDENTED_LINE, max_size=12).map(lambda lines: "# doc\n\n" + "\n".join(lines))
_INLINE_TEXT = st.text(alphabet="ab \t[]()!^\\*_\"'", max_size=60)

EMPHASIS = ParseConfig(emphasis_enabled=True)
_MARKDOWNISH = st.text(alphabet="ab \n\t#-*+.[]()!^:\\`~_\"'0129", max_size=300)


def _walk(blocks: tuple[Block, ...]):  # type: ignore[no-untyped-def]
    for block in blocks:
        yield block
        if isinstance(block, List):
            for item in block.items:
                yield item
                yield from _walk(item.content)


class TestNeverRaises:
    """Only unterminated frontmatter is fatal."""

    @given(st.text(max_size=500))
    @settings(max_examples=200)
    def test_arbitrary_text(self, source: str) -> None:
        doc = parse("body\n" + source)
        assert doc.frontmatter is None

    @given(_MARKDOWNISH)
    @settings(max_examples=200)
    def test_marker_heavy_text(self, source: str) -> None:
        parse("body\n" + source)


class TestLocations:
    @given(_MARKDOWNISH)
    @settings(max_examples=200)
    def test_top_level_blocks_ordered_and_in_bounds(self, source: str) -> None:
        text = "body\n" + source
        doc = parse(text)
        previous_end = 0
        for block in doc.body:
            loc = block.location
            assert previous_end <= loc.offset <= loc.end_offset <= len(text)
            previous_end = loc.end_offset

    @given(_MARKDOWNISH)
    @settings(max_examples=100)
    def test_nested_blocks_inside_source(self, source: str) -> None:
        text = "body\n" + source
        doc = parse(text)
        for node in _walk(doc.body):
            assert 0 <= node.location.offset <= node.location.end_offset <= len(text)
            assert node.location.lineno >= 1


class TestInlineCoverage:
    """Inline nodes tile their text with no gaps or overlaps."""

    @staticmethod
    def _assert_tiles(text: str, config: ParseConfig) -> None:
        nodes = parse_inline(text, config=config)
        position = 0
        for node in nodes:
            assert node.location.offset == position, (text, nodes)
            assert node.location.end_offset > position
            position = node.location.end_offset
        assert position == len(text)

    @given(_INLINE_TEXT)
    @settings(max_examples=300)
    def test_default_config(self, text: str) -> None:
        self._assert_tiles(text, ParseConfig())

    @given(_INLINE_TEXT)
    @settings(max_examples=300)
    def test_with_emphasis(self, text: str) -> None:
        self._assert_tiles(text, EMPHASIS)


class TestSegmenter:
    @given(st.text(alphabet=st.characters(exclude_characters="\r"), max_size=300))
    @settings(max_examples=200)
    def test_spans_cover_every_non_blank_line_in_order(self, source: str) -> None:
        spans = list(Segmenter(source).segment())
        covered = [line.lineno for span in spans for line in span.lines]
        assert covered == sorted(set(covered))

        lines = source.split("\n")
        expected = {i for i, line in enumerate(lines, start=1) if line and not line.isspace()}
        assert expected <= set(covered)

    @given(_MARKDOWNISH)
    @settings(max_examples=100)
    def test_span_lines_are_source_slices(self, source: str) -> None:
        for span in Segmenter(source).segment():
            assert span.lines
            assert span.indent == span.first.indent
            for line in span.lines:
                assert source[line.offset : line.end_offset] == line.raw


class TestRoundTrip:
    @given(_DOCUMENT)
    @settings(max_examples=300)
    def test_render_then_parse_keeps_structure(self, source: str) -> None:
        first = parse(source)
        second = parse(render_markdown(first))
        assert to_dict(second, locations=False) == to_dict(first, locations=False)

    @given(_DOCUMENT)
    @settings(max_examples=300)
    def test_emphasis_render_then_parse_keeps_structure(self, source: str) -> None:
        first = parse(source, config=EMPHASIS)
        second = parse(render_markdown(first), config=EMPHASIS)
        assert to_dict(second, locations=False) == to_dict(first, locations=False)

    @given(_DOCUMENT)
    @settings(max_examples=100)
    def test_render_is_idempotent(self, source: str) -> None:
        once = render_markdown(parse(source))
        assert render_markdown(parse(once)) == once
