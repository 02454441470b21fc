"""Tests for the markdown renderer.

Checks normalized output for each block type and that rendered text parses
back to a structurally equal tree.
"""

import pytest

from mdtree import MarkdownRenderer, ParseConfig, parse, render_markdown
from mdtree.location import SourceLocation
from mdtree.nodes import (
    Document,
    Emphasis,
    FencedCode,
    Image,
    Link,
    List,
    ListItem,
    Paragraph,
    Strong,
    Text,
)
from mdtree.renderers.markdown import escape_line_start, escape_text
from mdtree.renderers.protocol import ASTRenderer
from mdtree.serialization import to_dict

_LOC = SourceLocation.unknown()


def _render(source: str, **kwargs) -> str:  # type: ignore[no-untyped-def]
    return render_markdown(parse(source, **kwargs))


def _para(*inlines) -> Document:  # type: ignore[no-untyped-def]
    return Document(
        location=_LOC,
        frontmatter=None,
        body=(Paragraph(location=_LOC, content=tuple(inlines)),),
    )


def _text(value: str) -> Text:
    return Text(location=_LOC, value=value)


def _structure(doc: Document) -> dict:
    return to_dict(doc, locations=False)


class TestNormalizedOutput:
    def test_heading_and_bullets(self) -> None:
        assert _render("#  Title\n\n* one\n* two") == "# Title\n\n- one\n- two\n"

    def test_ordered_numbering_from_start(self) -> None:
        assert _render("3. a\n9. b") == "3. a\n4. b\n"

    def test_task_items(self) -> None:
        source = "- [x] done\n- [ ] todo\n"
        assert _render(source) == source

    def test_nested_list(self) -> None:
        assert _render("- a\n  - b") == "- a\n\n  - b\n"

    def test_ordered_child_indent(self) -> None:
        assert _render("10. a\n    - b") == "10. a\n\n    - b\n"

    def test_multiline_paragraph(self) -> None:
        assert _render("one\ntwo") == "one\ntwo\n"

    def test_fenced_code(self) -> None:
        assert _render("```py\nx = 1\n```") == "```py\nx = 1\n```\n"

    def test_tilde_fence_kept(self) -> None:
        assert _render("~~~\nx\n~~~") == "~~~\nx\n~~~\n"

    def test_fence_longer_than_inner_run(self) -> None:
        assert _render("````\n```\n````") == "````\n```\n````\n"

    def test_empty_code(self) -> None:
        assert _render("```\n```") == "```\n```\n"

    def test_frontmatter_preserved(self) -> None:
        source = "---\ntitle: x\ntags:\n  - a\n---\n# H\n"
        assert _render(source) == source

    def test_custom_delimiter(self) -> None:
        config = ParseConfig(frontmatter_delimiter="+++")
        doc = parse("+++\nk = 1\n+++\n", config=config)
        assert render_markdown(doc, delimiter="+++") == "+++\nk = 1\n+++\n"

    def test_footnote(self) -> None:
        assert _render("text[^n]\n\n[^n]: the note") == "text[^n]\n\n[^n]: the note\n"

    def test_link_with_title(self) -> None:
        assert _render('[a](b "t")') == '[a](b "t")\n'

    def test_image(self) -> None:
        assert _render("![alt](src.png)") == "![alt](src.png)\n"

    def test_empty_document(self) -> None:
        assert _render("") == ""

    def test_emphasis_keeps_source_delimiters(self) -> None:
        config = ParseConfig(emphasis_enabled=True)
        assert _render("*a* __b__", config=config) == "*a* __b__\n"

    def test_constructed_emphasis_defaults(self) -> None:
        doc = _para(
            Emphasis(location=_LOC, content=(_text("a"),)),
            _text(" "),
            Strong(location=_LOC, content=(_text("b"),)),
        )
        assert render_markdown(doc) == "_a_ **b**\n"

    def test_constructed_nested_emphasis_alternates(self) -> None:
        inner = Emphasis(location=_LOC, content=(_text("x"),))
        doc = _para(Emphasis(location=_LOC, content=(inner,)))
        assert render_markdown(doc) == "_*x*_\n"

    def test_constructed_adjacent_emphasis_alternates(self) -> None:
        doc = _para(
            Emphasis(location=_LOC, content=(_text("a"),)),
            Emphasis(location=_LOC, content=(_text("b"),)),
        )
        assert render_markdown(doc) == "_a_*b*\n"

    def test_renderer_class(self) -> None:
        assert MarkdownRenderer().render(parse("# x")) == "# x\n"

    def test_renderer_satisfies_protocol(self) -> None:
        assert isinstance(MarkdownRenderer(), ASTRenderer)


class TestEscaping:
    def test_escaped_marker_stays_text(self) -> None:
        assert _render("\\- not a list") == "\\- not a list\n"

    def test_literal_star(self) -> None:
        assert _render("a*b") == "a\\*b\n"

    def test_literal_bracket(self) -> None:
        assert _render("[a") == "\\[a\n"

    def test_text_escape_helper(self) -> None:
        assert escape_text("a\\b_c") == "a\\\\b\\_c"
        assert escape_text("wow!") == "wow\\!"

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("# x", "\\# x"),
            ("###", "\\###"),
            ("#hashtag", "#hashtag"),
            ("- x", "\\- x"),
            ("+", "\\+"),
            ("-x", "-x"),
            ("12. x", "12\\. x"),
            ("12.x", "12.x"),
            ("```", "\\```"),
            ("~~", "~~"),
            ("[^a]: b", "[^a]\\: b"),
            ("plain", "plain"),
        ],
    )
    def test_line_start(self, line: str, expected: str) -> None:
        assert escape_line_start(line) == expected

    def test_text_that_looks_like_link(self) -> None:
        doc = _para(_text("!"), Link(location=_LOC, text="a", href="b"))
        assert render_markdown(doc) == "\\![a](b)\n"
        assert _structure(parse(render_markdown(doc))) == _structure(doc)

    def test_destination_parens(self) -> None:
        doc = _para(Link(location=_LOC, text="a", href="x(1)"))
        assert render_markdown(doc) == "[a](x\\(1\\))\n"

    def test_title_quotes(self) -> None:
        doc = _para(Image(location=_LOC, alt="a", src="s", title='say "hi"'))
        assert render_markdown(doc) == '![a](s "say \\"hi\\"")\n'


class TestRoundTrip:
    """Rendered text parses back to the same structure."""

    @pytest.mark.parametrize(
        "source",
        [
            "# Title\n\nSome [link](https://example.com) text.",
            "- a\n- b\n  - c\n    1. d\n    2. e\n- f",
            "- [x] done\n  ```\n  code\n  ```\n- [ ] todo",
            "[^n]: first\n  second\n\n  - nested",
            "text [^n] and ![img](a.png \"t\")",
            "~~~ info\n```\n~~~",
            "\\# not heading\n\n1\\. not list",
            "a\\\\b \\[c\\] d\\_e",
            "---\nk: v\n---\n1. x\n\n   ```\n   y\n   ```",
        ],
    )
    def test_parse_render_parse(self, source: str) -> None:
        first = parse(source)
        assert _structure(parse(render_markdown(first))) == _structure(first)

    @pytest.mark.parametrize(
        "source",
        ["*a*_b_", "*_x_*", "***x***", "**a _b_ c**", "_a*b*_ and __c__", "*[l](u)*\\*"],
    )
    def test_emphasis_parse_render_parse(self, source: str) -> None:
        config = ParseConfig(emphasis_enabled=True)
        first = parse(source, config=config)
        second = parse(render_markdown(first), config=config)
        assert _structure(second) == _structure(first)

    def test_constructed_emphasis_reparses_with_same_shape(self) -> None:
        inner = Emphasis(location=_LOC, content=(_text("x"),))
        doc = _para(Emphasis(location=_LOC, content=(inner,)), inner)
        para = parse(render_markdown(doc), config=ParseConfig(emphasis_enabled=True)).body[0]
        assert isinstance(para, Paragraph)
        outer, sibling = para.content
        assert isinstance(outer, Emphasis)
        assert isinstance(outer.content[0], Emphasis)
        assert isinstance(sibling, Emphasis)

    def test_constructed_tree(self) -> None:
        item = ListItem(
            location=_LOC,
            content=(
                Paragraph(location=_LOC, content=(_text("# heading-like"),)),
                FencedCode(location=_LOC, code="```\n", info="md"),
            ),
        )
        doc = Document(
            location=_LOC,
            frontmatter=None,
            body=(List(location=_LOC, ordered=True, items=(item,), start=7),),
        )
        assert _structure(parse(render_markdown(doc))) == _structure(doc)

    def test_render_is_stable(self) -> None:
        once = _render("#  a\n* b\n+ c\n\n\n3. d")
        assert render_markdown(parse(once)) == once
