"""Tests for the high-level mdtree API."""

import pytest


class TestParseFunction:
    """Tests for the parse() function."""

    def test_parse_heading(self) -> None:
        from mdtree import Heading, parse

        doc = parse("# Hello World")
        assert len(doc.body) == 1
        assert isinstance(doc.body[0], Heading)
        assert doc.body[0].level == 1

    def test_parse_paragraph(self) -> None:
        from mdtree import Paragraph, parse

        doc = parse("Hello World")
        assert len(doc.body) == 1
        assert isinstance(doc.body[0], Paragraph)

    def test_no_frontmatter_is_none(self) -> None:
        from mdtree import parse

        assert parse("# Hi").frontmatter is None

    def test_frontmatter_and_body(self) -> None:
        from mdtree import Paragraph, parse

        doc = parse("---\nkey: v\n---\nbody")
        assert doc.frontmatter is not None
        assert [t.text for t in doc.frontmatter] == ["key: v"]
        assert len(doc.body) == 1
        assert isinstance(doc.body[0], Paragraph)
        assert doc.body[0].location.lineno == 4

    def test_empty_frontmatter_is_empty_tuple(self) -> None:
        from mdtree import parse

        assert parse("---\n---\n").frontmatter == ()

    def test_frontmatter_body_not_parsed(self) -> None:
        from mdtree import parse

        doc = parse("---\n# not a heading\n---\n")
        assert doc.body == ()
        assert doc.frontmatter[0].text == "# not a heading"

    def test_empty_source(self) -> None:
        from mdtree import parse

        doc = parse("")
        assert doc.body == ()
        assert doc.frontmatter is None
        assert doc.location.end_offset == 0

    def test_document_location_covers_source(self) -> None:
        from mdtree import parse

        source = "# a\n\nb\n"
        doc = parse(source)
        assert doc.location.offset == 0
        assert doc.location.end_offset == len(source)

    def test_parse_with_source_file(self) -> None:
        from mdtree import parse

        doc = parse("# Test", source_file="test.md")
        assert doc.location.source_file == "test.md"
        assert doc.body[0].location.source_file == "test.md"
        assert doc.body[0].content[0].location.source_file == "test.md"

    def test_unterminated_frontmatter(self) -> None:
        from mdtree import UnterminatedFrontmatter, parse

        with pytest.raises(UnterminatedFrontmatter):
            parse("---\nkey: v\n(no closing)")

    def test_block_order_preserved(self) -> None:
        from mdtree import FencedCode, FootnoteDef, Heading, List, Paragraph, parse

        doc = parse("# h\n\np\n\n- i\n\n```\nc\n```\n\n[^n]: d")
        assert [type(b) for b in doc.body] == [Heading, Paragraph, List, FencedCode, FootnoteDef]


class TestConfigArgument:
    """Config passed to the API applies to that call only."""

    def test_config_applies(self) -> None:
        from mdtree import Emphasis, ParseConfig, parse

        doc = parse("*hi*", config=ParseConfig(emphasis_enabled=True))
        assert isinstance(doc.body[0].content[0], Emphasis)

    def test_config_restored_after_call(self) -> None:
        from mdtree import ParseConfig, get_parse_config, parse

        before = get_parse_config()
        parse("x", config=ParseConfig(emphasis_enabled=True))
        assert get_parse_config() is before

    def test_config_restored_after_error(self) -> None:
        from mdtree import ParseConfig, UnterminatedFrontmatter, get_parse_config, parse

        before = get_parse_config()
        with pytest.raises(UnterminatedFrontmatter):
            parse("---\n", config=ParseConfig(tab_width=2))
        assert get_parse_config() is before

    def test_active_context_used_without_argument(self) -> None:
        from mdtree import Emphasis, ParseConfig, parse, parse_config_context

        with parse_config_context(ParseConfig(emphasis_enabled=True)):
            doc = parse("*hi*")
        assert isinstance(doc.body[0].content[0], Emphasis)

    def test_custom_frontmatter_delimiter(self) -> None:
        from mdtree import ParseConfig, parse

        doc = parse("+++\nk = 1\n+++\nbody", config=ParseConfig(frontmatter_delimiter="+++"))
        assert doc.frontmatter[0].text == "k = 1"
        assert len(doc.body) == 1


class TestParseMany:
    def test_parses_each(self) -> None:
        from mdtree import Heading, Paragraph, parse_many

        docs = parse_many(["# Doc 1", "text", "# Doc 3"])
        assert len(docs) == 3
        assert isinstance(docs[0].body[0], Heading)
        assert isinstance(docs[1].body[0], Paragraph)

    def test_generator_input(self) -> None:
        from mdtree import parse_many

        docs = parse_many(f"# {i}" for i in range(5))
        assert len(docs) == 5

    def test_config(self) -> None:
        from mdtree import Emphasis, ParseConfig, parse_many

        docs = parse_many(["*a*", "_b_"], config=ParseConfig(emphasis_enabled=True))
        assert all(isinstance(d.body[0].content[0], Emphasis) for d in docs)

    def test_matches_parse(self) -> None:
        from mdtree import parse, parse_many

        sources = ["# a", "- b\n- c", "[x](y)"]
        assert parse_many(sources) == [parse(s) for s in sources]


class TestParseInline:
    def test_returns_inlines(self) -> None:
        from mdtree import Link, Text, parse_inline

        nodes = parse_inline("see [docs](https://example.com)")
        assert isinstance(nodes[0], Text)
        assert isinstance(nodes[1], Link)
        assert nodes[1].href == "https://example.com"

    def test_no_block_structure(self) -> None:
        from mdtree import Text, parse_inline

        (node,) = parse_inline("# not a heading")
        assert isinstance(node, Text)
        assert node.value == "# not a heading"


class TestPublicSurface:
    def test_version(self) -> None:
        import mdtree

        assert mdtree.__version__ == "0.1.0"

    def test_all_exports_resolve(self) -> None:
        import mdtree

        for name in mdtree.__all__:
            assert hasattr(mdtree, name), name

    def test_parser_direct(self) -> None:
        from mdtree import Heading, Parser

        blocks = Parser("# Hello\n\nWorld").parse()
        assert isinstance(blocks[0], Heading)
        assert len(blocks) == 2
