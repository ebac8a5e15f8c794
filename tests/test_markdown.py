"""Tests for markdown parsing and serialisation."""

from __future__ import annotations

import pytest

from relnotes.markdown import parse_markdown, to_markdown
from relnotes.mdast import get_text_content

from _tree_utils import find_all, h, p, ul


class TestParseMarkdown:
    """Tests for parse_markdown function."""

    @pytest.mark.parametrize("source", [None, ""])
    def test_empty_source(self, source) -> None:
        """Missing text yields an empty root."""
        assert parse_markdown(source) == {"type": "root", "children": []}

    def test_release_body_structure(self) -> None:
        """Headings and lists become top-level siblings."""
        root = parse_markdown(
            "## Enhancements\n"
            "- feat A\n"
            "- feat B\n"
            "\n"
            "### Details\n"
            "Some text.\n"
        )
        assert root["type"] == "root"
        assert [n["type"] for n in root["children"]] == ["heading", "list", "heading", "paragraph"]
        assert root["children"][0]["depth"] == 2
        assert root["children"][2]["depth"] == 3
        assert get_text_content(root["children"][0]) == "Enhancements"

    def test_list_items(self) -> None:
        """List items hold their text in a paragraph."""
        root = parse_markdown("- feat A\n- fix B\n")
        lst = root["children"][0]
        assert lst["ordered"] is False
        assert [n["type"] for n in lst["children"]] == ["listItem", "listItem"]
        assert [get_text_content(item) for item in lst["children"]] == ["feat A", "fix B"]
        assert lst["children"][0]["children"][0]["type"] == "paragraph"

    def test_ordered_list(self) -> None:
        """Ordered lists carry their start number."""
        lst = parse_markdown("1. one\n2. two\n")["children"][0]
        assert lst["ordered"] is True
        assert lst["start"] == 1

    def test_inline_formatting_and_links(self) -> None:
        """Strong text and links are converted."""
        root = parse_markdown("**Note:** see [the docs](https://example.com/docs).\n")
        para = root["children"][0]
        assert para["type"] == "paragraph"
        assert find_all(para, "strong")[0]["children"] == [{"type": "text", "value": "Note:"}]
        link = find_all(para, "link")[0]
        assert link["url"] == "https://example.com/docs"
        assert get_text_content(link) == "the docs"

    def test_inline_code(self) -> None:
        """Code spans keep their content as a value."""
        para = parse_markdown("Run `make test` now\n")["children"][0]
        assert {"type": "inlineCode", "value": "make test"} in para["children"]

    def test_fenced_code(self) -> None:
        """Fenced code keeps language and content."""
        root = parse_markdown("```python\nprint('hi')\n```\n")
        code = root["children"][0]
        assert code["type"] == "code"
        assert code["lang"] == "python"
        assert code["value"] == "print('hi')"

    def test_thematic_break(self) -> None:
        """Horizontal rules are kept."""
        root = parse_markdown("before\n\n---\n\nafter\n")
        assert [n["type"] for n in root["children"]] == ["paragraph", "thematicBreak", "paragraph"]

    def test_soft_line_breaks_join_text(self) -> None:
        """Text across a soft break stays in one paragraph."""
        root = parse_markdown("line one\nline two\n")
        assert len(root["children"]) == 1
        text = get_text_content(root["children"][0])
        assert "line one" in text
        assert "line two" in text

    def test_unusual_input_does_not_raise(self) -> None:
        """Odd markdown still gives a tree."""
        root = parse_markdown("## \n-\n```\nunclosed\n> > >\n<div>\n")
        assert root["type"] == "root"
        assert isinstance(root["children"], list)


class TestToMarkdown:
    """Tests for to_markdown function."""

    def test_empty_fragment(self) -> None:
        """Nothing renders as an empty string."""
        assert to_markdown([]) == ""

    def test_blocks_separated_by_blank_lines(self) -> None:
        """Headings, paragraphs and breaks are separate blocks."""
        nodes = [h(2, "v1.0"), p("text"), {"type": "thematicBreak"}, p("more")]
        assert to_markdown(nodes) == "## v1.0\n\ntext\n\n---\n\nmore\n"

    def test_inline_nodes(self) -> None:
        """Strong, links and inline code use markdown syntax."""
        para = {
            "type": "paragraph",
            "children": [
                {"type": "strong", "children": [{"type": "text", "value": "Enhancements"}]},
                {"type": "text", "value": " and "},
                {"type": "link", "url": "https://x/y", "children": [{"type": "text", "value": "View release"}]},
                {"type": "text", "value": " "},
                {"type": "inlineCode", "value": "x()"},
            ],
        }
        assert to_markdown([para]) == "**Enhancements** and [View release](https://x/y) `x()`\n"

    def test_bare_link(self) -> None:
        """A link labelled with its own URL renders as an autolink."""
        link = {"type": "link", "url": "https://x", "children": [{"type": "text", "value": "https://x"}]}
        assert to_markdown([{"type": "paragraph", "children": [link]}]) == "<https://x>\n"

    def test_bullet_list(self) -> None:
        """Tight lists render one item per line."""
        assert to_markdown([ul("feat A", "fix B")]) == "- feat A\n- fix B\n"

    def test_ordered_list_numbers(self) -> None:
        """Ordered lists count up from their start."""
        lst = {**ul("a", "b"), "ordered": True, "start": 4}
        assert to_markdown([lst]) == "4. a\n5. b\n"

    def test_nested_list_is_indented(self) -> None:
        """Nested lists are indented under their item."""
        item = {"type": "listItem", "children": [p("parent"), ul("child")]}
        lst = {"type": "list", "ordered": False, "children": [item]}
        assert to_markdown([lst]) == "- parent\n  - child\n"

    def test_code_block(self) -> None:
        """Code renders fenced with its language."""
        code = {"type": "code", "lang": "bash", "value": "pip install relnotes"}
        assert to_markdown([code]) == "```bash\npip install relnotes\n```\n"

    def test_blockquote(self) -> None:
        """Quoted blocks are prefixed."""
        quote = {"type": "blockquote", "children": [p("a"), p("b")]}
        assert to_markdown([quote]) == "> a\n>\n> b\n"

    def test_parse_then_render_keeps_text(self) -> None:
        """Rendering a parsed body keeps its words."""
        source = "## Fixes\n\n- fix **crash** in [parser](https://x/1)\n"
        rendered = to_markdown(parse_markdown(source)["children"])
        assert "## Fixes" in rendered
        assert "- fix **crash** in [parser](https://x/1)" in rendered


class TestTextEscaping:
    """Tests for escaping text so it reads back as the same text."""

    @pytest.mark.parametrize("value, expected", [
        ("* not a list", "\\* not a list\n"),
        ("- not a list", "\\- not a list\n"),
        ("+ not a list", "\\+ not a list\n"),
        ("1. not a list", "1\\. not a list\n"),
        ("2) not a list", "2\\) not a list\n"),
        ("# not a heading", "\\# not a heading\n"),
        ("> not a quote", "\\> not a quote\n"),
        ("---", "\\---\n"),
    ])
    def test_leading_block_markers(self, value, expected) -> None:
        """Markers at the start of a paragraph line are escaped."""
        assert to_markdown([p(value)]) == expected

    def test_inline_markup_characters(self) -> None:
        """Emphasis and code characters in text are escaped."""
        assert to_markdown([p("snake_case *and* `ticks` \\ ok")]) == (
            "snake\\_case \\*and\\* \\`ticks\\` \\\\ ok\n"
        )

    def test_markers_after_soft_break(self) -> None:
        """Each line of a paragraph is checked."""
        assert to_markdown([p("first\n- second")]) == "first\n\\- second\n"

    def test_plain_text_untouched(self) -> None:
        """Dates and version numbers need no escaping."""
        assert to_markdown([p("2024-03-05 | v1.2.0")]) == "2024-03-05 | v1.2.0\n"

    @pytest.mark.parametrize("value", ["* not a list", "1. x", "- item", "a_b *c*"])
    def test_text_reads_back_as_paragraph(self, value) -> None:
        """Rendered text parses back into one paragraph with the same text."""
        root = parse_markdown(to_markdown([p(value)]))
        assert [n["type"] for n in root["children"]] == ["paragraph"]
        assert get_text_content(root["children"][0]) == value
