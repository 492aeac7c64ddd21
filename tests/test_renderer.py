"""Tests for the HTML renderer."""

import pytest

from stepmark import parse
from stepmark.errors import RenderError
from stepmark.nodes import Document, Paragraph, Text
from stepmark.renderers.html import HtmlRenderer, html_escape


def render(source: str, **kwargs: object) -> str:
    return HtmlRenderer(**kwargs).render(parse(source))  # type: ignore[arg-type]


class TestBlocks:
    """Block element mapping."""

    def test_heading(self) -> None:
        assert render("### Three") == "<h3>Three</h3>\n"

    def test_paragraph(self) -> None:
        assert render("Hello") == "<p>Hello</p>\n"

    def test_unordered_list(self) -> None:
        assert render("- a\n- b") == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n"

    def test_ordered_list(self) -> None:
        assert render("1. a") == "<ol>\n<li>a</li>\n</ol>\n"

    def test_table(self) -> None:
        assert render("|H|\n|---|\n|v|") == (
            "<table>\n<thead>\n<tr><th>H</th></tr>\n</thead>\n"
            "<tbody>\n<tr><td>v</td></tr>\n</tbody>\n</table>\n"
        )

    def test_header_only_table_has_empty_body(self) -> None:
        assert "<tbody>\n</tbody>" in render("|H|")

    def test_code_block(self) -> None:
        assert render("```\nif a < b:\n    pass\n```") == (
            "<pre><code>if a &lt; b:\n    pass</code></pre>\n"
        )

    def test_rule(self) -> None:
        assert render("---") == "<hr />\n"


class TestSpans:
    """Inline element mapping."""

    def test_code(self) -> None:
        assert render("`x`") == "<p><code>x</code></p>\n"

    def test_bold(self) -> None:
        assert render("**x**") == "<p><strong>x</strong></p>\n"

    def test_italic(self) -> None:
        assert render("*x*") == "<p><em>x</em></p>\n"

    def test_link_defaults(self) -> None:
        assert render("[a](http://x)") == (
            '<p><a href="http://x" target="_blank" rel="noopener">a</a></p>\n'
        )

    def test_link_attributes_can_be_omitted(self) -> None:
        html = render("[a](http://x)", link_target=None, link_rel=None)
        assert html == '<p><a href="http://x">a</a></p>\n'

    def test_link_url_escaped(self) -> None:
        html = render('[a](http://x/?q="1"&r=2)')
        assert 'href="http://x/?q=&quot;1&quot;&amp;r=2"' in html


class TestEscaping:
    """No raw HTML from the source reaches the output."""

    def test_html_escape(self) -> None:
        assert html_escape('<b>&"') == "&lt;b&gt;&amp;&quot;"

    def test_text_escaped(self) -> None:
        assert render("<script>alert(1)</script>") == (
            "<p>&lt;script&gt;alert(1)&lt;/script&gt;</p>\n"
        )

    def test_span_payloads_escaped(self) -> None:
        html = render("`<b>` **<i>** *&*")
        assert "<code>&lt;b&gt;</code>" in html
        assert "<strong>&lt;i&gt;</strong>" in html
        assert "<em>&amp;</em>" in html

    def test_table_cells_escaped(self) -> None:
        assert "<th>&lt;x&gt;</th>" in render("|<x>|")


class TestEmptyDocument:
    """Fallback for documents with no blocks."""

    def test_renders_nothing_by_default(self) -> None:
        assert render("") == ""

    def test_empty_message(self) -> None:
        html = render("\n\n", empty_message="No instructions <yet>")
        assert html == "<p>No instructions &lt;yet&gt;</p>\n"

    def test_empty_message_ignored_when_content(self) -> None:
        assert render("x", empty_message="fallback") == "<p>x</p>\n"


class TestErrors:
    def test_non_document_rejected(self) -> None:
        with pytest.raises(RenderError, match="Expected Document"):
            HtmlRenderer().render(Paragraph(children=(Text("x"),)))  # type: ignore[arg-type]

    def test_unknown_block_rejected(self) -> None:
        doc = Document(children=(Text("stray"),))  # type: ignore[arg-type]
        with pytest.raises(RenderError, match="Cannot render block"):
            HtmlRenderer().render(doc)

    def test_unknown_span_rejected(self) -> None:
        doc = Document(children=(Paragraph(children=(object(),)),))  # type: ignore[arg-type]
        with pytest.raises(RenderError, match="Cannot render span"):
            HtmlRenderer().render(doc)


def test_renderer_is_reusable() -> None:
    renderer = HtmlRenderer()
    first = renderer.render(parse("# A"))
    renderer.render(parse("- b"))
    assert renderer.render(parse("# A")) == first


def test_html_renderer_satisfies_protocol() -> None:
    from stepmark.renderers import ASTRenderer

    renderer: ASTRenderer = HtmlRenderer()
    assert renderer.render(parse("x")) == "<p>x</p>\n"
