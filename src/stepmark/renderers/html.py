"""HTML renderer for stepmark documents.

Maps each block to a structural HTML element and each span to inline markup.
Every payload is escaped; no raw HTML from the source ever reaches the output.

Block mapping:
- Heading -> <h1>..<h6>
- Paragraph -> <p>
- List -> <ul>/<ol> with <li>
- Table -> <table> with <thead> (header row) and <tbody> (data rows)
- CodeBlock -> <pre><code>
- Rule -> <hr />

Thread Safety:
All per-render state lives in a list local to each render() call. A single
HtmlRenderer instance can be shared across threads.
"""

import html
from collections.abc import Iterable

from stepmark.errors import RenderError
from stepmark.nodes import (
    Block,
    Bold,
    Code,
    CodeBlock,
    Document,
    Heading,
    Italic,
    Link,
    List,
    Paragraph,
    Rule,
    Span,
    Table,
    Text,
)
from stepmark.utils.logger import get_logger

logger = get_logger(__name__)


def html_escape(s: str) -> str:
    """Escape text content: <, >, & and double quotes."""
    return html.escape(s, quote=False).replace('"', "&quot;")


class HtmlRenderer:
    """Render a Document to HTML.

    Usage:
        >>> from stepmark import parse
        >>> HtmlRenderer().render(parse("# Hello **World**"))
        '<h1>Hello <strong>World</strong></h1>\\n'

    Thread Safety:
        Multiple threads can safely share a single HtmlRenderer instance.

    """

    __slots__ = ("_link_target", "_link_rel", "_empty_message")

    def __init__(
        self,
        *,
        link_target: str | None = "_blank",
        link_rel: str | None = "noopener",
        empty_message: str | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            link_target: ``target`` attribute for links (None to omit)
            link_rel: ``rel`` attribute for links (None to omit)
            empty_message: Text rendered in a paragraph when the document has
                no blocks (None renders nothing)
        """
        self._link_target = link_target
        self._link_rel = link_rel
        self._empty_message = empty_message

    def render(self, node: Document) -> str:
        """Render document to HTML string.

        Raises:
            RenderError: If node is not a Document.
        """
        if not isinstance(node, Document):
            msg = f"Expected Document, got {type(node).__name__}"
            raise RenderError(msg)

        parts: list[str] = []
        if not node.children:
            if self._empty_message:
                logger.debug("Rendering empty document as fallback message")
                parts.append(f"<p>{html_escape(self._empty_message)}</p>\n")
            return "".join(parts)

        for child in node.children:
            self._render_block(child, parts)
        return "".join(parts)

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_block(self, block: Block, parts: list[str]) -> None:
        """Render a block node."""
        match block:
            case Heading():
                tag = f"h{block.level}"
                parts.append(f"<{tag}>")
                self._render_spans(block.children, parts)
                parts.append(f"</{tag}>\n")
            case Paragraph():
                parts.append("<p>")
                self._render_spans(block.children, parts)
                parts.append("</p>\n")
            case List():
                self._render_list(block, parts)
            case Table():
                self._render_table(block, parts)
            case CodeBlock():
                parts.append("<pre><code>")
                parts.append(html_escape(block.code))
                parts.append("</code></pre>\n")
            case Rule():
                parts.append("<hr />\n")
            case _:
                msg = f"Cannot render block of type {type(block).__name__}"
                raise RenderError(msg)

    def _render_list(self, block: List, parts: list[str]) -> None:
        tag = "ol" if block.ordered else "ul"
        parts.append(f"<{tag}>\n")
        for item in block.items:
            parts.append("<li>")
            self._render_spans(item, parts)
            parts.append("</li>\n")
        parts.append(f"</{tag}>\n")

    def _render_table(self, block: Table, parts: list[str]) -> None:
        """Render table; the header row always goes in <thead>."""
        parts.append("<table>\n<thead>\n")
        self._render_row(block.header, "th", parts)
        parts.append("</thead>\n<tbody>\n")
        for row in block.rows:
            self._render_row(row, "td", parts)
        parts.append("</tbody>\n</table>\n")

    def _render_row(
        self, row: tuple[tuple[Span, ...], ...], tag: str, parts: list[str]
    ) -> None:
        parts.append("<tr>")
        for cell in row:
            parts.append(f"<{tag}>")
            self._render_spans(cell, parts)
            parts.append(f"</{tag}>")
        parts.append("</tr>\n")

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_spans(self, spans: Iterable[Span], parts: list[str]) -> None:
        for span in spans:
            match span:
                case Text():
                    parts.append(html_escape(span.content))
                case Code():
                    parts.append(f"<code>{html_escape(span.code)}</code>")
                case Bold():
                    parts.append(f"<strong>{html_escape(span.content)}</strong>")
                case Italic():
                    parts.append(f"<em>{html_escape(span.content)}</em>")
                case Link():
                    parts.append(self._link_open(span.url))
                    parts.append(html_escape(span.text))
                    parts.append("</a>")
                case _:
                    msg = f"Cannot render span of type {type(span).__name__}"
                    raise RenderError(msg)

    def _link_open(self, url: str) -> str:
        attrs = f'href="{html.escape(url, quote=True)}"'
        if self._link_target:
            attrs += f' target="{html.escape(self._link_target, quote=True)}"'
        if self._link_rel:
            attrs += f' rel="{html.escape(self._link_rel, quote=True)}"'
        return f"<a {attrs}>"
