"""Extract plain text from stepmark nodes.

Concatenates span payloads without any markup, e.g. for search indexes,
excerpts or plain-text fallbacks.

Example:
    >>> from stepmark import parse, extract_text
    >>> doc = parse("# Hello **World**")
    >>> extract_text(doc.children[0])
    'Hello World'
"""

from collections.abc import Iterable

from stepmark.nodes import (
    Bold,
    Code,
    CodeBlock,
    Document,
    Heading,
    Italic,
    Link,
    List,
    Node,
    Paragraph,
    Rule,
    Span,
    Table,
    Text,
)


def spans_text(spans: Iterable[Span]) -> str:
    """Join the payloads of a span sequence.

    Links contribute their display text, not the URL.
    """
    return "".join(extract_text(span) for span in spans)


def extract_text(node: Node) -> str:
    """Extract plain text from any node.

    Inline spans contribute their payload. Blocks inside a document, list
    items and table cells are separated by single spaces.

    Args:
        node: Any node (block or span).

    Returns:
        Concatenated plain text from the node and its descendants.

    """
    match node:
        case Text() | Bold() | Italic():
            return node.content
        case Code():
            return node.code
        case Link():
            return node.text
        case Heading() | Paragraph():
            return spans_text(node.children)
        case List():
            return " ".join(spans_text(item) for item in node.items)
        case Table():
            rows = (node.header, *node.rows)
            return " ".join(spans_text(cell) for row in rows for cell in row)
        case CodeBlock():
            return node.code
        case Document():
            return " ".join(extract_text(child) for child in node.children)
        case Rule():
            return ""
        case _:
            return ""
