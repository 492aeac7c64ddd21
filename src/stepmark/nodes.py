"""Typed document nodes for stepmark.

All nodes are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: a returned Document can be shared across threads
- Pattern matching: renderers dispatch with match statements

Node Hierarchy:
Node (base)
├── Span (inline leaves)
│   ├── Text
│   ├── Code
│   ├── Bold
│   ├── Italic
│   └── Link
└── BlockNode (carries a SourceLocation)
    ├── Document
    ├── Heading
    ├── Paragraph
    ├── List
    ├── Table
    ├── CodeBlock
    └── Rule

Spans are leaves: formatting does not nest, so every span holds plain strings
with the markup delimiters already consumed.

Block locations are keyword-only and excluded from equality, so two documents
parsed from differently laid out sources compare equal when their structure
matches.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from stepmark.location import SourceLocation

# =============================================================================
# Base Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all document nodes."""


@dataclass(frozen=True, slots=True)
class BlockNode(Node):
    """Base class for block nodes.

    Blocks track the source lines they were built from for debugging.

    """

    location: SourceLocation = field(
        default_factory=SourceLocation.unknown, compare=False, repr=False, kw_only=True
    )


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Plain text content.

    Also carries any markup that failed to match, e.g. a lone ``*``.

    """

    content: str


@dataclass(frozen=True, slots=True)
class Code(Node):
    """Inline code.

    Markdown: `code`
    HTML: <code>code</code>

    """

    code: str


@dataclass(frozen=True, slots=True)
class Bold(Node):
    """Strong (bold) text.

    Markdown: **text** or __text__
    HTML: <strong>text</strong>

    """

    content: str


@dataclass(frozen=True, slots=True)
class Italic(Node):
    """Emphasized (italic) text.

    Markdown: *text*
    HTML: <em>text</em>

    """

    content: str


@dataclass(frozen=True, slots=True)
class Link(Node):
    """Hyperlink.

    Markdown: [text](url)
    HTML: <a href="url">text</a>

    """

    text: str
    url: str


# PEP 695 type alias for inline elements
type Span = Text | Code | Bold | Italic | Link


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Heading(BlockNode):
    """ATX heading.

    Markdown: ## Heading
    HTML: <h2>Heading</h2>

    """

    level: Literal[1, 2, 3, 4, 5, 6]
    children: tuple[Span, ...]


@dataclass(frozen=True, slots=True)
class Paragraph(BlockNode):
    """Paragraph block.

    Every non-special source line becomes its own paragraph.

    """

    children: tuple[Span, ...]


@dataclass(frozen=True, slots=True)
class List(BlockNode):
    """Ordered or unordered list.

    Markdown: - item or 1. item
    HTML: <ul>/<ol> with <li> children

    Each item is a sequence of spans. Lists never nest and are never empty.

    """

    items: tuple[tuple[Span, ...], ...]
    ordered: bool = False


@dataclass(frozen=True, slots=True)
class Table(BlockNode):
    """Pipe table.

    Markdown:
        | A | B |
        |---|---|
        | 1 | 2 |

    The first row is the header; separator rows are dropped during segmenting.
    Each cell is a sequence of spans.

    """

    header: tuple[tuple[Span, ...], ...]
    rows: tuple[tuple[tuple[Span, ...], ...], ...] = ()


@dataclass(frozen=True, slots=True)
class CodeBlock(BlockNode):
    """Fenced code block.

    Holds the captured lines verbatim, joined with newlines. No inline
    formatting is applied.

    """

    code: str


@dataclass(frozen=True, slots=True)
class Rule(BlockNode):
    """Horizontal rule.

    Markdown: --- or ***
    HTML: <hr />

    """


@dataclass(frozen=True, slots=True)
class Document(BlockNode):
    """Root document node.

    Contains all top-level blocks in source order.

    """

    children: tuple[Block, ...]


# PEP 695 type alias for block elements
type Block = Heading | Paragraph | List | Table | CodeBlock | Rule
