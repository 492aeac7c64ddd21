"""
stepmark: step instruction markup for assessment dashboards

Converts the small markdown-like dialect used in step instructions into a
typed, immutable document tree, and renders that tree to escaped HTML.

The dialect is line oriented: headings, paragraphs (one per line), flat
ordered and unordered lists, pipe tables, fenced code blocks and horizontal
rules, with inline code, bold, italic, links and `` -- `` em dashes.

Quick Start:
    >>> from stepmark import parse, render
    >>> doc = parse("# Setup\\n\\n- Install **MySQL**\\n- Run `mysqld`")
    >>> print(render(doc))
    <h1>Setup</h1>
    <ul>
    <li>Install <strong>MySQL</strong></li>
    <li>Run <code>mysqld</code></li>
    </ul>

    >>> # Or use the high-level Markdown class
    >>> from stepmark import Markdown
    >>> md = Markdown(em_dash=False)
    >>> html = md("Plain -- dashes")

Step files:
    >>> from stepmark import StepLoader, render
    >>> step = StepLoader("site/steps").get(1)
    >>> html = render(step.document()) if step else ""

Installation:
    pip install stepmark              # Zero runtime dependencies
    pip install stepmark[test]        # + pytest and hypothesis
"""

from collections.abc import Callable, Iterable

from stepmark.cache import DictParseCache, ParseCache, hash_config, hash_content
from stepmark.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from stepmark.errors import RenderError, StepContentError, StepmarkError
from stepmark.inline import inline
from stepmark.location import SourceLocation
from stepmark.nodes import (
    Block,
    BlockNode,
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
from stepmark.renderers.html import HtmlRenderer
from stepmark.renderers.protocol import ASTRenderer
from stepmark.segmenter import Segmenter, segment
from stepmark.serialization import from_dict, from_json, to_dict, to_json
from stepmark.steps import StepContent, StepLoader, load_step, step_filename
from stepmark.text import extract_text, spans_text
from stepmark.utils.logger import get_logger

__version__ = "0.1.0"

logger = get_logger(__name__)


def parse(
    source: str,
    *,
    source_file: str | None = None,
    cache: ParseCache | None = None,
) -> Document:
    """Parse step instruction source into a Document.

    Uses the parse configuration of the current context (see
    parse_config_context()).

    Args:
        source: Source text in the stepmark dialect
        source_file: Optional source file path recorded in block locations
        cache: Optional content-addressed parse cache. On a hit the cached
            Document is returned without segmenting. Cache is bypassed when
            config has text_transformer set.

    Returns:
        Document root node

    Example:
        >>> doc = parse("# Hello **World**")
        >>> doc.children[0]
        Heading(level=1, children=(Text(content='Hello '), Bold(content='World')))

    """
    if cache is None:
        return segment(source, source_file=source_file)

    config_hash = hash_config(get_parse_config())
    if not config_hash:
        return segment(source, source_file=source_file)

    content_hash = hash_content(source)
    cached = cache.get(content_hash, config_hash)
    if cached is not None:
        logger.debug("Parse cache hit for %s", source_file or content_hash[:12])
        return cached

    doc = segment(source, source_file=source_file)
    cache.put(content_hash, config_hash, doc)
    return doc


def render(doc: Document, *, empty_message: str | None = None) -> str:
    """Render a Document to HTML.

    Args:
        doc: Document to render
        empty_message: Fallback text rendered when the document has no blocks

    Returns:
        HTML string

    Example:
        >>> render(parse("# Hello"))
        '<h1>Hello</h1>\\n'

    """
    return HtmlRenderer(empty_message=empty_message).render(doc)


class Markdown:
    """High-level processor combining parser configuration and renderer.

    Usage:
        >>> md = Markdown()
        >>> md("# Hello **World**")
        '<h1>Hello <strong>World</strong></h1>\\n'

        >>> doc = md.parse("## Heading")
        >>> doc.children[0].level
        2

    Thread Safety:
        Config is applied through a ContextVar for the duration of each call
        and the previous config is restored afterwards. Safe to use multiple
        Markdown instances concurrently from different threads.

    """

    __slots__ = ("_config", "_renderer")

    def __init__(
        self,
        *,
        em_dash: bool = True,
        text_transformer: Callable[[str], str] | None = None,
        link_target: str | None = "_blank",
        link_rel: str | None = "noopener",
        empty_message: str | None = None,
    ) -> None:
        """Initialize Markdown processor.

        Args:
            em_dash: Replace " -- " with an em dash
            text_transformer: Optional callback applied to plain text spans
            link_target: ``target`` attribute for rendered links
            link_rel: ``rel`` attribute for rendered links
            empty_message: Fallback text for documents with no blocks
        """
        self._config = ParseConfig(em_dash=em_dash, text_transformer=text_transformer)
        self._renderer = HtmlRenderer(
            link_target=link_target,
            link_rel=link_rel,
            empty_message=empty_message,
        )

    @property
    def config(self) -> ParseConfig:
        return self._config

    def __call__(self, source: str) -> str:
        """Parse and render in one call."""
        return self._renderer.render(self.parse(source))

    def parse(
        self,
        source: str,
        *,
        source_file: str | None = None,
        cache: ParseCache | None = None,
    ) -> Document:
        """Parse source into a Document using this instance's config."""
        with parse_config_context(self._config):
            return parse(source, source_file=source_file, cache=cache)

    def parse_many(
        self,
        sources: Iterable[str],
        *,
        cache: ParseCache | None = None,
    ) -> list[Document]:
        """Parse multiple sources with a single config set/restore.

        When cache is provided, duplicate sources within the batch hit cache.
        """
        with parse_config_context(self._config):
            return [parse(source, cache=cache) for source in sources]

    def render(self, doc: Document) -> str:
        """Render a Document to HTML."""
        return self._renderer.render(doc)


__all__ = [  # noqa: RUF022
    # Version
    "__version__",
    # Core API
    "parse",
    "segment",
    "inline",
    "render",
    # Parse cache
    "DictParseCache",
    "ParseCache",
    "hash_config",
    "hash_content",
    # Nodes
    "Node",
    "BlockNode",
    "Block",
    "Document",
    "Heading",
    "Paragraph",
    "List",
    "Table",
    "CodeBlock",
    "Rule",
    "Span",
    "Text",
    "Code",
    "Bold",
    "Italic",
    "Link",
    # Parser components
    "Segmenter",
    # Renderer
    "HtmlRenderer",
    "ASTRenderer",
    # Text extraction
    "extract_text",
    "spans_text",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Configuration (ContextVar-based)
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Step content
    "StepContent",
    "StepLoader",
    "load_step",
    "step_filename",
    # Errors
    "StepmarkError",
    "RenderError",
    "StepContentError",
    # Location
    "SourceLocation",
    # High-level
    "Markdown",
]
