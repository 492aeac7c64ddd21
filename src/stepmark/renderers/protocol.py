"""ASTRenderer protocol: the interface document renderers implement.

Any renderer that implements ``render(node) -> str`` conforms to this protocol.
The built-in ``HtmlRenderer`` is the reference implementation.

Example:
    from stepmark.renderers.protocol import ASTRenderer

    def render_step(renderer: ASTRenderer, doc: Document) -> str:
        return renderer.render(doc)

"""

from typing import Protocol

from stepmark.nodes import Document


class ASTRenderer(Protocol):
    """Protocol for document renderers."""

    def render(self, node: Document) -> str:
        """Render a Document to a string."""
        ...
