"""stepmark renderers.

Renderers turn a Document into an output format.

Available Renderers:
- HtmlRenderer: Renders documents to escaped HTML

"""

from stepmark.renderers.html import HtmlRenderer
from stepmark.renderers.protocol import ASTRenderer

__all__ = ["ASTRenderer", "HtmlRenderer"]
