"""mdtree renderers.

Renderers convert typed AST nodes into output formats.

Available Renderers:
- MarkdownRenderer: Renders AST back to normalized markdown source

Thread Safety:
All renderers use StringBuilder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from mdtree.renderers.markdown import MarkdownRenderer, render_markdown
from mdtree.renderers.protocol import ASTRenderer

__all__ = ["ASTRenderer", "MarkdownRenderer", "render_markdown"]
