"""Renderer protocol.

A renderer turns a parsed ``Document`` back into text. ``MarkdownRenderer``
is the one shipped here; third-party renderers (HTML, plain text, a
frontmatter-aware publisher) only need a ``render`` method to plug into
code typed against ``ASTRenderer``.

Example:
    from mdtree.renderers.protocol import ASTRenderer

    def render_all(renderer: ASTRenderer, docs: list[Document]) -> list[str]:
        return [renderer.render(doc) for doc in docs]

"""

from typing import Protocol, runtime_checkable

from mdtree.nodes import Document


@runtime_checkable
class ASTRenderer(Protocol):
    """Anything with ``render(Document) -> str``.

    Runtime checkable, so ``isinstance(obj, ASTRenderer)`` tests for the
    method's presence.
    """

    def render(self, node: Document) -> str:
        """Render a document.

        Raises:
            RenderError: The tree contains something the output format
                cannot express.
        """
        ...
