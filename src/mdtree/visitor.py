"""AST Visitor and Transformer for mdtree.

Provides a base visitor class with match-based dispatch and an immutable
transform function for rewriting frozen ASTs.

Example: collect all link targets:

    class LinkCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.hrefs: list[str] = []

        def visit_link(self, node: Link) -> None:
            self.hrefs.append(node.href)

    collector = LinkCollector()
    collector.visit(doc)

Example: demote every heading one level:

    def demote(node: Node) -> Node:
        if isinstance(node, Heading):
            return dataclasses.replace(node, level=min(node.level + 1, 6))
        return node

    new_doc = transform(doc, demote)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. The transform function
    is pure, safe to call from any thread.

"""

import dataclasses
from collections.abc import Callable
from typing import assert_never

from mdtree.nodes import (
    Document,
    Emphasis,
    FencedCode,
    FootnoteDef,
    FootnoteRef,
    Heading,
    Image,
    Inline,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strong,
    Text,
)


class BaseVisitor[T]:
    """Base AST visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call, in source order.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method.

        Walks children automatically after the visit method returns.

        """
        result = self._dispatch(node)
        for child in children_of(node):
            self.visit(child)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method.

        Override this for catch-all behavior. Default returns None
        (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]

    # -- Block visitors --------------------------------------------------------

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_heading(self, node: Heading) -> T:
        return self.visit_default(node)

    def visit_paragraph(self, node: Paragraph) -> T:
        return self.visit_default(node)

    def visit_list(self, node: List) -> T:
        return self.visit_default(node)

    def visit_list_item(self, node: ListItem) -> T:
        return self.visit_default(node)

    def visit_fenced_code(self, node: FencedCode) -> T:
        return self.visit_default(node)

    def visit_footnote_def(self, node: FootnoteDef) -> T:
        return self.visit_default(node)

    # -- Inline visitors -------------------------------------------------------

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_link(self, node: Link) -> T:
        return self.visit_default(node)

    def visit_image(self, node: Image) -> T:
        return self.visit_default(node)

    def visit_footnote_ref(self, node: FootnoteRef) -> T:
        return self.visit_default(node)

    def visit_emphasis(self, node: Emphasis) -> T:
        return self.visit_default(node)

    def visit_strong(self, node: Strong) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Document():
                return self.visit_document(node)
            case Heading():
                return self.visit_heading(node)
            case Paragraph():
                return self.visit_paragraph(node)
            case List():
                return self.visit_list(node)
            case ListItem():
                return self.visit_list_item(node)
            case FencedCode():
                return self.visit_fenced_code(node)
            case FootnoteDef():
                return self.visit_footnote_def(node)
            case Text():
                return self.visit_text(node)
            case Link():
                return self.visit_link(node)
            case Image():
                return self.visit_image(node)
            case FootnoteRef():
                return self.visit_footnote_ref(node)
            case Emphasis():
                return self.visit_emphasis(node)
            case Strong():
                return self.visit_strong(node)
            case _:
                return self.visit_default(node)


def children_of(node: Node) -> tuple[Node, ...]:
    """Direct child nodes of ``node`` in source order (empty for leaves)."""
    match node:
        case Document(body=body):
            return body
        case Heading(content=content) | Paragraph(content=content):
            return content
        case Emphasis(content=content) | Strong(content=content):
            return content
        case ListItem(content=content) | FootnoteDef(content=content):
            return content
        case List(items=items):
            return items
        case _:
            return ()


def plain_text(nodes: tuple[Inline, ...]) -> str:
    """Concatenate the literal text an inline sequence displays.

    Links contribute their text and images their alt text.
    """
    parts: list[str] = []
    for node in nodes:
        match node:
            case Text(value=value):
                parts.append(value)
            case Link(text=text):
                parts.append(text)
            case Image(alt=alt):
                parts.append(alt)
            case FootnoteRef(identifier=identifier):
                parts.append(f"[^{identifier}]")
            case Emphasis(content=content) | Strong(content=content):
                parts.append(plain_text(content))
            case _:
                assert_never(node)
    return "".join(parts)


def transform(doc: Document, fn: Callable[[Node], Node | None]) -> Document:
    """Apply a function to every node in the AST, returning a new tree.

    The function ``fn`` is called bottom-up: children are transformed first,
    then the parent is transformed with its new children. This ensures ``fn``
    always receives nodes with already-transformed children.

    Return ``None`` from ``fn`` to remove a node from the tree. A List whose
    items are all removed is removed too, so lists are never empty. The root
    Document cannot be removed; returning None for it raises TypeError.

    Since all nodes are frozen dataclasses, this produces a new immutable tree.
    The original tree is untouched.

    Args:
        doc: The document to transform.
        fn: Function that receives a node and returns a (possibly new) node,
            or None to remove the node from the tree.

    Returns:
        A new Document with the transformation applied.

    """
    result = _transform_node(doc, fn)
    if result is None or not isinstance(result, Document):
        msg = "transform fn must return a Document for the root (cannot remove root)"
        raise TypeError(msg)
    return result


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    """Transform a single node bottom-up: children first, then self."""
    transformed = _transform_children(node, fn)
    if transformed is None:
        return None
    return fn(transformed)


def _filtered(children: tuple[Node, ...], fn: Callable[[Node], Node | None]) -> tuple:
    return tuple(
        result for child in children if (result := _transform_node(child, fn)) is not None
    )


def _transform_children(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    """New node with children transformed; None when a List loses every item."""
    match node:
        case Document(body=body):
            new_body = _filtered(body, fn)
            if new_body != body:
                return dataclasses.replace(node, body=new_body)
        case List(items=items):
            new_items = _filtered(items, fn)
            if not new_items:
                return None
            if new_items != items:
                return dataclasses.replace(node, items=new_items)
        case (
            Heading(content=content)
            | Paragraph(content=content)
            | ListItem(content=content)
            | FootnoteDef(content=content)
            | Emphasis(content=content)
            | Strong(content=content)
        ):
            new_content = _filtered(content, fn)
            if new_content != content:
                return dataclasses.replace(node, content=new_content)
        case _:
            pass  # Leaf nodes: return as-is

    return node


__all__ = ["BaseVisitor", "children_of", "plain_text", "transform"]
