"""AST serialization: JSON round-trip for mdtree AST nodes.

Converts typed AST nodes to/from JSON-compatible dicts. Useful for:
- Caching parsed documents to disk
- Handing the tree to tools written in other languages
- Debugging and inspection
- Comparing trees structurally (``locations=False``)

All output is deterministic (sorted keys) for cache-key stability.

Example:
    from mdtree import parse
    from mdtree.serialization import to_json, from_json

    doc = parse("# Hello [World](https://example.com)")
    json_str = to_json(doc)
    restored = from_json(json_str)
    assert doc == restored

Thread Safety:
    All functions are pure, safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from mdtree.location import SourceLocation
from mdtree.nodes import (
    Document,
    Emphasis,
    FencedCode,
    FootnoteDef,
    FootnoteRef,
    Heading,
    Image,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strong,
    Text,
)
from mdtree.tokens import FrontmatterToken, FrontmatterTokenKind

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type] = {
    "Document": Document,
    "Heading": Heading,
    "Paragraph": Paragraph,
    "FencedCode": FencedCode,
    "List": List,
    "ListItem": ListItem,
    "FootnoteDef": FootnoteDef,
    "Text": Text,
    "Emphasis": Emphasis,
    "Strong": Strong,
    "Link": Link,
    "Image": Image,
    "FootnoteRef": FootnoteRef,
}


def to_dict(node: Node, *, locations: bool = True) -> dict[str, Any]:
    """Convert an AST node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Recursively serializes child nodes, frontmatter tokens and
    SourceLocation objects.

    Args:
        node: Any mdtree AST node.
        locations: Include ``location`` fields. With False the result
            describes structure only, so two parses of differently laid
            out text can be compared.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        if f.name == "location" and not locations:
            continue
        value = getattr(node, f.name)
        result[f.name] = _serialize_value(value, locations)

    return result


def _serialize_value(value: Any, locations: bool) -> Any:
    """Serialize a single field value."""
    if isinstance(value, Node):
        return to_dict(value, locations=locations)
    if isinstance(value, SourceLocation):
        return {
            "_type": "SourceLocation",
            "lineno": value.lineno,
            "col_offset": value.col_offset,
            "offset": value.offset,
            "end_offset": value.end_offset,
            "end_lineno": value.end_lineno,
            "end_col_offset": value.end_col_offset,
            "source_file": value.source_file,
        }
    if isinstance(value, FrontmatterToken):
        return {
            "_type": "FrontmatterToken",
            "kind": value.kind.name,
            "text": value.text,
            "indent": value.indent,
            "lineno": value.lineno,
            "offset": value.offset,
            "end_offset": value.end_offset,
            "source_file": value.source_file,
        }
    if isinstance(value, tuple):
        return [_serialize_value(item, locations) for item in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed AST node from a dict.

    Uses the ``_type`` discriminator to determine the node class.
    Recursively deserializes child nodes and SourceLocation objects.
    Nodes serialized without locations get ``SourceLocation.unknown()``.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed AST node (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            if f.name == "location":
                kwargs["location"] = SourceLocation.unknown()
            continue
        kwargs[f.name] = _deserialize_value(data[f.name])

    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "SourceLocation":
            return SourceLocation(
                lineno=value["lineno"],
                col_offset=value["col_offset"],
                offset=value.get("offset", 0),
                end_offset=value.get("end_offset", 0),
                end_lineno=value.get("end_lineno"),
                end_col_offset=value.get("end_col_offset"),
                source_file=value.get("source_file"),
            )
        if type_name == "FrontmatterToken":
            return FrontmatterToken(
                kind=FrontmatterTokenKind[value["kind"]],
                text=value["text"],
                indent=value["indent"],
                lineno=value["lineno"],
                offset=value["offset"],
                end_offset=value["end_offset"],
                source_file=value.get("source_file"),
            )
        if type_name is not None:
            return from_dict(value)
        return value
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(doc: Document, *, indent: int | None = None, locations: bool = True) -> str:
    """Serialize a Document AST to a JSON string.

    Output is deterministic (sorted keys) for cache-key stability.

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).
        locations: Include node locations.

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(doc, locations=locations), sort_keys=True, indent=indent)


def from_json(data: str) -> Document:
    """Deserialize a Document AST from a JSON string.

    Args:
        data: JSON string (as produced by to_json).

    Returns:
        Document AST node.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    raw = json.loads(data)
    node = from_dict(raw)
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node
