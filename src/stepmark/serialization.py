"""JSON round-trip serialization for stepmark nodes.

A parsed Document can be handed to another process (a browser front end, a
worker) or stored next to its step file. Each node becomes a plain dict tagged
with ``_type``; block locations travel as ``SourceLocation`` tagged dicts.

Example:
    >>> from stepmark import parse
    >>> doc = parse("# Step 1 -- Install")
    >>> from_json(to_json(doc)) == doc
    True

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from stepmark.location import SourceLocation
from stepmark.nodes import (
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
    Table,
    Text,
)

_TYPE_KEY = "_type"
_LOCATION_TYPE = "SourceLocation"

_SPAN_TYPES = (Text, Code, Bold, Italic, Link)
_BLOCK_TYPES = (Heading, Paragraph, List, Table, CodeBlock, Rule)

_NODE_TYPES: dict[str, type[Node]] = {
    cls.__name__: cls
    for cls in (
        Document,
        Heading,
        Paragraph,
        List,
        Table,
        CodeBlock,
        Rule,
        Text,
        Code,
        Bold,
        Italic,
        Link,
    )
}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node and everything below it to JSON-compatible values.

    Tuples become lists; strings, ints, bools and None pass through.
    """
    data: dict[str, Any] = {_TYPE_KEY: type(node).__name__}
    data.update((f.name, _encode(getattr(node, f.name))) for f in fields(node))
    return data


def _encode(value: Any) -> Any:
    match value:
        case Node():
            return to_dict(value)
        case SourceLocation(lineno=lineno, end_lineno=end_lineno, source_file=source_file):
            return {
                _TYPE_KEY: _LOCATION_TYPE,
                "lineno": lineno,
                "end_lineno": end_lineno,
                "source_file": source_file,
            }
        case tuple():
            return [_encode(item) for item in value]
        case _:
            return value


def from_dict(data: dict[str, Any]) -> Node:
    """Rebuild a node from the output of to_dict().

    Fields absent from ``data`` take the node's defaults; unknown keys are
    ignored.

    Raises:
        ValueError: If ``_type`` is missing or names no known node, or the
            remaining fields do not fit the node.

    """
    type_name = data.get(_TYPE_KEY)
    if type_name is None:
        msg = f"Missing '{_TYPE_KEY}' field in serialized node"
        raise ValueError(msg)
    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs = {f.name: _decode(data[f.name]) for f in fields(node_cls) if f.name in data}
    try:
        node = node_cls(**kwargs)
    except TypeError as e:
        msg = f"Invalid fields for {type_name}: {e}"
        raise ValueError(msg) from e

    problem = _shape_problem(node)
    if problem:
        msg = f"Invalid fields for {type_name}: {problem}"
        raise ValueError(msg)
    return node


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_spans(value: Any) -> bool:
    return isinstance(value, tuple) and all(isinstance(v, _SPAN_TYPES) for v in value)


def _is_cells(value: Any) -> bool:
    return isinstance(value, tuple) and all(_is_spans(cell) for cell in value)


def _shape_problem(node: Node) -> str:
    """Describe the first field whose value the node type cannot hold, or "".

    Nested nodes were checked when they were decoded, so only this level's
    containers and scalars are inspected.
    """
    if isinstance(node, BlockNode) and not isinstance(node.location, SourceLocation):
        return "location must be a SourceLocation"
    match node:
        case Document(children=children):
            if not isinstance(children, tuple) or not all(
                isinstance(child, _BLOCK_TYPES) for child in children
            ):
                return "children must be a list of block nodes"
        case Heading(level=level, children=children):
            if not _is_int(level) or not 1 <= level <= 6:
                return f"level must be an integer from 1 to 6, got {level!r}"
            if not _is_spans(children):
                return "children must be a list of span nodes"
        case Paragraph(children=children):
            if not _is_spans(children):
                return "children must be a list of span nodes"
        case List(items=items, ordered=ordered):
            if not _is_cells(items):
                return "items must be lists of span nodes"
            if not isinstance(ordered, bool):
                return "ordered must be a boolean"
        case Table(header=header, rows=rows):
            if not _is_cells(header):
                return "header cells must be lists of span nodes"
            if not isinstance(rows, tuple) or not all(_is_cells(row) for row in rows):
                return "row cells must be lists of span nodes"
        case CodeBlock(code=code) | Code(code=code):
            if not isinstance(code, str):
                return "code must be a string"
        case Text(content=content) | Bold(content=content) | Italic(content=content):
            if not isinstance(content, str):
                return "content must be a string"
        case Link(text=text, url=url):
            if not isinstance(text, str) or not isinstance(url, str):
                return "text and url must be strings"
    return ""


def _decode(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(_decode(item) for item in value)
    if not isinstance(value, dict):
        return value
    if value.get(_TYPE_KEY) == _LOCATION_TYPE:
        return _decode_location(value)
    if _TYPE_KEY in value:
        return from_dict(value)
    return value


def _decode_location(value: dict[str, Any]) -> SourceLocation:
    lineno = value.get("lineno")
    end_lineno = value.get("end_lineno")
    source_file = value.get("source_file")
    if not _is_int(lineno):
        msg = f"SourceLocation needs an integer 'lineno', got {lineno!r}"
        raise ValueError(msg)
    if end_lineno is not None and not _is_int(end_lineno):
        msg = f"SourceLocation 'end_lineno' must be an integer or null, got {end_lineno!r}"
        raise ValueError(msg)
    if source_file is not None and not isinstance(source_file, str):
        msg = f"SourceLocation 'source_file' must be a string or null, got {source_file!r}"
        raise ValueError(msg)
    return SourceLocation(lineno=lineno, end_lineno=end_lineno, source_file=source_file)


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document to JSON with sorted keys.

    Identical documents always produce identical strings. Non-ASCII text such
    as em dashes is written as-is.
    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(data: str) -> Document:
    """Parse JSON produced by to_json() back into a Document.

    Raises:
        ValueError: If the JSON is invalid or does not describe a Document.

    """
    raw = json.loads(data)
    if not isinstance(raw, dict):
        msg = f"Expected a JSON object, got {type(raw).__name__}"
        raise ValueError(msg)
    node = from_dict(raw)
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node
