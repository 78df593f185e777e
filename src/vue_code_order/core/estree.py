"""
ESTree syntax tree model.

The linter never parses source text. It consumes the tree produced by an
external parser (vue-eslint-parser, @typescript-eslint/parser, espree, ...)
decoded from JSON into plain dictionaries. This module turns those
dictionaries into tagged ``Node`` objects and provides a generic visitor in
the spirit of ``ast.NodeVisitor``.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

# Keys that hold positional data, back references or comment attachments
# rather than syntax children
NON_CHILD_KEYS = frozenset(
    {
        "parent",
        "loc",
        "range",
        "start",
        "end",
        "comments",
        "tokens",
        "leadingComments",
        "trailingComments",
        "innerComments",
        "templateBody",
    }
)


@dataclass
class Node:
    """A single ESTree node: a type tag plus its raw properties."""

    type: str
    fields: dict[str, Any] = field(default_factory=dict)

    def __getattr__(self, name: str) -> Any:
        # Dataclass machinery and copy/pickle probe dunder attributes
        if name.startswith("__") or name == "fields":
            raise AttributeError(name)
        return self.fields.get(name)

    def get(self, name: str, default: Any = None) -> Any:
        """Return a property of the node, or ``default`` when absent."""
        return self.fields.get(name, default)

    def is_type(self, *types: str) -> bool:
        """Check the node type against one or more type names."""
        return self.type in types

    @property
    def start_offset(self) -> int | None:
        """Start offset of the node in the source, if the parser recorded it."""
        node_range = self.fields.get("range")
        if isinstance(node_range, (list, tuple)) and len(node_range) == 2:
            return node_range[0]
        start = self.fields.get("start")
        return start if isinstance(start, int) else None

    @property
    def end_offset(self) -> int | None:
        """End offset of the node in the source, if the parser recorded it."""
        node_range = self.fields.get("range")
        if isinstance(node_range, (list, tuple)) and len(node_range) == 2:
            return node_range[1]
        end = self.fields.get("end")
        return end if isinstance(end, int) else None

    @property
    def line(self) -> int | None:
        loc = self.fields.get("loc")
        if isinstance(loc, dict):
            return (loc.get("start") or {}).get("line")
        return None

    @property
    def column(self) -> int | None:
        loc = self.fields.get("loc")
        if isinstance(loc, dict):
            return (loc.get("start") or {}).get("column")
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Node":
        """Build a node tree from a decoded ESTree dictionary.

        Nested dictionaries carrying a ``type`` key become nodes, lists are
        converted element-wise, and everything else is kept as-is. Position
        data (``loc``, ``range``) is kept raw.

        Args:
            data: ESTree node as decoded from JSON

        Returns:
            Node: The converted node

        Raises:
            ValueError: If ``data`` is not an ESTree node dictionary
        """
        if not isinstance(data, dict) or not isinstance(data.get("type"), str):
            raise ValueError("ESTree node must be a dictionary with a 'type' key")

        fields = {}
        for key, value in data.items():
            if key == "type" or key == "parent":
                continue
            if key in ("loc", "range"):
                fields[key] = value
            else:
                fields[key] = _convert(value)
        return cls(type=data["type"], fields=fields)


def _convert(value: Any) -> Any:
    if isinstance(value, Node):
        return value
    if isinstance(value, dict):
        if isinstance(value.get("type"), str):
            return Node.from_dict(value)
        return {key: _convert(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_convert(item) for item in value]
    return value


def ensure_node(value: "Node | dict[str, Any]") -> Node:
    """Accept either a ``Node`` or a raw ESTree dictionary."""
    if isinstance(value, Node):
        return value
    return Node.from_dict(value)


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yield the direct syntax children of a node, in property order."""
    for key, value in node.fields.items():
        if key in NON_CHILD_KEYS:
            continue
        if isinstance(value, Node):
            yield value
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, Node):
                    yield item


class NodeVisitor:
    """Generic ESTree visitor.

    Dispatches to ``visit_<NodeType>`` when such a method exists and to
    ``generic_visit`` otherwise, exactly like ``ast.NodeVisitor``.
    """

    def visit(self, node: Node) -> Any:
        method = getattr(self, f"visit_{node.type}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: Node) -> None:
        for child in iter_child_nodes(node):
            self.visit(child)
