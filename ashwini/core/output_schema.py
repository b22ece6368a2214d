"""
Output Schema Descriptors

Declarative description of the JSON shape a prompt expects back from Gemini.
A descriptor is a tree of ObjectNode / ArrayNode / StringNode / EnumNode.
Descriptions only steer the model; nothing here validates a response
(see ``ashwini.core.validation`` for the caller-side check).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Union


@dataclass(frozen=True)
class StringNode:
    """A free-text leaf."""

    description: str = ""

    def to_vertex_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "STRING"}
        if self.description:
            schema["description"] = self.description
        return schema


@dataclass(frozen=True)
class EnumNode:
    """A string leaf restricted to a fixed set of literal tokens."""

    values: tuple[str, ...]
    description: str = ""

    def to_vertex_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "STRING", "enum": list(self.values)}
        if self.description:
            schema["description"] = self.description
        return schema


@dataclass(frozen=True)
class ArrayNode:
    """A homogeneous list of ``items``."""

    items: "SchemaNode"
    description: str = ""

    def to_vertex_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "type": "ARRAY",
            "items": self.items.to_vertex_schema(),
        }
        if self.description:
            schema["description"] = self.description
        return schema


@dataclass(frozen=True)
class ObjectNode:
    """A mapping of named fields, some of which are required."""

    fields: dict[str, "SchemaNode"]
    required: tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        unknown = [name for name in self.required if name not in self.fields]
        if unknown:
            raise ValueError(f"Required fields not declared: {unknown}")

    def to_vertex_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "type": "OBJECT",
            "properties": {
                name: node.to_vertex_schema()
                for name, node in self.fields.items()
            },
        }
        if self.required:
            schema["required"] = list(self.required)
        if self.description:
            schema["description"] = self.description
        return schema


SchemaNode = Union[ObjectNode, ArrayNode, StringNode, EnumNode]


def enum_fields(node: SchemaNode, path: str = "") -> Iterator[tuple[str, tuple[str, ...]]]:
    """Yield ``(path, allowed_values)`` for every EnumNode in the tree.

    Paths use dots for object fields and ``[]`` for array items, e.g.
    ``diabetesImpact.level`` or ``items[].kind``.
    """
    if isinstance(node, EnumNode):
        yield path, node.values
    elif isinstance(node, ArrayNode):
        yield from enum_fields(node.items, f"{path}[]")
    elif isinstance(node, ObjectNode):
        for name, child in node.fields.items():
            child_path = f"{path}.{name}" if path else name
            yield from enum_fields(child, child_path)
