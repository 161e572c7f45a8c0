"""Generic JSON trees for observed request bodies.

A decoded body is converted once into :class:`JsonObject`,
:class:`JsonArray` and :class:`JsonScalar` nodes, tagged by
:class:`NodeKind`.  Each node lists the dotted leaf paths it contributes,
so flattening never inspects raw Python types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from collections.abc import Iterator


class NodeKind(StrEnum):
    OBJECT = "object"
    ARRAY = "array"
    SCALAR = "scalar"


class JsonNode:
    """Base class of the body tree variants."""

    kind: ClassVar[NodeKind]

    def leaves(self, prefix: str) -> Iterator[str]:
        raise NotImplementedError


@dataclass(frozen=True)
class JsonScalar(JsonNode):
    value: Any = None

    kind: ClassVar[NodeKind] = NodeKind.SCALAR

    def leaves(self, prefix: str) -> Iterator[str]:
        yield prefix


@dataclass(frozen=True)
class JsonObject(JsonNode):
    fields: dict[str, JsonNode] = field(default_factory=dict)

    kind: ClassVar[NodeKind] = NodeKind.OBJECT

    def leaves(self, prefix: str) -> Iterator[str]:
        for name, child in self.fields.items():
            yield from child.leaves(f"{prefix}.{name}" if prefix else name)


@dataclass(frozen=True)
class JsonArray(JsonNode):
    items: list[JsonNode] = field(default_factory=list)

    kind: ClassVar[NodeKind] = NodeKind.ARRAY

    def leaves(self, prefix: str) -> Iterator[str]:
        # Containers flatten under the array's own path; scalar elements
        # (or an empty array) count once as a leaf at that path.
        scalar = not self.items
        for item in self.items:
            if item.kind is NodeKind.SCALAR:
                scalar = True
            else:
                yield from item.leaves(prefix)
        if scalar:
            yield prefix


def to_json_node(value: Any) -> JsonNode:
    """Convert a ``json.loads`` result into a :class:`JsonNode` tree."""
    if isinstance(value, dict):
        return JsonObject({str(k): to_json_node(v) for k, v in value.items()})
    if isinstance(value, list):
        return JsonArray([to_json_node(v) for v in value])
    return JsonScalar(value)


def flatten_body(node: JsonNode, root: str = "") -> list[str]:
    """Return the dotted leaf paths of *node* rooted at *root*.

    A path appears once per occurrence, so array elements sharing a path
    are each listed.
    """
    return list(node.leaves(root))
