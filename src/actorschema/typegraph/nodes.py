# topmark:header:start
#
#   project      : ActorSchema
#   file         : nodes.py
#   file_relpath : src/actorschema/typegraph/nodes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolved type nodes.

The reader resolves every type expression into exactly one of these classes,
so the walker can dispatch on the node class instead of probing type flags:

- `EnumNode`: enum declarations, enum member references and unions of literals;
- `ObjectNode`: interfaces and object literal types;
- `ArrayNode`: ``T[]``, ``Array<T>``, ``ReadonlyArray<T>``;
- `PrimitiveNode`: ``string``, ``number``, ``boolean`` and any other name that
  is not declared in the program (``any``, ``Date``, imported types, ...);
- `AnyObjectNode`: ``object``, ``Record<K, V>`` and index-signature-only types;
- `UnsupportedNode`: shapes the engine rejects (functions, tuples,
  intersections, generics, recursive references).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class PrimitiveNode:
    """A primitive or otherwise opaque named type."""

    name: str


@dataclass(frozen=True)
class EnumNode:
    """A closed set of literal values, in declaration order."""

    values: tuple[Any, ...]
    name: str | None = None


@dataclass(frozen=True)
class Member:
    """A property of an object type.

    Attributes:
        name: Property name as declared (quotes removed).
        type: Resolved type of the property.
        optional: True if declared with ``?``.
        doc: Raw JSDoc block preceding the property, if any.
    """

    name: str
    type: TypeNode
    optional: bool = False
    doc: str | None = None


@dataclass(frozen=True)
class ObjectNode:
    """An object type with its own (and inherited) members."""

    members: tuple[Member, ...]
    name: str | None = None


@dataclass(frozen=True)
class ArrayNode:
    """An array of ``element``."""

    element: TypeNode


@dataclass(frozen=True)
class AnyObjectNode:
    """An object of unknown shape."""

    spelling: str = "object"


@dataclass(frozen=True)
class UnsupportedNode:
    """A type the conversion engine cannot represent."""

    text: str
    reason: str


TypeNode = Union[PrimitiveNode, EnumNode, ObjectNode, ArrayNode, AnyObjectNode, UnsupportedNode]
