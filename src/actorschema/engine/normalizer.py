# topmark:header:start
#
#   project      : ActorSchema
#   file         : normalizer.py
#   file_relpath : src/actorschema/engine/normalizer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonicalization of raw schema trees.

`normalize_schema` is the last step of the forward conversion and the first
step before writing a schema file. It works on plain dict trees (as produced by
`SchemaProperty.to_raw` or loaded from JSON) and returns a new tree where:

- fields whose value is ``None`` are removed, at every node;
- ``required`` exists only on ``object`` nodes, lists each name once and only
  names present in the sibling ``properties``;
- keys are ordered ``title, type, description, editor``, then the remaining
  keys in their original order.

The transformation is idempotent.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from actorschema.engine.schema import LEADING_KEYS, Key


def is_schema_node(value: object) -> bool:
    """Return True if ``value`` looks like a schema node (has ``type`` or ``enum``)."""
    return isinstance(value, Mapping) and (Key.TYPE in value or Key.ENUM in value)


def _order_keys(node: dict[str, Any]) -> dict[str, Any]:
    ordered: dict[str, Any] = {key: node[key] for key in LEADING_KEYS if key in node}
    ordered.update((key, value) for key, value in node.items() if key not in ordered)
    return ordered


def _dedupe_required(required: Any, properties: Mapping[str, Any] | None) -> list[str]:
    names: list[str] = []
    if not isinstance(required, (list, tuple)):
        return names
    known: Mapping[str, Any] = properties or {}
    for name in required:
        if name in known and name not in names:
            names.append(name)
    return names


def normalize_schema(node: Mapping[str, Any]) -> dict[str, Any]:
    """Return the canonical form of a raw schema tree.

    Args:
        node: A raw schema node; nested ``properties`` and schema-shaped
            ``items`` are normalized recursively.

    Returns:
        A new, canonical dict tree. ``node`` is left untouched.
    """
    is_object: bool = node.get(Key.TYPE) == "object"
    out: dict[str, Any] = {}

    for key, value in node.items():
        if value is None:
            continue
        if key == Key.PROPERTIES and isinstance(value, Mapping):
            out[key] = {
                name: normalize_schema(prop) if isinstance(prop, Mapping) else prop
                for name, prop in value.items()
                if prop is not None
            }
        elif key == Key.ITEMS and is_schema_node(value):
            out[key] = normalize_schema(value)
        elif key == Key.REQUIRED:
            if not is_object:
                continue
            # Resolved below, once the sibling properties are known.
            out[key] = value
        else:
            out[key] = value

    if Key.REQUIRED in out:
        out[Key.REQUIRED] = _dedupe_required(out[Key.REQUIRED], out.get(Key.PROPERTIES))

    return _order_keys(out)
