# topmark:header:start
#
#   project      : ActorSchema
#   file         : test_normalizer.py
#   file_relpath : tests/engine/test_normalizer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Tests for schema canonicalization, including hypothesis property tests."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from hypothesis import HealthCheck, given, settings

from actorschema.engine.normalizer import normalize_schema
from tests.strategies_actorschema import s_root_schema, s_schema_tree


def iter_nodes(node: dict[str, Any]) -> Iterator[dict[str, Any]]:
    """Yield ``node`` and every nested schema node."""
    yield node
    for child in (node.get("properties") or {}).values():
        if isinstance(child, dict):
            yield from iter_nodes(child)
    items: Any = node.get("items")
    if isinstance(items, dict):
        yield from iter_nodes(items)


def test_normalize_drops_none_and_orders_keys() -> None:
    """Absent values disappear and the leading keys come first."""
    raw: dict[str, Any] = {
        "properties": {
            "b": {"editor": "number", "default": None, "type": "integer", "title": "B"},
        },
        "required": ["b", "b", "ghost"],
        "type": "object",
        "title": None,
        "description": "Root",
    }
    out: dict[str, Any] = normalize_schema(raw)
    assert list(out) == ["type", "description", "properties", "required"]
    assert out["required"] == ["b"]
    assert list(out["properties"]["b"]) == ["title", "type", "editor"]
    # The input is left untouched.
    assert raw["required"] == ["b", "b", "ghost"]


def test_required_is_removed_from_non_object_nodes() -> None:
    """Only object nodes keep ``required``."""
    out: dict[str, Any] = normalize_schema(
        {"type": "array", "required": ["x"], "items": {"type": "string", "required": []}}
    )
    assert out == {"type": "array", "items": {"type": "string"}}


def test_items_that_are_not_schemas_are_kept_verbatim() -> None:
    """``items`` from an ``@items`` tag may be any literal value."""
    out: dict[str, Any] = normalize_schema({"type": "array", "items": {"maxLength": None}})
    assert out["items"] == {"maxLength": None}


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=200)
@given(tree=s_schema_tree)
def test_normalize_is_idempotent(tree: dict[str, Any]) -> None:
    """normalize(normalize(t)) == normalize(t), including key order."""
    once: dict[str, Any] = normalize_schema(tree)
    twice: dict[str, Any] = normalize_schema(once)
    assert twice == once
    assert list(twice) == list(once)


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=200)
@given(tree=s_root_schema)
def test_normalized_invariants(tree: dict[str, Any]) -> None:
    """No ``None`` values; ``required`` only on objects, unique and a subset of properties."""
    for node in iter_nodes(normalize_schema(tree)):
        assert all(value is not None for value in node.values())
        if node.get("type") != "object":
            assert "required" not in node
            continue
        required: list[str] = node.get("required", [])
        assert len(required) == len(set(required))
        assert set(required) <= set(node.get("properties", {}))
