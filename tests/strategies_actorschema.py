# topmark:header:start
#
#   project      : ActorSchema
#   file         : strategies_actorschema.py
#   file_relpath : tests/strategies_actorschema.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for generating raw input schema trees.

The generated trees are deliberately *not* canonical: they carry ``None``
placeholders, duplicated or unknown ``required`` names, ``required`` lists on
non-object nodes and keys in arbitrary order, so normalizer properties are
exercised on the shapes the walker and hand-written JSON files produce.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from hypothesis import strategies as st

Draw = Callable[[st.SearchStrategy[Any]], Any]

SCALAR_TYPES: tuple[str, ...] = ("string", "integer", "boolean")
EDITORS: tuple[str, ...] = ("textfield", "number", "checkmark", "select", "json", "stringList")

s_name: st.SearchStrategy[str] = st.text(
    alphabet=st.characters(min_codepoint=97, max_codepoint=122), min_size=1, max_size=8
)
s_text: st.SearchStrategy[str | None] = st.none() | st.text(max_size=20)
s_json_scalar: st.SearchStrategy[Any] = (
    st.none() | st.booleans() | st.integers(-1000, 1000) | st.text(max_size=10)
)


@st.composite
def s_scalar_node(draw: Draw) -> dict[str, Any]:
    """Generate a raw scalar (or enum) node, possibly with a stray ``required``."""
    node: dict[str, Any] = {
        "description": draw(s_text),
        "type": draw(st.sampled_from(SCALAR_TYPES)),
        "title": draw(s_text),
        "editor": draw(st.none() | st.sampled_from(EDITORS)),
        "default": draw(s_json_scalar),
        "prefill": draw(s_json_scalar),
    }
    if draw(st.booleans()):
        values: list[str] = draw(st.lists(s_name, min_size=1, max_size=4, unique=True))
        node["type"] = "string"
        node["enum"] = values
        if draw(st.booleans()):
            node["enumTitles"] = [v.upper() for v in values]
    if draw(st.booleans()):
        node["required"] = draw(st.lists(s_name, max_size=3))
    return node


def s_object_node(children: st.SearchStrategy[dict[str, Any]]) -> st.SearchStrategy[dict[str, Any]]:
    """Generate a raw object node whose properties are drawn from ``children``."""

    @st.composite
    def _object(draw: Draw) -> dict[str, Any]:
        properties: dict[str, Any] = draw(st.dictionaries(s_name, children, max_size=4))
        names: list[str] = list(properties)
        required: list[str] = draw(
            st.lists(st.sampled_from(names) if names else s_name, max_size=6)
        )
        required += draw(st.lists(s_name, max_size=2))
        node: dict[str, Any] = {
            "properties": properties,
            "required": required,
            "type": "object",
            "title": draw(s_text),
            "sectionCaption": draw(s_text),
        }
        if draw(st.booleans()):
            node["editor"] = "json"
        return node

    return _object()


def s_array_node(children: st.SearchStrategy[dict[str, Any]]) -> st.SearchStrategy[dict[str, Any]]:
    """Generate a raw array node with a schema-shaped ``items``."""
    return st.fixed_dictionaries(
        {
            "type": st.just("array"),
            "items": children,
            "uniqueItems": st.none() | st.booleans(),
            "required": st.none() | st.lists(s_name, max_size=2),
        }
    )


s_schema_tree: st.SearchStrategy[dict[str, Any]] = st.recursive(
    s_scalar_node(),
    lambda children: s_object_node(children) | s_array_node(children),
    max_leaves=12,
)

s_root_schema: st.SearchStrategy[dict[str, Any]] = s_object_node(s_schema_tree)
