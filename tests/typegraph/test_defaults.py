# topmark:header:start
#
#   project      : ActorSchema
#   file         : test_defaults.py
#   file_relpath : tests/typegraph/test_defaults.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for destructuring-default discovery."""

from __future__ import annotations

from collections.abc import Mapping

from actorschema.typegraph.defaults import DestructuredDefault, scan_destructuring_defaults


def flat(found: Mapping[str, DestructuredDefault]) -> dict[str, str | None]:
    """Return the top-level default expressions only."""
    return {name: entry.expression for name, entry in found.items()}


def test_generic_call_with_nullish_fallback() -> None:
    """The usual ``Actor.getInput<Input>()`` pattern is recognized."""
    found = scan_destructuring_defaults(
        "const { query, maxItems = 10, mode = 'fast' } = (await Actor.getInput<Input>()) ?? {};",
        "Input",
    )
    assert flat(found) == {"query": None, "maxItems": "10", "mode": "'fast'"}


def test_annotated_pattern_and_structured_defaults() -> None:
    """``{ ... }: Input`` patterns count; array and object defaults keep their text."""
    found = scan_destructuring_defaults(
        """
        function main({ urls = ['https://a.b'], opts = { depth: 2 } }: Input) {}
        """,
        "Input",
    )
    assert flat(found) == {"urls": "['https://a.b']", "opts": "{ depth: 2 }"}


def test_nested_patterns_renames_and_rest() -> None:
    """Nested patterns are kept under their property; renames and rest are tolerated."""
    found = scan_destructuring_defaults(
        """
        const input = await Actor.getInput<Input>();
        const {
            proxy: { useApify = true, groups = [] } = {},
            label: tag = 'none',
            ...rest
        } = input ?? {};
        """,
        "Input",
    )
    assert flat(found) == {"proxy": "{}", "label": "'none'"}
    assert flat(found["proxy"].members) == {"useApify": "true", "groups": "[]"}


def test_right_hand_side_ends_at_the_next_statement() -> None:
    """A statement without a semicolon ends at the line break."""
    found = scan_destructuring_defaults(
        "const { a = 1 } = await Actor.getInput<Input>()\nconsole.log(a)\n", "Input"
    )
    assert flat(found) == {"a": "1"}


def test_unrelated_patterns_are_ignored() -> None:
    """Destructurings of other values, and other types, are not defaults."""
    found = scan_destructuring_defaults(
        """
        const { a = 1 } = other;
        const { b = 2 } = await Actor.getInput<OtherInput>();
        type Input = { a: number };
        """,
        "Input",
    )
    assert dict(found) == {}


def test_first_pattern_wins() -> None:
    """Patterns found earlier in the source take precedence."""
    found = scan_destructuring_defaults(
        "const { a = 1 } = await Actor.getInput<Input>();\n"
        "const { a = 2, b = 3 } = await Actor.getInput<Input>();\n",
        "Input",
    )
    assert flat(found) == {"a": "1", "b": "3"}
