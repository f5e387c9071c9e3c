# topmark:header:start
#
#   project      : ActorSchema
#   file         : test_literals.py
#   file_relpath : tests/engine/test_literals.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for the restricted literal parser used by evaluable JSDoc tags."""

from __future__ import annotations

from typing import Any

import pytest

from actorschema.engine.literals import (
    LiteralSyntaxError,
    format_literal,
    parse_literal,
)
from tests.conftest import parametrize


@parametrize(
    "text, expected",
    [
        ("'John'", "John"),
        ('"double"', "double"),
        ("`back`", "back"),
        ("42", 42),
        ("-3", -3),
        ("2.5", 2.5),
        ("1e3", 1000.0),
        ("true", True),
        ("false", False),
        ("null", None),
        ("undefined", None),
        ("admin", "admin"),
        ("en-US", "en-US"),
        ("[1, 2, 3,]", [1, 2, 3]),
        ("['a', \"b\"]", ["a", "b"]),
        (
            "{ maxItems: 10, 'proxy-group': 'RESIDENTIAL' }",
            {"maxItems": 10, "proxy-group": "RESIDENTIAL"},
        ),
        ("[{ url: 'https://apify.com' }]", [{"url": "https://apify.com"}]),
        ("'it\\'s'", "it's"),
        ("'\\u00e9t\\u00e9'", "été"),
    ],
)
def test_parse_literal_values(text: str, expected: Any) -> None:
    """Literal expressions parse to the matching Python values."""
    assert parse_literal(text) == expected


@parametrize(
    "text",
    [
        "",
        "process.env.FOO()",
        "1 + 2",
        "[1, 2",
        "{ a: 1 b: 2 }",
        "'unterminated",
        "`hello ${name}`",
        "...rest",
        "12abc",
    ],
)
def test_parse_literal_rejects_expressions(text: str) -> None:
    """Anything beyond a literal is a syntax error, never evaluated."""
    with pytest.raises(LiteralSyntaxError):
        parse_literal(text)


def test_syntax_error_reports_offset() -> None:
    """The error carries the offending text and position."""
    with pytest.raises(LiteralSyntaxError) as info:
        parse_literal("[1, 2 3]")
    assert info.value.text == "[1, 2 3]"
    assert info.value.pos > 0
    assert "offset" in str(info.value)


def test_format_literal_reads_back() -> None:
    """Formatted values parse back unchanged."""
    value: dict[str, Any] = {"urls": ["https://a.b/ü"], "max": 3, "deep": {"ok": True}, "n": None}
    assert parse_literal(format_literal(value)) == value
