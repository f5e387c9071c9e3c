# topmark:header:start
#
#   project      : ActorSchema
#   file         : literals.py
#   file_relpath : src/actorschema/engine/literals.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Restricted literal expressions used in JSDoc tag values.

Evaluable tags such as ``@default`` or ``@enumTitles`` carry literal values
written in TypeScript syntax. This module parses them without executing code.
The accepted language is a JSON superset:

- strings in single, double or back quotes (no ``${...}`` interpolation);
- numbers with an optional sign, fraction and exponent;
- ``true``, ``false``, ``null`` and ``undefined`` (both null-ish map to ``None``);
- arrays and objects, with trailing commas and unquoted object keys;
- bare identifiers (``admin``, ``en-US``), read as strings.

Anything else (calls, operators, spread) is a `LiteralSyntaxError`.
"""

from __future__ import annotations

import json
import re
from typing import Any, Final

_NUMBER_RE: Final[re.Pattern[str]] = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_IDENT_RE: Final[re.Pattern[str]] = re.compile(r"[A-Za-z_$][\w$.\-]*")

_KEYWORDS: Final[dict[str, Any]] = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": None,
}

_ESCAPES: Final[dict[str, str]] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


class LiteralSyntaxError(ValueError):
    """Raised when a tag value is not a literal expression."""

    def __init__(self, message: str, text: str, pos: int) -> None:
        self.text: str = text
        self.pos: int = pos
        super().__init__(f"{message} at offset {pos}")


class _LiteralParser:
    """Recursive-descent parser over a single literal expression."""

    def __init__(self, text: str) -> None:
        self.text: str = text
        self.pos: int = 0

    def error(self, message: str) -> LiteralSyntaxError:
        return LiteralSyntaxError(message, self.text, self.pos)

    def skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def peek(self) -> str:
        self.skip_ws()
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def expect(self, char: str) -> None:
        if self.peek() != char:
            found: str = self.peek() or "end of input"
            raise self.error(f"Expected {char!r}, found {found!r}")
        self.pos += 1

    def parse(self) -> Any:
        value: Any = self.parse_value()
        if self.peek():
            raise self.error(f"Unexpected trailing text {self.text[self.pos :]!r}")
        return value

    def parse_value(self) -> Any:
        char: str = self.peek()
        if not char:
            raise self.error("Expected a value, found end of input")
        if char == "{":
            return self.parse_object()
        if char == "[":
            return self.parse_array()
        if char in "'\"`":
            return self.parse_string()
        match = _NUMBER_RE.match(self.text, self.pos)
        if match:
            return self.parse_number(match)
        match = _IDENT_RE.match(self.text, self.pos)
        if match:
            self.pos = match.end()
            word: str = match.group(0)
            if self.peek() == "(":
                raise self.error(f"Function calls are not literals ({word}(...))")
            return _KEYWORDS.get(word, word)
        raise self.error(f"Unexpected character {char!r}")

    def parse_number(self, match: re.Match[str]) -> int | float:
        self.pos = match.end()
        token: str = match.group(0)
        if _IDENT_RE.match(self.text, self.pos):
            raise self.error(f"Invalid number {token + self.text[self.pos]!r}")
        if any(c in token for c in ".eE"):
            return float(token)
        return int(token)

    def parse_string(self) -> str:
        quote: str = self.text[self.pos]
        self.pos += 1
        out: list[str] = []
        while self.pos < len(self.text):
            char: str = self.text[self.pos]
            if char == quote:
                self.pos += 1
                return "".join(out)
            if char == "\\":
                self.pos += 1
                if self.pos >= len(self.text):
                    break
                esc: str = self.text[self.pos]
                if esc == "u":
                    digits: str = self.text[self.pos + 1 : self.pos + 5]
                    if len(digits) != 4 or not all(c in "0123456789abcdefABCDEF" for c in digits):
                        raise self.error("Invalid unicode escape")
                    out.append(chr(int(digits, 16)))
                    self.pos += 5
                    continue
                out.append(_ESCAPES.get(esc, esc))
                self.pos += 1
                continue
            if quote == "`" and self.text.startswith("${", self.pos):
                raise self.error("Template interpolation is not a literal")
            out.append(char)
            self.pos += 1
        raise self.error("Unterminated string")

    def parse_array(self) -> list[Any]:
        self.expect("[")
        items: list[Any] = []
        while self.peek() != "]":
            items.append(self.parse_value())
            if self.peek() == ",":
                self.pos += 1
                continue
            if self.peek() != "]":
                raise self.error("Expected ',' or ']' in array")
        self.expect("]")
        return items

    def parse_object(self) -> dict[str, Any]:
        self.expect("{")
        obj: dict[str, Any] = {}
        while self.peek() != "}":
            key: str = self.parse_key()
            self.expect(":")
            obj[key] = self.parse_value()
            if self.peek() == ",":
                self.pos += 1
                continue
            if self.peek() != "}":
                raise self.error("Expected ',' or '}' in object")
        self.expect("}")
        return obj

    def parse_key(self) -> str:
        char: str = self.peek()
        if char in ("'", '"', "`"):
            return self.parse_string()
        match = _NUMBER_RE.match(self.text, self.pos) or _IDENT_RE.match(self.text, self.pos)
        if not match:
            raise self.error("Expected an object key")
        self.pos = match.end()
        return match.group(0)


def parse_literal(text: str) -> Any:
    """Parse ``text`` as a single literal expression.

    Args:
        text: The raw literal text, e.g. ``"['a', 'b']"`` or ``"{ maxItems: 10 }"``.

    Returns:
        The Python value (``str``, ``int``, ``float``, ``bool``, ``None``,
        ``list`` or ``dict``).

    Raises:
        LiteralSyntaxError: If ``text`` is empty or not a literal expression.
    """
    return _LiteralParser(text.strip()).parse()


def format_literal(value: Any) -> str:
    """Render ``value`` as literal text that `parse_literal` reads back unchanged."""
    return json.dumps(value, ensure_ascii=False)
