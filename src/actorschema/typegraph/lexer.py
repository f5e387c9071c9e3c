# topmark:header:start
#
#   project      : ActorSchema
#   file         : lexer.py
#   file_relpath : src/actorschema/typegraph/lexer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tokenizer for TypeScript source.

The lexer is deliberately small: it recognizes what the declaration reader and
the destructuring scanner need and treats every other character as a single
punctuation token. JSDoc blocks (``/** ... */``) are kept as `TokenKind.DOC`
tokens; ordinary comments are dropped.

String literals end at their closing quote or at the end of the line, so an
unbalanced quote in code the reader does not understand (a regular expression
literal, for instance) cannot swallow the rest of the file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Final

from actorschema.engine.literals import LiteralSyntaxError, parse_literal


class TokenKind(Enum):
    """Token categories."""

    IDENT = "ident"
    NUMBER = "number"
    STRING = "string"
    TEMPLATE = "template"
    PUNCT = "punct"
    DOC = "doc"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source span."""

    kind: TokenKind
    text: str
    start: int
    end: int
    line: int

    def is_punct(self, *chars: str) -> bool:
        """Return True if this is one of the given punctuation tokens."""
        return self.kind is TokenKind.PUNCT and self.text in chars

    def is_ident(self, *names: str) -> bool:
        """Return True if this is an identifier (optionally one of ``names``)."""
        return self.kind is TokenKind.IDENT and (not names or self.text in names)

    @property
    def string_value(self) -> str:
        """Return the unquoted value of a string token."""
        try:
            value = parse_literal(self.text)
        except LiteralSyntaxError:
            return self.text[1:-1]
        return value if isinstance(value, str) else self.text[1:-1]


_IDENT_RE: Final[re.Pattern[str]] = re.compile(r"[A-Za-z_$][\w$]*")
_NUMBER_RE: Final[re.Pattern[str]] = re.compile(
    r"0[xX][0-9a-fA-F_]+|0[bB][01_]+|(?:\d[\d_]*\.?[\d_]*|\.\d[\d_]*)(?:[eE][+-]?\d+)?n?"
)
# Multi-character operators the reader cares about.
_OPERATORS: Final[tuple[str, ...]] = ("...", "=>", "?.", "??", "===", "!==", "==", "!=")


def _scan_string(source: str, pos: int) -> int:
    quote: str = source[pos]
    i: int = pos + 1
    while i < len(source):
        char: str = source[i]
        if char == "\\":
            i += 2
            continue
        if char == quote:
            return i + 1
        if char == "\n":
            return i
        i += 1
    return i


def _scan_template(source: str, pos: int) -> int:
    i: int = pos + 1
    depth: int = 0
    while i < len(source):
        char: str = source[i]
        if char == "\\":
            i += 2
            continue
        if depth == 0 and char == "`":
            return i + 1
        if source.startswith("${", i):
            depth += 1
            i += 2
            continue
        if depth and char == "}":
            depth -= 1
        i += 1
    return i


def tokenize(source: str) -> list[Token]:
    """Split ``source`` into tokens, ending with a single `TokenKind.EOF` token.

    Args:
        source: TypeScript source text.

    Returns:
        The token list.
    """
    tokens: list[Token] = []
    pos: int = 0
    line: int = 1
    length: int = len(source)

    def emit(kind: TokenKind, end: int) -> None:
        nonlocal pos, line
        tokens.append(Token(kind, source[pos:end], pos, end, line))
        line += source.count("\n", pos, end)
        pos = end

    while pos < length:
        char: str = source[pos]
        if char.isspace():
            if char == "\n":
                line += 1
            pos += 1
        elif source.startswith("/**", pos) and not source.startswith("/**/", pos):
            end = source.find("*/", pos + 3)
            emit(TokenKind.DOC, length if end < 0 else end + 2)
        elif source.startswith("/*", pos):
            end = source.find("*/", pos + 2)
            end = length if end < 0 else end + 2
            line += source.count("\n", pos, end)
            pos = end
        elif source.startswith("//", pos):
            end = source.find("\n", pos)
            pos = length if end < 0 else end
        elif char in "'\"":
            emit(TokenKind.STRING, _scan_string(source, pos))
        elif char == "`":
            emit(TokenKind.TEMPLATE, _scan_template(source, pos))
        elif (match := _IDENT_RE.match(source, pos)) is not None:
            emit(TokenKind.IDENT, match.end())
        elif char.isdigit() or (char == "." and source[pos + 1 : pos + 2].isdigit()):
            match = _NUMBER_RE.match(source, pos)
            emit(TokenKind.NUMBER, match.end() if match else pos + 1)
        else:
            op: str = next((o for o in _OPERATORS if source.startswith(o, pos)), char)
            emit(TokenKind.PUNCT, pos + len(op))

    tokens.append(Token(TokenKind.EOF, "", length, length, line))
    return tokens
