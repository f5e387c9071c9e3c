# topmark:header:start
#
#   project      : ActorSchema
#   file         : defaults.py
#   file_relpath : src/actorschema/typegraph/defaults.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Default values declared by object destructuring.

Actors usually read their input with a destructuring assignment that also
supplies defaults::

    const { query, maxItems = 10, proxy: { useApify = true } = {} } =
        (await Actor.getInput<Input>()) ?? {};

`scan_destructuring_defaults` finds such patterns for a given input type and
returns the raw default expressions, nested like the pattern. A pattern counts
when it is annotated with the type (``{ ... }: Input``), when its right-hand
side mentions the type name, or when its right-hand side is a variable that was
itself declared from the type (``const input = await Actor.getInput<Input>()``).

The expressions are returned as source text; deciding whether they are literal
values is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from actorschema.config.logging import get_logger
from actorschema.typegraph.lexer import Token, TokenKind, tokenize

if TYPE_CHECKING:
    from collections.abc import Mapping

    from actorschema.config.logging import ActorSchemaLogger

logger: ActorSchemaLogger = get_logger(__name__)

_OPENERS: Final[Mapping[str, str]] = MappingProxyType({"{": "}", "(": ")", "[": "]"})
_DECLARATORS: Final[frozenset[str]] = frozenset({"const", "let", "var"})


@dataclass(frozen=True)
class DestructuredDefault:
    """Default of one destructured name.

    Attributes:
        expression: Source text of the default expression, or None.
        members: Defaults of a nested destructuring pattern, by property name.
    """

    expression: str | None = None
    members: Mapping[str, DestructuredDefault] = field(
        default_factory=lambda: MappingProxyType({})
    )


EMPTY_DEFAULTS: Final[Mapping[str, DestructuredDefault]] = MappingProxyType({})


class _PatternError(Exception):
    """Internal: the braces do not hold a destructuring pattern."""


class _Scanner:
    def __init__(self, source: str) -> None:
        self.source: str = source
        self.tokens: list[Token] = [t for t in tokenize(source) if t.kind is not TokenKind.DOC]

    def matching(self, start: int) -> int:
        depth: int = 0
        for i in range(start, len(self.tokens)):
            tok: Token = self.tokens[i]
            if tok.kind is not TokenKind.PUNCT:
                continue
            if tok.text in _OPENERS:
                depth += 1
            elif tok.text in ("}", ")", "]"):
                depth -= 1
                if depth == 0:
                    return i
        return -1

    def expression_end(self, start: int) -> int:
        """Return the index after the expression starting at ``start``.

        The expression ends at a top-level ``,``, ``;``, closing bracket, or at
        a line break between two tokens that cannot continue an expression.
        """
        i: int = start
        while i < len(self.tokens):
            tok: Token = self.tokens[i]
            if tok.kind is TokenKind.EOF or tok.is_punct(",", ";", ")", "]", "}"):
                return i
            if tok.kind is TokenKind.PUNCT and tok.text in _OPENERS:
                close: int = self.matching(i)
                if close < 0:
                    return len(self.tokens) - 1
                i = close + 1
            else:
                i += 1
            nxt: Token = self.tokens[min(i, len(self.tokens) - 1)]
            prev: Token = self.tokens[i - 1]
            if nxt.line > prev.line and nxt.kind is TokenKind.IDENT and prev.kind in (
                TokenKind.IDENT,
                TokenKind.NUMBER,
                TokenKind.STRING,
            ):
                return i
            if nxt.line > prev.line and prev.is_punct(")", "]", "}") and nxt.is_ident():
                return i
        return i

    def text(self, start: int, end: int) -> str:
        return self.source[self.tokens[start].start : self.tokens[end - 1].end]

    def mentions(self, start: int, end: int, names: set[str]) -> bool:
        return any(t.is_ident(*names) for t in self.tokens[start:end])

    def typed_variables(self, type_name: str) -> set[str]:
        """Return variables declared with, or initialized from, ``type_name``."""
        names: set[str] = set()
        for i, tok in enumerate(self.tokens[:-2]):
            if not tok.is_ident(*_DECLARATORS) or not self.tokens[i + 1].is_ident():
                continue
            after: Token = self.tokens[i + 2]
            if after.is_punct(":") and self.tokens[i + 3].is_ident(type_name):
                names.add(self.tokens[i + 1].text)
            elif after.is_punct("=") and self.mentions(
                i + 3, self.expression_end(i + 3), {type_name}
            ):
                names.add(self.tokens[i + 1].text)
        return names

    def pattern_applies(self, close: int, type_name: str, variables: set[str]) -> bool:
        after: Token = self.tokens[close + 1]
        if after.is_punct(":"):
            return self.tokens[close + 2].is_ident(type_name)
        if after.is_punct("="):
            end: int = self.expression_end(close + 2)
            return self.mentions(close + 2, end, {type_name, *variables})
        return False

    def parse_pattern(self, open_index: int, close: int) -> dict[str, DestructuredDefault]:
        entries: dict[str, DestructuredDefault] = {}
        i: int = open_index + 1
        while i < close:
            tok: Token = self.tokens[i]
            if tok.is_punct(","):
                i += 1
                continue
            if tok.is_punct("..."):
                i = self.expression_end(i + 1)
                continue
            if tok.kind not in (TokenKind.IDENT, TokenKind.STRING):
                raise _PatternError(tok.text)
            name: str = tok.string_value if tok.kind is TokenKind.STRING else tok.text
            i += 1
            members: Mapping[str, DestructuredDefault] = EMPTY_DEFAULTS
            if self.tokens[i].is_punct(":"):
                target: Token = self.tokens[i + 1]
                if target.is_punct("{"):
                    inner_close: int = self.matching(i + 1)
                    if inner_close < 0 or inner_close > close:
                        raise _PatternError(name)
                    members = MappingProxyType(self.parse_pattern(i + 1, inner_close))
                    i = inner_close + 1
                elif target.kind is TokenKind.IDENT:
                    i += 2
                else:
                    raise _PatternError(name)
            expression: str | None = None
            if self.tokens[i].is_punct("="):
                end: int = self.expression_end(i + 1)
                if end == i + 1:
                    raise _PatternError(name)
                expression = self.text(i + 1, end)
                i = end
            if not (self.tokens[i].is_punct(",") or i == close):
                raise _PatternError(name)
            entries.setdefault(name, DestructuredDefault(expression, members))
        return entries

    def scan(self, type_name: str) -> dict[str, DestructuredDefault]:
        variables: set[str] = self.typed_variables(type_name)
        found: dict[str, DestructuredDefault] = {}
        for i, tok in enumerate(self.tokens):
            if not tok.is_punct("{"):
                continue
            close: int = self.matching(i)
            if close < 0 or not self.pattern_applies(close, type_name, variables):
                continue
            try:
                entries: dict[str, DestructuredDefault] = self.parse_pattern(i, close)
            except _PatternError as exc:
                logger.debug(
                    "Braces at line %d are not a destructuring pattern (%s)", tok.line, exc
                )
                continue
            logger.debug("Destructuring of %s at line %d: %s", type_name, tok.line, list(entries))
            for name, entry in entries.items():
                found.setdefault(name, entry)
        return found


def scan_destructuring_defaults(source: str, type_name: str) -> Mapping[str, DestructuredDefault]:
    """Return the destructuring defaults declared for ``type_name`` in ``source``.

    Args:
        source: TypeScript source text.
        type_name: Name of the input type whose destructurings are wanted.

    Returns:
        Defaults keyed by top-level property name; patterns found earlier in the
        source win over later ones.
    """
    return MappingProxyType(_Scanner(source).scan(type_name))
