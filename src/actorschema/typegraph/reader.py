# topmark:header:start
#
#   project      : ActorSchema
#   file         : reader.py
#   file_relpath : src/actorschema/typegraph/reader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Declaration reader and type resolution.

`Program` reads the ``type``, ``interface`` and ``enum`` declarations of a main
TypeScript file and of the other ``.ts`` files in its directory, and resolves a
declaration name into the node graph of `actorschema.typegraph.nodes`.

Parsing is two-phased. The first phase builds a small syntax tree per
declaration (private ``_*Syntax`` classes); statements that are not
declarations are skipped by balanced-bracket scanning. The second phase
resolves names lazily, when a declaration is requested, so declarations may
reference each other in any order and across files.

A declaration that cannot be parsed is kept with an unsupported body: it only
becomes an error if the conversion actually reaches it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, Union

from actorschema.config.logging import get_logger
from actorschema.core.errors import DeclarationNotFoundError, SourceNotFoundError
from actorschema.typegraph.lexer import Token, TokenKind, tokenize
from actorschema.typegraph.nodes import (
    AnyObjectNode,
    ArrayNode,
    EnumNode,
    Member,
    ObjectNode,
    PrimitiveNode,
    TypeNode,
    UnsupportedNode,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from actorschema.config.logging import ActorSchemaLogger

logger: ActorSchemaLogger = get_logger(__name__)

SOURCE_SUFFIXES: Final[tuple[str, ...]] = (".ts", ".mts", ".cts", ".tsx")

_MODIFIERS: Final[frozenset[str]] = frozenset({"export", "declare", "default", "const"})
_DECLARATION_KEYWORDS: Final[frozenset[str]] = frozenset({"type", "interface", "enum"})
_ARRAY_GENERICS: Final[frozenset[str]] = frozenset({"Array", "ReadonlyArray"})
_ANY_OBJECT_NAMES: Final[frozenset[str]] = frozenset({"object", "Object", "Record"})
_WRAPPER_GENERICS: Final[frozenset[str]] = frozenset({"Partial", "Required", "Readonly"})
_NULLISH: Final[frozenset[str]] = frozenset({"undefined", "null", "void"})
_TYPE_OPERATORS: Final[frozenset[str]] = frozenset({"typeof", "keyof", "unique", "infer"})
_CLOSERS: Final[Mapping[str, str]] = {"{": "}", "(": ")", "[": "]"}


class DeclarationKind(Enum):
    """Kinds of declarations the reader collects."""

    TYPE = "type"
    INTERFACE = "interface"
    ENUM = "enum"


# --- Syntax tree (phase 1) ---


@dataclass(frozen=True)
class _RefSyntax:
    name: str
    args: tuple[_TypeSyntax, ...]
    text: str


@dataclass(frozen=True)
class _LiteralSyntax:
    value: Any


@dataclass(frozen=True)
class _UnionSyntax:
    branches: tuple[_TypeSyntax, ...]
    text: str


@dataclass(frozen=True)
class _IntersectionSyntax:
    text: str


@dataclass(frozen=True)
class _ArraySyntax:
    element: _TypeSyntax


@dataclass(frozen=True)
class _MemberSyntax:
    name: str
    type: _TypeSyntax
    optional: bool
    doc: str | None


@dataclass(frozen=True)
class _ObjectSyntax:
    members: tuple[_MemberSyntax, ...]
    has_index: bool = False


@dataclass(frozen=True)
class _UnsupportedSyntax:
    text: str
    reason: str


_TypeSyntax = Union[
    _RefSyntax,
    _LiteralSyntax,
    _UnionSyntax,
    _IntersectionSyntax,
    _ArraySyntax,
    _ObjectSyntax,
    _UnsupportedSyntax,
]


@dataclass(frozen=True)
class Declaration:
    """A top-level declaration found in a source file.

    Attributes:
        name: Declared name.
        kind: Declaration kind.
        doc: JSDoc block preceding the declaration, if any.
        path: File the declaration was read from (None for in-memory sources).
        type_params: Names of generic type parameters.
        body: Aliased type (``type`` declarations) or member list (``interface``).
        bases: ``extends`` clauses of an interface.
        enum_members: Member names and values of an ``enum``.
    """

    name: str
    kind: DeclarationKind
    doc: str | None = None
    path: Path | None = None
    type_params: tuple[str, ...] = ()
    body: _TypeSyntax | None = None
    bases: tuple[_TypeSyntax, ...] = ()
    enum_members: tuple[tuple[str, Any], ...] = ()


class _ParseError(Exception):
    """Internal: a declaration could not be parsed."""


@dataclass
class _Parser:
    """Phase-1 parser over the tokens of one file."""

    source: str
    path: Path | None
    tokens: list[Token] = field(default_factory=lambda: [])
    index: int = 0

    def __post_init__(self) -> None:
        self.tokens = tokenize(self.source)

    # --- token helpers ---

    def peek(self, offset: int = 0) -> Token:
        i: int = min(self.index + offset, len(self.tokens) - 1)
        return self.tokens[i]

    def advance(self) -> Token:
        tok: Token = self.peek()
        if tok.kind is not TokenKind.EOF:
            self.index += 1
        return tok

    def expect(self, text: str) -> Token:
        tok: Token = self.peek()
        if not tok.is_punct(text):
            raise _ParseError(f"expected {text!r} at line {tok.line}, found {tok.text!r}")
        return self.advance()

    def text_from(self, start: int) -> str:
        first: Token = self.tokens[start]
        last: Token = self.tokens[max(start, self.index - 1)]
        return self.source[first.start : last.end]

    def matching(self, start: int) -> int:
        """Return the index of the bracket closing the one at ``start``."""
        stack: list[str] = []
        i: int = start
        while i < len(self.tokens):
            tok: Token = self.tokens[i]
            if tok.kind is TokenKind.EOF:
                break
            if tok.kind is TokenKind.PUNCT and tok.text in _CLOSERS:
                stack.append(_CLOSERS[tok.text])
            elif stack and tok.is_punct(stack[-1]):
                stack.pop()
                if not stack:
                    return i
            i += 1
        opener: Token = self.tokens[start]
        raise _ParseError(f"unbalanced {opener.text!r} at line {opener.line}")

    def skip_balanced(self) -> None:
        self.index = self.matching(self.index) + 1

    def skip_angles(self) -> list[str]:
        """Skip ``<...>`` and return the first identifier of each top-level entry."""
        self.expect("<")
        depth: int = 1
        names: list[str] = []
        expect_name: bool = True
        while depth:
            tok: Token = self.advance()
            if tok.kind is TokenKind.EOF:
                raise _ParseError("unterminated type argument list")
            if tok.is_punct("<"):
                depth += 1
            elif tok.is_punct(">"):
                depth -= 1
            elif tok.is_punct("=>"):
                continue
            elif depth == 1 and tok.is_punct(","):
                expect_name = True
            elif expect_name and depth == 1 and tok.is_ident():
                names.append(tok.text)
                expect_name = False
        return names

    # --- module level ---

    def parse_module(self) -> list[Declaration]:
        declarations: list[Declaration] = []
        pending_doc: str | None = None
        while self.peek().kind is not TokenKind.EOF:
            tok: Token = self.peek()
            prev: Token | None = self.tokens[self.index - 1] if self.index else None
            if tok.kind is TokenKind.DOC:
                pending_doc = tok.text
                self.advance()
                continue
            if (
                tok.is_ident(*_MODIFIERS)
                and self.peek(1).is_ident(*(_MODIFIERS | _DECLARATION_KEYWORDS))
            ):
                self.advance()
                continue
            if tok.is_ident(*_DECLARATION_KEYWORDS) and not (prev and prev.is_punct(".")):
                start: int = self.index
                try:
                    declaration: Declaration | None = self.parse_declaration(pending_doc)
                except _ParseError as exc:
                    declaration = self.broken_declaration(start, str(exc))
                    self.index = start + 2
                if declaration is not None:
                    declarations.append(declaration)
                    pending_doc = None
                    continue
                self.index = start
            if tok.kind is TokenKind.PUNCT and tok.text in _CLOSERS:
                try:
                    self.skip_balanced()
                except _ParseError:
                    self.advance()
            else:
                self.advance()
            pending_doc = None
        return declarations

    def broken_declaration(self, start: int, reason: str) -> Declaration | None:
        keyword: Token = self.tokens[start]
        name: Token = self.tokens[start + 1]
        if not name.is_ident():
            return None
        logger.warning("Cannot parse %s '%s' (%s): %s", keyword.text, name.text, self.path, reason)
        return Declaration(
            name=name.text,
            kind=DeclarationKind(keyword.text),
            path=self.path,
            body=_UnsupportedSyntax(f"{keyword.text} {name.text}", f"cannot parse: {reason}"),
        )

    def parse_declaration(self, doc: str | None) -> Declaration | None:
        keyword: Token = self.peek()
        name: Token = self.peek(1)
        if not name.is_ident():
            return None
        if keyword.text == "type" and self.peek(2).is_punct("=", "<"):
            return self.parse_alias(doc)
        if keyword.text == "interface":
            return self.parse_interface(doc)
        if keyword.text == "enum" and self.peek(2).is_punct("{"):
            return self.parse_enum(doc)
        return None

    def parse_alias(self, doc: str | None) -> Declaration:
        self.advance()
        name: str = self.advance().text
        params: list[str] = self.skip_angles() if self.peek().is_punct("<") else []
        self.expect("=")
        body: _TypeSyntax = self.parse_type()
        if self.peek().is_punct(";"):
            self.advance()
        logger.trace("Read type alias %s", name)
        return Declaration(name, DeclarationKind.TYPE, doc, self.path, tuple(params), body)

    def parse_interface(self, doc: str | None) -> Declaration:
        self.advance()
        name: str = self.advance().text
        params: list[str] = self.skip_angles() if self.peek().is_punct("<") else []
        bases: list[_TypeSyntax] = []
        if self.peek().is_ident("extends"):
            self.advance()
            bases.append(self.parse_postfix())
            while self.peek().is_punct(","):
                self.advance()
                bases.append(self.parse_postfix())
        body: _ObjectSyntax = self.parse_object()
        logger.trace("Read interface %s", name)
        return Declaration(
            name, DeclarationKind.INTERFACE, doc, self.path, tuple(params), body, tuple(bases)
        )

    def parse_enum(self, doc: str | None) -> Declaration:
        self.advance()
        name: str = self.advance().text
        self.expect("{")
        members: list[tuple[str, Any]] = []
        next_value: int | float = 0
        while not self.peek().is_punct("}"):
            tok: Token = self.advance()
            if tok.kind is TokenKind.EOF:
                raise _ParseError(f"unterminated enum {name}")
            if tok.kind is TokenKind.DOC or tok.is_punct(","):
                continue
            member: str = tok.string_value if tok.kind is TokenKind.STRING else tok.text
            value: Any = next_value
            if self.peek().is_punct("="):
                self.advance()
                value = self.parse_enum_initializer(member)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                next_value = value + 1
            members.append((member, value))
        self.expect("}")
        logger.trace("Read enum %s: %r", name, members)
        return Declaration(name, DeclarationKind.ENUM, doc, self.path, enum_members=tuple(members))

    def parse_enum_initializer(self, member: str) -> Any:
        start: int = self.index
        while not self.peek().is_punct(",", "}") and self.peek().kind is not TokenKind.EOF:
            if self.peek().text in _CLOSERS:
                self.skip_balanced()
            else:
                self.advance()
        parts: list[Token] = self.tokens[start : self.index]
        if len(parts) == 1 and parts[0].kind is TokenKind.STRING:
            return parts[0].string_value
        if len(parts) == 1 and parts[0].kind is TokenKind.NUMBER:
            return _number(parts[0].text)
        if len(parts) == 2 and parts[0].is_punct("-") and parts[1].kind is TokenKind.NUMBER:
            return -_number(parts[1].text)
        logger.debug("Computed enum member %s = %s; using its name", member, self.text_from(start))
        return member

    # --- type expressions ---

    def parse_type(self) -> _TypeSyntax:
        start: int = self.index
        if self.peek().is_punct("|"):
            self.advance()
        branches: list[_TypeSyntax] = [self.parse_intersection()]
        while self.peek().is_punct("|"):
            self.advance()
            branches.append(self.parse_intersection())
        if len(branches) == 1:
            return branches[0]
        return _UnionSyntax(tuple(branches), self.text_from(start))

    def parse_intersection(self) -> _TypeSyntax:
        start: int = self.index
        if self.peek().is_punct("&"):
            self.advance()
        parts: list[_TypeSyntax] = [self.parse_postfix()]
        while self.peek().is_punct("&"):
            self.advance()
            parts.append(self.parse_postfix())
        if len(parts) == 1:
            return parts[0]
        return _IntersectionSyntax(self.text_from(start))

    def parse_postfix(self) -> _TypeSyntax:
        start: int = self.index
        node: _TypeSyntax = self.parse_primary()
        while self.peek().is_punct("["):
            if self.peek(1).is_punct("]"):
                self.index += 2
                node = _ArraySyntax(node)
            else:
                self.skip_balanced()
                node = _UnsupportedSyntax(self.text_from(start), "indexed access type")
        return node

    def parse_primary(self) -> _TypeSyntax:
        start: int = self.index
        tok: Token = self.peek()
        if tok.is_punct("("):
            close: int = self.matching(self.index)
            if self.tokens[close + 1].is_punct("=>"):
                self.index = close + 2
                self.parse_type()
                return _UnsupportedSyntax(self.text_from(start), "function type")
            self.advance()
            inner: _TypeSyntax = self.parse_type()
            self.expect(")")
            return inner
        if tok.is_punct("{"):
            return self.parse_object()
        if tok.is_punct("["):
            self.skip_balanced()
            return _UnsupportedSyntax(self.text_from(start), "tuple type")
        if tok.kind is TokenKind.STRING:
            self.advance()
            return _LiteralSyntax(tok.string_value)
        if tok.kind is TokenKind.NUMBER:
            self.advance()
            return _LiteralSyntax(_number(tok.text))
        if tok.is_punct("-") and self.peek(1).kind is TokenKind.NUMBER:
            self.index += 2
            return _LiteralSyntax(-_number(self.tokens[self.index - 1].text))
        if tok.kind is TokenKind.TEMPLATE:
            self.advance()
            return _UnsupportedSyntax(tok.text, "template literal type")
        if tok.is_ident():
            return self.parse_reference()
        raise _ParseError(f"unexpected {tok.text!r} in type at line {tok.line}")

    def parse_reference(self) -> _TypeSyntax:
        start: int = self.index
        tok: Token = self.advance()
        if tok.text in _TYPE_OPERATORS:
            self.parse_postfix()
            return _UnsupportedSyntax(self.text_from(start), f"'{tok.text}' type operator")
        if tok.text == "readonly":
            return self.parse_postfix()
        if tok.text == "new":
            self.parse_primary()
            return _UnsupportedSyntax(self.text_from(start), "constructor type")
        if tok.text in ("true", "false"):
            return _LiteralSyntax(tok.text == "true")
        name: str = tok.text
        while self.peek().is_punct(".") and self.peek(1).is_ident():
            name += "." + self.peek(1).text
            self.index += 2
        args: list[_TypeSyntax] = []
        if self.peek().is_punct("<"):
            self.advance()
            args.append(self.parse_type())
            while self.peek().is_punct(","):
                self.advance()
                args.append(self.parse_type())
            self.expect(">")
        return _RefSyntax(name, tuple(args), self.text_from(start))

    def parse_object(self) -> _ObjectSyntax:
        self.expect("{")
        members: list[_MemberSyntax] = []
        has_index: bool = False
        doc: str | None = None
        while not self.peek().is_punct("}"):
            tok: Token = self.peek()
            if tok.kind is TokenKind.EOF:
                raise _ParseError("unterminated object type")
            if tok.kind is TokenKind.DOC:
                doc = tok.text
                self.advance()
                continue
            if tok.is_punct(";", ","):
                self.advance()
                continue
            if tok.is_ident("readonly") and not self.peek(1).is_punct(":", "?", "(", ";", ","):
                self.advance()
                continue
            if tok.is_punct("["):
                self.skip_balanced()
                if self.peek().is_punct("?"):
                    self.advance()
                if self.peek().is_punct(":"):
                    self.advance()
                    self.parse_type()
                has_index = True
                doc = None
                continue
            if tok.kind not in (TokenKind.IDENT, TokenKind.STRING, TokenKind.NUMBER):
                raise _ParseError(f"unexpected {tok.text!r} in object type at line {tok.line}")
            self.advance()
            name: str = tok.string_value if tok.kind is TokenKind.STRING else tok.text
            optional: bool = False
            if self.peek().is_punct("?"):
                self.advance()
                optional = True
            member_type: _TypeSyntax
            if self.peek().is_punct("(", "<"):
                start: int = self.index
                if self.peek().is_punct("<"):
                    self.skip_angles()
                self.skip_balanced()
                if self.peek().is_punct(":"):
                    self.advance()
                    self.parse_type()
                member_type = _UnsupportedSyntax(name + self.text_from(start), "method signature")
            elif self.peek().is_punct(":"):
                self.advance()
                member_type = self.parse_type()
            else:
                member_type = _RefSyntax("any", (), "any")
            members.append(_MemberSyntax(name, member_type, optional, doc))
            doc = None
        self.expect("}")
        return _ObjectSyntax(tuple(members), has_index)


def _number(text: str) -> int | float:
    cleaned: str = text.replace("_", "").rstrip("n")
    if cleaned.lower().startswith(("0x", "0b")):
        return int(cleaned, 0)
    value: float = float(cleaned)
    return int(value) if value.is_integer() and not re.search(r"[.eE]", cleaned) else value


def read_declarations(source: str, path: Path | None = None) -> list[Declaration]:
    """Return the top-level declarations of one source text, in source order."""
    return _Parser(source, path).parse_module()


# --- Resolution (phase 2) ---


class Program:
    """Declarations of a set of source files, with name resolution.

    The first file given is the main file: its declarations are listed by
    `declarations` and shadow same-named declarations of the other files.
    """

    def __init__(self, sources: Mapping[Path | None, str]) -> None:
        self.sources: dict[Path | None, str] = dict(sources)
        self._by_file: dict[Path | None, list[Declaration]] = {
            path: read_declarations(text, path) for path, text in self.sources.items()
        }
        self._index: dict[str, Declaration] = {}
        for declarations in self._by_file.values():
            for declaration in declarations:
                self._index.setdefault(declaration.name, declaration)
        self._stack: list[str] = []

    @classmethod
    def from_source(cls, source: str, path: Path | None = None) -> Program:
        """Build a program over a single in-memory source."""
        return cls({path: source})

    @classmethod
    def from_path(cls, main: Path, *, include_siblings: bool = True) -> Program:
        """Build a program over ``main`` and the other TypeScript files beside it.

        Args:
            main: The main source file.
            include_siblings: Also read the other ``.ts`` files of the directory,
                so imported declarations resolve.

        Raises:
            SourceNotFoundError: If ``main`` is not a readable file.
        """
        if not main.is_file():
            raise SourceNotFoundError(main)
        sources: dict[Path | None, str] = {main: main.read_text(encoding="utf-8")}
        if include_siblings:
            for sibling in sorted(main.parent.iterdir()):
                if sibling == main or not sibling.is_file():
                    continue
                if sibling.suffix in SOURCE_SUFFIXES and not sibling.name.endswith(".d.ts"):
                    sources[sibling] = sibling.read_text(encoding="utf-8")
        logger.debug("Program for %s: %d file(s)", main, len(sources))
        return cls(sources)

    @property
    def main_path(self) -> Path | None:
        """Return the path of the main file."""
        return next(iter(self.sources))

    def declarations(self) -> list[Declaration]:
        """Return the declarations of the main file, in source order."""
        return list(self._by_file[self.main_path])

    def find(self, name: str) -> Declaration | None:
        """Return the declaration named ``name`` (main file first), or None."""
        return self._index.get(name)

    def get(self, name: str) -> Declaration:
        """Return the declaration named ``name``.

        Raises:
            DeclarationNotFoundError: If no file declares ``name``.
        """
        declaration: Declaration | None = self.find(name)
        if declaration is None:
            raise DeclarationNotFoundError(name, str(self.main_path or "<source>"))
        return declaration

    def resolve(self, name: str) -> TypeNode:
        """Resolve a declaration by name into its node graph."""
        return self.resolve_declaration(self.get(name))

    def resolve_declaration(self, declaration: Declaration) -> TypeNode:
        """Resolve ``declaration`` into its node graph."""
        if declaration.name in self._stack:
            return UnsupportedNode(declaration.name, "recursive reference")
        if declaration.type_params:
            return UnsupportedNode(declaration.name, "generic declaration")
        self._stack.append(declaration.name)
        try:
            if declaration.kind is DeclarationKind.ENUM:
                return EnumNode(tuple(v for _, v in declaration.enum_members), declaration.name)
            if declaration.kind is DeclarationKind.INTERFACE:
                return self._resolve_interface(declaration)
            assert declaration.body is not None
            node: TypeNode = self._resolve(declaration.body)
            if isinstance(node, ObjectNode) and node.name is None:
                node = replace(node, name=declaration.name)
            return node
        finally:
            self._stack.pop()

    def _resolve_interface(self, declaration: Declaration) -> TypeNode:
        members: dict[str, Member] = {}
        for base in declaration.bases:
            base_node: TypeNode = self._resolve(base)
            if isinstance(base_node, UnsupportedNode):
                return base_node
            if not isinstance(base_node, ObjectNode):
                return UnsupportedNode(declaration.name, "interface extends a non-object type")
            members.update((m.name, m) for m in base_node.members)
        if isinstance(declaration.body, _UnsupportedSyntax):
            return UnsupportedNode(declaration.body.text, declaration.body.reason)
        assert isinstance(declaration.body, _ObjectSyntax)
        own: TypeNode = self._resolve(declaration.body)
        if isinstance(own, ObjectNode):
            members.update((m.name, m) for m in own.members)
        return ObjectNode(tuple(members.values()), declaration.name)

    def _resolve(self, syntax: _TypeSyntax) -> TypeNode:
        if isinstance(syntax, _LiteralSyntax):
            if isinstance(syntax.value, bool):
                return PrimitiveNode("boolean")
            return EnumNode((syntax.value,))
        if isinstance(syntax, _ArraySyntax):
            return ArrayNode(self._resolve(syntax.element))
        if isinstance(syntax, _ObjectSyntax):
            if syntax.has_index and not syntax.members:
                return AnyObjectNode("index signature")
            return ObjectNode(
                tuple(
                    Member(m.name, self._resolve(m.type), m.optional, m.doc)
                    for m in syntax.members
                )
            )
        if isinstance(syntax, _UnionSyntax):
            return self._resolve_union(syntax)
        if isinstance(syntax, _IntersectionSyntax):
            return UnsupportedNode(syntax.text, "intersection type")
        if isinstance(syntax, _UnsupportedSyntax):
            return UnsupportedNode(syntax.text, syntax.reason)
        return self._resolve_reference(syntax)

    def _resolve_union(self, syntax: _UnionSyntax) -> TypeNode:
        nodes: list[TypeNode] = []
        for branch in syntax.branches:
            node: TypeNode
            if isinstance(branch, _LiteralSyntax) and isinstance(branch.value, bool):
                node = EnumNode((branch.value,))
            else:
                node = self._resolve(branch)
            if isinstance(node, PrimitiveNode) and node.name in _NULLISH:
                continue
            nodes.append(node)
        if not nodes:
            return PrimitiveNode("undefined")
        if len(nodes) == 1:
            only: TypeNode = nodes[0]
            if isinstance(only, EnumNode) and all(isinstance(v, bool) for v in only.values):
                return PrimitiveNode("boolean")
            return only

        # Every branch contributes enum values: `boolean` is `true | false` and
        # any other primitive contributes its type name.
        values: list[Any] = []
        seen: set[tuple[type, Any]] = set()
        for node in nodes:
            branch_values: tuple[Any, ...]
            if node == PrimitiveNode("boolean"):
                branch_values = (True, False)
            elif isinstance(node, EnumNode):
                branch_values = node.values
            elif isinstance(node, PrimitiveNode):
                branch_values = (node.name,)
            else:
                return UnsupportedNode(syntax.text, "union with an object or array branch")
            for value in branch_values:
                if (type(value), value) not in seen:
                    seen.add((type(value), value))
                    values.append(value)
        if all(isinstance(v, bool) for v in values):
            return PrimitiveNode("boolean")
        return EnumNode(tuple(values))

    def _resolve_reference(self, ref: _RefSyntax) -> TypeNode:
        declaration: Declaration | None = self.find(ref.name)
        if declaration is not None:
            if ref.args:
                return UnsupportedNode(ref.text, "generic type instantiation")
            return self.resolve_declaration(declaration)

        if ref.name in _ARRAY_GENERICS and len(ref.args) == 1:
            return ArrayNode(self._resolve(ref.args[0]))
        if ref.name in _ANY_OBJECT_NAMES:
            return AnyObjectNode(ref.text)
        if ref.name in _WRAPPER_GENERICS and len(ref.args) == 1:
            inner: TypeNode = self._resolve(ref.args[0])
            if isinstance(inner, ObjectNode) and ref.name != "Readonly":
                optional: bool = ref.name == "Partial"
                return replace(
                    inner, members=tuple(replace(m, optional=optional) for m in inner.members)
                )
            return inner
        if "." in ref.name:
            owner, _, member = ref.name.rpartition(".")
            enum_declaration: Declaration | None = self.find(owner)
            if enum_declaration is not None and enum_declaration.kind is DeclarationKind.ENUM:
                values: dict[str, Any] = dict(enum_declaration.enum_members)
                if member in values:
                    return EnumNode((values[member],), ref.name)
        if ref.args:
            return UnsupportedNode(ref.text, "generic type instantiation")
        logger.trace("Treating %s as an opaque primitive", ref.name)
        return PrimitiveNode(ref.name)
