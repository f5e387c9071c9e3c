# topmark:header:start
#
#   project      : ActorSchema
#   file         : test_reader.py
#   file_relpath : tests/typegraph/test_reader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the TypeScript tokenizer, declaration reader and type resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from actorschema.core.errors import DeclarationNotFoundError, SourceNotFoundError
from actorschema.typegraph.lexer import TokenKind, tokenize
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
from actorschema.typegraph.reader import DeclarationKind, Program, read_declarations
from tests.conftest import parametrize, write_source


def resolve_member(type_text: str, prelude: str = "") -> TypeNode:
    """Resolve the type of a single member ``value: <type_text>``."""
    program: Program = Program.from_source(f"{prelude}\ntype Input = {{ value: {type_text} }};")
    node: TypeNode = program.resolve("Input")
    assert isinstance(node, ObjectNode)
    return node.members[0].type


def test_tokenize_keeps_doc_blocks_and_drops_comments() -> None:
    """JSDoc blocks are tokens; line and block comments are not."""
    tokens = tokenize("// note\n/* block */\n/** @title A */\nconst a = 'x'; // end\n")
    kinds = [t.kind for t in tokens]
    assert kinds == [
        TokenKind.DOC,
        TokenKind.IDENT,
        TokenKind.IDENT,
        TokenKind.PUNCT,
        TokenKind.STRING,
        TokenKind.PUNCT,
        TokenKind.EOF,
    ]
    assert tokens[0].text == "/** @title A */"
    assert tokens[1].line == 4
    assert tokens[4].string_value == "x"


def test_unterminated_string_stops_at_end_of_line() -> None:
    """A stray quote cannot swallow the rest of the file."""
    tokens = tokenize("const re = /it's/;\ntype Input = {};\n")
    assert any(t.is_ident("Input") and t.line == 2 for t in tokens)


def test_read_declarations_kinds_docs_and_modifiers() -> None:
    """Type aliases, interfaces and enums are collected with their JSDoc blocks."""
    declarations = read_declarations(
        """
        import { Actor } from 'apify';
        /** The input. */
        export default interface Input { a: string }
        export declare type Alias = string;
        export const enum Level { Low = 1, High }
        function notADeclaration(type: string) { return type; }
        """
    )
    assert [(d.name, d.kind) for d in declarations] == [
        ("Input", DeclarationKind.INTERFACE),
        ("Alias", DeclarationKind.TYPE),
        ("Level", DeclarationKind.ENUM),
    ]
    assert declarations[0].doc == "/** The input. */"
    assert declarations[2].enum_members == (("Low", 1), ("High", 2))


@parametrize(
    "type_text, expected",
    [
        ("string", PrimitiveNode("string")),
        ("number | undefined", PrimitiveNode("number")),
        ("true | false", PrimitiveNode("boolean")),
        ("'a' | 'b' | 'a'", EnumNode(("a", "b"))),
        ("1 | -2", EnumNode((1, -2))),
        ("boolean | 'auto'", EnumNode((True, False, "auto"))),
        ("true | 'auto' | null", EnumNode((True, "auto"))),
        ("string | number", EnumNode(("string", "number"))),
        ("boolean | true", PrimitiveNode("boolean")),
        ("string[]", ArrayNode(PrimitiveNode("string"))),
        ("ReadonlyArray<number>", ArrayNode(PrimitiveNode("number"))),
        ("readonly string[]", ArrayNode(PrimitiveNode("string"))),
        ("(string)", PrimitiveNode("string")),
        ("object", AnyObjectNode("object")),
        ("Record<string, number>", AnyObjectNode("Record<string, number>")),
        ("{ [key: string]: string }", AnyObjectNode("index signature")),
        ("Date", PrimitiveNode("Date")),
    ],
)
def test_resolve_member_types(type_text: str, expected: TypeNode) -> None:
    """Type expressions resolve to the closed set of node classes."""
    assert resolve_member(type_text) == expected


@parametrize(
    "type_text, reason",
    [
        ("string | { a: string }", "union with an object or array branch"),
        ("'a' | string[]", "union with an object or array branch"),
        ("A & B", "intersection type"),
        ("[string, number]", "tuple type"),
        ("() => void", "function type"),
        ("keyof Foo", "'keyof' type operator"),
        ("Foo['bar']", "indexed access type"),
        ("`prefix-${string}`", "template literal type"),
    ],
)
def test_unsupported_shapes(type_text: str, reason: str) -> None:
    """Shapes the engine cannot represent resolve to `UnsupportedNode`."""
    node: TypeNode = resolve_member(type_text)
    assert isinstance(node, UnsupportedNode)
    assert node.reason == reason


def test_references_enums_and_wrappers() -> None:
    """Named references resolve lazily, in any order."""
    prelude: str = """
        type Later = Partial<Settings>;
        interface Settings { retries: number; mode: Mode }
        enum Mode { Fast = 'fast', Slow = 'slow' }
    """
    later: TypeNode = resolve_member("Later", prelude)
    assert isinstance(later, ObjectNode)
    assert [(m.name, m.optional) for m in later.members] == [("retries", True), ("mode", True)]
    assert later.members[1].type == EnumNode(("fast", "slow"), "Mode")
    assert resolve_member("Mode.Slow", prelude) == EnumNode(("slow",), "Mode.Slow")


def test_recursive_and_generic_declarations_are_unsupported() -> None:
    """Self-references and generics are reported instead of looping."""
    node: TypeNode = resolve_member("Tree", "type Tree = { children: Tree[] };")
    assert isinstance(node, ObjectNode)
    children: TypeNode = node.members[0].type
    assert isinstance(children, ArrayNode)
    assert children.element == UnsupportedNode("Tree", "recursive reference")

    generic: TypeNode = resolve_member("Box<string>", "type Box<T> = { value: T };")
    assert isinstance(generic, UnsupportedNode)


def test_members_keep_docs_optional_flags_and_quoted_names() -> None:
    """Member syntax details survive into `Member` values."""
    node: TypeNode = Program.from_source(
        "interface Input {\n  /** @title A */\n  readonly 'a-b'?: string;\n  c;\n}"
    ).resolve("Input")
    assert isinstance(node, ObjectNode)
    assert node.members == (
        Member("a-b", PrimitiveNode("string"), True, "/** @title A */"),
        Member("c", PrimitiveNode("any"), False, None),
    )


def test_unparseable_declaration_fails_only_when_used() -> None:
    """A broken declaration is kept as unsupported; others still resolve."""
    program: Program = Program.from_source(
        "type Broken = { a: ??? };\ntype Input = { b: string };\n"
    )
    assert isinstance(program.resolve("Input"), ObjectNode)
    assert isinstance(program.resolve("Broken"), UnsupportedNode)


def test_program_reads_sibling_files(tmp_path: Path) -> None:
    """Declarations imported from files next to the main file resolve."""
    main: Path = write_source(
        tmp_path, "import { Shared } from './types';\ntype Input = { shared: Shared };\n"
    )
    write_source(tmp_path, "export interface Shared { id: string }\n", name="types.ts")
    write_source(tmp_path, "export interface Shared { ignored: number }\n", name="types.d.ts")
    program: Program = Program.from_path(main)
    assert program.main_path == main
    assert [d.name for d in program.declarations()] == ["Input"]
    node: TypeNode = program.resolve("Input")
    assert isinstance(node, ObjectNode)
    shared: TypeNode = node.members[0].type
    assert isinstance(shared, ObjectNode)
    assert [m.name for m in shared.members] == ["id"]


def test_program_lookup_errors(tmp_path: Path) -> None:
    """Missing files and declarations raise lookup failures."""
    with pytest.raises(SourceNotFoundError):
        Program.from_path(tmp_path / "main.ts")
    with pytest.raises(DeclarationNotFoundError, match="'Missing'"):
        Program.from_source("type Input = {};").get("Missing")
