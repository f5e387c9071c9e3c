# topmark:header:start
#
#   project      : ActorSchema
#   file         : test_batch.py
#   file_relpath : tests/engine/test_batch.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for multi-actor conversions: unit discovery, schema resolution and layout."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from actorschema.core.errors import SchemaFileNotFoundError, SchemaFormatError, SourceNotFoundError
from actorschema.diagnostic.model import DiagnosticLog
from actorschema.engine.batch import ActorUnit, BatchOrchestrator, unit_id_for
from actorschema.typegraph.reader import Program
from tests.conftest import make_config, mark_integration, parametrize, simple_schema, write_json

MULTI_SOURCE: str = """\
/** @id google-maps */
export type GoogleMapsInput = {
    /** @title Query @description What to search */
    query: string;
};

export interface WebScraperInput {
    /** @title Start URLs @description Pages to open */
    startUrls: string[];
}

type SharedInput = {
    /** @title Debug @description Log more */
    debug?: boolean;
};

type Helper = { x: string };
"""


@pytest.fixture
def actors_folder(tmp_path: Path) -> Path:
    """Three actors resolved three different ways, plus entries that are not actors."""
    root: Path = tmp_path / "actors"
    write_json(root / "alpha" / "INPUT_SCHEMA.json", simple_schema("Alpha"))
    write_json(root / "beta" / ".actor" / "INPUT_SCHEMA.json", simple_schema("Beta"))
    write_json(root / "gamma" / "actor.json", {"name": "gamma", "input": "schema/input.json"})
    write_json(root / "gamma" / "schema" / "input.json", simple_schema("Gamma"))
    write_json(root / ".hidden" / "INPUT_SCHEMA.json", simple_schema("Hidden"))
    (root / "README.md").write_text("# actors\n", encoding="utf-8")
    return root


def make_orchestrator(**overrides: Any) -> BatchOrchestrator:
    """Return an orchestrator over the default layout."""
    return BatchOrchestrator(make_config(**overrides), diagnostics=DiagnosticLog())


@mark_integration
def test_units_resolve_by_marker_file_and_manifest(actors_folder: Path) -> None:
    """Units are sorted, hidden directories are skipped, the manifest is followed."""
    units: list[ActorUnit] = list(make_orchestrator().iter_units(actors_folder))
    assert [u.name for u in units] == ["alpha", "beta", "gamma"]
    assert units[0].schema_path == actors_folder / "alpha" / "INPUT_SCHEMA.json"
    assert units[1].schema_path == actors_folder / "beta" / ".actor" / "INPUT_SCHEMA.json"
    assert units[2].schema_path == actors_folder / "gamma" / "schema" / "input.json"
    assert units[2].declaration_name == "GammaInput"


def test_manifest_in_schema_dir_wins_over_unit_manifest(tmp_path: Path) -> None:
    """``.actor/actor.json`` is consulted before ``actor.json``."""
    unit: Path = tmp_path / "delta"
    write_json(unit / ".actor" / "actor.json", {"input": "./input_schema.json"})
    write_json(unit / ".actor" / "input_schema.json", simple_schema())
    write_json(unit / "actor.json", {"input": "other.json"})
    resolved: Path = make_orchestrator().resolve_unit_schema(unit)
    assert resolved.name == "input_schema.json"
    assert resolved.parent.name == ".actor"


@parametrize(
    "manifest, error",
    [
        (None, SchemaFileNotFoundError),
        ({"name": "x"}, SchemaFileNotFoundError),
        ({"input": "missing.json"}, SchemaFileNotFoundError),
        (["not", "an", "object"], SchemaFormatError),
    ],
)
def test_unresolvable_unit(tmp_path: Path, manifest: Any, error: type[Exception]) -> None:
    """A unit without a usable schema is an error naming the unit."""
    unit: Path = tmp_path / "broken-actor"
    unit.mkdir()
    if manifest is not None:
        write_json(unit / "actor.json", manifest)
    with pytest.raises(error) as info:
        make_orchestrator().resolve_unit_schema(unit)
    if error is SchemaFileNotFoundError:
        assert "broken-actor" in str(info.value)


@mark_integration
def test_actors_to_declarations(actors_folder: Path) -> None:
    """One declaration per unit, named after the unit and tagged with its id."""
    text: str = make_orchestrator().actors_to_declarations(actors_folder)
    assert text.startswith(
        "/**\n * @title Alpha input\n * @id alpha\n * @schemaVersion 1\n */\ntype AlphaInput = {\n"
    )
    assert "}\n\n/**\n * @title Beta input\n * @id beta\n" in text
    assert "type GammaInput = {\n" in text
    assert "HiddenInput" not in text
    assert text.endswith("}\n")


def test_one_missing_schema_aborts_the_batch(actors_folder: Path) -> None:
    """Resolution of every unit happens before any rendering."""
    (actors_folder / "zeta").mkdir()
    with pytest.raises(SchemaFileNotFoundError, match="zeta"):
        make_orchestrator().actors_to_declarations(actors_folder)


def test_actors_folder_must_be_a_directory(tmp_path: Path) -> None:
    """A missing actors folder is a lookup failure."""
    with pytest.raises(SourceNotFoundError):
        make_orchestrator().actors_to_declarations(tmp_path / "nope")


def with_proxy(title: str, proxy_title: str) -> dict[str, Any]:
    """Return a simple schema with a nested ``proxy-config`` object."""
    schema: dict[str, Any] = simple_schema(title)
    schema["properties"]["proxy"] = {
        "title": proxy_title,
        "type": "object",
        "id": "proxy-config",
        "properties": {"useApify": {"title": "Use", "type": "boolean"}},
    }
    return schema


def test_shared_nested_types_are_declared_once(tmp_path: Path) -> None:
    """Units reusing a nested id share one declaration; a differing one is reported."""
    write_json(tmp_path / "a" / "INPUT_SCHEMA.json", with_proxy("A", "Proxy"))
    write_json(tmp_path / "b" / "INPUT_SCHEMA.json", with_proxy("B", "Proxy"))
    write_json(tmp_path / "c" / "INPUT_SCHEMA.json", with_proxy("C", "Other proxy"))
    orchestrator: BatchOrchestrator = make_orchestrator()
    text: str = orchestrator.actors_to_declarations(tmp_path)
    assert text.count("type ProxyConfig = {") == 1
    assert "@title Other proxy" not in text
    for name in ("AInput", "BInput", "CInput"):
        assert f"type {name} = {{" in text
    assert orchestrator.diagnostics.messages() == [
        "Type ProxyConfig of c differs from an earlier declaration; keeping the first one"
    ]


@parametrize(
    "declaration_name, schema, expected",
    [
        ("GoogleMapsInput", {}, "google-maps"),
        ("WebScraperInput", {"id": "scraper"}, "scraper"),
        ("Input", {}, "input"),
        ("crawlerSettings", {}, "crawler-settings"),
    ],
)
def test_unit_id_for(declaration_name: str, schema: dict[str, Any], expected: str) -> None:
    """The ``@id`` wins; otherwise the name without ``Input``, kebab-cased."""
    assert unit_id_for(declaration_name, schema) == expected


def test_select_declarations_uses_regex_and_ignore() -> None:
    """Names must fully match the regex; the ignored name is skipped."""
    program: Program = Program.from_source(MULTI_SOURCE)
    selected = make_orchestrator(ignore_type="SharedInput").select_declarations(program)
    assert [d.name for d in selected] == ["GoogleMapsInput", "WebScraperInput"]

    selected = make_orchestrator(type_regex="Web.*").select_declarations(program)
    assert [d.name for d in selected] == ["WebScraperInput"]


@mark_integration
def test_declarations_to_schemas_and_write(tmp_path: Path) -> None:
    """Schemas are keyed by id and written without their ``id`` field."""
    orchestrator: BatchOrchestrator = make_orchestrator(ignore_type="SharedInput")
    schemas: dict[str, dict[str, Any]] = orchestrator.declarations_to_schemas(
        Program.from_source(MULTI_SOURCE)
    )
    assert list(schemas) == ["google-maps", "web-scraper"]
    assert schemas["google-maps"]["id"] == "google-maps"
    assert schemas["web-scraper"]["properties"]["startUrls"]["editor"] == "stringList"

    written: list[Path] = orchestrator.write_schemas(schemas, tmp_path / "out")
    assert written == [
        tmp_path / "out" / "google-maps" / ".actor" / "INPUT_SCHEMA.json",
        tmp_path / "out" / "web-scraper" / ".actor" / "INPUT_SCHEMA.json",
    ]
    text: str = written[0].read_text(encoding="utf-8")
    assert text.endswith("}\n")
    data: dict[str, Any] = json.loads(text)
    assert "id" not in data
    assert data["required"] == ["query"]


def test_duplicate_ids_warn() -> None:
    """Two declarations sharing an id keep the later one, with a warning."""
    log = DiagnosticLog()
    orchestrator = BatchOrchestrator(make_config(), diagnostics=log)
    schemas = orchestrator.declarations_to_schemas(
        Program.from_source(
            "/** @id same */ type AInput = { a?: string };\n"
            "/** @id same */ type BInput = { b?: string };\n"
        )
    )
    assert list(schemas) == ["same"]
    assert "b" in schemas["same"]["properties"]
    assert any("reuses actor id 'same'" in m for m in log.messages())
