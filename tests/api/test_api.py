# topmark:header:start
#
#   project      : ActorSchema
#   file         : test_api.py
#   file_relpath : tests/api/test_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the public API surface (`actorschema.api`)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from actorschema import api
from actorschema.config import Config
from actorschema.core.errors import (
    ConfigError,
    DeclarationNotFoundError,
    SchemaFormatError,
    SourceNotFoundError,
)
from tests.conftest import (
    ACCOUNT_SCHEMA,
    ACCOUNT_SOURCE,
    make_config,
    mark_integration,
    simple_schema,
    write_json,
    write_source,
)

TWO_ACTORS_SOURCE: str = """\
/** @id news */
type NewsInput = {
    /** @title Topic @description Topic to follow */
    topic: string;
};

type ShopInput = {
    /** @title Limit @description Maximum number of items */
    limit?: number;
};
"""


@mark_integration
def test_type_to_schema_reads_the_input_file_of_a_directory(isolation: Path) -> None:
    """A directory source resolves to its ``main.ts``."""
    source: Path = write_source(isolation / "src", ACCOUNT_SOURCE)
    result: api.SchemaResult = api.type_to_schema(isolation / "src")
    assert result.source == source
    assert result.type_name == "Input"
    assert result.schema == ACCOUNT_SCHEMA
    assert result.diagnostics.messages() == ["Missing title for 'role'"]


def test_type_to_schema_uses_discovered_configuration(isolation: Path) -> None:
    """``actorschema.toml`` in the working directory changes the input file name."""
    (isolation / "actorschema.toml").write_text(
        '[conversion]\ninput_file_name = "index.ts"\n', encoding="utf-8"
    )
    write_source(isolation / "src", ACCOUNT_SOURCE, name="index.ts")
    result: api.SchemaResult = api.type_to_schema("src")
    assert result.source.name == "index.ts"


def test_type_to_schema_lookup_failures(isolation: Path) -> None:
    """A missing file or a missing declaration raises a lookup failure."""
    with pytest.raises(SourceNotFoundError, match="main.ts"):
        api.type_to_schema(isolation, config=make_config())

    write_source(isolation, ACCOUNT_SOURCE)
    with pytest.raises(DeclarationNotFoundError, match="'Settings'"):
        api.type_to_schema(isolation, type_name="Settings", config=make_config())


def test_resolve_config_layers_mappings_and_overrides() -> None:
    """A TOML-shaped mapping sits on the defaults; keyword overrides win."""
    config: Config = api.resolve_config({"conversion": {"type_name": "FromMapping"}})
    assert config.type_name == "FromMapping"
    assert config.input_file_name == "main.ts"

    config = api.resolve_config({"conversion": {"type_name": "FromMapping"}}, type_name="Kw")
    assert config.type_name == "Kw"

    frozen: Config = make_config(indent="  ")
    assert api.resolve_config(frozen) is not frozen
    assert api.resolve_config(frozen) == frozen

    with pytest.raises(ConfigError):
        api.resolve_config({"conversion": {"type_regex": "["}})


@mark_integration
def test_multi_type_to_schemas_and_write(tmp_path: Path) -> None:
    """Every ``*Input`` declaration becomes a schema keyed by its actor id."""
    source: Path = write_source(tmp_path, TWO_ACTORS_SOURCE)
    result: api.MultiSchemaResult = api.multi_type_to_schemas(source, config=make_config())
    assert list(result.schemas) == ["news", "shop"]
    assert result.schemas["shop"]["required"] == []
    assert len(result.diagnostics) == 0

    written: list[Path] = api.write_schemas(
        result.schemas, tmp_path / "actors", config=make_config()
    )
    assert [p.relative_to(tmp_path).as_posix() for p in written] == [
        "actors/news/.actor/INPUT_SCHEMA.json",
        "actors/shop/.actor/INPUT_SCHEMA.json",
    ]
    assert "id" not in json.loads(written[0].read_text(encoding="utf-8"))


def test_multi_type_to_schemas_without_match_warns(tmp_path: Path) -> None:
    """No matching declaration is not an error, but it is reported."""
    source: Path = write_source(tmp_path, TWO_ACTORS_SOURCE)
    result: api.MultiSchemaResult = api.multi_type_to_schemas(
        source, type_regex="Nothing.*", config=make_config()
    )
    assert dict(result.schemas) == {}
    assert result.diagnostics.messages() == [f"No declaration in {source} matches 'Nothing.*'"]


def test_schema_to_declaration(tmp_path: Path) -> None:
    """A schema file renders as one declaration with the configured name and indent."""
    path: Path = write_json(tmp_path / "INPUT_SCHEMA.json", simple_schema())
    result: api.DeclarationResult = api.schema_to_declaration(
        path, type_name="SearchInput", config=make_config(indent="  ")
    )
    assert result.source == path
    assert result.text.startswith("/**\n * @title Query input\n")
    assert "type SearchInput = {\n" in result.text
    assert "\n  query: string\n" in result.text
    assert result.text.endswith("}\n")


def test_schema_to_declaration_rejects_bad_input(tmp_path: Path) -> None:
    """Missing files are lookup failures; non-object JSON is a format error."""
    with pytest.raises(SourceNotFoundError):
        api.schema_to_declaration(tmp_path / "missing.json", config=make_config())

    bad: Path = tmp_path / "bad.json"
    bad.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(SchemaFormatError):
        api.schema_to_declaration(bad, config=make_config())


def test_actors_to_declarations(tmp_path: Path) -> None:
    """Each actor directory contributes one declaration; an empty folder warns."""
    write_json(tmp_path / "actors" / "finder" / "INPUT_SCHEMA.json", simple_schema("Find"))
    result: api.DeclarationResult = api.actors_to_declarations(
        tmp_path / "actors", config=make_config()
    )
    assert "type FinderInput = {\n" in result.text
    assert " * @id finder\n" in result.text

    (tmp_path / "empty").mkdir()
    empty: api.DeclarationResult = api.actors_to_declarations(
        tmp_path / "empty", config=make_config()
    )
    assert empty.text == ""
    assert empty.diagnostics.messages() == [f"No actor directories found in {tmp_path / 'empty'}"]


def test_dumps_schema_keeps_non_ascii_without_trailing_newline() -> None:
    """Schemas are written with four-space indentation and unescaped text."""
    schema: dict[str, Any] = {"title": "Café"}
    assert api.dumps_schema(schema) == '{\n    "title": "Café"\n}'


def test_version_is_a_string() -> None:
    """The version is the installed distribution's version."""
    assert isinstance(api.version(), str)
    assert api.version()
