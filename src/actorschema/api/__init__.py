# topmark:header:start
#
#   project      : ActorSchema
#   file         : __init__.py
#   file_relpath : src/actorschema/api/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public ActorSchema API (stable surface).

This module exposes a **small, typed API** for running conversions without going
through the CLI. Every function raises an `actorschema.core.errors.ActorSchemaError`
on fatal conditions and otherwise returns its result together with the
diagnostics collected along the way.

Configuration contract
----------------------
- ``config=None`` uses the same discovery as the CLI (defaults, then
  ``pyproject.toml`` / ``actorschema.toml`` in the working directory).
- A plain **mapping** mirroring the TOML shape is layered on top of the defaults.
- A frozen [`actorschema.config.Config`][] is used as is.
- Keyword arguments such as ``type_name`` override the configuration.

```python
from actorschema import api

result = api.type_to_schema("actors/my-actor/src", type_name="Input")
print(api.dumps_schema(result.schema))
```
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from actorschema.api.types import DeclarationResult, MultiSchemaResult, SchemaResult
from actorschema.config import Config, MutableConfig, load_config
from actorschema.config.logging import get_logger
from actorschema.constants import ACTORSCHEMA_VERSION, JSON_INDENT
from actorschema.core.errors import SourceNotFoundError
from actorschema.diagnostic.model import DiagnosticLog
from actorschema.engine.batch import BatchOrchestrator
from actorschema.engine.convert import build_schema, load_schema_file
from actorschema.engine.emitter import emit_declaration
from actorschema.typegraph.reader import Program

if TYPE_CHECKING:
    from collections.abc import Mapping

    from actorschema.config.logging import ActorSchemaLogger
    from actorschema.typegraph.reader import Declaration

__all__ = [
    "DeclarationResult",
    "MultiSchemaResult",
    "SchemaResult",
    "actors_to_declarations",
    "dumps_schema",
    "multi_type_to_schemas",
    "resolve_config",
    "resolve_source_file",
    "schema_to_declaration",
    "type_to_schema",
    "version",
    "write_schemas",
]

logger: ActorSchemaLogger = get_logger(__name__)


# --- helpers ---


def resolve_config(
    config: Config | Mapping[str, Any] | None = None,
    **overrides: str | None,
) -> Config:
    """Return the effective `Config` for an API call.

    Args:
        config: ``None`` for discovery, a TOML-shaped mapping layered on the
            defaults, or a frozen `Config`.
        **overrides: `Config` attribute values; ``None`` values are ignored.

    Raises:
        ConfigError: If the configuration is invalid.
    """
    if isinstance(config, Config):
        draft: MutableConfig = config.thaw()
    elif config is None:
        resolved, _warnings = load_config()
        draft = resolved.thaw()
    else:
        draft = MutableConfig.from_defaults().merge_with(
            MutableConfig.from_toml_dict(dict(config), source="<api>")
        )
    if any(v is not None for v in overrides.values()):
        draft.apply_cli_args(overrides)
    return draft.freeze()


def resolve_source_file(source: str | Path, input_file_name: str) -> Path:
    """Return the source file to read.

    A directory is joined with ``input_file_name``; a file is used as is.

    Raises:
        SourceNotFoundError: If the resulting file does not exist.
    """
    path: Path = Path(source)
    if path.is_dir():
        path = path / input_file_name
    if not path.is_file():
        raise SourceNotFoundError(path)
    return path


def dumps_schema(schema: Mapping[str, Any]) -> str:
    """Serialize a schema as indented JSON (4 spaces, non-ASCII kept)."""
    return json.dumps(schema, indent=JSON_INDENT, ensure_ascii=False)


# --- forward direction ---


def type_to_schema(
    source: str | Path,
    *,
    type_name: str | None = None,
    input_file_name: str | None = None,
    config: Config | Mapping[str, Any] | None = None,
) -> SchemaResult:
    """Convert one declaration of a TypeScript source to its input schema.

    Args:
        source: A source file, or a directory holding ``input_file_name``.
        type_name: Declaration to convert (default ``Input``).
        input_file_name: File name used when ``source`` is a directory
            (default ``main.ts``).
        config: See the module docstring.

    Returns:
        SchemaResult: The canonical schema and its diagnostics.

    Raises:
        SourceNotFoundError: If the source file does not exist.
        DeclarationNotFoundError: If ``type_name`` is not declared.
        ShapeClassificationError: If a member has an unsupported type.
        AnnotationEvaluationError: If an evaluable tag is not a literal.
    """
    cfg: Config = resolve_config(config, type_name=type_name, input_file_name=input_file_name)
    path: Path = resolve_source_file(source, cfg.input_file_name)
    program: Program = Program.from_path(path)
    declaration: Declaration = program.get(cfg.type_name)
    diagnostics: DiagnosticLog = DiagnosticLog()
    schema: dict[str, Any] = build_schema(program, declaration, diagnostics=diagnostics)
    logger.info("Converted %s from %s", cfg.type_name, path)
    return SchemaResult(
        source=path,
        type_name=cfg.type_name,
        schema=schema,
        diagnostics=diagnostics.freeze(),
    )


def multi_type_to_schemas(
    source: str | Path,
    *,
    input_file_name: str | None = None,
    type_regex: str | None = None,
    ignore_type: str | None = None,
    config: Config | Mapping[str, Any] | None = None,
) -> MultiSchemaResult:
    """Convert every matching declaration of one source file.

    Args:
        source: A source file, or a directory holding ``input_file_name``.
        input_file_name: File name used when ``source`` is a directory.
        type_regex: Declarations whose full name matches are converted
            (default ``.*Input$``).
        ignore_type: One declaration name to skip.
        config: See the module docstring.

    Returns:
        MultiSchemaResult: Schemas keyed by actor id.
    """
    cfg: Config = resolve_config(
        config,
        input_file_name=input_file_name,
        type_regex=type_regex,
        ignore_type=ignore_type,
    )
    path: Path = resolve_source_file(source, cfg.input_file_name)
    diagnostics: DiagnosticLog = DiagnosticLog()
    orchestrator: BatchOrchestrator = BatchOrchestrator(cfg, diagnostics=diagnostics)
    schemas: dict[str, dict[str, Any]] = orchestrator.declarations_to_schemas(
        Program.from_path(path)
    )
    if not schemas:
        diagnostics.add_warning(f"No declaration in {path} matches '{cfg.type_regex}'")
    return MultiSchemaResult(source=path, schemas=schemas, diagnostics=diagnostics.freeze())


def write_schemas(
    schemas: Mapping[str, Mapping[str, Any]],
    write_dir: str | Path,
    *,
    config: Config | Mapping[str, Any] | None = None,
) -> list[Path]:
    """Write schemas keyed by actor id as ``<write_dir>/<id>/.actor/INPUT_SCHEMA.json``.

    Returns:
        The written files.
    """
    cfg: Config = resolve_config(config)
    orchestrator: BatchOrchestrator = BatchOrchestrator(cfg, diagnostics=DiagnosticLog())
    return orchestrator.write_schemas(
        {unit_id: dict(schema) for unit_id, schema in schemas.items()}, Path(write_dir)
    )


# --- reverse direction ---


def schema_to_declaration(
    source: str | Path,
    *,
    type_name: str | None = None,
    config: Config | Mapping[str, Any] | None = None,
) -> DeclarationResult:
    """Render one schema JSON file as a TypeScript declaration.

    Args:
        source: The schema file.
        type_name: Name of the declared type (default ``Input``).
        config: See the module docstring.

    Raises:
        SourceNotFoundError: If ``source`` is not a file.
        SchemaFormatError: If the file is not a usable object schema.
    """
    cfg: Config = resolve_config(config, type_name=type_name)
    path: Path = Path(source)
    diagnostics: DiagnosticLog = DiagnosticLog()
    text: str = emit_declaration(
        load_schema_file(path), cfg.type_name, indent=cfg.indent, diagnostics=diagnostics
    )
    return DeclarationResult(source=path, text=text, diagnostics=diagnostics.freeze())


def actors_to_declarations(
    actors_folder: str | Path,
    *,
    config: Config | Mapping[str, Any] | None = None,
) -> DeclarationResult:
    """Render one declaration per actor directory of ``actors_folder``.

    Raises:
        SourceNotFoundError: If ``actors_folder`` is not a directory.
        SchemaFileNotFoundError: If one actor has no resolvable input schema.
        SchemaFormatError: If a schema or manifest is malformed.
    """
    cfg: Config = resolve_config(config)
    path: Path = Path(actors_folder)
    diagnostics: DiagnosticLog = DiagnosticLog()
    text: str = BatchOrchestrator(cfg, diagnostics=diagnostics).actors_to_declarations(path)
    if not text:
        diagnostics.add_warning(f"No actor directories found in {path}")
    return DeclarationResult(source=path, text=text, diagnostics=diagnostics.freeze())


def version() -> str:
    """Return the installed ActorSchema version."""
    return ACTORSCHEMA_VERSION
