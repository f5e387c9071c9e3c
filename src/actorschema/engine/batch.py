# topmark:header:start
#
#   project      : ActorSchema
#   file         : batch.py
#   file_relpath : src/actorschema/engine/batch.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Multi-actor conversions.

An actors folder holds one subdirectory per actor (a *unit*). Units are
processed sequentially, in sorted order; hidden directories are skipped.

Reverse mode (`BatchOrchestrator.actors_to_declarations`) resolves each unit's
input schema:

1. the first ``*INPUT_SCHEMA*.json`` file in the unit directory, then in its
   ``.actor/`` subdirectory;
2. otherwise the manifest (``.actor/actor.json``, then ``actor.json``) whose
   ``input`` field is a path relative to the manifest's directory.

A unit without a resolvable schema aborts the whole batch.

Forward mode (`BatchOrchestrator.declarations_to_schemas`) converts every
declaration of one source file whose name matches ``type_regex``, and
`BatchOrchestrator.write_schemas` lays the results out as
``<write>/<id>/.actor/INPUT_SCHEMA.json``.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from actorschema.config.logging import get_logger
from actorschema.constants import DECLARATION_SUFFIX, JSON_INDENT, MANIFEST_INPUT_KEY
from actorschema.core.errors import SchemaFileNotFoundError, SchemaFormatError, SourceNotFoundError
from actorschema.engine.convert import build_schema, load_schema_file
from actorschema.engine.emitter import DeclarationEmitter
from actorschema.engine.schema import Key, SchemaProperty
from actorschema.utils.naming import to_kebab_case, to_pascal_case

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from actorschema.config import Config
    from actorschema.config.logging import ActorSchemaLogger
    from actorschema.diagnostic.model import DiagnosticLog
    from actorschema.typegraph.reader import Declaration, Program

logger: ActorSchemaLogger = get_logger(__name__)


@dataclass(frozen=True)
class ActorUnit:
    """One actor directory of a batch.

    Attributes:
        name: Directory name; used as the unit id.
        path: The actor directory.
        schema_path: Resolved input schema file.
    """

    name: str
    path: Path
    schema_path: Path

    @property
    def declaration_name(self) -> str:
        """Return the declaration name for this unit (``my-actor`` -> ``MyActorInput``)."""
        return f"{to_pascal_case(self.name)}{DECLARATION_SUFFIX}"


def unit_id_for(declaration_name: str, schema: dict[str, Any]) -> str:
    """Return the unit id of a converted declaration.

    The schema's own ``id`` (from an ``@id`` tag) wins; otherwise the declaration
    name without its ``Input`` suffix, kebab-cased (``MyActorInput`` -> ``my-actor``).
    """
    explicit: Any = schema.get(Key.ID)
    if isinstance(explicit, str) and explicit:
        return explicit
    base: str = declaration_name
    if base.endswith(DECLARATION_SUFFIX) and base != DECLARATION_SUFFIX:
        base = base[: -len(DECLARATION_SUFFIX)]
    return to_kebab_case(base)


class BatchOrchestrator:
    """Drives multi-actor conversions.

    Args:
        config: Layout and conversion settings.
        diagnostics: Log shared by every unit of the batch.
    """

    def __init__(self, config: Config, *, diagnostics: DiagnosticLog) -> None:
        self.config: Config = config
        self.diagnostics: DiagnosticLog = diagnostics

    # --- unit discovery ---

    def iter_units(self, actors_folder: Path) -> Iterator[ActorUnit]:
        """Yield the units of ``actors_folder`` in sorted order.

        Raises:
            SourceNotFoundError: If ``actors_folder`` is not a directory.
            SchemaFileNotFoundError: As soon as one unit has no resolvable schema.
        """
        if not actors_folder.is_dir():
            raise SourceNotFoundError(actors_folder, "not a directory")
        for path in sorted(actors_folder.iterdir()):
            if not path.is_dir() or path.name.startswith("."):
                continue
            yield ActorUnit(path.name, path, self.resolve_unit_schema(path))

    def resolve_unit_schema(self, unit_dir: Path) -> Path:
        """Return the input schema file of the unit at ``unit_dir``.

        Raises:
            SchemaFileNotFoundError: If neither a schema file nor a usable manifest exists.
            SchemaFormatError: If the manifest is not a JSON object.
        """
        schema_dir: Path = unit_dir / self.config.schema_dir
        for directory in (unit_dir, schema_dir):
            found: Path | None = self._find_marked_schema(directory)
            if found is not None:
                logger.debug("Unit %s: schema file %s", unit_dir.name, found)
                return found

        for manifest in (
            schema_dir / self.config.manifest_file_name,
            unit_dir / self.config.manifest_file_name,
        ):
            if manifest.is_file():
                return self._schema_from_manifest(unit_dir.name, manifest)

        raise SchemaFileNotFoundError(
            unit_dir.name,
            f"no *{self.config.schema_marker}*.json file and no "
            f"{self.config.manifest_file_name} manifest in {unit_dir}",
        )

    def _find_marked_schema(self, directory: Path) -> Path | None:
        if not directory.is_dir():
            return None
        for path in sorted(directory.iterdir()):
            if (
                path.is_file()
                and path.suffix == ".json"
                and self.config.schema_marker in path.name
            ):
                return path
        return None

    def _schema_from_manifest(self, unit: str, manifest: Path) -> Path:
        try:
            data: Any = json.loads(manifest.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise SchemaFormatError(f"Malformed JSON in manifest {manifest}: {exc}") from exc
        if not isinstance(data, dict):
            raise SchemaFormatError(f"Manifest {manifest} does not contain a JSON object")
        pointer: Any = data.get(MANIFEST_INPUT_KEY)
        if not isinstance(pointer, str) or not pointer:
            raise SchemaFileNotFoundError(
                unit, f"manifest {manifest} has no '{MANIFEST_INPUT_KEY}' path"
            )
        target: Path = manifest.parent / pointer
        if not target.is_file():
            raise SchemaFileNotFoundError(
                unit, f"manifest {manifest} points at missing file {target}"
            )
        logger.debug("Unit %s: schema %s via manifest %s", unit, target, manifest)
        return target

    # --- reverse mode ---

    def actors_to_declarations(self, actors_folder: Path) -> str:
        """Render one declaration per unit of ``actors_folder``.

        Every unit's schema is resolved before anything is rendered, so a missing
        schema aborts the batch without output. A nested type declared by several
        units is written once; a later unit whose type of the same name differs
        keeps the first declaration and adds a warning.

        Returns:
            The declarations, separated by a blank line.
        """
        units: list[ActorUnit] = list(self.iter_units(actors_folder))
        emitter: DeclarationEmitter = DeclarationEmitter(
            indent=self.config.indent, diagnostics=self.diagnostics
        )
        declared: dict[str, str] = {}
        for unit in units:
            schema: dict[str, Any] = load_schema_file(unit.schema_path)
            schema[Key.ID] = unit.name
            logger.info("Rendering %s from %s", unit.declaration_name, unit.schema_path)
            node: SchemaProperty = SchemaProperty.from_dict(schema)
            for type_name, text in emitter.emit_blocks(node, unit.declaration_name):
                if type_name not in declared:
                    declared[type_name] = text
                elif declared[type_name] != text:
                    self.diagnostics.add_warning(
                        f"Type {type_name} of {unit.name} differs from an earlier declaration;"
                        " keeping the first one"
                    )
                else:
                    logger.debug("Type %s of %s already declared", type_name, unit.name)
        return "\n".join(declared.values())

    # --- forward mode ---

    def select_declarations(self, program: Program) -> list[Declaration]:
        """Return the main-file declarations converted by the forward batch."""
        pattern: re.Pattern[str] = re.compile(self.config.type_regex)
        selected: list[Declaration] = []
        for declaration in program.declarations():
            if declaration.name == self.config.ignore_type:
                logger.debug("Ignoring %s", declaration.name)
                continue
            if pattern.fullmatch(declaration.name) is None:
                logger.trace("%s does not match %s", declaration.name, pattern.pattern)
                continue
            selected.append(declaration)
        return selected

    def declarations_to_schemas(self, program: Program) -> dict[str, dict[str, Any]]:
        """Convert every selected declaration of ``program``.

        Returns:
            Mapping of unit id to canonical schema, in declaration order.
        """
        schemas: dict[str, dict[str, Any]] = {}
        for declaration in self.select_declarations(program):
            schema: dict[str, Any] = build_schema(
                program, declaration, diagnostics=self.diagnostics
            )
            unit_id: str = unit_id_for(declaration.name, schema)
            if unit_id in schemas:
                self.diagnostics.add_warning(
                    f"Declaration {declaration.name} reuses actor id '{unit_id}'; "
                    "the later schema replaces the earlier one"
                )
            logger.info("Converted %s as actor '%s'", declaration.name, unit_id)
            schemas[unit_id] = schema
        return schemas

    def write_schemas(self, schemas: dict[str, dict[str, Any]], write_dir: Path) -> list[Path]:
        """Write each schema to ``<write_dir>/<id>/<schema_dir>/<schema_file_name>``.

        The schema's ``id`` is not written; the directory name carries it.

        Returns:
            The written files, in order.
        """
        written: list[Path] = []
        for unit_id, schema in schemas.items():
            target: Path = (
                write_dir / unit_id / self.config.schema_dir / self.config.schema_file_name
            )
            target.parent.mkdir(parents=True, exist_ok=True)
            payload: dict[str, Any] = {k: v for k, v in schema.items() if k != Key.ID}
            target.write_text(
                json.dumps(payload, indent=JSON_INDENT, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
            logger.info("Wrote %s", target)
            written.append(target)
        return written
