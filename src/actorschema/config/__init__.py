# topmark:header:start
#
#   project      : ActorSchema
#   file         : __init__.py
#   file_relpath : src/actorschema/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for ActorSchema.

This module defines the immutable `Config` snapshot used by the engine and the CLI,
and the `MutableConfig` draft used while layering configuration sources.

Precedence (lowest to highest):
    1. Built-in defaults (`load_defaults_dict`)
    2. ``pyproject.toml`` ``[tool.actorschema]`` in the working directory
    3. ``actorschema.toml`` in the working directory
    4. An explicit ``--config`` file (replaces discovery)
    5. CLI options via `MutableConfig.apply_cli_args`
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from actorschema.config.io import (
    TomlTable,
    check_known_keys,
    extract_tool_section,
    get_checked_string,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
)
from actorschema.config.keys import Toml
from actorschema.config.logging import ActorSchemaLogger, get_logger
from actorschema.constants import CONFIG_FILE_NAME, PYPROJECT_FILE_NAME
from actorschema.core.errors import ConfigError

# ArgsLike: generic mapping accepted by config loaders (CLI option dicts or API dicts).
ArgsLike = Mapping[str, Any]

logger: ActorSchemaLogger = get_logger(__name__)


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True)
class Config:
    """Immutable runtime configuration for ActorSchema.

    Attributes:
        config_files (tuple[Path | str, ...]): Sources merged into this snapshot.
        type_name (str): Declaration converted by single-actor commands.
        input_file_name (str): Source file name used when a directory is given.
        type_regex (str): Declarations converted by the multi-actor forward command.
        ignore_type (str | None): Declaration name excluded from the multi-actor run.
        schema_dir (str): Per-actor directory holding the schema and manifest.
        schema_file_name (str): File name schemas are written to.
        schema_marker (str): Substring identifying an input schema file.
        manifest_file_name (str): Actor manifest file name.
        indent (str): Indentation unit of emitted declarations.
    """

    config_files: tuple[Path | str, ...]

    # [conversion]
    type_name: str
    input_file_name: str
    type_regex: str
    ignore_type: str | None

    # [layout]
    schema_dir: str
    schema_file_name: str
    schema_marker: str
    manifest_file_name: str

    # [emit]
    indent: str

    def to_toml_dict(self) -> dict[str, Any]:
        """Convert this Config into a TOML-serializable dict (unset values omitted)."""
        conversion: dict[str, Any] = {
            Toml.KEY_TYPE_NAME: self.type_name,
            Toml.KEY_INPUT_FILE_NAME: self.input_file_name,
            Toml.KEY_TYPE_REGEX: self.type_regex,
        }
        if self.ignore_type is not None:
            conversion[Toml.KEY_IGNORE_TYPE] = self.ignore_type
        return {
            Toml.SECTION_CONVERSION: conversion,
            Toml.SECTION_LAYOUT: {
                Toml.KEY_SCHEMA_DIR: self.schema_dir,
                Toml.KEY_SCHEMA_FILE_NAME: self.schema_file_name,
                Toml.KEY_SCHEMA_MARKER: self.schema_marker,
                Toml.KEY_MANIFEST_FILE_NAME: self.manifest_file_name,
            },
            Toml.SECTION_EMIT: {
                Toml.KEY_INDENT: self.indent,
            },
        }

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            config_files=list(self.config_files),
            type_name=self.type_name,
            input_file_name=self.input_file_name,
            type_regex=self.type_regex,
            ignore_type=self.ignore_type,
            schema_dir=self.schema_dir,
            schema_file_name=self.schema_file_name,
            schema_marker=self.schema_marker,
            manifest_file_name=self.manifest_file_name,
            indent=self.indent,
        )


# ------------------ Mutable builder ------------------


@dataclass
class MutableConfig:
    """Mutable configuration draft used while merging sources.

    Unset values are ``None`` so that `merge_with` can tell "not configured"
    apart from "configured to the default".
    """

    config_files: list[Path | str] = field(default_factory=lambda: [])
    warnings: list[str] = field(default_factory=lambda: [])

    type_name: str | None = None
    input_file_name: str | None = None
    type_regex: str | None = None
    ignore_type: str | None = None

    schema_dir: str | None = None
    schema_file_name: str | None = None
    schema_marker: str | None = None
    manifest_file_name: str | None = None

    indent: str | None = None

    # ---------------------------- Build/freeze ----------------------------

    def freeze(self) -> Config:
        """Freeze the draft into an immutable `Config` snapshot.

        Raises:
            ConfigError: If a required value is unset or ``type_regex`` does not compile.
        """
        values: dict[str, str | None] = {
            "type_name": self.type_name,
            "input_file_name": self.input_file_name,
            "type_regex": self.type_regex,
            "schema_dir": self.schema_dir,
            "schema_file_name": self.schema_file_name,
            "schema_marker": self.schema_marker,
            "manifest_file_name": self.manifest_file_name,
            "indent": self.indent,
        }
        missing: list[str] = [k for k, v in values.items() if v is None]
        if missing:
            raise ConfigError(f"Configuration values not set: {', '.join(missing)}")
        assert self.type_regex is not None
        try:
            re.compile(self.type_regex)
        except re.error as exc:
            raise ConfigError(f"Invalid type_regex {self.type_regex!r}: {exc}") from exc
        return Config(
            config_files=tuple(self.config_files),
            type_name=str(self.type_name),
            input_file_name=str(self.input_file_name),
            type_regex=self.type_regex,
            ignore_type=self.ignore_type,
            schema_dir=str(self.schema_dir),
            schema_file_name=str(self.schema_file_name),
            schema_marker=str(self.schema_marker),
            manifest_file_name=str(self.manifest_file_name),
            indent=str(self.indent),
        )

    # --------------------------- Loaders/parsers --------------------------

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a draft holding ActorSchema's runtime defaults."""
        return cls.from_toml_dict(load_defaults_dict(), source="<defaults>")

    @classmethod
    def from_toml_dict(cls, data: TomlTable, *, source: str) -> MutableConfig:
        """Create a draft from a parsed ActorSchema table.

        Args:
            data (TomlTable): The ActorSchema table (sections at the top level).
            source (str): Name of the source, used in messages.

        Returns:
            MutableConfig: The resulting draft; keys absent from ``data`` stay unset and
                unknown keys are reported in ``warnings``.

        Raises:
            ConfigError: If a section is not a table or a value is not a string.
        """
        draft: MutableConfig = cls(warnings=check_known_keys(data, source=source))

        conversion_tbl: TomlTable = get_table_value(data, Toml.SECTION_CONVERSION)
        logger.trace("TOML [conversion]: %s", conversion_tbl)
        layout_tbl: TomlTable = get_table_value(data, Toml.SECTION_LAYOUT)
        logger.trace("TOML [layout]: %s", layout_tbl)
        emit_tbl: TomlTable = get_table_value(data, Toml.SECTION_EMIT)
        logger.trace("TOML [emit]: %s", emit_tbl)

        def conversion(key: str) -> str | None:
            return get_checked_string(conversion_tbl, key, section=Toml.SECTION_CONVERSION)

        def layout(key: str) -> str | None:
            return get_checked_string(layout_tbl, key, section=Toml.SECTION_LAYOUT)

        draft.type_name = conversion(Toml.KEY_TYPE_NAME)
        draft.input_file_name = conversion(Toml.KEY_INPUT_FILE_NAME)
        draft.type_regex = conversion(Toml.KEY_TYPE_REGEX)
        draft.ignore_type = conversion(Toml.KEY_IGNORE_TYPE)

        draft.schema_dir = layout(Toml.KEY_SCHEMA_DIR)
        draft.schema_file_name = layout(Toml.KEY_SCHEMA_FILE_NAME)
        draft.schema_marker = layout(Toml.KEY_SCHEMA_MARKER)
        draft.manifest_file_name = layout(Toml.KEY_MANIFEST_FILE_NAME)

        draft.indent = get_checked_string(emit_tbl, Toml.KEY_INDENT, section=Toml.SECTION_EMIT)
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        Supports ``actorschema.toml`` and ``pyproject.toml`` (``[tool.actorschema]``).

        Returns:
            MutableConfig | None: The draft, or None when a ``pyproject.toml`` has
                no ActorSchema section.

        Raises:
            ConfigError: If the file is unreadable or invalid.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        table: TomlTable | None = extract_tool_section(load_toml_dict(path), path)
        if table is None:
            return None
        draft: MutableConfig = cls.from_toml_dict(table, source=str(path))
        draft.config_files = [path]
        logger.debug("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files found in ``start``, lowest precedence first."""
        found: list[Path] = [
            start / name
            for name in (PYPROJECT_FILE_NAME, CONFIG_FILE_NAME)
            if (start / name).is_file()
        ]
        logger.debug("Discovered config files in %s: %s", start, found)
        return found

    @classmethod
    def load_merged(
        cls,
        *,
        config_file: Path | None = None,
        cwd: Path | None = None,
    ) -> MutableConfig:
        """Load a layered configuration.

        Args:
            config_file (Path | None): Explicit configuration file. When given,
                discovery in ``cwd`` is skipped.
            cwd (Path | None): Directory searched for configuration files
                (defaults to the current working directory).

        Returns:
            MutableConfig: A merged draft that callers can further override then freeze.

        Raises:
            ConfigError: If an explicit ``config_file`` is missing, or a source is invalid.
        """
        draft: MutableConfig = cls.from_defaults()
        if config_file is not None:
            if not config_file.is_file():
                raise ConfigError(f"Configuration file not found: {config_file}")
            paths: list[Path] = [config_file]
        else:
            paths = cls.discover_local_config_files(cwd or Path.cwd())
        for path in paths:
            maybe: MutableConfig | None = cls.from_toml_file(path)
            if maybe is not None:
                draft = draft.merge_with(maybe)
        return draft

    # ------------------------------- Merging -------------------------------

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft."""
        def pick(mine: str | None, theirs: str | None) -> str | None:
            return theirs if theirs is not None else mine

        return MutableConfig(
            config_files=self.config_files + other.config_files,
            warnings=self.warnings + other.warnings,
            type_name=pick(self.type_name, other.type_name),
            input_file_name=pick(self.input_file_name, other.input_file_name),
            type_regex=pick(self.type_regex, other.type_regex),
            ignore_type=pick(self.ignore_type, other.ignore_type),
            schema_dir=pick(self.schema_dir, other.schema_dir),
            schema_file_name=pick(self.schema_file_name, other.schema_file_name),
            schema_marker=pick(self.schema_marker, other.schema_marker),
            manifest_file_name=pick(self.manifest_file_name, other.manifest_file_name),
            indent=pick(self.indent, other.indent),
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Override draft values with the non-None entries of ``args``.

        Keys are the `Config` attribute names (``type_name``, ``type_regex``, ...);
        unknown keys are ignored.

        Returns:
            MutableConfig: This draft, updated in place.
        """
        logger.debug("Applying CLI arguments to MutableConfig: %s", args)
        applied: bool = False
        for key, value in args.items():
            if value is None or key in ("config_files", "warnings"):
                continue
            if hasattr(self, key):
                setattr(self, key, str(value))
                applied = True
        if applied:
            self.config_files.append("<CLI overrides>")
        return self


def load_config(
    *,
    config_file: Path | None = None,
    cwd: Path | None = None,
    overrides: ArgsLike | None = None,
) -> tuple[Config, list[str]]:
    """Resolve the effective configuration.

    Returns:
        tuple[Config, list[str]]: The frozen configuration and the warnings
            collected while reading configuration files.

    Raises:
        ConfigError: If a configuration source is invalid.
    """
    draft: MutableConfig = MutableConfig.load_merged(config_file=config_file, cwd=cwd)
    if overrides:
        draft.apply_cli_args(overrides)
    return draft.freeze(), list(draft.warnings)
