# topmark:header:start
#
#   project      : ActorSchema
#   file         : io.py
#   file_relpath : src/actorschema/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load and inspect TOML configuration sources.

Parsing is done with `tomlkit` and returned as plain `dict` structures. Runtime
defaults are defined in code (`load_defaults_dict`), so ActorSchema works without
any configuration file.

Two families of helpers live here:
- loaders: `load_toml_dict`, `extract_tool_section`, `load_defaults_dict`;
- checked getters: validate a value's shape and raise `ConfigError` on mismatch.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeGuard, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from actorschema.config.keys import Toml
from actorschema.config.logging import get_logger
from actorschema.constants import (
    ACTOR_DIR_NAME,
    DEFAULT_INDENT,
    DEFAULT_INPUT_FILE_NAME,
    DEFAULT_TYPE_NAME,
    DEFAULT_TYPE_REGEX,
    MANIFEST_FILE_NAME,
    PYPROJECT_FILE_NAME,
    PYPROJECT_TOOL_SECTION,
    SCHEMA_FILE_NAME,
    SCHEMA_MARKER,
)
from actorschema.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from actorschema.config.logging import ActorSchemaLogger

logger: ActorSchemaLogger = get_logger(__name__)

TomlTable = dict[str, Any]


# --- Type guards ---


def is_toml_table(obj: object) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping.

    Args:
        obj (object): Value to test.

    Returns:
        TypeGuard[TomlTable]: ``True`` if ``obj`` is a ``dict[str, Any]``.
    """
    return isinstance(obj, dict)


# --- TOML file I/O ---


def load_defaults_dict() -> TomlTable:
    """Return ActorSchema's **runtime defaults** as a Python dict.

    This function performs no I/O. Sections and keys align with
    `actorschema.config.keys.Toml`.

    Returns:
        A new TOML-table-compatible dict containing the runtime defaults.
    """
    return {
        Toml.SECTION_CONVERSION: {
            Toml.KEY_TYPE_NAME: DEFAULT_TYPE_NAME,
            Toml.KEY_INPUT_FILE_NAME: DEFAULT_INPUT_FILE_NAME,
            Toml.KEY_TYPE_REGEX: DEFAULT_TYPE_REGEX,
            # NOTE: ignore_type defaults to None (unset) unless configured.
        },
        Toml.SECTION_LAYOUT: {
            Toml.KEY_SCHEMA_DIR: ACTOR_DIR_NAME,
            Toml.KEY_SCHEMA_FILE_NAME: SCHEMA_FILE_NAME,
            Toml.KEY_SCHEMA_MARKER: SCHEMA_MARKER,
            Toml.KEY_MANIFEST_FILE_NAME: MANIFEST_FILE_NAME,
        },
        Toml.SECTION_EMIT: {
            Toml.KEY_INDENT: DEFAULT_INDENT,
        },
    }


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document (``actorschema.toml`` or ``pyproject.toml``).

    Returns:
        The parsed TOML content.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if is_toml_table(data_any) else {}


def extract_tool_section(data: TomlTable, path: Path) -> TomlTable | None:
    """Return the ActorSchema table of a parsed configuration document.

    For ``pyproject.toml`` this is ``[tool.actorschema]`` (or None when absent);
    any other file is the ActorSchema table itself.
    """
    if path.name != PYPROJECT_FILE_NAME:
        return data
    tool: Any = data.get("tool", {})
    section: Any = tool.get(PYPROJECT_TOOL_SECTION) if is_toml_table(tool) else None
    if section is None:
        logger.debug("No [tool.%s] section in %s", PYPROJECT_TOOL_SECTION, path)
        return None
    if not is_toml_table(section):
        raise ConfigError(f"[tool.{PYPROJECT_TOOL_SECTION}] in {path} must be a table")
    return section


# --- Validation and checked getters ---


def check_known_keys(data: TomlTable, *, source: str) -> list[str]:
    """Return warnings for the sections and keys ActorSchema does not know.

    Raises:
        ConfigError: If a known section is not a table.
    """
    warnings: list[str] = []
    for section, value in data.items():
        if section not in Toml.ALLOWED_TOP_LEVEL_KEYS:
            warnings.append(f"Unknown configuration section [{section}] in {source}")
            continue
        if not is_toml_table(value):
            raise ConfigError(f"[{section}] in {source} must be a table")
        for key in value:
            if key not in Toml.ALLOWED_SECTION_KEYS[section]:
                warnings.append(f"Unknown key '{key}' in [{section}] of {source}")
    for message in warnings:
        logger.warning(message)
    return warnings


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table.

    Returns a new empty dict if the sub-table is missing or not a mapping.
    """
    value: Any | None = table.get(key)
    return value if is_toml_table(value) else {}


def get_checked_string(table: TomlTable, key: str, *, section: str) -> str | None:
    """Return the string at ``key``, or None when absent.

    Raises:
        ConfigError: If the value is present but not a string.
    """
    value: Any | None = table.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ConfigError(
        f"'{key}' in [{section}] must be a string, got {type(value).__name__} ({value!r})"
    )
