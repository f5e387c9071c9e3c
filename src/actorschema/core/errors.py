# topmark:header:start
#
#   project      : ActorSchema
#   file         : errors.py
#   file_relpath : src/actorschema/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the ActorSchema conversion engine.

Every fatal condition of a conversion is an `ActorSchemaError`. The engine
propagates these unchanged; the CLI (see `actorschema.cli.errors`) is the only
place where they become exit codes.

Taxonomy:
    * `LookupFailure`: a file, declaration, schema or manifest does not exist.
    * `ShapeClassificationError`: a type matches none of the supported shapes.
    * `AnnotationEvaluationError`: an evaluable JSDoc tag is not a literal.
    * `SchemaFormatError`: a schema or manifest file is not usable JSON.
    * `ConfigError`: the TOML configuration is invalid.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class ActorSchemaError(Exception):
    """Base class for all ActorSchema engine errors."""


class LookupFailure(ActorSchemaError):
    """A named declaration, source file, schema file or manifest is missing."""


class SourceNotFoundError(LookupFailure):
    """The source file or directory to convert does not exist."""

    def __init__(self, path: Path, detail: str = "") -> None:
        self.path: Path = path
        message: str = f"Source not found: {path}"
        super().__init__(f"{message} ({detail})" if detail else message)


class DeclarationNotFoundError(LookupFailure):
    """No type, interface or enum with the requested name is declared."""

    def __init__(self, name: str, where: str) -> None:
        self.name: str = name
        super().__init__(f"No '{name}' type or interface found in {where}")


class SchemaFileNotFoundError(LookupFailure):
    """An actor has neither an input schema file nor a manifest pointing at one."""

    def __init__(self, unit: str, detail: str) -> None:
        self.unit: str = unit
        super().__init__(f"Cannot resolve input schema for actor '{unit}': {detail}")


class ShapeClassificationError(ActorSchemaError):
    """A type node matches none of the recognized shapes."""

    def __init__(self, path: Sequence[str], description: str) -> None:
        self.path: tuple[str, ...] = tuple(path)
        location: str = ".".join(self.path) or "<root>"
        super().__init__(f"Unsupported type for '{location}': {description}")


class AnnotationEvaluationError(ActorSchemaError):
    """An evaluable JSDoc tag does not hold a valid literal expression."""

    def __init__(self, tag: str, raw: str, cause: Exception) -> None:
        self.tag: str = tag
        self.raw: str = raw
        self.cause: Exception = cause
        super().__init__(f"Cannot evaluate @{tag} value {raw!r}: {cause}")


class SchemaFormatError(ActorSchemaError):
    """A schema (or manifest) document is malformed."""


class ConfigError(ActorSchemaError):
    """The ActorSchema TOML configuration is invalid."""
