# topmark:header:start
#
#   project      : ActorSchema
#   file         : types.py
#   file_relpath : src/actorschema/api/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Stable public types for the ActorSchema API.

This module defines the dataclasses returned by the functions of
[`actorschema.api`][actorschema.api]. These shapes follow the project's semver policy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from actorschema.diagnostic.model import FrozenDiagnosticLog


@dataclass(frozen=True)
class SchemaResult:
    """Result of a single forward conversion.

    Attributes:
        source (Path): The source file that was read.
        type_name (str): The converted declaration.
        schema (Mapping[str, Any]): The canonical input schema.
        diagnostics (FrozenDiagnosticLog): Warnings collected during the conversion.
    """

    source: Path
    type_name: str
    schema: Mapping[str, Any]
    diagnostics: FrozenDiagnosticLog


@dataclass(frozen=True)
class MultiSchemaResult:
    """Result of a multi-actor forward conversion.

    Attributes:
        source (Path): The source file that was read.
        schemas (Mapping[str, Mapping[str, Any]]): Canonical schemas keyed by actor id,
            in declaration order.
        diagnostics (FrozenDiagnosticLog): Warnings collected during the conversion.
    """

    source: Path
    schemas: Mapping[str, Mapping[str, Any]]
    diagnostics: FrozenDiagnosticLog


@dataclass(frozen=True)
class DeclarationResult:
    """Result of a reverse conversion (one schema or a whole actors folder).

    Attributes:
        source (Path): The schema file or actors folder that was read.
        text (str): The rendered declaration(s).
        diagnostics (FrozenDiagnosticLog): Warnings collected during the conversion.
    """

    source: Path
    text: str
    diagnostics: FrozenDiagnosticLog
