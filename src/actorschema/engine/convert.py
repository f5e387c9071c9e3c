# topmark:header:start
#
#   project      : ActorSchema
#   file         : convert.py
#   file_relpath : src/actorschema/engine/convert.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Single-declaration conversion steps shared by the API and batch modes.

Forward: `build_schema` resolves a declaration of a `Program`, walks it with
`TypeGraphWalker` and normalizes the result.

`load_schema_file` reads the schema documents fed to the reverse direction.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from actorschema.config.logging import get_logger
from actorschema.core.errors import SchemaFormatError, SourceNotFoundError
from actorschema.engine.normalizer import normalize_schema
from actorschema.engine.walker import TypeGraphWalker
from actorschema.typegraph.defaults import scan_destructuring_defaults

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from actorschema.config.logging import ActorSchemaLogger
    from actorschema.diagnostic.model import DiagnosticLog
    from actorschema.engine.schema import SchemaProperty
    from actorschema.typegraph.defaults import DestructuredDefault
    from actorschema.typegraph.nodes import TypeNode
    from actorschema.typegraph.reader import Declaration, Program

logger: ActorSchemaLogger = get_logger(__name__)


def find_defaults(program: Program, type_name: str) -> Mapping[str, DestructuredDefault]:
    """Return the destructuring defaults for ``type_name`` across the program.

    The main file is searched first; members it does not destructure are looked
    up in the other files, in order.
    """
    found: dict[str, DestructuredDefault] = {}
    for path, source in program.sources.items():
        for name, entry in scan_destructuring_defaults(source, type_name).items():
            if name not in found:
                logger.trace("Default for %s.%s found in %s", type_name, name, path)
                found[name] = entry
    return found


def build_schema(
    program: Program,
    declaration: Declaration,
    *,
    diagnostics: DiagnosticLog,
) -> dict[str, Any]:
    """Convert ``declaration`` into its canonical schema dict.

    Raises:
        ShapeClassificationError: If the declaration or a member has an unsupported type.
        AnnotationEvaluationError: If an evaluable tag is not a literal.
    """
    node: TypeNode = program.resolve_declaration(declaration)
    walker: TypeGraphWalker = TypeGraphWalker(diagnostics=diagnostics)
    root: SchemaProperty = walker.convert_declaration(
        node,
        name=declaration.name,
        doc=declaration.doc,
        defaults=find_defaults(program, declaration.name),
    )
    return normalize_schema(root.to_raw())


def load_schema_file(path: Path) -> dict[str, Any]:
    """Read a schema JSON document.

    Raises:
        SourceNotFoundError: If ``path`` is not a file.
        SchemaFormatError: If the file is not a JSON object.
    """
    if not path.is_file():
        raise SourceNotFoundError(path)
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SchemaFormatError(f"Malformed JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SchemaFormatError(f"{path} does not contain a JSON object")
    logger.debug("Loaded schema %s (%d top-level keys)", path, len(data))
    return data
