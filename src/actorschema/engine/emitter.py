# topmark:header:start
#
#   project      : ActorSchema
#   file         : emitter.py
#   file_relpath : src/actorschema/engine/emitter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Schema to TypeScript declaration rendering.

`DeclarationEmitter` is the inverse of the walker: it renders a schema tree as
a ``type Name = { ... }`` declaration whose members carry JSDoc tags, so that
reading the text back produces the same schema.

Rendering rules:

- every member gets a JSDoc block with one ``@tag`` line per non-structural
  field; evaluable fields (``@default``, ``@prefill``, ``@items``, ...) are
  written as literal expressions and ``@required`` reflects the parent's
  ``required`` list;
- ``integer`` renders as ``number``; arrays render as ``string[]`` when their
  editor is ``stringList`` and as ``any[]`` otherwise; enums render as a union
  of quoted literals in ``enum`` order;
- nested objects render inline, one indentation level deeper, except objects
  with an ``id``: those become a separate ``type`` declaration named after the
  id and are referenced by name. A later object whose id maps to a type name
  already taken keeps the first declaration and is reported as a warning when
  the two differ;
- recognized ``@tag`` names inside titles, descriptions and values are written
  as ``\\@tag`` so they are not read back as tags;
- a member is optional (``?``) when it has a default, whatever ``required``
  says, or when it is not required.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Final

from actorschema.config.logging import get_logger
from actorschema.constants import DEFAULT_INDENT
from actorschema.core.errors import SchemaFormatError
from actorschema.engine.annotations import Tag, escape_tags
from actorschema.engine.literals import format_literal
from actorschema.engine.normalizer import normalize_schema
from actorschema.engine.schema import Editor, SchemaKind, SchemaProperty
from actorschema.utils.naming import is_identifier, to_pascal_case

if TYPE_CHECKING:
    from actorschema.config.logging import ActorSchemaLogger
    from actorschema.diagnostic.model import DiagnosticLog

logger: ActorSchemaLogger = get_logger(__name__)

_PRIMITIVE_SPELLING: Final[Mapping[SchemaKind, str]] = {
    SchemaKind.INTEGER: "number",
    SchemaKind.STRING: "string",
    SchemaKind.BOOLEAN: "boolean",
}
STRING_ARRAY_SPELLING: Final[str] = "string[]"
ANY_ARRAY_SPELLING: Final[str] = "any[]"
ANY_OBJECT_SPELLING: Final[str] = "Record<string, any>"


def quote_string(value: str) -> str:
    """Return ``value`` as a single-quoted TypeScript string literal."""
    escaped: str = value.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return f"'{escaped}'"


def _doc_text(value: str) -> str:
    # Keep the comment closed only where we close it.
    return escape_tags(" ".join(value.split()).replace("*/", "*\\/"))


def _literal(value: Any) -> str:
    if isinstance(value, SchemaProperty):
        value = normalize_schema(value.to_raw())
    return _doc_text(format_literal(value))


@dataclass
class DeclarationEmitter:
    """Renders schema trees as TypeScript declarations.

    Attributes:
        indent: Indentation unit for one nesting level.
        diagnostics: Log receiving warnings about conflicting type names; when
            absent the warnings only go to the module logger.
    """

    indent: str = DEFAULT_INDENT
    diagnostics: DiagnosticLog | None = None
    _hoisted: dict[str, str] = field(default_factory=lambda: {}, init=False, repr=False)

    def emit(self, schema: SchemaProperty, name: str) -> str:
        """Render ``schema`` as a declaration named ``name``.

        Args:
            schema: Root schema node; must be an ``object``.
            name: Name of the declared type.

        Returns:
            The declaration text, preceded by the declarations of nested objects
            that carry an ``id``. Ends with a newline.

        Raises:
            SchemaFormatError: If ``schema`` is not an object node.
        """
        return "\n".join(text for _, text in self.emit_blocks(schema, name))

    def emit_blocks(self, schema: SchemaProperty, name: str) -> list[tuple[str, str]]:
        """Render ``schema`` as ``(type name, declaration text)`` pairs.

        The declarations of nested objects with an ``id`` come first, the
        declaration of ``name`` last.

        Raises:
            SchemaFormatError: If ``schema`` is not an object node.
        """
        if not schema.is_object:
            raise SchemaFormatError(f"Cannot declare '{name}': the root schema is not an object")
        self._hoisted = {}
        main: str = self._declaration(schema, name)
        logger.debug("Emitted %s with %d hoisted declaration(s)", name, len(self._hoisted))
        return [*self._hoisted.items(), (name, main)]

    # --- blocks ---

    def _declaration(self, schema: SchemaProperty, name: str) -> str:
        lines: list[str] = self._doc_block(self._doc_lines(schema, required=None), depth=0)
        lines.append(f"type {name} = {self._object_body(schema, depth=0)}")
        return "\n".join(lines) + "\n"

    def _object_body(self, schema: SchemaProperty, *, depth: int) -> str:
        if not schema.properties:
            return "{}"
        inner: str = self.indent * (depth + 1)
        lines: list[str] = ["{"]
        for prop_name, prop in schema.properties.items():
            is_required: bool = schema.is_required(prop_name)
            lines.extend(self._doc_block(self._doc_lines(prop, required=is_required), depth + 1))
            optional: str = "?" if prop.default is not None or not is_required else ""
            key: str = prop_name if is_identifier(prop_name) else quote_string(prop_name)
            lines.append(f"{inner}{key}{optional}: {self._type_expression(prop, depth=depth + 1)}")
        lines.append(self.indent * depth + "}")
        return "\n".join(lines)

    def _doc_block(self, doc_lines: list[str], depth: int) -> list[str]:
        if not doc_lines:
            return []
        prefix: str = self.indent * depth
        return [f"{prefix}/**", *(f"{prefix} * {line}" for line in doc_lines), f"{prefix} */"]

    def _doc_lines(self, prop: SchemaProperty, *, required: bool | None) -> list[str]:
        enum_titles: list[str] | None = None
        if prop.enum_titles is not None:
            enum_titles = list(prop.enum_titles)
        unique_items: str | None = None
        if prop.unique_items is not None:
            unique_items = str(prop.unique_items).lower()
        # (tag, value, written as a literal expression)
        entries: list[tuple[str, Any, bool]] = [
            (Tag.TITLE, prop.title, False),
            (Tag.DESCRIPTION, prop.description, False),
            (Tag.EDITOR, prop.editor, False),
            (Tag.DEFAULT, prop.default, True),
            (Tag.PREFILL, prop.prefill, True),
            (Tag.ENUM_TITLES, enum_titles, True),
            (Tag.ID, prop.id, False),
            (Tag.UNIQUE_ITEMS, unique_items, False),
            (Tag.EXAMPLE, prop.example, True),
            (Tag.ITEMS, prop.items, True),
            (Tag.SECTION_CAPTION, prop.section_caption, False),
            (Tag.SECTION_DESCRIPTION, prop.section_description, False),
            (Tag.MINIMUM, prop.minimum, True),
            (Tag.MAXIMUM, prop.maximum, True),
            (Tag.SCHEMA_VERSION, prop.schema_version, True),
        ]
        lines: list[str] = [
            f"@{tag} {_literal(value) if as_literal else _doc_text(str(value))}"
            for tag, value, as_literal in entries
            if value is not None
        ]
        if required is not None:
            lines.append(f"@{Tag.REQUIRED} {str(required).lower()}")
        return lines

    # --- type expressions ---

    def _type_expression(self, prop: SchemaProperty, *, depth: int) -> str:
        kind: SchemaKind = prop.kind
        if kind is SchemaKind.ENUM:
            values: tuple[Any, ...] = prop.enum or ()
            if not values:
                return "never"
            return " | ".join(
                quote_string(v) if isinstance(v, str) else format_literal(v) for v in values
            )
        if kind is SchemaKind.ARRAY:
            if prop.editor == Editor.STRING_LIST:
                return STRING_ARRAY_SPELLING
            return ANY_ARRAY_SPELLING
        if kind is SchemaKind.OBJECT:
            if prop.id:
                return self._hoist(prop)
            if not prop.properties and prop.required is None:
                return ANY_OBJECT_SPELLING
            return self._object_body(prop, depth=depth)
        return _PRIMITIVE_SPELLING[kind]

    def _hoist(self, prop: SchemaProperty) -> str:
        assert prop.id is not None
        name: str = to_pascal_case(prop.id)
        if name not in self._hoisted:
            # Reserve the name first so self-references cannot recurse forever.
            self._hoisted[name] = ""
            self._hoisted[name] = self._declaration(prop, name)
        elif self._hoisted[name] and self._declaration(prop, name) != self._hoisted[name]:
            self._warn(
                f"Object with id '{prop.id}' conflicts with an earlier type {name};"
                " keeping the first declaration"
            )
        return name

    def _warn(self, message: str) -> None:
        if self.diagnostics is None:
            logger.warning("%s", message)
        else:
            self.diagnostics.add_warning(message)


def emit_declaration(
    schema: SchemaProperty | Mapping[str, Any],
    name: str,
    *,
    indent: str = DEFAULT_INDENT,
    diagnostics: DiagnosticLog | None = None,
) -> str:
    """Render ``schema`` (a node or a loaded JSON mapping) as a declaration named ``name``."""
    node: SchemaProperty = (
        schema if isinstance(schema, SchemaProperty) else SchemaProperty.from_dict(schema)
    )
    return DeclarationEmitter(indent=indent, diagnostics=diagnostics).emit(node, name)
