# topmark:header:start
#
#   project      : ActorSchema
#   file         : walker.py
#   file_relpath : src/actorschema/engine/walker.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type graph to schema conversion.

`TypeGraphWalker` turns the node graph of an input declaration into a
`SchemaProperty` tree. Nodes are classified in a fixed order:

1. `EnumNode`: a ``select`` field whose ``enum`` lists the literal values.
2. `ObjectNode` / `ArrayNode`: objects recurse into their members; arrays
   describe their element shape in ``items``.
3. `PrimitiveNode`: ``string``, ``number`` (``integer``) and ``boolean``; any
   other primitive name falls back to a ``string`` text field.
4. `AnyObjectNode`: a bare ``object``. `UnsupportedNode` is fatal.

Each member's JSDoc block is parsed with
`actorschema.engine.annotations.parse_annotation`; tag values override the
values derived from the type (an ``@editor`` tag wins over the default editor).

A member is required when it has no default (``@default`` tag or
destructuring default) and is neither declared optional (``?``) nor tagged
``@required false``.
"""

from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

from actorschema.config.logging import get_logger
from actorschema.core.errors import ShapeClassificationError
from actorschema.engine.annotations import EMPTY_ANNOTATION, Annotation, Tag, parse_annotation
from actorschema.engine.literals import LiteralSyntaxError, parse_literal
from actorschema.engine.schema import EDITOR_BY_KIND, Editor, SchemaKind, SchemaProperty
from actorschema.typegraph.defaults import EMPTY_DEFAULTS, DestructuredDefault
from actorschema.typegraph.nodes import (
    AnyObjectNode,
    ArrayNode,
    EnumNode,
    Member,
    ObjectNode,
    PrimitiveNode,
    TypeNode,
    UnsupportedNode,
)
from actorschema.utils.naming import humanize

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from actorschema.config.logging import ActorSchemaLogger
    from actorschema.diagnostic.model import DiagnosticLog

logger: ActorSchemaLogger = get_logger(__name__)

KIND_BY_PRIMITIVE: Final[Mapping[str, SchemaKind]] = MappingProxyType(
    {
        "string": SchemaKind.STRING,
        "number": SchemaKind.INTEGER,
        "bigint": SchemaKind.INTEGER,
        "boolean": SchemaKind.BOOLEAN,
    }
)

_ITEMS_SEGMENT: Final[str] = "[]"


def _location(path: Sequence[str]) -> str:
    return ".".join(path) or "<root>"


def _coerce(value: Any, kind: SchemaKind) -> Any:
    """Coerce a default or prefill value to the scalar type of ``kind``."""
    if isinstance(value, str):
        text: str = value.strip()
        if kind is SchemaKind.INTEGER:
            try:
                number: float = float(text)
            except ValueError:
                return value
            return int(number) if number.is_integer() and "." not in text else number
        if kind is SchemaKind.BOOLEAN and text.lower() in ("true", "false"):
            return text.lower() == "true"
    return value


def _as_flag(value: Any) -> bool | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip().lower() in ("", "true")
    return bool(value)


def _same_literal(left: Any, right: Any) -> bool:
    # True == 1 in Python; booleans only match booleans.
    if isinstance(left, bool) or isinstance(right, bool):
        return left is right
    return bool(left == right)


def _fits_kind(value: Any, kind: SchemaKind) -> bool:
    """Return True if ``value`` has the JSON shape of ``kind``."""
    if kind is SchemaKind.INTEGER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if kind is SchemaKind.STRING:
        return isinstance(value, str)
    if kind is SchemaKind.BOOLEAN:
        return isinstance(value, bool)
    if kind is SchemaKind.ARRAY:
        return isinstance(value, list)
    if kind is SchemaKind.OBJECT:
        return isinstance(value, dict)
    return True


class TypeGraphWalker:
    """Converts resolved type nodes into schema properties.

    Args:
        diagnostics: Log receiving structural warnings (missing titles,
            defaults that do not match their type, ...).
    """

    def __init__(self, *, diagnostics: DiagnosticLog) -> None:
        self.diagnostics: DiagnosticLog = diagnostics

    # --- entry points ---

    def convert_declaration(
        self,
        node: TypeNode,
        *,
        name: str,
        doc: str | None = None,
        defaults: Mapping[str, DestructuredDefault] = EMPTY_DEFAULTS,
    ) -> SchemaProperty:
        """Convert a top-level input declaration into the root schema node.

        Args:
            node: Resolved node of the declaration.
            name: Declaration name (diagnostics only).
            doc: JSDoc block of the declaration; supplies title, description,
                ``schemaVersion`` and ``id`` of the schema.
            defaults: Destructuring defaults found for the declaration.

        Returns:
            The root ``object`` node. Its ``required`` is always present.

        Raises:
            ShapeClassificationError: If the declaration is not an object type,
                or one of its members has an unsupported type.
        """
        if isinstance(node, UnsupportedNode):
            raise ShapeClassificationError([name], f"{node.reason}: {node.text}")
        if not isinstance(node, ObjectNode):
            raise ShapeClassificationError([name], "an input declaration must be an object type")

        annotation: Annotation = parse_annotation(doc, diagnostics=self.diagnostics, path=[name])
        properties, required = self.convert_members(node.members, path=[], defaults=defaults)
        logger.debug("Converted %s: %d properties, required=%s", name, len(properties), required)
        return SchemaProperty(
            kind=SchemaKind.OBJECT,
            title=annotation.get(Tag.TITLE),
            description=annotation.get(Tag.DESCRIPTION) or annotation.summary or None,
            id=annotation.get(Tag.ID),
            properties=MappingProxyType(properties),
            required=tuple(required),
            schema_version=annotation.get(Tag.SCHEMA_VERSION),
            section_caption=annotation.get(Tag.SECTION_CAPTION),
            section_description=annotation.get(Tag.SECTION_DESCRIPTION),
        )

    def convert_members(
        self,
        members: Sequence[Member],
        *,
        path: Sequence[str],
        defaults: Mapping[str, DestructuredDefault] = EMPTY_DEFAULTS,
    ) -> tuple[dict[str, SchemaProperty], list[str]]:
        """Convert object members and compute the ``required`` names.

        Returns:
            A tuple ``(properties, required)`` in member order.
        """
        properties: dict[str, SchemaProperty] = {}
        required: list[str] = []
        for member in members:
            prop, is_required = self.convert_member(
                member, path=[*path, member.name], destructured=defaults.get(member.name)
            )
            properties[member.name] = prop
            if is_required:
                required.append(member.name)
        return properties, required

    def convert_member(
        self,
        member: Member,
        *,
        path: Sequence[str],
        destructured: DestructuredDefault | None = None,
    ) -> tuple[SchemaProperty, bool]:
        """Convert one member into its schema property.

        Returns:
            A tuple ``(property, required)``.
        """
        location: str = _location(path)
        annotation: Annotation = parse_annotation(
            member.doc, diagnostics=self.diagnostics, path=path
        )

        default: Any = annotation.get(Tag.DEFAULT)
        code_default: Any = self._destructured_value(destructured, location)
        if default is None:
            default = code_default
        elif code_default is not None and code_default != default:
            self.diagnostics.add_warning(
                f"@default {default!r} for '{location}' differs from the default "
                f"{code_default!r} assigned in code; using @default"
            )

        prop: SchemaProperty = self.convert_type(
            member.type,
            annotation=annotation,
            path=path,
            default=default,
            nested_defaults=destructured.members if destructured else EMPTY_DEFAULTS,
        )

        title: str | None = prop.title
        if not title:
            self.diagnostics.add_warning(f"Missing title for '{location}'")
            title = humanize(member.name)
        if not prop.description:
            self.diagnostics.add_warning(f"Missing description for '{location}'")
        prop = replace(prop, title=title)

        explicit: Any = annotation.get(Tag.REQUIRED)
        has_default: bool = prop.default is not None
        if explicit is True and has_default:
            self.diagnostics.add_warning(
                f"'{location}' is tagged @required but has a default; treating it as optional"
            )
        if explicit is True and member.optional:
            self.diagnostics.add_warning(
                f"'{location}' is tagged @required but declared optional; treating it as optional"
            )
        is_required: bool = not has_default and not member.optional and explicit is not False
        return prop, is_required

    def convert_type(
        self,
        node: TypeNode,
        *,
        annotation: Annotation = EMPTY_ANNOTATION,
        path: Sequence[str] = (),
        default: Any = None,
        nested_defaults: Mapping[str, DestructuredDefault] = EMPTY_DEFAULTS,
    ) -> SchemaProperty:
        """Classify ``node`` and convert it into a schema property.

        Raises:
            ShapeClassificationError: If ``node`` (or a nested node) is unsupported.
        """
        location: str = _location(path)
        fields: dict[str, Any] = {}

        if isinstance(node, EnumNode):
            kind = SchemaKind.ENUM
            fields.update(self._enum_fields(node, annotation, location))
        elif isinstance(node, ObjectNode):
            kind = SchemaKind.OBJECT
            properties, required = self.convert_members(
                node.members, path=path, defaults=nested_defaults
            )
            fields["properties"] = MappingProxyType(properties)
            fields["required"] = tuple(required)
        elif isinstance(node, ArrayNode):
            kind = SchemaKind.ARRAY
            fields.update(self._array_fields(node, annotation, path))
        elif isinstance(node, PrimitiveNode):
            kind = KIND_BY_PRIMITIVE.get(node.name, SchemaKind.STRING)
            if node.name not in KIND_BY_PRIMITIVE:
                logger.debug("'%s' has type %s; using a string field", location, node.name)
        elif isinstance(node, AnyObjectNode):
            kind = SchemaKind.OBJECT
        else:
            raise ShapeClassificationError(path, f"{node.reason}: {node.text}")

        type_editor: str = fields.pop("editor", None) or EDITOR_BY_KIND[kind]
        prop: SchemaProperty = SchemaProperty(
            kind=kind,
            title=annotation.get(Tag.TITLE),
            description=annotation.get(Tag.DESCRIPTION) or annotation.summary or None,
            editor=annotation.get(Tag.EDITOR) or type_editor,
            default=_coerce(default, kind),
            prefill=_coerce(annotation.get(Tag.PREFILL), kind),
            id=annotation.get(Tag.ID),
            example=annotation.get(Tag.EXAMPLE),
            section_caption=annotation.get(Tag.SECTION_CAPTION),
            section_description=annotation.get(Tag.SECTION_DESCRIPTION),
            minimum=annotation.get(Tag.MINIMUM),
            maximum=annotation.get(Tag.MAXIMUM),
            schema_version=annotation.get(Tag.SCHEMA_VERSION),
            **fields,
        )
        if not (isinstance(node, PrimitiveNode) and node.name not in KIND_BY_PRIMITIVE):
            self._check_value(prop.default, prop, location, "Default value")
            self._check_value(prop.prefill, prop, location, "Prefill value")
        return prop

    # --- helpers ---

    def _destructured_value(self, destructured: DestructuredDefault | None, location: str) -> Any:
        if destructured is None or destructured.expression is None:
            return None
        try:
            return parse_literal(destructured.expression)
        except LiteralSyntaxError:
            logger.debug(
                "Default of '%s' is not a literal (%s); ignoring it",
                location,
                destructured.expression,
            )
            return None

    def _enum_fields(
        self, node: EnumNode, annotation: Annotation, location: str
    ) -> dict[str, Any]:
        values: tuple[Any, ...] = node.values
        fields: dict[str, Any] = {"enum": values}
        titles: list[str] | None = annotation.get(Tag.ENUM_TITLES)
        if titles is not None:
            if len(titles) == len(values):
                fields["enum_titles"] = tuple(titles)
            else:
                self.diagnostics.add_warning(
                    f"@enumTitles for '{location}' has {len(titles)} entries for "
                    f"{len(values)} enum values; ignoring it"
                )
        return fields

    def _array_fields(
        self, node: ArrayNode, annotation: Annotation, path: Sequence[str]
    ) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        element: TypeNode = node.element
        if Tag.ITEMS in annotation:
            fields["items"] = annotation.get(Tag.ITEMS)
        else:
            items: SchemaProperty = self.convert_type(element, path=[*path, _ITEMS_SEGMENT])
            fields["items"] = replace(items, editor=None)
        is_string_list: bool = isinstance(element, PrimitiveNode) and element.name == "string"
        fields["editor"] = Editor.STRING_LIST if is_string_list else Editor.JSON
        unique: bool | None = _as_flag(annotation.get(Tag.UNIQUE_ITEMS))
        if unique is not None:
            fields["unique_items"] = unique
        return fields

    def _check_value(
        self, value: Any, prop: SchemaProperty, location: str, label: str
    ) -> None:
        """Warn when ``value`` does not fit the shape of ``prop``, recursing into objects."""
        if value is None:
            return
        if prop.kind is SchemaKind.ENUM:
            values: tuple[Any, ...] = prop.enum or ()
            if values and not any(_same_literal(value, v) for v in values):
                self.diagnostics.add_warning(
                    f"{label} {value!r} for '{location}' does not match "
                    f"enum of {list(values)!r}"
                )
            return
        if not _fits_kind(value, prop.kind):
            self.diagnostics.add_warning(
                f"{label} {value!r} for '{location}' is not of type {prop.kind.json_type}"
            )
            return
        if prop.kind is SchemaKind.OBJECT and prop.properties:
            unknown: list[str] = [key for key in value if key not in prop.properties]
            if unknown:
                self.diagnostics.add_warning(
                    f"{label} for '{location}' has keys {unknown!r} that are not "
                    f"properties of the object ({list(prop.properties)!r})"
                )
            for key, item in value.items():
                if key in prop.properties:
                    self._check_value(item, prop.properties[key], f"{location}.{key}", label)
        elif prop.kind is SchemaKind.ARRAY and isinstance(prop.items, SchemaProperty):
            for index, item in enumerate(value):
                self._check_value(item, prop.items, f"{location}[{index}]", label)
