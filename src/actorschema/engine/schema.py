# topmark:header:start
#
#   project      : ActorSchema
#   file         : schema.py
#   file_relpath : src/actorschema/engine/schema.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Schema property model.

`SchemaProperty` is the in-memory form of one node of an input schema. Nodes
are immutable: the walker builds each one from a fully resolved set of fields,
and the normalizer (`actorschema.engine.normalizer`) turns a tree into the
canonical JSON-ready dict.

JSON spelling of the fields (``enumTitles``, ``uniqueItems``, ...) is defined by
`Key`; the dataclass uses snake_case attribute names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

from actorschema.core.errors import SchemaFormatError

if TYPE_CHECKING:
    from collections.abc import Mapping


class Key:
    """JSON keys of a schema node."""

    TITLE: Final[str] = "title"
    TYPE: Final[str] = "type"
    DESCRIPTION: Final[str] = "description"
    EDITOR: Final[str] = "editor"
    PROPERTIES: Final[str] = "properties"
    REQUIRED: Final[str] = "required"
    DEFAULT: Final[str] = "default"
    PREFILL: Final[str] = "prefill"
    ENUM: Final[str] = "enum"
    ENUM_TITLES: Final[str] = "enumTitles"
    ID: Final[str] = "id"
    UNIQUE_ITEMS: Final[str] = "uniqueItems"
    EXAMPLE: Final[str] = "example"
    ITEMS: Final[str] = "items"
    SECTION_CAPTION: Final[str] = "sectionCaption"
    SECTION_DESCRIPTION: Final[str] = "sectionDescription"
    MINIMUM: Final[str] = "minimum"
    MAXIMUM: Final[str] = "maximum"
    SCHEMA_VERSION: Final[str] = "schemaVersion"


#: Keys that lead every canonical node, in this order.
LEADING_KEYS: Final[tuple[str, ...]] = (Key.TITLE, Key.TYPE, Key.DESCRIPTION, Key.EDITOR)


class SchemaKind(Enum):
    """Closed set of schema node kinds.

    ``ENUM`` nodes serialize as ``"type": "string"`` with an ``enum`` list.
    """

    INTEGER = "integer"
    STRING = "string"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    ENUM = "enum"

    @property
    def json_type(self) -> str:
        """Return the value written to the ``type`` key."""
        return SchemaKind.STRING.value if self is SchemaKind.ENUM else self.value


class Editor:
    """Editor hints understood by the Apify console."""

    TEXTFIELD: Final[str] = "textfield"
    NUMBER: Final[str] = "number"
    CHECKMARK: Final[str] = "checkmark"
    SELECT: Final[str] = "select"
    STRING_LIST: Final[str] = "stringList"
    JSON: Final[str] = "json"


#: Default editor per kind, used when no ``@editor`` tag is given.
EDITOR_BY_KIND: Final[Mapping[SchemaKind, str]] = MappingProxyType(
    {
        SchemaKind.STRING: Editor.TEXTFIELD,
        SchemaKind.INTEGER: Editor.NUMBER,
        SchemaKind.BOOLEAN: Editor.CHECKMARK,
        SchemaKind.ENUM: Editor.SELECT,
        SchemaKind.OBJECT: Editor.JSON,
        SchemaKind.ARRAY: Editor.JSON,
    }
)

# JSON type spellings accepted when loading schema files.
_KIND_BY_JSON_TYPE: Final[Mapping[str, SchemaKind]] = MappingProxyType(
    {
        "integer": SchemaKind.INTEGER,
        "number": SchemaKind.INTEGER,
        "string": SchemaKind.STRING,
        "boolean": SchemaKind.BOOLEAN,
        "object": SchemaKind.OBJECT,
        "array": SchemaKind.ARRAY,
    }
)

_EMPTY_PROPERTIES: Final[Mapping[str, SchemaProperty]] = MappingProxyType({})


@dataclass(frozen=True)
class SchemaProperty:
    """One node of an input schema.

    ``None`` means "absent": absent fields are never serialized.
    ``properties`` and ``required`` are meaningful for ``OBJECT`` nodes only;
    ``items`` and ``unique_items`` for ``ARRAY``; ``enum`` and ``enum_titles``
    for ``ENUM``.
    """

    kind: SchemaKind
    title: str | None = None
    description: str | None = None
    editor: str | None = None
    default: Any = None
    prefill: Any = None
    id: str | None = None
    example: Any = None
    properties: Mapping[str, SchemaProperty] = field(default_factory=lambda: _EMPTY_PROPERTIES)
    required: tuple[str, ...] | None = None
    items: Any = None
    unique_items: bool | None = None
    enum: tuple[Any, ...] | None = None
    enum_titles: tuple[str, ...] | None = None
    section_caption: str | None = None
    section_description: str | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    schema_version: int | float | None = None

    @property
    def is_object(self) -> bool:
        """Return True for object nodes."""
        return self.kind is SchemaKind.OBJECT

    def is_required(self, name: str) -> bool:
        """Return True if member ``name`` is listed in ``required``."""
        return name in (self.required or ())

    def to_raw(self) -> dict[str, Any]:
        """Return this tree as a raw dict in JSON key spelling.

        The result keeps ``None`` placeholders for absent fields; pass it
        through `actorschema.engine.normalizer.normalize_schema` before
        serializing.
        """
        items: Any = self.items.to_raw() if isinstance(self.items, SchemaProperty) else self.items
        properties: dict[str, Any] | None = None
        if self.is_object and (self.properties or self.required is not None):
            # Bare "any object" nodes carry neither properties nor required.
            properties = {name: prop.to_raw() for name, prop in self.properties.items()}
        return {
            Key.TITLE: self.title,
            Key.TYPE: self.kind.json_type,
            Key.DESCRIPTION: self.description,
            Key.EDITOR: self.editor,
            Key.PROPERTIES: properties,
            Key.REQUIRED: list(self.required) if self.required is not None else None,
            Key.DEFAULT: self.default,
            Key.PREFILL: self.prefill,
            Key.ENUM: list(self.enum) if self.enum is not None else None,
            Key.ENUM_TITLES: list(self.enum_titles) if self.enum_titles is not None else None,
            Key.ID: self.id,
            Key.UNIQUE_ITEMS: self.unique_items,
            Key.EXAMPLE: self.example,
            Key.ITEMS: items,
            Key.SECTION_CAPTION: self.section_caption,
            Key.SECTION_DESCRIPTION: self.section_description,
            Key.MINIMUM: self.minimum,
            Key.MAXIMUM: self.maximum,
            Key.SCHEMA_VERSION: self.schema_version,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, path: tuple[str, ...] = ()) -> SchemaProperty:
        """Build a node tree from a loaded schema document.

        Args:
            data: A schema node as loaded from JSON.
            path: Property path of ``data`` (error messages only).

        Returns:
            The `SchemaProperty` tree.

        Raises:
            SchemaFormatError: If ``data`` is not a schema node.
        """
        location: str = ".".join(path) or "<root>"
        if not isinstance(data, dict):
            raise SchemaFormatError(f"Schema node '{location}' must be an object, got {data!r}")

        kind: SchemaKind
        if data.get(Key.ENUM) is not None:
            kind = SchemaKind.ENUM
        else:
            json_type: Any = data.get(Key.TYPE, "object" if Key.PROPERTIES in data else None)
            if json_type not in _KIND_BY_JSON_TYPE:
                raise SchemaFormatError(f"Unsupported type {json_type!r} for '{location}'")
            kind = _KIND_BY_JSON_TYPE[json_type]

        raw_properties: Any = data.get(Key.PROPERTIES) or {}
        if not isinstance(raw_properties, dict):
            raise SchemaFormatError(f"'properties' of '{location}' must be an object")
        properties: dict[str, SchemaProperty] = {
            name: cls.from_dict(value, path=(*path, name)) for name, value in raw_properties.items()
        }

        required: Any = data.get(Key.REQUIRED)
        if required is not None and not (
            isinstance(required, list) and all(isinstance(r, str) for r in required)
        ):
            raise SchemaFormatError(f"'required' of '{location}' must be a list of names")

        items: Any = data.get(Key.ITEMS)
        if isinstance(items, dict) and (Key.TYPE in items or Key.ENUM in items):
            items = cls.from_dict(items, path=(*path, "[]"))

        enum: Any = data.get(Key.ENUM)
        enum_titles: Any = data.get(Key.ENUM_TITLES)
        return cls(
            kind=kind,
            title=data.get(Key.TITLE),
            description=data.get(Key.DESCRIPTION),
            editor=data.get(Key.EDITOR),
            default=data.get(Key.DEFAULT),
            prefill=data.get(Key.PREFILL),
            id=data.get(Key.ID),
            example=data.get(Key.EXAMPLE),
            properties=MappingProxyType(properties),
            required=tuple(required) if required is not None else None,
            items=items,
            unique_items=data.get(Key.UNIQUE_ITEMS),
            enum=tuple(enum) if isinstance(enum, list) else None,
            enum_titles=tuple(enum_titles) if isinstance(enum_titles, list) else None,
            section_caption=data.get(Key.SECTION_CAPTION),
            section_description=data.get(Key.SECTION_DESCRIPTION),
            minimum=data.get(Key.MINIMUM),
            maximum=data.get(Key.MAXIMUM),
            schema_version=data.get(Key.SCHEMA_VERSION),
        )
