# topmark:header:start
#
#   project      : ActorSchema
#   file         : annotations.py
#   file_relpath : src/actorschema/engine/annotations.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""JSDoc annotation parsing for declaration members.

A member's documentation block carries schema metadata as ``@tag value`` pairs::

    /**
     * @title Start URLs
     * @description URLs to start with.
     * @prefill [{ url: 'https://apify.com' }]
     */

Only the tags in `RECOGNIZED_TAGS` are split out; an ``@word`` that is not a
recognized tag stays part of the surrounding value (so e-mail addresses and
decorators in descriptions survive). A recognized tag written as ``\\@tag`` is
kept as text too, without the backslash. Values of the `EVALUABLE_TAGS` are parsed
as literal expressions with `actorschema.engine.literals.parse_literal`; all
other values are kept as text, minus one pair of wrapping quotes.

Collected tags are checked against `TAG_SHAPES`. A tag with the wrong shape is
dropped with a warning; the remaining tags are kept. A literal that cannot be
parsed is fatal (`AnnotationEvaluationError`).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

from actorschema.config.logging import get_logger
from actorschema.core.errors import AnnotationEvaluationError
from actorschema.engine.literals import LiteralSyntaxError, parse_literal

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from actorschema.config.logging import ActorSchemaLogger
    from actorschema.diagnostic.model import DiagnosticLog

logger: ActorSchemaLogger = get_logger(__name__)


class Tag:
    """Canonical tag names (as written after ``@``)."""

    TITLE: Final[str] = "title"
    NAME: Final[str] = "name"  # alias of TITLE
    DESCRIPTION: Final[str] = "description"
    EDITOR: Final[str] = "editor"
    DEFAULT: Final[str] = "default"
    PREFILL: Final[str] = "prefill"
    ID: Final[str] = "id"
    ENUM_TITLES: Final[str] = "enumTitles"
    SECTION_CAPTION: Final[str] = "sectionCaption"
    SECTION_DESCRIPTION: Final[str] = "sectionDescription"
    REQUIRED: Final[str] = "required"
    UNIQUE_ITEMS: Final[str] = "uniqueItems"
    EXAMPLE: Final[str] = "example"
    ITEMS: Final[str] = "items"
    MINIMUM: Final[str] = "minimum"
    MAXIMUM: Final[str] = "maximum"
    SCHEMA_VERSION: Final[str] = "schemaVersion"


TAG_ALIASES: Final[Mapping[str, str]] = MappingProxyType({Tag.NAME: Tag.TITLE})

RECOGNIZED_TAGS: Final[tuple[str, ...]] = (
    Tag.TITLE,
    Tag.NAME,
    Tag.DESCRIPTION,
    Tag.EDITOR,
    Tag.DEFAULT,
    Tag.PREFILL,
    Tag.ID,
    Tag.ENUM_TITLES,
    Tag.SECTION_CAPTION,
    Tag.SECTION_DESCRIPTION,
    Tag.REQUIRED,
    Tag.UNIQUE_ITEMS,
    Tag.EXAMPLE,
    Tag.ITEMS,
    Tag.MINIMUM,
    Tag.MAXIMUM,
    Tag.SCHEMA_VERSION,
)

EVALUABLE_TAGS: Final[frozenset[str]] = frozenset(
    {
        Tag.DEFAULT,
        Tag.PREFILL,
        Tag.MINIMUM,
        Tag.MAXIMUM,
        Tag.ENUM_TITLES,
        Tag.SCHEMA_VERSION,
        Tag.REQUIRED,
        Tag.ITEMS,
        Tag.EXAMPLE,
    }
)


class TagShape(Enum):
    """Permitted value shapes for collected tags."""

    STRING = "string"
    STRING_LIST = "string[]"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ANY = "any"

    def accepts(self, value: Any) -> bool:
        """Return True if ``value`` has this shape."""
        if self is TagShape.STRING:
            return isinstance(value, str)
        if self is TagShape.STRING_LIST:
            return isinstance(value, list) and all(isinstance(v, str) for v in value)
        if self is TagShape.NUMBER:
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        if self is TagShape.BOOLEAN:
            return isinstance(value, bool)
        return True


TAG_SHAPES: Final[Mapping[str, TagShape]] = MappingProxyType(
    {
        Tag.TITLE: TagShape.STRING,
        Tag.DESCRIPTION: TagShape.STRING,
        Tag.EDITOR: TagShape.STRING,
        Tag.ID: TagShape.STRING,
        Tag.SECTION_CAPTION: TagShape.STRING,
        Tag.SECTION_DESCRIPTION: TagShape.STRING,
        Tag.UNIQUE_ITEMS: TagShape.STRING,
        Tag.ENUM_TITLES: TagShape.STRING_LIST,
        Tag.MINIMUM: TagShape.NUMBER,
        Tag.MAXIMUM: TagShape.NUMBER,
        Tag.SCHEMA_VERSION: TagShape.NUMBER,
        Tag.REQUIRED: TagShape.BOOLEAN,
        Tag.DEFAULT: TagShape.ANY,
        Tag.PREFILL: TagShape.ANY,
        Tag.EXAMPLE: TagShape.ANY,
        Tag.ITEMS: TagShape.ANY,
    }
)

# Longest names first so "@title" never shadows a longer tag with the same prefix.
_TAG_NAMES: Final[str] = "|".join(
    re.escape(t) for t in sorted(RECOGNIZED_TAGS, key=len, reverse=True)
)
_TAG_RE: Final[re.Pattern[str]] = re.compile(r"(?<![\w@\\])@(" + _TAG_NAMES + r")(?![\w-])")
# A backslash before a recognized tag keeps it in the surrounding text.
_ESCAPED_TAG_RE: Final[re.Pattern[str]] = re.compile(r"\\(@(?:" + _TAG_NAMES + r"))(?![\w-])")
_QUOTES: Final[tuple[str, ...]] = ('"', "'", "`")


@dataclass(frozen=True)
class Annotation:
    """Validated tag values of one documentation block.

    Attributes:
        tags: Mapping from canonical tag name to its value. Evaluable tags hold
            parsed literal values; the others hold strings.
        summary: Free text preceding the first tag (the JSDoc summary line), or
            an empty string.
    """

    tags: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    summary: str = ""

    def get(self, tag: str, default: Any = None) -> Any:
        """Return the value of ``tag`` or ``default`` when absent."""
        return self.tags.get(tag, default)

    def __contains__(self, tag: object) -> bool:
        return tag in self.tags


EMPTY_ANNOTATION: Final[Annotation] = Annotation()


def strip_comment_decoration(doc: str) -> str:
    """Remove ``/**``, ``*/`` and leading ``*`` gutters from a JSDoc block.

    Args:
        doc: Raw comment text, with or without the comment delimiters.

    Returns:
        The comment body with one line per source line, outer blank lines removed.
    """
    text: str = doc.strip()
    if text.startswith("/**"):
        text = text[3:]
    elif text.startswith("/*"):
        text = text[2:]
    if text.endswith("*/"):
        text = text[:-2]
    lines: list[str] = []
    for line in text.splitlines():
        stripped: str = line.strip()
        if stripped.startswith("*"):
            stripped = stripped[1:].strip()
        lines.append(stripped)
    return "\n".join(lines).strip()


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def escape_tags(text: str) -> str:
    """Return ``text`` with every recognized ``@tag`` written as ``\\@tag``.

    `collect_tags` reads escaped tags back as plain text, so titles and
    descriptions that mention a tag survive a render and re-read.
    """
    return _TAG_RE.sub(r"\\@\1", text)


def _unescape_tags(text: str) -> str:
    return _ESCAPED_TAG_RE.sub(r"\1", text)


def collect_tags(doc: str) -> tuple[dict[str, str], str]:
    """Split a documentation block into raw tag values.

    Args:
        doc: The documentation block (decorated or not).

    Returns:
        A tuple ``(tags, summary)``: raw tag texts keyed by canonical tag name
        (later occurrences win), and the free text before the first tag.
    """
    body: str = strip_comment_decoration(doc)
    matches: list[re.Match[str]] = list(_TAG_RE.finditer(body))
    head: str = body[: matches[0].start()] if matches else body
    summary: str = _unescape_tags(" ".join(head.split()))

    tags: dict[str, str] = {}
    for i, match in enumerate(matches):
        end: int = matches[i + 1].start() if i + 1 < len(matches) else len(body)
        raw: str = _unescape_tags(" ".join(body[match.end() : end].split()))
        name: str = TAG_ALIASES.get(match.group(1), match.group(1))
        if name in tags:
            logger.debug("Duplicate @%s tag, keeping the last value", name)
        tags[name] = raw
    return tags, summary


def evaluate_tag(tag: str, raw: str) -> Any:
    """Evaluate the raw text of an evaluable tag.

    An empty boolean tag (``@required`` alone) means ``true``.

    Raises:
        AnnotationEvaluationError: If ``raw`` is not a literal expression.
    """
    if not raw and TAG_SHAPES.get(tag) is TagShape.BOOLEAN:
        return True
    try:
        return parse_literal(raw)
    except LiteralSyntaxError as exc:
        raise AnnotationEvaluationError(tag, raw, exc) from exc


def parse_annotation(
    doc: str | None,
    *,
    diagnostics: DiagnosticLog,
    path: Sequence[str] = (),
) -> Annotation:
    """Parse and validate the documentation block of one declaration or member.

    Args:
        doc: The raw JSDoc block, or None when the member is undocumented.
        diagnostics: Log receiving shape warnings.
        path: Property path of the documented member (diagnostics only).

    Returns:
        The validated `Annotation`.

    Raises:
        AnnotationEvaluationError: If an evaluable tag holds a malformed literal.
    """
    if not doc:
        return EMPTY_ANNOTATION

    raw_tags, summary = collect_tags(doc)
    location: str = ".".join(path) or "<root>"
    values: dict[str, Any] = {}
    for tag, raw in raw_tags.items():
        value: Any = evaluate_tag(tag, raw) if tag in EVALUABLE_TAGS else _unquote(raw)
        shape: TagShape = TAG_SHAPES.get(tag, TagShape.ANY)
        if not shape.accepts(value):
            diagnostics.add_warning(
                f"Ignoring @{tag} on '{location}': expected {shape.value}, got {value!r}"
            )
            continue
        values[tag] = value

    logger.trace("Annotation for %s: %r", location, values)
    return Annotation(tags=MappingProxyType(values), summary=summary)
