# topmark:header:start
#
#   project      : ActorSchema
#   file         : naming.py
#   file_relpath : src/actorschema/utils/naming.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Identifier and label conversions."""

from __future__ import annotations

import re
from typing import Final

_WORD_SPLIT_RE: Final[re.Pattern[str]] = re.compile(r"[^0-9A-Za-z]+")
_CAMEL_BOUNDARY_RE: Final[re.Pattern[str]] = re.compile(
    r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])"
)
_IDENTIFIER_RE: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z_$][\w$]*$")


def split_words(text: str) -> list[str]:
    """Split ``text`` on separators and camelCase boundaries."""
    words: list[str] = []
    for chunk in _WORD_SPLIT_RE.split(text):
        words.extend(w for w in _CAMEL_BOUNDARY_RE.split(chunk) if w)
    return words


def to_pascal_case(text: str) -> str:
    """Convert a directory or dotted name into PascalCase.

    Examples:
        >>> to_pascal_case("my-actor")
        'MyActor'
        >>> to_pascal_case("google_maps.scraper")
        'GoogleMapsScraper'
    """
    return "".join(word[:1].upper() + word[1:] for word in split_words(text))


def to_kebab_case(text: str) -> str:
    """Convert a PascalCase or camelCase name into kebab-case.

    Examples:
        >>> to_kebab_case("GoogleMapsScraper")
        'google-maps-scraper'
    """
    return "-".join(word.lower() for word in split_words(text))


def humanize(name: str) -> str:
    """Turn a property name into a title (``startUrls`` becomes ``Start urls``)."""
    words: list[str] = [w if w.isupper() and len(w) > 1 else w.lower() for w in split_words(name)]
    if not words:
        return name
    return " ".join([words[0][:1].upper() + words[0][1:], *words[1:]])


def is_identifier(name: str) -> bool:
    """Return True if ``name`` can be written unquoted as a TypeScript property name."""
    return bool(_IDENTIFIER_RE.match(name))
