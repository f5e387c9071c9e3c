# topmark:header:start
#
#   project      : ActorSchema
#   file         : keys.py
#   file_relpath : src/actorschema/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for ActorSchema configuration.

These constants are the external configuration API as it appears in
``actorschema.toml`` and in ``[tool.actorschema]`` inside ``pyproject.toml``.
Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by ActorSchema configuration.

    Notes:
        - Values must match user-facing TOML keys exactly.
        - CLI option names are defined by the Click commands themselves.
    """

    # [conversion]
    SECTION_CONVERSION: Final[str] = "conversion"

    KEY_TYPE_NAME: Final[str] = "type_name"
    KEY_INPUT_FILE_NAME: Final[str] = "input_file_name"
    KEY_TYPE_REGEX: Final[str] = "type_regex"
    KEY_IGNORE_TYPE: Final[str] = "ignore_type"

    # [layout]
    SECTION_LAYOUT: Final[str] = "layout"

    KEY_SCHEMA_DIR: Final[str] = "schema_dir"
    KEY_SCHEMA_FILE_NAME: Final[str] = "schema_file_name"
    KEY_SCHEMA_MARKER: Final[str] = "schema_marker"
    KEY_MANIFEST_FILE_NAME: Final[str] = "manifest_file_name"

    # [emit]
    SECTION_EMIT: Final[str] = "emit"

    KEY_INDENT: Final[str] = "indent"

    # ---------------------------- Schema helpers ----------------------------

    ALLOWED_TOP_LEVEL_KEYS: Final[frozenset[str]] = frozenset(
        {
            SECTION_CONVERSION,
            SECTION_LAYOUT,
            SECTION_EMIT,
        }
    )

    ALLOWED_SECTION_KEYS: Final[dict[str, frozenset[str]]] = {
        SECTION_CONVERSION: frozenset(
            {
                KEY_TYPE_NAME,
                KEY_INPUT_FILE_NAME,
                KEY_TYPE_REGEX,
                KEY_IGNORE_TYPE,
            }
        ),
        SECTION_LAYOUT: frozenset(
            {
                KEY_SCHEMA_DIR,
                KEY_SCHEMA_FILE_NAME,
                KEY_SCHEMA_MARKER,
                KEY_MANIFEST_FILE_NAME,
            }
        ),
        SECTION_EMIT: frozenset(
            {
                KEY_INDENT,
            }
        ),
    }
