# topmark:header:start
#
#   project      : ActorSchema
#   file         : constants.py
#   file_relpath : src/actorschema/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ActorSchema Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    ACTORSCHEMA_VERSION: str = get_version("actorschema")
except PackageNotFoundError:  # running from a source checkout
    ACTORSCHEMA_VERSION = "0.0.0"

# Environment variable consulted for the internal log level:
LOG_LEVEL_ENV_VAR: str = "ACTORSCHEMA_LOG_LEVEL"

# Configuration sources (searched in the working directory):
CONFIG_FILE_NAME: str = "actorschema.toml"
PYPROJECT_FILE_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: str = "actorschema"

# Forward conversion defaults:
DEFAULT_TYPE_NAME: str = "Input"
DEFAULT_INPUT_FILE_NAME: str = "main.ts"
DEFAULT_TYPE_REGEX: str = r".*Input$"
DECLARATION_SUFFIX: str = "Input"

# Actor directory layout:
ACTOR_DIR_NAME: str = ".actor"
SCHEMA_FILE_NAME: str = "INPUT_SCHEMA.json"
SCHEMA_MARKER: str = "INPUT_SCHEMA"
MANIFEST_FILE_NAME: str = "actor.json"
MANIFEST_INPUT_KEY: str = "input"

# Declaration text rendering:
DEFAULT_INDENT: str = "\t"
JSON_INDENT: int = 4
