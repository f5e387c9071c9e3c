# topmark:header:start
#
#   project      : ActorSchema
#   file         : __init__.py
#   file_relpath : src/actorschema/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click subcommands of the ActorSchema CLI, one module per command."""

from __future__ import annotations
