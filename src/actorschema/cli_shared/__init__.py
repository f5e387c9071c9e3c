# topmark:header:start
#
#   project      : ActorSchema
#   file         : __init__.py
#   file_relpath : src/actorschema/cli_shared/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Framework-agnostic pieces of the ActorSchema CLI (console protocol, exit codes)."""

from __future__ import annotations
