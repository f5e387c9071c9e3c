# topmark:header:start
#
#   project      : ActorSchema
#   file         : __init__.py
#   file_relpath : src/actorschema/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, UI-agnostic primitives shared across ActorSchema.

The ``actorschema.core`` package holds building blocks that are safe to import
from anywhere in the codebase (CLI, config, engine, tests) without pulling in
Click or rendering concerns.

Included modules:

- ``errors``
  The exception hierarchy raised by the conversion engine. The CLI maps these
  to exit codes; the engine itself never terminates the process.
"""

from __future__ import annotations
