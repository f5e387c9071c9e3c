# topmark:header:start
#
#   project      : ActorSchema
#   file         : __init__.py
#   file_relpath : src/actorschema/typegraph/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TypeScript declaration reading.

This package turns TypeScript source into the type graph consumed by the
conversion engine:

- ``lexer``: tokens (identifiers, literals, punctuation, JSDoc blocks).
- ``nodes``: the closed set of resolved type nodes.
- ``reader``: declaration parsing and name resolution across the files of a
  source directory (`Program`).
- ``defaults``: default values taken from object-destructuring patterns.

It only understands the declaration subset that input types use; everything
else in a source file is skipped.
"""

from __future__ import annotations
