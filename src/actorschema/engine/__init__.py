# topmark:header:start
#
#   project      : ActorSchema
#   file         : __init__.py
#   file_relpath : src/actorschema/engine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Conversion engine.

Forward direction (declaration to schema):

- ``literals``: restricted literal parser for tag values.
- ``annotations``: JSDoc tag collection, evaluation and shape checks.
- ``walker``: type graph to `SchemaProperty` tree (`TypeGraphWalker`).
- ``normalizer``: canonical key order and ``required`` invariants.

Reverse direction (schema to declaration):

- ``schema``: the `SchemaProperty` model and its JSON mapping.
- ``emitter``: declaration text rendering (`DeclarationEmitter`).

Both directions over many actors: ``batch`` (`BatchOrchestrator`), built on the
single-declaration steps in ``convert``.
"""

from __future__ import annotations
