# topmark:header:start
#
#   project      : ActorSchema
#   file         : __init__.py
#   file_relpath : src/actorschema/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ActorSchema package.

ActorSchema converts between TypeScript input declarations annotated with JSDoc
tags and Apify-style input schema JSON files. It exposes a CLI for single and
batch ("multi-actor") conversions in both directions, and a small typed API
(`actorschema.api`) for automation and tests.
"""

from __future__ import annotations
