# topmark:header:start
#
#   project      : ActorSchema
#   file         : __main__.py
#   file_relpath : src/actorschema/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running ActorSchema via ``python -m actorschema``.

This module delegates directly to :func:`actorschema.cli.main.cli`, ensuring a
single, authoritative CLI entry point regardless of how ActorSchema is launched.

Examples:
    Convert the ``Input`` type of an actor to its input schema::

        python -m actorschema type-to-json ./src
"""

from __future__ import annotations

from actorschema.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
