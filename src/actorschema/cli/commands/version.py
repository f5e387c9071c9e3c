# topmark:header:start
#
#   project      : ActorSchema
#   file         : version.py
#   file_relpath : src/actorschema/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ActorSchema `version` command.

Prints the current ActorSchema version as installed in the active Python environment.
"""

from __future__ import annotations

import click

from actorschema import api
from actorschema.cli.cmd_common import get_console


@click.command(
    name="version",
    help="Show the current version of ActorSchema.",
)
@click.pass_context
def version_command(ctx: click.Context) -> None:
    """Show the current version of ActorSchema."""
    get_console(ctx).print(api.version())
