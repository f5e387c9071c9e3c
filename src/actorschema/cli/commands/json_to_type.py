# topmark:header:start
#
#   project      : ActorSchema
#   file         : json_to_type.py
#   file_relpath : src/actorschema/cli/commands/json_to_type.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ActorSchema `json-to-type` command.

Reads one input schema JSON file and prints the matching TypeScript
declaration, with one JSDoc block per property.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from actorschema import api
from actorschema.cli.cmd_common import get_console, resolve_command_config
from actorschema.cli.errors import engine_errors

if TYPE_CHECKING:
    from actorschema.config import Config


@click.command(
    name="json-to-type",
    help="Convert an input schema JSON file to a TypeScript type (on stdout).",
)
@click.argument("source", type=click.Path(path_type=Path))
@click.option(
    "--type-name",
    "type_name",
    default=None,
    help="Name of the declared type (default: Input).",
)
@click.pass_context
def json_to_type_command(ctx: click.Context, *, source: Path, type_name: str | None) -> None:
    """Render the schema in SOURCE as a TypeScript declaration."""
    config: Config = resolve_command_config(ctx, type_name=type_name)
    with engine_errors():
        result: api.DeclarationResult = api.schema_to_declaration(source, config=config)
    get_console(ctx).print(result.text, nl=False)
