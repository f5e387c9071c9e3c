# topmark:header:start
#
#   project      : ActorSchema
#   file         : type_to_json.py
#   file_relpath : src/actorschema/cli/commands/type_to_json.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ActorSchema `type-to-json` command.

Converts one TypeScript input declaration to its input schema and prints the
schema as indented JSON on stdout. Warnings about the declaration (missing
titles, defaults outside an enum, ...) are printed on stderr.

Examples:
    Convert the ``Input`` type of ``./src/main.ts``::

        actorschema type-to-json ./src

    Convert ``CrawlerInput`` declared in ``./src/input.ts``::

        actorschema type-to-json ./src/input.ts --type-name CrawlerInput
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from actorschema import api
from actorschema.cli.cmd_common import (
    get_console,
    report_diagnostics,
    resolve_command_config,
)
from actorschema.cli.errors import engine_errors

if TYPE_CHECKING:
    from actorschema.config import Config


@click.command(
    name="type-to-json",
    help="Convert a TypeScript input type to an input schema (JSON on stdout).",
)
@click.argument("source", type=click.Path(path_type=Path))
@click.option(
    "--type-name",
    "type_name",
    default=None,
    help="Name of the type or interface to convert (default: Input).",
)
@click.option(
    "--input-file-name",
    "input_file_name",
    default=None,
    help="File read when SOURCE is a directory (default: main.ts).",
)
@click.pass_context
def type_to_json_command(
    ctx: click.Context,
    *,
    source: Path,
    type_name: str | None,
    input_file_name: str | None,
) -> None:
    """Convert one declaration of SOURCE to an input schema.

    Args:
        ctx (click.Context): Click context (holds console and verbosity).
        source (Path): Source file, or directory holding the input file.
        type_name (str | None): Declaration to convert.
        input_file_name (str | None): File name used when SOURCE is a directory.
    """
    config: Config = resolve_command_config(
        ctx, type_name=type_name, input_file_name=input_file_name
    )
    with engine_errors():
        result: api.SchemaResult = api.type_to_schema(source, config=config)
    report_diagnostics(ctx, result.diagnostics, f"{result.type_name} ({result.source})")
    get_console(ctx).print(api.dumps_schema(result.schema))
