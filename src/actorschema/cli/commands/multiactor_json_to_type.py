# topmark:header:start
#
#   project      : ActorSchema
#   file         : multiactor_json_to_type.py
#   file_relpath : src/actorschema/cli/commands/multiactor_json_to_type.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ActorSchema `multiactor-json-to-type` command.

Renders one TypeScript declaration per actor directory of ACTORS_FOLDER. Each
actor's schema is the ``*INPUT_SCHEMA*.json`` file of the actor directory (or of
its ``.actor/`` directory), or the file named by the ``input`` field of its
``actor.json`` manifest. The declaration of ``my-actor`` is ``MyActorInput``.

An actor without a resolvable schema aborts the command before any output.
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
    write_output,
)
from actorschema.cli.errors import engine_errors

if TYPE_CHECKING:
    from actorschema.config import Config


@click.command(
    name="multiactor-json-to-type",
    help="Convert the input schema of every actor in a folder to TypeScript types.",
)
@click.argument("actors_folder", type=click.Path(path_type=Path))
@click.option(
    "--write",
    "write_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the declarations to FILE instead of printing them.",
)
@click.pass_context
def multiactor_json_to_type_command(
    ctx: click.Context,
    *,
    actors_folder: Path,
    write_file: Path | None,
) -> None:
    """Render one declaration per actor of ACTORS_FOLDER.

    Args:
        ctx (click.Context): Click context (holds console and verbosity).
        actors_folder (Path): Directory with one subdirectory per actor.
        write_file (Path | None): Output file; None prints the declarations.
    """
    config: Config = resolve_command_config(ctx)
    with engine_errors():
        result: api.DeclarationResult = api.actors_to_declarations(actors_folder, config=config)
    report_diagnostics(ctx, result.diagnostics, str(result.source))
    if write_file is None:
        get_console(ctx).print(result.text, nl=False)
        return
    write_output(ctx, write_file, result.text)
