# topmark:header:start
#
#   project      : ActorSchema
#   file         : multiactor_type_to_json.py
#   file_relpath : src/actorschema/cli/commands/multiactor_type_to_json.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ActorSchema `multiactor-type-to-json` command.

Converts every input declaration of one TypeScript file, one schema per actor.
A declaration is converted when its name matches ``--type-regex`` (by default,
names ending in ``Input``) and is not the ``--ignore-specific-type``.

The actor id of a declaration is its ``@id`` tag, or its name without the
``Input`` suffix in kebab-case (``MyActorInput`` -> ``my-actor``).

With ``--write DIR`` each schema is written to
``DIR/<id>/.actor/INPUT_SCHEMA.json`` (without its ``id``). Otherwise the schemas
are printed as one JSON object keyed by actor id.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from actorschema import api
from actorschema.cli.cmd_common import (
    get_console,
    report_diagnostics,
    resolve_command_config,
)
from actorschema.cli.errors import engine_errors
from actorschema.engine.schema import Key

if TYPE_CHECKING:
    from actorschema.config import Config


@click.command(
    name="multiactor-type-to-json",
    help="Convert every matching input type of one file to one input schema per actor.",
)
@click.argument("source", type=click.Path(path_type=Path))
@click.option(
    "--input-file",
    "input_file_name",
    default=None,
    help="File read when SOURCE is a directory (default: main.ts).",
)
@click.option(
    "--type-regex",
    "type_regex",
    default=None,
    help=r"Convert the declarations whose name matches this regex (default: .*Input$).",
)
@click.option(
    "--ignore-specific-type",
    "ignore_type",
    default=None,
    help="Declaration name to skip.",
)
@click.option(
    "--write",
    "write_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write DIR/<id>/.actor/INPUT_SCHEMA.json per actor instead of printing.",
)
@click.pass_context
def multiactor_type_to_json_command(
    ctx: click.Context,
    *,
    source: Path,
    input_file_name: str | None,
    type_regex: str | None,
    ignore_type: str | None,
    write_dir: Path | None,
) -> None:
    """Convert the matching declarations of SOURCE, one schema per actor.

    Args:
        ctx (click.Context): Click context (holds console and verbosity).
        source (Path): Source file, or directory holding the input file.
        input_file_name (str | None): File name used when SOURCE is a directory.
        type_regex (str | None): Pattern selecting the declarations.
        ignore_type (str | None): Declaration name to skip.
        write_dir (Path | None): Output directory; None prints the schemas.
    """
    config: Config = resolve_command_config(
        ctx,
        input_file_name=input_file_name,
        type_regex=type_regex,
        ignore_type=ignore_type,
    )
    with engine_errors():
        result: api.MultiSchemaResult = api.multi_type_to_schemas(source, config=config)
    report_diagnostics(ctx, result.diagnostics, f"{len(result.schemas)} actor(s) ({result.source})")

    if write_dir is None:
        printed: dict[str, Any] = {
            unit_id: {k: v for k, v in schema.items() if k != Key.ID}
            for unit_id, schema in result.schemas.items()
        }
        get_console(ctx).print(api.dumps_schema(printed))
        return

    with engine_errors():
        written: list[Path] = api.write_schemas(result.schemas, write_dir, config=config)
    console = get_console(ctx)
    for path in written:
        console.print(str(path))
