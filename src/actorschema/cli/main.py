# topmark:header:start
#
#   project      : ActorSchema
#   file         : main.py
#   file_relpath : src/actorschema/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ActorSchema Click CLI.

Key ideas:
- Group-level options (verbosity, color, ``--config``) are initialized once and
  placed into ``ctx.obj``.
- Subcommands are thin: they resolve the configuration, call `actorschema.api`,
  print the result on stdout and the diagnostics on stderr.
- Engine errors are mapped to exit codes in `actorschema.cli.errors`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from actorschema.cli.commands.json_to_type import json_to_type_command
from actorschema.cli.commands.multiactor_json_to_type import multiactor_json_to_type_command
from actorschema.cli.commands.multiactor_type_to_json import multiactor_type_to_json_command
from actorschema.cli.commands.type_to_json import type_to_json_command
from actorschema.cli.commands.version import version_command
from actorschema.cli.console import ClickConsole
from actorschema.cli.options import (
    ColorMode,
    common_color_options,
    common_config_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from actorschema.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from pathlib import Path

    from actorschema.cli_shared.console_api import ConsoleLike
    from actorschema.config.logging import ActorSchemaLogger

logger: ActorSchemaLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
    config_path: Path | None,
) -> None:
    """Initialize shared state (verbosity, color, configuration path) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
        config_path (Path | None): Explicit configuration file from ``--config``.
    """
    ctx.obj = ctx.obj or {}

    # Configure program-output verbosity:
    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Configure internal logging via env:
    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_color_mode: ColorMode = (
        ColorMode.NEVER if no_color else ColorMode(color_mode or ColorMode.AUTO)
    )
    enable_color: bool = resolve_color_mode(cli_mode=effective_color_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)
    ctx.obj["config_path"] = config_path


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Convert between TypeScript input types and actor input schemas.",
)
@common_verbose_options
@common_color_options
@common_config_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
    config_path: Path | None,
) -> None:
    """Entry point for the ActorSchema CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
        config_path=config_path,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'actorschema type-to-json SOURCE' to convert an input type.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(type_to_json_command)

cli.add_command(multiactor_type_to_json_command)

cli.add_command(json_to_type_command)

cli.add_command(multiactor_json_to_type_command)

if __name__ == "__main__":
    cli()
