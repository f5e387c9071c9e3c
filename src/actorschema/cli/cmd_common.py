# topmark:header:start
#
#   project      : ActorSchema
#   file         : cmd_common.py
#   file_relpath : src/actorschema/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

This module holds small, focused helpers used by multiple CLI commands:
console and configuration lookup on the Click context, diagnostic reporting,
and writing command output to a file.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import click

from actorschema.cli.errors import engine_errors
from actorschema.config import load_config
from actorschema.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from actorschema.cli_shared.console_api import ConsoleLike
    from actorschema.config import Config
    from actorschema.config.logging import ActorSchemaLogger
    from actorschema.diagnostic.model import DiagnosticStats, FrozenDiagnosticLog

logger: ActorSchemaLogger = get_logger(__name__)


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console set up by the CLI group."""
    console: ConsoleLike = ctx.obj["console"]
    return console


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity (a logging level; WARNING when unset)."""
    return int(ctx.obj.get("verbosity_level", logging.WARNING))


def resolve_command_config(ctx: click.Context, **overrides: Any) -> Config:
    """Resolve the configuration for a command and report configuration warnings.

    Args:
        ctx: Current Click context (holds the ``--config`` path of the group).
        **overrides: Command option values; ``None`` means "not given".

    Raises:
        ActorSchemaConfigError: If the configuration is invalid.
    """
    config_path: Path | None = ctx.obj.get("config_path")
    with engine_errors():
        config, warnings = load_config(config_file=config_path, overrides=overrides)
    if get_effective_verbosity(ctx) <= logging.WARNING:
        console: ConsoleLike = get_console(ctx)
        for message in warnings:
            console.warn(f"[warning] {message}")
    logger.debug("Effective configuration: %s", config)
    return config


def report_diagnostics(ctx: click.Context, diagnostics: FrozenDiagnosticLog, subject: str) -> None:
    """Print the diagnostics of a conversion on stderr, honoring ``-q`` and ``-v``."""
    verbosity: int = get_effective_verbosity(ctx)
    console: ConsoleLike = get_console(ctx)
    if verbosity <= logging.WARNING:
        for diagnostic in diagnostics:
            console.warn(diagnostic.render())
    if verbosity <= logging.INFO:
        stats: DiagnosticStats = diagnostics.stats()
        console.warn(console.styled(f"{subject}: {stats.n_warning} warning(s)", fg="green"))


def write_output(ctx: click.Context, path: Path, text: str) -> None:
    """Write command output to ``path`` (parent directories are created).

    Raises:
        ActorSchemaIOError: If the file cannot be written.
    """
    with engine_errors():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    logger.info("Wrote %s", path)
    if get_effective_verbosity(ctx) <= logging.INFO:
        get_console(ctx).warn(f"Wrote {path}")
