# topmark:header:start
#
#   project      : ActorSchema
#   file         : errors.py
#   file_relpath : src/actorschema/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the ActorSchema CLI.

Usage:
    Commands wrap engine calls in `engine_errors()`, which re-raises every
    `actorschema.core.errors.ActorSchemaError` (and file-system ``OSError``) as the
    matching `ActorSchemaCliError` subclass. Click then prints the message and
    exits with the subclass's ``exit_code``.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import IO, TYPE_CHECKING, Any

import click

from actorschema.cli_shared.exit_codes import ExitCode
from actorschema.config.logging import get_logger
from actorschema.core.errors import (
    ActorSchemaError,
    AnnotationEvaluationError,
    ConfigError,
    LookupFailure,
    SchemaFormatError,
    ShapeClassificationError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from actorschema.config.logging import ActorSchemaLogger

logger: ActorSchemaLogger = get_logger(__name__)


class ActorSchemaCliError(click.ClickException):
    """Base class for all ActorSchema CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text.

        Notes:
            - Unlike Click's default, this method does not add color.
            - Colorization is applied in `show()` when a project console is present.
        """
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx: click.Context | None = click.get_current_context(silent=True)
        obj: Any = getattr(ctx, "obj", None)
        console: Any = obj.get("console") if isinstance(obj, dict) else None
        if console is None:
            super().show(file)
            return
        console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))


class ActorSchemaUsageError(ActorSchemaCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class ActorSchemaConfigError(ActorSchemaCliError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class ActorSchemaNotFoundError(ActorSchemaCliError):
    """Error when a source file, declaration, schema file or manifest does not exist."""

    exit_code = ExitCode.NOT_FOUND


class ActorSchemaDataError(ActorSchemaCliError):
    """Error for input that cannot be converted (unsupported type, bad JSON, bad tag)."""

    exit_code = ExitCode.DATA_ERROR


class ActorSchemaPermissionDeniedError(ActorSchemaCliError):
    """Error for insufficient permissions (read/write)."""

    exit_code = ExitCode.PERMISSION_DENIED


class ActorSchemaIOError(ActorSchemaCliError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR


class ActorSchemaUnexpectedError(ActorSchemaCliError):
    """Error for unhandled/unknown engine errors (last-resort)."""

    exit_code = ExitCode.UNEXPECTED_ERROR


def to_cli_error(exc: BaseException) -> ActorSchemaCliError:
    """Return the CLI error matching an engine or file-system exception."""
    message: str = str(exc)
    if isinstance(exc, LookupFailure):
        return ActorSchemaNotFoundError(message)
    if isinstance(exc, (ShapeClassificationError, AnnotationEvaluationError, SchemaFormatError)):
        return ActorSchemaDataError(message)
    if isinstance(exc, ConfigError):
        return ActorSchemaConfigError(message)
    if isinstance(exc, PermissionError):
        return ActorSchemaPermissionDeniedError(message)
    if isinstance(exc, UnicodeDecodeError):
        return ActorSchemaDataError(f"Cannot decode input as UTF-8: {message}")
    if isinstance(exc, OSError):
        return ActorSchemaIOError(message)
    return ActorSchemaUnexpectedError(message)


@contextmanager
def engine_errors() -> Iterator[None]:
    """Re-raise engine and file-system errors as `ActorSchemaCliError` subclasses."""
    try:
        yield
    except (ActorSchemaError, OSError, UnicodeDecodeError) as exc:
        logger.debug("Conversion failed: %r", exc)
        raise to_cli_error(exc) from exc
