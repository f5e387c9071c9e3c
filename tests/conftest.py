# topmark:header:start
#
#   project      : ActorSchema
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the ActorSchema test suite.

This file sets up global fixtures and customizes the logging configuration for
test runs, and provides helpers to lay out actor sources and actor folders in
temporary directories.

Notes:
    Tests should respect the immutable/mutable configuration split: build
    configs with `actorschema.config.MutableConfig`, then `freeze()` them into a
    `actorschema.config.Config` for **public API** calls.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from actorschema.config import MutableConfig, logging

if TYPE_CHECKING:
    from actorschema.config import Config

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_actorschema_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure ActorSchema's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("ACTORSCHEMA_LOG_LEVEL", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run a test in an isolated working directory without configuration files.

    Args:
        tmp_path (Path): The pytest-provided temporary directory for the test.
        monkeypatch (pytest.MonkeyPatch): Fixture to change the working directory.

    Returns:
        Path: The new working directory.
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and overrides.

    Args:
        **overrides (Any): `Config` attribute values, e.g. ``type_name="CrawlerInput"``.

    Returns:
        Config: The frozen configuration.
    """
    draft: MutableConfig = MutableConfig.from_defaults()
    draft.apply_cli_args(overrides)
    return draft.freeze()


def write_source(directory: Path, text: str, name: str = "main.ts") -> Path:
    """Write a TypeScript source file and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    path: Path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


def write_json(path: Path, data: Any) -> Path:
    """Write ``data`` as JSON to ``path`` (parents are created)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=4), encoding="utf-8")
    return path


# The account example used throughout the suite: one optional documented string
# and an enum whose default comes from the destructuring assignment.
ACCOUNT_SOURCE: str = """\
import { Actor } from 'apify';

type Input = {
    /**
     * @title Name
     * @description Name of the Account
     * @prefill 'John'
     */
    name?: string;
    /**
     * @description "Role of the account"
     */
    role: 'admin' | 'normal';
};

await Actor.init();
const { name, role = 'admin' } = (await Actor.getInput<Input>()) ?? {};
console.log(name, role);
await Actor.exit();
"""

ACCOUNT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {
            "title": "Name",
            "description": "Name of the Account",
            "editor": "textfield",
            "prefill": "John",
            "type": "string",
        },
        "role": {
            "type": "string",
            "editor": "select",
            "title": "Role",
            "description": "Role of the account",
            "default": "admin",
            "enum": ["admin", "normal"],
        },
    },
    "required": [],
}


def simple_schema(title: str = "Query") -> dict[str, Any]:
    """Return a minimal valid input schema with one required string."""
    return {
        "title": f"{title} input",
        "type": "object",
        "schemaVersion": 1,
        "properties": {
            "query": {
                "title": title,
                "type": "string",
                "description": "What to search for",
                "editor": "textfield",
            },
        },
        "required": ["query"],
    }
