"""Shared CLI helpers, options, and utilities."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, TypeVar

import typer
from rich.markup import escape

from dev_toolbox.console import console, print_error

if TYPE_CHECKING:
    from collections.abc import Coroutine

    from dev_toolbox.config import Config, Workspace
    from dev_toolbox.executor import CommandResult

_T = TypeVar("_T")

# Standard exit code for SIGINT
EXIT_INTERRUPTED = 130

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to config file", show_default=False),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", help="Show debug logging"),
]


def setup_logging(verbose: bool) -> None:
    """Send library log records to stderr, at DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def load_config_or_exit(config_path: Path | None, workspace: Workspace) -> Config:
    """Load config for a workspace or exit with a friendly error message."""
    # Lazy import: pydantic adds startup time, only load when an action needs it
    from dev_toolbox.config import ConfigError, load_config  # noqa: PLC0415

    try:
        return load_config(config_path, workspace=workspace)
    except (FileNotFoundError, ConfigError) as e:
        print_error(str(e))
        raise typer.Exit(1) from e


def run_async(coro: Coroutine[None, None, _T]) -> _T:
    """Run async coroutine."""
    try:
        return asyncio.run(coro)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/]")
        raise typer.Exit(EXIT_INTERRUPTED) from None


def report_result(result: CommandResult, failure: str) -> None:
    """Exit with an error if a command failed."""
    if not result.success:
        print_error(
            f"{failure}: [cyan]{escape(result.command)}[/] exited with code {result.exit_code}"
        )
        raise typer.Exit(1)
