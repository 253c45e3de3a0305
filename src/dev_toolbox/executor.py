"""Local command execution."""

from __future__ import annotations

import asyncio
import logging
import shlex
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.markup import escape

from .console import console, err_console

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)

# Shell convention for "command not found"
EXIT_NOT_FOUND = 127


@dataclass
class CommandResult:
    """Result of a command execution."""

    command: str
    exit_code: int
    success: bool
    stdout: str = ""
    stderr: str = ""


def format_command(args: Sequence[str]) -> str:
    """Render an argument list as a copy-pasteable shell command."""
    return shlex.join(args)


async def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    capture: bool = False,
) -> CommandResult:
    """Run a command locally.

    Without ``capture`` the child inherits stdin, stdout and stderr so
    interactive tools behave normally. With ``capture`` both output streams
    are collected into the result.
    """
    command = format_command(args)
    logger.debug("Running %s (cwd=%s)", command, cwd)
    pipe = asyncio.subprocess.PIPE if capture else None
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            cwd=cwd,
            stdout=pipe,
            stderr=pipe,
        )
        stdout_data, stderr_data = await proc.communicate()
    except FileNotFoundError:
        if not capture:
            err_console.print(f"[red]Command not found:[/] {escape(args[0])}")
        return CommandResult(
            command=command,
            exit_code=EXIT_NOT_FOUND,
            success=False,
            stderr=f"{args[0]}: command not found",
        )
    except OSError as e:
        if not capture:
            err_console.print(f"[red]Local error:[/] {e}")
        return CommandResult(command=command, exit_code=1, success=False, stderr=str(e))

    logger.debug("%s exited with %s", command, proc.returncode)
    return CommandResult(
        command=command,
        exit_code=proc.returncode or 0,
        success=proc.returncode == 0,
        stdout=stdout_data.decode() if stdout_data else "",
        stderr=stderr_data.decode() if stderr_data else "",
    )


async def run_sequential_commands(
    commands: Sequence[Sequence[str]],
    *,
    cwd: Path | None = None,
) -> CommandResult:
    """Run commands one after another, stopping at the first failure."""
    result = CommandResult(command="", exit_code=0, success=True)
    for args in commands:
        console.print(f"[bold blue]▶[/] Running: [cyan]{escape(format_command(args))}[/]")
        result = await run_command(args, cwd=cwd)
        if not result.success:
            return result
    return result
