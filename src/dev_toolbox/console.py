"""Shared console instances and message helpers."""

from __future__ import annotations

from rich.console import Console

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

MSG_NO_KEYS = "No SSH public keys found in {path}"
MSG_GUIDE_EXISTS = "{name} already exists. Skipping."
MSG_AGENT_HINT = "You may need to run [bold]eval $(ssh-agent -s)[/] and try again."


def print_error(msg: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[red]✗[/] {msg}")


def print_warning(msg: str) -> None:
    """Print a warning message to stderr."""
    err_console.print(f"[yellow]![/] {msg}")


def print_success(msg: str) -> None:
    """Print a success message to stdout."""
    console.print(f"[green]✓[/] {msg}")


def print_hint(msg: str) -> None:
    """Print a dimmed hint to stderr."""
    err_console.print(f"[dim]{msg}[/]")
