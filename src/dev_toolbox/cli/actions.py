"""Handlers for the action flags: guide, component, scaffold, switch, clean."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer
from rich.markup import escape

from dev_toolbox.cli.common import EXIT_INTERRUPTED, report_result, run_async
from dev_toolbox.console import (
    MSG_AGENT_HINT,
    MSG_GUIDE_EXISTS,
    print_error,
    print_hint,
    print_success,
    print_warning,
)
from dev_toolbox.project import clean_modules, create_component, scaffold, write_guide
from dev_toolbox.ssh_keys import KeySwitchError, SelectionCancelledError, switch_key

if TYPE_CHECKING:
    from dev_toolbox.config import Config, Workspace


def run_llm_guide(cfg: Config, workspace: Workspace) -> None:
    """Write llm.txt, warning instead of overwriting an existing one."""
    try:
        written = write_guide(workspace.cwd, cfg.guide_file)
    except OSError as e:
        print_error(f"Failed to write {cfg.guide_file}: {e}")
        raise typer.Exit(1) from e
    if written is None:
        print_warning(MSG_GUIDE_EXISTS.format(name=cfg.guide_file))
        return
    print_success(f"Generated {cfg.guide_file}")


def run_create_component(cfg: Config, workspace: Workspace) -> None:
    """Hand over to the component generator."""
    result = run_async(create_component(cfg, workspace.cwd))
    report_result(result, "Failed to run create-component")


def run_scaffold(cfg: Config, workspace: Workspace) -> None:
    """Run the scaffold command sequence."""
    result = run_async(scaffold(cfg, workspace.cwd))
    report_result(result, "Scaffold failed")
    print_success("Scaffold complete!")


def run_switch(cfg: Config, workspace: Workspace) -> None:
    """Switch the SSH key used for the git host."""
    try:
        result = switch_key(cfg, workspace)
    except SelectionCancelledError as e:
        print_error(str(e))
        raise typer.Exit(EXIT_INTERRUPTED) from e
    except KeySwitchError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    host = cfg.git_host
    name = escape(result.key.name)
    if result.agent_loaded:
        print_success(f"Switched [magenta]{host}[/] SSH key to: [cyan]{name}[/]")
        return

    print_success(
        f"Updated {escape(str(result.config_path))}: [magenta]{host}[/] uses [cyan]{name}[/]"
    )
    print_warning("Could not add key to ssh-agent.")
    detail = result.agent_result.stderr.strip()
    if detail:
        print_hint(escape(detail))
    print_hint(MSG_AGENT_HINT)


def run_clean_modules(cfg: Config, workspace: Workspace) -> None:
    """Remove the dependency directory and lock file."""
    try:
        clean_modules(cfg, workspace.cwd)
    except OSError as e:
        print_error(f"Failed to clean modules: {e}")
        raise typer.Exit(1) from e
    print_success(f"Removed {' and '.join(cfg.clean_paths)}")
