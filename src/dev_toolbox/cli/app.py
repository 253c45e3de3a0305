"""Typer application and flag dispatch.

Each invocation runs at most one action. When several action flags are
given, the first one in ``ACTIONS`` order wins. Anything unrecognised falls
through to the usage text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

import typer

from dev_toolbox import __version__
from dev_toolbox.cli import actions
from dev_toolbox.cli.common import ConfigOption, VerboseOption, load_config_or_exit, setup_logging
from dev_toolbox.console import console

if TYPE_CHECKING:
    from collections.abc import Callable

    from dev_toolbox.config import Config, Workspace

PROG = "toolbox"

FLAG_HELP = [
    ("--llm-guide, -g", "Generate llm.txt in the project root"),
    ("--create-component, -c", "Run @oninross/create-component"),
    ("--scaffold", "Scaffold Next.js + Storybook"),
    ("--switch, -s", "Switch SSH key for GitHub pushes"),
    ("--clean-modules, -x", "Remove node_modules and package-lock.json"),
    ("--help, -h", "List all available commands in this package"),
]

EXAMPLES = [
    "--llm-guide",
    "--create-component",
    "-c",
    "--scaffold",
    "--switch",
    "-s",
    "--clean-modules",
    "-x",
    "--help",
    "-h",
]


def print_help() -> None:
    """Print the list of available flags."""
    console.print(f"\nAvailable commands in [bold]{PROG}[/]:")
    for flag, text in FLAG_HELP:
        console.print(f"  {flag:<24}{text}")


def print_usage() -> None:
    """Print the full usage text with examples."""
    console.print("\nUsage:")
    for flag, text in FLAG_HELP:
        console.print(f"  {PROG} {flag:<24}{text}")
    console.print("\nExamples:")
    for example in EXAMPLES:
        console.print(f"  {PROG} {example}")
    console.print()


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dev-toolbox {__version__}")
        raise typer.Exit


app = typer.Typer(
    name=PROG,
    help="Developer bootstrap toolbox",
    add_completion=False,
)


@app.command(
    add_help_option=False,
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
def main(
    llm_guide: Annotated[
        bool, typer.Option("--llm-guide", "-g", help="Generate llm.txt in the project root")
    ] = False,
    create_component: Annotated[
        bool, typer.Option("--create-component", "-c", help="Run @oninross/create-component")
    ] = False,
    scaffold: Annotated[
        bool, typer.Option("--scaffold", help="Scaffold Next.js + Storybook")
    ] = False,
    switch: Annotated[
        bool, typer.Option("--switch", "-s", help="Switch SSH key for GitHub pushes")
    ] = False,
    show_help: Annotated[
        bool, typer.Option("--help", "-h", help="List all available commands")
    ] = False,
    clean_modules: Annotated[
        bool,
        typer.Option("--clean-modules", "-x", help="Remove node_modules and package-lock.json"),
    ] = False,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Developer bootstrap toolbox."""
    setup_logging(verbose)

    if show_help and not (llm_guide or create_component or scaffold or switch):
        print_help()
        return

    selected: Callable[[Config, Workspace], None] | None = None
    for flag, handler in (
        (llm_guide, actions.run_llm_guide),
        (create_component, actions.run_create_component),
        (scaffold, actions.run_scaffold),
        (switch, actions.run_switch),
        (clean_modules, actions.run_clean_modules),
    ):
        if flag:
            selected = handler
            break

    if selected is None:
        print_usage()
        return

    # Lazy import: pydantic is only needed once an action runs
    from dev_toolbox.config import Workspace  # noqa: PLC0415

    workspace = Workspace.from_environment()
    cfg = load_config_or_exit(config, workspace)
    selected(cfg, workspace)
