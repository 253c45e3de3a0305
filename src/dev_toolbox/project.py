"""One-shot project actions.

CLI flags are thin wrappers around these functions.
"""

from __future__ import annotations

import logging
import shutil
from importlib import resources
from typing import TYPE_CHECKING

from .executor import CommandResult, run_command, run_sequential_commands

if TYPE_CHECKING:
    from pathlib import Path

    from .config import Config

logger = logging.getLogger(__name__)


def guide_template() -> str:
    """Get the packaged llm.txt template."""
    return resources.files("dev_toolbox.templates").joinpath("llm.txt").read_text(encoding="utf-8")


def write_guide(cwd: Path, filename: str = "llm.txt") -> Path | None:
    """Write the LLM guide into ``cwd``.

    Returns the written path, or None if the file already exists (it is left
    untouched).
    """
    target = cwd / filename
    try:
        with target.open("x", encoding="utf-8") as f:
            f.write(guide_template())
    except FileExistsError:
        logger.debug("%s exists, not overwriting", target)
        return None
    return target


async def create_component(config: Config, cwd: Path) -> CommandResult:
    """Run the component generator interactively."""
    return await run_command(config.component_command, cwd=cwd)


async def scaffold(config: Config, cwd: Path) -> CommandResult:
    """Run the scaffold commands in order, stopping at the first failure.

    Commands that already ran are not undone.
    """
    return await run_sequential_commands(config.scaffold_commands, cwd=cwd)


def clean_modules(config: Config, cwd: Path) -> list[Path]:
    """Remove the dependency directory and lock file from ``cwd``.

    Missing paths are skipped. Returns the paths that were removed.
    """
    removed: list[Path] = []
    for name in config.clean_paths:
        path = cwd / name
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        elif path.exists() or path.is_symlink():
            path.unlink()
        else:
            continue
        logger.debug("Removed %s", path)
        removed.append(path)
    return removed
