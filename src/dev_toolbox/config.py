"""Configuration loading and Pydantic models."""

from __future__ import annotations

import logging
import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TOOLBOX_CONFIG"
CONFIG_FILENAME = "toolbox.yaml"

DEFAULT_SCAFFOLD_COMMANDS = [
    ["npx", "create-next-app@latest", ".", "--app", "--typescript", "--eslint"],
    ["npm", "install", "-D", "sass-embedded"],
    ["npx", "storybook@latest", "init"],
]


class ConfigError(ValueError):
    """Raised when a config file cannot be parsed or validated."""


@dataclass(frozen=True)
class Workspace:
    """Home and working directory a flow operates on."""

    home: Path
    cwd: Path

    @classmethod
    def from_environment(cls) -> Workspace:
        """Resolve the workspace from the current process."""
        return cls(home=Path.home(), cwd=Path.cwd())

    def expand(self, path: Path) -> Path:
        """Expand a leading ``~`` against this workspace's home."""
        if path.parts and path.parts[0] == "~":
            return self.home.joinpath(*path.parts[1:])
        return path


def _split_command(value: Any) -> Any:
    if isinstance(value, str):
        return shlex.split(value)
    return value


class Config(BaseModel):
    """Toolbox configuration. Every field has a working default."""

    model_config = ConfigDict(extra="forbid")

    ssh_dir: Path | None = None
    git_host: str = "github.com"
    git_user: str = "git"
    ssh_add: list[str] = Field(default_factory=lambda: ["ssh-add"])
    guide_file: str = "llm.txt"
    component_command: list[str] = Field(
        default_factory=lambda: ["npx", "@oninross/create-component"]
    )
    scaffold_commands: list[list[str]] = Field(
        default_factory=lambda: [list(cmd) for cmd in DEFAULT_SCAFFOLD_COMMANDS]
    )
    clean_paths: list[str] = Field(default_factory=lambda: ["node_modules", "package-lock.json"])

    @field_validator("ssh_add", "component_command", mode="before")
    @classmethod
    def _parse_command(cls, value: Any) -> Any:
        return _split_command(value)

    @field_validator("scaffold_commands", mode="before")
    @classmethod
    def _parse_commands(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_split_command(cmd) for cmd in value]
        return value

    @field_validator("ssh_add", "component_command")
    @classmethod
    def _not_empty(cls, value: list[str]) -> list[str]:
        if not value:
            msg = "command must not be empty"
            raise ValueError(msg)
        return value

    @field_validator("scaffold_commands")
    @classmethod
    def _no_empty_commands(cls, value: list[list[str]]) -> list[list[str]]:
        if any(not cmd for cmd in value):
            msg = "scaffold commands must not be empty"
            raise ValueError(msg)
        return value

    def get_ssh_dir(self, workspace: Workspace) -> Path:
        """Get the SSH key directory, defaulting to ``<home>/.ssh``."""
        if self.ssh_dir is None:
            return workspace.home / ".ssh"
        return workspace.expand(self.ssh_dir)

    def get_ssh_config_path(self, workspace: Workspace) -> Path:
        """Get the SSH client config file path."""
        return self.get_ssh_dir(workspace) / "config"


def config_search_paths(workspace: Workspace) -> list[Path]:
    """Get the implicit config locations for a workspace, in priority order."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    config_home = Path(xdg) if xdg else workspace.home / ".config"
    return [
        workspace.cwd / CONFIG_FILENAME,
        config_home / "dev-toolbox" / CONFIG_FILENAME,
    ]


def find_config_path(
    path: Path | None = None, *, workspace: Workspace | None = None
) -> Path | None:
    """Find the config file to load.

    Search order:
    1. Explicit path if provided
    2. $TOOLBOX_CONFIG
    3. ./toolbox.yaml
    4. $XDG_CONFIG_HOME/dev-toolbox/toolbox.yaml

    Relative paths resolve against the workspace's working directory. Without
    $XDG_CONFIG_HOME the user config lives under the workspace's home.
    """
    if workspace is None:
        workspace = Workspace.from_environment()
    if path is not None:
        return workspace.cwd / path
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return workspace.cwd / env_path
    for candidate in config_search_paths(workspace):
        if candidate.exists():
            return candidate
    return None


def load_config(path: Path | None = None, *, workspace: Workspace | None = None) -> Config:
    """Load configuration from YAML, falling back to defaults when no file exists.

    An explicitly requested file (argument or environment variable) must exist.
    """
    config_path = find_config_path(path, workspace=workspace)
    if config_path is None:
        logger.debug("No config file found, using defaults")
        return Config()

    if not config_path.exists():
        msg = f"Config file not found: {config_path}"
        raise FileNotFoundError(msg)

    logger.debug("Loading config from %s", config_path)
    try:
        with config_path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in {config_path}: {e}"
        raise ConfigError(msg) from e

    if not isinstance(raw, dict):
        msg = f"Invalid config in {config_path}: expected a mapping"
        raise ConfigError(msg)

    try:
        return Config(**raw)
    except ValidationError as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
