"""Shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from dev_toolbox.config import Config, Workspace


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    """A home and project directory under tmp_path."""
    home = tmp_path / "home"
    cwd = tmp_path / "project"
    (home / ".ssh").mkdir(parents=True)
    cwd.mkdir()
    return Workspace(home=home, cwd=cwd)


@pytest.fixture
def ssh_dir(workspace: Workspace) -> Path:
    return workspace.home / ".ssh"


@pytest.fixture
def config() -> Config:
    """Config whose ssh-add always succeeds."""
    return Config(ssh_add=["true"])


def make_keys(ssh_dir: Path, *names: str) -> None:
    """Create key pairs in ssh_dir."""
    for name in names:
        (ssh_dir / name).write_text("PRIVATE\n")
        (ssh_dir / f"{name}.pub").write_text(f"ssh-ed25519 AAAA {name}@example\n")
