"""CLI interface using Typer."""

from __future__ import annotations

from dev_toolbox.cli.app import app

__all__ = ["app"]

if __name__ == "__main__":
    app()
