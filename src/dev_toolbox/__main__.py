"""Allow ``python -m dev_toolbox``."""

from dev_toolbox.cli import app

app()
