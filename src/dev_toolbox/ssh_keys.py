"""Switch the SSH key used for a git host.

Lists the key pairs in the SSH directory, shows which one the host block in
``~/.ssh/config`` currently points at, asks which one to use, rewrites the
host block and loads the chosen key into ``ssh-agent``.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.markup import escape

from .console import MSG_NO_KEYS, console
from .executor import CommandResult, run_command
from .ssh_config import (
    HostEntry,
    find_host_entry,
    read_config,
    replace_host_block,
    write_config,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from .config import Config, Workspace

logger = logging.getLogger(__name__)

PUBKEY_SUFFIX = ".pub"


class KeySwitchError(Exception):
    """Base class for failures that abort a key switch."""


class KeyDirectoryError(KeySwitchError):
    """The SSH directory could not be listed."""


class NoKeysFoundError(KeySwitchError):
    """The SSH directory holds no public keys."""


class SelectionCancelledError(KeySwitchError):
    """The operator cancelled the key prompt."""


class ConfigReadError(KeySwitchError):
    """The SSH config exists but could not be read."""


class ConfigWriteError(KeySwitchError):
    """The SSH config could not be written."""


@dataclass(frozen=True)
class KeyPair:
    """A public/private key pair sharing a filename stem."""

    name: str
    public_key_path: Path
    private_key_path: Path

    @classmethod
    def from_public_key(cls, path: Path) -> KeyPair:
        """Build a key pair from the path of its ``.pub`` file."""
        name = path.name.removesuffix(PUBKEY_SUFFIX)
        return cls(name=name, public_key_path=path, private_key_path=path.with_name(name))


@dataclass
class SwitchResult:
    """Outcome of a key switch."""

    key: KeyPair
    previous: Path | None
    config_path: Path
    agent_result: CommandResult

    @property
    def agent_loaded(self) -> bool:
        """Whether ssh-agent accepted the key."""
        return self.agent_result.success


# Styling for InquirerPy
PROMPT_STYLE = {
    "questionmark": "#E91E63 bold",
    "pointer": "#00BCD4 bold",
    "highlighted": "#00BCD4 bold",
    "selected": "#4CAF50 bold",
    "answer": "#00BCD4 bold",
}


def discover_keys(ssh_dir: Path) -> list[KeyPair]:
    """List key pairs in ``ssh_dir``, sorted by name.

    Raises KeyDirectoryError if the directory cannot be listed and
    NoKeysFoundError if it holds no ``.pub`` files.
    """
    try:
        entries = sorted(ssh_dir.iterdir())
    except OSError as e:
        msg = f"Could not read {ssh_dir}: {e.strerror or e}"
        raise KeyDirectoryError(msg) from e

    keys = [
        KeyPair.from_public_key(path)
        for path in entries
        if path.name.endswith(PUBKEY_SUFFIX) and path.name != PUBKEY_SUFFIX and path.is_file()
    ]
    logger.debug("Found %d public keys in %s", len(keys), ssh_dir)
    if not keys:
        raise NoKeysFoundError(MSG_NO_KEYS.format(path=ssh_dir))
    return keys


def detect_current_key(config_text: str, host: str, *, home: Path | None = None) -> Path | None:
    """Get the IdentityFile of the first block for ``host``, if any."""
    entry = find_host_entry(config_text, host, home=home)
    if entry is None:
        return None
    return entry.identity_file


def find_key(keys: Sequence[KeyPair], identity_file: Path | None) -> KeyPair | None:
    """Find the key pair whose private key is ``identity_file``."""
    if identity_file is None:
        return None
    for key in keys:
        if key.private_key_path == identity_file:
            return key
    return None


def show_keys(keys: Sequence[KeyPair], current: Path | None, host: str) -> None:
    """Print the current binding and the numbered list of available keys."""
    console.print()
    if current is not None:
        console.print(
            f"🔑 Currently used SSH key for [magenta]{host}[/]: [cyan]{escape(str(current))}[/]"
        )
    else:
        console.print(f"🔑 No SSH key is currently set for [magenta]{host}[/] in your ssh config.")

    current_key = find_key(keys, current)
    console.print("\nAvailable SSH keys:")
    for i, key in enumerate(keys, start=1):
        marker = " [green](current)[/]" if key == current_key else ""
        console.print(f"  \\[{i}] {escape(key.public_key_path.name)}{marker}")


def prompt_for_key(keys: Sequence[KeyPair], current: Path | None, host: str) -> KeyPair:
    """Ask the operator to pick one of ``keys``.

    Raises SelectionCancelledError on Ctrl+C or end of input.
    """
    # Lazy import: prompt_toolkit is only needed for the interactive prompt
    from InquirerPy import inquirer  # noqa: PLC0415
    from InquirerPy.utils import get_style  # noqa: PLC0415

    current_key = find_key(keys, current)
    choices: list[dict[str, Any]] = [
        {
            "name": key.public_key_path.name + (" (current)" if key == current_key else ""),
            "value": key,
        }
        for key in keys
    ]
    try:
        selected: KeyPair = inquirer.select(
            message=f"Which SSH key do you want to use for {host} pushes?",
            choices=choices,
            pointer=">",
            style=get_style(PROMPT_STYLE),
        ).execute()
    except (KeyboardInterrupt, EOFError) as e:
        msg = "Key selection cancelled"
        raise SelectionCancelledError(msg) from e
    return selected


def add_to_agent(key: KeyPair, ssh_add: Sequence[str] = ("ssh-add",)) -> CommandResult:
    """Load the private key into the running ssh-agent."""
    return asyncio.run(run_command([*ssh_add, str(key.private_key_path)], capture=True))


def switch_key(
    config: Config,
    workspace: Workspace,
    *,
    prompt: Callable[[Sequence[KeyPair], Path | None, str], KeyPair] | None = None,
) -> SwitchResult:
    """Point the config's git host at an operator-chosen key and load it into the agent.

    Nothing is written unless a key was chosen. A failing ssh-agent is
    reported through ``SwitchResult.agent_result`` and does not undo the
    rewrite.
    """
    host = config.git_host
    ssh_dir = config.get_ssh_dir(workspace)
    config_path = config.get_ssh_config_path(workspace)

    keys = discover_keys(ssh_dir)

    try:
        text = read_config(config_path)
    except OSError as e:
        msg = f"Could not read {config_path}: {e.strerror or e}"
        raise ConfigReadError(msg) from e
    current = detect_current_key(text, host, home=workspace.home)

    show_keys(keys, current, host)
    ask = prompt if prompt is not None else prompt_for_key
    selected = ask(keys, current, host)
    if selected not in keys:
        msg = f"Selected key is not one of the available keys: {selected}"
        raise KeySwitchError(msg)

    entry = HostEntry(
        host_alias=host,
        host_name=host,
        user=config.git_user,
        identity_file=selected.private_key_path,
        identities_only=True,
    )
    try:
        write_config(config_path, replace_host_block(text, entry))
    except OSError as e:
        msg = f"Could not write {config_path}: {e.strerror or e}"
        raise ConfigWriteError(msg) from e

    agent_result = add_to_agent(selected, config.ssh_add)
    if not agent_result.success:
        logger.debug("ssh-add failed: %s", agent_result.stderr.strip())
    return SwitchResult(
        key=selected,
        previous=current,
        config_path=config_path,
        agent_result=agent_result,
    )
