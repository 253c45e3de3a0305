"""Reading and rewriting ``Host`` blocks in an OpenSSH client config.

The parser is line oriented. A block starts at a ``Host`` or ``Match`` line
and runs up to the next such line or the end of the text. Text before the
first marker forms a preamble block. Joining the text of all blocks gives
back the input unchanged, so anything outside the replaced block survives a
rewrite byte for byte.
"""

from __future__ import annotations

import logging
import os
import re
import stat
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

_MARKERS = frozenset({"host", "match"})
# "Keyword value", "Keyword=value" or "Keyword = value"
_LINE_RE = re.compile(r"^(?P<keyword>\w+)(?:\s*=\s*|\s+|$)(?P<value>.*)$")

NEW_CONFIG_MODE = 0o600


@dataclass
class Block:
    """A contiguous region of config text."""

    text: str
    keyword: str | None = None
    patterns: tuple[str, ...] = ()

    def is_host(self, host: str) -> bool:
        """Whether this block is a ``Host`` block for exactly ``host``."""
        return (
            self.keyword == "host"
            and len(self.patterns) == 1
            and self.patterns[0].lower() == host.lower()
        )


@dataclass
class HostEntry:
    """Connection settings for a single host alias."""

    host_alias: str
    host_name: str | None = None
    user: str | None = None
    identity_file: Path | None = None
    identities_only: bool = False
    options: dict[str, str] = field(default_factory=dict)


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':  # noqa: PLR2004
        return value[1:-1]
    return value


def _parse_line(line: str) -> tuple[str, str] | None:
    """Split a config line into (lowercased keyword, value), skipping comments."""
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    match = _LINE_RE.match(stripped)
    if match is None:
        return None
    return match.group("keyword").lower(), match.group("value").strip()


def split_blocks(text: str) -> list[Block]:
    """Split config text into blocks."""
    blocks: list[Block] = []
    lines: list[str] = []
    keyword: str | None = None
    patterns: tuple[str, ...] = ()

    for line in text.splitlines(keepends=True):
        parsed = _parse_line(line)
        if parsed is not None and parsed[0] in _MARKERS:
            if lines:
                blocks.append(Block("".join(lines), keyword, patterns))
            lines = []
            keyword = parsed[0]
            patterns = tuple(_unquote(p) for p in parsed[1].split())
        lines.append(line)

    if lines:
        blocks.append(Block("".join(lines), keyword, patterns))
    return blocks


def _expand(value: str, home: Path | None) -> Path:
    path = Path(value)
    if path.parts and path.parts[0] == "~":
        if home is None:
            return path.expanduser()
        return home.joinpath(*path.parts[1:])
    return path


def parse_host_entry(block: Block, *, home: Path | None = None) -> HostEntry:
    """Read the settings of a ``Host`` block. The first value of a keyword wins."""
    options: dict[str, str] = {}
    for line in block.text.splitlines()[1:]:
        parsed = _parse_line(line)
        if parsed is None:
            continue
        keyword, value = parsed
        options.setdefault(keyword, _unquote(value))

    identity = options.get("identityfile")
    return HostEntry(
        host_alias=block.patterns[0] if block.patterns else "",
        host_name=options.get("hostname"),
        user=options.get("user"),
        identity_file=_expand(identity, home) if identity else None,
        identities_only=options.get("identitiesonly", "").lower() == "yes",
        options=options,
    )


def find_host_entry(text: str, host: str, *, home: Path | None = None) -> HostEntry | None:
    """Find the first block for ``host`` and parse it."""
    for block in split_blocks(text):
        if block.is_host(host):
            return parse_host_entry(block, home=home)
    return None


def remove_host_blocks(text: str, host: str) -> str:
    """Remove every block for ``host``, keeping all other text untouched."""
    return "".join(block.text for block in split_blocks(text) if not block.is_host(host))


def detect_newline(text: str) -> str:
    """Get the line ending used by the first line of ``text``, defaulting to LF."""
    end = text.find("\n")
    if end > 0 and text[end - 1] == "\r":
        return "\r\n"
    return "\n"


def render_host_block(entry: HostEntry, newline: str = "\n") -> str:
    """Render a ``Host`` block for an entry, ending each line with ``newline``."""
    lines = [
        f"Host {entry.host_alias}",
        f"  HostName {entry.host_name or entry.host_alias}",
    ]
    if entry.user:
        lines.append(f"  User {entry.user}")
    if entry.identity_file is not None:
        identity = str(entry.identity_file)
        if any(c.isspace() for c in identity):
            identity = f'"{identity}"'
        lines.append(f"  IdentityFile {identity}")
    if entry.identities_only:
        lines.append("  IdentitiesOnly yes")
    return newline.join(lines) + newline


def replace_host_block(text: str, entry: HostEntry) -> str:
    """Replace all blocks for the entry's host with a single freshly rendered one.

    The new block goes at the end, separated from what precedes it by one
    blank line. Applying this twice gives the same text as applying it once.
    The added lines use the line ending of the existing text.
    """
    newline = detect_newline(text)
    remaining = remove_host_blocks(text, entry.host_alias)
    if remaining and not remaining.endswith(newline):
        remaining += newline
    if remaining and not remaining.endswith(newline * 2):
        remaining += newline
    return remaining + render_host_block(entry, newline)


def read_config(path: Path) -> str:
    """Read a config file, returning an empty string if it does not exist.

    Bytes that are not valid UTF-8 are kept as surrogate escapes and
    ``write_config`` writes them back unchanged.
    """
    try:
        with path.open(encoding="utf-8", errors="surrogateescape", newline="") as f:
            text = f.read()
    except FileNotFoundError:
        logger.debug("No SSH config at %s", path)
        return ""
    logger.debug("Read %d bytes from %s", len(text), path)
    return text


def write_config(path: Path, text: str) -> None:
    """Write a config file atomically.

    The text goes to a temporary file next to the target which then replaces
    it, so readers see either the old or the new content. An existing file
    keeps its permission bits; a new one is created with mode 0600. A symlink
    is followed and its target is replaced.
    """
    if path.is_symlink():
        path = path.resolve()
    mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else NEW_CONFIG_MODE

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(text)
        tmp_path.chmod(mode)
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.debug("Wrote %d bytes to %s", len(text), path)
