"""Discovery of host aliases declared in an OpenSSH client configuration."""

from __future__ import annotations

import os
from pathlib import Path

MAX_HOSTS = 128
MAX_HOST_NAME_LENGTH = 127


def default_config_path() -> Path:
    """Return the path of the user's ``~/.ssh/config``."""
    home = os.environ.get("HOME")
    if home:
        return Path(home) / ".ssh" / "config"
    return Path(os.path.expanduser("~/.ssh/config"))


def parse_hosts(text: str) -> list[str]:
    """Collect host aliases, skipping comments, blank lines and the ``*`` pattern.

    The ``Host`` keyword is matched case-insensitively and may be indented.
    Only the first alias of a line is kept.
    """
    hosts: list[str] = []
    for raw in text.splitlines():
        line = raw.lstrip()
        if not line or line.startswith("#"):
            continue
        if line[:5].lower() != "host ":
            continue
        value = line[5:].strip()
        if value == "*":
            continue
        alias = value.split(" ", 1)[0]
        if alias:
            hosts.append(alias)
    return hosts


def parse_host_lines(text: str, limit: int = MAX_HOSTS) -> list[str]:
    """Collect at most ``limit`` aliases from lines beginning exactly with ``Host ``.

    Each alias is the first word after the keyword, cut to
    ``MAX_HOST_NAME_LENGTH`` characters.
    """
    hosts: list[str] = []
    for line in text.splitlines():
        if len(hosts) >= limit:
            break
        if not line.startswith("Host "):
            continue
        rest = line[5:].lstrip(" \t")
        alias = rest
        for position, char in enumerate(rest):
            if char in " \t\n":
                alias = rest[:position]
                break
        hosts.append(alias[:MAX_HOST_NAME_LENGTH])
    return hosts


def _read(path: str | os.PathLike[str]) -> str:
    return Path(path).read_text(encoding="utf-8", errors="surrogateescape")


def load_hosts(path: str | os.PathLike[str] | None = None) -> list[str]:
    """Read a config file and return its aliases; raises ``OSError`` if unreadable."""
    return parse_hosts(_read(default_config_path() if path is None else path))


def load_host_lines(
    path: str | os.PathLike[str] | None = None, limit: int = MAX_HOSTS
) -> list[str]:
    """Read a config file with :func:`parse_host_lines`; an unreadable file gives no hosts."""
    try:
        text = _read(default_config_path() if path is None else path)
    except OSError:
        return []
    return parse_host_lines(text, limit)