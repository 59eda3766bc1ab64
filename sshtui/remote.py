"""Listing and probing files on a remote host over ``ssh``."""

from __future__ import annotations

import subprocess
from typing import Iterable

from sshtui.filelist import (
    MAX_FILES,
    MAX_NAME_LENGTH,
    PARENT,
    FileEntry,
    sort_entries,
)

_PERMISSIONS_LENGTH = 10


def listing_command(host: str, path: str) -> list[str]:
    """Return the argument vector that lists ``path`` on ``host`` as ``perms|name`` lines."""
    script = (
        f'cd "{path}" 2>/dev/null && ls -la | '
        'awk "NR>2 {printf \\"%s|%s\\n\\", \\$1, \\$NF}"'
    )
    return ["ssh", host, script]


def parse_listing(lines: Iterable[str], show_hidden: bool = False) -> list[FileEntry]:
    """Turn ``perms|name`` lines into panel entries led by ``..``.

    Lines without a ``|`` are ignored, as are ``.`` and ``..`` and, unless
    ``show_hidden`` is set, names starting with a dot.
    """
    entries = [FileEntry(PARENT, is_dir=True)]
    for line in lines:
        if len(entries) >= MAX_FILES:
            break
        permissions, separator, name = line.partition("|")
        if not separator:
            continue
        permissions = permissions[:_PERMISSIONS_LENGTH]
        if name.endswith("\n"):
            name = name[:-1]
        if name in (".", PARENT):
            continue
        if not show_hidden and name.startswith("."):
            continue
        entries.append(
            FileEntry(name[:MAX_NAME_LENGTH], is_dir=permissions.startswith("d"))
        )
    return sort_entries(entries)


def _output(argv: list[str]) -> str:
    result = subprocess.run(
        argv,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        text=True,
        errors="replace",
    )
    return result.stdout or ""


def _first_line(argv: list[str]) -> str:
    """Return the first output line of a command, or ``""`` if it cannot run."""
    try:
        output = _output(argv)
    except OSError:
        return ""
    lines = output.splitlines()
    return lines[0] if lines else ""


def read_remote_dir(host: str, path: str, show_hidden: bool = False) -> list[FileEntry]:
    """List a remote directory in panel order.

    Raises ``OSError`` if ``ssh`` cannot be started.
    """
    output = _output(listing_command(host, path))
    return parse_listing(output.splitlines(keepends=True), show_hidden)


def expand_home(path: str, home: str) -> str:
    """Replace a leading ``~`` component of ``path`` with ``home``."""
    if path == "~":
        return home
    if path.startswith("~/"):
        return home + path[1:]
    return path


def fallback_home(username: str) -> str:
    """Guess a home directory from a user name."""
    if username == "root":
        return "/root"
    return f"/home/{username}"


def resolve_remote_path(path: str, host: str) -> str:
    """Expand a leading ``~`` using the remote ``$HOME``, or a guess from ``whoami``."""
    if path != "~" and not path.startswith("~/"):
        return path
    home = _first_line(["ssh", host, "echo $HOME"])
    if not home:
        try:
            output = _output(["ssh", host, "whoami"])
        except OSError:
            pass
        else:
            lines = output.splitlines()
            home = fallback_home(lines[0] if lines else "")
    return expand_home(path, home)


def remote_file_exists(host: str, path: str) -> bool:
    """Report whether ``path`` exists on ``host``; failure to ask counts as absent."""
    script = f'[ -e "{path}" ] && echo "exists" || echo "not exists"'
    return _first_line(["ssh", host, script]).startswith("exists")