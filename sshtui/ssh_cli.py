"""Command that picks a host from the SSH config and connects to it with ``ssh``."""

from __future__ import annotations

import curses
import locale
import os
import sys

from sshtui.menu import select_host
from sshtui.sshconfig import default_config_path, load_hosts

HELP_TEXT = "Use Ctrl+Q/Ctrl+S or Up/Down, Enter to select, 'q' to quit."
CTRL_Q = 17
CTRL_S = 19
UP_KEYS = (CTRL_Q, curses.KEY_UP)
DOWN_KEYS = (CTRL_S, curses.KEY_DOWN)


def main(argv: list[str] | None = None) -> int:
    """Show the host menu and replace this process with ``ssh`` to the chosen host.

    Command-line arguments are accepted and ignored.
    """
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        pass

    try:
        hosts = load_hosts()
    except OSError as exc:
        reason = exc.strerror or str(exc)
        print(f"Could not open SSH config file: {reason}", file=sys.stderr)
        print(f"Attempted path: {default_config_path()}", file=sys.stderr)
        hosts = []

    if not hosts:
        print(
            "No hosts found in SSH config or config file not found/readable.",
            file=sys.stderr,
        )
        return 0

    try:
        index = curses.wrapper(
            select_host, hosts, HELP_TEXT, UP_KEYS, DOWN_KEYS, True
        )
    except RuntimeError as exc:
        print(exc)
        return 1

    if index is None:
        print("Exiting.")
        return 0

    host = hosts[index]
    print(f"Connecting to {host}...", flush=True)
    try:
        os.execvp("ssh", ["ssh", host])
    except OSError as exc:
        print(f"execvp failed: {exc}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())