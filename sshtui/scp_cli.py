"""Command that picks a host from the SSH config and opens the file manager on it."""

from __future__ import annotations

import curses
import locale
import sys

from sshtui.manager import FileManager
from sshtui.menu import select_host
from sshtui.sshconfig import load_host_lines

PROGRAM_NAME = "scp-tui"


def main(argv: list[str] | None = None) -> int:
    """Choose a host, then copy files to and from it; return the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    if argv:
        print(f"{PROGRAM_NAME} takes no arguments.")
        return 1

    hosts = load_host_lines()
    if not hosts:
        print("No servers found, please check ~/.ssh/config")
        return 1

    try:
        locale.setlocale(locale.LC_ALL, "C")
    except locale.Error:
        pass

    try:
        index = curses.wrapper(select_host, hosts)
    except RuntimeError as exc:
        print(exc)
        return 1

    if index is None:
        print("Selection cancelled")
        return 0

    host = hosts[index]
    print(f"You selected: {host}")
    FileManager(host).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())