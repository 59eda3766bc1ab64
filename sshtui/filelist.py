"""Directory listings and cursor state for one file panel."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

MAX_FILES = 1024
MAX_NAME_LENGTH = 255
PARENT = ".."

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


@dataclass
class FileEntry:
    """One row of a panel: a file or directory name and its mark."""

    name: str
    is_dir: bool = False
    marked: bool = False


def entry_sort_key(entry: FileEntry) -> tuple[bool, bool, str]:
    """Order ``..`` first, then directories, then names ignoring ASCII case."""
    return (entry.name != PARENT, not entry.is_dir, entry.name.translate(_ASCII_LOWER))


def sort_entries(entries) -> list[FileEntry]:
    """Return the entries in panel order."""
    return sorted(entries, key=entry_sort_key)


def join_path(directory: str, name: str) -> str:
    """Join a name onto a slash-separated directory."""
    if directory == "/":
        return "/" + name
    return f"{directory}/{name}"


def parent_path(path: str) -> str:
    """Drop the last component of a path; anything without a deeper slash gives ``/``."""
    slash = path.rfind("/")
    if slash > 0:
        return path[:slash]
    return "/"


def _is_listable_dir(path: str) -> bool:
    try:
        with os.scandir(path):
            return True
    except OSError:
        return False


def read_local_dir(path: str, show_hidden: bool = False) -> list[FileEntry]:
    """List a local directory in panel order, led by a ``..`` entry.

    Raises ``OSError`` if the directory cannot be opened.
    """
    entries = [FileEntry(PARENT, is_dir=True)]
    with os.scandir(path) as iterator:
        for item in iterator:
            if len(entries) >= MAX_FILES:
                break
            name = item.name
            if name in (".", PARENT):
                continue
            if not show_hidden and name.startswith("."):
                continue
            entries.append(
                FileEntry(
                    name[:MAX_NAME_LENGTH],
                    is_dir=_is_listable_dir(f"{path}/{name}"),
                )
            )
    return sort_entries(entries)


@dataclass
class FileList:
    """A panel's directory, its entries and the cursor within them."""

    cwd: str = ""
    entries: list[FileEntry] = field(default_factory=list)
    selected: int = 0
    scroll_offset: int = 0

    def populate(self, cwd: str, entries) -> None:
        """Replace the listing and reset the cursor to the top."""
        self.cwd = cwd
        self.entries = list(entries)
        self.selected = 0
        self.scroll_offset = 0

    def current(self) -> FileEntry | None:
        """Return the entry under the cursor, or ``None`` if the panel is empty."""
        if 0 <= self.selected < len(self.entries):
            return self.entries[self.selected]
        return None

    def move_up(self) -> None:
        """Move the cursor up one row, scrolling if needed."""
        if self.selected > 0:
            self.selected -= 1
            if self.selected < self.scroll_offset:
                self.scroll_offset = self.selected

    def move_down(self, page_size: int) -> None:
        """Move the cursor down one row, keeping it within a page of ``page_size`` rows."""
        if self.selected < len(self.entries) - 1:
            self.selected += 1
            if self.selected >= self.scroll_offset + page_size:
                self.scroll_offset = self.selected - page_size + 1

    def toggle_mark(self) -> bool:
        """Flip the mark of the entry under the cursor; ``..`` is never marked."""
        entry = self.current()
        if entry is None or entry.name == PARENT:
            return False
        entry.marked = not entry.marked
        return entry.marked

    def marked(self) -> list[FileEntry]:
        """Return the marked entries in panel order."""
        return [entry for entry in self.entries if entry.marked]

    def mark_current_file(self) -> bool:
        """Ensure something is marked, marking the file under the cursor if nothing is.

        Returns whether any entry is marked afterwards.
        """
        if any(entry.marked for entry in self.entries):
            return True
        entry = self.current()
        if self.selected > 0 and entry is not None and not entry.is_dir:
            entry.marked = True
            return True
        return False

    def target_path(self) -> str:
        """Return the directory that opening the entry under the cursor leads to."""
        entry = self.current()
        if entry is None:
            return self.cwd
        if entry.name == PARENT:
            return parent_path(self.cwd)
        if entry.is_dir:
            return join_path(self.cwd, entry.name)
        return self.cwd