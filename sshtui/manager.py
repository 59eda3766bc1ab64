"""Two-panel file manager that copies files to and from a remote host."""

from __future__ import annotations

import collections
import curses
import os
import time
from typing import Callable

from sshtui.filelist import FileList, join_path, read_local_dir
from sshtui.remote import read_remote_dir, remote_file_exists, resolve_remote_path
from sshtui.transfer import Direction, Transfer

HELP = (
    "Tab: Switch panel | Enter: Open directory | Space: Select file | "
    "F5: Download | F6: Upload | P: Show hidden files | Q: Quit"
)

PAIR_DEFAULT = 1
PAIR_HIGHLIGHT = 2
PAIR_TITLE = 3
PAIR_BORDER = 4
PAIR_DIRECTORY = 5
PAIR_SELECTED = 6
PAIR_PROGRESS = 7

_PAIRS = {
    PAIR_DEFAULT: (curses.COLOR_WHITE, curses.COLOR_BLACK),
    PAIR_HIGHLIGHT: (curses.COLOR_BLACK, curses.COLOR_CYAN),
    PAIR_TITLE: (curses.COLOR_YELLOW, curses.COLOR_BLACK),
    PAIR_BORDER: (curses.COLOR_BLUE, curses.COLOR_BLACK),
    PAIR_DIRECTORY: (curses.COLOR_GREEN, curses.COLOR_BLACK),
    PAIR_SELECTED: (curses.COLOR_CYAN, curses.COLOR_BLACK),
    PAIR_PROGRESS: (curses.COLOR_BLUE, curses.COLOR_BLACK),
}

NOTICE_PAUSE = 1.5
POLL_INTERVAL = 0.1

_YES = (ord("y"), ord("Y"))
_QUIT = (ord("q"), ord("Q"))
_FOCUS_KEYS = (ord("\t"), curses.KEY_LEFT, curses.KEY_RIGHT)
_ENTER_KEYS = (10, curses.KEY_ENTER)
_HIDDEN_KEYS = (ord("p"), ord("P"))


def progress_bar_cells(progress: int, width: int) -> int:
    """Return how many of ``width`` cells a bar at ``progress`` percent fills."""
    if width <= 0:
        return 0
    return max(0, progress * width // 100)


def percent_label(progress: int) -> str:
    """Format a percentage right-aligned in three digits."""
    return f"{progress:3d}%"


def transfer_message(direction: Direction, name: str) -> str:
    """Describe a running transfer of ``name``."""
    verb = "Uploading" if direction is Direction.UPLOAD else "Downloading"
    return f"{verb} {name}"


def _basename(path: str) -> str:
    stripped = path.rstrip("/")
    return stripped.rsplit("/", 1)[-1] if stripped else "/"


def _put(win, y: int, x: int, text: str, attr: int = 0) -> None:
    try:
        win.addstr(y, x, text, attr)
    except curses.error:
        pass


class FileManager:
    """Local and remote panels side by side, with ``scp`` copies between them."""

    def __init__(
        self,
        host: str,
        *,
        local_lister: Callable = read_local_dir,
        remote_lister: Callable = read_remote_dir,
        confirm: Callable[[str], bool] | None = None,
        page_size: int = 20,
    ) -> None:
        self.host = host
        self.local = FileList()
        self.remote = FileList()
        self.left_focus = True
        self.show_hidden = False
        self.page_size = page_size
        self.transfer: Transfer | None = None
        self.status_log: collections.deque[str] = collections.deque(maxlen=64)
        self._list_local = local_lister
        self._list_remote = remote_lister
        self._confirm = confirm
        self._status = None
        self._progress = None

    @property
    def focused(self) -> FileList:
        """The panel that has the keyboard."""
        return self.local if self.left_focus else self.remote

    def _transfer_active(self) -> bool:
        return self.transfer is not None and self.transfer.active

    def _reload_local(self, path: str) -> None:
        try:
            entries = self._list_local(path, self.show_hidden)
        except OSError:
            self.local.cwd = path
            return
        self.local.populate(path, entries)

    def _reload_remote(self, path: str) -> None:
        try:
            entries = self._list_remote(self.host, path, self.show_hidden)
        except OSError:
            self.remote.cwd = path
            return
        self.remote.populate(path, entries)

    def _say(self, message: str, pause: bool = False) -> None:
        if message != HELP:
            self.status_log.append(message)
        if self._status is None:
            return
        _put(self._status, 0, 1, message)
        try:
            self._status.clrtoeol()
        except curses.error:
            pass
        self._status.refresh()
        if pause:
            time.sleep(NOTICE_PAUSE)

    def _ask(self, question: str) -> bool:
        self._say(question)
        if self._confirm is not None:
            return bool(self._confirm(question))
        if self._status is None:
            return False
        return self._status.getch() in _YES

    def _poll_key(self) -> int:
        if self._status is None:
            return -1
        self._status.nodelay(True)
        try:
            return self._status.getch()
        finally:
            self._status.nodelay(False)

    def handle_key(self, key: int) -> bool:
        """Act on one key press; return ``False`` when the manager should close."""
        if key in _QUIT:
            if not self._transfer_active():
                return False
            if self._ask("Transfer in progress, confirm exit? (y/n)"):
                self.transfer.cancel()
                return False
            self._say(HELP)
            return True
        if key in _FOCUS_KEYS:
            self.left_focus = not self.left_focus
        elif key == curses.KEY_UP:
            self.focused.move_up()
        elif key == curses.KEY_DOWN:
            self.focused.move_down(self.page_size)
        elif key in _ENTER_KEYS:
            target = self.focused.target_path()
            if self.left_focus:
                self._reload_local(target)
            else:
                self._reload_remote(target)
        elif key == ord(" "):
            self.focused.toggle_mark()
        elif key == curses.KEY_F5:
            self._copy_marked(Direction.DOWNLOAD)
        elif key == curses.KEY_F6:
            self._copy_marked(Direction.UPLOAD)
        elif key in _HIDDEN_KEYS:
            self.show_hidden = not self.show_hidden
            self._reload_local(self.local.cwd)
            self._reload_remote(self.remote.cwd)
        return True

    def _copy_marked(self, direction: Direction) -> None:
        upload = direction is Direction.UPLOAD
        if self._transfer_active():
            self._say(
                "A transfer is already in progress, please wait for it to complete",
                pause=True,
            )
            self._say(HELP)
            return
        source = self.local if upload else self.remote
        if not source.mark_current_file():
            self._say(f"Please select a file to {'upload' if upload else 'download'}", pause=True)
            self._say(HELP)
            return
        for entry in source.marked():
            src = join_path(source.cwd, entry.name)
            if upload:
                dest = join_path(self.remote.cwd, entry.name)
                exists = remote_file_exists(self.host, dest)
            else:
                dest = f"{self.local.cwd}/{entry.name}"
                exists = os.path.exists(dest)
            if exists and not self._ask(
                f"File {entry.name} already exists, overwrite? (y/n)"
            ):
                entry.marked = False
                continue
            self._run_transfer(Transfer(direction, self.host, src, dest), entry.name)
            entry.marked = False
        if upload:
            self._reload_remote(self.remote.cwd)
        else:
            self._reload_local(self.local.cwd)
        self._show_complete()
        self._say(HELP)

    def _run_transfer(self, transfer: Transfer, name: str) -> None:
        self.transfer = transfer
        try:
            transfer.start()
        except OSError:
            self._say(f"Unable to start transfer {name}", pause=True)
            return
        message = transfer_message(transfer.direction, name)
        while transfer.active:
            self._draw_progress(transfer.progress, message)
            time.sleep(POLL_INTERVAL)
            if self._poll_key() in _QUIT:
                if self._ask("Cancel transfer? (y/n)"):
                    transfer.cancel()
                    break
                self._say(HELP)

    def _draw_progress(self, progress: int, message: str) -> None:
        win = self._progress
        if win is None:
            return
        width = win.getmaxyx()[1] - 4
        win.erase()
        win.box()
        if message:
            _put(win, 0, 2, f" {message} ")
        if width > 0:
            try:
                win.hline(1, 2, curses.ACS_CKBOARD, width)
            except curses.error:
                pass
        filled = progress_bar_cells(progress, width)
        if filled:
            _put(win, 1, 2, " " * filled, curses.color_pair(PAIR_PROGRESS) | curses.A_REVERSE)
        label = percent_label(progress)
        _put(win, 1, 2 + (width - len(label)) // 2, label, curses.A_BOLD)
        win.refresh()

    def _clear_progress(self) -> None:
        if self._progress is None:
            return
        self._progress.erase()
        self._progress.box()
        self._progress.refresh()

    def _show_complete(self) -> None:
        if self._progress is None:
            return
        self._progress.erase()
        self._progress.box()
        _put(self._progress, 1, 2, "Transfer complete")
        self._progress.refresh()

    def _draw_panel(self, win, panel: FileList, focus: bool, title: str) -> None:
        win.erase()
        win.box()
        height, width = win.getmaxyx()
        _put(win, 0, (width - len(title)) // 2, title)
        end = min(len(panel.entries), panel.scroll_offset + height - 2)
        for row, index in enumerate(range(panel.scroll_offset, end), start=1):
            entry = panel.entries[index]
            attr = curses.A_REVERSE if index == panel.selected and focus else 0
            if entry.is_dir:
                attr |= curses.color_pair(PAIR_DIRECTORY)
            elif entry.marked:
                attr |= curses.color_pair(PAIR_SELECTED)
            prefix = "* " if entry.marked else "  "
            _put(win, row, 1, f"{prefix}{entry.name:<{max(width - 4, 0)}}", attr)
        win.refresh()

    def _draw_header(self, stdscr, cols: int) -> None:
        try:
            stdscr.move(0, 0)
            stdscr.clrtoeol()
        except curses.error:
            pass
        _put(stdscr, 0, 1, f"Local: {self.local.cwd}")
        _put(stdscr, 0, cols // 2 + 1, f"Remote: {self.remote.cwd}")
        stdscr.refresh()

    def run(self) -> None:
        """Take over the terminal until the user quits."""
        curses.wrapper(self._main)

    def _main(self, stdscr) -> None:
        curses.cbreak()
        curses.noecho()
        stdscr.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        curses.start_color()
        for pair, (foreground, background) in _PAIRS.items():
            curses.init_pair(pair, foreground, background)
        stdscr.clear()
        stdscr.refresh()

        home = os.environ.get("HOME")
        self._reload_local(home if home is not None else ".")
        self._reload_remote(resolve_remote_path("~", self.host))

        lines, cols = stdscr.getmaxyx()
        height = lines - 5
        width = cols // 2 - 2
        left = curses.newwin(height, width, 1, 1)
        right = curses.newwin(height, width, 1, cols // 2 + 1)
        left.keypad(True)
        right.keypad(True)
        self._progress = curses.newwin(1, cols - 2, lines - 3, 1)
        self._status = curses.newwin(1, cols, lines - 2, 0)
        self.page_size = height - 2
        self._say(HELP)

        try:
            while True:
                self._draw_header(stdscr, cols)
                if self._transfer_active():
                    verb = "Uploading" if self.transfer.direction is Direction.UPLOAD else "Downloading"
                    self._draw_progress(
                        self.transfer.progress, f"{verb}: {_basename(self.transfer.source)}"
                    )
                else:
                    self._clear_progress()
                self._draw_panel(left, self.local, self.left_focus, "Local")
                self._draw_panel(right, self.remote, not self.left_focus, "Remote")
                key = (left if self.left_focus else right).getch()
                if not self.handle_key(key):
                    break
        finally:
            if self._transfer_active():
                self.transfer.cancel()
            self._status = None
            self._progress = None