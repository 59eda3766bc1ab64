"""Host selection menu drawn in a curses screen."""

from __future__ import annotations

import curses
from dataclasses import dataclass
from typing import Sequence

TITLE = "Select SSH Host"
HELP_TEXT = "Use Up/Down, Enter to select, 'q' to quit."

PAIR_DEFAULT = 1
PAIR_HIGHLIGHT = 2
PAIR_TITLE = 3
PAIR_BORDER = 4

_ENTER_KEYS = (10, curses.KEY_ENTER)
_QUIT_KEY = ord("q")


@dataclass(frozen=True)
class MenuLayout:
    """Size and placement of the menu window and of the help line below it."""

    height: int
    width: int
    start_y: int
    start_x: int
    help_y: int
    help_x: int


def _half(value: int) -> int:
    """Halve an integer, rounding toward zero."""
    half = abs(value) // 2
    return half if value >= 0 else -half


def _put(win, y: int, x: int, text: str, attr: int = 0) -> None:
    try:
        win.addstr(y, x, text, attr)
    except curses.error:
        pass


def compute_layout(
    names: Sequence[str],
    help_text: str,
    lines: int,
    cols: int,
    center_on_required: bool = False,
) -> MenuLayout:
    """Fit a menu of ``names`` into a screen of ``lines`` by ``cols``.

    With ``center_on_required`` the window is centred as if it were one row
    taller, leaving room for the help line.
    """
    longest = max((len(name) for name in names), default=0)
    height = len(names) + 4
    width = max(longest + 6, len(TITLE) + 4)
    if width > cols - 2:
        width = cols - 2
    required = height + 1
    if required > lines - 1:
        height = lines - 2
    start_x = _half(cols - width)
    start_y = max(0, _half(lines - (required if center_on_required else height)))
    help_x = max(0, _half(cols - len(help_text)))
    help_y = start_y + height + 1
    if help_y >= lines:
        help_y = lines - 1
    return MenuLayout(height, width, start_y, start_x, help_y, help_x)


def next_highlight(highlight: int, count: int, step: int) -> int:
    """Move a 1-based highlight one row up (``step < 0``) or down, wrapping around."""
    if step < 0:
        return count if highlight == 1 else highlight - 1
    return 1 if highlight == count else highlight + 1


def draw_menu(win, highlight: int, hosts: Sequence[str], width: int) -> None:
    """Draw the framed host list with the 1-based ``highlight`` row marked."""
    border = curses.color_pair(PAIR_BORDER)
    win.attron(border)
    win.box()
    win.attroff(border)
    _put(win, 0, _half(width - len(TITLE)), TITLE, curses.color_pair(PAIR_TITLE))
    limit = max(width - 4, 0)
    for row, host in enumerate(hosts):
        pair = PAIR_HIGHLIGHT if highlight == row + 1 else PAIR_DEFAULT
        _put(win, 2 + row, 2, f"{host[:limit]:<{limit}}", curses.color_pair(pair))
    win.refresh()


def select_host(
    stdscr,
    hosts: Sequence[str],
    help_text: str = HELP_TEXT,
    up_keys: Sequence[int] = (curses.KEY_UP,),
    down_keys: Sequence[int] = (curses.KEY_DOWN,),
    center_on_required: bool = False,
) -> int | None:
    """Let the user pick a host; return its index, or ``None`` if they quit.

    Raises ``RuntimeError`` if the terminal has no colours.
    """
    stdscr.clear()
    curses.noecho()
    curses.cbreak()
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    if not curses.has_colors():
        raise RuntimeError("Your terminal does not support color")
    curses.start_color()
    curses.init_pair(PAIR_DEFAULT, curses.COLOR_WHITE, curses.COLOR_BLACK)
    curses.init_pair(PAIR_HIGHLIGHT, curses.COLOR_BLACK, curses.COLOR_CYAN)
    curses.init_pair(PAIR_TITLE, curses.COLOR_YELLOW, curses.COLOR_BLACK)
    curses.init_pair(PAIR_BORDER, curses.COLOR_BLUE, curses.COLOR_BLACK)

    lines, cols = stdscr.getmaxyx()
    layout = compute_layout(hosts, help_text, lines, cols, center_on_required)
    win = curses.newwin(layout.height, layout.width, layout.start_y, layout.start_x)
    win.keypad(True)
    win.bkgd(" ", curses.color_pair(PAIR_DEFAULT))

    try:
        stdscr.move(layout.help_y, 0)
        stdscr.clrtoeol()
    except curses.error:
        pass
    _put(stdscr, layout.help_y, layout.help_x, help_text, curses.color_pair(PAIR_DEFAULT))
    stdscr.refresh()

    highlight = 1
    choice = 0
    draw_menu(win, highlight, hosts, layout.width)
    while choice == 0:
        key = win.getch()
        if key in up_keys:
            highlight = next_highlight(highlight, len(hosts), -1)
        elif key in down_keys:
            highlight = next_highlight(highlight, len(hosts), 1)
        elif key in _ENTER_KEYS:
            choice = highlight
        elif key == _QUIT_KEY:
            choice = -1
        draw_menu(win, highlight, hosts, layout.width)

    try:
        stdscr.clrtoeol()
    except curses.error:
        pass
    stdscr.refresh()
    if 0 < choice <= len(hosts):
        return choice - 1
    return None