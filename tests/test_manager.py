import curses

import pytest

from sshtui.filelist import FileEntry
from sshtui.manager import (
    FileManager,
    percent_label,
    progress_bar_cells,
    transfer_message,
)
from sshtui.transfer import Direction, Transfer


class Listers:
    def __init__(self, local_entries=None, remote_entries=None, fail_remote=False):
        self.local_entries = local_entries or [FileEntry("..", is_dir=True)]
        self.remote_entries = remote_entries or [FileEntry("..", is_dir=True)]
        self.fail_remote = fail_remote
        self.local_calls = []
        self.remote_calls = []

    def local(self, path, show_hidden):
        self.local_calls.append((path, show_hidden))
        return list(self.local_entries)

    def remote(self, host, path, show_hidden):
        self.remote_calls.append((host, path, show_hidden))
        if self.fail_remote:
            raise OSError("ssh missing")
        return list(self.remote_entries)


def make_manager(listers, confirm=None, page_size=20):
    manager = FileManager(
        "example",
        local_lister=listers.local,
        remote_lister=listers.remote,
        confirm=confirm,
        page_size=page_size,
    )
    manager.local.populate(
        "/home/me",
        [FileEntry("..", is_dir=True), FileEntry("docs", is_dir=True), FileEntry("notes.txt")],
    )
    manager.remote.populate(
        "/srv",
        [
            FileEntry("..", is_dir=True),
            FileEntry("data", is_dir=True),
            FileEntry("a.txt"),
            FileEntry("b.txt"),
        ],
    )
    return manager


def test_progress_bar_cells_bounds():
    for width in (1, 40, 77):
        assert progress_bar_cells(0, width) == 0
        assert progress_bar_cells(100, width) == width
        cells = [progress_bar_cells(p, width) for p in range(101)]
        assert cells == sorted(cells)
    assert progress_bar_cells(50, 0) == 0


def test_progress_bar_cells_half():
    assert progress_bar_cells(50, 40) == 20


def test_percent_label():
    assert percent_label(100) == "100%"
    assert percent_label(7).strip() == "7%"
    assert all(len(percent_label(p)) == 4 for p in range(101))


def test_transfer_message():
    assert transfer_message(Direction.UPLOAD, "report.txt") == "Uploading report.txt"
    assert transfer_message(Direction.DOWNLOAD, "report.txt") == "Downloading report.txt"


def test_focus_toggles():
    manager = make_manager(Listers())
    assert manager.focused is manager.local
    assert manager.handle_key(ord("\t")) is True
    assert manager.focused is manager.remote
    manager.handle_key(curses.KEY_LEFT)
    assert manager.left_focus is True


def test_cursor_stays_within_page():
    manager = make_manager(Listers(), page_size=2)
    manager.handle_key(ord("\t"))
    panel = manager.remote
    for _ in range(6):
        manager.handle_key(curses.KEY_DOWN)
        assert panel.scroll_offset <= panel.selected < panel.scroll_offset + 2
    assert panel.selected == len(panel.entries) - 1
    for _ in range(6):
        manager.handle_key(curses.KEY_UP)
    assert panel.selected == 0 and panel.scroll_offset == 0
    assert manager.local.selected == 0


def test_enter_opens_remote_directory():
    listers = Listers()
    manager = make_manager(listers)
    manager.handle_key(ord("\t"))
    manager.handle_key(curses.KEY_DOWN)
    manager.handle_key(10)
    assert listers.remote_calls[-1] == ("example", "/srv/data", False)
    assert manager.remote.cwd == "/srv/data"


def test_enter_on_parent_goes_up():
    listers = Listers()
    manager = make_manager(listers)
    manager.handle_key(curses.KEY_ENTER)
    assert listers.local_calls[-1] == ("/home", False)
    assert manager.local.cwd == "/home"


def test_enter_on_file_reloads_same_directory():
    listers = Listers()
    manager = make_manager(listers)
    manager.handle_key(curses.KEY_DOWN)
    manager.handle_key(curses.KEY_DOWN)
    manager.handle_key(10)
    assert listers.local_calls[-1] == ("/home/me", False)
    assert manager.local.selected == 0


def test_failed_listing_keeps_entries():
    listers = Listers(fail_remote=True)
    manager = make_manager(listers)
    manager.handle_key(ord("\t"))
    manager.handle_key(curses.KEY_DOWN)
    before = [entry.name for entry in manager.remote.entries]
    manager.handle_key(10)
    assert manager.remote.cwd == "/srv/data"
    assert [entry.name for entry in manager.remote.entries] == before
    assert manager.remote.selected == 1


def test_space_marks_but_not_parent():
    manager = make_manager(Listers())
    manager.handle_key(ord(" "))
    assert manager.local.marked() == []
    manager.handle_key(curses.KEY_DOWN)
    manager.handle_key(ord(" "))
    assert [entry.name for entry in manager.local.marked()] == ["docs"]
    manager.handle_key(ord(" "))
    assert manager.local.marked() == []


def test_hidden_toggle_reloads_both_panels():
    listers = Listers()
    manager = make_manager(listers)
    manager.handle_key(ord("P"))
    assert manager.show_hidden is True
    assert listers.local_calls[-1] == ("/home/me", True)
    assert listers.remote_calls[-1] == ("example", "/srv", True)


def test_quit_without_transfer():
    manager = make_manager(Listers())
    assert manager.handle_key(ord("q")) is False


@pytest.mark.parametrize("answer, keeps_running", [(True, False), (False, True)])
def test_quit_with_active_transfer_asks(answer, keeps_running):
    questions = []

    def confirm(question):
        questions.append(question)
        return answer

    manager = make_manager(Listers(), confirm=confirm)
    manager.transfer = Transfer(Direction.UPLOAD, "example", "/a", "/b", active=True)
    assert manager.handle_key(ord("Q")) is keeps_running
    assert manager.transfer.active is keeps_running
    assert questions == ["Transfer in progress, confirm exit? (y/n)"]


def test_download_with_nothing_selected():
    listers = Listers()
    manager = make_manager(listers)
    assert manager.handle_key(curses.KEY_F5) is True
    assert manager.transfer is None
    assert "Please select a file to download" in manager.status_log
    assert listers.local_calls == []


def test_upload_while_transfer_running():
    manager = make_manager(Listers())
    running = Transfer(Direction.DOWNLOAD, "example", "/a", "/b", active=True)
    manager.transfer = running
    manager.handle_key(curses.KEY_F6)
    assert manager.transfer is running
    assert (
        "A transfer is already in progress, please wait for it to complete"
        in manager.status_log
    )


def test_download_declined_overwrite_unmarks(tmp_path):
    (tmp_path / "a.txt").write_text("existing")
    questions = []
    listers = Listers()
    manager = make_manager(listers, confirm=lambda q: questions.append(q) or False)
    manager.local.populate(str(tmp_path), [FileEntry("..", is_dir=True)])
    manager.handle_key(ord("\t"))
    manager.handle_key(curses.KEY_DOWN)
    manager.handle_key(curses.KEY_DOWN)
    manager.handle_key(curses.KEY_F5)
    assert questions == ["File a.txt already exists, overwrite? (y/n)"]
    assert manager.remote.marked() == []
    assert manager.transfer is None
    assert listers.local_calls[-1] == (str(tmp_path), False)