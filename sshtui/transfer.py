"""Running ``scp`` in the background and following its progress."""

from __future__ import annotations

import enum
import re
import subprocess
import threading
from dataclasses import dataclass, field
from typing import Iterable

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class Direction(enum.Enum):
    """Which way a file travels."""

    DOWNLOAD = 0
    UPLOAD = 1


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_percentage(line: str) -> int | None:
    """Extract the percentage before the first ``%`` in a line of output.

    Returns ``None`` when there is no usable value in the range 0 to 100.
    """
    position = line.find("%")
    if position <= 0:
        return None
    start = position - 1
    while start > 0 and line[start - 1].isdigit():
        start -= 1
    value = _atoi(line[start:position])
    if 0 <= value <= 100:
        return value
    return None


def scp_command(direction: Direction, host: str, source: str, dest: str) -> list[str]:
    """Return the ``scp`` argument vector for one transfer."""
    if direction is Direction.UPLOAD:
        return ["scp", "-v", "-p", source, f"{host}:{dest}"]
    return ["scp", "-v", "-p", f"{host}:{source}", dest]


@dataclass
class Transfer:
    """One file copy between this machine and a remote host."""

    direction: Direction
    host: str
    source: str
    dest: str
    progress: int = 0
    active: bool = False
    cancel_requested: bool = False
    _process: subprocess.Popen | None = field(default=None, repr=False)
    _thread: threading.Thread | None = field(default=None, repr=False)

    def start(self) -> None:
        """Launch ``scp`` and follow its output on a background thread.

        Raises ``OSError`` if ``scp`` cannot be started.
        """
        self._process = subprocess.Popen(
            scp_command(self.direction, self.host, self.source, self.dest),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
        )
        self.active = True
        self.progress = 0
        self.cancel_requested = False
        self._thread = threading.Thread(target=self._monitor, daemon=True)
        self._thread.start()

    def _monitor(self) -> None:
        process = self._process
        try:
            self.consume(process.stdout if process is not None else ())
        finally:
            self._close_process()

    def _close_process(self) -> None:
        process, self._process = self._process, None
        if process is None:
            return
        if process.stdout is not None:
            process.stdout.close()
        process.wait()

    def consume(self, stream: Iterable[str]) -> None:
        """Update progress from lines of output until they end or a cancel is asked."""
        for line in stream:
            if self.cancel_requested:
                break
            value = parse_percentage(line)
            if value is not None:
                self.progress = value
        if not self.cancel_requested:
            self.progress = 100
        self.active = False

    def cancel(self) -> None:
        """Stop a running transfer and wait for its monitor to finish."""
        if not self.active:
            return
        self.cancel_requested = True
        process = self._process
        if process is not None:
            try:
                process.terminate()
            except OSError:
                pass
        if self._thread is not None:
            self._thread.join()
        self.active = False
        self._close_process()

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for the monitor to finish; return whether the transfer is over."""
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                return False
        return not self.active