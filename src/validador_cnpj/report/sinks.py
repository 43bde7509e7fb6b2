"""
Line sinks - receivers for result lines.

A sink is any callable taking one line of text. The orchestrator calls it
from whatever worker thread runs the validation, so sinks that feed a UI
must hand the line over to the UI thread themselves.
"""

import threading
from typing import Callable, List

LineSink = Callable[[str], None]


def discard(line: str) -> None:
    """Sink that drops every line."""


class ListSink:
    """Thread-safe sink that collects lines in arrival order."""

    def __init__(self):
        self._lines: List[str] = []
        self._lock = threading.Lock()

    def __call__(self, line: str) -> None:
        with self._lock:
            self._lines.append(line)

    @property
    def lines(self) -> List[str]:
        with self._lock:
            return list(self._lines)

    def text(self) -> str:
        """All lines, each newline-terminated."""
        return "".join(f"{line}\n" for line in self.lines)
