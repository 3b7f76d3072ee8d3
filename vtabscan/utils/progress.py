from __future__ import annotations

import sys
from typing import Protocol, TextIO


class StatusDisplay(Protocol):
    def show(self, handle: str, text: str) -> None: ...

    def clear(self, handle: str) -> None: ...


class ConsoleStatus:
    """Transient one-line status written to a terminal stream."""

    def __init__(self, stream: TextIO | None = None, enabled: bool = True):
        self.stream = stream or sys.stderr
        self.enabled = enabled
        self._width: dict[str, int] = {}

    def show(self, handle: str, text: str) -> None:
        if not self.enabled:
            return
        line = f"[{handle}] {text}"
        pad = max(0, self._width.get(handle, 0) - len(line))
        self.stream.write("\r" + line + " " * pad)
        self.stream.flush()
        self._width[handle] = len(line)

    def clear(self, handle: str) -> None:
        width = self._width.pop(handle, 0)
        if not self.enabled or not width:
            return
        self.stream.write("\r" + " " * width + "\r")
        self.stream.flush()
