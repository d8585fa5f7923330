# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Line sinks: StreamSink (text stream), NullSink, ListSink."""

from __future__ import annotations

import sys
import threading
from typing import Protocol, TextIO


class Sink(Protocol):
    """Destination for fully rendered log lines (no trailing newline)."""

    def write_line(self, line: str) -> None: ...


class StreamSink:
    """Write each line plus ``"\\n"`` to a text stream, one writer at a time.

    Best-effort: a failing or closed stream drops the line.
    ``stream=None`` means whatever ``sys.stdout`` is at write time, so
    output redirection (and pytest's capsys) is honoured.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write_line(self, line: str) -> None:
        with self._lock:
            try:
                stream = self.stream
                stream.write(line + "\n")
                stream.flush()
            except (OSError, ValueError):  # nosec B110
                pass  # logging must never fail the caller


class NullSink:
    """Discards every line."""

    def write_line(self, line: str) -> None:
        pass


class ListSink:
    """In-memory sink for testing. Captures all written lines."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self._lock = threading.Lock()

    def write_line(self, line: str) -> None:
        with self._lock:
            self.lines.append(line)
