# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Logger façade: level gate, implicit fields, bound fields, sink.

Usage::

    log = Logger(level="info", name="svc", output="json")
    log.info("started", "port", 8080)
    # {"logger":"svc","ts":"2024-01-02 03:04:05.000006","msg":"started","port":8080}

Level gating is exact-match: a logger at ``"debug"`` emits debug lines only.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from typing import Any

from baselog.compose import compose, render_fields, separator
from baselog.config import LoggerConfig, LogLevel, LogOutput, check_level, check_output
from baselog.sinks import Sink, StreamSink

logger = logging.getLogger(__name__)

TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S.%f"


def timestamp(dt: datetime) -> str:
    """``YYYY-MM-DD HH:MM:SS.ffffff``."""
    # %Y is not zero-padded below year 1000 on glibc
    return f"{dt.year:04d}-{dt:%m-%d %H:%M:%S.%f}"


class Logger:
    """Structured logger writing one keyvalue or JSON line per call.

    Rendering is stateless; the configured level is the only mutable state
    and is guarded by a lock so ``set_level`` may race with log calls.
    """

    def __init__(
        self,
        level: str = LogLevel.INFO,
        name: str = "",
        output: str = LogOutput.KEYVALUE,
        sink: Sink | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._level = check_level(level)
        self._name = name
        self._output = check_output(output)
        self._json = self._output == LogOutput.JSON
        self._sink: Sink = sink if sink is not None else StreamSink()
        self._clock = clock or datetime.now
        self._bound = ""  # pre-rendered bound fields
        self._lock = threading.Lock()

    # -- Identity --

    @property
    def name(self) -> str:
        return self._name

    @property
    def output(self) -> str:
        return self._output

    @property
    def json_output(self) -> bool:
        return self._json

    @property
    def level(self) -> str:
        with self._lock:
            return self._level

    @property
    def bound_fields(self) -> str:
        return self._bound

    # -- Level --

    def enabled(self, level: str) -> bool:
        """True only when *level* equals the configured level."""
        with self._lock:
            return self._level == level

    def set_level(self, level: str) -> None:
        level = check_level(level)
        with self._lock:
            old, self._level = self._level, level
        logger.debug("baselog logger %r level %s -> %s", self._name, old, level)

    # -- Derivation --

    def with_values(self, *kv_list: Any) -> Logger:
        """Return a logger that appends *kv_list* to every line it writes."""
        rendered = render_fields(kv_list, json_output=self._json, escape_keys=False)
        bound = separator(self._json).join(part for part in (self._bound, rendered) if part)
        return self._derive(name=self._name, bound=bound)

    def with_name(self, name: str) -> Logger:
        """Return a logger named ``<parent>.<name>`` (or *name* for an unnamed parent)."""
        full = f"{self._name}.{name}" if self._name else name
        return self._derive(name=full, bound=self._bound)

    def _derive(self, *, name: str, bound: str) -> Logger:
        child = Logger(self.level, name, self._output, self._sink, clock=self._clock)
        child._bound = bound
        return child

    # -- Formatters --

    def _implicit(self, msg: str) -> tuple[str, list[Any]]:
        prefix = self._name
        implicit: list[Any] = []
        if self._json:
            implicit += ["logger", prefix]
            prefix = ""
        implicit += ["ts", timestamp(self._clock())]
        implicit += ["msg", msg]
        return prefix, implicit

    def format_debug(self, msg: str, kv_list: tuple[Any, ...] | list[Any] = ()) -> tuple[str, str]:
        """Build a debug line without writing it.

        Returns ``(prefix, line)``; prefix is empty when unset or in JSON mode.
        """
        prefix, implicit = self._implicit(msg)
        return prefix, compose(implicit, self._bound, kv_list, json_output=self._json)

    def format_info(self, msg: str, kv_list: tuple[Any, ...] | list[Any] = ()) -> tuple[str, str]:
        """Build an info line without writing it. See :meth:`format_debug`."""
        prefix, implicit = self._implicit(msg)
        return prefix, compose(implicit, self._bound, kv_list, json_output=self._json)

    def format_error(
        self,
        err: BaseException | str | None,
        msg: str,
        kv_list: tuple[Any, ...] | list[Any] = (),
    ) -> tuple[str, str]:
        """Build an error line without writing it; ``err=None`` renders ``null``."""
        prefix, implicit = self._implicit(msg)
        implicit += ["error", err]
        return prefix, compose(implicit, self._bound, kv_list, json_output=self._json)

    # -- Emitters --

    def debug(self, msg: str, *kv_list: Any) -> None:
        if not self.enabled(LogLevel.DEBUG):
            return
        self._write(*self.format_debug(msg, kv_list))

    def info(self, msg: str, *kv_list: Any) -> None:
        if not self.enabled(LogLevel.INFO):
            return
        self._write(*self.format_info(msg, kv_list))

    def error(self, err: BaseException | str | None, msg: str, *kv_list: Any) -> None:
        if not self.enabled(LogLevel.ERROR):
            return
        self._write(*self.format_error(err, msg, kv_list))

    def _write(self, prefix: str, line: str) -> None:
        if prefix:
            line = f"{prefix}: {line}"
        try:
            self._sink.write_line(line)
        except Exception:  # nosec B110
            pass  # custom sinks: a failed write is dropped, never raised

    def __repr__(self) -> str:
        return f"Logger(level={self.level!r}, name={self._name!r}, output={self._output!r})"


def new_logger(
    config: LoggerConfig | None = None,
    sink: Sink | None = None,
    *,
    clock: Callable[[], datetime] | None = None,
) -> Logger:
    """Build a Logger from *config*, or from ``BASELOG_*`` env vars when omitted."""
    cfg = config or LoggerConfig.from_env()
    return Logger(cfg.level, cfg.name, cfg.output, sink, clock=clock)
