# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""structlog + stdlib bridge rendering baselog lines.

``configure()`` routes both structlog loggers and plain ``logging`` loggers
through :class:`LineRenderer`, so third-party library output shares the
baselog keyvalue/JSON line format.

Leaf-level module: depends only on the rendering core. Safe to call early
in startup.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, MutableMapping
from datetime import datetime
from typing import Any

import structlog

from baselog.compose import compose
from baselog.config import LogLevel, LogOutput, check_output
from baselog.logger import TIMESTAMP_FMT, timestamp

_STDLIB_LEVELS: dict[str, int] = {
    LogLevel.NONE: logging.CRITICAL + 10,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.ALL: logging.NOTSET,
}

_ERROR_METHODS = frozenset({"error", "exception", "critical", "fatal"})


def stdlib_level(level: str) -> int:
    """Map a baselog level onto a stdlib level; unknown levels fall back to INFO."""
    return _STDLIB_LEVELS.get(level.strip().lower(), logging.INFO)


def _exc_from(exc_info: Any) -> BaseException | None:
    if isinstance(exc_info, BaseException):
        return exc_info
    if isinstance(exc_info, tuple):
        return exc_info[1]
    if exc_info:
        return sys.exc_info()[1]
    return None


class LineRenderer:
    """structlog processor: event dict -> baselog line.

    Implicit fields come first (``logger`` in JSON mode, ``ts``, ``msg``,
    and ``error`` for error-level methods or when an error is attached);
    remaining keys follow as call-site fields in insertion order.
    """

    def __init__(
        self,
        *,
        output: str = LogOutput.KEYVALUE,
        name: str = "",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._json = check_output(output) == LogOutput.JSON
        self._name = name
        self._clock = clock or datetime.now

    def __call__(self, logger: Any, method_name: str, event_dict: MutableMapping[str, Any]) -> str:
        event = dict(event_dict)
        name = event.pop("logger", None) or self._name
        ts = event.pop("ts", None) or timestamp(self._clock())
        msg = event.pop("event", "")

        err = event.pop("error", None)
        exc = _exc_from(event.pop("exc_info", None))
        if err is None:
            err = exc

        implicit: list[Any] = []
        if self._json:
            implicit += ["logger", name]
        implicit += ["ts", ts, "msg", msg]
        if err is not None or method_name in _ERROR_METHODS:
            implicit += ["error", err]

        fields: list[Any] = []
        for key, value in event.items():
            fields += [key, value]

        line = compose(implicit, "", fields, json_output=self._json)
        if name and not self._json:
            line = f"{name}: {line}"
        return line


def configure(*, output: str = LogOutput.KEYVALUE, level: str = LogLevel.INFO, name: str = "") -> None:
    """Configure structlog with stdlib bridge, rendering baselog lines to stdout.

    Args:
        output: ``"keyvalue"`` or ``"json"``.
        level: baselog level mapped onto the root logger level (default info).
        name: logger name used when a record carries none.
    """
    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt=TIMESTAMP_FMT, utc=False, key="ts"),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer = LineRenderer(output=output, name=name)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(stdlib_level(level))
