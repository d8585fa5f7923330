# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""baselog: structured logging to flat key=value or single-line JSON.

    from baselog import Logger

    log = Logger(level="info", name="svc")
    log.info("started", "port", 8080)
    # svc: "ts"="2024-01-02 03:04:05.000006" "msg"="started" "port"=8080

Any value can be logged: primitives, strings, dataclasses, namedtuples,
sequences, mappings, exceptions, and objects implementing ``__structlog__``,
``__str__`` or ``marshal_text``.
"""

from __future__ import annotations

from baselog.capabilities import Loggable, TextMarshaler
from baselog.compose import compose, render_fields
from baselog.config import LoggerConfig, LogLevel, LogOutput
from baselog.errors import BaselogError, ConfigError
from baselog.fields import FieldTag, log_field
from baselog.logger import Logger, new_logger, timestamp
from baselog.normalize import NO_VALUE, normalize
from baselog.render import is_empty, quote, render_value
from baselog.sinks import ListSink, NullSink, Sink, StreamSink

__version__ = "0.1.0"

__all__ = [
    "NO_VALUE",
    "BaselogError",
    "ConfigError",
    "FieldTag",
    "ListSink",
    "LogLevel",
    "LogOutput",
    "Loggable",
    "Logger",
    "LoggerConfig",
    "NullSink",
    "Sink",
    "StreamSink",
    "TextMarshaler",
    "compose",
    "is_empty",
    "log_field",
    "new_logger",
    "normalize",
    "quote",
    "render_fields",
    "render_value",
    "timestamp",
]
