# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Logger configuration: level and output-mode vocabularies plus env loading."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum

from baselog.errors import ConfigError


class LogLevel(StrEnum):
    NONE = "none"
    DEBUG = "debug"
    INFO = "info"
    ERROR = "error"
    ALL = "all"


class LogOutput(StrEnum):
    KEYVALUE = "keyvalue"
    JSON = "json"


ENV_LEVEL = "BASELOG_LEVEL"
ENV_NAME = "BASELOG_NAME"
ENV_OUTPUT = "BASELOG_OUTPUT"

_LEVELS = frozenset(str(level) for level in LogLevel)
_OUTPUTS = frozenset(str(output) for output in LogOutput)


def check_level(level: str) -> str:
    """Return *level* unchanged, or raise ConfigError if it is not a known level."""
    if level not in _LEVELS:
        raise ConfigError(
            f"level must be one of {sorted(_LEVELS)}, got {level!r}",
            field="level",
            value=level,
        )
    return str(level)


def check_output(output: str) -> str:
    """Return *output* unchanged, or raise ConfigError if it is not a known output mode."""
    if output not in _OUTPUTS:
        raise ConfigError(
            f"output must be one of {sorted(_OUTPUTS)}, got {output!r}",
            field="output",
            value=output,
        )
    return str(output)


@dataclass(frozen=True, slots=True)
class LoggerConfig:
    """Immutable construction inputs for a Logger."""

    level: str = LogLevel.INFO
    name: str = ""  # rendered as "<name>: " prefix (keyvalue) or "logger" field (json)
    output: str = LogOutput.KEYVALUE

    def __post_init__(self) -> None:
        check_level(self.level)
        check_output(self.output)

    @property
    def json_output(self) -> bool:
        return self.output == LogOutput.JSON

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> LoggerConfig:
        """Build a config from ``BASELOG_*`` environment variables.

        Unset or blank variables fall back to the dataclass defaults.
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, str] = {}

        env_level = env.get(ENV_LEVEL, "").strip().lower()
        if env_level:
            kwargs["level"] = env_level

        env_name = env.get(ENV_NAME, "").strip()
        if env_name:
            kwargs["name"] = env_name

        env_output = env.get(ENV_OUTPUT, "").strip().lower()
        if env_output:
            kwargs["output"] = env_output

        return cls(**kwargs)
