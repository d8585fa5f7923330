# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""baselog exception hierarchy.

Formatting and emission never raise: unknown values degrade to placeholder
text and sink failures are dropped. The only errors callers see come from
building a logger with an invalid configuration.
"""

from __future__ import annotations


class BaselogError(Exception):
    """Base exception for all baselog errors."""


class ConfigError(BaselogError, ValueError):
    """Invalid logger configuration (unknown level or output mode)."""

    def __init__(self, message: str, *, field: str = "", value: object = None) -> None:
        super().__init__(message)
        self.field = field
        self.value = value
