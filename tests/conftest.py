# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import baselog  # noqa: F401
except ImportError:
    raise ImportError("baselog is not installed. Run: pip install -e '.[dev]'") from None

from datetime import datetime

import pytest


def fixed_clock() -> datetime:
    return datetime(2024, 1, 2, 3, 4, 5, 6)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Tests never see the developer's BASELOG_* settings."""
    for var in ("BASELOG_LEVEL", "BASELOG_NAME", "BASELOG_OUTPUT"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def clock():
    return fixed_clock
