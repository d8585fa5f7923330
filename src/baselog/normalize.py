# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Key/value list normalization.

Turns a loose ``key, value, key, value, ...`` list into an even-length list
whose even positions are all strings. Never raises and never drops fields.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from baselog.render import render_value

NO_VALUE = "[n/a]"  # pads an unpaired trailing key
MAX_KEY_LEN = 16


def key_string(key: Any) -> str:
    """Short printable stand-in for a non-string key: its rendering, cut to 16 chars."""
    return render_value(key)[:MAX_KEY_LEN]


def normalize(kv_list: Sequence[Any]) -> list[Any]:
    """Return a new even-length list with string keys at 0, 2, 4, ...

    The input is not modified.
    """
    items = list(kv_list)
    if len(items) % 2 != 0:
        items.append(NO_VALUE)

    for i in range(0, len(items), 2):
        if not isinstance(items[i], str):
            items[i] = key_string(items[i])

    return items
