# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Line composition: implicit fields + bound fields + call-site fields -> one line.

keyvalue::

    "ts"="2024-01-02 03:04:05.000006" "msg"="started" "port"=8080

json::

    {"logger":"svc","ts":"2024-01-02 03:04:05.000006","msg":"started","port":8080}
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from baselog.normalize import normalize
from baselog.render import quote, render_value


def separator(json_output: bool) -> str:
    return "," if json_output else " "


def _pairs(kv_list: Sequence[Any], json_output: bool, escape_keys: bool) -> list[str]:
    delim = ":" if json_output else "="
    items = normalize(kv_list)
    out: list[str] = []
    for i in range(0, len(items), 2):
        key = quote(items[i]) if escape_keys else f'"{items[i]}"'
        out.append(f"{key}{delim}{render_value(items[i + 1])}")
    return out


def render_fields(kv_list: Sequence[Any], *, json_output: bool, escape_keys: bool = True) -> str:
    """Render a key/value list as separator-joined ``"key"=value`` fields, no braces."""
    return separator(json_output).join(_pairs(kv_list, json_output, escape_keys))


def compose(
    implicit: Sequence[Any],
    bound: str,
    fields: Sequence[Any],
    *,
    json_output: bool,
) -> str:
    """Build one log line.

    Args:
        implicit: logger-synthesized pairs (logger, ts, msg, error); keys written as-is.
        bound: pre-rendered bound fields, inserted verbatim.
        fields: caller-supplied pairs; keys are quoted and escaped.
        json_output: brace-wrapped, comma-separated ``"k":v`` when True;
            space-separated ``"k"=v`` otherwise.
    """
    chunks = _pairs(implicit, json_output, escape_keys=False)
    if bound:
        chunks.append(bound)
    chunks.extend(_pairs(fields, json_output, escape_keys=True))

    line = separator(json_output).join(chunks)
    if json_output:
        return "{" + line + "}"
    return line
