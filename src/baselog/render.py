# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Value rendering: any Python value -> its canonical log text.

Resolution order (first match wins):

1. ``__structlog__()`` substitutes another value and resolution restarts
2. a class-level ``__str__`` renders the display string
3. exceptions render their message
4. bool / int / float / complex
5. str (quoted, escaped only when needed)
6. ``None`` and dead weak references -> ``null``; live references -> referent
   (dead ``weakref.proxy`` objects are caught before step 1)
7. dataclasses and namedtuples -> ``{"field":value,...}``
8. sequences and sets -> ``[a,b,...]``
9. mappings -> ``{key:value,...}``
10. anything else -> ``"[<type name>]"``

Rendering is total: hooks that raise are reported inline as
``<error-HOOK: message>`` and never escape to the caller. The output does not
depend on the line's output mode.
"""

from __future__ import annotations

import dataclasses
import math
import numbers
import weakref
from collections.abc import Mapping, Sequence, Set
from decimal import Decimal
from typing import Any

from baselog.capabilities import is_loggable, is_stringable, is_text_marshaler
from baselog.fields import is_embedded, tag_for

NULL = "null"

_MAX_SUBSTITUTIONS = 16

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------


def needs_escape(text: str) -> bool:
    return not text.isprintable() or "\\" in text or '"' in text


def _escape_char(ch: str) -> str:
    esc = _ESCAPES.get(ch)
    if esc is not None:
        return esc
    if ch.isprintable():
        return ch
    cp = ord(ch)
    if cp > 0xFFFF:
        cp -= 0x10000
        return f"\\u{0xD800 | (cp >> 10):04x}\\u{0xDC00 | (cp & 0x3FF):04x}"
    return f"\\u{cp:04x}"


def quote(text: str) -> str:
    """Wrap *text* in double quotes, escaping only when it has to.

    Escapes are JSON-compatible, so quoted strings are valid JSON strings.
    """
    if not needs_escape(text):
        return f'"{text}"'
    return '"' + "".join(_escape_char(ch) for ch in text) + '"'


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


def format_float(value: float) -> str:
    """Shortest round-trip digits in positional notation (``3.0`` -> ``3``)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(float.__repr__(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_complex(value: complex) -> str:
    """``(re+imi)`` with both parts formatted like :func:`format_float`."""
    real = format_float(value.real)
    imag = format_float(value.imag)
    if imag[0] not in "+-":
        imag = "+" + imag
    return f"({real}{imag}i)"


def _format_int(value: int) -> str:
    try:
        return int.__repr__(value)
    except ValueError:
        # beyond sys.get_int_max_str_digits()
        return quote(f"[int: {value.bit_length()} bits]")


# ---------------------------------------------------------------------------
# Emptiness
# ---------------------------------------------------------------------------


def _is_struct(value: Any) -> bool:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return True
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def is_empty(value: Any) -> bool:
    """Zero-value test used by ``omitempty`` fields."""
    if value is None or _is_dead_proxy(value):
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, numbers.Number):
        try:
            return value == 0
        except (ArithmeticError, TypeError):
            return False
    if isinstance(value, weakref.ReferenceType):
        return value() is None
    if _is_struct(value):
        return False
    if isinstance(value, (str, Sequence, Set, Mapping)):
        return len(value) == 0
    return False


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _exc_message(exc: BaseException) -> str:
    try:
        return str(exc)
    except Exception:
        return type(exc).__name__


def _hook_error(hook: str, exc: BaseException) -> str:
    return quote(f"<error-{hook}: {_exc_message(exc)}>")


def render_value(value: Any) -> str:
    """Render *value* as log text. Never raises for ordinary failures."""
    try:
        return _render(value, frozenset())
    except RecursionError:
        return quote("[recursion]")


def _is_dead_proxy(value: Any) -> bool:
    if type(value) not in weakref.ProxyTypes:
        return False
    try:
        return value.__class__ is None
    except ReferenceError:
        return True


def _render(value: Any, active: frozenset[int]) -> str:
    if _is_dead_proxy(value):
        return NULL

    for _ in range(_MAX_SUBSTITUTIONS):
        if not is_loggable(value):
            break
        try:
            replacement = value.__structlog__()
        except Exception as exc:
            return _hook_error("__structlog__", exc)
        if replacement is value:
            break
        value = replacement

    if is_stringable(value):
        try:
            return quote(str(value))
        except Exception as exc:
            return _hook_error("__str__", exc)

    if isinstance(value, BaseException):
        return quote(_exc_message(value))

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return _format_int(value)
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, complex):
        return quote(format_complex(value))
    if isinstance(value, str):
        return quote(value)

    if value is None:
        return NULL
    if isinstance(value, weakref.ReferenceType):
        referent = value()
        return NULL if referent is None else _render(referent, active)

    if id(value) in active:
        return quote("[cycle]")

    if _is_struct(value):
        return "{" + ",".join(_struct_entries(value, active | {id(value)})) + "}"

    if isinstance(value, (Sequence, Set)):
        inner = active | {id(value)}
        return "[" + ",".join(_render(item, inner) for item in value) + "]"

    if isinstance(value, Mapping):
        inner = active | {id(value)}
        entries = [f"{_map_key(key, inner)}:{_render(item, inner)}" for key, item in value.items()]
        return "{" + ",".join(entries) + "}"

    return quote(f"[{type(value).__name__}]")


def _struct_entries(value: Any, active: frozenset[int]) -> list[str]:
    """Rendered ``"name":value`` entries; embedded structs are spliced in."""
    if not dataclasses.is_dataclass(value):
        # namedtuple: no annotations, all fields public
        return [f'"{name}":{_render(item, active)}' for name, item in zip(value._fields, value, strict=True)]

    entries: list[str] = []
    for fld in dataclasses.fields(value):
        if fld.name.startswith("_"):
            continue
        tag = tag_for(fld)
        if tag.skip:
            continue
        # init=False fields and slots may never have been assigned
        item = getattr(value, fld.name, None)
        if tag.omitempty and is_empty(item):
            continue
        if is_embedded(fld) and not tag.name and _is_struct(item):
            if id(item) in active:
                entries.append(f'"{fld.name}":{quote("[cycle]")}')
            else:
                entries.extend(_struct_entries(item, active | {id(item)}))
            continue
        # field names are identifiers or tag names; neither is escaped
        entries.append(f'"{tag.name or fld.name}":{_render(item, active)}')
    return entries


def _map_key(key: Any, active: frozenset[int]) -> str:
    if is_text_marshaler(key):
        try:
            text = key.marshal_text()
        except Exception as exc:
            text = f"<error-MarshalText: {_exc_message(exc)}>"
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("utf-8", errors="replace")
        return quote(str(text))

    rendered = _render(key, active)
    if not isinstance(key, str):
        rendered = quote(rendered)
    return rendered
