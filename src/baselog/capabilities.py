# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Extension points a value may implement to control how it is logged.

- ``__structlog__()`` returns an alternate value to log in its place
  (the same hook structlog's renderers honour).
- A class-level ``__str__`` that is not a builtin one makes the value
  render as its display string.
- ``marshal_text()`` renders a mapping key as text.

Leaf module, no baselog imports.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Loggable(Protocol):
    """Substitutes another value for itself when logged."""

    def __structlog__(self) -> Any: ...


@runtime_checkable
class TextMarshaler(Protocol):
    """Renders itself as text when used as a mapping key."""

    def marshal_text(self) -> str | bytes: ...


def is_loggable(value: Any) -> bool:
    return callable(getattr(type(value), "__structlog__", None))


def is_text_marshaler(value: Any) -> bool:
    return callable(getattr(type(value), "marshal_text", None))


def is_stringable(value: Any) -> bool:
    """True when the value's class supplies its own ``__str__``.

    The first ``__str__`` found along the MRO decides: builtin slot wrappers
    (``int.__str__``, ``object.__str__``, ``BaseException.__str__``) do not
    count, so primitives and plain dataclasses fall through to the
    structural rules.
    """
    for klass in type(value).__mro__:
        method = klass.__dict__.get("__str__")
        if method is None:
            continue
        owner = getattr(method, "__objclass__", klass)
        return getattr(owner, "__module__", "builtins") != "builtins"
    return False
