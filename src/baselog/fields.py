# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Per-field rendering annotations for dataclass structs.

Annotations live in ``dataclasses.field(metadata=...)``::

    @dataclass
    class Request:
        path: str
        query: str = field(default="", metadata={"json": "q,omitempty"})
        token: str = field(default="", metadata={"json": "-"})
        base: Common = field(default_factory=Common, metadata={"embedded": True})

or, equivalently, with :func:`log_field`::

    query: str = log_field("q", omitempty=True, default="")
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

TAG_KEY = "json"
EMBED_KEY = "embedded"

_SKIP = "-"
_OMITEMPTY = "omitempty"


@dataclass(frozen=True, slots=True)
class FieldTag:
    """Parsed form of a ``"name,opt1,opt2"`` tag string."""

    name: str = ""
    omitempty: bool = False
    skip: bool = False

    @classmethod
    def parse(cls, tag: str | None) -> FieldTag:
        if tag is None:
            return _NO_TAG
        if tag == _SKIP:
            return cls(skip=True)
        name, _, rest = tag.partition(",")
        options = rest.split(",") if rest else []
        return cls(name=name, omitempty=_OMITEMPTY in options)


_NO_TAG = FieldTag()


def tag_for(fld: dataclasses.Field) -> FieldTag:
    return FieldTag.parse(fld.metadata.get(TAG_KEY))


def is_embedded(fld: dataclasses.Field) -> bool:
    return bool(fld.metadata.get(EMBED_KEY, False))


def log_field(
    name: str = "",
    *,
    omitempty: bool = False,
    skip: bool = False,
    embedded: bool = False,
    **kwargs: Any,
) -> Any:
    """``dataclasses.field`` with rendering metadata attached.

    Extra keyword arguments (``default``, ``default_factory``, ``repr``…)
    are passed through to :func:`dataclasses.field`.
    """
    if skip:
        tag = _SKIP
    else:
        tag = name + (f",{_OMITEMPTY}" if omitempty else "")
    metadata = dict(kwargs.pop("metadata", None) or {})
    if tag:
        metadata[TAG_KEY] = tag
    if embedded:
        metadata[EMBED_KEY] = True
    return dataclasses.field(metadata=metadata, **kwargs)
