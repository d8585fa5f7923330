# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for baselog.normalize — pairing and key coercion."""

from __future__ import annotations

from dataclasses import dataclass

from baselog.normalize import MAX_KEY_LEN, NO_VALUE, key_string, normalize
from baselog.render import render_value


@dataclass
class Wide:
    name: str = "abcdefghijklmnopqrstuvwxyz"


class TestPairing:
    def test_even_list_unchanged(self):
        assert normalize(["a", 1, "b", 2]) == ["a", 1, "b", 2]

    def test_odd_list_gets_sentinel(self):
        assert normalize(["a", 1, "b"]) == ["a", 1, "b", NO_VALUE]
        assert NO_VALUE == "[n/a]"

    def test_empty(self):
        assert normalize([]) == []

    def test_input_not_mutated(self):
        raw = ["a", 1, 2]
        normalize(raw)
        assert raw == ["a", 1, 2]

    def test_accepts_tuples(self):
        assert normalize(("k",)) == ["k", NO_VALUE]


class TestKeyCoercion:
    def test_int_key(self):
        assert normalize([42, "v"]) == ["42", "v"]

    def test_none_key(self):
        assert normalize([None, 1]) == ["null", 1]

    def test_values_are_left_alone(self):
        assert normalize(["k", 42]) == ["k", 42]

    def test_long_key_truncated(self):
        key = normalize([Wide(), 1])[0]
        assert key == render_value(Wide())[:MAX_KEY_LEN]
        assert key == '{"name":"abcdefg'
        assert len(key) == 16

    def test_key_string_short_values_intact(self):
        assert key_string(True) == "true"
        assert key_string(3.5) == "3.5"
