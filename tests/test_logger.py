# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for baselog.logger — end-to-end lines, level gate, derivation."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from datetime import datetime

import pytest

from baselog.config import LoggerConfig
from baselog.errors import ConfigError
from baselog.logger import Logger, new_logger, timestamp
from baselog.sinks import ListSink

TS = "2024-01-02 03:04:05.000006"


@dataclass
class Lazy:
    a: int = 1
    b: int = field(init=False)


class FailingSink:
    def write_line(self, line: str) -> None:
        raise OSError("disk full")


def make(level="info", name="svc", output="keyvalue", *, clock):
    sink = ListSink()
    return Logger(level, name, output, sink, clock=clock), sink


# ── Line format ─────────────────────────────────────────────────


class TestLineFormat:
    def test_keyvalue_end_to_end(self, clock):
        log, sink = make(clock=clock)
        log.info("started", "port", 8080)
        assert sink.lines == [f'svc: "ts"="{TS}" "msg"="started" "port"=8080']

    def test_json_end_to_end(self, clock):
        log, sink = make(output="json", clock=clock)
        log.info("started", "port", 8080)
        assert sink.lines == [f'{{"logger":"svc","ts":"{TS}","msg":"started","port":8080}}']

    def test_keyvalue_without_name_has_no_prefix(self, clock):
        log, sink = make(name="", clock=clock)
        log.info("hi")
        assert sink.lines == [f'"ts"="{TS}" "msg"="hi"']

    def test_json_without_name_keeps_logger_field(self, clock):
        log, sink = make(name="", output="json", clock=clock)
        log.info("hi")
        assert json.loads(sink.lines[0])["logger"] == ""

    def test_message_is_escaped(self, clock):
        log, sink = make(output="json", clock=clock)
        log.info('say "hi"\n')
        assert json.loads(sink.lines[0])["msg"] == 'say "hi"\n'

    def test_odd_fields_padded(self, clock):
        log, sink = make(clock=clock)
        log.info("x", "dangling")
        assert sink.lines[0].endswith('"dangling"="[n/a]"')

    def test_timestamp_format(self):
        assert timestamp(datetime(2024, 1, 2, 3, 4, 5, 6)) == TS
        assert timestamp(datetime(2024, 12, 31, 23, 59, 59)) == "2024-12-31 23:59:59.000000"

    def test_timestamp_is_fixed_width_for_early_years(self):
        assert timestamp(datetime(5, 1, 2, 3, 4, 5, 6)) == "0005-01-02 03:04:05.000006"

    def test_unset_dataclass_field_does_not_raise(self, clock):
        log, sink = make(clock=clock)
        log.info("x", "v", Lazy())
        assert sink.lines == [f'svc: "ts"="{TS}" "msg"="x" "v"={{"a":1,"b":null}}']


class TestErrorCalls:
    def test_error_with_exception(self, clock):
        log, sink = make(level="error", clock=clock)
        log.error(ValueError("boom"), "failed", "id", 3)
        assert sink.lines == [f'svc: "ts"="{TS}" "msg"="failed" "error"="boom" "id"=3']

    def test_error_without_exception_is_null(self, clock):
        log, sink = make(level="error", output="json", clock=clock)
        log.error(None, "failed")
        assert sink.lines == [f'{{"logger":"svc","ts":"{TS}","msg":"failed","error":null}}']

    def test_error_with_string(self, clock):
        log, sink = make(level="error", output="json", clock=clock)
        log.error("refused", "dial")
        assert json.loads(sink.lines[0])["error"] == "refused"


# ── Level gate ──────────────────────────────────────────────────


class TestLevels:
    def test_enabled_is_exact_match(self, clock):
        log, _ = make(level="debug", clock=clock)
        assert log.enabled("debug") is True
        assert log.enabled("info") is False
        assert log.enabled("error") is False

    def test_all_is_not_a_wildcard(self, clock):
        log, _ = make(level="all", clock=clock)
        assert log.enabled("all") is True
        assert log.enabled("error") is False

    def test_calls_are_gated(self, clock):
        log, sink = make(level="debug", clock=clock)
        log.info("dropped")
        log.error(None, "dropped")
        log.debug("kept")
        assert len(sink.lines) == 1
        assert '"msg"="kept"' in sink.lines[0]

    def test_set_level(self, clock):
        log, sink = make(level="none", clock=clock)
        log.info("dropped")
        log.set_level("info")
        assert log.level == "info"
        log.info("kept")
        assert len(sink.lines) == 1

    def test_set_level_rejects_unknown(self, clock):
        log, _ = make(clock=clock)
        with pytest.raises(ConfigError):
            log.set_level("verbose")
        assert log.level == "info"

    def test_invalid_construction(self):
        with pytest.raises(ConfigError):
            Logger(level="trace")
        with pytest.raises(ConfigError):
            Logger(output="logfmt")

    def test_concurrent_set_level_and_logging(self, clock):
        log, sink = make(clock=clock)

        def flip():
            for i in range(200):
                log.set_level("info" if i % 2 else "debug")

        def write():
            for _ in range(200):
                log.info("tick")

        threads = [threading.Thread(target=flip)] + [threading.Thread(target=write) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert all(line == f'svc: "ts"="{TS}" "msg"="tick"' for line in sink.lines)


# ── Derivation ──────────────────────────────────────────────────


class TestWithValues:
    def test_bound_fields_follow_implicit(self, clock):
        log, sink = make(clock=clock)
        log.with_values("env", "prod").info("x", "k", 1)
        assert sink.lines == [f'svc: "ts"="{TS}" "msg"="x" "env"="prod" "k"=1']

    def test_bound_fields_json(self, clock):
        log, sink = make(output="json", clock=clock)
        log.with_values("env", "prod", "shard", 3).info("x")
        assert json.loads(sink.lines[0]) == {"logger": "svc", "ts": TS, "msg": "x", "env": "prod", "shard": 3}

    def test_chained(self, clock):
        log, sink = make(clock=clock)
        child = log.with_values("a", 1).with_values("b", 2)
        assert child.bound_fields == '"a"=1 "b"=2'
        child.info("x")
        assert sink.lines[0].endswith('"a"=1 "b"=2')

    def test_parent_unchanged(self, clock):
        log, sink = make(clock=clock)
        log.with_values("a", 1)
        log.info("x")
        assert log.bound_fields == ""
        assert sink.lines == [f'svc: "ts"="{TS}" "msg"="x"']

    def test_empty_with_values_keeps_bound(self, clock):
        log, _ = make(clock=clock)
        assert log.with_values("a", 1).with_values().bound_fields == '"a"=1'

    def test_child_copies_level(self, clock):
        log, _ = make(level="debug", clock=clock)
        child = log.with_values("a", 1)
        log.set_level("error")
        assert child.level == "debug"


class TestWithName:
    def test_dotted_name(self, clock):
        log, sink = make(clock=clock)
        log.with_name("db").info("x")
        assert sink.lines[0].startswith("svc.db: ")

    def test_unnamed_parent(self, clock):
        log, _ = make(name="", clock=clock)
        assert log.with_name("db").name == "db"

    def test_json_logger_field(self, clock):
        log, sink = make(output="json", clock=clock)
        log.with_values("a", 1).with_name("db").info("x")
        parsed = json.loads(sink.lines[0])
        assert parsed["logger"] == "svc.db"
        assert parsed["a"] == 1


# ── Formatters & sinks ──────────────────────────────────────────


class TestFormatters:
    def test_format_info_returns_prefix_separately(self, clock):
        log, sink = make(clock=clock)
        prefix, line = log.format_info("x", ["k", 1])
        assert prefix == "svc"
        assert line == f'"ts"="{TS}" "msg"="x" "k"=1'
        assert sink.lines == []

    def test_json_prefix_is_empty(self, clock):
        log, _ = make(output="json", clock=clock)
        prefix, line = log.format_debug("x")
        assert prefix == ""
        assert line.startswith('{"logger":"svc",')

    def test_format_error(self, clock):
        log, _ = make(clock=clock)
        _, line = log.format_error(None, "x")
        assert line.endswith('"error"=null')


class TestSinks:
    def test_sink_failure_is_swallowed(self, clock):
        log = Logger("info", "svc", "keyvalue", FailingSink(), clock=clock)
        log.info("x")

    def test_default_sink_is_stdout(self, capsys, clock):
        Logger("info", "svc", clock=clock).info("hello")
        assert capsys.readouterr().out == f'svc: "ts"="{TS}" "msg"="hello"\n'


class TestNewLogger:
    def test_from_config(self, clock):
        sink = ListSink()
        log = new_logger(LoggerConfig(level="debug", name="w", output="json"), sink, clock=clock)
        assert (log.level, log.name, log.output, log.json_output) == ("debug", "w", "json", True)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("BASELOG_LEVEL", "error")
        monkeypatch.setenv("BASELOG_OUTPUT", "json")
        log = new_logger(sink=ListSink())
        assert log.level == "error"
        assert log.json_output is True

    def test_repr(self):
        assert repr(Logger("info", "svc")) == "Logger(level='info', name='svc', output='keyvalue')"
