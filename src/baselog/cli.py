# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""baselog CLI: emit one structured line from a shell script.

Usage:
    python -m baselog [--output keyvalue|json] [--name NAME] [--level LEVEL] info MESSAGE [key=value ...]
    python -m baselog --error "connection refused" error "dial failed" host=db port=5432

Values are parsed as JSON scalars when possible (``port=5432`` logs a
number, ``ok=true`` a boolean); anything else is logged as a string.
A bare ``key`` without ``=`` is logged with the ``[n/a]`` placeholder.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from baselog.config import ENV_NAME, ENV_OUTPUT, LoggerConfig, LogLevel, LogOutput
from baselog.errors import ConfigError
from baselog.logger import Logger
from baselog.normalize import NO_VALUE
from baselog.sinks import Sink


def _parse_value(text: str) -> Any:
    try:
        value = json.loads(text)
    except ValueError:
        return text
    if isinstance(value, (dict, list)):
        return text
    return value


def parse_fields(tokens: list[str]) -> list[Any]:
    """``["k=v", "flag"]`` -> ``["k", v, "flag", "[n/a]"]``."""
    kv_list: list[Any] = []
    for token in tokens:
        key, sep, raw = token.partition("=")
        kv_list += [key, _parse_value(raw) if sep else NO_VALUE]
    return kv_list


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="baselog", description="Emit one structured log line to stdout.")
    parser.add_argument(
        "--output",
        choices=[str(o) for o in LogOutput],
        default=None,
        help=f"line format (default: ${ENV_OUTPUT} or keyvalue)",
    )
    parser.add_argument("--name", default=None, help=f"logger name (default: ${ENV_NAME})")
    parser.add_argument(
        "--level",
        choices=[str(lv) for lv in LogLevel],
        default=None,
        help="configured logger level (default: the call level, so the line is always emitted)",
    )
    parser.add_argument("--error", default=None, help="error message for the error call")
    parser.add_argument("call", choices=[str(LogLevel.DEBUG), str(LogLevel.INFO), str(LogLevel.ERROR)])
    parser.add_argument("message")
    parser.add_argument("fields", nargs="*", metavar="key=value")
    return parser


def main(argv: list[str] | None = None, *, sink: Sink | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        env = LoggerConfig.from_env()
    except ConfigError as e:
        print(f"baselog: {e}", file=sys.stderr)
        return 2

    log = Logger(
        level=args.level or args.call,
        name=env.name if args.name is None else args.name,
        output=args.output or env.output,
        sink=sink,
    )
    if not log.enabled(args.call):
        return 1

    kv_list = parse_fields(args.fields)
    if args.call == LogLevel.DEBUG:
        log.debug(args.message, *kv_list)
    elif args.call == LogLevel.INFO:
        log.info(args.message, *kv_list)
    else:
        log.error(args.error, args.message, *kv_list)
    return 0


if __name__ == "__main__":
    sys.exit(main())
