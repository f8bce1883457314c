#!/usr/bin/env python3
"""
procprobe CLI.

Usage:
    procprobe probe 1234 5678
    procprobe kill 1234 -s SIGKILL
    procprobe signals
    procprobe check --timeout 2
"""

import argparse
import sys
from collections.abc import Sequence

import procprobe
from procprobe.cli.output import ConsoleOutput, OutputWriter
from procprobe.cli.tools import (
    CheckTool,
    KillTool,
    ProbeTool,
    SignalsTool,
    ToolContext,
)
from procprobe.config import Config
from procprobe.exceptions import ConfigError
from procprobe.log import InvalidLogLevelError, create_lg

_TOOLS = [
    ProbeTool,
    KillTool,
    SignalsTool,
    CheckTool,
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="procprobe",
        description="Process liveness probing and signal delivery",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"procprobe {procprobe.__version__}",
    )
    parser.add_argument("-c", "--config", default=None, help="YAML config file")
    parser.add_argument(
        "-l", "--log-level", default=None, help="log level (overrides config)"
    )
    parser.add_argument(
        "--no-colors", action="store_true", help="disable colored output"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True
    for tool_cls in _TOOLS:
        tool_cls().register(subparsers)
    return parser


def main(argv: Sequence[str] | None = None, out: OutputWriter | None = None) -> int:
    """Main entry point for the procprobe CLI."""
    args = build_parser().parse_args(argv)
    out = out if out is not None else ConsoleOutput()

    try:
        config = Config(args.config)
    except ConfigError as e:
        print(f"procprobe: {e}", file=sys.stderr)
        return 2

    log_settings = config.settings.logging
    colors = False if args.no_colors else log_settings.colors
    try:
        lg = create_lg(
            level=args.log_level if args.log_level is not None else log_settings.level,
            colors=colors,
            micros=log_settings.micros,
        )
    except InvalidLogLevelError as e:
        print(f"procprobe: {e}", file=sys.stderr)
        return 2

    ctx = ToolContext(lg=lg, config=config, out=out, colors=bool(lg.config.colors))
    lg.debug("running command", extra={"command": args.command})
    return int(args.tool.run(args, ctx))


if __name__ == "__main__":
    sys.exit(main())
