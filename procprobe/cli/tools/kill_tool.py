"""Deliver a signal to a pid."""

import argparse

from ...exceptions import InvalidArgumentError, ProcessError, UnknownSignalError
from ...process import kill
from .base import Tool, ToolConfig, ToolContext


def _signal_arg(value: str) -> int | str:
    """Accept "9" as a number and anything else as a name."""
    return int(value) if value.isdigit() else value


class KillTool(Tool):
    """Send a signal by name or number."""

    def __init__(self) -> None:
        super().__init__(
            ToolConfig(
                name="kill",
                help_text="Send a signal to a pid",
                description="Default signal comes from kill.default_signal.",
            )
        )

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("pid", type=int, metavar="PID")
        parser.add_argument(
            "-s",
            "--signal",
            type=_signal_arg,
            default=None,
            help="signal name (SIGKILL) or number (9)",
        )

    def run(self, args: argparse.Namespace, ctx: ToolContext) -> int:
        sig = args.signal
        if sig is None:
            sig = ctx.config.settings.kill.default_signal
        try:
            kill(args.pid, sig)
        except (InvalidArgumentError, ProcessError, UnknownSignalError) as e:
            ctx.out.write(f"error: {e}")
            return 1
        ctx.lg.info("signal sent", extra={"pid": args.pid, "signal": sig})
        return 0
