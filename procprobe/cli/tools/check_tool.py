"""Run the kill-null check."""

import argparse

from ...exceptions import ChildTimeoutError, SpawnError
from ...liveness import run_kill_null_check
from ..output import render_table
from .base import Tool, ToolConfig, ToolContext


class CheckTool(Tool):
    """Spawn a passthrough child and verify probe behavior across its lifetime."""

    def __init__(self) -> None:
        super().__init__(
            ToolConfig(
                name="check",
                help_text="Verify that the null signal tracks a child's lifetime",
            )
        )

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--timeout", type=float, default=None, help="seconds to wait for exit"
        )

    def run(self, args: argparse.Namespace, ctx: ToolContext) -> int:
        settings = ctx.config.settings.check
        if args.timeout is not None:
            settings = settings.model_copy(update={"timeout": args.timeout})

        try:
            report = run_kill_null_check(ctx.lg, settings)
        except (SpawnError, ChildTimeoutError) as e:
            ctx.out.write(f"error: {e}")
            return 1

        render_table(
            ctx.out, ["Step", "Result"], report.summary().items(), colors=ctx.colors
        )
        for note in report.notes:
            ctx.out.write(f"note: {note}")
        ctx.out.write("PASS" if report.passed else "FAIL")
        return 0 if report.passed else 1
