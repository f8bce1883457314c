"""List the signals known on this host."""

import argparse

from ...signals import SIGNALS
from ..output import render_table
from .base import Tool, ToolConfig, ToolContext


class SignalsTool(Tool):
    def __init__(self) -> None:
        super().__init__(
            ToolConfig(name="signals", help_text="List signal names and numbers")
        )

    def run(self, args: argparse.Namespace, ctx: ToolContext) -> int:
        rows = [(num, name) for name, num in SIGNALS.items()]
        render_table(ctx.out, ["Number", "Name"], rows, colors=ctx.colors)
        return 0
