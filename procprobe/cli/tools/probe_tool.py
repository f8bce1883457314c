"""Null-signal probe for one or more pids."""

import argparse

from ...exceptions import (
    AccessDeniedError,
    InvalidArgumentError,
    NoSuchProcessError,
    ProcessError,
)
from ...process import probe
from .base import Tool, ToolConfig, ToolContext


class ProbeTool(Tool):
    """Report whether each pid exists and is reachable."""

    def __init__(self) -> None:
        super().__init__(
            ToolConfig(
                name="probe",
                aliases=["alive"],
                help_text="Probe pids with the null signal",
                description=(
                    "Sends signal 0 to each pid. Exits 0 only if every pid is "
                    "alive and reachable."
                ),
            )
        )

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("pids", nargs="+", type=int, metavar="PID")

    def run(self, args: argparse.Namespace, ctx: ToolContext) -> int:
        ok = True
        for pid in args.pids:
            try:
                probe(pid)
            except InvalidArgumentError:
                ctx.out.write(f"{pid} invalid pid")
                ok = False
            except NoSuchProcessError:
                ctx.out.write(f"{pid} not found")
                ok = False
            except AccessDeniedError:
                ctx.out.write(f"{pid} access denied")
                ok = False
            except ProcessError as e:
                ctx.out.write(f"{pid} error {e.code}")
                ok = False
            else:
                ctx.out.write(f"{pid} alive")
            ctx.lg.debug("probed", extra={"pid": pid})
        return 0 if ok else 1
