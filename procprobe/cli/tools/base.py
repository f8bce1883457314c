"""
Base class for CLI subcommands.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ...config import Config
    from ...log import Logger
    from ..output import OutputWriter


@dataclass
class ToolConfig:
    """Configuration for a tool."""

    name: str
    aliases: list[str] = field(default_factory=list)
    help_text: str = ""
    description: str = ""


@dataclass
class ToolContext:
    """Everything a tool needs at run time."""

    lg: Logger
    config: Config
    out: OutputWriter
    colors: bool = False


class Tool:
    """
    A subcommand: declares its arguments and runs with parsed args.

    Subclasses pass a ToolConfig to __init__ and implement add_args() and
    run(); run() returns the process exit code.
    """

    def __init__(self, config: ToolConfig) -> None:
        self.config = config

    @property
    def name(self) -> str:
        return self.config.name

    def register(self, subparsers: Any) -> argparse.ArgumentParser:
        """Create this tool's subparser."""
        parser = subparsers.add_parser(
            self.config.name,
            aliases=self.config.aliases,
            help=self.config.help_text,
            description=self.config.description or self.config.help_text,
        )
        parser.set_defaults(tool=self)
        self.add_args(parser)
        return parser

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        """Add command-line arguments. Default: none."""
        pass

    def run(self, args: argparse.Namespace, ctx: ToolContext) -> int:
        raise NotImplementedError
