"""
Command-line interface for procprobe.
"""

from procprobe.cli.output import BufferedOutput, ConsoleOutput, render_table

__all__ = [
    "ConsoleOutput",
    "BufferedOutput",
    "render_table",
]
