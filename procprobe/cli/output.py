"""
Output abstraction for CLI tools.

Tools write results through an OutputWriter instead of print(), so they can
be tested without capturing stdout.
"""

import io
import sys
from collections.abc import Iterable, Sequence
from typing import Protocol, TextIO

from rich.console import Console
from rich.table import Table


class OutputWriter(Protocol):
    """Protocol for CLI output writing."""

    def write(self, text: str = "") -> None:
        """Write text with trailing newline."""
        ...


class ConsoleOutput:
    """
    Output writer for a stream (stdout by default).

    Example:
        buffer = io.StringIO()
        out = ConsoleOutput(buffer)
        out.write("1234 alive")
        assert buffer.getvalue() == "1234 alive\\n"
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def write(self, text: str = "") -> None:
        print(text, file=self._stream)

    def flush(self) -> None:
        self._stream.flush()


class BufferedOutput:
    """
    Output writer that captures lines.

    Example:
        out = BufferedOutput()
        out.write("1234 alive")
        assert out.lines == ["1234 alive"]
    """

    def __init__(self) -> None:
        self._lines: list[str] = []

    def write(self, text: str = "") -> None:
        self._lines.extend(text.split("\n"))

    @property
    def lines(self) -> list[str]:
        return self._lines.copy()

    @property
    def text(self) -> str:
        return "\n".join(self._lines) + ("\n" if self._lines else "")


def render_table(
    out: OutputWriter,
    columns: Sequence[str],
    rows: Iterable[Sequence[object]],
    title: str | None = None,
    colors: bool = False,
) -> None:
    """Render rows as a rich table and write it line by line."""
    table = Table(title=title)
    for name in columns:
        table.add_column(name)
    for row in rows:
        table.add_row(*(str(cell) for cell in row))

    buffer = io.StringIO()
    console = Console(
        file=buffer,
        force_terminal=colors,
        no_color=not colors,
        width=80,
    )
    console.print(table)
    out.write(buffer.getvalue().rstrip("\n"))
