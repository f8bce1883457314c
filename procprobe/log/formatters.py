"""
Log formatters.

Output layout:
    [12:34:56,789] [I] probe ok                     [pid:4242] [1234] [/check]

The message is padded to a rule width so extra fields line up, followed by
the process id and the logger name.
"""

import logging
import re
from typing import Any

from .colors import ColorManager
from .config import LogConfig
from .constants import LogConstants

_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


def _visual_len(text: str) -> int:
    """Visual width of text, excluding ANSI escape codes."""
    if "\x1b" not in text:
        return len(text)
    return len(_ANSI_PATTERN.sub("", text))


def _quote(text: str) -> str:
    """Escape % so values survive %-style formatting."""
    return text.replace("%", "%%")


def _render_value(value: Any) -> str:
    if isinstance(value, BaseException):
        return f"{value.__class__.__name__}: {value}"
    if isinstance(value, bytes):
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def get_extra(record: logging.LogRecord) -> dict[str, Any]:
    return getattr(record, LogConstants.EXTRA_ATTR, None) or {}


class PreFormatter(logging.Formatter):
    """Standard formatter with optional sub-millisecond timestamp digits."""

    def __init__(self, fmt: str, micros: bool) -> None:
        self._micros = micros
        super().__init__(fmt)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        s = super().formatTime(record, "%H:%M:%S")
        s += f",{int(record.msecs):03d}"
        if self._micros:
            micros = int((record.created % 1) * 1000000) % 1000
            s += f".{micros:03d}"
        return s


class LogFormatter(logging.Formatter):
    """
    Formatter with optional ANSI colors and [key:value] field rendering.
    """

    def __init__(self, config: LogConfig):
        super().__init__()
        self._config = config
        self._pre_formatter = PreFormatter(LogConstants.DEFAULT_FORMAT, config.micros)

    def format(self, record: logging.LogRecord) -> str:
        rule = (
            LogConstants.MICRO_RULE_WIDTH
            if self._config.micros
            else LogConstants.DEFAULT_RULE_WIDTH
        )
        width = _visual_len(record.getMessage())
        padding = " " * max(1, rule - width)

        if self._config.colors:
            fmt = self._colored(record, padding)
        else:
            fmt = self._plain(record, padding)

        self._pre_formatter._fmt = fmt
        self._pre_formatter._style._fmt = fmt
        return self._pre_formatter.format(record)

    def _plain(self, record: logging.LogRecord, padding: str) -> str:
        fmt = LogConstants.DEFAULT_FORMAT + padding
        fields = [
            f"[{k}:{_quote(_render_value(v))}]" for k, v in get_extra(record).items()
        ]
        if fields:
            fmt += " ".join(fields) + " "
        return fmt + "[%(process)d] [%(name)s]"

    def _colored(self, record: logging.LogRecord, padding: str) -> str:
        col = ColorManager.get_color_for_level(record.levelno)
        bold = ColorManager.create_bold_color(col)
        col += "m"
        reset = ColorManager.RESET

        fmt = col + "[%(asctime)s] [" + bold + "%(levelname).1s" + reset + col + "] "
        fmt += bold + "%(message)s" + reset + col + padding

        fields = []
        for k, v in get_extra(record).items():
            value = _quote(_render_value(v))
            fields.append(f"{col}{k}[{bold}{value}{reset}{col}]")
        if fields:
            fmt += " ".join(fields) + " "

        gray = ColorManager.gray(9)
        fmt += f"{gray}[%(process)d] [%(name)s]{reset}"
        return fmt
