"""
Factory for creating and configuring loggers.

Loggers are created directly rather than through logging.getLogger(), so
several independently configured roots can coexist in one process (tests,
embedded use) without touching the global logging registry.
"""

import logging
import sys
from typing import Any, TextIO

from .config import LogConfig
from .formatters import LogFormatter
from .logger import Logger


class LoggerFactory:
    """Factory for creating and configuring loggers."""

    @staticmethod
    def create(
        name: str,
        config: LogConfig,
        stream: TextIO | None = None,
        extra: dict[str, Any] | None = None,
    ) -> Logger:
        """
        Create a root logger writing to a stream.

        Args:
            name: Logger name, "/" style hierarchy by convention
            config: Logger configuration
            stream: Output stream (defaults to stderr so stdout stays free for results)
            extra: Fields included in every record

        Example:
            >>> config = LogConfig.from_params(level="debug", colors=False)
            >>> lg = LoggerFactory.create("/", config)
            >>> lg.info("spawned", extra={"pid": 4242})
            [12:34:56,789] [I] spawned          [pid:4242] [1234] [/]
        """
        lg = Logger(name, config, extra=extra)
        lg.propagate = False

        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        handler.setLevel(lg.level)
        handler.setFormatter(LogFormatter(config))
        lg.addHandler(handler)
        return lg

    @staticmethod
    def derive(
        parent: Logger, name: str, extra: dict[str, Any] | None = None
    ) -> Logger:
        """
        Create a child "view" logger that shares the parent's handlers.

        The child name is appended to the parent's ("/" + "check" -> "/check").
        """
        base = parent.name.rstrip("/")
        merged = {**parent._extra, **(extra or {})}
        child = Logger(f"{base}/{name}", parent.config, extra=merged)
        child.propagate = False
        child._root_logger = parent._root_logger or parent
        return child


_null_lg: Logger | None = None


def get_null_lg() -> Logger:
    """Shared disabled logger used by library code when no logger is passed in."""
    global _null_lg
    if _null_lg is None:
        _null_lg = Logger("/procprobe", LogConfig(level=False))
        _null_lg.propagate = False
    return _null_lg


def create_lg(
    level: str | int | bool = "info",
    colors: bool | None = None,
    micros: bool = False,
    name: str = "/",
    stream: TextIO | None = None,
) -> Logger:
    """
    Create a root logger with the specified configuration.

    Colors default to on only when the target stream is a terminal.
    """
    target = stream if stream is not None else sys.stderr
    if colors is None:
        colors = hasattr(target, "isatty") and target.isatty()
    config = LogConfig.from_params(level, colors=colors, micros=micros)
    return LoggerFactory.create(name, config, stream=target)
