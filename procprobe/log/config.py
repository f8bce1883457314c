"""
Configuration for loggers and formatters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .constants import LogConstants
from .exceptions import InvalidLogLevelError


def resolve_level(level: str | int | bool) -> int | bool:
    """
    Resolve log level from string, numeric value, or boolean.

    Args:
        level: Level name ("debug"), numeric value, or False to disable logging

    Returns:
        Numeric log level or False to disable logging

    Raises:
        InvalidLogLevelError: If the log level is invalid
    """
    if isinstance(level, bool):
        return logging.INFO if level else False
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        if level.isnumeric():
            return int(level)
        name = level.lower()
        if name in LogConstants.LEVEL_NAMES:
            return LogConstants.LEVEL_NAMES[name]
    raise InvalidLogLevelError(level)


@dataclass(frozen=True)
class LogConfig:
    """Immutable logger configuration."""

    level: int | bool = logging.INFO  # False disables logging
    colors: bool = True
    micros: bool = False

    @classmethod
    def from_params(
        cls, level: str | int | bool = "info", colors: bool = True, micros: bool = False
    ) -> LogConfig:
        return cls(level=resolve_level(level), colors=colors, micros=micros)
