"""
Logging for procprobe.

Extends Python's standard logging with:
- Custom TRACE log level
- Colored console output with ANSI escape sequences
- Structured logging with extra fields rendered as [key:value]
- Derived loggers sharing a root's handlers
- Complete logging disable (level=False or level="false")
"""

import logging

from .config import LogConfig, resolve_level
from .constants import LogConstants
from .exceptions import InvalidLogLevelError, LogError
from .factory import LoggerFactory, create_lg, get_null_lg
from .formatters import LogFormatter
from .logger import Logger

logging.addLevelName(LogConstants.CUSTOM_LEVELS["TRACE"], "TRACE")

__all__ = [
    "Logger",
    "LoggerFactory",
    "LogConfig",
    "LogConstants",
    "LogFormatter",
    "LogError",
    "InvalidLogLevelError",
    "create_lg",
    "get_null_lg",
    "resolve_level",
]
