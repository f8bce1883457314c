"""
Configuration package.

Provides:
- Config for loading YAML configuration with environment overrides
- Pydantic schemas validating every section
"""

from .config import Config
from .constants import DEFAULTS, ENV_PREFIX, MAX_CONFIG_SIZE_BYTES
from .schemas import CheckSettings, KillSettings, LoggingSettings, Settings

__all__ = [
    "Config",
    "Settings",
    "LoggingSettings",
    "CheckSettings",
    "KillSettings",
    "DEFAULTS",
    "ENV_PREFIX",
    "MAX_CONFIG_SIZE_BYTES",
]
