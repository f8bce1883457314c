"""
Configuration loading.

Built-in defaults are overlaid with an optional YAML file and then with
environment variables, and the result is validated against the Settings
schema before it is exposed as a DotDict.

Environment Variable Override Format:
    PROCPROBE_<SECTION>_<KEY>=value

The first segment after the prefix names the section, the rest is the key,
so underscores inside keys are preserved:

    PROCPROBE_LOGGING_LEVEL=debug
    PROCPROBE_CHECK_KILL_SIGNAL=SIGTERM
    PROCPROBE_CHECK_TIMEOUT=2.5

Values are parsed as YAML scalars ("2.5" is a float, "true" a bool), except
for string fields such as check.payload, which take the raw text.
"""

import copy
import os
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..dot_dict import DotDict
from ..exceptions import ConfigError
from .constants import DEFAULTS, ENV_PREFIX, MAX_CONFIG_SIZE_BYTES
from .schemas import Settings


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base, recursing into nested dicts."""
    result = copy.deepcopy(base)
    for key, val in override.items():
        if isinstance(val, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = copy.deepcopy(val)
    return result


def _read_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping from a file, enforcing the size limit."""
    if not path.is_file():
        raise ConfigError("config file not found", path=str(path))

    size = path.stat().st_size
    if size > MAX_CONFIG_SIZE_BYTES:
        raise ConfigError(
            "config file too large",
            path=str(path),
            size=size,
            limit=MAX_CONFIG_SIZE_BYTES,
        )

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError("invalid YAML", path=str(path), error=str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("config root must be a mapping", path=str(path))
    return data


def _is_str_field(section: str, name: str) -> bool:
    """True when the schema declares section.name as a plain string."""
    field = Settings.model_fields.get(section)
    if field is None or not isinstance(field.annotation, type):
        return False
    if not issubclass(field.annotation, BaseModel):
        return False
    inner = field.annotation.model_fields.get(name)
    return inner is not None and inner.annotation is str


def _format_errors(e: PydanticValidationError) -> str:
    return "; ".join(
        ".".join(str(p) for p in err["loc"]) + ": " + err["msg"] for err in e.errors()
    )


class Config(DotDict):
    """
    Validated configuration.

    Example:
        config = Config("etc/procprobe.yaml")
        config.check.timeout         # 5.0
        config.get("logging.level")  # "info"
        config.settings.check        # CheckSettings model
    """

    def __init__(
        self,
        path: str | Path | None = None,
        env_prefix: str = ENV_PREFIX,
        enable_env_overrides: bool = True,
    ) -> None:
        super().__init__()
        self._path = Path(path).resolve() if path is not None else None
        self._env_prefix = env_prefix
        self._enable_env_overrides = enable_env_overrides
        self._settings = self._load()

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def settings(self) -> Settings:
        return self._settings

    def _load(self) -> Settings:
        data = copy.deepcopy(DEFAULTS)
        if self._path is not None:
            data = _deep_merge(data, _read_yaml(self._path))
        if self._enable_env_overrides:
            data = _deep_merge(data, self._collect_env_overrides())

        try:
            settings = Settings.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigError(
                "invalid configuration",
                path=str(self._path) if self._path else "<defaults>",
                errors=_format_errors(e),
            ) from e

        try:
            self.set(**settings.model_dump())
        except ValueError as e:
            raise ConfigError(
                "invalid configuration",
                path=str(self._path) if self._path else "<defaults>",
                errors=str(e),
            ) from e
        return settings

    def _collect_env_overrides(self) -> dict[str, Any]:
        """Collect PREFIX_SECTION_KEY environment variables into nested dicts."""
        overrides: dict[str, Any] = {}
        for key, value in os.environ.items():
            if not key.startswith(self._env_prefix):
                continue
            section, _, name = key[len(self._env_prefix) :].lower().partition("_")
            if not section or not name:
                continue
            if not _is_str_field(section, name):
                value = self._parse_env_value(value)
            overrides.setdefault(section, {})[name] = value
        return overrides

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        try:
            return yaml.safe_load(value)
        except yaml.YAMLError:
            return value
