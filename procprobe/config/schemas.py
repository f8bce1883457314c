"""
Configuration schemas using Pydantic for validation.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..exceptions import InvalidArgumentError, UnknownSignalError
from ..log.config import resolve_level
from ..log.exceptions import InvalidLogLevelError
from ..signals import resolve_signal


def _check_signal(v: Any) -> Any:
    try:
        resolve_signal(v)
    except (UnknownSignalError, InvalidArgumentError) as e:
        raise ValueError(str(e)) from e
    return v


class LoggingSettings(BaseModel):
    """Logging section."""

    level: str | int | bool = Field(default="info", description="Log level")
    colors: bool | None = Field(
        default=None, description="Colored output; auto-detect when unset"
    )
    micros: bool = Field(default=False, description="Show microsecond timestamps")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: Any) -> Any:
        try:
            resolve_level(v)
        except InvalidLogLevelError as e:
            raise ValueError(str(e)) from e
        return v

    model_config = ConfigDict(extra="forbid")


class CheckSettings(BaseModel):
    """Kill-null check section."""

    payload: str = Field(default="test", description="Bytes written to the child")
    kill_signal: str | int = Field(
        default="SIGKILL", description="Signal sent once output is observed"
    )
    timeout: float = Field(default=5.0, gt=0, description="Seconds to wait for exit")
    argv: list[str] | None = Field(
        default=None, description="Passthrough command; defaults to cat"
    )

    @field_validator("payload", mode="before")
    @classmethod
    def coerce_payload(cls, v: Any) -> Any:
        # YAML reads `payload: 123` as a number
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("kill_signal")
    @classmethod
    def validate_kill_signal(cls, v: Any) -> Any:
        return _check_signal(v)

    @field_validator("argv")
    @classmethod
    def validate_argv(cls, v: Any) -> Any:
        if v is not None and len(v) == 0:
            raise ValueError("argv must not be empty")
        return v

    model_config = ConfigDict(extra="forbid")


class KillSettings(BaseModel):
    """Defaults for the kill command."""

    default_signal: str | int = Field(default="SIGTERM")

    @field_validator("default_signal")
    @classmethod
    def validate_default_signal(cls, v: Any) -> Any:
        return _check_signal(v)

    model_config = ConfigDict(extra="forbid")


class Settings(BaseModel):
    """Top-level configuration."""

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    check: CheckSettings = Field(default_factory=CheckSettings)
    kill: KillSettings = Field(default_factory=KillSettings)

    model_config = ConfigDict(extra="allow")
