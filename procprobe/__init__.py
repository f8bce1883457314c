from importlib.metadata import PackageNotFoundError, version

from .child import (
    ChildEvent,
    ChildProcess,
    ExitStatus,
    spawn,
    spawn_cat,
    spawn_sleep,
)
from .exceptions import (
    AccessDeniedError,
    ChildStateError,
    ChildTimeoutError,
    ConfigError,
    InvalidArgumentError,
    NoSuchProcessError,
    ProbeError,
    ProcessError,
    SignalDeliveryError,
    SpawnError,
    UnknownSignalError,
)
from .liveness import CheckReport, KillNullCheck, run_kill_null_check
from .process import is_alive, kill, probe
from .signals import (
    DEFAULT_SIGNAL,
    NULL_SIGNAL,
    SIGNALS,
    resolve_signal,
    signal_name,
)

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("procprobe")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

__all__ = [
    "__version__",
    # Signal delivery
    "kill",
    "probe",
    "is_alive",
    # Signals
    "SIGNALS",
    "NULL_SIGNAL",
    "DEFAULT_SIGNAL",
    "resolve_signal",
    "signal_name",
    # Children
    "ChildEvent",
    "ChildProcess",
    "ExitStatus",
    "spawn",
    "spawn_cat",
    "spawn_sleep",
    # Liveness check
    "CheckReport",
    "KillNullCheck",
    "run_kill_null_check",
    # Exceptions
    "ProbeError",
    "InvalidArgumentError",
    "UnknownSignalError",
    "ProcessError",
    "NoSuchProcessError",
    "AccessDeniedError",
    "SignalDeliveryError",
    "SpawnError",
    "ChildStateError",
    "ChildTimeoutError",
    "ConfigError",
]
