"""
Signal delivery and the null-signal liveness probe.

kill() wraps os.kill. Arguments are validated up front and OS failures are
raised as ProcessError subclasses carrying the errno symbol.
"""

import errno as errno_mod
import os

from .exceptions import (
    AccessDeniedError,
    InvalidArgumentError,
    NoSuchProcessError,
    ProcessError,
    SignalDeliveryError,
)
from .signals import DEFAULT_SIGNAL, NULL_SIGNAL, resolve_signal

_ERRNO_ERRORS: dict[int, type[ProcessError]] = {
    errno_mod.ESRCH: NoSuchProcessError,
    errno_mod.EPERM: AccessDeniedError,
}


def _check_pid(pid: object) -> int:
    if isinstance(pid, bool) or not isinstance(pid, int):
        raise InvalidArgumentError(
            "pid must be an int", argument="pid", type=type(pid).__name__
        )
    if pid <= 0:
        # 0 and negative pids address process groups, not one process
        raise InvalidArgumentError("pid must be positive", argument="pid", value=pid)
    return pid


def _translate(e: OSError, pid: int, signum: int) -> ProcessError:
    """Map an OSError raised by os.kill to the matching ProcessError."""
    err = e.errno or 0
    cls = _ERRNO_ERRORS.get(err, SignalDeliveryError)
    code = errno_mod.errorcode.get(err, "UNKNOWN")
    return cls(
        f"kill {code}",
        pid=pid,
        signal=signum,
        errno=err,
        code=code,
        syscall="kill",
    )


def kill(pid: int, sig: int | str = DEFAULT_SIGNAL) -> bool:
    """
    Send a signal to a process.

    Args:
        pid: Target process id
        sig: Signal name or number; 0 probes without delivering anything

    Returns:
        True when the signal was accepted by the OS

    Raises:
        InvalidArgumentError: pid is not a positive int
        UnknownSignalError: sig cannot be resolved
        NoSuchProcessError: the process does not exist
        AccessDeniedError: the caller may not signal the process
        SignalDeliveryError: any other kill(2) failure
    """
    pid = _check_pid(pid)
    signum = resolve_signal(sig)
    try:
        os.kill(pid, signum)
    except OSError as e:
        raise _translate(e, pid, signum) from e
    return True


def probe(pid: int) -> bool:
    """
    Check that a process exists and is reachable by sending the null signal.

    Raises the same errors as kill() when it is not.
    """
    return kill(pid, NULL_SIGNAL)


def is_alive(pid: int) -> bool:
    """
    Non-raising liveness check.

    A process that exists but belongs to someone else (EPERM) counts as alive.
    """
    try:
        return probe(pid)
    except NoSuchProcessError:
        return False
    except AccessDeniedError:
        return True
