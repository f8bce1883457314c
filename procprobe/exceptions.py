"""
Unified exception hierarchy for procprobe.

All library errors derive from ProbeError so callers can catch everything
raised by this package with a single except clause, while the specific
subclasses distinguish "process is gone" from "process is not ours".
"""

from typing import Any


class ProbeError(Exception):
    """
    Base exception for all procprobe errors.

    Example:
        try:
            probe(pid)
        except ProbeError as e:
            lg.error("probe failed", extra={"exception": e})
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class InvalidArgumentError(ProbeError, TypeError):
    """Raised when an argument has the wrong type (e.g. a non-integer pid)."""

    pass


class UnknownSignalError(ProbeError, ValueError):
    """Raised when a signal name or number cannot be resolved on this host."""

    pass


class ProcessError(ProbeError):
    """
    Signal delivery failed.

    Carries the same fields the OS reports: the pid, the errno and its
    symbolic code, and the failing syscall.

    Examples:
        - Process has exited (ESRCH)
        - Process belongs to another user (EPERM)
    """

    @property
    def pid(self) -> int | None:
        return self.context.get("pid")

    @property
    def errno(self) -> int | None:
        return self.context.get("errno")

    @property
    def code(self) -> str | None:
        return self.context.get("code")

    @property
    def syscall(self) -> str | None:
        return self.context.get("syscall")


class NoSuchProcessError(ProcessError):
    """The target process does not exist (ESRCH)."""

    pass


class AccessDeniedError(ProcessError):
    """The target process exists but may not be signaled by the caller (EPERM)."""

    pass


class SignalDeliveryError(ProcessError):
    """Any other failure reported by kill(2)."""

    pass


class SpawnError(ProbeError):
    """Raised when a child process cannot be started."""

    pass


class ChildStateError(ProbeError):
    """
    Operation is not valid in the child's current state.

    Examples:
        - Starting a child twice
        - Writing to stdin after it was closed or the child exited
    """

    pass


class ChildTimeoutError(ProbeError):
    """Raised when waiting for a child exceeds the given timeout."""

    pass


class ConfigError(ProbeError):
    """
    Configuration-related errors.

    Examples:
        - Config file not found
        - Invalid YAML syntax
        - Value rejected by schema validation
    """

    pass
