"""
Kill-null check: verifies that the null signal tracks a child's lifetime.

Scenario:
    1. spawn a passthrough child
    2. probe its pid, which must succeed while it runs
    3. write a payload; the echoed output triggers the termination signal
    4. once the child is reaped, the same probe must fail
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import dataclass, field

from . import process
from .child import ChildEvent, ChildProcess, ExitStatus, passthrough_argv
from .config.schemas import CheckSettings
from .exceptions import ChildStateError, NoSuchProcessError, ProcessError
from .log import Logger, LoggerFactory
from .signals import resolve_signal, signal_name


@dataclass
class CheckReport:
    """Outcome of one kill-null check run."""

    pid: int | None = None
    kill_signal: str | int = "SIGKILL"
    probe_before: bool = False
    data_observed: bool = False
    exit_status: ExitStatus | None = None
    probe_before_error: ProcessError | None = None
    probe_after_error: ProcessError | None = None
    output: bytes = b""
    notes: list[str] = field(default_factory=list)

    @property
    def terminated_by_signal(self) -> bool:
        if self.exit_status is None or not self.exit_status.signaled:
            return False
        expected = signal_name(resolve_signal(self.kill_signal))
        return self.exit_status.signal == expected

    @property
    def passed(self) -> bool:
        return (
            self.probe_before
            and self.data_observed
            and self.terminated_by_signal
            and isinstance(self.probe_after_error, NoSuchProcessError)
        )

    def summary(self) -> dict[str, object]:
        return {
            "pid": self.pid,
            "probe_before": (
                self.probe_before_error.code
                if self.probe_before_error
                else self.probe_before
            ),
            "data_observed": self.data_observed,
            "exit": str(self.exit_status) if self.exit_status else None,
            "probe_after": (
                self.probe_after_error.code if self.probe_after_error else "ok"
            ),
            "passed": self.passed,
        }


class KillNullCheck:
    """
    Runs the kill-null scenario against a fresh passthrough child.

    Args:
        lg: Logger
        payload: Data written to the child's stdin
        kill_signal: Signal sent when the first output arrives
        timeout: Seconds to wait for the child to exit and close its pipes
        argv: Passthrough command; defaults to cat
    """

    def __init__(
        self,
        lg: Logger,
        payload: bytes | str = b"test",
        kill_signal: str | int = "SIGKILL",
        timeout: float = 5.0,
        argv: Sequence[str] | None = None,
    ) -> None:
        resolve_signal(kill_signal)
        self._lg = LoggerFactory.derive(lg, "check")
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        self._payload = payload
        self._kill_signal = kill_signal
        self._timeout = timeout
        self._argv = list(argv) if argv else passthrough_argv()

    def run(self) -> CheckReport:
        """
        Execute the scenario and return its report.

        Raises:
            SpawnError: the passthrough child could not be started
            ChildTimeoutError: the child did not exit within the timeout
        """
        report = CheckReport(kill_signal=self._kill_signal)
        first_output = threading.Lock()
        child = ChildProcess(self._argv, lg=self._lg)

        @child.on(ChildEvent.STDOUT)
        def on_data(data: bytes) -> None:
            report.output += data
            if not first_output.acquire(blocking=False):
                return
            report.data_observed = True
            self._lg.debug("output observed", extra={"bytes": len(data)})
            if not child.kill(self._kill_signal):
                report.notes.append("child was gone before it could be signaled")

        @child.on(ChildEvent.EXIT)
        def on_exit(status: ExitStatus) -> None:
            report.exit_status = status
            try:
                process.probe(child.pid)  # type: ignore[arg-type]
            except ProcessError as e:
                report.probe_after_error = e
                self._lg.debug("probe after exit failed", extra={"code": e.code})
            else:
                report.notes.append("probe succeeded after exit")

        with child:
            report.pid = child.pid
            try:
                report.probe_before = process.probe(child.pid)  # type: ignore[arg-type]
            except ProcessError as e:
                report.probe_before_error = e
                report.notes.append(f"probe before write failed: {e.code}")
                self._lg.warning(
                    "probe failed", extra={"pid": child.pid, "code": e.code}
                )
                child.end()
            else:
                self._lg.debug("probe ok", extra={"pid": child.pid})
                self._write(child, report)
            child.wait(self._timeout)

        if child.callback_errors:
            for event, e in child.callback_errors:
                report.notes.append(f"{event.value} callback failed: {e}")

        log = self._lg.info if report.passed else self._lg.warning
        log("kill-null check finished", extra=report.summary())
        return report

    def _write(self, child: ChildProcess, report: CheckReport) -> None:
        """Write the payload; the child may be killed before all of it is taken."""
        try:
            child.write(self._payload)
        except ChildStateError as e:
            if child.killed:
                report.notes.append("child killed before the payload was fully written")
            else:
                report.notes.append(f"write failed: {e}")
            self._lg.debug(
                "write interrupted", extra={"pid": child.pid, "killed": child.killed}
            )
            child.end()


def run_kill_null_check(lg: Logger, settings: CheckSettings) -> CheckReport:
    """Run the kill-null check configured by a CheckSettings section."""
    return KillNullCheck(
        lg,
        payload=settings.payload,
        kill_signal=settings.kill_signal,
        timeout=settings.timeout,
        argv=settings.argv,
    ).run()
