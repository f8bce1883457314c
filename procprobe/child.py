"""
Child process wrapper with asynchronous output and exit notifications.

A ChildProcess owns one spawned OS process with piped stdio. Output and
exit are reported through callbacks registered per ChildEvent:

    with spawn_cat(lg=lg) as cat:
        cat.on(ChildEvent.STDOUT, lambda data: cat.kill("SIGKILL"))
        cat.on(ChildEvent.EXIT, lambda status: lg.info("gone"))
        cat.write(b"test")
        cat.wait(timeout=5.0)

Each output pipe is drained by its own reader thread and a waiter thread
reaps the process, so callbacks run on those threads, never on the caller's.
EXIT fires only after the process has been reaped: from that point on the
pid no longer answers a signal-probe.
"""

from __future__ import annotations

import shutil
import subprocess
import sys
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import IO, Any

from . import process
from .exceptions import (
    ChildStateError,
    ChildTimeoutError,
    NoSuchProcessError,
    SpawnError,
)
from .log import Logger, get_null_lg
from .signals import DEFAULT_SIGNAL, signal_name

_CHUNK_SIZE = 64 * 1024

_PASSTHROUGH_CODE = """\
import os
while True:
    data = os.read(0, 65536)
    if not data:
        break
    os.write(1, data)
"""


class ChildEvent(Enum):
    """Notifications emitted by a ChildProcess."""

    STDOUT = "data"
    STDERR = "stderr"
    EXIT = "exit"
    CLOSE = "close"


@dataclass(frozen=True)
class ExitStatus:
    """How a child ended: an exit code or the name of the fatal signal."""

    code: int | None
    signal: str | None = None

    @classmethod
    def from_returncode(cls, returncode: int) -> ExitStatus:
        """Decode a Popen returncode (negative means killed by that signal)."""
        if returncode < 0:
            signum = -returncode
            return cls(code=None, signal=signal_name(signum) or str(signum))
        return cls(code=returncode)

    @property
    def signaled(self) -> bool:
        return self.signal is not None

    @property
    def success(self) -> bool:
        return self.code == 0

    def __str__(self) -> str:
        if self.signaled:
            return f"signal {self.signal}"
        return f"code {self.code}"


class ChildProcess:
    """
    One spawned process with piped stdin/stdout/stderr.

    Args:
        argv: Command and arguments
        lg: Logger for lifecycle messages (silent when omitted)
        env: Environment for the child (inherits when None)
        cwd: Working directory for the child
        close_timeout: Seconds the context manager waits for the pipes to close
            after the child is gone
    """

    def __init__(
        self,
        argv: Sequence[str],
        lg: Logger | None = None,
        env: dict[str, str] | None = None,
        cwd: str | None = None,
        close_timeout: float = 5.0,
    ) -> None:
        if not argv:
            raise SpawnError("empty command")
        self._argv = list(argv)
        self._lg = lg if lg is not None else get_null_lg()
        self._env = env
        self._cwd = cwd
        self._close_timeout = close_timeout

        self._lock = threading.Lock()
        self._hooks: dict[ChildEvent, list[Callable[[Any], None]]] = {
            event: [] for event in ChildEvent
        }
        self._popen: subprocess.Popen | None = None
        self._threads: list[threading.Thread] = []
        self._pending = 0
        self._exit_status: ExitStatus | None = None
        self._exited = threading.Event()
        self._closed = threading.Event()
        self._stdin_closed = False
        self._killed = False
        self._callback_errors: list[tuple[ChildEvent, Exception]] = []

    # -- registration -----------------------------------------------------

    def on(
        self,
        event: ChildEvent | str,
        callback: Callable[[Any], None] | None = None,
    ) -> Any:
        """
        Register a callback for an event.

        Used directly (child.on(ChildEvent.EXIT, cb)) or as a decorator
        (@child.on("data")). Event names "data", "stderr", "exit" and
        "close" are accepted in place of the enum.
        """
        event = ChildEvent(event)

        def register(cb: Callable[[Any], None]) -> Callable[[Any], None]:
            if not callable(cb):
                raise TypeError(f"callback must be callable, got {type(cb)}")
            with self._lock:
                self._hooks[event].append(cb)
            return cb

        if callback is None:
            return register
        return register(callback)

    def _emit(self, event: ChildEvent, payload: Any) -> None:
        with self._lock:
            callbacks = list(self._hooks[event])
        for cb in callbacks:
            try:
                cb(payload)
            except Exception as e:
                # A failing callback must not stop the reader or waiter thread
                self._callback_errors.append((event, e))
                self._lg.error(
                    "callback error",
                    extra={"event": event.value, "pid": self.pid, "exception": e},
                )

    # -- lifecycle --------------------------------------------------------

    def start(self) -> ChildProcess:
        """Spawn the process and start the reader and waiter threads."""
        if self._popen is not None:
            raise ChildStateError("child already started", pid=self.pid)

        try:
            self._popen = subprocess.Popen(
                self._argv,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                bufsize=0,
                env=self._env,
                cwd=self._cwd,
            )
        except OSError as e:
            raise SpawnError(
                "failed to spawn child", argv=" ".join(self._argv), error=str(e)
            ) from e

        self._lg.debug("spawned", extra={"pid": self._popen.pid, "argv": self._argv})

        assert self._popen.stdout is not None and self._popen.stderr is not None
        self._pending = 3  # stdout EOF, stderr EOF, reaped
        self._threads = [
            threading.Thread(
                target=self._read_pipe,
                args=(self._popen.stdout, ChildEvent.STDOUT),
                name=f"child-{self._popen.pid}-stdout",
                daemon=True,
            ),
            threading.Thread(
                target=self._read_pipe,
                args=(self._popen.stderr, ChildEvent.STDERR),
                name=f"child-{self._popen.pid}-stderr",
                daemon=True,
            ),
            threading.Thread(
                target=self._wait_exit,
                name=f"child-{self._popen.pid}-wait",
                daemon=True,
            ),
        ]
        for t in self._threads:
            t.start()
        return self

    def _read_pipe(self, pipe: IO[bytes], event: ChildEvent) -> None:
        try:
            while True:
                data = pipe.read(_CHUNK_SIZE)
                if not data:
                    break
                self._lg.trace(
                    "output",
                    extra={"pid": self.pid, "event": event.value, "bytes": len(data)},
                )
                self._emit(event, data)
        except (OSError, ValueError) as e:
            # ValueError: pipe closed underneath us
            self._lg.debug("pipe read ended", extra={"pid": self.pid, "error": str(e)})
        finally:
            pipe.close()
            self._done()

    def _wait_exit(self) -> None:
        assert self._popen is not None
        returncode = self._popen.wait()
        status = ExitStatus.from_returncode(returncode)
        self._exit_status = status
        self._lg.debug(
            "exited",
            extra={"pid": self.pid, "code": status.code, "signal": status.signal},
        )
        self._exited.set()
        self._emit(ChildEvent.EXIT, status)
        self._done()

    def _done(self) -> None:
        with self._lock:
            self._pending -= 1
            last = self._pending == 0
        if last:
            assert self._exit_status is not None
            self._emit(ChildEvent.CLOSE, self._exit_status)
            self._closed.set()

    # -- accessors --------------------------------------------------------

    @property
    def argv(self) -> list[str]:
        return list(self._argv)

    @property
    def pid(self) -> int | None:
        return self._popen.pid if self._popen is not None else None

    @property
    def started(self) -> bool:
        return self._popen is not None

    @property
    def running(self) -> bool:
        return self._popen is not None and not self._exited.is_set()

    @property
    def exit_status(self) -> ExitStatus | None:
        return self._exit_status

    @property
    def returncode(self) -> int | None:
        if self._popen is None or not self._exited.is_set():
            return None
        return self._popen.returncode

    @property
    def killed(self) -> bool:
        return self._killed

    @property
    def callback_errors(self) -> list[tuple[ChildEvent, Exception]]:
        return list(self._callback_errors)

    # -- interaction ------------------------------------------------------

    def write(self, data: bytes | str) -> None:
        """
        Write to the child's stdin.

        Raises:
            ChildStateError: not started, stdin closed, child exited, or broken pipe
        """
        if self._popen is None:
            raise ChildStateError("child not started")
        if self._stdin_closed or self._exited.is_set():
            raise ChildStateError("stdin is not writable", pid=self.pid)

        if isinstance(data, str):
            data = data.encode("utf-8")

        stdin = self._popen.stdin
        assert stdin is not None
        view = memoryview(data)
        try:
            while view:
                written = stdin.write(view)
                view = view[written or 0 :]
            stdin.flush()
        except (BrokenPipeError, ValueError) as e:
            raise ChildStateError(
                "stdin is not writable", pid=self.pid, error=str(e)
            ) from e

    def end(self) -> None:
        """Close the child's stdin. Safe to call more than once."""
        if self._popen is None or self._stdin_closed:
            return
        self._stdin_closed = True
        assert self._popen.stdin is not None
        try:
            self._popen.stdin.close()
        except BrokenPipeError:
            pass

    def kill(self, sig: int | str = DEFAULT_SIGNAL) -> bool:
        """
        Send a signal to the child.

        Returns False instead of raising when the child is already gone.
        Unknown signals still raise UnknownSignalError.
        """
        if self._popen is None or self._exited.is_set():
            return False
        try:
            process.kill(self._popen.pid, sig)
        except NoSuchProcessError:
            return False
        self._killed = True
        self._lg.debug("signaled", extra={"pid": self.pid, "signal": sig})
        return True

    def wait(self, timeout: float | None = None) -> ExitStatus:
        """
        Wait until the child exited and its output pipes are drained.

        Raises:
            ChildStateError: child not started
            ChildTimeoutError: timeout expired first
        """
        if self._popen is None:
            raise ChildStateError("child not started")
        if not self._closed.wait(timeout):
            raise ChildTimeoutError(
                "timed out waiting for child", pid=self.pid, timeout=timeout
            )
        assert self._exit_status is not None
        return self._exit_status

    def __enter__(self) -> ChildProcess:
        if self._popen is None:
            self.start()
        return self

    def __exit__(self, *args: object) -> None:
        if self._popen is None:
            return
        if self.running:
            self.kill("SIGKILL")
        self.end()
        # A grandchild can hold stdout open long after the child is gone
        if not self._closed.wait(self._close_timeout):
            self._lg.warning(
                "pipes still open after exit",
                extra={"pid": self.pid, "timeout": self._close_timeout},
            )


def spawn(argv: Sequence[str], **kwargs: Any) -> ChildProcess:
    """Create and start a ChildProcess."""
    return ChildProcess(argv, **kwargs).start()


def passthrough_argv() -> list[str]:
    """Command for a child that copies stdin to stdout until EOF."""
    cat = shutil.which("cat")
    if cat:
        return [cat]
    return [sys.executable, "-u", "-c", _PASSTHROUGH_CODE]


def spawn_cat(**kwargs: Any) -> ChildProcess:
    """Start a passthrough child."""
    return spawn(passthrough_argv(), **kwargs)


def spawn_sleep(seconds: float, **kwargs: Any) -> ChildProcess:
    """Start a child that sleeps and then exits with code 0."""
    code = f"import time; time.sleep({float(seconds)!r})"
    return spawn([sys.executable, "-c", code], **kwargs)
