"""
Tests for ChildProcess and the spawn helpers.
"""

import sys
import threading
import time

import pytest

from procprobe.child import (
    ChildEvent,
    ChildProcess,
    ExitStatus,
    passthrough_argv,
    spawn,
    spawn_cat,
    spawn_sleep,
)
from procprobe.exceptions import (
    ChildStateError,
    ChildTimeoutError,
    NoSuchProcessError,
    SpawnError,
    UnknownSignalError,
)
from procprobe.process import probe

TIMEOUT = 10.0


# =============================================================================
# ExitStatus and ChildEvent
# =============================================================================


@pytest.mark.unit
class TestExitStatus:
    def test_exit_code(self):
        status = ExitStatus.from_returncode(3)
        assert status.code == 3
        assert status.signal is None
        assert not status.signaled
        assert not status.success
        assert str(status) == "code 3"

    def test_success(self):
        assert ExitStatus.from_returncode(0).success

    def test_killed_by_signal(self):
        status = ExitStatus.from_returncode(-15)
        assert status.code is None
        assert status.signal == "SIGTERM"
        assert status.signaled
        assert str(status) == "signal SIGTERM"


@pytest.mark.unit
class TestChildEvent:
    @pytest.mark.parametrize(
        "name,event",
        [
            ("data", ChildEvent.STDOUT),
            ("stderr", ChildEvent.STDERR),
            ("exit", ChildEvent.EXIT),
            ("close", ChildEvent.CLOSE),
        ],
    )
    def test_aliases(self, name, event):
        assert ChildEvent(name) is event

    def test_unknown_event_rejected(self):
        child = ChildProcess(["true"])
        with pytest.raises(ValueError):
            child.on("bogus", lambda _: None)

    def test_callback_must_be_callable(self):
        child = ChildProcess(["true"])
        with pytest.raises(TypeError):
            child.on(ChildEvent.EXIT, "not callable")  # type: ignore[arg-type]


@pytest.mark.unit
class TestChildState:
    def test_empty_argv(self):
        with pytest.raises(SpawnError):
            ChildProcess([])

    def test_not_started(self):
        child = ChildProcess(["true"])
        assert child.pid is None
        assert not child.started
        assert not child.running
        assert child.exit_status is None
        assert child.returncode is None
        assert child.kill() is False
        with pytest.raises(ChildStateError):
            child.write(b"x")
        with pytest.raises(ChildStateError):
            child.wait(0.1)

    def test_missing_executable(self):
        child = ChildProcess(["/nonexistent/procprobe-test-binary"])
        with pytest.raises(SpawnError) as exc_info:
            child.start()
        assert "procprobe-test-binary" in str(exc_info.value)

    def test_passthrough_argv_not_empty(self):
        assert passthrough_argv()


# =============================================================================
# Real processes
# =============================================================================


@pytest.mark.integration
class TestChildLifecycle:
    def test_exit_code_reported(self):
        child = spawn([sys.executable, "-c", "raise SystemExit(3)"])
        status = child.wait(TIMEOUT)
        assert status == ExitStatus(code=3)
        assert child.returncode == 3
        assert not child.running

    def test_start_twice(self):
        with spawn_sleep(30) as child:
            with pytest.raises(ChildStateError):
                child.start()

    def test_events_in_order(self):
        events = []
        child = ChildProcess([sys.executable, "-c", "print('hi')"])
        child.on(ChildEvent.STDOUT, lambda data: events.append(("data", data)))
        child.on(ChildEvent.EXIT, lambda status: events.append(("exit", status)))
        child.on(ChildEvent.CLOSE, lambda status: events.append(("close", status)))
        child.start()
        child.wait(TIMEOUT)

        names = [name for name, _ in events]
        assert names.index("exit") < names.index("close")
        assert names[-1] == "close"
        assert b"".join(d for n, d in events if n == "data").strip() == b"hi"

    def test_stderr_event(self):
        chunks = []
        child = ChildProcess(
            [sys.executable, "-c", "import sys; sys.stderr.write('oops')"]
        )
        child.on("stderr", chunks.append)
        child.start()
        child.wait(TIMEOUT)
        assert b"".join(chunks) == b"oops"

    def test_decorator_registration(self):
        seen = threading.Event()
        child = ChildProcess([sys.executable, "-c", "pass"])

        @child.on("exit")
        def on_exit(status):
            seen.set()

        child.start()
        child.wait(TIMEOUT)
        assert seen.is_set()
        assert callable(on_exit)

    def test_callback_error_does_not_stop_child(self, lg, log_stream):
        child = ChildProcess([sys.executable, "-c", "pass"], lg=lg)
        child.on(ChildEvent.EXIT, lambda status: 1 / 0)
        child.start()
        status = child.wait(TIMEOUT)
        assert status.success
        assert len(child.callback_errors) == 1
        event, error = child.callback_errors[0]
        assert event is ChildEvent.EXIT
        assert isinstance(error, ZeroDivisionError)
        assert "callback error" in log_stream.getvalue()

    def test_wait_timeout(self):
        with spawn_sleep(30) as child:
            with pytest.raises(ChildTimeoutError):
                child.wait(0.2)
            assert child.running


@pytest.mark.integration
class TestPassthrough:
    def test_echo(self):
        received = []
        with spawn_cat() as cat:
            cat.on(ChildEvent.STDOUT, received.append)
            cat.write("hello")
            cat.end()
            status = cat.wait(TIMEOUT)
        assert b"".join(received) == b"hello"
        assert status.success

    def test_output_does_not_terminate(self):
        got_data = threading.Event()
        with spawn_cat() as cat:
            cat.on(ChildEvent.STDOUT, lambda data: got_data.set())
            cat.write(b"test")
            assert got_data.wait(TIMEOUT)
            assert cat.running
            assert probe(cat.pid) is True
            assert cat.kill("SIGKILL") is True
            status = cat.wait(TIMEOUT)
        assert status.signal == "SIGKILL"
        assert cat.killed

    def test_probe_fails_from_exit_callback(self):
        outcome = {}
        cat = spawn_cat()

        @cat.on(ChildEvent.EXIT)
        def on_exit(status):
            try:
                probe(cat.pid)
            except NoSuchProcessError as e:
                outcome["error"] = e

        cat.kill("SIGKILL")
        cat.wait(TIMEOUT)
        assert isinstance(outcome.get("error"), NoSuchProcessError)

    def test_write_after_end(self):
        with spawn_cat() as cat:
            cat.end()
            cat.end()
            with pytest.raises(ChildStateError):
                cat.write(b"late")

    def test_write_after_exit(self):
        cat = spawn_cat()
        cat.kill("SIGKILL")
        cat.wait(TIMEOUT)
        with pytest.raises(ChildStateError):
            cat.write(b"late")

    def test_kill_after_exit_returns_false(self):
        cat = spawn_cat()
        cat.kill("SIGKILL")
        cat.wait(TIMEOUT)
        assert cat.kill("SIGKILL") is False

    def test_kill_unknown_signal_raises(self):
        with spawn_cat() as cat:
            with pytest.raises(UnknownSignalError):
                cat.kill("SIGNOPE")

    def test_context_manager_reaps(self):
        with spawn_cat() as cat:
            pid = cat.pid
        assert not cat.running
        assert cat.exit_status is not None
        with pytest.raises(NoSuchProcessError):
            probe(pid)

    def test_context_exit_bounded_when_pipes_held_open(self, lg, log_stream):
        # the grandchild inherits stdout and outlives the child
        code = (
            "import subprocess, sys; "
            "subprocess.Popen([sys.executable, '-c', 'import time; time.sleep(3)']); "
            "print('ready', flush=True)"
        )
        ready = threading.Event()
        start = time.monotonic()
        child = ChildProcess([sys.executable, "-c", code], lg=lg, close_timeout=0.2)
        child.on(ChildEvent.STDOUT, lambda data: ready.set())
        with child:
            assert ready.wait(TIMEOUT)
        assert time.monotonic() - start < 2.5
        assert "pipes still open after exit" in log_stream.getvalue()


@pytest.mark.integration
class TestLogging:
    def test_lifecycle_logged(self, lg, log_stream):
        child = spawn([sys.executable, "-c", "pass"], lg=lg)
        child.wait(TIMEOUT)
        text = log_stream.getvalue()
        assert "spawned" in text
        assert "exited" in text
        assert f"[pid:{child.pid}]" in text
