"""
Pytest configuration and shared fixtures.

This module provides central pytest configuration, custom markers,
and shared fixtures for the procprobe test suite.
"""

import io
import os
import subprocess
import sys
from collections.abc import Generator

import pytest

from procprobe.log import Logger, create_lg

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (spawn real child processes)"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests (full system integration)"
    )
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line("markers", "slow: Tests that take >1 second to run")


def pytest_collection_modifyitems(config, items):
    """Skip process tests where POSIX signals are unavailable."""
    if os.name == "posix":
        return
    skip = pytest.mark.skip(reason="requires POSIX signals")
    for item in items:
        if "integration" in item.keywords or "e2e" in item.keywords:
            item.add_marker(skip)


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture
def log_stream() -> io.StringIO:
    """Stream receiving log output of the `lg` fixture."""
    return io.StringIO()


@pytest.fixture
def lg(log_stream: io.StringIO) -> Generator[Logger, None, None]:
    """
    Provide a debug-level, colorless logger writing to log_stream.

    Yields:
        Logger: Root logger for the test
    """
    logger = create_lg(level="trace", colors=False, stream=log_stream)
    yield logger
    logger.handlers.clear()


@pytest.fixture
def dead_pid() -> int:
    """
    Provide the pid of a process that has exited and been reaped.

    Returns:
        int: Process id no longer in use
    """
    proc = subprocess.Popen([sys.executable, "-c", "pass"])
    proc.wait()
    return proc.pid


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove PROCPROBE_* variables so config tests see only what they set."""
    for key in list(os.environ):
        if key.startswith("PROCPROBE_"):
            monkeypatch.delenv(key)
