"""
Tests for logger creation, levels and the Logger class.
"""

import io
import logging

import pytest

from procprobe.log import (
    InvalidLogLevelError,
    LogConfig,
    Logger,
    LoggerFactory,
    create_lg,
    get_null_lg,
    resolve_level,
)


@pytest.mark.unit
class TestResolveLevel:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("info", logging.INFO),
            ("DEBUG", logging.DEBUG),
            ("trace", 5),
            ("10", 10),
            (30, 30),
            (False, False),
            ("false", False),
        ],
    )
    def test_valid(self, value, expected):
        assert resolve_level(value) == expected

    def test_invalid(self):
        with pytest.raises(InvalidLogLevelError):
            resolve_level("loud")


@pytest.mark.unit
class TestLoggerFactory:
    def test_writes_to_stream(self):
        stream = io.StringIO()
        lg = create_lg(level="info", colors=False, stream=stream)
        lg.info("spawned", extra={"pid": 7})
        assert "spawned" in stream.getvalue()
        assert "[pid:7]" in stream.getvalue()

    def test_level_filters(self):
        stream = io.StringIO()
        lg = create_lg(level="warning", colors=False, stream=stream)
        lg.info("hidden")
        lg.warning("shown")
        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()

    def test_trace_level(self):
        stream = io.StringIO()
        lg = create_lg(level="trace", colors=False, stream=stream)
        lg.trace("chunk", extra={"bytes": 4})
        assert "[T] chunk" in stream.getvalue()

    def test_disabled(self):
        stream = io.StringIO()
        lg = create_lg(level=False, colors=False, stream=stream)
        lg.error("nothing")
        assert lg.logging_disabled
        assert stream.getvalue() == ""

    def test_colors_off_for_non_tty(self):
        lg = create_lg(stream=io.StringIO())
        assert lg.config.colors is False

    def test_does_not_propagate(self):
        lg = create_lg(stream=io.StringIO())
        assert lg.propagate is False

    def test_default_extra(self):
        stream = io.StringIO()
        config = LogConfig.from_params("info", colors=False)
        lg = LoggerFactory.create("/", config, stream=stream, extra={"run": 1})
        lg.info("hello", extra={"pid": 2})
        assert "[run:1] [pid:2]" in stream.getvalue()


@pytest.mark.unit
class TestDerive:
    def test_child_name_and_handlers(self):
        stream = io.StringIO()
        root = create_lg(level="info", colors=False, stream=stream)
        child = LoggerFactory.derive(root, "check")
        assert child.name == "/check"
        assert child.handlers == []
        child.info("from child")
        assert "[/check]" in stream.getvalue()

    def test_grandchild(self):
        stream = io.StringIO()
        root = create_lg(level="info", colors=False, stream=stream, name="/app")
        grandchild = LoggerFactory.derive(LoggerFactory.derive(root, "a"), "b")
        assert grandchild.name == "/app/a/b"
        grandchild.info("deep")
        assert "[/app/a/b]" in stream.getvalue()

    def test_inherits_extra(self):
        stream = io.StringIO()
        config = LogConfig.from_params("info", colors=False)
        root = LoggerFactory.create("/", config, stream=stream, extra={"run": 1})
        LoggerFactory.derive(root, "x", extra={"step": 2}).info("m")
        assert "[run:1] [step:2]" in stream.getvalue()


@pytest.mark.unit
class TestLogger:
    def test_default_config(self):
        lg = Logger("plain")
        assert lg.get_level() == logging.INFO

    def test_null_logger_is_silent_singleton(self):
        assert get_null_lg() is get_null_lg()
        assert get_null_lg().logging_disabled

