"""Tests for structured logging setup."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from seedcheck.config.defaults import quick_battery
from seedcheck.config.schema import LoggingConfig
from seedcheck.utils.logging import setup_logging
from seedcheck.validation.report import MemorySink
from seedcheck.validation.tester import RandomTester


@pytest.fixture
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.mark.usefixtures("restore_logging")
class TestSetupLogging:
    def test_json_renderer(self) -> None:
        stream = io.StringIO()
        setup_logging(LoggingConfig(level="INFO", format="json"), stream=stream)
        structlog.get_logger("seedcheck.test").info("hello", answer=42)
        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "hello"
        assert record["answer"] == 42
        assert record["level"] == "info"

    def test_level_filters(self) -> None:
        stream = io.StringIO()
        setup_logging(LoggingConfig(level="WARNING"), stream=stream)
        structlog.get_logger().info("quiet")
        assert stream.getvalue() == ""

    def test_battery_logs_check_complete(self) -> None:
        stream = io.StringIO()
        setup_logging(LoggingConfig(level="INFO", format="json"), stream=stream)
        tester = RandomTester(sink=MemorySink())
        tester.run_all(["set_seed"])
        events = [json.loads(line) for line in stream.getvalue().strip().splitlines()]
        complete = [e for e in events if e["event"] == "check_complete"]
        assert len(complete) == 1
        assert complete[0]["check"] == "set_seed"
        assert complete[0]["errors"] == 0
        assert complete[0]["assertions"] == 1010

    def test_battery_quiet_when_unconfigured(self, capsys: pytest.CaptureFixture[str]) -> None:
        structlog.reset_defaults()
        root = logging.getLogger()
        root.handlers[:] = []
        root.setLevel(logging.WARNING)
        RandomTester(quick_battery(seed=1), MemorySink()).run_all(["set_seed"])
        captured = capsys.readouterr()
        assert "check_complete" not in captured.out
        assert "check_started" not in captured.out
