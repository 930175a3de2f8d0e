"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from pomoctl.config.logging import bind_invocation, configure_logging, get_event_logger


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pomo = logging.getLogger("pomoctl")
    pomo_level = pomo.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pomo.setLevel(pomo_level)
    structlog.contextvars.clear_contextvars()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("pomoctl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("pomoctl").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        get_event_logger("pomoctl.test").warning("session_expired", kind="work")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "session_expired"
        assert parsed["kind"] == "work"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "pomoctl.test"
        assert "timestamp" in parsed

    def test_stdlib_records_are_structured(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("pomoctl.services.scheduler").debug("Scheduler idle -> running")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Scheduler idle -> running"
        assert parsed["level"] == "debug"

    def test_bound_invocation_fields(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        bind_invocation(command="tick", policy="interactive", skipped=None)
        logging.getLogger("pomoctl.x").warning("probe")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["command"] == "tick"
        assert parsed["policy"] == "interactive"
        assert "skipped" not in parsed

    def test_reconfigure_clears_bound_fields(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        bind_invocation(command="run")
        configure_logging(log_json=True)
        logging.getLogger("pomoctl.x").warning("probe")
        assert "command" not in json.loads(capfd.readouterr().err.strip())

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("sqlalchemy.engine").debug("sql noise")
        logging.getLogger("pluggy").debug("hook noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1
