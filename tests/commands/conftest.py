"""Fixtures for CLI command tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest
import structlog


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo the logging setup each CLI invocation performs.

    The handler installed by the CLI points at CliRunner's stderr, which is
    closed once the invocation returns.
    """
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    pomo = logging.getLogger("pomoctl")
    pomo_level = pomo.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    pomo.setLevel(pomo_level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
