"""Shared pytest fixtures for pomoctl tests."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from pomoctl.config.settings import PomoSettings
from pomoctl.infrastructure.database.engine import init_database
from pomoctl.infrastructure.store import MemoryStore
from pomoctl.infrastructure.workspace import Workspace


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's POMOCTL_* environment out of the tests."""
    for key in list(os.environ):
        if key.startswith("POMOCTL_"):
            monkeypatch.delenv(key)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Iterator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def state_root(tmp_path: Path) -> Path:
    """Temporary directory that holds ``.pomoctl/`` and ``pomoctl.toml``."""
    return tmp_path


@pytest.fixture
def workspace(state_root: Path) -> Iterator[Workspace]:
    """Workspace on a temp directory with the SQLite backend and no bell."""
    settings = PomoSettings.from_cli(state_root=state_root, sound={"bell": False})
    ws = Workspace(settings)
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture
def _isolated_state(state_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI writes isolated state.

    Use via ``@pytest.mark.usefixtures("_isolated_state")`` on command test
    classes.
    """
    monkeypatch.chdir(state_root)


@pytest.fixture
def make_workspace(state_root: Path) -> Iterator[Callable[..., Workspace]]:
    """Factory for Workspaces on the temp directory with settings overrides."""
    created: list[Workspace] = []

    def _make(**overrides: Any) -> Workspace:
        overrides.setdefault("sound", {"bell": False})
        ws = Workspace(PomoSettings.from_cli(state_root=state_root, **overrides))
        created.append(ws)
        return ws

    yield _make
    for ws in created:
        ws.close()
