"""Tests for Workspace wiring."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from pomoctl.infrastructure.store import MemoryStore, SqliteStore
from pomoctl.infrastructure.workspace import Workspace


class TestWorkspace:
    def test_sqlite_store_is_lazy(self, workspace: Workspace, state_root: Path) -> None:
        assert not (state_root / ".pomoctl").exists()
        assert isinstance(workspace.store, SqliteStore)
        assert (state_root / ".pomoctl" / "pomoctl.db").is_file()
        assert workspace.store is workspace.store

    def test_memory_backend(
        self, make_workspace: Callable[..., Workspace], state_root: Path
    ) -> None:
        ws = make_workspace(store={"backend": "memory"})
        assert isinstance(ws.store, MemoryStore)
        assert not (state_root / ".pomoctl").exists()

    def test_custom_dirname(
        self, make_workspace: Callable[..., Workspace], state_root: Path
    ) -> None:
        ws = make_workspace(store={"dirname": "timer"})
        ws.store.set_many({"cursor": 0})
        assert (state_root / "timer" / "pomoctl.db").is_file()

    def test_bell_registered_when_enabled(
        self, make_workspace: Callable[..., Workspace]
    ) -> None:
        ws = make_workspace(sound={"bell": True})
        assert "bell" in ws.plugin_manager.list_plugin_names()
        assert ws.plugin_manager.is_loaded

    def test_bell_skipped_when_disabled(self, workspace: Workspace) -> None:
        assert "bell" not in workspace.plugin_manager.list_plugin_names()

    def test_close_allows_reopen(self, workspace: Workspace) -> None:
        workspace.store.set_many({"volume": 10})
        workspace.close()
        assert workspace.store.get("volume") == 10
