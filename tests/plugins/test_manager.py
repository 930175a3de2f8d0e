"""Tests for plugin discovery, registration and hook dispatch."""

from __future__ import annotations

from typing import Any

import pytest

from pomoctl.domain.session import SessionKind
from pomoctl.plugins import hookimpl
from pomoctl.plugins.manager import PluginManager
from pomoctl.plugins.notifier import HookNotifier


class RecordingPlugin:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    @hookimpl
    def pomoctl_update(self, label: str, kind: str) -> None:
        self.calls.append(("update", {"label": label, "kind": kind}))

    @hookimpl
    def pomoctl_expired(self, kind: str, muted: bool, volume: int) -> None:
        self.calls.append(("expired", {"kind": kind, "muted": muted, "volume": volume}))


class TestPluginManager:
    def test_register_and_list(self) -> None:
        pm = PluginManager()
        pm.register_plugin(RecordingPlugin(), name="rec")
        assert pm.list_plugin_names() == ["rec"]
        assert len(pm.get_plugins()) == 1

    def test_default_name_is_class_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(RecordingPlugin())
        assert pm.list_plugin_names() == ["RecordingPlugin"]

    def test_unregister(self) -> None:
        pm = PluginManager()
        plugin = RecordingPlugin()
        pm.register_plugin(plugin)
        pm.unregister(plugin)
        assert pm.get_plugins() == []

    def test_discover_marks_loaded(self) -> None:
        pm = PluginManager()
        assert not pm.is_loaded
        pm.discover_and_load()
        assert pm.is_loaded

    def test_broken_entry_points_are_logged(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        pm = PluginManager()

        def _boom(group: str) -> int:
            raise ImportError("broken plugin")

        monkeypatch.setattr(pm._pm, "load_setuptools_entrypoints", _boom)
        assert pm.discover_and_load() == []
        assert "Failed to load entry point plugins" in caplog.text


class TestHookNotifier:
    def test_relays_update_and_expired(self) -> None:
        pm = PluginManager()
        plugin = RecordingPlugin()
        pm.register_plugin(plugin)
        notifier = HookNotifier(pm)

        notifier.expired(SessionKind.WORK, muted=False, volume=70)
        notifier.update("05:00 - Break", SessionKind.BREAK)

        assert plugin.calls == [
            ("expired", {"kind": "work", "muted": False, "volume": 70}),
            ("update", {"label": "05:00 - Break", "kind": "break"}),
        ]

    def test_no_plugins_is_fine(self) -> None:
        HookNotifier(PluginManager()).update("25:00 - Work", SessionKind.WORK)
