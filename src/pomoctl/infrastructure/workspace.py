"""Workspace — the single dependency injected into every service.

Owns the persistence backend and the plugin manager for one CLI
invocation. Both are created lazily so ``--help`` and ``--version``
never touch the state database.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pomoctl.infrastructure.database.engine import init_database
from pomoctl.infrastructure.store import MemoryStore, SqliteStore

if TYPE_CHECKING:
    from pathlib import Path

    from pomoctl.config.settings import PomoSettings
    from pomoctl.infrastructure.store import StateStore
    from pomoctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class Workspace:
    """Settings plus lazily created store and plugin manager."""

    def __init__(self, settings: PomoSettings) -> None:
        self.settings = settings
        self._store: StateStore | None = None
        self._plugin_manager: PluginManager | None = None

    @property
    def root(self) -> Path:
        return self.settings.state_root

    @property
    def store(self) -> StateStore:
        """The configured persistence backend (created on first access)."""
        if self._store is None:
            if self.settings.store.backend == "memory":
                self._store = MemoryStore()
            else:
                engine = init_database(self.root, self.settings.store.dirname)
                self._store = SqliteStore(engine)
            logger.debug("Opened %s store", self.settings.store.backend)
        return self._store

    @property
    def plugin_manager(self) -> PluginManager:
        """Plugin manager with built-ins and entry-point plugins loaded."""
        if self._plugin_manager is None:
            from pomoctl.plugins.builtins.bell import TerminalBellPlugin
            from pomoctl.plugins.manager import PluginManager

            pm = PluginManager()
            if self.settings.sound.bell:
                pm.register_plugin(TerminalBellPlugin(), name="bell")
            pm.discover_and_load()
            self._plugin_manager = pm
        return self._plugin_manager

    def close(self) -> None:
        """Release the database engine, if one was opened."""
        if isinstance(self._store, SqliteStore):
            self._store.close()
        self._store = None
