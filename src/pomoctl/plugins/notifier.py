"""HookNotifier — the scheduler's notification sink, backed by pluggy.

Relays label updates and expiry signals to every registered plugin. The
scheduler wraps each call, so a failing plugin becomes a warning on the
operation's result rather than an error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pomoctl.domain.session import SessionKind
    from pomoctl.plugins.manager import PluginManager


class HookNotifier:
    """NotificationSink that dispatches to ``pomoctl_*`` hooks."""

    def __init__(self, plugin_manager: PluginManager) -> None:
        self._pm = plugin_manager

    def update(self, label: str, kind: SessionKind) -> None:
        self._pm.hook.pomoctl_update(label=label, kind=str(kind))

    def expired(self, kind: SessionKind, *, muted: bool, volume: int) -> None:
        self._pm.hook.pomoctl_expired(kind=str(kind), muted=muted, volume=volume)
