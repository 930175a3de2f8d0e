"""Pluggy hook specifications for pomoctl notifications.

Two hooks cover the notification sink contract: a label update after
every persisted state change, and an expiry signal when a session
completes. Audio, desktop toasts, and window titles live in plugins.
"""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("pomoctl")
hookimpl = pluggy.HookimplMarker("pomoctl")


class PomoctlHookSpec:
    """Hook specifications for the pomoctl plugin system."""

    @hookspec
    def pomoctl_update(self, label: str, kind: str) -> None:
        """Called after every state change with ``"MM:SS - Kind"``."""

    @hookspec
    def pomoctl_expired(self, kind: str, muted: bool, volume: int) -> None:
        """Called when a session of *kind* (``"work"``/``"break"``) completes.

        *muted* and *volume* are the operator's sound preference; plugins
        that play audio decide what to do with them.
        """
