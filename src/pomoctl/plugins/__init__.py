"""Plugin system — pluggy hooks for timer notifications."""

from pomoctl.plugins.hookspecs import hookimpl, hookspec
from pomoctl.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl", "hookspec"]
