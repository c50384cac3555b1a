"""Plugin system: hook specifications and the plugin manager."""

from fieldcheck.plugins.hookspecs import PROJECT_NAME, hookimpl, hookspec
from fieldcheck.plugins.manager import PluginManager

__all__ = [
    "PROJECT_NAME",
    "PluginManager",
    "hookimpl",
    "hookspec",
]
