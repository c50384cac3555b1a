"""Plugin manager for validation-type handler plugins.

Uses pluggy for hook-based plugin registration.
"""

from typing import Any

import pluggy

from fieldcheck.core.logging import get_logger
from fieldcheck.plugins.hookspecs import PROJECT_NAME, FieldcheckHandlerSpec
from fieldcheck.validation.registry import HandlerRegistry

logger = get_logger(__name__)


class PluginManager:
    """Collects handler plugins and builds handler registries from them.

    Usage:
        manager = PluginManager()
        manager.register(PostcodePlugin())

        registry = manager.build_registry()
        registry.lookup("postcode")
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(FieldcheckHandlerSpec)

    def register(self, plugin: Any) -> None:
        """Register a plugin.

        Args:
            plugin: Plugin instance implementing hook methods

        Raises:
            ValueError: If the same plugin object is already registered
        """
        self._pm.register(plugin)

    def load_entrypoints(self) -> int:
        """Register plugins advertised under the ``fieldcheck`` entry-point group.

        Returns:
            Number of plugins loaded
        """
        loaded = self._pm.load_setuptools_entrypoints(PROJECT_NAME)
        if loaded:
            logger.info("plugins_loaded", count=loaded)
        return loaded

    def get_plugins(self) -> list[Any]:
        """Registered plugin objects."""
        return list(self._pm.get_plugins())

    def build_registry(self) -> HandlerRegistry:
        """Create a registry: built-ins first, then plugin handlers.

        Plugins registered later override plugins registered earlier,
        and every plugin overrides the built-ins.
        """
        registry = HandlerRegistry.with_builtins()
        # pluggy returns results last-registered first
        for handlers in reversed(self._pm.hook.fieldcheck_get_validation_handlers()):
            for validation_type, handler in handlers.items():
                registry.register(validation_type, handler)
        return registry
