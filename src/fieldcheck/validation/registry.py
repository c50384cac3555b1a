"""Validation-type handler registry.

The registry is an explicit object owned by whoever builds the engine;
there is no module-level handler table. Registering a tag that already
exists replaces the previous handler.

Usage:
    registry = HandlerRegistry.with_builtins()
    registry.register("postcode", handle_postcode)
    handler = registry.lookup("postcode")
"""

from fieldcheck.core.logging import get_logger
from fieldcheck.validation.handlers import BUILTIN_HANDLERS, ValidationHandler

logger = get_logger(__name__)


class HandlerRegistry:
    """Maps validation-type tags to handler callables."""

    def __init__(self) -> None:
        self._handlers: dict[str, ValidationHandler] = {}

    @classmethod
    def with_builtins(cls) -> "HandlerRegistry":
        """Create a registry holding the five built-in handlers."""
        registry = cls()
        for validation_type, handler in BUILTIN_HANDLERS.items():
            registry.register(validation_type, handler)
        return registry

    def register(self, validation_type: str, handler: ValidationHandler) -> None:
        """Store a handler for a tag, overwriting any existing one."""
        if validation_type in self._handlers:
            logger.debug("validation_handler_replaced", validation_type=validation_type)
        self._handlers[str(validation_type)] = handler

    def lookup(self, validation_type: str | None) -> ValidationHandler | None:
        """Return the handler for a tag, or None when unregistered."""
        if validation_type is None:
            return None
        return self._handlers.get(validation_type)

    def list_types(self) -> list[str]:
        """Registered tags in registration order."""
        return list(self._handlers)

    def __contains__(self, validation_type: object) -> bool:
        return validation_type in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
