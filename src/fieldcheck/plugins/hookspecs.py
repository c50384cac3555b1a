"""pluggy hook specifications for fieldcheck plugins.

Plugins implement these hooks to contribute validation-type handlers.
The plugin manager calls them when it builds a handler registry.

Usage (implementing a plugin):
    from fieldcheck.plugins.hookspecs import hookimpl

    class PostcodePlugin:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def fieldcheck_get_validation_handlers(self):
            return {"postcode": handle_postcode}

Note: @hookspec defines the hook interface (done here).
      @hookimpl marks plugin implementations of those hooks.
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from fieldcheck.validation.handlers import ValidationHandler

# Project name for pluggy and the entry-point group
PROJECT_NAME = "fieldcheck"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for plugins to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class FieldcheckHandlerSpec:
    """Hook specifications for validation-type handler plugins."""

    @hookspec
    def fieldcheck_get_validation_handlers(self) -> dict[str, "ValidationHandler"]:  # type: ignore[empty-body]
        """Return validation handlers keyed by validation-type tag.

        A tag that is already registered (including a built-in one) is
        replaced by the plugin's handler.

        Returns:
            Mapping of tag to handler callable
        """
