# tests/unit/validation/test_registry.py
"""Tests for the validation handler registry."""

from typing import Any

from fieldcheck.contracts.errors import FieldError
from fieldcheck.validation.handlers import handle_string
from fieldcheck.validation.registry import HandlerRegistry


def _always_fails(field: Any) -> list[FieldError]:
    return [FieldError(field=field.name, message="nope")]


class TestHandlerRegistry:
    def test_empty_registry(self) -> None:
        registry = HandlerRegistry()
        assert len(registry) == 0
        assert registry.lookup("string") is None

    def test_with_builtins(self) -> None:
        registry = HandlerRegistry.with_builtins()

        assert registry.list_types() == ["string", "number", "boolean", "date", "enum"]
        assert registry.lookup("string") is handle_string
        assert "enum" in registry

    def test_register_new_tag(self) -> None:
        registry = HandlerRegistry.with_builtins()
        registry.register("postcode", _always_fails)

        assert registry.lookup("postcode") is _always_fails
        assert registry.list_types()[-1] == "postcode"

    def test_register_replaces_existing(self) -> None:
        registry = HandlerRegistry.with_builtins()
        registry.register("string", _always_fails)

        assert registry.lookup("string") is _always_fails
        assert len(registry) == 5

    def test_lookup_none_and_unknown(self) -> None:
        registry = HandlerRegistry.with_builtins()

        assert registry.lookup(None) is None
        assert registry.lookup("nope") is None
