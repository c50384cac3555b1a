# tests/unit/plugins/test_manager.py
"""Tests for the handler plugin manager."""

from typing import Any

import pytest

from fieldcheck.contracts.errors import FieldError
from fieldcheck.core.config import RecordOptions
from fieldcheck.engine.orchestrator import ValidatorEngine
from fieldcheck.plugins import PluginManager, hookimpl
from fieldcheck.validation.handlers import ValidationHandler


def handle_postcode(field: Any) -> list[FieldError]:
    value = (field.model_extra or {}).get("postcodeValue")
    if isinstance(value, str) and value.isdigit() and len(value) == 4:
        return []
    return [FieldError(field=field.name, message="Value must be a 4-digit postcode.")]


def reject_all(field: Any) -> list[FieldError]:
    return [FieldError(field=field.name, message="rejected")]


class PostcodePlugin:
    @hookimpl
    def fieldcheck_get_validation_handlers(self) -> dict[str, ValidationHandler]:
        return {"postcode": handle_postcode}


class StrictStringPlugin:
    @hookimpl
    def fieldcheck_get_validation_handlers(self) -> dict[str, ValidationHandler]:
        return {"string": reject_all, "postcode": reject_all}


class TestPluginManager:
    def test_no_plugins_gives_builtins(self) -> None:
        registry = PluginManager().build_registry()
        assert registry.list_types() == ["string", "number", "boolean", "date", "enum"]

    def test_plugin_adds_type(self) -> None:
        manager = PluginManager()
        manager.register(PostcodePlugin())

        registry = manager.build_registry()

        assert registry.lookup("postcode") is handle_postcode
        assert len(manager.get_plugins()) == 1

    def test_plugin_overrides_builtin(self) -> None:
        manager = PluginManager()
        manager.register(StrictStringPlugin())

        assert manager.build_registry().lookup("string") is reject_all

    def test_later_plugin_wins(self) -> None:
        manager = PluginManager()
        manager.register(PostcodePlugin())
        manager.register(StrictStringPlugin())

        assert manager.build_registry().lookup("postcode") is reject_all

    def test_duplicate_registration_rejected(self) -> None:
        manager = PluginManager()
        plugin = PostcodePlugin()
        manager.register(plugin)

        with pytest.raises(ValueError):
            manager.register(plugin)

    def test_load_entrypoints_without_plugins(self) -> None:
        assert PluginManager().load_entrypoints() == 0


class TestPluginHandlersInEngine:
    def test_generic_field_reaches_plugin_handler(self) -> None:
        manager = PluginManager()
        manager.register(PostcodePlugin())
        engine = ValidatorEngine(RecordOptions(on_invalid="continue"), registry=manager.build_registry())
        fields = [{"name": "code", "validationType": "postcode", "postcodeValue": "20000"}]

        output = engine.process_item({"code": "20000"}, fields)

        assert output is not None
        assert output["errors"] == [{"field": "code", "message": "Value must be a 4-digit postcode."}]
