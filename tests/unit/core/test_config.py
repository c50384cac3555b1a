# tests/unit/core/test_config.py
"""Tests for settings models and YAML loading."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from fieldcheck.contracts.enums import RecordOnInvalid
from fieldcheck.core.config import (
    OUTPUT_ITEMS_MODE,
    LoggingSettings,
    RecordOptions,
    ValidatorSettings,
    load_settings,
)


class TestRecordOptions:
    def test_defaults(self) -> None:
        options = RecordOptions()

        assert options.mode == OUTPUT_ITEMS_MODE
        assert options.on_invalid == RecordOnInvalid.SKIP_FIELD
        assert options.output_only_is_valid is False
        assert options.omit_empty_fields is False
        assert options.enable_phone_rewrite is False
        assert options.omit_phone_rewrite_details is False
        assert options.phone_rewrite_pass_through is True
        assert options.auto_realign_mismatched_types is True
        assert options.allow_duplicate_assignment is True

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RecordOptions(on_invalid="continue", surprise=True)  # type: ignore[call-arg]

    def test_unknown_policy_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RecordOptions(on_invalid="ignore")  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        options = RecordOptions()
        with pytest.raises(ValidationError):
            options.on_invalid = RecordOnInvalid.SKIP  # type: ignore[misc]


class TestLoggingSettings:
    def test_level_is_upper_cased(self) -> None:
        assert LoggingSettings(level="debug").level == "DEBUG"  # type: ignore[arg-type]

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoggingSettings(level="chatty")  # type: ignore[arg-type]


class TestValidatorSettings:
    def test_field_without_name_rejected(self) -> None:
        with pytest.raises(ValidationError, match=r"fields\[1\] must have a non-empty 'name'"):
            ValidatorSettings(fields=[{"name": "ok"}, {"name": "  "}])

    def test_record_options_projection(self) -> None:
        settings = ValidatorSettings(
            on_invalid="continue",  # type: ignore[arg-type]
            enable_phone_rewrite=True,
            fields=[{"name": "phone"}],
        )

        options = settings.record_options()

        assert type(options) is RecordOptions
        assert options.on_invalid == RecordOnInvalid.CONTINUE
        assert options.enable_phone_rewrite is True


class TestLoadSettings:
    @pytest.fixture
    def settings_file(self, tmp_path: Path) -> Path:
        config = {
            "on_invalid": "continue",
            "enable_phone_rewrite": True,
            "logging": {"level": "debug"},
            "fields": [
                {
                    "name": "mobile",
                    "validationType": "string",
                    "stringFormat": "mobilePhone",
                    "phoneRegion": "${FC_TEST_REGION:-AU}",
                },
                {"name": "age", "validationType": "number", "minValue": 18},
            ],
        }
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump(config))
        return path

    def test_loads_yaml(self, settings_file: Path) -> None:
        settings = load_settings(settings_file)

        assert settings.on_invalid == RecordOnInvalid.CONTINUE
        assert settings.enable_phone_rewrite is True
        assert settings.logging.level == "DEBUG"
        assert [f["name"] for f in settings.fields] == ["mobile", "age"]
        assert settings.fields[1]["minValue"] == 18

    def test_env_var_default_used(self, settings_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("FC_TEST_REGION", raising=False)

        settings = load_settings(settings_file)

        assert settings.fields[0]["phoneRegion"] == "AU"

    def test_env_var_expanded(self, settings_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FC_TEST_REGION", "NZ")

        settings = load_settings(settings_file)

        assert settings.fields[0]["phoneRegion"] == "NZ"

    def test_unset_env_var_without_fallback_kept(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("FC_TEST_UNSET", raising=False)
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump({"fields": [{"name": "phone", "phoneRegion": "${FC_TEST_UNSET}"}]}))

        settings = load_settings(path)

        assert settings.fields[0]["phoneRegion"] == "${FC_TEST_UNSET}"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_settings(tmp_path / "absent.yaml")

    def test_invalid_settings_raise_validation_error(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({"on_invalid": "explode"}))

        with pytest.raises(ValidationError):
            load_settings(path)
