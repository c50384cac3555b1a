"""Settings models and the settings-file loader.

Record options, logging options and field templates are validated by
frozen pydantic models; Dynaconf merges the YAML file with environment
overrides before validation.
"""

import os
import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from fieldcheck.contracts.enums import RecordOnInvalid

OUTPUT_ITEMS_MODE = "output-items"


class RecordOptions(BaseModel):
    """Record-level mode flags applied to every item of a batch.

    Example YAML:
        on_invalid: skip-field
        enable_phone_rewrite: true
        auto_realign_mismatched_types: true
    """

    model_config = {"frozen": True, "extra": "forbid"}

    mode: str = Field(
        default=OUTPUT_ITEMS_MODE,
        description="Processing mode; only 'output-items' is implemented",
    )
    on_invalid: RecordOnInvalid = Field(
        default=RecordOnInvalid.SKIP_FIELD,
        description="What to do with fields that fail validation",
    )
    output_only_is_valid: bool = Field(
        default=False,
        description="Emit only isValid and errors instead of the record",
    )
    omit_empty_fields: bool = Field(
        default=False,
        description="Drop null and empty-string values from the output",
    )
    enable_phone_rewrite: bool = Field(
        default=False,
        description="Format phone fields and attempt type realignment",
    )
    phone_rewrite_pass_through: bool = Field(
        default=True,
        description="Keep the input record's properties in staged rewrite output",
    )
    omit_phone_rewrite_details: bool = Field(
        default=False,
        description="Leave the phoneRewrites summary out of the output",
    )
    auto_realign_mismatched_types: bool = Field(
        default=True,
        description="Swap phone values between fields whose detected type mismatches",
    )
    allow_duplicate_assignment: bool = Field(
        default=True,
        description="Allow one detected number to fill more than one output field",
    )


class LoggingSettings(BaseModel):
    """Logging output configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_output: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class ValidatorSettings(RecordOptions):
    """Top-level fieldcheck configuration.

    ``fields`` holds raw field templates; they are bound to each record's
    values and parsed into descriptors by the host binding layer.
    """

    fields: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Ordered field templates (camelCase or snake_case keys)",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    @field_validator("fields")
    @classmethod
    def validate_field_names(cls, v: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Every template needs a non-empty name."""
        for index, template in enumerate(v):
            name = template.get("name")
            if not isinstance(name, str) or not name.strip():
                raise ValueError(f"fields[{index}] must have a non-empty 'name'")
        return v

    def record_options(self) -> RecordOptions:
        """Project the settings down to the record-level flags."""
        return RecordOptions(**self.model_dump(include=set(RecordOptions.model_fields)))


# ${NAME} or ${NAME:-fallback}
_ENV_REFERENCE = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _substitute_env(value: Any) -> Any:
    """Replace ``${NAME}`` references in every string of a settings tree.

    An unset variable with no fallback leaves the reference untouched.
    """
    if isinstance(value, str):
        return _ENV_REFERENCE.sub(_env_replacement, value)
    if isinstance(value, dict):
        return {key: _substitute_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_substitute_env(item) for item in value]
    return value


def _env_replacement(match: re.Match[str]) -> str:
    name, fallback = match.group(1), match.group(2)
    if name in os.environ:
        return os.environ[name]
    return fallback if fallback is not None else match.group(0)


def load_settings(config_path: Path) -> ValidatorSettings:
    """Read a settings file, layering FIELDCHECK_* environment overrides on top.

    Nested keys use a double underscore, e.g. ``FIELDCHECK_LOGGING__LEVEL``.
    Unset keys fall back to the model defaults.

    Raises:
        FileNotFoundError: If ``config_path`` does not exist.
        pydantic.ValidationError: If the merged settings do not validate.
    """
    from dynaconf import Dynaconf

    # Dynaconf would otherwise load nothing and report no error
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    loaded = Dynaconf(
        envvar_prefix="FIELDCHECK",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    bookkeeping = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw = {key.lower(): value for key, value in loaded.as_dict().items() if key not in bookkeeping}

    return ValidatorSettings(**_substitute_env(raw))
