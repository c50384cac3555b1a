"""Field descriptors: the configuration unit for one validation task.

A descriptor is a tagged union keyed by ``validationType``. Each variant
carries only the value slot and options that apply to it, so options for
other types are dropped at construction instead of being looked up at
runtime.

Hosts usually deliver descriptors as camelCase dicts (``stringData``,
``phoneRegion``); snake_case names are accepted as well.

Example:
    field = parse_field({
        "name": "age",
        "validationType": "number",
        "required": True,
        "numberData": 70,
        "numberValidationType": "range",
        "minValue": 18,
        "maxValue": 65,
    })
"""

from collections.abc import Mapping
from typing import Any, ClassVar, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from fieldcheck.contracts.enums import (
    MessagePlacement,
    NumberRule,
    PhoneFormat,
    PhoneOnInvalid,
    PhoneType,
    PhoneValidationMode,
    RewriteOnInvalid,
    SeparatorMode,
    StringFormat,
)
from fieldcheck.contracts.errors import FieldConfigError

CUSTOM_CHOICE = "__custom__"
UNKNOWN_REGION = "ZZ"


def coerce_text(value: Any) -> str | None:
    """Text form of a record value: strings as-is, numbers stringified.

    Returns None for anything else (booleans, lists, mappings).
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


class FieldBase(BaseModel):
    """Options shared by every validation type."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",  # Options for other variants are not errors
        frozen=True,
    )

    # Name of the descriptor attribute holding the value under validation
    data_slot: ClassVar[str | None] = None

    name: str
    required: bool = False

    custom_error_message: str | None = None
    use_custom_error_message: bool = True
    custom_message_placement: MessagePlacement | None = None

    @property
    def value(self) -> Any:
        """The value under validation, None when the variant has no slot."""
        if self.data_slot is None:
            return None
        return getattr(self, self.data_slot)

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> Self:
        """Create a descriptor with a clear error on validation failure.

        Raises:
            FieldConfigError: If the payload does not fit this variant.
        """
        try:
            return cls.model_validate(dict(config))
        except ValidationError as e:
            raise FieldConfigError(f"Invalid configuration for field '{config.get('name')}': {e}") from e


class StringField(FieldBase):
    """String validation, optionally constrained to a named format."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    data_slot: ClassVar[str | None] = "string_data"

    validation_type: Literal["string"] = "string"
    # Record values arrive untyped; handlers report values of the wrong type
    string_data: Any = None
    string_format: StringFormat = StringFormat.NONE
    max_length: int | None = Field(default=None, ge=0)
    regex_pattern: str | None = None

    # Email
    email_allow_display_name: bool = False
    email_require_display_name: bool = False
    email_allow_utf8_local_part: bool = True
    email_require_tld: bool = True
    email_allow_ip_domain: bool = False

    # URL
    url_require_protocol: bool = False
    url_require_tld: bool = True
    url_allow_underscores: bool = False
    url_allow_trailing_dot: bool = False
    url_allow_fragments: bool = True
    url_allow_query_components: bool = True
    url_disallow_auth: bool = False
    url_validate_length: bool = True

    # FQDN
    fqdn_require_tld: bool = True
    fqdn_allow_underscores: bool = False
    fqdn_allow_trailing_dot: bool = False
    fqdn_allow_numeric_tld: bool = False
    fqdn_allow_wildcard: bool = False

    uuid_version: Literal["1", "2", "3", "4", "5", "all"] = "all"
    isbn_version: Literal["10", "13", "both"] = "both"

    # Locale-scoped formats; "__custom__" defers to the *_custom value
    postal_code_locale: str = "any"
    postal_code_locale_custom: str | None = None
    vat_country_code: str = "any"
    vat_country_code_custom: str | None = None
    tax_id_locale: str = "en-US"
    tax_id_locale_custom: str | None = None

    hash_algorithm: Literal[
        "md4",
        "md5",
        "sha1",
        "sha256",
        "sha384",
        "sha512",
        "ripemd128",
        "ripemd160",
        "tiger128",
        "tiger160",
        "tiger192",
        "crc32",
        "crc32b",
    ] = "sha256"

    iso_strict: bool = False
    iso_strict_separator: bool = False

    time_hour_format: Literal["hour24", "hour12"] = "hour24"
    time_mode: Literal["default", "withSeconds"] = "default"

    # Currency
    currency_symbol: str = "$"
    currency_require_symbol: bool = False
    currency_allow_negatives: bool = True
    currency_allow_space_after_symbol: bool = False
    currency_allow_decimal: bool = True
    currency_require_decimal: bool = False

    latlong_check_dms: bool = Field(default=False, alias="latlongCheckDMS")

    # Strong password minimums
    strong_password_min_length: int = 8
    strong_password_min_lowercase: int = 1
    strong_password_min_uppercase: int = 1
    strong_password_min_numbers: int = 1
    strong_password_min_symbols: int = 1

    # Phone validation
    phone_region: str = UNKNOWN_REGION
    phone_region_custom: str | None = None
    phone_validation_mode: PhoneValidationMode = PhoneValidationMode.VALID
    phone_allowed_types: tuple[PhoneType, ...] = ()

    # Phone rewrite
    phone_enable_rewrite: bool = False
    phone_rewrite_format: PhoneFormat = PhoneFormat.E164
    phone_rewrite_on_invalid: RewriteOnInvalid | None = None
    phone_rewrite_keep_extension: bool = True
    phone_rewrite_output_property: str | None = None
    phone_rewrite_separator_mode: SeparatorMode = SeparatorMode.SPACE
    phone_rewrite_separator_custom: str | None = None
    phone_rewrite_fallback_types: tuple[PhoneType, ...] = ()
    phone_on_invalid: PhoneOnInvalid = PhoneOnInvalid.USE_GLOBAL

    @property
    def is_phone(self) -> bool:
        return self.string_format == StringFormat.MOBILE_PHONE

    @property
    def selected_region(self) -> str:
        """Parsing region, upper-cased; ZZ when unknown."""
        region = self.phone_region_custom if self.phone_region == CUSTOM_CHOICE else self.phone_region
        return (region or UNKNOWN_REGION).upper()

    @property
    def output_property(self) -> str:
        """Where the rewritten phone value is written."""
        prop = (self.phone_rewrite_output_property or "").strip()
        return prop or f"{self.name}Formatted"

    def selected_locale(self, option: str) -> str | None:
        """Resolve a locale option honouring the "__custom__" choice.

        Args:
            option: Attribute prefix, e.g. "postal_code_locale"
        """
        selected: str | None = getattr(self, option)
        if selected == CUSTOM_CHOICE:
            return getattr(self, f"{option}_custom")
        return selected


class NumberField(FieldBase):
    """Numeric validation with an optional min/max/range/oneOf rule."""

    data_slot: ClassVar[str | None] = "number_data"

    validation_type: Literal["number"] = "number"
    number_data: Any = None
    number_validation_type: NumberRule = NumberRule.NONE
    min_value: int | float | None = None
    max_value: int | float | None = None
    one_of_values: str | None = None


class BooleanField(FieldBase):
    """Presence-only validation of a boolean."""

    data_slot: ClassVar[str | None] = "boolean_data"

    validation_type: Literal["boolean"] = "boolean"
    boolean_data: Any = None


class DateField(FieldBase):
    """ISO 8601 date-string validation."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    data_slot: ClassVar[str | None] = "date_data"

    validation_type: Literal["date"] = "date"
    date_data: Any = None


class EnumField(FieldBase):
    """Case-sensitive membership in a comma-separated list."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    data_slot: ClassVar[str | None] = "string_data"

    validation_type: Literal["enum"] = "enum"
    string_data: Any = None
    enum_values: str | None = None


class GenericField(FieldBase):
    """Descriptor for validation types contributed by plugins.

    Keeps every extra key so third-party handlers can read their own
    options from ``model_extra``.
    """

    model_config = ConfigDict(extra="allow")

    validation_type: str | None = None


FieldDescriptor = StringField | NumberField | BooleanField | DateField | EnumField | GenericField

_VARIANTS: dict[str, type[FieldBase]] = {
    "string": StringField,
    "number": NumberField,
    "boolean": BooleanField,
    "date": DateField,
    "enum": EnumField,
}


def parse_field(raw: Mapping[str, Any] | FieldBase) -> FieldDescriptor:
    """Build the descriptor variant selected by the payload's validation type.

    Unknown tags produce a GenericField; whether a handler exists for them
    is decided later by the registry.

    Raises:
        FieldConfigError: If the payload is not a mapping or fails validation.
    """
    if isinstance(raw, FieldBase):
        return raw  # type: ignore[return-value]
    if not isinstance(raw, Mapping):
        raise FieldConfigError(f"Field configuration must be a mapping, got {type(raw).__name__}.")

    tag = raw.get("validationType", raw.get("validation_type"))
    model = _VARIANTS.get(tag, GenericField) if isinstance(tag, str) else GenericField
    return model.from_dict(raw)  # type: ignore[return-value]


def parse_fields(raw_fields: list[Mapping[str, Any]] | list[FieldDescriptor]) -> list[FieldDescriptor]:
    """Parse an ordered field list, preserving declaration order."""
    return [parse_field(raw) for raw in raw_fields]
