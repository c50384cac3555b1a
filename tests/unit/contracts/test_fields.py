# tests/unit/contracts/test_fields.py
"""Tests for field descriptor parsing and derived properties."""

from typing import Any

import pytest
from pydantic import ValidationError

from fieldcheck.contracts import (
    BooleanField,
    DateField,
    EnumField,
    FieldConfigError,
    GenericField,
    NumberField,
    PhoneType,
    StringField,
    StringFormat,
    parse_field,
    parse_fields,
)
from fieldcheck.contracts.fields import coerce_text


class TestParseField:
    """Variant selection by validationType."""

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("string", StringField),
            ("number", NumberField),
            ("boolean", BooleanField),
            ("date", DateField),
            ("enum", EnumField),
        ],
    )
    def test_builtin_tags_select_variant(self, tag: str, expected: type) -> None:
        field = parse_field({"name": "f", "validationType": tag})
        assert isinstance(field, expected)

    def test_camel_case_payload(self) -> None:
        field = parse_field(
            {
                "name": "email",
                "validationType": "string",
                "stringData": "jane.doe@acme.io",
                "stringFormat": "email",
                "required": True,
            }
        )

        assert isinstance(field, StringField)
        assert field.string_data == "jane.doe@acme.io"
        assert field.string_format == StringFormat.EMAIL
        assert field.required is True

    def test_snake_case_payload(self) -> None:
        field = parse_field({"name": "age", "validation_type": "number", "number_data": 42})

        assert isinstance(field, NumberField)
        assert field.number_data == 42

    def test_unknown_tag_is_generic_and_keeps_extras(self) -> None:
        field = parse_field({"name": "code", "validationType": "postcode", "postcodeCountry": "AU"})

        assert isinstance(field, GenericField)
        assert field.validation_type == "postcode"
        assert field.model_extra == {"postcodeCountry": "AU"}

    def test_missing_tag_is_generic(self) -> None:
        field = parse_field({"name": "mystery"})

        assert isinstance(field, GenericField)
        assert field.validation_type is None

    def test_options_for_other_variants_are_dropped(self) -> None:
        field = parse_field({"name": "age", "validationType": "number", "stringFormat": "email"})

        assert not hasattr(field, "string_format")

    def test_numeric_text_kept_as_string(self) -> None:
        """Number handlers report unparseable text, so it must survive parsing."""
        field = parse_field({"name": "age", "validationType": "number", "numberData": "abc"})
        assert field.number_data == "abc"

    def test_numbers_kept_raw_in_string_slot(self) -> None:
        field = parse_field({"name": "zip", "validationType": "string", "stringData": 2000})
        assert field.string_data == 2000
        assert coerce_text(field.string_data) == "2000"

    @pytest.mark.parametrize(
        ("payload", "slot"),
        [
            ({"validationType": "string", "stringData": True}, "string_data"),
            ({"validationType": "boolean", "booleanData": "maybe"}, "boolean_data"),
            ({"validationType": "number", "numberData": [1, 2]}, "number_data"),
            ({"validationType": "date", "dateData": {"y": 2024}}, "date_data"),
            ({"validationType": "enum", "stringData": ["red"]}, "string_data"),
        ],
    )
    def test_wrong_typed_values_do_not_raise(self, payload: dict[str, Any], slot: str) -> None:
        field = parse_field({"name": "x", **payload})
        assert getattr(field, slot) == next(v for k, v in payload.items() if k.endswith("Data"))

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("abc", "abc"), (2000, "2000"), (1.5, "1.5"), (True, None), ([1], None), ({"a": 1}, None)],
    )
    def test_coerce_text(self, value: Any, expected: str | None) -> None:
        assert coerce_text(value) == expected

    def test_invalid_option_raises_field_config_error(self) -> None:
        with pytest.raises(FieldConfigError, match="Invalid configuration for field 'x'"):
            parse_field({"name": "x", "validationType": "string", "stringFormat": "bogus"})

    def test_non_mapping_raises_field_config_error(self) -> None:
        with pytest.raises(FieldConfigError, match="must be a mapping"):
            parse_field(["not", "a", "mapping"])  # type: ignore[arg-type]

    def test_descriptor_passes_through(self) -> None:
        field = BooleanField(name="agree", boolean_data=True)
        assert parse_field(field) is field

    def test_parse_fields_preserves_order(self) -> None:
        fields = parse_fields(
            [
                {"name": "b", "validationType": "boolean"},
                {"name": "a", "validationType": "string"},
            ]
        )
        assert [f.name for f in fields] == ["b", "a"]


class TestFieldBase:
    """Shared descriptor behaviour."""

    def test_value_reads_the_variant_slot(self) -> None:
        assert StringField(name="s", string_data="x").value == "x"
        assert NumberField(name="n", number_data=3).value == 3
        assert BooleanField(name="b", boolean_data=False).value is False
        assert DateField(name="d", date_data="2024-01-15").value == "2024-01-15"
        assert EnumField(name="e", string_data="red").value == "red"

    def test_generic_field_has_no_value(self) -> None:
        assert GenericField(name="g").value is None

    def test_descriptors_are_frozen(self) -> None:
        field = StringField(name="s", string_data="x")
        with pytest.raises(ValidationError):
            field.string_data = "y"  # type: ignore[misc]


class TestStringFieldPhoneOptions:
    """Derived phone properties."""

    def test_is_phone(self) -> None:
        assert StringField(name="p", string_format="mobilePhone").is_phone
        assert not StringField(name="p", string_format="email").is_phone

    def test_selected_region_defaults_to_unknown(self) -> None:
        assert StringField(name="p").selected_region == "ZZ"

    def test_selected_region_is_upper_cased(self) -> None:
        field = parse_field({"name": "p", "validationType": "string", "phoneRegion": "au"})
        assert field.selected_region == "AU"

    def test_selected_region_custom_choice(self) -> None:
        field = parse_field(
            {"name": "p", "validationType": "string", "phoneRegion": "__custom__", "phoneRegionCustom": "nz"}
        )
        assert field.selected_region == "NZ"

    def test_selected_region_custom_without_value(self) -> None:
        field = parse_field({"name": "p", "validationType": "string", "phoneRegion": "__custom__"})
        assert field.selected_region == "ZZ"

    def test_output_property_default(self) -> None:
        assert StringField(name="mobile").output_property == "mobileFormatted"

    def test_output_property_blank_falls_back(self) -> None:
        field = StringField(name="mobile", phone_rewrite_output_property="   ")
        assert field.output_property == "mobileFormatted"

    def test_output_property_configured(self) -> None:
        field = StringField(name="mobile", phone_rewrite_output_property=" contact.mobile ")
        assert field.output_property == "contact.mobile"

    def test_allowed_types_become_enum_tuple(self) -> None:
        field = parse_field(
            {"name": "p", "validationType": "string", "phoneAllowedTypes": ["MOBILE", "FIXED_LINE"]}
        )
        assert field.phone_allowed_types == (PhoneType.MOBILE, PhoneType.FIXED_LINE)

    def test_latlong_dms_alias(self) -> None:
        field = parse_field({"name": "loc", "validationType": "string", "latlongCheckDMS": True})
        assert field.latlong_check_dms is True


class TestSelectedLocale:
    def test_plain_locale(self) -> None:
        field = StringField(name="zip", postal_code_locale="DE")
        assert field.selected_locale("postal_code_locale") == "DE"

    def test_custom_locale(self) -> None:
        field = StringField(name="vat", vat_country_code="__custom__", vat_country_code_custom="NL")
        assert field.selected_locale("vat_country_code") == "NL"
