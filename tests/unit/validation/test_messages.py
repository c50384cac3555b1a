# tests/unit/validation/test_messages.py
"""Tests for required messages and custom-message composition."""

import pytest

from fieldcheck.contracts.fields import (
    BooleanField,
    DateField,
    EnumField,
    GenericField,
    NumberField,
    StringField,
)
from fieldcheck.validation.messages import (
    append_custom_error_message,
    build_required_message,
    ensure_sentence,
    format_number,
    resolve_custom_message,
    split_list,
)


class TestHelpers:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Phone required", "Phone required."),
            ("Already done.", "Already done."),
            ("Really?", "Really?"),
            ("  padded  ", "padded."),
            ("", ""),
        ],
    )
    def test_ensure_sentence(self, text: str, expected: str) -> None:
        assert ensure_sentence(text) == expected

    def test_format_number_drops_integral_fraction(self) -> None:
        assert format_number(18.0) == "18"
        assert format_number(18.5) == "18.5"
        assert format_number(7) == "7"

    def test_split_list(self) -> None:
        assert split_list(" red, green ,, blue ") == ["red", "green", "blue"]
        assert split_list(None) == []
        assert split_list("") == []


class TestBuildRequiredMessage:
    def test_number_range(self) -> None:
        field = NumberField(name="age", number_validation_type="range", min_value=18, max_value=65)
        assert build_required_message(field) == "Required number (between 18 and 65)."

    def test_number_min(self) -> None:
        field = NumberField(name="age", number_validation_type="min", min_value=18.0)
        assert build_required_message(field) == "Required number (minimum: 18)."

    def test_number_max(self) -> None:
        field = NumberField(name="age", number_validation_type="max", max_value=99)
        assert build_required_message(field) == "Required number (maximum: 99)."

    def test_number_one_of(self) -> None:
        field = NumberField(name="size", number_validation_type="oneOf", one_of_values="1, 2,3")
        assert build_required_message(field) == "Required number (must be one of: 1, 2, 3)."

    def test_number_range_missing_bound_is_plain(self) -> None:
        field = NumberField(name="age", number_validation_type="range", min_value=18)
        assert build_required_message(field) == "Required number."

    def test_phone_with_region(self) -> None:
        field = StringField(name="mobile", string_format="mobilePhone", phone_region="AU")
        assert build_required_message(field) == "Required mobile phone number for region AU."

    def test_phone_without_region(self) -> None:
        field = StringField(name="mobile", string_format="mobilePhone")
        assert build_required_message(field) == "Required mobile phone number."

    def test_plain_string(self) -> None:
        assert build_required_message(StringField(name="s")) == "Required string value."

    def test_string_format(self) -> None:
        field = StringField(name="email", string_format="email")
        assert build_required_message(field) == "Required email address."

    def test_boolean(self) -> None:
        assert build_required_message(BooleanField(name="b")) == "Required boolean value."

    def test_date(self) -> None:
        assert build_required_message(DateField(name="d")) == "Required date (ISO 8601 format)."

    def test_enum_with_values(self) -> None:
        field = EnumField(name="color", enum_values="a, b")
        assert build_required_message(field) == "Required value (must be one of: a, b)."

    def test_enum_without_values(self) -> None:
        assert build_required_message(EnumField(name="color")) == "Required enum value."

    def test_generic(self) -> None:
        assert build_required_message(GenericField(name="g", validation_type="postcode")) == "Required value."


class TestResolveCustomMessage:
    def test_no_message(self) -> None:
        assert resolve_custom_message(StringField(name="s")) is None

    def test_disabled(self) -> None:
        field = StringField(name="s", custom_error_message="hi", use_custom_error_message=False)
        assert resolve_custom_message(field) is None

    def test_blank(self) -> None:
        assert resolve_custom_message(StringField(name="s", custom_error_message="   ")) is None

    def test_default_is_append(self) -> None:
        assert resolve_custom_message(StringField(name="s", custom_error_message="See docs")) == ("See docs", "append")

    def test_replace_prefix(self) -> None:
        field = StringField(name="s", custom_error_message="!Phone required")
        assert resolve_custom_message(field) == ("Phone required", "replace")

    def test_prepend_prefix(self) -> None:
        field = StringField(name="s", custom_error_message="^Heads up")
        assert resolve_custom_message(field) == ("Heads up", "prepend")

    def test_explicit_placement_wins_over_prefix(self) -> None:
        field = StringField(name="s", custom_error_message="!Phone required", custom_message_placement="append")
        assert resolve_custom_message(field) == ("Phone required", "append")


class TestAppendCustomErrorMessage:
    BASE = "Value must be a valid email address."

    def test_no_custom_message(self) -> None:
        assert append_custom_error_message(self.BASE, StringField(name="s")) == self.BASE

    def test_replace(self) -> None:
        field = StringField(name="s", custom_error_message="!Phone required")
        assert append_custom_error_message(self.BASE, field) == "Phone required"

    def test_prepend(self) -> None:
        field = StringField(name="s", custom_error_message="^Check the contact tab")
        assert append_custom_error_message(self.BASE, field) == f"Check the contact tab. {self.BASE}"

    def test_append(self) -> None:
        field = StringField(name="s", custom_error_message="Use your work address")
        assert append_custom_error_message(self.BASE, field) == f"{self.BASE} Use your work address."

    def test_prefix_only_leaves_base(self) -> None:
        field = StringField(name="s", custom_error_message="!")
        assert append_custom_error_message(self.BASE, field) == self.BASE
