"""Built-in validation handlers, one per validation type.

Every handler has the same contract: take a descriptor, return a list of
FieldError (empty when the field passes). Handlers never raise for
ordinary validation failures.

Shared rules:
- Optional field with an absent/empty value: no errors, no checks run.
- Required field with an absent/empty value: exactly one error carrying
  the required message.
- Every message passes through the custom-message composer.
"""

import math
from collections.abc import Callable
from typing import Any

from fieldcheck.contracts.enums import NumberRule, StringFormat, ValidationType
from fieldcheck.contracts.errors import FieldError
from fieldcheck.contracts.fields import (
    BooleanField,
    DateField,
    EnumField,
    FieldBase,
    NumberField,
    StringField,
    coerce_text,
)
from fieldcheck.validation.formats import is_iso8601, validate_string_format
from fieldcheck.validation.messages import (
    append_custom_error_message,
    build_required_message,
    format_number,
    split_list,
)

ValidationHandler = Callable[[Any], list[FieldError]]


def field_error(field: FieldBase, message: str) -> FieldError:
    """Build a FieldError with the field's custom message applied."""
    return FieldError(field=field.name, message=append_custom_error_message(message, field))


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def _missing(field: FieldBase) -> list[FieldError]:
    """Errors for an absent value: one required error, or none."""
    if field.required:
        return [field_error(field, build_required_message(field))]
    return []


def handle_string(field: StringField) -> list[FieldError]:
    if _is_empty(field.string_data):
        return _missing(field)

    value = coerce_text(field.string_data)
    if value is None:
        return [field_error(field, "Value must be a string.")]

    if field.string_format == StringFormat.NONE:
        if field.max_length is not None and len(value) > field.max_length:
            return [field_error(field, f"Value must be at most {field.max_length} characters.")]
        return []

    check = validate_string_format(value, field)
    if not check.is_valid:
        return [field_error(field, check.error or "Validation failed.")]
    return []


def _parse_number(raw: Any) -> float | None:
    """Parse a number, None for booleans, unparseable text, NaN and infinities."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        try:
            raw = float(raw.strip())
        except ValueError:
            return None
    if not isinstance(raw, (int, float)) or not math.isfinite(raw):
        return None
    return raw


def _range_message(min_value: float | None, max_value: float | None) -> str:
    if min_value is not None and max_value is not None:
        return f"Value must be between {format_number(min_value)} and {format_number(max_value)}."
    if min_value is not None:
        return f"Value must be greater than or equal to {format_number(min_value)}."
    return f"Value must be less than or equal to {format_number(max_value)}."


def _check_one_of(field: NumberField, number: float) -> str | None:
    entries = split_list(field.one_of_values)
    if not entries:
        return None

    allowed = [parsed for entry in entries if (parsed := _parse_number(entry)) is not None]
    if not allowed:
        return f"Invalid oneOf configuration: no valid numbers found. Invalid entries: {', '.join(entries)}."

    if number not in allowed:
        return f"Value must be one of: {', '.join(format_number(v) for v in allowed)}."
    return None


def handle_number(field: NumberField) -> list[FieldError]:
    raw = field.number_data
    if _is_empty(raw):
        return _missing(field)

    number = _parse_number(raw)
    if number is None:
        return [field_error(field, "Value must be a valid number.")]

    below_min = field.min_value is not None and number < field.min_value
    above_max = field.max_value is not None and number > field.max_value

    message: str | None = None
    match field.number_validation_type:
        case NumberRule.MIN if below_min:
            message = _range_message(field.min_value, None)
        case NumberRule.MAX if above_max:
            message = _range_message(None, field.max_value)
        case NumberRule.RANGE if below_min or above_max:
            message = _range_message(field.min_value, field.max_value)
        case NumberRule.ONE_OF:
            message = _check_one_of(field, number)

    return [field_error(field, message)] if message else []


def handle_boolean(field: BooleanField) -> list[FieldError]:
    # Presence only: any boolean value is accepted
    if field.boolean_data is None:
        return _missing(field)
    if not isinstance(field.boolean_data, bool):
        return [field_error(field, "Value must be a boolean.")]
    return []


def handle_date(field: DateField) -> list[FieldError]:
    if _is_empty(field.date_data):
        return _missing(field)
    value = coerce_text(field.date_data)
    if value is None or not is_iso8601(value):
        return [field_error(field, "Invalid date format (must be ISO 8601).")]
    return []


def handle_enum(field: EnumField) -> list[FieldError]:
    allowed = split_list(field.enum_values)
    if not allowed:
        return [field_error(field, "Enum values must be configured as a comma-separated list.")]

    if _is_empty(field.string_data):
        return _missing(field)
    if coerce_text(field.string_data) not in allowed:
        return [field_error(field, f"Value must be one of: {', '.join(allowed)}.")]
    return []


BUILTIN_HANDLERS: dict[str, ValidationHandler] = {
    ValidationType.STRING: handle_string,
    ValidationType.NUMBER: handle_number,
    ValidationType.BOOLEAN: handle_boolean,
    ValidationType.DATE: handle_date,
    ValidationType.ENUM: handle_enum,
}
