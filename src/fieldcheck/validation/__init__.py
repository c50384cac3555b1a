"""Field validation: handlers, the string format library, phone rules, messages."""

from fieldcheck.validation.formats import FORMAT_DESCRIPTIONS, validate_string_format
from fieldcheck.validation.handlers import BUILTIN_HANDLERS, ValidationHandler, field_error
from fieldcheck.validation.messages import append_custom_error_message, build_required_message
from fieldcheck.validation.phone import (
    FALLBACK_REGIONS,
    accepts_expected,
    check_phone,
    is_phone_type_allowed,
    normalize_phone_input,
    rewrite_phone,
)
from fieldcheck.validation.registry import HandlerRegistry

__all__ = [
    "BUILTIN_HANDLERS",
    "FALLBACK_REGIONS",
    "FORMAT_DESCRIPTIONS",
    "HandlerRegistry",
    "ValidationHandler",
    "accepts_expected",
    "append_custom_error_message",
    "build_required_message",
    "check_phone",
    "field_error",
    "is_phone_type_allowed",
    "normalize_phone_input",
    "rewrite_phone",
    "validate_string_format",
]
