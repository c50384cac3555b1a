"""Shared contracts for fieldcheck.

This package is a leaf: it imports only pydantic and the standard
library, so every other subsystem can depend on it.
"""

from fieldcheck.contracts.enums import (
    MessagePlacement,
    NumberRule,
    PhoneFormat,
    PhoneOnInvalid,
    PhoneType,
    PhoneValidationMode,
    RecordOnInvalid,
    RewriteOnInvalid,
    SeparatorMode,
    StringFormat,
    ValidationType,
)
from fieldcheck.contracts.errors import (
    FieldConfigError,
    FieldError,
    ItemValidationError,
    UnsupportedModeError,
)
from fieldcheck.contracts.fields import (
    BooleanField,
    DateField,
    EnumField,
    FieldBase,
    FieldDescriptor,
    GenericField,
    NumberField,
    StringField,
    parse_field,
    parse_fields,
)
from fieldcheck.contracts.results import (
    FormatCheck,
    PhoneRewriteResult,
    PhoneRewriteSummary,
    ValidationReport,
)

__all__ = [  # Grouped by category for readability
    # Enums
    "MessagePlacement",
    "NumberRule",
    "PhoneFormat",
    "PhoneOnInvalid",
    "PhoneType",
    "PhoneValidationMode",
    "RecordOnInvalid",
    "RewriteOnInvalid",
    "SeparatorMode",
    "StringFormat",
    "ValidationType",
    # Errors
    "FieldConfigError",
    "FieldError",
    "ItemValidationError",
    "UnsupportedModeError",
    # Field descriptors
    "BooleanField",
    "DateField",
    "EnumField",
    "FieldBase",
    "FieldDescriptor",
    "GenericField",
    "NumberField",
    "StringField",
    "parse_field",
    "parse_fields",
    # Results
    "FormatCheck",
    "PhoneRewriteResult",
    "PhoneRewriteSummary",
    "ValidationReport",
]
