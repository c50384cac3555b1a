"""Human-readable error messages and custom-message composition.

Custom messages carry an optional one-character placement prefix:

    "!text"  replace the standard message
    "^text"  prepend to the standard message
    "text"   append to the standard message

An explicit ``customMessagePlacement`` on the descriptor wins over the
prefix; the prefix character is stripped either way.
"""

import re
from typing import Any

from fieldcheck.contracts.enums import MessagePlacement, NumberRule, StringFormat
from fieldcheck.contracts.fields import (
    UNKNOWN_REGION,
    BooleanField,
    DateField,
    EnumField,
    FieldBase,
    NumberField,
    StringField,
)

_TERMINAL_PUNCTUATION = re.compile(r"[.!?]\s*$")

_PLACEMENT_PREFIXES = {
    "!": MessagePlacement.REPLACE,
    "^": MessagePlacement.PREPEND,
}

REQUIRED_FORMAT_MESSAGES: dict[StringFormat, str] = {
    StringFormat.EMAIL: "Required email address",
    StringFormat.URL: "Required URL",
    StringFormat.UUID: "Required UUID",
    StringFormat.ALPHANUMERIC: "Required alphanumeric text",
    StringFormat.ALPHA: "Required alphabetic text",
    StringFormat.NUMERIC: "Required numeric string",
    StringFormat.INTEGER: "Required integer string",
    StringFormat.CREDIT_CARD: "Required credit card number",
    StringFormat.POSTAL_CODE: "Required postal code",
    StringFormat.IP_ADDRESS: "Required IP address",
    StringFormat.IPV4_ADDRESS: "Required IPv4 address",
    StringFormat.IPV6_ADDRESS: "Required IPv6 address",
    StringFormat.MAC_ADDRESS: "Required MAC address",
    StringFormat.JWT: "Required JSON Web Token",
    StringFormat.BASE64: "Required base64 encoded string",
    StringFormat.HEX_COLOR: "Required hexadecimal color code",
    StringFormat.ISBN: "Required ISBN",
    StringFormat.STRONG_PASSWORD: "Required strong password",
    StringFormat.JSON: "Required JSON",
    StringFormat.MONGO_ID: "Required MongoDB ObjectId",
    StringFormat.HEXADECIMAL: "Required hexadecimal string",
    StringFormat.FQDN: "Required fully qualified domain name",
    StringFormat.PORT: "Required port number",
    StringFormat.SEMVER: "Required semantic version",
    StringFormat.SLUG: "Required URL slug",
    StringFormat.CURRENCY: "Required currency amount",
    StringFormat.LATLONG: "Required latitude/longitude coordinates",
    StringFormat.BTC_ADDRESS: "Required Bitcoin address",
    StringFormat.ETHEREUM_ADDRESS: "Required Ethereum address",
    StringFormat.BIC: "Required BIC/SWIFT code",
    StringFormat.IBAN: "Required International Bank Account Number",
    StringFormat.VAT: "Required VAT number",
    StringFormat.TAX_ID: "Required tax identification number",
    StringFormat.MIME_TYPE: "Required MIME type",
    StringFormat.HASH: "Required hash",
    StringFormat.IP_RANGE: "Required IP address range",
    StringFormat.ISO8601: "Required ISO 8601 date",
    StringFormat.MAILTO_URI: "Required mailto URI",
    StringFormat.MD5: "Required MD5 hash",
    StringFormat.RFC3339: "Required RFC 3339 date",
    StringFormat.TIME: "Required time",
    StringFormat.REGEX: "Required text matching the specified pattern",
}


def ensure_sentence(text: str) -> str:
    """Trim text and make sure it ends with terminal punctuation."""
    stripped = text.strip()
    if not stripped or _TERMINAL_PUNCTUATION.search(stripped):
        return stripped
    return f"{stripped}."


def format_number(value: Any) -> str:
    """Render a configured bound the way users typed it (18, not 18.0)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def split_list(raw: str | None) -> list[str]:
    """Split a comma-separated option into trimmed, non-empty entries."""
    if not raw:
        return []
    return [entry.strip() for entry in raw.split(",") if entry.strip()]


def _required_string_message(field: StringField) -> str:
    if field.string_format == StringFormat.NONE:
        return "Required string value"
    if field.is_phone:
        region = field.selected_region
        if region != UNKNOWN_REGION:
            return f"Required mobile phone number for region {region}"
        return "Required mobile phone number"
    return REQUIRED_FORMAT_MESSAGES.get(field.string_format, f"Required {field.string_format} format")


def _required_number_message(field: NumberField) -> str:
    base = "Required number"
    match field.number_validation_type:
        case NumberRule.MIN if field.min_value is not None:
            base += f" (minimum: {format_number(field.min_value)})"
        case NumberRule.MAX if field.max_value is not None:
            base += f" (maximum: {format_number(field.max_value)})"
        case NumberRule.RANGE if field.min_value is not None and field.max_value is not None:
            base += f" (between {format_number(field.min_value)} and {format_number(field.max_value)})"
        case NumberRule.ONE_OF if split_list(field.one_of_values):
            base += f" (must be one of: {', '.join(split_list(field.one_of_values))})"
    return base


def build_required_message(field: FieldBase) -> str:
    """Describe what a required-but-missing field should have contained.

    Examples:
        >>> build_required_message(NumberField(name="age", number_validation_type="range", min_value=18, max_value=65))
        'Required number (between 18 and 65).'
    """
    if isinstance(field, StringField):
        message = _required_string_message(field)
    elif isinstance(field, NumberField):
        message = _required_number_message(field)
    elif isinstance(field, BooleanField):
        message = "Required boolean value"
    elif isinstance(field, DateField):
        message = "Required date (ISO 8601 format)"
    elif isinstance(field, EnumField):
        allowed = split_list(field.enum_values)
        message = f"Required value (must be one of: {', '.join(allowed)})" if allowed else "Required enum value"
    else:
        message = "Required value"
    return ensure_sentence(message)


def resolve_custom_message(field: FieldBase) -> tuple[str, MessagePlacement] | None:
    """Split a descriptor's custom message into text and placement.

    Returns None when custom messaging is disabled or the message is blank.
    """
    if not field.use_custom_error_message:
        return None

    custom = (field.custom_error_message or "").strip()
    if not custom:
        return None

    placement = _PLACEMENT_PREFIXES.get(custom[0])
    if placement is not None:
        custom = custom[1:].strip()
    else:
        placement = MessagePlacement.APPEND

    if field.custom_message_placement is not None:
        placement = field.custom_message_placement

    return custom, placement


def append_custom_error_message(base: str, field: FieldBase) -> str:
    """Compose a standard message with the field's custom message.

    Args:
        base: Standard message produced by a handler
        field: Descriptor carrying the custom message settings

    Returns:
        The composed message; ``base`` unchanged when there is nothing to add.
    """
    resolved = resolve_custom_message(field)
    if resolved is None:
        return base

    custom, placement = resolved
    if not custom:
        return base

    match placement:
        case MessagePlacement.REPLACE:
            return custom
        case MessagePlacement.PREPEND:
            return f"{ensure_sentence(custom)} {ensure_sentence(base)}"
        case _:
            return f"{ensure_sentence(base)} {ensure_sentence(custom)}"
