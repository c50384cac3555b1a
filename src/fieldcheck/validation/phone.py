"""Phone number classification, type reconciliation, and rewriting.

Parsing and numbering-plan rules come from ``phonenumbers`` (the Python
port of libphonenumber). This module decides how its answers are
interpreted: which region to parse under, when to try fallback
regions, which detected types satisfy an expected type set, and how the
formatted output is post-processed (extensions, digit-group separators).
"""

import re
from collections.abc import Iterable
from typing import Any

import phonenumbers
from phonenumbers import NumberParseException, PhoneNumber, PhoneNumberFormat, PhoneNumberType

from fieldcheck.contracts.enums import PhoneFormat, PhoneType, PhoneValidationMode, SeparatorMode
from fieldcheck.contracts.fields import UNKNOWN_REGION, StringField, coerce_text
from fieldcheck.contracts.results import FormatCheck, PhoneRewriteResult
from fieldcheck.core.logging import get_logger

logger = get_logger(__name__)

# Tried in order when the configured region is ZZ and parsing fails
FALLBACK_REGIONS: tuple[str, ...] = ("AU", "NZ", "US", "GB", "CA", "DE", "FR", "IN", "JP", "SG")

_TYPE_LABELS: dict[int, PhoneType] = {getattr(PhoneNumberType, label.value): label for label in PhoneType}

_LIBRARY_FORMATS: dict[PhoneFormat, int] = {
    PhoneFormat.E164: PhoneNumberFormat.E164,
    PhoneFormat.INTERNATIONAL: PhoneNumberFormat.INTERNATIONAL,
    PhoneFormat.NATIONAL: PhoneNumberFormat.NATIONAL,
    PhoneFormat.RFC3966: PhoneNumberFormat.RFC3966,
}

_EXTENSION_SUFFIX = re.compile(r"(?:ext\.?|extension|x|#)\s*[:.=\-]?\s*\d+$", re.IGNORECASE)
_SEPARATORS = re.compile(r"[().\-\s]")
_NON_DIGITS = re.compile(r"\D")
_RFC3966_EXTENSION = re.compile(r";ext=\d+$", re.IGNORECASE)
_TEXT_EXTENSION = re.compile(r"\s*(,?\s*ext\.?\s*\d+)$|\s*(x\s*\d+)$", re.IGNORECASE)
_DIGIT_GAP = re.compile(r"(\d)[\s\-]+(?=\d)")
_DIGIT_SPACE = re.compile(r"(\d)\s+(?=\d)")


def normalize_phone_input(raw: str) -> str:
    """Reduce phone text to an optional leading '+' followed by digits.

    RFC3966 parameters (``;ext=12``) and trailing extensions (``ext. 12``,
    ``x12``, ``#12``) are dropped first.

    Examples:
        >>> normalize_phone_input("+61 (4) 1234-5678 ext. 9")
        '+61412345678'
        >>> normalize_phone_input("tel:0412;ext=3")
        '0412'
    """
    if not raw:
        return ""

    trimmed = raw.strip().split(";", 1)[0]
    trimmed = _EXTENSION_SUFFIX.sub("", trimmed)
    collapsed = _SEPARATORS.sub("", trimmed)

    digits = _NON_DIGITS.sub("", collapsed)
    if collapsed.startswith("+"):
        return f"+{digits}"
    return digits


def phone_type_label(number: PhoneNumber) -> PhoneType:
    """Classify a parsed number into one of the PhoneType labels."""
    return _TYPE_LABELS.get(phonenumbers.number_type(number), PhoneType.UNKNOWN)


def parse_phone(text: str, region: str) -> tuple[PhoneNumber, str]:
    """Parse phone text, probing fallback regions when the region is unknown.

    Args:
        text: Phone text as entered
        region: Upper-cased parsing region (ZZ = unknown)

    Returns:
        The parsed number and the region it was parsed under.

    Raises:
        NumberParseException: If parsing fails under the configured region
            and, for ZZ, under every fallback region.
    """
    try:
        return phonenumbers.parse(text, region), region
    except NumberParseException:
        if region != UNKNOWN_REGION:
            raise
        for candidate in FALLBACK_REGIONS:
            try:
                number = phonenumbers.parse(text, candidate)
            except NumberParseException:
                continue
            if phonenumbers.is_valid_number(number):
                logger.debug("phone_fallback_region_hit", region=candidate)
                return number, candidate
        raise


def is_phone_type_allowed(allowed_types: Iterable[str], detected_type: str | None) -> bool:
    """Check a detected type against an allowed set with equivalence rules.

    FIXED_LINE_OR_MOBILE in the allowed set also accepts MOBILE and
    FIXED_LINE; MOBILE or FIXED_LINE in the set also accepts
    FIXED_LINE_OR_MOBILE. An empty set allows everything.
    """
    allowed = {str(t) for t in allowed_types}
    if not allowed:
        return True

    if PhoneType.FIXED_LINE_OR_MOBILE in allowed:
        allowed.update({PhoneType.MOBILE, PhoneType.FIXED_LINE})
    if PhoneType.MOBILE in allowed or PhoneType.FIXED_LINE in allowed:
        allowed.add(PhoneType.FIXED_LINE_OR_MOBILE)

    return detected_type in allowed


def accepts_expected(expected_types: Iterable[str], actual_type: str | None) -> bool:
    """Like is_phone_type_allowed, but an empty expectation accepts nothing."""
    expected = list(expected_types)
    if not expected or actual_type is None:
        return False
    return is_phone_type_allowed(expected, actual_type)


def _type_mismatch(detected: str, allowed: Iterable[str]) -> str:
    return f"Phone number type {detected} is not allowed (allowed types: {', '.join(allowed)})."


def check_phone(value: str, field: StringField) -> FormatCheck:
    """Validate phone text under the field's validation mode and allowed types."""
    region = field.selected_region
    allowed = [str(t) for t in field.phone_allowed_types]

    try:
        number, parse_region = parse_phone(normalize_phone_input(value) or value, region)
    except NumberParseException as e:
        logger.debug("phone_parse_failed", field=field.name, error=str(e))
        return FormatCheck.fail()

    detected = phone_type_label(number)

    match field.phone_validation_mode:
        case PhoneValidationMode.POSSIBLE:
            passes = phonenumbers.is_possible_number(number)
        case PhoneValidationMode.VALID_FOR_REGION:
            passes = phonenumbers.is_valid_number_for_region(number, parse_region)
        case PhoneValidationMode.POSSIBLE_FOR_TYPE if allowed:
            passes = any(
                phonenumbers.is_possible_number_for_type(number, getattr(PhoneNumberType, t)) for t in allowed
            )
            if not passes and phonenumbers.is_possible_number(number):
                return FormatCheck.fail(_type_mismatch(detected, allowed))
        case PhoneValidationMode.POSSIBLE_FOR_TYPE:
            passes = phonenumbers.is_possible_number(number)
        case _:
            passes = phonenumbers.is_valid_number(number)

    if not passes:
        return FormatCheck.fail()

    if allowed and not is_phone_type_allowed(allowed, detected):
        return FormatCheck.fail(_type_mismatch(detected, allowed))

    return FormatCheck.ok()


def _separator(field: StringField) -> str:
    match field.phone_rewrite_separator_mode:
        case SeparatorMode.HYPHEN:
            return "-"
        case SeparatorMode.CUSTOM if field.phone_rewrite_separator_custom:
            return field.phone_rewrite_separator_custom
        case _:
            return " "


def apply_separator(formatted: str, field: StringField) -> str:
    """Rejoin digit groups of an INTERNATIONAL/NATIONAL string with the chosen separator."""
    normalised = _DIGIT_GAP.sub(r"\1 ", formatted)
    separator = _separator(field)
    if separator == " ":
        return normalised
    return _DIGIT_SPACE.sub(lambda m: f"{m.group(1)}{separator}", normalised)


def strip_extension(formatted: str, target: PhoneFormat) -> str:
    if target == PhoneFormat.RFC3966:
        return _RFC3966_EXTENSION.sub("", formatted).strip()
    return _TEXT_EXTENSION.sub("", formatted).strip()


def rewrite_phone(value: Any, field: StringField) -> PhoneRewriteResult:
    """Classify a phone value and format it into the field's target format.

    The raw text is parsed (not the normalized digits) so extensions
    survive into the formatted output unless the field drops them.
    Parse failures are captured in the result, never raised.
    """
    target = field.phone_rewrite_format
    region = field.selected_region

    try:
        number, parse_region = parse_phone(coerce_text(value) or "", region)
    except NumberParseException as e:
        logger.debug("phone_rewrite_parse_failed", field=field.name, error=str(e))
        return PhoneRewriteResult(format=target, valid=False, possible=False, error=str(e))

    formatted = phonenumbers.format_number(number, _LIBRARY_FORMATS[target])
    if not field.phone_rewrite_keep_extension:
        formatted = strip_extension(formatted, target)
    if target in (PhoneFormat.INTERNATIONAL, PhoneFormat.NATIONAL):
        formatted = apply_separator(formatted, field)

    detected_region = phonenumbers.region_code_for_number(number) or parse_region or UNKNOWN_REGION

    return PhoneRewriteResult(
        format=target,
        valid=phonenumbers.is_valid_number(number),
        possible=phonenumbers.is_possible_number(number),
        formatted=formatted,
        region=detected_region.upper(),
        type=phone_type_label(number),
    )
