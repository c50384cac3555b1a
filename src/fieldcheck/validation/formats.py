"""String format library.

Maps every StringFormat to a check parameterized by the descriptor's
options. Checks return either a plain bool or a FormatCheck; a plain
False is reported with the generic "Value must be ..." sentence, while a
FormatCheck carrying an error is reported verbatim.

Email addresses go through ``email_validator`` and phone numbers through
``phonenumbers`` (see fieldcheck.validation.phone). Identifiers with
checksums or national rules (IBAN, BIC, ISBN, card numbers, VAT and tax
numbers) are checked by ``python-stdnum``; UUIDs, MAC addresses, bitcoin
addresses and hex digests by ``validators``. Checks with option flags
neither library exposes (URL, FQDN, ISO 8601, postal codes) stay local.
"""

import base64
import binascii
import ipaddress
import json
import re
from collections.abc import Callable
from datetime import date
from types import ModuleType
from typing import Any
from urllib.parse import parse_qsl, unquote, urlsplit

import phonenumbers
import validators
from email_validator import EmailNotValidError, validate_email
from stdnum import bic, iban, isbn, luhn
from stdnum.au import tfn
from stdnum.ca import sin
from stdnum.de import idnr
from stdnum.es import nif as es_nif
from stdnum.fr import nif as fr_nif
from stdnum.gb import utr
from stdnum.ie import pps
from stdnum.it import codicefiscale
from stdnum.nl import bsn
from stdnum.us import ein
from stdnum.util import get_cc_module

from fieldcheck.contracts.enums import StringFormat
from fieldcheck.contracts.fields import StringField
from fieldcheck.contracts.results import FormatCheck
from fieldcheck.validation.phone import check_phone

FORMAT_DESCRIPTIONS: dict[StringFormat, str] = {
    StringFormat.EMAIL: "a valid email address",
    StringFormat.URL: "a valid URL",
    StringFormat.UUID: "a valid UUID",
    StringFormat.ALPHANUMERIC: "letters and numbers only",
    StringFormat.ALPHA: "letters only",
    StringFormat.NUMERIC: "a valid number",
    StringFormat.INTEGER: "a whole number",
    StringFormat.CREDIT_CARD: "a valid credit card number",
    StringFormat.MOBILE_PHONE: "a valid mobile phone number",
    StringFormat.POSTAL_CODE: "a valid postal code",
    StringFormat.IP_ADDRESS: "a valid IP address (IPv4 or IPv6)",
    StringFormat.IPV4_ADDRESS: "a valid IPv4 address",
    StringFormat.IPV6_ADDRESS: "a valid IPv6 address",
    StringFormat.MAC_ADDRESS: "a valid MAC address",
    StringFormat.JWT: "a valid JSON Web Token",
    StringFormat.BASE64: "a valid base64 encoded string",
    StringFormat.HEX_COLOR: "a valid hexadecimal color code",
    StringFormat.ISBN: "a valid ISBN",
    StringFormat.STRONG_PASSWORD: "a strong password",
    StringFormat.JSON: "valid JSON",
    StringFormat.MONGO_ID: "a valid MongoDB ObjectId",
    StringFormat.HEXADECIMAL: "a valid hexadecimal string",
    StringFormat.FQDN: "a valid fully qualified domain name",
    StringFormat.PORT: "a valid port number (0-65535)",
    StringFormat.SEMVER: "a valid semantic version (e.g., 1.2.3)",
    StringFormat.SLUG: "a valid URL slug (kebab-case)",
    StringFormat.CURRENCY: "a valid currency amount",
    StringFormat.LATLONG: "valid latitude/longitude coordinates",
    StringFormat.BTC_ADDRESS: "a valid Bitcoin address",
    StringFormat.ETHEREUM_ADDRESS: "a valid Ethereum address",
    StringFormat.BIC: "a valid BIC/SWIFT code",
    StringFormat.IBAN: "a valid International Bank Account Number",
    StringFormat.VAT: "a valid VAT number",
    StringFormat.TAX_ID: "a valid tax identification number",
    StringFormat.MIME_TYPE: "a valid MIME type (e.g., text/html)",
    StringFormat.HASH: "a valid hash",
    StringFormat.IP_RANGE: "a valid IP address range (CIDR notation)",
    StringFormat.ISO8601: "a valid ISO 8601 date",
    StringFormat.MAILTO_URI: "a valid mailto URI",
    StringFormat.MD5: "a valid MD5 hash",
    StringFormat.RFC3339: "a valid RFC 3339 date",
    StringFormat.TIME: "a valid time format",
    StringFormat.REGEX: "text matching the specified pattern",
}

# =============================================================================
# Patterns
# =============================================================================

_ALPHA = re.compile(r"[A-Za-z]+")
_ALPHANUMERIC = re.compile(r"[0-9A-Za-z]+")
_NUMERIC = re.compile(r"[+-]?([0-9]*[.])?[0-9]+")
_INTEGER = re.compile(r"[-+]?(?:0|[1-9][0-9]*)")
# Bare and Cisco dotted forms; colon and dash separated ones go to validators
_MAC_ADDRESS_COMPACT = (
    re.compile(r"[0-9a-fA-F]{12}"),
    re.compile(r"(?:[0-9a-fA-F]{4}\.){2}[0-9a-fA-F]{4}"),
)
_BASE64URL_SEGMENT = re.compile(r"[A-Za-z0-9_-]*")
_HEX_COLOR = re.compile(r"#?(?:[0-9a-f]{3}|[0-9a-f]{4}|[0-9a-f]{6}|[0-9a-f]{8})", re.IGNORECASE)
_MONGO_ID = re.compile(r"[0-9a-fA-F]{24}")
_HEXADECIMAL = re.compile(r"(?:0x|0h)?[0-9a-f]+", re.IGNORECASE)
_SEMVER = re.compile(
    r"(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-z-][0-9a-z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-z-][0-9a-z-]*))*))?"
    r"(?:\+([0-9a-z-]+(?:\.[0-9a-z-]+)*))?",
    re.IGNORECASE,
)
_SLUG = re.compile(r"[a-z0-9]+(?:[-_][a-z0-9]+)*")
_ETHEREUM = re.compile(r"0x[0-9a-f]{40}", re.IGNORECASE)
_MIME_TYPE = re.compile(
    r"(?:application|audio|font|image|message|model|multipart|text|video)"
    r"/[a-zA-Z0-9.!#$&^_+\-]{1,100}"
    r"(?:;\s*[a-zA-Z0-9\-]+=(?:\"[^\"]*\"|[a-zA-Z0-9.!#$&^_+\-]+))*",
)
_RFC3339 = re.compile(
    r"\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])[Tt ]"
    r"([01]\d|2[0-3]):[0-5]\d:([0-5]\d|60)(\.\d+)?"
    r"([Zz]|[+-]([01]\d|2[0-3]):[0-5]\d)",
)
_FQDN_TLD = re.compile(r"(?:[a-z\u00a1-\uffff]{2,}|xn[a-z0-9-]{2,})", re.IGNORECASE)
_FQDN_LABEL = re.compile(r"[a-z\u00a1-\uffff0-9-]+", re.IGNORECASE)
_FQDN_LABEL_UNDERSCORE = re.compile(r"[a-z\u00a1-\uffff0-9_-]+", re.IGNORECASE)

_ISO8601_TEMPLATE = (
    r"([+-]?\d{{4}}(?!\d{{2}}\b))((-?)((0[1-9]|1[0-2])(\3([12]\d|0[1-9]|3[01]))?"
    r"|W([0-4]\d|5[0-3])(-?[1-7])?|(00[1-9]|0[1-9]\d|[12]\d{{2}}|3([0-5]\d|6[1-6])))"
    r"({separator}((([01]\d|2[0-3])((:?)[0-5]\d)?|24:?00)([.,]\d+(?!:))?)?"
    r"(\17[0-5]\d([.,]\d+)?)?([zZ]|([+-])([01]\d|2[0-3]):?([0-5]\d)?)?)?)?"
)
_ISO8601 = re.compile(_ISO8601_TEMPLATE.format(separator=r"[T\s]"))
_ISO8601_STRICT_SEPARATOR = re.compile(_ISO8601_TEMPLATE.format(separator="T"))
_ISO_CALENDAR_DATE = re.compile(r"([+-]?\d{4})-?(\d{2})-?(\d{2})(?!\d)")
_ISO_ORDINAL_DATE = re.compile(r"([+-]?\d{4})-?(\d{3})(?!\d)")

_TIME_PATTERNS: dict[tuple[str, str], re.Pattern[str]] = {
    ("hour24", "default"): re.compile(r"([01]?[0-9]|2[0-3]):([0-5][0-9])"),
    ("hour24", "withSeconds"): re.compile(r"([01]?[0-9]|2[0-3]):([0-5][0-9]):([0-5][0-9])"),
    ("hour12", "default"): re.compile(r"(0?[1-9]|1[0-2]):([0-5][0-9]) (A|P)M", re.IGNORECASE),
    ("hour12", "withSeconds"): re.compile(r"(0?[1-9]|1[0-2]):([0-5][0-9]):([0-5][0-9]) (A|P)M", re.IGNORECASE),
}

_TIGER192 = re.compile(r"[a-f0-9]{48}", re.IGNORECASE)

# Digest checks by hex length; algorithms sharing a length share a check
HASH_CHECKS: dict[str, Callable[[str], Any]] = {
    "md5": validators.md5,
    "md4": validators.md5,
    "ripemd128": validators.md5,
    "tiger128": validators.md5,
    "sha1": validators.sha1,
    "ripemd160": validators.sha1,
    "tiger160": validators.sha1,
    "tiger192": _TIGER192.fullmatch,
    "sha256": validators.sha256,
    "sha384": validators.sha384,
    "sha512": validators.sha512,
    "crc32": validators.crc32,
    "crc32b": validators.crc32,
}

POSTAL_CODE_PATTERNS: dict[str, re.Pattern[str]] = {
    "AD": re.compile(r"AD\d{3}"),
    "AT": re.compile(r"\d{4}"),
    "AU": re.compile(r"\d{4}"),
    "BE": re.compile(r"\d{4}"),
    "BR": re.compile(r"\d{5}-?\d{3}"),
    "CA": re.compile(r"[ABCEGHJKLMNPRSTVXY]\d[ABCEGHJ-NPRSTV-Z][\s-]?\d[ABCEGHJ-NPRSTV-Z]\d", re.IGNORECASE),
    "CH": re.compile(r"\d{4}"),
    "CZ": re.compile(r"\d{3}\s?\d{2}"),
    "DE": re.compile(r"\d{5}"),
    "DK": re.compile(r"\d{4}"),
    "ES": re.compile(r"(?:5[0-2]|[0-4]\d)\d{3}"),
    "FI": re.compile(r"\d{5}"),
    "FR": re.compile(r"\d{2}\s?\d{3}"),
    "GB": re.compile(r"gir\s?0aa|[a-z]{1,2}\d[\da-z]?\s?\d[a-z]{2}", re.IGNORECASE),
    "IE": re.compile(r"[AC-FHKNPRTV-Y]\d[\dW]\s?[0-9AC-FHKNPRTV-Y]{4}", re.IGNORECASE),
    "IN": re.compile(r"(?!10|29|35|54|55|65|66|86|87|88|89)[1-9][0-9]{5}"),
    "IT": re.compile(r"\d{5}"),
    "JP": re.compile(r"\d{3}-?\d{4}"),
    "NL": re.compile(r"\d{4}\s?[a-z]{2}", re.IGNORECASE),
    "NO": re.compile(r"\d{4}"),
    "NZ": re.compile(r"\d{4}"),
    "PL": re.compile(r"\d{2}-\d{3}"),
    "PT": re.compile(r"\d{4}-\d{3}"),
    "SE": re.compile(r"[1-9]\d{2}\s?\d{2}"),
    "SG": re.compile(r"\d{6}"),
    "US": re.compile(r"\d{5}(?:-\d{4})?"),
    "ZA": re.compile(r"\d{4}"),
}

# Countries whose stdnum package carries a "vat" module
VAT_COUNTRIES = ("AT", "AU", "BE", "CH", "DE", "DK", "ES", "FI", "FR", "GB", "IE", "IT", "NL", "NO", "PL", "PT", "SE")

TAX_ID_MODULES: dict[str, ModuleType] = {
    "en-US": ein,
    "en-GB": utr,
    "en-AU": tfn,
    "en-CA": sin,
    "en-IE": pps,
    "de-DE": idnr,
    "es-ES": es_nif,
    "fr-FR": fr_nif,
    "it-IT": codicefiscale,
    "nl-NL": bsn,
}

_MAILTO_QUERY_KEYS = frozenset({"to", "cc", "bcc", "subject", "body"})


# =============================================================================
# Checks
# =============================================================================


def _matches(pattern: re.Pattern[str], value: str) -> bool:
    return pattern.fullmatch(value) is not None


def _pattern_for_locale(patterns: dict[str, re.Pattern[str]], locale: str | None, value: str) -> bool:
    """Match against one locale's pattern, or any pattern for "any".

    Raises:
        ValueError: If the locale has no known pattern.
    """
    if not locale or locale == "any":
        return any(_matches(pattern, value) for pattern in patterns.values())
    pattern = patterns.get(locale) or patterns.get(locale.upper())
    if pattern is None:
        raise ValueError(f"Invalid locale '{locale}'")
    return _matches(pattern, value)


def is_email(value: str, field: StringField) -> bool:
    try:
        result = validate_email(
            value,
            check_deliverability=False,
            allow_smtputf8=field.email_allow_utf8_local_part,
            allow_domain_literal=field.email_allow_ip_domain,
            allow_display_name=field.email_allow_display_name or field.email_require_display_name,
            globally_deliverable=field.email_require_tld,
        )
    except EmailNotValidError:
        return False
    if field.email_require_display_name and not result.display_name:
        return False
    return True


def is_fqdn(
    value: str,
    *,
    require_tld: bool = True,
    allow_underscores: bool = False,
    allow_trailing_dot: bool = False,
    allow_numeric_tld: bool = False,
    allow_wildcard: bool = False,
) -> bool:
    if allow_trailing_dot and value.endswith("."):
        value = value[:-1]
    if allow_wildcard and value.startswith("*."):
        value = value[2:]

    labels = value.split(".")
    tld = labels[-1]

    if require_tld:
        if len(labels) < 2:
            return False
        if not allow_numeric_tld and not _matches(_FQDN_TLD, tld):
            return False
    if not allow_numeric_tld and tld.isdigit():
        return False

    label_pattern = _FQDN_LABEL_UNDERSCORE if allow_underscores else _FQDN_LABEL
    for label in labels:
        if not label or len(label) > 63:
            return False
        if not _matches(label_pattern, label) or label.startswith("-") or label.endswith("-"):
            return False
    return True


def _is_ip(value: str, version: int | None = None) -> bool:
    try:
        address = ipaddress.ip_address(value)
    except ValueError:
        return False
    return version is None or address.version == version


def is_url(value: str, field: StringField) -> bool:
    if field.url_validate_length and len(value) >= 2083:
        return False
    if any(ch.isspace() for ch in value) or value.lower().startswith("mailto:"):
        return False
    if not field.url_allow_fragments and "#" in value:
        return False
    if not field.url_allow_query_components and "?" in value:
        return False

    if "://" not in value:
        if field.url_require_protocol:
            return False
        value = f"http://{value}"

    try:
        parts = urlsplit(value)
    except ValueError:
        # Unbalanced IPv6 brackets
        return False
    if parts.scheme.lower() not in ("http", "https", "ftp"):
        return False
    if field.url_disallow_auth and "@" in parts.netloc:
        return False

    host = parts.hostname
    if not host:
        return False
    try:
        _ = parts.port
    except ValueError:
        return False

    if _is_ip(host):
        return True
    return is_fqdn(
        host,
        require_tld=field.url_require_tld,
        allow_underscores=field.url_allow_underscores,
        allow_trailing_dot=field.url_allow_trailing_dot,
    )


def is_uuid(value: str, version: str) -> bool:
    if not validators.uuid(value):
        return False
    if version == "all":
        return True
    # Version nibble, then the RFC 4122 variant bits
    return value[14] == version and value[19].lower() in "89ab"


def is_mac_address(value: str) -> bool:
    if validators.mac_address(value):
        return True
    return any(_matches(pattern, value) for pattern in _MAC_ADDRESS_COMPACT)


def is_credit_card(value: str) -> bool:
    digits = re.sub(r"[- ]", "", value)
    if not digits.isdigit() or not 13 <= len(digits) <= 19:
        return False
    return luhn.is_valid(digits)


def is_base64(value: str) -> bool:
    if len(value) % 4 != 0:
        return False
    try:
        base64.b64decode(value, validate=True)
    except binascii.Error:
        return False
    return True


def is_jwt(value: str) -> bool:
    segments = value.split(".")
    if not 2 <= len(segments) <= 3:
        return False
    return all(_matches(_BASE64URL_SEGMENT, segment) for segment in segments)


def is_isbn(value: str, version: str) -> bool:
    kind = isbn.isbn_type(value)
    if kind is None:
        return False
    return version == "both" or kind == f"ISBN{version}"


def is_strong_password(value: str, field: StringField) -> bool:
    return (
        len(value) >= field.strong_password_min_length
        and sum(ch.islower() for ch in value) >= field.strong_password_min_lowercase
        and sum(ch.isupper() for ch in value) >= field.strong_password_min_uppercase
        and sum(ch.isdigit() for ch in value) >= field.strong_password_min_numbers
        and sum(not ch.isalnum() for ch in value) >= field.strong_password_min_symbols
    )


def is_json(value: str) -> bool:
    try:
        parsed = json.loads(value)
    except ValueError:
        return False
    return isinstance(parsed, (dict, list))


def is_port(value: str) -> bool:
    return _matches(_INTEGER, value) and 0 <= int(value) <= 65535


def is_currency(value: str, field: StringField) -> bool:
    symbol = re.escape(field.currency_symbol)
    space = r"\s?" if field.currency_allow_space_after_symbol else ""
    symbol_part = f"(?:{symbol}{space})" + ("" if field.currency_require_symbol else "?")
    sign = "-?" if field.currency_allow_negatives else ""
    whole = r"(?:0|[1-9]\d{0,2}(?:,\d{3})*|[1-9]\d*)"
    if field.currency_require_decimal:
        decimal = r"\.\d{2}"
    elif field.currency_allow_decimal:
        decimal = r"(?:\.\d{2})?"
    else:
        decimal = ""
    return re.fullmatch(f"{sign}{symbol_part}{whole}{decimal}", value) is not None


_LAT = re.compile(r"\(?[+-]?(?:90(?:\.0+)?|[1-8]?\d(?:\.\d+)?)")
_LONG = re.compile(r"\s?[+-]?(?:180(?:\.0+)?|1[0-7]\d(?:\.\d+)?|\d{1,2}(?:\.\d+)?)\)?")
_LAT_DMS = re.compile(r"\(?(?:[1-8]?\d\D+(?:[1-5]?\d|60)\D+(?:[1-5]?\d|60)(?:\.\d+)?|90\D+0\D+0)\D+[NSns]?")
_LONG_DMS = re.compile(
    r"\s*(?:[1-7]?\d{1,2}\D+(?:[1-5]?\d|60)\D+(?:[1-5]?\d|60)(?:\.\d+)?|180\D+0\D+0)\D+[EWew]?\)?"
)


def is_latlong(value: str, check_dms: bool) -> bool:
    if value.count(",") != 1:
        return False
    lat, long = value.split(",")
    if lat.startswith("(") != long.endswith(")"):
        return False
    if check_dms:
        return _matches(_LAT_DMS, lat) and _matches(_LONG_DMS, long)
    return _matches(_LAT, lat) and _matches(_LONG, long)


def is_btc_address(value: str) -> bool:
    return bool(validators.btc_address(value))


def is_bic(value: str) -> bool:
    if not bic.is_valid(value):
        return False
    # Country letters must name a known region
    return bic.compact(value)[4:6] in phonenumbers.SUPPORTED_REGIONS


def is_iban(value: str) -> bool:
    return iban.is_valid(value)


def is_vat(value: str, country: str | None) -> bool:
    """VAT number for one country, or for any supported country.

    Raises:
        ValueError: If the country has no VAT number rules.
    """
    if not country or country == "any":
        modules = (get_cc_module(code, "vat") for code in VAT_COUNTRIES)
        return any(module is not None and module.is_valid(value) for module in modules)
    module = get_cc_module(country, "vat")
    if module is None:
        raise ValueError(f"Invalid locale '{country}'")
    return module.is_valid(value)


def is_tax_id(value: str, locale: str | None) -> bool:
    """Tax identification number for one locale, or for any supported locale.

    Raises:
        ValueError: If the locale is not supported.
    """
    if not locale or locale == "any":
        return any(module.is_valid(value) for module in TAX_ID_MODULES.values())
    module = TAX_ID_MODULES.get(locale)
    if module is None:
        raise ValueError(f"Invalid locale '{locale}'")
    return module.is_valid(value)


def is_hash(value: str, algorithm: str) -> bool:
    return bool(HASH_CHECKS[algorithm](value))


def is_ip_range(value: str) -> bool:
    parts = value.split("/")
    if len(parts) != 2 or not re.fullmatch(r"0|[1-9]\d*", parts[1]):
        return False
    try:
        address = ipaddress.ip_address(parts[0])
    except ValueError:
        return False
    return int(parts[1]) <= address.max_prefixlen


def is_iso8601(value: str, *, strict: bool = False, strict_separator: bool = False) -> bool:
    """ISO 8601 date/time syntax; ``strict`` also rejects impossible dates."""
    pattern = _ISO8601_STRICT_SEPARATOR if strict_separator else _ISO8601
    if not _matches(pattern, value):
        return False
    if not strict:
        return True

    if calendar := _ISO_CALENDAR_DATE.match(value):
        try:
            date(int(calendar.group(1)), int(calendar.group(2)), int(calendar.group(3)))
        except ValueError:
            return False
    elif ordinal := _ISO_ORDINAL_DATE.match(value):
        year, day = int(ordinal.group(1)), int(ordinal.group(2))
        leap = year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)
        return day <= (366 if leap else 365)
    return True


def is_mailto_uri(value: str) -> bool:
    if not value.lower().startswith("mailto:"):
        return False

    addresses, _, query = value[len("mailto:") :].partition("?")
    recipients = [unquote(a).strip() for a in addresses.split(",") if a.strip()]

    for key, param in parse_qsl(query, keep_blank_values=True):
        if key.lower() not in _MAILTO_QUERY_KEYS:
            return False
        if key.lower() in ("to", "cc", "bcc"):
            recipients.extend(a.strip() for a in param.split(",") if a.strip())

    if not recipients:
        return False
    return all(_email_ok(recipient) for recipient in recipients)


def _email_ok(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _check(value: str, field: StringField) -> bool | FormatCheck:
    match field.string_format:
        case StringFormat.NONE:
            return True
        case StringFormat.EMAIL:
            return is_email(value, field)
        case StringFormat.URL:
            return is_url(value, field)
        case StringFormat.UUID:
            return is_uuid(value, field.uuid_version)
        case StringFormat.ALPHANUMERIC:
            return _matches(_ALPHANUMERIC, value)
        case StringFormat.ALPHA:
            return _matches(_ALPHA, value)
        case StringFormat.NUMERIC:
            return _matches(_NUMERIC, value)
        case StringFormat.INTEGER:
            return _matches(_INTEGER, value)
        case StringFormat.CREDIT_CARD:
            return is_credit_card(value)
        case StringFormat.MOBILE_PHONE:
            return check_phone(value, field)
        case StringFormat.POSTAL_CODE:
            return _pattern_for_locale(POSTAL_CODE_PATTERNS, field.selected_locale("postal_code_locale"), value)
        case StringFormat.IP_ADDRESS:
            return _is_ip(value)
        case StringFormat.IPV4_ADDRESS:
            return _is_ip(value, 4)
        case StringFormat.IPV6_ADDRESS:
            return _is_ip(value, 6)
        case StringFormat.MAC_ADDRESS:
            return is_mac_address(value)
        case StringFormat.JWT:
            return is_jwt(value)
        case StringFormat.BASE64:
            return is_base64(value)
        case StringFormat.HEX_COLOR:
            return _matches(_HEX_COLOR, value)
        case StringFormat.ISBN:
            return is_isbn(value, field.isbn_version)
        case StringFormat.STRONG_PASSWORD:
            return is_strong_password(value, field)
        case StringFormat.JSON:
            return is_json(value)
        case StringFormat.MONGO_ID:
            return _matches(_MONGO_ID, value)
        case StringFormat.HEXADECIMAL:
            return _matches(_HEXADECIMAL, value)
        case StringFormat.FQDN:
            return is_fqdn(
                value,
                require_tld=field.fqdn_require_tld,
                allow_underscores=field.fqdn_allow_underscores,
                allow_trailing_dot=field.fqdn_allow_trailing_dot,
                allow_numeric_tld=field.fqdn_allow_numeric_tld,
                allow_wildcard=field.fqdn_allow_wildcard,
            )
        case StringFormat.PORT:
            return is_port(value)
        case StringFormat.SEMVER:
            return _matches(_SEMVER, value)
        case StringFormat.SLUG:
            return _matches(_SLUG, value)
        case StringFormat.CURRENCY:
            return is_currency(value, field)
        case StringFormat.LATLONG:
            return is_latlong(value, field.latlong_check_dms)
        case StringFormat.BTC_ADDRESS:
            return is_btc_address(value)
        case StringFormat.ETHEREUM_ADDRESS:
            return _matches(_ETHEREUM, value)
        case StringFormat.BIC:
            return is_bic(value)
        case StringFormat.IBAN:
            return is_iban(value)
        case StringFormat.VAT:
            return is_vat(value, field.selected_locale("vat_country_code"))
        case StringFormat.TAX_ID:
            return is_tax_id(value, field.selected_locale("tax_id_locale"))
        case StringFormat.MIME_TYPE:
            return _matches(_MIME_TYPE, value)
        case StringFormat.HASH:
            return is_hash(value, field.hash_algorithm)
        case StringFormat.IP_RANGE:
            return is_ip_range(value)
        case StringFormat.ISO8601:
            return is_iso8601(value, strict=field.iso_strict, strict_separator=field.iso_strict_separator)
        case StringFormat.MAILTO_URI:
            return is_mailto_uri(value)
        case StringFormat.MD5:
            return is_hash(value, "md5")
        case StringFormat.RFC3339:
            return _matches(_RFC3339, value)
        case StringFormat.TIME:
            return _matches(_TIME_PATTERNS[(field.time_hour_format, field.time_mode)], value)
        case StringFormat.REGEX:
            if not field.regex_pattern:
                return FormatCheck.fail("Regex pattern is required for regex validation.")
            return re.search(field.regex_pattern, value) is not None
        case _:
            return FormatCheck.fail(f"Unknown validation format: {field.string_format}.")


def validate_string_format(value: str, field: StringField) -> FormatCheck:
    """Run the descriptor's string format check against a value.

    Failures without a specific diagnostic are described with the
    format's generic sentence. Checks that raise (unknown locale, bad
    regex) become a "Validation error" result instead of propagating.

    Returns:
        FormatCheck whose error is the uncomposed message; callers apply
        custom-message composition.
    """
    try:
        outcome = _check(value, field)
    except (ValueError, re.error) as e:
        return FormatCheck.fail(f"Validation error: {e}")

    if isinstance(outcome, FormatCheck):
        if outcome.is_valid or outcome.error:
            return outcome
    elif outcome:
        return FormatCheck.ok()

    description = FORMAT_DESCRIPTIONS.get(field.string_format, f"valid {field.string_format} format")
    return FormatCheck.fail(f"Value must be {description}.")
