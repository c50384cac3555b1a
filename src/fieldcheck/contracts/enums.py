"""All tags, modes, and policies used across subsystem boundaries.

Values are the exact strings hosts put in field configuration, so
descriptors round-trip through YAML/JSON without translation.
"""

from enum import StrEnum


class ValidationType(StrEnum):
    """Built-in validation type tags.

    The registry is keyed by plain strings so plugins can add tags
    beyond these five.
    """

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    ENUM = "enum"


class StringFormat(StrEnum):
    """Named string formats understood by the format library."""

    NONE = "none"
    EMAIL = "email"
    URL = "url"
    UUID = "uuid"
    ALPHANUMERIC = "alphanumeric"
    ALPHA = "alpha"
    NUMERIC = "numeric"
    INTEGER = "integer"
    CREDIT_CARD = "creditCard"
    MOBILE_PHONE = "mobilePhone"
    POSTAL_CODE = "postalCode"
    IP_ADDRESS = "ipAddress"
    IPV4_ADDRESS = "ipv4Address"
    IPV6_ADDRESS = "ipv6Address"
    MAC_ADDRESS = "macAddress"
    JWT = "jwt"
    BASE64 = "base64"
    HEX_COLOR = "hexColor"
    ISBN = "isbn"
    STRONG_PASSWORD = "strongPassword"
    JSON = "json"
    MONGO_ID = "mongoId"
    HEXADECIMAL = "hexadecimal"
    # High-impact technical
    FQDN = "fqdn"
    PORT = "port"
    SEMVER = "semver"
    SLUG = "slug"
    CURRENCY = "currency"
    LATLONG = "latlong"
    BTC_ADDRESS = "btcAddress"
    ETHEREUM_ADDRESS = "ethereumAddress"
    # Business and financial
    BIC = "bic"
    IBAN = "iban"
    VAT = "vat"
    TAX_ID = "taxId"
    MIME_TYPE = "mimeType"
    # Specialized
    HASH = "hash"
    IP_RANGE = "ipRange"
    ISO8601 = "iso8601"
    MAILTO_URI = "mailtoUri"
    MD5 = "md5"
    RFC3339 = "rfc3339"
    TIME = "time"
    REGEX = "regex"


class NumberRule(StrEnum):
    """Constraint applied to number fields."""

    NONE = "none"
    MIN = "min"
    MAX = "max"
    RANGE = "range"
    ONE_OF = "oneOf"


class MessagePlacement(StrEnum):
    """Where a custom error message goes relative to the standard one."""

    APPEND = "append"
    PREPEND = "prepend"
    REPLACE = "replace"


class PhoneType(StrEnum):
    """Phone number type labels.

    Mirrors the number types classified by libphonenumber.
    """

    FIXED_LINE = "FIXED_LINE"
    MOBILE = "MOBILE"
    FIXED_LINE_OR_MOBILE = "FIXED_LINE_OR_MOBILE"
    TOLL_FREE = "TOLL_FREE"
    PREMIUM_RATE = "PREMIUM_RATE"
    SHARED_COST = "SHARED_COST"
    VOIP = "VOIP"
    PERSONAL_NUMBER = "PERSONAL_NUMBER"
    PAGER = "PAGER"
    UAN = "UAN"
    VOICEMAIL = "VOICEMAIL"
    UNKNOWN = "UNKNOWN"


class PhoneFormat(StrEnum):
    """Target representation for phone rewrites."""

    E164 = "E164"
    INTERNATIONAL = "INTERNATIONAL"
    NATIONAL = "NATIONAL"
    RFC3966 = "RFC3966"


class PhoneValidationMode(StrEnum):
    """How strictly a phone value is checked.

    Values:
        VALID: Full numbering-plan validation
        POSSIBLE: Plausible length/structure only
        VALID_FOR_REGION: Full validation scoped to the configured region
        POSSIBLE_FOR_TYPE: Possible AND one of the allowed types
    """

    VALID = "valid"
    POSSIBLE = "possible"
    VALID_FOR_REGION = "validForRegion"
    POSSIBLE_FOR_TYPE = "possibleForType"


class SeparatorMode(StrEnum):
    """Digit-group separator for INTERNATIONAL/NATIONAL rewrites."""

    SPACE = "space"
    HYPHEN = "hyphen"
    CUSTOM = "custom"


class RecordOnInvalid(StrEnum):
    """Record-level policy for unresolved validation errors."""

    CONTINUE = "continue"
    ERROR = "error"
    SKIP = "skip"
    SET_NULL = "set-null"
    SET_EMPTY = "set-empty"
    SKIP_FIELD = "skip-field"


class PhoneOnInvalid(StrEnum):
    """Field-level policy for an invalid phone field.

    USE_GLOBAL defers to the record-level RecordOnInvalid.
    """

    ERROR = "error"
    LEAVE_AS_IS = "leave-as-is"
    EMPTY = "empty"
    NULL = "null"
    SKIP_FIELD = "skip-field"
    USE_GLOBAL = "use-global"


class RewriteOnInvalid(StrEnum):
    """What the rewrite output property receives when formatting fails."""

    LEAVE_AS_IS = "leave-as-is"
    EMPTY = "empty"
    NULL = "null"
    ERROR = "error"
