"""Operation outcomes and results.

These types answer: "What did a check, a rewrite, or a validation pass
produce?"

IMPORTANT:
- FormatCheck.error, when set, is surfaced verbatim instead of the
  generic "Value must be ..." sentence
- PhoneRewriteResult.error is set only on parse failure; valid=False
  without error means the text parsed but is not a valid number
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fieldcheck.contracts.enums import PhoneFormat
from fieldcheck.contracts.errors import FieldError


@dataclass(frozen=True)
class FormatCheck:
    """Structured result of a string format check."""

    is_valid: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> FormatCheck:
        return cls(is_valid=True)

    @classmethod
    def fail(cls, error: str | None = None) -> FormatCheck:
        return cls(is_valid=False, error=error)


@dataclass(frozen=True)
class PhoneRewriteResult:
    """Result of classifying and formatting one phone value.

    Fields:
        formatted: Value in the target representation (None on parse failure)
        format: Target representation requested
        region: Detected region code, or the parsing region
        type: One of the PhoneType labels
        valid: Strict numbering-plan validity
        possible: Lenient length/structure check
        error: Parse failure message
    """

    format: PhoneFormat
    valid: bool
    possible: bool
    formatted: str | None = None
    region: str | None = None
    type: str | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return not self.valid or self.error is not None


@dataclass
class PhoneRewriteSummary:
    """Per-phone-field entry in the record's ``phoneRewrites`` list.

    Realignment fields stay None until the realignment pass sets them and
    are omitted from the serialized form while unset.
    """

    name: str
    original: Any
    output_property: str
    result: PhoneRewriteResult
    expected_types: list[str] | None = None
    expected_type_match: bool | None = None
    fallback_types: list[str] | None = None
    correction_made: bool | None = None
    correction_source: str | None = None
    fallback_used: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "original": self.original,
            "outputProperty": self.output_property,
            "formatted": self.result.formatted,
            "format": str(self.result.format),
            "region": self.result.region,
            "type": self.result.type,
            "valid": self.result.valid,
            "possible": self.result.possible,
            "error": self.result.error,
        }
        optional = {
            "expectedTypes": self.expected_types,
            "expectedTypeMatch": self.expected_type_match,
            "fallbackTypes": self.fallback_types,
            "correctionMade": self.correction_made,
            "correctionSource": self.correction_source,
            "fallbackUsed": self.fallback_used,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        return payload


@dataclass
class ValidationReport:
    """Result of running every field of a record through its handler."""

    errors: list[FieldError] = field(default_factory=list)
