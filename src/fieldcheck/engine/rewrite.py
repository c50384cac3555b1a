"""Phone rewrite pass for one record.

Two flavours, selected by the record's fields:

- Staged: fields that set ``phoneEnableRewrite`` are rewritten
  independently, staged, optionally realigned against each other, and
  then written to their output properties.
- Legacy: when no field opts in, every non-empty ``mobilePhone`` field is
  rewritten straight to its output property with no realignment.

Nothing here touches the record; the pass returns the writes it wants
made and the orchestrator applies them.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from fieldcheck.contracts.enums import PhoneOnInvalid, RewriteOnInvalid
from fieldcheck.contracts.errors import FieldError, ItemValidationError
from fieldcheck.contracts.fields import FieldDescriptor, StringField
from fieldcheck.contracts.results import PhoneRewriteResult, PhoneRewriteSummary
from fieldcheck.core.logging import get_logger
from fieldcheck.core.sentinels import MISSING
from fieldcheck.engine.realignment import RealignmentCandidate, realign
from fieldcheck.validation.messages import build_required_message
from fieldcheck.validation.phone import accepts_expected, rewrite_phone

logger = get_logger(__name__)


@dataclass
class StagedRewrite:
    """A phone field's rewrite result awaiting realignment and writing."""

    field: StringField
    original: Any
    summary: PhoneRewriteSummary
    empty_optional: bool = False

    @property
    def result(self) -> PhoneRewriteResult:
        return self.summary.result

    @property
    def output_property(self) -> str:
        return self.summary.output_property

    def candidate(self) -> RealignmentCandidate:
        value = self.result.formatted if self.result.formatted is not None else self.original
        return RealignmentCandidate(
            output_property=self.output_property,
            detected_type=self.result.type,
            value=value,
            expected_types=tuple(self.summary.expected_types or ()),
            fallback_types=tuple(self.summary.fallback_types or ()),
            expected_type_match=self.summary.expected_type_match,
        )


@dataclass
class RewriteOutcome:
    """Everything the rewrite pass wants reflected in the output record."""

    writes: dict[str, Any] = field(default_factory=dict)
    summaries: list[PhoneRewriteSummary] = field(default_factory=list)
    errors: list[FieldError] = field(default_factory=list)
    all_valid: bool = True
    # True when the per-field opt-in pass ran rather than the legacy one
    staged: bool = False


def _phone_fields(fields: Sequence[FieldDescriptor]) -> list[StringField]:
    return [f for f in fields if isinstance(f, StringField) and f.is_phone]


def _rewrite_failed(field: StringField, error: str, item_index: int) -> ItemValidationError:
    return ItemValidationError(
        f"Phone rewrite failed for '{field.name}': {error}",
        item_index=item_index,
        field=field.name,
    )


def _invalid_value(
    field: StringField,
    original: Any,
    result: PhoneRewriteResult,
    *,
    mismatched: bool,
    item_index: int,
) -> Any:
    """Value for the output property of a failed rewrite.

    Returns the formatted value when no policy applies, or MISSING when
    the output property must not be written at all.
    """
    policy = field.phone_on_invalid
    if policy != PhoneOnInvalid.USE_GLOBAL:
        if not (result.error or mismatched):
            return result.formatted
        match policy:
            case PhoneOnInvalid.EMPTY:
                return ""
            case PhoneOnInvalid.NULL:
                return None
            case PhoneOnInvalid.SKIP_FIELD:
                return MISSING
            case _:
                return original

    if result.error is None or field.phone_rewrite_on_invalid is None:
        return result.formatted

    match field.phone_rewrite_on_invalid:
        case RewriteOnInvalid.EMPTY:
            return ""
        case RewriteOnInvalid.NULL:
            return None
        case RewriteOnInvalid.ERROR:
            raise _rewrite_failed(field, result.error, item_index)
        case _:
            return original


def stage_rewrites(fields: Sequence[StringField], *, item_index: int = 0) -> list[StagedRewrite]:
    """Rewrite every opted-in phone field and build its summary.

    Raises:
        ItemValidationError: If a rewrite fails to parse and the field's
            phoneOnInvalid policy is "error".
    """
    staged: list[StagedRewrite] = []

    for phone_field in fields:
        value = phone_field.string_data
        target = phone_field.phone_rewrite_format
        empty = value is None or value == ""
        original = value if value is not None else ""

        if empty and not phone_field.required:
            # Placeholder so the field can still be a realignment target
            result = PhoneRewriteResult(format=target, valid=False, possible=False, formatted=original)
        elif empty:
            result = PhoneRewriteResult(
                format=target,
                valid=False,
                possible=False,
                error=build_required_message(phone_field),
            )
        else:
            result = rewrite_phone(value, phone_field)
            if result.error and phone_field.phone_on_invalid == PhoneOnInvalid.ERROR:
                raise _rewrite_failed(phone_field, result.error, item_index)

        summary = PhoneRewriteSummary(
            name=phone_field.name,
            original=original,
            output_property=phone_field.output_property,
            result=result,
        )
        expected = [str(t) for t in phone_field.phone_allowed_types]
        if expected:
            summary.expected_types = expected
            summary.expected_type_match = accepts_expected(expected, result.type)
        fallback = [str(t) for t in phone_field.phone_rewrite_fallback_types]
        if fallback:
            summary.fallback_types = fallback

        staged.append(
            StagedRewrite(
                field=phone_field,
                original=original,
                summary=summary,
                empty_optional=empty and not phone_field.required,
            )
        )

    return staged


def rewrite_failures(staged: Sequence[StagedRewrite]) -> tuple[bool, list[FieldError]]:
    """Overall validity and unresolved errors of a staged pass.

    Realigned entries and empty optional fields never count as failures.
    """
    all_valid = True
    errors: list[FieldError] = []

    for entry in staged:
        if entry.summary.correction_made or entry.empty_optional:
            continue
        if entry.result.failed:
            all_valid = False
            if entry.result.error:
                errors.append(FieldError(field=entry.output_property, message=entry.result.error))

    return all_valid, errors


def run_staged_rewrite(
    fields: Sequence[StringField],
    *,
    auto_realign: bool = True,
    allow_duplicate_assignment: bool = True,
    item_index: int = 0,
) -> RewriteOutcome:
    """Stage, realign, and plan writes for opted-in phone fields."""
    staged = stage_rewrites(fields, item_index=item_index)
    writes: dict[str, Any] = {}

    if auto_realign:
        corrections = realign(
            [entry.candidate() for entry in staged],
            allow_duplicate_assignment=allow_duplicate_assignment,
        )
        for correction in corrections:
            target = staged[correction.target]
            source = staged[correction.source]
            writes[target.output_property] = correction.value
            target.summary.correction_made = True
            target.summary.correction_source = source.output_property
            if correction.fallback_used:
                target.summary.fallback_used = True
            logger.info(
                "phone_field_realigned",
                target=target.output_property,
                source=source.output_property,
                fallback_used=correction.fallback_used,
                item_index=item_index,
            )

    all_valid, errors = rewrite_failures(staged)

    for entry in staged:
        if entry.output_property in writes:
            continue
        value = _invalid_value(
            entry.field,
            entry.original,
            entry.result,
            mismatched=entry.summary.expected_type_match is False,
            item_index=item_index,
        )
        if value is not MISSING:
            writes[entry.output_property] = value

    return RewriteOutcome(
        writes=writes,
        summaries=[entry.summary for entry in staged],
        errors=errors,
        all_valid=all_valid,
        staged=True,
    )


def run_legacy_rewrite(fields: Sequence[StringField], *, item_index: int = 0) -> RewriteOutcome:
    """Rewrite every non-empty phone field directly, without realignment."""
    outcome = RewriteOutcome()

    for phone_field in fields:
        if not phone_field.string_data:
            continue

        result = rewrite_phone(phone_field.string_data, phone_field)
        if result.error and phone_field.phone_on_invalid == PhoneOnInvalid.ERROR:
            raise _rewrite_failed(phone_field, result.error, item_index)

        value = _invalid_value(
            phone_field,
            phone_field.string_data,
            result,
            mismatched=False,
            item_index=item_index,
        )
        if value is not MISSING:
            outcome.writes[phone_field.output_property] = value

        outcome.summaries.append(
            PhoneRewriteSummary(
                name=phone_field.name,
                original=phone_field.string_data,
                output_property=phone_field.output_property,
                result=result,
            )
        )

        if result.failed:
            outcome.all_valid = False
            if result.error:
                outcome.errors.append(FieldError(field=phone_field.name, message=result.error))

    return outcome


def run_phone_rewrite(
    fields: Sequence[FieldDescriptor],
    *,
    auto_realign: bool = True,
    allow_duplicate_assignment: bool = True,
    item_index: int = 0,
) -> RewriteOutcome:
    """Run the staged pass if any phone field opts in, else the legacy pass."""
    phone_fields = _phone_fields(fields)
    opted_in = [f for f in phone_fields if f.phone_enable_rewrite]

    if opted_in:
        return run_staged_rewrite(
            opted_in,
            auto_realign=auto_realign,
            allow_duplicate_assignment=allow_duplicate_assignment,
            item_index=item_index,
        )
    return run_legacy_rewrite(phone_fields, item_index=item_index)
