"""Orchestrator: per-item validation and output assembly.

Coordinates, for each record:
- Field validation through the handler registry
- Field-level phone invalid policies
- Pass-through writes of every declared field
- The record-level invalid policy
- The phone rewrite pass (staging, realignment, writes)
- Error annotation, validity, and output projection

All changes to the record are collected into a write plan first and
applied to a copy of the record in one step at the end.
"""

import copy
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from fieldcheck.contracts.enums import PhoneOnInvalid, RecordOnInvalid
from fieldcheck.contracts.errors import FieldConfigError, FieldError, ItemValidationError, UnsupportedModeError
from fieldcheck.contracts.fields import (
    BooleanField,
    FieldDescriptor,
    GenericField,
    NumberField,
    StringField,
    parse_fields,
)
from fieldcheck.contracts.results import PhoneRewriteSummary, ValidationReport
from fieldcheck.core.config import OUTPUT_ITEMS_MODE, RecordOptions
from fieldcheck.core.logging import get_logger
from fieldcheck.core.paths import omit_empty_values, remove_field_at_path, set_nested_field
from fieldcheck.core.sentinels import REMOVE
from fieldcheck.engine.rewrite import RewriteOutcome, run_phone_rewrite
from fieldcheck.validation.registry import HandlerRegistry

logger = get_logger(__name__)

RESERVED_KEYS = ("isValid", "errors", "phoneRewrites")

FieldInput = Sequence[Mapping[str, Any]] | Sequence[FieldDescriptor]


def empty_value(field: FieldDescriptor) -> Any:
    """The "set-empty" replacement for a field's type."""
    if isinstance(field, NumberField):
        return 0
    if isinstance(field, BooleanField):
        return False
    if isinstance(field, GenericField):
        return None
    return ""


class WritePlan:
    """Ordered path -> value map; a later write to a path replaces the earlier one."""

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}

    def set(self, path: str, value: Any) -> None:
        self._entries.pop(path, None)
        self._entries[path] = value

    def remove(self, path: str) -> None:
        self.set(path, REMOVE)

    def update(self, writes: Mapping[str, Any]) -> None:
        for path, value in writes.items():
            self.set(path, value)

    def apply(self, record: dict[str, Any]) -> dict[str, Any]:
        for path, value in self._entries.items():
            if value is REMOVE:
                remove_field_at_path(record, path)
            else:
                set_nested_field(record, path, value)
        return record

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __getitem__(self, path: str) -> Any:
        return self._entries[path]

    def __len__(self) -> int:
        return len(self._entries)


class ValidatorEngine:
    """Validates records against field descriptors and assembles output items.

    Usage:
        engine = ValidatorEngine(RecordOptions(on_invalid="continue"))
        output = engine.process_item(record, fields)

    The registry defaults to the five built-in handlers; pass one built by
    the plugin manager to include plugin-provided validation types.
    """

    def __init__(
        self,
        options: RecordOptions | None = None,
        *,
        registry: HandlerRegistry | None = None,
    ) -> None:
        self._options = options if options is not None else RecordOptions()
        if self._options.mode != OUTPUT_ITEMS_MODE:
            raise UnsupportedModeError(self._options.mode)
        self._registry = registry if registry is not None else HandlerRegistry.with_builtins()

    @property
    def options(self) -> RecordOptions:
        return self._options

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    def validate_fields(self, fields: FieldInput) -> ValidationReport:
        """Run every field through its handler, in declaration order."""
        report = ValidationReport()

        for descriptor in parse_fields(list(fields)):
            validation_type = descriptor.validation_type
            handler = self._registry.lookup(validation_type)
            if handler is None:
                report.errors.append(
                    FieldError(field=descriptor.name, message=f"Unsupported validation type: {validation_type}")
                )
                continue
            report.errors.extend(handler(descriptor))

        return report

    def process_item(
        self,
        record: Mapping[str, Any],
        fields: FieldInput,
        *,
        item_index: int = 0,
    ) -> dict[str, Any] | None:
        """Validate one record and build its output item.

        Args:
            record: Input record (not modified)
            fields: Field descriptors or raw descriptor mappings
            item_index: Position of the record in its batch, used in errors

        Returns:
            The output item, or None when the record-level "skip" policy
            drops it.

        Raises:
            ItemValidationError: If an "error" policy (field or record level)
                is triggered.
            FieldConfigError: If a raw descriptor is malformed.
        """
        options = self._options
        descriptors = parse_fields(list(fields))
        by_name = self._index_by_name(descriptors)

        report = self.validate_fields(descriptors)
        plan = WritePlan()

        field_handled: set[str] = set()
        remaining: list[FieldError] = []
        for error in report.errors:
            descriptor = by_name.get(error["field"])
            if (
                isinstance(descriptor, StringField)
                and descriptor.is_phone
                and descriptor.phone_on_invalid != PhoneOnInvalid.USE_GLOBAL
            ):
                field_handled.add(descriptor.name)
                self._apply_phone_policy(descriptor, error, plan, item_index)
            else:
                remaining.append(error)

        for descriptor in descriptors:
            if descriptor.name in field_handled or isinstance(descriptor, GenericField):
                continue
            plan.set(descriptor.name, descriptor.value)

        if remaining and options.on_invalid != RecordOnInvalid.CONTINUE:
            if options.on_invalid == RecordOnInvalid.SKIP:
                logger.info("item_skipped", item_index=item_index, error_count=len(remaining))
                return None
            self._apply_record_policy(remaining, by_name, plan, item_index)

        outcome = RewriteOutcome()
        if options.enable_phone_rewrite:
            outcome = run_phone_rewrite(
                descriptors,
                auto_realign=options.auto_realign_mismatched_types,
                allow_duplicate_assignment=options.allow_duplicate_assignment,
                item_index=item_index,
            )
            plan.update(outcome.writes)

        if outcome.staged and not options.phone_rewrite_pass_through:
            # Only the rewritten phone properties survive
            rewrites_only = WritePlan()
            rewrites_only.update(outcome.writes)
            output = rewrites_only.apply({})
        else:
            output = plan.apply(copy.deepcopy(dict(record)))

        if options.enable_phone_rewrite and not options.omit_phone_rewrite_details and outcome.summaries:
            output["phoneRewrites"] = [summary.to_dict() for summary in outcome.summaries]
        else:
            output.pop("phoneRewrites", None)

        errors = self._annotate_errors(report.errors, by_name, outcome.summaries)
        is_valid = all(e.get("resolved") for e in errors) and outcome.all_valid
        if not outcome.all_valid:
            errors.extend(outcome.errors)

        logger.debug("item_processed", item_index=item_index, is_valid=is_valid, error_count=len(errors))

        if options.output_only_is_valid:
            minimal: dict[str, Any] = {"isValid": is_valid}
            if errors:
                minimal["errors"] = errors
            return minimal

        output["isValid"] = is_valid
        if errors:
            output["errors"] = errors
        else:
            output.pop("errors", None)

        if options.omit_empty_fields:
            output = omit_empty_values(output, keep=RESERVED_KEYS)

        return output

    def process_batch(
        self,
        items: Iterable[tuple[Mapping[str, Any], FieldInput]],
        *,
        continue_on_error: bool = False,
    ) -> list[dict[str, Any]]:
        """Process (record, fields) pairs in order.

        Skipped items are left out of the result. With ``continue_on_error``
        an item that raises ItemValidationError, or whose raw descriptors
        fail to parse, is replaced by an error entry instead of aborting
        the batch.
        """
        results: list[dict[str, Any]] = []

        for item_index, (record, fields) in enumerate(items):
            try:
                output = self.process_item(record, fields, item_index=item_index)
            except ItemValidationError as e:
                if not continue_on_error:
                    raise
                logger.warning("item_failed", item_index=item_index, error=str(e))
                results.append(e.to_dict())
                continue
            except FieldConfigError as e:
                if not continue_on_error:
                    raise
                logger.warning("item_config_invalid", item_index=item_index, error=str(e))
                results.append({"error": str(e), "itemIndex": item_index})
                continue
            if output is not None:
                results.append(output)

        return results

    @staticmethod
    def _index_by_name(descriptors: Sequence[FieldDescriptor]) -> dict[str, FieldDescriptor]:
        # First declaration wins for duplicate names
        index: dict[str, FieldDescriptor] = {}
        for descriptor in descriptors:
            index.setdefault(descriptor.name, descriptor)
        return index

    @staticmethod
    def _apply_phone_policy(field: StringField, error: FieldError, plan: WritePlan, item_index: int) -> None:
        match field.phone_on_invalid:
            case PhoneOnInvalid.ERROR:
                raise ItemValidationError(
                    f"Phone validation failed for '{field.name}': {error['message']}",
                    item_index=item_index,
                    field=field.name,
                    errors=[error],
                )
            case PhoneOnInvalid.LEAVE_AS_IS:
                plan.set(field.name, field.string_data)
            case PhoneOnInvalid.EMPTY:
                plan.set(field.name, "")
            case PhoneOnInvalid.NULL:
                plan.set(field.name, None)
            case PhoneOnInvalid.SKIP_FIELD:
                plan.remove(field.name)

    def _apply_record_policy(
        self,
        errors: list[FieldError],
        by_name: Mapping[str, FieldDescriptor],
        plan: WritePlan,
        item_index: int,
    ) -> None:
        match self._options.on_invalid:
            case RecordOnInvalid.ERROR:
                messages = "; ".join(e["message"] for e in errors)
                raise ItemValidationError(
                    f"Validation failed for item {item_index}: {messages}",
                    item_index=item_index,
                    errors=errors,
                )
            case RecordOnInvalid.SET_NULL:
                for error in errors:
                    plan.set(error["field"], None)
            case RecordOnInvalid.SET_EMPTY:
                for error in errors:
                    descriptor = by_name.get(error["field"])
                    if descriptor is not None:
                        plan.set(error["field"], empty_value(descriptor))
            case RecordOnInvalid.SKIP_FIELD:
                for error in errors:
                    plan.remove(error["field"])

    @staticmethod
    def _annotate_errors(
        errors: list[FieldError],
        by_name: Mapping[str, FieldDescriptor],
        summaries: Sequence[PhoneRewriteSummary],
    ) -> list[FieldError]:
        """Copy validation errors, marking phone errors repaired by realignment."""
        realigned = {s.name: s for s in summaries if s.correction_made}
        annotated: list[FieldError] = []

        for error in errors:
            descriptor = by_name.get(error["field"])
            summary = realigned.get(error["field"])
            if isinstance(descriptor, StringField) and descriptor.is_phone and summary is not None:
                annotated.append(
                    FieldError(
                        field=error["field"],
                        message=error["message"],
                        resolved=True,
                        resolution=f"Auto-realigned from '{summary.correction_source}' to '{summary.output_property}'",
                    )
                )
            else:
                annotated.append(FieldError(field=error["field"], message=error["message"]))

        return annotated
