"""Phone type realignment.

When a record carries several phone fields, users often put a landline in
the "mobile" slot and vice versa. Realignment looks, for every field whose
detected type misses its expected types, for a sibling whose detected
type fits and proposes moving that sibling's value across.

The policy is deliberately simple: scan siblings in declaration order and
take the first compatible one. It is not an optimal-assignment search.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from fieldcheck.validation.phone import accepts_expected


@dataclass(frozen=True)
class RealignmentCandidate:
    """One staged phone field as seen by the realignment pass.

    Fields:
        output_property: Where the field's rewritten value is written
        detected_type: Classified type of the field's own value, None if unparsed
        value: What this field contributes when it is used as a source
        expected_types: Types the field should hold (empty = no expectation)
        fallback_types: Secondary acceptable types
        expected_type_match: Whether detected_type satisfies expected_types,
            None when there is no expectation
    """

    output_property: str
    detected_type: str | None
    value: Any
    expected_types: tuple[str, ...] = ()
    fallback_types: tuple[str, ...] = ()
    expected_type_match: bool | None = None


@dataclass(frozen=True)
class Correction:
    """A proposed move of a source's value into a target's output property."""

    target: int
    source: int
    value: Any
    fallback_used: bool = False


def realign(
    candidates: Sequence[RealignmentCandidate],
    *,
    allow_duplicate_assignment: bool = True,
) -> list[Correction]:
    """Find sources for targets whose detected type misses their expectation.

    A target is considered when it has expected types and either its type
    mismatches, or duplicates are disallowed and nothing has been written
    to its output property yet. With duplicates disallowed, a source whose
    value was already used by an earlier correction is skipped.

    Args:
        candidates: Staged phone fields in declaration order
        allow_duplicate_assignment: Allow one source to fill several targets

    Returns:
        Corrections in target order; at most one per target.
    """
    corrections: list[Correction] = []
    written: set[str] = set()
    used_sources: set[str] = set()

    for index, target in enumerate(candidates):
        if not target.expected_types:
            continue

        aligned = target.expected_type_match is True
        if aligned and allow_duplicate_assignment:
            continue

        needs_source = target.expected_type_match is False or (
            not allow_duplicate_assignment and target.output_property not in written
        )
        if not needs_source:
            continue

        for source_index, source in enumerate(candidates):
            if source_index == index or source.detected_type is None:
                continue
            if not allow_duplicate_assignment and source.output_property in used_sources:
                continue

            matches_expected = accepts_expected(target.expected_types, source.detected_type)
            matches_fallback = accepts_expected(target.fallback_types, source.detected_type)
            if not (matches_expected or matches_fallback):
                continue

            if allow_duplicate_assignment or target.output_property not in written:
                written.add(target.output_property)
                used_sources.add(source.output_property)
                corrections.append(
                    Correction(
                        target=index,
                        source=source_index,
                        value=source.value,
                        fallback_used=not matches_expected,
                    )
                )
            break

    return corrections
