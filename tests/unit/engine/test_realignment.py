# tests/unit/engine/test_realignment.py
"""Tests for phone type realignment."""

from fieldcheck.engine.realignment import Correction, RealignmentCandidate, realign
from fieldcheck.validation.phone import accepts_expected


def _candidate(
    prop: str,
    detected: str | None,
    expected: tuple[str, ...] = (),
    fallback: tuple[str, ...] = (),
) -> RealignmentCandidate:
    match = accepts_expected(expected, detected) if expected else None
    return RealignmentCandidate(
        output_property=prop,
        detected_type=detected,
        value=f"value-of-{prop}",
        expected_types=expected,
        fallback_types=fallback,
        expected_type_match=match,
    )


class TestRealign:
    def test_no_expectations_no_corrections(self) -> None:
        candidates = [_candidate("a", "MOBILE"), _candidate("b", "FIXED_LINE")]
        assert realign(candidates) == []

    def test_aligned_fields_untouched(self) -> None:
        candidates = [
            _candidate("mobile", "MOBILE", ("MOBILE",)),
            _candidate("landline", "FIXED_LINE", ("FIXED_LINE",)),
        ]
        assert realign(candidates) == []

    def test_swapped_values(self) -> None:
        candidates = [
            _candidate("mobile", "FIXED_LINE", ("MOBILE",)),
            _candidate("landline", "MOBILE", ("FIXED_LINE",)),
        ]

        corrections = realign(candidates)

        assert corrections == [
            Correction(target=0, source=1, value="value-of-landline"),
            Correction(target=1, source=0, value="value-of-mobile"),
        ]

    def test_first_compatible_sibling_wins(self) -> None:
        candidates = [
            _candidate("mobile", "FIXED_LINE", ("MOBILE",)),
            _candidate("work", "MOBILE"),
            _candidate("home", "MOBILE"),
        ]

        corrections = realign(candidates)

        assert [c.source for c in corrections] == [1]

    def test_unparsed_sources_skipped(self) -> None:
        candidates = [
            _candidate("mobile", "FIXED_LINE", ("MOBILE",)),
            _candidate("broken", None),
        ]
        assert realign(candidates) == []

    def test_fallback_type(self) -> None:
        candidates = [
            _candidate("mobile", "FIXED_LINE", ("MOBILE",), fallback=("VOIP",)),
            _candidate("other", "VOIP"),
        ]

        corrections = realign(candidates)

        assert corrections == [Correction(target=0, source=1, value="value-of-other", fallback_used=True)]

    def test_duplicate_assignment_allowed(self) -> None:
        candidates = [
            _candidate("mobile1", "FIXED_LINE", ("MOBILE",)),
            _candidate("mobile2", "FIXED_LINE", ("MOBILE",)),
            _candidate("source", "MOBILE"),
        ]

        corrections = realign(candidates)

        assert [(c.target, c.source) for c in corrections] == [(0, 2), (1, 2)]

    def test_duplicate_assignment_disallowed(self) -> None:
        candidates = [
            _candidate("mobile1", "FIXED_LINE", ("MOBILE",)),
            _candidate("mobile2", "FIXED_LINE", ("MOBILE",)),
            _candidate("source", "MOBILE"),
        ]

        corrections = realign(candidates, allow_duplicate_assignment=False)

        assert [(c.target, c.source) for c in corrections] == [(0, 2)]

    def test_idempotent(self) -> None:
        candidates = [
            _candidate("mobile", "FIXED_LINE", ("MOBILE",)),
            _candidate("landline", "MOBILE", ("FIXED_LINE",)),
        ]
        assert realign(candidates) == realign(candidates)
