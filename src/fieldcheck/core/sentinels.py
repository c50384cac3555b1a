"""Shared sentinel values.

Distinguishes "value not found" from "value is explicitly None" when
reading fields out of record data, and marks removals in a write plan.

Example usage:
    from fieldcheck.core.sentinels import MISSING

    value = get_nested_field(record, "contact.phone")
    if value is MISSING:
        # Path was not present in the record
        ...
    elif value is None:
        # Path was present but explicitly null
        ...
"""

from typing import Final


class MissingSentinel:
    """Sentinel class to distinguish missing fields from None values.

    This is a singleton - use the MISSING instance, not the class directly.
    Comparison should always use `is` identity, never equality.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"


class RemoveSentinel:
    """Sentinel marking a path for removal in a write plan."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<REMOVE>"


MISSING: Final[MissingSentinel] = MissingSentinel()
"""Singleton sentinel indicating a field was not found.

Use identity comparison: `if value is MISSING:`
"""

REMOVE: Final[RemoveSentinel] = RemoveSentinel()
"""Singleton sentinel requesting removal of a path from the output record."""
