"""Error schemas and exceptions.

FieldError is the structured payload handlers return; the exception
classes are reserved for conditions that must abort an item or reject
configuration outright.
"""

from typing import Any, NotRequired, TypedDict


class FieldError(TypedDict):
    """Schema for a single field validation error.

    Handlers produce zero or more per field, in field-declaration order.
    The orchestrator adds resolved/resolution when a phone field was
    repaired by realignment.
    """

    field: str
    message: str
    resolved: NotRequired[bool]
    resolution: NotRequired[str]


class FieldConfigError(ValueError):
    """Raised when a field descriptor or settings payload is malformed."""

    pass


class UnsupportedModeError(ValueError):
    """Raised when the record-level mode is not one the engine implements."""

    def __init__(self, mode: str) -> None:
        self.mode = mode
        super().__init__(f"Invalid node mode: {mode}. Supported mode is 'output-items'.")


class ItemValidationError(Exception):
    """Raised when an explicit "error" policy converts failures into a fault.

    Attributes:
        item_index: Position of the record in the batch
        field: Field that triggered a field-level policy, None for record-level
        errors: The field errors that caused the abort
    """

    def __init__(
        self,
        message: str,
        *,
        item_index: int,
        field: str | None = None,
        errors: list[FieldError] | None = None,
    ) -> None:
        self.item_index = item_index
        self.field = field
        self.errors: list[FieldError] = errors if errors is not None else []
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Payload used when a batch continues past a failed item."""
        return {"error": str(self), "itemIndex": self.item_index}
