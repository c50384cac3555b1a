"""Dot-path access into nested record data.

Field names may contain dots to address values inside nested mappings
("address.street"). Reads never coerce; writes create missing
intermediate mappings; removals understand arrays of objects and arrays
of primitives.
"""

from collections.abc import Iterable
from typing import Any

from fieldcheck.core.sentinels import MISSING


def _is_mapping(value: Any) -> bool:
    return isinstance(value, dict)


def get_nested_field(
    data: dict[str, Any],
    path: str,
    default: Any = MISSING,
) -> Any:
    """Get value from nested dict using dot notation.

    Returns exactly what is found, or the default if the path is missing.

    Args:
        data: Source dictionary to traverse
        path: Dot-separated path (e.g., "user.profile.name")
        default: Value to return if path not found (default: MISSING sentinel)

    Examples:
        >>> data = {"user": {"name": "Alice", "age": 30}}
        >>> get_nested_field(data, "user.name")
        'Alice'
        >>> get_nested_field(data, "user.email", default="unknown")
        'unknown'
    """
    current: Any = data

    for part in path.split("."):
        if not _is_mapping(current) or part not in current:
            return default
        current = current[part]

    return current


def set_nested_field(data: dict[str, Any], path: str, value: Any) -> None:
    """Assign value at a dot path, creating intermediate mappings.

    Intermediate segments that are missing or hold a non-mapping value are
    replaced with an empty dict before descending.

    Examples:
        >>> record = {}
        >>> set_nested_field(record, "a.b.c", 1)
        >>> record
        {'a': {'b': {'c': 1}}}
    """
    parts = path.split(".")
    current = data

    for part in parts[:-1]:
        if not _is_mapping(current.get(part)):
            current[part] = {}
        current = current[part]

    current[parts[-1]] = value


def remove_field_at_path(
    data: dict[str, Any],
    path: str,
    *,
    failing_indices: Iterable[int] | None = None,
) -> None:
    """Remove the value at a dot path.

    Behaviour by what the traversal meets:
    - Intermediate array of objects: the rest of the path is removed from
      every object element (``"items.tag"`` drops ``tag`` from each item).
    - Intermediate array of primitives: nothing to navigate, no-op.
    - Terminal scalar, mapping, empty array or array of objects: deleted.
    - Terminal array of primitives: entries at ``failing_indices`` are
      filtered out; the key is deleted when nothing remains or no indices
      were given.

    Missing paths are a no-op.

    Args:
        data: Record to modify in place
        path: Dot-separated path to the field
        failing_indices: For arrays of primitives, positions to drop
    """
    if not path:
        return

    parts = path.split(".")
    current = data

    for i, part in enumerate(parts[:-1]):
        if part not in current:
            return

        value = current[part]

        if isinstance(value, list):
            if value and _is_mapping(value[0]):
                remaining = ".".join(parts[i + 1 :])
                for element in value:
                    if _is_mapping(element):
                        remove_field_at_path(element, remaining, failing_indices=failing_indices)
            return

        if not _is_mapping(value):
            return

        current = value

    last = parts[-1]
    if last not in current:
        return

    value = current[last]

    if isinstance(value, list) and value and not _is_mapping(value[0]):
        failing = set(failing_indices or ())
        if failing:
            kept = [item for index, item in enumerate(value) if index not in failing]
            if kept:
                current[last] = kept
                return

    del current[last]


def omit_empty_values(data: dict[str, Any], *, keep: Iterable[str] = ()) -> dict[str, Any]:
    """Return a copy without None/empty-string values.

    Nested mappings are cleaned recursively and dropped when they end up
    empty. Arrays are kept untouched. Keys in ``keep`` survive unchanged at
    the top level.
    """
    preserved = set(keep)
    cleaned: dict[str, Any] = {}

    for key, value in data.items():
        if key in preserved:
            cleaned[key] = value
            continue
        if value is None or value == "":
            continue
        if _is_mapping(value):
            nested = omit_empty_values(value)
            if nested:
                cleaned[key] = nested
        else:
            cleaned[key] = value

    return cleaned
