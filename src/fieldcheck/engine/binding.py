"""Host-side binding of field templates to record values.

Settings declare fields once; each record supplies the values. A
template's data slot (``stringData``, ``numberData``, ...) is filled from
the record at ``source`` (default: the field name, dot paths allowed)
unless the template sets it explicitly.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from fieldcheck.contracts.enums import ValidationType
from fieldcheck.contracts.fields import FieldDescriptor, parse_field
from fieldcheck.core.paths import get_nested_field

# Host key first, then the snake_case spelling
DATA_SLOT_KEYS: dict[str, tuple[str, str]] = {
    ValidationType.STRING: ("stringData", "string_data"),
    ValidationType.NUMBER: ("numberData", "number_data"),
    ValidationType.BOOLEAN: ("booleanData", "boolean_data"),
    ValidationType.DATE: ("dateData", "date_data"),
    ValidationType.ENUM: ("stringData", "string_data"),
}


def bind_payload(template: Mapping[str, Any], record: Mapping[str, Any]) -> dict[str, Any]:
    """Copy a template with its data slot filled from the record.

    The result is a raw descriptor mapping; parsing is left to the engine
    so a malformed template surfaces as an error for this record only.
    """
    payload = dict(template)
    source = payload.pop("source", None) or payload.get("name")

    tag = payload.get("validationType", payload.get("validation_type"))
    slot_keys = DATA_SLOT_KEYS.get(tag) if isinstance(tag, str) else None

    if slot_keys is not None and isinstance(source, str) and not any(key in payload for key in slot_keys):
        payload[slot_keys[0]] = get_nested_field(dict(record), source, default=None)

    return payload


def bind_payloads(templates: Sequence[Mapping[str, Any]], record: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Bind every template to the record, preserving declaration order."""
    return [bind_payload(template, record) for template in templates]


def bind_field(template: Mapping[str, Any], record: Mapping[str, Any]) -> FieldDescriptor:
    """Build one descriptor from a template and a record.

    Raises:
        FieldConfigError: If the bound payload does not fit the variant.
    """
    return parse_field(bind_payload(template, record))


def bind_fields(templates: Sequence[Mapping[str, Any]], record: Mapping[str, Any]) -> list[FieldDescriptor]:
    return [bind_field(template, record) for template in templates]
