"""Field-level diff between two insole snapshots, used to build history entries."""

from collections.abc import Mapping
from typing import Any

from insole_tracker.domain.entities import WIRE_FIELDS, FieldChange, Insole

# Tracked columns, in output order.
DIFF_FIELDS = ("serialNumber", "type", "size", "location", "notes")


def _as_text(snapshot: Insole | Mapping[str, Any], wire_field: str) -> str:
    if isinstance(snapshot, Mapping):
        value = snapshot.get(wire_field)
    else:
        value = getattr(snapshot, WIRE_FIELDS[wire_field], None)
    return str(value) if value else ""


def diff_insoles(
    old: Insole | Mapping[str, Any],
    new: Insole | Mapping[str, Any],
) -> list[FieldChange]:
    """Return one FieldChange per tracked field whose text differs.

    Snapshots may be Insole entities or camelCase records (partial records
    are fine: missing fields compare as empty strings).
    """
    changes: list[FieldChange] = []
    for wire_field in DIFF_FIELDS:
        old_value = _as_text(old, wire_field)
        new_value = _as_text(new, wire_field)
        if old_value != new_value:
            changes.append(FieldChange(field=wire_field, old_value=old_value, new_value=new_value))
    return changes
