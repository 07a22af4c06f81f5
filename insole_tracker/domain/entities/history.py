"""Domain entities for the per-insole change log owned by the remote store."""

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FieldChange:
    """One field-level change: ``field`` uses the remote column name."""

    field: str
    old_value: str
    new_value: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "oldValue": self.old_value, "newValue": self.new_value}


@dataclass
class HistoryEntry:
    """A past change to one insole. Read-only on the client."""

    insole_id: str
    timestamp: str
    changes: list[FieldChange] = field(default_factory=list)
    action: str = ""

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "HistoryEntry":
        """Parse a history row.

        Spreadsheet cells often hold the change list as a JSON string, so
        ``changes`` may arrive either decoded or encoded. Unreadable change
        lists yield an entry without changes.
        """
        raw_changes = record.get("changes") or []
        if isinstance(raw_changes, str):
            try:
                raw_changes = json.loads(raw_changes)
            except json.JSONDecodeError:
                raw_changes = []
        if not isinstance(raw_changes, list):
            raw_changes = []

        changes = [
            FieldChange(
                field=str(item.get("field", "")),
                old_value="" if item.get("oldValue") is None else str(item.get("oldValue")),
                new_value="" if item.get("newValue") is None else str(item.get("newValue")),
            )
            for item in raw_changes
            if isinstance(item, dict)
        ]
        return cls(
            insole_id=str(record.get("insoleId", "")),
            timestamp=str(record.get("timestamp", "")),
            changes=changes,
            action=str(record.get("action", "")),
        )
