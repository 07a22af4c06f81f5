"""Domain entity — a tracked physical insole unit and its value helpers."""

import random
import re
import string
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

_SERIAL_PATTERN = re.compile(r"[A-Za-z0-9]{4}")
_SERIAL_ALPHABET = string.ascii_uppercase + string.digits


class InsoleType(str, Enum):
    """Product line of an insole."""

    CORE = "Core"
    ADVANCED = "Advanced"


# Location values that describe a status rather than a custodian.
LOCATION_KEYWORDS = ("Stock", "Lost", "Damaged", "Returned", "Available")

# Wire (camelCase) name → entity attribute, in record order.
WIRE_FIELDS: dict[str, str] = {
    "id": "id",
    "serialNumber": "serial_number",
    "type": "type",
    "size": "size",
    "location": "location",
    "enclosure": "enclosure",
    "pairStatus": "pair_status",
    "dateAdded": "date_added",
    "dateSent": "date_sent",
    "notes": "notes",
    "lastModified": "last_modified",
}
ATTRIBUTE_TO_WIRE: dict[str, str] = {attr: wire for wire, attr in WIRE_FIELDS.items()}


def is_valid_serial(serial: str | None) -> bool:
    """Empty, or exactly four ASCII letters/digits."""
    return not serial or _SERIAL_PATTERN.fullmatch(serial) is not None


def generate_serial() -> str:
    """Random four-character uppercase serial."""
    return "".join(random.choice(_SERIAL_ALPHABET) for _ in range(4))


def format_iso(moment: datetime) -> str:
    """UTC ISO 8601 with millisecond precision and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso() -> str:
    return format_iso(datetime.now(timezone.utc))


def to_iso(value: str) -> str:
    """Normalise a date (``YYYY-MM-DD``) or datetime string to ISO 8601.

    Raises ValueError when the value cannot be parsed.
    """
    return format_iso(datetime.fromisoformat(value.strip()))


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass
class Insole:
    """Core domain entity for one tracked insole.

    ``location`` is overloaded: a team member, a client, or one of
    LOCATION_KEYWORDS. ``highlight`` is UI-only and never persisted.
    """

    id: str = field(default_factory=lambda: str(uuid4()))
    serial_number: str = ""
    type: str = InsoleType.CORE.value
    size: str = ""
    location: str = ""
    enclosure: str = ""
    pair_status: str = ""
    date_added: str = ""
    date_sent: str = ""
    notes: str = ""
    last_modified: str = ""
    extra: dict[str, Any] = field(default_factory=dict)
    highlight: bool = False

    def get_field(self, attribute: str) -> str:
        return getattr(self, attribute)

    def set_field(self, attribute: str, value: str) -> None:
        """Set one descriptive field and stamp ``last_modified``."""
        setattr(self, attribute, value)
        self.last_modified = now_iso()

    def to_dict(self) -> dict[str, Any]:
        """Serialise using the remote store's camelCase column names."""
        record = dict(self.extra)
        for wire, attr in WIRE_FIELDS.items():
            record[wire] = getattr(self, attr)
        return record

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> "Insole":
        """Build from a remote or cached record; unknown columns are kept in ``extra``."""
        values = {attr: _text(record.get(wire)) for wire, attr in WIRE_FIELDS.items()}
        if not values["id"]:
            values["id"] = str(uuid4())
        extra = {k: v for k, v in record.items() if k not in WIRE_FIELDS and not k.startswith("_")}
        return cls(**values, extra=extra)


def dedupe_by_id(insoles: list[Insole]) -> list[Insole]:
    """Keep the first insole for each id, preserving order."""
    seen: set[str] = set()
    unique: list[Insole] = []
    for insole in insoles:
        if insole.id in seen:
            continue
        seen.add(insole.id)
        unique.append(insole)
    return unique
