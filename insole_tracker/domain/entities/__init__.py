from .insole import (
    Insole,
    InsoleType,
    LOCATION_KEYWORDS,
    WIRE_FIELDS,
    ATTRIBUTE_TO_WIRE,
    dedupe_by_id,
    is_valid_serial,
    format_iso,
    generate_serial,
    now_iso,
    to_iso,
)
from .insole_query import InsoleFilters, InsoleStats, SortDirection, SortSpec
from .history import FieldChange, HistoryEntry
from .notification import Notification, Severity
from .tracker_settings import (
    SizeCode,
    TrackerSettings,
    DEFAULT_TEAM_MEMBERS,
    DEFAULT_CLIENTS,
    DEFAULT_SIZES,
)

__all__ = [
    "Insole",
    "InsoleType",
    "LOCATION_KEYWORDS",
    "WIRE_FIELDS",
    "ATTRIBUTE_TO_WIRE",
    "dedupe_by_id",
    "is_valid_serial",
    "format_iso",
    "generate_serial",
    "now_iso",
    "to_iso",
    "InsoleFilters",
    "InsoleStats",
    "SortDirection",
    "SortSpec",
    "FieldChange",
    "HistoryEntry",
    "Notification",
    "Severity",
    "SizeCode",
    "TrackerSettings",
    "DEFAULT_TEAM_MEMBERS",
    "DEFAULT_CLIENTS",
    "DEFAULT_SIZES",
]
