from .history import FieldChangeResponse, HistoryEntryResponse
from .insole import (
    ConnectivityUpdate,
    InsoleCreate,
    InsoleFieldUpdate,
    InsoleResponse,
    InsoleStatsResponse,
)
from .notification import NotificationResponse
from .settings import SizeCodeSchema, TrackerSettingsSchema

__all__ = [
    "FieldChangeResponse",
    "HistoryEntryResponse",
    "ConnectivityUpdate",
    "InsoleCreate",
    "InsoleFieldUpdate",
    "InsoleResponse",
    "InsoleStatsResponse",
    "NotificationResponse",
    "SizeCodeSchema",
    "TrackerSettingsSchema",
]
