from .badges import Badge, known_locations, location_badge, size_label, suggest_locations, type_badge
from .configuration_store import ConfigurationStore
from .debounce import Debouncer
from .history_viewer import HistoryViewer
from .insole_diff import DIFF_FIELDS, diff_insoles
from .insole_store import EDITABLE_FIELDS, InsoleStore
from .insole_view import SORTABLE_FIELDS, compute_stats, derive_view, filter_insoles, sort_insoles
from .local_cache import CacheSnapshot, LocalCache
from .notification_queue import NotificationQueue
from .settings_service import SettingsService

__all__ = [
    "Badge",
    "known_locations",
    "location_badge",
    "size_label",
    "suggest_locations",
    "type_badge",
    "ConfigurationStore",
    "Debouncer",
    "HistoryViewer",
    "DIFF_FIELDS",
    "diff_insoles",
    "EDITABLE_FIELDS",
    "InsoleStore",
    "SORTABLE_FIELDS",
    "compute_stats",
    "derive_view",
    "filter_insoles",
    "sort_insoles",
    "CacheSnapshot",
    "LocalCache",
    "NotificationQueue",
    "SettingsService",
]
