"""Application service for the settings editor.

Validates and persists the reference lists through the ConfigurationStore,
then hands the new settings object to the state container so badges,
stats and the view reflect the change.
"""

from insole_tracker.domain.entities import Severity, SizeCode, TrackerSettings
from insole_tracker.domain.exceptions import ValidationError
from insole_tracker.infrastructure.logging.colored_logger import StoreLogger, StoreStage

from .configuration_store import ConfigurationStore
from .insole_store import InsoleStore

slog = StoreLogger("InsoleStore")


class SettingsService:
    """Orchestrates reading and saving TrackerSettings."""

    def __init__(self, configuration: ConfigurationStore, store: InsoleStore):
        self._configuration = configuration
        self._store = store

    def current(self) -> TrackerSettings:
        return self._configuration.load()

    def save(
        self,
        team_members: list[str],
        clients: list[str],
        sizes: list[SizeCode],
    ) -> TrackerSettings | None:
        """Persist new lists. Returns None (with an error notification) if rejected."""
        notifications = self._store.notifications
        try:
            settings = self._configuration.save(team_members, clients, sizes)
        except ValidationError as exc:
            slog.warning(StoreStage.SETTINGS, exc.message)
            notifications.push(exc.message, Severity.ERROR)
            return None
        except OSError as exc:
            slog.error(f"Could not persist settings: {exc}", exc_info=True)
            notifications.push(f"Failed to save settings — {exc}", Severity.ERROR)
            return None

        self._store.apply_settings(settings)
        notifications.push("Settings saved", Severity.SUCCESS)
        return settings

    def last_error(self) -> str | None:
        return self._store.notifications.latest_error()
