"""On-demand, uncached read of one insole's change log."""

from insole_tracker.application.interfaces import RemoteStore
from insole_tracker.domain.entities import HistoryEntry, Insole, Severity
from insole_tracker.domain.exceptions import RemoteStoreError
from insole_tracker.infrastructure.logging.colored_logger import StoreLogger, StoreStage

from .notification_queue import NotificationQueue

slog = StoreLogger("HistoryViewer")


class HistoryViewer:
    """Holds the history panel state: which insole, its entries, and a loading flag."""

    def __init__(self, remote: RemoteStore, notifications: NotificationQueue) -> None:
        self._remote = remote
        self._notifications = notifications
        self.is_open = False
        self.insole: Insole | None = None
        self.entries: list[HistoryEntry] = []
        self.loading = False

    async def open(self, insole: Insole) -> list[HistoryEntry]:
        self.insole = insole
        self.is_open = True
        return await self.load(insole.id)

    async def load(self, insole_id: str) -> list[HistoryEntry]:
        """Fetch a fresh change log, replacing the displayed entries.

        Without a configured endpoint the list simply stays empty. Remote
        failures leave it empty and push an error notification.
        """
        self.loading = True
        self.entries = []
        try:
            if self._remote.is_configured:
                with slog.timed_step(StoreStage.HISTORY, "Fetching history", insole_id=insole_id):
                    records = await self._remote.fetch_history(insole_id)
                self.entries = [HistoryEntry.from_record(r) for r in records]
        except RemoteStoreError:
            self._notifications.push("Failed to load history", Severity.ERROR)
        finally:
            self.loading = False
        return self.entries

    def close(self) -> None:
        self.is_open = False
        self.insole = None
        self.entries = []
