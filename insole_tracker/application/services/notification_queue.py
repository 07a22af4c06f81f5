"""Short-lived status messages with timed expiry."""

import asyncio
import logging

from insole_tracker.domain.entities import Notification, Severity

logger = logging.getLogger(__name__)


class NotificationQueue:
    """FIFO of live notifications.

    ``push`` schedules two transitions on the running event loop: after
    ``expire_after`` seconds the entry is marked expiring, and
    ``remove_after`` seconds later it is dropped. No deduplication.
    Must be called from inside the event loop.
    """

    def __init__(self, expire_after: float = 4.0, remove_after: float = 0.3) -> None:
        self._expire_after = expire_after
        self._remove_after = remove_after
        self._entries: list[Notification] = []
        self._next_id = 0
        self._timers: dict[int, asyncio.TimerHandle] = {}

    @property
    def entries(self) -> list[Notification]:
        return list(self._entries)

    def push(self, message: str, severity: Severity = Severity.INFO) -> Notification:
        self._next_id += 1
        notification = Notification(id=self._next_id, message=message, severity=Severity(severity))
        self._entries.append(notification)

        loop = asyncio.get_running_loop()
        self._timers[notification.id] = loop.call_later(
            self._expire_after, self._mark_expiring, notification.id
        )
        logger.debug("Notification #%d (%s): %s", notification.id, notification.severity.value, message)
        return notification

    def latest(self) -> Notification | None:
        return self._entries[-1] if self._entries else None

    def latest_error(self) -> str | None:
        """Message of the newest notification if it is an error."""
        latest = self.latest()
        if latest is not None and latest.severity == Severity.ERROR:
            return latest.message
        return None

    def dismiss(self, notification_id: int) -> bool:
        """Drop a notification immediately. Returns False if it was not live."""
        timer = self._timers.pop(notification_id, None)
        if timer is not None:
            timer.cancel()
        before = len(self._entries)
        self._entries = [n for n in self._entries if n.id != notification_id]
        return len(self._entries) != before

    def shutdown(self) -> None:
        """Cancel pending timers and clear all entries."""
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._entries.clear()

    def _mark_expiring(self, notification_id: int) -> None:
        for notification in self._entries:
            if notification.id == notification_id:
                notification.expiring = True
                break
        loop = asyncio.get_running_loop()
        self._timers[notification_id] = loop.call_later(
            self._remove_after, self._remove, notification_id
        )

    def _remove(self, notification_id: int) -> None:
        self._timers.pop(notification_id, None)
        self._entries = [n for n in self._entries if n.id != notification_id]
