"""Insole state container — the in-memory source of truth behind the UI.

Coordinates the remote store, the local cache and the notification queue.
Mutations happen only after an awaited remote call has settled (or
immediately when no endpoint is configured); the filtered view is
recomputed explicitly after every mutation of the collection or of the
filter/sort criteria.

Concurrency control is cooperative: ``syncing``, ``saving`` and
``deleting`` each allow one operation of their class at a time, and a
call made while the flag is set is dropped, not queued.
"""

import asyncio
from typing import Any

from insole_tracker.application.interfaces import RemoteStore
from insole_tracker.application.schemas.insole import InsoleCreate
from insole_tracker.domain.entities import (
    ATTRIBUTE_TO_WIRE,
    Insole,
    InsoleFilters,
    InsoleStats,
    InsoleType,
    Severity,
    SortDirection,
    SortSpec,
    TrackerSettings,
    dedupe_by_id,
    is_valid_serial,
    now_iso,
    to_iso,
)
from insole_tracker.domain.exceptions import RemoteStoreError, ValidationError
from insole_tracker.infrastructure.logging.colored_logger import StoreLogger, StoreStage

from .debounce import Debouncer
from .insole_diff import diff_insoles
from .insole_view import SORTABLE_FIELDS, compute_stats, derive_view, unique_locations
from .local_cache import LocalCache
from .notification_queue import NotificationQueue

slog = StoreLogger("InsoleStore")

# Attributes that inline editing may change.
EDITABLE_FIELDS = SORTABLE_FIELDS - {"last_modified"}


def _returned_id(result: dict[str, Any]) -> str | None:
    """The authoritative id from an ``addInsole`` result, if the endpoint sent one."""
    data = result.get("data")
    if isinstance(data, dict) and data.get("id"):
        return str(data["id"])
    return None


def normalize_field_value(field: str, raw_value: str) -> str:
    """Trim input; serial numbers are stored uppercase."""
    value = (raw_value or "").strip()
    if field == "serial_number":
        value = value.upper()
    return value


def check_field_value(field: str, value: str) -> None:
    """Reject values outside a field's closed domain."""
    if field == "type":
        try:
            InsoleType(value)
        except ValueError:
            allowed = ", ".join(t.value for t in InsoleType)
            raise ValidationError(f"Type must be one of {allowed}", field="type")


class InsoleStore:
    """Application state for the insole list, its view and pending operations."""

    def __init__(
        self,
        remote: RemoteStore,
        cache: LocalCache,
        notifications: NotificationQueue,
        settings: TrackerSettings | None = None,
        *,
        highlight_seconds: float = 2.5,
        search_debounce_seconds: float = 0.3,
    ) -> None:
        self._remote = remote
        self._cache = cache
        self._notifications = notifications
        self._highlight_seconds = highlight_seconds
        self._highlight_timers: dict[str, asyncio.TimerHandle] = {}
        self._search_debouncer = Debouncer(self._apply_search, search_debounce_seconds)

        self.settings = settings or TrackerSettings()
        self.insoles: list[Insole] = []
        self.filtered: list[Insole] = []
        self.last_synced: str | None = None

        self.loading = True
        self.syncing = False
        self.saving = False
        self.deleting = False
        self.offline = False

        self.filters = InsoleFilters()
        self.sort = SortSpec()

        # Inline edit session and pending delete confirmation
        self.editing: tuple[str, str] | None = None
        self.edit_value = ""
        self.delete_target: str | None = None

    # ── Derived state ───────────────────────────────────────────────

    @property
    def api_configured(self) -> bool:
        return self._remote.is_configured

    @property
    def notifications(self) -> NotificationQueue:
        return self._notifications

    @property
    def stats(self) -> InsoleStats:
        """Counts over the filtered view, so they follow the active filters."""
        return compute_stats(self.filtered, self.settings)

    @property
    def unique_locations(self) -> list[str]:
        return unique_locations(self.insoles)

    @property
    def has_active_filters(self) -> bool:
        return self.filters.is_active()

    def get(self, insole_id: str) -> Insole | None:
        for insole in self.insoles:
            if insole.id == insole_id:
                return insole
        return None

    def recompute(self) -> list[Insole]:
        self.filtered = derive_view(self.insoles, self.filters, self.sort)
        return self.filtered

    # ── Lifecycle ───────────────────────────────────────────────────

    async def initialize(self, online: bool = True) -> None:
        """Show cached data first, then refresh from the remote store when possible."""
        snapshot = self._cache.load()
        if snapshot.insoles:
            self.insoles = snapshot.insoles
            self.last_synced = snapshot.synced_at
        self.loading = not self.insoles
        self.offline = not online

        if self.api_configured and not self.offline:
            await self.synchronize()

        self.loading = False
        self.recompute()

    async def set_online(self, online: bool) -> None:
        """Connectivity signal. Coming back online triggers one synchronization."""
        if not online:
            if not self.offline:
                slog.warning(StoreStage.SYNC, "Connection lost, working from cache")
            self.offline = True
            return
        if self.offline:
            self.offline = False
            await self.synchronize()

    def shutdown(self) -> None:
        """Cancel pending timers (highlight, debounce, notifications)."""
        for timer in self._highlight_timers.values():
            timer.cancel()
        self._highlight_timers.clear()
        self._search_debouncer.cancel()
        self._notifications.shutdown()

    # ── Synchronization ─────────────────────────────────────────────

    async def synchronize(self) -> bool:
        """Replace the collection wholesale with the remote one.

        On failure the current collection is kept and an error notification
        is pushed. Returns True when the collection was replaced.
        """
        if self.syncing or not self.api_configured or self.offline:
            return False
        self.syncing = True

        try:
            with slog.timed_step(StoreStage.SYNC, "Fetching insoles"):
                records = await self._remote.fetch_insoles()
            self.insoles = dedupe_by_id([Insole.from_dict(r) for r in records])
            self.last_synced = now_iso()
            self._persist()
            self.recompute()
            slog.detail("Collection replaced", count=len(self.insoles))
            return True
        except RemoteStoreError:
            self._notifications.push("Failed to sync — using cached data", Severity.ERROR)
            return False
        finally:
            self.syncing = False

    # ── Create ──────────────────────────────────────────────────────

    async def create(self, draft: InsoleCreate) -> Insole | None:
        """Add a new insole; returns it, or None if rejected or the write failed."""
        if self.saving:
            return None

        try:
            insole = self._build_insole(draft)
        except ValidationError as exc:
            slog.warning(StoreStage.CREATE, exc.message)
            self._notifications.push(exc.message, Severity.ERROR)
            return None

        self.saving = True
        try:
            if self.api_configured:
                payload = insole.to_dict()
                payload.pop("lastModified", None)
                with slog.timed_step(StoreStage.CREATE, "Adding insole", serial=insole.serial_number or "-"):
                    result = await self._remote.add_insole(payload)
                remote_id = _returned_id(result)
                if remote_id:
                    insole.id = remote_id

            insole.last_modified = now_iso()
            insole.highlight = True
            self.insoles = [i for i in self.insoles if i.id != insole.id]
            self.insoles.append(insole)
            self._schedule_highlight_clear(insole.id)

            self._notifications.push("Insole added", Severity.SUCCESS)
            self._persist()
            self.recompute()
            return insole
        except RemoteStoreError as exc:
            self._notifications.push(f"Failed to save — {exc.message}", Severity.ERROR)
            return None
        finally:
            self.saving = False

    def _build_insole(self, draft: InsoleCreate) -> Insole:
        """Validate a draft and turn it into a new entity with a local id."""
        if not is_valid_serial(draft.serial_number):
            raise ValidationError(
                "Serial number must be 4 alphanumeric characters", field="serial_number"
            )
        try:
            date_added = to_iso(draft.date_added) if draft.date_added.strip() else now_iso()
        except ValueError:
            raise ValidationError("Date added is not a valid date", field="date_added")
        try:
            date_sent = to_iso(draft.date_sent) if draft.date_sent.strip() else ""
        except ValueError:
            raise ValidationError("Date sent is not a valid date", field="date_sent")

        return Insole(
            serial_number=draft.serial_number.upper(),
            type=InsoleType(draft.type).value,
            size=draft.size,
            location=draft.location,
            enclosure=draft.enclosure,
            pair_status=draft.pair_status,
            date_added=date_added,
            date_sent=date_sent,
            notes=draft.notes,
        )

    def _schedule_highlight_clear(self, insole_id: str) -> None:
        loop = asyncio.get_running_loop()
        previous = self._highlight_timers.pop(insole_id, None)
        if previous is not None:
            previous.cancel()
        self._highlight_timers[insole_id] = loop.call_later(
            self._highlight_seconds, self._clear_highlight, insole_id
        )

    def _clear_highlight(self, insole_id: str) -> None:
        self._highlight_timers.pop(insole_id, None)
        insole = self.get(insole_id)
        if insole is not None:
            insole.highlight = False

    # ── Inline update ───────────────────────────────────────────────

    async def update_field(self, insole_id: str, field: str, raw_value: str) -> bool:
        """Change one field; remote first, local state only once it succeeded.

        Returns True when the field was changed. An unchanged (trimmed)
        value is a no-op without any remote call.
        """
        if self.saving:
            return False
        if field not in EDITABLE_FIELDS:
            self._notifications.push(f"Field '{field}' cannot be edited", Severity.ERROR)
            return False
        insole = self.get(insole_id)
        if insole is None:
            self._notifications.push("Insole not found", Severity.ERROR)
            return False

        value = normalize_field_value(field, raw_value)
        if (insole.get_field(field) or "") == value:
            return False
        try:
            check_field_value(field, value)
        except ValidationError as exc:
            slog.warning(StoreStage.UPDATE, exc.message)
            self._notifications.push(exc.message, Severity.ERROR)
            return False

        self.saving = True
        try:
            if self.api_configured:
                with slog.timed_step(StoreStage.UPDATE, f"Updating {field}", insole_id=insole_id):
                    await self._remote.update_insole({"id": insole_id, ATTRIBUTE_TO_WIRE[field]: value})

            # The collection may have been replaced by a sync meanwhile.
            current = self.get(insole_id)
            if current is not None:
                before = current.to_dict()
                current.set_field(field, value)
                for change in diff_insoles(before, current):
                    slog.detail("Changed", field=change.field, old=change.old_value, new=change.new_value)

            self._persist()
            self.recompute()
            self._notifications.push("Updated", Severity.SUCCESS)
            return True
        except RemoteStoreError as exc:
            self._notifications.push(f"Failed to save — {exc.message}", Severity.ERROR)
            return False
        finally:
            self.saving = False

    def start_edit(self, insole_id: str, field: str) -> bool:
        insole = self.get(insole_id)
        if insole is None or field not in EDITABLE_FIELDS:
            return False
        self.editing = (insole_id, field)
        self.edit_value = insole.get_field(field) or ""
        return True

    def cancel_edit(self) -> None:
        self.editing = None
        self.edit_value = ""

    async def save_edit(self) -> bool:
        """Commit the edit buffer. The session stays open if the write failed."""
        if self.editing is None:
            return False
        insole_id, field = self.editing
        changed = await self.update_field(insole_id, field, self.edit_value)

        insole = self.get(insole_id)
        if insole is None or insole.get_field(field) == normalize_field_value(field, self.edit_value):
            self.cancel_edit()
        return changed

    # ── Delete ──────────────────────────────────────────────────────

    async def remove(self, insole_id: str) -> bool:
        """Delete an insole. Not optimistic: a failed remote delete changes nothing."""
        if self.deleting:
            return False
        self.deleting = True

        try:
            if self.api_configured:
                with slog.timed_step(StoreStage.DELETE, "Deleting insole", insole_id=insole_id):
                    await self._remote.delete_insole(insole_id)

            self.insoles = [i for i in self.insoles if i.id != insole_id]
            self._persist()
            self.recompute()
            self._notifications.push("Insole deleted", Severity.SUCCESS)
            self.delete_target = None
            return True
        except RemoteStoreError as exc:
            self._notifications.push(f"Failed to delete — {exc.message}", Severity.ERROR)
            return False
        finally:
            self.deleting = False

    def confirm_delete(self, insole_id: str) -> None:
        self.delete_target = insole_id

    def cancel_delete(self) -> None:
        self.delete_target = None

    async def delete_confirmed(self) -> bool:
        if self.delete_target is None:
            return False
        return await self.remove(self.delete_target)

    # ── Filters, sorting, settings ──────────────────────────────────

    def set_filters(
        self,
        *,
        search: str | None = None,
        type: str | None = None,
        size: str | None = None,
        location: str | None = None,
    ) -> list[Insole]:
        """Update the given criteria (None leaves a criterion as is)."""
        if search is not None:
            self.filters.search = search
        if type is not None:
            self.filters.type = type
        if size is not None:
            self.filters.size = size
        if location is not None:
            self.filters.location = location
        return self.recompute()

    def clear_filters(self) -> list[Insole]:
        self.filters = InsoleFilters()
        return self.recompute()

    def queue_search(self, text: str) -> None:
        """Debounced search input."""
        self._search_debouncer.call(text)

    def _apply_search(self, text: str) -> None:
        self.filters.search = text
        self.recompute()

    def sort_by(self, field: str) -> bool:
        """Toggle direction on the active field; a new field starts ascending."""
        if field not in SORTABLE_FIELDS:
            self._notifications.push(f"Cannot sort by '{field}'", Severity.ERROR)
            return False
        if self.sort.field == field:
            self.sort.direction = (
                SortDirection.ASC if self.sort.direction == SortDirection.DESC else SortDirection.DESC
            )
        else:
            self.sort = SortSpec(field=field, direction=SortDirection.ASC)
        self.recompute()
        return True

    def set_sort(self, field: str, direction: SortDirection) -> bool:
        if field not in SORTABLE_FIELDS:
            self._notifications.push(f"Cannot sort by '{field}'", Severity.ERROR)
            return False
        self.sort = SortSpec(field=field, direction=SortDirection(direction))
        self.recompute()
        return True

    def apply_settings(self, settings: TrackerSettings) -> None:
        self.settings = settings
        self.recompute()

    # ── Persistence ─────────────────────────────────────────────────

    def _persist(self) -> None:
        self._cache.save(self.insoles, self.last_synced)
