"""Unit tests for the InsoleStore state container."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import pytest

from insole_tracker.application.interfaces import KeyValueStore, RemoteStore
from insole_tracker.application.schemas import InsoleCreate
from insole_tracker.application.services import InsoleStore, LocalCache, NotificationQueue
from insole_tracker.application.services.local_cache import CACHE_DATA_KEY
from insole_tracker.domain.entities import (
    Insole,
    InsoleType,
    Severity,
    SizeCode,
    SortDirection,
    TrackerSettings,
)
from insole_tracker.domain.exceptions import ApplicationError, RemoteStoreError, TransportError


class FakeRemoteStore(RemoteStore):
    """In-memory fake remote store for unit testing."""

    def __init__(self, records: list[dict[str, Any]] | None = None, configured: bool = True):
        self.records = records or []
        self.configured = configured
        self.error: RemoteStoreError | None = None
        self.gate: asyncio.Event | None = None
        self.add_result: dict[str, Any] = {"success": True}
        self.list_calls = 0
        self.writes: list[tuple[str, dict[str, Any]]] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def list(self, resource: str) -> list[dict[str, Any]]:
        self.list_calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error:
            raise self.error
        return [dict(r) for r in self.records]

    async def write(self, action: str, payload: dict[str, Any]) -> dict[str, Any]:
        self.writes.append((action, payload))
        if self.error:
            raise self.error
        if action == "addInsole":
            return self.add_result
        return {"success": True}

    async def read_detail(self, resource: str, key_name: str, key: str) -> list[dict[str, Any]]:
        return []


class FakeKeyValueStore(KeyValueStore):
    def __init__(self):
        self.values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def remove(self, key: str) -> None:
        self.values.pop(key, None)


def _make_store(remote: FakeRemoteStore, kv: FakeKeyValueStore | None = None) -> InsoleStore:
    return InsoleStore(
        remote=remote,
        cache=LocalCache(kv or FakeKeyValueStore()),
        notifications=NotificationQueue(),
        highlight_seconds=0.01,
        search_debounce_seconds=0.01,
    )


def _seed(store: InsoleStore, *insoles: Insole) -> None:
    store.insoles = list(insoles)
    store.recompute()


def _cached_ids(kv: FakeKeyValueStore) -> list[str]:
    return [r["id"] for r in json.loads(kv.values[CACHE_DATA_KEY])]


# ── Initialization & sync ──


@pytest.mark.asyncio
async def test_initialize_shows_cache_then_replaces_from_remote():
    kv = FakeKeyValueStore()
    LocalCache(kv).save([Insole(id="cached")], "2024-01-01T00:00:00.000Z")
    remote = FakeRemoteStore(records=[{"id": "r1", "serialNumber": "AB12"}])
    store = _make_store(remote, kv)

    await store.initialize()

    assert [i.id for i in store.insoles] == ["r1"]
    assert [i.id for i in store.filtered] == ["r1"]
    assert store.loading is False
    assert store.last_synced != "2024-01-01T00:00:00.000Z"
    assert _cached_ids(kv) == ["r1"]


@pytest.mark.asyncio
async def test_initialize_without_endpoint_uses_cache_only():
    kv = FakeKeyValueStore()
    LocalCache(kv).save([Insole(id="cached")], "2024-01-01T00:00:00.000Z")
    remote = FakeRemoteStore(configured=False)
    store = _make_store(remote, kv)

    await store.initialize()

    assert [i.id for i in store.insoles] == ["cached"]
    assert store.last_synced == "2024-01-01T00:00:00.000Z"
    assert store.api_configured is False
    assert remote.list_calls == 0


@pytest.mark.asyncio
async def test_initialize_offline_skips_sync():
    remote = FakeRemoteStore(records=[{"id": "r1"}])
    store = _make_store(remote)

    await store.initialize(online=False)

    assert store.offline is True
    assert store.insoles == []
    assert store.loading is False
    assert remote.list_calls == 0


@pytest.mark.asyncio
async def test_sync_failure_keeps_collection_and_notifies():
    remote = FakeRemoteStore()
    remote.error = TransportError("API error: 500")
    store = _make_store(remote)
    _seed(store, Insole(id="1"))

    assert await store.synchronize() is False

    assert [i.id for i in store.insoles] == ["1"]
    assert store.syncing is False
    latest = store.notifications.latest()
    assert latest.message == "Failed to sync — using cached data"
    assert latest.severity == Severity.ERROR
    store.shutdown()


@pytest.mark.asyncio
async def test_concurrent_sync_reaches_remote_once():
    remote = FakeRemoteStore(records=[{"id": "r1"}])
    remote.gate = asyncio.Event()
    store = _make_store(remote)

    first = asyncio.create_task(store.synchronize())
    await asyncio.sleep(0)
    assert store.syncing is True

    assert await store.synchronize() is False

    remote.gate.set()
    assert await first is True
    assert remote.list_calls == 1
    assert store.syncing is False


@pytest.mark.asyncio
async def test_sync_drops_duplicate_ids():
    remote = FakeRemoteStore(records=[
        {"id": "1", "notes": "first"},
        {"id": "1", "notes": "second"},
        {"id": "2"},
    ])
    store = _make_store(remote)

    await store.synchronize()

    assert [i.id for i in store.insoles] == ["1", "2"]
    assert store.insoles[0].notes == "first"


@pytest.mark.asyncio
async def test_set_online_triggers_one_sync():
    remote = FakeRemoteStore(records=[{"id": "r1"}])
    store = _make_store(remote)
    await store.initialize(online=False)

    await store.set_online(True)
    await store.set_online(True)

    assert store.offline is False
    assert remote.list_calls == 1
    assert [i.id for i in store.insoles] == ["r1"]

    await store.set_online(False)
    assert store.offline is True
    assert await store.synchronize() is False


# ── Create ──


@pytest.mark.asyncio
async def test_create_rejects_malformed_serial_without_remote_call():
    remote = FakeRemoteStore()
    store = _make_store(remote)

    result = await store.create(InsoleCreate(serial_number="ab1"))

    assert result is None
    assert store.insoles == []
    assert remote.writes == []
    assert store.notifications.latest_error() == "Serial number must be 4 alphanumeric characters"
    store.shutdown()


@pytest.mark.asyncio
async def test_create_rejects_invalid_date():
    store = _make_store(FakeRemoteStore())

    assert await store.create(InsoleCreate(serial_number="AB12", date_added="yesterday")) is None
    assert store.insoles == []
    store.shutdown()


@pytest.mark.asyncio
async def test_create_adopts_remote_id_and_highlights():
    kv = FakeKeyValueStore()
    remote = FakeRemoteStore()
    remote.add_result = {"success": True, "data": {"id": "srv-9"}}
    store = _make_store(remote, kv)

    insole = await store.create(InsoleCreate(
        serial_number="ab12",
        type=InsoleType.ADVANCED,
        size="D",
        location="Spire",
        date_added="2024-01-15",
    ))

    assert insole is not None
    assert insole.id == "srv-9"
    assert insole.serial_number == "AB12"
    assert insole.date_added == "2024-01-15T00:00:00.000Z"
    assert insole.last_modified
    assert insole.highlight is True

    action, payload = remote.writes[0]
    assert action == "addInsole"
    assert payload["serialNumber"] == "AB12"
    assert "lastModified" not in payload

    assert _cached_ids(kv) == ["srv-9"]
    assert store.notifications.latest().message == "Insole added"
    assert store.saving is False

    await asyncio.sleep(0.05)
    assert insole.highlight is False
    store.shutdown()


@pytest.mark.asyncio
async def test_create_replaces_entry_with_returned_id():
    remote = FakeRemoteStore()
    remote.add_result = {"success": True, "data": {"id": "1"}}
    store = _make_store(remote)
    _seed(store, Insole(id="1", notes="old"))

    await store.create(InsoleCreate(serial_number="AB12", notes="new"))

    assert [i.notes for i in store.insoles] == ["new"]
    store.shutdown()


@pytest.mark.asyncio
async def test_create_failure_leaves_collection_unchanged():
    remote = FakeRemoteStore()
    remote.error = ApplicationError("Duplicate serial")
    store = _make_store(remote)

    assert await store.create(InsoleCreate(serial_number="AB12")) is None

    assert store.insoles == []
    assert store.saving is False
    assert store.notifications.latest_error() == "Failed to save — Duplicate serial"
    store.shutdown()


@pytest.mark.asyncio
async def test_create_without_endpoint_is_local_only():
    remote = FakeRemoteStore(configured=False)
    store = _make_store(remote)

    insole = await store.create(InsoleCreate())

    assert insole is not None
    assert remote.writes == []
    assert insole.date_added.endswith("Z")
    assert insole.date_sent == ""
    assert [i.id for i in store.insoles] == [insole.id]
    store.shutdown()


# ── Update ──


@pytest.mark.asyncio
async def test_update_field_writes_remote_then_local():
    kv = FakeKeyValueStore()
    remote = FakeRemoteStore()
    store = _make_store(remote, kv)
    _seed(store, Insole(id="1", location="Stock"))

    assert await store.update_field("1", "location", "  Spire ") is True

    assert remote.writes == [("updateInsole", {"id": "1", "location": "Spire"})]
    assert store.get("1").location == "Spire"
    assert store.get("1").last_modified
    assert json.loads(kv.values[CACHE_DATA_KEY])[0]["location"] == "Spire"
    assert store.notifications.latest().message == "Updated"
    store.shutdown()


@pytest.mark.asyncio
async def test_update_serial_is_uppercased():
    remote = FakeRemoteStore()
    store = _make_store(remote)
    _seed(store, Insole(id="1", serial_number="AB12"))

    await store.update_field("1", "serial_number", "cd34")

    assert remote.writes == [("updateInsole", {"id": "1", "serialNumber": "CD34"})]
    store.shutdown()


@pytest.mark.asyncio
async def test_unchanged_value_is_a_noop():
    remote = FakeRemoteStore()
    store = _make_store(remote)
    _seed(store, Insole(id="1", location="Stock", last_modified="2024-01-01T00:00:00.000Z"))

    assert await store.update_field("1", "location", " Stock ") is False

    assert remote.writes == []
    assert store.get("1").last_modified == "2024-01-01T00:00:00.000Z"


@pytest.mark.asyncio
async def test_update_failure_keeps_old_value():
    remote = FakeRemoteStore()
    remote.error = TransportError("API error: 502")
    store = _make_store(remote)
    _seed(store, Insole(id="1", location="Stock"))

    assert await store.update_field("1", "location", "Spire") is False

    assert store.get("1").location == "Stock"
    assert store.saving is False
    assert store.notifications.latest_error() == "Failed to save — API error: 502"
    store.shutdown()


@pytest.mark.asyncio
async def test_update_rejects_non_editable_field():
    remote = FakeRemoteStore()
    store = _make_store(remote)
    _seed(store, Insole(id="1"))

    assert await store.update_field("1", "id", "2") is False
    assert await store.update_field("missing", "notes", "x") is False
    assert remote.writes == []
    store.shutdown()


@pytest.mark.asyncio
async def test_update_rejects_unknown_type():
    remote = FakeRemoteStore()
    store = _make_store(remote)
    _seed(store, Insole(id="1", type="Core"))

    assert await store.update_field("1", "type", "Banana") is False
    assert remote.writes == []
    assert store.get("1").type == "Core"
    assert store.notifications.latest_error() == "Type must be one of Core, Advanced"

    assert await store.update_field("1", "type", " Advanced ") is True
    assert remote.writes == [("updateInsole", {"id": "1", "type": "Advanced"})]
    store.shutdown()


@pytest.mark.asyncio
async def test_edit_session_closes_on_success_and_stays_open_on_failure():
    remote = FakeRemoteStore()
    store = _make_store(remote)
    _seed(store, Insole(id="1", notes=""))

    assert store.start_edit("1", "notes")
    store.edit_value = "first pair"
    assert await store.save_edit() is True
    assert store.editing is None

    remote.error = TransportError("API error: 500")
    store.start_edit("1", "notes")
    store.edit_value = "second pair"
    assert await store.save_edit() is False
    assert store.editing == ("1", "notes")
    assert store.get("1").notes == "first pair"

    store.cancel_edit()
    assert store.editing is None
    store.shutdown()


# ── Delete ──


@pytest.mark.asyncio
async def test_remove_deletes_remote_then_local():
    remote = FakeRemoteStore()
    store = _make_store(remote)
    _seed(store, Insole(id="1"), Insole(id="2"))

    assert await store.remove("1") is True

    assert remote.writes == [("deleteInsole", {"id": "1"})]
    assert [i.id for i in store.insoles] == ["2"]
    assert [i.id for i in store.filtered] == ["2"]
    store.shutdown()


@pytest.mark.asyncio
async def test_remove_failure_keeps_insole():
    remote = FakeRemoteStore()
    remote.error = ApplicationError("Row not found")
    store = _make_store(remote)
    _seed(store, Insole(id="1"))

    assert await store.remove("1") is False

    assert [i.id for i in store.insoles] == ["1"]
    assert store.deleting is False
    assert store.notifications.latest_error() == "Failed to delete — Row not found"
    store.shutdown()


@pytest.mark.asyncio
async def test_remove_without_endpoint_is_local_only():
    remote = FakeRemoteStore(configured=False)
    store = _make_store(remote)
    _seed(store, Insole(id="1"))

    assert await store.remove("1") is True
    assert remote.writes == []
    assert store.insoles == []
    store.shutdown()


@pytest.mark.asyncio
async def test_delete_confirmation_flow():
    store = _make_store(FakeRemoteStore())
    _seed(store, Insole(id="1"), Insole(id="2"))

    store.confirm_delete("1")
    store.cancel_delete()
    assert await store.delete_confirmed() is False

    store.confirm_delete("2")
    assert await store.delete_confirmed() is True
    assert store.delete_target is None
    assert [i.id for i in store.insoles] == ["1"]
    store.shutdown()


# ── View state ──


@pytest.mark.asyncio
async def test_sort_by_toggles_direction():
    store = _make_store(FakeRemoteStore())
    assert store.sort.field == "date_added"
    assert store.sort.direction == SortDirection.DESC

    assert store.sort_by("serial_number")
    assert store.sort.direction == SortDirection.ASC
    store.sort_by("serial_number")
    assert store.sort.direction == SortDirection.DESC
    store.sort_by("date_added")
    assert (store.sort.field, store.sort.direction) == ("date_added", SortDirection.ASC)

    assert store.sort_by("bogus") is False
    assert store.sort.field == "date_added"
    store.shutdown()


@pytest.mark.asyncio
async def test_filters_drive_view_and_stats():
    store = _make_store(FakeRemoteStore())
    _seed(
        store,
        Insole(id="1", type="Core", size="C", location="Ahmed"),
        Insole(id="2", type="Advanced", size="D", location="Spire"),
    )

    store.set_filters(type="Advanced")

    assert [i.id for i in store.filtered] == ["2"]
    assert store.has_active_filters
    assert (store.stats.core, store.stats.advanced, store.stats.with_clients) == (0, 1, 1)

    store.clear_filters()
    assert len(store.filtered) == 2
    assert not store.has_active_filters


@pytest.mark.asyncio
async def test_queue_search_applies_after_delay():
    store = _make_store(FakeRemoteStore())
    _seed(store, Insole(id="1", serial_number="AB12"), Insole(id="2", serial_number="CD34"))

    store.queue_search("a")
    store.queue_search("ab")
    assert len(store.filtered) == 2

    await asyncio.sleep(0.05)
    assert store.filters.search == "ab"
    assert [i.id for i in store.filtered] == ["1"]


@pytest.mark.asyncio
async def test_apply_settings_changes_stats_sizes():
    store = _make_store(FakeRemoteStore())
    _seed(store, Insole(id="1", size="X"))

    store.apply_settings(TrackerSettings(team_members=["Mia"], clients=[], sizes=[SizeCode("X", "50")]))

    assert store.stats.sizes == {"X": 1}
