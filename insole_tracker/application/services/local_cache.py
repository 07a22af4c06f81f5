"""Best-effort on-device cache of the last known insole collection.

Reads and writes never raise: a cache that cannot be read behaves as an
empty cache, and a failed write is only logged.
"""

import json
from dataclasses import dataclass, field

from insole_tracker.application.interfaces import KeyValueStore
from insole_tracker.domain.entities import Insole, dedupe_by_id
from insole_tracker.infrastructure.logging.colored_logger import StoreLogger, StoreStage

slog = StoreLogger("InsoleStore")

CACHE_DATA_KEY = "insole_tracker_data"
CACHE_SYNCED_KEY = "insole_tracker_synced"


@dataclass
class CacheSnapshot:
    """What the cache held: the collection and when it was last synced."""

    insoles: list[Insole] = field(default_factory=list)
    synced_at: str | None = None


class LocalCache:
    """Persists the full collection and sync timestamp, one key each."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    def save(self, insoles: list[Insole], synced_at: str | None) -> None:
        try:
            payload = json.dumps([insole.to_dict() for insole in insoles])
            self._store.set(CACHE_DATA_KEY, payload)
            if synced_at:
                self._store.set(CACHE_SYNCED_KEY, synced_at)
            else:
                self._store.remove(CACHE_SYNCED_KEY)
        except Exception as exc:
            slog.warning(StoreStage.CACHE, f"Could not write insole cache: {exc}")

    def load(self) -> CacheSnapshot:
        try:
            raw = self._store.get(CACHE_DATA_KEY)
            if not raw:
                return CacheSnapshot()
            records = json.loads(raw)
            if not isinstance(records, list):
                return CacheSnapshot()
            insoles = [Insole.from_dict(r) for r in records if isinstance(r, dict)]
            synced_at = self._store.get(CACHE_SYNCED_KEY) or None
        except Exception as exc:
            slog.warning(StoreStage.CACHE, f"Could not read insole cache, starting empty: {exc}")
            return CacheSnapshot()
        return CacheSnapshot(insoles=dedupe_by_id(insoles), synced_at=synced_at)
