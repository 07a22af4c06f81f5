"""Durable storage for the editable reference lists (team members, clients, sizes).

Each list lives under its own key. Missing or unreadable data falls back to
the built-in defaults; saves replace a whole list.
"""

import json
import logging
from typing import Any

from insole_tracker.application.interfaces import KeyValueStore
from insole_tracker.domain.entities import (
    DEFAULT_CLIENTS,
    DEFAULT_SIZES,
    DEFAULT_TEAM_MEMBERS,
    SizeCode,
    TrackerSettings,
)
from insole_tracker.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

TEAM_MEMBERS_KEY = "insole_tracker_team_members"
CLIENTS_KEY = "insole_tracker_clients"
SIZES_KEY = "insole_tracker_sizes"


class ConfigurationStore:
    """Reads and writes TrackerSettings through a KeyValueStore."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    def _read(self, key: str) -> Any:
        """Decode the JSON stored under ``key``, or None if absent/corrupt."""
        try:
            raw = self._store.get(key)
            return json.loads(raw) if raw else None
        except Exception:
            logger.warning("Could not read %s — using defaults", key)
            return None

    def get_team_members(self) -> list[str]:
        stored = self._read(TEAM_MEMBERS_KEY)
        if isinstance(stored, list) and all(isinstance(m, str) for m in stored):
            return stored
        return list(DEFAULT_TEAM_MEMBERS)

    def get_clients(self) -> list[str]:
        stored = self._read(CLIENTS_KEY)
        if isinstance(stored, list) and all(isinstance(c, str) for c in stored):
            return stored
        return list(DEFAULT_CLIENTS)

    def get_sizes(self) -> list[SizeCode]:
        stored = self._read(SIZES_KEY)
        if isinstance(stored, list) and all(
            isinstance(s, dict) and "code" in s and "range" in s for s in stored
        ):
            return [SizeCode(code=str(s["code"]), range=str(s["range"])) for s in stored]
        return list(DEFAULT_SIZES)

    def load(self) -> TrackerSettings:
        return TrackerSettings(
            team_members=self.get_team_members(),
            clients=self.get_clients(),
            sizes=self.get_sizes(),
        )

    def save_team_members(self, members: list[str]) -> None:
        self._store.set(TEAM_MEMBERS_KEY, json.dumps(members))

    def save_clients(self, clients: list[str]) -> None:
        self._store.set(CLIENTS_KEY, json.dumps(clients))

    def save_sizes(self, sizes: list[SizeCode]) -> None:
        self._store.set(SIZES_KEY, json.dumps([{"code": s.code, "range": s.range} for s in sizes]))

    def save(
        self,
        team_members: list[str],
        clients: list[str],
        sizes: list[SizeCode],
    ) -> TrackerSettings:
        """Validate and persist all three lists; returns the stored settings.

        Blank entries are dropped (a size needs both code and range).
        Duplicates are kept as entered.

        Raises:
            ValidationError: If no team member or no size remains.
        """
        members = [m.strip() for m in team_members if m.strip()]
        client_names = [c.strip() for c in clients if c.strip()]
        size_codes = [
            SizeCode(code=s.code.strip(), range=s.range.strip())
            for s in sizes
            if s.code.strip() and s.range.strip()
        ]

        if not members:
            raise ValidationError("At least one team member is required", field="team_members")
        if not size_codes:
            raise ValidationError("At least one size is required", field="sizes")

        self.save_team_members(members)
        self.save_clients(client_names)
        self.save_sizes(size_codes)
        logger.info(
            "Settings saved: %d team members, %d clients, %d sizes",
            len(members), len(client_names), len(size_codes),
        )
        return TrackerSettings(team_members=members, clients=client_names, sizes=size_codes)
