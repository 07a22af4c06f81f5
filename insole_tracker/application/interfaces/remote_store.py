"""Abstract remote store interface — port for the spreadsheet endpoint adapter.

The endpoint is action-dispatched: reads name an action (``getInsoles``),
writes name an action and carry a payload (``addInsole``). The high-level
insole helpers are defined here on top of the three primitives so every
adapter shares the same action names.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class RemoteStore(ABC):
    """Port — defines what the application layer needs from the remote store."""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True when an endpoint URL is set."""
        ...

    @abstractmethod
    async def list(self, resource: str) -> list[dict[str, Any]]:
        """Read every record of a resource.

        Raises:
            NotConfiguredError: If no endpoint is set (no request is made).
            TransportError: On network or HTTP-status failure.
            ApplicationError: If the endpoint answers ``success: false``.
        """
        ...

    @abstractmethod
    async def write(self, action: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Perform a write and return the endpoint's full result object.

        Raises:
            NotConfiguredError, TransportError, ApplicationError.
        """
        ...

    @abstractmethod
    async def read_detail(self, resource: str, key_name: str, key: str) -> list[dict[str, Any]]:
        """Read the records related to one entity (e.g. its history)."""
        ...

    # ── High-level helpers ─────────────────────────────────────────

    async def fetch_insoles(self) -> list[dict[str, Any]]:
        return await self.list("getInsoles")

    async def fetch_history(self, insole_id: str) -> list[dict[str, Any]]:
        return await self.read_detail("getHistory", "insoleId", insole_id)

    async def add_insole(self, record: dict[str, Any]) -> dict[str, Any]:
        return await self.write("addInsole", record)

    async def update_insole(self, record: dict[str, Any]) -> dict[str, Any]:
        return await self.write("updateInsole", record)

    async def delete_insole(self, insole_id: str) -> dict[str, Any]:
        return await self.write("deleteInsole", {"id": insole_id})
