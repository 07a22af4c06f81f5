"""Spreadsheet endpoint client — implements the RemoteStore interface.

Talks to a single action-dispatched URL (a Google Apps Script web app)
using httpx. Reads are ``GET ?action=...``; writes are a ``text/plain``
POST with a one-shot GET fallback for deployments whose redirect chain
rejects POST bodies.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from insole_tracker.application.interfaces.remote_store import RemoteStore
from insole_tracker.domain.exceptions import (
    ApplicationError,
    NotConfiguredError,
    TransportError,
)

logger = logging.getLogger(__name__)


class AppsScriptClient(RemoteStore):
    """Infrastructure adapter — connects to the spreadsheet endpoint.

    Uses an injected httpx.AsyncClient when given (shared connection pool),
    otherwise opens a short-lived client per call.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.strip()
        self._timeout = timeout
        self._http_client = http_client

    @property
    def is_configured(self) -> bool:
        return bool(self._base_url)

    def _ensure_configured(self) -> None:
        if not self.is_configured:
            raise NotConfiguredError()

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)

    # ── Reads ───────────────────────────────────────────────────────

    async def list(self, resource: str) -> list[dict[str, Any]]:
        """Read all records for ``resource`` (e.g. ``getInsoles``)."""
        result = await self._read({"action": resource})
        return _records(result)

    async def read_detail(self, resource: str, key_name: str, key: str) -> list[dict[str, Any]]:
        """Read records related to one entity, e.g. ``getHistory&insoleId=...``."""
        result = await self._read({"action": resource, key_name: key})
        return _records(result)

    async def _read(self, params: dict[str, str]) -> dict[str, Any]:
        self._ensure_configured()

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            return await self._get_json(client, params)
        finally:
            if should_close:
                await client.aclose()

    # ── Writes ──────────────────────────────────────────────────────

    async def write(self, action: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Send a write, falling back to the GET encoding if the POST mode fails.

        The fallback is attempted at most once, without delay. Writes are
        assumed idempotent on the server side, since a POST that raised may
        still have been applied.
        """
        self._ensure_configured()

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            result = await self._try_post(client, action, payload)
            if result is not None:
                return self._check_result(result)

            params = {"action": action, "data": json.dumps(payload)}
            if payload.get("id"):
                params["id"] = str(payload["id"])
            return await self._get_json(client, params)
        finally:
            if should_close:
                await client.aclose()

    async def _try_post(
        self, client: httpx.AsyncClient, action: str, payload: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Primary write mode. Returns None when the mode itself is unusable.

        A plain-text content type keeps browsers from issuing a preflight;
        the server parses the body as JSON regardless.
        """
        body: dict[str, Any] = {"action": action, "data": payload}
        if payload.get("id"):
            body["id"] = payload["id"]

        try:
            response = await client.post(
                self._base_url,
                content=json.dumps(body),
                headers={"Content-Type": "text/plain"},
            )
        except httpx.HTTPError as exc:
            logger.info("POST %s failed (%s) — retrying as GET", action, exc)
            return None

        if not response.is_success:
            raise TransportError(
                f"API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            result = response.json()
        except ValueError:
            logger.info("POST %s returned a non-JSON body — retrying as GET", action)
            return None

        if not isinstance(result, dict) or "success" not in result:
            logger.info("POST %s returned no result envelope — retrying as GET", action)
            return None
        return result

    # ── Shared helpers ──────────────────────────────────────────────

    async def _get_json(self, client: httpx.AsyncClient, params: dict[str, str]) -> dict[str, Any]:
        """Issue a GET and return the checked result envelope."""
        try:
            response = await client.get(self._base_url, params=params)
        except httpx.HTTPError as exc:
            raise TransportError(f"Request failed: {exc}") from exc

        if not response.is_success:
            raise TransportError(
                f"API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            result = response.json()
        except ValueError as exc:
            raise TransportError("API returned a non-JSON response") from exc

        if not isinstance(result, dict):
            raise TransportError("API returned an unexpected response shape")
        return self._check_result(result)

    @staticmethod
    def _check_result(result: dict[str, Any]) -> dict[str, Any]:
        """Raise ApplicationError unless the envelope reports success."""
        if not result.get("success"):
            raise ApplicationError(result.get("error") or "Unknown API error")
        return result


def _records(result: dict[str, Any]) -> list[dict[str, Any]]:
    data = result.get("data") or []
    if not isinstance(data, list):
        return []
    return [item for item in data if isinstance(item, dict)]
