"""FastAPI dependency injection — wires infrastructure to the application layer.

The state container is process-wide: one collection, one notification
queue and one shared httpx client per running app.
"""

from functools import lru_cache

import httpx

from insole_tracker.config import get_settings
from insole_tracker.application.services import (
    ConfigurationStore,
    HistoryViewer,
    InsoleStore,
    LocalCache,
    NotificationQueue,
    SettingsService,
)
from insole_tracker.infrastructure.remote import AppsScriptClient
from insole_tracker.infrastructure.storage.json_key_value_store import JsonFileKeyValueStore


@lru_cache
def get_http_client() -> httpx.AsyncClient:
    """Shared connection pool for the remote store."""
    settings = get_settings()
    return httpx.AsyncClient(timeout=settings.remote_timeout, follow_redirects=True)


@lru_cache
def get_key_value_store() -> JsonFileKeyValueStore:
    return JsonFileKeyValueStore(get_settings().data_dir)


@lru_cache
def get_remote_store() -> AppsScriptClient:
    settings = get_settings()
    return AppsScriptClient(
        base_url=settings.remote_store_url,
        timeout=settings.remote_timeout,
        http_client=get_http_client(),
    )


@lru_cache
def get_notification_queue() -> NotificationQueue:
    settings = get_settings()
    return NotificationQueue(
        expire_after=settings.notification_expire_seconds,
        remove_after=settings.notification_remove_seconds,
    )


@lru_cache
def get_configuration_store() -> ConfigurationStore:
    return ConfigurationStore(get_key_value_store())


@lru_cache
def get_insole_store() -> InsoleStore:
    """Provides the process-wide InsoleStore with cache, remote and settings wired up."""
    settings = get_settings()
    return InsoleStore(
        remote=get_remote_store(),
        cache=LocalCache(get_key_value_store()),
        notifications=get_notification_queue(),
        settings=get_configuration_store().load(),
        highlight_seconds=settings.highlight_seconds,
        search_debounce_seconds=settings.search_debounce_seconds,
    )


@lru_cache
def get_history_viewer() -> HistoryViewer:
    return HistoryViewer(get_remote_store(), get_notification_queue())


def get_settings_service() -> SettingsService:
    return SettingsService(get_configuration_store(), get_insole_store())
