import json
import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_SETTINGS_FILE_NAME = "settings.json"
_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)
_OVERRIDE_KEYS = frozenset({
    "remote_store_url",
})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Insole Tracker API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:3020"]

    # Remote spreadsheet endpoint (empty = unconfigured, cache-only mode)
    remote_store_url: str = ""
    remote_timeout: float = 30.0

    # On-device key/value store
    data_dir: str = "data"

    # Timers (seconds)
    highlight_seconds: float = 2.5
    notification_expire_seconds: float = 4.0
    notification_remove_seconds: float = 0.3
    search_debounce_seconds: float = 0.3

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_http: str = "WARNING"          # httpx / httpcore (outbound HTTP)
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_remote: str = "INFO"           # Remote store client
    log_level_store: str = "INFO"            # InsoleStore / HistoryViewer

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Merge runtime overrides from <data_dir>/settings.json into the settings."""
        settings_file = Path(self.data_dir) / _SETTINGS_FILE_NAME
        if settings_file.exists():
            try:
                overrides = json.loads(settings_file.read_text("utf-8"))
                for key in _OVERRIDE_KEYS:
                    if key in overrides and isinstance(overrides[key], str):
                        object.__setattr__(self, key, overrides[key])
            except Exception as exc:
                _config_logger.warning("Could not load settings overrides: %s", exc)


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
