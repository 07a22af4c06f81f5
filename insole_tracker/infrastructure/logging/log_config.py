"""Centralized logging configuration.

Per-category log levels come from Settings, so the outbound HTTP chatter
of httpx can be silenced while the state container stays verbose.

Usage:
    from insole_tracker.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, in the FastAPI lifespan
"""

import logging
import sys

from insole_tracker.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Settings field → logger names it controls.
_CATEGORIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("log_level_http", ("httpx", "httpcore")),
    ("log_level_uvicorn", ("uvicorn", "uvicorn.access", "uvicorn.error")),
    ("log_level_remote", ("insole_tracker.infrastructure.remote",)),
    ("log_level_store", ("InsoleStore", "HistoryViewer")),
)


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply root and per-category levels; returns the level set per logger name."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    _ensure_handler(root)

    applied: dict[str, int] = {}
    for field_name, logger_names in _CATEGORIES:
        level = _parse_level(getattr(settings, field_name, "INFO"))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
            applied[name] = level

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s %s",
        settings.log_level,
        " ".join(f"{f}={getattr(settings, f)}" for f, _ in _CATEGORIES),
    )
    return applied


def _ensure_handler(root: logging.Logger) -> None:
    # uvicorn installs its own handlers; scripts and tests may have none.
    if root.handlers:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def _parse_level(raw: str) -> int:
    """Level name to logging constant; unknown names fall back to INFO."""
    numeric = logging.getLevelName((raw or "").strip().upper())
    return numeric if isinstance(numeric, int) else logging.INFO
