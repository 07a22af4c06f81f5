"""ANSI-colored console logging for the insole state container.

Each operation class has its own color, so a sync, an inline edit and a
failed delete stand apart in a busy terminal:

    Cyan    sync, history reads
    Green   create
    Yellow  update
    Magenta delete
    Blue    settings
    Gray    cache, details
    Red     failures
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, NamedTuple

_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_RED = "\033[91m"
_GREEN = "\033[92m"
_YELLOW = "\033[93m"
_BLUE = "\033[94m"
_MAGENTA = "\033[95m"
_CYAN = "\033[96m"
_GRAY = "\033[90m"


class Stage(NamedTuple):
    label: str
    color: str


class StoreStage:
    """Operation classes logged by the store and the history viewer."""

    SYNC = Stage("SYNC", _CYAN)
    CACHE = Stage("CACHE", _GRAY)
    CREATE = Stage("CREATE", _GREEN)
    UPDATE = Stage("UPDATE", _YELLOW)
    DELETE = Stage("DELETE", _MAGENTA)
    HISTORY = Stage("HISTORY", _CYAN)
    SETTINGS = Stage("SETTINGS", _BLUE)
    ERROR = Stage("ERROR", _RED)


def _fields(values: dict[str, Any]) -> str:
    if not values:
        return ""
    joined = " ".join(f"{k}={v}" for k, v in values.items())
    return f" {_GRAY}[{joined}]{_RESET}"


class StoreLogger:
    """Color-coded logger bound to one component name.

    Usage:
        slog = StoreLogger("InsoleStore")
        with slog.timed_step(StoreStage.SYNC, "Fetching insoles"):
            records = await remote.fetch_insoles()
        slog.detail("Collection replaced", count=len(records))
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def _line(self, stage: Stage, text: str, color: str | None = None) -> str:
        return f"{stage.color}{_BOLD}{stage.label:<8}{_RESET} {color or stage.color}{text}{_RESET}"

    def warning(self, stage: Stage, message: str) -> None:
        self._logger.warning(self._line(stage, message, _YELLOW))

    def error(self, message: str, exc_info: bool = False) -> None:
        self._logger.error(self._line(StoreStage.ERROR, message), exc_info=exc_info)

    def detail(self, message: str, **fields: Any) -> None:
        self._logger.info(f"{_GRAY}         · {message}{_RESET}{_fields(fields)}")

    @contextmanager
    def timed_step(self, stage: Stage, message: str, **fields: Any):
        """Log an operation's start and its outcome with the elapsed time.

        Exceptions are logged in red and re-raised unchanged.
        """
        self._logger.info(self._line(stage, f"{message}...") + _fields(fields))
        started = time.perf_counter()
        try:
            yield
        except Exception as exc:
            elapsed = time.perf_counter() - started
            self._logger.error(
                self._line(stage, f"{message} failed after {elapsed:.2f}s", _RED)
                + f" {_DIM}{type(exc).__name__}: {exc}{_RESET}"
            )
            raise
        elapsed = time.perf_counter() - started
        self._logger.info(self._line(stage, f"{message} done in {elapsed:.2f}s", _GREEN))
