"""Local filesystem key/value store — one JSON document per key.

Storage layout:
    <data_dir>/<key>.json

Writes go to a temporary sibling first and are moved into place with
``os.replace`` so a key is either the old or the new value, never a mix.
"""

import logging
import os
import re
import tempfile
from pathlib import Path

from insole_tracker.application.interfaces.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


def _sanitise(name: str, max_len: int = 80) -> str:
    """Replace non-word characters with underscores and truncate."""
    return re.sub(r"[^\w\-]", "_", name)[:max_len].strip("_") or "unnamed"


class JsonFileKeyValueStore(KeyValueStore):
    """Infrastructure adapter for on-device key/value persistence."""

    def __init__(self, data_dir: str):
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self._data_dir / f"{_sanitise(key)}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        fd, tmp_name = tempfile.mkstemp(dir=self._data_dir, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Stored key %s (%d chars)", key, len(value))

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
