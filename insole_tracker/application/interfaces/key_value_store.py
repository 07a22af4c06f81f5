"""Abstract key/value persistence interface (port) for on-device state."""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Port for durable string storage — implemented in the infrastructure layer.

    Each ``set`` replaces one key atomically.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Persist a value under ``key``."""
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key`` if present."""
        ...
