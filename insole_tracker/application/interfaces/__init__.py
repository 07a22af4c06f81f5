from .key_value_store import KeyValueStore
from .remote_store import RemoteStore

__all__ = [
    "KeyValueStore",
    "RemoteStore",
]
