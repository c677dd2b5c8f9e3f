"""Services package."""

from trackwise.services.storage import (
    FileKeyValueBackend,
    InMemoryKeyValueBackend,
    KeyValueBackend,
    PersistentStore,
    StorageError,
    StorageUnavailableError,
    StorageWriteError,
)

__all__ = [
    "FileKeyValueBackend",
    "InMemoryKeyValueBackend",
    "KeyValueBackend",
    "PersistentStore",
    "StorageError",
    "StorageUnavailableError",
    "StorageWriteError",
]
