"""
Storage Services Package

Provides the raw key-value interface, local implementations, and the
best-effort JSON adapter the rest of the app talks to.
"""

from trackwise.services.storage.interface import (
    InvalidKeyError,
    KeyValueBackend,
    StorageError,
    StorageUnavailableError,
    StorageWriteError,
)
from trackwise.services.storage.local import (
    FileKeyValueBackend,
    InMemoryKeyValueBackend,
)
from trackwise.services.storage.store import PersistentStore

__all__ = [
    # Interfaces
    "KeyValueBackend",
    # Exceptions
    "StorageError",
    "InvalidKeyError",
    "StorageUnavailableError",
    "StorageWriteError",
    # Implementations
    "FileKeyValueBackend",
    "InMemoryKeyValueBackend",
    # Adapter
    "PersistentStore",
]
