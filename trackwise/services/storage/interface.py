"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for raw key-value storage.
This allows us to:
1. Keep state on disk today and swap in another backend later
2. Use in-memory storage for testing
3. Simulate broken or missing storage in tests

The interface is intentionally tiny: raw strings in, raw strings out.
Serialization and failure recovery live one layer up, in PersistentStore.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueBackend(ABC):
    """
    Abstract interface for a raw string key-value store.

    Backends MAY raise StorageError subclasses. They are never
    called directly by application code, only through PersistentStore,
    which catches and logs every failure.
    """

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """
        Read the raw value stored under a key.

        Returns:
            The stored text, or None if the key is absent

        Raises:
            StorageUnavailableError: If the backend cannot be reached
        """
        pass

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """
        Store raw text under a key, replacing any previous value.

        Raises:
            StorageWriteError: If the value could not be written
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored keys in sorted order."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageUnavailableError(StorageError):
    """Backend is missing or cannot be reached."""
    pass


class StorageWriteError(StorageError):
    """A value could not be written (disk full, permissions, ...)."""
    pass


class InvalidKeyError(StorageError, ValueError):
    """The key cannot name a stored entry. Retrying will not help."""
    pass
