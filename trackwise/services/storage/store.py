"""
Persistent Key-Value Store Adapter

Typed get/set over a raw KeyValueBackend, with JSON serialization.

CRITICAL: Neither get nor set ever raises.
- Storage missing or unreadable  -> get returns the caller's default
- Stored text is not valid JSON  -> get returns the caller's default
- Serialization or write fails   -> set logs and returns False; the
                                    caller's in-memory value stays authoritative

All backend I/O runs inside a single guard (_storage_guard), which is
the only place storage failures are caught and logged.
"""

import json
from contextlib import contextmanager
from typing import Any, Iterator, Optional, TypeVar, Union

import structlog

from trackwise.services.storage.interface import KeyValueBackend

T = TypeVar("T")


class PersistentStore:
    """
    Best-effort JSON store.

    Each key is independent. A crash between two writes may leave
    two keys out of step with each other; that is acceptable here.
    """

    def __init__(
        self,
        backend: Optional[KeyValueBackend],
        key_prefix: str = "",
        logger=None,
    ):
        """
        Args:
            backend: Raw storage. None means storage is unavailable
                     (headless run, disabled in settings) and every
                     read falls back to its default.
            key_prefix: Prepended to every key before it reaches the backend.
            logger: structlog-compatible logger.
        """
        self._backend = backend
        self._key_prefix = key_prefix
        self._logger = logger or structlog.get_logger(__name__)
        self._backend_failed = False

    @property
    def available(self) -> bool:
        """
        False when there is no backend, or the last backend call failed.

        A later successful write or delete makes the store available again.
        """
        return self._backend is not None and not self._backend_failed

    def full_key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    @contextmanager
    def _storage_guard(self, operation: str, key: str) -> Iterator[None]:
        """Catch and log any failure from the enclosed storage I/O."""
        try:
            yield
        except Exception as e:
            # Data errors (bad JSON, unserialisable values) leave availability alone
            if not isinstance(e, (ValueError, TypeError)):
                self._backend_failed = True
            self._logger.warning(
                "storage_operation_failed",
                operation=operation,
                key=key,
                error_type=type(e).__name__,
                error=str(e),
            )

    def get(self, key: str, default: T) -> Union[Any, T]:
        """
        Read and deserialize the value under a key.

        Returns the default when the key is missing, storage is
        unavailable, or the stored text cannot be parsed.
        """
        full_key = self.full_key(key)
        if self._backend is None:
            self._logger.debug("storage_unavailable", operation="read", key=full_key)
            return default

        with self._storage_guard("read", full_key):
            raw = self._backend.read(full_key)
            if raw is None:
                return default
            return json.loads(raw)

        return default

    def set(self, key: str, value: Any) -> bool:
        """
        Serialize and write a value.

        Returns True if the write reached the backend. A False result
        is informational only; callers do not need to act on it.
        """
        full_key = self.full_key(key)
        if self._backend is None:
            self._logger.debug("storage_unavailable", operation="write", key=full_key)
            return False

        with self._storage_guard("write", full_key):
            payload = json.dumps(value, ensure_ascii=False)
            self._backend.write(full_key, payload)
            self._backend_failed = False
            return True

        return False

    def remove(self, key: str) -> bool:
        """Drop a key entirely. Best effort, like set."""
        full_key = self.full_key(key)
        if self._backend is None:
            return False

        with self._storage_guard("delete", full_key):
            self._backend.delete(full_key)
            self._backend_failed = False
            return True

        return False
