"""Shared fixtures: in-memory storage and fakes for loggers and backends."""

from typing import Optional

import pytest

from trackwise.audit import ChangeLogger
from trackwise.services.storage import (
    InMemoryKeyValueBackend,
    KeyValueBackend,
    PersistentStore,
    StorageUnavailableError,
    StorageWriteError,
)
from trackwise.state import AppState


class RecordingLogger:
    """Stands in for a structlog logger and remembers every call."""

    def __init__(self):
        self.calls: list[tuple[str, str, dict]] = []

    def _record(self, level, event, **kwargs):
        self.calls.append((level, event, kwargs))

    def debug(self, event, **kwargs):
        self._record("debug", event, **kwargs)

    def info(self, event, **kwargs):
        self._record("info", event, **kwargs)

    def warning(self, event, **kwargs):
        self._record("warning", event, **kwargs)

    def error(self, event, **kwargs):
        self._record("error", event, **kwargs)

    def events(self, level: Optional[str] = None) -> list[str]:
        return [event for lvl, event, _ in self.calls if level is None or lvl == level]


class FailingBackend(KeyValueBackend):
    """Reads work; every write fails like a full disk."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data = dict(initial or {})
        self.write_attempts = 0

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self.write_attempts += 1
        raise StorageWriteError("quota exceeded")

    def delete(self, key: str) -> None:
        raise StorageWriteError("quota exceeded")

    def keys(self) -> list[str]:
        return sorted(self._data)


class UnreadableBackend(InMemoryKeyValueBackend):
    """Every read fails as if storage were locked."""

    def read(self, key: str) -> Optional[str]:
        raise StorageUnavailableError("storage is locked")


@pytest.fixture
def backend() -> InMemoryKeyValueBackend:
    return InMemoryKeyValueBackend()


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def store(backend, recording_logger) -> PersistentStore:
    return PersistentStore(backend, key_prefix="trackwise_", logger=recording_logger)


@pytest.fixture
def change_logger() -> ChangeLogger:
    return ChangeLogger(logger=RecordingLogger())


@pytest.fixture
def state(store, change_logger) -> AppState:
    return AppState(store, change_logger=change_logger)
