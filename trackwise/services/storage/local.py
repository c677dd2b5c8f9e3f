"""
Local Storage Implementations

DESIGN DECISION: Each collection key is stored as its own JSON file,
"<data_dir>/<key>.json". This mirrors how a browser keeps one local
storage entry per key:
1. Users can open and inspect their data with any text editor
2. No database setup required
3. Keys are independent, one broken file does not affect the others

TRADEOFFS:
- No transactions across keys (acceptable, this is a best-effort cache)
- Two processes writing the same directory are not reconciled;
  the last write wins
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from trackwise.services.storage.interface import (
    InvalidKeyError,
    KeyValueBackend,
    StorageUnavailableError,
    StorageWriteError,
)


class FileKeyValueBackend(KeyValueBackend):
    """
    Stores each key as a UTF-8 text file in a directory.

    Writes go to a temporary file first and are then moved into place,
    so a crash mid-write leaves the previous value intact.
    """

    SUFFIX = ".json"

    def __init__(self, data_dir: Path | str):
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise InvalidKeyError(f"Invalid storage key: {key!r}")
        return self._data_dir / f"{key}{self.SUFFIX}"

    def _ensure_dir(self) -> None:
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailableError(
                f"Cannot create data directory {self._data_dir}: {e}"
            )

    def read(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageUnavailableError(f"Cannot read {path}: {e}")

    @retry(
        retry=retry_if_exception_type(StorageWriteError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=0.5),
        reraise=True,
    )
    def write(self, key: str, value: str) -> None:
        path = self._path_for(key)
        self._ensure_dir()
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._data_dir, prefix=f".{key}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise StorageWriteError(f"Failed to write {path}: {e}")
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def delete(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageWriteError(f"Failed to delete {path}: {e}")

    def keys(self) -> list[str]:
        if not self._data_dir.exists():
            return []
        return sorted(
            p.name[: -len(self.SUFFIX)]
            for p in self._data_dir.glob(f"*{self.SUFFIX}")
            if not p.name.startswith(".")
        )


class InMemoryKeyValueBackend(KeyValueBackend):
    """
    Dictionary-backed storage.

    Used for tests and for sessions where persistence is disabled.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)

    def raw(self, key: str) -> Optional[str]:
        """Peek at the stored text without going through the adapter."""
        return self._data.get(key)
