"""
Entity Repository

One repository per stored collection. Each repository:
1. Loads its collection once, at construction
2. Keeps the records in memory, in insertion order
3. Writes the whole collection back on every mutation (best effort)

DESIGN DECISION: The in-memory list is the source of truth for the
session. Persistence happens after the in-memory change and can fail
without undoing it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any, Generic, Optional, TypeVar, Union
from uuid import uuid4

import structlog
from pydantic import BaseModel, ValidationError

from trackwise.audit.logger import ChangeLogger
from trackwise.models.entities import StoredRecord
from trackwise.services.storage.store import PersistentStore

RecordT = TypeVar("RecordT", bound=StoredRecord)

logger = structlog.get_logger(__name__)


def new_id() -> str:
    """Fresh random record id (UUID4)."""
    return str(uuid4())


class EntityRepository(Generic[RecordT]):
    """
    Persisted, in-memory collection of one record type.

    update and remove are no-ops for unknown ids; they report
    whether anything changed instead of raising.
    """

    def __init__(
        self,
        name: str,
        model: type[RecordT],
        store: PersistentStore,
        default: Sequence[RecordT] = (),
        change_logger: Optional[ChangeLogger] = None,
    ):
        """
        Args:
            name: Collection name, also the storage key (before prefix).
            model: Record model used to validate loaded data.
            store: Persistent store adapter.
            default: Records to start with when nothing is stored yet.
            change_logger: Receives one event per mutation.
        """
        self._name = name
        self._model = model
        self._store = store
        self._changes = change_logger or ChangeLogger()
        self._records: list[RecordT] = self._load(default)

    @property
    def name(self) -> str:
        return self._name

    def _load(self, default: Sequence[RecordT]) -> list[RecordT]:
        raw = self._store.get(self._name, None)

        if raw is None:
            if default:
                self._changes.log_seeded(self._name, len(default))
            return list(default)

        if not isinstance(raw, list):
            logger.warning(
                "collection_shape_invalid",
                collection=self._name,
                found_type=type(raw).__name__,
            )
            return list(default)

        records: list[RecordT] = []
        skipped = 0
        for item in raw:
            try:
                records.append(self._model.model_validate(item))
            except ValidationError as e:
                skipped += 1
                logger.warning(
                    "record_skipped",
                    collection=self._name,
                    error_count=e.error_count(),
                )

        self._changes.log_loaded(self._name, len(records), skipped)
        return records

    def _persist(self) -> bool:
        return self._store.set(
            self._name,
            [record.to_storage() for record in self._records],
        )

    def list(self) -> list[RecordT]:
        """All records in insertion order. The returned list is a copy."""
        return list(self._records)

    def find_by_id(self, record_id: str) -> Optional[RecordT]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def filter(self, predicate: Callable[[RecordT], bool]) -> list[RecordT]:
        return [record for record in self._records if predicate(record)]

    def add(
        self,
        draft: Union[BaseModel, Mapping[str, Any]],
        **fields: Any,
    ) -> RecordT:
        """
        Create a record from a draft, assign a fresh id, append and persist.

        Extra keyword fields are merged over the draft (used for fields
        the caller owns, such as derived snapshots or timestamps).
        Any id already present on the draft is replaced.
        """
        data = draft.model_dump() if isinstance(draft, BaseModel) else dict(draft)
        data.update(fields)
        data["id"] = new_id()
        record = self._model.model_validate(data)

        self._records.append(record)
        self._changes.log_created(self._name, record.id)
        self._persist()
        return record

    def update(self, record: RecordT) -> bool:
        """
        Replace the record with the same id, keeping its position.

        Returns False (and changes nothing) if the id is unknown.
        """
        for index, existing in enumerate(self._records):
            if existing.id == record.id:
                self._records[index] = record
                self._changes.log_updated(self._name, record.id)
                self._persist()
                return True

        self._changes.log_ignored(self._name, record.id, "update")
        return False

    def remove(self, record_id: str) -> bool:
        """
        Remove the record with this id.

        Returns False (and changes nothing) if the id is unknown.
        """
        for index, existing in enumerate(self._records):
            if existing.id == record_id:
                del self._records[index]
                self._changes.log_deleted(self._name, record_id)
                self._persist()
                return True

        self._changes.log_ignored(self._name, record_id, "remove")
        return False

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[RecordT]:
        return iter(list(self._records))
