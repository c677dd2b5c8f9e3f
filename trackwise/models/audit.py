"""
Change Event Models for Trackwise

Every mutation of application state produces a change event.
This provides:
1. A structured log line per add/update/delete
2. A short in-session history the UI can show as "recent activity"
3. Debugging information when storage misbehaves

DESIGN DECISION: Change events describe what happened to which record.
They never carry the full record, so notes and amounts stay out of logs.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class ChangeType(str, Enum):
    """Kinds of state change we record."""
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    IGNORED = "ignored"  # update/delete aimed at an unknown id
    SEEDED = "seeded"
    LOADED = "loaded"


class ChangeSeverity(str, Enum):
    """Severity level for change events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"


class ChangeEvent(BaseModel):
    """A single state change."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the change happened"
    )
    change_type: ChangeType
    severity: ChangeSeverity = Field(default=ChangeSeverity.DEBUG)

    collection: str = Field(
        ...,
        description="Collection name (e.g., 'expenses', 'members')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="Id of the record this change is about"
    )
    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "change_type": self.change_type.value,
            "collection": self.collection,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
        }


class ChangeEventBuilder:
    """
    Helper class to build change events with common patterns.

    Usage:
        event = ChangeEventBuilder.created("expenses", expense.id)
    """

    @staticmethod
    def created(collection: str, entity_id: str) -> ChangeEvent:
        return ChangeEvent(
            change_type=ChangeType.CREATED,
            collection=collection,
            entity_id=entity_id,
            description=f"Added record to {collection}",
        )

    @staticmethod
    def updated(collection: str, entity_id: str) -> ChangeEvent:
        return ChangeEvent(
            change_type=ChangeType.UPDATED,
            collection=collection,
            entity_id=entity_id,
            description=f"Replaced record in {collection}",
        )

    @staticmethod
    def deleted(collection: str, entity_id: str) -> ChangeEvent:
        return ChangeEvent(
            change_type=ChangeType.DELETED,
            collection=collection,
            entity_id=entity_id,
            description=f"Removed record from {collection}",
        )

    @staticmethod
    def ignored(collection: str, entity_id: str, operation: str) -> ChangeEvent:
        """An update or delete that matched nothing. Not an error."""
        return ChangeEvent(
            change_type=ChangeType.IGNORED,
            collection=collection,
            entity_id=entity_id,
            description=f"No record in {collection} to {operation}",
            details={"operation": operation},
        )

    @staticmethod
    def seeded(collection: str, count: int) -> ChangeEvent:
        return ChangeEvent(
            change_type=ChangeType.SEEDED,
            severity=ChangeSeverity.INFO,
            collection=collection,
            description=f"Seeded {collection} with defaults",
            details={"count": count},
        )

    @staticmethod
    def loaded(collection: str, count: int, skipped: int) -> ChangeEvent:
        """Collection loaded from storage. Skipped records are a warning."""
        return ChangeEvent(
            change_type=ChangeType.LOADED,
            severity=ChangeSeverity.WARNING if skipped else ChangeSeverity.DEBUG,
            collection=collection,
            description=f"Loaded {collection} from storage",
            details={"count": count, "skipped": skipped},
        )
