"""
Change Logger

DESIGN DECISION: Every mutation of application state is logged.
This provides:
1. Traceability of what the user changed during a session
2. Debugging capability when stored data looks wrong
3. A "recent activity" list for the UI

The change logger:
- Is synchronous, like the state it observes
- Keeps a bounded in-memory history, newest last
"""

import logging
import sys
from collections import deque
from typing import Optional

import structlog

from trackwise.models.audit import ChangeEvent, ChangeEventBuilder, ChangeSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route structlog output to stderr at the given level.

    structlog filters through the stdlib logger level, so the
    stdlib root logger decides what actually gets printed.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )


class ChangeLogger:
    """
    Central change logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory history (for the UI)
    """

    def __init__(self, history_size: int = 100, logger=None):
        """
        Initialize change logger.

        Args:
            history_size: How many events to keep in memory.
            logger: structlog-compatible logger. Defaults to this module's.
        """
        self._history: deque[ChangeEvent] = deque(maxlen=history_size)
        self._logger = logger or structlog.get_logger(__name__)

    def log(self, event: ChangeEvent) -> None:
        """Record an event locally and in the history."""
        self._history.append(event)
        log_dict = event.to_log_dict()

        if event.severity == ChangeSeverity.WARNING:
            self._logger.warning("state_change", **log_dict)
        elif event.severity == ChangeSeverity.INFO:
            self._logger.info("state_change", **log_dict)
        else:
            self._logger.debug("state_change", **log_dict)

    def log_created(self, collection: str, entity_id: str) -> None:
        self.log(ChangeEventBuilder.created(collection, entity_id))

    def log_updated(self, collection: str, entity_id: str) -> None:
        self.log(ChangeEventBuilder.updated(collection, entity_id))

    def log_deleted(self, collection: str, entity_id: str) -> None:
        self.log(ChangeEventBuilder.deleted(collection, entity_id))

    def log_ignored(self, collection: str, entity_id: str, operation: str) -> None:
        self.log(ChangeEventBuilder.ignored(collection, entity_id, operation))

    def log_seeded(self, collection: str, count: int) -> None:
        self.log(ChangeEventBuilder.seeded(collection, count))

    def log_loaded(self, collection: str, count: int, skipped: int) -> None:
        self.log(ChangeEventBuilder.loaded(collection, count, skipped))

    def recent(self, limit: int = 20, collection: Optional[str] = None) -> list[ChangeEvent]:
        """Most recent events, newest first."""
        events = [
            event for event in reversed(self._history)
            if collection is None or event.collection == collection
        ]
        return events[:limit]
