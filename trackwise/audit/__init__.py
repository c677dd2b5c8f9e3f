"""Change logging package."""

from trackwise.audit.logger import ChangeLogger, configure_logging

__all__ = ["ChangeLogger", "configure_logging"]
