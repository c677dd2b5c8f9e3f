"""
Data Models Package

This package contains all Pydantic models used in Trackwise.
All data stored or exchanged by the app must conform to these schemas.
"""

from trackwise.models.entities import (
    BudgetGoal,
    BudgetGoalDraft,
    BudgetPeriod,
    Category,
    CategoryDraft,
    Contribution,
    ContributionDraft,
    Expense,
    ExpenseDraft,
    FormResult,
    Member,
    MemberDraft,
    ShoppingListItem,
    ShoppingListItemDraft,
    StoredRecord,
    ValidationIssue,
)
from trackwise.models.audit import (
    ChangeEvent,
    ChangeEventBuilder,
    ChangeSeverity,
    ChangeType,
)

__all__ = [
    # Entity models
    "BudgetGoal",
    "BudgetGoalDraft",
    "BudgetPeriod",
    "Category",
    "CategoryDraft",
    "Contribution",
    "ContributionDraft",
    "Expense",
    "ExpenseDraft",
    "Member",
    "MemberDraft",
    "ShoppingListItem",
    "ShoppingListItemDraft",
    "StoredRecord",
    # Validation models
    "FormResult",
    "ValidationIssue",
    # Change models
    "ChangeEvent",
    "ChangeEventBuilder",
    "ChangeSeverity",
    "ChangeType",
]
