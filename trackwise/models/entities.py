"""
Core Data Models for Trackwise

These models define the record shapes for everything the app stores.
They are designed to:
1. Enforce type safety at runtime
2. Serialize to the stored JSON layout (camelCase keys)
3. Separate "draft" input (no id yet) from persisted records

DESIGN DECISION: Every entity has a Draft model and a persisted model.
Repositories accept drafts and hand back persisted records with a fresh id,
so a record without an id can never be stored by accident.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Generic, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS
# =============================================================================

class BudgetPeriod(str, Enum):
    """
    Budget goal period.

    NOTE: The period is informational. It does not narrow the window
    used when computing a goal's current spending.
    """
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


def _naive_local(value: datetime) -> datetime:
    """Offset-bearing timestamps become naive local time."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


# All record timestamps are naive local time.
RecordDateTime = Annotated[datetime, AfterValidator(_naive_local)]


# =============================================================================
# BASE RECORD
# =============================================================================

class StoredRecord(BaseModel):
    """
    Base for every stored record.

    Fields are snake_case in Python and camelCase on disk.
    Either spelling is accepted when loading.

    Records are frozen: change one with model_copy(update=...) and
    hand the copy to the matching update operation.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_storage(self) -> dict[str, Any]:
        """Convert to a JSON-safe dict in the stored layout."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# CATEGORIES
# =============================================================================

class CategoryDraft(StoredRecord):
    """A spending category before it has an id."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Display name"
    )
    icon: str = Field(
        default="Archive",
        description="Name of the symbol used to render the category"
    )
    color: str = Field(
        default="#6C757D",
        description="Display color as a hex string"
    )


class Category(CategoryDraft):
    """A stored category. Referenced by id from expenses and budget goals."""

    id: str = Field(..., min_length=1)


# =============================================================================
# EXPENSES
# =============================================================================

class ExpenseDraft(StoredRecord):
    """An expense (transaction) before it has an id."""

    description: str = Field(
        ...,
        max_length=200,
        description="What the money was spent on"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount spent"
    )
    date: RecordDateTime = Field(
        ...,
        description="When the expense happened"
    )
    category_id: str = Field(
        ...,
        description="Id of the category (may dangle)"
    )
    notes: Optional[str] = Field(
        default=None,
        max_length=1000,
    )


class Expense(ExpenseDraft):
    """A stored expense."""

    id: str = Field(..., min_length=1)


# =============================================================================
# BUDGET GOALS
# =============================================================================

class BudgetGoalDraft(StoredRecord):
    """A spending ceiling for one category."""

    category_id: str
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Target ceiling"
    )
    period: BudgetPeriod = Field(default=BudgetPeriod.MONTHLY)


class BudgetGoal(BudgetGoalDraft):
    """
    A stored budget goal.

    CRITICAL: current_spending is DERIVED. The stored value is only a
    snapshot taken at creation time; readers must recompute it from the
    expense collection (see trackwise.state.calculator).
    """

    id: str = Field(..., min_length=1)
    current_spending: Decimal = Field(default=Decimal("0"))

    @property
    def remaining(self) -> Decimal:
        return self.amount - self.current_spending

    @property
    def percent_used(self) -> float:
        if self.amount <= 0:
            return 0.0
        return float(self.current_spending / self.amount * 100)

    @property
    def is_over_budget(self) -> bool:
        return self.current_spending > self.amount


# =============================================================================
# HOUSEHOLD
# =============================================================================

class MemberDraft(StoredRecord):
    """A household participant."""

    name: str = Field(..., min_length=1, max_length=50)


class Member(MemberDraft):
    id: str = Field(..., min_length=1)


class ContributionDraft(StoredRecord):
    """Money a member put into the shared household pot."""

    member_id: str
    amount: Decimal = Field(..., ge=0)
    date: RecordDateTime
    notes: Optional[str] = Field(default=None, max_length=1000)


class Contribution(ContributionDraft):
    id: str = Field(..., min_length=1)


class ShoppingListItemDraft(StoredRecord):
    """An entry on the shared shopping list."""

    item_name: str = Field(..., min_length=1, max_length=100)
    quantity: str = Field(default="1", max_length=50)
    notes: Optional[str] = Field(default=None, max_length=200)


class ShoppingListItem(ShoppingListItemDraft):
    id: str = Field(..., min_length=1)
    added_at: RecordDateTime = Field(default_factory=datetime.now)
    is_purchased: bool = False


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found while validating form input."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'too_short', 'future_date')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


DraftT = TypeVar("DraftT", bound=BaseModel)


class FormResult(BaseModel, Generic[DraftT]):
    """
    Outcome of validating one form submission.

    Holds either a typed draft ready for the facade, or the
    issues that stop it. Warnings never block.
    """

    form: str
    draft: Optional[DraftT] = None
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.draft is not None and not self.has_errors

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]

    def errors_for(self, field: str) -> list[str]:
        """Error messages attached to one field, for inline display."""
        return [
            issue.message for issue in self.issues
            if issue.field == field and issue.severity == "error"
        ]
