"""
Form Schemas

Declarative rules for everything a user can submit. Each form knows
how to turn itself into the matching Draft for the facade.

The schemas are stricter than the stored models: stored data may be
old or hand-edited and still load, but new input must pass these.
"""

from datetime import date as date_type, datetime, time
from decimal import Decimal
from typing import Annotated, Any, ClassVar, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from trackwise.models.entities import (
    BudgetGoalDraft,
    BudgetPeriod,
    CategoryDraft,
    ContributionDraft,
    ExpenseDraft,
    MemberDraft,
    ShoppingListItemDraft,
)

HEX_COLOR_PATTERN = r"^#([0-9a-fA-F]{3}){1,2}$"


def _as_datetime(value: Any) -> Any:
    """Date pickers hand back plain dates; store them as midnight."""
    if isinstance(value, date_type) and not isinstance(value, datetime):
        return datetime.combine(value, time())
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


FormDate = Annotated[datetime, BeforeValidator(_as_datetime)]
FormNotes = Annotated[Optional[Annotated[str, Field(max_length=200)]], BeforeValidator(_blank_to_none)]


class FormSchema(BaseModel):
    """
    Base for form schemas.

    messages maps a field name to the message shown for any error on
    that field. Fields not listed fall back to pydantic's own message.
    """
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    form_name: ClassVar[str] = "form"
    messages: ClassVar[dict[str, str]] = {}

    def to_draft(self) -> BaseModel:
        raise NotImplementedError


class ExpenseForm(FormSchema):
    form_name: ClassVar[str] = "expense"
    messages: ClassVar[dict[str, str]] = {
        "description": "Description must be between 2 and 100 characters.",
        "amount": "Amount must be positive.",
        "date": "A date is required.",
        "category_id": "Please select a category.",
        "notes": "Notes cannot exceed 200 characters.",
    }

    description: str = Field(..., min_length=2, max_length=100)
    amount: Decimal = Field(..., gt=0)
    date: FormDate
    category_id: str = Field(..., min_length=1)
    notes: FormNotes = None

    def to_draft(self) -> ExpenseDraft:
        return ExpenseDraft(
            description=self.description,
            amount=self.amount,
            date=self.date,
            category_id=self.category_id,
            notes=self.notes,
        )


class BudgetGoalForm(FormSchema):
    form_name: ClassVar[str] = "budget_goal"
    messages: ClassVar[dict[str, str]] = {
        "category_id": "Please select a category.",
        "amount": "Amount must be positive.",
        "period": "Please select a period.",
    }

    category_id: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    period: BudgetPeriod

    def to_draft(self) -> BudgetGoalDraft:
        return BudgetGoalDraft(
            category_id=self.category_id,
            amount=self.amount,
            period=self.period,
        )


class CategoryForm(FormSchema):
    form_name: ClassVar[str] = "category"
    messages: ClassVar[dict[str, str]] = {
        "name": "Category name must be between 2 and 50 characters.",
        "icon": "Please select an icon.",
        "color": "Must be a valid hex color (e.g., #RRGGBB or #RGB).",
    }

    name: str = Field(..., min_length=2, max_length=50)
    icon: str = Field(..., min_length=1)
    color: str = Field(..., pattern=HEX_COLOR_PATTERN)

    def to_draft(self) -> CategoryDraft:
        return CategoryDraft(name=self.name, icon=self.icon, color=self.color)


class MemberForm(FormSchema):
    form_name: ClassVar[str] = "member"
    messages: ClassVar[dict[str, str]] = {
        "name": "Name must be between 2 and 50 characters.",
    }

    name: str = Field(..., min_length=2, max_length=50)

    def to_draft(self) -> MemberDraft:
        return MemberDraft(name=self.name)


class ContributionForm(FormSchema):
    form_name: ClassVar[str] = "contribution"
    messages: ClassVar[dict[str, str]] = {
        "member_id": "Please select a member.",
        "amount": "Amount must be positive.",
        "date": "A date is required.",
        "notes": "Notes cannot exceed 200 characters.",
    }

    member_id: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    date: FormDate
    notes: FormNotes = None

    def to_draft(self) -> ContributionDraft:
        return ContributionDraft(
            member_id=self.member_id,
            amount=self.amount,
            date=self.date,
            notes=self.notes,
        )


class ShoppingListItemForm(FormSchema):
    form_name: ClassVar[str] = "shopping_list_item"
    messages: ClassVar[dict[str, str]] = {
        "item_name": "Item name must be between 1 and 100 characters.",
        "quantity": "Quantity cannot exceed 50 characters.",
        "notes": "Notes cannot exceed 200 characters.",
    }

    item_name: str = Field(..., min_length=1, max_length=100)
    quantity: str = Field(default="1", max_length=50)
    notes: FormNotes = None

    @field_validator("quantity", mode="before")
    @classmethod
    def default_quantity(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return "1"
        return v

    def to_draft(self) -> ShoppingListItemDraft:
        return ShoppingListItemDraft(
            item_name=self.item_name,
            quantity=self.quantity,
            notes=self.notes,
        )
