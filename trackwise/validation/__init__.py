"""Form validation package."""

from trackwise.validation.forms import (
    BudgetGoalForm,
    CategoryForm,
    ContributionForm,
    ExpenseForm,
    FormSchema,
    MemberForm,
    ShoppingListItemForm,
)
from trackwise.validation.validator import FormValidator

__all__ = [
    "BudgetGoalForm",
    "CategoryForm",
    "ContributionForm",
    "ExpenseForm",
    "FormSchema",
    "FormValidator",
    "MemberForm",
    "ShoppingListItemForm",
]
