"""
Derived-State Calculator

Pure functions over record lists. Nothing here reads storage or
mutates its inputs, so calling any of them twice with the same
arguments gives the same answer.

DESIGN DECISION: Derived values are pulled at read time rather than
maintained as running totals. A missed update hook can therefore
never leave a stale number on screen.
"""

from collections.abc import Iterable
from decimal import Decimal

from trackwise.models.entities import BudgetGoal, Contribution, Expense


def category_spending(category_id: str, expenses: Iterable[Expense]) -> Decimal:
    return sum(
        (expense.amount for expense in expenses if expense.category_id == category_id),
        Decimal("0"),
    )


def compute_current_spending(goal: BudgetGoal, expenses: Iterable[Expense]) -> Decimal:
    """
    Sum of expense amounts in the goal's category.

    The goal's period is NOT applied as a date window; every matching
    expense counts.
    """
    return category_spending(goal.category_id, expenses)


def with_current_spending(goal: BudgetGoal, expenses: Iterable[Expense]) -> BudgetGoal:
    """Copy of the goal carrying a freshly computed current_spending."""
    return goal.model_copy(
        update={"current_spending": compute_current_spending(goal, expenses)}
    )


def member_contributions(
    member_id: str, contributions: Iterable[Contribution]
) -> list[Contribution]:
    return [c for c in contributions if c.member_id == member_id]


def total_contribution(member_id: str, contributions: Iterable[Contribution]) -> Decimal:
    return sum(
        (c.amount for c in contributions if c.member_id == member_id),
        Decimal("0"),
    )


def spending_by_category(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """Total spent per category id, in first-seen order."""
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        totals[expense.category_id] = totals.get(expense.category_id, Decimal("0")) + expense.amount
    return totals
