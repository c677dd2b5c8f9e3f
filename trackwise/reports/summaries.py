"""
Report Builders

Read-only summaries for the dashboard and reports pages.

Like the calculator, these only read from AppState and return new
objects. The numbers shown are always computed from the records on
hand; nothing here is cached or estimated.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel

from trackwise.models.entities import BudgetPeriod, Expense
from trackwise.state import calculator
from trackwise.state.facade import AppState

PerformanceStatus = Literal["Over Budget", "Under Budget", "On Track", "No Spending"]

ZERO = Decimal("0")


class CategorySpending(BaseModel):
    category_id: str
    name: str
    color: str
    amount: Decimal


class BudgetPerformance(BaseModel):
    """One monthly goal compared with this month's spending."""
    goal_id: str
    category_id: str
    category_name: str
    budgeted: Decimal
    spent: Decimal
    difference: Decimal
    status: PerformanceStatus


class MonthlyTotal(BaseModel):
    year: int
    month: int
    label: str  # e.g. "Jan 2024"
    total: Decimal


class DashboardSummary(BaseModel):
    total_expenses: Decimal
    total_budget: Decimal
    remaining_budget: Decimal
    average_expense: Decimal
    expense_count: int
    total_contributions: Decimal
    budget_utilisation: float  # percent of all goal amounts spent
    over_budget_count: int


def _in_month(value: date, year: int, month: int) -> bool:
    return value.year == year and value.month == month


def spending_by_category(state: AppState) -> list[CategorySpending]:
    """Spending per category, largest first. Unknown categories keep their fallback label."""
    totals = calculator.spending_by_category(state.expenses)
    rows = [
        CategorySpending(
            category_id=category_id,
            name=state.category_label(category_id),
            color=state.category_color(category_id),
            amount=amount,
        )
        for category_id, amount in totals.items()
    ]
    return sorted(rows, key=lambda row: row.amount, reverse=True)


def budget_performance(
    state: AppState,
    today: Optional[date] = None,
) -> list[BudgetPerformance]:
    """
    Monthly goals against spending in the current month.

    Unlike BudgetGoal.current_spending, this report applies the month
    window. Weekly and yearly goals are not included.
    """
    today = today or date.today()
    expenses = state.expenses
    results = []

    for goal in state.budget_goals:
        if goal.period != BudgetPeriod.MONTHLY:
            continue

        spent = sum(
            (
                expense.amount
                for expense in expenses
                if expense.category_id == goal.category_id
                and _in_month(expense.date, today.year, today.month)
            ),
            ZERO,
        )
        difference = goal.amount - spent

        status: PerformanceStatus = "On Track"
        if spent == 0 and goal.amount > 0:
            status = "No Spending"
        elif difference < 0:
            status = "Over Budget"
        elif difference > 0:
            status = "Under Budget"

        results.append(BudgetPerformance(
            goal_id=goal.id,
            category_id=goal.category_id,
            category_name=state.category_label(goal.category_id),
            budgeted=goal.amount,
            spent=spent,
            difference=difference,
            status=status,
        ))

    return results


def monthly_spending_trend(
    expenses: Iterable[Expense],
    months: int = 6,
    today: Optional[date] = None,
) -> list[MonthlyTotal]:
    """
    Total spending for each of the last `months` calendar months,
    oldest first, ending with the current month. Empty months are 0.
    """
    if months < 1:
        raise ValueError("months must be at least 1")

    today = today or date.today()

    # Walk back from the current month
    buckets: list[tuple[int, int]] = []
    year, month = today.year, today.month
    for _ in range(months):
        buckets.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    buckets.reverse()

    totals = {bucket: ZERO for bucket in buckets}
    for expense in expenses:
        key = (expense.date.year, expense.date.month)
        if key in totals:
            totals[key] += expense.amount

    return [
        MonthlyTotal(
            year=year,
            month=month,
            label=date(year, month, 1).strftime("%b %Y"),
            total=totals[(year, month)],
        )
        for year, month in buckets
    ]


def dashboard_summary(state: AppState) -> DashboardSummary:
    """Headline numbers for the dashboard cards."""
    expenses = state.expenses
    goals = state.budget_goals

    total_expenses = sum((e.amount for e in expenses), ZERO)
    total_budget = sum((g.amount for g in goals), ZERO)
    goal_spending = sum((g.current_spending for g in goals), ZERO)

    return DashboardSummary(
        total_expenses=total_expenses,
        total_budget=total_budget,
        remaining_budget=total_budget - total_expenses,
        average_expense=total_expenses / len(expenses) if expenses else ZERO,
        expense_count=len(expenses),
        total_contributions=sum((c.amount for c in state.contributions), ZERO),
        budget_utilisation=(
            float(goal_spending / total_budget * 100) if total_budget > 0 else 0.0
        ),
        over_budget_count=sum(1 for g in goals if g.is_over_budget),
    )
