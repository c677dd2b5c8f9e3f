"""Dashboard and report summaries."""

from trackwise.reports.summaries import (
    BudgetPerformance,
    CategorySpending,
    DashboardSummary,
    MonthlyTotal,
    budget_performance,
    dashboard_summary,
    monthly_spending_trend,
    spending_by_category,
)

__all__ = [
    "BudgetPerformance",
    "CategorySpending",
    "DashboardSummary",
    "MonthlyTotal",
    "budget_performance",
    "dashboard_summary",
    "monthly_spending_trend",
    "spending_by_category",
]
