"""Application state package: repositories, derived values and the facade."""

from trackwise.state.calculator import (
    category_spending,
    compute_current_spending,
    member_contributions,
    spending_by_category,
    total_contribution,
    with_current_spending,
)
from trackwise.state.facade import AppState
from trackwise.state.repository import EntityRepository, new_id

__all__ = [
    "AppState",
    "EntityRepository",
    "category_spending",
    "compute_current_spending",
    "member_contributions",
    "new_id",
    "spending_by_category",
    "total_contribution",
    "with_current_spending",
]
