"""
Application State Facade

The single read/write surface the UI talks to.

DESIGN DECISION: AppState is constructed explicitly by the composition
root (app/main.py, or a test) and passed to whoever needs it. There is
no module-level instance.

GUARANTEES:
- Never raises for unknown ids or dangling foreign keys
- budget_goals always carries current_spending recomputed from expenses
- Deleting a member keeps their contributions
- No validation here; forms validate before calling in
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Union

from trackwise.audit.logger import ChangeLogger
from trackwise.config import StorageSettings, get_settings
from trackwise.models.audit import ChangeEvent
from trackwise.models.constants import (
    INITIAL_CATEGORIES,
    UNKNOWN_CATEGORY_COLOR,
    UNKNOWN_CATEGORY_LABEL,
    UNKNOWN_MEMBER_LABEL,
)
from trackwise.models.entities import (
    BudgetGoal,
    BudgetGoalDraft,
    Category,
    CategoryDraft,
    Contribution,
    ContributionDraft,
    Expense,
    ExpenseDraft,
    Member,
    MemberDraft,
    ShoppingListItem,
    ShoppingListItemDraft,
)
from trackwise.services.storage import (
    FileKeyValueBackend,
    InMemoryKeyValueBackend,
    PersistentStore,
)
from trackwise.state import calculator
from trackwise.state.repository import EntityRepository


def _with_changes(existing, draft_cls, changes):
    """Copy a record with every editable field taken from a draft."""
    if not isinstance(changes, draft_cls):
        changes = draft_cls.model_validate(changes)
    return existing.model_copy(update=changes.model_dump())


class AppState:
    """
    Composes one repository per collection plus derived accessors.

    Collections and their storage keys (before the store's prefix):
        expenses, categories, budget_goals, members,
        contributions, shopping_list_items
    """

    EXPENSES = "expenses"
    CATEGORIES = "categories"
    BUDGET_GOALS = "budget_goals"
    MEMBERS = "members"
    CONTRIBUTIONS = "contributions"
    SHOPPING_LIST_ITEMS = "shopping_list_items"

    def __init__(
        self,
        store: PersistentStore,
        change_logger: Optional[ChangeLogger] = None,
        initial_categories: Sequence[Category] = INITIAL_CATEGORIES,
    ):
        """
        Load every collection from the store.

        Args:
            store: Persistent store adapter (may have no backend).
            change_logger: Shared change log. A fresh one is created if omitted.
            initial_categories: Categories used when none are stored yet.
        """
        self._store = store
        self._changes = change_logger or ChangeLogger()

        def repo(name, model, default=()):
            return EntityRepository(
                name, model, store, default=default, change_logger=self._changes
            )

        self._expenses: EntityRepository[Expense] = repo(self.EXPENSES, Expense)
        self._categories: EntityRepository[Category] = repo(
            self.CATEGORIES, Category, initial_categories
        )
        self._budget_goals: EntityRepository[BudgetGoal] = repo(self.BUDGET_GOALS, BudgetGoal)
        self._members: EntityRepository[Member] = repo(self.MEMBERS, Member)
        self._contributions: EntityRepository[Contribution] = repo(
            self.CONTRIBUTIONS, Contribution
        )
        self._shopping_list: EntityRepository[ShoppingListItem] = repo(
            self.SHOPPING_LIST_ITEMS, ShoppingListItem
        )

    @classmethod
    def from_settings(
        cls,
        settings: Optional[StorageSettings] = None,
        change_logger: Optional[ChangeLogger] = None,
    ) -> AppState:
        """
        Build state on the backend the settings describe.

        Disabled storage gives an in-memory session that starts empty
        every time.
        """
        settings = settings or get_settings().storage
        if settings.enabled:
            backend = FileKeyValueBackend(settings.data_dir)
        else:
            backend = InMemoryKeyValueBackend()
        store = PersistentStore(backend, key_prefix=settings.key_prefix)
        return cls(store, change_logger=change_logger)

    # -------------------------------------------------------------------------
    # Collections
    # -------------------------------------------------------------------------

    @property
    def store_available(self) -> bool:
        return self._store.available

    @property
    def expenses(self) -> list[Expense]:
        return self._expenses.list()

    @property
    def categories(self) -> list[Category]:
        return self._categories.list()

    @property
    def budget_goals(self) -> list[BudgetGoal]:
        """Goals with current_spending recomputed from the current expenses."""
        expenses = self._expenses.list()
        return [
            calculator.with_current_spending(goal, expenses)
            for goal in self._budget_goals.list()
        ]

    @property
    def members(self) -> list[Member]:
        return self._members.list()

    @property
    def contributions(self) -> list[Contribution]:
        return self._contributions.list()

    @property
    def shopping_list_items(self) -> list[ShoppingListItem]:
        return self._shopping_list.list()

    def recent_changes(self, limit: int = 20) -> list[ChangeEvent]:
        return self._changes.recent(limit)

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def get_category_by_id(self, category_id: str) -> Optional[Category]:
        return self._categories.find_by_id(category_id)

    def category_label(self, category_id: str) -> str:
        category = self.get_category_by_id(category_id)
        return category.name if category else UNKNOWN_CATEGORY_LABEL

    def category_color(self, category_id: str) -> str:
        category = self.get_category_by_id(category_id)
        return category.color if category else UNKNOWN_CATEGORY_COLOR

    def add_category(self, draft: Union[CategoryDraft, Mapping[str, Any]]) -> Category:
        return self._categories.add(draft)

    def update_category(self, category: Category) -> bool:
        return self._categories.update(category)

    def edit_category(
        self, category_id: str, changes: Union[CategoryDraft, Mapping[str, Any]]
    ) -> Optional[Category]:
        existing = self.get_category_by_id(category_id)
        if existing is None:
            return None
        edited = _with_changes(existing, CategoryDraft, changes)
        self.update_category(edited)
        return edited

    def delete_category(self, category_id: str) -> bool:
        """
        Remove a category. Expenses and goals that reference it are kept
        and render with the "Uncategorized" fallback.
        """
        return self._categories.remove(category_id)

    # -------------------------------------------------------------------------
    # Expenses
    # -------------------------------------------------------------------------

    def add_expense(self, draft: Union[ExpenseDraft, Mapping[str, Any]]) -> Expense:
        return self._expenses.add(draft)

    def update_expense(self, expense: Expense) -> bool:
        return self._expenses.update(expense)

    def edit_expense(
        self, expense_id: str, changes: Union[ExpenseDraft, Mapping[str, Any]]
    ) -> Optional[Expense]:
        """Replace the editable fields of an expense. The id is kept."""
        existing = self.get_expense_by_id(expense_id)
        if existing is None:
            return None
        edited = _with_changes(existing, ExpenseDraft, changes)
        self.update_expense(edited)
        return edited

    def delete_expense(self, expense_id: str) -> bool:
        return self._expenses.remove(expense_id)

    def get_expense_by_id(self, expense_id: str) -> Optional[Expense]:
        return self._expenses.find_by_id(expense_id)

    # -------------------------------------------------------------------------
    # Budget goals
    # -------------------------------------------------------------------------

    def add_budget_goal(self, draft: Union[BudgetGoalDraft, Mapping[str, Any]]) -> BudgetGoal:
        """
        Store a new goal with a snapshot of its current spending.

        The snapshot is informational; budget_goals recomputes it on
        every read.
        """
        if not isinstance(draft, BudgetGoalDraft):
            draft = BudgetGoalDraft.model_validate(draft)
        spent = calculator.category_spending(draft.category_id, self._expenses.list())
        return self._budget_goals.add(draft, current_spending=spent)

    def update_budget_goal(self, goal: BudgetGoal) -> bool:
        snapshot = calculator.with_current_spending(goal, self._expenses.list())
        return self._budget_goals.update(snapshot)

    def edit_budget_goal(
        self, goal_id: str, changes: Union[BudgetGoalDraft, Mapping[str, Any]]
    ) -> Optional[BudgetGoal]:
        """Change category, amount or period. Spending is recomputed."""
        existing = self._budget_goals.find_by_id(goal_id)
        if existing is None:
            return None
        self.update_budget_goal(_with_changes(existing, BudgetGoalDraft, changes))
        return self.get_budget_goal_by_id(goal_id)

    def delete_budget_goal(self, goal_id: str) -> bool:
        return self._budget_goals.remove(goal_id)

    def get_budget_goal_by_id(self, goal_id: str) -> Optional[BudgetGoal]:
        goal = self._budget_goals.find_by_id(goal_id)
        if goal is None:
            return None
        return calculator.with_current_spending(goal, self._expenses.list())

    # -------------------------------------------------------------------------
    # Members and contributions
    # -------------------------------------------------------------------------

    def add_member(self, draft: Union[MemberDraft, Mapping[str, Any]]) -> Member:
        return self._members.add(draft)

    def delete_member(self, member_id: str) -> bool:
        """Remove a member. Their contributions are NOT removed."""
        return self._members.remove(member_id)

    def get_member_by_id(self, member_id: str) -> Optional[Member]:
        return self._members.find_by_id(member_id)

    def member_label(self, member_id: str) -> str:
        member = self.get_member_by_id(member_id)
        return member.name if member else UNKNOWN_MEMBER_LABEL

    def add_contribution(
        self, draft: Union[ContributionDraft, Mapping[str, Any]]
    ) -> Contribution:
        return self._contributions.add(draft)

    def delete_contribution(self, contribution_id: str) -> bool:
        return self._contributions.remove(contribution_id)

    def get_member_contributions(self, member_id: str) -> list[Contribution]:
        return calculator.member_contributions(member_id, self._contributions.list())

    def get_member_total_contribution(self, member_id: str) -> Decimal:
        return calculator.total_contribution(member_id, self._contributions.list())

    # -------------------------------------------------------------------------
    # Shopping list
    # -------------------------------------------------------------------------

    def add_shopping_list_item(
        self, draft: Union[ShoppingListItemDraft, Mapping[str, Any]]
    ) -> ShoppingListItem:
        return self._shopping_list.add(draft, is_purchased=False, added_at=datetime.now())

    def edit_shopping_list_item(
        self,
        item_id: str,
        item_name: str,
        quantity: str = "1",
        notes: Optional[str] = None,
    ) -> Optional[ShoppingListItem]:
        """Change the editable fields. Purchase state and added_at are kept."""
        existing = self._shopping_list.find_by_id(item_id)
        if existing is None:
            return None
        edited = ShoppingListItem.model_validate({
            **existing.model_dump(),
            "item_name": item_name,
            "quantity": quantity,
            "notes": notes,
        })
        self._shopping_list.update(edited)
        return edited

    def toggle_shopping_list_item_purchased(self, item_id: str) -> Optional[ShoppingListItem]:
        existing = self._shopping_list.find_by_id(item_id)
        if existing is None:
            return None
        toggled = existing.model_copy(update={"is_purchased": not existing.is_purchased})
        self._shopping_list.update(toggled)
        return toggled

    def delete_shopping_list_item(self, item_id: str) -> bool:
        return self._shopping_list.remove(item_id)
