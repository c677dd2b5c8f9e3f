"""Integration tests for AppState over in-memory storage."""

import json
from datetime import datetime
from decimal import Decimal

from trackwise.config import StorageSettings
from trackwise.models import (
    BudgetGoalDraft,
    BudgetPeriod,
    Category,
    ContributionDraft,
    ExpenseDraft,
    MemberDraft,
    ShoppingListItemDraft,
)
from trackwise.models.constants import (
    INITIAL_CATEGORIES,
    UNKNOWN_CATEGORY_COLOR,
    UNKNOWN_CATEGORY_LABEL,
    UNKNOWN_MEMBER_LABEL,
)
from trackwise.services.storage import InMemoryKeyValueBackend, PersistentStore
from trackwise.state import AppState
from trackwise.validation import FormValidator

from conftest import FailingBackend, RecordingLogger


def expense_draft(category_id: str, amount: str) -> ExpenseDraft:
    return ExpenseDraft(
        description="Groceries",
        amount=Decimal(amount),
        date=datetime(2024, 2, 1),
        category_id=category_id,
    )


def food_state() -> AppState:
    """State with a single category c1 'Food' and nothing else."""
    store = PersistentStore(InMemoryKeyValueBackend(), logger=RecordingLogger())
    return AppState(store, initial_categories=[Category(id="c1", name="Food")])


class TestSeedingAndLoading:

    def test_default_categories_seeded(self, state):
        assert state.categories == list(INITIAL_CATEGORIES)
        assert state.expenses == []
        assert state.members == []

    def test_stored_collections_use_prefixed_keys(self, state, backend):
        state.add_member(MemberDraft(name="Asha"))
        state.add_shopping_list_item(ShoppingListItemDraft(item_name="Milk"))

        assert json.loads(backend.raw("trackwise_members"))[0]["name"] == "Asha"
        stored_item = json.loads(backend.raw("trackwise_shopping_list_items"))[0]
        assert stored_item["itemName"] == "Milk"
        assert stored_item["isPurchased"] is False

    def test_state_survives_reload(self, backend):
        store = PersistentStore(backend, key_prefix="trackwise_", logger=RecordingLogger())
        first = AppState(store)
        expense = first.add_expense(expense_draft("food", "12"))

        second = AppState(store)
        assert second.expenses == [expense]

    def test_from_settings_in_memory(self):
        state = AppState.from_settings(StorageSettings(enabled=False))
        assert state.store_available
        assert len(state.categories) == len(INITIAL_CATEGORIES)

    def test_from_settings_on_disk(self, tmp_path):
        settings = StorageSettings(enabled=True, data_dir=tmp_path)
        state = AppState.from_settings(settings)
        state.add_member({"name": "Asha"})

        assert (tmp_path / "trackwise_members.json").exists()
        assert AppState.from_settings(settings).members[0].name == "Asha"

    def test_no_backend_still_works(self):
        """Unavailable storage: defaults load and mutations apply in memory."""
        state = AppState(PersistentStore(None, logger=RecordingLogger()))
        assert not state.store_available

        member = state.add_member({"name": "Asha"})
        assert state.members == [member]

    def test_failing_writes_do_not_raise(self):
        state = AppState(PersistentStore(FailingBackend(), logger=RecordingLogger()))
        expense = state.add_expense(expense_draft("food", "5"))
        assert state.delete_expense(expense.id) is True
        assert state.expenses == []

    def test_failing_writes_mark_store_unavailable(self):
        backend = FailingBackend()
        state = AppState(PersistentStore(backend, logger=RecordingLogger()))
        assert state.store_available

        state.add_member({"name": "Asha"})
        assert not state.store_available

    def test_mixed_date_styles_sort(self):
        """Expenses from offset timestamps and from form input order by date."""
        state = food_state()
        state.add_expense({
            "description": "Imported",
            "amount": "5",
            "date": "2024-01-01T00:00:00Z",
            "category_id": "c1",
        })
        state.add_expense(expense_draft("c1", "7"))

        ordered = sorted(state.expenses, key=lambda e: e.date)

        assert [e.description for e in ordered] == ["Imported", "Groceries"]


class TestBudgetGoals:

    def test_current_spending_scenario(self):
        """Expenses of 40 and 10 in c1 give the c1 goal current spending 50."""
        state = food_state()
        state.add_expense(expense_draft("c1", "40"))
        state.add_expense(expense_draft("c1", "10"))
        goal = state.add_budget_goal(BudgetGoalDraft(category_id="c1", amount=Decimal("100")))

        assert goal.current_spending == Decimal("50")
        assert state.get_budget_goal_by_id(goal.id).current_spending == Decimal("50")

    def test_spending_follows_expense_changes(self):
        """Goals are recomputed on read after expenses change."""
        state = food_state()
        goal = state.add_budget_goal({"category_id": "c1", "amount": "100"})
        assert goal.current_spending == Decimal("0")

        expense = state.add_expense(expense_draft("c1", "30"))
        assert state.budget_goals[0].current_spending == Decimal("30")

        state.update_expense(expense.model_copy(update={"amount": Decimal("45")}))
        assert state.budget_goals[0].current_spending == Decimal("45")

        state.delete_expense(expense.id)
        assert state.budget_goals[0].current_spending == Decimal("0")

    def test_update_budget_goal(self):
        state = food_state()
        goal = state.add_budget_goal({"category_id": "c1", "amount": "100"})
        changed = goal.model_copy(update={"amount": Decimal("80"), "period": BudgetPeriod.YEARLY})

        assert state.update_budget_goal(changed) is True
        stored = state.get_budget_goal_by_id(goal.id)
        assert stored.amount == Decimal("80")
        assert stored.period == BudgetPeriod.YEARLY

    def test_delete_budget_goal(self):
        state = food_state()
        goal = state.add_budget_goal({"category_id": "c1", "amount": "100"})
        assert state.delete_budget_goal(goal.id) is True
        assert state.get_budget_goal_by_id(goal.id) is None
        assert state.delete_budget_goal(goal.id) is False


class TestHousehold:

    def test_delete_member_keeps_contributions(self):
        """Deleting member m1 leaves their 20 contribution and its total."""
        state = food_state()
        member = state.add_member(MemberDraft(name="Asha"))
        contribution = state.add_contribution(ContributionDraft(
            member_id=member.id, amount=Decimal("20"), date=datetime(2024, 1, 5)
        ))

        assert state.delete_member(member.id) is True

        assert state.contributions == [contribution]
        assert state.get_member_total_contribution(member.id) == Decimal("20")
        assert state.member_label(member.id) == UNKNOWN_MEMBER_LABEL

    def test_member_contributions(self):
        state = food_state()
        asha = state.add_member({"name": "Asha"})
        ben = state.add_member({"name": "Ben"})
        state.add_contribution({"member_id": asha.id, "amount": "10", "date": "2024-01-01T00:00:00"})
        state.add_contribution({"member_id": ben.id, "amount": "7", "date": "2024-01-02T00:00:00"})
        state.add_contribution({"member_id": asha.id, "amount": "5", "date": "2024-01-03T00:00:00"})

        assert len(state.get_member_contributions(asha.id)) == 2
        assert state.get_member_total_contribution(asha.id) == Decimal("15")
        assert state.member_label(ben.id) == "Ben"

    def test_delete_contribution(self):
        state = food_state()
        contribution = state.add_contribution(
            {"member_id": "m1", "amount": "10", "date": "2024-01-01T00:00:00"}
        )
        assert state.delete_contribution(contribution.id) is True
        assert state.contributions == []


class TestCategories:

    def test_fallbacks_for_unknown_category(self):
        state = food_state()
        assert state.category_label("ghost") == UNKNOWN_CATEGORY_LABEL
        assert state.category_color("ghost") == UNKNOWN_CATEGORY_COLOR
        assert state.category_label("c1") == "Food"

    def test_delete_category_keeps_expenses(self):
        state = food_state()
        expense = state.add_expense(expense_draft("c1", "10"))

        assert state.delete_category("c1") is True
        assert state.expenses == [expense]
        assert state.category_label("c1") == UNKNOWN_CATEGORY_LABEL

    def test_add_and_update_category(self):
        state = food_state()
        pets = state.add_category({"name": "Pets", "icon": "Dog", "color": "#AABBCC"})
        assert state.get_category_by_id(pets.id) == pets

        assert state.update_category(pets.model_copy(update={"name": "Animals"})) is True
        assert state.category_label(pets.id) == "Animals"

    def test_unknown_ids_are_noops(self):
        state = food_state()
        assert state.delete_expense("ghost") is False
        assert state.delete_member("ghost") is False
        assert state.get_expense_by_id("ghost") is None
        assert state.get_budget_goal_by_id("ghost") is None


class TestShoppingList:

    def test_add_item_defaults(self):
        state = food_state()
        item = state.add_shopping_list_item({"item_name": "Eggs", "quantity": "12"})

        assert item.is_purchased is False
        assert item.quantity == "12"
        assert isinstance(item.added_at, datetime)

    def test_toggle_purchased(self):
        state = food_state()
        item = state.add_shopping_list_item({"item_name": "Eggs"})

        toggled = state.toggle_shopping_list_item_purchased(item.id)
        assert toggled.is_purchased is True
        assert state.shopping_list_items[0].is_purchased is True

        again = state.toggle_shopping_list_item_purchased(item.id)
        assert again.is_purchased is False

    def test_edit_keeps_purchase_state(self):
        state = food_state()
        item = state.add_shopping_list_item({"item_name": "Eggs"})
        state.toggle_shopping_list_item_purchased(item.id)

        edited = state.edit_shopping_list_item(item.id, "Free-range eggs", "6", "Brown")

        assert edited.item_name == "Free-range eggs"
        assert edited.quantity == "6"
        assert edited.notes == "Brown"
        assert edited.is_purchased is True
        assert edited.added_at == item.added_at

    def test_unknown_item(self):
        state = food_state()
        assert state.toggle_shopping_list_item_purchased("ghost") is None
        assert state.edit_shopping_list_item("ghost", "x") is None
        assert state.delete_shopping_list_item("ghost") is False

class TestEditing:
    """Edit operations apply a validated draft to an existing record."""

    def test_edit_expense(self):
        state = food_state()
        expense = state.add_expense(expense_draft("c1", "12"))
        other = state.add_expense(expense_draft("c1", "3"))

        edited = state.edit_expense(expense.id, ExpenseDraft(
            description="Weekly shop",
            amount=Decimal("30"),
            date=datetime(2024, 2, 3),
            category_id="c1",
            notes="Market",
        ))

        assert edited.id == expense.id
        assert state.expenses == [edited, other]
        assert state.get_expense_by_id(expense.id).notes == "Market"

    def test_edit_expense_from_validated_form(self):
        state = food_state()
        expense = state.add_expense(expense_draft("c1", "12"))
        result = FormValidator(state).validate_expense({
            "description": "Groceries",
            "amount": "14.25",
            "date": datetime(2024, 2, 1),
            "category_id": "c1",
            "notes": "",
        })

        edited = state.edit_expense(expense.id, result.draft)

        assert edited.amount == Decimal("14.25")
        assert edited.notes is None

    def test_edit_budget_goal_recomputes_spending(self):
        state = food_state()
        drinks = state.add_category({"name": "Drinks"})
        state.add_expense(expense_draft(drinks.id, "9"))
        goal = state.add_budget_goal({"category_id": "c1", "amount": "100"})

        edited = state.edit_budget_goal(goal.id, {
            "category_id": drinks.id, "amount": "50", "period": "weekly",
        })

        assert edited.id == goal.id
        assert edited.period == BudgetPeriod.WEEKLY
        assert edited.current_spending == Decimal("9")
        assert state.budget_goals == [edited]

    def test_edit_category(self):
        state = food_state()
        edited = state.edit_category("c1", {"name": "Dining", "icon": "Utensils", "color": "#123456"})

        assert edited.id == "c1"
        assert state.category_label("c1") == "Dining"
        assert state.category_color("c1") == "#123456"

    def test_edit_unknown_ids(self):
        state = food_state()
        assert state.edit_expense("ghost", expense_draft("c1", "1")) is None
        assert state.edit_budget_goal("ghost", {"category_id": "c1", "amount": "1"}) is None
        assert state.edit_category("ghost", {"name": "Ghost"}) is None



class TestRecentChanges:

    def test_mutations_are_logged(self, state):
        member = state.add_member({"name": "Asha"})
        state.delete_member(member.id)

        recent = state.recent_changes(2)
        assert [e.change_type.value for e in recent] == ["deleted", "created"]
        assert recent[0].entity_id == member.id
