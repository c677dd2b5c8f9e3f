"""Tests for CSV formatting, file export and the row builders."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from trackwise.config import get_settings
from trackwise.exports import (
    BOM,
    budget_goal_rows,
    contribution_rows,
    expense_rows,
    export_filename,
    export_to_csv,
    format_cell,
    shopping_list_rows,
    to_csv_text,
)
from trackwise.models import Category
from trackwise.services.storage import InMemoryKeyValueBackend, PersistentStore
from trackwise.state import AppState

from conftest import RecordingLogger


@pytest.fixture
def food_state() -> AppState:
    store = PersistentStore(InMemoryKeyValueBackend(), logger=RecordingLogger())
    return AppState(store, initial_categories=[Category(id="c1", name="Food")])


class TestCsvText:

    def test_quoting_scenario(self):
        """Comma and quote cells are quoted; quotes are doubled."""
        text = to_csv_text([["a,b", "c"], ['d"e', "f"]])
        assert text == '\ufeff"a,b",c\n"d""e",f'

    def test_starts_with_bom(self):
        assert to_csv_text([["x"]]).startswith(BOM)
        assert BOM == "\ufeff"

    def test_newline_cell_quoted(self):
        assert format_cell("line one\nline two") == '"line one\nline two"'

    def test_plain_cells_not_quoted(self):
        assert format_cell("plain text") == "plain text"
        assert format_cell("it's") == "it's"

    def test_primitive_cells(self):
        assert format_cell(None) == ""
        assert format_cell(True) == "true"
        assert format_cell(False) == "false"
        assert format_cell(3) == "3"
        assert format_cell(Decimal("12.50")) == "12.50"
        assert format_cell(date(2024, 3, 1)) == "2024-03-01"

    def test_no_trailing_newline(self):
        assert to_csv_text([["a"], ["b"]]) == "\ufeffa\nb"

    def test_empty_rows(self):
        assert to_csv_text([]) == "\ufeff"


class TestExportToCsv:

    def test_writes_utf8_file(self, tmp_path):
        path = export_to_csv("out.csv", [["Name", "Note"], ["Chloé", "a,b"]], tmp_path)

        assert path == tmp_path / "out.csv"
        raw = path.read_bytes()
        assert raw.startswith(b"\xef\xbb\xbf")
        assert raw.decode("utf-8") == '\ufeffName,Note\nChloé,"a,b"'

    def test_creates_directory(self, tmp_path):
        path = export_to_csv("out.csv", [["x"]], tmp_path / "exports" / "2024")
        assert path.exists()

    @pytest.mark.parametrize("name", ["", "../out.csv", "sub/out.csv"])
    def test_rejects_paths_as_filenames(self, tmp_path, name):
        with pytest.raises(ValueError):
            export_to_csv(name, [["x"]], tmp_path)

    def test_export_filename(self):
        assert export_filename("budget_goals", date(2024, 5, 9)) == "trackwise_budget_goals_2024-05-09.csv"


class TestRowBuilders:

    def test_expense_rows(self, food_state):
        food_state.add_expense({
            "description": "Pizza, large",
            "amount": "18.00",
            "date": datetime(2024, 3, 1, 19, 30),
            "category_id": "c1",
        })
        food_state.add_expense({
            "description": "Mystery",
            "amount": "1",
            "date": datetime(2024, 3, 2),
            "category_id": "gone",
            "notes": "hmm",
        })

        rows = expense_rows(food_state, currency="$")

        assert rows[0] == ["ID", "Description", "Amount", "Currency", "Date", "Category Name", "Notes"]
        assert rows[1][1:] == ["Pizza, large", Decimal("18.00"), "$", date(2024, 3, 1), "Food", ""]
        assert rows[2][5] == "N/A"

        text = to_csv_text(rows)
        assert '"Pizza, large",18.00,$,2024-03-01,Food,' in text

    def test_budget_goal_rows_use_live_spending(self, food_state):
        food_state.add_budget_goal({"category_id": "c1", "amount": "100"})
        food_state.add_expense({
            "description": "Groceries",
            "amount": "25",
            "date": datetime(2024, 3, 1),
            "category_id": "c1",
        })

        rows = budget_goal_rows(food_state, currency="€")

        assert rows[0][4] == "Current Spending (Expenses)"
        assert rows[1][1:] == ["Food", Decimal("100"), "monthly", Decimal("25"), "€"]

    def test_contribution_rows_unknown_member(self, food_state):
        member = food_state.add_member({"name": "Asha"})
        food_state.add_contribution({
            "member_id": member.id, "amount": "20", "date": datetime(2024, 1, 5),
        })
        food_state.delete_member(member.id)

        rows = contribution_rows(food_state, currency="$")

        assert rows[0] == ["ID", "Member Name", "Amount", "Currency", "Date", "Notes"]
        assert rows[1][1] == "Unknown Member"

    def test_shopping_list_rows(self, food_state):
        item = food_state.add_shopping_list_item({"item_name": "Eggs", "quantity": "12"})
        food_state.toggle_shopping_list_item_purchased(item.id)

        rows = shopping_list_rows(food_state)

        assert rows[0] == ["ID", "Item Name", "Quantity", "Notes", "Added At", "Is Purchased"]
        assert rows[1][1:4] == ["Eggs", "12", ""]
        assert rows[1][5] == "Yes"

    def test_currency_defaults_to_setting(self, food_state, monkeypatch):
        monkeypatch.setenv("CURRENCY_SYMBOL", "₹")
        get_settings.cache_clear()
        try:
            food_state.add_expense({
                "description": "Chai",
                "amount": "20",
                "date": datetime(2024, 3, 1),
                "category_id": "c1",
            })
            assert expense_rows(food_state)[1][3] == "₹"
        finally:
            get_settings.cache_clear()
