"""
CSV Export

Writes collections out as spreadsheet-friendly CSV.

FORMAT (kept exact so files open the same everywhere):
- Text starts with a UTF-8 byte-order mark
- Cells joined by "," and rows joined by "\\n" (no trailing newline)
- A cell is quoted, with inner quotes doubled, only if it contains
  a comma, a quote or a newline
- None is an empty cell; booleans are "true" / "false"

The csv module quotes on "\\r" and adds a trailing line terminator, so
the formatting here is done by hand.
"""

from collections.abc import Iterable, Sequence
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional, Union

import structlog

from trackwise.config import get_settings
from trackwise.state.facade import AppState

logger = structlog.get_logger(__name__)

BOM = "\ufeff"
MISSING_CATEGORY = "N/A"

Cell = Union[str, int, float, Decimal, bool, date, datetime, None]
Row = Sequence[Cell]


def format_cell(value: Cell) -> str:
    """Render one cell, quoting only when needed."""
    if value is None:
        text = ""
    elif isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, (date, datetime)):
        text = value.isoformat()
    else:
        text = str(value)

    if "," in text or '"' in text or "\n" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def to_csv_text(rows: Iterable[Row]) -> str:
    """Full file contents, BOM included."""
    return BOM + "\n".join(",".join(format_cell(cell) for cell in row) for row in rows)


def export_to_csv(
    filename: str,
    rows: Iterable[Row],
    directory: Union[str, Path] = ".",
) -> Path:
    """
    Write rows to directory/filename.

    Returns:
        Path of the written file

    Raises:
        ValueError: If filename is not a plain file name
        OSError: If the file cannot be written
    """
    if not filename or Path(filename).name != filename:
        raise ValueError(f"Invalid export filename: {filename!r}")

    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / filename

    text = to_csv_text(rows)
    # newline="" keeps "\n" as written on every platform
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)

    logger.info("csv_exported", path=str(path), size=len(text))
    return path


def export_filename(kind: str, today: Optional[date] = None) -> str:
    """trackwise_<kind>_<yyyy-mm-dd>.csv"""
    today = today or date.today()
    return f"trackwise_{kind}_{today.isoformat()}.csv"


def _currency(currency: Optional[str]) -> str:
    return currency if currency is not None else get_settings().app.currency_symbol


def _category_name(state: AppState, category_id: str) -> str:
    category = state.get_category_by_id(category_id)
    return category.name if category else MISSING_CATEGORY


def expense_rows(state: AppState, currency: Optional[str] = None) -> list[list[Cell]]:
    currency = _currency(currency)
    rows: list[list[Cell]] = [
        ["ID", "Description", "Amount", "Currency", "Date", "Category Name", "Notes"]
    ]
    for expense in state.expenses:
        rows.append([
            expense.id,
            expense.description,
            expense.amount,
            currency,
            expense.date.date(),
            _category_name(state, expense.category_id),
            expense.notes or "",
        ])
    return rows


def budget_goal_rows(state: AppState, currency: Optional[str] = None) -> list[list[Cell]]:
    """Current spending is the live value, not the stored snapshot."""
    currency = _currency(currency)
    rows: list[list[Cell]] = [[
        "ID", "Category Name", "Budgeted Amount", "Period",
        "Current Spending (Expenses)", "Currency",
    ]]
    for goal in state.budget_goals:
        rows.append([
            goal.id,
            _category_name(state, goal.category_id),
            goal.amount,
            goal.period.value,
            goal.current_spending,
            currency,
        ])
    return rows


def contribution_rows(state: AppState, currency: Optional[str] = None) -> list[list[Cell]]:
    currency = _currency(currency)
    rows: list[list[Cell]] = [["ID", "Member Name", "Amount", "Currency", "Date", "Notes"]]
    for contribution in state.contributions:
        rows.append([
            contribution.id,
            state.member_label(contribution.member_id),
            contribution.amount,
            currency,
            contribution.date.date(),
            contribution.notes or "",
        ])
    return rows


def shopping_list_rows(state: AppState) -> list[list[Cell]]:
    rows: list[list[Cell]] = [
        ["ID", "Item Name", "Quantity", "Notes", "Added At", "Is Purchased"]
    ]
    for item in state.shopping_list_items:
        rows.append([
            item.id,
            item.item_name,
            item.quantity,
            item.notes or "",
            item.added_at.strftime("%Y-%m-%d %H:%M:%S"),
            "Yes" if item.is_purchased else "No",
        ])
    return rows
