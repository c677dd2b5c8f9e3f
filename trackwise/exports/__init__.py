"""CSV export."""

from trackwise.exports.csv_export import (
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

__all__ = [
    "BOM",
    "budget_goal_rows",
    "contribution_rows",
    "expense_rows",
    "export_filename",
    "export_to_csv",
    "format_cell",
    "shopping_list_rows",
    "to_csv_text",
]
