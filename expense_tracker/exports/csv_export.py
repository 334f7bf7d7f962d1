"""
CSV Export

Layout:
    Date,Category,Amount,Description
    2024-01-10,Food,50.00,"Lunch with ""the team"" downtown"

The description is always double-quoted with embedded quotes doubled
(RFC 4180). The other columns never contain commas or quotes: dates are
reformatted, categories are a closed set and amounts are numeric.
"""

from typing import Sequence

from expense_tracker.formatting import format_export_date
from expense_tracker.models.expense import Expense


CSV_HEADERS = ["Date", "Category", "Amount", "Description"]


def quote_field(value: str) -> str:
    """Wrap in double quotes, doubling any embedded quote."""
    return '"' + value.replace('"', '""') + '"'


def expense_to_csv_row(expense: Expense) -> list[str]:
    return [
        format_export_date(expense.date),
        expense.category.value,
        f"{expense.amount:.2f}",
        quote_field(expense.description),
    ]


def export_to_csv(expenses: Sequence[Expense]) -> str:
    """
    Render records as CSV text, one line per record in the given order.

    An empty input yields the header line only.
    """
    lines = [",".join(CSV_HEADERS)]
    lines.extend(",".join(expense_to_csv_row(expense)) for expense in expenses)
    return "\n".join(lines)
