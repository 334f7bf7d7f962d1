"""Read-side computations over a record snapshot."""

from expense_tracker.queries.filters import (
    filter_expenses,
    select_for_export,
    sort_newest_first,
)
from expense_tracker.queries.summary import (
    calculate_summary,
    category_breakdown,
    category_share,
    top_categories,
    top_category,
    total_amount,
)
from expense_tracker.queries.trends import build_monthly_trend, month_window

__all__ = [
    "build_monthly_trend",
    "calculate_summary",
    "category_breakdown",
    "category_share",
    "filter_expenses",
    "month_window",
    "select_for_export",
    "sort_newest_first",
    "top_categories",
    "top_category",
    "total_amount",
]
