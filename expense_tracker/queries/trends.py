"""
Monthly Spending Trend

Buckets the snapshot into a fixed rolling window of calendar months
ending with the current month, oldest first. Every month in the window
is present; months without records total 0. Records with unparseable
dates fall in no bucket.
"""

import math
from datetime import date
from typing import Optional, Sequence

from expense_tracker.models.expense import Expense, MonthlyTrendPoint


DEFAULT_TREND_MONTHS = 6


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move (year, month) by `delta` months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_window(today: date, months: int = DEFAULT_TREND_MONTHS) -> list[date]:
    """First day of each month in the window, oldest first."""
    window = []
    for offset in range(months - 1, -1, -1):
        year, month = shift_month(today.year, today.month, -offset)
        window.append(date(year, month, 1))
    return window


def build_monthly_trend(
    expenses: Sequence[Expense],
    today: Optional[date] = None,
    months: int = DEFAULT_TREND_MONTHS,
) -> list[MonthlyTrendPoint]:
    """
    Per-month totals for the trend chart.

    Args:
        expenses: The full record collection
        today: Anchors the window's last month (defaults to the real clock)
        months: Window width

    Returns:
        `months` points oldest first, or an empty list for an empty
        collection (nothing to chart)
    """
    if not expenses:
        return []

    today = today or date.today()
    window = month_window(today, months)

    buckets: dict[tuple[int, int], list[float]] = {
        (start.year, start.month): [] for start in window
    }
    for expense in expenses:
        parsed = expense.parsed_date
        if parsed is None:
            continue
        key = (parsed.year, parsed.month)
        if key in buckets:
            buckets[key].append(expense.amount)

    return [
        MonthlyTrendPoint(
            month=start.strftime("%Y-%m"),
            label=start.strftime("%b %Y"),
            total=round(math.fsum(buckets[(start.year, start.month)]), 2),
        )
        for start in window
    ]
