"""
Dashboard Aggregation

DESIGN DECISION: Aggregation is DETERMINISTIC and pure.
It runs over an in-memory snapshot and takes "today" as an argument,
so the dashboard numbers for a given snapshot and date never change.

Amounts are cent-precise, so sums are computed with math.fsum and
rounded back to cents.
"""

import math
from datetime import date
from typing import Iterable, Optional, Sequence

from expense_tracker.models.expense import (
    Expense,
    ExpenseCategory,
    ExpenseSummary,
    empty_breakdown,
)


def total_amount(expenses: Iterable[Expense]) -> float:
    """Sum of amounts, rounded to cents (0 for an empty collection)."""
    return round(math.fsum(expense.amount for expense in expenses), 2)


def in_month(expense: Expense, year: int, month: int) -> bool:
    """Does the record date fall in the given calendar month?"""
    parsed = expense.parsed_date
    if parsed is None:
        return False
    return parsed.year == year and parsed.month == month


def category_breakdown(expenses: Iterable[Expense]) -> dict[ExpenseCategory, float]:
    """
    Per-category sums.

    Every category is present, in declaration order, zero when unused.
    """
    sums: dict[ExpenseCategory, list[float]] = {category: [] for category in ExpenseCategory}
    for expense in expenses:
        sums[expense.category].append(expense.amount)

    breakdown = empty_breakdown()
    for category, amounts in sums.items():
        breakdown[category] = round(math.fsum(amounts), 2)
    return breakdown


def top_category(breakdown: dict[ExpenseCategory, float]) -> Optional[ExpenseCategory]:
    """
    The category with the strictly largest sum.

    Walks categories in declaration order; an equal sum never displaces
    an earlier maximum. None when every category is zero.
    """
    best: Optional[ExpenseCategory] = None
    best_amount = 0.0
    for category in ExpenseCategory:
        amount = breakdown.get(category, 0.0)
        if amount > best_amount:
            best_amount = amount
            best = category
    return best


def top_categories(
    breakdown: dict[ExpenseCategory, float],
    limit: int = 3,
) -> list[tuple[ExpenseCategory, float]]:
    """
    The highest-spending categories, largest first.

    Zero sums are left out. Equal sums keep declaration order.
    """
    ranked = [
        (category, breakdown.get(category, 0.0))
        for category in ExpenseCategory
        if breakdown.get(category, 0.0) > 0
    ]
    ranked.sort(key=lambda item: item[1], reverse=True)
    return ranked[:limit]


def category_share(amount: float, total: float) -> float:
    """Percentage of `total`, to one decimal place (0 when total is 0)."""
    if total <= 0:
        return 0.0
    return round(amount / total * 100, 1)


def calculate_summary(
    expenses: Sequence[Expense],
    today: Optional[date] = None,
) -> ExpenseSummary:
    """
    Compute the dashboard summary for a snapshot.

    Args:
        expenses: The full record collection
        today: Reference date for "this month" (defaults to the real clock)

    Returns:
        ExpenseSummary with totals, breakdown and top category
    """
    today = today or date.today()

    monthly = [e for e in expenses if in_month(e, today.year, today.month)]
    breakdown = category_breakdown(expenses)

    return ExpenseSummary(
        total_spending=total_amount(expenses),
        monthly_spending=total_amount(monthly),
        category_breakdown=breakdown,
        top_category=top_category(breakdown),
        expense_count=len(expenses),
    )
