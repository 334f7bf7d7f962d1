"""
Expense List Filtering

Filtering is a pure function of the snapshot, the criteria and "today".
All predicates are ANDed:
- text query: case-insensitive substring of description OR category name
- category: "All" or exact equality
- date range: inclusive, only checked when a bound is supplied

The filtered view is then ordered by date, newest first. Python's sort
is stable, so records sharing a date keep their input order.
"""

from datetime import date
from typing import Iterable, Optional, Sequence

from expense_tracker.models.expense import (
    ALL_CATEGORIES,
    Expense,
    ExpenseCategory,
    FilterCriteria,
)


# Lower bound used when only an end date is supplied
EPOCH = date(1970, 1, 1)


def matches_query(expense: Expense, query: str) -> bool:
    if not query:
        return True
    needle = query.lower()
    return (
        needle in expense.description.lower()
        or needle in expense.category.value.lower()
    )


def matches_category(expense: Expense, category) -> bool:
    if category == ALL_CATEGORIES:
        return True
    return expense.category == category


def matches_date_range(
    expense: Expense,
    start_date: Optional[date],
    end_date: Optional[date],
    today: date,
) -> bool:
    """
    Inclusive range check.

    A missing start is the epoch and a missing end is today. A record
    with an unparseable date only matches when no bound is supplied.
    """
    if start_date is None and end_date is None:
        return True
    parsed = expense.parsed_date
    if parsed is None:
        return False
    start = start_date or EPOCH
    end = end_date or today
    return start <= parsed <= end


def sort_newest_first(expenses: Iterable[Expense]) -> list[Expense]:
    """
    Order by date descending.

    Records whose date cannot be parsed go last, in input order.
    """
    dated = []
    undated = []
    for expense in expenses:
        (undated if expense.parsed_date is None else dated).append(expense)
    dated.sort(key=lambda e: e.parsed_date, reverse=True)
    return dated + undated


def filter_expenses(
    expenses: Sequence[Expense],
    criteria: Optional[FilterCriteria] = None,
    today: Optional[date] = None,
) -> list[Expense]:
    """
    Apply the list filters and sort newest first.

    Args:
        expenses: The full record collection
        criteria: Filter criteria (None matches everything)
        today: Implicit end of an open-ended date range

    Returns:
        Matching records, newest first
    """
    criteria = criteria or FilterCriteria()
    today = today or date.today()

    matching = [
        expense for expense in expenses
        if matches_query(expense, criteria.query)
        and matches_category(expense, criteria.category)
        and matches_date_range(expense, criteria.start_date, criteria.end_date, today)
    ]
    return sort_newest_first(matching)


def select_for_export(
    expenses: Sequence[Expense],
    categories: Optional[Iterable[ExpenseCategory]] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[Expense]:
    """
    The export dialog's selection.

    Args:
        expenses: The full record collection
        categories: Categories to keep; None or empty keeps all
        start_date: Inclusive lower bound
        end_date: Inclusive upper bound

    Returns:
        Matching records in input order
    """
    wanted = set(categories or ())
    selected = []
    for expense in expenses:
        if wanted and expense.category not in wanted:
            continue
        if start_date or end_date:
            parsed = expense.parsed_date
            if parsed is None:
                continue
            if start_date and parsed < start_date:
                continue
            if end_date and parsed > end_date:
                continue
        selected.append(expense)
    return selected
