"""Shared fixtures for the Expense Tracker tests."""

from datetime import date, datetime, timezone

import pytest

from expense_tracker.models.expense import Expense, ExpenseCategory


FIXED_NOW = datetime(2024, 2, 20, 9, 30, tzinfo=timezone.utc)
FIXED_TODAY = date(2024, 2, 20)


def make_expense(
    amount: float,
    category: ExpenseCategory,
    expense_date: str,
    description: str = "Test expense",
    **extra,
) -> Expense:
    return Expense(
        date=expense_date,
        amount=amount,
        category=category,
        description=description,
        created_at=extra.pop("created_at", FIXED_NOW),
        updated_at=extra.pop("updated_at", FIXED_NOW),
        **extra,
    )


@pytest.fixture
def three_expenses() -> list[Expense]:
    """Food 50 (Jan), Food 30 (Feb), Bills 20 (Feb)."""
    return [
        make_expense(50, ExpenseCategory.FOOD, "2024-01-10", "Groceries", id="e1"),
        make_expense(30, ExpenseCategory.FOOD, "2024-02-01", "Lunch", id="e2"),
        make_expense(20, ExpenseCategory.BILLS, "2024-02-15", "Phone bill", id="e3"),
    ]


@pytest.fixture
def expense_factory():
    """Build an Expense with fixed timestamps."""
    return make_expense
