"""Tests for the monthly spending trend."""

from datetime import date

import pytest

from expense_tracker.models.expense import ExpenseCategory
from expense_tracker.queries import build_monthly_trend, month_window
from expense_tracker.queries.trends import shift_month


class TestMonthWindow:

    def test_shift_month_wraps_years(self):
        assert shift_month(2024, 1, -1) == (2023, 12)
        assert shift_month(2024, 12, 1) == (2025, 1)
        assert shift_month(2024, 3, -14) == (2023, 1)

    def test_window_oldest_first(self):
        window = month_window(date(2024, 2, 20), 6)
        assert window[0] == date(2023, 9, 1)
        assert window[-1] == date(2024, 2, 1)
        assert window == sorted(window)


class TestBuildMonthlyTrend:
    """Tests for build_monthly_trend."""

    def test_six_buckets_with_zeros(self, three_expenses):
        """Test every month of the window is present."""
        trend = build_monthly_trend(three_expenses, date(2024, 2, 20))
        assert [p.month for p in trend] == [
            "2023-09", "2023-10", "2023-11", "2023-12", "2024-01", "2024-02",
        ]
        assert [p.total for p in trend] == [0, 0, 0, 0, 50, 50]

    def test_labels(self, three_expenses):
        trend = build_monthly_trend(three_expenses, date(2024, 2, 20))
        assert trend[0].label == "Sep 2023"
        assert trend[-1].label == "Feb 2024"

    def test_empty_collection(self):
        """Test there is nothing to chart without records."""
        assert build_monthly_trend([], date(2024, 2, 20)) == []

    def test_records_outside_window_ignored(self, expense_factory):
        records = [
            expense_factory(99, ExpenseCategory.FOOD, "2023-08-31"),
            expense_factory(5, ExpenseCategory.FOOD, "2024-03-01"),
            expense_factory(7, ExpenseCategory.FOOD, "oops"),
            expense_factory(1, ExpenseCategory.FOOD, "2023-09-01"),
        ]
        trend = build_monthly_trend(records, date(2024, 2, 20))
        assert len(trend) == 6
        assert sum(p.total for p in trend) == 1

    def test_custom_width(self, three_expenses):
        trend = build_monthly_trend(three_expenses, date(2024, 2, 20), months=2)
        assert [(p.month, p.total) for p in trend] == [("2024-01", 50), ("2024-02", 50)]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
