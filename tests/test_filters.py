"""Tests for list filtering and export selection."""

from datetime import date

import pytest

from expense_tracker.models.expense import ExpenseCategory, FilterCriteria
from expense_tracker.queries import filter_expenses, select_for_export, sort_newest_first


TODAY = date(2024, 2, 20)


def ids(expenses):
    return [expense.id for expense in expenses]


class TestFilterExpenses:
    """Tests for filter_expenses."""

    def test_no_filters_sorts_newest_first(self, three_expenses):
        """Test the unfiltered list is ordered by date descending."""
        assert ids(filter_expenses(three_expenses, None, TODAY)) == ["e3", "e2", "e1"]

    def test_category_filter(self, three_expenses):
        criteria = FilterCriteria(category=ExpenseCategory.BILLS)
        assert ids(filter_expenses(three_expenses, criteria, TODAY)) == ["e3"]

    def test_query_matches_description_case_insensitive(self, three_expenses):
        criteria = FilterCriteria(query="LUNCH")
        assert ids(filter_expenses(three_expenses, criteria, TODAY)) == ["e2"]

    def test_query_matches_category_name(self, three_expenses):
        """Test that the search also looks at the category."""
        criteria = FilterCriteria(query="foo")
        assert ids(filter_expenses(three_expenses, criteria, TODAY)) == ["e2", "e1"]

    def test_date_range_is_inclusive(self, three_expenses):
        criteria = FilterCriteria(start_date=date(2024, 1, 10), end_date=date(2024, 2, 1))
        assert ids(filter_expenses(three_expenses, criteria, TODAY)) == ["e2", "e1"]

    def test_start_only_ends_today(self, three_expenses, expense_factory):
        """Test an open end bound defaults to today."""
        future = expense_factory(5, ExpenseCategory.OTHER, "2024-03-01", id="future")
        criteria = FilterCriteria(start_date=date(2024, 2, 1))
        result = filter_expenses(three_expenses + [future], criteria, TODAY)
        assert ids(result) == ["e3", "e2"]

    def test_end_only_starts_at_epoch(self, three_expenses):
        criteria = FilterCriteria(end_date=date(2024, 1, 31))
        assert ids(filter_expenses(three_expenses, criteria, TODAY)) == ["e1"]

    def test_end_before_start_is_empty(self, three_expenses):
        """Test an inverted range matches nothing."""
        criteria = FilterCriteria(start_date=date(2024, 2, 10), end_date=date(2024, 1, 1))
        assert filter_expenses(three_expenses, criteria, TODAY) == []

    def test_predicates_are_combined(self, three_expenses):
        criteria = FilterCriteria(
            query="bill",
            category=ExpenseCategory.FOOD,
        )
        assert filter_expenses(three_expenses, criteria, TODAY) == []

    def test_input_not_mutated(self, three_expenses):
        before = ids(three_expenses)
        filter_expenses(three_expenses, None, TODAY)
        assert ids(three_expenses) == before

    def test_undated_record_excluded_by_date_range(self, three_expenses, expense_factory):
        broken = expense_factory(5, ExpenseCategory.OTHER, "someday", id="broken")
        records = three_expenses + [broken]
        assert "broken" in ids(filter_expenses(records, None, TODAY))
        criteria = FilterCriteria(end_date=TODAY)
        assert "broken" not in ids(filter_expenses(records, criteria, TODAY))


class TestSortNewestFirst:
    """Tests for sort_newest_first."""

    def test_same_date_keeps_input_order(self, expense_factory):
        """Test the sort is stable for equal dates."""
        records = [
            expense_factory(1, ExpenseCategory.FOOD, "2024-02-01", id="a"),
            expense_factory(2, ExpenseCategory.FOOD, "2024-02-05", id="b"),
            expense_factory(3, ExpenseCategory.FOOD, "2024-02-01", id="c"),
        ]
        assert ids(sort_newest_first(records)) == ["b", "a", "c"]

    def test_undated_records_last(self, expense_factory):
        records = [
            expense_factory(1, ExpenseCategory.FOOD, "bad", id="x"),
            expense_factory(2, ExpenseCategory.FOOD, "2024-02-05", id="y"),
        ]
        assert ids(sort_newest_first(records)) == ["y", "x"]


class TestSelectForExport:
    """Tests for the export dialog selection."""

    def test_everything_by_default(self, three_expenses):
        """Test input order is kept."""
        assert ids(select_for_export(three_expenses)) == ["e1", "e2", "e3"]

    def test_multiple_categories(self, three_expenses, expense_factory):
        records = three_expenses + [
            expense_factory(9, ExpenseCategory.SHOPPING, "2024-02-02", id="s1"),
        ]
        selected = select_for_export(
            records, [ExpenseCategory.BILLS, ExpenseCategory.SHOPPING]
        )
        assert ids(selected) == ["e3", "s1"]

    def test_date_bounds(self, three_expenses):
        selected = select_for_export(
            three_expenses, start_date=date(2024, 2, 1), end_date=date(2024, 2, 14)
        )
        assert ids(selected) == ["e2"]

    def test_empty_category_list_keeps_all(self, three_expenses):
        assert len(select_for_export(three_expenses, [])) == 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
