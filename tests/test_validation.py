"""Tests for expense form validation."""

from datetime import date

import pytest

from expense_tracker.models.expense import ExpenseFormData
from expense_tracker.validation import ExpenseValidator, validate_expense_form
from expense_tracker.validation.validator import (
    AMOUNT_INVALID,
    CATEGORY_REQUIRED,
    DATE_FORMAT,
    DATE_IN_FUTURE,
    DATE_REQUIRED,
    DESCRIPTION_REQUIRED,
)


class TestValidateExpenseForm:
    """Tests for validate_expense_form."""

    def test_valid_form(self):
        """Test a fully filled form passes."""
        result = validate_expense_form("2024-01-10", "12.50", "Food", "Lunch")
        assert result.is_valid
        assert result.errors == {}

    def test_all_errors_reported_together(self):
        """Test that every failing field is reported at once."""
        result = validate_expense_form("", "-5", "Food", "")
        assert result.errors == {
            "date": DATE_REQUIRED,
            "amount": AMOUNT_INVALID,
            "description": DESCRIPTION_REQUIRED,
        }
        assert result.error_count == 3

    def test_every_field_missing(self):
        result = validate_expense_form("", "", "", "")
        assert set(result.errors) == {"date", "amount", "category", "description"}
        assert result.errors["category"] == CATEGORY_REQUIRED

    def test_messages(self):
        """Test the user-facing messages."""
        assert DATE_REQUIRED == "Date is required"
        assert AMOUNT_INVALID == "Amount must be greater than 0"
        assert CATEGORY_REQUIRED == "Category is required"
        assert DESCRIPTION_REQUIRED == "Description is required"

    @pytest.mark.parametrize("amount", ["0", "-1", "abc", "", "   ", "nan", "inf", "0.001"])
    def test_invalid_amounts(self, amount):
        """Test non-positive, non-numeric and non-finite amounts."""
        result = validate_expense_form("2024-01-10", amount, "Food", "x")
        assert result.errors == {"amount": AMOUNT_INVALID}

    @pytest.mark.parametrize("amount", ["0.01", "12", " 7.5 ", "1e3"])
    def test_valid_amounts(self, amount):
        assert validate_expense_form("2024-01-10", amount, "Food", "x").is_valid

    def test_whitespace_description_rejected(self):
        result = validate_expense_form("2024-01-10", "5", "Food", "   ")
        assert result.errors == {"description": DESCRIPTION_REQUIRED}

    def test_unknown_category_rejected(self):
        """Test a category outside the closed set."""
        result = validate_expense_form("2024-01-10", "5", "Travel", "x")
        assert result.errors == {"category": CATEGORY_REQUIRED}

    def test_malformed_date(self):
        result = validate_expense_form("10/01/2024", "5", "Food", "x")
        assert result.errors == {"date": DATE_FORMAT}

    def test_future_date_only_checked_with_today(self):
        """Test that the future check needs an explicit today."""
        assert validate_expense_form("2099-01-01", "5", "Food", "x").is_valid

        result = validate_expense_form(
            "2024-02-21", "5", "Food", "x", today=date(2024, 2, 20)
        )
        assert result.errors == {"date": DATE_IN_FUTURE}

    def test_today_is_allowed(self):
        result = validate_expense_form(
            "2024-02-20", "5", "Food", "x", today=date(2024, 2, 20)
        )
        assert result.is_valid


class TestExpenseValidator:
    """Tests for the ExpenseValidator wrapper."""

    def test_uses_injected_today(self):
        """Test that the validator supplies today from its provider."""
        validator = ExpenseValidator(lambda: date(2024, 2, 20))
        form = ExpenseFormData(
            date="2024-03-01", amount="5", category="Food", description="x"
        )
        assert validator.validate(form).errors == {"date": DATE_IN_FUTURE}

    def test_summary_valid(self):
        validator = ExpenseValidator(lambda: date(2024, 2, 20))
        form = ExpenseFormData(
            date="2024-02-01", amount="5", category="Food", description="x"
        )
        result = validator.validate(form)
        assert validator.get_user_friendly_summary(result) == "✅ Looks good!"

    def test_summary_lists_errors(self):
        """Test the summary names each failing field."""
        validator = ExpenseValidator(lambda: date(2024, 2, 20))
        result = validator.validate(ExpenseFormData())
        summary = validator.get_user_friendly_summary(result)
        assert summary.startswith("❌ Please fix the following:")
        assert "Date: Date is required" in summary
        assert "Description: Description is required" in summary


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
