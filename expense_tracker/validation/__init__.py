"""Expense form validation package."""

from expense_tracker.validation.validator import ExpenseValidator, validate_expense_form

__all__ = ["ExpenseValidator", "validate_expense_form"]
