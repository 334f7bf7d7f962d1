"""
Expense Form Validation

DESIGN DECISION: Validation is a pure function of the submitted values.
- Every field is checked; failures are collected, never fail-fast
- Failures are returned as a ValidationResult, never raised
- Nothing is silently corrected: a bad value is reported back to the form

The future-date check needs "today". It is only applied when the caller
passes `today`, which keeps the function deterministic in tests.
"""

import math
from datetime import date
from typing import Optional, Union

from expense_tracker.models.expense import (
    ExpenseCategory,
    ExpenseFormData,
    ValidationResult,
    parse_iso_date,
)


DATE_REQUIRED = "Date is required"
DATE_FORMAT = "Date must be in YYYY-MM-DD format"
DATE_IN_FUTURE = "Date cannot be in the future"
AMOUNT_INVALID = "Amount must be greater than 0"
CATEGORY_REQUIRED = "Category is required"
DESCRIPTION_REQUIRED = "Description is required"


def _parse_amount(raw: str) -> Optional[float]:
    """Parse a form amount; None when it is not a finite number."""
    try:
        value = float(raw.strip())
    except (AttributeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def validate_expense_form(
    date_value: str,
    amount: str,
    category: Union[str, ExpenseCategory, None],
    description: str,
    today: Optional[date] = None,
) -> ValidationResult:
    """
    Check the four expense form fields.

    Args:
        date_value: Date string as typed (YYYY-MM-DD)
        amount: Amount string as typed
        category: Selected category, or empty/None when unset
        description: Free-text description
        today: When given, dates after it are rejected

    Returns:
        ValidationResult with one message per failing field
    """
    errors: dict[str, str] = {}

    # Date
    if not date_value or not date_value.strip():
        errors["date"] = DATE_REQUIRED
    else:
        parsed = parse_iso_date(date_value)
        if parsed is None:
            errors["date"] = DATE_FORMAT
        elif today is not None and parsed > today:
            errors["date"] = DATE_IN_FUTURE

    # Amount
    parsed_amount = _parse_amount(amount or "")
    if parsed_amount is None or round(parsed_amount, 2) <= 0:
        errors["amount"] = AMOUNT_INVALID

    # Category
    if not category or category not in {c.value for c in ExpenseCategory}:
        errors["category"] = CATEGORY_REQUIRED

    # Description
    if not description or not description.strip():
        errors["description"] = DESCRIPTION_REQUIRED

    return ValidationResult(errors=errors)


class ExpenseValidator:
    """
    Validates expense form submissions.

    Thin stateful wrapper around validate_expense_form() that supplies
    "today" from an injectable clock.
    """

    def __init__(self, today_provider=date.today):
        """
        Initialize validator.

        Args:
            today_provider: Zero-argument callable returning today's date
        """
        self._today = today_provider

    def validate(self, form: ExpenseFormData) -> ValidationResult:
        """Validate a submitted form against today's date."""
        return validate_expense_form(
            form.date,
            form.amount,
            form.category,
            form.description,
            today=self._today(),
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """
        Generate a short message block for the form.
        """
        if result.is_valid:
            return "✅ Looks good!"

        lines = ["❌ Please fix the following:"]
        for field, message in result.errors.items():
            lines.append(f"   • {field.capitalize()}: {message}")
        return "\n".join(lines)
