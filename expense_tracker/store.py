"""
Expense Record Store

The store owns the read-modify-write cycle over the storage backend.
Every mutation reads the full collection, applies one change and writes
the full collection back, then hands the new snapshot to the caller.
Engine functions (summary, filters, trends, exports) only ever see
snapshots.

IMPORTANT: create() and update() expect a form that already passed
validation. An invalid form raises InvalidExpenseError instead of being
silently corrected.
"""

from datetime import datetime
from typing import Callable, Optional

import structlog
from pydantic import ValidationError

from expense_tracker.audit import AuditLogger
from expense_tracker.models.expense import Expense, ExpenseFormData, utc_now
from expense_tracker.services.storage import ExpenseStorageInterface, NotFoundError
from expense_tracker.validation import validate_expense_form


logger = structlog.get_logger(__name__)

EDITABLE_FIELDS = ("date", "amount", "category", "description")


class InvalidExpenseError(ValueError):
    """A form that failed validation reached the store."""

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        fields = ", ".join(sorted(errors))
        super().__init__(f"Invalid expense fields: {fields}")


def _build_expense(data: dict) -> Expense:
    """Construct a record, reporting model violations per field."""
    try:
        return Expense.model_validate(data)
    except ValidationError as e:
        raise InvalidExpenseError(
            {str(err["loc"][0]) if err["loc"] else "expense": err["msg"] for err in e.errors()}
        ) from e


class ExpenseStore:
    """
    Record collection backed by an ExpenseStorageInterface.

    Args:
        storage: Backend holding the serialized collection
        clock: Zero-argument callable returning an aware datetime
        audit_logger: Optional activity logger for mutations
    """

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        clock: Callable[[], datetime] = utc_now,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._clock = clock
        self._audit_logger = audit_logger

    @property
    def storage(self) -> ExpenseStorageInterface:
        return self._storage

    @property
    def storage_available(self) -> bool:
        """False when the last storage operation failed."""
        return self._storage.is_available

    @property
    def storage_error(self) -> Optional[str]:
        return self._storage.last_error

    def load(self) -> list[Expense]:
        """Current snapshot in storage order."""
        return self._storage.read()

    def get(self, expense_id: str) -> Optional[Expense]:
        for expense in self.load():
            if expense.id == expense_id:
                return expense
        return None

    def _fields_from_form(self, form: ExpenseFormData) -> dict:
        result = validate_expense_form(
            form.date, form.amount, form.category, form.description
        )
        if not result.is_valid:
            raise InvalidExpenseError(result.errors)
        return form.to_fields()

    def create(self, form: ExpenseFormData) -> list[Expense]:
        """
        Add a new record at the front of the collection.

        Returns:
            The new snapshot
        """
        fields = self._fields_from_form(form)
        now = self._clock()
        expense = _build_expense({**fields, "created_at": now, "updated_at": now})

        expenses = [expense] + self.load()
        self._storage.write_all(expenses)

        logger.info("expense_created", expense_id=expense.id)
        if self._audit_logger:
            self._audit_logger.log_expense_created(
                expense.id, expense.category.value, expense.amount
            )
        return expenses

    def update(self, expense_id: str, form: ExpenseFormData) -> list[Expense]:
        """
        Replace every editable field of a record.

        `id` and `created_at` are kept; `updated_at` is refreshed and never
        earlier than `created_at`.

        Returns:
            The new snapshot

        Raises:
            NotFoundError: If no record has this id
        """
        fields = self._fields_from_form(form)
        expenses = self.load()

        for index, current in enumerate(expenses):
            if current.id != expense_id:
                continue
            replacement = _build_expense({
                **current.model_dump(),
                **fields,
                "updated_at": max(self._clock(), current.created_at),
            })

            changed = [
                name for name in EDITABLE_FIELDS
                if getattr(current, name) != getattr(replacement, name)
            ]
            expenses[index] = replacement
            self._storage.write_all(expenses)

            logger.info("expense_updated", expense_id=expense_id, changed=changed)
            if self._audit_logger:
                self._audit_logger.log_expense_updated(expense_id, changed)
            return expenses

        raise NotFoundError(f"Expense not found: {expense_id}")

    def delete(self, expense_id: str) -> list[Expense]:
        """
        Remove a record permanently.

        Deleting an unknown id leaves the collection unchanged.

        Returns:
            The new snapshot
        """
        expenses = self.load()
        remaining = [expense for expense in expenses if expense.id != expense_id]

        if len(remaining) == len(expenses):
            logger.warning("delete_unknown_expense", expense_id=expense_id)
            return expenses

        self._storage.write_all(remaining)
        if self._audit_logger:
            self._audit_logger.log_expense_deleted(expense_id)
        return remaining

    def clear(self) -> int:
        """
        Remove every stored record.

        Returns:
            Number of records removed
        """
        removed = len(self.load())
        self._storage.clear()
        if self._audit_logger:
            self._audit_logger.log_expenses_cleared(removed)
        return removed
