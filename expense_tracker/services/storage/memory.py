"""
In-Memory Storage Implementation

Keeps the serialized record list in a dict, the same shape the JSON file
backend writes to disk. Used by the test-suite and as the fallback
backend when the file store cannot be configured.
"""

from typing import Sequence

from expense_tracker.models.expense import Expense
from expense_tracker.services.storage.interface import ExpenseStorageInterface


class InMemoryExpenseStorage(ExpenseStorageInterface):
    """Process-local storage; records are lost when the process exits."""

    def __init__(self, key: str = "expense-tracker-expenses"):
        super().__init__()
        self._key = key
        self._data: dict[str, list[dict]] = {}

    def read(self) -> list[Expense]:
        rows = self._data.get(self._key, [])
        self._mark_ok()
        return [Expense.model_validate(row) for row in rows]

    def write_all(self, records: Sequence[Expense]) -> None:
        # Store serialized copies so callers cannot mutate stored state
        self._data[self._key] = [record.to_storage_dict() for record in records]
        self._mark_ok()

    def clear(self) -> None:
        self._data.pop(self._key, None)
        self._mark_ok()
