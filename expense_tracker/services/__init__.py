"""Services package."""

from expense_tracker.services.storage import (
    ExpenseStorageInterface,
    InMemoryExpenseStorage,
    JsonFileExpenseStorage,
    NotFoundError,
    StorageError,
    StorageUnavailableError,
)

__all__ = [
    "ExpenseStorageInterface",
    "InMemoryExpenseStorage",
    "JsonFileExpenseStorage",
    "NotFoundError",
    "StorageError",
    "StorageUnavailableError",
]
