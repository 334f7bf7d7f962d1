"""
Storage Services Package

Provides the abstract record storage interface and its implementations.
The local JSON document is the default backend; the in-memory backend
serves tests and the no-disk fallback.
"""

from expense_tracker.services.storage.interface import (
    ExpenseStorageInterface,
    NotFoundError,
    StorageError,
    StorageUnavailableError,
)
from expense_tracker.services.storage.json_file import JsonFileExpenseStorage
from expense_tracker.services.storage.memory import InMemoryExpenseStorage

__all__ = [
    # Interface
    "ExpenseStorageInterface",
    # Exceptions
    "NotFoundError",
    "StorageError",
    "StorageUnavailableError",
    # Implementations
    "InMemoryExpenseStorage",
    "JsonFileExpenseStorage",
]
