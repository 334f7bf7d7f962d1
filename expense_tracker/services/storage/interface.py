"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for record storage.
This allows us to:
1. Keep the local JSON document as the default backend
2. Use in-memory storage for testing
3. Keep the engine decoupled from where records live

The interface is intentionally tiny: the whole collection is read and
written as one list. There is no per-record query support; all
filtering and aggregation happens over an in-memory snapshot.

CONTRACT: `read`, `write_all` and `clear` never raise. A failing read
degrades to an empty collection and a failing write is dropped. The
outcome of the last operation is exposed through `is_available` and
`last_error` so callers can tell "nothing stored" from "storage down".
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from expense_tracker.models.expense import Expense


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for expense record storage.

    Any storage implementation must implement these methods.
    """

    def __init__(self):
        self._last_error: Optional[str] = None

    @property
    def is_available(self) -> bool:
        """Did the last storage operation succeed?"""
        return self._last_error is None

    @property
    def last_error(self) -> Optional[str]:
        """Message of the last failed operation, if any."""
        return self._last_error

    def _mark_ok(self) -> None:
        self._last_error = None

    def _mark_failed(self, error: Exception) -> None:
        self._last_error = str(error) or error.__class__.__name__

    @abstractmethod
    def read(self) -> list[Expense]:
        """
        Return the stored collection in storage order.

        Returns:
            The records, or an empty list if nothing is stored or
            storage is unavailable
        """
        pass

    @abstractmethod
    def write_all(self, records: Sequence[Expense]) -> None:
        """
        Replace the entire stored collection.

        Args:
            records: The full new collection, in storage order
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all stored records."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Record not found in storage."""
    pass


class StorageUnavailableError(StorageError):
    """The storage backend could not be read or written."""
    pass
