"""
JSON File Storage Implementation

DESIGN DECISION: Records live in one local JSON document because:
1. A single-user tracker needs no database server
2. The file is human-readable and trivially backed up
3. The document is a key-value map, so other keys can share the file

TRADEOFFS:
- The whole collection is rewritten on every mutation (fine at
  personal scale)
- No locking; the last full snapshot written wins

Writes go to a temporary file in the same directory followed by an
atomic replace, so a crash mid-write never leaves a truncated document.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Sequence

import structlog
from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from expense_tracker.audit import AuditLogger
from expense_tracker.models.expense import Expense
from expense_tracker.services.storage.interface import (
    ExpenseStorageInterface,
    StorageUnavailableError,
)


logger = structlog.get_logger(__name__)


class JsonFileExpenseStorage(ExpenseStorageInterface):
    """
    Stores the record list under `key` in the JSON document at `path`.

    Document layout:
        {"expense-tracker-expenses": [{"id": ..., "date": ..., ...}, ...]}
    """

    def __init__(
        self,
        path: Path,
        key: str = "expense-tracker-expenses",
        audit_logger: Optional[AuditLogger] = None,
    ):
        super().__init__()
        self._path = Path(path).expanduser()
        self._key = key
        self._audit_logger = audit_logger

    @property
    def path(self) -> Path:
        return self._path

    def _load_document(self) -> dict:
        """Read the whole document; a missing file is an empty document."""
        try:
            with self._path.open("r", encoding="utf-8") as fh:
                document = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            raise StorageUnavailableError(f"Cannot read {self._path}: {e}") from e
        if not isinstance(document, dict):
            raise StorageUnavailableError(
                f"Unexpected document in {self._path}: {type(document).__name__}"
            )
        return document

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, max=1),
        reraise=True,
    )
    def _save_document(self, document: dict) -> None:
        """Write the document atomically."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(document, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _report_failure(self, operation: str, error: Exception) -> None:
        self._mark_failed(error)
        logger.error("storage_operation_failed", operation=operation, error=str(error))
        if self._audit_logger:
            self._audit_logger.log_storage_error(operation, str(error))

    def read(self) -> list[Expense]:
        """Load the stored collection, skipping records that fail validation."""
        try:
            document = self._load_document()
        except StorageUnavailableError as e:
            self._report_failure("read", e)
            return []

        rows = document.get(self._key, [])
        if not isinstance(rows, list):
            self._report_failure(
                "read",
                StorageUnavailableError(f"Value under '{self._key}' is not a list"),
            )
            return []

        records = []
        for index, row in enumerate(rows):
            try:
                records.append(Expense.model_validate(row))
            except ValidationError as e:
                logger.warning(
                    "skipping_malformed_record",
                    index=index,
                    errors=e.error_count(),
                )
        self._mark_ok()
        return records

    def write_all(self, records: Sequence[Expense]) -> None:
        """Replace the stored collection; failures are logged and dropped."""
        try:
            document = self._load_document()
        except StorageUnavailableError:
            # Overwrite an unreadable document rather than lose the write
            document = {}
        document[self._key] = [record.to_storage_dict() for record in records]
        try:
            self._save_document(document)
        except OSError as e:
            self._report_failure("write", e)
            return
        self._mark_ok()

    def clear(self) -> None:
        """Remove the record list from the document."""
        try:
            missing = not self._path.exists()
        except OSError as e:
            self._report_failure("clear", e)
            return
        if missing:
            self._mark_ok()
            return
        try:
            document = self._load_document()
        except StorageUnavailableError:
            document = {}
        document.pop(self._key, None)
        try:
            self._save_document(document)
        except OSError as e:
            self._report_failure("clear", e)
            return
        self._mark_ok()
