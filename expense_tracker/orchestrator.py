"""
Main Orchestrator for the Expense Tracker

This module ties together all the components and defines the flows
the UI drives:
1. Record a spend (form -> validate -> store -> snapshot)
2. Edit / delete a record
3. Read views (dashboard summary, filtered list, monthly trend)
4. Export a selection (select -> serialize -> payload)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing reaches storage without passing validation
- Validation failures come back as values, not exceptions
- Every mutation and export is logged

This is the "glue" the Streamlit app talks to; the app never touches
storage or the engine modules directly.
"""

from datetime import date, datetime
from typing import Callable, Optional, Sequence, Union

import structlog

from expense_tracker.audit import AuditLogger, configure_logging
from expense_tracker.config import Settings, get_settings
from expense_tracker.exports import ExportError, export_expenses
from expense_tracker.models.expense import (
    Expense,
    ExpenseFormData,
    ExpenseSummary,
    ExportFormat,
    ExportPayload,
    FilterCriteria,
    MonthlyTrendPoint,
    ValidationResult,
    utc_now,
)
from expense_tracker.queries import (
    build_monthly_trend,
    calculate_summary,
    filter_expenses,
)
from expense_tracker.services.storage import (
    ExpenseStorageInterface,
    InMemoryExpenseStorage,
    JsonFileExpenseStorage,
)
from expense_tracker.store import ExpenseStore
from expense_tracker.validation import ExpenseValidator


logger = structlog.get_logger(__name__)


class ExpenseTracker:
    """
    Facade over store, validator, engine and export pipeline.

    Mutations return `(validation_result, snapshot)`. When validation
    fails the snapshot is the unchanged current collection.
    """

    def __init__(
        self,
        store: ExpenseStore,
        validator: Optional[ExpenseValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[Settings] = None,
        today_provider: Callable[[], date] = date.today,
    ):
        self._store = store
        self._today = today_provider
        self._validator = validator or ExpenseValidator(today_provider)
        self._audit_logger = audit_logger
        self._settings = settings or get_settings()

    @property
    def store(self) -> ExpenseStore:
        return self._store

    @property
    def storage_available(self) -> bool:
        return self._store.storage_available

    def expenses(self) -> list[Expense]:
        """Current snapshot in storage order."""
        return self._store.load()

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def _check(
        self,
        form: ExpenseFormData,
        expense_id: Optional[str] = None,
    ) -> ValidationResult:
        result = self._validator.validate(form)
        if not result.is_valid and self._audit_logger:
            self._audit_logger.log_validation_failed(result.errors, expense_id)
        return result

    def add_expense(self, form: ExpenseFormData) -> tuple[ValidationResult, list[Expense]]:
        """
        Validate and store a new expense.

        Returns:
            (validation_result, snapshot)
        """
        result = self._check(form)
        if not result.is_valid:
            return result, self._store.load()
        return result, self._store.create(form)

    def edit_expense(
        self,
        expense_id: str,
        form: ExpenseFormData,
    ) -> tuple[ValidationResult, list[Expense]]:
        """
        Validate and apply a full edit.

        Raises:
            NotFoundError: If the record no longer exists
        """
        result = self._check(form, expense_id)
        if not result.is_valid:
            return result, self._store.load()
        return result, self._store.update(expense_id, form)

    def remove_expense(self, expense_id: str) -> list[Expense]:
        return self._store.delete(expense_id)

    def clear_all(self) -> int:
        """Delete every record. Returns how many were removed."""
        return self._store.clear()

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def summary(self, today: Optional[date] = None) -> ExpenseSummary:
        return calculate_summary(self._store.load(), today or self._today())

    def filtered(
        self,
        criteria: Optional[FilterCriteria] = None,
        today: Optional[date] = None,
    ) -> list[Expense]:
        return filter_expenses(self._store.load(), criteria, today or self._today())

    def trend(self, today: Optional[date] = None) -> list[MonthlyTrendPoint]:
        return build_monthly_trend(
            self._store.load(),
            today or self._today(),
            months=self._settings.app.trend_months,
        )

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    async def export(
        self,
        expenses: Sequence[Expense],
        export_format: Union[ExportFormat, str],
        filename: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ExportPayload:
        """
        Export a selection with the configured title and currency.

        Raises:
            ExportError: If rendering fails (also logged)
        """
        export_settings = self._settings.export
        fmt = ExportFormat(export_format)
        try:
            payload = await export_expenses(
                expenses,
                fmt,
                filename=filename,
                now=now or utc_now(),
                report_title=export_settings.report_title,
                currency_symbol=export_settings.currency_symbol,
                filename_prefix=export_settings.filename_prefix,
            )
        except ExportError as e:
            if self._audit_logger:
                self._audit_logger.log_export_failed(fmt.value, str(e))
            raise

        if self._audit_logger:
            self._audit_logger.log_export_generated(
                fmt.value, payload.record_count, payload.total_amount
            )
        return payload


def create_app_components(
    use_storage: bool = True,
    settings: Optional[Settings] = None,
) -> ExpenseTracker:
    """
    Factory function to create the application facade.

    Args:
        use_storage: Whether to use the JSON file store.
                    Set to False for an in-memory session.
        settings: Settings to use (defaults to get_settings())

    Returns:
        A ready ExpenseTracker
    """
    settings = settings or get_settings()
    configure_logging(settings.app.log_level)
    audit_logger = AuditLogger()

    storage: ExpenseStorageInterface
    if use_storage:
        try:
            storage_settings = settings.storage
            storage = JsonFileExpenseStorage(
                storage_settings.path,
                key=storage_settings.key,
                audit_logger=audit_logger,
            )
        except Exception as e:
            # Storage not configured - continue without it
            logger.warning("storage_not_configured", error=str(e))
            storage = InMemoryExpenseStorage()
    else:
        storage = InMemoryExpenseStorage()

    store = ExpenseStore(storage, audit_logger=audit_logger)
    return ExpenseTracker(store, audit_logger=audit_logger, settings=settings)
