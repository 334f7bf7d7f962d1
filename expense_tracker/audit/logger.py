"""
Activity Logger

DESIGN DECISION: Every mutation and every export is logged.
This provides:
1. Traceability of record changes
2. Debugging capability when storage or exports misbehave
3. A single structured log format for the whole package

The logger gracefully handles failures: a broken log sink must never
break adding, editing or exporting an expense.
"""

import logging
from typing import Optional

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route structlog output through the stdlib root logger at `level`.

    Safe to call more than once; the last level wins.
    """
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("expense_tracker").setLevel(level)


class AuditLogger:
    """
    Central activity logging service.

    Writes each AuditEvent as one structured log line at the level that
    matches its severity.
    """

    def __init__(self, logger_name: str = "expense_tracker.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the log sink raised; never propagates.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity.value == "error":
                self._logger.error("audit_event", **log_dict)
            elif event.severity.value == "warning":
                self._logger.warning("audit_event", **log_dict)
            elif event.severity.value == "debug":
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            return False

        return True

    def log_expense_created(self, expense_id: str, category: str, amount: float) -> None:
        """Log record creation."""
        self.log(AuditEventBuilder.expense_created(expense_id, category, amount))

    def log_expense_updated(self, expense_id: str, changed_fields: list[str]) -> None:
        """Log record update."""
        self.log(AuditEventBuilder.expense_updated(expense_id, changed_fields))

    def log_expense_deleted(self, expense_id: str) -> None:
        self.log(AuditEventBuilder.expense_deleted(expense_id))

    def log_expenses_cleared(self, removed_count: int) -> None:
        self.log(AuditEventBuilder.expenses_cleared(removed_count))

    def log_validation_failed(
        self,
        errors: dict[str, str],
        expense_id: Optional[str] = None,
    ) -> None:
        """Log a rejected form submission."""
        self.log(AuditEventBuilder.validation_failed(errors, expense_id))

    def log_export_generated(
        self,
        export_format: str,
        record_count: int,
        total_amount: float,
    ) -> None:
        self.log(
            AuditEventBuilder.export_generated(export_format, record_count, total_amount)
        )

    def log_export_failed(self, export_format: str, error_message: str) -> None:
        self.log(AuditEventBuilder.export_failed(export_format, error_message))

    def log_storage_error(self, operation: str, error_message: str) -> None:
        self.log(AuditEventBuilder.storage_error(operation, error_message))
