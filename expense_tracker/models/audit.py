"""
Activity Log Models for the Expense Tracker

Every mutation of the record collection and every export is logged.
This provides:
1. Traceability of what happened to each record
2. Debugging information when storage or an export fails
3. A structured trail the UI can show in debug mode

DESIGN DECISION: Events are written to the structured log only.
They are never persisted next to the records.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from expense_tracker.models.expense import utc_now


class AuditEventType(str, Enum):
    """Types of events we log."""
    # Record lifecycle
    EXPENSE_CREATED = "expense_created"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSES_CLEARED = "expenses_cleared"

    # Validation
    VALIDATION_FAILED = "validation_failed"

    # Export
    EXPORT_GENERATED = "export_generated"
    EXPORT_FAILED = "export_failed"

    # System events
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single activity log event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - which record is this about?
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the expense this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_created(expense_id, "Food", 12.5)
        event = AuditEventBuilder.export_generated("csv", 10, 120.0)
    """

    @staticmethod
    def expense_created(
        expense_id: str,
        category: str,
        amount: float,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_CREATED,
            entity_id=expense_id,
            description=f"Expense created: {category} {amount:.2f}",
            details={
                "category": category,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_updated(
        expense_id: str,
        changed_fields: list[str],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            entity_id=expense_id,
            description="Expense updated",
            details={
                "changed_fields": changed_fields,
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_deleted(expense_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_id=expense_id,
            description="Expense deleted",
            is_user_action=True,
        )

    @staticmethod
    def expenses_cleared(removed_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_CLEARED,
            severity=AuditSeverity.WARNING,
            description=f"All expenses cleared ({removed_count} removed)",
            details={
                "removed_count": removed_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        errors: dict[str, str],
        expense_id: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_id=expense_id,
            description=f"Expense form rejected ({len(errors)} field errors)",
            details={
                "fields": sorted(errors),
            },
            is_user_action=True,
        )

    @staticmethod
    def export_generated(
        export_format: str,
        record_count: int,
        total_amount: float,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPORT_GENERATED,
            description=f"Exported {record_count} expenses as {export_format}",
            details={
                "format": export_format,
                "record_count": record_count,
                "total_amount": total_amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def export_failed(
        export_format: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPORT_FAILED,
            severity=AuditSeverity.ERROR,
            description=f"Export as {export_format} failed",
            error_message=error_message,
            details={
                "format": export_format,
            },
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"Storage {operation} failed",
            error_message=error_message,
            details={
                "operation": operation,
            },
        )
