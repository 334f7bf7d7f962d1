"""Flow tests through the ExpenseTracker facade."""

import asyncio
import json
from datetime import date, datetime, timezone

import pytest

from expense_tracker.audit import AuditLogger
from expense_tracker.config import Settings
from expense_tracker.exports import ExportError
from expense_tracker.models.audit import AuditEventType
from expense_tracker.models.expense import (
    ExpenseCategory,
    ExpenseFormData,
    ExportFormat,
    FilterCriteria,
)
from expense_tracker.orchestrator import ExpenseTracker, create_app_components
from expense_tracker.services.storage import InMemoryExpenseStorage, JsonFileExpenseStorage
from expense_tracker.store import ExpenseStore


TODAY = date(2024, 2, 20)
NOW = datetime(2024, 2, 20, 9, 30, tzinfo=timezone.utc)


class RecordingAuditLogger(AuditLogger):

    def __init__(self):
        super().__init__()
        self.events = []

    def log(self, event):
        self.events.append(event)
        return True

    def types(self):
        return [event.event_type for event in self.events]


@pytest.fixture
def audit():
    return RecordingAuditLogger()


@pytest.fixture
def tracker(audit):
    store = ExpenseStore(InMemoryExpenseStorage(), clock=lambda: NOW, audit_logger=audit)
    return ExpenseTracker(
        store,
        audit_logger=audit,
        settings=Settings(),
        today_provider=lambda: TODAY,
    )


def add(tracker, date_value, amount, category, description):
    result, snapshot = tracker.add_expense(ExpenseFormData(
        date=date_value, amount=amount, category=category, description=description,
    ))
    assert result.is_valid, result.errors
    return snapshot


class TestRecordingExpenses:
    """Adding and editing through the facade."""

    def test_add_valid(self, tracker):
        result, snapshot = tracker.add_expense(ExpenseFormData(
            date="2024-02-01", amount="30", category="Food", description="Lunch",
        ))
        assert result.is_valid
        assert len(snapshot) == 1
        assert tracker.expenses() == snapshot

    def test_add_invalid_returns_errors_and_unchanged_snapshot(self, tracker, audit):
        """Test a rejected form never reaches storage."""
        add(tracker, "2024-02-01", "30", "Food", "Lunch")
        result, snapshot = tracker.add_expense(ExpenseFormData(
            date="", amount="-5", category="Food", description="",
        ))
        assert result.error_count == 3
        assert len(snapshot) == 1
        assert audit.types()[-1] == AuditEventType.VALIDATION_FAILED

    def test_future_date_rejected(self, tracker):
        result, snapshot = tracker.add_expense(ExpenseFormData(
            date="2024-02-21", amount="5", category="Food", description="Tomorrow",
        ))
        assert result.errors == {"date": "Date cannot be in the future"}
        assert snapshot == []

    def test_edit(self, tracker):
        expense = add(tracker, "2024-02-01", "30", "Food", "Lunch")[0]
        result, snapshot = tracker.edit_expense(expense.id, ExpenseFormData(
            date="2024-02-02", amount="35", category="Food", description="Dinner",
        ))
        assert result.is_valid
        assert snapshot[0].description == "Dinner"
        assert snapshot[0].id == expense.id

    def test_edit_invalid_keeps_record(self, tracker, audit):
        expense = add(tracker, "2024-02-01", "30", "Food", "Lunch")[0]
        result, snapshot = tracker.edit_expense(expense.id, ExpenseFormData(
            date="2024-02-02", amount="abc", category="Food", description="Dinner",
        ))
        assert not result.is_valid
        assert snapshot[0] == expense
        assert audit.events[-1].entity_id == expense.id

    def test_remove_and_clear(self, tracker):
        first = add(tracker, "2024-02-01", "30", "Food", "Lunch")[0]
        add(tracker, "2024-02-02", "10", "Bills", "Phone")
        assert len(tracker.remove_expense(first.id)) == 1
        assert tracker.clear_all() == 1
        assert tracker.expenses() == []


class TestViews:
    """Dashboard, list and trend views."""

    @pytest.fixture
    def populated(self, tracker):
        add(tracker, "2024-01-10", "50", "Food", "Groceries")
        add(tracker, "2024-02-01", "30", "Food", "Lunch")
        add(tracker, "2024-02-15", "20", "Bills", "Phone bill")
        return tracker

    def test_summary(self, populated):
        summary = populated.summary()
        assert summary.total_spending == 100
        assert summary.monthly_spending == 50
        assert summary.top_category == ExpenseCategory.FOOD

    def test_filtered(self, populated):
        shown = populated.filtered(FilterCriteria(category="Bills"))
        assert [e.description for e in shown] == ["Phone bill"]

    def test_filtered_default_order(self, populated):
        shown = populated.filtered()
        assert [e.date for e in shown] == ["2024-02-15", "2024-02-01", "2024-01-10"]

    def test_trend(self, populated):
        trend = populated.trend()
        assert len(trend) == 6
        assert trend[-1].label == "Feb 2024"
        assert trend[-1].total == 50

    def test_trend_width_from_settings(self, populated, monkeypatch):
        monkeypatch.setenv("TREND_MONTHS", "3")
        assert len(populated.trend()) == 3


class TestExport:
    """Export through the facade."""

    def test_export_json(self, tracker, audit):
        add(tracker, "2024-02-01", "30", "Food", "Lunch")
        payload = asyncio.run(tracker.export(tracker.expenses(), "json", now=NOW))
        assert payload.filename == "expenses-2024-02-20.json"
        assert json.loads(payload.content)["totalAmount"] == 30
        assert audit.types()[-1] == AuditEventType.EXPORT_GENERATED

    def test_export_uses_configured_prefix(self, tracker, monkeypatch):
        monkeypatch.setenv("EXPENSE_EXPORT_FILENAME_PREFIX", "spending")
        payload = asyncio.run(tracker.export([], ExportFormat.CSV, now=NOW))
        assert payload.filename == "spending-2024-02-20.csv"

    def test_export_failure_logged(self, tracker, audit, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("renderer crashed")

        monkeypatch.setattr("expense_tracker.exports.pipeline.export_to_json", boom)
        with pytest.raises(ExportError):
            asyncio.run(tracker.export([], ExportFormat.JSON, now=NOW))
        assert audit.types()[-1] == AuditEventType.EXPORT_FAILED


class TestCreateAppComponents:

    def test_json_storage(self, tmp_path, monkeypatch):
        """Test the factory wires the file backend from settings."""
        monkeypatch.setenv("EXPENSE_STORAGE_PATH", str(tmp_path / "expenses.json"))
        tracker = create_app_components(use_storage=True, settings=Settings())
        assert isinstance(tracker.store.storage, JsonFileExpenseStorage)
        assert tracker.storage_available

    def test_in_memory(self):
        tracker = create_app_components(use_storage=False, settings=Settings())
        assert isinstance(tracker.store.storage, InMemoryExpenseStorage)
        assert tracker.expenses() == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
