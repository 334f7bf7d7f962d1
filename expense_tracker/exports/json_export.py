"""
JSON Export

A single pretty-printed envelope:
    {
      "exportDate": "2024-03-01T12:00:00.000Z",
      "totalRecords": 2,
      "totalAmount": 80.0,
      "expenses": [{"id": ..., "date": ..., ..., "updatedAt": ...}]
    }

Records carry every persisted field with the stored camelCase keys, so
the `expenses` array loads straight back into Expense models.
"""

import json
from datetime import datetime, timezone
from typing import Optional, Sequence

from expense_tracker.models.expense import Expense, utc_now
from expense_tracker.queries.summary import total_amount


def format_export_timestamp(moment: datetime) -> str:
    """UTC timestamp with millisecond precision and a Z suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def build_export_envelope(
    expenses: Sequence[Expense],
    exported_at: Optional[datetime] = None,
) -> dict:
    return {
        "exportDate": format_export_timestamp(exported_at or utc_now()),
        "totalRecords": len(expenses),
        "totalAmount": total_amount(expenses),
        "expenses": [expense.to_storage_dict() for expense in expenses],
    }


def export_to_json(
    expenses: Sequence[Expense],
    exported_at: Optional[datetime] = None,
) -> str:
    """Render records as the pretty-printed JSON export envelope."""
    envelope = build_export_envelope(expenses, exported_at)
    return json.dumps(envelope, indent=2, ensure_ascii=False)
