"""
Export Pipeline

Turns a record selection into a downloadable ExportPayload. The CSV and
JSON serializers are pure text renderers; the PDF serializer suspends
while the document is assembled, so the dispatcher is async.

DESIGN DECISION: An empty selection is not an error here. It produces a
well-formed empty export; deciding whether that is worth downloading is
the caller's job.
"""

from datetime import datetime
from typing import Optional, Sequence, Union

from expense_tracker.models.expense import (
    Expense,
    ExportFormat,
    ExportPayload,
    utc_now,
)
from expense_tracker.exports.csv_export import export_to_csv
from expense_tracker.exports.json_export import export_to_json
from expense_tracker.exports.pdf_export import export_to_pdf
from expense_tracker.queries.summary import total_amount


class ExportError(Exception):
    """An export could not be rendered."""

    def __init__(self, export_format: str, message: str):
        self.export_format = export_format
        super().__init__(f"{export_format} export failed: {message}")


def default_export_name(prefix: str = "expenses", now: Optional[datetime] = None) -> str:
    """'expenses-2024-03-01' style base filename."""
    now = now or utc_now()
    return f"{prefix}-{now:%Y-%m-%d}"


def export_filename(name: str, export_format: ExportFormat) -> str:
    """Append the format extension unless the name already carries it."""
    name = name.strip()
    suffix = f".{export_format.extension}"
    if name.lower().endswith(suffix):
        return name
    return f"{name}{suffix}"


async def export_expenses(
    expenses: Sequence[Expense],
    export_format: Union[ExportFormat, str],
    filename: Optional[str] = None,
    now: Optional[datetime] = None,
    report_title: str = "Expense Report",
    currency_symbol: str = "$",
    filename_prefix: str = "expenses",
) -> ExportPayload:
    """
    Render `expenses`, in the given order, as `export_format`.

    Args:
        expenses: The selected records
        export_format: csv, json or pdf
        filename: Base name; blank falls back to '<prefix>-YYYY-MM-DD'
        now: Export timestamp (defaults to the real clock)

    Returns:
        ExportPayload with filename, MIME type and bytes

    Raises:
        ExportError: If the serializer fails
    """
    export_format = ExportFormat(export_format)
    now = now or utc_now()
    records = list(expenses)

    try:
        if export_format is ExportFormat.CSV:
            content = export_to_csv(records).encode("utf-8")
        elif export_format is ExportFormat.JSON:
            content = export_to_json(records, exported_at=now).encode("utf-8")
        else:
            content = await export_to_pdf(
                records,
                generated_at=now,
                title=report_title,
                currency_symbol=currency_symbol,
            )
    except Exception as e:
        raise ExportError(export_format.value, str(e)) from e

    return ExportPayload(
        filename=export_filename(
            (filename or "").strip() or default_export_name(filename_prefix, now),
            export_format,
        ),
        format=export_format,
        content=content,
        record_count=len(records),
        total_amount=total_amount(records),
    )
