"""Export serializers and the export pipeline."""

from expense_tracker.exports.csv_export import CSV_HEADERS, export_to_csv
from expense_tracker.exports.json_export import export_to_json
from expense_tracker.exports.pdf_export import build_pdf_report, export_to_pdf
from expense_tracker.exports.pipeline import (
    ExportError,
    default_export_name,
    export_expenses,
    export_filename,
)

__all__ = [
    "CSV_HEADERS",
    "ExportError",
    "build_pdf_report",
    "default_export_name",
    "export_expenses",
    "export_filename",
    "export_to_csv",
    "export_to_json",
    "export_to_pdf",
]
