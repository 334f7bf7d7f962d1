"""
PDF Export

Renders a paginated expense report with reportlab:
- title, generation timestamp, record count and total
- a Date/Category/Amount/Description table whose header row repeats on
  every page, amounts right-aligned and currency-prefixed
- a "Page X of Y" footer on every page

DESIGN DECISION: The total page count is only known once the story has
been laid out, so page drawing is deferred: NumberedCanvas keeps each
page's state and stamps the footers when the document is saved.

Every call builds its own document, buffer and canvas; nothing is shared
between concurrent exports.
"""

import asyncio
from datetime import datetime
from io import BytesIO
from typing import Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from expense_tracker.formatting import format_currency, format_export_date
from expense_tracker.models.expense import Expense, utc_now
from expense_tracker.queries.summary import total_amount


PAGE_MARGIN = 14 * mm
HEADER_FILL = colors.Color(79 / 255, 70 / 255, 229 / 255)
STRIPE_FILL = colors.Color(249 / 255, 250 / 255, 251 / 255)
FOOTER_GRAY = 150 / 255

TABLE_HEADERS = ["Date", "Category", "Amount", "Description"]
FIXED_COLUMN_WIDTHS = [30 * mm, 35 * mm, 25 * mm]


class NumberedCanvas(canvas.Canvas):
    """Canvas that stamps 'Page X of Y' on every page at save time."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        page_count = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(page_count)
            super().showPage()
        super().save()

    def _draw_footer(self, page_count: int) -> None:
        width, _ = self._pagesize
        self.saveState()
        self.setFont("Helvetica", 8)
        self.setFillGray(FOOTER_GRAY)
        self.drawCentredString(
            width / 2,
            10 * mm,
            f"Page {self._pageNumber} of {page_count}",
        )
        self.restoreState()


def _styles() -> dict[str, ParagraphStyle]:
    sample = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "ReportTitle",
            parent=sample["Title"],
            fontName="Helvetica-Bold",
            fontSize=18,
            leading=22,
            alignment=0,
        ),
        "meta": ParagraphStyle(
            "ReportMeta",
            parent=sample["Normal"],
            fontName="Helvetica",
            fontSize=10,
            leading=14,
        ),
        "cell": ParagraphStyle(
            "ReportCell",
            parent=sample["Normal"],
            fontName="Helvetica",
            fontSize=9,
            leading=11,
        ),
    }


def _expense_table(
    expenses: Sequence[Expense],
    cell_style: ParagraphStyle,
    currency_symbol: str,
    available_width: float,
) -> Table:
    rows = [list(TABLE_HEADERS)]
    for expense in expenses:
        rows.append([
            format_export_date(expense.date),
            expense.category.value,
            format_currency(expense.amount, currency_symbol),
            Paragraph(escape(expense.description), cell_style),
        ])

    description_width = available_width - sum(FIXED_COLUMN_WIDTHS)
    table = Table(
        rows,
        colWidths=FIXED_COLUMN_WIDTHS + [description_width],
        repeatRows=1,
    )
    table.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_FILL),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, STRIPE_FILL]),
        ("ALIGN", (2, 0), (2, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LEFTPADDING", (0, 0), (-1, -1), 3),
        ("RIGHTPADDING", (0, 0), (-1, -1), 3),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]))
    return table


def build_pdf_report(
    expenses: Sequence[Expense],
    generated_at: Optional[datetime] = None,
    title: str = "Expense Report",
    currency_symbol: str = "$",
) -> bytes:
    """
    Lay out and render the report synchronously.

    An empty input yields a one-page report with a header-only table.
    """
    generated_at = generated_at or utc_now()
    styles = _styles()
    buffer = BytesIO()

    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=PAGE_MARGIN,
        rightMargin=PAGE_MARGIN,
        topMargin=PAGE_MARGIN,
        bottomMargin=20 * mm,
        title=title,
    )

    story = [
        Paragraph(escape(title), styles["title"]),
        Paragraph(f"Generated: {generated_at:%b %d, %Y %H:%M}", styles["meta"]),
        Paragraph(f"Total Records: {len(expenses)}", styles["meta"]),
        Paragraph(
            f"Total Amount: {escape(format_currency(total_amount(expenses), currency_symbol))}",
            styles["meta"],
        ),
        Spacer(1, 6 * mm),
        _expense_table(expenses, styles["cell"], currency_symbol, doc.width),
    ]
    doc.build(story, canvasmaker=NumberedCanvas)
    return buffer.getvalue()


async def export_to_pdf(
    expenses: Sequence[Expense],
    generated_at: Optional[datetime] = None,
    title: str = "Expense Report",
    currency_symbol: str = "$",
) -> bytes:
    """Render the report in a worker thread."""
    return await asyncio.to_thread(
        build_pdf_report,
        list(expenses),
        generated_at,
        title,
        currency_symbol,
    )
