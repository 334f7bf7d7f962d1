"""
Core Data Models for the Expense Tracker

These models define the schemas for all data flowing through the system.
They are designed to:
1. Enforce the record invariants at runtime (positive amount, known category)
2. Round-trip through the stored JSON document unchanged
3. Keep derived views (summary, trend, export payload) typed

DESIGN DECISION: The stored `date` stays a string.
A record whose date cannot be parsed must still load, count toward totals
and the category breakdown, and only drop out of date-keyed computations.
`parsed_date` is the single place that parsing happens.
"""

import math
from datetime import date, datetime, timezone
from enum import Enum
from typing import Literal, Optional, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def new_expense_id() -> str:
    """Opaque, never-reused record identifier."""
    return str(uuid4())


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a `YYYY-MM-DD` string (a full ISO timestamp is also accepted).

    Returns None for anything that cannot be parsed.
    """
    if not value:
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Supported expense categories.

    Declaration order matters: it is the iteration order of the category
    breakdown and decides ties for the top category.
    """
    FOOD = "Food"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    BILLS = "Bills"
    OTHER = "Other"


ALL_CATEGORIES = "All"

CategoryFilter = Union[ExpenseCategory, Literal["All"]]


class ExportFormat(str, Enum):
    """Export formats offered by the export dialog."""
    CSV = "csv"
    JSON = "json"
    PDF = "pdf"

    @property
    def mime_type(self) -> str:
        return {
            ExportFormat.CSV: "text/csv",
            ExportFormat.JSON: "application/json",
            ExportFormat.PDF: "application/pdf",
        }[self]

    @property
    def extension(self) -> str:
        return self.value


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    One persisted expense record.

    Python attributes are snake_case; the stored and exported JSON uses
    camelCase (`createdAt`, `updatedAt`). Both spellings are accepted
    when loading.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    # Identity
    id: str = Field(
        default_factory=new_expense_id,
        min_length=1,
        description="Opaque unique identifier, immutable"
    )

    # User-supplied fields
    date: str = Field(
        ...,
        min_length=1,
        description="Calendar date of the expense (YYYY-MM-DD)"
    )
    amount: float = Field(
        ...,
        gt=0,
        description="Amount in currency units, to the cent"
    )
    category: ExpenseCategory = Field(
        ...,
        description="Expense category"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="Free-text description"
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=utc_now,
        description="When the record was created"
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        description="Last mutation timestamp"
    )

    @field_validator('amount')
    @classmethod
    def round_to_cents(cls, v: float) -> float:
        """Reject non-finite values and keep cent precision."""
        if not math.isfinite(v):
            raise ValueError("Amount must be a finite number")
        rounded = round(v, 2)
        if rounded <= 0:
            raise ValueError("Amount must be at least one cent")
        return rounded

    @field_validator('created_at', 'updated_at')
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Timestamps without an offset are taken as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @model_validator(mode='after')
    def validate_timestamps(self) -> 'Expense':
        """updated_at can never precede created_at."""
        if self.updated_at < self.created_at:
            raise ValueError("updatedAt cannot be before createdAt")
        return self

    @property
    def parsed_date(self) -> "Optional[date]":
        """The record date, or None when the stored string is malformed."""
        return parse_iso_date(self.date)

    def to_storage_dict(self) -> dict:
        """JSON-ready dict with camelCase keys, as stored and exported."""
        return self.model_dump(mode="json", by_alias=True)


class ExpenseFormData(BaseModel):
    """
    Raw values collected by the expense form.

    Everything is a string, exactly as typed; Validation decides whether
    the form may become an Expense.
    """
    date: str = ""
    amount: str = ""
    category: str = ""
    description: str = ""

    def to_fields(self) -> dict:
        """Convert a validated form to Expense field values."""
        return {
            "date": self.date.strip(),
            "amount": float(self.amount),
            "category": ExpenseCategory(self.category),
            "description": self.description.strip(),
        }

    @classmethod
    def from_expense(cls, expense: Expense) -> 'ExpenseFormData':
        """Pre-fill the form for editing an existing record."""
        return cls(
            date=expense.date,
            amount=f"{expense.amount:.2f}",
            category=expense.category.value,
            description=expense.description,
        )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationResult(BaseModel):
    """
    Result of validating an expense form.

    `errors` maps field name to a human-readable message. All failing
    fields are reported together.
    """

    errors: dict[str, str] = Field(
        default_factory=dict,
        description="Field name -> error message"
    )

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error_count(self) -> int:
        return len(self.errors)


# =============================================================================
# DERIVED VIEWS (computed on demand, never stored)
# =============================================================================

def empty_breakdown() -> dict[ExpenseCategory, float]:
    """A total category mapping with every category at zero."""
    return {category: 0.0 for category in ExpenseCategory}


class ExpenseSummary(BaseModel):
    """Dashboard totals."""

    total_spending: float = 0.0
    monthly_spending: float = 0.0
    category_breakdown: dict[ExpenseCategory, float] = Field(
        default_factory=empty_breakdown
    )
    top_category: Optional[ExpenseCategory] = None
    expense_count: int = Field(default=0, ge=0)


class FilterCriteria(BaseModel):
    """Criteria of the expense list filter bar."""

    query: str = ""
    category: CategoryFilter = ALL_CATEGORIES
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def is_active(self) -> bool:
        """Whether any filter narrows the list."""
        return bool(
            self.query
            or self.category != ALL_CATEGORIES
            or self.start_date
            or self.end_date
        )


class MonthlyTrendPoint(BaseModel):
    """One calendar-month bucket of the spending trend."""

    month: str = Field(
        ...,
        description="Month key (YYYY-MM)"
    )
    label: str = Field(
        ...,
        description="Human-readable label, e.g. 'Jan 2024'"
    )
    total: float = 0.0


class ExportPayload(BaseModel):
    """A rendered export, ready to be downloaded."""

    filename: str
    format: ExportFormat
    content: bytes
    record_count: int = Field(ge=0)
    total_amount: float = 0.0

    @property
    def mime_type(self) -> str:
        return self.format.mime_type
