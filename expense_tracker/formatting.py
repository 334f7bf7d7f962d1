"""Display helpers shared by the exports and the UI."""

from expense_tracker.models.expense import ExpenseCategory, parse_iso_date


CATEGORY_ICONS = {
    ExpenseCategory.FOOD: "🍔",
    ExpenseCategory.TRANSPORTATION: "🚗",
    ExpenseCategory.ENTERTAINMENT: "🎬",
    ExpenseCategory.SHOPPING: "🛍️",
    ExpenseCategory.BILLS: "💳",
    ExpenseCategory.OTHER: "📌",
}

CATEGORY_COLORS = {
    ExpenseCategory.FOOD: "#10b981",
    ExpenseCategory.TRANSPORTATION: "#3b82f6",
    ExpenseCategory.ENTERTAINMENT: "#8b5cf6",
    ExpenseCategory.SHOPPING: "#ec4899",
    ExpenseCategory.BILLS: "#ef4444",
    ExpenseCategory.OTHER: "#6b7280",
}


def format_currency(amount: float, symbol: str = "$") -> str:
    """1234.5 -> '$1,234.50'; negatives keep the sign before the symbol."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_date(value: str, fmt: str = "%b %d, %Y") -> str:
    """Reformat a stored date, falling back to the raw string."""
    parsed = parse_iso_date(value)
    if parsed is None:
        return value
    return parsed.strftime(fmt)


def format_export_date(value: str) -> str:
    """Stored date as YYYY-MM-DD for CSV and PDF exports."""
    return format_date(value, "%Y-%m-%d")


def category_icon(category: ExpenseCategory) -> str:
    return CATEGORY_ICONS[category]


def category_color(category: ExpenseCategory) -> str:
    return CATEGORY_COLORS[category]


def category_label(category: ExpenseCategory) -> str:
    """'🍔 Food' style label for selects."""
    return f"{category_icon(category)} {category.value}"
