"""
Streamlit Frontend for the Expense Tracker

This is the user interface for recording and reviewing day-to-day
spending.

DESIGN PRINCIPLES:
1. Simple, clear forms
2. Every field error shown next to the form at once
3. Nothing deleted without an explicit confirmation
4. Numbers on the dashboard always come from the current records
5. Exports preview exactly what will be downloaded

The UI only talks to the ExpenseTracker facade.
"""

import asyncio
from datetime import date

import streamlit as st

from expense_tracker.config import get_settings, validate_all_settings
from expense_tracker.exports import ExportError, default_export_name
from expense_tracker.formatting import (
    category_color,
    category_label,
    format_currency,
    format_date,
)
from expense_tracker.models.expense import (
    ALL_CATEGORIES,
    ExpenseCategory,
    ExpenseFormData,
    ExportFormat,
    FilterCriteria,
)
from expense_tracker.orchestrator import ExpenseTracker, create_app_components
from expense_tracker.queries import (
    category_share,
    select_for_export,
    top_categories,
    total_amount,
)
from expense_tracker.services.storage import NotFoundError


# Page configuration
st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💸",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
    .success-box {
        padding: 20px;
        background-color: #d4edda;
        border-radius: 10px;
        border-left: 5px solid #28a745;
        margin: 10px 0;
    }
    .warning-box {
        padding: 20px;
        background-color: #fff3cd;
        border-radius: 10px;
        border-left: 5px solid #ffc107;
        margin: 10px 0;
    }
    .big-number {
        font-size: 2.2em;
        font-weight: bold;
        color: #2c3e50;
    }
</style>
""", unsafe_allow_html=True)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_tracker() -> ExpenseTracker:
    """Get or create the tracker (cached)."""
    try:
        return create_app_components(use_storage=True)
    except Exception as e:
        st.error(f"Failed to initialize storage: {e}")
        return create_app_components(use_storage=False)


def main():
    """Main application entry point."""
    tracker = get_tracker()

    # Sidebar navigation
    st.sidebar.title("💸 Expense Tracker")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📊 Dashboard", "➕ Add Expense", "📋 Expenses", "📤 Export", "⚙️ Settings"],
        index=0,
    )

    if not tracker.storage_available:
        st.sidebar.warning(
            "⚠️ Storage is unavailable. Changes may not be saved.\n\n"
            f"{tracker.store.storage_error}"
        )

    # Route to appropriate page
    if page == "📊 Dashboard":
        render_dashboard_page(tracker)
    elif page == "➕ Add Expense":
        render_add_page(tracker)
    elif page == "📋 Expenses":
        render_expenses_page(tracker)
    elif page == "📤 Export":
        render_export_page(tracker)
    elif page == "⚙️ Settings":
        render_settings_page(tracker)


def render_expense_form(key: str, initial: ExpenseFormData, submit_label: str):
    """
    Render the four expense fields.

    Returns the submitted ExpenseFormData, or None if not submitted.
    """
    categories = [c.value for c in ExpenseCategory]
    with st.form(key, clear_on_submit=False):
        col1, col2 = st.columns(2)
        with col1:
            date_value = st.text_input(
                "Date *",
                value=initial.date or date.today().isoformat(),
                help="YYYY-MM-DD, not in the future",
            )
            amount = st.text_input(
                "Amount *",
                value=initial.amount,
                placeholder="0.00",
            )
        with col2:
            category = st.selectbox(
                "Category *",
                options=categories,
                index=categories.index(initial.category) if initial.category in categories else 0,
                format_func=lambda v: category_label(ExpenseCategory(v)),
            )
            description = st.text_input(
                "Description *",
                value=initial.description,
                placeholder="What was it for?",
            )
        submitted = st.form_submit_button(submit_label, type="primary")

    if not submitted:
        return None
    return ExpenseFormData(
        date=date_value,
        amount=amount,
        category=category,
        description=description,
    )


def show_errors(errors: dict[str, str]) -> None:
    items = "".join(f"<li><strong>{field.capitalize()}:</strong> {msg}</li>" for field, msg in errors.items())
    st.markdown(f"""
    <div class="warning-box">
        <h4>⚠️ Please fix the following</h4>
        <ul>{items}</ul>
    </div>
    """, unsafe_allow_html=True)


def render_dashboard_page(tracker: ExpenseTracker):
    """Render summary cards and charts."""
    st.title("📊 Dashboard")

    summary = tracker.summary()

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Spending", format_currency(summary.total_spending))
    col2.metric("This Month", format_currency(summary.monthly_spending))
    col3.metric("Expenses", summary.expense_count)
    col4.metric(
        "Top Category",
        summary.top_category.value if summary.top_category else "—",
    )

    if summary.expense_count == 0:
        st.info("No data to display. Add expenses to see spending visualizations.")
        return

    st.markdown("---")
    left, right = st.columns(2)

    with left:
        st.subheader("Top Spending Categories")
        for category, amount in top_categories(summary.category_breakdown):
            share = category_share(amount, summary.total_spending)
            st.markdown(
                f"<span style='color:{category_color(category)}'>●</span> "
                f"{category_label(category)}: **{format_currency(amount)}** ({share:.1f}%)",
                unsafe_allow_html=True,
            )
            st.progress(min(share / 100, 1.0))

    with right:
        st.subheader("Monthly Spending Trend")
        trend = tracker.trend()
        st.bar_chart(
            {
                "Month": [point.label for point in trend],
                "Total": [point.total for point in trend],
            },
            x="Month",
            y="Total",
        )


def render_add_page(tracker: ExpenseTracker):
    """Render the add-expense form."""
    st.title("➕ Add Expense")

    form = render_expense_form("add_expense", ExpenseFormData(), "💾 Save Expense")
    if form is None:
        return

    result, _ = tracker.add_expense(form)
    if result.is_valid:
        st.markdown(f"""
        <div class="success-box">
            <h4>✅ Expense saved</h4>
            <p>{category_label(ExpenseCategory(form.category))} · {format_currency(float(form.amount))}</p>
        </div>
        """, unsafe_allow_html=True)
    else:
        show_errors(result.errors)


def render_expenses_page(tracker: ExpenseTracker):
    """Render the filterable list with edit and delete."""
    st.title("📋 Expenses")

    col1, col2, col3, col4 = st.columns([3, 2, 2, 2])
    with col1:
        query = st.text_input("Search", placeholder="Description or category")
    with col2:
        category = st.selectbox(
            "Category",
            options=[ALL_CATEGORIES] + [c.value for c in ExpenseCategory],
            format_func=lambda v: "All Categories" if v == ALL_CATEGORIES else category_label(ExpenseCategory(v)),
        )
    with col3:
        start_date = st.date_input("From", value=None)
    with col4:
        end_date = st.date_input("To", value=None)

    criteria = FilterCriteria(
        query=query,
        category=category,
        start_date=start_date,
        end_date=end_date,
    )
    all_expenses = tracker.expenses()
    shown = tracker.filtered(criteria)

    if criteria.is_active:
        st.caption(f"Showing {len(shown)} of {len(all_expenses)} expenses")

    if not shown:
        if all_expenses:
            st.info("No expenses match your filters.")
        else:
            st.info("No expenses yet. Add your first expense to get started!")
        return

    for expense in shown:
        with st.expander(
            f"{format_date(expense.date)} · {category_label(expense.category)} · "
            f"{format_currency(expense.amount)} · {expense.description}"
        ):
            edited = render_expense_form(
                f"edit_{expense.id}",
                ExpenseFormData.from_expense(expense),
                "✏️ Update",
            )
            if edited is not None:
                try:
                    result, _ = tracker.edit_expense(expense.id, edited)
                except NotFoundError:
                    st.error("This expense no longer exists.")
                else:
                    if result.is_valid:
                        st.success("Expense updated")
                        st.rerun()
                    else:
                        show_errors(result.errors)

            confirm = st.checkbox("I want to delete this expense", key=f"confirm_{expense.id}")
            if st.button("🗑️ Delete", key=f"delete_{expense.id}", disabled=not confirm):
                tracker.remove_expense(expense.id)
                st.rerun()


def render_export_page(tracker: ExpenseTracker):
    """Render the export dialog."""
    st.title("📤 Export")

    expenses = tracker.expenses()

    col1, col2 = st.columns(2)
    with col1:
        export_format = st.radio(
            "Format",
            options=list(ExportFormat),
            format_func=lambda f: f.value.upper(),
            horizontal=True,
        )
        filename = st.text_input(
            "Filename",
            value=default_export_name(get_settings().export.filename_prefix),
            help="The extension is added automatically",
        )
    with col2:
        categories = st.multiselect(
            "Categories (empty = all)",
            options=list(ExpenseCategory),
            format_func=category_label,
        )
        start_date = st.date_input("From", value=None, key="export_from")
        end_date = st.date_input("To", value=None, key="export_to")

    selected = select_for_export(expenses, categories, start_date, end_date)

    st.markdown("---")
    col1, col2 = st.columns(2)
    col1.metric("Records", len(selected))
    col2.metric("Total", format_currency(total_amount(selected)))

    with st.expander("👀 Preview"):
        if selected:
            st.table([
                {
                    "Date": format_date(e.date),
                    "Category": e.category.value,
                    "Amount": format_currency(e.amount),
                    "Description": e.description,
                }
                for e in selected[:10]
            ])
            if len(selected) > 10:
                st.caption(f"Showing 10 of {len(selected)} records")
        else:
            st.info("No expenses match current filters")

    if not selected:
        st.warning("No expenses to export with current filters")
        return

    if st.button("📦 Prepare Export", type="primary"):
        try:
            payload = run_async(tracker.export(selected, export_format, filename))
        except ExportError as e:
            st.error(f"Failed to export data: {e}")
            return
        st.download_button(
            f"⬇️ Download {payload.filename}",
            data=payload.content,
            file_name=payload.filename,
            mime=payload.mime_type,
        )


def render_settings_page(tracker: ExpenseTracker):
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")
    status = validate_all_settings()
    for name in ("storage", "export", "app"):
        if status.get(name, False):
            st.success(f"✅ {name.capitalize()} settings loaded")
        else:
            error = status.get(f"{name}_error", "Not configured")
            st.error(f"❌ {name.capitalize()} settings - {error}")

    st.markdown("### Storage")
    if tracker.storage_available:
        st.success("✅ Storage is available")
    else:
        st.error(f"❌ Storage unavailable: {tracker.store.storage_error}")

    st.markdown("---")
    st.markdown("### Danger Zone")
    confirm = st.checkbox("I understand this permanently deletes every expense")
    if st.button("🧹 Clear All Expenses", disabled=not confirm):
        removed = tracker.clear_all()
        st.success(f"Removed {removed} expenses")


if __name__ == "__main__":
    main()
