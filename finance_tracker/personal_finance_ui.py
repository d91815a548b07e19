"""Personal Finance UI Components and Layout.

This module contains the Streamlit components of the finance tracker: summary
cards, charts, the transaction and budget lists, the two forms and the
spending insights.  Components only read the snapshots they are given; any
change the user asks for is handed back through a callback.
"""

from __future__ import annotations

import html
from datetime import date
from typing import Callable, Optional, Sequence

import streamlit as st
from streamlit.errors import StreamlitAPIException

from .analytics import (
    STATUS_NEAR,
    STATUS_OVER,
    MonthComparison,
    SpendingAnalytics,
    current_month_key,
    spending_tips,
)
from .formatting import (
    escape_dollar_for_markdown,
    format_currency,
    format_date,
    format_month,
    format_percent,
    format_signed,
)
from .forms import build_budget_data, build_transaction_data, month_options
from .models import CATEGORIES, Budget, BudgetData, Transaction, TransactionData, ValidationError, category_color
from .store import Notification
from .visualization import (
    create_budget_vs_actual_chart,
    create_category_pie_chart,
    create_monthly_expense_chart,
)

STATUS_ICONS = {STATUS_OVER: "🚨", STATUS_NEAR: "⚠️"}


def _md(text: str) -> str:
    return escape_dollar_for_markdown(text)


class FinanceTrackerUI:
    """Streamlit components for the finance tracker."""

    def __init__(self, *, configure_page: bool = False):
        """Initialize the UI.

        Args:
            configure_page: When True, call ``setup_page_config`` immediately.
        """
        if configure_page:
            self.setup_page_config()

    def setup_page_config(self) -> None:
        """Configure Streamlit page settings."""
        try:
            st.set_page_config(
                page_title="Personal Finance Tracker",
                page_icon="💰",
                layout="wide",
                initial_sidebar_state="expanded",
            )
        except StreamlitAPIException:
            # Already configured for this run
            pass

    # ------------------------------------------------------------------
    # Shared pieces
    # ------------------------------------------------------------------
    def render_header(self) -> None:
        """Render the page header."""
        st.title("💰 Personal Finance Tracker")
        st.markdown("Track expenses, set budgets, and gain spending insights")

    def render_placeholder(self, title: str, hint: str) -> None:
        """Empty-state message shown instead of a blank component."""
        st.info(f"**{title}**  \n{hint}")

    def render_category_badge(self, category: str) -> None:
        color = category_color(category)
        st.markdown(
            f"<span style='background-color:{color}22;color:{color};padding:2px 10px;"
            f"border-radius:10px;font-weight:600'>{html.escape(str(category))}</span>",
            unsafe_allow_html=True,
        )

    def render_notifications(self, notifications: Sequence[Notification]) -> None:
        """Surface store notifications as toasts."""
        for note in notifications:
            icon = "⚠️" if note.is_error else "✅"
            st.toast(_md(f"**{note.title}**: {note.description}"), icon=icon)

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------
    def render_summary_cards(self, analytics: SpendingAnalytics) -> None:
        """Total expenses, top category and latest transaction."""
        col1, col2, col3 = st.columns(3)

        with col1:
            with st.container(border=True):
                st.metric("Total Expenses", format_currency(analytics.total_expenses()))
                st.caption(f"{analytics.transaction_count()} transactions")

        with col2:
            with st.container(border=True):
                top = analytics.top_categories(1)
                if top.empty:
                    st.metric("Top Category", "—")
                    st.caption("No data")
                else:
                    row = top.iloc[0]
                    st.metric("Top Category", format_currency(row['total']))
                    self.render_category_badge(row['category'])

        with col3:
            with st.container(border=True):
                latest = analytics.latest_transaction()
                if latest is None:
                    st.metric("Latest Transaction", "—")
                    st.caption("No transactions")
                else:
                    st.metric("Latest Transaction", format_currency(latest.amount))
                    self.render_category_badge(latest.category)
                    st.caption(format_date(latest.date))

    def render_monthly_chart(self, analytics: SpendingAnalytics, title: str = "Monthly Trends") -> None:
        st.subheader(f"📊 {title}")
        monthly = analytics.monthly_totals()
        if monthly.empty:
            self.render_placeholder("No data to display", "Add some transactions to see your spending trends")
            return
        st.plotly_chart(create_monthly_expense_chart(monthly), use_container_width=True)

    def render_category_chart(self, analytics: SpendingAnalytics, title: str = "Category Breakdown") -> None:
        st.subheader(f"🥧 {title}")
        categories = analytics.category_totals()
        if categories.empty:
            self.render_placeholder("No data to display", "Add some transactions to see your category breakdown")
            return
        st.plotly_chart(create_category_pie_chart(categories), use_container_width=True)

    def render_top_categories(self, analytics: SpendingAnalytics, n: int = 5) -> None:
        """Highest spending categories, largest first."""
        st.subheader("🏆 Top Categories")
        top = analytics.top_categories(n)
        if top.empty:
            self.render_placeholder("No categories yet", "Your highest spending categories will appear here")
            return
        for row in top.itertuples(index=False):
            col_a, col_b = st.columns([3, 1])
            with col_a:
                self.render_category_badge(row.category)
            with col_b:
                st.markdown(f"**{_md(format_currency(row.total))}**")

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------
    def render_transaction_list(
        self,
        transactions: Sequence[Transaction],
        on_edit: Callable[[str], None],
        on_delete: Callable[[str], None],
        loading: bool = False,
    ) -> None:
        """Newest-first list with edit and delete actions."""
        st.subheader("🧾 Recent Transactions")
        if not transactions:
            self.render_placeholder("No transactions yet", "Add your first transaction to get started")
            return

        for transaction in transactions:
            with st.container(border=True):
                info_col, action_col = st.columns([5, 1])
                with info_col:
                    amount_col, badge_col, date_col = st.columns([1, 1, 1])
                    amount_col.markdown(f"**{_md(format_currency(transaction.amount))}**")
                    with badge_col:
                        self.render_category_badge(transaction.category)
                    date_col.caption(format_date(transaction.date))
                    if transaction.description:
                        st.markdown(_md(transaction.description))
                with action_col:
                    st.button(
                        "✏️",
                        key=f"edit_tx_{transaction.id}",
                        help="Edit transaction",
                        on_click=on_edit,
                        args=(transaction.id,),
                        disabled=loading,
                    )
                    st.button(
                        "🗑️",
                        key=f"delete_tx_{transaction.id}",
                        help="Delete transaction",
                        on_click=on_delete,
                        args=(transaction.id,),
                        disabled=loading,
                    )

    def render_transaction_form(
        self,
        existing: Optional[Transaction],
        on_submit: Callable[[TransactionData], None],
        on_cancel: Callable[[], None],
        loading: bool = False,
    ) -> None:
        """Create or edit a transaction; edit mode is pre-populated."""
        suffix = existing.id if existing else "new"
        title = "Edit Transaction" if existing else "Add New Transaction"
        categories = list(CATEGORIES)

        with st.form(key=f"transaction_form_{suffix}"):
            st.subheader(f"➕ {title}")
            col1, col2 = st.columns(2)
            with col1:
                amount = st.number_input(
                    "Amount",
                    min_value=0.0,
                    step=0.01,
                    format="%.2f",
                    value=float(existing.amount) if existing else None,
                    placeholder="0.00",
                    key=f"tx_amount_{suffix}",
                )
                category = st.selectbox(
                    "Category",
                    options=categories,
                    index=categories.index(existing.category) if existing and existing.category in categories else None,
                    placeholder="Select category",
                    key=f"tx_category_{suffix}",
                )
            with col2:
                default_date = date.today()
                if existing:
                    try:
                        default_date = date.fromisoformat(existing.date)
                    except ValueError:
                        pass
                when = st.date_input("Date", value=default_date, key=f"tx_date_{suffix}")
                description = st.text_input(
                    "Description",
                    value=existing.description if existing else "",
                    placeholder="What was this for?",
                    key=f"tx_description_{suffix}",
                )

            submit_col, cancel_col = st.columns([1, 1])
            submitted = submit_col.form_submit_button(
                "Update Transaction" if existing else "Add Transaction",
                type="primary",
                disabled=loading,
            )
            cancelled = cancel_col.form_submit_button("Cancel", disabled=loading)

        if cancelled:
            on_cancel()
            st.rerun()
        if submitted:
            try:
                data = build_transaction_data(amount, when, description, category)
            except ValidationError as exc:
                st.error(str(exc))
                return
            on_submit(data)
            st.rerun()

    # ------------------------------------------------------------------
    # Budgets
    # ------------------------------------------------------------------
    def render_budget_form(
        self,
        existing: Optional[Budget],
        on_submit: Callable[[BudgetData], None],
        on_cancel: Callable[[], None],
        loading: bool = False,
        revision: int = 0,
    ) -> None:
        """Set a monthly budget, or edit an existing one.

        The new-budget form keeps its input until ``revision`` changes, so a
        rejected submission can be corrected instead of retyped.
        """
        suffix = existing.id if existing else f"new-{revision}"
        categories = list(CATEGORIES)
        months = month_options(include=existing.month if existing else None)
        month_values = [value for value, _ in months]
        month_labels = dict(months)

        with st.form(key=f"budget_form_{suffix}"):
            st.subheader("✏️ Edit Budget" if existing else "🎯 Set Monthly Budget")
            st.caption("Set spending limits for each category")
            col1, col2, col3 = st.columns(3)
            with col1:
                category = st.selectbox(
                    "Category",
                    options=categories,
                    index=categories.index(existing.category) if existing and existing.category in categories else None,
                    placeholder="Select category",
                    key=f"budget_category_{suffix}",
                )
            with col2:
                month = st.selectbox(
                    "Month",
                    options=month_values,
                    index=month_values.index(existing.month) if existing else 0,
                    format_func=lambda value: month_labels.get(value, value),
                    key=f"budget_month_{suffix}",
                )
            with col3:
                amount = st.number_input(
                    "Budget Amount",
                    min_value=0.0,
                    step=0.01,
                    format="%.2f",
                    value=float(existing.budget_amount) if existing else None,
                    placeholder="0.00",
                    key=f"budget_amount_{suffix}",
                )

            submit_col, cancel_col = st.columns([1, 1])
            submitted = submit_col.form_submit_button(
                "Update Budget" if existing else "Set Budget",
                type="primary",
                disabled=loading,
            )
            cancelled = False
            if existing:
                cancelled = cancel_col.form_submit_button("Cancel", disabled=loading)

        if cancelled:
            on_cancel()
            st.rerun()
        if submitted:
            try:
                data = build_budget_data(category, month, amount)
            except ValidationError as exc:
                st.error(str(exc))
                return
            on_submit(data)
            st.rerun()

    def render_budget_list(
        self,
        budgets: Sequence[Budget],
        on_edit: Callable[[str], None],
        on_delete: Callable[[str], None],
        loading: bool = False,
    ) -> None:
        """Current budgets with edit and delete actions."""
        st.subheader("📋 Current Budgets")
        if not budgets:
            self.render_placeholder("No budgets yet", "Set a monthly budget above to start tracking your limits")
            return
        for budget in budgets:
            with st.container(border=True):
                badge_col, month_col, amount_col, edit_col, delete_col = st.columns([2, 2, 2, 1, 1])
                with badge_col:
                    self.render_category_badge(budget.category)
                month_col.caption(format_month(budget.month))
                amount_col.markdown(f"**{_md(format_currency(budget.budget_amount))}**")
                edit_col.button(
                    "Edit",
                    key=f"edit_budget_{budget.id}",
                    on_click=on_edit,
                    args=(budget.id,),
                    disabled=loading,
                )
                delete_col.button(
                    "Delete",
                    key=f"delete_budget_{budget.id}",
                    on_click=on_delete,
                    args=(budget.id,),
                    disabled=loading,
                )

    def render_budget_chart(self, analytics: SpendingAnalytics, today: Optional[date] = None) -> None:
        """Budget vs actual for the current month."""
        st.subheader("🎯 Budget vs Actual")
        st.caption("Compare your budgets with actual spending")
        month = current_month_key(today)
        rows = analytics.budget_vs_actual(month)
        if rows.empty:
            self.render_placeholder("No budget data", "Set some budgets to see your spending comparison")
            return
        st.plotly_chart(create_budget_vs_actual_chart(rows, month), use_container_width=True)

        total_budget = rows['budget'].sum()
        total_actual = rows['actual'].sum()
        cols = st.columns(3)
        cols[0].metric("Budgeted", format_currency(total_budget))
        cols[1].metric("Actual", format_currency(total_actual))
        cols[2].metric("Remaining", format_currency(total_budget - total_actual))

    # ------------------------------------------------------------------
    # Insights
    # ------------------------------------------------------------------
    def render_monthly_overview(self, comparison: MonthComparison) -> None:
        st.subheader("📅 Monthly Overview")
        st.caption(f"{format_month(comparison.current_month)} spending summary")
        col1, col2 = st.columns(2)
        col1.metric("Total Spending This Month", format_currency(comparison.current_total))
        col2.metric(
            "vs Last Month",
            format_signed(comparison.change),
            delta=f"{comparison.change_percent:+.1f}%",
            delta_color="inverse",
        )

    def render_budget_insights(self, analytics: SpendingAnalytics, today: Optional[date] = None) -> None:
        """One card per budget of the current month, coloured by status."""
        st.subheader("💡 Budget Insights")
        insights = analytics.budget_insights(today=today)
        if not insights:
            self.render_placeholder(
                "No budgets for this month",
                "Set budgets for the current month to see how you're doing",
            )
            return
        for insight in insights:
            body = _md(
                f"**{insight.category}** · {format_percent(_rounded(insight.percent_used))} used  \n"
                f"{insight.message}  \n"
                f"Spent: {format_currency(insight.actual)} · Budget: {format_currency(insight.budget)}"
            )
            if insight.status == STATUS_OVER:
                st.error(body, icon=STATUS_ICONS[STATUS_OVER])
            elif insight.status == STATUS_NEAR:
                st.warning(body, icon=STATUS_ICONS[STATUS_NEAR])
            else:
                st.success(body, icon="✅")
            if insight.percent_used is not None:
                st.progress(min(max(insight.percent_used, 0.0), 100.0) / 100)

    def render_spending_tips(self, comparison: MonthComparison) -> None:
        st.subheader("📝 Quick Tips")
        for tip in spending_tips(comparison):
            st.markdown(_md(tip))

    def render_spending_insights(self, analytics: SpendingAnalytics, today: Optional[date] = None) -> None:
        comparison = analytics.month_over_month(today)
        self.render_monthly_overview(comparison)
        self.render_budget_insights(analytics, today)
        self.render_spending_tips(comparison)


def _rounded(value: Optional[float]) -> Optional[float]:
    return None if value is None else float(round(value))
