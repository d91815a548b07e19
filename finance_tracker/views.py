"""The four views of the tracker and the registry that picks between them."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

import streamlit as st

from .analytics import SpendingAnalytics
from .config import get_top_category_count
from .forms import FormState
from .models import BudgetData, TransactionData
from .personal_finance_ui import FinanceTrackerUI
from .shared_sidebar import render_shared_sidebar
from .store import FinanceStore, run_sync

logger = logging.getLogger(__name__)

VIEWS = ("dashboard", "transactions", "budgets", "insights")
DEFAULT_VIEW = "dashboard"


def _apply(store: FinanceStore, form: Optional[FormState], operation) -> None:
    """Run a store coroutine and close ``form`` when it changed the data."""
    before = store.version
    with st.spinner("Saving..."):
        run_sync(operation)
    if form is not None and store.version > before:
        form.close()


def _transaction_form(store: FinanceStore, ui: FinanceTrackerUI, form: FormState) -> None:
    if not form.visible:
        return
    existing = store.get_transaction(form.editing_id) if form.is_editing else None
    if form.is_editing and existing is None:
        form.cancel()
        return

    def submit(data: TransactionData) -> None:
        if existing is not None:
            _apply(store, form, store.update_transaction(existing.id, data))
        else:
            _apply(store, form, store.add_transaction(data))

    ui.render_transaction_form(existing, submit, form.cancel, loading=store.loading)
    st.divider()


def render_dashboard(store: FinanceStore, ui: FinanceTrackerUI, **_) -> None:
    analytics = SpendingAnalytics(store.transactions, store.budgets)
    ui.render_summary_cards(analytics)
    left, right = st.columns(2)
    with left:
        ui.render_monthly_chart(analytics)
    with right:
        ui.render_category_chart(analytics)
    ui.render_top_categories(analytics, get_top_category_count())


def render_transactions(store: FinanceStore, ui: FinanceTrackerUI, transaction_form: FormState, **_) -> None:
    analytics = SpendingAnalytics(store.transactions, store.budgets)
    left, right = st.columns(2)
    with left:
        ui.render_monthly_chart(analytics)
    with right:
        ui.render_category_chart(analytics)
    ui.render_transaction_list(
        analytics.sorted_transactions(),
        on_edit=transaction_form.start_edit,
        on_delete=lambda transaction_id: _apply(store, None, store.delete_transaction(transaction_id)),
        loading=store.loading,
    )


def render_budgets(store: FinanceStore, ui: FinanceTrackerUI, budget_form: FormState, **_) -> None:
    existing = store.get_budget(budget_form.editing_id) if budget_form.is_editing else None
    if budget_form.is_editing and existing is None:
        budget_form.cancel()

    def submit(data: BudgetData) -> None:
        if existing is not None:
            _apply(store, budget_form, store.update_budget(existing.id, data))
        else:
            _apply(store, budget_form, store.add_budget(data))

    ui.render_budget_form(existing, submit, budget_form.cancel, loading=store.loading, revision=store.version)
    ui.render_budget_list(
        store.budgets,
        on_edit=budget_form.start_edit,
        on_delete=lambda budget_id: _apply(store, None, store.delete_budget(budget_id)),
        loading=store.loading,
    )
    ui.render_budget_chart(SpendingAnalytics(store.transactions, store.budgets))


def render_insights(store: FinanceStore, ui: FinanceTrackerUI, **_) -> None:
    ui.render_spending_insights(SpendingAnalytics(store.transactions, store.budgets))


VIEW_RENDERERS: Dict[str, Callable[..., None]] = {
    "dashboard": render_dashboard,
    "transactions": render_transactions,
    "budgets": render_budgets,
    "insights": render_insights,
}


def render_view(name: str, store: Optional[FinanceStore] = None, ui: Optional[FinanceTrackerUI] = None) -> str:
    """Render one view below the shared sidebar.

    Args:
        name: One of ``VIEWS``; anything else renders the dashboard.
        store: Store to render; defaults to the session store.
        ui: Component set; defaults to the one built by the sidebar.

    Returns:
        The name of the view actually rendered.
    """
    if name not in VIEW_RENDERERS:
        logger.warning("Unknown view %r, showing %s", name, DEFAULT_VIEW)
        name = DEFAULT_VIEW

    context = render_shared_sidebar()
    store = store or context['store']
    ui = ui or context['ui']

    ui.render_header()
    _transaction_form(store, ui, context['transaction_form'])
    VIEW_RENDERERS[name](
        store,
        ui,
        transaction_form=context['transaction_form'],
        budget_form=context['budget_form'],
    )
    return name
