"""Shared sidebar components for the multi-page tracker.

This module owns the per-session bootstrap: one ``FinanceStore`` seeded on
first use, the transaction and budget form states, and the sidebar shown on
every page.
"""

from __future__ import annotations

import logging
from typing import Dict

import streamlit as st

from .config import configure_logging
from .forms import FormState
from .personal_finance_ui import FinanceTrackerUI
from .seed import load_seed
from .store import FinanceStore

logger = logging.getLogger(__name__)

STORE_KEY = "finance_store"
TRANSACTION_FORM_KEY = "transaction_form"
BUDGET_FORM_KEY = "budget_form"


def get_store() -> FinanceStore:
    """Return the session's store, seeding it on first access."""
    if STORE_KEY not in st.session_state:
        configure_logging()
        transactions, budgets = load_seed()
        st.session_state[STORE_KEY] = FinanceStore(transactions, budgets)
        logger.info("Started session store")
    return st.session_state[STORE_KEY]


def get_form_state(key: str) -> FormState:
    if key not in st.session_state:
        st.session_state[key] = FormState()
    return st.session_state[key]


def render_shared_sidebar() -> Dict:
    """Render shared sidebar elements available on all pages.

    Returns:
        Dict with keys: 'store', 'ui', 'transaction_form', 'budget_form'
    """
    ui = FinanceTrackerUI(configure_page=True)
    store = get_store()
    transaction_form = get_form_state(TRANSACTION_FORM_KEY)
    budget_form = get_form_state(BUDGET_FORM_KEY)

    st.sidebar.title("💰 Finance Tracker")
    st.sidebar.button(
        "➕ Add Transaction",
        type="primary",
        use_container_width=True,
        on_click=transaction_form.open_new,
        disabled=store.loading,
    )
    st.sidebar.caption(
        f"{len(store.transactions)} transactions · {len(store.budgets)} budgets"
    )
    st.sidebar.warning(
        "Data lives only in this browser session and is lost on refresh.",
        icon="⚠️",
    )

    ui.render_notifications(store.drain_notifications())

    return {
        'store': store,
        'ui': ui,
        'transaction_form': transaction_form,
        'budget_form': budget_form,
    }
