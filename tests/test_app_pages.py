import json
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

APP_DIR = Path(__file__).resolve().parents[1] / "finance_tracker"
PAGES = sorted((APP_DIR / "pages").glob("*.py"))


def _page(name):
    return next(p for p in PAGES if p.stem.endswith(name))


def _run(script, monkeypatch, seed="empty"):
    monkeypatch.setenv("FINTRACK_SEED", seed)
    monkeypatch.setenv("FINTRACK_LATENCY_SCALE", "0")
    app = AppTest.from_file(str(script), default_timeout=30)
    app.run()
    assert not app.exception
    return app


def _info_text(app):
    return " ".join(element.value for element in app.info)


def test_dashboard_shows_placeholders_when_empty(monkeypatch):
    app = _run(APP_DIR / "Home.py", monkeypatch)
    assert "No data to display" in _info_text(app)
    assert app.metric[0].value == "$0.00"


@pytest.mark.parametrize("page", PAGES, ids=lambda p: p.stem)
def test_pages_render_with_empty_state(page, monkeypatch):
    _run(page, monkeypatch)


def test_transactions_page_empty_state(monkeypatch):
    app = _run(_page("Transactions"), monkeypatch)
    assert "No transactions yet" in _info_text(app)


def test_budgets_page_empty_state(monkeypatch):
    app = _run(_page("Budgets"), monkeypatch)
    assert "No budget data" in _info_text(app)


def test_dashboard_totals_with_demo_seed(monkeypatch):
    app = _run(APP_DIR / "Home.py", monkeypatch, seed="demo")
    assert app.metric[0].value == "$3,525.00"


def test_delete_button_removes_transaction(monkeypatch):
    app = _run(_page("Transactions"), monkeypatch, seed="demo")
    app.button(key="delete_tx_8").click().run()
    assert not app.exception
    store = app.session_state["finance_store"]
    assert len(store.transactions) == 9
    assert store.get_transaction("8") is None


def _click(app, label):
    button = next(b for b in app.button if b.label == label)
    button.click().run()
    assert not app.exception


def _toasts(app):
    return " ".join(toast.value for toast in app.toast)


def test_edit_transaction_form_updates_record(monkeypatch):
    app = _run(_page("Transactions"), monkeypatch, seed="demo")
    app.button(key="edit_tx_8").click().run()
    amount = app.number_input(key="tx_amount_8")
    assert amount.value == 300
    assert app.selectbox(key="tx_category_8").value == "Food"

    amount.set_value(350.0)
    _click(app, "Update Transaction")

    store = app.session_state["finance_store"]
    assert store.get_transaction("8").amount == 350
    assert store.get_transaction("8").category == "Food"
    assert len(store.transactions) == 10
    assert not app.session_state["transaction_form"].visible


def test_cancel_edit_leaves_store_unchanged(monkeypatch):
    app = _run(_page("Transactions"), monkeypatch, seed="demo")
    app.button(key="edit_tx_8").click().run()
    app.number_input(key="tx_amount_8").set_value(999.0)
    _click(app, "Cancel")

    store = app.session_state["finance_store"]
    assert store.get_transaction("8").amount == 300
    assert store.version == 0
    assert not app.session_state["transaction_form"].visible


def test_edit_budget_form_updates_record(monkeypatch):
    app = _run(_page("Budgets"), monkeypatch, seed="demo")
    app.button(key="edit_budget_1").click().run()
    amount = app.number_input(key="budget_amount_1")
    assert amount.value == 400
    assert app.selectbox(key="budget_month_1").value == "2025-01"

    amount.set_value(450.0)
    _click(app, "Update Budget")

    store = app.session_state["finance_store"]
    assert store.get_budget("1").budget_amount == 450
    assert len(store.budgets) == 5
    assert not app.session_state["budget_form"].is_editing


def _fill_new_budget(app, category, amount):
    suffix = f"new-{app.session_state['finance_store'].version}"
    app.selectbox(key=f"budget_category_{suffix}").set_value(category)
    app.number_input(key=f"budget_amount_{suffix}").set_value(amount)
    return suffix


def test_duplicate_budget_keeps_form_input(monkeypatch):
    app = _run(_page("Budgets"), monkeypatch)
    _fill_new_budget(app, "Food", 100.0)
    _click(app, "Set Budget")
    store = app.session_state["finance_store"]
    assert len(store.budgets) == 1

    suffix = _fill_new_budget(app, "Food", 50.0)
    _click(app, "Set Budget")

    assert len(store.budgets) == 1
    assert store.budgets[0].budget_amount == 100
    assert "Budget Already Exists" in _toasts(app)
    assert app.number_input(key=f"budget_amount_{suffix}").value == 50
    assert app.selectbox(key=f"budget_category_{suffix}").value == "Food"


def test_new_budget_form_clears_after_success(monkeypatch):
    app = _run(_page("Budgets"), monkeypatch)
    _fill_new_budget(app, "Rent", 1200.0)
    _click(app, "Set Budget")

    store = app.session_state["finance_store"]
    assert store.budgets[0].category == "Rent"
    assert app.number_input(key=f"budget_amount_new-{store.version}").value is None


def test_transactions_page_with_colliding_seed_ids(tmp_path, monkeypatch):
    seed = tmp_path / "seed.json"
    seed.write_text(json.dumps({"transactions": [
        {"id": "2", "amount": 10, "date": "2025-01-01", "category": "Food"},
        {"amount": 20, "date": "2025-01-02", "category": "Rent"},
    ]}))
    monkeypatch.setenv("FINTRACK_SEED_PATH", str(seed))
    app = _run(_page("Transactions"), monkeypatch, seed="demo")
    app.button(key="delete_tx_2").click().run()
    assert not app.exception
    store = app.session_state["finance_store"]
    assert [t.category for t in store.transactions] == ["Rent"]
