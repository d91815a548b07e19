import asyncio
import itertools

import pytest

from finance_tracker.models import Budget, BudgetData, Transaction, TransactionData
from finance_tracker.store import VARIANT_DESTRUCTIVE, FinanceStore, run_sync


def _ids():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


def _store(**kwargs):
    kwargs.setdefault('latency_scale', 0)
    kwargs.setdefault('id_factory', _ids())
    return FinanceStore(**kwargs)


FOOD = TransactionData(amount=25.0, date="2025-01-05", category="Food", description="Lunch")
RENT = TransactionData(amount=1200.0, date="2025-01-01", category="Rent", description="Rent")


@pytest.mark.asyncio
async def test_add_transaction_prepends_and_notifies():
    seen = []
    store = _store(
        transactions=[Transaction("old", 5.0, "2024-12-01", "", "Others")],
        notifier=seen.append,
    )
    await store.add_transaction(FOOD)
    assert [t.id for t in store.transactions] == ["id-1", "old"]
    assert store.transactions[0].amount == 25.0
    assert seen[-1].title == "Success"
    assert seen[-1].description == "Transaction added successfully"
    assert store.version == 1
    assert not store.loading


@pytest.mark.asyncio
async def test_snapshots_are_immutable_tuples():
    store = _store()
    await store.add_transaction(FOOD)
    snapshot = store.transactions
    assert isinstance(snapshot, tuple)
    await store.add_transaction(RENT)
    assert len(snapshot) == 1
    assert len(store.transactions) == 2


@pytest.mark.asyncio
async def test_invalid_transaction_is_rejected_without_change():
    store = _store()
    await store.add_transaction(TransactionData(amount=-3, date="2025-01-05", category="Food"))
    assert store.transactions == ()
    assert store.version == 0
    note = store.history[-1]
    assert note.title == "Invalid Input"
    assert note.variant == VARIANT_DESTRUCTIVE


@pytest.mark.asyncio
async def test_update_transaction_replaces_whole_record():
    store = _store()
    await store.add_transaction(FOOD)
    await store.update_transaction("id-1", RENT)
    record = store.get_transaction("id-1")
    assert record.to_data() == RENT
    assert len(store.transactions) == 1
    assert store.history[-1].description == "Transaction updated successfully"


@pytest.mark.asyncio
async def test_update_unknown_transaction_reports_not_found():
    store = _store()
    await store.update_transaction("missing", FOOD)
    assert store.history[-1].is_error
    assert "not found" in store.history[-1].description


@pytest.mark.asyncio
async def test_delete_transaction_is_idempotent():
    store = _store()
    await store.add_transaction(FOOD)
    await store.delete_transaction("id-1")
    await store.delete_transaction("id-1")
    assert store.transactions == ()
    assert [n.description for n in store.history[-2:]] == ["Transaction deleted successfully"] * 2


@pytest.mark.asyncio
async def test_duplicate_budget_is_rejected():
    store = _store()
    data = BudgetData(category="Food", month="2025-01", budget_amount=400)
    await store.add_budget(data)
    await store.add_budget(BudgetData(category="Food", month="2025-01", budget_amount=100))
    assert len(store.budgets) == 1
    assert store.budgets[0].budget_amount == 400
    note = store.history[-1]
    assert note.title == "Budget Already Exists"
    assert note.description == "A budget for this category and month already exists. Edit it instead."


@pytest.mark.asyncio
async def test_budgets_are_appended():
    store = _store()
    await store.add_budget(BudgetData("Food", "2025-01", 400))
    await store.add_budget(BudgetData("Food", "2025-02", 300))
    assert [b.month for b in store.budgets] == ["2025-01", "2025-02"]
    assert store.history[-1].description == "Budget set successfully"


@pytest.mark.asyncio
async def test_update_budget_keeps_pairs_unique():
    store = _store(budgets=[
        Budget("a", "Food", "2025-01", 400),
        Budget("b", "Rent", "2025-01", 1200),
    ])
    await store.update_budget("b", BudgetData("Food", "2025-01", 10))
    assert store.get_budget("b").category == "Rent"
    assert store.history[-1].title == "Budget Already Exists"

    await store.update_budget("a", BudgetData("Food", "2025-01", 450))
    assert store.get_budget("a").budget_amount == 450
    assert store.history[-1].description == "Budget updated successfully"


@pytest.mark.asyncio
async def test_delete_budget():
    store = _store(budgets=[Budget("a", "Food", "2025-01", 400)])
    await store.delete_budget("a")
    assert store.budgets == ()
    assert store.find_budget("Food", "2025-01") is None


@pytest.mark.asyncio
async def test_second_mutation_is_rejected_while_loading():
    store = _store(latency_scale=0.02)
    first = asyncio.create_task(store.add_transaction(FOOD))
    await asyncio.sleep(0)
    assert store.loading
    await store.add_transaction(RENT)
    assert store.history[-1].title == "Please wait"
    await first
    assert not store.loading
    assert [t.category for t in store.transactions] == ["Food"]


@pytest.mark.asyncio
async def test_unexpected_failure_leaves_state_untouched(caplog):
    def broken_ids():
        raise RuntimeError("id service down")

    store = _store(id_factory=broken_ids)
    await store.add_transaction(FOOD)
    assert store.transactions == ()
    assert not store.loading
    assert store.history[-1].title == "Error"
    assert store.history[-1].description == "Failed to add transaction"
    assert "Failed to add transaction" in caplog.text


def test_run_sync_drives_store_from_plain_code():
    store = _store()
    run_sync(store.add_transaction(FOOD))
    assert len(store.transactions) == 1
    assert [n.title for n in store.drain_notifications()] == ["Success"]
    assert store.history == []
