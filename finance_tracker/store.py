"""In-memory store for transactions and budgets.

The store is the only owner of the two collections.  Views read immutable
snapshots (tuples of frozen records) and request changes through the six
async operations below.  Each operation raises the ``loading`` flag, waits
a simulated network delay, applies the change and reports the outcome
through the notifier.  Nothing is written anywhere: the collections live
and die with the browser session.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, List, Optional, Tuple, TypeVar

from . import config
from .models import (
    Budget,
    BudgetData,
    DuplicateBudgetError,
    Transaction,
    TransactionData,
    ValidationError,
    validate_budget_data,
    validate_transaction_data,
)

logger = logging.getLogger(__name__)

VARIANT_DEFAULT = "default"
VARIANT_DESTRUCTIVE = "destructive"

T = TypeVar("T")


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = VARIANT_DEFAULT

    @property
    def is_error(self) -> bool:
        return self.variant == VARIANT_DESTRUCTIVE


Notifier = Callable[[Notification], None]


def new_id() -> str:
    return uuid.uuid4().hex


def run_sync(awaitable: Awaitable[T]) -> T:
    """Run a store coroutine to completion from synchronous (Streamlit) code."""
    return asyncio.run(awaitable)


class FinanceStore:
    """Single source of truth for the transaction and budget collections."""

    def __init__(
        self,
        transactions: Iterable[Transaction] = (),
        budgets: Iterable[Budget] = (),
        notifier: Optional[Notifier] = None,
        latency_scale: Optional[float] = None,
        id_factory: Callable[[], str] = new_id,
    ):
        self._transactions: List[Transaction] = list(transactions)
        self._budgets: List[Budget] = list(budgets)
        self._notifier = notifier
        self._latency_scale = config.get_latency_scale() if latency_scale is None else latency_scale
        self._new_id = id_factory
        self.loading = False
        self.history: List[Notification] = []
        self.version = 0

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return tuple(self._transactions)

    @property
    def budgets(self) -> Tuple[Budget, ...]:
        return tuple(self._budgets)

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return next((t for t in self._transactions if t.id == transaction_id), None)

    def get_budget(self, budget_id: str) -> Optional[Budget]:
        return next((b for b in self._budgets if b.id == budget_id), None)

    def find_budget(self, category: str, month: str) -> Optional[Budget]:
        return next(
            (b for b in self._budgets if b.category == category and b.month == month),
            None,
        )

    def drain_notifications(self) -> List[Notification]:
        """Return and forget the notifications emitted since the last drain."""
        pending, self.history = self.history, []
        return pending

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------
    async def add_transaction(self, data: TransactionData) -> None:
        def mutate() -> None:
            validate_transaction_data(data)
            record = data.to_record(self._new_id())
            self._transactions.insert(0, record)
            logger.info("Added transaction %s (%s %.2f)", record.id, record.category, record.amount)

        await self._run(
            mutate,
            delay=config.ADD_LATENCY,
            success="Transaction added successfully",
            failure="Failed to add transaction",
        )

    async def update_transaction(self, transaction_id: str, data: TransactionData) -> None:
        def mutate() -> None:
            validate_transaction_data(data)
            index = self._index_of(self._transactions, transaction_id)
            if index is None:
                raise ValidationError("Transaction not found. It may have been deleted.")
            self._transactions[index] = data.to_record(transaction_id)
            logger.info("Updated transaction %s", transaction_id)

        await self._run(
            mutate,
            delay=config.UPDATE_LATENCY,
            success="Transaction updated successfully",
            failure="Failed to update transaction",
        )

    async def delete_transaction(self, transaction_id: str) -> None:
        def mutate() -> None:
            before = len(self._transactions)
            self._transactions = [t for t in self._transactions if t.id != transaction_id]
            if len(self._transactions) == before:
                logger.info("Delete ignored, no transaction with id %s", transaction_id)
            else:
                logger.info("Deleted transaction %s", transaction_id)

        await self._run(
            mutate,
            delay=config.DELETE_LATENCY,
            success="Transaction deleted successfully",
            failure="Failed to delete transaction",
        )

    # ------------------------------------------------------------------
    # Budgets
    # ------------------------------------------------------------------
    async def add_budget(self, data: BudgetData) -> None:
        def check() -> None:
            validate_budget_data(data)
            if self.find_budget(data.category, data.month) is not None:
                raise DuplicateBudgetError(data.category, data.month)

        def mutate() -> None:
            # Re-checked after the delay; the collection may have changed meanwhile
            check()
            record = data.to_record(self._new_id())
            self._budgets.append(record)
            logger.info("Added budget %s (%s %s)", record.id, record.category, record.month)

        await self._run(
            mutate,
            delay=config.ADD_LATENCY,
            success="Budget set successfully",
            failure="Failed to set budget",
            precheck=check,
        )

    async def update_budget(self, budget_id: str, data: BudgetData) -> None:
        def mutate() -> None:
            validate_budget_data(data)
            index = self._index_of(self._budgets, budget_id)
            if index is None:
                raise ValidationError("Budget not found. It may have been deleted.")
            clash = self.find_budget(data.category, data.month)
            if clash is not None and clash.id != budget_id:
                raise DuplicateBudgetError(data.category, data.month)
            self._budgets[index] = data.to_record(budget_id)
            logger.info("Updated budget %s", budget_id)

        await self._run(
            mutate,
            delay=config.UPDATE_LATENCY,
            success="Budget updated successfully",
            failure="Failed to update budget",
        )

    async def delete_budget(self, budget_id: str) -> None:
        def mutate() -> None:
            self._budgets = [b for b in self._budgets if b.id != budget_id]
            logger.info("Deleted budget %s", budget_id)

        await self._run(
            mutate,
            delay=config.DELETE_LATENCY,
            success="Budget deleted successfully",
            failure="Failed to delete budget",
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    @staticmethod
    def _index_of(records: List, record_id: str) -> Optional[int]:
        for index, record in enumerate(records):
            if record.id == record_id:
                return index
        return None

    async def _run(
        self,
        mutate: Callable[[], None],
        *,
        delay: float,
        success: str,
        failure: str,
        precheck: Optional[Callable[[], None]] = None,
    ) -> None:
        """Run one mutation as a single-flight unit of work.

        Validation problems become a rejection notice, anything else is logged
        and reported as a failure.  Either way the collections are left as
        they were.
        """
        if self.loading:
            logger.warning("Rejected mutation while another one is in flight")
            self._notify(Notification(
                "Please wait",
                "Another change is still being saved.",
                VARIANT_DESTRUCTIVE,
            ))
            return

        self.loading = True
        try:
            if precheck is not None:
                precheck()
            await asyncio.sleep(delay * self._latency_scale)
            mutate()
        except DuplicateBudgetError as exc:
            logger.warning("Duplicate budget for %s %s", exc.category, exc.month)
            self._notify(Notification("Budget Already Exists", str(exc), VARIANT_DESTRUCTIVE))
        except ValidationError as exc:
            logger.warning("Validation rejected: %s", exc)
            self._notify(Notification("Invalid Input", str(exc), VARIANT_DESTRUCTIVE))
        except Exception:
            logger.exception(failure)
            self._notify(Notification("Error", failure, VARIANT_DESTRUCTIVE))
        else:
            self.version += 1
            self._notify(Notification("Success", success))
        finally:
            self.loading = False

    def _notify(self, notification: Notification) -> None:
        self.history.append(notification)
        if self._notifier is not None:
            self._notifier(notification)
