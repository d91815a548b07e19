"""Initial data source for a new session.

The seed is read once when a browser session starts and handed to the store
as its starting collections.  Records that fail validation are skipped with
a warning; a missing or unreadable file simply yields empty collections.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

from . import config
from .models import (
    Budget,
    BudgetData,
    Transaction,
    TransactionData,
    ValidationError,
    validate_budget_data,
    validate_transaction_data,
)
from .store import new_id

logger = logging.getLogger(__name__)

Seed = Tuple[List[Transaction], List[Budget]]


def _record_id(row: Dict[str, Any], seen: Set[str], kind: str) -> str:
    """The row's own id, or a fresh one when it is missing or already taken."""
    raw = row['id'] if 'id' in row else None
    record_id = None if raw is None else str(raw).strip()
    if not record_id or record_id in seen:
        if record_id:
            logger.warning("Duplicate seed %s id %r, assigning a new one", kind, record_id)
        record_id = new_id()
    seen.add(record_id)
    return record_id


def _read_json(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.warning("Seed file not found: %s", path)
        return {}
    try:
        with path.open('r', encoding='utf-8') as handle:
            data = json.load(handle)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Could not read seed file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Seed file %s does not contain an object", path)
        return {}
    return data


def _parse_transactions(rows: Any) -> List[Transaction]:
    transactions: List[Transaction] = []
    ids: Set[str] = set()
    for row in rows if isinstance(rows, list) else []:
        try:
            data = TransactionData(
                amount=float(row['amount']),
                date=str(row['date']),
                category=row['category'],
                description=str(row.get('description', '')),
            )
            validate_transaction_data(data)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("Skipping seed transaction %r: %s", row, exc)
            continue
        transactions.append(data.to_record(_record_id(row, ids, 'transaction')))
    return transactions


def _parse_budgets(rows: Any) -> List[Budget]:
    budgets: List[Budget] = []
    seen = set()
    ids: Set[str] = set()
    for row in rows if isinstance(rows, list) else []:
        try:
            data = BudgetData(
                category=row['category'],
                month=str(row['month']),
                budget_amount=float(row['budgetAmount'] if 'budgetAmount' in row else row['budget_amount']),
            )
            validate_budget_data(data)
            if (data.category, data.month) in seen:
                raise ValidationError("duplicate category and month")
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("Skipping seed budget %r: %s", row, exc)
            continue
        seen.add((data.category, data.month))
        budgets.append(data.to_record(_record_id(row, ids, 'budget')))
    return budgets


def load_seed(path: Optional[Path] = None, mode: Optional[str] = None) -> Seed:
    """Load the starting transactions and budgets.

    Args:
        path: Seed JSON file; defaults to ``config.get_seed_path()``.
        mode: ``demo`` or ``empty``; defaults to ``config.get_seed_mode()``.

    Returns:
        Tuple of (transactions, budgets).
    """
    mode = mode or config.get_seed_mode()
    if mode == 'empty':
        return [], []
    data = _read_json(path or config.get_seed_path())
    transactions = _parse_transactions(data.get('transactions'))
    budgets = _parse_budgets(data.get('budgets'))
    logger.info("Seeded %d transactions and %d budgets", len(transactions), len(budgets))
    return transactions, budgets
