"""Domain records for the finance tracker.

Two flat record types (``Transaction`` and ``Budget``), the id-less payloads
that forms emit, the closed category set and the boundary validation that
keeps bad values out of the store.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Tuple

CATEGORIES: Tuple[str, ...] = (
    "Food",
    "Utilities",
    "Rent",
    "Shopping",
    "Entertainment",
    "Transportation",
    "Healthcare",
    "Others",
)

DEFAULT_CATEGORY = "Others"

CATEGORY_COLORS: Dict[str, str] = {
    "Food": "#f97316",
    "Utilities": "#3b82f6",
    "Rent": "#8b5cf6",
    "Shopping": "#ec4899",
    "Entertainment": "#10b981",
    "Transportation": "#eab308",
    "Healthcare": "#ef4444",
    "Others": "#6b7280",
}


class ValidationError(ValueError):
    """Raised when user input or a payload breaks a domain invariant."""


class DuplicateBudgetError(ValidationError):
    """A budget for the same category and month already exists."""

    def __init__(self, category: str, month: str):
        super().__init__(
            "A budget for this category and month already exists. Edit it instead."
        )
        self.category = category
        self.month = month


@dataclass(frozen=True)
class TransactionData:
    amount: float
    date: str
    category: str
    description: str = ""

    def to_record(self, record_id: str) -> "Transaction":
        return Transaction(
            id=record_id,
            amount=self.amount,
            date=self.date,
            description=self.description,
            category=self.category,
        )


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: float
    date: str  # YYYY-MM-DD
    description: str
    category: str

    @property
    def month(self) -> str:
        return month_key(self.date)

    def to_data(self) -> TransactionData:
        return TransactionData(
            amount=self.amount,
            date=self.date,
            category=self.category,
            description=self.description,
        )


@dataclass(frozen=True)
class BudgetData:
    category: str
    month: str
    budget_amount: float

    def to_record(self, record_id: str) -> "Budget":
        return Budget(
            id=record_id,
            category=self.category,
            month=self.month,
            budget_amount=self.budget_amount,
        )


@dataclass(frozen=True)
class Budget:
    id: str
    category: str
    month: str  # YYYY-MM
    budget_amount: float

    def to_data(self) -> BudgetData:
        return BudgetData(
            category=self.category,
            month=self.month,
            budget_amount=self.budget_amount,
        )


def is_known_category(category: object) -> bool:
    return isinstance(category, str) and category in CATEGORIES


def category_color(category: object) -> str:
    """Colour for a category; unknown labels get the 'Others' treatment."""
    if isinstance(category, str) and category in CATEGORY_COLORS:
        return CATEGORY_COLORS[category]
    return CATEGORY_COLORS[DEFAULT_CATEGORY]


def is_month_key(value: object) -> bool:
    if not isinstance(value, str) or len(value) != 7:
        return False
    try:
        datetime.strptime(value, "%Y-%m")
    except ValueError:
        return False
    return True


def is_iso_date(value: object) -> bool:
    if not isinstance(value, str) or len(value) != 10:
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def month_key(date_str: str) -> str:
    """Return the ``YYYY-MM`` bucket of an ISO date string."""
    return date_str[:7]


def _check_amount(amount: object, label: str) -> None:
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise ValidationError(f"{label} must be a number.")
    if not math.isfinite(amount):
        raise ValidationError(f"{label} must be a finite number.")
    if amount < 0:
        raise ValidationError(f"{label} cannot be negative.")


def _check_category(category: object) -> None:
    if not is_known_category(category):
        raise ValidationError(
            f"Unknown category {category!r}. Choose one of: {', '.join(CATEGORIES)}."
        )


def validate_transaction_data(data: TransactionData) -> TransactionData:
    _check_amount(data.amount, "Amount")
    if not is_iso_date(data.date):
        raise ValidationError(f"Invalid date {data.date!r}; expected YYYY-MM-DD.")
    _check_category(data.category)
    if not isinstance(data.description, str):
        raise ValidationError("Description must be text.")
    return data


def validate_budget_data(data: BudgetData) -> BudgetData:
    _check_category(data.category)
    if not is_month_key(data.month):
        raise ValidationError(f"Invalid month {data.month!r}; expected YYYY-MM.")
    _check_amount(data.budget_amount, "Budget amount")
    return data
