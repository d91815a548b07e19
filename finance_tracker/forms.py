"""Form parsing and validation for transactions and budgets.

The Streamlit widgets in :mod:`personal_finance_ui` collect raw values; the
helpers here turn them into id-less payloads (or a :class:`ValidationError`
naming every problem) before anything reaches the store.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple, Union

from .analytics import current_month_key
from .formatting import format_month
from .models import (
    CATEGORIES,
    BudgetData,
    TransactionData,
    ValidationError,
    is_iso_date,
    is_month_key,
)

RawAmount = Union[str, float, int, None]


def parse_amount(raw: RawAmount, label: str = "Amount") -> float:
    """Parse a user-entered amount into a non-negative float."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError(f"{label} is required.")
    if isinstance(raw, bool):
        raise ValidationError(f"{label} must be a number.")
    try:
        value = float(raw.replace(",", "").strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a number.") from None
    if not math.isfinite(value):
        raise ValidationError(f"{label} must be a finite number.")
    if value < 0:
        raise ValidationError(f"{label} cannot be negative.")
    return value


def _date_string(value: Union[str, date, None]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip() or None


def build_transaction_data(
    amount: RawAmount,
    date_value: Union[str, date, None],
    description: Optional[str],
    category: Optional[str],
) -> TransactionData:
    """Validate the transaction form and return its payload.

    Raises:
        ValidationError: listing every missing or invalid field.
    """
    errors: List[str] = []
    parsed_amount = 0.0
    try:
        parsed_amount = parse_amount(amount)
    except ValidationError as exc:
        errors.append(str(exc))

    date_str = _date_string(date_value)
    if date_str is None:
        errors.append("Date is required.")
    elif not is_iso_date(date_str):
        errors.append("Date must be a valid YYYY-MM-DD date.")

    if not category:
        errors.append("Category is required.")
    elif category not in CATEGORIES:
        errors.append(f"Unknown category '{category}'.")

    if errors:
        raise ValidationError(" ".join(errors))

    return TransactionData(
        amount=parsed_amount,
        date=date_str,
        category=category,
        description=(description or "").strip(),
    )


def build_budget_data(
    category: Optional[str],
    month: Optional[str],
    amount: RawAmount,
) -> BudgetData:
    """Validate the budget form and return its payload."""
    errors: List[str] = []
    if not category:
        errors.append("Category is required.")
    elif category not in CATEGORIES:
        errors.append(f"Unknown category '{category}'.")

    if not month:
        errors.append("Month is required.")
    elif not is_month_key(month):
        errors.append("Month must be in YYYY-MM format.")

    parsed_amount = 0.0
    try:
        parsed_amount = parse_amount(amount, label="Budget amount")
    except ValidationError as exc:
        errors.append(str(exc))

    if errors:
        raise ValidationError(" ".join(errors))

    return BudgetData(category=category, month=month, budget_amount=parsed_amount)


def month_options(
    today: Optional[date] = None,
    count: int = 12,
    include: Optional[str] = None,
) -> List[Tuple[str, str]]:
    """The current month and the following ``count - 1`` months.

    ``include`` adds one extra month (e.g. a past budget being edited) so an
    edit form can always show the record's own month.
    """
    start = current_month_key(today)
    year, month = (int(part) for part in start.split("-"))
    keys = []
    for offset in range(count):
        total = (month - 1) + offset
        keys.append(f"{year + total // 12:04d}-{total % 12 + 1:02d}")
    if include and is_month_key(include) and include not in keys:
        keys.append(include)
        keys.sort()
    return [(key, format_month(key)) for key in keys]


@dataclass
class FormState:
    """Tracks which record a form is editing, if any."""

    editing_id: Optional[str] = None
    visible: bool = False

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def open_new(self) -> None:
        self.editing_id = None
        self.visible = True

    def start_edit(self, record_id: str) -> None:
        self.editing_id = record_id
        self.visible = True

    def cancel(self) -> None:
        """Discard the in-progress edit; the store is never touched."""
        self.editing_id = None
        self.visible = False

    close = cancel
