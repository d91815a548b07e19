"""Spending analytics for the finance tracker.

This module turns the store's transaction and budget snapshots into the
summaries the views render: monthly totals, category totals, budget vs
actual for a month, per-budget insights and the month-over-month change.

Everything is derived on read.  A :class:`SpendingAnalytics` instance is
built from the current snapshots on every render and never updated in place.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from .formatting import format_currency, format_month_short
from .models import Budget, Transaction

UNKNOWN_MONTH = "Unknown"
UNCATEGORIZED = "Uncategorized"

STATUS_OVER = "over"
STATUS_NEAR = "near"
STATUS_ON_TRACK = "on_track"

OVER_BUDGET_PERCENT = 100.0
NEAR_LIMIT_PERCENT = 80.0

TRANSACTION_COLUMNS = ["id", "amount", "date", "description", "category"]
MONTHLY_COLUMNS = ["month", "label", "total"]
CATEGORY_COLUMNS = ["category", "total", "share"]
BUDGET_COLUMNS = ["category", "budget", "actual", "difference", "percent_used", "status"]


@dataclass(frozen=True)
class BudgetInsight:
    category: str
    status: str
    message: str
    percent_used: Optional[float]
    actual: float
    budget: float
    difference: float


@dataclass(frozen=True)
class MonthComparison:
    current_month: str
    previous_month: str
    current_total: float
    previous_total: float
    change: float
    change_percent: float

    @property
    def increased(self) -> bool:
        return self.change > 0


def current_month_key(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"{today.year:04d}-{today.month:02d}"


def previous_month_key(month: str) -> str:
    """'2025-01' -> '2024-12'."""
    year, month_number = (int(part) for part in month.split("-"))
    if month_number == 1:
        return f"{year - 1:04d}-12"
    return f"{year:04d}-{month_number - 1:02d}"


def percent_used(actual: float, budget: float) -> Optional[float]:
    """Share of the budget already spent.

    A zero budget has no meaningful ratio: ``0.0`` when nothing was spent,
    ``None`` otherwise.
    """
    if budget <= 0:
        return 0.0 if actual <= 0 else None
    return actual / budget * 100


def classify_usage(actual: float, budget: float) -> str:
    """Classify spending against a budget as over, near or on track."""
    if budget <= 0:
        return STATUS_OVER if actual > 0 else STATUS_ON_TRACK
    used = actual / budget * 100
    if used > OVER_BUDGET_PERCENT:
        return STATUS_OVER
    if used > NEAR_LIMIT_PERCENT:
        return STATUS_NEAR
    return STATUS_ON_TRACK


def insight_message(category: str, status: str, difference: float) -> str:
    if status == STATUS_OVER:
        return f"You have exceeded your {category} budget by {format_currency(abs(difference))}."
    if status == STATUS_NEAR:
        return (
            f"You are close to your {category} budget limit. "
            f"{format_currency(difference)} remaining."
        )
    return f"You are within your {category} budget. {format_currency(difference)} remaining."


def spending_tips(comparison: MonthComparison) -> List[str]:
    """Quick tips shown under the insights; one of them depends on the trend."""
    tips = ["💡 Review your spending patterns weekly to stay on track with your budgets."]
    if comparison.increased:
        tips.append(
            f"⚠️ Your spending has increased by {format_currency(comparison.change)} "
            "compared to last month. Consider reviewing your expenses."
        )
    tips.append("✅ Set realistic budgets for each category to maintain healthy spending habits.")
    return tips


class SpendingAnalytics:
    """Aggregations over one snapshot of transactions and budgets."""

    def __init__(self, transactions: Iterable[Transaction], budgets: Iterable[Budget] = ()):
        self.transactions: Sequence[Transaction] = tuple(transactions)
        self.budgets: Sequence[Budget] = tuple(budgets)
        self.data = pd.DataFrame(
            [asdict(t) for t in self.transactions], columns=TRANSACTION_COLUMNS
        )
        self._prepare_data()

    def _prepare_data(self) -> None:
        """Normalize amounts, categories and derive the month bucket."""
        self.data['amount'] = pd.to_numeric(self.data['amount'], errors='coerce').fillna(0.0).astype(float)
        self.data['category'] = self.data['category'].fillna(UNCATEGORIZED).astype(str)
        self.data['description'] = self.data['description'].fillna('').astype(str)

        # Malformed dates land in a trailing "Unknown" bucket instead of raising
        parsed = pd.to_datetime(self.data['date'], format='%Y-%m-%d', errors='coerce')
        self.data['parsed_date'] = parsed
        self.data['month'] = parsed.dt.strftime('%Y-%m').fillna(UNKNOWN_MONTH)

    def total_expenses(self) -> float:
        return float(self.data['amount'].sum())

    def transaction_count(self) -> int:
        return len(self.data)

    def sorted_transactions(self) -> List[Transaction]:
        """Newest first; records with equal dates keep their store order."""
        return sorted(self.transactions, key=lambda t: str(t.date), reverse=True)

    def latest_transaction(self) -> Optional[Transaction]:
        ordered = self.sorted_transactions()
        return ordered[0] if ordered else None

    def monthly_totals(self) -> pd.DataFrame:
        """Total spending per observed month in chronological order.

        Rows are ordered by the ``YYYY-MM`` key; the display label is only
        attached afterwards so ordering never depends on localized names.
        """
        if self.data.empty:
            return pd.DataFrame(columns=MONTHLY_COLUMNS)
        totals = self.data.groupby('month')['amount'].sum().reset_index()
        totals = totals.rename(columns={'amount': 'total'}).sort_values('month').reset_index(drop=True)
        totals['label'] = totals['month'].map(format_month_short)
        return totals[MONTHLY_COLUMNS]

    def category_totals(self) -> pd.DataFrame:
        """Total spending per category, largest first."""
        if self.data.empty:
            return pd.DataFrame(columns=CATEGORY_COLUMNS)
        totals = self.data.groupby('category')['amount'].sum().reset_index()
        totals = totals.rename(columns={'amount': 'total'})
        totals = totals.sort_values('total', ascending=False, kind='mergesort').reset_index(drop=True)
        grand_total = totals['total'].sum()
        if grand_total > 0:
            totals['share'] = totals['total'] / grand_total * 100
        else:
            totals['share'] = 0.0
        return totals[CATEGORY_COLUMNS]

    def top_categories(self, n: int = 5) -> pd.DataFrame:
        return self.category_totals().head(n).reset_index(drop=True)

    def month_total(self, month: str) -> float:
        return float(self.data.loc[self.data['month'] == month, 'amount'].sum())

    def budget_vs_actual(self, month: Optional[str] = None, today: Optional[date] = None) -> pd.DataFrame:
        """Budgets for ``month`` joined with that month's spending.

        The month's budgets drive the rows; categories that have spending but
        no budget are left out.  ``month`` defaults to the current month.
        """
        month = month or current_month_key(today)
        month_budgets = [b for b in self.budgets if b.month == month]
        if not month_budgets:
            return pd.DataFrame(columns=BUDGET_COLUMNS)

        month_rows = self.data[self.data['month'] == month]
        spending = month_rows.groupby('category')['amount'].sum()

        rows = []
        for budget in month_budgets:
            actual = float(spending.get(budget.category, 0.0))
            rows.append({
                'category': budget.category,
                'budget': float(budget.budget_amount),
                'actual': actual,
                'difference': float(budget.budget_amount) - actual,
                'percent_used': percent_used(actual, budget.budget_amount),
                'status': classify_usage(actual, budget.budget_amount),
            })
        frame = pd.DataFrame(rows, columns=BUDGET_COLUMNS)
        # Keep None for undefined ratios rather than letting pandas turn it into NaN
        frame['percent_used'] = pd.Series([row['percent_used'] for row in rows], index=frame.index, dtype=object)
        return frame

    def budget_insights(self, month: Optional[str] = None, today: Optional[date] = None) -> List[BudgetInsight]:
        insights = []
        for row in self.budget_vs_actual(month, today).to_dict('records'):
            insights.append(BudgetInsight(
                category=row['category'],
                status=row['status'],
                message=insight_message(row['category'], row['status'], row['difference']),
                percent_used=row['percent_used'],
                actual=row['actual'],
                budget=row['budget'],
                difference=row['difference'],
            ))
        return insights

    def month_over_month(self, today: Optional[date] = None) -> MonthComparison:
        """Compare the current month's total with the previous month's."""
        current = current_month_key(today)
        previous = previous_month_key(current)
        current_total = self.month_total(current)
        previous_total = self.month_total(previous)
        change = current_total - previous_total
        change_percent = (change / previous_total * 100) if previous_total > 0 else 0.0
        return MonthComparison(
            current_month=current,
            previous_month=previous,
            current_total=current_total,
            previous_total=previous_total,
            change=change,
            change_percent=change_percent,
        )
