#!/usr/bin/env python3
"""Print monthly and category totals for a seed file."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from finance_tracker.analytics import SpendingAnalytics
from finance_tracker.config import configure_logging
from finance_tracker.formatting import format_currency
from finance_tracker.seed import load_seed


def main(path: Path | None = None, top: int = 5) -> None:
    transactions, budgets = load_seed(path, mode='demo')
    if not transactions:
        print("No transactions in seed.")
        return

    analytics = SpendingAnalytics(transactions, budgets)
    print(f"Transactions: {analytics.transaction_count()}  Budgets: {len(budgets)}")
    print(f"Total expenses: {format_currency(analytics.total_expenses())}")

    print("\nBy month:")
    for row in analytics.monthly_totals().itertuples(index=False):
        print(f"  {row.label:<15} {format_currency(row.total):>12}")

    print(f"\nTop {top} categories:")
    for row in analytics.top_categories(top).itertuples(index=False):
        print(f"  {row.category:<15} {format_currency(row.total):>12}  {row.share:5.1f}%")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Summarize a tracker seed file.')
    parser.add_argument('path', nargs='?', type=Path, help='Seed JSON file (defaults to the bundled demo seed)')
    parser.add_argument('--top', type=int, default=5, help='How many categories to list')
    args = parser.parse_args()
    configure_logging()
    main(path=args.path, top=args.top)
