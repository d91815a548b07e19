"""Formatting utilities for currency, dates and months.

Every view formats money through :func:`format_currency` so the whole app
follows one currency policy (US-dollar style, ``$1,234.56``).
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional, Union

from .config import get_currency_symbol

Number = Union[float, int]


def format_currency(amount: Number, include_sign: bool = True) -> str:
    """Format a currency amount with proper formatting.

    Args:
        amount: The amount to format
        include_sign: Whether to include the currency symbol

    Returns:
        Formatted currency string (e.g., "$1,234.56" or "1,234.56")

    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(-5)
        '-$5.00'
    """
    if amount is None or not math.isfinite(amount):
        amount = 0.0
    formatted = f"{abs(amount):,.2f}"
    if include_sign:
        formatted = f"{get_currency_symbol()}{formatted}"
    return f"-{formatted}" if amount < 0 else formatted


def format_signed(amount: Number) -> str:
    """Format with an explicit +/- sign, e.g. '+$12.00'."""
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{format_currency(abs(amount))}"


def escape_dollar_for_markdown(text: str) -> str:
    """Escape dollar signs so Streamlit markdown does not read them as LaTeX.

    Example:
        >>> escape_dollar_for_markdown('$1,234.56')
        '\\\\$1,234.56'
    """
    return text.replace("$", "\\$")


def format_percent(value: Optional[float], decimals: int = 0) -> str:
    """Format a percentage; undefined values render as 'n/a'."""
    if value is None or not math.isfinite(value):
        return "n/a"
    return f"{value:.{decimals}f}%"


def format_date(date_str: str) -> str:
    """'2025-01-05' -> 'Jan 5, 2025'; unparseable input is returned unchanged."""
    try:
        parsed = datetime.strptime(str(date_str)[:10], "%Y-%m-%d")
    except ValueError:
        return str(date_str)
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def _parse_month(month: str) -> Optional[datetime]:
    try:
        return datetime.strptime(str(month)[:7], "%Y-%m")
    except ValueError:
        return None


def format_month(month: str) -> str:
    """'2025-01' -> 'January 2025'."""
    parsed = _parse_month(month)
    return parsed.strftime("%B %Y") if parsed else str(month)


def format_month_short(month: str) -> str:
    """'2025-01' -> 'Jan 2025'."""
    parsed = _parse_month(month)
    return parsed.strftime("%b %Y") if parsed else str(month)
