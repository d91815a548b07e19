import math

from finance_tracker.formatting import (
    escape_dollar_for_markdown,
    format_currency,
    format_date,
    format_month,
    format_month_short,
    format_percent,
    format_signed,
)


def test_format_currency_uses_thousands_and_two_decimals():
    assert format_currency(1234.56) == "$1,234.56"
    assert format_currency(0) == "$0.00"
    assert format_currency(-5) == "-$5.00"
    assert format_currency(1234.56, include_sign=False) == "1,234.56"


def test_format_currency_treats_missing_values_as_zero():
    assert format_currency(None) == "$0.00"
    assert format_currency(math.nan) == "$0.00"


def test_currency_symbol_can_be_overridden(monkeypatch):
    monkeypatch.setenv("FINTRACK_CURRENCY_SYMBOL", "€")
    assert format_currency(10) == "€10.00"


def test_format_signed():
    assert format_signed(12) == "+$12.00"
    assert format_signed(-3.5) == "-$3.50"


def test_format_percent_handles_undefined():
    assert format_percent(75.0) == "75%"
    assert format_percent(12.345, decimals=1) == "12.3%"
    assert format_percent(None) == "n/a"


def test_dates_and_months():
    assert format_date("2025-01-05") == "Jan 5, 2025"
    assert format_date("garbage") == "garbage"
    assert format_month("2025-01") == "January 2025"
    assert format_month_short("2024-12") == "Dec 2024"
    assert format_month("Unknown") == "Unknown"


def test_escape_dollar_for_markdown():
    assert escape_dollar_for_markdown("$5 and $6") == "\\$5 and \\$6"
