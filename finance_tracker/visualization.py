"""Plotly visualisation helpers for the finance tracker.

Each function accepts one of the DataFrames produced by
:class:`analytics.SpendingAnalytics` and returns a
``plotly.graph_objects.Figure`` that Streamlit renders via
``st.plotly_chart``.  Empty input always produces a placeholder figure
rather than an empty or broken chart.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .config import get_currency_symbol
from .formatting import format_month
from .models import category_color

NO_DATA_TITLE = "No data to display"
BUDGET_COLOR = "#3b82f6"
ACTUAL_COLOR = "#f59e0b"
MONTHLY_COLOR = "#6366f1"


def empty_figure(title: str = NO_DATA_TITLE) -> go.Figure:
    """Placeholder figure used whenever there is nothing to plot."""
    fig = go.Figure()
    fig.update_layout(
        title=title,
        xaxis={"visible": False},
        yaxis={"visible": False},
    )
    return fig


def _hover(name: str, label: str, value_field: str, extra: str = "") -> str:
    symbol = get_currency_symbol()
    return f"{name}<br>{label}: {symbol}%{{{value_field}:,.2f}}{extra}<extra></extra>"


def _currency_axis(fig: go.Figure) -> None:
    fig.update_yaxes(tickprefix=get_currency_symbol(), separatethousands=True)


def create_monthly_expense_chart(monthly: pd.DataFrame, title: Optional[str] = None) -> go.Figure:
    """Bar chart of total spending per month.

    Parameters
    ----------
    monthly : pandas.DataFrame
        Output of ``SpendingAnalytics.monthly_totals`` (``month``, ``label``,
        ``total``), already in chronological order.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart; the x axis keeps the row order of ``monthly``.
    """
    if monthly.empty:
        return empty_figure()
    fig = px.bar(monthly, x="label", y="total", text_auto=".2s")
    fig.update_traces(marker_color=MONTHLY_COLOR, hovertemplate=_hover("%{x}", "Total", "y"))
    fig.update_layout(
        title=title or "Monthly Expenses",
        xaxis_title="Month",
        yaxis_title="Total",
        xaxis={"categoryorder": "array", "categoryarray": list(monthly["label"])},
    )
    _currency_axis(fig)
    return fig


def create_category_pie_chart(categories: pd.DataFrame, title: Optional[str] = None) -> go.Figure:
    """Pie chart of spending by category.

    Parameters
    ----------
    categories : pandas.DataFrame
        Output of ``SpendingAnalytics.category_totals``.
    title : str, optional
        Chart title.
    """
    if categories.empty:
        return empty_figure()
    color_map = {name: category_color(name) for name in categories["category"]}
    fig = px.pie(
        categories,
        names="category",
        values="total",
        color="category",
        color_discrete_map=color_map,
    )
    fig.update_traces(
        textposition="inside",
        textinfo="percent+label",
        hovertemplate=_hover("%{label}", "Total", "value", extra="<br>%{percent}"),
    )
    fig.update_layout(title=title or "Spending by Category")
    return fig


def create_budget_vs_actual_chart(rows: pd.DataFrame, month: str, title: Optional[str] = None) -> go.Figure:
    """Grouped bars comparing each budget with the month's actual spending.

    Parameters
    ----------
    rows : pandas.DataFrame
        Output of ``SpendingAnalytics.budget_vs_actual``.
    month : str
        The ``YYYY-MM`` month the rows belong to, used in the title.
    """
    if rows.empty:
        return empty_figure("No budget data")
    fig = go.Figure()
    fig.add_trace(go.Bar(
        name="Budget",
        x=rows["category"],
        y=rows["budget"],
        marker_color=BUDGET_COLOR,
        hovertemplate=_hover("%{x}", "Budget", "y"),
    ))
    fig.add_trace(go.Bar(
        name="Actual",
        x=rows["category"],
        y=rows["actual"],
        marker_color=ACTUAL_COLOR,
        hovertemplate=_hover("%{x}", "Actual", "y"),
    ))
    fig.update_layout(
        title=title or f"Budget vs Actual - {format_month(month)}",
        barmode="group",
        xaxis_title="Category",
        yaxis_title="Amount",
    )
    _currency_axis(fig)
    return fig
