from finance_tracker.analytics import SpendingAnalytics
from finance_tracker.models import Budget, Transaction
from finance_tracker.visualization import (
    NO_DATA_TITLE,
    create_budget_vs_actual_chart,
    create_category_pie_chart,
    create_monthly_expense_chart,
)


def _analytics():
    return SpendingAnalytics(
        [
            Transaction("1", 30, "2025-01-03", "", "Food"),
            Transaction("2", 70, "2024-12-20", "", "Rent"),
        ],
        [Budget("b", "Food", "2025-01", 50)],
    )


def test_empty_inputs_give_placeholder_figures():
    empty = SpendingAnalytics([])
    assert create_monthly_expense_chart(empty.monthly_totals()).layout.title.text == NO_DATA_TITLE
    assert create_category_pie_chart(empty.category_totals()).layout.title.text == NO_DATA_TITLE
    assert create_budget_vs_actual_chart(empty.budget_vs_actual("2025-01"), "2025-01").layout.title.text == "No budget data"


def test_monthly_chart_keeps_chronological_order():
    fig = create_monthly_expense_chart(_analytics().monthly_totals())
    assert list(fig.data[0].x) == ["Dec 2024", "Jan 2025"]
    assert list(fig.data[0].y) == [70, 30]


def test_category_pie_has_one_slice_per_category():
    fig = create_category_pie_chart(_analytics().category_totals())
    assert sorted(fig.data[0].labels) == ["Food", "Rent"]


def test_budget_chart_groups_budget_and_actual():
    fig = create_budget_vs_actual_chart(_analytics().budget_vs_actual("2025-01"), "2025-01")
    assert [trace.name for trace in fig.data] == ["Budget", "Actual"]
    assert fig.layout.barmode == "group"
    assert "January 2025" in fig.layout.title.text
