from datetime import date

from expense_tracker.core.models import CategoryTotal
from expense_tracker.ledger import Ledger
from expense_tracker.utils import filter_transactions_by_month, format_currency, format_date
from expense_tracker.views import (
    CHART_COLORS,
    chart_label,
    chart_slices,
    summary_view,
    transaction_rows,
)


def test_format_currency():
    assert format_currency(2500) == "₹2,500.00"
    assert format_currency(1234567.891, "USD") == "$1,234,567.89"
    assert format_currency(-2450) == "-₹2,450.00"
    assert format_currency(3, "CHF") == "CHF 3.00"


def test_format_date():
    assert format_date(date(2026, 10, 8)) == "Oct 8, 2026"


def test_filter_transactions_by_month():
    ledger = Ledger()
    ledger.add(1, "sept", "Food", "expense", on=date(2026, 9, 30))
    october = ledger.add(2, "oct", "Food", "expense", on=date(2026, 10, 1))
    assert filter_transactions_by_month(ledger.transactions, "2026-10") == [october]


def test_transaction_rows_follow_display_order():
    ledger = Ledger()
    ledger.add(2500, "Salary", None, "income", on=date(2026, 10, 1))
    ledger.add(50, "Grocery <b>shopping</b>", "Food", "expense", on=date(2026, 10, 2))
    rows = transaction_rows(ledger)
    assert [row["id"] for row in rows] == [2, 1]
    assert rows[0]["date"] == "Oct 2, 2026"
    assert rows[0]["display_amount"] == "₹50.00"
    assert rows[1]["category"] == "Income"
    assert transaction_rows(Ledger()) == []


def test_summary_view():
    ledger = Ledger()
    ledger.add(100, "Gift", None, "income")
    ledger.add(250, "Phone", "Bills", "expense")
    assert summary_view(ledger.summarize()) == {
        "balance": "-₹150.00",
        "total_income": "₹100.00",
        "total_expenses": "₹250.00",
    }


def test_chart_slices_share_and_colors():
    slices = chart_slices([CategoryTotal("Food", 150.0), CategoryTotal("Bills", 50.0)])
    assert [(s["label"], s["percentage"], s["color"]) for s in slices] == [
        ("Food", 75.0, CHART_COLORS[0]),
        ("Bills", 25.0, CHART_COLORS[1]),
    ]
    assert chart_label(slices[0]) == "Food: ₹150.00 (75.0%)"
    assert chart_slices([]) == []


def test_chart_colors_cycle():
    breakdown = [CategoryTotal(f"c{i}", 1.0) for i in range(len(CHART_COLORS) + 1)]
    assert chart_slices(breakdown)[-1]["color"] == CHART_COLORS[0]
