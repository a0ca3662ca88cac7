"""Display-ready data derived from a ledger.

Nothing here touches a terminal or a page; the CLI, the web handler and the
report outputs all turn these rows into their own markup.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from expense_tracker.core.models import CategoryTotal, Summary
from expense_tracker.utils import format_currency, format_date

EMPTY_TRANSACTIONS_MESSAGE = "No transactions yet. Add your first transaction above!"
EMPTY_CHART_MESSAGE = "No expenses to display yet."

CHART_COLORS = (
    "#1FB8CD",
    "#FFC185",
    "#B4413C",
    "#ECEBD5",
    "#5D878F",
    "#DB4545",
    "#D2BA4C",
    "#964325",
    "#944454",
    "#13343B",
)


def transaction_rows(ledger, currency: str = "INR") -> List[Dict[str, object]]:
    """Rows for the transaction list, newest first."""
    return [
        {
            "id": tx.id,
            "description": tx.description,
            "category": tx.category,
            "type": tx.type.value,
            "date": format_date(tx.date),
            "amount": tx.amount,
            "display_amount": format_currency(tx.amount, currency),
        }
        for tx in ledger.sorted_for_display()
    ]


def summary_view(summary: Summary, currency: str = "INR") -> Dict[str, str]:
    return {
        "balance": format_currency(summary.balance, currency),
        "total_income": format_currency(summary.total_income, currency),
        "total_expenses": format_currency(summary.total_expenses, currency),
    }


def chart_slices(breakdown: Sequence[CategoryTotal]) -> List[Dict[str, object]]:
    """Pie chart slices with their share of total expenses."""
    total = sum(row.amount for row in breakdown)
    slices = []
    for idx, row in enumerate(breakdown):
        share = (row.amount / total) * 100 if total else 0.0
        slices.append(
            {
                "label": row.category,
                "amount": row.amount,
                "percentage": round(share, 1),
                "color": CHART_COLORS[idx % len(CHART_COLORS)],
            }
        )
    return slices


def chart_label(slice_: Dict[str, object], currency: str = "INR") -> str:
    """Tooltip text, e.g. ``Food: ₹150.00 (75.0%)``."""
    return (
        f"{slice_['label']}: {format_currency(slice_['amount'], currency)} "
        f"({slice_['percentage']:.1f}%)"
    )
