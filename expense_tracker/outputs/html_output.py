# expense_tracker/outputs/html_output.py

import os
from html import escape

from expense_tracker.core.models import EXPENSE_CATEGORIES
from expense_tracker.outputs.base import BaseOutput
from expense_tracker.utils import format_currency
from expense_tracker.views import (
    EMPTY_CHART_MESSAGE,
    EMPTY_TRANSACTIONS_MESSAGE,
    chart_label,
    chart_slices,
    summary_view,
    transaction_rows,
)

STYLE = (
    "body{font-family:sans-serif;max-width:960px;margin:0 auto;padding:16px;}"
    "table{border-collapse:collapse;margin-bottom:20px;width:100%;}"
    "th,td{border:1px solid #ccc;padding:4px 8px;text-align:left;}th{background:#eee;}"
    ".cards{display:flex;gap:16px;margin-bottom:20px;}"
    ".card{border:1px solid #ccc;border-radius:8px;padding:12px;flex:1;}"
    ".income{color:#1a7f37;}.expense{color:#b4413c;}"
    ".empty-state{color:#666;font-style:italic;}"
    ".message--success{color:#1a7f37;}.message--error{color:#b4413c;}.message--info{color:#5d878f;}"
    ".swatch{display:inline-block;width:12px;height:12px;margin-right:6px;}"
)


def _summary_cards(ledger, currency):
    view = summary_view(ledger.summarize(), currency)
    return [
        "<div class='cards'>",
        f"<div class='card'><h3>Balance</h3><p id='balance'>{view['balance']}</p></div>",
        f"<div class='card'><h3>Income</h3><p id='total-income' class='income'>{view['total_income']}</p></div>",
        f"<div class='card'><h3>Expenses</h3><p id='total-expenses' class='expense'>{view['total_expenses']}</p></div>",
        "</div>",
    ]


def _transactions_table(ledger, currency, delete_buttons):
    rows = transaction_rows(ledger, currency)
    parts = ["<h2>Transactions</h2>"]
    if not rows:
        parts.append(f"<div class='empty-state'><p>{EMPTY_TRANSACTIONS_MESSAGE}</p></div>")
        return parts
    header = "<tr><th>Date</th><th>Description</th><th>Category</th><th>Amount</th>"
    header += "<th></th></tr>" if delete_buttons else "</tr>"
    parts.append("<table id='transactions-list'>")
    parts.append(header)
    for row in rows:
        cells = (
            f"<td>{row['date']}</td>"
            f"<td>{escape(row['description'])}</td>"
            f"<td>{escape(row['category'])}</td>"
            f"<td class='{row['type']}'>{row['display_amount']}</td>"
        )
        if delete_buttons:
            cells += (
                f"<td><form method='post' action='/api/transactions/{row['id']}/delete'>"
                f"<button type='submit' aria-label='Delete {escape(row['description'], quote=True)}'>&times;</button>"
                "</form></td>"
            )
        parts.append(f"<tr data-transaction-id='{row['id']}'>{cells}</tr>")
    parts.append("</table>")
    return parts


def _breakdown_table(ledger, currency):
    slices = chart_slices(ledger.category_breakdown())
    parts = ["<h2>Expenses by category</h2>"]
    if not slices:
        parts.append(f"<div id='chart-empty-state' class='empty-state'><p>{EMPTY_CHART_MESSAGE}</p></div>")
        return parts
    parts.append("<table class='chart-container'><tr><th>Category</th><th>Amount</th><th>Share</th></tr>")
    for s in slices:
        parts.append(
            f"<tr title='{escape(chart_label(s, currency), quote=True)}'>"
            f"<td><span class='swatch' style='background:{s['color']}'></span>{escape(s['label'])}</td>"
            f"<td>{format_currency(s['amount'], currency)}</td>"
            f"<td>{s['percentage']:.1f}%</td></tr>"
        )
    parts.append("</table>")
    return parts


def _entry_form():
    options = "".join(f"<option value='{c}'>{c}</option>" for c in EXPENSE_CATEGORIES)
    return [
        "<h2>Add transaction</h2>",
        "<form id='transaction-form' method='post' action='/api/transactions'>",
        "<input name='amount' type='number' step='0.01' min='0.01' placeholder='Amount'>",
        "<input name='description' type='text' placeholder='Description'>",
        f"<select name='category'><option value=''>Select category</option>{options}</select>",
        "<label><input type='radio' name='type' value='income'> Income</label>",
        "<label><input type='radio' name='type' value='expense'> Expense</label>",
        "<button type='submit'>Add</button>",
        "</form>",
    ]


def render_page(ledger, currency='INR', notification=None, interactive=False):
    """Build the dashboard page: summary, list, breakdown and, optionally, the entry form."""
    parts = [
        "<!DOCTYPE html><html><head><meta charset='UTF-8'>",
        "<title>Expense Tracker</title>",
        f"<style>{STYLE}</style>",
        "</head><body>",
        "<h1>Expense Tracker</h1>",
    ]
    if notification is not None:
        parts.append(
            f"<div class='message message--{notification.severity.value}'>{escape(notification.message)}</div>"
        )
    parts.extend(_summary_cards(ledger, currency))
    if interactive:
        parts.extend(_entry_form())
    parts.extend(_transactions_table(ledger, currency, delete_buttons=interactive))
    parts.extend(_breakdown_table(ledger, currency))
    parts.append("</body></html>")
    return "\n".join(parts)


class HTMLOutput(BaseOutput):
    """Generate a static HTML report of the ledger."""

    FILENAME = 'report.html'

    def __init__(self, config):
        self.config = config
        self.output_dir = config.get('output_dir', 'data')
        os.makedirs(self.output_dir, exist_ok=True)
        self.currency = config.get('currency', 'INR')

    def write(self, ledger):
        out_path = os.path.join(self.output_dir, self.FILENAME)
        with open(out_path, 'w', encoding='utf-8') as f:
            f.write(render_page(ledger, self.currency))
        return out_path
