import csv
from datetime import date

import openpyxl

from expense_tracker.config import DEFAULT_CONFIG
from expense_tracker.ledger import Ledger
from expense_tracker.outputs import get_output
from expense_tracker.outputs.csv_output import CSVOutput
from expense_tracker.outputs.excel_output import ExcelOutput
from expense_tracker.outputs.html_output import HTMLOutput, render_page
from expense_tracker.views import EMPTY_CHART_MESSAGE, EMPTY_TRANSACTIONS_MESSAGE


def _ledger():
    ledger = Ledger()
    ledger.add(2500, "Salary", None, "income", on=date(2026, 10, 1))
    ledger.add(100, "Dinner", "Food", "expense", on=date(2026, 10, 2))
    ledger.add(50, "Lunch & <drinks>", "Food", "expense", on=date(2026, 10, 3))
    ledger.add(30, "Bus pass", "Transportation", "expense", on=date(2026, 10, 3))
    return ledger


def _config(tmp_path):
    return dict(DEFAULT_CONFIG, output_dir=str(tmp_path / "out"))


def test_get_output_resolves_modules(tmp_path):
    cfg = _config(tmp_path)
    assert isinstance(get_output("csv", cfg), CSVOutput)
    assert isinstance(get_output("html", cfg), HTMLOutput)
    assert isinstance(get_output("excel", cfg), ExcelOutput)


def test_csv_output(tmp_path):
    out_path = CSVOutput(_config(tmp_path)).write(_ledger())
    with open(out_path, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["id", "date", "type", "category", "description", "amount"]
    assert rows[1] == ["1", "2026-10-01", "income", "Income", "Salary", "2500.00"]
    assert len(rows) == 5


def test_html_output(tmp_path):
    out_path = HTMLOutput(_config(tmp_path)).write(_ledger())
    with open(out_path, encoding="utf-8") as f:
        html = f.read()
    assert "₹2,320.00" in html
    assert "Lunch &amp; &lt;drinks&gt;" in html
    assert "Food: ₹150.00 (83.3%)" in html
    assert html.index("Bus pass") < html.index("Dinner") < html.index("Salary")
    assert "transaction-form" not in html


def test_render_page_empty_states():
    html = render_page(Ledger(), interactive=True)
    assert EMPTY_TRANSACTIONS_MESSAGE in html
    assert EMPTY_CHART_MESSAGE in html
    assert "transaction-form" in html


def test_excel_output(tmp_path):
    out_path = ExcelOutput(_config(tmp_path)).write(_ledger())
    wb = openpyxl.load_workbook(out_path, data_only=True)
    assert wb.sheetnames == ["Transactions", "Summary", "Charts"]

    tx_ws = wb["Transactions"]
    assert tx_ws["A1"].value == "id"
    assert tx_ws["F1"].value == "amount"
    assert [c[0].value for c in tx_ws.iter_rows(min_row=2, max_col=1)] == [4, 3, 2, 1]

    summary_ws = wb["Summary"]
    assert summary_ws["A3"].value == "Balance"
    assert summary_ws["B3"].value == 2320

    charts_ws = wb["Charts"]
    rows = [[c.value for c in row] for row in charts_ws.iter_rows(max_col=2)]
    assert rows == [["Category", "Total"], ["Food", 150], ["Transportation", 30]]


def test_excel_output_without_expenses(tmp_path):
    ledger = Ledger()
    ledger.add(10, "Tip", None, "income")
    out_path = ExcelOutput(_config(tmp_path)).write(ledger)
    wb = openpyxl.load_workbook(out_path, data_only=True)
    assert wb["Charts"]["A3"].value == EMPTY_CHART_MESSAGE


def test_build_chart_table():
    out = object.__new__(ExcelOutput)
    assert out._build_chart_table(_ledger().category_breakdown()) == [
        ["Category", "Total"],
        ["Food", 150.0],
        ["Transportation", 30.0],
    ]
