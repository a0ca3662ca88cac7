# expense_tracker/outputs/excel_output.py

"""Excel output module backed by XlsxWriter.

The workbook has three worksheets: ``Transactions`` lists every entry in
display order, ``Summary`` holds income, expense and balance totals, and
``Charts`` carries the expense breakdown by category with a pie chart over
it when there is anything to plot.
"""

from __future__ import annotations

import os
import xlsxwriter

from expense_tracker.outputs.base import BaseOutput
from expense_tracker.utils import CURRENCY_SYMBOLS
from expense_tracker.views import CHART_COLORS, EMPTY_CHART_MESSAGE


class ExcelOutput(BaseOutput):
    """Generate a local Excel workbook with a category pie chart."""

    FILENAME = "transactions.xlsx"
    TRANSACTIONS = "Transactions"
    SUMMARY = "Summary"
    CHARTS = "Charts"

    def __init__(self, config: dict):
        self.config = config
        self.output_dir = config.get("output_dir", "data")
        os.makedirs(self.output_dir, exist_ok=True)
        self.currency = config.get("currency", "INR")

    def write(self, ledger):
        out_path = os.path.join(self.output_dir, self.FILENAME)
        workbook = xlsxwriter.Workbook(out_path)
        symbol = CURRENCY_SYMBOLS.get(self.currency, "")
        amount_fmt = workbook.add_format({"num_format": f'"{symbol}"#,##0.00'})
        bold = workbook.add_format({"bold": True})

        # Transactions worksheet, newest first
        tx_ws = workbook.add_worksheet(self.TRANSACTIONS)
        tx_ws.freeze_panes(1, 0)
        headers = ["id", "date", "type", "category", "description", "amount"]
        tx_ws.write_row(0, 0, headers)
        rows = ledger.sorted_for_display()
        for idx, tx in enumerate(rows, start=1):
            tx_ws.write_row(idx, 0, [
                tx.id,
                tx.date.isoformat(),
                tx.type.value,
                tx.category,
                tx.description,
            ])
            tx_ws.write_number(idx, 5, tx.amount, amount_fmt)
        tx_ws.set_column(5, 5, None, amount_fmt)
        tx_ws.add_table(0, 0, max(len(rows), 1), 5, {
            "columns": [{"header": h} for h in headers]
        })

        # Summary worksheet
        summary = ledger.summarize()
        summary_ws = workbook.add_worksheet(self.SUMMARY)
        summary_ws.set_column(1, 1, None, amount_fmt)
        for row_idx, (label, value) in enumerate((
            ("Total Income", summary.total_income),
            ("Total Expenses", summary.total_expenses),
            ("Balance", summary.balance),
        )):
            summary_ws.write(row_idx, 0, label, bold if label == "Balance" else None)
            summary_ws.write_number(row_idx, 1, value, amount_fmt)

        # Charts worksheet with the category breakdown
        charts_ws = workbook.add_worksheet(self.CHARTS)
        charts_ws.freeze_panes(1, 0)
        charts_ws.set_column(1, 1, None, amount_fmt)
        table = self._build_chart_table(ledger.category_breakdown())
        for offset, row in enumerate(table):
            charts_ws.write_row(offset, 0, row)
        if len(table) > 1:
            self._insert_pie_chart(workbook, charts_ws, len(table))
        else:
            charts_ws.write(2, 0, EMPTY_CHART_MESSAGE)

        workbook.close()
        return out_path

    def _build_chart_table(self, breakdown):
        return [["Category", "Total"]] + [[row.category, row.amount] for row in breakdown]

    def _insert_pie_chart(self, workbook, charts_ws, row_count):
        chart = workbook.add_chart({"type": "pie"})
        chart.add_series({
            "categories": [charts_ws.name, 1, 0, row_count - 1, 0],
            "values": [charts_ws.name, 1, 1, row_count - 1, 1],
            "name": "Expenses by category",
            "points": [
                {"fill": {"color": CHART_COLORS[idx % len(CHART_COLORS)]}}
                for idx in range(row_count - 1)
            ],
            "data_labels": {"percentage": True},
        })
        chart.set_title({"name": "Expenses by category"})
        chart.set_legend({"position": "bottom"})
        chart.set_size({"width": 480, "height": 300})
        charts_ws.insert_chart(0, 3, chart, {"x_offset": 0, "y_offset": 0})
