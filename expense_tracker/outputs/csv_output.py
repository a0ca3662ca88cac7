# expense_tracker/outputs/csv_output.py

import os
import csv
from expense_tracker.outputs.base import BaseOutput


class CSVOutput(BaseOutput):
    """
    Writes every transaction to transactions.csv in insertion order,
    one row per entry with the persisted field values.
    """
    FILENAME = 'transactions.csv'
    HEADERS = ['id', 'date', 'type', 'category', 'description', 'amount']

    def __init__(self, config):
        self.config     = config
        self.output_dir = config.get('output_dir', 'data')
        os.makedirs(self.output_dir, exist_ok=True)

    def write(self, ledger):
        out_path = os.path.join(self.output_dir, self.FILENAME)
        with open(out_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(self.HEADERS)
            for tx in ledger:
                writer.writerow([
                    tx.id,
                    tx.date.isoformat(),
                    tx.type.value,
                    tx.category,
                    tx.description,
                    f"{tx.amount:.2f}",
                ])
        return out_path
