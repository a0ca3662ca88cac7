"""Application root tying the ledger to a notification sink.

Form handlers and the delete action call into :class:`ExpenseTracker`; it
decides which message the user sees for each outcome and keeps persistence
failures from ending the session.
"""

from __future__ import annotations

import logging

from expense_tracker.core.models import TransactionType
from expense_tracker.core.validation import ValidationError
from expense_tracker.ledger import STORAGE_KEY, Ledger
from expense_tracker.notifications import (
    ADDED_MESSAGE,
    DELETED_MESSAGE,
    NOT_FOUND_MESSAGE,
    BaseNotifier,
    Severity,
)
from expense_tracker.storage import StorageError, get_storage

logger = logging.getLogger(__name__)

SAMPLE_TRANSACTIONS = (
    (2500, "Salary", None, TransactionType.INCOME),
    (50, "Grocery shopping", "Food", TransactionType.EXPENSE),
)


class ExpenseTracker:
    def __init__(self, ledger: Ledger, notifier: BaseNotifier):
        self.ledger = ledger
        self.notifier = notifier

    @classmethod
    def from_config(cls, config: dict, notifier: BaseNotifier) -> "ExpenseTracker":
        storage = get_storage(config.get("storage", "json"), config)
        ledger = Ledger.open(storage, config.get("storage_key", STORAGE_KEY))
        tracker = cls(ledger, notifier)
        if config.get("seed_sample_data"):
            tracker.seed_sample_data()
        return tracker

    def submit(self, amount, description, category, type):
        """Handle a form submission; returns the new transaction or None."""
        try:
            entry = self.ledger.validate(amount, description, category, type)
        except ValidationError as exc:
            self.notifier.notify(str(exc), Severity.ERROR)
            return None

        try:
            tx = self.ledger.add(entry.amount, entry.description, entry.category, entry.type)
        except StorageError as exc:
            tx = self.ledger.transactions[-1]
            self.notifier.notify(
                f"Transaction added, but it could not be saved: {exc}", Severity.ERROR
            )
            return tx

        self.notifier.notify(ADDED_MESSAGE, Severity.SUCCESS)
        return tx

    def delete(self, tx_id) -> bool:
        try:
            removed = self.ledger.remove(tx_id)
        except StorageError as exc:
            self.notifier.notify(
                f"Transaction deleted, but the change could not be saved: {exc}",
                Severity.ERROR,
            )
            return True

        if removed:
            self.notifier.notify(DELETED_MESSAGE, Severity.SUCCESS)
        else:
            self.notifier.notify(NOT_FOUND_MESSAGE, Severity.INFO)
        return removed

    def seed_sample_data(self) -> int:
        """Add the demo entries to an empty ledger; returns how many were added."""
        if len(self.ledger):
            return 0
        added = 0
        failure = None
        for amount, description, category, tx_type in SAMPLE_TRANSACTIONS:
            try:
                self.ledger.add(amount, description, category, tx_type)
            except StorageError as exc:
                failure = exc
            added += 1
        if failure is not None:
            self.notifier.notify(f"Sample data could not be saved: {failure}", Severity.ERROR)
        logger.info("Seeded %d sample transaction(s)", added)
        return added
