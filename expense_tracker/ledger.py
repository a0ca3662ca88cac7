"""The transaction ledger and its derived views."""

from __future__ import annotations

import logging
from collections import OrderedDict
from datetime import date
from typing import Callable, Iterator, List, Optional, Tuple

from expense_tracker.core import serialization
from expense_tracker.core.models import CategoryTotal, Summary, Transaction
from expense_tracker.core.validation import ValidatedEntry, validate
from expense_tracker.storage import BaseStorage, StorageError
from expense_tracker.storage.memory import MemoryStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "expenseTracker.transactions"

Listener = Callable[["Ledger"], None]


class Ledger:
    """Ordered, persisted collection of transactions.

    Every mutation is written through *storage* before the call returns. If
    the write fails the change is kept in memory and the ``StorageError``
    propagates, so callers can tell the user without losing the session.
    """

    def __init__(
        self,
        storage: Optional[BaseStorage] = None,
        key: str = STORAGE_KEY,
    ):
        self.storage = storage if storage is not None else MemoryStorage()
        self.key = key
        self._transactions: List[Transaction] = []
        self._next_id = 1
        self._listeners: List[Listener] = []

    @classmethod
    def open(cls, storage: BaseStorage, key: str = STORAGE_KEY) -> "Ledger":
        """Restore a ledger from *storage*; missing or bad data gives an empty one."""
        ledger = cls(storage, key)
        ledger.load()
        return ledger

    def load(self) -> None:
        self._transactions = serialization.loads(self.storage.load(self.key))
        self._next_id = max((tx.id for tx in self._transactions), default=0) + 1
        logger.debug("Loaded %d transaction(s) from %s", len(self._transactions), self.key)

    def save(self) -> None:
        self.storage.save(self.key, serialization.dumps(self._transactions))

    # -- queries ---------------------------------------------------------

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return tuple(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._transactions))

    def get(self, tx_id) -> Optional[Transaction]:
        wanted = _coerce_id(tx_id)
        return next((tx for tx in self._transactions if tx.id == wanted), None)

    def sorted_for_display(self) -> List[Transaction]:
        """Newest date first; within a day the most recently added first."""
        return sorted(self._transactions, key=lambda tx: (tx.date, tx.id), reverse=True)

    def summarize(self) -> Summary:
        total_income = 0.0
        total_expenses = 0.0
        for tx in self._transactions:
            if tx.is_income:
                total_income += tx.amount
            else:
                total_expenses += tx.amount
        return Summary(total_income=total_income, total_expenses=total_expenses)

    def category_breakdown(self) -> List[CategoryTotal]:
        """Expense totals per category, largest first.

        Categories with equal totals keep the order in which they first
        appeared.
        """
        totals: "OrderedDict[str, float]" = OrderedDict()
        for tx in self._transactions:
            if not tx.is_expense:
                continue
            totals[tx.category] = totals.get(tx.category, 0.0) + tx.amount
        rows = [CategoryTotal(category, amount) for category, amount in totals.items()]
        rows.sort(key=lambda row: row.amount, reverse=True)
        return rows

    # -- mutations -------------------------------------------------------

    @staticmethod
    def validate(amount, description, category, type) -> ValidatedEntry:
        return validate(amount, description, category, type)

    def add(self, amount, description, category, type, on: Optional[date] = None) -> Transaction:
        """Validate and record a new transaction.

        Income entries are always filed under the ``Income`` category.
        """
        entry = validate(amount, description, category, type)
        tx = Transaction(
            id=self._next_id,
            amount=entry.amount,
            description=entry.description,
            category=entry.category,
            type=entry.type,
            date=on or date.today(),
        )
        self._next_id += 1
        self._transactions.append(tx)
        logger.debug("Added transaction %s (%s %.2f)", tx.id, tx.type.value, tx.amount)
        self._commit()
        return tx

    def remove(self, tx_id) -> bool:
        wanted = _coerce_id(tx_id)
        for idx, tx in enumerate(self._transactions):
            if tx.id == wanted:
                del self._transactions[idx]
                logger.debug("Removed transaction %s", wanted)
                self._commit()
                return True
        return False

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every change; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self) -> None:
        try:
            self.save()
        except StorageError:
            logger.error("Could not persist ledger under %s", self.key, exc_info=True)
            self._notify_listeners()
            raise
        self._notify_listeners()

    def _notify_listeners(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Ledger listener %r failed", listener)


def _coerce_id(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None
