# expense_tracker/core/serialization.py
import json
import math
import logging
from datetime import date, datetime
from typing import Iterable, List

from expense_tracker.core.models import (
    CATEGORIES,
    INCOME_CATEGORY,
    Transaction,
    TransactionType,
)

logger = logging.getLogger(__name__)

FIELDS = ("id", "amount", "description", "category", "type", "date")

# The browser app stored dates as they were rendered ("Oct 18, 2026").
_LEGACY_DATE_FORMATS = ("%b %d, %Y", "%B %d, %Y")


def _parse_date(value) -> date:
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unrecognized date: {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    for fmt in _LEGACY_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognized date: {value!r}")


def transaction_to_dict(tx: Transaction) -> dict:
    return {
        "id": tx.id,
        "amount": tx.amount,
        "description": tx.description,
        "category": tx.category,
        "type": tx.type.value,
        "date": tx.date.isoformat(),
    }


def transaction_from_dict(entry: dict) -> Transaction:
    """Build a transaction from a stored entry, enforcing the record rules.

    Income entries stored under another category are filed under ``Income``.
    """
    missing = [name for name in FIELDS if name not in entry]
    if missing:
        raise ValueError(f"Missing {', '.join(missing)} in stored entry: {entry}")
    amount = entry["amount"]
    if (
        isinstance(amount, bool)
        or not isinstance(amount, (int, float))
        or not math.isfinite(amount)
        or amount <= 0
    ):
        raise ValueError(f"Invalid amount in stored entry: {entry}")
    tx_id = entry["id"]
    if isinstance(tx_id, bool) or not isinstance(tx_id, int):
        raise ValueError(f"Invalid id in stored entry: {entry}")
    description = entry["description"]
    if not isinstance(description, str) or not description.strip():
        raise ValueError(f"Blank description in stored entry: {entry}")
    tx_type = TransactionType(entry["type"])
    category = entry["category"]
    if category not in CATEGORIES:
        raise ValueError(f"Unknown category in stored entry: {entry}")
    if tx_type is TransactionType.INCOME:
        category = INCOME_CATEGORY
    return Transaction(
        id=tx_id,
        amount=float(amount),
        description=description,
        category=category,
        type=tx_type,
        date=_parse_date(entry["date"]),
    )


def dumps(transactions: Iterable[Transaction]) -> str:
    """Serialize transactions to a JSON array."""
    return json.dumps([transaction_to_dict(tx) for tx in transactions])


def loads(text) -> List[Transaction]:
    """Parse a JSON array produced by :func:`dumps`.

    Absent or malformed payloads load as an empty list; individual records
    that cannot be parsed, or that reuse an id already seen, are skipped.
    """
    if not text:
        return []
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        logger.warning("Ignoring malformed ledger data: %s", exc)
        return []
    if not isinstance(data, list):
        logger.warning("Ignoring ledger data of type %s", type(data).__name__)
        return []

    txs = []
    seen = set()
    for entry in data:
        if not isinstance(entry, dict):
            logger.warning("Skipping stored entry that is not an object: %r", entry)
            continue
        try:
            tx = transaction_from_dict(entry)
        except ValueError as exc:
            logger.warning("Skipping stored entry: %s", exc)
            continue
        if tx.id in seen:
            logger.warning("Skipping stored entry with duplicate id %s", tx.id)
            continue
        seen.add(tx.id)
        txs.append(tx)
    return txs
