"""Validation of form submissions before they reach the ledger.

Checks run in a fixed order (amount, description, category, type) and the
first failure wins, so the same bad submission always produces the same
message.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

from expense_tracker.core.models import (
    CATEGORIES,
    INCOME_CATEGORY,
    TransactionType,
)


class ValidationError(ValueError):
    """Base class for rejected user input."""

    code = "ValidationError"
    message = "Invalid transaction."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class InvalidAmount(ValidationError):
    code = "InvalidAmount"
    message = "Please enter a valid amount greater than 0."


class EmptyDescription(ValidationError):
    code = "EmptyDescription"
    message = "Please enter a description."


class MissingCategory(ValidationError):
    code = "MissingCategory"
    message = "Please select a category."


class MissingType(ValidationError):
    code = "MissingType"
    message = "Please select transaction type (Income or Expense)."


@dataclass(frozen=True)
class ValidatedEntry:
    amount: float
    description: str
    category: str
    type: TransactionType


def parse_amount(value: Union[str, int, float, None]) -> Optional[float]:
    """Return *value* as a finite float, or ``None`` when it is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount):
        return None
    return amount


def parse_type(value) -> Optional[TransactionType]:
    if isinstance(value, TransactionType):
        return value
    if not isinstance(value, str):
        return None
    try:
        return TransactionType(value.strip().lower())
    except ValueError:
        return None


def parse_category(value) -> Optional[str]:
    """Match *value* against the known categories, ignoring case."""
    if not isinstance(value, str):
        return None
    wanted = value.strip().lower()
    for name in CATEGORIES:
        if name.lower() == wanted:
            return name
    return None


def validate(amount, description, category, type) -> ValidatedEntry:
    """Validate a submission and return the cleaned entry.

    Raises the first applicable :class:`ValidationError`. Income entries do
    not need a category; they are always filed under ``Income``.
    """
    parsed_amount = parse_amount(amount)
    if parsed_amount is None or parsed_amount <= 0:
        raise InvalidAmount()

    text = description.strip() if isinstance(description, str) else ""
    if not text:
        raise EmptyDescription()

    tx_type = parse_type(type)
    parsed_category = parse_category(category)
    if parsed_category is None and tx_type is not TransactionType.INCOME:
        raise MissingCategory()

    if tx_type is None:
        raise MissingType()

    if tx_type is TransactionType.INCOME:
        parsed_category = INCOME_CATEGORY

    return ValidatedEntry(
        amount=parsed_amount,
        description=text,
        category=parsed_category,
        type=tx_type,
    )
