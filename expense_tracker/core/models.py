# expense_tracker/core/models.py
from dataclasses import dataclass
from datetime import date
from enum import Enum


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


EXPENSE_CATEGORIES = (
    "Food",
    "Transportation",
    "Entertainment",
    "Shopping",
    "Bills",
    "Healthcare",
    "Education",
    "Other",
)
INCOME_CATEGORY = "Income"
CATEGORIES = EXPENSE_CATEGORIES + (INCOME_CATEGORY, "Rent")


@dataclass(frozen=True)
class Transaction:
    id: int
    amount: float
    description: str
    category: str
    type: TransactionType
    date: date

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE


@dataclass(frozen=True)
class Summary:
    total_income: float = 0.0
    total_expenses: float = 0.0

    @property
    def balance(self) -> float:
        return self.total_income - self.total_expenses

    def to_dict(self):
        return {
            "totalIncome": self.total_income,
            "totalExpenses": self.total_expenses,
            "balance": self.balance,
        }


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    amount: float

    def to_dict(self):
        return {"category": self.category, "amount": self.amount}
