import pytest

from expense_tracker.core.models import TransactionType
from expense_tracker.core.validation import (
    EmptyDescription,
    InvalidAmount,
    MissingCategory,
    MissingType,
    parse_amount,
    validate,
)


def test_validate_returns_cleaned_entry():
    entry = validate("12.50", "  Lunch  ", "food", "Expense")
    assert entry.amount == 12.5
    assert entry.description == "Lunch"
    assert entry.category == "Food"
    assert entry.type is TransactionType.EXPENSE


def test_income_is_filed_under_income_without_a_category():
    entry = validate("2500", "Salary", "", "income")
    assert entry.category == "Income"

    entry = validate(2500, "Salary", "Other", TransactionType.INCOME)
    assert entry.category == "Income"


@pytest.mark.parametrize("amount", [None, "", "   ", "abc", "0", 0, "-5", -1.5, "nan", "inf", True])
def test_invalid_amounts(amount):
    with pytest.raises(InvalidAmount) as exc:
        validate(amount, "Lunch", "Food", "expense")
    assert str(exc.value) == "Please enter a valid amount greater than 0."
    assert exc.value.code == "InvalidAmount"


@pytest.mark.parametrize("description", ["", "   ", None])
def test_blank_description(description):
    with pytest.raises(EmptyDescription) as exc:
        validate("10", description, "Food", "expense")
    assert str(exc.value) == "Please enter a description."


def test_expense_requires_a_known_category():
    with pytest.raises(MissingCategory):
        validate("10", "Lunch", "", "expense")
    with pytest.raises(MissingCategory):
        validate("10", "Lunch", "Groceries", "expense")


def test_missing_type():
    with pytest.raises(MissingType) as exc:
        validate("10", "Lunch", "Food", None)
    assert str(exc.value) == "Please select transaction type (Income or Expense)."
    with pytest.raises(MissingType):
        validate("10", "Lunch", "Food", "transfer")


def test_first_failing_check_wins():
    with pytest.raises(InvalidAmount):
        validate("0", "", "", None)
    with pytest.raises(EmptyDescription):
        validate("10", "", "", None)
    # category is checked before type when neither is chosen
    with pytest.raises(MissingCategory):
        validate("10", "Lunch", "", None)
    with pytest.raises(MissingType):
        validate("10", "Lunch", "Food", "")


def test_parse_amount():
    assert parse_amount(" 3.25 ") == 3.25
    assert parse_amount(7) == 7.0
    assert parse_amount("1e2") == 100.0
    assert parse_amount("12abc") is None
    assert parse_amount([]) is None
