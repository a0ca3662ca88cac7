from datetime import date

import pytest

from expense_tracker.core.models import CategoryTotal, Summary, TransactionType
from expense_tracker.core.validation import InvalidAmount
from expense_tracker.ledger import STORAGE_KEY, Ledger
from expense_tracker.storage import StorageError
from expense_tracker.storage.memory import MemoryStorage


def test_empty_ledger_views():
    ledger = Ledger()
    assert ledger.summarize() == Summary(0.0, 0.0)
    assert ledger.summarize().to_dict() == {"totalIncome": 0.0, "totalExpenses": 0.0, "balance": 0.0}
    assert ledger.category_breakdown() == []
    assert ledger.sorted_for_display() == []
    assert len(ledger) == 0


def test_salary_and_groceries_scenario():
    ledger = Ledger()
    ledger.add("2500", "Salary", "", "income")
    ledger.add("50", "Grocery shopping", "Food", "expense")

    assert ledger.summarize().to_dict() == {
        "totalIncome": 2500.0,
        "totalExpenses": 50.0,
        "balance": 2450.0,
    }
    assert ledger.category_breakdown() == [CategoryTotal("Food", 50.0)]


def test_add_assigns_ids_dates_and_normalises_income():
    ledger = Ledger()
    first = ledger.add(100, "Bonus", "Food", "income", on=date(2026, 3, 1))
    second = ledger.add(20, "Bus", "Transportation", "expense")

    assert first.id == 1
    assert second.id == 2
    assert first.category == "Income"
    assert first.type is TransactionType.INCOME
    assert first.date == date(2026, 3, 1)
    assert second.date == date.today()
    assert ledger.transactions == (first, second)


def test_balance_moves_by_amount():
    ledger = Ledger()
    before = ledger.summarize().balance
    ledger.add("40.5", "Refund", None, "income")
    assert ledger.summarize().balance == pytest.approx(before + 40.5)
    ledger.add("10.25", "Snacks", "Food", "expense")
    assert ledger.summarize().balance == pytest.approx(before + 40.5 - 10.25)


def test_invalid_add_leaves_ledger_untouched():
    storage = MemoryStorage()
    ledger = Ledger(storage)
    with pytest.raises(InvalidAmount):
        ledger.add("-1", "Oops", "Food", "expense")
    assert len(ledger) == 0
    assert storage.load(STORAGE_KEY) is None


def test_remove_by_id():
    ledger = Ledger()
    keep = ledger.add(100, "Salary", None, "income")
    gone = ledger.add(30, "Cinema", "Entertainment", "expense")

    assert ledger.remove(gone.id) is True
    assert ledger.transactions == (keep,)
    assert ledger.summarize().total_expenses == 0.0

    before = ledger.summarize()
    assert ledger.remove(999) is False
    assert ledger.remove("not-a-number") is False
    assert ledger.summarize() == before


def test_remove_accepts_string_ids():
    ledger = Ledger()
    tx = ledger.add(5, "Tea", "Food", "expense")
    assert ledger.remove(str(tx.id)) is True
    assert len(ledger) == 0


def test_ids_are_never_reused_after_removal():
    ledger = Ledger()
    ledger.add(1, "a", "Food", "expense")
    second = ledger.add(2, "b", "Food", "expense")
    ledger.remove(second.id)
    third = ledger.add(3, "c", "Food", "expense")
    assert third.id == 3


def test_category_breakdown_groups_and_orders():
    ledger = Ledger()
    ledger.add(30, "Bus", "Transportation", "expense")
    ledger.add(100, "Dinner", "Food", "expense")
    ledger.add(1000, "Salary", None, "income")
    ledger.add(50, "Lunch", "Food", "expense")
    ledger.add(30, "Movie", "Entertainment", "expense")

    assert ledger.category_breakdown() == [
        CategoryTotal("Food", 150.0),
        CategoryTotal("Transportation", 30.0),
        CategoryTotal("Entertainment", 30.0),
    ]


def test_sorted_for_display_newest_first_then_by_id():
    ledger = Ledger()
    old = ledger.add(1, "old", "Food", "expense", on=date(2026, 1, 1))
    a = ledger.add(2, "a", "Food", "expense", on=date(2026, 2, 1))
    b = ledger.add(3, "b", "Food", "expense", on=date(2026, 2, 1))
    assert ledger.sorted_for_display() == [b, a, old]
    # insertion order is untouched
    assert ledger.transactions == (old, a, b)


def test_mutations_are_persisted_before_returning():
    storage = MemoryStorage()
    ledger = Ledger(storage)
    tx = ledger.add(10, "Tea", "Food", "expense")
    assert Ledger.open(storage).transactions == (tx,)

    ledger.remove(tx.id)
    assert Ledger.open(storage).transactions == ()


def test_open_resumes_id_counter():
    storage = MemoryStorage()
    ledger = Ledger(storage)
    ledger.add(10, "Tea", "Food", "expense")
    ledger.add(20, "Cake", "Food", "expense")

    reopened = Ledger.open(storage)
    assert reopened.add(5, "Milk", "Food", "expense").id == 3


def test_open_with_malformed_state_is_empty():
    storage = MemoryStorage()
    storage.save(STORAGE_KEY, "{not json")
    assert len(Ledger.open(storage)) == 0


def test_failed_write_keeps_memory_state():
    storage = MemoryStorage()
    ledger = Ledger(storage)
    ledger.add(10, "Tea", "Food", "expense")
    storage.fail_writes = True

    with pytest.raises(StorageError):
        ledger.add(20, "Cake", "Food", "expense")
    assert len(ledger) == 2
    assert len(Ledger.open(storage)) == 1


def test_listeners_see_each_change():
    ledger = Ledger()
    seen = []
    unsubscribe = ledger.subscribe(lambda l: seen.append(l.summarize().balance))

    ledger.add(100, "Salary", None, "income")
    tx = ledger.add(40, "Shoes", "Shopping", "expense")
    ledger.remove(999)
    ledger.remove(tx.id)
    assert seen == [100.0, 60.0, 100.0]

    unsubscribe()
    ledger.add(1, "Gum", "Food", "expense")
    assert len(seen) == 3


def test_rapid_removals_use_current_state():
    ledger = Ledger()
    txs = [ledger.add(i + 1, f"item {i}", "Food", "expense") for i in range(3)]
    assert ledger.remove(txs[0].id)
    assert ledger.remove(txs[1].id)
    assert not ledger.remove(txs[0].id)
    assert ledger.transactions == (txs[2],)


def test_new_ledger_starts_empty_until_loaded():
    storage = MemoryStorage()
    Ledger(storage).add(10, "Tea", "Food", "expense")

    fresh = Ledger(storage)
    assert len(fresh) == 0
    fresh.load()
    assert [tx.id for tx in fresh] == [1]
    assert fresh.add(5, "Milk", "Food", "expense").id == 2


def test_failing_listener_does_not_undo_a_saved_change():
    storage = MemoryStorage()
    ledger = Ledger(storage)
    seen = []

    def broken(_ledger):
        raise RuntimeError("render failed")

    ledger.subscribe(broken)
    ledger.subscribe(lambda l: seen.append(len(l)))

    tx = ledger.add(10, "Tea", "Food", "expense")
    assert seen == [1]
    assert Ledger.open(storage).transactions == (tx,)


def test_failing_listener_keeps_storage_error_visible():
    storage = MemoryStorage()
    ledger = Ledger(storage)

    def broken(_ledger):
        raise RuntimeError("render failed")

    ledger.subscribe(broken)
    storage.fail_writes = True
    with pytest.raises(StorageError):
        ledger.add(10, "Tea", "Food", "expense")
    assert len(ledger) == 1
