from datetime import date

from dhanchakra.domain import Expense
from dhanchakra.storage import ExpenseRepository, JsonFileStorage, MemoryStorage
from dhanchakra.store import ExpenseStore


def new_store(storage=None):
    repo = ExpenseRepository(storage or MemoryStorage(), default_balance=10000, default_goal=1000)
    return ExpenseStore.load(repo)


def test_load_defaults():
    store = new_store()
    assert store.expenses == ()
    assert store.balance == 10000
    assert store.goal == 1000


def test_add_expense_goes_to_head_and_persists():
    store = new_store()
    first = Expense("1", 10, "Coffee", "Food & Dining", "2025-09-10")
    older = Expense("2", 20, "Taxi", "Transportation", "2024-01-01")
    store.add_expense(first)
    store.add_expense(older)

    assert store.expenses == (older, first)
    assert store.repository.load_expenses() == (older, first)


def test_submit_expense():
    store = new_store()
    result = store.submit_expense("42", "Books", "Education", today=date(2025, 9, 1))
    assert result.is_right()
    assert store.expenses[0].amount == 42.0
    assert store.expenses[0].date == "2025-09-01"


def test_submit_expense_with_missing_field_creates_nothing():
    store = new_store()
    result = store.submit_expense("42", "", "Education")
    assert result.is_left()
    assert result.get_error()["message"] == "Please fill in all fields"
    assert store.expenses == ()


def test_submit_goal_rejects_invalid_input():
    store = new_store()
    for bad in ("-5", "", "abc", "0"):
        result = store.submit_goal(bad)
        assert result.is_left()
        assert store.goal == 1000
    assert store.repository.load_goal() == 1000


def test_submit_goal_persists():
    store = new_store()
    assert store.submit_goal("1500").is_right()
    assert store.goal == 1500
    assert store.repository.load_goal() == 1500


def test_submit_balance():
    store = new_store()
    assert store.submit_balance("2500").is_right()
    assert store.balance == 2500
    assert store.submit_balance("-1").is_left()
    assert store.balance == 2500


def test_state_survives_reload(tmp_path):
    path = str(tmp_path / "state.json")
    store = new_store(JsonFileStorage(path))
    store.submit_expense("9.99", "Snack", "Food & Dining", today=date(2025, 9, 2))
    store.submit_goal("800")
    store.submit_balance("5000")

    reloaded = new_store(JsonFileStorage(path))
    assert reloaded.expenses == store.expenses
    assert reloaded.goal == 800
    assert reloaded.balance == 5000
