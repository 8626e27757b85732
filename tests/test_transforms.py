from datetime import date

import pandas as pd

from dhanchakra.domain import Expense, CategoryTotal
from dhanchakra.transforms import (
    add_expense,
    average_transaction,
    by_month,
    category_totals,
    current_month_expenses,
    expenses_to_df,
    format_money,
    monthly_expenses,
    recent_expenses,
    remaining_balance,
    top_category,
    total_spent,
    week_start,
    weekly_buckets,
)


def exp(id, amount, category="Other", d="2025-09-01", description="x"):
    return Expense(id=id, amount=amount, description=description, category=category, date=d)


def test_total_spent():
    expenses = (exp("1", 10.5), exp("2", 20.25), exp("3", 0.0))
    assert total_spent(expenses) == 30.75
    assert total_spent(tuple(reversed(expenses))) == 30.75
    assert total_spent(()) == 0.0


def test_add_expense_prepends_regardless_of_date():
    old = (exp("1", 10, d="2025-09-10"), exp("2", 20, d="2025-09-05"))
    older = exp("3", 5, d="2020-01-01")
    new = add_expense(old, older)

    assert new[0] is older
    assert len(new) == 3
    assert len(old) == 2


def test_monthly_expenses():
    expenses = (
        exp("1", 10, d="2025-09-01"),
        exp("2", 20, d="2025-09-30"),
        exp("3", 30, d="2025-08-31"),
        exp("4", 40, d="2024-09-15"),
    )
    sept = monthly_expenses(expenses, 9, 2025)
    assert [e.id for e in sept] == ["1", "2"]
    assert list(filter(by_month(8, 2025), expenses)) == [expenses[2]]


def test_current_month_expenses():
    expenses = (exp("1", 10, d="2025-09-01"), exp("2", 20, d="2025-10-01"))
    result = current_month_expenses(expenses, today=date(2025, 10, 19))
    assert [e.id for e in result] == ["2"]


def test_recent_expenses():
    today = date(2025, 9, 20)
    expenses = (
        exp("1", 1, d="2025-09-20"),
        exp("2", 1, d="2025-09-14"),
        exp("3", 1, d="2025-09-13"),
        exp("4", 1, d="2025-09-12"),
    )
    result = recent_expenses(expenses, days=7, today=today)
    assert [e.id for e in result] == ["1", "2"]


def test_category_totals_keep_first_appearance_order():
    expenses = (
        exp("1", 100, "Food & Dining"),
        exp("2", 350, "Travel"),
        exp("3", 50, "Food & Dining"),
    )
    totals = category_totals(expenses)
    assert totals == (
        CategoryTotal("Food & Dining", 150),
        CategoryTotal("Travel", 350),
    )
    assert sum(t.amount for t in totals) == total_spent(expenses)


def test_top_category():
    totals = (CategoryTotal("Food & Dining", 150), CategoryTotal("Travel", 350))
    assert top_category(totals).get_or_else(None).category == "Travel"

    tied = (CategoryTotal("Shopping", 50), CategoryTotal("Travel", 50))
    assert top_category(tied).get_or_else(None).category == "Shopping"

    assert not top_category(()).is_some()


def test_week_start_is_sunday():
    assert week_start(date(2025, 9, 14)) == date(2025, 9, 14)  # Sunday
    assert week_start(date(2025, 9, 15)) == date(2025, 9, 14)  # Monday
    assert week_start(date(2025, 9, 20)) == date(2025, 9, 14)  # Saturday


def test_weekly_buckets_sorted_ascending():
    expenses = (
        exp("1", 10, d="2025-09-22"),
        exp("2", 5, d="2025-09-15"),
        exp("3", 7, d="2025-09-20"),
        exp("4", 1, d="2025-09-01"),
    )
    buckets = weekly_buckets(expenses)
    assert [b.week for b in buckets] == ["2025-08-31", "2025-09-14", "2025-09-21"]
    assert [b.amount for b in buckets] == [1, 12, 10]
    assert buckets[1].label == "Week of 9/14/2025"


def test_average_transaction():
    expenses = tuple(exp(str(i), 12) for i in range(5))
    assert average_transaction(expenses) == 12.0
    assert average_transaction(()) == 0.0


def test_remaining_balance_and_format():
    expenses = (exp("1", 250), exp("2", 750.5))
    assert remaining_balance(10000, expenses) == 8999.5
    assert format_money(150) == "₹150.00"
    assert format_money(1234.5, "$") == "$1,234.50"


def test_expenses_to_df():
    df = expenses_to_df((exp("1", 10, "Travel", "2025-09-01"),))
    assert list(df.columns) == ["id", "date", "amount", "category", "description"]
    assert df.loc[0, "date"] == pd.Timestamp("2025-09-01")
    assert df["amount"].sum() == 10

    empty = expenses_to_df(())
    assert empty.empty
    assert "amount" in empty.columns
