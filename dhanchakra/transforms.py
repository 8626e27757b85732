from datetime import date, timedelta
from functools import reduce
from typing import Callable, Dict, Optional, Tuple

import pandas as pd

from dhanchakra.domain import CategoryTotal, Expense, WeeklyBucket
from dhanchakra.functional import Maybe, Nothing, Some

EXPENSE_COLUMNS = ["id", "date", "amount", "category", "description"]


def add_expense(
    expenses: Tuple[Expense, ...], e: Expense
) -> Tuple[Expense, ...]:
    return (e,) + expenses


def expense_date(e: Expense) -> date:
    return date.fromisoformat(e.date)


def total_spent(expenses: Tuple[Expense, ...]) -> float:
    return reduce(lambda acc, e: acc + e.amount, expenses, 0.0)


def by_month(month: int, year: int) -> Callable[[Expense], bool]:
    def _filter(e: Expense) -> bool:
        d = expense_date(e)
        return d.month == month and d.year == year

    return _filter


def since(start: date) -> Callable[[Expense], bool]:
    def _filter(e: Expense) -> bool:
        return expense_date(e) >= start

    return _filter


def monthly_expenses(
    expenses: Tuple[Expense, ...], month: int, year: int
) -> Tuple[Expense, ...]:
    return tuple(filter(by_month(month, year), expenses))


def current_month_expenses(
    expenses: Tuple[Expense, ...], today: Optional[date] = None
) -> Tuple[Expense, ...]:
    today = today or date.today()
    return monthly_expenses(expenses, today.month, today.year)


def recent_expenses(
    expenses: Tuple[Expense, ...], days: int = 7, today: Optional[date] = None
) -> Tuple[Expense, ...]:
    """Expenses dated within the trailing `days` days, counted from today."""
    today = today or date.today()
    # today counts as the first of the `days` days
    return tuple(filter(since(today - timedelta(days=days - 1)), expenses))


def category_totals(expenses: Tuple[Expense, ...]) -> Tuple[CategoryTotal, ...]:
    totals: Dict[str, float] = {}
    for e in expenses:
        totals[e.category] = totals.get(e.category, 0.0) + e.amount
    return tuple(CategoryTotal(category=c, amount=a) for c, a in totals.items())


def top_category(totals: Tuple[CategoryTotal, ...]) -> Maybe[CategoryTotal]:
    # max() keeps the first of equal amounts
    if not totals:
        return Nothing()
    return Some(max(totals, key=lambda t: t.amount))


def week_start(d: date) -> date:
    # date.weekday(): Monday=0 ... Sunday=6
    return d - timedelta(days=(d.weekday() + 1) % 7)


def week_label(start: date) -> str:
    return f"Week of {start.month}/{start.day}/{start.year}"


def weekly_buckets(expenses: Tuple[Expense, ...]) -> Tuple[WeeklyBucket, ...]:
    weeks: Dict[date, float] = {}
    for e in expenses:
        start = week_start(expense_date(e))
        weeks[start] = weeks.get(start, 0.0) + e.amount
    return tuple(
        WeeklyBucket(week=start.isoformat(), amount=amount, label=week_label(start))
        for start, amount in sorted(weeks.items())
    )


def average_transaction(expenses: Tuple[Expense, ...]) -> float:
    if not expenses:
        return 0.0
    return total_spent(expenses) / len(expenses)


def remaining_balance(balance: float, expenses: Tuple[Expense, ...]) -> float:
    return balance - total_spent(expenses)


def format_money(value: float, currency: str = "₹") -> str:
    return f"{currency}{value:,.2f}"


def expenses_to_df(expenses: Tuple[Expense, ...]) -> pd.DataFrame:
    if not expenses:
        return pd.DataFrame(columns=EXPENSE_COLUMNS)
    df = pd.DataFrame([e.to_dict() for e in expenses])[EXPENSE_COLUMNS]
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce").fillna(0.0)
    return df
