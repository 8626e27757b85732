"""Rule-based spending insights.

Each rule looks at the current month's expenses, their total and the
monthly goal, and returns an :class:`Insight` or ``None``. Rules are
evaluated in the order of :data:`RULES`; when none of them fires a single
generic tip is returned instead.
"""
from datetime import date
from typing import Callable, Optional, Tuple

from dhanchakra.domain import INFO, SUCCESS, TIP, WARNING, Expense, Insight
from dhanchakra.transforms import (
    average_transaction,
    category_totals,
    recent_expenses,
    top_category,
)

TOP_CATEGORY_SHARE = 0.4
RECENT_DAYS = 7
RECENT_COUNT = 10
APPROACHING_LIMIT = 80.0
LIMIT = 100.0
GOOD_CONTROL = 60.0
SMALL_PURCHASE_MIN_COUNT = 5
SMALL_PURCHASE_AVERAGE = 15.0

Rule = Callable[[Tuple[Expense, ...], float, float, date, str], Optional[Insight]]

FALLBACK_INSIGHT = Insight(
    kind=TIP,
    title="AI Financial Tip",
    message="Track your expenses regularly to identify spending patterns and optimize your budget.",
    tip="Set up weekly budget reviews to stay on track with your financial goals.",
)


def high_category_spending(expenses, total, goal, today, currency="₹") -> Optional[Insight]:
    top = top_category(category_totals(expenses)).get_or_else(None)
    if top is None or top.amount <= total * TOP_CATEGORY_SHARE:
        return None
    share = top.amount / total * 100
    return Insight(
        kind=WARNING,
        title="High Category Spending",
        message=(
            f"You're spending {share:.1f}% of your budget on {top.category}. "
            "Consider if this aligns with your priorities."
        ),
        tip="Try setting a specific budget limit for this category next month.",
    )


def high_transaction_frequency(expenses, total, goal, today, currency="₹") -> Optional[Insight]:
    count = len(recent_expenses(expenses, days=RECENT_DAYS, today=today))
    if count < RECENT_COUNT:
        return None
    return Insight(
        kind=INFO,
        title="High Transaction Frequency",
        message=(
            f"You've made {count} transactions in the past week. "
            "Frequent small purchases can add up quickly."
        ),
        tip="Consider batching purchases or implementing a 24-hour waiting period for non-essential items.",
    )


def budget_progress(expenses, total, goal, today, currency="₹") -> Optional[Insight]:
    # (60, 80] and >= 100 intentionally yield nothing
    if goal <= 0:
        return None
    progress = total / goal * 100
    remaining = goal - total
    if APPROACHING_LIMIT < progress < LIMIT:
        return Insight(
            kind=WARNING,
            title="Approaching Budget Limit",
            message=(
                f"You've used {progress:.1f}% of your monthly budget. "
                f"Only {currency}{remaining:.2f} remaining."
            ),
            tip="Focus on essential expenses only for the rest of the month.",
        )
    if progress <= GOOD_CONTROL:
        return Insight(
            kind=SUCCESS,
            title="Great Budget Control",
            message=(
                f"Excellent spending discipline! You're only at {progress:.1f}% "
                "of your monthly goal."
            ),
            tip="Consider increasing your savings rate or setting a lower spending goal next month.",
        )
    return None


def small_purchase_pattern(expenses, total, goal, today, currency="₹") -> Optional[Insight]:
    if len(expenses) < SMALL_PURCHASE_MIN_COUNT:
        return None
    avg = average_transaction(expenses)
    if avg >= SMALL_PURCHASE_AVERAGE:
        return None
    return Insight(
        kind=TIP,
        title="Small Purchase Pattern",
        message=(
            f"Your average transaction is {currency}{avg:.2f}. "
            "Small purchases can be budget-friendly but watch for accumulation."
        ),
        tip="Consider using the 50/30/20 rule: 50% needs, 30% wants, 20% savings.",
    )


RULES: Tuple[Rule, ...] = (
    high_category_spending,
    high_transaction_frequency,
    budget_progress,
    small_purchase_pattern,
)


def generate_insights(
    expenses: Tuple[Expense, ...],
    total: float,
    goal: float,
    today: Optional[date] = None,
    currency: str = "₹",
) -> Tuple[Insight, ...]:
    today = today or date.today()
    fired = tuple(
        insight
        for insight in (rule(expenses, total, goal, today, currency) for rule in RULES)
        if insight is not None
    )
    return fired or (FALLBACK_INSIGHT,)
