from datetime import date
from typing import Any, Dict, Optional, Sequence, Tuple

from dhanchakra.domain import Expense
from dhanchakra.goal import GoalStatus
from dhanchakra.insights import FALLBACK_INSIGHT, RULES, Rule
from dhanchakra.transforms import (
    average_transaction,
    category_totals,
    current_month_expenses,
    remaining_balance,
    total_spent,
    weekly_buckets,
)


class InsightService:
    """Runs an ordered sequence of insight rules and records every step.

    rules: sequence of functions taking (expenses, total, goal, today, currency) -> Insight | None
    """

    def __init__(self, rules: Sequence[Rule] = RULES, currency: str = "₹"):
        self.rules = rules
        self.currency = currency

    def report(self, expenses: Tuple[Expense, ...], goal: float, today: Optional[date] = None) -> Dict[str, Any]:
        today = today or date.today()
        total = total_spent(expenses)
        report = {
            "total": total,
            "goal": goal,
            "steps": [],
            "insights": [],
        }

        for rule in self.rules:
            out = rule(expenses, total, goal, today, self.currency)
            report["steps"].append({"rule": getattr(rule, "__name__", str(rule)), "fired": out is not None})
            if out is not None:
                report["insights"].append(out)

        if not report["insights"]:
            report["insights"].append(FALLBACK_INSIGHT)
        return report


class DashboardService:
    """Everything the dashboard renders, derived from the store state in one pass."""

    def __init__(self, insight_service: Optional[InsightService] = None):
        self.insight_service = insight_service or InsightService()

    def summary(
        self,
        expenses: Tuple[Expense, ...],
        balance: float,
        goal: float,
        today: Optional[date] = None,
    ) -> Dict[str, Any]:
        today = today or date.today()
        monthly = current_month_expenses(expenses, today)
        monthly_total = total_spent(monthly)
        insight_report = self.insight_service.report(monthly, goal, today)
        return {
            "month_label": today.strftime("%B %Y"),
            "total_spent": total_spent(expenses),
            "monthly_expenses": monthly,
            "monthly_total": monthly_total,
            "count": len(expenses),
            "average": average_transaction(expenses),
            "balance_left": remaining_balance(balance, expenses),
            "goal": GoalStatus.of(goal, monthly_total),
            "category_totals": category_totals(expenses),
            "weekly": weekly_buckets(expenses),
            "insights": tuple(insight_report["insights"]),
            "insight_steps": insight_report["steps"],
        }
