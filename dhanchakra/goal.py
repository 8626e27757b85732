from dataclasses import dataclass


@dataclass(frozen=True)
class GoalStatus:
    goal: float
    spent: float

    @classmethod
    def of(cls, goal: float, spent: float) -> "GoalStatus":
        return cls(goal=goal, spent=spent)

    @property
    def remaining(self) -> float:
        return self.goal - self.spent

    @property
    def progress(self) -> float:
        """Spent as a percentage of the goal, clamped to [0, 100] for display."""
        if self.goal <= 0:
            return 100.0 if self.spent > 0 else 0.0
        return min(100.0, max(0.0, self.spent / self.goal * 100))

    @property
    def is_over_budget(self) -> bool:
        return self.spent > self.goal

    @property
    def headline(self) -> str:
        return "Budget Alert!" if self.is_over_budget else "On Track!"

    def message(self, currency: str = "₹") -> str:
        if self.is_over_budget:
            return (
                f"You've exceeded your monthly goal by {currency}{abs(self.remaining):.2f}. "
                "Consider reviewing your spending habits."
            )
        return f"Great job! You have {currency}{self.remaining:.2f} left in your budget this month."
