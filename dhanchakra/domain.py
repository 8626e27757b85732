import math
from dataclasses import dataclass, asdict
from datetime import date

CATEGORIES = (
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Bills & Utilities",
    "Healthcare",
    "Travel",
    "Education",
    "Other",
)

CATEGORY_COLORS = {
    "Food & Dining": "#f97316",
    "Transportation": "#3b82f6",
    "Shopping": "#8b5cf6",
    "Entertainment": "#ec4899",
    "Bills & Utilities": "#ef4444",
    "Healthcare": "#10b981",
    "Travel": "#6366f1",
    "Education": "#eab308",
    "Other": "#6b7280",
}

# insight kinds
WARNING = "warning"
INFO = "info"
SUCCESS = "success"
TIP = "tip"

INSIGHT_BADGES = {
    WARNING: "Alert",
    SUCCESS: "Good",
    INFO: "Info",
    TIP: "Tip",
}


def category_color(category: str) -> str:
    return CATEGORY_COLORS.get(category, CATEGORY_COLORS["Other"])


@dataclass(frozen=True)
class Expense:
    id: str            # creation timestamp in ms
    amount: float
    description: str
    category: str      # one of CATEGORIES
    date: str          # "YYYY-MM-DD"

    def to_dict(self) -> dict:
        return asdict(self)

    @staticmethod
    def from_dict(d: dict) -> "Expense":
        amount = float(d["amount"])
        if not math.isfinite(amount) or amount < 0:
            raise ValueError(f"Invalid expense amount {amount!r}")
        return Expense(
            id=str(d["id"]),
            amount=amount,
            description=str(d.get("description", "")),
            category=str(d.get("category", "Other")),
            date=date.fromisoformat(str(d["date"])).isoformat(),
        )


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    amount: float


@dataclass(frozen=True)
class WeeklyBucket:
    week: str    # ISO date of the Sunday starting the week
    amount: float
    label: str


@dataclass(frozen=True)
class Insight:
    kind: str
    title: str
    message: str
    tip: str

    @property
    def badge(self) -> str:
        return INSIGHT_BADGES.get(self.kind, "Tip")
