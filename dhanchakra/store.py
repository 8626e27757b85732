import logging
from datetime import date
from typing import Optional, Tuple, Union

from dhanchakra.domain import Expense
from dhanchakra.functional import Either, parse_balance, parse_goal, validate_expense
from dhanchakra.storage import ExpenseRepository
from dhanchakra.transforms import add_expense

logger = logging.getLogger(__name__)


class ExpenseStore:
    """In-memory dashboard state mirrored to an ExpenseRepository.

    Expenses are kept newest-first by insertion. There is no update or
    delete; every change is written through to storage immediately.
    """

    def __init__(self, repository: ExpenseRepository, expenses: Tuple[Expense, ...], balance: float, goal: float):
        self.repository = repository
        self._expenses = expenses
        self._balance = balance
        self._goal = goal

    @classmethod
    def load(cls, repository: ExpenseRepository) -> "ExpenseStore":
        store = cls(
            repository,
            expenses=repository.load_expenses(),
            balance=repository.load_balance(),
            goal=repository.load_goal(),
        )
        logger.info("Loaded %d expenses (balance=%s, goal=%s)", len(store.expenses), store.balance, store.goal)
        return store

    @property
    def expenses(self) -> Tuple[Expense, ...]:
        return self._expenses

    @property
    def balance(self) -> float:
        return self._balance

    @property
    def goal(self) -> float:
        return self._goal

    def add_expense(self, expense: Expense) -> None:
        self._expenses = add_expense(self._expenses, expense)
        self.repository.save_expenses(self._expenses)
        logger.info("Added expense id=%s (category=%s, amount=%s)", expense.id, expense.category, expense.amount)

    def set_goal(self, goal: float) -> None:
        self._goal = goal
        self.repository.save_goal(goal)
        logger.info("Savings goal set to %s", goal)

    def set_balance(self, balance: float) -> None:
        self._balance = balance
        self.repository.save_balance(balance)
        logger.info("Account balance set to %s", balance)

    def submit_expense(
        self,
        amount: Union[str, float, None],
        description: Optional[str],
        category: Optional[str],
        today: Optional[date] = None,
    ) -> Either[dict, Expense]:
        result = validate_expense(amount, description, category, today=today)
        if result.is_right():
            self.add_expense(result.get_or_else(None))
        else:
            logger.info("Rejected expense: %s", result.get_error()["message"])
        return result

    def submit_goal(self, raw: Union[str, float, None]) -> Either[dict, float]:
        result = parse_goal(raw)
        if result.is_right():
            self.set_goal(result.get_or_else(self._goal))
        else:
            logger.info("Rejected goal %r", raw)
        return result

    def submit_balance(self, raw: Union[str, float, None]) -> Either[dict, float]:
        result = parse_balance(raw)
        if result.is_right():
            self.set_balance(result.get_or_else(self._balance))
        else:
            logger.info("Rejected balance %r", raw)
        return result
