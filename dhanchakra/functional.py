import math
import time
from abc import ABC, abstractmethod
from datetime import date
from typing import Generic, Optional, TypeVar, Union

from dhanchakra.domain import CATEGORIES, Expense

T = TypeVar('T')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()

    @abstractmethod
    def get_error(self) -> E:
        pass


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Right has no error")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def _is_blank(value) -> bool:
    return value is None or str(value).strip() == ""


def _parse_number(raw: Union[str, float, int, None]) -> Optional[float]:
    if _is_blank(raw):
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def new_expense_id() -> str:
    return str(int(time.time() * 1000))


def validate_expense(
    amount: Union[str, float, None],
    description: Optional[str],
    category: Optional[str],
    today: Optional[date] = None,
    expense_id: Optional[str] = None,
) -> Either[dict, Expense]:
    """Check the expense form fields and build the Expense dated today.

    Every field is required. The amount must be a finite, non-negative
    number and the category one of CATEGORIES.
    """
    if _is_blank(amount) or _is_blank(description) or _is_blank(category):
        return Left({
            "error": "missing_fields",
            "message": "Please fill in all fields",
        })

    value = _parse_number(amount)
    if value is None or value < 0:
        return Left({
            "error": "invalid_amount",
            "message": f"Amount {amount!r} is not a valid number",
            "amount": amount,
        })

    if category not in CATEGORIES:
        return Left({
            "error": "invalid_category",
            "message": f"Unknown category {category}",
            "category": category,
        })

    today = today or date.today()
    return Right(Expense(
        id=expense_id or new_expense_id(),
        amount=value,
        description=description,
        category=category,
        date=today.isoformat(),
    ))


def parse_goal(raw: Union[str, float, None]) -> Either[dict, float]:
    value = _parse_number(raw)
    if value is None or value <= 0:
        return Left({
            "error": "invalid_goal",
            "message": "Please enter a valid amount",
            "value": raw,
        })
    return Right(value)


def parse_balance(raw: Union[str, float, None]) -> Either[dict, float]:
    value = _parse_number(raw)
    if value is None or value < 0:
        return Left({
            "error": "invalid_balance",
            "message": "Please enter a valid balance",
            "value": raw,
        })
    return Right(value)
