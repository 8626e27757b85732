"""Local key/value persistence.

The dashboard keeps three independent keys: the expense list, the account
balance and the savings goal. Values are stored as text, the way a browser
key/value store would hold them, so a corrupt value under one key never
affects the others.
"""
import json
import logging
import math
import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from dhanchakra.domain import Expense

logger = logging.getLogger(__name__)

EXPENSES_KEY = "expenses"
BALANCE_KEY = "accountBalance"
GOAL_KEY = "savingsGoal"


class KeyValueStorage(ABC):

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass


class MemoryStorage(KeyValueStorage):

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage(KeyValueStorage):
    """All keys in one JSON object on disk, rewritten atomically on every set."""

    def __init__(self, path: str):
        self.path = os.path.abspath(path)

    def _load(self) -> Tuple[Dict[str, str], bool]:
        """Return the stored keys and whether the file was read without losing anything."""
        if not os.path.exists(self.path):
            return {}, True
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.warning("Could not read storage file %s, starting empty", self.path)
            return {}, False
        if not isinstance(data, dict):
            logger.warning("Storage file %s does not hold an object, starting empty", self.path)
            return {}, False
        kept = {str(k): v for k, v in data.items() if isinstance(v, str)}
        if len(kept) != len(data):
            logger.warning("Ignoring non-text values in storage file %s", self.path)
        return kept, len(kept) == len(data)

    def get(self, key: str) -> Optional[str]:
        return self._load()[0].get(key)

    def set(self, key: str, value: str) -> None:
        data, intact = self._load()
        if not intact:
            backup = self.path + ".bak"
            logger.error("Storage file %s is damaged, keeping a copy at %s before overwriting", self.path, backup)
            shutil.copy2(self.path, backup)
        data[key] = value
        dirn = os.path.dirname(self.path)
        os.makedirs(dirn, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix="tmp_dhanchakra_", dir=dirn, text=True)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            shutil.move(tmp_path, self.path)
        except OSError:
            logger.exception("Failed to write storage file %s", self.path)
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


class ExpenseRepository:
    """Load and save the dashboard state on top of a KeyValueStorage."""

    def __init__(self, storage: KeyValueStorage, default_balance: float = 10000.0, default_goal: float = 1000.0):
        self.storage = storage
        self.default_balance = default_balance
        self.default_goal = default_goal

    def load_expenses(self) -> Tuple[Expense, ...]:
        raw = self.storage.get(EXPENSES_KEY)
        if raw is None:
            return ()
        try:
            items = json.loads(raw)
        except ValueError:
            logger.warning("Stored %s is not valid JSON, starting with no expenses", EXPENSES_KEY)
            return ()
        if not isinstance(items, list):
            logger.warning("Stored %s is not a list, starting with no expenses", EXPENSES_KEY)
            return ()

        expenses = []
        for item in items:
            try:
                expenses.append(Expense.from_dict(item))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("Skipping malformed stored expense: %r", item)
        return tuple(expenses)

    def save_expenses(self, expenses: Tuple[Expense, ...]) -> None:
        self.storage.set(EXPENSES_KEY, json.dumps([e.to_dict() for e in expenses], ensure_ascii=False))

    def _load_number(self, key: str, default: float) -> float:
        raw = self.storage.get(key)
        if raw is None:
            return default
        try:
            value = float(raw)
        except ValueError:
            value = math.nan
        if not math.isfinite(value):
            logger.warning("Stored %s=%r is not a number, using default %s", key, raw, default)
            return default
        return value

    def load_balance(self) -> float:
        return self._load_number(BALANCE_KEY, self.default_balance)

    def save_balance(self, balance: float) -> None:
        self.storage.set(BALANCE_KEY, repr(float(balance)))

    def load_goal(self) -> float:
        goal = self._load_number(GOAL_KEY, self.default_goal)
        if goal <= 0:
            logger.warning("Stored %s=%s is not positive, using default %s", GOAL_KEY, goal, self.default_goal)
            return self.default_goal
        return goal

    def save_goal(self, goal: float) -> None:
        self.storage.set(GOAL_KEY, repr(float(goal)))
