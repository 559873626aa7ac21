"""Service layer for handling expense-related logic."""
import json
import logging
import math
import uuid
from datetime import date
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from models.expense import DateRange, Expense, ExpenseCategory, ExpenseDraft, ExpenseSummary
from models.seed import seed_expenses
from services import expense_queries
from utils.exceptions import ExpenseNotFoundError, PersistenceError
from utils.storage import KeyValueBackend

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "expenses"
SALARY_STORAGE_KEY = "salary"

# (level, message) where level is "success" or "error"
Notifier = Callable[[str, str], None]

_EXPENSE_LIST = TypeAdapter(List[Expense])


def log_notification(level: str, message: str) -> None:
    """Default notifier: user-facing messages go to the log."""
    if level == "error":
        logger.error(message)
    else:
        logger.info(message)


class ExpenseStore:
    """
    Owns the expense collection and keeps the backend in sync with it.

    The collection is kept in insertion order with the newest additions at
    the head. Every mutation writes the whole collection back under a single
    key. A failed write is reported but never undoes the in-memory change.
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        storage_key: str = DEFAULT_STORAGE_KEY,
        seed: Optional[Iterable[Expense]] = None,
        notify: Optional[Notifier] = None,
    ):
        self.backend = backend
        self.storage_key = storage_key
        self._seed = list(seed) if seed is not None else seed_expenses()
        self._notify = notify or log_notification
        self._expenses: List[Expense] = self._hydrate()
        self._salary = self._load_salary()

    # --- Loading and saving ---

    def _hydrate(self) -> List[Expense]:
        blob = self.backend.read(self.storage_key)
        if blob is None:
            logger.info(f"No stored expenses under '{self.storage_key}'. Starting from {len(self._seed)} seed records.")
            return list(self._seed)
        try:
            expenses = _EXPENSE_LIST.validate_json(blob)
        except ValidationError as e:
            logger.warning(f"Stored expenses under '{self.storage_key}' are malformed, falling back to seed data: {e}")
            return list(self._seed)
        if len({e.id for e in expenses}) != len(expenses):
            logger.warning(f"Stored expenses under '{self.storage_key}' contain duplicate ids, falling back to seed data.")
            return list(self._seed)
        logger.info(f"Loaded {len(expenses)} expenses from '{self.storage_key}'.")
        return expenses

    def _persist(self) -> bool:
        """Writes the full collection. Returns False (after reporting) when the backend refuses."""
        blob = json.dumps([expense.to_record() for expense in self._expenses])
        try:
            self.backend.write(self.storage_key, blob)
        except PersistenceError as e:
            logger.error(f"Failed to save expenses: {e}")
            self._notify("error", "Failed to save expenses")
            return False
        logger.debug(f"Persisted {len(self._expenses)} expenses under '{self.storage_key}'.")
        return True

    def _new_id(self) -> str:
        existing = {expense.id for expense in self._expenses}
        expense_id = uuid.uuid4().hex
        while expense_id in existing:
            expense_id = uuid.uuid4().hex
        return expense_id

    def _index_of(self, expense_id: str) -> int:
        for index, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return index
        return -1

    # --- Record operations ---

    def load_all(self) -> List[Expense]:
        """All expenses, most recent date first. Equal dates keep collection order."""
        return sorted(self._expenses, key=lambda e: e.date, reverse=True)

    def get(self, expense_id: str) -> Optional[Expense]:
        index = self._index_of(expense_id)
        return self._expenses[index] if index != -1 else None

    def add(self, draft: ExpenseDraft) -> Expense:
        """Assigns a fresh id, puts the expense at the head of the collection and saves."""
        draft = ExpenseDraft.model_validate(draft.model_dump())
        expense = Expense.from_draft(draft, self._new_id())
        self._expenses.insert(0, expense)
        logger.info(f"Added expense {expense.id}: {expense.date} {expense.category.value} {expense.amount}")
        if self._persist():
            self._notify("success", "Expense added successfully")
        return expense

    def update(self, expense: Expense) -> Expense:
        """Replaces the stored expense with the same id, keeping its position."""
        # model_copy(update=...) skips validation, so check again before touching the collection
        expense = Expense.model_validate(expense.model_dump())
        index = self._index_of(expense.id)
        if index == -1:
            logger.warning(f"Update rejected, no expense with id {expense.id}")
            self._notify("error", "Expense not found")
            raise ExpenseNotFoundError(expense.id)
        self._expenses[index] = expense
        logger.info(f"Updated expense {expense.id}")
        if self._persist():
            self._notify("success", "Expense updated successfully")
        return expense

    def delete(self, expense_id: str) -> bool:
        """Removes the expense with this id. Returns False when there was none."""
        index = self._index_of(expense_id)
        if index == -1:
            logger.warning(f"Delete rejected, no expense with id {expense_id}")
            self._notify("error", "Expense not found")
            return False
        del self._expenses[index]
        logger.info(f"Deleted expense {expense_id}")
        if self._persist():
            self._notify("success", "Expense deleted successfully")
        return True

    def clear(self) -> int:
        """Deletes every expense and returns how many were removed."""
        deleted_count = len(self._expenses)
        logger.warning(f"Deleting ALL {deleted_count} expenses under '{self.storage_key}'.")
        self._expenses = []
        if self._persist():
            self._notify("success", "All expenses deleted")
        return deleted_count

    # --- Queries over the current collection ---

    def filter(self, date_range: Optional[DateRange] = None, category: Optional[ExpenseCategory] = None) -> List[Expense]:
        return expense_queries.filter_by_range(self.load_all(), date_range, category)

    def by_month(self, month: int, year: int) -> List[Expense]:
        return expense_queries.by_month(self.load_all(), month, year)

    def last_n_days(self, n: int = 30, today: Optional[date] = None) -> List[Expense]:
        return expense_queries.last_n_days(self.load_all(), n, today)

    def summary(self) -> ExpenseSummary:
        return expense_queries.summarize(self._expenses)

    def export_csv(self) -> str:
        """CSV of the collection in stored order (newest additions first)."""
        text = expense_queries.export_csv(self._expenses)
        self._notify("success", "Expenses exported successfully")
        return text

    def write_csv_export(self, directory: Union[str, Path], today: Optional[date] = None) -> Path:
        """Writes the stored-order CSV to directory/expenses_<date>.csv."""
        path = expense_queries.write_csv_export(self._expenses, directory, today)
        self._notify("success", "Expenses exported successfully")
        return path

    # --- Monthly salary ---

    def _load_salary(self) -> float:
        blob = self.backend.read(SALARY_STORAGE_KEY)
        if blob is None:
            return 0.0
        try:
            value = float(json.loads(blob))
        except (ValueError, TypeError) as e:
            logger.warning(f"Stored salary is malformed, using 0: {e}")
            return 0.0
        return value if value >= 0 else 0.0

    @property
    def salary(self) -> float:
        return self._salary

    def set_salary(self, amount: float) -> float:
        if not math.isfinite(amount) or amount < 0:
            raise ValueError("Salary must be a finite, non-negative number.")
        self._salary = float(amount)
        try:
            self.backend.write(SALARY_STORAGE_KEY, json.dumps(self._salary))
        except PersistenceError as e:
            logger.error(f"Failed to save salary: {e}")
            self._notify("error", "Failed to save salary")
        return self._salary

    def remaining_amount(self) -> float:
        """Salary left after all recorded expenses."""
        return self.salary - self.summary().total
