"""Custom exception classes for the expense tracker."""


class ExpenseTrackerError(Exception):
    """Base exception for the expense tracker."""
    pass


class ExpenseNotFoundError(ExpenseTrackerError, LookupError):
    """No stored expense has the requested id."""

    def __init__(self, expense_id: str):
        super().__init__(f"Expense not found: {expense_id}")
        self.expense_id = expense_id


class PersistenceError(ExpenseTrackerError):
    """The key-value backend could not store a blob."""
    pass
