from datetime import date

import pytest
from pydantic import ValidationError

from models.expense import Expense, ExpenseCategory, ExpenseDraft, ExpenseSummary


def _draft(**overrides):
    data = {"date": "2025-03-10", "category": "Food", "amount": 12.5, "description": "Groceries"}
    data.update(overrides)
    return ExpenseDraft(**data)


def test_valid_draft_parses_strings():
    draft = _draft()
    assert draft.date == date(2025, 3, 10)
    assert draft.category is ExpenseCategory.FOOD
    assert draft.amount == 12.5


@pytest.mark.parametrize("amount", [0, -4.2, float("inf")])
def test_non_positive_or_infinite_amount_rejected(amount):
    with pytest.raises(ValidationError):
        _draft(amount=amount)


def test_short_description_rejected():
    with pytest.raises(ValidationError):
        _draft(description="ab")


def test_unknown_category_rejected():
    with pytest.raises(ValidationError):
        _draft(category="Groceries")


def test_invalid_calendar_date_rejected():
    with pytest.raises(ValidationError):
        _draft(date="2025-02-30")


def test_expense_is_immutable():
    expense = Expense.from_draft(_draft(), "abc")
    with pytest.raises(ValidationError):
        expense.amount = 99.0


def test_to_record_uses_persisted_field_layout():
    expense = Expense.from_draft(_draft(category="Bills"), "abc")
    assert expense.to_record() == {
        "id": "abc",
        "date": "2025-03-10",
        "category": "Bills",
        "amount": 12.5,
        "description": "Groceries",
    }


def test_category_declaration_order():
    assert [c.value for c in ExpenseCategory] == [
        "Food", "Transport", "Bills", "Shopping", "Entertainment", "Other",
    ]


def test_empty_summary_has_every_category():
    summary = ExpenseSummary()
    assert summary.total == 0
    assert summary.category_totals == {c: 0.0 for c in ExpenseCategory}
