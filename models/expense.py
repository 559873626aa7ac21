"""Pydantic models for Expense data"""
from enum import Enum
from pydantic import BaseModel, Field
from datetime import date
from typing import Dict

class ExpenseCategory(str, Enum):
    """
    Fixed set of expense categories. Declaration order matters: it is the
    key order of summaries and the tie-break order of the top category.
    """
    FOOD = 'Food'
    TRANSPORT = 'Transport'
    BILLS = 'Bills'
    SHOPPING = 'Shopping'
    ENTERTAINMENT = 'Entertainment'
    OTHER = 'Other'

class ExpenseDraft(BaseModel):
    """
    An expense as entered by the user, before the store assigns an id.
    Invalid input raises pydantic.ValidationError on construction.
    """
    date: date
    category: ExpenseCategory
    amount: float = Field(..., gt=0, allow_inf_nan=False)
    description: str = Field(..., min_length=3)

    class Config:
        populate_by_name = True
        from_attributes = True
        frozen = True

class Expense(ExpenseDraft):
    """
    Represents a single stored expense transaction.
    """
    id: str = Field(..., min_length=1)

    @classmethod
    def from_draft(cls, draft: ExpenseDraft, expense_id: str) -> "Expense":
        return cls(id=expense_id, **draft.model_dump())

    def to_record(self) -> Dict[str, object]:
        """Serializable dict in the persisted field order."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "category": self.category.value,
            "amount": self.amount,
            "description": self.description,
        }

class DateRange(BaseModel):
    """Inclusive date window used by range filters."""
    start_date: date
    end_date: date

class ExpenseSummary(BaseModel):
    """Total and per-category totals over a set of expenses."""
    total: float = 0.0
    category_totals: Dict[ExpenseCategory, float] = Field(
        default_factory=lambda: {category: 0.0 for category in ExpenseCategory}
    )
