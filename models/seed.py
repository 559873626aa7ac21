"""Example expenses used when no persisted state is available"""
from datetime import date
from typing import List
from models.expense import Expense, ExpenseCategory

SEED_EXPENSES: List[Expense] = [
    Expense(id='1', date=date(2025, 3, 28), category=ExpenseCategory.FOOD, amount=25.50, description='Lunch at Italian restaurant'),
    Expense(id='2', date=date(2025, 3, 27), category=ExpenseCategory.TRANSPORT, amount=35.00, description='Uber ride to airport'),
    Expense(id='3', date=date(2025, 3, 25), category=ExpenseCategory.BILLS, amount=120.75, description='Electricity bill'),
    Expense(id='4', date=date(2025, 3, 22), category=ExpenseCategory.SHOPPING, amount=89.99, description='New shoes'),
    Expense(id='5', date=date(2025, 3, 20), category=ExpenseCategory.ENTERTAINMENT, amount=15.00, description='Movie tickets'),
    Expense(id='6', date=date(2025, 3, 18), category=ExpenseCategory.FOOD, amount=12.30, description='Coffee and pastries'),
    Expense(id='7', date=date(2025, 3, 15), category=ExpenseCategory.BILLS, amount=45.00, description='Internet subscription'),
    Expense(id='8', date=date(2025, 3, 10), category=ExpenseCategory.SHOPPING, amount=65.25, description='Books from Amazon'),
    Expense(id='9', date=date(2025, 3, 5), category=ExpenseCategory.OTHER, amount=30.00, description='Charity donation'),
    Expense(id='10', date=date(2025, 3, 1), category=ExpenseCategory.ENTERTAINMENT, amount=50.00, description='Concert tickets'),
]

def seed_expenses() -> List[Expense]:
    """Returns a fresh copy of the seed list (records themselves are immutable)."""
    return list(SEED_EXPENSES)
