"""Pure query and aggregation functions over lists of expenses.

Nothing in here mutates its inputs or touches storage; every function takes
the records it works on and returns new values. The store exposes thin
wrappers around these for the common cases.
"""
import calendar
import logging
import math
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from models.expense import DateRange, Expense, ExpenseCategory, ExpenseSummary

logger = logging.getLogger(__name__)

CSV_HEADERS = ['Date', 'Category', 'Amount', 'Description']
DEFAULT_PAGE_SIZE = 10

# --- Filtering ---

def filter_by_range(
    records: Iterable[Expense],
    date_range: Optional[DateRange] = None,
    category: Optional[ExpenseCategory] = None,
) -> List[Expense]:
    """Records inside the inclusive date range AND of the given category. Either filter may be omitted."""
    result = []
    for expense in records:
        if date_range is not None and not (date_range.start_date <= expense.date <= date_range.end_date):
            continue
        if category is not None and expense.category != category:
            continue
        result.append(expense)
    return result

def last_n_days(records: Iterable[Expense], n: int, today: Optional[date] = None) -> List[Expense]:
    """Records dated within [today - n days, today]."""
    today = today or date.today()
    window = DateRange(start_date=today - timedelta(days=n), end_date=today)
    return filter_by_range(records, window)

def by_month(records: Iterable[Expense], month: int, year: int) -> List[Expense]:
    """Records in the given calendar month (1-12) of the given year."""
    return [e for e in records if e.date.month == month and e.date.year == year]

def search(records: Iterable[Expense], term: str) -> List[Expense]:
    """Case-insensitive substring match on description or category name."""
    needle = term.strip().lower()
    if not needle:
        return list(records)
    return [
        e for e in records
        if needle in e.description.lower() or needle in e.category.value.lower()
    ]

def most_recent(records: Iterable[Expense], limit: int = 5) -> List[Expense]:
    return sorted(records, key=lambda e: e.date, reverse=True)[:limit]

# --- Aggregation ---

def summarize(records: Iterable[Expense]) -> ExpenseSummary:
    """Total plus per-category totals; every category is present, zero when unused."""
    summary = ExpenseSummary()
    for expense in records:
        summary.category_totals[expense.category] += expense.amount
        summary.total += expense.amount
    return summary

def top_category(summary: ExpenseSummary) -> Tuple[ExpenseCategory, float]:
    """
    The category with the largest total. A later category only replaces the
    current leader when strictly greater, so ties go to the first declared.
    With nothing spent the answer is (Other, 0).
    """
    top, top_amount = ExpenseCategory.OTHER, 0.0
    for category in ExpenseCategory:
        amount = summary.category_totals.get(category, 0.0)
        if amount > top_amount:
            top, top_amount = category, amount
    return top, top_amount

def category_breakdown(summary: ExpenseSummary) -> List[Tuple[ExpenseCategory, float, float]]:
    """(category, amount, share of total) for every category with spending, for charts."""
    rows = []
    for category in ExpenseCategory:
        amount = summary.category_totals.get(category, 0.0)
        if amount > 0:
            share = amount / summary.total if summary.total else 0.0
            rows.append((category, amount, share))
    return rows

def daily_totals(records: Iterable[Expense]) -> List[Tuple[date, float]]:
    """(date, summed amount) per day with spending, oldest day first. Feeds the trend chart."""
    totals: Dict[date, float] = {}
    for expense in records:
        totals[expense.date] = totals.get(expense.date, 0.0) + expense.amount
    return sorted(totals.items())

# --- Calendar helpers ---

def month_range(year: int, month: int) -> DateRange:
    last_day = calendar.monthrange(year, month)[1]
    return DateRange(start_date=date(year, month, 1), end_date=date(year, month, last_day))

def recent_months(count: int = 6, today: Optional[date] = None) -> List[Tuple[int, int, str]]:
    """(year, month, label) for the current month and the ones before it, newest first."""
    today = today or date.today()
    months = []
    year, month = today.year, today.month
    for _ in range(count):
        months.append((year, month, f"{date(year, month, 1):%B %Y}"))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return months

# --- Paging ---

def page_count(total: int, per_page: int = DEFAULT_PAGE_SIZE) -> int:
    return math.ceil(total / per_page) if total > 0 else 0

def paginate(records: Sequence[Expense], page: int, per_page: int = DEFAULT_PAGE_SIZE) -> List[Expense]:
    """1-based page of records. Pages outside the range are empty."""
    if page < 1 or per_page < 1:
        return []
    start = (page - 1) * per_page
    return list(records[start:start + per_page])

# --- Formatting and export ---

def format_currency(amount: float) -> str:
    """US dollar display: $1,234.56 and -$5.00."""
    sign = '-' if amount < 0 else ''
    return f"{sign}${abs(amount):,.2f}"

def _format_amount(amount: float) -> str:
    """
    Shortest round-tripping form the way a browser prints numbers: 35, 25.5,
    0.000001. Exponent notation only below 1e-6 or from 1e21 up (1e-7, 1e+21).
    """
    value = float(amount)
    magnitude = abs(value)
    if value == 0:
        return "0"
    text = repr(value)
    if 1e-6 <= magnitude < 1e21:
        return format(Decimal(text).normalize(), "f")
    mantissa, _, exponent = text.partition("e")
    power = int(exponent)
    return f"{mantissa}e{'+' if power >= 0 else '-'}{abs(power)}"

def export_csv(records: Iterable[Expense]) -> str:
    """
    CSV text with a Date,Category,Amount,Description header and one row per
    record in the order given. Only the description is quoted, with embedded
    double quotes doubled.
    """
    rows = [','.join(CSV_HEADERS)]
    for expense in records:
        description = expense.description.replace('"', '""')
        rows.append(','.join([
            expense.date.isoformat(),
            expense.category.value,
            _format_amount(expense.amount),
            f'"{description}"',
        ]))
    return '\n'.join(rows)

def export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"expenses_{today.isoformat()}.csv"

def write_csv_export(
    records: Iterable[Expense],
    directory: Union[str, Path],
    today: Optional[date] = None,
) -> Path:
    """Writes the CSV export into directory using the dated filename and returns its path."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(today)
    content = export_csv(records)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(content)
    logger.info(f"Exported {len(content.splitlines()) - 1} expenses to {path}")
    return path
