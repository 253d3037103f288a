"""
Weekly Query Engine

DESIGN DECISION: Weekly figures are DETERMINISTIC recomputations.
Nothing here keeps state or caches: given the ledger and a window, the
filtered list and the totals are always recomputed from scratch.

Two steps:
1. filter_week - pick the records dated inside the window
2. aggregate   - sum them per category and overall

Stale data policy: a record whose category is not one of the fixed
categories is counted under Other. A record whose amount is not a finite
number counts as zero. Neither case raises.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Union

from expense_review.models.expense import (
    ZERO,
    CategoryTotals,
    ExpenseCategory,
    ExpenseRecord,
)
from expense_review.weeks.calendar import date_only_compare
from expense_review.weeks.window import WeekWindow


def filter_week(
    records: Iterable[ExpenseRecord],
    window: WeekWindow,
) -> list[ExpenseRecord]:
    """
    Records dated within the window, in ledger order.
    
    Both boundaries are inclusive: Monday and Sunday records are in.
    """
    return [
        record for record in records
        if date_only_compare(record.date, window.start) >= 0
        and date_only_compare(record.date, window.end) <= 0
    ]


def _safe_amount(value: Any) -> Decimal:
    """Amount as a finite Decimal, or zero."""
    if isinstance(value, bool):
        return ZERO
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return ZERO
    if not amount.is_finite():
        return ZERO
    return amount


def grand_total(records: Iterable[ExpenseRecord]) -> Decimal:
    """Sum of amounts; non-finite amounts count as zero."""
    total = ZERO
    for record in records:
        total += _safe_amount(record.amount)
    return total


def aggregate(records: Iterable[ExpenseRecord]) -> CategoryTotals:
    """
    Per-category sums over the given records.
    
    All categories are present, in declaration order, starting at zero.
    """
    totals = {category: ZERO for category in ExpenseCategory.ordered()}
    overall = ZERO
    
    for record in records:
        amount = _safe_amount(record.amount)
        totals[ExpenseCategory.fallback(record.category)] += amount
        overall += amount
    
    return CategoryTotals(totals=totals, grand_total=overall)


def format_currency(amount: Union[Decimal, float, int], symbol: str = "$") -> str:
    """Two decimal places with the currency symbol, e.g. '$4.50'."""
    value = _safe_amount(amount)
    return f"{symbol}{value:.2f}"
