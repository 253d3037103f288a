"""
Data Models Package

This package contains all Pydantic models used in the Weekly Expense Review system.
All data flowing through the system must conform to these schemas.
"""

from expense_review.models.expense import (
    MAX_AMOUNT,
    CategoryTotals,
    ExpenseCategory,
    ExpenseDraft,
    ExpenseRecord,
    ValidationIssue,
    ValidationResult,
    WeeklySummary,
    new_expense_id,
    parse_amount,
    round_to_cents,
)
from expense_review.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "MAX_AMOUNT",
    "CategoryTotals",
    "ExpenseCategory",
    "ExpenseDraft",
    "ExpenseRecord",
    "ValidationIssue",
    "ValidationResult",
    "WeeklySummary",
    "new_expense_id",
    "parse_amount",
    "round_to_cents",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
