"""Expense ledger package."""

from expense_review.ledger.repository import ExpenseRepository

__all__ = ["ExpenseRepository"]
