"""Audit logging package."""

from expense_review.audit.logger import AuditLogger

__all__ = ["AuditLogger"]
