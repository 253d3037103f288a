"""Shared fixtures for the Weekly Expense Review tests."""

from datetime import date

import pytest

from expense_review.audit import AuditLogger
from expense_review.ledger import ExpenseRepository
from expense_review.orchestrator import ExpenseReviewSession
from expense_review.services.storage import InMemoryLedgerStorage
from expense_review.weeks import WeekNavigator


# Thursday; its week runs Mon 2024-03-11 .. Sun 2024-03-17
SCENARIO_ANCHOR = date(2024, 3, 14)


@pytest.fixture
def storage():
    return InMemoryLedgerStorage()


@pytest.fixture
def audit_logger():
    return AuditLogger(history_size=100)


@pytest.fixture
def repository(storage, audit_logger):
    repo = ExpenseRepository(storage=storage, audit_logger=audit_logger)
    repo.load()
    return repo


@pytest.fixture
def session(repository, audit_logger):
    return ExpenseReviewSession(
        repository=repository,
        navigator=WeekNavigator(SCENARIO_ANCHOR),
        audit_logger=audit_logger,
    )
