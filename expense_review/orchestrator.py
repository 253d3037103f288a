"""
Main Orchestrator for Weekly Expense Review

This module ties together all the components and defines the session
a presentation layer talks to:

Consumed inputs:  add_expense, delete_expense, set_anchor, shift_anchor
Produced outputs: window, window_label, weekly_expenses, category_totals,
                  grand_total, formatted_total, summary

DESIGN DECISION: The session is synchronous and single-threaded. Each call
runs to completion. Derived values are recomputed from the ledger and the
anchor on every read; nothing is cached, so there is nothing to invalidate.

No call here raises for bad input or storage trouble. Refused adds return
None, unknown deletes return False, storage failures end up in the audit
log, and the session carries on with its in-memory ledger.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Optional, Union

from expense_review.audit import AuditLogger
from expense_review.config import Settings, get_settings
from expense_review.ledger import ExpenseRepository
from expense_review.models.expense import (
    CategoryTotals,
    ExpenseDraft,
    ExpenseRecord,
    WeeklySummary,
)
from expense_review.queries import aggregate, filter_week, format_currency, grand_total
from expense_review.services.storage import (
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
)
from expense_review.validation import ExpenseValidationError, ExpenseValidator
from expense_review.weeks.calendar import DateLike, to_iso_date
from expense_review.weeks.window import WeekNavigator, WeekWindow


class ExpenseReviewSession:
    """
    One user's weekly expense review.
    
    Flow:
    1. Load → ledger read once from storage
    2. Add / delete → validated, applied to the ledger, persisted
    3. Navigate → anchor moved, window re-derived
    4. Read → filtered list and totals recomputed for the current window
    """
    
    def __init__(
        self,
        repository: ExpenseRepository,
        validator: Optional[ExpenseValidator] = None,
        navigator: Optional[WeekNavigator] = None,
        audit_logger: Optional[AuditLogger] = None,
        currency_symbol: str = "$",
    ):
        self._repository = repository
        self._validator = validator or ExpenseValidator()
        self._navigator = navigator or WeekNavigator()
        self._audit_logger = audit_logger
        self._currency_symbol = currency_symbol
        self.last_validation = None
    
    # =========================================================================
    # Consumed inputs
    # =========================================================================
    
    def add_expense(
        self,
        description: str,
        amount: Any,
        category: Any,
        expense_date: Union[str, date],
    ) -> Optional[ExpenseRecord]:
        """
        Validate raw form input and add it to the ledger.
        
        Args:
            description: Free text; trimmed
            amount: Amount text or number
            category: One of the ExpenseCategory values
            expense_date: YYYY-MM-DD text (a date is formatted first)
        
        Returns:
            The new record, or None if the input was refused. A refused
            add changes nothing.
        """
        if isinstance(expense_date, date):
            expense_date = to_iso_date(expense_date)
        
        draft = ExpenseDraft(
            description=description,
            amount=amount,
            category=category,
            date=expense_date,
        )
        return self.add_draft(draft)
    
    def add_draft(self, draft: ExpenseDraft) -> Optional[ExpenseRecord]:
        """Add from an ExpenseDraft; see add_expense."""
        try:
            record = self._validator.build(draft)
        except ExpenseValidationError as e:
            self.last_validation = e.result
            if self._audit_logger:
                self._audit_logger.log_expense_rejected(
                    issues=[issue.model_dump() for issue in e.result.issues],
                )
            return None
        
        self.last_validation = None
        self._repository.add(record)
        
        if self._audit_logger:
            self._audit_logger.log_expense_added(
                expense_id=record.id,
                description=record.description,
                amount=str(record.amount),
                category=record.category.value,
                expense_date=to_iso_date(record.date),
            )
        return record
    
    def delete_expense(self, expense_id: str) -> bool:
        """Delete by id. Unknown ids are ignored; returns whether one was removed."""
        removed = self._repository.remove(expense_id)
        if self._audit_logger:
            if removed:
                self._audit_logger.log_expense_deleted(expense_id=expense_id)
            else:
                self._audit_logger.log_expense_delete_missed(expense_id=expense_id)
        return removed
    
    def set_anchor(self, value: Union[DateLike, str]) -> bool:
        """Jump to the week containing ``value``. Bad date text is ignored."""
        changed = self._navigator.jump_to(value)
        if changed:
            self._log_week_changed()
        return changed
    
    def shift_anchor(self, days: int) -> WeekWindow:
        """Move one week forward (+7) or back (-7)."""
        window = self._navigator.shift(days)
        self._log_week_changed()
        return window
    
    def next_week(self) -> WeekWindow:
        return self.shift_anchor(7)
    
    def previous_week(self) -> WeekWindow:
        return self.shift_anchor(-7)
    
    def blank_draft(self, today: Optional[date] = None) -> ExpenseDraft:
        """Fresh add-form state (to reset the form after a successful add)."""
        return ExpenseDraft.blank(today or date.today())
    
    # =========================================================================
    # Produced outputs
    # =========================================================================
    
    @property
    def anchor(self) -> date:
        return self._navigator.anchor
    
    @property
    def window(self) -> WeekWindow:
        return self._navigator.window
    
    @property
    def window_label(self) -> str:
        return self.window.label()
    
    @property
    def repository(self) -> ExpenseRepository:
        return self._repository
    
    def all_expenses(self) -> tuple[ExpenseRecord, ...]:
        return self._repository.all()
    
    def weekly_expenses(self) -> list[ExpenseRecord]:
        """Records in the current window, in ledger order."""
        return filter_week(self._repository.all(), self.window)
    
    def category_totals(self) -> CategoryTotals:
        return aggregate(self.weekly_expenses())
    
    def grand_total(self) -> Decimal:
        return grand_total(self.weekly_expenses())
    
    def formatted_total(self) -> str:
        return format_currency(self.grand_total(), self._currency_symbol)
    
    def summary(self) -> WeeklySummary:
        """Everything for the current week, computed from one snapshot."""
        window = self.window
        expenses = filter_week(self._repository.all(), window)
        totals = aggregate(expenses)
        return WeeklySummary(
            window=window,
            window_label=window.label(),
            expenses=expenses,
            totals=totals,
            formatted_total=format_currency(totals.grand_total, self._currency_symbol),
        )
    
    def _log_week_changed(self) -> None:
        if not self._audit_logger:
            return
        window = self.window
        self._audit_logger.log_week_changed(
            anchor=to_iso_date(self.anchor),
            start=to_iso_date(window.start),
            end=to_iso_date(window.end),
        )


def create_storage(settings: Optional[Settings] = None) -> LedgerStorageInterface:
    """Build the storage backend named in settings."""
    settings = settings or get_settings()
    storage_settings = settings.storage
    
    if storage_settings.backend == "memory":
        return InMemoryLedgerStorage(key=storage_settings.ledger_key)
    
    return JsonFileLedgerStorage(
        data_dir=storage_settings.data_dir,
        key=storage_settings.ledger_key,
        write_attempts=storage_settings.write_attempts,
    )


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[LedgerStorageInterface] = None,
    anchor: Optional[DateLike] = None,
) -> ExpenseReviewSession:
    """
    Create all application components and return a loaded session.
    
    This is the main entry point for initializing the app.
    
    Args:
        settings: Settings to use instead of the cached environment settings
        storage: Storage to use instead of the configured backend
        anchor: Initial anchor date (defaults to today)
    """
    settings = settings or get_settings()
    app_settings = settings.app
    
    audit_logger = AuditLogger(history_size=app_settings.audit_history_size)
    repository = ExpenseRepository(
        storage=storage or create_storage(settings),
        audit_logger=audit_logger,
    )
    repository.load()
    
    return ExpenseReviewSession(
        repository=repository,
        validator=ExpenseValidator(),
        navigator=WeekNavigator(anchor),
        audit_logger=audit_logger,
        currency_symbol=app_settings.currency_symbol,
    )
