"""
Expense Repository

The ledger: every expense record, newest-inserted first. This is the only
owner of the record list and the only place that mutates it.

DESIGN DECISION: Order is insertion order, not date order. An expense
added today for last Tuesday still shows up first.

After every mutation the whole ledger is handed to the storage port.
A failed save is logged and ignored; the in-memory ledger remains the
authoritative state for the rest of the session.
"""

from typing import Iterator, Optional

from expense_review.audit import AuditLogger
from expense_review.models.expense import ExpenseRecord
from expense_review.services.storage import LedgerStorageInterface


class ExpenseRepository:
    """Ordered, persisted collection of expense records."""
    
    def __init__(
        self,
        storage: LedgerStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._records: list[ExpenseRecord] = []
    
    def load(self) -> int:
        """
        Replace the in-memory ledger with what storage holds.
        
        An absent, unreadable or malformed ledger loads as empty.
        
        Returns:
            Number of records loaded
        """
        try:
            loaded = self._storage.load()
        except Exception as e:
            loaded = None
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={"operation": "load", "key": self._storage.key},
                )
        
        if loaded is None:
            self._records = []
            if self._storage.last_error and self._audit_logger:
                self._audit_logger.log_ledger_load_failed(
                    key=self._storage.key,
                    error_message=self._storage.last_error,
                )
        else:
            self._records = list(loaded)
        
        if self._audit_logger:
            self._audit_logger.log_ledger_loaded(
                key=self._storage.key,
                record_count=len(self._records),
            )
        return len(self._records)
    
    def add(self, record: ExpenseRecord) -> None:
        """Prepend a record and persist."""
        self._records.insert(0, record)
        self._persist()
    
    def remove(self, expense_id: str) -> bool:
        """
        Remove the record with this id and persist.
        
        An unknown id is not an error; the ledger is left as it was.
        
        Returns:
            True if a record was removed
        """
        removed = False
        for index, record in enumerate(self._records):
            if record.id == expense_id:
                del self._records[index]
                removed = True
                break
        
        self._persist()
        return removed
    
    def get(self, expense_id: str) -> Optional[ExpenseRecord]:
        return next((r for r in self._records if r.id == expense_id), None)
    
    def all(self) -> tuple[ExpenseRecord, ...]:
        """The full ledger, newest-inserted first."""
        return tuple(self._records)
    
    def __len__(self) -> int:
        return len(self._records)
    
    def __iter__(self) -> Iterator[ExpenseRecord]:
        return iter(tuple(self._records))
    
    def _persist(self) -> bool:
        try:
            saved = self._storage.save(list(self._records))
        except Exception as e:
            # The port already absorbs StorageError; this covers
            # anything a custom store lets escape.
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={"operation": "save", "key": self._storage.key},
                )
            return False
        
        if self._audit_logger:
            if saved:
                self._audit_logger.log_ledger_saved(
                    key=self._storage.key,
                    record_count=len(self._records),
                )
            else:
                self._audit_logger.log_ledger_save_failed(
                    key=self._storage.key,
                    error_message=self._storage.last_error or "unknown error",
                )
        return saved
