"""
Abstract Storage Interface

DESIGN DECISION: The ledger lives in a key-value blob store the core does
not own. We define a small port over it so that:
1. The core has no ambient global store
2. In-memory storage can be used for testing
3. The blob store can be swapped (file, browser storage bridge, ...)

The port is two operations: load the ledger, save the ledger. Both absorb
failures and report them through the return value; the session must keep
working when storage does not.

Concrete stores only implement raw blob access (_read_blob/_write_blob)
and may raise StorageError from there.
"""

import json
from abc import ABC, abstractmethod
from typing import Optional

import structlog
from pydantic import ValidationError

from expense_review.models.expense import ExpenseRecord


logger = structlog.get_logger(__name__)


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """The backing store could not be read."""
    pass


class StorageWriteError(StorageError):
    """The backing store could not be written."""
    pass


class LedgerFormatError(StorageError):
    """Stored ledger is not a JSON array."""
    pass


# =============================================================================
# LEDGER CODEC
# =============================================================================

def dump_ledger(records: list[ExpenseRecord]) -> str:
    """Serialize the ledger to its persisted form: a UTF-8 JSON array."""
    return json.dumps(
        [record.to_storage_dict() for record in records],
        ensure_ascii=False,
    )


def parse_ledger(raw: str) -> list[ExpenseRecord]:
    """
    Parse persisted ledger text.
    
    Elements that are not valid expense records are skipped (and logged);
    order of the remaining records is preserved.
    
    Raises:
        LedgerFormatError: If the text is not JSON or not an array
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise LedgerFormatError(f"Stored ledger is not valid JSON: {e}")
    
    if not isinstance(data, list):
        raise LedgerFormatError(
            f"Stored ledger must be a JSON array, got {type(data).__name__}"
        )
    
    records = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning("ledger_record_skipped", index=index, reason="not an object")
            continue
        try:
            records.append(ExpenseRecord.model_validate(item))
        except ValidationError as e:
            logger.warning(
                "ledger_record_skipped",
                index=index,
                reason=str(e),
                record_id=item.get("id"),
            )
    return records


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger storage.
    
    Any store (JSON file, in-memory, ...) must implement the two blob
    methods; load/save are shared.
    """
    
    def __init__(self, key: str = "expenses"):
        self._key = key
        self.last_error: Optional[str] = None
    
    @property
    def key(self) -> str:
        return self._key
    
    @abstractmethod
    def _read_blob(self) -> Optional[str]:
        """
        Read the raw stored text for this store's key.
        
        Returns:
            The stored text, or None if the key is absent
        
        Raises:
            StorageReadError: If the store cannot be read
        """
        pass
    
    @abstractmethod
    def _write_blob(self, data: str) -> None:
        """
        Replace the stored text for this store's key.
        
        Raises:
            StorageWriteError: If the store cannot be written
        """
        pass
    
    def load(self) -> Optional[list[ExpenseRecord]]:
        """
        Load the ledger.
        
        Returns:
            The stored records in stored order, or None if the key is
            absent, unreadable or not a ledger
        """
        self.last_error = None
        try:
            raw = self._read_blob()
            if raw is None:
                return None
            return parse_ledger(raw)
        except StorageError as e:
            self.last_error = str(e)
            logger.warning("ledger_load_failed", key=self._key, error=str(e))
            return None
    
    def save(self, records: list[ExpenseRecord]) -> bool:
        """
        Persist the full ledger under this store's key.
        
        Returns:
            True if saved, False if the store refused the write
        """
        self.last_error = None
        try:
            self._write_blob(dump_ledger(records))
            return True
        except StorageError as e:
            self.last_error = str(e)
            logger.error("ledger_save_failed", key=self._key, error=str(e))
            return False
