"""
In-Memory Storage Implementation

A dict of key -> JSON text, standing in for a browser-style key-value
store. Used by tests and by the "memory" backend setting.

Failure switches let tests drive the read/write error paths.
"""

from typing import Optional

from expense_review.services.storage.interface import (
    LedgerStorageInterface,
    StorageReadError,
    StorageWriteError,
)


class InMemoryLedgerStorage(LedgerStorageInterface):
    """Ledger storage backed by a plain dict."""
    
    def __init__(
        self,
        key: str = "expenses",
        blobs: Optional[dict[str, str]] = None,
    ):
        """
        Args:
            key: Key the ledger is stored under
            blobs: Existing store contents to share or pre-seed
        """
        super().__init__(key=key)
        self.blobs: dict[str, str] = blobs if blobs is not None else {}
        self.fail_reads = False
        self.fail_writes = False
        self.write_count = 0
    
    def _read_blob(self) -> Optional[str]:
        if self.fail_reads:
            raise StorageReadError(f"Store unavailable while reading {self.key!r}")
        return self.blobs.get(self.key)
    
    def _write_blob(self, data: str) -> None:
        if self.fail_writes:
            raise StorageWriteError(f"Quota exceeded while writing {self.key!r}")
        self.blobs[self.key] = data
        self.write_count += 1
