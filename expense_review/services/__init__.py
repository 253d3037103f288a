"""Services package."""

from expense_review.services.storage import (
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerFormatError,
    LedgerStorageInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
    "LedgerFormatError",
    "LedgerStorageInterface",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
