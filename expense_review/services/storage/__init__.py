"""
Storage Services Package

Provides the ledger storage port and its implementations.
Currently implements a JSON file store and an in-memory store.
"""

from expense_review.services.storage.interface import (
    LedgerFormatError,
    LedgerStorageInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
    dump_ledger,
    parse_ledger,
)
from expense_review.services.storage.json_file import JsonFileLedgerStorage
from expense_review.services.storage.memory import InMemoryLedgerStorage

__all__ = [
    # Interface
    "LedgerStorageInterface",
    "dump_ledger",
    "parse_ledger",
    # Exceptions
    "LedgerFormatError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
]
