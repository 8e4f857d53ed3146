"""
Storage Services Package

Provides the abstract ledger storage interface, the JSON file backend and
the single-writer save scheduler that sits in front of it.
"""

from bankcli.services.storage.interface import (
    CorruptLedgerError,
    LedgerStorageInterface,
    StorageError,
)
from bankcli.services.storage.json_file import JsonFileLedgerStorage
from bankcli.services.storage.writer import LedgerWriter

__all__ = [
    # Interfaces
    "LedgerStorageInterface",
    # Exceptions
    "CorruptLedgerError",
    "StorageError",
    # Implementations
    "JsonFileLedgerStorage",
    "LedgerWriter",
]
