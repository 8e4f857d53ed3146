"""Services package."""

from bankcli.services.storage import (
    CorruptLedgerError,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
    LedgerWriter,
    StorageError,
)

__all__ = [
    # Storage services
    "CorruptLedgerError",
    "JsonFileLedgerStorage",
    "LedgerStorageInterface",
    "LedgerWriter",
    "StorageError",
]
