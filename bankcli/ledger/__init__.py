"""Ledger core: store, transaction recorder, engine and error types."""

from bankcli.ledger.engine import LedgerEngine
from bankcli.ledger.errors import (
    AccountNotFoundError,
    LedgerError,
    LedgerValidationError,
)
from bankcli.ledger.recorder import TransactionRecorder
from bankcli.ledger.store import LedgerStore

__all__ = [
    "AccountNotFoundError",
    "LedgerEngine",
    "LedgerError",
    "LedgerStore",
    "LedgerValidationError",
    "TransactionRecorder",
]
