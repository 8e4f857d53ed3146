"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for ledger persistence.
This allows us to:
1. Swap the JSON file for another backend later
2. Use in-memory storage for testing
3. Keep the ledger engine decoupled from how bytes reach disk

The contract is whole-ledger load and save. There is no partial update,
no transaction log and no atomicity guarantee beyond what a backend
chooses to provide.
"""

from abc import ABC, abstractmethod
from typing import Optional

from bankcli.models.account import Ledger


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger storage operations.

    Any storage implementation must implement these methods.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable location of the stored ledger, for logs."""
        pass

    @abstractmethod
    async def load(self) -> Optional[Ledger]:
        """
        Load the whole ledger.

        Returns:
            The stored ledger, or None if nothing has been stored yet

        Raises:
            CorruptLedgerError: If stored content cannot be understood
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def save(self, ledger: Ledger) -> bool:
        """
        Replace the stored ledger with this one.

        Args:
            ledger: The full ledger to store

        Returns:
            True if saved successfully

        Raises:
            StorageError: If save fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptLedgerError(StorageError):
    """Stored ledger exists but cannot be parsed."""
    pass
