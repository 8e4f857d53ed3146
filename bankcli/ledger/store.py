"""
In-Memory Ledger Store

Owns the collection of accounts for the lifetime of the process.

The store does not validate: callers check id and holder-name uniqueness
before calling create(). Lookups are exact matches; trimming is the
engine's job.
"""

import random
from typing import Iterator, Optional

from bankcli.models.account import Account, Ledger


ID_PREFIX = "ACC-"


class LedgerStore:
    """
    Accounts keyed by id, kept in insertion order.

    Backed by a dict, so create/find/delete are O(1) and iteration order
    is the order accounts were added.
    """

    def __init__(
        self,
        accounts: Optional[list[Account]] = None,
        rng: Optional[random.Random] = None,
    ):
        self._accounts: dict[str, Account] = {}
        self._rng = rng or random.Random()
        for account in accounts or []:
            self.create(account)

    @classmethod
    def from_ledger(cls, ledger: Ledger, rng: Optional[random.Random] = None) -> "LedgerStore":
        return cls(ledger.accounts, rng=rng)

    def to_ledger(self) -> Ledger:
        """Deep copy of the current state, safe to hand to a background writer."""
        return Ledger(accounts=[account.model_copy(deep=True) for account in self._accounts.values()])

    def create(self, account: Account) -> None:
        """Insert an account. Uniqueness is the caller's responsibility."""
        self._accounts[account.id] = account

    def find_by_id(self, account_id: str) -> Optional[Account]:
        return self._accounts.get(account_id)

    def delete(self, account_id: str) -> bool:
        """Remove an account. Returns False if it was not there."""
        return self._accounts.pop(account_id, None) is not None

    def holder_names(self) -> list[str]:
        return [account.holder_name for account in self._accounts.values()]

    def generate_id(self) -> str:
        """
        Draw ACC-#### ids until one is not in use.

        There are only 9000 possible ids, so collisions are expected once the
        ledger grows; the loop ends as long as at least one id is free.
        """
        while True:
            candidate = f"{ID_PREFIX}{self._rng.randint(1000, 9999)}"
            if candidate not in self._accounts:
                return candidate

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._accounts

    # Defined last: inside the class body this name shadows the builtin.
    def list(self) -> Iterator[Account]:
        """Lazily yield every account in insertion order."""
        yield from tuple(self._accounts.values())
