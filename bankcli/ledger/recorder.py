"""
Transaction Recorder

CONTRACT: the caller mutates the balance FIRST, then records.
The recorder snapshots `account.balance` into `balance_after`; it never
applies the delta itself. Every mutating operation follows the same
mutate-then-record order so `balance_after` always reflects the new state.
"""

from datetime import datetime
from typing import Callable, Optional

from bankcli.models.account import Account, Transaction, TransactionType, utc_now


class TransactionRecorder:
    """Appends immutable transactions to account histories."""

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock

    def record(
        self,
        account: Account,
        transaction_type: TransactionType,
        amount: float,
        description: str,
        timestamp: Optional[datetime] = None,
    ) -> Transaction:
        """
        Append a transaction reflecting the account's current balance.

        Args:
            account: Account whose balance has already been updated
            transaction_type: Kind of event
            amount: Amount as parsed from input
            description: Human-readable note
            timestamp: Event time; the recorder's clock is used when omitted

        Returns:
            The appended transaction
        """
        transaction = Transaction(
            type=transaction_type,
            amount=amount,
            timestamp=timestamp or self._clock(),
            balance_after=account.balance,
            description=description,
        )
        account.transactions.append(transaction)
        return transaction
