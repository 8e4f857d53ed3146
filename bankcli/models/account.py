"""
Core Data Models for BankCLI

These models define the schemas for all ledger data.
They are designed to:
1. Mirror the on-disk JSON layout (camelCase keys) so existing files load
2. Keep the transaction history append-only and each entry immutable
3. Carry balances as IEEE-754 floats, NaN included

DESIGN DECISION: Balances are floats, not Decimals.
Post-creation amounts are parsed like a float and are allowed to become NaN;
that value has to survive arithmetic, totals and a save/load round trip.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS
# =============================================================================

class TransactionType(str, Enum):
    """Kinds of balance-affecting events."""
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    TRANSFER_OUT = "TRANSFER_OUT"
    TRANSFER_IN = "TRANSFER_IN"


# =============================================================================
# STORED MODELS
# =============================================================================

class Transaction(BaseModel):
    """
    One balance-affecting event on an account.

    Once appended to an account's history a transaction is never modified.
    `balance_after` is the account balance immediately after this entry,
    so replaying the history from zero reconstructs every balance.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        ser_json_inf_nan="constants",
        frozen=True,
    )

    type: TransactionType = Field(
        ...,
        description="Kind of event"
    )
    amount: float = Field(
        ...,
        description="Parsed amount as entered (sign is not normalized)"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the event happened"
    )
    balance_after: float = Field(
        ...,
        description="Account balance right after this entry"
    )
    description: str = Field(
        default="",
        description="Human-readable note, e.g. 'Initial deposit' or 'To ACC-1234'"
    )

    @field_validator('amount', 'balance_after', mode='before')
    @classmethod
    def null_to_nan(cls, v):
        """NaN and Infinity were historically written as null."""
        return float("nan") if v is None else v


class Account(BaseModel):
    """
    A named, balance-holding account.

    `holder_name` is empty only for accounts created implicitly as the
    destination of a transfer.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        ser_json_inf_nan="constants",
    )

    id: str = Field(
        ...,
        description="Account id, ACC-#### for generated ids"
    )
    holder_name: str = Field(
        default="",
        description="Account holder name"
    )
    balance: float = Field(
        default=0.0,
        description="Current balance"
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        description="When the account was opened"
    )
    transactions: list[Transaction] = Field(
        default_factory=list,
        description="Append-only history, oldest first"
    )

    @field_validator('balance', mode='before')
    @classmethod
    def null_to_nan(cls, v):
        """NaN and Infinity were historically written as null."""
        return float("nan") if v is None else v

    @property
    def last_transaction(self) -> Optional[Transaction]:
        """Most recent transaction, if any."""
        return self.transactions[-1] if self.transactions else None


class Ledger(BaseModel):
    """The whole persisted ledger: every account, in insertion order."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        ser_json_inf_nan="constants",
    )

    accounts: list[Account] = Field(default_factory=list)


# =============================================================================
# READ PROJECTIONS
# =============================================================================

class AccountView(BaseModel):
    """Read-only projection of one account for display."""

    id: str
    holder_name: str
    balance: float
    opened: date = Field(
        ...,
        description="Creation date (date part only)"
    )

    @classmethod
    def from_account(cls, account: Account) -> "AccountView":
        return cls(
            id=account.id,
            holder_name=account.holder_name,
            balance=account.balance,
            opened=account.created_at.date(),
        )


class AccountListing(BaseModel):
    """All accounts plus the arithmetic sum of their balances."""

    accounts: list[Account] = Field(default_factory=list)
    total_balance: float = 0.0

    @property
    def count(self) -> int:
        return len(self.accounts)

    @property
    def is_empty(self) -> bool:
        return not self.accounts


class TransactionHistory(BaseModel):
    """Transaction history of one account, oldest first."""

    account_id: str
    transactions: list[Transaction] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.transactions


class TransferReceipt(BaseModel):
    """Outcome of a transfer."""

    source: Account
    destination: Account
    amount: float
    destination_created: bool = Field(
        default=False,
        description="True when the destination did not exist and was opened by the transfer"
    )
