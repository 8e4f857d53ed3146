"""
Ledger Engine

This module ties together the validation rules, the in-memory store, the
transaction recorder and the ledger writer, and defines every operation an
operator can perform:

    create_account, deposit, withdraw, transfer, delete_account   (mutating)
    view_account, list_accounts, transaction_history              (read-only)

DESIGN DECISION: Each mutating operation follows the same fixed sequence:

    validate -> mutate balance -> record transaction -> request save

A rejection (LedgerValidationError, AccountNotFoundError) is raised before
the first mutation, so the ledger is never partially updated. Saving is
fire-and-forget: a persistence failure is logged by the writer and never
undoes the in-memory change.

Account ids are trimmed once, here at the engine boundary, for every
operation. Nothing below the engine trims.

Amount validation after creation depends on ValidationPolicy:
- LEGACY: amounts are parsed by numeric prefix and used as-is. Negative
  amounts, zero and NaN all go through. No overdraft check.
- STRICT: amounts must pass the money rules within the configured range.
"""

from datetime import datetime
from typing import Callable, Optional

from bankcli.audit import AuditLogger
from bankcli.config import LedgerSettings, get_settings
from bankcli.ledger.errors import AccountNotFoundError, LedgerValidationError
from bankcli.ledger.recorder import TransactionRecorder
from bankcli.ledger.store import LedgerStore
from bankcli.models.account import (
    Account,
    AccountListing,
    AccountView,
    Ledger,
    TransactionHistory,
    TransactionType,
    TransferReceipt,
    utc_now,
)
from bankcli.models.audit import AuditEventType
from bankcli.models.policy import ValidationPolicy
from bankcli.models.validation import ValidationOutcome
from bankcli.services.storage.writer import LedgerWriter
from bankcli.validation import (
    parse_amount,
    validate_duplicate_holder,
    validate_holder_name,
    validate_money_input,
)


class LedgerEngine:
    """
    Orchestrates every ledger operation.

    The engine owns no global state: the store, writer and audit logger are
    injected at construction and shared by every operation.
    """

    def __init__(
        self,
        store: LedgerStore,
        writer: Optional[LedgerWriter] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[LedgerSettings] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize the engine.

        Args:
            store: In-memory ledger store
            writer: Receives a snapshot after every mutation.
                    If None, nothing is persisted.
            audit_logger: Audit trail. If None, operations are not audited.
            settings: Business rule limits and validation policy
            clock: Source of timestamps
        """
        self._store = store
        self._writer = writer
        self._audit_logger = audit_logger
        self._settings = settings or get_settings().ledger
        self._clock = clock
        self._recorder = TransactionRecorder(clock)

    @property
    def store(self) -> LedgerStore:
        return self._store

    @property
    def policy(self) -> ValidationPolicy:
        return self._settings.validation_policy

    def snapshot(self) -> Ledger:
        """Copy of the whole ledger as it would be persisted."""
        return self._store.to_ledger()

    # -------------------------------------------------------------------------
    # Mutating operations
    # -------------------------------------------------------------------------

    def create_account(self, holder_name: str, deposit_amount: str) -> Account:
        """
        Open a new account with an initial deposit.

        Checks run in order and the first failure is raised:
        holder name rules -> duplicate holder -> initial deposit rules.

        Returns:
            The new account (already stored)

        Raises:
            LedgerValidationError: If any check fails
        """
        self.check_holder_name(holder_name)
        deposit = self._require_for_creation(
            validate_money_input(
                deposit_amount,
                minimum=self._settings.min_initial_deposit,
                maximum=self._settings.max_initial_deposit,
            )
        )

        now = self._clock()
        account = Account(
            id=self._store.generate_id(),
            holder_name=holder_name,
            balance=deposit,
            created_at=now,
        )
        self._recorder.record(
            account, TransactionType.DEPOSIT, deposit, "Initial deposit", timestamp=now
        )
        self._store.create(account)
        self._persist()

        if self._audit_logger:
            self._audit_logger.log_account_created(account.id, deposit)

        return account

    def check_holder_name(self, holder_name: str) -> str:
        """
        Run the holder name gates (rules, then duplicate check) on their own.

        Lets a caller reject a bad name before asking for the deposit.

        Raises:
            LedgerValidationError: If the name is rejected
        """
        self._require_for_creation(
            validate_holder_name(holder_name, self._settings.max_holder_name_length)
        )
        return self._require_for_creation(
            validate_duplicate_holder(holder_name, self._store.holder_names())
        )

    def deposit(self, account_id: str, amount_raw: str) -> Account:
        """
        Add an amount to an account balance.

        Raises:
            AccountNotFoundError: If the account does not exist
            LedgerValidationError: Only under the strict policy
        """
        account = self._lookup(account_id, "deposit")
        amount = self._parse_amount(amount_raw, account.id, "deposit")

        account.balance += amount
        self._recorder.record(account, TransactionType.DEPOSIT, amount, "Deposit")
        self._persist()

        if self._audit_logger:
            self._audit_logger.log_balance_changed(
                AuditEventType.DEPOSIT_RECORDED, account.id, amount, account.balance
            )

        return account

    def withdraw(self, account_id: str, amount_raw: str) -> Account:
        """
        Subtract an amount from an account balance.

        There is no overdraft check; the balance may go negative.

        Raises:
            AccountNotFoundError: If the account does not exist
            LedgerValidationError: Only under the strict policy
        """
        account = self._lookup(account_id, "withdraw")
        amount = self._parse_amount(amount_raw, account.id, "withdraw")

        account.balance -= amount
        self._recorder.record(account, TransactionType.WITHDRAWAL, amount, "Withdrawal")
        self._persist()

        if self._audit_logger:
            self._audit_logger.log_balance_changed(
                AuditEventType.WITHDRAWAL_RECORDED, account.id, amount, account.balance
            )

        return account

    def transfer(self, from_id: str, to_id: str, amount_raw: str) -> TransferReceipt:
        """
        Move an amount from one account to another.

        The source is debited and its TRANSFER_OUT recorded before the
        destination is resolved. A destination that does not exist is
        opened on the spot with an empty holder name and the transferred
        amount as its balance. Both sides share one timestamp and the
        ledger is saved once.

        There is no self-transfer guard: transferring to the source id
        records both entries on the same account.

        Raises:
            AccountNotFoundError: If the source account does not exist
            LedgerValidationError: Only under the strict policy
        """
        destination_id = (to_id or "").strip()
        source = self._lookup(from_id, "transfer", role="source")
        amount = self._parse_amount(amount_raw, source.id, "transfer")
        timestamp = self._clock()

        source.balance -= amount
        self._recorder.record(
            source,
            TransactionType.TRANSFER_OUT,
            amount,
            f"To {destination_id}",
            timestamp=timestamp,
        )

        destination = self._store.find_by_id(destination_id)
        destination_created = destination is None
        if destination is None:
            destination = Account(
                id=destination_id,
                holder_name="",
                balance=amount,
                created_at=timestamp,
            )
            self._recorder.record(
                destination,
                TransactionType.TRANSFER_IN,
                amount,
                f"From {source.id}",
                timestamp=timestamp,
            )
            self._store.create(destination)
        else:
            destination.balance += amount
            self._recorder.record(
                destination,
                TransactionType.TRANSFER_IN,
                amount,
                f"From {source.id}",
                timestamp=timestamp,
            )

        self._persist()

        if self._audit_logger:
            self._audit_logger.log_transfer(
                source.id, destination.id, amount, destination_created
            )

        return TransferReceipt(
            source=source,
            destination=destination,
            amount=amount,
            destination_created=destination_created,
        )

    def delete_account(self, account_id: str) -> None:
        """
        Remove an account and its whole history. Irreversible.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        account = self._lookup(account_id, "delete")
        self._store.delete(account.id)
        self._persist()

        if self._audit_logger:
            self._audit_logger.log_account_deleted(account.id, len(account.transactions))

    # -------------------------------------------------------------------------
    # Read operations
    # -------------------------------------------------------------------------

    def view_account(self, account_id: str) -> AccountView:
        """Read-only projection of one account."""
        return AccountView.from_account(self._lookup(account_id, "view"))

    def list_accounts(self) -> AccountListing:
        """
        Every account plus the sum of all balances.

        The total is a plain left-to-right float sum, so a NaN balance makes
        the total NaN. An empty ledger yields an empty listing, not an error.
        """
        accounts = list(self._store.list())
        # Not sum(): from Python 3.12 it compensates rounding error on floats
        total = 0.0
        for account in accounts:
            total += account.balance
        return AccountListing(accounts=accounts, total_balance=total)

    def transaction_history(self, account_id: str) -> TransactionHistory:
        """Full transaction history of one account, oldest first."""
        account = self._lookup(account_id, "history")
        return TransactionHistory(
            account_id=account.id,
            transactions=list(account.transactions),
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _lookup(self, account_id: str, operation: str, role: Optional[str] = None) -> Account:
        normalized = (account_id or "").strip()
        account = self._store.find_by_id(normalized)
        if account is None:
            if self._audit_logger:
                self._audit_logger.log_account_not_found(normalized, operation)
            raise AccountNotFoundError(normalized, role)
        return account

    def _require_for_creation(self, outcome: ValidationOutcome):
        if not outcome.accepted:
            if self._audit_logger:
                self._audit_logger.log_creation_rejected(
                    outcome.issue.field, outcome.issue.issue_type, outcome.issue.message
                )
            raise LedgerValidationError(outcome.issue)
        return outcome.value

    def _parse_amount(self, raw: str, account_id: str, operation: str) -> float:
        if self.policy is ValidationPolicy.LEGACY:
            return parse_amount(raw)

        outcome = validate_money_input(
            raw,
            minimum=self._settings.min_transaction_amount,
            maximum=self._settings.max_transaction_amount,
            field="amount",
            label="Amount",
        )
        if not outcome.accepted:
            if self._audit_logger:
                self._audit_logger.log_amount_rejected(account_id, operation, outcome.issue.message)
            raise LedgerValidationError(outcome.issue)
        return outcome.value

    def _persist(self) -> None:
        if self._writer is not None:
            self._writer.request_save(self._store.to_ledger())
