"""
Data Models Package

This package contains all Pydantic models used in BankCLI.
All data flowing through the ledger must conform to these schemas.
"""

from bankcli.models.account import (
    Account,
    AccountListing,
    AccountView,
    Ledger,
    Transaction,
    TransactionHistory,
    TransactionType,
    TransferReceipt,
    utc_now,
)
from bankcli.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from bankcli.models.policy import SavePolicy, ValidationPolicy
from bankcli.models.validation import ValidationIssue, ValidationOutcome

__all__ = [
    # Ledger models
    "Account",
    "AccountListing",
    "AccountView",
    "Ledger",
    "Transaction",
    "TransactionHistory",
    "TransactionType",
    "TransferReceipt",
    "utc_now",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    # Policies
    "SavePolicy",
    "ValidationPolicy",
    # Validation models
    "ValidationIssue",
    "ValidationOutcome",
]
