"""
Audit Models for BankCLI

Every ledger operation and every persistence incident produces an audit
event. This provides:
1. Traceability of every balance change
2. Debugging information when a save or load goes wrong
3. A record of rejected requests, not only accepted ones

DESIGN DECISION: Audit events are append-only. We never delete or modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from bankcli.models.account import utc_now


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Account lifecycle
    ACCOUNT_CREATED = "account_created"
    ACCOUNT_CREATION_REJECTED = "account_creation_rejected"
    ACCOUNT_AUTO_CREATED = "account_auto_created"
    ACCOUNT_DELETED = "account_deleted"
    ACCOUNT_NOT_FOUND = "account_not_found"

    # Balance changes
    DEPOSIT_RECORDED = "deposit_recorded"
    WITHDRAWAL_RECORDED = "withdrawal_recorded"
    TRANSFER_RECORDED = "transfer_recorded"
    AMOUNT_REJECTED = "amount_rejected"

    # Persistence
    LEDGER_LOADED = "ledger_loaded"
    LEDGER_INITIALIZED = "ledger_initialized"
    LEDGER_CORRUPTED = "ledger_corrupted"
    SAVE_FAILED = "save_failed"
    SAVE_DROPPED = "save_dropped"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )
    account_id: Optional[str] = Field(
        default=None,
        description="Account the event relates to, if any"
    )
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "account_id": self.account_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.account_created("ACC-1234", 100.0)
        event = AuditEventBuilder.save_failed("disk full")
    """

    @staticmethod
    def account_created(account_id: str, initial_deposit: float) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_CREATED,
            account_id=account_id,
            description=f"Account created: {account_id}",
            details={"initial_deposit": initial_deposit},
        )

    @staticmethod
    def account_creation_rejected(field: str, issue_type: str, message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_CREATION_REJECTED,
            severity=AuditSeverity.WARNING,
            description="Account creation rejected",
            details={"field": field, "issue_type": issue_type},
            error_message=message,
        )

    @staticmethod
    def account_auto_created(account_id: str, source_id: str, amount: float) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_AUTO_CREATED,
            severity=AuditSeverity.WARNING,
            account_id=account_id,
            description=f"Account {account_id} opened by transfer from {source_id}",
            details={"source_id": source_id, "amount": amount},
        )

    @staticmethod
    def account_deleted(account_id: str, transaction_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_DELETED,
            account_id=account_id,
            description=f"Account deleted: {account_id}",
            details={"discarded_transactions": transaction_count},
        )

    @staticmethod
    def account_not_found(account_id: str, operation: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            account_id=account_id,
            description=f"Account not found during {operation}",
            details={"operation": operation},
        )

    @staticmethod
    def balance_changed(
        event_type: AuditEventType,
        account_id: str,
        amount: float,
        balance_after: float,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=event_type,
            account_id=account_id,
            description=f"{event_type.value.replace('_', ' ').capitalize()} on {account_id}",
            details={"amount": amount, "balance_after": balance_after},
        )

    @staticmethod
    def transfer_recorded(
        source_id: str,
        destination_id: str,
        amount: float,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSFER_RECORDED,
            account_id=source_id,
            description=f"Transfer from {source_id} to {destination_id}",
            details={"destination_id": destination_id, "amount": amount},
        )

    @staticmethod
    def amount_rejected(account_id: str, operation: str, message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.AMOUNT_REJECTED,
            severity=AuditSeverity.WARNING,
            account_id=account_id,
            description=f"Amount rejected during {operation}",
            details={"operation": operation},
            error_message=message,
        )

    @staticmethod
    def ledger_loaded(path: str, account_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            description=f"Ledger loaded from {path}",
            details={"accounts": account_count},
        )

    @staticmethod
    def ledger_initialized(path: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_INITIALIZED,
            description=f"No ledger at {path}, starting empty",
        )

    @staticmethod
    def ledger_corrupted(path: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_CORRUPTED,
            severity=AuditSeverity.WARNING,
            description="Data file corrupted. Starting with empty data.",
            details={"path": path},
            error_message=error_message,
        )

    @staticmethod
    def save_failed(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            description="Failed to save data.",
            error_message=error_message,
        )

    @staticmethod
    def save_dropped(account_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_DROPPED,
            severity=AuditSeverity.WARNING,
            description="Save requested while another save was running; request dropped",
            details={"accounts": account_count},
        )
