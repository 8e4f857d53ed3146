"""
Audit Logger

DESIGN DECISION: Every ledger operation is logged.
This provides:
1. A trail of every balance change next to the transaction history
2. Visibility into rejected requests and persistence incidents
3. Debugging capability without a debugger attached

The audit logger:
- Writes structured events through structlog
- Keeps a bounded in-memory buffer of recent events for inspection
- Never raises into the ledger flow
"""

import logging
import sys
from collections import deque
from typing import Optional

import structlog

from bankcli.models.audit import AuditEvent, AuditEventBuilder, AuditEventType


def configure_logging(level: str = "WARNING", renderer: str = "console") -> None:
    """
    Configure structlog on top of the standard library logger.

    Logs go to stderr so they never interleave with the menu on stdout.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        force=True,
    )

    if renderer == "json":
        final_processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            final_processor,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events to the structured local log and remembers the most
    recent ones in memory.
    """

    def __init__(self, max_recent: int = 500):
        self._logger = structlog.get_logger("bankcli.audit")
        self._recent: deque[AuditEvent] = deque(maxlen=max_recent)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        self._recent.append(event)
        log_dict = event.to_log_dict()

        if event.severity.value == "error":
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def get_recent_events(
        self,
        event_type: Optional[AuditEventType] = None,
    ) -> list[AuditEvent]:
        """Recent events, oldest first, optionally filtered by type."""
        if event_type is None:
            return list(self._recent)
        return [event for event in self._recent if event.event_type == event_type]

    def log_account_created(self, account_id: str, initial_deposit: float) -> None:
        self.log(AuditEventBuilder.account_created(account_id, initial_deposit))

    def log_creation_rejected(self, field: str, issue_type: str, message: str) -> None:
        self.log(AuditEventBuilder.account_creation_rejected(field, issue_type, message))

    def log_account_not_found(self, account_id: str, operation: str) -> None:
        self.log(AuditEventBuilder.account_not_found(account_id, operation))

    def log_balance_changed(
        self,
        event_type: AuditEventType,
        account_id: str,
        amount: float,
        balance_after: float,
    ) -> None:
        self.log(AuditEventBuilder.balance_changed(event_type, account_id, amount, balance_after))

    def log_amount_rejected(self, account_id: str, operation: str, message: str) -> None:
        self.log(AuditEventBuilder.amount_rejected(account_id, operation, message))

    def log_transfer(
        self,
        source_id: str,
        destination_id: str,
        amount: float,
        destination_created: bool,
    ) -> None:
        self.log(AuditEventBuilder.transfer_recorded(source_id, destination_id, amount))
        if destination_created:
            self.log(AuditEventBuilder.account_auto_created(destination_id, source_id, amount))

    def log_account_deleted(self, account_id: str, transaction_count: int) -> None:
        self.log(AuditEventBuilder.account_deleted(account_id, transaction_count))

    def log_ledger_loaded(self, path: str, account_count: int) -> None:
        self.log(AuditEventBuilder.ledger_loaded(path, account_count))

    def log_ledger_initialized(self, path: str) -> None:
        self.log(AuditEventBuilder.ledger_initialized(path))

    def log_ledger_corrupted(self, path: str, error_message: str) -> None:
        self.log(AuditEventBuilder.ledger_corrupted(path, error_message))

    def log_save_failed(self, error_message: str) -> None:
        self.log(AuditEventBuilder.save_failed(error_message))

    def log_save_dropped(self, account_count: int) -> None:
        self.log(AuditEventBuilder.save_dropped(account_count))
