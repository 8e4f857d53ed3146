"""
Ledger Writer

DESIGN DECISION: Saving is fire-and-forget from the engine's point of view,
but it is NOT an unmanaged race. One writer task owns the storage backend
and at most one write is in flight at any time.

What happens to a save requested while a write is running is an explicit
policy (SavePolicy):

- DROP:     the request is discarded and counted. Disk may lag memory until
            the next save that finds the writer idle.
- COALESCE: the newest snapshot is parked; older parked snapshots are
            replaced. When the running write finishes, the parked one is
            written. Disk always converges to the latest requested state.

Failures are logged and audited, never raised to the engine: the
in-memory ledger remains the source of truth.
"""

import asyncio
from typing import Optional

import structlog

from bankcli.audit import AuditLogger
from bankcli.models.account import Ledger
from bankcli.models.policy import SavePolicy
from bankcli.services.storage.interface import LedgerStorageInterface, StorageError


logger = structlog.get_logger(__name__)


class LedgerWriter:
    """Single-writer save scheduler in front of a storage backend."""

    def __init__(
        self,
        storage: LedgerStorageInterface,
        policy: SavePolicy = SavePolicy.COALESCE,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._policy = policy
        self._audit_logger = audit_logger
        self._task: Optional[asyncio.Task] = None
        self._pending: Optional[Ledger] = None

        self.completed_count = 0
        self.failed_count = 0
        self.dropped_count = 0

    @property
    def policy(self) -> SavePolicy:
        return self._policy

    @property
    def in_flight(self) -> bool:
        """True while a write task is running."""
        return self._task is not None and not self._task.done()

    def request_save(self, ledger: Ledger) -> None:
        """
        Schedule a save of this snapshot and return immediately.

        The snapshot must not be mutated afterwards; LedgerStore.to_ledger()
        hands out deep copies for this reason.

        Outside a running event loop the save runs to completion before
        this method returns.
        """
        if self.in_flight:
            if self._policy is SavePolicy.DROP:
                self.dropped_count += 1
                logger.debug("ledger_save_dropped", accounts=len(ledger.accounts))
                if self._audit_logger:
                    self._audit_logger.log_save_dropped(len(ledger.accounts))
            else:
                self._pending = ledger
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._drain(ledger))
            return

        self._task = loop.create_task(self._drain(ledger))

    async def flush(self) -> None:
        """Wait until nothing is being written and nothing is parked."""
        while self.in_flight:
            await self._task

    async def save_now(self, ledger: Ledger) -> bool:
        """Schedule a save and wait for the writer to go idle."""
        failed_before = self.failed_count
        self.request_save(ledger)
        await self.flush()
        return self.failed_count == failed_before

    async def _drain(self, ledger: Ledger) -> None:
        current: Optional[Ledger] = ledger
        try:
            while current is not None:
                await self._write(current)
                current, self._pending = self._pending, None
        finally:
            # A parked snapshot must never outlive the task that would write it,
            # or the next drain writes it after a newer one.
            self._pending = None

    async def _write(self, ledger: Ledger) -> None:
        try:
            await self._storage.save(ledger)
        except StorageError as e:
            self.failed_count += 1
            logger.warning(
                "ledger_save_failed",
                location=self._storage.location,
                error=str(e),
            )
            if self._audit_logger:
                self._audit_logger.log_save_failed(str(e))
            return

        self.completed_count += 1
        logger.debug(
            "ledger_saved",
            location=self._storage.location,
            accounts=len(ledger.accounts),
        )
