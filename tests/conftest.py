"""Shared test fixtures."""

import asyncio
import random
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from bankcli.audit import AuditLogger
from bankcli.config import LedgerSettings
from bankcli.ledger import LedgerEngine, LedgerStore
from bankcli.models import Account, Ledger, ValidationPolicy
from bankcli.services.storage import LedgerStorageInterface, StorageError


START = datetime(2024, 12, 1, 9, 30, tzinfo=timezone.utc)


class StepClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start: datetime = START):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


class RecordingWriter:
    """Stands in for LedgerWriter and keeps every snapshot it is given."""

    def __init__(self):
        self.snapshots: list[Ledger] = []

    def request_save(self, ledger: Ledger) -> None:
        self.snapshots.append(ledger)

    async def flush(self) -> None:
        return None


class InMemoryLedgerStorage(LedgerStorageInterface):
    """
    Storage backend kept in memory.

    Set `gate` to an asyncio.Event to hold writes in flight until it is set,
    `fail` to make every save raise StorageError, and `crash` to make the next
    save raise that exception once.
    """

    def __init__(self, ledger: Optional[Ledger] = None):
        self.stored = ledger
        self.saved: list[Ledger] = []
        self.gate: Optional[asyncio.Event] = None
        self.fail = False
        self.crash: Optional[Exception] = None

    @property
    def location(self) -> str:
        return "memory"

    async def load(self) -> Optional[Ledger]:
        return self.stored

    async def save(self, ledger: Ledger) -> bool:
        if self.gate is not None:
            await self.gate.wait()
        if self.crash is not None:
            error, self.crash = self.crash, None
            raise error
        if self.fail:
            raise StorageError("disk full")
        self.saved.append(ledger)
        self.stored = ledger
        return True


def ledger_of(count: int) -> Ledger:
    """Ledger with `count` empty accounts, handy for telling snapshots apart."""
    return Ledger(
        accounts=[Account(id=f"ACC-{1000 + i}", holder_name="") for i in range(count)]
    )


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def store() -> LedgerStore:
    return LedgerStore(rng=random.Random(1234))


@pytest.fixture
def writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger()


@pytest.fixture
def legacy_settings() -> LedgerSettings:
    return LedgerSettings(validation_policy=ValidationPolicy.LEGACY)


@pytest.fixture
def strict_settings() -> LedgerSettings:
    return LedgerSettings(validation_policy=ValidationPolicy.STRICT)


@pytest.fixture
def engine(store, writer, audit_logger, legacy_settings, clock) -> LedgerEngine:
    return LedgerEngine(
        store=store,
        writer=writer,
        audit_logger=audit_logger,
        settings=legacy_settings,
        clock=clock,
    )


@pytest.fixture
def strict_engine(store, writer, audit_logger, strict_settings, clock) -> LedgerEngine:
    return LedgerEngine(
        store=store,
        writer=writer,
        audit_logger=audit_logger,
        settings=strict_settings,
        clock=clock,
    )


@pytest.fixture
def memory_storage() -> InMemoryLedgerStorage:
    return InMemoryLedgerStorage()


@pytest.fixture
def make_ledger():
    return ledger_of
