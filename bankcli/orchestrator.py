"""
Main Orchestrator for BankCLI

This module wires the components together and defines the startup flow:

    storage -> load ledger -> (initialize or recover) -> store -> engine

DESIGN DECISION: Startup never fails because of the data file.
- No file: start with an empty ledger and write it immediately.
- Unreadable or corrupt file: warn and start empty. The corrupt content
  is overwritten by the next save; no backup is kept.
"""

import random
from pathlib import Path
from typing import Optional, Union

import structlog

from bankcli.audit import AuditLogger
from bankcli.config import get_settings
from bankcli.ledger import LedgerEngine, LedgerStore
from bankcli.models.account import Ledger
from bankcli.services.storage import (
    CorruptLedgerError,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
    LedgerWriter,
    StorageError,
)


logger = structlog.get_logger(__name__)

CORRUPT_DATA_WARNING = "Warning: Data file corrupted. Starting with empty data."


async def open_ledger(
    storage: LedgerStorageInterface,
    writer: LedgerWriter,
    audit_logger: Optional[AuditLogger] = None,
) -> tuple[Ledger, list[str]]:
    """
    Load the ledger for this session.

    Returns:
        (ledger, warnings) where warnings are operator-facing messages
    """
    try:
        ledger = await storage.load()
    except CorruptLedgerError as e:
        logger.warning("ledger_corrupted", location=storage.location, error=str(e))
        if audit_logger:
            audit_logger.log_ledger_corrupted(storage.location, str(e))
        return Ledger(), [CORRUPT_DATA_WARNING]
    except StorageError as e:
        logger.warning("ledger_unreadable", location=storage.location, error=str(e))
        if audit_logger:
            audit_logger.log_ledger_corrupted(storage.location, str(e))
        return Ledger(), [CORRUPT_DATA_WARNING]

    if ledger is None:
        ledger = Ledger()
        if audit_logger:
            audit_logger.log_ledger_initialized(storage.location)
        if not await writer.save_now(ledger):
            return ledger, ["Failed to save data."]
        return ledger, []

    if audit_logger:
        audit_logger.log_ledger_loaded(storage.location, len(ledger.accounts))
    return ledger, []


async def create_app_components(
    data_path: Optional[Union[str, Path]] = None,
    storage: Optional[LedgerStorageInterface] = None,
    rng: Optional[random.Random] = None,
) -> tuple[LedgerEngine, LedgerWriter, list[str]]:
    """
    Factory function to create all application components.

    Args:
        data_path: Ledger file. Defaults to the configured data path.
        storage: Storage backend. Overrides data_path when given.
        rng: Random source for account ids (tests pass a seeded one)

    Returns:
        (engine, writer, startup_warnings)
    """
    settings = get_settings()
    ledger_settings = settings.ledger
    persistence_settings = settings.persistence

    if storage is None:
        storage = JsonFileLedgerStorage(
            data_path or ledger_settings.data_path,
            retry_attempts=persistence_settings.retry_attempts,
            retry_min_wait=persistence_settings.retry_min_wait,
            retry_max_wait=persistence_settings.retry_max_wait,
        )

    audit_logger = AuditLogger()
    writer = LedgerWriter(
        storage,
        policy=persistence_settings.policy,
        audit_logger=audit_logger,
    )

    ledger, warnings = await open_ledger(storage, writer, audit_logger)

    engine = LedgerEngine(
        store=LedgerStore.from_ledger(ledger, rng=rng),
        writer=writer,
        audit_logger=audit_logger,
        settings=ledger_settings,
    )

    return engine, writer, warnings
