"""
JSON File Storage Implementation

DESIGN DECISION: The ledger lives in a single JSON file because:
1. The operator can read and diff it directly
2. No database setup required
3. Files written by earlier versions load unchanged

TRADEOFFS:
- Every save rewrites the whole file (fine for a handful of accounts)
- No atomic replace, no backup of a corrupted file
- Non-finite balances are written as the JSON constants NaN/Infinity,
  which Python's json module reads back; older files that stored them as
  null are read back as NaN

The implementation follows the abstract interface, so the backend can be
swapped without changing business logic.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from bankcli.models.account import Ledger
from bankcli.services.storage.interface import (
    CorruptLedgerError,
    LedgerStorageInterface,
    StorageError,
)


class JsonFileLedgerStorage(LedgerStorageInterface):
    """
    Ledger stored as {"accounts": [...]} in one JSON file.

    Writes are retried with exponential backoff on OSError.
    """

    def __init__(
        self,
        path: Union[str, Path],
        retry_attempts: int = 3,
        retry_min_wait: float = 0.1,
        retry_max_wait: float = 2.0,
    ):
        self._path = Path(path)
        self._retry_attempts = retry_attempts
        self._retry_min_wait = retry_min_wait
        self._retry_max_wait = retry_max_wait

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    async def load(self) -> Optional[Ledger]:
        """Load the ledger, None if the file does not exist."""
        return await asyncio.to_thread(self._read)

    async def save(self, ledger: Ledger) -> bool:
        """Overwrite the file with the given ledger."""
        payload = ledger.model_dump_json(indent=2, by_alias=True)
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._retry_attempts),
                wait=wait_exponential(
                    multiplier=1,
                    min=self._retry_min_wait,
                    max=self._retry_max_wait,
                ),
                retry=retry_if_exception_type(OSError),
                reraise=True,
            ):
                with attempt:
                    await asyncio.to_thread(self._write, payload)
        except OSError as e:
            raise StorageError(f"Failed to save ledger to {self._path}: {e}") from e
        return True

    def _read(self) -> Optional[Ledger]:
        if not self._path.exists():
            return None

        try:
            with open(self._path, encoding="utf-8") as fh:
                data = json.load(fh)
        except ValueError as e:
            raise CorruptLedgerError(f"Ledger file is not valid JSON: {e}") from e
        except OSError as e:
            raise StorageError(f"Failed to read ledger from {self._path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("accounts"), list):
            raise CorruptLedgerError("Ledger file has no 'accounts' list")

        try:
            return Ledger.model_validate(data)
        except ValidationError as e:
            raise CorruptLedgerError(f"Ledger file has invalid accounts: {e}") from e

    def _write(self, payload: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as fh:
            fh.write(payload)
