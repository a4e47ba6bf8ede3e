"""
Local Fallback Store

A single named, persistent slot holding the full list of transactions
as JSON. It is read whole and rewritten whole on every mutation; it is
a snapshot, not an append log.

KNOWN LIMITATION: the slot is not partitioned by owner. Anyone reading
the same slot on the same device sees every cached transaction.
"""

import json
from pathlib import Path
from typing import Optional

import structlog
from pydantic import TypeAdapter

from eazzy.config import get_settings
from eazzy.models.transaction import Transaction
from eazzy.services.storage.interface import StorageError


_TRANSACTION_LIST = TypeAdapter(list[Transaction])


class LocalFallbackStore:
    """JSON-file implementation of the local fallback slot."""

    def __init__(self, path: Optional[Path] = None):
        self._path = Path(path) if path else get_settings().app.local_store_path
        self._logger = structlog.get_logger(__name__)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> list[Transaction]:
        """
        Read the full snapshot.

        A missing slot is an empty list. A corrupted slot (unreadable,
        not UTF-8, not JSON, not a list, or holding invalid records) is
        logged and also read as empty; the next write replaces it.
        """
        if not self._path.exists():
            return []

        try:
            raw = self._path.read_text(encoding="utf-8")
            if not raw.strip():
                return []
            records = json.loads(raw)
            if not isinstance(records, list):
                raise ValueError(
                    f"Expected a list of transactions, got {type(records).__name__}"
                )
            return _TRANSACTION_LIST.validate_python(records)
        # UnicodeDecodeError, JSONDecodeError and ValidationError are ValueErrors
        except (OSError, ValueError) as e:
            self._logger.error(
                "local_store_read_failed",
                path=str(self._path),
                error=str(e),
            )
            return []

    def write(self, transactions: list[Transaction]) -> None:
        """Replace the snapshot with the given list."""
        records = [tx.model_dump(mode="json", by_alias=True) for tx in transactions]
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp_path.write_text(
                json.dumps(records, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
            tmp_path.replace(self._path)
        except OSError as e:
            raise StorageError(f"Failed to write local store: {e}")

    def clear(self) -> None:
        """Remove the slot entirely."""
        try:
            self._path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to clear local store: {e}")
