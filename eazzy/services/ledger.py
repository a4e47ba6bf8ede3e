"""
Transaction Ledger

The transaction store accessor. It holds the session's in-memory list
and persists changes, preferring the remote store and degrading to the
local fallback store.

RULES:
- create: remote insert OR local write, never both for one call
- delete: remote delete is best-effort; local removal always happens
- load: remote query by owner, else the whole local snapshot
- No remote failure ever reaches the caller; it is logged and the
  result says which backend served it (its provenance)
- A failed local write raises StorageError and leaves the in-memory
  list as it was
"""

import time
from datetime import datetime, timezone
from typing import Optional

import structlog

from eazzy.models.transaction import (
    DeleteResult,
    LoadResult,
    PersistResult,
    Provenance,
    Transaction,
    TransactionDraft,
)
from eazzy.services.storage import (
    LocalFallbackStore,
    StorageError,
    TransactionStorageInterface,
)


class TransactionLedger:
    """
    In-memory transaction list backed by remote-with-local-fallback storage.

    Args:
        local_store: The local fallback slot
        remote: Remote storage, or None when Supabase is unconfigured
        on_fallback: Optional callback(operation, error_message), invoked
                     each time a remote failure is absorbed
    """

    def __init__(
        self,
        local_store: LocalFallbackStore,
        remote: Optional[TransactionStorageInterface] = None,
        on_fallback=None,
    ):
        self._local = local_store
        self._remote = remote
        self._on_fallback = on_fallback
        self._transactions: list[Transaction] = []
        self._logger = structlog.get_logger(__name__)

    @property
    def remote_available(self) -> bool:
        return self._remote is not None

    @property
    def transactions(self) -> list[Transaction]:
        """Copy of the in-memory list."""
        return list(self._transactions)

    def _remote_failed(self, operation: str, error: Exception) -> None:
        self._logger.warning(
            "remote_operation_failed",
            operation=operation,
            error=str(error),
        )
        if self._on_fallback:
            self._on_fallback(operation, str(error))

    def _next_local_id(self) -> str:
        """
        Millisecond timestamp, bumped until unique in the local slot and
        in memory.
        """
        taken = {tx.id for tx in self._transactions}
        taken.update(tx.id for tx in self._local.read())
        candidate = time.time_ns() // 1_000_000
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    def create(self, draft: TransactionDraft) -> PersistResult:
        """Persist a new transaction and report which backend took it."""
        if self._remote is not None:
            try:
                stored = self._remote.insert(draft)
            except Exception as e:
                self._remote_failed("insert", e)
            else:
                self._transactions.insert(0, stored)
                return PersistResult(transaction=stored, provenance=Provenance.REMOTE)

        stored = Transaction.from_draft(
            draft,
            transaction_id=self._next_local_id(),
            created_at=datetime.now(timezone.utc),
        )
        # Written before the in-memory list changes; StorageError propagates
        updated = self._transactions + [stored]
        self._local.write(updated)
        self._transactions = updated
        return PersistResult(transaction=stored, provenance=Provenance.LOCAL)

    def delete(self, transaction_id: str) -> DeleteResult:
        """Remove a transaction everywhere it can be removed."""
        provenance = Provenance.LOCAL
        if self._remote is not None:
            try:
                self._remote.delete(transaction_id)
                provenance = Provenance.REMOTE
            except Exception as e:
                self._remote_failed("delete", e)

        remaining = [
            tx for tx in self._transactions if tx.id != transaction_id
        ]
        try:
            self._local.write(remaining)
        except StorageError as e:
            # Without a remote delete the local slot is the only record
            if provenance != Provenance.REMOTE:
                raise
            self._logger.warning(
                "local_store_write_failed",
                operation="delete",
                error=str(e),
            )
        self._transactions = remaining
        return DeleteResult(transaction_id=transaction_id, provenance=provenance)

    def load(self, owner_id: str) -> LoadResult:
        """Replace the in-memory list with the owner's stored transactions."""
        if self._remote is not None:
            try:
                self._transactions = self._remote.list_for_owner(owner_id)
            except Exception as e:
                self._remote_failed("load", e)
            else:
                return LoadResult(
                    transactions=self.transactions,
                    provenance=Provenance.REMOTE,
                )

        # The local slot is not partitioned by owner
        self._transactions = self._local.read()
        return LoadResult(
            transactions=self.transactions,
            provenance=Provenance.LOCAL,
        )

    def clear(self) -> None:
        """Forget the in-memory list (sign-out). The local slot is kept."""
        self._transactions = []
