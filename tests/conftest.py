"""
Shared fixtures.

Supabase is never contacted: remote storage is an in-memory fake that
can be told to fail, and the local slot lives in tmp_path.
"""

import datetime as dt
import itertools
import os
from decimal import Decimal

import pytest

from eazzy.config import get_settings
from eazzy.models.transaction import Transaction, TransactionDraft, TransactionType
from eazzy.services.storage import (
    LocalFallbackStore,
    StorageError,
    TransactionStorageInterface,
)


class FakeRemoteStorage(TransactionStorageInterface):
    """In-memory remote store. Set `fail = True` to make every call raise."""

    def __init__(self):
        self.rows: list[Transaction] = []
        self.fail = False
        self.calls: list[str] = []
        self._ids = itertools.count(1)

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if self.fail:
            raise StorageError(f"remote {operation} unavailable")

    def insert(self, draft: TransactionDraft) -> Transaction:
        self._check("insert")
        stored = Transaction.from_draft(
            draft,
            transaction_id=f"remote-{next(self._ids)}",
            created_at=dt.datetime(2024, 1, 1, 12, 0, 0),
        )
        self.rows.append(stored)
        return stored

    def delete(self, transaction_id: str) -> bool:
        self._check("delete")
        self.rows = [row for row in self.rows if row.id != transaction_id]
        return True

    def list_for_owner(self, owner_id: str) -> list[Transaction]:
        self._check("list_for_owner")
        owned = [row for row in self.rows if row.owner_id == owner_id]
        return sorted(owned, key=lambda row: row.date, reverse=True)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep tests independent of the developer's environment and .env."""
    monkeypatch.chdir(tmp_path)
    for var in list(os.environ):
        if var.startswith(("SUPABASE_", "APP_")):
            monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def remote():
    return FakeRemoteStorage()


@pytest.fixture
def local_store(tmp_path):
    return LocalFallbackStore(tmp_path / "eazzy_transactions.json")


@pytest.fixture
def make_draft():
    """Factory for valid drafts with overridable fields."""

    def _make(**overrides) -> TransactionDraft:
        fields = {
            "owner_id": "user-1",
            "description": "Mercado",
            "amount": Decimal("150.00"),
            "category": "Alimentação",
            "date": dt.date(2024, 3, 10),
            "type": TransactionType.EXPENSE,
        }
        fields.update(overrides)
        return TransactionDraft(**fields)

    return _make


@pytest.fixture
def make_transaction(make_draft):
    """Factory for stored transactions with overridable fields."""
    counter = itertools.count(1)

    def _make(transaction_id=None, **overrides) -> Transaction:
        return Transaction.from_draft(
            make_draft(**overrides),
            transaction_id=transaction_id or f"tx-{next(counter)}",
        )

    return _make
