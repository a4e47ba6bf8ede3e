"""
Supabase Storage Implementation

DESIGN DECISION: Supabase is the remote, authoritative store because:
1. It provides authentication and a database behind one client
2. Rows are partitioned per user by the `user_id` column
3. No server-side code is needed in this repository

TRADEOFFS:
- Every call is a network round-trip; failures are expected and
  handled one level up, by the ledger's local fallback
- No retries here: a failed call is reported once, as StorageError

The implementation follows the abstract interface, so the ledger
never imports the Supabase SDK.
"""

from typing import Optional

from supabase import Client, create_client

from eazzy.config import get_settings
from eazzy.config.settings import SupabaseSettings
from eazzy.models.transaction import Transaction, TransactionDraft
from eazzy.models.user import UserProfile
from eazzy.services.storage.interface import (
    ProfileStorageInterface,
    StorageError,
    StorageNotConfiguredError,
    TransactionStorageInterface,
)


class SupabaseClient:
    """
    Low-level Supabase client wrapper.

    Builds the SDK client lazily, only once credentials are known to
    be present.
    """

    def __init__(
        self,
        settings: Optional[SupabaseSettings] = None,
        client: Optional[Client] = None,
    ):
        self._settings = settings or get_settings().supabase
        self._client = client

    @property
    def is_configured(self) -> bool:
        return self._client is not None or self._settings.is_configured

    @property
    def settings(self) -> SupabaseSettings:
        return self._settings

    def connect(self) -> Client:
        """Return the SDK client, creating it on first use."""
        if self._client is None:
            if not self._settings.is_configured:
                raise StorageNotConfiguredError(
                    "Supabase credentials are not configured"
                )
            try:
                self._client = create_client(
                    self._settings.url,
                    self._settings.anon_key,
                )
            except Exception as e:
                raise StorageError(f"Failed to create Supabase client: {e}")

        return self._client

    def table(self, name: str):
        """Query builder for a table."""
        return self.connect().table(name)


class SupabaseTransactionStorage(TransactionStorageInterface):
    """
    Supabase implementation of transaction storage.

    One row per transaction in the `transactions` table, with the
    original Portuguese column names.
    """

    def __init__(self, client: Optional[SupabaseClient] = None):
        self._client = client or SupabaseClient()
        self._table = self._client.settings.transactions_table

    def _row_to_transaction(self, row: dict) -> Transaction:
        return Transaction.model_validate(row)

    def insert(self, draft: TransactionDraft) -> Transaction:
        """Insert a transaction and return the row the server created."""
        try:
            response = (
                self._client.table(self._table)
                .insert(draft.to_record())
                .execute()
            )
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to save transaction: {e}")

        rows = response.data or []
        if not rows:
            raise StorageError("Insert returned no row")
        return self._row_to_transaction(rows[0])

    def delete(self, transaction_id: str) -> bool:
        """Delete a transaction by id."""
        try:
            (
                self._client.table(self._table)
                .delete()
                .eq("id", transaction_id)
                .execute()
            )
            return True
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to delete transaction: {e}")

    def list_for_owner(self, owner_id: str) -> list[Transaction]:
        """All of an owner's transactions, most recent date first."""
        try:
            response = (
                self._client.table(self._table)
                .select("*")
                .eq("user_id", owner_id)
                .order("data", desc=True)
                .execute()
            )
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to load transactions: {e}")

        try:
            return [self._row_to_transaction(row) for row in response.data or []]
        except ValueError as e:
            raise StorageError(f"Malformed transaction row: {e}")


class SupabaseProfileStorage(ProfileStorageInterface):
    """
    Supabase implementation of profile storage.

    Profiles are inserted once, at registration.
    """

    def __init__(self, client: Optional[SupabaseClient] = None):
        self._client = client or SupabaseClient()
        self._table = self._client.settings.users_table

    def insert_profile(self, profile: UserProfile) -> bool:
        """Insert the user's profile row."""
        try:
            self._client.table(self._table).insert(profile.to_record()).execute()
            return True
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to save profile: {e}")
