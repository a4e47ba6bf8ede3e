"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the ledger's fallback rule independent of Supabase
2. Use in-memory fakes for testing
3. Swap the remote backend without touching business logic

The interface is intentionally small - it covers exactly what the
remote store must offer: insert-with-generated-id, delete-by-id and
query-by-owner for transactions, and insert-only for user profiles.
"""

from abc import ABC, abstractmethod

from eazzy.models.transaction import Transaction, TransactionDraft
from eazzy.models.user import UserProfile


class TransactionStorageInterface(ABC):
    """
    Abstract interface for transaction storage operations.

    Implementations raise StorageError on any failure; callers decide
    whether to degrade.
    """

    @abstractmethod
    def insert(self, draft: TransactionDraft) -> Transaction:
        """
        Insert a new transaction.

        Args:
            draft: The transaction to store

        Returns:
            The stored record, with store-generated id and created_at

        Raises:
            StorageError: If the insert fails
        """
        pass

    @abstractmethod
    def delete(self, transaction_id: str) -> bool:
        """
        Delete a transaction by id.

        Returns:
            True if the delete request was accepted

        Raises:
            StorageError: If the delete fails
        """
        pass

    @abstractmethod
    def list_for_owner(self, owner_id: str) -> list[Transaction]:
        """
        All transactions of one owner, most recent date first.

        Raises:
            StorageError: If the query fails
        """
        pass


class ProfileStorageInterface(ABC):
    """
    Abstract interface for user profile storage.

    Profiles are insert-only; this application never edits them.
    """

    @abstractmethod
    def insert_profile(self, profile: UserProfile) -> bool:
        """
        Insert a profile keyed by the profile's user id.

        Raises:
            StorageError: If the insert fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageNotConfiguredError(StorageError):
    """Remote storage credentials are missing."""
    pass
