"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage:
Supabase as the remote store and a JSON file as the local fallback slot.
"""

from eazzy.services.storage.interface import (
    ProfileStorageInterface,
    StorageError,
    StorageNotConfiguredError,
    TransactionStorageInterface,
)
from eazzy.services.storage.local_store import LocalFallbackStore
from eazzy.services.storage.supabase_store import (
    SupabaseClient,
    SupabaseProfileStorage,
    SupabaseTransactionStorage,
)

__all__ = [
    # Interfaces
    "ProfileStorageInterface",
    "TransactionStorageInterface",
    # Exceptions
    "StorageError",
    "StorageNotConfiguredError",
    # Implementations
    "LocalFallbackStore",
    "SupabaseClient",
    "SupabaseProfileStorage",
    "SupabaseTransactionStorage",
]
