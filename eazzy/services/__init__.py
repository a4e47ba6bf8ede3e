"""Services package."""

from eazzy.services.auth import (
    AuthError,
    AuthenticationError,
    IdentityGateway,
    RemoteUnavailableError,
)
from eazzy.services.ledger import TransactionLedger
from eazzy.services.storage import (
    LocalFallbackStore,
    ProfileStorageInterface,
    StorageError,
    StorageNotConfiguredError,
    SupabaseClient,
    SupabaseProfileStorage,
    SupabaseTransactionStorage,
    TransactionStorageInterface,
)

__all__ = [
    # Identity
    "AuthError",
    "AuthenticationError",
    "IdentityGateway",
    "RemoteUnavailableError",
    # Ledger
    "TransactionLedger",
    # Storage services
    "LocalFallbackStore",
    "ProfileStorageInterface",
    "StorageError",
    "StorageNotConfiguredError",
    "SupabaseClient",
    "SupabaseProfileStorage",
    "SupabaseTransactionStorage",
    "TransactionStorageInterface",
]
