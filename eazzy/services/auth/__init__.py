"""Identity services package."""

from eazzy.services.auth.gateway import (
    AuthError,
    AuthenticationError,
    IdentityGateway,
    RemoteUnavailableError,
)

__all__ = [
    "AuthError",
    "AuthenticationError",
    "IdentityGateway",
    "RemoteUnavailableError",
]
