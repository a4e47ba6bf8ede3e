"""
Identity Gateway

Wraps Supabase authentication: sign-in, sign-up (plus the profile row),
sign-out and current-session lookup.

DESIGN DECISION: When Supabase is unconfigured every call fails fast
with RemoteUnavailableError. The UI checks `is_available` first and
disables the forms, so users see the banner rather than an error.
"""

from typing import Any, Optional

import structlog

from eazzy.models.session import AuthSession
from eazzy.models.user import UserProfile
from eazzy.services.storage import (
    ProfileStorageInterface,
    StorageError,
    SupabaseClient,
    SupabaseProfileStorage,
)


UNCONFIGURED_MESSAGE = (
    "Supabase não está configurado. "
    "Conecte sua conta nas Configurações do Projeto."
)


class AuthError(Exception):
    """Base exception for identity operations."""
    pass


class RemoteUnavailableError(AuthError):
    """Supabase credentials are missing; authentication is disabled."""

    def __init__(self, message: str = UNCONFIGURED_MESSAGE):
        super().__init__(message)


class AuthenticationError(AuthError):
    """Supabase rejected the credentials or the sign-up."""
    pass


def _user_to_session(user: Any, session: Any = None) -> AuthSession:
    """Build an AuthSession from Supabase user/session objects."""
    return AuthSession(
        user_id=str(user.id),
        email=getattr(user, "email", None) or "",
        metadata=dict(getattr(user, "user_metadata", None) or {}),
        access_token=getattr(session, "access_token", None) if session else None,
    )


class IdentityGateway:
    """
    Authentication facade over the Supabase client.

    Args:
        client: Supabase client wrapper
        profile_storage: Where registration profiles are written
    """

    def __init__(
        self,
        client: Optional[SupabaseClient] = None,
        profile_storage: Optional[ProfileStorageInterface] = None,
    ):
        self._client = client or SupabaseClient()
        self._profiles = profile_storage
        self._logger = structlog.get_logger(__name__)

    @property
    def is_available(self) -> bool:
        """True when Supabase credentials are configured."""
        return self._client.is_configured

    def _auth(self):
        if not self.is_available:
            raise RemoteUnavailableError()
        try:
            return self._client.connect().auth
        except StorageError as e:
            raise AuthenticationError(str(e))

    def _profile_storage(self) -> ProfileStorageInterface:
        if self._profiles is None:
            self._profiles = SupabaseProfileStorage(self._client)
        return self._profiles

    def sign_in(self, email: str, password: str) -> AuthSession:
        """
        Sign in with e-mail and password.

        Raises:
            RemoteUnavailableError: Supabase is unconfigured
            AuthenticationError: Credentials rejected or network failure
        """
        auth = self._auth()
        try:
            response = auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except Exception as e:
            raise AuthenticationError(str(e) or "Erro ao fazer login")

        if response is None or response.user is None:
            raise AuthenticationError("Erro ao fazer login")
        return _user_to_session(response.user, response.session)

    def sign_up(self, email: str, password: str, profile: UserProfile) -> Optional[AuthSession]:
        """
        Create an account and its profile row.

        The profile metadata travels with the sign-up; the profile row
        is then inserted keyed by the new user id. Returns None when
        Supabase created no user (nothing to key the profile on).

        Raises:
            RemoteUnavailableError: Supabase is unconfigured
            AuthenticationError: Sign-up or profile insert failed
        """
        auth = self._auth()
        try:
            response = auth.sign_up({
                "email": email,
                "password": password,
                "options": {"data": profile.to_metadata()},
            })
        except Exception as e:
            raise AuthenticationError(str(e) or "Erro ao criar conta")

        user = getattr(response, "user", None)
        if user is None:
            return None

        stored_profile = profile.model_copy(update={"id": str(user.id)})
        try:
            self._profile_storage().insert_profile(stored_profile)
        except StorageError as e:
            raise AuthenticationError(str(e))

        return _user_to_session(user, getattr(response, "session", None))

    def sign_out(self) -> None:
        """Sign out. A no-op when Supabase is unconfigured."""
        if not self.is_available:
            return
        try:
            self._auth().sign_out()
        except Exception as e:
            self._logger.warning("sign_out_failed", error=str(e))

    def current_session(self) -> Optional[AuthSession]:
        """The persisted session, if any. Errors are logged, not raised."""
        if not self.is_available:
            return None
        try:
            session = self._auth().get_session()
        except Exception as e:
            self._logger.error("session_check_failed", error=str(e))
            return None

        if session is None or getattr(session, "user", None) is None:
            return None
        return _user_to_session(session.user, session)
