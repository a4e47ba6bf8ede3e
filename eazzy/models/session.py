"""
Session Models for EAZZY

The current user and remote availability are process-wide facts with a
clear lifecycle. They live in an explicit AppSession handle that is
passed to every flow, never in module globals.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class AuthSession(BaseModel):
    """An authenticated user, as returned by the identity gateway."""

    user_id: str = Field(..., min_length=1)
    email: str = ""
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Profile metadata captured at sign-up"
    )
    access_token: Optional[str] = Field(default=None, repr=False)

    @property
    def display_name(self) -> str:
        """Registered name, or the local part of the e-mail."""
        name = self.metadata.get("nome")
        if name:
            return str(name)
        return self.email.split("@")[0] if self.email else ""


class AppSession(BaseModel):
    """
    Context handle for one running app session.

    remote_available is fixed at process start.
    user is set at sign-in and cleared at sign-out.
    """

    remote_available: bool
    user: Optional[AuthSession] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def sign_in(self, user: AuthSession) -> None:
        self.user = user

    def sign_out(self) -> None:
        self.user = None
