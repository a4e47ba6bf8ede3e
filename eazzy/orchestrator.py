"""
Main Orchestrator for EAZZY

This module ties together all the components and defines the
end-to-end flows for:
1. Authentication (register → validate → sign up → profile; login; logout)
2. Ledger (load → add/delete → monthly summary → CSV export)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing is submitted when registration input is invalid
- Transaction persistence never surfaces a remote failure
- Every step is audited
- Session state is passed in explicitly as an AppSession
"""

import datetime as dt
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from eazzy.audit import AuditLogger, create_correlation_id
from eazzy.config import get_settings
from eazzy.config.settings import Settings
from eazzy.export import report_filename, transactions_to_csv
from eazzy.models.session import AppSession, AuthSession
from eazzy.models.transaction import (
    DeleteResult,
    FinancialSummary,
    LoadResult,
    PersistResult,
    TransactionDraft,
    TransactionType,
)
from eazzy.models.user import RegistrationRequest
from eazzy.services.auth import (
    AuthError,
    IdentityGateway,
    RemoteUnavailableError,
)
from eazzy.services.ledger import TransactionLedger
from eazzy.services.storage import (
    LocalFallbackStore,
    StorageError,
    SupabaseClient,
    SupabaseProfileStorage,
    SupabaseTransactionStorage,
)
from eazzy.summary import summarize
from eazzy.validation import RegistrationValidator


LOCAL_USER_ID = "local"


class FlowMessage(BaseModel):
    """A message for the user after a form action."""

    kind: str  # "success" | "error"
    text: str
    field: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.kind == "error"

    @classmethod
    def success(cls, text: str) -> "FlowMessage":
        return cls(kind="success", text=text)

    @classmethod
    def error(cls, text: str, field: Optional[str] = None) -> "FlowMessage":
        return cls(kind="error", text=text, field=field)


class NotAuthenticatedError(Exception):
    """A ledger action was attempted without a signed-in user."""
    pass


class AuthFlow:
    """
    Orchestrates the authentication page.

    Flow (register):
    1. Remote available? Otherwise stop with the configuration message
    2. Validate → first failure stops, nothing is sent
    3. Sign up with profile metadata
    4. Insert the profile row
    """

    def __init__(
        self,
        gateway: IdentityGateway,
        validator: Optional[RegistrationValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._gateway = gateway
        self._validator = validator or RegistrationValidator()
        self._audit_logger = audit_logger

    @property
    def is_available(self) -> bool:
        return self._gateway.is_available

    def login(
        self,
        session: AppSession,
        email: str,
        password: str,
        correlation_id: Optional[UUID] = None,
    ) -> FlowMessage:
        """Sign in and attach the user to the session."""
        correlation_id = correlation_id or create_correlation_id()

        try:
            user = self._gateway.sign_in(email, password)
        except RemoteUnavailableError as e:
            return FlowMessage.error(str(e))
        except AuthError as e:
            if self._audit_logger:
                self._audit_logger.log_sign_in_failed(
                    email=email,
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            return FlowMessage.error(str(e) or "Erro ao fazer login")

        session.sign_in(user)
        if self._audit_logger:
            self._audit_logger.log_signed_in(
                user_id=user.user_id,
                email=user.email,
                correlation_id=correlation_id,
            )
        return FlowMessage.success("Login realizado com sucesso!")

    def register(
        self,
        request: RegistrationRequest,
        correlation_id: Optional[UUID] = None,
    ) -> FlowMessage:
        """
        Validate and create an account.

        The user is NOT signed in afterwards; Supabase may require
        e-mail confirmation first.
        """
        correlation_id = correlation_id or create_correlation_id()

        if not self._gateway.is_available:
            return FlowMessage.error(str(RemoteUnavailableError()))

        result = self._validator.validate(request)
        if not result.is_valid:
            if self._audit_logger:
                self._audit_logger.log_registration_rejected(
                    field=result.issue.field,
                    message=result.issue.message,
                    correlation_id=correlation_id,
                )
            return FlowMessage.error(result.issue.message, field=result.issue.field)

        profile = self._validator.build_profile(request)

        try:
            user = self._gateway.sign_up(request.email, request.password, profile)
        except AuthError as e:
            if self._audit_logger:
                self._audit_logger.log_sign_up_failed(
                    email=request.email,
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            return FlowMessage.error(str(e) or "Erro ao criar conta")

        if self._audit_logger:
            self._audit_logger.log_signed_up(
                user_id=user.user_id if user else None,
                email=request.email,
                total_income=str(profile.total_income),
                payment_count=len(profile.payment_schedule),
                correlation_id=correlation_id,
            )
        return FlowMessage.success("Conta criada com sucesso! Verifique seu email.")

    def logout(self, session: AppSession) -> None:
        """Sign out remotely (best effort) and clear the session."""
        user_id = session.user.user_id if session.user else None
        self._gateway.sign_out()
        session.sign_out()
        if self._audit_logger:
            self._audit_logger.log_signed_out(user_id)

    def restore_session(self, session: AppSession) -> bool:
        """Pick up a persisted Supabase session, if there is one."""
        user = self._gateway.current_session()
        if user is None:
            return False
        session.sign_in(user)
        return True

    def continue_offline(self, session: AppSession) -> FlowMessage:
        """
        Enter local-only mode. Only allowed when Supabase is unconfigured.
        """
        if self._gateway.is_available:
            return FlowMessage.error("Entre com sua conta para continuar")
        session.sign_in(AuthSession(
            user_id=LOCAL_USER_ID,
            metadata={"nome": "Visitante"},
        ))
        return FlowMessage.success("Modo local ativado")


class LedgerFlow:
    """
    Orchestrates the dashboard page.

    Flow:
    1. Load the signed-in user's transactions
    2. Add / delete → ledger (remote, falling back to local)
    3. Summary for the selected month
    4. Export the summary's list as CSV
    """

    def __init__(
        self,
        ledger: TransactionLedger,
        audit_logger: Optional[AuditLogger] = None,
        app_name: str = "eazzy",
    ):
        self._ledger = ledger
        self._audit_logger = audit_logger
        self._app_name = app_name

    @property
    def ledger(self) -> TransactionLedger:
        return self._ledger

    @staticmethod
    def _require_user(session: AppSession) -> AuthSession:
        if session.user is None:
            raise NotAuthenticatedError("No user is signed in")
        return session.user

    def _log_storage_failure(
        self,
        operation: str,
        user_id: str,
        error: Exception,
        correlation_id: Optional[UUID],
    ) -> None:
        if self._audit_logger:
            self._audit_logger.log_error(
                error_type="LocalStoreWriteError",
                error_message=str(error),
                details={"operation": operation, "user_id": user_id},
                correlation_id=correlation_id,
            )

    def load(
        self,
        session: AppSession,
        correlation_id: Optional[UUID] = None,
    ) -> LoadResult:
        """Load the signed-in user's transactions into the ledger."""
        user = self._require_user(session)
        result = self._ledger.load(user.user_id)

        if self._audit_logger:
            self._audit_logger.log_transactions_loaded(
                user_id=user.user_id,
                provenance=result.provenance.value,
                count=len(result.transactions),
                correlation_id=correlation_id,
            )
        return result

    def build_draft(
        self,
        session: AppSession,
        description: str,
        amount: Decimal,
        category: str,
        date: dt.date,
        transaction_type: TransactionType,
    ) -> TransactionDraft:
        """
        Build a draft for the signed-in user.

        Raises:
            pydantic.ValidationError: If the entry is invalid
        """
        user = self._require_user(session)
        return TransactionDraft(
            owner_id=user.user_id,
            description=description,
            amount=amount,
            category=category,
            date=date,
            type=transaction_type,
        )

    def add_transaction(
        self,
        session: AppSession,
        draft: TransactionDraft,
        correlation_id: Optional[UUID] = None,
    ) -> PersistResult:
        """
        Persist a draft. Never raises on remote failure.

        Raises:
            StorageError: If the local fallback write fails
        """
        user = self._require_user(session)
        if draft.owner_id != user.user_id:
            raise NotAuthenticatedError("Draft belongs to another user")

        try:
            result = self._ledger.create(draft)
        except StorageError as e:
            self._log_storage_failure("create", user.user_id, e, correlation_id)
            raise

        if self._audit_logger:
            self._audit_logger.log_transaction_saved(
                transaction_id=result.transaction.id,
                user_id=user.user_id,
                provenance=result.provenance.value,
                transaction_type=result.transaction.type.value,
                amount=str(result.transaction.amount),
                correlation_id=correlation_id,
            )
        return result

    def delete_transaction(
        self,
        session: AppSession,
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> DeleteResult:
        """
        Delete one of the user's transactions.

        Raises:
            StorageError: If the local fallback write fails
        """
        user = self._require_user(session)
        try:
            result = self._ledger.delete(transaction_id)
        except StorageError as e:
            self._log_storage_failure("delete", user.user_id, e, correlation_id)
            raise

        if self._audit_logger:
            self._audit_logger.log_transaction_deleted(
                transaction_id=transaction_id,
                user_id=user.user_id,
                provenance=result.provenance.value,
                correlation_id=correlation_id,
            )
        return result

    def summary(self, month: int, year: int) -> FinancialSummary:
        """Summary of the in-memory list for one month (0-based)."""
        return summarize(self._ledger.transactions, month, year)

    def export(
        self,
        session: AppSession,
        month: int,
        year: int,
    ) -> tuple[str, str]:
        """
        CSV report of the month as currently displayed.

        Returns:
            (filename, csv_text)
        """
        summary = self.summary(month, year)
        filename = report_filename(month, year, self._app_name)
        csv_text = transactions_to_csv(summary.transactions)

        if self._audit_logger:
            self._audit_logger.log_report_exported(
                user_id=session.user.user_id if session.user else None,
                filename=filename,
                row_count=summary.count,
            )
        return filename, csv_text

    def reset(self) -> None:
        """Drop the in-memory list (after sign-out)."""
        self._ledger.clear()


def create_app_components(
    settings: Optional[Settings] = None,
) -> tuple[AuthFlow, LedgerFlow, AppSession]:
    """
    Factory function to create all application components.

    When Supabase is unconfigured, the ledger is built without a remote
    store and the session is marked as degraded for its whole lifetime.

    Returns:
        (auth_flow, ledger_flow, app_session)
    """
    settings = settings or get_settings()
    supabase_settings = settings.supabase
    app_settings = settings.app

    audit_logger = AuditLogger()

    supabase_client = SupabaseClient(supabase_settings)
    remote_available = supabase_client.is_configured

    remote = None
    if remote_available:
        remote = SupabaseTransactionStorage(supabase_client)
    else:
        audit_logger.log_remote_unconfigured()

    ledger = TransactionLedger(
        local_store=LocalFallbackStore(app_settings.local_store_path),
        remote=remote,
        on_fallback=audit_logger.log_remote_fallback,
    )

    gateway = IdentityGateway(
        client=supabase_client,
        profile_storage=SupabaseProfileStorage(supabase_client),
    )

    auth_flow = AuthFlow(gateway=gateway, audit_logger=audit_logger)
    ledger_flow = LedgerFlow(
        ledger=ledger,
        audit_logger=audit_logger,
        app_name=app_settings.name,
    )
    app_session = AppSession(remote_available=remote_available)

    return auth_flow, ledger_flow, app_session
