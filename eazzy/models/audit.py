"""
Audit Models for EAZZY

Every significant action in the system is logged for audit purposes:
authentication, registration, every transaction write and delete,
and every time the app falls back from the remote store to the
local one.

DESIGN DECISION: Audit events are emitted, never edited. A fallback
is an audit event too, so a degraded session can be reconstructed
from the log alone.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Configuration
    REMOTE_UNCONFIGURED = "remote_unconfigured"

    # Authentication
    SIGNED_IN = "signed_in"
    SIGN_IN_FAILED = "sign_in_failed"
    SIGNED_UP = "signed_up"
    SIGN_UP_FAILED = "sign_up_failed"
    SIGNED_OUT = "signed_out"
    REGISTRATION_REJECTED = "registration_rejected"

    # Persistence
    TRANSACTION_SAVED = "transaction_saved"
    TRANSACTION_DELETED = "transaction_deleted"
    TRANSACTIONS_LOADED = "transactions_loaded"
    REMOTE_FALLBACK = "remote_fallback"

    # Export
    REPORT_EXPORTED = "report_exported"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'user')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )
    user_id: Optional[str] = Field(
        default=None,
        description="Acting user, when known"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "user_id": self.user_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.signed_in(user_id, email)
        event = AuditEventBuilder.transaction_saved(tx_id, user_id, "remote", ...)
    """

    @staticmethod
    def remote_unconfigured() -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMOTE_UNCONFIGURED,
            severity=AuditSeverity.WARNING,
            description="Supabase credentials missing; running in local-only mode",
        )

    @staticmethod
    def signed_in(
        user_id: str,
        email: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SIGNED_IN,
            entity_type="user",
            entity_id=user_id,
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"User signed in: {email}",
            is_user_action=True,
        )

    @staticmethod
    def sign_in_failed(
        email: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SIGN_IN_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="user",
            correlation_id=correlation_id,
            description=f"Sign-in failed for {email}",
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def signed_up(
        user_id: Optional[str],
        email: str,
        total_income: str,
        payment_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SIGNED_UP,
            entity_type="user",
            entity_id=user_id,
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"Account created: {email}",
            details={
                "total_income": total_income,
                "payment_count": payment_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def sign_up_failed(
        email: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SIGN_UP_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="user",
            correlation_id=correlation_id,
            description=f"Sign-up failed for {email}",
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def registration_rejected(
        field: str,
        message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REGISTRATION_REJECTED,
            severity=AuditSeverity.INFO,
            entity_type="registration",
            correlation_id=correlation_id,
            description=f"Registration rejected on field '{field}'",
            details={
                "field": field,
                "message": message,
            },
            is_user_action=True,
        )

    @staticmethod
    def signed_out(user_id: Optional[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SIGNED_OUT,
            entity_type="user",
            entity_id=user_id,
            user_id=user_id,
            description="User signed out",
            is_user_action=True,
        )

    @staticmethod
    def transaction_saved(
        transaction_id: str,
        user_id: str,
        provenance: str,
        transaction_type: str,
        amount: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_SAVED,
            entity_type="transaction",
            entity_id=transaction_id,
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"Transaction saved ({provenance}): {transaction_type} {amount}",
            details={
                "provenance": provenance,
                "type": transaction_type,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_deleted(
        transaction_id: str,
        user_id: Optional[str],
        provenance: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction_id,
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"Transaction deleted ({provenance})",
            details={
                "provenance": provenance,
            },
            is_user_action=True,
        )

    @staticmethod
    def transactions_loaded(
        user_id: str,
        provenance: str,
        count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTIONS_LOADED,
            entity_type="user",
            entity_id=user_id,
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"Loaded {count} transactions from {provenance} store",
            details={
                "provenance": provenance,
                "count": count,
            },
        )

    @staticmethod
    def remote_fallback(
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMOTE_FALLBACK,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Remote {operation} failed; served by local store",
            error_message=error_message,
            details={
                "operation": operation,
            },
        )

    @staticmethod
    def report_exported(
        user_id: Optional[str],
        filename: str,
        row_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_EXPORTED,
            entity_type="report",
            user_id=user_id,
            description=f"Report exported: {filename}",
            details={
                "filename": filename,
                "row_count": row_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
