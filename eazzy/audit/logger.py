"""
Audit Logger

DESIGN DECISION: Every significant action in the system is logged.
This provides:
1. Complete traceability of a session, including degraded ones
2. Debugging capability when the remote store misbehaves
3. A record of which backend served each write

The audit logger:
- Writes structured JSON lines through structlog
- Never raises (logging must not break the main flow)
- Supports correlation IDs to trace related events
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from eazzy.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route structlog output to stderr at the given level.

    structlog renders the message; the stdlib handler only prints it.
    """
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("eazzy").setLevel(level)


class AuditLogger:
    """
    Central audit logging service.

    Logs events to the structured local log.
    """

    def __init__(self, logger_name: str = "eazzy.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was written.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity.value in ("error", "critical"):
                self._logger.error("audit_event", **log_dict)
            elif event.severity.value == "warning":
                self._logger.warning("audit_event", **log_dict)
            elif event.severity.value == "debug":
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            logging.getLogger(__name__).error("audit logging failed: %s", e)
            return False

        return True

    def log_remote_unconfigured(self) -> None:
        """Log the degraded, local-only mode."""
        self.log(AuditEventBuilder.remote_unconfigured())

    def log_signed_in(
        self,
        user_id: str,
        email: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a successful sign-in."""
        self.log(AuditEventBuilder.signed_in(
            user_id=user_id,
            email=email,
            correlation_id=correlation_id,
        ))

    def log_sign_in_failed(
        self,
        email: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a failed sign-in."""
        self.log(AuditEventBuilder.sign_in_failed(
            email=email,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_signed_up(
        self,
        user_id: Optional[str],
        email: str,
        total_income: str,
        payment_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log account creation."""
        self.log(AuditEventBuilder.signed_up(
            user_id=user_id,
            email=email,
            total_income=total_income,
            payment_count=payment_count,
            correlation_id=correlation_id,
        ))

    def log_sign_up_failed(
        self,
        email: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a failed sign-up."""
        self.log(AuditEventBuilder.sign_up_failed(
            email=email,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_registration_rejected(
        self,
        field: str,
        message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a registration form rejected by validation."""
        self.log(AuditEventBuilder.registration_rejected(
            field=field,
            message=message,
            correlation_id=correlation_id,
        ))

    def log_signed_out(self, user_id: Optional[str]) -> None:
        """Log sign-out."""
        self.log(AuditEventBuilder.signed_out(user_id=user_id))

    def log_transaction_saved(
        self,
        transaction_id: str,
        user_id: str,
        provenance: str,
        transaction_type: str,
        amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a transaction write and where it landed."""
        self.log(AuditEventBuilder.transaction_saved(
            transaction_id=transaction_id,
            user_id=user_id,
            provenance=provenance,
            transaction_type=transaction_type,
            amount=amount,
            correlation_id=correlation_id,
        ))

    def log_transaction_deleted(
        self,
        transaction_id: str,
        user_id: Optional[str],
        provenance: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a transaction delete."""
        self.log(AuditEventBuilder.transaction_deleted(
            transaction_id=transaction_id,
            user_id=user_id,
            provenance=provenance,
            correlation_id=correlation_id,
        ))

    def log_transactions_loaded(
        self,
        user_id: str,
        provenance: str,
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a load."""
        self.log(AuditEventBuilder.transactions_loaded(
            user_id=user_id,
            provenance=provenance,
            count=count,
            correlation_id=correlation_id,
        ))

    def log_remote_fallback(
        self,
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a remote failure that was served by the local store."""
        self.log(AuditEventBuilder.remote_fallback(
            operation=operation,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_report_exported(
        self,
        user_id: Optional[str],
        filename: str,
        row_count: int,
    ) -> None:
        """Log a CSV export."""
        self.log(AuditEventBuilder.report_exported(
            user_id=user_id,
            filename=filename,
            row_count=row_count,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., a form submit).
    """
    return uuid4()
