"""
Data Models Package

This package contains all Pydantic models used in EAZZY.
All data flowing through the system must conform to these schemas.
"""

from eazzy.models.transaction import (
    DeleteResult,
    ExpenseCategory,
    FinancialSummary,
    IncomeCategory,
    LoadResult,
    PersistResult,
    Provenance,
    Transaction,
    TransactionDraft,
    TransactionType,
    categories_for,
)
from eazzy.models.user import (
    PaymentScheduleEntry,
    RegistrationRequest,
    UserProfile,
)
from eazzy.models.session import AppSession, AuthSession
from eazzy.models.validation import ValidationIssue, ValidationResult
from eazzy.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "DeleteResult",
    "ExpenseCategory",
    "FinancialSummary",
    "IncomeCategory",
    "LoadResult",
    "PersistResult",
    "Provenance",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "categories_for",
    # User models
    "PaymentScheduleEntry",
    "RegistrationRequest",
    "UserProfile",
    # Session models
    "AppSession",
    "AuthSession",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
