"""
Validation Models for EAZZY

Validation never fixes input. It reports the first problem found,
attributed to a field, and the form shows that message.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'mismatch', 'too_short', 'out_of_range')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )


class ValidationResult(BaseModel):
    """
    Result of validating a form.

    Rules short-circuit, so there is at most one issue.
    """

    is_valid: bool
    issue: Optional[ValidationIssue] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, field: str, issue_type: str, message: str) -> "ValidationResult":
        return cls(
            is_valid=False,
            issue=ValidationIssue(field=field, issue_type=issue_type, message=message),
        )

    @property
    def message(self) -> Optional[str]:
        return self.issue.message if self.issue else None
