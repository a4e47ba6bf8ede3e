"""
Registration Validation

DESIGN DECISION: Rules run in a fixed order and the first failure
stops the check. The user sees exactly one message, attributed to
one field, and nothing is submitted.

ORDER:
1. Password confirmation matches
2. Password is long enough
3. Salary is positive
4. First payday: day in range, amount positive
5. Second payday (only when not in single-payment mode): same checks

IMPORTANT: Validation NEVER fixes input. A missing number fails the
rule it belongs to.
"""

from decimal import Decimal
from typing import Optional

from eazzy.models.user import (
    PaymentScheduleEntry,
    RegistrationRequest,
    UserProfile,
)
from eazzy.models.validation import ValidationResult


MIN_PASSWORD_LENGTH = 6
MIN_PAYMENT_DAY = 1
MAX_PAYMENT_DAY = 31


def _day_in_range(day: Optional[int]) -> bool:
    return day is not None and MIN_PAYMENT_DAY <= day <= MAX_PAYMENT_DAY


def _positive(amount: Optional[Decimal]) -> bool:
    return amount is not None and amount > 0


class RegistrationValidator:
    """
    Validates registration input before any remote call is made.
    """

    def validate(self, request: RegistrationRequest) -> ValidationResult:
        """Apply the rules in order; return the first failure, if any."""
        if request.confirm_password != request.password:
            return ValidationResult.fail(
                "confirm_password", "mismatch",
                "As senhas não coincidem",
            )

        if len(request.password) < MIN_PASSWORD_LENGTH:
            return ValidationResult.fail(
                "password", "too_short",
                f"A senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres",
            )

        if not _positive(request.salary):
            return ValidationResult.fail(
                "salary", "not_positive",
                "O salário deve ser maior que zero",
            )

        if not _day_in_range(request.first_payment_day):
            return ValidationResult.fail(
                "first_payment_day", "out_of_range",
                "O dia de pagamento deve estar entre 1 e 31",
            )
        if not _positive(request.first_payment_amount):
            return ValidationResult.fail(
                "first_payment_amount", "not_positive",
                "O valor de pagamento deve ser maior que zero",
            )

        if not request.single_payment:
            if not _day_in_range(request.second_payment_day):
                return ValidationResult.fail(
                    "second_payment_day", "out_of_range",
                    "O segundo dia de pagamento deve estar entre 1 e 31",
                )
            if not _positive(request.second_payment_amount):
                return ValidationResult.fail(
                    "second_payment_amount", "not_positive",
                    "O segundo valor de pagamento deve ser maior que zero",
                )

        return ValidationResult.ok()

    @staticmethod
    def total_income(request: RegistrationRequest) -> Decimal:
        """First amount plus the second, or plus zero in single-payment mode."""
        first = request.first_payment_amount or Decimal("0")
        if request.single_payment:
            return first
        return first + (request.second_payment_amount or Decimal("0"))

    def build_profile(
        self,
        request: RegistrationRequest,
        user_id: Optional[str] = None,
    ) -> UserProfile:
        """
        Turn a VALID request into a profile.

        Raises:
            ValueError: If the request does not pass validation
        """
        result = self.validate(request)
        if not result.is_valid:
            raise ValueError(result.message)

        schedule = [
            PaymentScheduleEntry(
                day=request.first_payment_day,
                amount=request.first_payment_amount,
            )
        ]
        if not request.single_payment:
            schedule.append(PaymentScheduleEntry(
                day=request.second_payment_day,
                amount=request.second_payment_amount,
            ))

        return UserProfile(
            id=user_id,
            name=request.name,
            email=request.email,
            phone=request.phone,
            profession=request.profession,
            salary=request.salary,
            payment_schedule=schedule,
            total_income=self.total_income(request),
        )
