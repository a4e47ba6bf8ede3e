"""
User Models for EAZZY

A user profile is captured once, at registration, and never edited
by this application. The total monthly income is derived from the
payment schedule at that moment and stored alongside it.
"""

from decimal import Decimal
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


class PaymentScheduleEntry(BaseModel):
    """One payday: a day of the month and the amount received."""

    day: int = Field(
        ...,
        ge=1,
        le=31,
        description="Day of the month"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount received on that day"
    )


class RegistrationRequest(BaseModel):
    """
    Raw registration form input.

    CRITICAL: Nothing here is trusted. Numeric fields are optional so that
    an empty form field reaches the validator instead of failing parsing;
    the RegistrationValidator decides what is acceptable.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = ""
    email: str = ""
    password: str = Field(default="", repr=False)
    confirm_password: str = Field(default="", repr=False)
    phone: str = ""
    profession: str = ""
    salary: Optional[Decimal] = None
    first_payment_day: Optional[int] = None
    first_payment_amount: Optional[Decimal] = None
    second_payment_day: Optional[int] = None
    second_payment_amount: Optional[Decimal] = None
    single_payment: bool = False


class UserProfile(BaseModel):
    """
    A registered user's profile.

    Stored in the `users` table keyed by the auth user id.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[str] = Field(
        default=None,
        description="Auth user id; known only after sign-up"
    )
    name: str
    email: str
    phone: str = ""
    profession: str = ""
    salary: Decimal = Field(..., gt=0)
    payment_schedule: list[PaymentScheduleEntry] = Field(
        ...,
        min_length=1,
        max_length=2,
        description="One or two paydays"
    )
    total_income: Decimal = Field(
        ...,
        gt=0,
        description="Sum of scheduled amounts, computed at registration"
    )

    @model_validator(mode="after")
    def validate_total_income(self) -> "UserProfile":
        """The stored total must equal the schedule it was computed from."""
        expected = sum((entry.amount for entry in self.payment_schedule), Decimal("0"))
        if self.total_income != expected:
            raise ValueError(
                f"Total income {self.total_income} does not match "
                f"payment schedule total {expected}"
            )
        return self

    @property
    def is_single_payment(self) -> bool:
        return len(self.payment_schedule) == 1

    def to_metadata(self) -> dict:
        """
        Sign-up metadata, using the original column names.

        In single-payment mode the second payday is stored as zeros.
        """
        first = self.payment_schedule[0]
        second = self.payment_schedule[1] if len(self.payment_schedule) > 1 else None
        return {
            "nome": self.name,
            "telefone": self.phone,
            "profissao": self.profession,
            "salario": float(self.salary),
            "dia_pagamento_1": first.day,
            "valor_pagamento_1": float(first.amount),
            "dia_pagamento_2": second.day if second else 0,
            "valor_pagamento_2": float(second.amount) if second else 0,
            "renda_total": float(self.total_income),
        }

    def to_record(self) -> dict:
        """Row for the `users` table."""
        if not self.id:
            raise ValueError("Profile has no user id yet")
        return {"id": self.id, "email": self.email, **self.to_metadata()}
