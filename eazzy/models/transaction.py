"""
Transaction Models for EAZZY

These models define the strict schemas for every transaction flowing
through the system, whether it came from the entry form, the remote
store, or the local fallback store.

DESIGN DECISION: Attribute names are English, but records are stored
with the original Portuguese column names (descricao, valor, ...).
Field aliases do the translation, so the same model reads a Supabase
row and a local JSON snapshot without any mapping code.

INVARIANT: amount is always positive. Direction (income vs expense)
is carried ONLY by the type.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a transaction. Stored values are the original ones."""
    INCOME = "receita"
    EXPENSE = "despesa"


class IncomeCategory(str, Enum):
    """Categories available for income transactions."""
    SALARY = "Salário"
    FREELANCE = "Freelance"
    INVESTMENTS = "Investimentos"
    SALES = "Vendas"
    OTHER = "Outros"


class ExpenseCategory(str, Enum):
    """Categories available for expense transactions."""
    FOOD = "Alimentação"
    TRANSPORT = "Transporte"
    HOUSING = "Moradia"
    HEALTH = "Saúde"
    EDUCATION = "Educação"
    LEISURE = "Lazer"
    BILLS = "Contas"
    OTHER = "Outros"


def categories_for(transaction_type: TransactionType) -> list[str]:
    """Category labels offered for a transaction type, in display order."""
    if TransactionType(transaction_type) == TransactionType.INCOME:
        return [c.value for c in IncomeCategory]
    return [c.value for c in ExpenseCategory]


class Provenance(str, Enum):
    """Which backend ultimately served a read or write."""
    REMOTE = "remote"
    LOCAL = "local"


# =============================================================================
# CORE TRANSACTION MODELS
# =============================================================================

class TransactionDraft(BaseModel):
    """
    A transaction as captured by the entry form.

    It has no identity yet: the store assigns id and created_at.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    owner_id: str = Field(
        ...,
        alias="user_id",
        min_length=1,
        description="Identifier of the owning user"
    )
    description: str = Field(
        ...,
        alias="descricao",
        min_length=1,
        max_length=200,
        description="Free text description"
    )
    amount: Decimal = Field(
        ...,
        alias="valor",
        gt=0,
        description="Positive amount; sign is carried by type"
    )
    category: str = Field(
        ...,
        alias="categoria",
        description="Category label, drawn from the set for the type"
    )
    date: dt.date = Field(
        ...,
        alias="data",
        description="Calendar date, no time component"
    )
    type: TransactionType = Field(
        ...,
        alias="tipo",
        description="receita or despesa"
    )

    @model_validator(mode="after")
    def validate_category(self):
        """The category must belong to the fixed set for the type."""
        allowed = categories_for(self.type)
        if self.category not in allowed:
            raise ValueError(
                f"Category '{self.category}' is not valid for "
                f"{self.type.value}. Allowed: {allowed}"
            )
        return self

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    def to_record(self) -> dict:
        """
        Convert to a record keyed by the stored column names.

        The amount is sent as a float because the remote column is numeric.
        """
        return {
            "user_id": self.owner_id,
            "descricao": self.description,
            "valor": float(self.amount),
            "categoria": self.category,
            "data": self.date.isoformat(),
            "tipo": self.type.value,
        }


class Transaction(TransactionDraft):
    """
    A persisted transaction.

    Created once, possibly deleted by its owner, never updated in place.
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Unique identifier assigned by the store"
    )
    created_at: Optional[dt.datetime] = Field(
        default=None,
        description="Creation timestamp set by the store"
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """Remote ids may be numeric; they are always handled as strings."""
        if isinstance(v, int):
            return str(v)
        return v

    @classmethod
    def from_draft(
        cls,
        draft: TransactionDraft,
        transaction_id: str,
        created_at: Optional[dt.datetime] = None,
    ) -> "Transaction":
        """Attach an identity to a draft."""
        return cls(
            id=transaction_id,
            created_at=created_at,
            **draft.model_dump(by_alias=False),
        )

    def to_record(self) -> dict:
        record = {"id": self.id, **super().to_record()}
        record["created_at"] = self.created_at.isoformat() if self.created_at else None
        return record


# =============================================================================
# OUTCOMES
# =============================================================================

class FinancialSummary(BaseModel):
    """
    Derived monthly summary. Recomputed on every render, never persisted.
    """

    total_income: Decimal = Field(default=Decimal("0"))
    total_expense: Decimal = Field(default=Decimal("0"))
    balance: Decimal = Field(default=Decimal("0"))
    transactions: list[Transaction] = Field(
        default_factory=list,
        description="Transactions of the period, most recent first"
    )

    @property
    def count(self) -> int:
        return len(self.transactions)


class PersistResult(BaseModel):
    """Outcome of a create: the stored record and where it went."""

    transaction: Transaction
    provenance: Provenance

    @property
    def is_remote(self) -> bool:
        return self.provenance == Provenance.REMOTE


class LoadResult(BaseModel):
    """Outcome of a load."""

    transactions: list[Transaction] = Field(default_factory=list)
    provenance: Provenance


class DeleteResult(BaseModel):
    """Outcome of a delete. REMOTE only when the remote delete succeeded."""

    transaction_id: str
    provenance: Provenance
