"""
Monthly Aggregator

Pure function from (transactions, month, year) to a FinancialSummary.

Dates are calendar dates (datetime.date). A transaction belongs to a
period when its own month and year match; no timezone conversion is
involved, so "2024-03-01" is always March.
"""

from decimal import Decimal
from typing import Iterable

from eazzy.models.transaction import (
    FinancialSummary,
    Transaction,
    TransactionType,
)


MONTH_NAMES = [
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
]


def in_period(transaction: Transaction, month: int, year: int) -> bool:
    """month is a 0-based index (0 = January)."""
    return (
        transaction.date.month - 1 == month
        and transaction.date.year == year
    )


def summarize(
    transactions: Iterable[Transaction],
    month: int,
    year: int,
) -> FinancialSummary:
    """
    Summarize one month.

    Args:
        transactions: Any order; duplicates are not removed
        month: 0-based month index, 0..11
        year: Calendar year

    Returns:
        Totals by type, balance and the period's transactions sorted
        by date descending. Same-date transactions keep their input order.
    """
    if not 0 <= month <= 11:
        raise ValueError(f"Month index must be between 0 and 11, got {month}")

    filtered = [tx for tx in transactions if in_period(tx, month, year)]

    total_income = sum(
        (tx.amount for tx in filtered if tx.type == TransactionType.INCOME),
        Decimal("0"),
    )
    total_expense = sum(
        (tx.amount for tx in filtered if tx.type == TransactionType.EXPENSE),
        Decimal("0"),
    )

    return FinancialSummary(
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
        transactions=sorted(filtered, key=lambda tx: tx.date, reverse=True),
    )
