"""
CSV Report Export

Serializes the currently displayed transactions (already filtered to a
month and sorted most-recent-first) into CSV text, in the order given.

Columns, fixed: Data, Descrição, Categoria, Tipo, Valor
- Data: DD/MM/YYYY
- Valor: two decimals, no thousands separator
"""

import csv
import io
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from eazzy.models.transaction import Transaction


CSV_HEADERS = ["Data", "Descrição", "Categoria", "Tipo", "Valor"]

_CENTS = Decimal("0.01")


def format_amount(amount: Decimal) -> str:
    """1000 -> '1000.00'."""
    return str(Decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP))


def format_date(value) -> str:
    """Calendar date as DD/MM/YYYY."""
    return value.strftime("%d/%m/%Y")


def transaction_to_row(transaction: Transaction) -> list[str]:
    return [
        format_date(transaction.date),
        transaction.description,
        transaction.category,
        transaction.type.value,
        format_amount(transaction.amount),
    ]


def transactions_to_csv(transactions: Iterable[Transaction]) -> str:
    """
    CSV text: header line, then one line per transaction.

    Lines are joined with '\\n' and there is no trailing newline.
    Fields containing a comma or quote are quoted.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for transaction in transactions:
        writer.writerow(transaction_to_row(transaction))
    return buffer.getvalue().rstrip("\n")


def report_filename(month: int, year: int, app_name: str = "eazzy") -> str:
    """Download name for a month's report; month is 0-based."""
    return f"{app_name}_relatorio_{month + 1}_{year}.csv"


def format_currency(amount: Decimal) -> str:
    """
    Display format used by the dashboard: R$ 1.234,56.
    """
    quantized = Decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    grouped = f"{abs(quantized):,.2f}"
    # Swap separators to the pt-BR convention
    grouped = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {sign}{grouped}"
