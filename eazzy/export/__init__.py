"""Report export package."""

from eazzy.export.csv_report import (
    CSV_HEADERS,
    format_amount,
    format_currency,
    format_date,
    report_filename,
    transactions_to_csv,
)

__all__ = [
    "CSV_HEADERS",
    "format_amount",
    "format_currency",
    "format_date",
    "report_filename",
    "transactions_to_csv",
]
