"""
Tests for CSV export and display formatting.
"""

import csv
import datetime as dt
import io
from decimal import Decimal

from eazzy.export import (
    CSV_HEADERS,
    format_amount,
    format_currency,
    format_date,
    report_filename,
    transactions_to_csv,
)
from eazzy.models import TransactionType


class TestCsvReport:
    """Tests for transactions_to_csv()."""

    def test_header_only_when_empty(self):
        """Test that an empty list exports just the header."""
        assert transactions_to_csv([]) == "Data,Descrição,Categoria,Tipo,Valor"

    def test_income_row(self, make_transaction):
        """Test the row layout of an income."""
        tx = make_transaction(
            description="Salário janeiro",
            amount=Decimal("1000"),
            category="Salário",
            date=dt.date(2024, 1, 15),
            type=TransactionType.INCOME,
        )
        lines = transactions_to_csv([tx]).split("\n")
        assert lines[1] == "15/01/2024,Salário janeiro,Salário,receita,1000.00"

    def test_rows_keep_given_order(self, make_transaction):
        """Test that rows follow the input order, without re-sorting."""
        txs = [
            make_transaction(description="B", date=dt.date(2024, 3, 1)),
            make_transaction(description="A", date=dt.date(2024, 3, 20)),
        ]
        lines = transactions_to_csv(txs).split("\n")
        assert [line.split(",")[1] for line in lines[1:]] == ["B", "A"]

    def test_no_trailing_newline(self, make_transaction):
        """Test that the text ends on the last row."""
        text = transactions_to_csv([make_transaction()])
        assert not text.endswith("\n")
        assert len(text.split("\n")) == 2

    def test_description_with_comma_is_quoted(self, make_transaction):
        """Test that a comma in a description does not shift columns."""
        tx = make_transaction(description="Pão, leite e café")
        rows = list(csv.reader(io.StringIO(transactions_to_csv([tx]))))
        assert rows[1][1] == "Pão, leite e café"
        assert len(rows[1]) == len(CSV_HEADERS)


class TestFormatting:
    """Tests for amount, date, currency and filename formatting."""

    def test_format_amount(self):
        """Test two decimals without thousands separator."""
        assert format_amount(Decimal("1000")) == "1000.00"
        assert format_amount(Decimal("1234.5")) == "1234.50"
        assert format_amount(Decimal("0.005")) == "0.01"

    def test_format_date(self):
        """Test DD/MM/YYYY."""
        assert format_date(dt.date(2024, 3, 9)) == "09/03/2024"

    def test_report_filename_is_one_based(self):
        """Test that month index 0 is written as 1."""
        assert report_filename(0, 2024) == "eazzy_relatorio_1_2024.csv"
        assert report_filename(11, 2023, app_name="meuapp") == "meuapp_relatorio_12_2023.csv"

    def test_format_currency(self):
        """Test the pt-BR display format."""
        assert format_currency(Decimal("1234.56")) == "R$ 1.234,56"
        assert format_currency(Decimal("0")) == "R$ 0,00"
        assert format_currency(Decimal("1000000")) == "R$ 1.000.000,00"

    def test_format_negative_currency(self):
        """Test a negative balance."""
        assert format_currency(Decimal("-150")) == "R$ -150,00"
