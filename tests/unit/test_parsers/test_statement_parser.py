"""Tests for the bank statement adapter (tabular rows and free text)."""

from datetime import date
from decimal import Decimal

import pytest

from moneytext.core.exceptions import DateParseError
from moneytext.parsers.statement import (
    StatementParser,
    date_to_epoch_ms,
    map_columns,
    parse_statement_date,
)
from moneytext.schemas.enums import (
    PaymentMethod,
    TransactionCategory,
    TransactionDirection,
    TransactionSource,
)
from moneytext.schemas.internal import ParsedStatementRow

HDFC_HEADER = [
    "Date",
    "Narration",
    "Chq./Ref.No.",
    "Value Dt",
    "Withdrawal Amt.",
    "Deposit Amt.",
    "Closing Balance",
]

HDFC_ROWS = [
    ["HDFC BANK Ltd.", "", "", "", "", "", ""],
    HDFC_HEADER,
    ["", "OPENING BALANCE", "", "", "", "", "10,000.00"],
    [
        "12/01/24",
        "UPI-SWIGGY-SWIGGY8@YBL-ICIC0000001-412345678901-PAYMENT",
        "0000412345678901",
        "12/01/24",
        "250.00",
        "",
        "9,750.00",
    ],
    [
        "15/01/24",
        "NEFT-HDFC0001234-ACME CORP PVT LTD-SALARY JAN",
        "NEFT123",
        "15/01/24",
        "",
        "50,000.00",
        "59,750.00",
    ],
    ["99/99/99", "Something weird", "", "", "100.00", "", ""],
]

STATEMENT_TEXT = """Statement of Account
Date Narration Amount Balance
12/01/2024 UPI/412345678901/SWIGGY/swiggy@icici 250.00 Dr 9,750.00 Cr
15/01/2024 NEFT/ACME CORP/SALARY 50,000.00 Cr 59,750.00 Cr
15 Jan 2024 AMAZON PAY INDIA Rs 1,299.00
Page 1 of 2
Closing Balance 59,750.00
"""


@pytest.fixture
def parser() -> StatementParser:
    return StatementParser()


class TestStatementDates:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("15/01/2024", date(2024, 1, 15)),
            ("15-01-2024", date(2024, 1, 15)),
            ("2024-01-15", date(2024, 1, 15)),
            ("15 Jan 2024", date(2024, 1, 15)),
            ("15-Jan-24", date(2024, 1, 15)),
            ("13 Sep, 2025", date(2025, 9, 13)),
            ("15/01/24", date(2024, 1, 15)),
            ("03/04/2024", date(2024, 4, 3)),
            ("01/15/2024", date(2024, 1, 15)),
        ],
    )
    def test_supported_formats(self, text: str, expected: date) -> None:
        assert parse_statement_date(text) == expected

    def test_impossible_date_raises(self) -> None:
        with pytest.raises(DateParseError):
            parse_statement_date("31/02/2024")

    def test_epoch_is_local_midnight(self) -> None:
        # Midnight Asia/Kolkata is 18:30 UTC the previous day.
        assert date_to_epoch_ms(date(2024, 1, 12)) == 1704997800000


def test_map_columns() -> None:
    assert map_columns(HDFC_HEADER) == {
        "date": 0,
        "description": 1,
        "debit": 4,
        "credit": 5,
        "balance": 6,
    }
    assert map_columns(["Txn Date", "Description", "Amount", "Balance"]) == {
        "date": 0,
        "description": 1,
        "balance": 3,
        "amount": 2,
    }


class TestTabularStatements:
    def test_debit_and_credit_columns(self, parser: StatementParser) -> None:
        records = parser.parse_rows(HDFC_ROWS)

        assert len(records) == 2
        debit, credit = records

        assert debit.source == TransactionSource.STATEMENT
        assert debit.amount == Decimal("250.00")
        assert debit.direction == TransactionDirection.DEBIT
        assert debit.balance_after == Decimal("9750.00")
        assert debit.category == TransactionCategory.FOOD
        assert debit.payment_method == PaymentMethod.UPI
        assert debit.timestamp == date_to_epoch_ms(date(2024, 1, 12))

        assert credit.amount == Decimal("50000.00")
        assert credit.direction == TransactionDirection.CREDIT
        assert credit.merchant == "ACME CORP PVT LTD"
        assert credit.category == TransactionCategory.SALARY
        assert credit.summary == "You received ₹50,000.00 as salary"

    def test_single_amount_column_with_markers(self, parser: StatementParser) -> None:
        rows = [
            ["Txn Date", "Description", "Amount", "Balance"],
            ["01-02-2024", "Electricity bill BESCOM", "1,200.00 Dr", "8,800.00"],
            ["02-02-2024", "Interest credit", "45.00 Cr", "8,845.00"],
        ]
        records = parser.parse_rows(rows)

        assert [r.direction for r in records] == [
            TransactionDirection.DEBIT,
            TransactionDirection.CREDIT,
        ]
        assert records[0].category == TransactionCategory.UTILITIES

    def test_negative_amount_is_debit(self, parser: StatementParser) -> None:
        rows = [
            ["Date", "Details", "Amount"],
            ["05/03/2024", "Refund adjustment", "-300.00"],
        ]
        entries = parser.extract_rows(rows)

        assert entries[0].direction == TransactionDirection.DEBIT
        assert entries[0].amount == Decimal("300.00")

    def test_rows_without_header_fall_back_to_text(self, parser: StatementParser) -> None:
        rows = [["12/01/2024", "UPI/412345678901/SWIGGY/swiggy@icici", "250.00 Dr"]]
        records = parser.parse_rows(rows)

        assert len(records) == 1
        assert records[0].amount == Decimal("250.00")

    def test_placeholder_cells_read_as_empty(self, parser: StatementParser) -> None:
        rows = [
            ["Date", "Description", "Debit", "Credit", "Balance"],
            ["12/01/2024", "UPI/STARBUCKS/coffee", "250.00", "-", "9,750.00"],
            ["15/01/2024", "NEFT ACME CORP SALARY", "--", "50,000.00", "59,750.00"],
            ["16/01/2024", "IMPS refund from merchant", "NA", "120.00", "NA"],
        ]
        entries = parser.extract_rows(rows)

        assert [(e.amount, e.direction) for e in entries] == [
            (Decimal("250.00"), TransactionDirection.DEBIT),
            (Decimal("50000.00"), TransactionDirection.CREDIT),
            (Decimal("120.00"), TransactionDirection.CREDIT),
        ]
        assert entries[2].balance is None

    def test_merchant_named_total_is_not_a_footer(self, parser: StatementParser) -> None:
        rows = [
            ["Date", "Description", "Debit", "Credit", "Balance"],
            ["18/01/2024", "TOTAL ENERGIES FUEL STATION", "1,800.00", "", "7,950.00"],
            ["", "Total", "2,050.00", "50,120.00", ""],
        ]
        entries = parser.extract_rows(rows)

        assert len(entries) == 1
        assert entries[0].description == "TOTAL ENERGIES FUEL STATION"


class TestTextStatements:
    def test_lines(self, parser: StatementParser) -> None:
        records = parser.parse_text(STATEMENT_TEXT)

        assert len(records) == 3
        swiggy, salary, amazon = records

        assert swiggy.amount == Decimal("250.00")
        assert swiggy.direction == TransactionDirection.DEBIT
        assert swiggy.balance_after == Decimal("9750.00")
        assert swiggy.merchant == "SWIGGY"
        assert swiggy.category == TransactionCategory.FOOD
        assert swiggy.raw_text == "UPI/412345678901/SWIGGY/swiggy@icici"

        assert salary.direction == TransactionDirection.CREDIT
        assert salary.amount == Decimal("50000.00")
        assert salary.merchant == "ACME CORP"
        assert salary.category == TransactionCategory.SALARY

        assert amazon.amount == Decimal("1299.00")
        assert amazon.direction == TransactionDirection.DEBIT
        assert amazon.balance_after is None
        assert amazon.category == TransactionCategory.SHOPPING

    def test_noise_lines_are_skipped(self, parser: StatementParser) -> None:
        assert parser.extract_line("Opening Balance 01/01/2024 10,000.00") is None
        assert parser.extract_line("Page 1 of 2") is None
        assert parser.extract_line("Total 59,750.00") is None
        assert parser.extract_line("Grand Total: 1,234.00") is None
        assert parser.extract_line("Statement of Account 01/01/2024 to 31/01/2024") is None

    def test_header_words_inside_merchant_names(self, parser: StatementParser) -> None:
        page = parser.extract_line("20/01/2024 PAGE INDUSTRIES LTD 1,500.00")
        assert page is not None
        assert page.amount == Decimal("1500.00")
        assert page.description == "PAGE INDUSTRIES LTD"

        energies = parser.extract_line("21/01/2024 TOTAL ENERGIES FUEL 900.00 Dr")
        assert energies is not None
        assert energies.direction == TransactionDirection.DEBIT
        assert parser.extract_line("") is None

    def test_line_without_amount(self, parser: StatementParser) -> None:
        assert parser.extract_line("12/01/2024 NEFT transfer pending") is None

    def test_empty_or_garbage_text(self, parser: StatementParser) -> None:
        assert parser.parse_text("") == []
        assert parser.parse_text("garbage without any dates") == []


def test_parse_single_entry(parser: StatementParser) -> None:
    entry = ParsedStatementRow(
        transaction_date=date(2024, 1, 12),
        description="  POS   STARBUCKS   COFFEE  ",
        amount=Decimal("320.00"),
        direction=TransactionDirection.DEBIT,
    )
    record = parser.parse(entry)

    assert record is not None
    assert record.raw_text == "POS STARBUCKS COFFEE"
    assert record.category == TransactionCategory.FOOD
    assert record.timestamp == date_to_epoch_ms(date(2024, 1, 12))
