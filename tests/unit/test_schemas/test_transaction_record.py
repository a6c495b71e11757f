"""Tests for the canonical transaction record and its enums."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from moneytext.schemas.enums import (
    ConfidenceLevel,
    InvestmentType,
    PaymentMethod,
    TransactionCategory,
    TransactionDirection,
    TransactionSource,
)
from moneytext.schemas.internal import EmailMessage, ParsedStatementRow
from moneytext.schemas.transaction import TransactionRecord
from moneytext.summary import format_amount, generate_summary


def make_record(**overrides) -> TransactionRecord:
    fields = {
        "raw_text": "Rs 500 debited",
        "source": TransactionSource.SMS,
        "timestamp": 1705035600000,
        "amount": Decimal("500.00"),
    }
    fields.update(overrides)
    return TransactionRecord(**fields)


class TestTransactionRecord:
    def test_defaults(self) -> None:
        record = make_record()
        assert record.direction == TransactionDirection.DEBIT
        assert record.category == TransactionCategory.OTHER
        assert record.summary == "You paid ₹500.00 to someone"

    def test_amount_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            make_record(amount=Decimal("0"))
        with pytest.raises(ValidationError):
            make_record(amount=Decimal("-5"))

    def test_bounded_text_fields(self) -> None:
        record = make_record(
            raw_text="x" * 800,
            merchant="M" * 40,
            reference_no="R" * 40,
        )
        assert len(record.raw_text) == 500
        assert len(record.merchant) == 30
        assert len(record.reference_no) == 20

    def test_blank_merchant_becomes_none(self) -> None:
        assert make_record(merchant="   ").merchant is None

    def test_investment_type_requires_investment_category(self) -> None:
        with pytest.raises(ValidationError):
            make_record(investment_type=InvestmentType.SIP)
        record = make_record(
            category=TransactionCategory.INVESTMENT, investment_type=InvestmentType.SIP
        )
        assert record.summary == "You invested ₹500.00 in SIP"

    def test_immutable(self) -> None:
        record = make_record()
        with pytest.raises(ValidationError):
            record.amount = Decimal("1")

    def test_summary_is_serialized(self) -> None:
        data = make_record(merchant="AMAZON", category=TransactionCategory.SHOPPING).model_dump(
            mode="json"
        )
        assert data["summary"] == "You paid ₹500.00 to AMAZON (Shopping)"
        assert data["amount"] == "500.00"


class TestSummary:
    def test_format_amount(self) -> None:
        assert format_amount(Decimal("1234.5")) == "₹1,234.50"

    def test_food(self) -> None:
        line = generate_summary(
            Decimal("250"), TransactionDirection.DEBIT, TransactionCategory.FOOD, merchant="Swiggy"
        )
        assert line == "You paid ₹250.00 for food at Swiggy"

    def test_salary(self) -> None:
        line = generate_summary(
            Decimal("50000"), TransactionDirection.CREDIT, TransactionCategory.SALARY
        )
        assert line == "You received ₹50,000.00 as salary"

    def test_transfer_has_no_category_suffix(self) -> None:
        line = generate_summary(
            Decimal("100"), TransactionDirection.CREDIT, TransactionCategory.TRANSFER, merchant="Ravi"
        )
        assert line == "You received ₹100.00 from Ravi"


class TestEnums:
    def test_every_member_has_a_display_name(self) -> None:
        for enum_cls in (TransactionCategory, InvestmentType, PaymentMethod):
            for member in enum_cls:
                assert member.display_name

    def test_confidence_ordering(self) -> None:
        assert ConfidenceLevel.NONE < ConfidenceLevel.LOW < ConfidenceLevel.MEDIUM
        assert ConfidenceLevel.HIGH >= ConfidenceLevel.MEDIUM
        assert not ConfidenceLevel.LOW >= ConfidenceLevel.MEDIUM


class TestInputSchemas:
    def test_email_aliases(self) -> None:
        message = EmailMessage.model_validate(
            {"id": "abc", "from": "Bank <a@b.com>", "subject": "Alert", "date": 1}
        )
        assert message.message_id == "abc"
        assert message.sender == "Bank <a@b.com>"

    def test_statement_row_description(self) -> None:
        with pytest.raises(ValidationError):
            ParsedStatementRow(
                transaction_date="2024-01-12", description="   ", amount=Decimal("1")
            )
        row = ParsedStatementRow(
            transaction_date="2024-01-12", description=" A  B ", amount=Decimal("1")
        )
        assert row.description == "A B"
