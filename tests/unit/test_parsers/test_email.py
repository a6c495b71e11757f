"""Tests for the email source adapter and MIME payload decoding."""

import base64
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from moneytext.config import settings
from moneytext.core.exceptions import BodyDecodeError, DateParseError
from moneytext.parsers.email import (
    EmailParser,
    build_transaction_email_query,
    decode_part_data,
    email_from_api_message,
    extract_payload_text,
    html_to_text,
)
from moneytext.schemas.enums import PaymentMethod, TransactionCategory, TransactionDirection
from moneytext.schemas.internal import EmailMessage

CARD_ALERT = "Rs. 1,499.00 spent on your credit card XX1234 at AMAZON on 2024-01-12."


def _b64(text: str) -> str:
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii").rstrip("=")


@pytest.fixture
def parser() -> EmailParser:
    return EmailParser()


class TestPayloadDecoding:
    def test_decode_unpadded_base64url(self) -> None:
        assert decode_part_data(_b64("Rs 500 debited")) == "Rs 500 debited"

    def test_invalid_base64_raises(self) -> None:
        with pytest.raises(BodyDecodeError):
            decode_part_data("a")

    def test_html_to_text_drops_tags_and_scripts(self) -> None:
        markup = "<p>Hello <b>World</b></p><script>var x = 1;</script>"
        assert html_to_text(markup) == "Hello World"

    def test_plain_part_preferred_over_html(self) -> None:
        payload = {
            "mimeType": "multipart/alternative",
            "parts": [
                {"mimeType": "text/html", "body": {"data": _b64("<p>html body</p>")}},
                {"mimeType": "text/plain", "body": {"data": _b64("plain body")}},
            ],
        }
        assert extract_payload_text(payload) == "plain body"

    def test_nested_html_part(self) -> None:
        payload = {
            "mimeType": "multipart/mixed",
            "parts": [
                {
                    "mimeType": "multipart/alternative",
                    "parts": [
                        {
                            "mimeType": "text/html",
                            "body": {"data": _b64("<div>Rs 250.00 <i>debited</i></div>")},
                        }
                    ],
                }
            ],
        }
        assert extract_payload_text(payload) == "Rs 250.00 debited"

    def test_single_part_body(self) -> None:
        payload = {"mimeType": "text/plain", "body": {"data": _b64("single part")}}
        assert extract_payload_text(payload) == "single part"

    def test_empty_payload(self) -> None:
        assert extract_payload_text(None) is None
        assert extract_payload_text({"mimeType": "multipart/mixed", "parts": []}) is None


class TestEmailParser:
    def test_card_alert(self, parser: EmailParser) -> None:
        message = EmailMessage(
            subject="Transaction alert",
            sender="HDFC Bank <alerts@hdfcbank.net>",
            body=CARD_ALERT,
            date=1705035600000,
        )
        record = parser.parse(message)

        assert record is not None
        assert record.amount == Decimal("1499.00")
        assert record.direction == TransactionDirection.DEBIT
        assert record.merchant == "AMAZON"
        assert record.payment_method == PaymentMethod.CARD
        assert record.category == TransactionCategory.SHOPPING
        assert record.timestamp == 1705035600000
        assert record.raw_text.startswith("Transaction alert")

    def test_body_from_html_payload(self, parser: EmailParser) -> None:
        html = "<html><body><p>Rs 250.00 debited from your account. Paid to Swiggy via UPI</p></body></html>"
        message = EmailMessage(
            subject="Payment update",
            payload={"mimeType": "text/html", "body": {"data": _b64(html)}},
            date=1705035600000,
        )
        record = parser.parse(message)

        assert record is not None
        assert record.amount == Decimal("250.00")
        assert record.merchant == "Swiggy"
        assert record.category == TransactionCategory.FOOD

    def test_snippet_fallback_when_body_is_undecodable(self, parser: EmailParser) -> None:
        message = EmailMessage(
            subject="Alert",
            snippet="Rs 100 debited from your account",
            payload={"mimeType": "text/plain", "body": {"data": "a"}},
            date=1705035600000,
        )
        record = parser.parse(message)

        assert record is not None
        assert record.amount == Decimal("100")

    def test_sender_display_name_as_merchant(self, parser: EmailParser) -> None:
        message = EmailMessage(
            subject="Your order",
            sender="Zomato Orders <orders@zomato.com>",
            body="Payment of Rs 450 successful",
            date=1705035600000,
        )
        record = parser.parse(message)

        assert record is not None
        assert record.merchant == "Zomato Orders"
        assert record.category == TransactionCategory.FOOD

    def test_date_header_used_without_internal_date(self, parser: EmailParser) -> None:
        message = EmailMessage(
            subject="Alert",
            body=CARD_ALERT,
            date_header="Fri, 12 Jan 2024 10:30:00 +0530",
        )
        record = parser.parse(message)

        expected = int(datetime(2024, 1, 12, 5, 0, tzinfo=timezone.utc).timestamp() * 1000)
        assert record is not None
        assert record.timestamp == expected

    def test_missing_date_raises_and_batch_skips(self, parser: EmailParser) -> None:
        message = EmailMessage(subject="Alert", body=CARD_ALERT)
        with pytest.raises(DateParseError):
            parser.parse(message)
        assert parser.parse_many([message]) == []

    def test_newsletter_is_ignored(self, parser: EmailParser) -> None:
        message = EmailMessage(subject="Your weekly newsletter", body="Top stories", date=1)
        assert parser.parse(message) is None

    def test_batch_is_capped_and_newest_first(
        self, parser: EmailParser, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(settings, "email_max_batch", 2)
        messages = [
            EmailMessage(subject="Alert", body="Rs 100 debited from your account", date=1000),
            EmailMessage(subject="Alert", body="Rs 300 debited from your account", date=3000),
            EmailMessage(subject="Alert", body="Rs 200 debited from your account", date=2000),
        ]
        records = parser.parse_many(messages)

        assert [r.timestamp for r in records] == [3000, 1000]


def test_email_from_api_message() -> None:
    message = email_from_api_message(
        {
            "id": "18c2f",
            "snippet": "Rs 100 debited",
            "internalDate": "1705035600000",
            "payload": {
                "mimeType": "text/plain",
                "headers": [
                    {"name": "Subject", "value": "Debit alert"},
                    {"name": "From", "value": "Axis Bank <alerts@axisbank.com>"},
                    {"name": "Date", "value": "Fri, 12 Jan 2024 10:30:00 +0530"},
                ],
                "body": {"data": _b64("Rs 100 debited")},
            },
        }
    )
    assert message.message_id == "18c2f"
    assert message.subject == "Debit alert"
    assert message.sender == "Axis Bank <alerts@axisbank.com>"
    assert message.date == 1705035600000
    assert message.date_header == "Fri, 12 Jan 2024 10:30:00 +0530"


def test_search_query() -> None:
    query = build_transaction_email_query(newer_than_days=30)
    assert "from:@hdfcbank.net" in query
    assert "subject:debited" in query
    assert query.endswith("newer_than:30d")
    assert "newer_than" not in build_transaction_email_query()


def test_build_record_reads_merchant_from_text_before_sender(parser: EmailParser) -> None:
    sender = '"Swiggy" <orders@swiggy.in>'

    named = parser.build_record(
        "Your Netflix subscription of Rs 649 has been renewed", 1000, sender=sender
    )
    fallback = parser.build_record("Payment of Rs 500 successful", 1000, sender=sender)

    assert named is not None and named.merchant == "Netflix"
    assert fallback is not None and fallback.merchant == "Swiggy"
