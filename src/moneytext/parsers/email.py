"""Email source adapter.

Emails arrive from the mail-provider collaborator either pre-decoded
(``body``) or as a raw API payload with base64url-encoded MIME parts. The
adapter resolves readable text (plain part, then HTML part with tags
stripped, then the provider's snippet) and runs the shared pipeline over
``subject + body``.
"""

import base64
import binascii
import logging
from email.utils import parsedate_to_datetime
from typing import Any, Iterable

from lxml import etree
from lxml import html as lxml_html

from moneytext.config import settings
from moneytext.core.exceptions import BodyDecodeError, DateParseError
from moneytext.extraction.direction import keyword_counts
from moneytext.extraction.patterns import AMOUNT_PATTERNS
from moneytext.parsers.base import TransactionParser
from moneytext.schemas.enums import TransactionSource
from moneytext.schemas.internal import EmailMessage
from moneytext.schemas.transaction import TransactionRecord

logger = logging.getLogger(__name__)

# Currency-prefixed and currency-suffixed amount patterns.
_CURRENCY_AMOUNT_PATTERNS = AMOUNT_PATTERNS[:2]

SEARCH_KEYWORDS = (
    "transaction",
    "debit",
    "credit",
    "payment",
    "transfer",
    "UPI",
    "NEFT",
    "IMPS",
    "withdrawal",
    "deposit",
    "statement",
    "alert",
    "rupees",
    "INR",
    "debited",
    "credited",
    "spent",
    "received",
)

SEARCH_SENDERS = (
    "from:@hdfcbank.net",
    "from:@icicibank.com",
    "from:@axisbank.com",
    "from:@sbi.co.in",
    "from:@kotak.com",
    "from:alerts@",
    "from:noreply@",
    "from:transactions@",
)


def build_transaction_email_query(newer_than_days: int | None = None) -> str:
    """Build the mail-provider search query for transaction emails.

    Args:
        newer_than_days: Restrict to recent mail (e.g. 30 -> "newer_than:30d")

    Returns:
        Gmail-style search string
    """
    senders = " OR ".join(SEARCH_SENDERS)
    keywords = " OR ".join(f"subject:{kw}" for kw in SEARCH_KEYWORDS)
    query = f"({senders}) OR ({keywords})"
    if newer_than_days:
        query = f"({query}) newer_than:{newer_than_days}d"
    return query


def email_from_api_message(message: dict[str, Any]) -> EmailMessage:
    """Convert a provider "full" message resource into an ``EmailMessage``."""
    payload = message.get("payload") or {}
    headers = {
        h.get("name", "").lower(): h.get("value", "") for h in payload.get("headers") or []
    }
    internal_date = message.get("internalDate")
    return EmailMessage(
        id=message.get("id", ""),
        subject=headers.get("subject", ""),
        sender=headers.get("from", ""),
        snippet=message.get("snippet", ""),
        payload=payload,
        date=int(internal_date) if internal_date else None,
        date_header=headers.get("date") or None,
    )


def decode_part_data(data: str) -> str:
    """Decode a base64url MIME body (padding optional)."""
    padded = data + "=" * (-len(data) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
    except (binascii.Error, ValueError) as e:
        raise BodyDecodeError({"reason": "invalid base64"}) from e
    return raw.decode("utf-8", errors="replace")


def html_to_text(markup: str) -> str:
    """Strip tags (and script/style content) from an HTML body."""
    if not markup.strip():
        return ""
    try:
        doc = lxml_html.fromstring(markup)
    except (etree.ParserError, ValueError) as e:
        raise BodyDecodeError({"reason": "unparseable html"}) from e
    for element in doc.xpath("//script|//style"):
        element.drop_tree()
    return " ".join(doc.text_content().split())


def _find_part(payload: dict[str, Any], mime_type: str) -> dict[str, Any] | None:
    """Depth-first search for the first part of ``mime_type`` carrying data."""
    if payload.get("mimeType") == mime_type and (payload.get("body") or {}).get("data"):
        return payload
    for part in payload.get("parts") or []:
        found = _find_part(part, mime_type)
        if found is not None:
            return found
    return None


def extract_payload_text(payload: dict[str, Any] | None) -> str | None:
    """Resolve readable text from a MIME payload.

    Order: single-part body data, first text/plain part, first text/html part.

    Raises:
        BodyDecodeError: If the chosen part cannot be decoded
    """
    if not payload:
        return None

    if not payload.get("parts") and (payload.get("body") or {}).get("data"):
        text = decode_part_data(payload["body"]["data"])
        if payload.get("mimeType") == "text/html":
            text = html_to_text(text)
        return text or None

    plain = _find_part(payload, "text/plain")
    if plain is not None:
        return decode_part_data(plain["body"]["data"]) or None

    rich = _find_part(payload, "text/html")
    if rich is not None:
        return html_to_text(decode_part_data(rich["body"]["data"])) or None

    return None


class EmailParser(TransactionParser):
    """Turns transaction notification emails into records.

    Example:
        >>> parser = EmailParser()
        >>> records = parser.parse_many(emails)  # newest first
    """

    source = TransactionSource.EMAIL

    def resolve_body(self, message: EmailMessage) -> str:
        if message.body:
            return message.body
        try:
            text = extract_payload_text(message.payload)
        except BodyDecodeError as e:
            logger.info(
                "Email body not decodable, using snippet",
                extra={"error_code": e.error_code, "source": self.source.value},
            )
            text = None
        if text:
            return text
        return message.snippet[: settings.raw_text_max_length]

    def resolve_timestamp(self, message: EmailMessage) -> int:
        """Epoch millis from the provider date, else the Date header.

        Raises:
            DateParseError: If neither is usable
        """
        if message.date is not None:
            return message.date
        if message.date_header:
            try:
                parsed = parsedate_to_datetime(message.date_header)
            except (TypeError, ValueError) as e:
                raise DateParseError({"header": message.date_header}) from e
            return int(parsed.timestamp() * 1000)
        raise DateParseError({"reason": "no date"})

    def is_transactional(self, content: str) -> bool:
        """Require a currency amount and at least one debit/credit keyword."""
        if not any(pattern.search(content) for pattern in _CURRENCY_AMOUNT_PATTERNS):
            return False
        debit, credit = keyword_counts(content)
        return debit + credit > 0

    def parse(self, message: EmailMessage) -> TransactionRecord | None:
        content = f"{message.subject} {self.resolve_body(message)}".strip()
        if not self.is_transactional(content):
            return None
        timestamp = self.resolve_timestamp(message)
        return self.build_record(content, timestamp, sender=message.sender)

    def parse_many(self, messages: Iterable[EmailMessage]) -> list[TransactionRecord]:
        """Parse up to ``email_max_batch`` emails, newest first."""
        batch = list(messages)[: settings.email_max_batch]
        records = super().parse_many(batch)
        records.sort(key=lambda r: r.timestamp, reverse=True)
        return records
