"""Text-message (SMS) source adapter."""

import logging

from moneytext.parsers.base import TransactionParser
from moneytext.parsers.detector import SenderDetector
from moneytext.schemas.enums import TransactionSource
from moneytext.schemas.internal import SmsMessage
from moneytext.schemas.transaction import TransactionRecord

logger = logging.getLogger(__name__)


class SmsParser(TransactionParser):
    """Turns bank alert messages into transaction records.

    The sender is only used for the validity gate: an SMS sender is the
    bank itself, so it is never offered as the merchant.

    Example:
        >>> parser = SmsParser()
        >>> record = parser.parse(SmsMessage(sender="VM-HDFCBK", body=body, timestamp=ts))
        >>> record.merchant
        'AMAZON'
    """

    source = TransactionSource.SMS

    def __init__(self, detector: SenderDetector | None = None):
        self.detector = detector or SenderDetector()

    def is_transactional(self, message: SmsMessage) -> bool:
        return self.detector.is_transactional(message.sender, message.body)

    def parse(self, message: SmsMessage) -> TransactionRecord | None:
        """Parse one message; None when it is not a transaction alert."""
        if not self.is_transactional(message):
            return None
        return self.build_record(message.body, message.timestamp)

    def parse_many(self, messages) -> list[TransactionRecord]:
        records = super().parse_many(messages)
        logger.debug("Parsed SMS batch", extra={"source": self.source.value, "found": len(records)})
        return records
