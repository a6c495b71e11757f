"""Source adapters turning raw inputs into transaction records."""

from moneytext.parsers.base import TransactionParser
from moneytext.parsers.detector import SenderDetector
from moneytext.parsers.email import EmailParser, build_transaction_email_query
from moneytext.parsers.extractor import StatementContent, StatementFileExtractor
from moneytext.parsers.factory import ParserFactory, get_parser_factory, parse
from moneytext.parsers.sms import SmsParser
from moneytext.parsers.statement import StatementParser

__all__ = [
    "EmailParser",
    "ParserFactory",
    "SenderDetector",
    "SmsParser",
    "StatementContent",
    "StatementFileExtractor",
    "StatementParser",
    "TransactionParser",
    "build_transaction_email_query",
    "get_parser_factory",
    "parse",
]
