"""Bank-statement source adapter.

Handles both shapes statements come in:

- tabular rows (CSV exports, extracted tables) with a header row naming the
  date, description, debit/credit or amount, and balance columns;
- free-text lines (PDF text) where each transaction line carries a date and
  one or more amounts.

Rows are first reduced to ``ParsedStatementRow`` (date, description,
amount, direction, balance) and then run through the shared pipeline with
the description as the record text.
"""

import logging
import re
from datetime import date, datetime, time
from decimal import Decimal
from typing import Iterable, Sequence
from zoneinfo import ZoneInfo

from pydantic import ValidationError

from moneytext.config import settings
from moneytext.core.exceptions import AmountParseError, DateParseError, ExtractionError
from moneytext.extraction.amount import parse_amount
from moneytext.extraction.direction import classify_direction
from moneytext.extraction.patterns import (
    HEADER_KEYS,
    STATEMENT_AMOUNT_PATTERN,
    STATEMENT_DATE_FORMATS,
    STATEMENT_DATE_PATTERN,
    STATEMENT_MIN_DESCRIPTION_LENGTH,
    STATEMENT_NOISE_PATTERN,
)
from moneytext.parsers.base import TransactionParser
from moneytext.schemas.enums import TransactionDirection, TransactionSource
from moneytext.schemas.internal import ParsedStatementRow
from moneytext.schemas.transaction import TransactionRecord

logger = logging.getLogger(__name__)

# Header rows are expected near the top of an export.
HEADER_SEARCH_ROWS = 15


def parse_statement_date(text: str) -> date:
    """Parse a statement date strictly against the supported formats.

    Day-first orderings are tried before month-first, so "03/04/2024" is
    3 April.

    Raises:
        DateParseError: If no format matches exactly
    """
    cleaned = " ".join(text.strip().split())
    for fmt in STATEMENT_DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    raise DateParseError({"text": text})


def date_to_epoch_ms(value: date) -> int:
    """Midnight of ``value`` in the configured statement timezone, in epoch ms."""
    moment = datetime.combine(value, time.min, tzinfo=ZoneInfo(settings.timezone))
    return int(moment.timestamp() * 1000)


def map_columns(header: Sequence[str]) -> dict[str, int]:
    """Assign roles (date, description, debit, credit, balance, amount) to columns.

    Matching is by case-insensitive substring; each column takes at most one
    role and the first matching column wins a role. "amount" never claims a
    balance column.
    """
    lowered = [cell.strip().lower() for cell in header]
    columns: dict[str, int] = {}
    for role, keys in HEADER_KEYS:
        if role in columns:
            continue
        for index, cell in enumerate(lowered):
            if index in columns.values():
                continue
            if role == "amount" and "balance" in cell:
                continue
            if any(key in cell for key in keys):
                columns[role] = index
                break
    return columns


def _is_header(columns: dict[str, int]) -> bool:
    has_amount = "amount" in columns or "debit" in columns or "credit" in columns
    return "date" in columns and "description" in columns and has_amount


def _cell(row: Sequence[str], index: int | None) -> str:
    if index is None or index >= len(row):
        return ""
    return (row[index] or "").strip()


def _amount_cell(cell: str) -> Decimal | None:
    """Parse one amount cell; placeholders such as "-", "--" or "NA" read as empty."""
    if not any(ch.isdigit() for ch in cell):
        return None
    try:
        return parse_amount(cell)
    except AmountParseError:
        logger.debug("Ignoring unparseable amount cell", extra={"error_code": "EXTRACT_001"})
        return None


def _signed_amount(cell: str) -> tuple[Decimal, TransactionDirection | None]:
    """Parse an amount cell, reading Dr/Cr markers and negative notation."""
    marker = re.search(r"(?i)\b(dr|cr)\b", cell)
    negative = cell.startswith("-") or cell.endswith("-") or cell.startswith("(")
    value = parse_amount(cell)
    if marker:
        direction = (
            TransactionDirection.CREDIT if marker.group(1).lower() == "cr" else TransactionDirection.DEBIT
        )
        return value, direction
    if negative:
        return value, TransactionDirection.DEBIT
    return value, None


def _description_ok(description: str) -> bool:
    if len(description) < STATEMENT_MIN_DESCRIPTION_LENGTH:
        return False
    return STATEMENT_NOISE_PATTERN.search(description) is None


class StatementParser(TransactionParser):
    """Turns statement rows or statement text into transaction records.

    Example:
        >>> parser = StatementParser()
        >>> records = parser.parse_rows(csv_rows)
        >>> records = parser.parse_text(pdf_text)
    """

    source = TransactionSource.STATEMENT

    def parse(self, entry: ParsedStatementRow) -> TransactionRecord | None:
        description = entry.description[: settings.statement_description_max_length]
        return self.build_record(
            description,
            date_to_epoch_ms(entry.transaction_date),
            amount=entry.amount,
            direction=entry.direction,
            balance=entry.balance,
        )

    # --- tabular ---------------------------------------------------------

    def find_header(self, rows: Sequence[Sequence[str]]) -> tuple[int, dict[str, int]] | None:
        for index, row in enumerate(rows[:HEADER_SEARCH_ROWS]):
            columns = map_columns(row)
            if _is_header(columns):
                return index, columns
        return None

    def extract_row(self, row: Sequence[str], columns: dict[str, int]) -> ParsedStatementRow | None:
        """Reduce one table row to a statement entry; None for non-transaction rows.

        Raises:
            DateParseError: If the date cell is filled but unparseable
        """
        date_text = _cell(row, columns.get("date"))
        description = " ".join(_cell(row, columns.get("description")).split())
        if not date_text or not _description_ok(description):
            return None

        amount: Decimal | None = None
        direction: TransactionDirection | None = None

        debit_text = _cell(row, columns.get("debit"))
        credit_text = _cell(row, columns.get("credit"))
        amount_text = _cell(row, columns.get("amount"))

        debit = _amount_cell(debit_text)
        credit = _amount_cell(credit_text)
        if debit is not None and debit > 0:
            amount, direction = debit, TransactionDirection.DEBIT
        elif credit is not None and credit > 0:
            amount, direction = credit, TransactionDirection.CREDIT
        elif _amount_cell(amount_text) is not None:
            value, signed_direction = _signed_amount(amount_text)
            if value > 0:
                amount, direction = value, signed_direction
        if amount is None:
            return None

        balance = _amount_cell(_cell(row, columns.get("balance")))

        return ParsedStatementRow(
            transaction_date=parse_statement_date(date_text),
            description=description,
            amount=amount,
            direction=direction or classify_direction(description),
            balance=balance,
        )

    def extract_rows(self, rows: Sequence[Sequence[str]]) -> list[ParsedStatementRow]:
        found = self.find_header(rows)
        if found is None:
            logger.info("No statement header row found", extra={"source": self.source.value})
            return []
        header_index, columns = found

        entries: list[ParsedStatementRow] = []
        for row in rows[header_index + 1 :]:
            try:
                entry = self.extract_row(row, columns)
            except (ExtractionError, ValidationError) as e:
                code = getattr(e, "error_code", "EXTRACT_004")
                logger.debug("Skipping statement row", extra={"error_code": code})
                continue
            if entry is not None:
                entries.append(entry)
        return entries

    def parse_rows(self, rows: Sequence[Sequence[str]]) -> list[TransactionRecord]:
        """Parse a table of cells (header row included).

        Tables without a recognizable header are read as free text instead.
        """
        if self.find_header(rows) is None:
            return self.parse_text("\n".join(" ".join(cell for cell in row if cell) for row in rows))
        return self.parse_many(self.extract_rows(rows))

    # --- free text -------------------------------------------------------

    def extract_line(self, line: str) -> ParsedStatementRow | None:
        """Reduce one text line to a statement entry; None if it isn't one.

        Raises:
            DateParseError: If the date-like token is not a real date
        """
        line = " ".join(line.split())
        if not line or STATEMENT_NOISE_PATTERN.search(line):
            return None

        date_match = STATEMENT_DATE_PATTERN.search(line)
        if not date_match:
            return None
        without_dates = STATEMENT_DATE_PATTERN.sub(lambda m: " " * len(m.group(0)), line)

        amounts = list(STATEMENT_AMOUNT_PATTERN.finditer(without_dates))
        if not amounts:
            return None

        first = amounts[0]
        amount = parse_amount(first.group(1) or first.group(2) or first.group(3))
        if amount <= 0:
            return None
        balance = None
        if len(amounts) > 1:
            last = amounts[-1]
            balance = parse_amount(last.group(1) or last.group(2) or last.group(3))

        description = without_dates
        for match in reversed(amounts):
            description = description[: match.start()] + " " + description[match.end() :]
        description = " ".join(description.split()).strip(" -|:,")
        if not _description_ok(description):
            return None

        marker = (first.group(4) or "").lower()
        if marker == "cr":
            direction = TransactionDirection.CREDIT
        elif marker == "dr":
            direction = TransactionDirection.DEBIT
        else:
            direction = classify_direction(line)

        return ParsedStatementRow(
            transaction_date=parse_statement_date(date_match.group(1)),
            description=description,
            amount=amount,
            direction=direction,
            balance=balance,
        )

    def extract_lines(self, lines: Iterable[str]) -> list[ParsedStatementRow]:
        entries: list[ParsedStatementRow] = []
        for line in lines:
            try:
                entry = self.extract_line(line)
            except (ExtractionError, ValidationError) as e:
                code = getattr(e, "error_code", "EXTRACT_004")
                logger.debug("Skipping statement line", extra={"error_code": code})
                continue
            if entry is not None:
                entries.append(entry)
        return entries

    def parse_text(self, text: str) -> list[TransactionRecord]:
        """Parse statement text line by line."""
        if not text:
            return []
        return self.parse_many(self.extract_lines(text.splitlines()))
