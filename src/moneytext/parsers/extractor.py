"""Statement file reading (PDF, CSV and spreadsheets) into rows or text.

Byte-level decoding lives here so the statement adapter only ever sees
cells or lines. All processing happens in memory.
"""

import csv
import io
import logging
import zipfile
from dataclasses import dataclass, field
from datetime import date, datetime

import pandas as pd
import xlrd
from xlrd.compdoc import CompDocError
from openpyxl.utils.exceptions import InvalidFileException
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from moneytext.core.exceptions import StatementFileError

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPES = frozenset({"application/pdf", "application/x-pdf"})
# Windows browsers label .csv uploads as application/vnd.ms-excel too.
CSV_CONTENT_TYPES = frozenset({"text/csv", "application/csv", "application/vnd.ms-excel"})
TEXT_CONTENT_TYPES = frozenset({"text/plain"})
XLSX_CONTENT_TYPES = frozenset(
    {"application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"}
)
EXCEL_CONTENT_TYPES = XLSX_CONTENT_TYPES | {"application/vnd.ms-excel"}

# Legacy .xls files are OLE2 compound documents; .xlsx files are zip archives.
OLE2_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ZIP_MAGIC = b"PK\x03\x04"
XLSX_SUFFIXES = (".xlsx", ".xlsm")

# Sheet names that usually hold the transaction table.
SHEET_HINTS = ("transaction", "statement", "activity", "history")


@dataclass
class StatementContent:
    """Decoded statement: table rows (CSV, spreadsheets) or plain text (PDF, TXT)."""

    rows: list[list[str]] = field(default_factory=list)
    text: str = ""

    @property
    def is_tabular(self) -> bool:
        return bool(self.rows)

    @property
    def entry_count(self) -> int:
        """Rows below one header row, or non-blank text lines."""
        if self.rows:
            return max(len(self.rows) - 1, 0)
        return sum(1 for line in self.text.splitlines() if line.strip())


class StatementFileExtractor:
    """Reads uploaded statement files.

    Example:
        >>> content = StatementFileExtractor().extract(pdf_bytes, content_type="application/pdf")
        >>> content.text.splitlines()[:3]
    """

    def detect_kind(
        self, data: bytes, content_type: str | None = None, filename: str | None = None
    ) -> str:
        """Return "pdf", "xls", "xlsx", "csv" or "text".

        Magic bytes win over the declared type, so an .xls upload labelled
        application/vnd.ms-excel is read as a spreadsheet while a CSV with
        the same label stays CSV.

        Raises:
            StatementFileError: FILE_003 for anything else
        """
        ctype = (content_type or "").split(";")[0].strip().lower()
        name = (filename or "").lower()

        if data.startswith(b"%PDF") or ctype in PDF_CONTENT_TYPES or name.endswith(".pdf"):
            return "pdf"
        if data.startswith(OLE2_MAGIC):
            return "xls"
        if data.startswith(ZIP_MAGIC) and (
            ctype in EXCEL_CONTENT_TYPES or name.endswith(XLSX_SUFFIXES)
        ):
            return "xlsx"
        if name.endswith(".xls"):
            return "xls"
        if ctype in XLSX_CONTENT_TYPES or name.endswith(XLSX_SUFFIXES):
            return "xlsx"
        if ctype in CSV_CONTENT_TYPES or name.endswith(".csv"):
            return "csv"
        if ctype in TEXT_CONTENT_TYPES or name.endswith(".txt"):
            return "text"
        raise StatementFileError("FILE_003", {"content_type": ctype, "filename": filename})

    def extract(
        self,
        data: bytes,
        content_type: str | None = None,
        filename: str | None = None,
        password: str | None = None,
    ) -> StatementContent:
        """Decode a statement file.

        Args:
            data: File content
            content_type: Declared MIME type, if any
            filename: Original file name, if any
            password: PDF password for encrypted statements

        Returns:
            StatementContent with rows (CSV, spreadsheets) or text (PDF/TXT)

        Raises:
            StatementFileError: If the file is empty, corrupted, locked or unsupported
        """
        if not data:
            raise StatementFileError("FILE_001", {"reason": "empty file"})

        kind = self.detect_kind(data, content_type, filename)
        if kind == "pdf":
            return StatementContent(text=self.extract_pdf_text(data, password))
        if kind in ("xls", "xlsx"):
            return StatementContent(rows=self.extract_excel_rows(data, kind))
        if kind == "csv":
            return StatementContent(rows=self.extract_csv_rows(data))
        return StatementContent(text=self._decode_text(data))

    def extract_pdf_text(self, data: bytes, password: str | None = None) -> str:
        normalized_password = password.strip() if isinstance(password, str) else None

        try:
            reader = PdfReader(io.BytesIO(data))
        except (PdfReadError, ValueError, OSError) as e:
            raise StatementFileError("FILE_001", {"reason": str(e)}) from e

        if reader.is_encrypted:
            # Some statements are encrypted with an empty user password.
            ok = reader.decrypt(normalized_password or "")
            if not ok:
                raise StatementFileError(
                    "FILE_002",
                    {"reason": "password required" if not normalized_password else "incorrect password"},
                )

        try:
            pages = [(page.extract_text() or "") for page in reader.pages]
        except (PdfReadError, ValueError, KeyError) as e:
            raise StatementFileError("FILE_001", {"reason": str(e)}) from e

        logger.debug("Extracted statement PDF", extra={"found": len(pages)})
        return "\n".join(text for text in pages if text.strip())

    def extract_csv_rows(self, data: bytes) -> list[list[str]]:
        text = self._decode_text(data)
        try:
            dialect = csv.Sniffer().sniff(text[:4096], delimiters=",;\t|")
        except csv.Error:
            dialect = csv.excel
        try:
            rows = [
                [cell.strip() for cell in row]
                for row in csv.reader(io.StringIO(text), dialect)
            ]
        except csv.Error as e:
            raise StatementFileError("FILE_001", {"reason": str(e)}) from e
        return [row for row in rows if any(row)]

    def extract_excel_rows(self, data: bytes, kind: str = "xlsx") -> list[list[str]]:
        """Read the transaction sheet of a workbook as rows of text cells.

        A sheet whose name looks like a transaction listing is preferred;
        otherwise the first sheet is used. Date cells come back as
        dd/mm/YYYY so the statement date parser reads them day-first.
        """
        engine = "xlrd" if kind == "xls" else "openpyxl"
        try:
            sheets = pd.read_excel(
                io.BytesIO(data), sheet_name=None, header=None, dtype=object, engine=engine
            )
        except (
            ValueError,
            KeyError,
            OSError,
            zipfile.BadZipFile,
            InvalidFileException,
            xlrd.XLRDError,
            CompDocError,
        ) as e:
            raise StatementFileError("FILE_001", {"reason": str(e), "kind": kind}) from e

        if not sheets:
            return []
        names = list(sheets)
        chosen = next(
            (name for name in names if any(hint in str(name).lower() for hint in SHEET_HINTS)),
            names[0],
        )
        frame = sheets[chosen]
        logger.debug("Read statement workbook", extra={"sheet": str(chosen), "found": len(frame)})

        rows = [
            [_cell_text(value) for value in row]
            for row in frame.itertuples(index=False, name=None)
        ]
        return [row for row in rows if any(row)]

    def _decode_text(self, data: bytes) -> str:
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError:
            return data.decode("latin-1")


def _cell_text(value) -> str:
    if value is None or pd.isna(value):
        return ""
    if isinstance(value, (datetime, date)):
        return value.strftime("%d/%m/%Y")
    return str(value).strip()
