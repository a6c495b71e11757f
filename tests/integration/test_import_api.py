"""Integration tests for the import endpoints (parse + store with dedup)."""
import io
from datetime import datetime

import pytest
from httpx import AsyncClient
from openpyxl import Workbook
from pypdf import PdfWriter
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from moneytext.config import settings

HDFC_SMS = {
    "sender": "VM-HDFCBK",
    "body": (
        "Rs.500.00 debited from A/c XXXX1234 to AMAZON on 12-01-24. "
        "UPI Ref 123456789. Avl Bal Rs.4500.00"
    ),
    "timestamp": 1705035600000,
}

STATEMENT_CSV = (
    "Date,Narration,Chq./Ref.No.,Value Dt,Withdrawal Amt.,Deposit Amt.,Closing Balance\n"
    ",OPENING BALANCE,,,,,\"10,000.00\"\n"
    "12/01/24,UPI-SWIGGY-SWIGGY8@YBL-412345678901,0000412345678901,12/01/24,250.00,,\"9,750.00\"\n"
    "15/01/24,NEFT-HDFC0001234-ACME CORP-SALARY,NEFT123,15/01/24,,\"50,000.00\",\"59,750.00\"\n"
).encode("utf-8")


def make_statement_pdf() -> bytes:
    buf = io.BytesIO()
    pdf = canvas.Canvas(buf, pagesize=A4)
    lines = [
        "Statement of Account",
        "12/01/2024 UPI/412345678901/SWIGGY/swiggy@icici 250.00 Dr 9,750.00 Cr",
        "15/01/2024 NEFT/ACME CORP/SALARY 50,000.00 Cr 59,750.00 Cr",
    ]
    for i, line in enumerate(lines):
        pdf.drawString(40, 800 - i * 20, line)
    pdf.showPage()
    pdf.save()
    return buf.getvalue()


def make_encrypted_pdf() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    writer.encrypt("secret")
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


@pytest.mark.asyncio
async def test_import_sms_is_idempotent(client: AsyncClient):
    payload = [HDFC_SMS, {"sender": "VM-HDFCBK", "body": "Your OTP is 123456", "timestamp": 1}]

    first = await client.post("/api/v1/import/sms", json=payload)
    second = await client.post("/api/v1/import/sms", json=payload)

    assert first.status_code == 200
    assert first.json() == {
        "source": "SMS",
        "received": 2,
        "found": 1,
        "inserted": 1,
        "skipped": 0,
        "error_code": None,
    }
    assert second.json()["inserted"] == 0
    assert second.json()["skipped"] == 1


@pytest.mark.asyncio
async def test_import_emails(client: AsyncClient):
    payload = [
        {
            "id": "a1",
            "from": "HDFC Bank <alerts@hdfcbank.net>",
            "subject": "Transaction alert",
            "body": "Rs. 1,499.00 spent on your credit card XX1234 at AMAZON on 2024-01-12.",
            "date": 1705035600000,
        },
        {"id": "a2", "subject": "Newsletter", "body": "Nothing here", "date": 1705035600000},
    ]
    response = await client.post("/api/v1/import/emails", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert (data["source"], data["found"], data["inserted"]) == ("EMAIL", 1, 1)


@pytest.mark.asyncio
async def test_import_statement_csv_twice(client: AsyncClient):
    headers = {"Content-Type": "text/csv", "X-Filename": "statement.csv"}

    first = await client.post("/api/v1/import/statement", content=STATEMENT_CSV, headers=headers)
    second = await client.post("/api/v1/import/statement", content=STATEMENT_CSV, headers=headers)

    assert first.status_code == 200
    assert (first.json()["found"], first.json()["inserted"]) == (2, 2)
    assert (second.json()["inserted"], second.json()["skipped"]) == (0, 2)


@pytest.mark.asyncio
async def test_import_statement_pdf(client: AsyncClient):
    response = await client.post(
        "/api/v1/import/statement",
        content=make_statement_pdf(),
        headers={"Content-Type": "application/pdf"},
    )

    assert response.status_code == 200
    data = response.json()
    assert (data["found"], data["inserted"], data["error_code"]) == (2, 2, None)


@pytest.mark.asyncio
async def test_import_locked_pdf_reports_password_required(client: AsyncClient):
    response = await client.post(
        "/api/v1/import/statement",
        content=make_encrypted_pdf(),
        headers={"Content-Type": "application/pdf"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["error_code"] == "FILE_002"
    assert data["inserted"] == 0


@pytest.mark.asyncio
async def test_import_locked_pdf_with_password(client: AsyncClient):
    response = await client.post(
        "/api/v1/import/statement",
        content=make_encrypted_pdf(),
        headers={"Content-Type": "application/pdf", "X-PDF-Password": "secret"},
    )

    assert response.status_code == 200
    assert response.json()["error_code"] is None


@pytest.mark.asyncio
async def test_import_statement_unsupported_type(client: AsyncClient):
    response = await client.post(
        "/api/v1/import/statement",
        content=b"\x89PNG",
        headers={"Content-Type": "image/png"},
    )

    assert response.status_code == 415
    assert response.json()["error_code"] == "API_001"


@pytest.mark.asyncio
async def test_import_statement_too_large(client: AsyncClient, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "statement_max_size_mb", 0)

    response = await client.post(
        "/api/v1/import/statement",
        content=STATEMENT_CSV,
        headers={"Content-Type": "text/csv"},
    )

    assert response.status_code == 413
    assert response.json()["error_code"] == "API_002"


@pytest.mark.asyncio
async def test_import_statement_xlsx(client: AsyncClient):
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["Date", "Description", "Debit", "Credit", "Balance"])
    sheet.append([datetime(2024, 1, 12), "UPI/STARBUCKS/coffee", 250, "-", 9750])
    sheet.append([datetime(2024, 1, 15), "NEFT ACME CORP SALARY", "-", 50000, 59750])
    buf = io.BytesIO()
    workbook.save(buf)

    response = await client.post(
        "/api/v1/import/statement",
        content=buf.getvalue(),
        headers={
            "Content-Type": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            "X-Filename": "statement.xlsx",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert (data["received"], data["found"], data["inserted"], data["error_code"]) == (2, 2, 2, None)
