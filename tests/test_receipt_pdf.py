from datetime import datetime
from io import BytesIO

import pytest
from pypdf import PdfReader

from receiptly.core.config import Settings
from receiptly.pdf.raster_export import DocumentGenerationError
from receiptly.services import receipt_pdf
from receiptly.services.receipt_pdf import generate_document, next_receipt_number, receipt_filename
from receiptly.services.receipt_types import ReceiptRecord, SignatureImage


def _john_doe():
    return ReceiptRecord(
        tenant_name="John Doe",
        amount="50000",
        term="Monthly",
        duration_from="2025-08-01",
        duration_to="2025-08-31",
        payment_mode="Cash",
        receipt_number="RCT-2509-1650",
    )


def test_generate_document_end_to_end():
    pdf = generate_document(_john_doe())
    assert len(pdf) > 0
    assert pdf[:4] == b"%PDF"
    assert len(PdfReader(BytesIO(pdf)).pages) == 1


def test_generate_document_with_signature_and_legacy_settings(signature_png):
    cfg = Settings(PAGE_ORIENTATION="landscape", ID_ROW_STYLE="two_column",
                   COMPACT_FRAME=True)
    pdf = generate_document(_john_doe(), SignatureImage.from_bytes(signature_png),
                            settings=cfg)
    page = PdfReader(BytesIO(pdf)).pages[0]
    assert float(page.mediabox.width) > float(page.mediabox.height)


def test_generation_failure_surfaces_one_error(monkeypatch):
    def broken(*args, **kwargs):
        raise DocumentGenerationError("Failed to generate PDF. Please try again.")

    monkeypatch.setattr(receipt_pdf, "export", broken)
    with pytest.raises(DocumentGenerationError):
        generate_document(_john_doe())


def test_next_receipt_number_policies():
    now = datetime(2025, 9, 3, 16, 50)
    assert next_receipt_number("timestamp", now=now) == "RCT-2509-1650"
    assert next_receipt_number("sequence", 42, now=now) == "RCT-2025-0042"


def test_receipt_filename():
    assert receipt_filename("RCT-2509-1650") == "receipt-RCT-2509-1650.pdf"
    assert receipt_filename("a/b c") == "receipt-a_b_c.pdf"
