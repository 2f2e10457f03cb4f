# FILE: receiptly/services/receipt_pdf.py
from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Optional

from receiptly.core.config import Settings, settings as default_settings
from receiptly.pdf.layout import render
from receiptly.pdf.raster_export import export
from receiptly.services.receipt_numbers import ReceiptNumberPolicy, format_receipt_number
from receiptly.services.receipt_text import compose
from receiptly.services.receipt_types import ReceiptRecord, SignatureImage

logger = logging.getLogger(__name__)


def generate_document(record: ReceiptRecord,
                      signature: Optional[SignatureImage] = None,
                      *,
                      settings: Optional[Settings] = None,
                      issued_on: Optional[date] = None) -> bytes:
    """
    record -> receipt text -> page layout -> rasterized single-page PDF.

    Raises DocumentGenerationError if rasterization/PDF output fails.
    """
    cfg = settings or default_settings

    segments = compose(record, currency_symbol=cfg.CURRENCY_SYMBOL)
    layout = render(record,
                    segments,
                    signature,
                    issued_on=issued_on,
                    id_row_style=cfg.ID_ROW_STYLE,
                    compact=cfg.COMPACT_FRAME)
    pdf = export(layout,
                 page_format=cfg.PAGE_FORMAT,
                 orientation=cfg.PAGE_ORIENTATION,
                 scale=cfg.RASTER_SCALE)

    logger.info("Generated receipt %s (%d bytes, signature=%s)",
                record.receipt_number or "-", len(pdf), signature is not None)
    return pdf


def next_receipt_number(policy: ReceiptNumberPolicy | str,
                        seq: Optional[int] = None,
                        *,
                        now: Optional[datetime] = None) -> str:
    return format_receipt_number(policy, seq, now=now)


def receipt_filename(receipt_number: str) -> str:
    safe = re.sub(r"[^A-Za-z0-9._-]", "_", (receipt_number or "").strip())
    return f"receipt-{safe or 'receipt'}.pdf"
