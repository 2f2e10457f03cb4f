# FILE: receiptly/api/routes_receipts.py
from __future__ import annotations

import logging
from io import BytesIO
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from receiptly.api.deps import get_db
from receiptly.core.config import settings
from receiptly.schemas.receipt import (
    ReceiptDefaultsOut,
    ReceiptEntryOut,
    ReceiptIn,
    ReceiptNumberOut,
    ReceiptTextOut,
    TextSegmentOut,
)
from receiptly.services.number_words import words_of
from receiptly.services.receipt_history import (
    clear_history,
    list_receipts,
    next_sequence_value,
    peek_sequence_value,
    record_receipt,
)
from receiptly.services.receipt_numbers import ReceiptNumberPolicy
from receiptly.services.receipt_pdf import (
    generate_document,
    next_receipt_number,
    receipt_filename,
)
from receiptly.services.receipt_text import compose, plain_text
from receiptly.services.receipt_types import SignatureImage
from receiptly.services.rental_period import previous_month_period
from receiptly.utils.timezone import today_local

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/receipts", tags=["Receipts"])


def _policy(value: Optional[str]) -> ReceiptNumberPolicy:
    raw = (value or settings.RECEIPT_NUMBER_POLICY or "timestamp").lower()
    try:
        return ReceiptNumberPolicy(raw)
    except ValueError:
        raise HTTPException(status_code=400,
                            detail=f"Unknown receipt number policy: {raw}")


def _signature(inp: ReceiptIn) -> Optional[SignatureImage]:
    try:
        return SignatureImage.from_data_url(inp.signature_data_url or "")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


def _pdf_response(data: bytes, filename: str,
                  receipt_number: str) -> StreamingResponse:
    return StreamingResponse(
        BytesIO(data),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Receipt-Number": receipt_number,
        },
    )


@router.post("/pdf")
def receipt_pdf(
        inp: ReceiptIn = Body(...),
        save: bool = Query(default=True),
        db: Session = Depends(get_db),
):
    signature = _signature(inp)

    number = (inp.receipt_number or "").strip()
    if not number:
        policy = _policy(None)
        seq = None
        if policy == ReceiptNumberPolicy.SEQUENCE:
            seq = next_sequence_value(db) if save else peek_sequence_value(db)
        number = next_receipt_number(policy, seq)

    record = inp.to_record(receipt_number=number)

    try:
        pdf = generate_document(record, signature)
    except Exception:
        # hand back any sequence value taken above
        db.rollback()
        raise

    if save:
        record_receipt(db,
                       record,
                       has_signature=signature is not None,
                       signature_data_url=inp.signature_data_url
                       if signature is not None else None)

    return _pdf_response(pdf, receipt_filename(number), number)


@router.post("/text", response_model=ReceiptTextOut)
def receipt_text(inp: ReceiptIn = Body(...)):
    record = inp.to_record()
    segments = compose(record, currency_symbol=settings.CURRENCY_SYMBOL)
    return ReceiptTextOut(
        text=plain_text(segments),
        amount_in_words=words_of(record.amount),
        segments=[
            TextSegmentOut(text=s.text, emphasized=s.emphasized)
            for s in segments
        ],
    )


@router.get("/next-number", response_model=ReceiptNumberOut)
def receipt_next_number(
        policy: Optional[str] = Query(default=None),
        db: Session = Depends(get_db),
):
    p = _policy(policy)
    seq = peek_sequence_value(db) if p == ReceiptNumberPolicy.SEQUENCE else None
    return ReceiptNumberOut(policy=p,
                            receipt_number=next_receipt_number(p, seq),
                            sequence=seq)


@router.get("/defaults", response_model=ReceiptDefaultsOut)
def receipt_defaults(db: Session = Depends(get_db)):
    start, end = previous_month_period()
    p = _policy(None)
    seq = peek_sequence_value(db) if p == ReceiptNumberPolicy.SEQUENCE else None
    return ReceiptDefaultsOut(
        duration_from=start,
        duration_to=end,
        date_of_transaction=today_local(),
        receipt_number=next_receipt_number(p, seq),
    )


@router.get("", response_model=List[ReceiptEntryOut])
def receipt_history(
        limit: int = Query(default=50, ge=1, le=500),
        db: Session = Depends(get_db),
):
    return list_receipts(db, limit=limit)


@router.delete("")
def receipt_history_clear(db: Session = Depends(get_db)) -> Dict[str, Any]:
    removed = clear_history(db)
    return {"removed": removed}
