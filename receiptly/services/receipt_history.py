# FILE: receiptly/services/receipt_history.py
from __future__ import annotations

import logging
from typing import Any, List

from sqlalchemy.orm import Session

from receiptly.models.receipt import ReceiptEntry, ReceiptSequence
from receiptly.services.date_format import parse_date
from receiptly.services.receipt_types import ReceiptRecord

logger = logging.getLogger(__name__)

DEFAULT_SEQUENCE = "receipt"


def _val(x: Any) -> Any:
    return getattr(x, "value", x)


def _s(v: Any) -> str | None:
    v = _val(v)
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def _sequence_row(db: Session, name: str, *, lock: bool) -> ReceiptSequence:
    q = db.query(ReceiptSequence).filter(ReceiptSequence.name == name)
    if lock:
        q = q.with_for_update()
    row = q.first()
    if not row:
        row = ReceiptSequence(name=name, last_value=0)
        db.add(row)
        db.flush()
    return row


def peek_sequence_value(db: Session, name: str = DEFAULT_SEQUENCE) -> int:
    """Value the next consume call would hand out; does not change anything."""
    row = (db.query(ReceiptSequence).filter(
        ReceiptSequence.name == name).first())
    return int(row.last_value or 0) + 1 if row else 1


def next_sequence_value(db: Session, name: str = DEFAULT_SEQUENCE) -> int:
    """
    Consume and return the next counter value.
    Flushes only; the caller's commit makes it stick.
    """
    row = _sequence_row(db, name, lock=True)
    n = int(row.last_value or 0) + 1
    row.last_value = n
    db.flush()
    return n


def record_receipt(db: Session,
                   record: ReceiptRecord,
                   *,
                   has_signature: bool = False,
                   signature_data_url: str | None = None) -> ReceiptEntry:
    entry = ReceiptEntry(
        receipt_number=_s(record.receipt_number) or "",
        title_name=_s(record.title_name),
        title_address=_s(record.title_address),
        tenant_name=_s(record.tenant_name),
        duration_from=parse_date(record.duration_from),
        duration_to=parse_date(record.duration_to),
        term=_s(record.term),
        amount=_s(record.amount),
        denomination=_s(record.denomination),
        payment_mode=_s(record.payment_mode),
        reference_no=_s(record.reference_no),
        date_of_transaction=parse_date(record.date_of_transaction),
        has_signature=bool(has_signature or signature_data_url),
        signature_data_url=_s(signature_data_url),
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("Saved receipt %s to history (id=%s)", entry.receipt_number,
                entry.id)
    return entry


def list_receipts(db: Session, *, limit: int = 50) -> List[ReceiptEntry]:
    return (db.query(ReceiptEntry).order_by(ReceiptEntry.id.desc()).limit(
        int(limit)).all())


def clear_history(db: Session) -> int:
    """Delete all receipts and reset every sequence. Returns receipts removed."""
    removed = db.query(ReceiptEntry).delete(synchronize_session=False)
    db.query(ReceiptSequence).delete(synchronize_session=False)
    db.commit()
    logger.info("Cleared receipt history (%d rows) and sequences", removed)
    return int(removed or 0)
