# FILE: receiptly/services/receipt_text.py
from __future__ import annotations

from datetime import date
from typing import Any, List, Optional

from receiptly.core.config import settings
from receiptly.services.date_format import display_date
from receiptly.services.number_words import words_of
from receiptly.services.receipt_types import (
    PaymentMode,
    ReceiptRecord,
    Term,
    TextSegment,
)
from receiptly.utils.timezone import today_local


def _val(x: Any) -> Any:
    return getattr(x, "value", x)


def _text(v: Any, default: str = "") -> str:
    v = _val(v)
    if v is None:
        return default
    s = str(v).strip()
    return s if s else default


def amount_label(record: ReceiptRecord,
                 currency_symbol: Optional[str] = None) -> str:
    amount = _text(record.amount, "0")
    denomination = _text(record.denomination)
    if denomination:
        return f"{denomination} {amount}"
    symbol = settings.CURRENCY_SYMBOL if currency_symbol is None else currency_symbol
    return f"{symbol}{amount}"


def compose(record: ReceiptRecord,
            *,
            today: Optional[date] = None,
            currency_symbol: Optional[str] = None) -> List[TextSegment]:
    """
    Receipt body as (text, emphasized) segments.

    Cash:
      This is to acknowledge the receipt of ₹50000 (Fifty Thousand Only)
      from John Doe towards Monthly rent for the period 1-Aug-2025 to
      31-Aug-2025, paid via Cash.
    Other modes end with ", paid via Cheque (12345) on 9-Feb-2025."
    """
    amount_in_words = words_of(_text(record.amount, "0"))
    tenant_name = _text(record.tenant_name, "Unknown")
    term = _text(record.term, Term.MONTHLY.value)
    duration_from = display_date(record.duration_from) or "N/A"
    duration_to = display_date(record.duration_to) or "N/A"
    payment_mode = _text(record.payment_mode, PaymentMode.CASH.value)

    segments = [
        TextSegment("This is to acknowledge the receipt of "),
        TextSegment(amount_label(record, currency_symbol), True),
        TextSegment(" ("),
        TextSegment(f"{amount_in_words} Only", True),
        TextSegment(") from "),
        TextSegment(tenant_name, True),
        TextSegment(f" towards {term} rent for the period "),
        TextSegment(duration_from, True),
        TextSegment(" to "),
        TextSegment(duration_to, True),
    ]

    if payment_mode == PaymentMode.CASH.value:
        segments.append(TextSegment(", paid via Cash."))
        return segments

    reference_no = _text(record.reference_no)
    transaction_date = (display_date(record.date_of_transaction)
                        or display_date(today or today_local()))
    segments.append(
        TextSegment(
            f", paid via {payment_mode} ({reference_no}) on {transaction_date}."))
    return segments


def plain_text(segments: List[TextSegment]) -> str:
    return "".join(s.text for s in segments)


def compose_text(record: ReceiptRecord, **kwargs: Any) -> str:
    return plain_text(compose(record, **kwargs))
