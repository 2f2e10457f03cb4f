# FILE: receiptly/services/receipt_numbers.py
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from receiptly.core.config import settings
from receiptly.utils.timezone import now_local


class ReceiptNumberPolicy(str, Enum):
    SEQUENCE = "sequence"
    TIMESTAMP = "timestamp"


def _prefix(prefix: Optional[str]) -> str:
    return (prefix if prefix is not None else settings.RECEIPT_PREFIX) or "RCT"


def sequence_receipt_number(seq: int,
                            *,
                            now: Optional[datetime] = None,
                            prefix: Optional[str] = None,
                            padding: int = 4) -> str:
    """RCT-2025-0007. The caller owns the counter and passes the next value."""
    if seq is None:
        raise ValueError("sequence policy needs a sequence value")
    n = int(seq)
    if n < 0:
        raise ValueError("sequence value must not be negative")
    now = now or now_local()
    return f"{_prefix(prefix)}-{now.year:04d}-{str(n).zfill(padding)}"


def timestamp_receipt_number(*,
                             now: Optional[datetime] = None,
                             prefix: Optional[str] = None) -> str:
    """
    RCT-YYMM-HHMM from local time, e.g. RCT-2509-1650.

    Only minute resolution: two receipts issued in the same minute get the
    same number.
    """
    now = now or now_local()
    return f"{_prefix(prefix)}-{now.strftime('%y%m')}-{now.strftime('%H%M')}"


def format_receipt_number(policy: ReceiptNumberPolicy | str,
                          seq: Optional[int] = None,
                          *,
                          now: Optional[datetime] = None,
                          prefix: Optional[str] = None) -> str:
    policy = ReceiptNumberPolicy(policy)
    if policy == ReceiptNumberPolicy.SEQUENCE:
        return sequence_receipt_number(seq, now=now, prefix=prefix)
    # seq is accepted for call compatibility and ignored
    return timestamp_receipt_number(now=now, prefix=prefix)
