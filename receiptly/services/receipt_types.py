# FILE: receiptly/services/receipt_types.py
from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from io import BytesIO
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

DateLike = Union[date, datetime, str, None]


class Term(str, Enum):
    MONTHLY = "Monthly"
    YEARLY = "Yearly"


class PaymentMode(str, Enum):
    CASH = "Cash"
    CHEQUE = "Cheque"
    BANK_DEPOSIT = "Bank Deposit"
    UPI = "UPI Payment"
    NET_BANKING = "Net Banking"


@dataclass(frozen=True)
class ReceiptRecord:
    """
    One receipt as filled in by the form layer.

    Nothing here is validated; the composer and renderer fall back to
    placeholder text for anything missing.
    """
    title_name: str = ""
    title_address: str = ""
    tenant_name: str = ""
    duration_from: DateLike = None
    duration_to: DateLike = None
    term: Optional[str] = Term.MONTHLY.value
    amount: Union[str, Decimal, int, None] = None
    payment_mode: Optional[str] = PaymentMode.CASH.value
    reference_no: str = ""
    date_of_transaction: DateLike = None
    receipt_number: str = ""
    # legacy: render "INR 5000" instead of the currency symbol
    denomination: Optional[str] = None


@dataclass(frozen=True)
class TextSegment:
    text: str
    emphasized: bool = False


@dataclass(frozen=True)
class SignatureImage:
    data: bytes
    width: int
    height: int

    @classmethod
    def from_bytes(cls, data: bytes) -> "SignatureImage":
        try:
            with Image.open(BytesIO(data)) as im:
                w, h = im.size
        except UnidentifiedImageError as e:
            raise ValueError("Signature is not a readable image") from e
        return cls(data=data, width=int(w), height=int(h))

    @classmethod
    def from_data_url(cls, data_url: str) -> Optional["SignatureImage"]:
        """data:image/png;base64,... as produced by a signature pad; None if blank."""
        s = (data_url or "").strip()
        if not s:
            return None
        if s.startswith("data:"):
            _, _, s = s.partition(",")
        try:
            raw = base64.b64decode(s, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("Signature is not valid base64 image data") from e
        return cls.from_bytes(raw)
