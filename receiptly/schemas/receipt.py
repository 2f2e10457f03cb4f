from __future__ import annotations

from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from receiptly.services.receipt_numbers import ReceiptNumberPolicy
from receiptly.services.receipt_types import ReceiptRecord


def _as_text(v: Any) -> Optional[str]:
    if v is None:
        return None
    if isinstance(v, (date, datetime)):
        return v.isoformat()
    s = str(v).strip()
    return s if s else None


class ReceiptIn(BaseModel):
    """
    Form payload. Accepts the web/mobile form's camelCase keys as well as
    snake_case. Nothing is required: blanks fall back to placeholder text.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title_name: Optional[str] = Field(default=None, alias="titleName")
    title_address: Optional[str] = Field(default=None, alias="titleAddress")
    tenant_name: Optional[str] = Field(default=None, alias="tenantName")
    duration_from: Optional[str] = Field(default=None, alias="durationFrom")
    duration_to: Optional[str] = Field(default=None, alias="durationTo")
    term: Optional[str] = None
    amount: Optional[str] = None
    payment_mode: Optional[str] = Field(default=None, alias="paymentMode")
    reference_no: Optional[str] = Field(default=None, alias="referenceNo")
    date_of_transaction: Optional[str] = Field(default=None,
                                               alias="dateOfTransaction")
    receipt_number: Optional[str] = Field(default=None, alias="receiptNumber")
    denomination: Optional[str] = None

    # data:image/png;base64,... from the signature pad
    signature_data_url: Optional[str] = Field(default=None,
                                              alias="signatureDataUrl")

    @field_validator("amount",
                     "duration_from",
                     "duration_to",
                     "date_of_transaction",
                     "receipt_number",
                     "reference_no",
                     mode="before")
    @classmethod
    def _text(cls, v):
        return _as_text(v)

    def to_record(self, **overrides: Any) -> ReceiptRecord:
        data = {
            "title_name": self.title_name or "",
            "title_address": self.title_address or "",
            "tenant_name": self.tenant_name or "",
            "duration_from": self.duration_from,
            "duration_to": self.duration_to,
            "term": self.term,
            "amount": self.amount,
            "payment_mode": self.payment_mode,
            "reference_no": self.reference_no or "",
            "date_of_transaction": self.date_of_transaction,
            "receipt_number": self.receipt_number or "",
            "denomination": self.denomination,
        }
        data.update(overrides)
        return ReceiptRecord(**data)


class TextSegmentOut(BaseModel):
    text: str
    emphasized: bool = False


class ReceiptTextOut(BaseModel):
    text: str
    amount_in_words: str
    segments: List[TextSegmentOut]


class ReceiptNumberOut(BaseModel):
    policy: ReceiptNumberPolicy
    receipt_number: str
    sequence: Optional[int] = None


class ReceiptDefaultsOut(BaseModel):
    duration_from: date
    duration_to: date
    date_of_transaction: date
    receipt_number: str


class ReceiptEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    receipt_number: str
    title_name: Optional[str] = None
    title_address: Optional[str] = None
    tenant_name: Optional[str] = None
    duration_from: Optional[date] = None
    duration_to: Optional[date] = None
    term: Optional[str] = None
    amount: Optional[str] = None
    denomination: Optional[str] = None
    payment_mode: Optional[str] = None
    reference_no: Optional[str] = None
    date_of_transaction: Optional[date] = None
    has_signature: bool = False
    signature_data_url: Optional[str] = None
    created_at: datetime
