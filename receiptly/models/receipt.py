# FILE: receiptly/models/receipt.py
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Integer,
    String,
    Text,
)

from receiptly.db.base import Base
from receiptly.utils.timezone import now_local


class ReceiptEntry(Base):
    """
    One generated receipt (history list).
    Values are stored as the form sent them; the PDF itself is not kept.
    """
    __tablename__ = "receipts"

    id = Column(Integer, primary_key=True, index=True)
    receipt_number = Column(String(64), nullable=False, index=True)

    title_name = Column(String(255), nullable=True)
    title_address = Column(Text, nullable=True)
    tenant_name = Column(String(255), nullable=True)

    duration_from = Column(Date, nullable=True)
    duration_to = Column(Date, nullable=True)
    term = Column(String(20), nullable=True)  # Monthly | Yearly

    amount = Column(String(32), nullable=True)
    denomination = Column(String(8), nullable=True)
    payment_mode = Column(String(32), nullable=True)
    reference_no = Column(String(100), nullable=True)
    date_of_transaction = Column(Date, nullable=True)

    has_signature = Column(Boolean, nullable=False, default=False)
    signature_data_url = Column(Text, nullable=True)  # data:image/png;base64,...

    created_at = Column(DateTime, default=now_local, nullable=False)


class ReceiptSequence(Base):
    """Named monotonic counter used by the sequence numbering policy."""
    __tablename__ = "receipt_sequences"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, unique=True)
    last_value = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime,
                        default=now_local,
                        onupdate=now_local,
                        nullable=False)
