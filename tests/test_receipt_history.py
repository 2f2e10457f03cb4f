from datetime import date

from receiptly.models.receipt import ReceiptEntry
from receiptly.services.receipt_history import (
    clear_history,
    list_receipts,
    next_sequence_value,
    peek_sequence_value,
    record_receipt,
)
from receiptly.services.receipt_types import ReceiptRecord, SignatureImage
from receiptly.services.rental_period import previous_month_period


def test_sequence_counter(db):
    assert peek_sequence_value(db) == 1
    assert next_sequence_value(db) == 1
    assert next_sequence_value(db) == 2
    db.commit()
    assert peek_sequence_value(db) == 3


def test_record_and_list(db):
    rec = ReceiptRecord(tenant_name="John Doe", amount="50000",
                        duration_from="2025-08-01", duration_to="not-a-date",
                        receipt_number="RCT-2025-0001")
    entry = record_receipt(db, rec, has_signature=True)
    record_receipt(db, ReceiptRecord(receipt_number="RCT-2025-0002"))

    assert entry.duration_from == date(2025, 8, 1)
    assert entry.duration_to is None
    assert entry.has_signature is True
    assert [e.receipt_number for e in list_receipts(db)] == ["RCT-2025-0002", "RCT-2025-0001"]
    assert len(list_receipts(db, limit=1)) == 1


def test_clear_history_resets_sequence(db):
    next_sequence_value(db)
    record_receipt(db, ReceiptRecord(receipt_number="X"))
    assert clear_history(db) == 1
    assert db.query(ReceiptEntry).count() == 0
    assert peek_sequence_value(db) == 1


def test_previous_month_period():
    assert previous_month_period(date(2025, 9, 15)) == (date(2025, 8, 1), date(2025, 8, 31))
    assert previous_month_period(date(2025, 1, 1)) == (date(2024, 12, 1), date(2024, 12, 31))
    assert previous_month_period(date(2024, 3, 31)) == (date(2024, 2, 1), date(2024, 2, 29))


def test_signature_kept_for_rerender(db, signature_png):
    import base64

    url = "data:image/png;base64," + base64.b64encode(signature_png).decode()
    entry = record_receipt(db, ReceiptRecord(receipt_number="RCT-2025-0003"),
                           signature_data_url=url)
    assert entry.has_signature is True
    assert entry.signature_data_url == url

    sig = SignatureImage.from_data_url(list_receipts(db)[0].signature_data_url)
    assert (sig.width, sig.height) == (400, 120)
