from datetime import date

from receiptly.pdf.layout import (
    ID_ROW_TWO_COLUMN,
    PAGE_WIDTH_PX,
    fit_signature,
    mm_px,
    render,
)
from receiptly.services.receipt_text import compose
from receiptly.services.receipt_types import ReceiptRecord, SignatureImage


def test_fit_signature_shrinks_to_box():
    assert fit_signature(400, 120) == (200, 60)
    assert fit_signature(300, 300) == (100, 100)


def test_fit_signature_never_enlarges():
    assert fit_signature(120, 40) == (120, 40)
    assert fit_signature(0, 10) == (0, 0)


def test_render_three_column_row_and_fallbacks():
    rec = ReceiptRecord(tenant_name="John Doe", amount="100")
    tree = render(rec, compose(rec), issued_on=date(2025, 2, 9))

    assert tree.width == PAGE_WIDTH_PX == 794
    frame = tree.frame
    assert frame.header.title == "Rental Receipt"
    assert frame.header.address == ""
    labels = [(c.label, c.value, c.align) for c in frame.id_row.cells]
    assert labels == [
        ("Receipt #:", "RCT-0000-0000", "left"),
        ("Payment Receipt", "", "center"),
        ("Date:", "9-Feb-2025", "right"),
    ]
    assert frame.body.align == "justify"
    assert frame.signature.image is None
    assert frame.signature.label == "Signature"
    assert frame.min_height == mm_px(180)


def test_render_legacy_two_column_compact():
    rec = ReceiptRecord(title_name="ABC", receipt_number="RCT-2025-0001")
    tree = render(rec, compose(rec), issued_on=date(2025, 2, 9),
                  id_row_style=ID_ROW_TWO_COLUMN, compact=True)
    cells = tree.frame.id_row.cells
    assert [c.align for c in cells] == ["left", "right"]
    assert cells[0].value == "RCT-2025-0001"
    assert tree.frame.min_height == mm_px(140)


def test_render_is_deterministic(signature_png):
    rec = ReceiptRecord(title_name="ABC", tenant_name="X", amount="5")
    sig = SignatureImage.from_bytes(signature_png)
    a = render(rec, compose(rec), sig, issued_on=date(2025, 1, 1))
    b = render(rec, compose(rec), sig, issued_on=date(2025, 1, 1))
    assert a == b
    assert (a.frame.signature.image_width, a.frame.signature.image_height) == (200, 60)
