# FILE: receiptly/pdf/layout.py
"""
Receipt page layout as plain values.

Everything is in logical (CSS) pixels at 96 dpi, so an A4 sheet is
794 x 1123. Nothing here measures text; the raster exporter does that.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

from receiptly.services.date_format import display_date
from receiptly.services.receipt_types import ReceiptRecord, SignatureImage, TextSegment
from receiptly.utils.timezone import today_local

PX_PER_MM = 96.0 / 25.4

PAGE_WIDTH_PX = round(210 * PX_PER_MM)
PAGE_MIN_HEIGHT_PX = round(297 * PX_PER_MM)

SIGNATURE_MAX_W = 200
SIGNATURE_MAX_H = 100

ID_ROW_THREE_COLUMN = "three_column"
ID_ROW_TWO_COLUMN = "two_column"

BLACK = (0, 0, 0)
MUTED = (102, 102, 102)
RULE_GREY = (156, 163, 175)


def mm_px(x_mm: float) -> int:
    return round(x_mm * PX_PER_MM)


@dataclass(frozen=True)
class TextStyle:
    size: int = 14
    bold: bool = False
    color: Tuple[int, int, int] = BLACK
    line_height: float = 1.6


@dataclass(frozen=True)
class Rule:
    width: Optional[int] = None  # None = full content width
    thickness: int = 2
    color: Tuple[int, int, int] = BLACK
    margin_top: int = 8
    margin_bottom: int = 8


@dataclass(frozen=True)
class HeaderBlock:
    title: str
    address: str
    title_style: TextStyle = TextStyle(size=28, bold=True, line_height=1.2)
    address_style: TextStyle = TextStyle(size=16, color=MUTED)
    rule: Rule = Rule()
    gap: int = 8
    margin_bottom: int = 16


@dataclass(frozen=True)
class Cell:
    label: str
    value: str = ""
    align: str = "left"  # left | center | right


@dataclass(frozen=True)
class IdentifierRow:
    cells: Tuple[Cell, ...]
    style: TextStyle = TextStyle()
    margin_bottom: int = 24


@dataclass(frozen=True)
class BodyParagraph:
    segments: Tuple[TextSegment, ...]
    style: TextStyle = TextStyle(size=18, line_height=1.8)
    align: str = "justify"
    margin_bottom: int = 32


@dataclass(frozen=True)
class SignatureBlock:
    image: Optional[SignatureImage] = None
    image_width: int = 0
    image_height: int = 0
    image_gap: int = 16
    rule: Rule = Rule(width=200, thickness=2, color=RULE_GREY,
                      margin_top=0, margin_bottom=8)
    label: str = "Signature"
    label_style: TextStyle = TextStyle(size=12)
    margin_top: int = 64


@dataclass(frozen=True)
class Frame:
    header: HeaderBlock
    id_row: IdentifierRow
    body: BodyParagraph
    signature: SignatureBlock
    border: int = 4  # double border, total thickness
    padding: int = 20
    min_height: int = mm_px(180)


@dataclass(frozen=True)
class LayoutTree:
    frame: Frame
    width: int = PAGE_WIDTH_PX
    min_height: int = PAGE_MIN_HEIGHT_PX
    padding: int = 32
    base_style: TextStyle = TextStyle()


def fit_signature(width: int,
                  height: int,
                  max_w: int = SIGNATURE_MAX_W,
                  max_h: int = SIGNATURE_MAX_H) -> Tuple[int, int]:
    """Shrink (never enlarge) to fit the box, keeping aspect ratio."""
    if width <= 0 or height <= 0:
        return 0, 0
    r = min(1.0, max_w / float(width), max_h / float(height))
    return max(1, round(width * r)), max(1, round(height * r))


def _id_row(receipt_number: str, issued: str, style: str) -> IdentifierRow:
    if style == ID_ROW_TWO_COLUMN:
        cells = (
            Cell("Receipt #:", receipt_number, "left"),
            Cell("Date:", issued, "right"),
        )
    else:
        cells = (
            Cell("Receipt #:", receipt_number, "left"),
            Cell("Payment Receipt", "", "center"),
            Cell("Date:", issued, "right"),
        )
    return IdentifierRow(cells=cells)


def render(record: ReceiptRecord,
           segments: List[TextSegment],
           signature: Optional[SignatureImage] = None,
           *,
           issued_on: Optional[date] = None,
           id_row_style: str = ID_ROW_THREE_COLUMN,
           compact: bool = False) -> LayoutTree:
    header = HeaderBlock(
        title=(record.title_name or "").strip() or "Rental Receipt",
        address=(record.title_address or "").strip(),
    )

    receipt_number = (record.receipt_number or "").strip() or "RCT-0000-0000"
    issued = display_date(issued_on or today_local())

    if signature is not None:
        w, h = fit_signature(signature.width, signature.height)
        sig = SignatureBlock(image=signature, image_width=w, image_height=h)
    else:
        sig = SignatureBlock()

    frame = Frame(
        header=header,
        id_row=_id_row(receipt_number, issued, id_row_style),
        body=BodyParagraph(segments=tuple(segments)),
        signature=sig,
        min_height=mm_px(140) if compact else mm_px(180),
    )
    return LayoutTree(frame=frame)
