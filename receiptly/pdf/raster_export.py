# FILE: receiptly/pdf/raster_export.py
from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from io import BytesIO
from typing import Dict, List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont
from reportlab.lib.pagesizes import A3, A4, A5, landscape
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from receiptly.core.config import settings
from receiptly.pdf.layout import (
    BodyParagraph,
    HeaderBlock,
    IdentifierRow,
    LayoutTree,
    Rule,
    SignatureBlock,
    TextStyle,
)
from receiptly.services.receipt_types import TextSegment

logger = logging.getLogger(__name__)

GENERATION_FAILED = "Failed to generate PDF. Please try again."

Word = List[Tuple[str, bool]]


class DocumentGenerationError(RuntimeError):
    pass


# =========================================================
# Page geometry
# =========================================================
def page_size(paper: str = "A4", orientation: str = "portrait"):
    paper = (paper or "A4").upper()
    orientation = (orientation or "portrait").lower()
    if paper == "A3":
        size = A3
    elif paper == "A5":
        size = A5
    else:
        size = A4
    if orientation == "landscape":
        size = landscape(size)
    return size


@dataclass(frozen=True)
class Placement:
    x: float
    y_top: float
    width: float
    height: float
    ratio: float

    def pdf_y(self, page_h: float) -> float:
        # reportlab measures y from the bottom edge
        return page_h - self.y_top - self.height


def fit_to_page(raster_w: float, raster_h: float, page_w: float,
                page_h: float) -> Placement:
    """
    Uniform scale so the whole raster fits on the page.
    Centred horizontally, pinned to the top edge.
    """
    if raster_w <= 0 or raster_h <= 0:
        raise ValueError("raster has no area")
    ratio = min(page_w / raster_w, page_h / raster_h)
    w = raster_w * ratio
    h = raster_h * ratio
    return Placement(x=(page_w - w) / 2, y_top=0.0, width=w, height=h,
                     ratio=ratio)


# =========================================================
# Fonts
# =========================================================
class _Fonts:
    """Per-call font lookup, keyed by (bold, pixel size)."""

    def __init__(self, regular_path: str, bold_path: str):
        self.regular_path = regular_path
        self.bold_path = bold_path
        self._loaded: Dict[Tuple[bool, int], ImageFont.ImageFont] = {}

    def get(self, bold: bool, size: int):
        key = (bold, size)
        font = self._loaded.get(key)
        if font is None:
            font = self._load(bold, size)
            self._loaded[key] = font
        return font

    def _load(self, bold: bool, size: int):
        paths = [self.bold_path, self.regular_path] if bold else [self.regular_path]
        for path in paths:
            if not path:
                continue
            try:
                return ImageFont.truetype(path, size)
            except OSError:
                logger.debug("Font not available: %s", path)
        return ImageFont.load_default(size=size)


# =========================================================
# Painter
# =========================================================
def _words(segments: Tuple[TextSegment, ...]) -> List[Word]:
    """Split segments on whitespace; one word may mix plain and bold runs."""
    words: List[Word] = []
    cur: Word = []
    for seg in segments:
        for part in re.split(r"(\s+)", seg.text or ""):
            if not part:
                continue
            if part.isspace():
                if cur:
                    words.append(cur)
                    cur = []
            else:
                cur.append((part, bool(seg.emphasized)))
    if cur:
        words.append(cur)
    return words


class _Painter:
    """
    Walks the layout top to bottom in logical pixels.
    With draw=None it only measures, so the first pass gives the height.
    """

    def __init__(self, fonts: _Fonts, scale: int,
                 draw: Optional[ImageDraw.ImageDraw] = None,
                 image: Optional[Image.Image] = None):
        self.fonts = fonts
        self.s = scale
        self.draw = draw
        self.image = image

    # ---- primitives ----
    def _font(self, style: TextStyle, bold: Optional[bool] = None):
        return self.fonts.get(style.bold if bold is None else bold,
                              max(1, round(style.size * self.s)))

    def _width(self, text: str, style: TextStyle,
               bold: Optional[bool] = None) -> float:
        return self._font(style, bold).getlength(text) / self.s

    def _line_h(self, style: TextStyle) -> float:
        return style.size * style.line_height

    def _text(self, x: float, top: float, text: str, style: TextStyle,
              bold: Optional[bool] = None) -> None:
        if self.draw is None or not text:
            return
        y = top + (self._line_h(style) - style.size) / 2
        self.draw.text((round(x * self.s), round(y * self.s)),
                       text,
                       font=self._font(style, bold),
                       fill=style.color)

    def _rect(self, x0: float, y0: float, x1: float, y1: float,
              color, outline_w: int = 0) -> None:
        if self.draw is None:
            return
        box = [round(x0 * self.s), round(y0 * self.s),
               round(x1 * self.s) - 1, round(y1 * self.s) - 1]
        if outline_w:
            self.draw.rectangle(box, outline=color, width=outline_w)
        else:
            self.draw.rectangle(box, fill=color)

    def _wrap(self, text: str, style: TextStyle, max_w: float) -> List[str]:
        lines: List[str] = []
        for raw in (text or "").splitlines() or [""]:
            cur = ""
            for word in raw.split():
                trial = f"{cur} {word}" if cur else word
                if cur and self._width(trial, style) > max_w:
                    lines.append(cur)
                    cur = word
                else:
                    cur = trial
            lines.append(cur)
        return lines

    def _centered_lines(self, lines: List[str], style: TextStyle, x: float,
                        w: float, y: float) -> float:
        lh = self._line_h(style)
        for line in lines:
            self._text(x + (w - self._width(line, style)) / 2, y, line, style)
            y += lh
        return y

    def _rule(self, rule: Rule, x: float, w: float, y: float,
              align: str = "left") -> float:
        y += rule.margin_top
        rw = rule.width if rule.width is not None else w
        rx = x + w - rw if align == "right" else x
        self._rect(rx, y, rx + rw, y + rule.thickness, rule.color)
        return y + rule.thickness + rule.margin_bottom

    # ---- blocks ----
    def header(self, block: HeaderBlock, x: float, w: float, y: float) -> float:
        y = self._centered_lines(self._wrap(block.title, block.title_style, w),
                                 block.title_style, x, w, y)
        y += block.gap
        if block.address:
            y = self._centered_lines(
                self._wrap(block.address, block.address_style, w),
                block.address_style, x, w, y)
            y += block.gap
        y = self._rule(block.rule, x, w, y)
        return y + block.margin_bottom

    def id_row(self, row: IdentifierRow, x: float, w: float, y: float) -> float:
        style = row.style
        cell_w = w / max(1, len(row.cells))
        for i, cell in enumerate(row.cells):
            cx = x + i * cell_w
            value = f" {cell.value}" if cell.value else ""
            total = self._width(cell.label, style, True) + self._width(value, style)
            if cell.align == "center":
                tx = cx + (cell_w - total) / 2
            elif cell.align == "right":
                tx = cx + cell_w - total
            else:
                tx = cx
            self._text(tx, y, cell.label, style, True)
            self._text(tx + self._width(cell.label, style, True), y, value,
                       style)
        return y + self._line_h(style) + row.margin_bottom

    def body(self, para: BodyParagraph, x: float, w: float, y: float) -> float:
        style = para.style
        space = self._width(" ", style)
        measured = [(word, sum(self._width(t, style, b) for t, b in word))
                    for word in _words(para.segments)]

        lines: List[List[Tuple[Word, float]]] = []
        cur: List[Tuple[Word, float]] = []
        cur_w = 0.0
        for item in measured:
            add = item[1] if not cur else space + item[1]
            if cur and cur_w + add > w:
                lines.append(cur)
                cur, cur_w = [item], item[1]
            else:
                cur.append(item)
                cur_w += add
        if cur:
            lines.append(cur)

        lh = self._line_h(style)
        for idx, line in enumerate(lines):
            last = idx == len(lines) - 1
            gap = space
            if para.align == "justify" and not last and len(line) > 1:
                gap = (w - sum(ww for _, ww in line)) / (len(line) - 1)
            cx = x
            for word, ww in line:
                wx = cx
                for text, bold in word:
                    self._text(wx, y, text, style, bold)
                    wx += self._width(text, style, bold)
                cx += ww + gap
            y += lh
        return y + para.margin_bottom

    def signature(self, block: SignatureBlock, x: float, w: float,
                  y: float) -> float:
        y += block.margin_top
        right = x + w
        if block.image is not None and block.image_width and block.image_height:
            if self.image is not None:
                self._paste_signature(block, right - block.image_width, y)
            y += block.image_height + block.image_gap
        y = self._rule(block.rule, x, w, y, align="right")
        style = block.label_style
        self._text(right - self._width(block.label, style), y, block.label,
                   style)
        return y + self._line_h(style)

    def _paste_signature(self, block: SignatureBlock, x: float,
                         y: float) -> None:
        size = (max(1, round(block.image_width * self.s)),
                max(1, round(block.image_height * self.s)))
        with Image.open(BytesIO(block.image.data)) as src:
            sig = src.convert("RGBA").resize(size, Image.Resampling.LANCZOS)
        try:
            # alpha as mask flattens transparency onto the white page
            self.image.paste(sig, (round(x * self.s), round(y * self.s)), sig)
        finally:
            sig.close()

    # ---- whole page ----
    def page(self, tree: LayoutTree) -> float:
        frame = tree.frame
        fx0 = tree.padding
        fy0 = tree.padding
        fw = tree.width - 2 * tree.padding
        inset = frame.border + frame.padding
        cx = fx0 + inset
        cw = fw - 2 * inset

        y = fy0 + inset
        y = self.header(frame.header, cx, cw, y)
        y = self.id_row(frame.id_row, cx, cw, y)
        y = self.body(frame.body, cx, cw, y)
        y = self.signature(frame.signature, cx, cw, y)

        frame_bottom = max(y + inset, fy0 + frame.min_height)
        self._double_border(fx0, fy0, fx0 + fw, frame_bottom, frame.border)
        return max(float(tree.min_height), frame_bottom + tree.padding)

    def _double_border(self, x0: float, y0: float, x1: float, y1: float,
                       border: int) -> None:
        line = max(1, round(border * self.s / 3))
        self._rect(x0, y0, x1, y1, (0, 0, 0), outline_w=line)
        inner = border - border / 3
        self._rect(x0 + inner, y0 + inner, x1 - inner, y1 - inner, (0, 0, 0),
                   outline_w=line)


# =========================================================
# Public API
# =========================================================
def rasterize(tree: LayoutTree, scale: int = 2) -> Image.Image:
    """
    Paint the layout onto an opaque white RGB image at `scale` x oversampling.
    Caller owns (and closes) the returned image.
    """
    fonts = _Fonts(settings.FONT_PATH, settings.FONT_BOLD_PATH)
    height = _Painter(fonts, scale).page(tree)

    image = Image.new("RGB", (round(tree.width * scale), round(height * scale)),
                      (255, 255, 255))
    try:
        _Painter(fonts, scale, ImageDraw.Draw(image), image).page(tree)
    except Exception:
        image.close()
        raise
    return image


def export(tree: LayoutTree,
           page_format: str = "A4",
           orientation: str = "portrait",
           scale: int = 2) -> bytes:
    """Rasterize the layout and place it on a single PDF page."""
    image: Optional[Image.Image] = None
    try:
        image = rasterize(tree, scale=scale)
        page_w, page_h = page_size(page_format, orientation)
        place = fit_to_page(image.width, image.height, page_w, page_h)

        buf = BytesIO()
        c = canvas.Canvas(buf, pagesize=(page_w, page_h))
        c.drawImage(ImageReader(image),
                    place.x,
                    place.pdf_y(page_h),
                    width=place.width,
                    height=place.height)
        c.showPage()
        c.save()
        return buf.getvalue()
    except Exception as e:
        logger.exception("Receipt PDF render failed")
        raise DocumentGenerationError(GENERATION_FAILED) from e
    finally:
        if image is not None:
            image.close()


async def export_async(tree: LayoutTree, **kwargs) -> bytes:
    return await asyncio.to_thread(export, tree, **kwargs)
