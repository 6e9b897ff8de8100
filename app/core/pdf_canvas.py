from __future__ import annotations

import logging
import re
from io import BytesIO
from pathlib import Path

import arabic_reshaper
from bidi.algorithm import get_display
from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from app.core.pdf_assets import CompanionFonts
from app.core.pdf_errors import PdfGenerationError
from app.core.pdf_layout_config import DEFAULT_LAYOUT, LayoutConfig


logger = logging.getLogger(__name__)

_ZERO_WIDTH_CHARS = {
    "\u200b",  # ZERO WIDTH SPACE
    "\u200c",  # ZERO WIDTH NON-JOINER
    "\u200d",  # ZERO WIDTH JOINER
    "\u2060",  # WORD JOINER
    "\ufeff",  # ZERO WIDTH NO-BREAK SPACE
}

_WHITESPACE_RE = re.compile(r"\s+")

# Distance from the top of a line box to the text baseline, in font sizes.
_BASELINE_RATIO = 0.85


def prepare_text(text: str) -> str:
    if not text:
        return ""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    prepared_chars: list[str] = []
    for char in normalized:
        if char in _ZERO_WIDTH_CHARS:
            continue
        if ord(char) < 32 and char not in {"\n", "\t"}:
            continue
        prepared_chars.append(char)
    return "".join(prepared_chars)


def shape_companion_text(text: str) -> str:
    """Join Arabic letters into presentation forms and reorder for display.

    reportlab draws code points left to right as given, so companion text
    must be shaped and put in visual order before it is measured or drawn.
    """
    prepared = prepare_text(text)
    if not prepared.strip():
        return ""
    return get_display(arabic_reshaper.reshape(prepared))


def wrap_text(text: str, font: str, size: float, width: float) -> list[str]:
    """Greedy word-wrap of `text` into lines no wider than `width`.

    Explicit newlines start a new line, runs of whitespace collapse to a
    single space, and a word wider than the column is broken between
    characters without a hyphen. Empty text yields no lines at all.
    """
    prepared = prepare_text(text)
    if not prepared.strip():
        return []

    lines: list[str] = []
    for paragraph in prepared.split("\n"):
        words = _WHITESPACE_RE.split(paragraph.strip()) if paragraph.strip() else []
        if not words:
            lines.append("")
            continue
        lines.extend(_wrap_words(words, font, size, width))
    return lines


def _wrap_words(words: list[str], font: str, size: float, width: float) -> list[str]:
    lines: list[str] = []
    current = ""
    for word in words:
        candidate = word if not current else f"{current} {word}"
        if pdfmetrics.stringWidth(candidate, font, size) <= width:
            current = candidate
            continue
        if current:
            lines.append(current)
            current = ""
        if pdfmetrics.stringWidth(word, font, size) <= width:
            current = word
            continue
        chunks = _split_long_word(word, font, size, width)
        lines.extend(chunks[:-1])
        current = chunks[-1]
    if current:
        lines.append(current)
    return lines


def _split_long_word(word: str, font: str, size: float, width: float) -> list[str]:
    chunks: list[str] = []
    start = 0
    while start < len(word):
        end = start + 1
        while end < len(word) and pdfmetrics.stringWidth(word[start : end + 1], font, size) <= width:
            end += 1
        chunks.append(word[start:end])
        start = end
    return chunks


class PageCanvas:
    """One A4 page drawn with top-left coordinates over a reportlab canvas.

    Every instance owns its buffer and reportlab canvas, so concurrent
    documents never share drawing state.
    """

    def __init__(
        self,
        layout: LayoutConfig = DEFAULT_LAYOUT,
        companion_fonts: CompanionFonts | None = None,
    ) -> None:
        self.layout = layout
        self.companion_fonts = companion_fonts
        self._buffer = BytesIO()
        self._pdf = canvas.Canvas(
            self._buffer,
            pagesize=(layout.page_width, layout.page_height),
            invariant=True,
        )
        self._finished = False

    @property
    def width(self) -> float:
        return self.layout.page_width

    @property
    def height(self) -> float:
        return self.layout.page_height

    def line_height(self, size: float, line_gap: float = 0.0) -> float:
        return size * self.layout.typography.line_height_ratio + line_gap

    def measure_text(
        self,
        text: str,
        font: str,
        size: float,
        width: float,
        line_gap: float = 0.0,
    ) -> float:
        lines = wrap_text(text, font, size, width)
        return len(lines) * self.line_height(size, line_gap)

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        width: float,
        font: str,
        size: float,
        color: str,
        align: str = "left",
        line_gap: float = 0.0,
    ) -> float:
        lines = wrap_text(text, font, size, width)
        if not lines:
            return 0.0

        line_height = self.line_height(size, line_gap)
        self._pdf.saveState()
        self._pdf.setFillColor(colors.HexColor(color))
        self._pdf.setFont(font, size)
        for index, line in enumerate(lines):
            baseline = self.height - (y + index * line_height + size * _BASELINE_RATIO)
            if align == "right":
                self._pdf.drawRightString(x + width, baseline, line)
            elif align == "center":
                self._pdf.drawCentredString(x + width / 2, baseline, line)
            else:
                self._pdf.drawString(x, baseline, line)
        self._pdf.restoreState()
        return len(lines) * line_height

    def draw_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        fill_color: str | None = None,
        stroke_color: str | None = None,
        line_width: float = 0.5,
    ) -> None:
        self._pdf.saveState()
        if fill_color:
            self._pdf.setFillColor(colors.HexColor(fill_color))
        if stroke_color:
            self._pdf.setStrokeColor(colors.HexColor(stroke_color))
            self._pdf.setLineWidth(line_width)
        self._pdf.rect(
            x,
            self.height - y - height,
            width,
            height,
            stroke=1 if stroke_color else 0,
            fill=1 if fill_color else 0,
        )
        self._pdf.restoreState()

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        *,
        color: str,
        line_width: float = 1.0,
    ) -> None:
        self._pdf.saveState()
        self._pdf.setStrokeColor(colors.HexColor(color))
        self._pdf.setLineWidth(line_width)
        self._pdf.line(x1, self.height - y1, x2, self.height - y2)
        self._pdf.restoreState()

    def draw_image(self, path: Path, x: float, y: float, width: float, height: float) -> bool:
        try:
            self._pdf.drawImage(
                str(path),
                x,
                self.height - y - height,
                width=width,
                height=height,
                preserveAspectRatio=True,
                mask="auto",
            )
        except Exception as exc:
            logger.warning(
                "pdf_image_draw_failed",
                extra={"path": str(path), "error": str(exc)},
            )
            return False
        return True

    def finish(self) -> bytes:
        if self._finished:
            raise PdfGenerationError("Page stream has already been finished")
        self._finished = True
        self._pdf.showPage()
        self._pdf.save()
        return self._buffer.getvalue()
