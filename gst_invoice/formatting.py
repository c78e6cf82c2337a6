"""Formatting, parsing and drawing utility helpers."""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from decimal import ROUND_DOWN, Decimal
from typing import Any, List, Optional, Protocol

from dateutil import parser as dateutil_parser

CURRENCY_SYMBOL = "Rs. "
DATE_FORMAT = "%d-%m-%Y"

_CENT = Decimal("0.01")
_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_WHITESPACE_RUN = re.compile(r"\s+")
_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/*?:"<>|]')


class TextWidthProvider(Protocol):
    def text_width(self, text: str, size: int, bold: bool = False) -> float:
        ...


class PdfPathCanvas(Protocol):
    k: float
    h: float

    def rect(self, x: float, y: float, width: float, height: float, style: str) -> None:
        ...

    def _out(self, value: str) -> None:
        ...


def truncate_cents(amount: float) -> Decimal:
    """Cut ``amount`` to two decimals without rounding (toward zero)."""
    value = Decimal(repr(float(amount))).quantize(_CENT, rounding=ROUND_DOWN)
    if value == 0:
        # Avoid displaying "-0.00" for tiny negative amounts.
        return abs(value)
    return value


def fmt_money(amount: float, symbol: str = CURRENCY_SYMBOL) -> str:
    if not math.isfinite(amount):
        return f"{symbol}{amount}"
    return f"{symbol}{truncate_cents(amount):.2f}"


def fmt_qty(qty: Any) -> str:
    try:
        quantity = float(qty)
        if quantity.is_integer():
            return str(int(quantity))
        return str(quantity)
    except (TypeError, ValueError):
        return str(qty)


def parse_number(value: Any, default: float = 0.0) -> float:
    """Coerce a form value to a finite float.

    Numbers pass through. Strings are read by their leading numeric prefix,
    so ``"12abc"`` gives ``12.0``. Anything without a numeric prefix, as well
    as NaN and infinities, gives ``default``.
    """
    if isinstance(value, bool) or value is None:
        return default
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        else:
            match = _NUMBER_PREFIX.match(str(value).strip())
            if not match:
                return default
            number = float(match.group(0))
    except (OverflowError, ValueError):
        return default
    return number if math.isfinite(number) else default


def parse_date(raw: Any, default: Optional[date] = None) -> Optional[date]:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    text = str(raw or "").strip()
    if not text:
        return default
    try:
        return dateutil_parser.parse(text).date()
    except (ValueError, OverflowError):
        return default


def fmt_date(value: Optional[date]) -> str:
    if value is None:
        return ""
    return value.strftime(DATE_FORMAT)


def invoice_filename(bill_no: str, client_name: str, extension: str = "pdf") -> str:
    """Suggested download name, e.g. ``Invoice_001_Acme_Corp.pdf``.

    Each run of whitespace in the client name becomes one underscore, and
    characters that are not allowed in file names are dropped.
    """
    stem = f"Invoice_{bill_no}_{_WHITESPACE_RUN.sub('_', client_name)}"
    stem = _UNSAFE_FILENAME_CHARS.sub("", stem)
    return f"{stem}.{extension}" if extension else stem


def wrap_text(
    fonts_obj: TextWidthProvider,
    text: str,
    max_width: float,
    font_size: int,
    bold: bool = False,
) -> List[str]:
    """Greedily wrap ``text`` into lines no wider than ``max_width``.

    Embedded line breaks start new paragraphs, each wrapped on its own. A
    word wider than the line is broken between characters. The result is
    never empty: blank input gives ``[""]``.
    """

    def line_width(value: str) -> float:
        return fonts_obj.text_width(value, font_size, bold=bold)

    def break_word(word: str, lines: List[str]) -> str:
        chunk = ""
        for char in word:
            candidate_chunk = chunk + char
            if chunk and line_width(candidate_chunk) > max_width:
                lines.append(chunk)
                chunk = char
            else:
                chunk = candidate_chunk
        return chunk

    def wrap_paragraph(paragraph: str) -> List[str]:
        words = paragraph.split()
        if not words:
            return [""]

        lines: List[str] = []
        current = ""
        for word in words:
            candidate = word if not current else f"{current} {word}"
            if line_width(candidate) <= max_width:
                current = candidate
                continue

            if current:
                lines.append(current)
                current = ""

            if line_width(word) <= max_width:
                current = word
            else:
                current = break_word(word, lines)

        if current:
            lines.append(current)
        return lines

    result: List[str] = []
    for paragraph in str(text or "").replace("\r\n", "\n").split("\n"):
        result.extend(wrap_paragraph(paragraph))
    return result


def round_rect(
    pdf: PdfPathCanvas,
    x: float,
    y: float,
    width: float,
    height: float,
    radius: float,
    fill: bool = True,
) -> None:
    radius = max(0.0, min(radius, width / 2.0, height / 2.0))
    if radius == 0:
        pdf.rect(x, y, width, height, "F" if fill else "S")
        return

    k = pdf.k
    hp = pdf.h
    kappa = 0.5522847498307936  # circle approximation constant

    def arc(x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        pdf._out(
            "%.2f %.2f %.2f %.2f %.2f %.2f c"
            % (x1 * k, (hp - y1) * k, x2 * k, (hp - y2) * k, x3 * k, (hp - y3) * k)
        )

    pdf._out("%.2f %.2f m" % ((x + radius) * k, (hp - y) * k))
    pdf._out("%.2f %.2f l" % ((x + width - radius) * k, (hp - y) * k))
    arc(
        x + width - radius + radius * kappa,
        y,
        x + width,
        y + radius - radius * kappa,
        x + width,
        y + radius,
    )
    pdf._out("%.2f %.2f l" % ((x + width) * k, (hp - (y + height - radius)) * k))
    arc(
        x + width,
        y + height - radius + radius * kappa,
        x + width - radius + radius * kappa,
        y + height,
        x + width - radius,
        y + height,
    )
    pdf._out("%.2f %.2f l" % ((x + radius) * k, (hp - (y + height)) * k))
    arc(
        x + radius - radius * kappa,
        y + height,
        x,
        y + height - radius + radius * kappa,
        x,
        y + height - radius,
    )
    pdf._out("%.2f %.2f l" % (x * k, (hp - (y + radius)) * k))
    arc(x, y + radius - radius * kappa, x + radius - radius * kappa, y, x + radius, y)

    pdf._out("f" if fill else "S")
