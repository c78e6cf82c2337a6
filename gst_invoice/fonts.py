"""Font discovery and text rendering helpers."""

from __future__ import annotations

import logging
import os
from typing import List, Optional, Tuple

from fpdf import FPDF  # type: ignore

from .config import PROJECT_ROOT

logger = logging.getLogger(__name__)


def find_font_path(env_var: str, candidates: List[str]) -> Optional[str]:
    override = os.getenv(env_var)
    if override and os.path.exists(override):
        return override

    for path in candidates:
        if os.path.exists(path):
            return path
    return None


class FontManager:
    FAMILY = "InvoiceFont"
    CORE_FAMILY = "helvetica"
    BUNDLED_REGULAR = os.path.join(PROJECT_ROOT, "fonts", "DejaVuSans.ttf")
    BUNDLED_BOLD = os.path.join(PROJECT_ROOT, "fonts", "DejaVuSans-Bold.ttf")
    SYSTEM_REGULAR_CANDIDATES = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/dejavu/DejaVuSans.ttf",
        "/Library/Fonts/DejaVuSans.ttf",
    ]
    SYSTEM_BOLD_CANDIDATES = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
        "/Library/Fonts/DejaVuSans-Bold.ttf",
    ]

    def __init__(self, pdf: FPDF) -> None:
        self.pdf = pdf
        self.family = self.CORE_FAMILY
        self.use_unicode = False
        self.has_bold = True

        regular_path = find_font_path(
            "INVOICE_FONT_PATH",
            [self.BUNDLED_REGULAR, *self.SYSTEM_REGULAR_CANDIDATES],
        )
        if not regular_path:
            logger.warning(
                "Unicode font not found; falling back to core Helvetica, which "
                "only covers Latin-1 text (characters such as the rupee sign "
                "will fail to render). Set INVOICE_FONT_PATH to a TTF file."
            )
            return

        bold_path = find_font_path(
            "INVOICE_FONT_BOLD_PATH",
            [self.BUNDLED_BOLD, *self.SYSTEM_BOLD_CANDIDATES],
        )

        self.pdf.add_font(self.FAMILY, "", regular_path)
        self.has_bold = False
        if bold_path:
            self.pdf.add_font(self.FAMILY, "B", bold_path)
            self.has_bold = True
        self.family = self.FAMILY
        self.use_unicode = True

    def _style(self, bold: bool) -> str:
        return "B" if bold and self.has_bold else ""

    def reset(self) -> None:
        """Forget the active font so the next call re-selects it.

        Needed when drawing resumes on an earlier page whose content stream
        ended with a different font.
        """
        self.pdf.font_family = ""

    def text_width(self, text: str, size: int, bold: bool = False) -> float:
        self.pdf.set_font(self.family, self._style(bold), size)
        return self.pdf.get_string_width(text)

    def draw_text(
        self,
        x: float,
        y: float,
        text: str,
        size: int,
        color: Tuple[int, int, int],
        bold: bool = False,
    ) -> None:
        self.pdf.set_text_color(*color)
        self.pdf.set_font(self.family, self._style(bold), size)
        if bold and not self.has_bold:
            self.pdf.text(x, y, text)
            self.pdf.text(x + 0.4, y, text)
        else:
            self.pdf.text(x, y, text)

    def draw_centered(
        self,
        center_x: float,
        y: float,
        text: str,
        size: int,
        color: Tuple[int, int, int],
        bold: bool = False,
    ) -> None:
        width = self.text_width(text, size, bold=bold)
        self.draw_text(center_x - width / 2.0, y, text, size, color, bold=bold)

    def draw_right(
        self,
        right_x: float,
        y: float,
        text: str,
        size: int,
        color: Tuple[int, int, int],
        bold: bool = False,
    ) -> None:
        width = self.text_width(text, size, bold=bold)
        self.draw_text(right_x - width, y, text, size, color, bold=bold)
