"""Tax invoice PDF rendering logic."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from fpdf import FPDF  # type: ignore

from .assets import InvoiceAssets, load_assets
from .config import DEFAULT_COMPANY
from .fonts import FontManager
from .formatting import fmt_date, fmt_money, fmt_qty, invoice_filename, round_rect
from .models import CompanyProfile, InvoiceRecord, LineItem, RenderedInvoice, validate_record
from .pagination import PlacedRow, RowLayout, cell_baselines, measure_row, plan_table
from .pdf_constants import (
    ADDRESS_Y,
    CELL_PADDING,
    COLOR_BAND,
    COLOR_BAND_BORDER,
    COLOR_BAND_TEXT,
    COLOR_BOX,
    COLOR_BOX_BORDER,
    COLOR_FOOTER_RULE,
    COLOR_HEADING,
    COLOR_INVOCATION,
    COLOR_MUTED,
    COLOR_ROW,
    COLOR_ROW_ALT,
    COLOR_RULE,
    COLOR_TEXT,
    COLOR_THANK_YOU,
    COLOR_TITLE,
    COLOR_TOTALS_BORDER,
    COLOR_TOTALS_BOX,
    COLUMN_WIDTHS,
    COMPANY_NAME_Y,
    CONTENT_W,
    DETAILS_BOX_H,
    DETAILS_BOX_Y,
    DETAILS_FIRST_LINE,
    DETAILS_LEFT_X,
    DETAILS_LINE_H,
    DETAILS_RIGHT_X,
    EMAIL_Y,
    FONT_SIZE_ADDRESS,
    FONT_SIZE_COMPANY,
    FONT_SIZE_INVOCATION,
    FONT_SIZE_NORMAL,
    FONT_SIZE_SMALL,
    FONT_SIZE_TINY,
    FONT_SIZE_TITLE,
    FONT_SIZE_TOTAL,
    FOOTER_RULE_Y,
    FOOTER_TEXT_Y,
    HEADER_RULE_Y,
    INVOCATION_Y,
    LOGO_H,
    LOGO_W,
    LOGO_X,
    LOGO_Y,
    MARGIN,
    PAGE_NUMBER_Y,
    PAGE_W,
    PHONE_LINE_H,
    PHONE_X,
    SIGNATURE_H,
    SIGNATURE_LABEL_Y,
    SIGNATURE_W,
    SIGNATURE_X,
    SIGNATURE_Y,
    TABLE_BAND_H,
    TABLE_BAND_Y_CONT,
    TABLE_BAND_Y_FIRST,
    TABLE_HEADERS,
    THANK_YOU_Y,
    TITLE_Y,
    TOTAL_BAR_H,
    TOTAL_BAR_OFFSET,
    TOTAL_BAR_RADIUS,
    TOTAL_TEXT_OFFSET,
    TOTALS_H,
    TOTALS_LINE_OFFSETS,
    TOTALS_W,
    TOTALS_X,
)

logger = logging.getLogger(__name__)

SERIAL_COLUMN = 0
NOT_AVAILABLE = "N/A"


def column_positions(widths: Sequence[float] = COLUMN_WIDTHS, left: float = MARGIN) -> List[float]:
    positions: List[float] = []
    x = left
    for width in widths:
        positions.append(x)
        x += width
    return positions


def row_cells(serial: int, item: LineItem) -> List[str]:
    description = item.description
    if item.item_code:
        description = f"{description}, Item Code: {item.item_code}"

    return [
        str(serial),
        description,
        item.hsn.strip() or NOT_AVAILABLE,
        fmt_qty(item.quantity),
        fmt_money(item.rate),
        fmt_money(item.discount),
        fmt_money(item.amount),
    ]


class InvoiceRenderer:
    def __init__(
        self,
        record: InvoiceRecord,
        company: CompanyProfile = DEFAULT_COMPANY,
        assets: Optional[InvoiceAssets] = None,
    ) -> None:
        # Nothing may be drawn for a record missing its required fields.
        validate_record(record)

        self.record = record
        self.company = company
        if assets is None:
            assets = load_assets()
        self.logo_path = assets.logo
        self.signature_path = assets.signature
        self.totals = record.totals()
        self.column_x = column_positions()

        self.pdf = FPDF(unit="pt", format="A4")
        self.pdf.set_auto_page_break(False)
        self.fonts = FontManager(self.pdf)
        self.pages: List[int] = []

    def _draw_image(self, path: str, x: float, y: float, width: float, height: float) -> bool:
        try:
            self.pdf.image(path, x=x, y=y, w=width, h=height)
        except Exception as exc:
            logger.warning("Could not embed image %s, continuing without it: %s", path, exc)
            return False
        return True

    def _draw_rule(self, y: float, color, width: float) -> None:
        self.pdf.set_draw_color(*color)
        self.pdf.set_line_width(width)
        self.pdf.line(MARGIN, y, PAGE_W - MARGIN, y)

    def _draw_header(self) -> None:
        company = self.company
        center = PAGE_W / 2.0

        if company.invocation:
            self.fonts.draw_centered(
                center,
                INVOCATION_Y,
                company.invocation,
                FONT_SIZE_INVOCATION,
                COLOR_INVOCATION,
                bold=True,
            )

        if self.logo_path and not self._draw_image(self.logo_path, LOGO_X, LOGO_Y, LOGO_W, LOGO_H):
            self.logo_path = None

        self.fonts.draw_centered(
            center, COMPANY_NAME_Y, company.name, FONT_SIZE_COMPANY, COLOR_HEADING, bold=True
        )
        for index, phone in enumerate(company.phone_numbers):
            self.fonts.draw_text(
                PHONE_X,
                COMPANY_NAME_Y + index * PHONE_LINE_H,
                phone,
                FONT_SIZE_SMALL,
                COLOR_HEADING,
            )

        self.fonts.draw_centered(center, ADDRESS_Y, company.address, FONT_SIZE_ADDRESS, COLOR_MUTED)
        if company.email:
            self.fonts.draw_centered(
                center, EMAIL_Y, f"Email: {company.email}", FONT_SIZE_SMALL, COLOR_MUTED
            )

        self._draw_rule(HEADER_RULE_Y, COLOR_RULE, 2)

    def _draw_details(self) -> None:
        record = self.record
        self.fonts.draw_centered(
            PAGE_W / 2.0, TITLE_Y, "TAX INVOICE", FONT_SIZE_TITLE, COLOR_TITLE, bold=True
        )

        self.pdf.set_fill_color(*COLOR_BOX)
        self.pdf.set_draw_color(*COLOR_BOX_BORDER)
        self.pdf.set_line_width(1)
        self.pdf.rect(MARGIN, DETAILS_BOX_Y, CONTENT_W, DETAILS_BOX_H, "DF")

        left = [
            (f"Bill No: {record.bill_no}", True),
            (f"Client Name: {record.client_name}", False),
            (f"Order No: {record.order_no or NOT_AVAILABLE}", False),
            (f"Challan No: {record.challan_no or NOT_AVAILABLE}", False),
        ]
        right = [
            (f"Date: {fmt_date(record.invoice_date)}", True),
            (f"GST No: {record.gst_no or NOT_AVAILABLE}", False),
        ]
        for x, lines in ((DETAILS_LEFT_X, left), (DETAILS_RIGHT_X, right)):
            for index, (text, bold) in enumerate(lines):
                y = DETAILS_BOX_Y + DETAILS_FIRST_LINE + index * DETAILS_LINE_H
                self.fonts.draw_text(x, y, text, FONT_SIZE_NORMAL, COLOR_TEXT, bold=bold)

    def _draw_table_band(self, y: float) -> None:
        self.pdf.set_fill_color(*COLOR_BAND)
        self.pdf.set_draw_color(*COLOR_BAND_BORDER)
        self.pdf.set_line_width(1)
        text_y = y + (TABLE_BAND_H + FONT_SIZE_NORMAL) / 2.0
        for header, x, width in zip(TABLE_HEADERS, self.column_x, COLUMN_WIDTHS):
            self.pdf.rect(x, y, width, TABLE_BAND_H, "DF")
            self.fonts.draw_text(
                x + CELL_PADDING, text_y, header, FONT_SIZE_NORMAL, COLOR_BAND_TEXT, bold=True
            )

    def _draw_row(self, placed: PlacedRow, layout: RowLayout) -> None:
        fill = COLOR_ROW if placed.index % 2 == 0 else COLOR_ROW_ALT
        self.pdf.set_fill_color(*fill)
        self.pdf.set_draw_color(*COLOR_BOX_BORDER)
        self.pdf.set_line_width(0.5)
        for x, width in zip(self.column_x, COLUMN_WIDTHS):
            self.pdf.rect(x, placed.y, width, placed.height, "DF")

        for column, (x, lines) in enumerate(zip(self.column_x, layout.lines)):
            baselines = cell_baselines(len(lines), placed.y, placed.height)
            for line, baseline in zip(lines, baselines):
                if baseline is None:
                    continue
                self.fonts.draw_text(
                    x + CELL_PADDING,
                    baseline,
                    line,
                    FONT_SIZE_NORMAL,
                    COLOR_TEXT,
                    bold=column == SERIAL_COLUMN,
                )

    def _draw_totals(self, y: float) -> None:
        totals = self.totals
        rate = totals.tax_rate_percent
        value_right = TOTALS_X + TOTALS_W - 10

        self.pdf.set_fill_color(*COLOR_TOTALS_BOX)
        self.pdf.set_draw_color(*COLOR_TOTALS_BORDER)
        self.pdf.set_line_width(1)
        self.pdf.rect(TOTALS_X, y, TOTALS_W, TOTALS_H, "DF")

        rows = [
            ("Subtotal:", totals.subtotal),
            (f"SGST ({rate}%):", totals.sgst),
            (f"CGST ({rate}%):", totals.cgst),
        ]
        for (label, value), offset in zip(rows, TOTALS_LINE_OFFSETS):
            self.fonts.draw_text(TOTALS_X + 10, y + offset, label, FONT_SIZE_NORMAL, COLOR_TEXT)
            self.fonts.draw_right(value_right, y + offset, fmt_money(value), FONT_SIZE_NORMAL, COLOR_TEXT)

        self.pdf.set_fill_color(*COLOR_TITLE)
        round_rect(
            self.pdf,
            TOTALS_X + 5,
            y + TOTAL_BAR_OFFSET,
            TOTALS_W - 10,
            TOTAL_BAR_H,
            TOTAL_BAR_RADIUS,
            fill=True,
        )
        self.fonts.draw_text(
            TOTALS_X + 10, y + TOTAL_TEXT_OFFSET, "TOTAL:", FONT_SIZE_TOTAL, COLOR_BAND_TEXT, bold=True
        )
        self.fonts.draw_right(
            value_right,
            y + TOTAL_TEXT_OFFSET,
            fmt_money(totals.total),
            FONT_SIZE_TOTAL,
            COLOR_BAND_TEXT,
            bold=True,
        )

    def _draw_footer(self, page_number: int, total_pages: int) -> None:
        company = self.company
        self._draw_rule(FOOTER_RULE_Y, COLOR_FOOTER_RULE, 1)

        self.fonts.draw_text(
            MARGIN, FOOTER_TEXT_Y, f"GSTIN: {company.gstin}", FONT_SIZE_NORMAL, COLOR_HEADING
        )
        if company.terms:
            self.fonts.draw_centered(
                PAGE_W / 2.0, FOOTER_TEXT_Y, company.terms, FONT_SIZE_TINY, COLOR_MUTED
            )

        if self.signature_path:
            if self._draw_image(self.signature_path, SIGNATURE_X, SIGNATURE_Y, SIGNATURE_W, SIGNATURE_H):
                self.fonts.draw_text(
                    PAGE_W - 140,
                    SIGNATURE_LABEL_Y,
                    "Authorized Signature:",
                    FONT_SIZE_TINY,
                    COLOR_MUTED,
                )
            else:
                self.signature_path = None

        self.fonts.draw_right(
            PAGE_W - MARGIN,
            PAGE_NUMBER_Y,
            f"Page {page_number} of {total_pages}",
            FONT_SIZE_SMALL,
            COLOR_MUTED,
        )
        if company.thank_you:
            self.fonts.draw_text(
                MARGIN, THANK_YOU_Y, company.thank_you, FONT_SIZE_SMALL, COLOR_THANK_YOU, bold=True
            )

    def _add_page(self, band_y: Optional[float] = None) -> None:
        self.pdf.add_page()
        self.pages.append(self.pdf.page)
        self._draw_header()
        if band_y is not None:
            self._draw_table_band(band_y)

    def _switch_to_page(self, page: int) -> None:
        self.pdf.page = page
        self.fonts.reset()

    def _draw_footers(self) -> None:
        # Runs after layout so every footer knows the final page count.
        last_page = self.pdf.page
        total_pages = len(self.pages)
        for page_number, page in enumerate(self.pages, start=1):
            self._switch_to_page(page)
            self._draw_footer(page_number, total_pages)
        self._switch_to_page(last_page)

    def measure_rows(self) -> List[RowLayout]:
        return [
            measure_row(
                self.fonts,
                row_cells(serial, item),
                COLUMN_WIDTHS,
                bold_columns=(SERIAL_COLUMN,),
            )
            for serial, item in enumerate(self.record.items, start=1)
        ]

    def _serialize(self) -> bytes:
        return bytes(self.pdf.output())

    def render(self) -> bytes:
        layouts = self.measure_rows()
        plan = plan_table([layout.height for layout in layouts])

        self._add_page()
        self._draw_details()
        self._draw_table_band(TABLE_BAND_Y_FIRST)

        for placed in plan.rows:
            while placed.page >= len(self.pages):
                self._add_page(band_y=TABLE_BAND_Y_CONT)
            self._draw_row(placed, layouts[placed.index])

        while plan.totals_page >= len(self.pages):
            self._add_page()
        self._draw_totals(plan.totals_y)

        self._draw_footers()
        return self._serialize()


def render_invoice(
    record: InvoiceRecord,
    company: CompanyProfile = DEFAULT_COMPANY,
    assets: Optional[InvoiceAssets] = None,
) -> RenderedInvoice:
    content = InvoiceRenderer(record, company, assets).render()
    return RenderedInvoice(
        content=content,
        filename=invoice_filename(record.bill_no, record.client_name),
    )
