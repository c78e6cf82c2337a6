"""Page geometry, colors and font sizes for the A4 tax invoice.

All coordinates are points with a top-left origin, matching ``FPDF(unit="pt")``.
Text ``y`` values are baselines.
"""

from __future__ import annotations

PAGE_W = 595
PAGE_H = 842
MARGIN = 40
CONTENT_W = PAGE_W - 2 * MARGIN

FONT_SIZE_NORMAL = 10
FONT_SIZE_SMALL = 9
FONT_SIZE_TINY = 8
FONT_SIZE_ADDRESS = 12
FONT_SIZE_INVOCATION = 12
FONT_SIZE_TOTAL = 12
FONT_SIZE_TITLE = 16
FONT_SIZE_COMPANY = 18

LINE_H = FONT_SIZE_NORMAL * 1.4

# Company header, repeated on every page
HEADER_H = 120
INVOCATION_Y = 20.0
COMPANY_NAME_Y = 45.0
PHONE_X = PAGE_W - 150
PHONE_LINE_H = 12.0
ADDRESS_Y = 70.0
EMAIL_Y = 85.0
HEADER_RULE_Y = HEADER_H + 10.0
LOGO_X = MARGIN
LOGO_Y = 50.0
LOGO_W = 50.0
LOGO_H = 30.0

# First-page title and invoice details box
TITLE_Y = 150.0
DETAILS_BOX_Y = 170.0
DETAILS_BOX_H = 80.0
DETAILS_LEFT_X = MARGIN + 10
DETAILS_RIGHT_X = PAGE_W - 200
DETAILS_FIRST_LINE = 20.0
DETAILS_LINE_H = 15.0

# Item table
TABLE_HEADERS = ("Sr.", "Description", "HSN", "Qty", "Rate", "Discount", "Amount")
COLUMN_WIDTHS = (30.0, 195.0, 55.0, 40.0, 65.0, 60.0, 70.0)
TABLE_BAND_H = 25.0
TABLE_BAND_Y_FIRST = 270.0
TABLE_BAND_Y_CONT = 140.0
CELL_PADDING = 4.0
ROW_V_PADDING = 10.0
MIN_ROW_H = 25.0

# Rows stop well above the footer; the totals block may use the space left.
FOOTER_H = 80
CONTENT_BOTTOM = PAGE_H - (FOOTER_H + 20)
ROWS_BOTTOM = CONTENT_BOTTOM - 100

# Totals block
TOTALS_GAP = 20.0
TOTALS_X = PAGE_W - 220
TOTALS_W = 180.0
TOTALS_H = 120.0
TOTALS_Y_CONT = HEADER_H + 50.0
TOTALS_LINE_OFFSETS = (25.0, 45.0, 65.0)
TOTAL_BAR_OFFSET = 70.0
TOTAL_BAR_H = 25.0
TOTAL_TEXT_OFFSET = 88.0
TOTAL_BAR_RADIUS = 3.0

# Footer, drawn on every page after layout
FOOTER_RULE_Y = PAGE_H - FOOTER_H
FOOTER_TEXT_Y = PAGE_H - 60.0
SIGNATURE_LABEL_Y = PAGE_H - 95.0
SIGNATURE_X = PAGE_W - 130
SIGNATURE_Y = PAGE_H - 85.0
SIGNATURE_W = 80.0
SIGNATURE_H = 35.0
THANK_YOU_Y = PAGE_H - 25.0
PAGE_NUMBER_Y = THANK_YOU_Y

# Colors (RGB)
COLOR_INVOCATION = (153, 26, 26)
COLOR_HEADING = (51, 51, 51)
COLOR_MUTED = (102, 102, 102)
COLOR_TITLE = (26, 26, 153)
COLOR_TEXT = (0, 0, 0)
COLOR_BOX = (250, 250, 250)
COLOR_BOX_BORDER = (179, 179, 179)
COLOR_BAND = (51, 51, 51)
COLOR_BAND_BORDER = (26, 26, 26)
COLOR_BAND_TEXT = (255, 255, 255)
COLOR_ROW = (255, 255, 255)
COLOR_ROW_ALT = (250, 250, 250)
COLOR_TOTALS_BOX = (242, 242, 242)
COLOR_TOTALS_BORDER = (77, 77, 77)
COLOR_RULE = (77, 77, 77)
COLOR_FOOTER_RULE = (128, 128, 128)
COLOR_THANK_YOU = (26, 128, 26)
