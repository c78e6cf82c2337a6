"""Row measurement and page-break planning for the item table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .formatting import TextWidthProvider, wrap_text
from .pdf_constants import (
    CELL_PADDING,
    CONTENT_BOTTOM,
    FONT_SIZE_NORMAL,
    LINE_H,
    MIN_ROW_H,
    ROW_V_PADDING,
    ROWS_BOTTOM,
    TABLE_BAND_H,
    TABLE_BAND_Y_CONT,
    TABLE_BAND_Y_FIRST,
    TOTALS_GAP,
    TOTALS_H,
    TOTALS_Y_CONT,
)

ROWS_TOP_FIRST = TABLE_BAND_Y_FIRST + TABLE_BAND_H
ROWS_TOP_CONT = TABLE_BAND_Y_CONT + TABLE_BAND_H


@dataclass(frozen=True)
class RowLayout:
    lines: Tuple[Tuple[str, ...], ...]
    height: float


@dataclass(frozen=True)
class PlacedRow:
    index: int
    page: int
    y: float
    height: float


@dataclass(frozen=True)
class TablePlan:
    rows: Tuple[PlacedRow, ...]
    totals_page: int
    totals_y: float

    @property
    def page_count(self) -> int:
        return self.totals_page + 1

    def rows_on_page(self, page: int) -> List[PlacedRow]:
        return [row for row in self.rows if row.page == page]


def row_height(line_count: int) -> float:
    return max(MIN_ROW_H, line_count * LINE_H + ROW_V_PADDING)


def measure_row(
    fonts_obj: TextWidthProvider,
    cells: Sequence[str],
    widths: Sequence[float],
    bold_columns: Sequence[int] = (),
) -> RowLayout:
    """Wrap every cell against its column and derive the row height."""
    wrapped: List[Tuple[str, ...]] = []
    for column, (text, width) in enumerate(zip(cells, widths)):
        lines = wrap_text(
            fonts_obj,
            text,
            width - 2 * CELL_PADDING,
            FONT_SIZE_NORMAL,
            bold=column in bold_columns,
        )
        wrapped.append(tuple(lines))

    max_lines = max((len(lines) for lines in wrapped), default=1)
    return RowLayout(lines=tuple(wrapped), height=row_height(max_lines))


def cell_baselines(
    line_count: int,
    top: float,
    height: float,
    font_size: float = FONT_SIZE_NORMAL,
    line_h: float = LINE_H,
    padding: float = CELL_PADDING,
) -> List[Optional[float]]:
    """Baselines that vertically center ``line_count`` lines in a cell.

    Lines whose baseline would fall below the bottom padding are returned as
    ``None`` and must not be drawn.
    """
    available = height - 2 * padding
    block = line_count * line_h
    first = top + padding + max(0.0, (available - block) / 2.0) + font_size
    limit = top + height - padding

    baselines: List[Optional[float]] = []
    for index in range(line_count):
        baseline = first + index * line_h
        baselines.append(baseline if baseline <= limit else None)
    return baselines


def plan_table(
    heights: Sequence[float],
    rows_top_first: float = ROWS_TOP_FIRST,
    rows_top_cont: float = ROWS_TOP_CONT,
    rows_bottom: float = ROWS_BOTTOM,
    totals_gap: float = TOTALS_GAP,
    totals_h: float = TOTALS_H,
    totals_bottom: float = CONTENT_BOTTOM,
    totals_top_cont: float = TOTALS_Y_CONT,
) -> TablePlan:
    """Assign each row a page and a top position, then place the totals.

    Rows are never split. A row that does not fit above ``rows_bottom`` opens
    a new page. A row too tall even for an empty continuation page is placed
    there alone rather than opening pages forever. The totals block moves to
    a fresh page when it would end below ``totals_bottom``.
    """
    page = 0
    cursor = rows_top_first
    fresh_page = False
    placed: List[PlacedRow] = []

    for index, height in enumerate(heights):
        if cursor + height > rows_bottom and not fresh_page:
            page += 1
            cursor = rows_top_cont
            fresh_page = True
        placed.append(PlacedRow(index=index, page=page, y=cursor, height=height))
        cursor += height
        fresh_page = False

    totals_y = cursor + totals_gap
    if totals_y + totals_h > totals_bottom:
        page += 1
        totals_y = totals_top_cont

    return TablePlan(rows=tuple(placed), totals_page=page, totals_y=totals_y)
