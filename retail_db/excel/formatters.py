"""
Cell and row formatting helpers for the query workbook.
"""
from __future__ import annotations

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from retail_db.excel.styles import (
    HEADER_FONT, HEADER_FILL, THIN_BORDER,
    DATA_FONT, TOTAL_FONT, TOTAL_FILL, TOTAL_BORDER, ZEBRA_FILL,
    KPI_VALUE_FONT, KPI_LABEL_FONT, KPI_FILL,
    CENTER, LEFT, RIGHT, NUMBER_FORMATS,
)


def format_header_row(ws: Worksheet, row_num: int, num_cols: int) -> None:
    for col in range(1, num_cols + 1):
        cell = ws.cell(row=row_num, column=col)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = CENTER
        cell.border = THIN_BORDER


def format_data_cell(
    ws: Worksheet,
    row_num: int,
    col_num: int,
    value,
    col_type: str = "text",
    is_total: bool = False,
) -> None:
    """Write one cell; numeric column types get right alignment and a number format."""
    cell = ws.cell(row=row_num, column=col_num)
    cell.value = value
    cell.font = TOTAL_FONT if is_total else DATA_FONT
    cell.border = TOTAL_BORDER if is_total else THIN_BORDER
    if col_type in NUMBER_FORMATS:
        cell.alignment = RIGHT
        cell.number_format = NUMBER_FORMATS[col_type]
    else:
        cell.alignment = LEFT

    if is_total:
        cell.fill = TOTAL_FILL
    elif row_num % 2 == 0:
        cell.fill = ZEBRA_FILL


def auto_column_width(ws: Worksheet, min_width: int = 10, max_width: int = 50) -> None:
    """Fit column widths to the longest value."""
    for column in ws.columns:
        longest = max((len(str(c.value)) for c in column if c.value is not None), default=0)
        ws.column_dimensions[get_column_letter(column[0].column)].width = min(
            max(longest + 2, min_width), max_width
        )


def add_kpi_card(ws: Worksheet, row: int, col: int, value, label: str, format_type: str = "decimal") -> None:
    """Large value over a small caption."""
    value_cell = ws.cell(row=row, column=col)
    value_cell.value = value
    value_cell.font = KPI_VALUE_FONT
    value_cell.fill = KPI_FILL
    value_cell.alignment = CENTER
    if format_type in NUMBER_FORMATS:
        value_cell.number_format = NUMBER_FORMATS[format_type]

    label_cell = ws.cell(row=row + 1, column=col)
    label_cell.value = label
    label_cell.font = KPI_LABEL_FONT
    label_cell.alignment = CENTER
