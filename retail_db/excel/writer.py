"""
ExcelWriter — builder for the styled query workbook.
"""
from __future__ import annotations

from pathlib import Path

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from retail_db.excel.styles import TITLE_FONT, SUBTITLE_FONT, SECTION_FONT, NOTE_FONT
from retail_db.excel.formatters import (
    format_header_row,
    format_data_cell,
    auto_column_width,
    add_kpi_card,
)


ColSpec = tuple[str, str]  # (label, col_type)

# Excel forbids these in sheet titles and caps them at 31 chars
_BAD_TITLE_CHARS = str.maketrans({c: "-" for c in "[]:*?/\\"})


def safe_sheet_title(title: str) -> str:
    return title.translate(_BAD_TITLE_CHARS)[:31] or "Sheet"


class ExcelWriter:
    """Fluent builder for styled workbooks."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._first_sheet = True

    def add_sheet(self, title: str) -> Worksheet:
        """Create a worksheet (re-uses the default sheet on the first call)."""
        title = safe_sheet_title(title)
        if self._first_sheet:
            ws = self.wb.active
            ws.title = title
            self._first_sheet = False
        else:
            ws = self.wb.create_sheet(title=title)
        return ws

    def write_title(self, ws: Worksheet, title: str, subtitle: str) -> int:
        """Title + subtitle rows. Returns next available row."""
        ws.cell(row=1, column=1).value = title
        ws.cell(row=1, column=1).font = TITLE_FONT
        ws.cell(row=2, column=1).value = subtitle
        ws.cell(row=2, column=1).font = SUBTITLE_FONT
        return 4

    def write_section(self, ws: Worksheet, row: int, title: str) -> int:
        ws.cell(row=row, column=1).value = title
        ws.cell(row=row, column=1).font = SECTION_FONT
        return row + 1

    def write_note(self, ws: Worksheet, row: int, text: str) -> int:
        ws.cell(row=row, column=1).value = text
        ws.cell(row=row, column=1).font = NOTE_FONT
        return row + 1

    def write_kpi(self, ws: Worksheet, row: int, value, label: str, format_type: str = "decimal") -> int:
        """Single KPI card in column A. Returns next row."""
        add_kpi_card(ws, row, 1, value, label, format_type)
        return row + 3

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[ColSpec],
        rows: list[tuple],
        total: tuple | None = None,
        freeze: bool = True,
    ) -> int:
        """Header + data rows (+ optional total row). Returns the row after the table."""
        for col_num, (label, _) in enumerate(columns, 1):
            ws.cell(row=start_row, column=col_num).value = label
        format_header_row(ws, start_row, len(columns))

        row = start_row + 1
        for values in rows:
            for col_num, ((_, col_type), value) in enumerate(zip(columns, values), 1):
                format_data_cell(ws, row, col_num, value, col_type)
            row += 1

        if total is not None:
            for col_num, ((_, col_type), value) in enumerate(zip(columns, total), 1):
                format_data_cell(ws, row, col_num, value, col_type, is_total=True)
            row += 1

        auto_column_width(ws)
        if freeze:
            ws.freeze_panes = f"A{start_row + 1}"
        return row

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path
