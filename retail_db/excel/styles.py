"""
Fonts, fills, borders and alignments for the query workbook.
"""
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------
NAVY = "1F3864"
STEEL = "2F5597"
PALE_BLUE = "DEEBF7"
ZEBRA = "F2F2F2"
TOTAL_BG = "FFF2CC"
WHITE = "FFFFFF"
BLACK = "000000"
GRAY = "595959"
RULE = "BFBFBF"

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
TITLE_FONT = Font(name="Calibri", size=20, bold=True, color=NAVY)
SUBTITLE_FONT = Font(name="Calibri", size=11, italic=True, color=GRAY)
SECTION_FONT = Font(name="Calibri", size=13, bold=True, color=STEEL)
HEADER_FONT = Font(name="Calibri", size=11, bold=True, color=WHITE)
DATA_FONT = Font(name="Calibri", size=10, color=BLACK)
TOTAL_FONT = Font(name="Calibri", size=10, bold=True, color=BLACK)
KPI_VALUE_FONT = Font(name="Calibri", size=22, bold=True, color=NAVY)
KPI_LABEL_FONT = Font(name="Calibri", size=9, color=GRAY)
NOTE_FONT = Font(name="Calibri", size=10, italic=True, color=GRAY)

# ---------------------------------------------------------------------------
# Fills
# ---------------------------------------------------------------------------
HEADER_FILL = PatternFill(start_color=STEEL, end_color=STEEL, fill_type="solid")
ZEBRA_FILL = PatternFill(start_color=ZEBRA, end_color=ZEBRA, fill_type="solid")
TOTAL_FILL = PatternFill(start_color=TOTAL_BG, end_color=TOTAL_BG, fill_type="solid")
KPI_FILL = PatternFill(start_color=PALE_BLUE, end_color=PALE_BLUE, fill_type="solid")

# ---------------------------------------------------------------------------
# Borders & alignment
# ---------------------------------------------------------------------------
_thin = Side(style="thin", color=RULE)
THIN_BORDER = Border(left=_thin, right=_thin, top=_thin, bottom=_thin)
TOTAL_BORDER = Border(left=_thin, right=_thin, top=Side(style="medium", color=GRAY), bottom=_thin)

CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")

NUMBER_FORMATS = {
    "number": "#,##0",
    "decimal": "#,##0.00",
}
