"""
Layout and style constants for the invoice template.
Positions are millimetres from the top-left corner of an A4 page; drawing
helpers convert them to PDF points (origin bottom-left).
"""

MM = 72.0 / 25.4

# Page geometry (A4)
PAGE_W_MM, PAGE_H_MM = 210.0, 297.0
PAGE_W, PAGE_H = 595.28, 841.89

LEFT_X = 20.0
RIGHT_EDGE_X = 200.0
TOP_Y = 30.0
# Anything drawn below this baseline moves to a new page.
BOTTOM_LIMIT_Y = 277.0

# Header
TITLE_SIZE = 24
META_SIZE = 12
META_Y = (50.0, 60.0, 70.0)

# Company block (right aligned)
COMPANY_SIZE = 10
COMPANY_PITCH = 8.0

# Bill to
BILL_TO_LABEL_Y = 100.0
BILL_TO_LABEL_SIZE = 12
BILL_TO_SIZE = 10
BILL_TO_LINES_Y = (112.0, 122.0, 132.0)

# Items table
TABLE_TOP_Y = 150.0
TABLE_WIDTH = 170.0
TABLE_HEADER_HEIGHT = 12.0
TABLE_HEADER_BASELINE = 8.0
TABLE_FIRST_ROW_GAP = 15.0
TABLE_ROW_PITCH = 10.0
TABLE_COLUMNS = (
    ("Description", 25.0),
    ("Qty", 120.0),
    ("Price", 140.0),
    ("Total", 170.0),
)
BODY_SIZE = 10

# Totals
TOTALS_LABEL_X = 130.0
TOTALS_VALUE_X = 170.0
TOTALS_PITCH = 10.0
GRAND_TOTAL_SIZE = 12

# Trailing sections
NOTES_GAP = 20.0
TERMS_GAP = 15.0
SECTION_TEXT_GAP = 10.0
LINE_HEIGHT_FACTOR = 1.15

COLORS = {
    "primary": "#2563eb",
    "gray": "#6b7280",
    "dark": "#111827",
    "header_fill": "#f5f5f5",
}


def color(name: str) -> str:
    """PDF rgb operand string for a named palette color."""
    hex_value = COLORS.get(name, "#000000").lstrip("#")
    r, g, b = (int(hex_value[i : i + 2], 16) / 255.0 for i in (0, 2, 4))
    return f"{r:.3f} {g:.3f} {b:.3f}"
