"""
Document Theme
Page geometry, fonts and color palette shared by the layout engine and surfaces.
"""

from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.lib.colors import HexColor

# ─── COLOR PALETTE ───
PRIMARY = HexColor('#0EA5E9')
PRIMARY_PALE = HexColor('#F0F9FF')
ECO_GREEN = HexColor('#16A34A')
WHITE = HexColor('#FFFFFF')
BLACK = HexColor('#000000')
CHARCOAL = HexColor('#2D3748')
SLATE = HexColor('#64748B')
SLATE_LIGHT = HexColor('#969696')
RULE_GRAY = HexColor('#DCDCDC')
FRAME_GRAY = HexColor('#C8C8C8')

# ─── FONTS ───
# Standard PDF fonts; no TTF registration needed.
FONT = 'Helvetica'
FONT_BOLD = 'Helvetica-Bold'

# ─── ORDER FORM (portrait) ───
FORM_W, FORM_H = A4  # 595.27 x 841.89
BANNER_H = 35 * mm
FORM_LEFT = 20 * mm
FORM_CONTENT_W = 170 * mm
FORM_LINE_H = 7 * mm
DESCRIPTION_LINE_H = 6 * mm
VALUE_OFFSET = 35 * mm
SECOND_COLUMN = 80 * mm
FRAME_LEFT = 14 * mm
FRAME_W = 182 * mm
FRAME_MARGIN = 10 * mm
FOOTER_Y = 280 * mm
DELIVERY_ROWS = 10
DELIVERY_ROW_H = 7 * mm

# ─── LEDGER REPORT (landscape) ───
REPORT_W, REPORT_H = landscape(A4)
REPORT_MARGIN = 14 * mm
REPORT_CONTENT_W = REPORT_W - 2 * REPORT_MARGIN
TABLE_TOP = 40 * mm
HEADER_ROW_H = 8 * mm
CELL_PAD = 3
CELL_FONT_SIZE = 8
CELL_LINE_H = 10
