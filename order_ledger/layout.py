"""
Document Layout Engine
Lays out the ledger report and single order forms as page descriptions.

Both layouts run a vertical cursor (self.y in the page's top-down
coordinates) that only ever advances. Wrapped text is measured first and
everything below it is placed from the measured line count.
"""

from datetime import date, datetime, time

from reportlab.lib.units import mm

from .config import DEFAULT_CAPABILITIES
from .document import Document, Page, TextStyle, FillRect, StrokeRect, Line, Text
from .formatting import format_date, format_timestamp, format_type
from .surface import ReportLabMeasurer
from .theme import (
    PRIMARY, PRIMARY_PALE, ECO_GREEN, WHITE, BLACK, CHARCOAL, SLATE, SLATE_LIGHT,
    RULE_GRAY, FRAME_GRAY, FONT, FONT_BOLD,
    FORM_W, FORM_H, BANNER_H, FORM_LEFT, FORM_CONTENT_W, FORM_LINE_H,
    DESCRIPTION_LINE_H, VALUE_OFFSET, SECOND_COLUMN, FRAME_LEFT, FRAME_W,
    FRAME_MARGIN, FOOTER_Y, DELIVERY_ROWS, DELIVERY_ROW_H,
    REPORT_W, REPORT_H, REPORT_MARGIN, REPORT_CONTENT_W, TABLE_TOP,
    HEADER_ROW_H, CELL_PAD, CELL_FONT_SIZE, CELL_LINE_H,
)

# ─── TEXT STYLES ───
REPORT_TITLE = TextStyle(FONT, 18, BLACK)
REPORT_SUBTITLE = TextStyle(FONT, 11, SLATE)
HEADER_CELL = TextStyle(FONT_BOLD, CELL_FONT_SIZE, WHITE)
BODY_CELL = TextStyle(FONT, CELL_FONT_SIZE, CHARCOAL)
PAGE_NUMBER = TextStyle(FONT, 7, SLATE_LIGHT, align='right')

BANNER_TITLE = TextStyle(FONT_BOLD, 22, WHITE, align='center')
BANNER_SUBTITLE = TextStyle(FONT, 10, WHITE, align='center')
LABEL = TextStyle(FONT_BOLD, 11, BLACK)
VALUE = TextStyle(FONT, 11, BLACK)
TABLE_LABEL = TextStyle(FONT_BOLD, 9, CHARCOAL)
FOOTER = TextStyle(FONT, 9, SLATE_LIGHT, align='center')

REPORT_TITLE_TEXT = "Relatório de Encomendas Internas"
STANDARD_BANNER = "Encomenda Interna"
ECO_BANNER = "Encomenda Interna · Eco"
ECO_BANNER_SUBTITLE = "Material orgânico / reciclado"
FOOTER_TEXT = "Documento gerado automaticamente."
NO_NUMBER = "sem_numero"

# Vertical gaps inside the order form
SEPARATOR_GAP = 5 * mm
TABLE_TITLE_GAP = 3 * mm
FOOTER_GAP = 8 * mm
# Bottom of the report's printable area
REPORT_BOTTOM = REPORT_H - REPORT_MARGIN - 6 * mm


def ledger_file_name(day):
    return f"orders_{day.isoformat()}"


def record_file_name(record):
    number = getattr(record, "sequence_number", None)
    return f"order_{number}" if number else f"order_{NO_NUMBER}"


class Column:
    """Report table column. The wrapping column takes whatever width is left."""

    def __init__(self, title, width, value, wraps=False):
        self.title = title
        self.width = width
        self.value = value
        self.wraps = wraps


class DocumentLayoutEngine:
    def __init__(self, measurer=None, capabilities=DEFAULT_CAPABILITIES):
        self.measurer = measurer if measurer is not None else ReportLabMeasurer()
        self.capabilities = capabilities
        self.y = 0

    def measure(self, text, max_width, style):
        return list(self.measurer.measure_wrapped_lines(text, max_width, style)) or [""]

    # ═══════════════════════════════════════════════════
    # LEDGER REPORT
    # ═══════════════════════════════════════════════════

    def report_columns(self):
        caps = self.capabilities
        columns = [
            Column("Data", 22 * mm, lambda r: format_date(r.created_date)),
            Column("Nº Enc.", 16 * mm, lambda r: str(r.sequence_number or "")),
        ]
        if caps.has_invoice_number:
            columns.append(Column("Nº Fatura", 20 * mm, lambda r: r.invoice_number))
        columns += [
            Column("Eco", 10 * mm, lambda r: "Eco" if r.is_eco_flagged else ""),
            Column("Artigo / Serviço", None, lambda r: r.description, wraps=True),
            Column("Qtd.", 18 * mm, lambda r: r.quantity),
            Column("Cliente", 32 * mm, lambda r: r.client_name),
        ]
        if caps.has_commercial_agent:
            columns.append(Column("Comercial", 26 * mm, lambda r: r.commercial_agent))
        columns += [
            Column("Secção", 28 * mm, lambda r: r.section),
            Column("Estado", 20 * mm, lambda r: r.status.label),
        ]
        fixed = sum(c.width for c in columns if not c.wraps)
        for c in columns:
            if c.wraps:
                c.width = REPORT_CONTENT_W - fixed
        return columns

    def layout_ledger(self, records, generated_at=None) -> Document:
        """Title, generation timestamp and one table row per record.

        Rows that do not fit move to a new page, which repeats the header row.
        An empty record set still yields a header-only document. A plain date
        for generated_at is stamped at midnight.
        """
        generated_at = generated_at or datetime.now()
        if not isinstance(generated_at, datetime) and isinstance(generated_at, date):
            generated_at = datetime.combine(generated_at, time())
        doc = Document(ledger_file_name(generated_at.date()))
        columns = self.report_columns()

        page = self._new_report_page(doc)
        page.add(Text(REPORT_TITLE_TEXT, REPORT_MARGIN, 22 * mm, REPORT_TITLE))
        page.add(Text(f"Gerado em: {format_timestamp(generated_at)}", REPORT_MARGIN, 30 * mm, REPORT_SUBTITLE))
        self.y = TABLE_TOP
        self._draw_table_header(page, columns)
        rows_on_page = 0

        for i, record in enumerate(records):
            cells = [self._cell_lines(c, record) for c in columns]
            row_h = max(len(lines) for lines in cells) * CELL_LINE_H + 2 * CELL_PAD

            if rows_on_page and self.y + row_h > REPORT_BOTTOM:
                page = self._new_report_page(doc)
                self.y = REPORT_MARGIN
                self._draw_table_header(page, columns)
                rows_on_page = 0

            self._draw_table_row(page, columns, cells, row_h, alt=i % 2 == 1)
            rows_on_page += 1

        for n, p in enumerate(doc.pages, start=1):
            p.add(Text(f"{n:02d}", REPORT_W - REPORT_MARGIN, REPORT_H - REPORT_MARGIN / 2, PAGE_NUMBER))
        return doc

    def _new_report_page(self, doc):
        page = Page(REPORT_W, REPORT_H)
        doc.pages.append(page)
        return page

    def _cell_lines(self, column, record):
        text = column.value(record) or ""
        if column.wraps:
            return self.measure(text, column.width - 2 * CELL_PAD, BODY_CELL)
        return [text]

    def _draw_table_header(self, page, columns):
        page.add(FillRect(REPORT_MARGIN, self.y, REPORT_CONTENT_W, HEADER_ROW_H, PRIMARY))
        cx = REPORT_MARGIN
        for c in columns:
            style = TextStyle(HEADER_CELL.font, HEADER_CELL.size, HEADER_CELL.color, max_width=c.width - 2 * CELL_PAD)
            page.add(Text(c.title, cx + CELL_PAD, self.y + HEADER_ROW_H / 2 + 3, style))
            cx += c.width
        self.y += HEADER_ROW_H

    def _draw_table_row(self, page, columns, cells, row_h, alt=False):
        if alt:
            page.add(FillRect(REPORT_MARGIN, self.y, REPORT_CONTENT_W, row_h, PRIMARY_PALE))
        baseline = self.y + CELL_PAD + CELL_FONT_SIZE
        cx = REPORT_MARGIN
        for c, lines in zip(columns, cells):
            style = BODY_CELL if c.wraps else TextStyle(
                BODY_CELL.font, BODY_CELL.size, BODY_CELL.color, max_width=c.width - 2 * CELL_PAD)
            for j, line in enumerate(lines):
                if line:
                    page.add(Text(line, cx + CELL_PAD, baseline + j * CELL_LINE_H, style))
            cx += c.width
        self.y += row_h
        page.add(Line(REPORT_MARGIN, self.y, REPORT_MARGIN + REPORT_CONTENT_W, self.y, RULE_GRAY, 0.3))

    # ═══════════════════════════════════════════════════
    # ORDER FORM
    # ═══════════════════════════════════════════════════

    def layout_record(self, record) -> Document:
        """Banner, label/value rows, wrapped description, deliveries table and
        a frame sized to whatever the content needed."""
        caps = self.capabilities
        doc = Document(record_file_name(record))
        page = Page(FORM_W, FORM_H)
        doc.pages.append(page)

        self._draw_banner(page, record.is_eco_flagged)

        self.y = BANNER_H + 15 * mm
        self._draw_pair(page, "Nº Encomenda:", str(record.sequence_number or "-"),
                        "Data:", format_date(record.created_date))
        self.y += FORM_LINE_H * 2

        # Description block, as tall as its wrapped lines
        page.add(Text("Artigo / Serviço:", FORM_LEFT, self.y, LABEL))
        self.y += FORM_LINE_H
        lines = self.measure(record.description, FORM_CONTENT_W, VALUE)
        for i, line in enumerate(lines):
            page.add(Text(line, FORM_LEFT, self.y + i * DESCRIPTION_LINE_H, VALUE))
        self.y += len(lines) * DESCRIPTION_LINE_H + FORM_LINE_H

        page.add(Line(FORM_LEFT, self.y - SEPARATOR_GAP, FORM_LEFT + FORM_CONTENT_W,
                      self.y - SEPARATOR_GAP, RULE_GRAY))
        self.y += SEPARATOR_GAP

        self._draw_pair(page, "Cliente:", record.client_name, "Secção:", record.section)
        self.y += FORM_LINE_H * 1.5

        if caps.has_invoice_number:
            self._draw_pair(page, "Quantidade:", record.quantity or "-",
                            "Nº Fatura:", record.invoice_number or "-")
        else:
            self._draw_pair(page, "Quantidade:", record.quantity or "-")
        self.y += FORM_LINE_H * 1.5

        if caps.has_commercial_agent:
            self._draw_pair(page, "Comercial:", record.commercial_agent or "-",
                            "Estado:", record.status.label)
        else:
            self._draw_pair(page, "Estado:", record.status.label)
        self.y += FORM_LINE_H * 1.5

        self._draw_pair(page, "Tipo:", format_type(record.is_eco_flagged))
        self.y += FORM_LINE_H * 1.5

        self._draw_deliveries_table(page)

        # Frame from the banner's bottom edge to the cursor plus one margin
        frame_bottom = self.y + FRAME_MARGIN
        page.add(StrokeRect(FRAME_LEFT, BANNER_H, FRAME_W, frame_bottom - BANNER_H, FRAME_GRAY))

        footer_y = max(FOOTER_Y, frame_bottom + FOOTER_GAP)
        page.add(Text(FOOTER_TEXT, FORM_W / 2, footer_y, FOOTER))
        return doc

    def _draw_banner(self, page, eco):
        page.add(FillRect(0, 0, FORM_W, BANNER_H, ECO_GREEN if eco else PRIMARY))
        if eco:
            page.add(Text(ECO_BANNER, FORM_W / 2, 20 * mm, BANNER_TITLE))
            page.add(Text(ECO_BANNER_SUBTITLE, FORM_W / 2, 28 * mm, BANNER_SUBTITLE))
        else:
            page.add(Text(STANDARD_BANNER, FORM_W / 2, 22 * mm, BANNER_TITLE))

    def _draw_pair(self, page, label, value, label2=None, value2=None):
        """One or two label/value pairs on the cursor's line"""
        first_w = SECOND_COLUMN - VALUE_OFFSET - 3 * mm
        page.add(Text(label, FORM_LEFT, self.y, LABEL))
        page.add(Text(value, FORM_LEFT + VALUE_OFFSET, self.y, self._value_style(first_w)))
        if label2 is not None:
            x = FORM_LEFT + SECOND_COLUMN
            second_w = FORM_CONTENT_W - SECOND_COLUMN - VALUE_OFFSET
            page.add(Text(label2, x, self.y, LABEL))
            page.add(Text(value2 or "", x + VALUE_OFFSET, self.y, self._value_style(second_w)))

    @staticmethod
    def _value_style(max_width):
        return TextStyle(VALUE.font, VALUE.size, VALUE.color, max_width=max_width)

    def _draw_deliveries_table(self, page):
        """Empty grid filled in by hand: a header row and DELIVERY_ROWS blank rows"""
        if self.capabilities.has_invoice_number:
            title = "Entregas / Faturas"
            columns = [("Data", 30 * mm), ("Quantidade", 30 * mm), ("Nº Fatura", 35 * mm)]
        else:
            title = "Entregas"
            columns = [("Data", 30 * mm), ("Quantidade", 30 * mm)]
        used = sum(w for _, w in columns)
        columns.append(("Observações", FORM_CONTENT_W - used))

        page.add(Text(title, FORM_LEFT, self.y, LABEL))
        self.y += TABLE_TITLE_GAP

        top = self.y
        height = (DELIVERY_ROWS + 1) * DELIVERY_ROW_H
        page.add(FillRect(FORM_LEFT, top, FORM_CONTENT_W, DELIVERY_ROW_H, PRIMARY_PALE))

        cx = FORM_LEFT
        for i, (name, w) in enumerate(columns):
            page.add(Text(name, cx + 2 * mm, top + DELIVERY_ROW_H - 2.2 * mm, TABLE_LABEL))
            if i:
                page.add(Line(cx, top, cx, top + height, RULE_GRAY))
            cx += w
        for row in range(1, DELIVERY_ROWS + 1):
            ry = top + row * DELIVERY_ROW_H
            page.add(Line(FORM_LEFT, ry, FORM_LEFT + FORM_CONTENT_W, ry, RULE_GRAY))
        page.add(StrokeRect(FORM_LEFT, top, FORM_CONTENT_W, height, SLATE_LIGHT))

        self.y = top + height
