"""
ReportLab Drawing Surface
Replays a page description onto a reportlab canvas and writes the PDF.
"""

import io
import logging
import os

from reportlab.pdfgen import canvas
from reportlab.pdfbase import pdfmetrics

from .document import TextStyle
from .theme import CHARCOAL

logger = logging.getLogger(__name__)

DEFAULT_STYLE = TextStyle()


def wrap_text(text, max_width, font, size):
    """Word-wrap text to max_width. Explicit line breaks are kept and words
    wider than a full line are split by character."""
    def width(s):
        return pdfmetrics.stringWidth(s, font, size)

    lines = []
    for paragraph in text.splitlines() or [""]:
        current_line = ""
        for word in paragraph.split():
            test = current_line + (" " if current_line else "") + word
            if width(test) <= max_width:
                current_line = test
                continue
            if current_line:
                lines.append(current_line)
                current_line = ""
            # Hard-split an overlong word
            while width(word) > max_width and len(word) > 1:
                cut = len(word) - 1
                while cut > 1 and width(word[:cut]) > max_width:
                    cut -= 1
                lines.append(word[:cut])
                word = word[cut:]
            current_line = word
        lines.append(current_line)
    # Drop trailing blank lines, keep at least one
    while len(lines) > 1 and not lines[-1]:
        lines.pop()
    return lines


def truncate_text(text, max_width, font, size):
    while pdfmetrics.stringWidth(text, font, size) > max_width and len(text) > 3:
        text = text[:-4] + '...'
    return text


class ReportLabSurface:
    def __init__(self, output_dir=".", title="Encomendas Internas", author="Encomendas Internas"):
        self.output_dir = output_dir
        self.title = title
        self.author = author
        self._buffer = None
        self.c = None
        self.page_h = 0
        self.page_num = 0

    # ─── PAGE INFRASTRUCTURE ───

    def start_page(self, width, height):
        if self.c is None:
            self._buffer = io.BytesIO()
            self.c = canvas.Canvas(self._buffer, pagesize=(width, height))
            self.c.setTitle(self.title)
            self.c.setAuthor(self.author)
        else:
            self.c.showPage()
            self.c.setPageSize((width, height))
        self.page_h = height
        self.page_num += 1

    def save_page(self, suggested_name):
        """Write the PDF and return its path"""
        if self.c is None:
            raise RuntimeError("Nothing to save: no page was started")
        self.c.save()
        name = suggested_name if suggested_name.endswith(".pdf") else f"{suggested_name}.pdf"
        path = os.path.join(self.output_dir, name)
        os.makedirs(self.output_dir, exist_ok=True)
        with open(path, "wb") as fh:
            fh.write(self._buffer.getvalue())
        logger.info("Saved %s (%d pages)", path, self.page_num)
        self.c = None
        self._buffer = None
        self.page_num = 0
        return path

    def _y(self, y):
        return self.page_h - y

    # ─── DRAWING PRIMITIVES ───

    def fill_rect(self, x, y, w, h, color):
        self.c.saveState()
        self.c.setFillColor(color)
        self.c.rect(x, self._y(y + h), w, h, fill=1, stroke=0)
        self.c.restoreState()

    def draw_rect(self, x, y, w, h, color, width=0.5):
        self.c.saveState()
        self.c.setStrokeColor(color)
        self.c.setLineWidth(width)
        self.c.rect(x, self._y(y + h), w, h, fill=0, stroke=1)
        self.c.restoreState()

    def draw_line(self, x1, y1, x2, y2, color, width=0.5):
        self.c.saveState()
        self.c.setStrokeColor(color)
        self.c.setLineWidth(width)
        self.c.line(x1, self._y(y1), x2, self._y(y2))
        self.c.restoreState()

    def draw_text(self, content, x, y, style=DEFAULT_STYLE):
        text = content
        if style.max_width:
            text = truncate_text(text, style.max_width, style.font, style.size)
        self.c.saveState()
        self.c.setFont(style.font, style.size)
        self.c.setFillColor(CHARCOAL if style.color is None else style.color)
        if style.align == 'center':
            self.c.drawCentredString(x, self._y(y), text)
        elif style.align == 'right':
            self.c.drawRightString(x, self._y(y), text)
        else:
            self.c.drawString(x, self._y(y), text)
        self.c.restoreState()

    # ─── MEASUREMENT ───

    def measure_wrapped_lines(self, content, max_width, style=DEFAULT_STYLE):
        return wrap_text(content, max_width, style.font, style.size)


class ReportLabMeasurer:
    """Text measurement without a canvas, for laying out before rendering"""

    def measure_wrapped_lines(self, content, max_width, style=DEFAULT_STYLE):
        return wrap_text(content, max_width, style.font, style.size)
