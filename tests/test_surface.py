import os
from datetime import datetime

import pytest
from reportlab.pdfbase import pdfmetrics

from order_ledger.document import Document, Page, FillRect, StrokeRect, Line, Text, TextStyle
from order_ledger.layout import DocumentLayoutEngine
from order_ledger.surface import ReportLabSurface, wrap_text, truncate_text
from order_ledger.theme import PRIMARY, FONT

from test_layout import make_record


def width(text, size=10):
    return pdfmetrics.stringWidth(text, FONT, size)


class TestWrapText:

    def test_short_text_is_one_line(self):
        assert wrap_text("Fita jacquard", 200, FONT, 10) == ["Fita jacquard"]

    def test_lines_fit_max_width(self):
        text = "Cordão redondo em algodão reciclado com acabamento encerado " * 6
        lines = wrap_text(text, 150, FONT, 10)
        assert len(lines) > 1
        assert all(width(line) <= 150 for line in lines)
        assert " ".join(lines) == " ".join(text.split())

    def test_explicit_line_breaks_are_kept(self):
        assert wrap_text("um\ndois\n\ntrês", 300, FONT, 10) == ["um", "dois", "", "três"]

    def test_overlong_word_is_split(self):
        word = "A" * 80
        lines = wrap_text(word, 60, FONT, 10)
        assert "".join(lines) == word
        assert all(width(line) <= 60 for line in lines)

    def test_empty_text_is_one_blank_line(self):
        assert wrap_text("", 100, FONT, 10) == [""]


def test_truncate_text():
    text = "Estamparia/Ponteiras com acabamento especial"
    short = truncate_text(text, 60, FONT, 10)
    assert short.endswith("...")
    assert width(short) <= 60
    assert truncate_text("Cordão", 200, FONT, 10) == "Cordão"


class TestReportLabSurface:

    def test_renders_a_pdf(self, tmp_path):
        doc = Document("order_test", [Page(300, 400, [
            FillRect(0, 0, 300, 50, PRIMARY),
            StrokeRect(10, 60, 280, 100),
            Line(10, 80, 290, 80),
            Text("Encomenda", 150, 30, TextStyle(align='center')),
            Text("Direita", 290, 100, TextStyle(align='right')),
            Text("Texto muito comprido para a caixa", 20, 120, TextStyle(max_width=40)),
        ])])
        path = doc.render(ReportLabSurface(str(tmp_path)))
        assert path == os.path.join(str(tmp_path), "order_test.pdf")
        with open(path, "rb") as fh:
            assert fh.read(5) == b"%PDF-"

    def test_ledger_and_order_form(self, tmp_path):
        engine = DocumentLayoutEngine()
        surface = ReportLabSurface(str(tmp_path / "out"))
        records = [make_record(n, description="Fita jacquard " * n) for n in range(40, 0, -1)]

        report = engine.layout_ledger(records, datetime(2026, 10, 18, 9, 30))
        form = engine.layout_record(records[0])
        report_path = report.render(surface)
        form_path = form.render(surface)

        assert os.path.basename(report_path) == "orders_2026-10-18.pdf"
        assert os.path.basename(form_path) == "order_40.pdf"
        assert os.path.getsize(report_path) > 0
        assert os.path.getsize(form_path) > 0

    def test_save_without_pages(self, tmp_path):
        with pytest.raises(RuntimeError):
            ReportLabSurface(str(tmp_path)).save_page("empty")

    def test_measure_wrapped_lines(self):
        surface = ReportLabSurface()
        assert surface.measure_wrapped_lines("a b c", 500) == ["a b c"]
