"""
Page Description
Positioned drawing instructions produced by the layout engine.

Coordinates are points from the page's top-left corner, y growing downward.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from reportlab.lib.colors import Color
from reportlab.pdfbase import pdfmetrics

from .theme import FONT, SLATE_LIGHT


def _or_default(color):
    return SLATE_LIGHT if color is None else color


@dataclass(frozen=True)
class TextStyle:
    font: str = FONT
    size: float = 10
    color: Optional[Color] = None
    align: str = 'left'
    max_width: Optional[float] = None


@dataclass(frozen=True)
class FillRect:
    x: float
    y: float
    w: float
    h: float
    color: Color

    @property
    def bottom(self):
        return self.y + self.h

    def draw(self, surface):
        surface.fill_rect(self.x, self.y, self.w, self.h, self.color)


@dataclass(frozen=True)
class StrokeRect:
    x: float
    y: float
    w: float
    h: float
    color: Optional[Color] = None
    width: float = 0.5

    @property
    def bottom(self):
        return self.y + self.h

    def draw(self, surface):
        surface.draw_rect(self.x, self.y, self.w, self.h, _or_default(self.color), self.width)


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: Optional[Color] = None
    width: float = 0.5

    @property
    def bottom(self):
        return max(self.y1, self.y2)

    def draw(self, surface):
        surface.draw_line(self.x1, self.y1, self.x2, self.y2, _or_default(self.color), self.width)


@dataclass(frozen=True)
class Text:
    """One line of text; y is the baseline"""
    content: str
    x: float
    y: float
    style: TextStyle = TextStyle()

    @property
    def bottom(self):
        # getDescent is negative for glyphs that drop below the baseline
        return self.y - pdfmetrics.getDescent(self.style.font, self.style.size)

    def draw(self, surface):
        surface.draw_text(self.content, self.x, self.y, self.style)


@dataclass
class Page:
    width: float
    height: float
    elements: List[object] = field(default_factory=list)

    def add(self, element):
        self.elements.append(element)
        return element

    def of_type(self, kind):
        return [e for e in self.elements if isinstance(e, kind)]

    def texts(self, content):
        return [e for e in self.elements if isinstance(e, Text) and e.content == content]


@dataclass
class Document:
    file_name: str
    pages: List[Page] = field(default_factory=list)

    def render(self, surface):
        """Replay every page on a drawing surface and save it"""
        for page in self.pages:
            surface.start_page(page.width, page.height)
            for element in page.elements:
                element.draw(surface)
        return surface.save_page(self.file_name)
