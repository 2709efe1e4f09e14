"""Page and draw-operation model produced by the layout engine.

Coordinates are PDF points measured from the top-left corner of the page,
with ``y`` growing downwards. Text runs are positioned on their baseline.
The emitter converts to reportlab's bottom-left coordinate space.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

RGB = tuple[int, int, int]


@dataclass
class TextRun:
    text: str
    x: float
    y: float
    font: str
    size: float
    color: RGB
    align: str = "left"  # left | center | right
    link_page: int | None = None


@dataclass
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: RGB
    width: float


@dataclass
class FillRect:
    x: float
    y: float
    width: float
    height: float
    color: RGB


DrawOp = Union[TextRun, Line, FillRect]


@dataclass
class Page:
    number: int = 0  # 1-based, assigned when the document is assembled
    ops: list[DrawOp] = field(default_factory=list)

    def texts(self) -> list[str]:
        return [op.text for op in self.ops if isinstance(op, TextRun)]

    def links(self) -> list[TextRun]:
        return [op for op in self.ops if isinstance(op, TextRun) and op.link_page is not None]


@dataclass
class TocEntry:
    index: int
    title: str
    page: int


@dataclass
class Document:
    title: str
    page_width: float
    page_height: float
    pages: list[Page] = field(default_factory=list)
    toc: list[TocEntry] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def page(self, number: int) -> Page:
        """Return the page with 1-based index `number`."""
        return self.pages[number - 1]
