from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from reportlab.pdfbase.pdfmetrics import stringWidth

from deepsearch.document.model import RGB, DrawOp, Page, TextRun

Measure = Callable[[str, str, float], float]

DEFAULT_FONT = "Helvetica"


def wrap_text(
    text: str,
    max_width: float,
    font_size: float,
    font_name: str = DEFAULT_FONT,
    measure: Measure = stringWidth,
) -> list[str]:
    """Greedily wrap `text` into lines no wider than `max_width` points.

    Runs of whitespace collapse to single spaces and explicit newlines start a
    new line. A word wider than `max_width` on its own is split across lines
    at character boundaries.
    """
    if max_width <= 0:
        raise ValueError(f"max_width must be positive, got {max_width}")

    def fits(candidate: str) -> bool:
        return measure(candidate, font_name, font_size) <= max_width

    lines: list[str] = []
    if not text or not text.strip():
        return lines

    for paragraph in text.strip().split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue

        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if fits(candidate):
                current = candidate
                continue
            if current:
                lines.append(current)
                current = ""
            if fits(word):
                current = word
                continue
            pieces = _break_word(word, fits)
            lines.extend(pieces[:-1])
            current = pieces[-1]
        if current:
            lines.append(current)

    return lines


def _break_word(word: str, fits: Callable[[str], bool]) -> list[str]:
    pieces: list[str] = []
    current = ""
    for char in word:
        if current and not fits(current + char):
            pieces.append(current)
            current = char
        else:
            current += char
    pieces.append(current)
    return pieces


@dataclass
class PageCursor:
    """Vertical write position over a run of fixed-size pages.

    The cursor owns the pages it writes into and appends a new one whenever
    content would cross the bottom margin.
    """

    page_width: float
    page_height: float
    margin: float
    pages: list[Page] = field(default_factory=list)
    y: float = field(init=False)

    def __post_init__(self) -> None:
        self.y = self.margin

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def bottom(self) -> float:
        return self.page_height - self.margin

    @property
    def page(self) -> Page:
        if not self.pages:
            self.new_page()
        return self.pages[-1]

    def new_page(self) -> Page:
        page = Page()
        self.pages.append(page)
        self.y = self.margin
        return page

    def ensure_space(self, required_height: float) -> bool:
        """Break to a new page if `required_height` does not fit below the cursor."""
        if self.y + required_height <= self.bottom:
            return False
        if self.pages and self.y <= self.margin:
            # Nothing written yet on this page; breaking again would only add blanks.
            return False
        self.new_page()
        return True

    def advance(self, dy: float) -> None:
        self.y += dy

    def draw(self, op: DrawOp) -> None:
        self.page.ops.append(op)

    def text(
        self,
        text: str,
        x: float,
        font: str,
        size: float,
        color: RGB,
        **kwargs,
    ) -> TextRun:
        run = TextRun(text=text, x=x, y=self.y, font=font, size=size, color=color, **kwargs)
        self.draw(run)
        return run
