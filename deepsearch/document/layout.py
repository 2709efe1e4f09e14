"""Lays out report content blocks onto fixed-size pages.

The finished document is: a cover page, the table of contents starting at
page 2, then one run of pages per content block, with a footer on every page
but the cover. Sections are laid out before the table of contents so each
entry can link to the page its section actually starts on, however many
pages the preceding sections take.
"""
from __future__ import annotations

from datetime import date
from typing import Sequence

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth

from deepsearch.config import settings
from deepsearch.document.cursor import Measure, PageCursor, wrap_text
from deepsearch.document.model import Document, FillRect, Line, Page, TextRun, TocEntry
from deepsearch.models.schemas import ContentBlock

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 20 * mm

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"

ACCENT = (102, 126, 234)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
BODY_TEXT = (60, 60, 60)
FOOTER_TEXT = (150, 150, 150)

TOC_FIRST_PAGE = 2
TOC_INDENT = 5 * mm
TOC_NUMBER_COLUMN = 15 * mm
ELLIPSIS = "..."


def format_date(value: date) -> str:
    return f"{value:%B} {value.day}, {value.year}"


class DocumentLayoutEngine:
    def __init__(
        self,
        page_width: float = PAGE_WIDTH,
        page_height: float = PAGE_HEIGHT,
        margin: float = MARGIN,
        *,
        subtitle: str | None = None,
        measure: Measure = stringWidth,
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.subtitle = subtitle if subtitle is not None else settings.report_subtitle
        self.measure = measure

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    def layout(
        self,
        topic: str,
        blocks: Sequence[ContentBlock],
        generated_on: date | None = None,
    ) -> Document:
        sections = self._cursor()
        section_offsets = [
            self._layout_section(sections, index, block) for index, block in enumerate(blocks)
        ]

        toc = self._cursor()
        pending_links = self._layout_toc(toc, blocks)

        cover = self._layout_cover(topic, generated_on or date.today())
        pages = [cover, *toc.pages, *sections.pages]
        for number, page in enumerate(pages, start=1):
            page.number = number

        first_section_page = TOC_FIRST_PAGE + len(toc.pages)
        toc_entries: list[TocEntry] = []
        for index, (entry_run, number_run) in enumerate(pending_links):
            target = first_section_page + section_offsets[index]
            entry_run.link_page = target
            number_run.link_page = target
            number_run.text = str(target)
            toc_entries.append(TocEntry(index=index, title=blocks[index].title, page=target))

        self._stamp_footers(pages, topic)

        return Document(
            title=topic,
            page_width=self.page_width,
            page_height=self.page_height,
            pages=pages,
            toc=toc_entries,
        )

    def _cursor(self) -> PageCursor:
        return PageCursor(
            page_width=self.page_width,
            page_height=self.page_height,
            margin=self.margin,
        )

    def _wrap(self, text: str, max_width: float, size: float, font: str = FONT_REGULAR) -> list[str]:
        return wrap_text(text, max_width, size, font_name=font, measure=self.measure)

    def _layout_cover(self, topic: str, generated_on: date) -> Page:
        page = Page()
        page.ops.append(FillRect(0, 0, self.page_width, self.page_height, ACCENT))

        center_x = self.page_width / 2
        title_lines = self._wrap(topic.upper(), self.content_width - 20 * mm, 32, FONT_BOLD)
        line_pitch = 12 * mm
        title_y = (self.page_height - len(title_lines) * line_pitch) / 2
        for line in title_lines:
            page.ops.append(
                TextRun(line, center_x, title_y, FONT_BOLD, 32, WHITE, align="center")
            )
            title_y += line_pitch

        page.ops.append(
            TextRun(
                self.subtitle,
                center_x,
                self.page_height - 40 * mm,
                FONT_REGULAR,
                16,
                WHITE,
                align="center",
            )
        )
        page.ops.append(
            TextRun(
                format_date(generated_on),
                center_x,
                self.page_height - 30 * mm,
                FONT_REGULAR,
                12,
                WHITE,
                align="center",
            )
        )
        return page

    def _layout_toc(
        self,
        cursor: PageCursor,
        blocks: Sequence[ContentBlock],
    ) -> list[tuple[TextRun, TextRun]]:
        """Write TOC entries whose link targets are filled in once pages are numbered."""
        cursor.new_page()
        cursor.text("Table of Contents", self.margin, FONT_BOLD, 24, BLACK)
        cursor.advance(15 * mm)

        entry_width = self.content_width - TOC_INDENT - TOC_NUMBER_COLUMN
        number_x = self.page_width - self.margin
        pending: list[tuple[TextRun, TextRun]] = []
        for index, block in enumerate(blocks):
            cursor.ensure_space(10 * mm)
            label = self._truncate(f"{index + 1}. {block.title}", entry_width, 11, FONT_REGULAR)
            entry_run = cursor.text(label, self.margin + TOC_INDENT, FONT_REGULAR, 11, ACCENT)
            number_run = cursor.text("", number_x, FONT_REGULAR, 11, ACCENT, align="right")
            pending.append((entry_run, number_run))
            cursor.advance(7 * mm)
        return pending

    def _layout_section(self, cursor: PageCursor, index: int, block: ContentBlock) -> int:
        """Lay out one block from a fresh page; return that page's offset in the run."""
        cursor.new_page()
        start_offset = len(cursor.pages) - 1

        cursor.text(f"SECTION {index + 1}", self.margin, FONT_REGULAR, 10, ACCENT)
        cursor.advance(10 * mm)

        for line in self._wrap(block.title, self.content_width, 20, FONT_BOLD):
            cursor.ensure_space(12 * mm)
            cursor.text(line, self.margin, FONT_BOLD, 20, BLACK)
            cursor.advance(10 * mm)

        cursor.advance(5 * mm)

        for line in self._wrap(block.content, self.content_width, 11):
            cursor.ensure_space(8 * mm)
            if line:
                cursor.text(line, self.margin, FONT_REGULAR, 11, BODY_TEXT)
            cursor.advance(6 * mm)

        cursor.advance(10 * mm)

        for line in self._wrap(f"Source: {block.source}", self.content_width, 9, FONT_ITALIC):
            cursor.ensure_space(10 * mm)
            cursor.text(line, self.margin, FONT_ITALIC, 9, ACCENT)
            cursor.advance(5 * mm)

        cursor.draw(
            Line(self.margin, cursor.y, self.page_width - self.margin, cursor.y, ACCENT, 0.5 * mm)
        )
        return start_offset

    def _stamp_footers(self, pages: list[Page], topic: str) -> None:
        total = len(pages)
        for page in pages[1:]:
            page.ops.append(
                TextRun(
                    f"{topic} - Page {page.number} of {total}",
                    self.page_width / 2,
                    self.page_height - 10 * mm,
                    FONT_REGULAR,
                    9,
                    FOOTER_TEXT,
                    align="center",
                )
            )

    def _truncate(self, text: str, max_width: float, size: float, font: str) -> str:
        """Shorten `text` to one line ending in an ellipsis.

        Widths are accumulated per character and measuring stops at the first
        character past `max_width`, so cost depends on the visible prefix only.
        """
        prefix_widths = [0.0]
        for char in text:
            prefix_widths.append(prefix_widths[-1] + self.measure(char, font, size))
            if prefix_widths[-1] > max_width:
                break
        else:
            return text

        ellipsis_width = self.measure(ELLIPSIS, font, size)
        cut = len(prefix_widths) - 1
        while cut and prefix_widths[cut] + ellipsis_width > max_width:
            cut -= 1
        return text[:cut].rstrip() + ELLIPSIS


def layout(
    topic: str,
    blocks: Sequence[ContentBlock],
    generated_on: date | None = None,
) -> Document:
    return DocumentLayoutEngine().layout(topic, blocks, generated_on=generated_on)
