from __future__ import annotations

import io
import re

from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from deepsearch.config import settings
from deepsearch.document.model import Document, FillRect, Line, Page, TextRun

FILENAME_SUFFIX = "_report.pdf"
CONTENT_TYPE = "application/pdf"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def suggested_filename(topic: str) -> str:
    """Filesystem-safe download name: `"Solar Power!"` -> `"solar_power__report.pdf"`."""
    return _NON_ALNUM.sub("_", topic.lower()) + FILENAME_SUFFIX


def destination_name(page_number: int) -> str:
    return f"page-{page_number}"


def render_pdf(document: Document) -> bytes:
    """Serialize a laid-out document to PDF bytes.

    Every page registers a named destination before its content is drawn;
    link annotations point at those names and may precede their targets.
    """
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(document.page_width, document.page_height))
    pdf.setTitle(document.title)
    pdf.setAuthor(settings.report_author)
    pdf.setCreator(settings.report_author)

    for page in document.pages:
        pdf.bookmarkPage(destination_name(page.number))
        _draw_page(pdf, page, document.page_height)
        pdf.showPage()

    pdf.save()
    return buffer.getvalue()


def _draw_page(pdf: canvas.Canvas, page: Page, page_height: float) -> None:
    for op in page.ops:
        if isinstance(op, FillRect):
            pdf.setFillColorRGB(*_rgb(op.color))
            pdf.rect(op.x, page_height - op.y - op.height, op.width, op.height, stroke=0, fill=1)
        elif isinstance(op, Line):
            pdf.setStrokeColorRGB(*_rgb(op.color))
            pdf.setLineWidth(op.width)
            pdf.line(op.x1, page_height - op.y1, op.x2, page_height - op.y2)
        elif isinstance(op, TextRun):
            _draw_text(pdf, op, page_height)
        else:
            raise TypeError(f"Unsupported draw operation: {type(op).__name__}")


def _draw_text(pdf: canvas.Canvas, run: TextRun, page_height: float) -> None:
    if not run.text:
        return
    pdf.setFont(run.font, run.size)
    pdf.setFillColorRGB(*_rgb(run.color))
    baseline = page_height - run.y

    width = stringWidth(run.text, run.font, run.size)
    if run.align == "center":
        pdf.drawCentredString(run.x, baseline, run.text)
        left = run.x - width / 2
    elif run.align == "right":
        pdf.drawRightString(run.x, baseline, run.text)
        left = run.x - width
    else:
        pdf.drawString(run.x, baseline, run.text)
        left = run.x

    if run.link_page is not None:
        descent = run.size * 0.25
        pdf.linkAbsolute(
            "",
            destination_name(run.link_page),
            Rect=(left, baseline - descent, left + width, baseline + run.size),
        )


def _rgb(color: tuple[int, int, int]) -> tuple[float, float, float]:
    return tuple(channel / 255 for channel in color)
