from deepsearch.document.cursor import PageCursor, wrap_text
from deepsearch.document.emitter import render_pdf, suggested_filename
from deepsearch.document.layout import DocumentLayoutEngine, layout
from deepsearch.document.model import Document, Page, TocEntry

__all__ = [
    "Document",
    "DocumentLayoutEngine",
    "Page",
    "PageCursor",
    "TocEntry",
    "layout",
    "render_pdf",
    "suggested_filename",
    "wrap_text",
]
