from __future__ import annotations

import asyncio

from fastapi import APIRouter
from fastapi.responses import JSONResponse, Response
from loguru import logger

from deepsearch.document.emitter import CONTENT_TYPE, render_pdf, suggested_filename
from deepsearch.document.layout import DocumentLayoutEngine
from deepsearch.models.schemas import DocumentRequest
from deepsearch.services import logger as log_service

router = APIRouter(prefix="/api", tags=["documents"])

GENERATION_FAILED_MESSAGE = "Failed to generate PDF"


def build_pdf(request: DocumentRequest) -> bytes:
    document = DocumentLayoutEngine().layout(request.topic, request.results)
    logger.info(
        f"Laid out '{request.topic[:100]}': {len(request.results)} sections, "
        f"{document.page_count} pages"
    )
    return render_pdf(document)


@router.post("/generate-pdf")
async def generate_pdf(request: DocumentRequest):
    """Render accumulated report results as a downloadable PDF."""
    try:
        pdf_bytes = await asyncio.to_thread(build_pdf, request)
    except Exception as e:
        log_service.log_event(
            event_type="pdf_error",
            message="PDF generation failed",
            error=str(e),
            topic=request.topic[:100],
        )
        return JSONResponse({"error": GENERATION_FAILED_MESSAGE}, status_code=500)

    filename = suggested_filename(request.topic)
    return Response(
        content=pdf_bytes,
        media_type=CONTENT_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
