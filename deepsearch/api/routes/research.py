from __future__ import annotations

from fastapi import APIRouter
from sse_starlette.sse import EventSourceResponse

from deepsearch.agents.orchestrator import ReportPipeline
from deepsearch.models.schemas import ReportRequest, StageInfo, StagesResponse
from deepsearch.models.stages import STAGES
from deepsearch.services import logger as log_service
from deepsearch.services import streaming

router = APIRouter(prefix="/api", tags=["research"])


@router.post("/deep-search")
async def deep_search(request: ReportRequest):
    """SSE endpoint that streams one progress/result pair per stage, then a terminal event."""
    topic = request.topic

    async def event_generator():
        log_service.log_event(
            event_type="report_started",
            message="Report stream opened",
            topic=topic[:100],
        )
        pipeline = ReportPipeline()
        async for event in pipeline.run(topic):
            yield streaming.to_sse(event)

    return EventSourceResponse(
        event_generator(),
        headers={"Cache-Control": "no-cache"},
    )


@router.get("/stages", response_model=StagesResponse)
async def list_stages():
    """List the research perspectives every report runs through, in order."""
    return StagesResponse(
        stages=[
            StageInfo(
                index=index,
                label=stage.perspective_label,
                category=stage.category.value,
                query_template=stage.query_template,
            )
            for index, stage in enumerate(STAGES)
        ]
    )
