from __future__ import annotations

import json

from deepsearch.models.events import EventType, ReportEvent
from deepsearch.models.schemas import ContentBlock


def progress(message: str) -> ReportEvent:
    return ReportEvent(event=EventType.PROGRESS, data={"message": message})


def result(block: ContentBlock) -> ReportEvent:
    """Emit one finished stage as a titled content block."""
    return ReportEvent(event=EventType.RESULT, data={"result": block.model_dump()})


def complete() -> ReportEvent:
    return ReportEvent(event=EventType.COMPLETE)


def failure(reason: str) -> ReportEvent:
    return ReportEvent(event=EventType.FAILURE, data={"reason": reason})


def to_sse(event: ReportEvent) -> dict[str, str]:
    """Shape an event for sse-starlette's EventSourceResponse."""
    return {"event": event.event.value, "data": json.dumps(event.payload())}
