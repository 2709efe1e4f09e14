import json

from deepsearch.models.events import EventType
from deepsearch.models.schemas import ContentBlock
from deepsearch.services import streaming


def test_result_payload_carries_type_and_block():
    block = ContentBlock(title="History", content="Text", source="Deep Research Analysis - History")
    event = streaming.result(block)

    assert event.event == EventType.RESULT
    assert event.payload() == {
        "type": "result",
        "result": {"title": "History", "content": "Text", "source": "Deep Research Analysis - History"},
    }


def test_complete_has_only_type():
    assert streaming.complete().payload() == {"type": "complete"}
    assert streaming.complete().is_terminal


def test_failure_and_progress_payloads():
    assert streaming.failure("bad").payload() == {"type": "failure", "reason": "bad"}
    assert streaming.progress("Searching").payload() == {"type": "progress", "message": "Searching"}
    assert not streaming.progress("Searching").is_terminal


def test_format_produces_prefixed_frame():
    frame = streaming.progress("hi").format()

    assert frame.startswith("event: progress\ndata: ")
    assert frame.endswith("\n\n")
    assert json.loads(frame.split("data: ", 1)[1]) == {"type": "progress", "message": "hi"}


def test_to_sse_shapes_event_for_event_source_response():
    sse = streaming.to_sse(streaming.failure("oops"))
    assert sse["event"] == "failure"
    assert json.loads(sse["data"]) == {"type": "failure", "reason": "oops"}
