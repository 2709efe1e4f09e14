from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventType(str, Enum):
    PROGRESS = "progress"
    RESULT = "result"
    COMPLETE = "complete"
    FAILURE = "failure"


TERMINAL_EVENTS = frozenset({EventType.COMPLETE, EventType.FAILURE})


@dataclass
class ReportEvent:
    event: EventType
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def is_terminal(self) -> bool:
        return self.event in TERMINAL_EVENTS

    def payload(self) -> dict[str, Any]:
        """JSON body of the frame, carrying the `type` discriminator."""
        return {"type": self.event.value, **self.data}

    def format(self) -> str:
        return f"event: {self.event.value}\ndata: {json.dumps(self.payload())}\n\n"
