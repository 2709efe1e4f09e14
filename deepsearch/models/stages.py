from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StageCategory(str, Enum):
    OVERVIEW = "overview"
    HISTORY = "history"
    CURRENT_TRENDS = "current_trends"
    APPLICATIONS = "applications"
    CHALLENGES = "challenges"
    FUTURE = "future"
    BEST_PRACTICES = "best_practices"
    CASE_STUDIES = "case_studies"


@dataclass(frozen=True)
class Stage:
    """One research perspective run against a topic."""

    query_template: str  # "{topic}" is replaced by the user's topic
    perspective_label: str
    category: StageCategory

    def render_query(self, topic: str) -> str:
        return self.query_template.replace("{topic}", topic)


# Order is significant: it drives both the search order and the section order
# of the generated document.
STAGES: tuple[Stage, ...] = (
    Stage("{topic} overview and introduction", "Overview & Fundamentals", StageCategory.OVERVIEW),
    Stage("{topic} historical development", "Historical Context", StageCategory.HISTORY),
    Stage("{topic} current trends and innovations", "Current Trends", StageCategory.CURRENT_TRENDS),
    Stage("{topic} practical applications", "Practical Applications", StageCategory.APPLICATIONS),
    Stage("{topic} challenges and limitations", "Challenges & Considerations", StageCategory.CHALLENGES),
    Stage("{topic} future prospects", "Future Outlook", StageCategory.FUTURE),
    Stage("{topic} best practices", "Best Practices", StageCategory.BEST_PRACTICES),
    Stage("{topic} case studies and examples", "Case Studies", StageCategory.CASE_STUDIES),
)
