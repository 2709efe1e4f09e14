from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


def _require_topic(value: str) -> str:
    if not value.strip():
        raise ValueError("topic must not be empty")
    return value.strip()


class ContentBlock(BaseModel):
    """One titled unit of synthesized text, destined for one document section."""

    model_config = ConfigDict(frozen=True)

    title: str
    content: str
    source: str


# --- Requests ---


class ReportRequest(BaseModel):
    topic: str

    @field_validator("topic")
    @classmethod
    def validate_topic(cls, value: str) -> str:
        return _require_topic(value)


class DocumentRequest(BaseModel):
    topic: str
    results: list[ContentBlock] = []

    @field_validator("topic")
    @classmethod
    def validate_topic(cls, value: str) -> str:
        return _require_topic(value)


# --- Responses ---


class StageInfo(BaseModel):
    index: int
    label: str
    category: str
    query_template: str


class StagesResponse(BaseModel):
    stages: list[StageInfo]
