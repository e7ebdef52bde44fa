"""Roadmap schemas for generated payloads and API responses."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Ten years; longer durations are treated as generator noise.
MAX_DURATION_WEEKS = 520


def _string_list(value: Any) -> Any:
    """Accept a single string or null where a list of strings is expected."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if isinstance(value, list):
        seen: dict[str, None] = {}
        for item in value:
            text = str(item).strip()
            if text:
                seen.setdefault(text, None)
        return list(seen)
    return value


class GeneratedTopic(BaseModel):
    """One topic recovered from generated output."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    topic_name: str = Field(validation_alias=AliasChoices("topic_name", "name", "title"))
    description: str = ""
    estimated_hours: float = Field(ge=0, allow_inf_nan=False)
    prerequisites: list[str] = Field(default_factory=list)
    learning_objectives: list[str] = Field(default_factory=list)
    # Assigned by RoadmapBuilder; any numbering in the payload is overwritten.
    order_index: int = 0

    @field_validator("topic_name")
    @classmethod
    def _non_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("topic_name must not be blank")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("prerequisites", "learning_objectives", mode="before")
    @classmethod
    def _lists(cls, value: Any) -> Any:
        return _string_list(value)

    @field_validator("order_index", mode="before")
    @classmethod
    def _order(cls, value: Any) -> int:
        # Payload numbering never costs a topic; the builder renumbers anyway.
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return 0


class GeneratedRoadmap(BaseModel):
    """A roadmap recovered from generated output, before persistence."""

    title: str
    description: str = ""
    estimated_duration_weeks: int | None = None
    topics: list[GeneratedTopic] = Field(default_factory=list)
    # Verbatim parsed payload, stored for audit
    payload: dict[str, Any] = Field(default_factory=dict)


class TopicResponse(BaseModel):
    """Persisted topic."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    roadmap_id: int
    topic_name: str
    description: str
    order_index: int
    estimated_hours: float
    prerequisites: list[str]
    learning_objectives: list[str]


class RoadmapResponse(BaseModel):
    """Roadmap with its ordered topics."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    description: str
    estimated_duration_weeks: int
    created_at: datetime
    topics: list[TopicResponse]


class RoadmapSummary(BaseModel):
    """Roadmap list entry."""

    id: int
    title: str
    description: str
    estimated_duration_weeks: int
    created_at: datetime
    topic_count: int
