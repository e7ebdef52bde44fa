"""Progress schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class TopicProgressSubmit(BaseModel):
    """Log study progress for one topic in one week."""

    roadmap_id: int
    roadmap_topic_id: int
    week_number: int = Field(ge=1)
    hours_studied: float = Field(ge=0)
    completion_percentage: int = Field(ge=0, le=100)
    notes: str | None = None


class WeeklyProgressSubmit(BaseModel):
    """Submit the summary for one roadmap week."""

    roadmap_id: int
    week_number: int = Field(ge=1)
    week_start_date: date | None = None
    total_hours_studied: float = Field(ge=0)
    topics_completed: int = Field(ge=0)
    notes: str | None = None


class ProgressEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    roadmap_id: int
    roadmap_topic_id: int
    week_number: int
    hours_studied: float
    completion_percentage: int
    notes: str | None
    completed_at: datetime | None
    updated_at: datetime


class WeeklyProgressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    roadmap_id: int
    week_number: int
    week_start_date: date | None
    total_hours_studied: float
    topics_completed: int
    notes: str | None
    updated_at: datetime
