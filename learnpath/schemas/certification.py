"""Certification schemas."""

import math
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DIFFICULTY_LEVELS = ("beginner", "intermediate", "advanced")
LOWEST_PRIORITY = 1
HIGHEST_PRIORITY = 5


class CertificationStatus(str, Enum):
    RECOMMENDED = "recommended"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SKIPPED = "skipped"


def normalize_priority(value: Any) -> int:
    """Map a generated priority onto 1-5.

    Anything that is not an integer in range (missing, fractional, text,
    out of range) becomes the lowest priority rather than being clamped.
    """
    if isinstance(value, bool):
        return LOWEST_PRIORITY
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return LOWEST_PRIORITY
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and LOWEST_PRIORITY <= value <= HIGHEST_PRIORITY:
        return value
    return LOWEST_PRIORITY


def normalize_difficulty(value: Any) -> str:
    if isinstance(value, str) and value.strip().lower() in DIFFICULTY_LEVELS:
        return value.strip().lower()
    return DIFFICULTY_LEVELS[0]


class GeneratedCertification(BaseModel):
    """One certification recovered from generated output."""

    model_config = ConfigDict(extra="ignore")

    name: str
    provider: str
    description: str | None = None
    difficulty_level: str = DIFFICULTY_LEVELS[0]
    estimated_study_hours: float | None = Field(default=None, ge=0)
    recommendation_reason: str | None = None
    priority: int = LOWEST_PRIORITY
    category: str = "General"
    website_url: str | None = None

    @field_validator("name", "provider")
    @classmethod
    def _non_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("priority", mode="before")
    @classmethod
    def _priority(cls, value: Any) -> int:
        return normalize_priority(value)

    @field_validator("difficulty_level", mode="before")
    @classmethod
    def _difficulty(cls, value: Any) -> str:
        return normalize_difficulty(value)

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, value: Any) -> Any:
        return value or "General"

    @field_validator("estimated_study_hours", mode="before")
    @classmethod
    def _hours(cls, value: Any) -> Any:
        # Optional field: a junk value is treated as absent instead of
        # costing the whole recommendation.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        if not math.isfinite(value) or value < 0:
            return None
        return value


class CertificationSet(BaseModel):
    """Normalized certification recommendations, whatever the payload container."""

    certifications: list[GeneratedCertification] = Field(default_factory=list)


class CertificationStatusUpdate(BaseModel):
    status: CertificationStatus


class UserCertificationResponse(BaseModel):
    """A user's recommendation joined with its catalog entry."""

    id: int
    certification_id: int
    roadmap_id: int | None
    name: str
    provider: str
    description: str | None
    difficulty_level: str
    estimated_study_hours: float | None
    category: str
    website_url: str | None
    recommendation_reason: str | None
    priority: int
    status: CertificationStatus
    started_at: datetime | None
    completed_at: datetime | None
    created_at: datetime
