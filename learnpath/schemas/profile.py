"""Learner profile schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from learnpath.models.user import UserProfile


def _dedupe(values: list[str]) -> list[str]:
    """Strip, drop blanks and remove repeats while keeping first-seen order."""
    seen: dict[str, None] = {}
    for value in values:
        value = value.strip()
        if value:
            seen.setdefault(value, None)
    return list(seen)


class ProfileSpec(BaseModel):
    """Immutable snapshot of a learner handed to the generators."""

    model_config = ConfigDict(frozen=True)

    background: str | None = None
    current_skills: tuple[str, ...] = ()
    learning_goals: str | None = None
    hours_per_week: int = Field(ge=1, le=168)
    learning_style: str | None = None
    target_industry: str | None = None

    @field_validator("current_skills", mode="before")
    @classmethod
    def _ordered_set(cls, value: object) -> object:
        if isinstance(value, (list, tuple)):
            return tuple(_dedupe([str(v) for v in value]))
        return value

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "ProfileSpec":
        return cls(
            background=profile.background,
            current_skills=tuple(profile.current_skills or ()),
            learning_goals=profile.learning_goals,
            hours_per_week=profile.time_availability_hours_per_week,
            learning_style=profile.preferred_learning_style,
            target_industry=profile.target_industry,
        )


class ProfileUpdate(BaseModel):
    """Create or replace the caller's profile."""

    background: str | None = None
    current_skills: list[str] = Field(default_factory=list)
    learning_goals: str | None = None
    time_availability_hours_per_week: int = Field(default=10, ge=1, le=168)
    preferred_learning_style: str | None = None
    target_industry: str | None = None

    @field_validator("current_skills")
    @classmethod
    def _clean_skills(cls, value: list[str]) -> list[str]:
        return _dedupe(value)


class ProfileResponse(BaseModel):
    """Profile response."""

    model_config = ConfigDict(from_attributes=True)

    user_id: int
    background: str | None
    current_skills: list[str]
    learning_goals: str | None
    time_availability_hours_per_week: int
    preferred_learning_style: str | None
    target_industry: str | None
    updated_at: datetime
