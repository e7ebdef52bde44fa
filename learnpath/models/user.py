"""User and learner profile models."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from learnpath.core.database import Base


class User(Base):
    """Account row; credentials live with the external identity provider."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str | None] = mapped_column(String, unique=True)
    name: Mapped[str | None] = mapped_column(String)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class UserProfile(Base):
    """Background and goals a user fills in before generating a roadmap."""

    __tablename__ = "user_profiles"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), unique=True)

    background: Mapped[str | None] = mapped_column(Text)
    current_skills: Mapped[list[str]] = mapped_column(JSON, default=list)
    learning_goals: Mapped[str | None] = mapped_column(Text)
    time_availability_hours_per_week: Mapped[int] = mapped_column(Integer, default=10)
    preferred_learning_style: Mapped[str | None] = mapped_column(String)
    target_industry: Mapped[str | None] = mapped_column(String)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )
