"""Study progress models.

Per-topic entries and weekly summaries are submitted independently and are
never derived from one another.
"""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from learnpath.core.database import Base


class ProgressEntry(Base):
    __tablename__ = "learning_progress"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "roadmap_topic_id", "week_number", name="unique_user_topic_week"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    roadmap_id: Mapped[int] = mapped_column(ForeignKey("roadmaps.id"), index=True)
    roadmap_topic_id: Mapped[int] = mapped_column(ForeignKey("roadmap_topics.id"))
    week_number: Mapped[int] = mapped_column(Integer)

    hours_studied: Mapped[float] = mapped_column(Float, default=0.0)
    completion_percentage: Mapped[int] = mapped_column(Integer, default=0)
    notes: Mapped[str | None] = mapped_column(Text)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )


class WeeklyProgress(Base):
    __tablename__ = "weekly_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "roadmap_id", "week_number", name="unique_user_roadmap_week"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    roadmap_id: Mapped[int] = mapped_column(ForeignKey("roadmaps.id"), index=True)
    week_number: Mapped[int] = mapped_column(Integer)
    week_start_date: Mapped[date | None] = mapped_column(Date)

    total_hours_studied: Mapped[float] = mapped_column(Float, default=0.0)
    topics_completed: Mapped[int] = mapped_column(Integer, default=0)
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )
