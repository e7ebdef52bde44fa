"""Certification catalog and per-user recommendation models."""

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from learnpath.core.database import Base


class Certification(Base):
    """Global catalog entry, shared by every user it is recommended to."""

    __tablename__ = "certifications"
    __table_args__ = (UniqueConstraint("name", "provider", name="unique_certification_name_provider"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String)
    provider: Mapped[str] = mapped_column(String)

    description: Mapped[str | None] = mapped_column(Text)
    difficulty_level: Mapped[str] = mapped_column(String, default="beginner")
    estimated_study_hours: Mapped[float | None] = mapped_column(Float)
    category: Mapped[str] = mapped_column(String, default="General")
    website_url: Mapped[str | None] = mapped_column(String)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class UserCertification(Base):
    """A certification recommended to one user from one roadmap."""

    __tablename__ = "user_certifications"
    __table_args__ = (
        UniqueConstraint("user_id", "certification_id", name="unique_user_certification"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    certification_id: Mapped[int] = mapped_column(ForeignKey("certifications.id"))
    roadmap_id: Mapped[int | None] = mapped_column(ForeignKey("roadmaps.id"))

    recommendation_reason: Mapped[str | None] = mapped_column(Text)
    priority: Mapped[int] = mapped_column(Integer, default=1)  # 1-5, 5 is highest

    # recommended | in_progress | completed | skipped
    status: Mapped[str] = mapped_column(String, default="recommended")
    started_at: Mapped[datetime | None] = mapped_column(DateTime)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    certification: Mapped[Certification] = relationship(lazy="joined")
