"""Roadmap and topic models.

A roadmap is written once per generation call and never edited afterwards;
regenerating adds a new row and leaves the history in place.
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from learnpath.core.database import Base


class Roadmap(Base):
    __tablename__ = "roadmaps"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)

    title: Mapped[str] = mapped_column(String)
    description: Mapped[str] = mapped_column(Text, default="")
    estimated_duration_weeks: Mapped[int] = mapped_column(Integer, default=1)
    # Raw generation payload, kept verbatim for audit
    roadmap_data: Mapped[dict | None] = mapped_column(JSON)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    topics: Mapped[list["Topic"]] = relationship(
        back_populates="roadmap",
        order_by="Topic.order_index",
        lazy="selectin",
    )


class Topic(Base):
    __tablename__ = "roadmap_topics"
    __table_args__ = (
        UniqueConstraint("roadmap_id", "order_index", name="unique_roadmap_topic_order"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    roadmap_id: Mapped[int] = mapped_column(ForeignKey("roadmaps.id"), index=True)

    topic_name: Mapped[str] = mapped_column(String)
    description: Mapped[str] = mapped_column(Text, default="")
    order_index: Mapped[int] = mapped_column(Integer)  # 1-based, dense
    estimated_hours: Mapped[float] = mapped_column(Float, default=0.0)
    prerequisites: Mapped[list[str]] = mapped_column(JSON, default=list)
    learning_objectives: Mapped[list[str]] = mapped_column(JSON, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    roadmap: Mapped[Roadmap] = relationship(back_populates="topics")
