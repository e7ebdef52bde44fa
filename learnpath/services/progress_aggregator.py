"""Merging of client-submitted study progress.

Per-topic entries are keyed by (user, topic, week) and weekly summaries by
(user, roadmap, week). A submission replaces the stored values for its key:
last write wins, nothing accumulates. Concurrent submissions for one key are
settled by the database's ``ON CONFLICT DO UPDATE``; the later commit wins.

Completion is sticky. A write reporting 100% stamps ``completed_at`` with the
current time; a later write reporting less keeps the stamp it finds.
"""

from datetime import date, datetime

from sqlalchemy import case, select
from sqlalchemy.ext.asyncio import AsyncSession

from learnpath.core.database import upsert_insert
from learnpath.core.exceptions import NotFoundError, ValidationError
from learnpath.core.logging import get_logger
from learnpath.models.progress import ProgressEntry, WeeklyProgress
from learnpath.models.roadmap import Topic
from learnpath.services.roadmap_service import get_owned_roadmap

logger = get_logger(__name__)

COMPLETE = 100


def _check_week(week_number: int) -> None:
    if week_number < 1:
        raise ValidationError("week_number must be at least 1")


def _check_hours(hours: float, field: str) -> None:
    if hours < 0:
        raise ValidationError(f"{field} must not be negative")


async def record(
    db: AsyncSession,
    *,
    user_id: int,
    roadmap_id: int,
    topic_id: int,
    week_number: int,
    hours_studied: float,
    completion_percentage: int,
    notes: str | None = None,
) -> ProgressEntry:
    """Record progress on one topic for one week.

    Raises:
        ValidationError: A value is outside its range.
        NotFoundError: The roadmap is not the user's, or the topic is not in it.
    """
    _check_week(week_number)
    _check_hours(hours_studied, "hours_studied")
    if not 0 <= completion_percentage <= COMPLETE:
        raise ValidationError("completion_percentage must be between 0 and 100")

    await get_owned_roadmap(db, user_id, roadmap_id)
    topic = await db.get(Topic, topic_id)
    if topic is None or topic.roadmap_id != roadmap_id:
        raise NotFoundError("Topic not found")

    now = datetime.utcnow()
    stmt = upsert_insert(db, ProgressEntry).values(
        user_id=user_id,
        roadmap_id=roadmap_id,
        roadmap_topic_id=topic_id,
        week_number=week_number,
        hours_studied=hours_studied,
        completion_percentage=completion_percentage,
        notes=notes,
        completed_at=now if completion_percentage == COMPLETE else None,
        created_at=now,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "roadmap_topic_id", "week_number"],
        set_={
            "hours_studied": stmt.excluded.hours_studied,
            "completion_percentage": stmt.excluded.completion_percentage,
            "notes": stmt.excluded.notes,
            "completed_at": case(
                (stmt.excluded.completion_percentage == COMPLETE, stmt.excluded.completed_at),
                else_=ProgressEntry.completed_at,
            ),
            "updated_at": stmt.excluded.updated_at,
        },
    )
    await db.execute(stmt)

    result = await db.execute(
        select(ProgressEntry)
        .where(
            ProgressEntry.user_id == user_id,
            ProgressEntry.roadmap_topic_id == topic_id,
            ProgressEntry.week_number == week_number,
        )
        .execution_options(populate_existing=True)
    )
    entry = result.scalar_one()

    logger.info(
        "Progress recorded",
        user_id=user_id,
        topic_id=topic_id,
        week_number=week_number,
        completion_percentage=completion_percentage,
        completed=entry.completed_at is not None,
    )
    return entry


async def record_weekly(
    db: AsyncSession,
    *,
    user_id: int,
    roadmap_id: int,
    week_number: int,
    total_hours_studied: float,
    topics_completed: int,
    week_start_date: date | None = None,
    notes: str | None = None,
) -> WeeklyProgress:
    """Record the summary for one roadmap week.

    Independent of the per-topic entries; the two may disagree.

    Raises:
        ValidationError: A value is outside its range.
        NotFoundError: The roadmap is not the user's.
    """
    _check_week(week_number)
    _check_hours(total_hours_studied, "total_hours_studied")
    if topics_completed < 0:
        raise ValidationError("topics_completed must not be negative")

    await get_owned_roadmap(db, user_id, roadmap_id)

    now = datetime.utcnow()
    stmt = upsert_insert(db, WeeklyProgress).values(
        user_id=user_id,
        roadmap_id=roadmap_id,
        week_number=week_number,
        week_start_date=week_start_date,
        total_hours_studied=total_hours_studied,
        topics_completed=topics_completed,
        notes=notes,
        created_at=now,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "roadmap_id", "week_number"],
        set_={
            "week_start_date": stmt.excluded.week_start_date,
            "total_hours_studied": stmt.excluded.total_hours_studied,
            "topics_completed": stmt.excluded.topics_completed,
            "notes": stmt.excluded.notes,
            "updated_at": stmt.excluded.updated_at,
        },
    )
    await db.execute(stmt)

    result = await db.execute(
        select(WeeklyProgress)
        .where(
            WeeklyProgress.user_id == user_id,
            WeeklyProgress.roadmap_id == roadmap_id,
            WeeklyProgress.week_number == week_number,
        )
        .execution_options(populate_existing=True)
    )
    summary = result.scalar_one()
    logger.info("Weekly progress recorded", user_id=user_id, roadmap_id=roadmap_id, week_number=week_number)
    return summary


async def list_progress(
    db: AsyncSession,
    *,
    user_id: int,
    roadmap_id: int,
    week_number: int | None = None,
) -> list[ProgressEntry]:
    """List a roadmap's topic progress ordered by topic order, then week."""
    await get_owned_roadmap(db, user_id, roadmap_id)

    stmt = (
        select(ProgressEntry)
        .join(Topic, Topic.id == ProgressEntry.roadmap_topic_id)
        .where(ProgressEntry.user_id == user_id, ProgressEntry.roadmap_id == roadmap_id)
    )
    if week_number is not None:
        stmt = stmt.where(ProgressEntry.week_number == week_number)
    result = await db.execute(stmt.order_by(Topic.order_index, ProgressEntry.week_number))
    return list(result.scalars().all())


async def list_weekly(db: AsyncSession, *, user_id: int, roadmap_id: int) -> list[WeeklyProgress]:
    await get_owned_roadmap(db, user_id, roadmap_id)
    result = await db.execute(
        select(WeeklyProgress)
        .where(WeeklyProgress.user_id == user_id, WeeklyProgress.roadmap_id == roadmap_id)
        .order_by(WeeklyProgress.week_number)
    )
    return list(result.scalars().all())
