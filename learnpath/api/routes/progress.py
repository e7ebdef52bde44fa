"""Progress API routes."""

from fastapi import APIRouter

from learnpath.api.deps import CurrentUser, DBSession
from learnpath.core.logging import get_logger
from learnpath.schemas.progress import (
    ProgressEntryResponse,
    TopicProgressSubmit,
    WeeklyProgressResponse,
    WeeklyProgressSubmit,
)
from learnpath.services import progress_aggregator

logger = get_logger(__name__)
router = APIRouter(prefix="/progress", tags=["progress"])


@router.post("/topic", response_model=ProgressEntryResponse)
async def log_topic_progress(
    data: TopicProgressSubmit,
    user_id: CurrentUser,
    db: DBSession,
) -> ProgressEntryResponse:
    """Log progress for a topic; replaces any earlier log for the same week."""
    entry = await progress_aggregator.record(
        db,
        user_id=user_id,
        roadmap_id=data.roadmap_id,
        topic_id=data.roadmap_topic_id,
        week_number=data.week_number,
        hours_studied=data.hours_studied,
        completion_percentage=data.completion_percentage,
        notes=data.notes.strip() if data.notes else None,
    )
    return ProgressEntryResponse.model_validate(entry)


@router.get("/roadmap/{roadmap_id}", response_model=list[ProgressEntryResponse])
async def get_roadmap_progress(
    roadmap_id: int,
    user_id: CurrentUser,
    db: DBSession,
    week_number: int | None = None,
) -> list[ProgressEntryResponse]:
    entries = await progress_aggregator.list_progress(
        db, user_id=user_id, roadmap_id=roadmap_id, week_number=week_number
    )
    return [ProgressEntryResponse.model_validate(e) for e in entries]


@router.post("/weekly", response_model=WeeklyProgressResponse)
async def log_weekly_progress(
    data: WeeklyProgressSubmit,
    user_id: CurrentUser,
    db: DBSession,
) -> WeeklyProgressResponse:
    """Submit a weekly summary; replaces any earlier summary for that week."""
    summary = await progress_aggregator.record_weekly(
        db,
        user_id=user_id,
        roadmap_id=data.roadmap_id,
        week_number=data.week_number,
        week_start_date=data.week_start_date,
        total_hours_studied=data.total_hours_studied,
        topics_completed=data.topics_completed,
        notes=data.notes.strip() if data.notes else None,
    )
    return WeeklyProgressResponse.model_validate(summary)


@router.get("/weekly/{roadmap_id}", response_model=list[WeeklyProgressResponse])
async def get_weekly_progress(
    roadmap_id: int,
    user_id: CurrentUser,
    db: DBSession,
) -> list[WeeklyProgressResponse]:
    summaries = await progress_aggregator.list_weekly(db, user_id=user_id, roadmap_id=roadmap_id)
    return [WeeklyProgressResponse.model_validate(s) for s in summaries]
