"""Roadmap read operations scoped to their owner."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from learnpath.core.exceptions import NotFoundError
from learnpath.core.logging import get_logger
from learnpath.models.roadmap import Roadmap, Topic

logger = get_logger(__name__)


async def get_owned_roadmap(db: AsyncSession, user_id: int, roadmap_id: int) -> Roadmap:
    """Get a roadmap with its topics if ``user_id`` owns it.

    Raises:
        NotFoundError: The roadmap does not exist or belongs to someone else.
            Both cases look the same to the caller.
    """
    result = await db.execute(
        select(Roadmap).where(Roadmap.id == roadmap_id, Roadmap.user_id == user_id)
    )
    roadmap = result.scalar_one_or_none()
    if roadmap is None:
        raise NotFoundError("Roadmap not found")
    return roadmap


async def get_latest_roadmap(db: AsyncSession, user_id: int) -> Roadmap | None:
    """Get the user's most recently generated roadmap."""
    result = await db.execute(
        select(Roadmap)
        .where(Roadmap.user_id == user_id)
        .order_by(Roadmap.created_at.desc(), Roadmap.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def list_user_roadmaps(db: AsyncSession, user_id: int) -> list[tuple[Roadmap, int]]:
    """List all roadmaps for a user, newest first, with their topic counts."""
    topic_count = (
        select(func.count(Topic.id)).where(Topic.roadmap_id == Roadmap.id).scalar_subquery()
    )
    result = await db.execute(
        select(Roadmap, topic_count)
        .where(Roadmap.user_id == user_id)
        .order_by(Roadmap.created_at.desc(), Roadmap.id.desc())
    )
    return [(roadmap, count) for roadmap, count in result.all()]
