"""Learner profile storage."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from learnpath.core.logging import get_logger
from learnpath.models.user import User, UserProfile
from learnpath.schemas.profile import ProfileUpdate

logger = get_logger(__name__)


async def ensure_user(db: AsyncSession, user_id: int) -> User:
    """Get the user row for an authenticated id, creating it on first sight."""
    user = await db.get(User, user_id)
    if user is None:
        user = User(id=user_id)
        db.add(user)
        await db.flush()
        logger.info("User created", user_id=user_id)
    return user


async def get_profile(db: AsyncSession, user_id: int) -> UserProfile | None:
    result = await db.execute(select(UserProfile).where(UserProfile.user_id == user_id))
    return result.scalar_one_or_none()


async def save_profile(db: AsyncSession, user_id: int, data: ProfileUpdate) -> UserProfile:
    """Create the user's profile or replace every field of the existing one."""
    await ensure_user(db, user_id)

    profile = await get_profile(db, user_id)
    if profile is None:
        profile = UserProfile(user_id=user_id)
        db.add(profile)

    profile.background = data.background
    profile.current_skills = list(data.current_skills)
    profile.learning_goals = data.learning_goals
    profile.time_availability_hours_per_week = data.time_availability_hours_per_week
    profile.preferred_learning_style = data.preferred_learning_style
    profile.target_industry = data.target_industry

    await db.flush()
    await db.refresh(profile)
    logger.info("Profile saved", user_id=user_id)
    return profile
