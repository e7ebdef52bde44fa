"""Learner profile routes."""

from fastapi import APIRouter

from learnpath.api.deps import CurrentUser, DBSession
from learnpath.schemas.profile import ProfileResponse, ProfileUpdate
from learnpath.services import profile_service

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse | None)
async def get_profile(user_id: CurrentUser, db: DBSession) -> ProfileResponse | None:
    """Get the caller's profile, or null before one is saved."""
    profile = await profile_service.get_profile(db, user_id)
    if profile is None:
        return None
    return ProfileResponse.model_validate(profile)


@router.put("", response_model=ProfileResponse)
async def save_profile(data: ProfileUpdate, user_id: CurrentUser, db: DBSession) -> ProfileResponse:
    """Create or replace the caller's profile."""
    profile = await profile_service.save_profile(db, user_id, data)
    return ProfileResponse.model_validate(profile)
