"""Certification API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from learnpath.agent.certification_recommender import CertificationRecommender
from learnpath.api.deps import CurrentUser, DBSession, get_certification_recommender
from learnpath.core.exceptions import NotFoundError
from learnpath.core.logging import get_logger
from learnpath.schemas.certification import CertificationStatusUpdate, UserCertificationResponse
from learnpath.schemas.profile import ProfileSpec
from learnpath.services import (
    certification_service,
    persistence_reconciler,
    profile_service,
    roadmap_service,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/certifications", tags=["certifications"])


@router.post("/recommend", response_model=list[UserCertificationResponse])
async def recommend_certifications(
    user_id: CurrentUser,
    db: DBSession,
    recommender: Annotated[CertificationRecommender, Depends(get_certification_recommender)],
) -> list[UserCertificationResponse]:
    """Recommend certifications for the caller's latest roadmap.

    Existing recommendations keep their status and priority.
    """
    profile = await profile_service.get_profile(db, user_id)
    if profile is None:
        raise NotFoundError("User profile not found. Please complete your profile first.")

    roadmap = await roadmap_service.get_latest_roadmap(db, user_id)
    if roadmap is None:
        raise NotFoundError("No roadmap found. Please generate a roadmap first.")

    certification_set = await recommender.recommend(
        ProfileSpec.from_profile(profile), roadmap.topics
    )
    await persistence_reconciler.save_certification_set(
        db, user_id=user_id, roadmap_id=roadmap.id, certification_set=certification_set
    )

    user_certifications = await certification_service.list_user_certifications(db, user_id)
    return [certification_service.to_response(uc) for uc in user_certifications]


@router.get("", response_model=list[UserCertificationResponse])
async def list_certifications(user_id: CurrentUser, db: DBSession) -> list[UserCertificationResponse]:
    """List the caller's recommended certifications."""
    user_certifications = await certification_service.list_user_certifications(db, user_id)
    return [certification_service.to_response(uc) for uc in user_certifications]


@router.patch("/{user_certification_id}/status", response_model=UserCertificationResponse)
async def update_certification_status(
    user_certification_id: int,
    data: CertificationStatusUpdate,
    user_id: CurrentUser,
    db: DBSession,
) -> UserCertificationResponse:
    """Move a recommendation to another status."""
    user_certification = await certification_service.update_status(
        db,
        user_id=user_id,
        user_certification_id=user_certification_id,
        status=data.status,
    )
    return certification_service.to_response(user_certification)
