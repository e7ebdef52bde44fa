"""Roadmap API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from learnpath.agent.roadmap_builder import RoadmapBuilder
from learnpath.api.deps import CurrentUser, DBSession, get_roadmap_builder
from learnpath.core.exceptions import NotFoundError
from learnpath.core.logging import get_logger
from learnpath.schemas.profile import ProfileSpec
from learnpath.schemas.roadmap import RoadmapResponse, RoadmapSummary
from learnpath.services import persistence_reconciler, profile_service, roadmap_service

logger = get_logger(__name__)
router = APIRouter(prefix="/roadmaps", tags=["roadmaps"])


@router.post("/generate", response_model=RoadmapResponse, status_code=status.HTTP_201_CREATED)
async def generate_roadmap(
    user_id: CurrentUser,
    db: DBSession,
    builder: Annotated[RoadmapBuilder, Depends(get_roadmap_builder)],
) -> RoadmapResponse:
    """Generate and store a new roadmap from the caller's profile.

    Earlier roadmaps are kept as history.
    """
    profile = await profile_service.get_profile(db, user_id)
    if profile is None:
        raise NotFoundError("User profile not found. Please complete your profile first.")

    generated = await builder.generate(ProfileSpec.from_profile(profile))
    roadmap = await persistence_reconciler.save_roadmap(db, user_id, generated)
    return RoadmapResponse.model_validate(roadmap)


@router.get("", response_model=list[RoadmapSummary])
async def list_roadmaps(user_id: CurrentUser, db: DBSession) -> list[RoadmapSummary]:
    """List the caller's roadmaps, newest first."""
    rows = await roadmap_service.list_user_roadmaps(db, user_id)
    return [
        RoadmapSummary(
            id=roadmap.id,
            title=roadmap.title,
            description=roadmap.description,
            estimated_duration_weeks=roadmap.estimated_duration_weeks,
            created_at=roadmap.created_at,
            topic_count=topic_count,
        )
        for roadmap, topic_count in rows
    ]


@router.get("/{roadmap_id}", response_model=RoadmapResponse)
async def get_roadmap(roadmap_id: int, user_id: CurrentUser, db: DBSession) -> RoadmapResponse:
    """Get one of the caller's roadmaps with its ordered topics."""
    roadmap = await roadmap_service.get_owned_roadmap(db, user_id, roadmap_id)
    return RoadmapResponse.model_validate(roadmap)
