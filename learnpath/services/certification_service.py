"""User certification listing and status transitions."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from learnpath.core.exceptions import NotFoundError
from learnpath.core.logging import get_logger
from learnpath.models.certification import UserCertification
from learnpath.schemas.certification import CertificationStatus, UserCertificationResponse

logger = get_logger(__name__)


async def list_user_certifications(db: AsyncSession, user_id: int) -> list[UserCertification]:
    """List a user's recommendations, highest priority and newest first."""
    result = await db.execute(
        select(UserCertification)
        .where(UserCertification.user_id == user_id)
        .order_by(
            UserCertification.priority.desc(),
            UserCertification.created_at.desc(),
            UserCertification.id.desc(),
        )
    )
    return list(result.scalars().all())


def apply_status(
    user_certification: UserCertification,
    status: CertificationStatus,
    now: datetime | None = None,
) -> None:
    """Move a recommendation to ``status``.

    Any state may follow any other. Entering in_progress stamps started_at
    unless it is already set; entering completed stamps completed_at.
    Re-applying the current status changes nothing.
    """
    now = now or datetime.utcnow()
    previous = user_certification.status
    if previous == status.value:
        return

    user_certification.status = status.value
    if status is CertificationStatus.IN_PROGRESS and user_certification.started_at is None:
        user_certification.started_at = now
    if status is CertificationStatus.COMPLETED:
        user_certification.completed_at = now


async def update_status(
    db: AsyncSession,
    *,
    user_id: int,
    user_certification_id: int,
    status: CertificationStatus,
) -> UserCertification:
    """Change the status of one of the user's recommendations.

    Raises:
        NotFoundError: No such recommendation for this user.
    """
    result = await db.execute(
        select(UserCertification).where(
            UserCertification.id == user_certification_id,
            UserCertification.user_id == user_id,
        )
    )
    user_certification = result.scalar_one_or_none()
    if user_certification is None:
        raise NotFoundError("Certification not found")

    previous = user_certification.status
    apply_status(user_certification, status)
    await db.flush()

    logger.info(
        "Certification status updated",
        user_certification_id=user_certification_id,
        previous=previous,
        status=status.value,
    )
    return user_certification


def to_response(user_certification: UserCertification) -> UserCertificationResponse:
    """Flatten a recommendation and its catalog entry into one response."""
    certification = user_certification.certification
    return UserCertificationResponse(
        id=user_certification.id,
        certification_id=certification.id,
        roadmap_id=user_certification.roadmap_id,
        name=certification.name,
        provider=certification.provider,
        description=certification.description,
        difficulty_level=certification.difficulty_level,
        estimated_study_hours=certification.estimated_study_hours,
        category=certification.category,
        website_url=certification.website_url,
        recommendation_reason=user_certification.recommendation_reason,
        priority=user_certification.priority,
        status=CertificationStatus(user_certification.status),
        started_at=user_certification.started_at,
        completed_at=user_certification.completed_at,
        created_at=user_certification.created_at,
    )
