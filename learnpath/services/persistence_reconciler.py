"""Persistence of generated roadmaps and certification recommendations.

Generation calls can be repeated freely:

- Every roadmap generation stores a new roadmap with its own fresh topics.
  Earlier roadmaps are never touched.
- Certifications are a shared catalog keyed by (name, provider); an existing
  entry is reused no matter which user's generation created it.
- A user's recommendation for a certification is created once. Later runs
  leave its status and priority alone.

Catalog and recommendation rows are written with ``INSERT ... ON CONFLICT DO
NOTHING`` so concurrent runs converge on one row per key.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from learnpath.core.database import upsert_insert
from learnpath.core.logging import get_logger
from learnpath.models.certification import Certification, UserCertification
from learnpath.models.roadmap import Roadmap, Topic
from learnpath.schemas.certification import (
    CertificationSet,
    CertificationStatus,
    GeneratedCertification,
)
from learnpath.schemas.roadmap import GeneratedRoadmap

logger = get_logger(__name__)


async def save_roadmap(db: AsyncSession, user_id: int, generated: GeneratedRoadmap) -> Roadmap:
    """Store a generated roadmap and its topics as new rows.

    Note: This function flushes but does NOT commit the transaction.
    """
    roadmap = Roadmap(
        user_id=user_id,
        title=generated.title,
        description=generated.description,
        estimated_duration_weeks=generated.estimated_duration_weeks or 1,
        roadmap_data=generated.payload,
        topics=[
            Topic(
                topic_name=topic.topic_name,
                description=topic.description,
                order_index=topic.order_index,
                estimated_hours=topic.estimated_hours,
                prerequisites=list(topic.prerequisites),
                learning_objectives=list(topic.learning_objectives),
            )
            for topic in generated.topics
        ],
    )
    db.add(roadmap)
    await db.flush()

    logger.info(
        "Roadmap created",
        roadmap_id=roadmap.id,
        user_id=user_id,
        topic_count=len(roadmap.topics),
    )
    return roadmap


async def upsert_certification(db: AsyncSession, generated: GeneratedCertification) -> int:
    """Return the catalog id for (name, provider), creating the entry if absent."""
    stmt = (
        upsert_insert(db, Certification)
        .values(
            name=generated.name,
            provider=generated.provider,
            description=generated.description,
            difficulty_level=generated.difficulty_level,
            estimated_study_hours=generated.estimated_study_hours,
            category=generated.category,
            website_url=generated.website_url,
        )
        .on_conflict_do_nothing(index_elements=["name", "provider"])
    )
    await db.execute(stmt)

    result = await db.execute(
        select(Certification.id).where(
            Certification.name == generated.name,
            Certification.provider == generated.provider,
        )
    )
    return result.scalar_one()


async def upsert_user_certification(
    db: AsyncSession,
    *,
    user_id: int,
    certification_id: int,
    roadmap_id: int,
    generated: GeneratedCertification,
) -> UserCertification:
    """Create the user's recommendation unless one already exists.

    An existing row wins: its status, priority and reason are kept.
    """
    stmt = (
        upsert_insert(db, UserCertification)
        .values(
            user_id=user_id,
            certification_id=certification_id,
            roadmap_id=roadmap_id,
            recommendation_reason=generated.recommendation_reason,
            priority=generated.priority,
            status=CertificationStatus.RECOMMENDED.value,
        )
        .on_conflict_do_nothing(index_elements=["user_id", "certification_id"])
    )
    await db.execute(stmt)

    result = await db.execute(
        select(UserCertification)
        .where(
            UserCertification.user_id == user_id,
            UserCertification.certification_id == certification_id,
        )
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def save_certification_set(
    db: AsyncSession,
    *,
    user_id: int,
    roadmap_id: int,
    certification_set: CertificationSet,
) -> list[UserCertification]:
    """Reconcile recommended certifications against the catalog and the user's list.

    Note: This function does NOT commit the transaction.
    """
    saved: list[UserCertification] = []
    seen: set[int] = set()
    for generated in certification_set.certifications:
        certification_id = await upsert_certification(db, generated)
        if certification_id in seen:
            continue
        seen.add(certification_id)
        saved.append(
            await upsert_user_certification(
                db,
                user_id=user_id,
                certification_id=certification_id,
                roadmap_id=roadmap_id,
                generated=generated,
            )
        )

    logger.info(
        "Certification recommendations reconciled",
        user_id=user_id,
        roadmap_id=roadmap_id,
        count=len(saved),
    )
    return saved
