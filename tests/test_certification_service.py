"""Tests for certification status transitions and listing."""

from datetime import datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from learnpath.core.exceptions import NotFoundError
from learnpath.models import Certification, Roadmap, User, UserCertification
from learnpath.schemas.certification import CertificationStatus
from learnpath.services import certification_service

T1 = datetime(2024, 3, 1, 9, 0)
T2 = datetime(2024, 4, 1, 9, 0)


def _recommendation(**overrides) -> UserCertification:
    values = {"user_id": 1, "certification_id": 1, "priority": 3, "status": "recommended"}
    values.update(overrides)
    return UserCertification(**values)


class TestApplyStatus:
    def test_in_progress_stamps_started_at_once(self):
        uc = _recommendation()
        certification_service.apply_status(uc, CertificationStatus.IN_PROGRESS, now=T1)
        assert uc.status == "in_progress"
        assert uc.started_at == T1

        certification_service.apply_status(uc, CertificationStatus.RECOMMENDED, now=T2)
        certification_service.apply_status(uc, CertificationStatus.IN_PROGRESS, now=T2)
        assert uc.started_at == T1

    def test_completed_stamps_completed_at(self):
        uc = _recommendation(status="in_progress", started_at=T1)
        certification_service.apply_status(uc, CertificationStatus.COMPLETED, now=T2)
        assert uc.status == "completed"
        assert uc.completed_at == T2
        assert uc.started_at == T1

    def test_reapplying_same_status_changes_nothing(self):
        uc = _recommendation(status="completed", completed_at=T1)
        certification_service.apply_status(uc, CertificationStatus.COMPLETED, now=T2)
        assert uc.completed_at == T1

    def test_completed_can_go_back_to_recommended(self):
        uc = _recommendation(status="completed", completed_at=T1)
        certification_service.apply_status(uc, CertificationStatus.RECOMMENDED, now=T2)
        assert uc.status == "recommended"
        assert uc.completed_at == T1

    def test_skip_straight_to_completed(self):
        uc = _recommendation()
        certification_service.apply_status(uc, CertificationStatus.COMPLETED, now=T1)
        assert uc.started_at is None
        assert uc.completed_at == T1


async def _seed_recommendations(db: AsyncSession, user: User, roadmap: Roadmap) -> list[UserCertification]:
    low = Certification(name="Cloud Practitioner", provider="AWS")
    high = Certification(name="CKA", provider="CNCF")
    db.add_all([low, high])
    await db.flush()
    recommendations = [
        UserCertification(user_id=user.id, certification_id=low.id, roadmap_id=roadmap.id, priority=2),
        UserCertification(user_id=user.id, certification_id=high.id, roadmap_id=roadmap.id, priority=5),
    ]
    db.add_all(recommendations)
    await db.flush()
    return recommendations


@pytest.mark.asyncio
async def test_list_orders_by_priority(test_session: AsyncSession, seed_user: User, seed_roadmap: Roadmap) -> None:
    await _seed_recommendations(test_session, seed_user, seed_roadmap)
    listed = await certification_service.list_user_certifications(test_session, seed_user.id)
    responses = [certification_service.to_response(uc) for uc in listed]
    assert [(r.name, r.priority, r.status) for r in responses] == [
        ("CKA", 5, CertificationStatus.RECOMMENDED),
        ("Cloud Practitioner", 2, CertificationStatus.RECOMMENDED),
    ]


@pytest.mark.asyncio
async def test_update_status(test_session: AsyncSession, seed_user: User, seed_roadmap: Roadmap) -> None:
    low, _ = await _seed_recommendations(test_session, seed_user, seed_roadmap)
    updated = await certification_service.update_status(
        test_session,
        user_id=seed_user.id,
        user_certification_id=low.id,
        status=CertificationStatus.IN_PROGRESS,
    )
    assert updated.status == "in_progress"
    assert updated.started_at is not None


@pytest.mark.asyncio
async def test_update_status_of_other_users_certification(
    test_session: AsyncSession, seed_user: User, seed_roadmap: Roadmap
) -> None:
    low, _ = await _seed_recommendations(test_session, seed_user, seed_roadmap)
    with pytest.raises(NotFoundError):
        await certification_service.update_status(
            test_session,
            user_id=seed_user.id + 1,
            user_certification_id=low.id,
            status=CertificationStatus.COMPLETED,
        )
