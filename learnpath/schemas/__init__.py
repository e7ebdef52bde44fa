"""Pydantic schemas."""

from learnpath.schemas.certification import (
    CertificationSet,
    CertificationStatus,
    CertificationStatusUpdate,
    GeneratedCertification,
    UserCertificationResponse,
)
from learnpath.schemas.profile import ProfileResponse, ProfileSpec, ProfileUpdate
from learnpath.schemas.progress import (
    ProgressEntryResponse,
    TopicProgressSubmit,
    WeeklyProgressResponse,
    WeeklyProgressSubmit,
)
from learnpath.schemas.roadmap import (
    GeneratedRoadmap,
    GeneratedTopic,
    RoadmapResponse,
    RoadmapSummary,
    TopicResponse,
)

__all__ = [
    "ProfileSpec",
    "ProfileUpdate",
    "ProfileResponse",
    "GeneratedTopic",
    "GeneratedRoadmap",
    "TopicResponse",
    "RoadmapResponse",
    "RoadmapSummary",
    "GeneratedCertification",
    "CertificationSet",
    "CertificationStatus",
    "CertificationStatusUpdate",
    "UserCertificationResponse",
    "TopicProgressSubmit",
    "WeeklyProgressSubmit",
    "ProgressEntryResponse",
    "WeeklyProgressResponse",
]
