"""Database models."""

from learnpath.models.certification import Certification, UserCertification
from learnpath.models.progress import ProgressEntry, WeeklyProgress
from learnpath.models.roadmap import Roadmap, Topic
from learnpath.models.user import User, UserProfile

__all__ = [
    "User",
    "UserProfile",
    "Roadmap",
    "Topic",
    "Certification",
    "UserCertification",
    "ProgressEntry",
    "WeeklyProgress",
]
