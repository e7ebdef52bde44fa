"""Service layer modules."""

from learnpath.services import (
    certification_service,
    persistence_reconciler,
    profile_service,
    progress_aggregator,
    roadmap_service,
)

__all__ = [
    "certification_service",
    "persistence_reconciler",
    "profile_service",
    "progress_aggregator",
    "roadmap_service",
]
