"""API routes."""

from learnpath.api.routes import certifications, profile, progress, roadmaps

__all__ = ["profile", "roadmaps", "certifications", "progress"]
