"""API dependencies.

Long-lived resources (session factory, generative client, token resolver,
settings) are created by the application lifespan and stored on
``app.state``; these dependencies hand them to route handlers.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from learnpath.agent.certification_recommender import CertificationRecommender
from learnpath.agent.llm import GenerativeClient
from learnpath.agent.roadmap_builder import RoadmapBuilder
from learnpath.core.auth import TokenResolver, bearer_token
from learnpath.core.config import Settings
from learnpath.core.database import session_scope


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get a database session that commits when the request succeeds."""
    async with session_scope(request.app.state.session_factory) as session:
        yield session


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> int:
    """Resolve the bearer token to a user id (AuthenticationError -> 401)."""
    resolver: TokenResolver = request.app.state.token_resolver
    return resolver.resolve(bearer_token(authorization))


def get_generative_client(request: Request) -> GenerativeClient:
    return request.app.state.generative_client


def get_roadmap_builder(
    client: Annotated[GenerativeClient, Depends(get_generative_client)],
    settings: Annotated[Settings, Depends(get_settings_dep)],
) -> RoadmapBuilder:
    return RoadmapBuilder(
        client,
        max_tokens=settings.ROADMAP_MAX_TOKENS,
        temperature=settings.GENERATION_TEMPERATURE,
    )


def get_certification_recommender(
    client: Annotated[GenerativeClient, Depends(get_generative_client)],
    settings: Annotated[Settings, Depends(get_settings_dep)],
) -> CertificationRecommender:
    return CertificationRecommender(
        client,
        max_tokens=settings.CERTIFICATION_MAX_TOKENS,
        temperature=settings.GENERATION_TEMPERATURE,
    )


DBSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[int, Depends(get_current_user)]
