"""Shared fixtures: in-memory database and seeded rows."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

import learnpath.models  # noqa: F401
from learnpath.core.database import Base, create_session_factory
from learnpath.models import Roadmap, Topic, User, UserProfile


@pytest_asyncio.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    factory = create_session_factory(test_engine)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def seed_user(test_session: AsyncSession) -> User:
    user = User(email="learner@test.com", name="Learner")
    test_session.add(user)
    await test_session.flush()
    return user


@pytest_asyncio.fixture
async def seed_profile(test_session: AsyncSession, seed_user: User) -> UserProfile:
    profile = UserProfile(
        user_id=seed_user.id,
        background="Backend developer",
        current_skills=["Python", "SQL"],
        learning_goals="Become a cloud architect",
        time_availability_hours_per_week=10,
        preferred_learning_style="hands-on",
        target_industry="Fintech",
    )
    test_session.add(profile)
    await test_session.flush()
    return profile


@pytest_asyncio.fixture
async def seed_roadmap(test_session: AsyncSession, seed_user: User) -> Roadmap:
    roadmap = Roadmap(
        user_id=seed_user.id,
        title="Cloud Path",
        description="From basics to architecture",
        estimated_duration_weeks=6,
        roadmap_data={"title": "Cloud Path"},
        topics=[
            Topic(topic_name="Networking", order_index=1, estimated_hours=10),
            Topic(topic_name="AWS Core Services", order_index=2, estimated_hours=20),
        ],
    )
    test_session.add(roadmap)
    await test_session.flush()
    return roadmap
