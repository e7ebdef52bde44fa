"""HTTP tests for the API routes."""

import json

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from learnpath.api.deps import get_current_user, get_db, get_generative_client
from learnpath.core.config import Settings
from learnpath.main import create_app
from learnpath.models import Roadmap, User, UserProfile
from tests.fakes import FakeGenerativeClient

ROADMAP_TEXT = "Here you go:\n```json\n" + json.dumps(
    {
        "title": "Cloud Path",
        "description": "Basics to architecture",
        "estimated_duration_weeks": 5,
        "topics": [
            {"topic_name": "Networking", "description": "n", "estimated_hours": 10},
            {"topic_name": "IAM", "description": "i", "estimated_hours": 6},
        ],
    }
) + "\n```"

CERTIFICATION_TEXT = json.dumps(
    {
        "certifications": [
            {"name": "AWS Solutions Architect", "provider": "AWS", "priority": 5, "difficulty_level": "intermediate"},
            {"name": "Cloud Practitioner", "provider": "AWS", "priority": 9},
        ]
    }
)


@pytest.fixture
def fake_client() -> FakeGenerativeClient:
    return FakeGenerativeClient()


@pytest_asyncio.fixture
async def client(test_session: AsyncSession, seed_user: User, fake_client: FakeGenerativeClient):
    app = create_app(Settings(ENV="test"))

    async def override_db():
        yield test_session

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_current_user] = lambda: seed_user.id
    app.dependency_overrides[get_generative_client] = lambda: fake_client

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_profile_round_trip(client: AsyncClient):
    assert (await client.get("/api/profile")).json() is None

    response = await client.put(
        "/api/profile",
        json={"current_skills": ["Go", "Go", "SQL"], "time_availability_hours_per_week": 12},
    )
    assert response.status_code == 200
    assert response.json()["current_skills"] == ["Go", "SQL"]

    response = await client.put("/api/profile", json={"time_availability_hours_per_week": 0})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_generate_roadmap_requires_profile(client: AsyncClient, fake_client: FakeGenerativeClient):
    response = await client.post("/api/roadmaps/generate")
    assert response.status_code == 404
    assert fake_client.calls == []


@pytest.mark.asyncio
async def test_generate_and_read_roadmap(
    client: AsyncClient, seed_profile: UserProfile, fake_client: FakeGenerativeClient
):
    fake_client.responses.append(ROADMAP_TEXT)
    response = await client.post("/api/roadmaps/generate")
    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Cloud Path"
    assert [(t["topic_name"], t["order_index"]) for t in body["topics"]] == [("Networking", 1), ("IAM", 2)]

    listed = (await client.get("/api/roadmaps")).json()
    assert [(r["id"], r["topic_count"]) for r in listed] == [(body["id"], 2)]

    fetched = await client.get(f"/api/roadmaps/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["topics"] == body["topics"]


@pytest.mark.asyncio
async def test_generation_failures_map_to_gateway_errors(
    client: AsyncClient, seed_profile: UserProfile, fake_client: FakeGenerativeClient
):
    fake_client.responses.extend([RuntimeError("rate limited"), "nothing useful"])

    unavailable = await client.post("/api/roadmaps/generate")
    assert unavailable.status_code == 503
    assert "try again later" in unavailable.json()["detail"]

    malformed = await client.post("/api/roadmaps/generate")
    assert malformed.status_code == 502


@pytest.mark.asyncio
async def test_unknown_roadmap_is_404(client: AsyncClient):
    assert (await client.get("/api/roadmaps/12345")).status_code == 404


@pytest.mark.asyncio
async def test_recommend_requires_roadmap(client: AsyncClient, seed_profile: UserProfile):
    response = await client.post("/api/certifications/recommend")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_recommend_and_update_status(
    client: AsyncClient,
    seed_profile: UserProfile,
    seed_roadmap: Roadmap,
    fake_client: FakeGenerativeClient,
):
    fake_client.responses.append(CERTIFICATION_TEXT)
    response = await client.post("/api/certifications/recommend")
    assert response.status_code == 200
    certifications = response.json()
    assert [(c["name"], c["priority"]) for c in certifications] == [
        ("AWS Solutions Architect", 5),
        ("Cloud Practitioner", 1),
    ]
    assert "Networking, AWS Core Services" in fake_client.calls[0]["prompt"]

    target = certifications[0]["id"]
    updated = await client.patch(f"/api/certifications/{target}/status", json={"status": "in_progress"})
    assert updated.status_code == 200
    assert updated.json()["status"] == "in_progress"
    assert updated.json()["started_at"] is not None

    invalid = await client.patch(f"/api/certifications/{target}/status", json={"status": "abandoned"})
    assert invalid.status_code == 422

    missing = await client.patch("/api/certifications/9999/status", json={"status": "completed"})
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_topic_progress_flow(client: AsyncClient, seed_roadmap: Roadmap):
    topic_id = seed_roadmap.topics[0].id
    payload = {
        "roadmap_id": seed_roadmap.id,
        "roadmap_topic_id": topic_id,
        "week_number": 1,
        "hours_studied": 3,
        "completion_percentage": 100,
        "notes": "  done  ",
    }
    response = await client.post("/api/progress/topic", json=payload)
    assert response.status_code == 200
    assert response.json()["notes"] == "done"
    assert response.json()["completed_at"] is not None

    payload["completion_percentage"] = 50
    again = await client.post("/api/progress/topic", json=payload)
    assert again.json()["id"] == response.json()["id"]
    assert again.json()["completed_at"] == response.json()["completed_at"]

    listed = await client.get(f"/api/progress/roadmap/{seed_roadmap.id}", params={"week_number": 1})
    assert [e["completion_percentage"] for e in listed.json()] == [50]

    payload["completion_percentage"] = 150
    assert (await client.post("/api/progress/topic", json=payload)).status_code == 422


@pytest.mark.asyncio
async def test_weekly_progress_flow(client: AsyncClient, seed_roadmap: Roadmap):
    payload = {"roadmap_id": seed_roadmap.id, "week_number": 2, "total_hours_studied": 7, "topics_completed": 1}
    assert (await client.post("/api/progress/weekly", json=payload)).status_code == 200

    summaries = (await client.get(f"/api/progress/weekly/{seed_roadmap.id}")).json()
    assert [(s["week_number"], s["total_hours_studied"]) for s in summaries] == [(2, 7.0)]

    assert (await client.get("/api/progress/weekly/9999")).status_code == 404


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    missing = await client.get("/api/roadmaps/12345")
    assert missing.status_code == 404
    assert missing.headers["X-Request-ID"]
