"""Tests for mentor API endpoints."""

from unittest.mock import patch

from httpx import AsyncClient

from mentorhub.backend.sql import SQLBackend
from mentorhub.errors import BackendError


async def test_catalogues(client: AsyncClient, backend: SQLBackend) -> None:
    for name in ["Tech", "Business"]:
        await backend.insert("categories", {"name": name})
    await backend.insert("skills", {"name": "React"})

    resp = await client.get("/api/categories")
    assert resp.status_code == 200
    assert [c["name"] for c in resp.json()] == ["Business", "Tech"]

    resp = await client.get("/api/skills")
    assert [s["name"] for s in resp.json()] == ["React"]


async def test_get_mentor_by_user(client: AsyncClient, mentor_id: str) -> None:
    resp = await client.get("/api/mentors/by-user/user-1")
    assert resp.status_code == 200
    assert resp.json()["id"] == mentor_id

    resp = await client.get("/api/mentors/by-user/nobody")
    assert resp.status_code == 404


async def test_create_mentor(client: AsyncClient) -> None:
    resp = await client.post("/api/mentors", json={"user_id": "user-7", "phone": "+919877777777"})
    assert resp.status_code == 201
    data = resp.json()
    assert data["full_name"] == "Mentor"
    assert data["status"] == "pending_approval"

    resp = await client.post("/api/mentors", json={"user_id": "user-7", "phone": "+919877777777"})
    assert resp.status_code == 409


async def test_update_mentor(client: AsyncClient, mentor_id: str) -> None:
    resp = await client.patch(f"/api/mentors/{mentor_id}", json={"location": "Bengaluru"})
    assert resp.status_code == 200
    assert resp.json()["location"] == "Bengaluru"

    resp = await client.patch("/api/mentors/missing", json={"location": "Pune"})
    assert resp.status_code == 404


async def test_claim_mentor(client: AsyncClient, backend: SQLBackend) -> None:
    await backend.insert("mentors", {"full_name": "Walk-in", "phone": "+919866666666"})

    resp = await client.post(
        "/api/mentors/claim", json={"phone": "+919866666666", "user_id": "user-6"}
    )
    assert resp.status_code == 200
    assert resp.json() == {"linked": True}

    resp = await client.post(
        "/api/mentors/claim", json={"phone": "+919866666666", "user_id": "user-8"}
    )
    assert resp.json() == {"linked": False}


async def test_claim_mentor_backend_error(client: AsyncClient, backend: SQLBackend) -> None:
    with patch.object(backend, "rpc", side_effect=BackendError("function not found")):
        resp = await client.post("/api/mentors/claim", json={"phone": "123456", "user_id": "u1"})
    assert resp.status_code == 502
    assert resp.json()["detail"] == "function not found"


async def test_submit_application(client: AsyncClient, backend: SQLBackend) -> None:
    category = await backend.insert("categories", {"name": "Tech"})
    skill = await backend.insert("skills", {"name": "Go"})

    resp = await client.post(
        "/api/mentors/applications",
        json={
            "user_id": "user-5",
            "personal": {"full_name": "Meera Iyer", "email": "meera@example.com"},
            "professional": {"title": "EM", "years_of_experience": "9", "hourly_rate": "3000"},
            "categories": [category["id"]],
            "skills": [skill["id"]],
            "experiences": [
                {"company": "Globex", "role": "EM", "start_date": "2021-02-01", "is_current": True}
            ],
        },
    )
    assert resp.status_code == 201
    mentor_id = resp.json()["mentor_id"]

    profile = await client.get("/api/mentors/by-user/user-5")
    assert profile.json()["id"] == mentor_id
    assert profile.json()["hourly_rate"] == 3000
    assert await backend.count("experiences", {"mentor_id": mentor_id}) == 1


async def test_submit_application_validation(client: AsyncClient) -> None:
    resp = await client.post(
        "/api/mentors/applications", json={"personal": {"email": "x@example.com"}}
    )
    assert resp.status_code == 422
