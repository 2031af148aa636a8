"""Tests for availability API endpoints."""

from unittest.mock import AsyncMock, patch

from httpx import AsyncClient

from mentorhub.backend.sql import SQLBackend
from mentorhub.errors import BackendError


async def test_add_simple_slot(client: AsyncClient, mentor_id: str) -> None:
    resp = await client.post(
        f"/api/mentors/{mentor_id}/availability",
        json={"day_of_week": 1, "start_time": "09:00", "end_time": "10:00", "is_recurring": False},
    )
    assert resp.status_code == 201
    data = resp.json()
    assert len(data) == 1
    assert data[0]["day_of_week"] == 1
    assert data[0]["start_time"] == "09:00:00"
    assert data[0]["end_time"] == "10:00:00"
    assert data[0]["is_recurring"] is False
    assert data[0]["is_available"] is True


async def test_add_overnight_slot(client: AsyncClient, mentor_id: str) -> None:
    resp = await client.post(
        f"/api/mentors/{mentor_id}/availability",
        json={"day_of_week": 1, "start_time": "22:00", "end_time": "06:00"},
    )
    assert resp.status_code == 201
    data = resp.json()
    assert [(s["day_of_week"], s["start_time"], s["end_time"]) for s in data] == [
        (1, "22:00:00", "23:59:59"),
        (2, "00:00:00", "06:00:00"),
    ]
    assert all(s["is_recurring"] for s in data)


async def test_add_slot_validation(client: AsyncClient, mentor_id: str) -> None:
    url = f"/api/mentors/{mentor_id}/availability"
    resp = await client.post(url, json={"day_of_week": 7, "start_time": "09:00", "end_time": "10:00"})
    assert resp.status_code == 422

    resp = await client.post(url, json={"day_of_week": 1, "start_time": "9am", "end_time": "10:00"})
    assert resp.status_code == 422

    resp = await client.post(url, json={"day_of_week": 1, "start_time": "09:00"})
    assert resp.status_code == 422

    listing = await client.get(url)
    assert listing.json() == []


async def test_add_slot_backend_error(
    client: AsyncClient, backend: SQLBackend, mentor_id: str
) -> None:
    with patch.object(backend, "insert", AsyncMock(side_effect=BackendError("row violates policy"))):
        resp = await client.post(
            f"/api/mentors/{mentor_id}/availability",
            json={"day_of_week": 1, "start_time": "09:00", "end_time": "10:00"},
        )
    assert resp.status_code == 502
    assert resp.json()["detail"] == "row violates policy"


async def test_add_overnight_partial_failure(
    client: AsyncClient, backend: SQLBackend, mentor_id: str
) -> None:
    real_insert = backend.insert
    calls = 0

    async def flaky_insert(collection, record):  # type: ignore[no-untyped-def]
        nonlocal calls
        calls += 1
        if calls == 2:
            raise BackendError("insert rejected")
        return await real_insert(collection, record)

    with (
        patch.object(backend, "insert", side_effect=flaky_insert),
        patch.object(backend, "delete", AsyncMock(side_effect=BackendError("delete rejected"))),
    ):
        resp = await client.post(
            f"/api/mentors/{mentor_id}/availability",
            json={"day_of_week": 1, "start_time": "22:00", "end_time": "06:00"},
        )

    assert resp.status_code == 502
    detail = resp.json()["detail"]
    assert len(detail["orphaned_ids"]) == 1


async def test_list_slots_ordered(client: AsyncClient, mentor_id: str) -> None:
    url = f"/api/mentors/{mentor_id}/availability"
    await client.post(url, json={"day_of_week": 3, "start_time": "19:00", "end_time": "20:00"})
    await client.post(url, json={"day_of_week": 0, "start_time": "07:00", "end_time": "08:30"})
    await client.post(url, json={"day_of_week": 6, "start_time": "23:00", "end_time": "01:00"})

    resp = await client.get(url)
    assert resp.status_code == 200
    assert [(s["day_of_week"], s["start_time"]) for s in resp.json()] == [
        (0, "00:00:00"),
        (0, "07:00:00"),
        (3, "19:00:00"),
        (6, "23:00:00"),
    ]


async def test_delete_slot(client: AsyncClient, mentor_id: str) -> None:
    url = f"/api/mentors/{mentor_id}/availability"
    created = await client.post(
        url, json={"day_of_week": 1, "start_time": "22:00", "end_time": "06:00"}
    )
    first_id = created.json()[0]["id"]

    resp = await client.delete(f"/api/availability/{first_id}")
    assert resp.status_code == 204

    remaining = await client.get(url)
    assert len(remaining.json()) == 1


async def test_delete_slot_not_found(client: AsyncClient) -> None:
    resp = await client.delete("/api/availability/999")
    assert resp.status_code == 404
