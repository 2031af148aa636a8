"""Tests for the SQLAlchemy data service."""

from datetime import date

import pytest

from mentorhub.backend.base import Order
from mentorhub.backend.sql import SQLBackend
from mentorhub.errors import BackendError


async def test_insert_generates_id(backend: SQLBackend) -> None:
    row = await backend.insert("categories", {"name": "Data Science"})
    assert row["name"] == "Data Science"
    assert len(row["id"]) == 36


async def test_query_filters_orders_and_limits(backend: SQLBackend) -> None:
    for name in ["Product", "Design", "Engineering", "Career"]:
        await backend.insert("skills", {"name": name})

    rows = await backend.query("skills", order=[Order("name")], limit=3)
    assert [r["name"] for r in rows] == ["Career", "Design", "Engineering"]

    rows = await backend.query("skills", order=[Order("name", ascending=False)])
    assert rows[0]["name"] == "Product"

    rows = await backend.query("skills", {"name": "Design"})
    assert len(rows) == 1


async def test_query_none_filter_matches_null(backend: SQLBackend) -> None:
    await backend.insert("mentors", {"full_name": "Unclaimed", "phone": "111"})
    await backend.insert("mentors", {"full_name": "Claimed", "phone": "222", "user_id": "u1"})

    rows = await backend.query("mentors", {"user_id": None})
    assert [r["full_name"] for r in rows] == ["Unclaimed"]


async def test_count(backend: SQLBackend) -> None:
    await backend.insert("sessions", {"mentor_id": "m1", "status": "pending"})
    await backend.insert("sessions", {"mentor_id": "m1", "status": "pending"})
    await backend.insert("sessions", {"mentor_id": "m2", "status": "pending"})

    assert await backend.count("sessions") == 3
    assert await backend.count("sessions", {"mentor_id": "m1", "status": "pending"}) == 2
    assert await backend.count("sessions", {"status": "completed"}) == 0


async def test_update_returns_rows(backend: SQLBackend) -> None:
    row = await backend.insert("mentors", {"full_name": "Mentor"})
    updated = await backend.update("mentors", {"id": row["id"]}, {"bio": "Backend engineer"})
    assert len(updated) == 1
    assert updated[0]["bio"] == "Backend engineer"
    assert updated[0]["full_name"] == "Mentor"

    assert await backend.update("mentors", {"id": "missing"}, {"bio": "x"}) == []


async def test_delete_returns_count(backend: SQLBackend) -> None:
    row = await backend.insert("categories", {"name": "Finance"})
    assert await backend.delete("categories", {"id": row["id"]}) == 1
    assert await backend.delete("categories", {"id": row["id"]}) == 0


async def test_date_columns_round_trip(backend: SQLBackend) -> None:
    row = await backend.insert(
        "experiences",
        {"mentor_id": "m1", "company": "Acme", "start_date": date(2020, 1, 1), "is_current": True},
    )
    assert row["start_date"] == date(2020, 1, 1)
    assert row["end_date"] is None


async def test_unknown_collection(backend: SQLBackend) -> None:
    with pytest.raises(BackendError, match="Unknown collection"):
        await backend.query("bookings")


async def test_unknown_column(backend: SQLBackend) -> None:
    with pytest.raises(BackendError, match="Unknown column"):
        await backend.query("skills", {"label": "x"})
    with pytest.raises(BackendError):
        await backend.insert("skills", {"name": "x", "label": "y"})


async def test_constraint_violation_is_backend_error(backend: SQLBackend) -> None:
    await backend.insert("skills", {"name": "Python"})
    with pytest.raises(BackendError):
        await backend.insert("skills", {"name": "Python"})


async def test_rpc_link_mentor_by_phone(backend: SQLBackend) -> None:
    row = await backend.insert("mentors", {"full_name": "Asha", "phone": "+919800000001"})

    assert await backend.rpc(
        "link_mentor_by_phone", {"p_phone": "+919800000001", "p_user_id": "u1"}
    ) is True
    [mentor] = await backend.query("mentors", {"id": row["id"]})
    assert mentor["user_id"] == "u1"

    # Same user again is fine, a different user cannot take it over
    assert await backend.rpc(
        "link_mentor_by_phone", {"p_phone": "+919800000001", "p_user_id": "u1"}
    ) is True
    assert await backend.rpc(
        "link_mentor_by_phone", {"p_phone": "+919800000001", "p_user_id": "u2"}
    ) is False
    assert await backend.rpc(
        "link_mentor_by_phone", {"p_phone": "+910000000000", "p_user_id": "u3"}
    ) is False


async def test_rpc_unknown_procedure(backend: SQLBackend) -> None:
    with pytest.raises(BackendError, match="Unknown procedure"):
        await backend.rpc("drop_everything", {})
