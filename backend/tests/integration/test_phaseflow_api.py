"""
Integration tests for the HTTP API.

Runs the FastAPI app against an in-memory database through httpx.
"""

from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from app.api import deps
from app.utils.datetime_utils import FixedClock
from factories import PHASE_START
from main import create_app

TODAY = PHASE_START + timedelta(days=2)


@pytest.fixture
async def client(phase_repo, category_repo, block_repo, execution_repo, timesheet_repo):
    app = create_app()
    app.dependency_overrides[deps.get_phase_repository] = lambda: phase_repo
    app.dependency_overrides[deps.get_category_repository] = lambda: category_repo
    app.dependency_overrides[deps.get_routine_block_repository] = lambda: block_repo
    app.dependency_overrides[deps.get_routine_execution_repository] = lambda: execution_repo
    app.dependency_overrides[deps.get_timesheet_repository] = lambda: timesheet_repo
    app.dependency_overrides[deps.get_clock] = lambda: FixedClock(TODAY)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": "Bearer test_user"},
    ) as ac:
        yield ac


async def _create_phase(client, duration_days=7):
    response = await client.post(
        "/api/phases",
        json={
            "name": "Morning Discipline",
            "why": "Energy for the day",
            "outcome": "Consistent mornings",
            "duration_days": duration_days,
            "start_date": PHASE_START.isoformat(),
        },
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_routine_flow(client):
    phase = await _create_phase(client)
    phase_id = phase["id"]
    assert phase["end_date"] == (PHASE_START + timedelta(days=6)).isoformat()

    response = await client.put(
        f"/api/phases/{phase_id}/routine-blocks",
        json={
            "blocks": [
                {"title": "Journal", "start_time": "07:00", "end_time": "07:30"},
                {"title": "Run", "start_time": "06:00", "end_time": "06:45", "category": "Health"},
            ]
        },
    )
    assert response.status_code == 200
    assert [b["title"] for b in response.json()] == ["Run", "Journal"]

    response = await client.post(
        f"/api/phases/{phase_id}/clone-routine", json={"option": "weekdays"}
    )
    assert response.status_code == 200
    assert response.json() == {"blocks_created": 10, "dates_cloned": 5}

    response = await client.get("/api/today/blocks")
    assert response.status_code == 200
    today_blocks = response.json()
    assert [b["execution_status"] for b in today_blocks] == ["PENDING", "PENDING"]

    for day_offset in range(3):
        day = (PHASE_START + timedelta(days=day_offset)).isoformat()
        blocks = (await client.get("/api/today/blocks", params={"date": day})).json()
        for block in blocks:
            response = await client.post(
                "/api/today/executions",
                json={"routine_block_id": block["id"], "status": "DONE"},
            )
            assert response.status_code == 200

    streak = response.json()["streak"]
    assert streak == {"current_streak": 3, "longest_streak": 3}

    response = await client.get("/api/dashboard/metrics")
    assert response.status_code == 200
    metrics = response.json()
    assert metrics["streak"] == 3
    assert metrics["adherence"] == 100
    assert metrics["today_blocks"] == {"total": 2, "completed": 2}


@pytest.mark.asyncio
async def test_overlapping_template_is_rejected(client):
    phase = await _create_phase(client)

    response = await client.put(
        f"/api/phases/{phase['id']}/routine-blocks",
        json={
            "blocks": [
                {"title": "Gym", "start_time": "09:00", "end_time": "10:00"},
                {"title": "Email", "start_time": "09:30", "end_time": "10:30"},
            ]
        },
    )

    assert response.status_code == 400
    assert response.json()["detail"] == 'Block "Gym" overlaps with "Email"'


@pytest.mark.asyncio
async def test_clone_without_template(client):
    phase = await _create_phase(client)

    response = await client.post(f"/api/phases/{phase['id']}/clone-routine", json={})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_day_edit_invalid_scope(client):
    phase = await _create_phase(client)

    response = await client.put(
        f"/api/phases/{phase['id']}/days/{PHASE_START.isoformat()}/blocks",
        json={"blocks": [], "scope": "month"},
    )

    assert response.status_code == 400
    assert "Invalid scope" in response.json()["detail"]


@pytest.mark.asyncio
async def test_phase_lifecycle(client):
    phase = await _create_phase(client)

    response = await client.get("/api/phases/active")
    assert response.json()["id"] == phase["id"]

    response = await client.post(f"/api/phases/{phase['id']}/archive")
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    response = await client.get("/api/phases/active")
    assert response.status_code == 404

    response = await client.delete(f"/api/phases/{phase['id']}")
    assert response.status_code == 204

    response = await client.get(f"/api/phases/{phase['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_timesheet_requires_active_phase(client):
    response = await client.get("/api/timesheet/entries")
    assert response.status_code == 404

    await _create_phase(client)
    response = await client.post(
        "/api/timesheet/entries",
        json={
            "title": "Unplanned call",
            "start_time": "15:00",
            "end_time": "15:20",
            "priority": "HIGH",
            "date": TODAY.isoformat(),
        },
    )
    assert response.status_code == 201

    response = await client.get("/api/timesheet/entries")
    assert [e["title"] for e in response.json()] == ["Unplanned call"]
