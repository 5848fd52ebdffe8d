"""Tests for housekeeping endpoints."""

from datetime import date, datetime

import pytest
from httpx import AsyncClient

from glowbook.models.appointment import Appointment
from tests.conftest import test_session

DAY = date(2025, 6, 16)


async def _seed(*appointments: tuple[int, int, str, datetime]) -> list[str]:
    ids = []
    async with test_session() as session:
        for start, duration, status, created_at in appointments:
            appointment = Appointment(
                professional_id=1,
                client_name="Client",
                client_email="client@example.com",
                service_name="Pedicure",
                service_duration=duration,
                appointment_date=DAY,
                start_minutes=start,
                time_slot="",
                status=status,
                created_at=created_at,
            )
            session.add(appointment)
            await session.flush()
            ids.append(appointment.id)
        await session.commit()
    return ids


@pytest.mark.asyncio
async def test_complete_elapsed(client: AsyncClient, professional) -> None:
    await _seed(
        (540, 60, "confirmed", datetime(2025, 6, 1)),
        (900, 60, "confirmed", datetime(2025, 6, 1)),
    )
    resp = await client.post(
        "/api/housekeeping/complete-elapsed", params={"now": "2025-06-16T12:00:00"}
    )
    assert resp.status_code == 200
    assert resp.json() == {"completed": 1}


@pytest.mark.asyncio
async def test_conflicts_and_reconcile(client: AsyncClient, professional) -> None:
    first, second = await _seed(
        (600, 60, "confirmed", datetime(2025, 6, 1, 9, 0)),
        (630, 60, "pending", datetime(2025, 6, 1, 9, 5)),
    )

    resp = await client.get("/api/professionals/1/conflicts", params={"date": DAY.isoformat()})
    assert resp.json() == [
        {
            "first_appointment_id": first,
            "second_appointment_id": second,
            "overlap_start": 630,
            "overlap_end": 660,
        }
    ]

    resp = await client.post(
        "/api/housekeeping/reconcile", params={"professional_id": 1, "date": DAY.isoformat()}
    )
    assert resp.status_code == 200
    assert resp.json() == {"cancelled_appointment_ids": [second]}

    resp = await client.get("/api/professionals/1/conflicts", params={"date": DAY.isoformat()})
    assert resp.json() == []


@pytest.mark.asyncio
async def test_reconcile_unknown_professional(client: AsyncClient) -> None:
    resp = await client.post(
        "/api/housekeeping/reconcile", params={"professional_id": 5, "date": "2025-06-16"}
    )
    assert resp.status_code == 404
