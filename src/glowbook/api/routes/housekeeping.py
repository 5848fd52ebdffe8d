"""Housekeeping routes: trigger the appointment maintenance jobs on demand."""

from datetime import date, datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from glowbook.api.dependencies import require_professional
from glowbook.booking.tasks import complete_elapsed_appointments, reconcile_double_bookings
from glowbook.database import get_db
from glowbook.schemas.housekeeping import CompletedResponse, ReconcileResponse

router = APIRouter(prefix="/api/housekeeping", tags=["housekeeping"])


@router.post("/complete-elapsed", response_model=CompletedResponse)
async def run_complete_elapsed(
    now: datetime | None = None,
    session: AsyncSession = Depends(get_db),
) -> CompletedResponse:
    """Mark confirmed appointments that have already ended as completed."""
    completed = await complete_elapsed_appointments(session, now)
    return CompletedResponse(completed=completed)


@router.post(
    "/reconcile",
    response_model=ReconcileResponse,
    dependencies=[Depends(require_professional)],
)
async def run_reconcile(
    professional_id: int,
    day: date = Query(alias="date"),
    session: AsyncSession = Depends(get_db),
) -> ReconcileResponse:
    """Cancel later-created appointments that double-book the professional's day."""
    cancelled = await reconcile_double_bookings(session, professional_id, day)
    return ReconcileResponse(cancelled_appointment_ids=[a.id for a in cancelled])
