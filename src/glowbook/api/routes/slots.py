"""Slot API routes: the bookable time grid for one day."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from glowbook.api.dependencies import require_professional
from glowbook.booking.service import BookingService
from glowbook.database import get_db
from glowbook.schemas.slots import DaySlotsRead, TimeSlotRead
from glowbook.scheduling.slots import InvalidWindowError, SlotWindow

router = APIRouter(
    prefix="/api/professionals/{professional_id}/slots",
    tags=["slots"],
    dependencies=[Depends(require_professional)],
)


@router.get("", response_model=DaySlotsRead)
async def get_slots(
    professional_id: int,
    day: date = Query(alias="date"),
    duration: int | None = Query(default=None, description="Service duration in minutes"),
    granularity: int | None = None,
    window_start: int | None = Query(default=None, description="Minutes of day"),
    window_end: int | None = Query(default=None, description="Minutes of day, exclusive"),
    session: AsyncSession = Depends(get_db),
) -> DaySlotsRead:
    """Slot grid for a date.

    With `window_start` and `window_end` a single "custom" window is returned,
    otherwise the morning/afternoon/evening sections. Without `duration` only
    slot start times are checked against hours and bookings.
    """
    if (window_start is None) != (window_end is None):
        raise HTTPException(
            status_code=422, detail="window_start and window_end must be given together"
        )
    windows = None
    if window_start is not None and window_end is not None:
        windows = {"custom": SlotWindow(window_start, window_end)}

    service = BookingService()
    try:
        day_availability, grid = await service.day_slots(
            session,
            professional_id,
            day,
            duration=duration,
            granularity=granularity,
            windows=windows,
        )
    except InvalidWindowError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None

    return DaySlotsRead(
        professional_id=professional_id,
        day=day,
        is_open=day_availability.is_open,
        granularity_minutes=service.default_granularity if granularity is None else granularity,
        duration_minutes=duration,
        windows={
            name: [TimeSlotRead.model_validate(slot) for slot in slots]
            for name, slots in grid.items()
        },
    )
