"""Availability API routes: weekly working hours and open calendar dates."""

from datetime import date, timedelta

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from glowbook.api.dependencies import require_professional
from glowbook.booking.store import load_weekly_availability, save_weekly_availability
from glowbook.config import get_settings
from glowbook.database import get_db
from glowbook.schemas.availability import (
    DayAvailabilityRead,
    DayHours,
    OpenDateRead,
    WeeklyAvailabilityRead,
    WeeklyAvailabilityRecord,
    WeeklyAvailabilitySet,
)
from glowbook.scheduling.availability import (
    DayAvailability,
    Weekday,
    WeeklyAvailability,
    is_date_open,
)

router = APIRouter(
    prefix="/api/professionals/{professional_id}/availability",
    tags=["availability"],
    dependencies=[Depends(require_professional)],
)


def _to_day(hours: DayHours) -> DayAvailability:
    return DayAvailability.from_record(
        {
            "isOpen": hours.is_open,
            "startHour": hours.start_hour,
            "startMinute": hours.start_minute,
            "endHour": hours.end_hour,
            "endMinute": hours.end_minute,
        }
    )


def _to_read(professional_id: int, weekly: WeeklyAvailability) -> WeeklyAvailabilityRead:
    days = []
    for weekday, day in weekly.items():
        record = day.to_record()
        days.append(
            DayAvailabilityRead(
                weekday=int(weekday),
                weekday_name=weekday.label,
                is_open=day.is_open,
                start_hour=record["startHour"],
                start_minute=record["startMinute"],
                end_hour=record["endHour"],
                end_minute=record["endMinute"],
                start_label=day.start_label,
                end_label=day.end_label,
            )
        )
    return WeeklyAvailabilityRead(professional_id=professional_id, days=days)


@router.put("", response_model=WeeklyAvailabilityRead)
async def set_availability(
    professional_id: int,
    body: WeeklyAvailabilitySet,
    session: AsyncSession = Depends(get_db),
) -> WeeklyAvailabilityRead:
    """Replace the weekly working hours. Weekdays left out are stored as closed."""
    weekly = WeeklyAvailability.from_days((entry.weekday, _to_day(entry)) for entry in body.days)
    await save_weekly_availability(session, professional_id, weekly)
    return _to_read(professional_id, weekly)


@router.get("", response_model=WeeklyAvailabilityRead)
async def get_availability(
    professional_id: int,
    session: AsyncSession = Depends(get_db),
) -> WeeklyAvailabilityRead:
    """Get all seven days of working hours, Sunday first."""
    weekly = await load_weekly_availability(session, professional_id)
    return _to_read(professional_id, weekly)


@router.put("/record", response_model=WeeklyAvailabilityRecord)
async def set_availability_record(
    professional_id: int,
    body: WeeklyAvailabilityRecord,
    session: AsyncSession = Depends(get_db),
) -> dict:
    """Replace the week from the ``{"monday": {"isOpen": ...}, ...}`` form."""
    weekly = WeeklyAvailability.from_record(body.model_dump(by_alias=True, exclude_none=True))
    await save_weekly_availability(session, professional_id, weekly)
    return weekly.to_record()


@router.get("/record", response_model=WeeklyAvailabilityRecord)
async def get_availability_record(
    professional_id: int,
    session: AsyncSession = Depends(get_db),
) -> dict:
    """The week keyed by day name, in the camelCase record form."""
    weekly = await load_weekly_availability(session, professional_id)
    return weekly.to_record()


@router.get("/open-dates", response_model=list[OpenDateRead])
async def get_open_dates(
    professional_id: int,
    start: date | None = None,
    days: int | None = Query(default=None, ge=1, le=90),
    session: AsyncSession = Depends(get_db),
) -> list[OpenDateRead]:
    """Which dates in the booking window the professional works at all.

    Defaults to today plus the configured booking window.
    """
    start = start or date.today()
    days = days or get_settings().booking_window_days

    weekly = await load_weekly_availability(session, professional_id)
    result = []
    for offset in range(days):
        current = start + timedelta(days=offset)
        result.append(
            OpenDateRead(
                day=current,
                weekday=int(Weekday.of(current)),
                is_open=is_date_open(weekly, current),
            )
        )
    return result


@router.put("/{weekday}", response_model=WeeklyAvailabilityRead)
async def set_day_availability(
    professional_id: int,
    body: DayHours,
    weekday: int = Path(ge=1, le=7),
    session: AsyncSession = Depends(get_db),
) -> WeeklyAvailabilityRead:
    """Change one weekday (1=Sunday .. 7=Saturday) and keep the rest of the week."""
    weekly = await load_weekly_availability(session, professional_id)
    weekly = weekly.with_day(weekday, _to_day(body))
    await save_weekly_availability(session, professional_id, weekly)
    return _to_read(professional_id, weekly)
