"""Appointment API routes: book, read and move appointments through their lifecycle."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from glowbook.api.dependencies import ensure_professional, require_professional
from glowbook.booking.service import (
    BookingConflictError,
    BookingService,
    OutsideWorkingHoursError,
)
from glowbook.booking.store import (
    count_upcoming_appointments,
    get_active_appointments,
    get_appointment,
    get_appointments,
    get_client_appointments,
    to_interval,
)
from glowbook.database import get_db
from glowbook.models.appointment import Appointment
from glowbook.schemas.appointment import (
    AppointmentCancel,
    AppointmentCreate,
    AppointmentRead,
    AppointmentStatusUpdate,
    DoubleBookingRead,
    UpcomingCountRead,
)
from glowbook.scheduling.overlap import find_double_bookings
from glowbook.scheduling.status import AppointmentStatus, InvalidTransitionError

router = APIRouter(prefix="/api/appointments", tags=["appointments"])
professional_router = APIRouter(
    prefix="/api/professionals/{professional_id}",
    tags=["appointments"],
    dependencies=[Depends(require_professional)],
)
client_router = APIRouter(prefix="/api/clients/{client_id}", tags=["appointments"])


async def _load(session: AsyncSession, appointment_id: str) -> Appointment:
    appointment = await get_appointment(session, appointment_id)
    if appointment is None:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return appointment


@router.post("", response_model=AppointmentRead, status_code=201)
async def create_appointment(
    body: AppointmentCreate,
    session: AsyncSession = Depends(get_db),
) -> Appointment:
    """Book an appointment in pending state.

    Returns 422 if the service does not fit in the professional's hours that
    day and 409 if it overlaps an active appointment.
    """
    await ensure_professional(session, body.professional_id)
    try:
        return await BookingService().create_appointment(session, body)
    except OutsideWorkingHoursError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None
    except BookingConflictError as e:
        raise HTTPException(status_code=409, detail=str(e)) from None


@router.get("/{appointment_id}", response_model=AppointmentRead)
async def read_appointment(
    appointment_id: str,
    session: AsyncSession = Depends(get_db),
) -> Appointment:
    return await _load(session, appointment_id)


@router.patch("/{appointment_id}/status", response_model=AppointmentRead)
async def update_status(
    appointment_id: str,
    body: AppointmentStatusUpdate,
    session: AsyncSession = Depends(get_db),
) -> Appointment:
    """Confirm, cancel or complete an appointment. Returns 409 for a disallowed move."""
    appointment = await _load(session, appointment_id)
    try:
        return await BookingService().change_status(
            session, appointment, AppointmentStatus(body.status), body.reason
        )
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e)) from None


@router.post("/{appointment_id}/cancel", response_model=AppointmentRead)
async def cancel_appointment(
    appointment_id: str,
    body: AppointmentCancel,
    session: AsyncSession = Depends(get_db),
) -> Appointment:
    appointment = await _load(session, appointment_id)
    try:
        return await BookingService().cancel(session, appointment, body.reason)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e)) from None


@professional_router.get("/appointments", response_model=list[AppointmentRead])
async def list_appointments(
    professional_id: int,
    day: date | None = Query(default=None, alias="date"),
    session: AsyncSession = Depends(get_db),
) -> list[Appointment]:
    """List a professional's appointments (every status), optionally for one day."""
    return await get_appointments(session, professional_id, day)


@professional_router.get("/conflicts", response_model=list[DoubleBookingRead])
async def list_double_bookings(
    professional_id: int,
    day: date = Query(alias="date"),
    session: AsyncSession = Depends(get_db),
) -> list[DoubleBookingRead]:
    """Overlapping active appointments on a day. Empty when the calendar is consistent."""
    appointments = await get_appointments(session, professional_id, day)
    return [
        DoubleBookingRead(
            first_appointment_id=first.appointment_id,
            second_appointment_id=second.appointment_id,
            overlap_start=max(first.start_minutes, second.start_minutes),
            overlap_end=min(first.end_minutes, second.end_minutes),
        )
        for first, second in find_double_bookings(to_interval(a) for a in appointments)
    ]


@professional_router.get("/appointments/today", response_model=list[AppointmentRead])
async def list_todays_appointments(
    professional_id: int,
    today: date | None = None,
    session: AsyncSession = Depends(get_db),
) -> list[Appointment]:
    """Pending and confirmed appointments for today (or `today`), in start order."""
    return await get_active_appointments(session, professional_id, today or date.today())


@professional_router.get("/appointments/upcoming-count", response_model=UpcomingCountRead)
async def upcoming_count(
    professional_id: int,
    since: date | None = None,
    session: AsyncSession = Depends(get_db),
) -> UpcomingCountRead:
    """Number of pending and confirmed appointments from today (or `since`) on."""
    since = since or date.today()
    count = await count_upcoming_appointments(session, professional_id, since)
    return UpcomingCountRead(professional_id=professional_id, since=since, count=count)


@client_router.get("/appointments", response_model=list[AppointmentRead])
async def list_client_appointments(
    client_id: str,
    session: AsyncSession = Depends(get_db),
) -> list[Appointment]:
    """Everything a client has booked, across professionals, soonest first."""
    return await get_client_appointments(session, client_id)
