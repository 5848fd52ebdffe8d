"""Booking service: creates appointments and moves them through their lifecycle.

Creation reads the day's bookings, runs the conflict check and commits. Inside
one process these steps are serialised per (professional, day); separate
processes can still race, which `glowbook.booking.tasks.reconcile_double_bookings`
cleans up afterwards.
"""

import asyncio
import logging
import weakref
from collections.abc import Mapping
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from glowbook.booking.store import load_booked_intervals, load_weekly_availability
from glowbook.config import get_settings
from glowbook.database import utcnow
from glowbook.models.appointment import Appointment
from glowbook.schemas.appointment import AppointmentCreate
from glowbook.scheduling.availability import DayAvailability
from glowbook.scheduling.clock import format_minutes
from glowbook.scheduling.overlap import BookedInterval, find_conflicts
from glowbook.scheduling.slots import SlotWindow, TimeSlot, generate_day_slots
from glowbook.scheduling.status import AppointmentStatus, transition

logger = logging.getLogger(__name__)

_day_locks: "weakref.WeakValueDictionary[tuple[int, date], asyncio.Lock]" = (
    weakref.WeakValueDictionary()
)


def _lock_for(professional_id: int, day: date) -> asyncio.Lock:
    lock = _day_locks.get((professional_id, day))
    if lock is None:
        lock = asyncio.Lock()
        _day_locks[(professional_id, day)] = lock
    return lock


class OutsideWorkingHoursError(ValueError):
    """The requested time does not fit inside the professional's open hours."""


class BookingConflictError(ValueError):
    """The requested time overlaps an active appointment."""

    def __init__(self, conflicts: list[BookedInterval]) -> None:
        self.conflicts = conflicts
        ids = ", ".join(c.appointment_id for c in conflicts)
        super().__init__(f"Requested time overlaps existing appointment(s): {ids}")


class BookingService:
    """Appointment creation and status changes on top of the scheduling engine."""

    def __init__(self, serialize: bool | None = None) -> None:
        settings = get_settings()
        self._serialize = settings.serialize_bookings if serialize is None else serialize
        self._granularity = settings.slot_granularity_minutes
        self._windows = {
            "morning": SlotWindow(settings.morning_start_hour * 60, settings.morning_end_hour * 60),
            "afternoon": SlotWindow(
                settings.afternoon_start_hour * 60, settings.afternoon_end_hour * 60
            ),
            "evening": SlotWindow(settings.evening_start_hour * 60, settings.evening_end_hour * 60),
        }

    @property
    def default_granularity(self) -> int:
        return self._granularity

    async def create_appointment(
        self, session: AsyncSession, data: AppointmentCreate
    ) -> Appointment:
        """Create a pending appointment after checking hours and conflicts.

        Raises OutsideWorkingHoursError if the service does not fit in the
        day's open hours and BookingConflictError if it overlaps an active
        appointment.
        """
        if not self._serialize:
            return await self._create(session, data)
        async with _lock_for(data.professional_id, data.appointment_date):
            return await self._create(session, data)

    async def _create(self, session: AsyncSession, data: AppointmentCreate) -> Appointment:
        start = data.start_minutes
        end = start + data.service_duration

        weekly = await load_weekly_availability(session, data.professional_id)
        day = weekly.for_date(data.appointment_date)
        if not day.fits(start, data.service_duration):
            logger.warning(
                "Rejected booking for professional %s on %s at %s: outside working hours",
                data.professional_id,
                data.appointment_date,
                format_minutes(start),
            )
            raise OutsideWorkingHoursError(
                f"{format_minutes(start)} for {data.service_duration} min is outside "
                f"working hours on {data.appointment_date}"
            )

        booked = await load_booked_intervals(session, data.professional_id, data.appointment_date)
        conflicts = find_conflicts(booked, start, end)
        if conflicts:
            logger.warning(
                "Rejected booking for professional %s on %s at %s: %d conflict(s)",
                data.professional_id,
                data.appointment_date,
                format_minutes(start),
                len(conflicts),
            )
            raise BookingConflictError(conflicts)

        appointment = Appointment(
            professional_id=data.professional_id,
            client_id=data.client_id,
            client_name=data.client_name,
            client_email=data.client_email,
            client_phone=data.client_phone,
            service_name=data.service_name,
            service_duration=data.service_duration,
            service_price=data.service_price,
            appointment_date=data.appointment_date,
            start_minutes=start,
            time_slot=format_minutes(start),
            status=AppointmentStatus.PENDING.value,
            special_requests=data.special_requests,
        )
        session.add(appointment)
        await session.commit()
        await session.refresh(appointment)

        logger.info(
            "Appointment %s created for professional %s on %s at %s",
            appointment.id,
            appointment.professional_id,
            appointment.appointment_date,
            appointment.time_slot,
        )
        return appointment

    async def change_status(
        self,
        session: AsyncSession,
        appointment: Appointment,
        target: AppointmentStatus,
        reason: str | None = None,
    ) -> Appointment:
        """Apply a lifecycle transition; raises InvalidTransitionError if not allowed."""
        current = AppointmentStatus(appointment.status)
        if current.is_terminal:
            logger.warning(
                "Appointment %s is already %s; refusing move to %s",
                appointment.id,
                current.value,
                target.value,
            )
        new_status = transition(current, target)

        now = utcnow()
        appointment.status = new_status.value
        appointment.updated_at = now
        if new_status is AppointmentStatus.CONFIRMED:
            appointment.confirmed_at = now
        elif new_status is AppointmentStatus.CANCELLED:
            appointment.cancelled_at = now
            appointment.cancel_reason = reason
        elif new_status is AppointmentStatus.COMPLETED:
            appointment.completed_at = now

        await session.commit()
        await session.refresh(appointment)

        logger.info(
            "Appointment %s: %s -> %s", appointment.id, current.value, new_status.value
        )
        return appointment

    async def cancel(
        self, session: AsyncSession, appointment: Appointment, reason: str | None = None
    ) -> Appointment:
        return await self.change_status(session, appointment, AppointmentStatus.CANCELLED, reason)

    async def day_slots(
        self,
        session: AsyncSession,
        professional_id: int,
        day: date,
        duration: int | None = None,
        granularity: int | None = None,
        windows: Mapping[str, SlotWindow] | None = None,
    ) -> tuple[DayAvailability, dict[str, list[TimeSlot]]]:
        """Slot grid for one day, per window. Raises InvalidWindowError on bad input."""
        weekly = await load_weekly_availability(session, professional_id)
        day_availability = weekly.for_date(day)
        booked = await load_booked_intervals(session, professional_id, day)
        grid = generate_day_slots(
            day_availability,
            booked,
            windows=windows or self._windows,
            granularity_minutes=self._granularity if granularity is None else granularity,
            duration=duration,
        )
        return day_availability, grid
