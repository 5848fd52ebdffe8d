"""Housekeeping jobs for appointment records.

- complete_elapsed_appointments: confirmed appointments whose end has passed
  become completed.
- reconcile_double_bookings: when two active appointments for one professional
  overlap (bookings created concurrently from separate processes), the one
  created later is cancelled.
"""

import logging
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from glowbook.booking.store import get_appointments, to_interval
from glowbook.database import utcnow
from glowbook.models.appointment import Appointment
from glowbook.scheduling.clock import to_minutes
from glowbook.scheduling.overlap import BookedInterval, find_double_bookings, has_conflict
from glowbook.scheduling.status import AppointmentStatus, transition

logger = logging.getLogger(__name__)

RECONCILE_CANCEL_REASON = "Automatically cancelled: overlaps an earlier booking"


async def complete_elapsed_appointments(
    session: AsyncSession, now: datetime | None = None
) -> int:
    """Mark confirmed appointments that have ended as completed.

    `now` is the professional's local wall-clock time (defaults to the
    server's). Returns the number of appointments updated.
    """
    now = now or datetime.now()
    now_minutes = to_minutes(now.hour, now.minute)

    stmt = select(Appointment).where(
        Appointment.status == AppointmentStatus.CONFIRMED.value,
        Appointment.appointment_date <= now.date(),
    )
    result = await session.execute(stmt)

    completed = 0
    stamp = utcnow()
    for appointment in result.scalars().all():
        if appointment.appointment_date == now.date() and appointment.end_minutes > now_minutes:
            continue
        appointment.status = transition(
            AppointmentStatus(appointment.status), AppointmentStatus.COMPLETED
        ).value
        appointment.completed_at = stamp
        appointment.updated_at = stamp
        completed += 1

    await session.commit()

    if completed > 0:
        logger.info("complete_elapsed_appointments: %d appointments completed", completed)
    return completed


async def reconcile_double_bookings(
    session: AsyncSession, professional_id: int, day: date
) -> list[Appointment]:
    """Cancel later-created appointments that overlap an earlier active one.

    Appointments are replayed in creation order, insertion order breaking
    timestamp ties; each one that conflicts with an already accepted
    appointment is cancelled. Returns the cancelled appointments.
    """
    appointments = await get_appointments(session, professional_id, day)
    pairs = find_double_bookings(to_interval(a) for a in appointments)
    if not pairs:
        return []

    logger.warning(
        "Professional %s has %d overlapping booking pair(s) on %s",
        professional_id,
        len(pairs),
        day,
    )

    active = [a for a in appointments if AppointmentStatus(a.status).is_active]
    active.sort(key=lambda a: (a.created_at, a.seq))

    accepted: list[BookedInterval] = []
    cancelled: list[Appointment] = []
    stamp = utcnow()
    for appointment in active:
        if has_conflict(accepted, appointment.start_minutes, appointment.end_minutes):
            appointment.status = transition(
                AppointmentStatus(appointment.status), AppointmentStatus.CANCELLED
            ).value
            appointment.cancel_reason = RECONCILE_CANCEL_REASON
            appointment.cancelled_at = stamp
            appointment.updated_at = stamp
            cancelled.append(appointment)
            logger.info("Cancelled double-booked appointment %s", appointment.id)
        else:
            accepted.append(to_interval(appointment))

    await session.commit()
    return cancelled
