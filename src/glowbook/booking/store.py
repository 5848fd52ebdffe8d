"""Database reads and writes that feed the scheduling engine."""

from datetime import date

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from glowbook.models.appointment import Appointment
from glowbook.models.availability import DayAvailabilityRecord
from glowbook.models.professional import Professional
from glowbook.scheduling.availability import DayAvailability, Weekday, WeeklyAvailability
from glowbook.scheduling.overlap import BookedInterval
from glowbook.scheduling.status import ACTIVE_STATUSES


async def get_professional(session: AsyncSession, professional_id: int) -> Professional | None:
    result = await session.execute(select(Professional).where(Professional.id == professional_id))
    return result.scalar_one_or_none()


async def get_appointment(session: AsyncSession, appointment_id: str) -> Appointment | None:
    result = await session.execute(select(Appointment).where(Appointment.id == appointment_id))
    return result.scalar_one_or_none()


def record_to_day(row: DayAvailabilityRecord) -> DayAvailability:
    return DayAvailability.from_record(
        {
            "isOpen": row.is_open,
            "startHour": row.start_hour,
            "startMinute": row.start_minute,
            "endHour": row.end_hour,
            "endMinute": row.end_minute,
        }
    )


async def load_weekly_availability(
    session: AsyncSession, professional_id: int
) -> WeeklyAvailability:
    """Read a professional's working hours. Days without a row are closed."""
    stmt = select(DayAvailabilityRecord).where(
        DayAvailabilityRecord.professional_id == professional_id
    )
    result = await session.execute(stmt)
    rows = {row.weekday: row for row in result.scalars().all()}
    return WeeklyAvailability(
        tuple(
            record_to_day(rows[w]) if w in rows else DayAvailability.closed() for w in Weekday
        )
    )


async def save_weekly_availability(
    session: AsyncSession, professional_id: int, weekly: WeeklyAvailability
) -> None:
    """Replace all seven day rows for a professional and commit."""
    await session.execute(
        delete(DayAvailabilityRecord).where(
            DayAvailabilityRecord.professional_id == professional_id
        )
    )
    for weekday, day in weekly.items():
        record = day.to_record()
        session.add(
            DayAvailabilityRecord(
                professional_id=professional_id,
                weekday=int(weekday),
                is_open=record["isOpen"],
                start_hour=record["startHour"],
                start_minute=record["startMinute"],
                end_hour=record["endHour"],
                end_minute=record["endMinute"],
            )
        )
    await session.commit()


async def get_appointments(
    session: AsyncSession, professional_id: int, day: date | None = None
) -> list[Appointment]:
    """All appointments for a professional, optionally limited to one calendar day.

    Every status is returned; callers decide what counts as occupying.
    """
    stmt = select(Appointment).where(Appointment.professional_id == professional_id)
    if day is not None:
        stmt = stmt.where(Appointment.appointment_date == day)
    stmt = stmt.order_by(Appointment.appointment_date, Appointment.start_minutes)
    result = await session.execute(stmt)
    return list(result.scalars().all())


def to_interval(appointment: Appointment) -> BookedInterval:
    return BookedInterval.from_booking(
        appointment_id=appointment.id,
        start_minutes=appointment.start_minutes,
        duration_minutes=appointment.service_duration,
        status=appointment.status,
    )


async def load_booked_intervals(
    session: AsyncSession, professional_id: int, day: date
) -> list[BookedInterval]:
    """Snapshot of the day's bookings as engine intervals."""
    return [to_interval(a) for a in await get_appointments(session, professional_id, day)]


async def get_client_appointments(session: AsyncSession, client_id: str) -> list[Appointment]:
    """A client's bookings across all professionals, soonest first."""
    stmt = (
        select(Appointment)
        .where(Appointment.client_id == client_id)
        .order_by(Appointment.appointment_date, Appointment.start_minutes)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_active_appointments(
    session: AsyncSession, professional_id: int, day: date
) -> list[Appointment]:
    """Pending and confirmed appointments on one day, in start order."""
    stmt = (
        select(Appointment)
        .where(
            Appointment.professional_id == professional_id,
            Appointment.appointment_date == day,
            Appointment.status.in_([s.value for s in ACTIVE_STATUSES]),
        )
        .order_by(Appointment.start_minutes)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def count_upcoming_appointments(
    session: AsyncSession, professional_id: int, today: date
) -> int:
    """Pending and confirmed appointments from `today` onwards."""
    stmt = select(func.count()).where(
        Appointment.professional_id == professional_id,
        Appointment.appointment_date >= today,
        Appointment.status.in_([s.value for s in ACTIVE_STATUSES]),
    )
    result = await session.execute(stmt)
    return result.scalar_one()
