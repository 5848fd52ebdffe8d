"""Tests for the booking service."""

import asyncio
from datetime import date

import pytest

from glowbook.booking.service import (
    BookingConflictError,
    BookingService,
    OutsideWorkingHoursError,
)
from glowbook.booking.store import save_weekly_availability
from glowbook.models.professional import Professional
from glowbook.schemas.appointment import AppointmentCreate
from glowbook.scheduling.availability import WeeklyAvailability
from glowbook.scheduling.slots import SlotWindow
from glowbook.scheduling.status import AppointmentStatus, InvalidTransitionError
from tests.conftest import test_session

MONDAY = date(2025, 6, 16)
SUNDAY = date(2025, 6, 15)


def _request(time_slot: str, duration: int = 60, day: date = MONDAY) -> AppointmentCreate:
    return AppointmentCreate(
        professional_id=1,
        client_name="Jo Client",
        client_email="jo@example.com",
        service_name="Lash lift",
        service_duration=duration,
        appointment_date=day,
        time_slot=time_slot,
    )


@pytest.fixture
async def open_weekdays(professional: Professional) -> Professional:
    async with test_session() as session:
        await save_weekly_availability(session, professional.id, WeeklyAvailability.default())
    return professional


class TestCreateAppointment:
    async def test_creates_pending(self, open_weekdays: Professional) -> None:
        async with test_session() as session:
            appointment = await BookingService().create_appointment(session, _request("10:00 AM"))
        assert appointment.status == "pending"
        assert appointment.start_minutes == 600
        assert appointment.end_minutes == 660
        assert appointment.time_slot == "10:00 AM"
        assert len(appointment.id) == 36

    async def test_accepts_24_hour_time(self, open_weekdays: Professional) -> None:
        async with test_session() as session:
            appointment = await BookingService().create_appointment(session, _request("14:30"))
        assert appointment.time_slot == "2:30 PM"

    async def test_rejects_overlap(self, open_weekdays: Professional) -> None:
        service = BookingService()
        async with test_session() as session:
            first = await service.create_appointment(session, _request("10:00 AM", 90))
            with pytest.raises(BookingConflictError) as exc_info:
                await service.create_appointment(session, _request("11:00 AM", 30))
        assert [c.appointment_id for c in exc_info.value.conflicts] == [first.id]

    async def test_abutting_booking_is_allowed(self, open_weekdays: Professional) -> None:
        service = BookingService()
        async with test_session() as session:
            await service.create_appointment(session, _request("10:00 AM", 90))
            second = await service.create_appointment(session, _request("11:30 AM", 30))
        assert second.status == "pending"

    async def test_cancelled_slot_can_be_rebooked(self, open_weekdays: Professional) -> None:
        service = BookingService()
        async with test_session() as session:
            first = await service.create_appointment(session, _request("10:00 AM"))
            await service.cancel(session, first, "Client sick")
            again = await service.create_appointment(session, _request("10:00 AM"))
        assert again.id != first.id

    async def test_rejects_closed_day(self, open_weekdays: Professional) -> None:
        async with test_session() as session:
            with pytest.raises(OutsideWorkingHoursError):
                await BookingService().create_appointment(session, _request("10:00 AM", day=SUNDAY))

    async def test_rejects_service_running_past_closing(self, open_weekdays: Professional) -> None:
        async with test_session() as session:
            with pytest.raises(OutsideWorkingHoursError):
                await BookingService().create_appointment(session, _request("4:30 PM", 60))

    async def test_no_hours_configured_means_closed(self, professional: Professional) -> None:
        async with test_session() as session:
            with pytest.raises(OutsideWorkingHoursError):
                await BookingService().create_appointment(session, _request("10:00 AM"))

    async def test_concurrent_requests_do_not_double_book(
        self, open_weekdays: Professional
    ) -> None:
        service = BookingService(serialize=True)

        async def book(time_slot: str):
            async with test_session() as session:
                return await service.create_appointment(session, _request(time_slot, 60))

        results = await asyncio.gather(
            book("10:00 AM"), book("10:30 AM"), return_exceptions=True
        )
        conflicts = [r for r in results if isinstance(r, BookingConflictError)]
        created = [r for r in results if not isinstance(r, BaseException)]
        assert len(created) == 1
        assert len(conflicts) == 1


class TestChangeStatus:
    async def test_confirm_sets_timestamp(self, open_weekdays: Professional) -> None:
        service = BookingService()
        async with test_session() as session:
            appointment = await service.create_appointment(session, _request("10:00 AM"))
            confirmed = await service.change_status(
                session, appointment, AppointmentStatus.CONFIRMED
            )
        assert confirmed.status == "confirmed"
        assert confirmed.confirmed_at is not None
        assert confirmed.updated_at is not None

    async def test_cancel_records_reason(self, open_weekdays: Professional) -> None:
        service = BookingService()
        async with test_session() as session:
            appointment = await service.create_appointment(session, _request("10:00 AM"))
            cancelled = await service.cancel(session, appointment, "Schedule change")
        assert cancelled.status == "cancelled"
        assert cancelled.cancel_reason == "Schedule change"
        assert cancelled.cancelled_at is not None

    async def test_cancelled_cannot_be_confirmed(self, open_weekdays: Professional) -> None:
        service = BookingService()
        async with test_session() as session:
            appointment = await service.create_appointment(session, _request("10:00 AM"))
            await service.cancel(session, appointment)
            with pytest.raises(InvalidTransitionError):
                await service.change_status(session, appointment, AppointmentStatus.CONFIRMED)
        assert appointment.status == "cancelled"


class TestDaySlots:
    async def test_slots_reflect_bookings(self, open_weekdays: Professional) -> None:
        service = BookingService()
        async with test_session() as session:
            await service.create_appointment(session, _request("10:00 AM", 90))
            day, grid = await service.day_slots(session, open_weekdays.id, MONDAY, duration=30)
        assert day.is_open
        morning = {s.label: s.is_offered for s in grid["morning"]}
        assert morning["10:00 AM"] is False
        assert morning["11:15 AM"] is False
        assert morning["11:30 AM"] is True
        assert {s.label for s in grid["evening"] if s.is_offered} == set()

    async def test_custom_window(self, open_weekdays: Professional) -> None:
        async with test_session() as session:
            _, grid = await BookingService().day_slots(
                session,
                open_weekdays.id,
                MONDAY,
                granularity=60,
                windows={"custom": SlotWindow(480, 660)},
            )
        assert [(s.start_minutes, s.is_offered) for s in grid["custom"]] == [
            (480, False),
            (540, True),
            (600, True),
        ]


class TestAppointmentLabels:
    async def test_labels_and_client(self, open_weekdays: Professional) -> None:
        request = _request("3:30 PM", 90).model_copy(update={"client_id": "client-42"})
        async with test_session() as session:
            appointment = await BookingService().create_appointment(session, request)
        assert appointment.client_id == "client-42"
        assert appointment.duration_label == "1h 30min"
        assert appointment.end_time == "5:00 PM"
        assert appointment.status_label == "Pending"

    async def test_terminal_status_change_is_logged(
        self, open_weekdays: Professional, caplog: pytest.LogCaptureFixture
    ) -> None:
        service = BookingService()
        async with test_session() as session:
            appointment = await service.create_appointment(session, _request("10:00 AM"))
            await service.cancel(session, appointment)
            with caplog.at_level("WARNING", logger="glowbook.booking.service"):
                with pytest.raises(InvalidTransitionError):
                    await service.cancel(session, appointment)
        assert "already cancelled" in caplog.text
