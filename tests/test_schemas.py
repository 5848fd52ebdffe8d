from datetime import date

import pytest
from pydantic import ValidationError

from glowbook.schemas.appointment import AppointmentCreate, AppointmentStatusUpdate
from glowbook.schemas.availability import (
    DayAvailabilityEntry,
    DayHours,
    DayRecord,
    WeeklyAvailabilityRecord,
    WeeklyAvailabilitySet,
)
from glowbook.schemas.professional import ProfessionalCreate
from glowbook.schemas.system import StatusResponse


class TestProfessionalSchemas:
    def test_professional_create_valid(self) -> None:
        pro = ProfessionalCreate(name="Ana", email="ana@example.com")
        assert pro.business_name is None

    def test_professional_create_invalid_email(self) -> None:
        with pytest.raises(ValidationError):
            ProfessionalCreate(name="Ana", email="not-an-email")


class TestAvailabilitySchemas:
    def test_defaults_closed_nine_to_five(self) -> None:
        entry = DayAvailabilityEntry(weekday=2)
        assert entry.is_open is False
        assert (entry.start_hour, entry.end_hour) == (9, 17)

    def test_open_day_needs_start_before_end(self) -> None:
        with pytest.raises(ValidationError):
            DayAvailabilityEntry(weekday=2, is_open=True, start_hour=12, end_hour=11)

    def test_closed_day_skips_window_check(self) -> None:
        entry = DayAvailabilityEntry(weekday=2, start_hour=12, end_hour=11)
        assert entry.start_hour == 12

    def test_end_of_day(self) -> None:
        entry = DayAvailabilityEntry(weekday=6, is_open=True, start_hour=20, end_hour=24)
        assert entry.end_hour == 24
        with pytest.raises(ValidationError):
            DayAvailabilityEntry(weekday=6, is_open=True, end_hour=24, end_minute=15)

    @pytest.mark.parametrize("weekday", [0, 8])
    def test_weekday_range(self, weekday: int) -> None:
        with pytest.raises(ValidationError):
            DayAvailabilityEntry(weekday=weekday)

    def test_week_rejects_duplicate_weekday(self) -> None:
        with pytest.raises(ValidationError):
            WeeklyAvailabilitySet(days=[{"weekday": 3}, {"weekday": 3}])

    def test_week_may_be_partial(self) -> None:
        week = WeeklyAvailabilitySet(days=[{"weekday": 3, "is_open": True}])
        assert len(week.days) == 1


class TestAvailabilityRecordSchemas:
    def test_day_record_reads_camel_case(self) -> None:
        day = DayRecord.model_validate({"isOpen": True, "startHour": 8, "endMinute": 45})
        assert (day.is_open, day.start_hour, day.end_hour, day.end_minute) == (True, 8, 17, 45)
        assert day.model_dump(by_alias=True)["startHour"] == 8

    def test_day_record_window_checked(self) -> None:
        with pytest.raises(ValidationError):
            DayRecord.model_validate({"isOpen": True, "startHour": 17, "endHour": 9})

    def test_week_record_rejects_unknown_day(self) -> None:
        with pytest.raises(ValidationError):
            WeeklyAvailabilityRecord.model_validate({"someday": {}})

    def test_week_record_missing_days_are_none(self) -> None:
        week = WeeklyAvailabilityRecord.model_validate({"friday": {"isOpen": True}})
        assert week.monday is None
        assert week.model_dump(by_alias=True, exclude_none=True) == {
            "friday": {
                "isOpen": True,
                "startHour": 9,
                "startMinute": 0,
                "endHour": 17,
                "endMinute": 0,
            }
        }

    def test_day_hours_without_weekday(self) -> None:
        assert DayHours(is_open=True, start_hour=7, end_hour=12).end_hour == 12


class TestAppointmentSchemas:
    def _create(self, **overrides) -> AppointmentCreate:
        data = {
            "professional_id": 1,
            "client_name": "Jo",
            "client_email": "jo@example.com",
            "service_name": "Facial",
            "service_duration": 50,
            "appointment_date": date(2025, 6, 16),
            "time_slot": "2:15 PM",
        }
        data.update(overrides)
        return AppointmentCreate(**data)

    def test_start_minutes_from_label(self) -> None:
        assert self._create().start_minutes == 855

    def test_start_minutes_from_24_hour(self) -> None:
        assert self._create(time_slot="08:05").start_minutes == 485

    def test_time_slot_trimmed(self) -> None:
        assert self._create(time_slot=" 9:00 AM ").time_slot == "9:00 AM"

    @pytest.mark.parametrize("time_slot", ["13:00 PM", "24:00", "noon", ""])
    def test_bad_time_slot(self, time_slot: str) -> None:
        with pytest.raises(ValidationError):
            self._create(time_slot=time_slot)

    @pytest.mark.parametrize("duration", [0, -30, 721])
    def test_duration_bounds(self, duration: int) -> None:
        with pytest.raises(ValidationError):
            self._create(service_duration=duration)

    def test_status_update_targets(self) -> None:
        assert AppointmentStatusUpdate(status="confirmed").status == "confirmed"
        with pytest.raises(ValidationError):
            AppointmentStatusUpdate(status="pending")


class TestSystemSchemas:
    def test_status_response(self) -> None:
        assert StatusResponse(status="ok").status == "ok"
