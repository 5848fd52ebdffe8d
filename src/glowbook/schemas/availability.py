from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _check_window(
    is_open: bool, start_hour: int, start_minute: int, end_hour: int, end_minute: int
) -> None:
    if end_hour == 24 and end_minute != 0:
        raise ValueError("end time cannot be after midnight")
    if is_open and start_hour * 60 + start_minute >= end_hour * 60 + end_minute:
        raise ValueError("start time must be before end time on an open day")


class DayHours(BaseModel):
    is_open: bool = False
    start_hour: int = Field(default=9, ge=0, le=23)
    start_minute: int = Field(default=0, ge=0, le=59)
    end_hour: int = Field(default=17, ge=0, le=24)
    end_minute: int = Field(default=0, ge=0, le=59)

    @model_validator(mode="after")
    def check_window(self) -> "DayHours":
        _check_window(
            self.is_open, self.start_hour, self.start_minute, self.end_hour, self.end_minute
        )
        return self


class DayAvailabilityEntry(DayHours):
    weekday: int = Field(ge=1, le=7)  # 1=Sunday, 7=Saturday


class WeeklyAvailabilitySet(BaseModel):
    """Replaces the whole week. Weekdays that are left out are stored as closed."""

    days: list[DayAvailabilityEntry] = Field(max_length=7)

    @field_validator("days")
    @classmethod
    def unique_weekdays(cls, v: list[DayAvailabilityEntry]) -> list[DayAvailabilityEntry]:
        weekdays = [d.weekday for d in v]
        if len(weekdays) != len(set(weekdays)):
            raise ValueError("each weekday may appear at most once")
        return v


class DayRecord(BaseModel):
    """One day in the stored camelCase form: ``{"isOpen": true, "startHour": 9, ...}``."""

    model_config = ConfigDict(populate_by_name=True)

    is_open: bool = Field(default=False, alias="isOpen")
    start_hour: int = Field(default=9, ge=0, le=23, alias="startHour")
    start_minute: int = Field(default=0, ge=0, le=59, alias="startMinute")
    end_hour: int = Field(default=17, ge=0, le=24, alias="endHour")
    end_minute: int = Field(default=0, ge=0, le=59, alias="endMinute")

    @model_validator(mode="after")
    def check_window(self) -> "DayRecord":
        _check_window(
            self.is_open, self.start_hour, self.start_minute, self.end_hour, self.end_minute
        )
        return self


class WeeklyAvailabilityRecord(BaseModel):
    """The whole week keyed by day name. Missing days are closed."""

    model_config = ConfigDict(extra="forbid")

    sunday: DayRecord | None = None
    monday: DayRecord | None = None
    tuesday: DayRecord | None = None
    wednesday: DayRecord | None = None
    thursday: DayRecord | None = None
    friday: DayRecord | None = None
    saturday: DayRecord | None = None


class DayAvailabilityRead(DayAvailabilityEntry):
    weekday_name: str
    start_label: str
    end_label: str


class WeeklyAvailabilityRead(BaseModel):
    professional_id: int
    days: list[DayAvailabilityRead]


class OpenDateRead(BaseModel):
    day: date
    weekday: int
    is_open: bool
