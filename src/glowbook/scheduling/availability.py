"""Weekly working hours: per-day open windows indexed by weekday.

Weekdays are numbered Sunday=1 through Saturday=7. Persisted records use the
hour/minute pair form ``{isOpen, startHour, startMinute, endHour, endMinute}``;
everything here works in minutes-of-day.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from datetime import date
from enum import IntEnum
from typing import Any

from glowbook.scheduling.clock import MINUTES_PER_DAY, format_minutes, split_minutes, to_minutes

DEFAULT_START_HOUR = 9
DEFAULT_END_HOUR = 17


class InvalidAvailabilityError(ValueError):
    """Raised when an open day or a week is malformed."""


class Weekday(IntEnum):
    SUNDAY = 1
    MONDAY = 2
    TUESDAY = 3
    WEDNESDAY = 4
    THURSDAY = 5
    FRIDAY = 6
    SATURDAY = 7

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def record_key(self) -> str:
        return self.name.lower()

    @classmethod
    def of(cls, day: date) -> "Weekday":
        # isoweekday(): Monday=1 .. Sunday=7
        return cls(day.isoweekday() % 7 + 1)


@dataclass(frozen=True)
class DayAvailability:
    is_open: bool = False
    start_minutes: int = DEFAULT_START_HOUR * 60
    end_minutes: int = DEFAULT_END_HOUR * 60

    def __post_init__(self) -> None:
        if self.is_open and not 0 <= self.start_minutes < self.end_minutes <= MINUTES_PER_DAY:
            raise InvalidAvailabilityError(
                f"Open day needs 0 <= start < end <= {MINUTES_PER_DAY}, "
                f"got {self.start_minutes}-{self.end_minutes}"
            )

    @classmethod
    def closed(cls) -> "DayAvailability":
        return cls(is_open=False)

    @classmethod
    def open_between(
        cls, start_hour: int, end_hour: int, start_minute: int = 0, end_minute: int = 0
    ) -> "DayAvailability":
        return cls(
            is_open=True,
            start_minutes=to_minutes(start_hour, start_minute),
            end_minutes=to_minutes(end_hour, end_minute),
        )

    @classmethod
    def from_record(cls, data: Mapping[str, Any] | None) -> "DayAvailability":
        """Normalise a persisted day record.

        Missing keys fall back to 9:00-17:00 and closed. A record that cannot
        describe a valid open window is treated as closed.
        """
        if not isinstance(data, Mapping):
            return cls.closed()

        is_open = data.get("isOpen", False)
        fields = [
            data.get("startHour", DEFAULT_START_HOUR),
            data.get("startMinute", 0),
            data.get("endHour", DEFAULT_END_HOUR),
            data.get("endMinute", 0),
        ]
        # bool is an int subclass; reject it along with strings and floats
        if not isinstance(is_open, bool) or any(
            isinstance(v, bool) or not isinstance(v, int) for v in fields
        ):
            return cls.closed()

        start_hour, start_minute, end_hour, end_minute = fields
        start = to_minutes(start_hour, start_minute)
        end = to_minutes(end_hour, end_minute)
        try:
            return cls(is_open=is_open, start_minutes=start, end_minutes=end)
        except InvalidAvailabilityError:
            return cls(is_open=False, start_minutes=start, end_minutes=end)

    def to_record(self) -> dict[str, Any]:
        start_hour, start_minute = split_minutes(self.start_minutes)
        end_hour, end_minute = split_minutes(self.end_minutes)
        return {
            "isOpen": self.is_open,
            "startHour": start_hour,
            "startMinute": start_minute,
            "endHour": end_hour,
            "endMinute": end_minute,
        }

    @property
    def start_label(self) -> str:
        return format_minutes(self.start_minutes)

    @property
    def end_label(self) -> str:
        # 1440 is a valid exclusive end; label it as midnight
        return format_minutes(self.end_minutes % MINUTES_PER_DAY)

    def contains(self, minute: int) -> bool:
        """True if a slot may start at `minute` (start-only check)."""
        return self.is_open and self.start_minutes <= minute < self.end_minutes

    def fits(self, start: int, duration: int) -> bool:
        """True if the whole of [start, start + duration) lies inside the open window."""
        return self.is_open and self.start_minutes <= start and start + duration <= self.end_minutes


@dataclass(frozen=True)
class WeeklyAvailability:
    """Seven DayAvailability entries; ``days[0]`` is Sunday."""

    days: tuple[DayAvailability, ...]

    def __post_init__(self) -> None:
        if len(self.days) != len(Weekday):
            raise InvalidAvailabilityError(
                f"A week needs exactly {len(Weekday)} days, got {len(self.days)}"
            )

    @classmethod
    def from_days(cls, entries: Iterable[tuple[int, DayAvailability]]) -> "WeeklyAvailability":
        """Build from (weekday, day) pairs; weekdays not listed are closed.

        A weekday listed twice or outside 1..7 is rejected.
        """
        by_weekday: dict[Weekday, DayAvailability] = {}
        for weekday, day in entries:
            try:
                key = Weekday(weekday)
            except ValueError:
                raise InvalidAvailabilityError(f"Unknown weekday: {weekday}") from None
            if key in by_weekday:
                raise InvalidAvailabilityError(f"Duplicate weekday: {key.label}")
            by_weekday[key] = day
        return cls(tuple(by_weekday.get(w, DayAvailability.closed()) for w in Weekday))

    @classmethod
    def all_closed(cls) -> "WeeklyAvailability":
        return cls(tuple(DayAvailability.closed() for _ in Weekday))

    @classmethod
    def default(cls) -> "WeeklyAvailability":
        """Monday to Friday 9 AM - 5 PM, weekends closed."""
        working = DayAvailability.open_between(DEFAULT_START_HOUR, DEFAULT_END_HOUR)
        return cls.from_days(
            (w, working) for w in Weekday if w not in (Weekday.SATURDAY, Weekday.SUNDAY)
        )

    @classmethod
    def from_record(cls, data: Mapping[str, Any] | None) -> "WeeklyAvailability":
        """Read the ``{"sunday": {...}, ..., "saturday": {...}}`` form."""
        data = data if isinstance(data, Mapping) else {}
        return cls(tuple(DayAvailability.from_record(data.get(w.record_key)) for w in Weekday))

    def to_record(self) -> dict[str, dict[str, Any]]:
        return {w.record_key: self.for_weekday(w).to_record() for w in Weekday}

    def for_weekday(self, weekday: int) -> DayAvailability:
        try:
            return self.days[Weekday(weekday) - 1]
        except ValueError:
            return DayAvailability.closed()

    def for_date(self, day: date) -> DayAvailability:
        return self.for_weekday(Weekday.of(day))

    def with_day(self, weekday: int, day: DayAvailability) -> "WeeklyAvailability":
        days = list(self.days)
        days[Weekday(weekday) - 1] = day
        return replace(self, days=tuple(days))

    def items(self) -> list[tuple[Weekday, DayAvailability]]:
        return list(zip(Weekday, self.days))


def is_date_open(weekly: WeeklyAvailability, day: date) -> bool:
    """Whether the professional works at all on `day`'s weekday."""
    return weekly.for_date(day).is_open
