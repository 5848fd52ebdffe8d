"""Slot generation: discrete bookable start times for a day.

A slot at minute ``t`` is offered when the day is open, the slot lies inside
the working hours and it does not collide with an active booking. When the
service duration is known the whole ``[t, t + duration)`` range must fit and
must not overlap a booking; without a duration only the start instant is
checked (inside ``[start, end)`` and not equal to a booked start).
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import NamedTuple

from glowbook.scheduling.availability import DayAvailability
from glowbook.scheduling.clock import MINUTES_PER_DAY, format_minutes
from glowbook.scheduling.overlap import BookedInterval

DEFAULT_GRANULARITY_MINUTES = 15


class InvalidWindowError(ValueError):
    """Raised for an empty/out-of-range window, bad granularity or bad duration."""


class SlotWindow(NamedTuple):
    start_minutes: int
    end_minutes: int


# Sections of the booking screen
MORNING = SlotWindow(10 * 60, 12 * 60)
AFTERNOON = SlotWindow(12 * 60, 17 * 60)
EVENING = SlotWindow(17 * 60, 19 * 60)

DEFAULT_WINDOWS: dict[str, SlotWindow] = {
    "morning": MORNING,
    "afternoon": AFTERNOON,
    "evening": EVENING,
}


@dataclass(frozen=True)
class TimeSlot:
    start_minutes: int
    label: str
    is_offered: bool


def _validate(
    window_start: int, window_end: int, granularity_minutes: int, duration: int | None
) -> None:
    if not 0 <= window_start < window_end <= MINUTES_PER_DAY:
        raise InvalidWindowError(
            f"Window must satisfy 0 <= start < end <= {MINUTES_PER_DAY}, "
            f"got {window_start}-{window_end}"
        )
    if granularity_minutes <= 0:
        raise InvalidWindowError(f"Granularity must be positive, got {granularity_minutes}")
    if duration is not None and duration <= 0:
        raise InvalidWindowError(f"Duration must be positive, got {duration}")


def is_offered(
    day: DayAvailability,
    booked: Iterable[BookedInterval],
    start: int,
    duration: int | None = None,
) -> bool:
    """Whether a slot starting at `start` can be offered."""
    if not day.is_open:
        return False

    if duration is None:
        if not day.contains(start):
            return False
        return not any(b.is_active and b.start_minutes == start for b in booked)

    if not day.fits(start, duration):
        return False
    end = start + duration
    return not any(b.is_active and b.overlaps(start, end) for b in booked)


def generate_slots(
    day: DayAvailability,
    booked: Iterable[BookedInterval],
    window_start: int,
    window_end: int,
    granularity_minutes: int = DEFAULT_GRANULARITY_MINUTES,
    duration: int | None = None,
) -> list[TimeSlot]:
    """Enumerate slots in ``[window_start, window_end)`` every `granularity_minutes`.

    Every candidate is returned, marked offered or not, in ascending order.
    """
    _validate(window_start, window_end, granularity_minutes, duration)
    booked = tuple(booked)

    return [
        TimeSlot(
            start_minutes=t,
            label=format_minutes(t),
            is_offered=is_offered(day, booked, t, duration),
        )
        for t in range(window_start, window_end, granularity_minutes)
    ]


def generate_day_slots(
    day: DayAvailability,
    booked: Iterable[BookedInterval],
    windows: Mapping[str, SlotWindow] = DEFAULT_WINDOWS,
    granularity_minutes: int = DEFAULT_GRANULARITY_MINUTES,
    duration: int | None = None,
) -> dict[str, list[TimeSlot]]:
    """Run `generate_slots` for each named window (morning/afternoon/evening by default)."""
    booked = tuple(booked)
    return {
        name: generate_slots(
            day, booked, window.start_minutes, window.end_minutes, granularity_minutes, duration
        )
        for name, window in windows.items()
    }
