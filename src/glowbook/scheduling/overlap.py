"""Booked intervals and overlap detection.

All intervals are half-open ``[start, end)`` in minutes-of-day, so two
appointments that merely touch (one ends at 10:00, the next starts at 10:00)
do not conflict. Only active (pending/confirmed) intervals occupy time.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from glowbook.scheduling.status import AppointmentStatus


@dataclass(frozen=True)
class BookedInterval:
    start_minutes: int
    end_minutes: int
    appointment_id: str
    status: AppointmentStatus = AppointmentStatus.PENDING

    @classmethod
    def from_booking(
        cls,
        appointment_id: str,
        start_minutes: int,
        duration_minutes: int,
        status: AppointmentStatus | str = AppointmentStatus.PENDING,
    ) -> "BookedInterval":
        return cls(
            start_minutes=start_minutes,
            end_minutes=start_minutes + duration_minutes,
            appointment_id=appointment_id,
            status=AppointmentStatus(status),
        )

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    def overlaps(self, start: int, end: int) -> bool:
        return start < self.end_minutes and end > self.start_minutes


def find_conflicts(
    existing: Iterable[BookedInterval], candidate_start: int, candidate_end: int
) -> list[BookedInterval]:
    """Active intervals that overlap ``[candidate_start, candidate_end)``."""
    return [
        interval
        for interval in existing
        if interval.is_active and interval.overlaps(candidate_start, candidate_end)
    ]


def has_conflict(
    existing: Iterable[BookedInterval], candidate_start: int, candidate_end: int
) -> bool:
    """True if any active interval overlaps the candidate. Never raises."""
    return any(
        interval.is_active and interval.overlaps(candidate_start, candidate_end)
        for interval in existing
    )


def find_double_bookings(
    intervals: Iterable[BookedInterval],
) -> list[tuple[BookedInterval, BookedInterval]]:
    """Pairs of active intervals that overlap each other.

    Pairs are ordered by start time (then appointment id) and each pair is
    reported once. An empty list means the calendar is consistent.
    """
    active = sorted(
        (i for i in intervals if i.is_active),
        key=lambda i: (i.start_minutes, i.appointment_id),
    )
    pairs: list[tuple[BookedInterval, BookedInterval]] = []
    for idx, first in enumerate(active):
        for second in active[idx + 1 :]:
            # sorted by start: nothing later can overlap once we pass first's end
            if second.start_minutes >= first.end_minutes:
                break
            if first.overlaps(second.start_minutes, second.end_minutes):
                pairs.append((first, second))
    return pairs
