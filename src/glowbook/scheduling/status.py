"""Appointment status lifecycle.

    pending   -> confirmed | cancelled
    confirmed -> cancelled | completed

cancelled and completed are terminal. Only pending and confirmed appointments
occupy the calendar.
"""

from enum import Enum


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def is_active(self) -> bool:
        return self in ACTIVE_STATUSES

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self]


ACTIVE_STATUSES = frozenset({AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED})

ALLOWED_TRANSITIONS: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.PENDING: frozenset(
        {AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED}
    ),
    AppointmentStatus.CONFIRMED: frozenset(
        {AppointmentStatus.CANCELLED, AppointmentStatus.COMPLETED}
    ),
    AppointmentStatus.CANCELLED: frozenset(),
    AppointmentStatus.COMPLETED: frozenset(),
}


class InvalidTransitionError(ValueError):
    """Raised when a status change is not allowed by the lifecycle."""

    def __init__(self, current: AppointmentStatus, target: AppointmentStatus) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot move appointment from {current.value} to {target.value}")


def can_transition(current: AppointmentStatus, target: AppointmentStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def transition(current: AppointmentStatus, target: AppointmentStatus) -> AppointmentStatus:
    """Validate a status change and return the new status."""
    if not can_transition(current, target):
        raise InvalidTransitionError(current, target)
    return target
