from glowbook.models.appointment import Appointment
from glowbook.models.availability import DayAvailabilityRecord
from glowbook.models.professional import Professional

__all__ = [
    "Appointment",
    "DayAvailabilityRecord",
    "Professional",
]
