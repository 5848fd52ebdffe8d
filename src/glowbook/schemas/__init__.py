from glowbook.schemas.appointment import (
    AppointmentCancel,
    AppointmentCreate,
    AppointmentRead,
    AppointmentStatusUpdate,
    DoubleBookingRead,
    UpcomingCountRead,
)
from glowbook.schemas.availability import (
    DayAvailabilityEntry,
    DayAvailabilityRead,
    DayHours,
    DayRecord,
    OpenDateRead,
    WeeklyAvailabilityRead,
    WeeklyAvailabilityRecord,
    WeeklyAvailabilitySet,
)
from glowbook.schemas.housekeeping import CompletedResponse, ReconcileResponse
from glowbook.schemas.professional import ProfessionalCreate, ProfessionalRead
from glowbook.schemas.slots import DaySlotsRead, TimeSlotRead
from glowbook.schemas.system import StatusResponse

__all__ = [
    "AppointmentCancel",
    "AppointmentCreate",
    "AppointmentRead",
    "AppointmentStatusUpdate",
    "CompletedResponse",
    "DayAvailabilityEntry",
    "DayAvailabilityRead",
    "DayHours",
    "DayRecord",
    "DaySlotsRead",
    "DoubleBookingRead",
    "OpenDateRead",
    "ProfessionalCreate",
    "ProfessionalRead",
    "ReconcileResponse",
    "StatusResponse",
    "TimeSlotRead",
    "UpcomingCountRead",
    "WeeklyAvailabilityRead",
    "WeeklyAvailabilityRecord",
    "WeeklyAvailabilitySet",
]
