from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from glowbook.scheduling.clock import parse_time_label


class AppointmentCreate(BaseModel):
    professional_id: int
    client_id: str | None = Field(default=None, max_length=64)
    client_name: str = Field(max_length=100)
    client_email: EmailStr
    client_phone: str | None = Field(default=None, max_length=30)
    service_name: str = Field(max_length=200)
    service_duration: int = Field(gt=0, le=720)
    service_price: float | None = Field(default=None, ge=0)
    appointment_date: date
    time_slot: str = Field(description='Slot label ("10:00 AM") or 24-hour "HH:MM"')
    special_requests: str | None = None

    @field_validator("time_slot")
    @classmethod
    def parseable_time(cls, v: str) -> str:
        parse_time_label(v)
        return v.strip()

    @property
    def start_minutes(self) -> int:
        return parse_time_label(self.time_slot)


class AppointmentRead(BaseModel):
    id: str
    professional_id: int
    client_id: str | None = None
    client_name: str
    client_email: str
    client_phone: str | None = None
    service_name: str
    service_duration: int
    duration_label: str
    service_price: float | None = None
    appointment_date: date
    start_minutes: int
    end_minutes: int
    time_slot: str
    end_time: str
    status: str
    status_label: str
    special_requests: str | None = None
    cancel_reason: str | None = None
    created_at: datetime
    updated_at: datetime | None = None
    confirmed_at: datetime | None = None
    cancelled_at: datetime | None = None
    completed_at: datetime | None = None

    model_config = {"from_attributes": True}


class AppointmentStatusUpdate(BaseModel):
    status: str = Field(pattern=r"^(confirmed|cancelled|completed)$")
    reason: str | None = Field(default=None, max_length=500)


class AppointmentCancel(BaseModel):
    reason: str | None = Field(default=None, max_length=500)


class DoubleBookingRead(BaseModel):
    first_appointment_id: str
    second_appointment_id: str
    overlap_start: int
    overlap_end: int


class UpcomingCountRead(BaseModel):
    professional_id: int
    since: date
    count: int
