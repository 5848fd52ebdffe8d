import uuid
from datetime import date, datetime

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from glowbook.database import Base, utcnow
from glowbook.scheduling.clock import MINUTES_PER_DAY, format_duration, format_minutes
from glowbook.scheduling.status import AppointmentStatus


def _new_id() -> str:
    return str(uuid.uuid4())


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        Index("ix_appointments_professional_day", "professional_id", "appointment_date"),
        {"sqlite_autoincrement": True},
    )

    # insertion order; breaks created_at ties when reconciling double bookings
    seq: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), unique=True, default=_new_id)
    professional_id: Mapped[int] = mapped_column(ForeignKey("professionals.id"))
    client_id: Mapped[str | None] = mapped_column(String(64), index=True, default=None)
    client_name: Mapped[str] = mapped_column(String(100))
    client_email: Mapped[str] = mapped_column(String(255))
    client_phone: Mapped[str | None] = mapped_column(String(30), default=None)
    service_name: Mapped[str] = mapped_column(String(200))
    service_duration: Mapped[int]  # minutes
    service_price: Mapped[float | None] = mapped_column(default=None)
    appointment_date: Mapped[date]
    start_minutes: Mapped[int]  # minutes since midnight, professional's local time
    time_slot: Mapped[str] = mapped_column(String(20))  # display label, e.g. "10:00 AM"
    status: Mapped[str] = mapped_column(
        String(20), default="pending"
    )  # pending, confirmed, cancelled, completed
    special_requests: Mapped[str | None] = mapped_column(Text, default=None)
    cancel_reason: Mapped[str | None] = mapped_column(Text, default=None)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime | None] = mapped_column(default=None)
    confirmed_at: Mapped[datetime | None] = mapped_column(default=None)
    cancelled_at: Mapped[datetime | None] = mapped_column(default=None)
    completed_at: Mapped[datetime | None] = mapped_column(default=None)

    @property
    def end_minutes(self) -> int:
        return self.start_minutes + self.service_duration

    @property
    def duration_label(self) -> str:
        return format_duration(self.service_duration)

    @property
    def status_label(self) -> str:
        return AppointmentStatus(self.status).display_name

    @property
    def end_time(self) -> str:
        return format_minutes(self.end_minutes % MINUTES_PER_DAY)
