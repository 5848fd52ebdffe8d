from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from glowbook.database import Base


class DayAvailabilityRecord(Base):
    """One weekday of a professional's working hours. Missing rows mean closed."""

    __tablename__ = "day_availabilities"
    __table_args__ = (UniqueConstraint("professional_id", "weekday"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    professional_id: Mapped[int] = mapped_column(ForeignKey("professionals.id"))
    weekday: Mapped[int]  # 1=Sunday, 7=Saturday
    is_open: Mapped[bool] = mapped_column(default=False)
    start_hour: Mapped[int] = mapped_column(default=9)
    start_minute: Mapped[int] = mapped_column(default=0)
    end_hour: Mapped[int] = mapped_column(default=17)
    end_minute: Mapped[int] = mapped_column(default=0)
