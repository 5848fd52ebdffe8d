from datetime import date

from pydantic import BaseModel


class TimeSlotRead(BaseModel):
    start_minutes: int
    label: str
    is_offered: bool

    model_config = {"from_attributes": True}


class DaySlotsRead(BaseModel):
    professional_id: int
    day: date
    is_open: bool
    granularity_minutes: int
    duration_minutes: int | None = None
    windows: dict[str, list[TimeSlotRead]]
