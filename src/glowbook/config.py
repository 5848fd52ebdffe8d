from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GLOWBOOK_",
        case_sensitive=False,
    )

    # App
    env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    db_url: str = "sqlite+aiosqlite:///./glowbook.db"

    # Booking
    slot_granularity_minutes: int = Field(default=15, gt=0, le=60)
    booking_window_days: int = Field(default=14, ge=1, le=90)
    serialize_bookings: bool = True  # per professional-day lock on create

    # Slot windows shown on the booking screen (hours, end exclusive)
    morning_start_hour: int = 10
    morning_end_hour: int = 12
    afternoon_start_hour: int = 12
    afternoon_end_hour: int = 17
    evening_start_hour: int = 17
    evening_end_hour: int = 19


def get_settings() -> Settings:
    return Settings()
