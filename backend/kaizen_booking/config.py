# backend/kaizen_booking/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # repo root


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/kaizen.db"
    redis_url: str = ""
    log_level: str = "INFO"

    # Availability
    availability_max_range_days: int = 366
    availability_strict_slots: bool = False

    # Google Calendar (booking side-effects)
    google_client_id: str = ""
    google_client_secret: str = ""
    google_access_token: str = ""
    google_refresh_token: str = ""
    google_calendar_id: str = "primary"
    calendar_timezone: str = "America/New_York"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # Relative SQLite path -> absolute, anchored at repo root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url


settings = Settings()
