# salon_booking/config.py

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    database_url: str = "sqlite:///./salon.db"
    redis_url: Optional[str] = None
    redis_socket_timeout: float = 2.0

    # Booking admission policy
    rate_limit_backend: Literal["memory", "redis"] = "memory"
    max_bookings_per_ip: int = 3
    rate_limit_window_seconds: int = 3600
    max_pending_per_phone: int = 2
    same_day_lead_minutes: int = 60

    # Bot-score oracle. No secret = verification disabled (development).
    recaptcha_secret_key: Optional[str] = None
    recaptcha_verify_url: str = "https://www.google.com/recaptcha/api/siteverify"
    recaptcha_min_score: float = 0.5
    recaptcha_timeout_seconds: float = 10.0

    timezone: str = "Asia/Manila"
    admin_token: Optional[str] = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # relative sqlite paths are anchored at the project root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url


settings = Settings()
