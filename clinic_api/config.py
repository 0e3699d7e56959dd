from datetime import timedelta, timezone
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Business hours: first slot starts at 07:00, last one at 20:00
START_HOUR = 7
END_HOUR = 21
SLOT_MINUTES = 60

PRIZE_VALIDITY_DAYS = 15
# Argentina time (ART) has no daylight saving
CLINIC_TZ = timezone(timedelta(hours=-3), "ART")
CLINIC_NAME = "Centro de Belleza"
CLINIC_LOCATION = "Neuquen 560, Miguel Riglos, La Pampa, Argentina"


class Settings(BaseSettings):
    """Environment-provided configuration, loaded once per process."""

    DATABASE_URL: str = "sqlite:///./clinic.db"

    # Resend Email Configuration
    RESEND_API_KEY: Optional[str] = None
    ADMIN_EMAIL: Optional[str] = None  # comma separated list of recipients
    FROM_EMAIL: str = f"{CLINIC_NAME} <onboarding@resend.dev>"

    # Google reCAPTCHA v3
    RECAPTCHA_SECRET_KEY: Optional[str] = None
    RECAPTCHA_MIN_SCORE: float = 0.5

    SITE_URL: str = "https://centrodebelleza.com.ar"
    ALLOWED_ORIGINS: str = "https://centrodebelleza.com.ar,http://localhost:5173,http://localhost:3000"
    ENVIRONMENT: str = "development"

    # Connection pool tuning (ignored for SQLite)
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 300
    DB_SLOW_QUERY_THRESHOLD: float = 1.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def admin_emails(self) -> list[str]:
        if not self.ADMIN_EMAIL:
            return []
        return [e.strip() for e in self.ADMIN_EMAIL.split(",") if e.strip()]

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def email_enabled(self) -> bool:
        return bool(self.RESEND_API_KEY) and bool(self.admin_emails)


@lru_cache
def get_settings() -> Settings:
    return Settings()
