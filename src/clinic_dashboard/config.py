"""Application configuration loaded from environment variables."""

import os
from zoneinfo import ZoneInfo

from pydantic import BaseModel, computed_field

from clinic_dashboard.domain.enums import AppointmentStatus


class ApiConfig(BaseModel, frozen=True):
    """Clinic REST API connection configuration."""

    base_url: str
    verify_tls: bool = True

    @computed_field
    @property
    def api_root(self) -> str:
        """Returns the root URL every endpoint path is appended to."""
        return f"{self.base_url.rstrip('/')}/api"


class ScheduleConfig(BaseModel, frozen=True):
    """Agenda and dashboard presentation configuration."""

    timezone: str = "Europe/Madrid"
    upcoming_limit: int = 5
    upcoming_statuses: tuple[AppointmentStatus, ...] = (
        AppointmentStatus.PENDING,
        AppointmentStatus.CONFIRMED,
    )
    min_appointment_minutes: int = 15

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    api: ApiConfig
    schedule: ScheduleConfig


def _parse_statuses(raw: str) -> tuple[AppointmentStatus, ...]:
    return tuple(AppointmentStatus(int(part)) for part in raw.split(",") if part.strip())


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        api=ApiConfig(
            base_url=os.getenv("CLINIC_API_BASE_URL", "https://localhost:7224"),
            verify_tls=os.getenv("CLINIC_API_VERIFY_TLS", "true").lower() != "false",
        ),
        schedule=ScheduleConfig(
            timezone=os.getenv("CLINIC_TIMEZONE", "Europe/Madrid"),
            upcoming_limit=int(os.getenv("CLINIC_UPCOMING_LIMIT", "5")),
            upcoming_statuses=_parse_statuses(
                os.getenv("CLINIC_UPCOMING_STATUSES", "0,1")
            ),
            min_appointment_minutes=int(
                os.getenv("CLINIC_MIN_APPOINTMENT_MINUTES", "15")
            ),
        ),
    )
