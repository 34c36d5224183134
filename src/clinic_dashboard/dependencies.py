"""FastAPI dependency injection configuration."""

from datetime import date, datetime, timezone
from typing import Annotated

import httpx
from fastapi import Depends

from clinic_dashboard.config import AppConfig, load_config
from clinic_dashboard.infrastructure import HttpApiClient
from clinic_dashboard.infrastructure.interfaces import ApiClient
from clinic_dashboard.logging import setup_logging
from clinic_dashboard.repositories import (
    AppointmentRepository,
    DashboardRepository,
    PatientRepository,
    SessionRepository,
)

logger = setup_logging()

_config = load_config()

# One HTTP client for the whole process; single attempt, no timeout
_http_client = httpx.AsyncClient(verify=_config.api.verify_tls, timeout=None)
_api_client = HttpApiClient(_http_client, _config.api.api_root)
logger.info("Clinic API client configured", extra={"api_root": _config.api.api_root})


async def close_api_client() -> None:
    """Releases the shared HTTP connection pool."""
    await _http_client.aclose()


def get_config() -> AppConfig:
    """Returns the loaded application configuration."""
    return _config


def get_api_client() -> ApiClient:
    """Returns the shared clinic API client."""
    return _api_client


def get_clock() -> datetime:
    """Returns the current instant; overridden in tests."""
    return datetime.now(timezone.utc)


ConfigDep = Annotated[AppConfig, Depends(get_config)]
ApiClientDep = Annotated[ApiClient, Depends(get_api_client)]
NowDep = Annotated[datetime, Depends(get_clock)]


def get_today(config: ConfigDep, now: NowDep) -> date:
    """Returns the practitioner's current local date."""
    return now.astimezone(config.schedule.tz).date()


def get_patient_repository(api: ApiClientDep) -> PatientRepository:
    return PatientRepository(api)


def get_appointment_repository(api: ApiClientDep) -> AppointmentRepository:
    return AppointmentRepository(api)


def get_session_repository(api: ApiClientDep) -> SessionRepository:
    return SessionRepository(api)


def get_dashboard_repository(api: ApiClientDep) -> DashboardRepository:
    return DashboardRepository(api)


TodayDep = Annotated[date, Depends(get_today)]
PatientRepositoryDep = Annotated[PatientRepository, Depends(get_patient_repository)]
AppointmentRepositoryDep = Annotated[
    AppointmentRepository, Depends(get_appointment_repository)
]
SessionRepositoryDep = Annotated[SessionRepository, Depends(get_session_repository)]
DashboardRepositoryDep = Annotated[DashboardRepository, Depends(get_dashboard_repository)]
