"""Landing view: aggregate counters and the next appointments."""

from collections.abc import Callable
from datetime import datetime, timezone

from clinic_dashboard.domain.models import Appointment, DashboardSummary, Patient
from clinic_dashboard.domain.projections import (
    DEFAULT_UPCOMING_LIMIT,
    AppointmentPredicate,
    StatsCard,
    build_stats_cards,
    patient_full_name,
    upcoming_appointments,
)
from clinic_dashboard.exceptions import API_ERRORS
from clinic_dashboard.logging import setup_logging
from clinic_dashboard.repositories import (
    AppointmentRepository,
    DashboardRepository,
    PatientRepository,
)
from clinic_dashboard.views.base import fetch_all

logger = setup_logging()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DashboardView:
    """
    Combines two independently loaded widgets.

    The counters and the upcoming-appointments list load concurrently and
    fail separately: a counters failure is only logged (cards fall back to
    placeholders), an appointments failure sets `upcoming_error`.
    """

    upcoming_error_message = (
        "Error al cargar las citas. Verifica que el servidor esté disponible."
    )

    def __init__(
        self,
        dashboard: DashboardRepository,
        appointments: AppointmentRepository,
        patients: PatientRepository,
        is_active: AppointmentPredicate,
        limit: int = DEFAULT_UPCOMING_LIMIT,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._dashboard = dashboard
        self._appointments = appointments
        self._patients = patients
        self._is_active = is_active
        self._limit = limit
        self._clock = clock
        self.loading = False
        self.summary: DashboardSummary | None = None
        self.upcoming: list[Appointment] = []
        self.patients: list[Patient] = []
        self.upcoming_error: str | None = None

    async def reload(self) -> None:
        self.loading = True
        try:
            await fetch_all(self._load_summary(), self._load_upcoming())
        finally:
            self.loading = False

    async def _load_summary(self) -> None:
        try:
            self.summary = await self._dashboard.summary()
        except API_ERRORS:
            logger.exception("Error loading dashboard summary")

    async def _load_upcoming(self) -> None:
        self.upcoming_error = None
        try:
            appointments, patients = await fetch_all(
                self._appointments.list_all(),
                self._patients.list_all(),
            )
        except API_ERRORS:
            logger.exception("Error loading upcoming appointments")
            self.upcoming_error = self.upcoming_error_message
            return

        self.patients = patients
        self.upcoming = upcoming_appointments(
            appointments, self._clock(), self._is_active, self._limit
        )

    @property
    def stats_cards(self) -> list[StatsCard]:
        return build_stats_cards(self.summary)

    def patient_name(self, appointment: Appointment) -> str:
        return patient_full_name(self.patients, appointment.patient_id)
