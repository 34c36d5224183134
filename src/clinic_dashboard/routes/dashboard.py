"""Dashboard endpoint."""

from fastapi import APIRouter

from clinic_dashboard.dependencies import (
    AppointmentRepositoryDep,
    ConfigDep,
    DashboardRepositoryDep,
    NowDep,
    PatientRepositoryDep,
)
from clinic_dashboard.domain.enums import mode_label, status_label
from clinic_dashboard.domain.projections import status_in
from clinic_dashboard.response_models import DashboardResponse, UpcomingAppointmentRow
from clinic_dashboard.utils.dates import format_date_time
from clinic_dashboard.views import DashboardView

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    dashboard: DashboardRepositoryDep,
    appointments: AppointmentRepositoryDep,
    patients: PatientRepositoryDep,
    config: ConfigDep,
    now: NowDep,
):
    """Returns the counters cards and the next appointments."""
    schedule = config.schedule
    view = DashboardView(
        dashboard,
        appointments,
        patients,
        is_active=status_in(schedule.upcoming_statuses),
        limit=schedule.upcoming_limit,
        clock=lambda: now,
    )
    await view.reload()

    return DashboardResponse(
        stats=view.stats_cards,
        upcoming=[
            UpcomingAppointmentRow(
                id=a.id,
                patient_name=view.patient_name(a),
                starts_at=a.starts_at,
                when=format_date_time(a.starts_at, schedule.tz),
                mode_label=mode_label(a.mode).lower(),
                status_label=status_label(a.status).lower(),
            )
            for a in view.upcoming
        ],
        upcoming_error=view.upcoming_error,
    )
