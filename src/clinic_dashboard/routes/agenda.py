"""Agenda endpoints: filtered schedule and appointment CRUD."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from clinic_dashboard.config import AppConfig
from clinic_dashboard.dependencies import (
    AppointmentRepositoryDep,
    ConfigDep,
    PatientRepositoryDep,
)
from clinic_dashboard.dialogs import AppointmentDialog
from clinic_dashboard.domain.enums import AppointmentStatus, mode_label, status_label
from clinic_dashboard.domain.forms import AppointmentForm
from clinic_dashboard.domain.models import Appointment
from clinic_dashboard.domain.projections import AppointmentFilter
from clinic_dashboard.infrastructure import PresetConfirmer
from clinic_dashboard.logging import setup_logging
from clinic_dashboard.repositories import AppointmentRepository
from clinic_dashboard.response_models import (
    AgendaDay,
    AgendaResponse,
    AppointmentRow,
    PatientOption,
)
from clinic_dashboard.routes.errors import (
    mount,
    raise_delete_failed,
    raise_not_found,
    raise_unconfirmed,
    submit,
)
from clinic_dashboard.utils.dates import format_time
from clinic_dashboard.views import AgendaView

logger = setup_logging()

router = APIRouter(prefix="/agenda", tags=["agenda"])


def _get_view(
    appointments: AppointmentRepositoryDep,
    patients: PatientRepositoryDep,
    config: ConfigDep,
) -> AgendaView:
    """Dependency that creates an agenda view in the configured timezone."""
    return AgendaView(appointments, patients, config.schedule.tz)


AgendaViewDep = Annotated[AgendaView, Depends(_get_view)]


def _parse_status(status: str) -> AppointmentStatus | str:
    if status == "all":
        return status
    try:
        return AppointmentStatus(int(status))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Estado no válido: {status}") from e


def _row(view: AgendaView, appointment: Appointment) -> AppointmentRow:
    return AppointmentRow(
        id=appointment.id,
        patient_id=appointment.patient_id,
        patient_name=view.patient_name(appointment),
        starts_at=appointment.starts_at,
        ends_at=appointment.ends_at,
        time_range=(
            f"{format_time(appointment.starts_at, view.tz)} - "
            f"{format_time(appointment.ends_at, view.tz)}"
        ),
        mode=appointment.mode,
        mode_label=mode_label(appointment.mode),
        status=appointment.status,
        status_label=status_label(appointment.status),
        location=appointment.location,
        notes=appointment.notes,
    )


def _listing(view: AgendaView) -> AgendaResponse:
    groups = view.day_groups
    return AgendaResponse(
        total=sum(len(g.appointments) for g in groups),
        days=[
            AgendaDay(
                day=g.day,
                heading=g.heading,
                appointments=[_row(view, a) for a in g.appointments],
            )
            for g in groups
        ],
        patients=[PatientOption(id=p.id, name=p.full_name) for p in view.patients],
        error=view.error,
    )


def _dialog(
    view: AgendaView,
    repository: AppointmentRepository,
    config: AppConfig,
    appointment: Appointment | None = None,
) -> AppointmentDialog:
    return AppointmentDialog(
        repository,
        on_success=view.reload,
        tz=config.schedule.tz,
        min_minutes=config.schedule.min_appointment_minutes,
        appointment=appointment,
    )


@router.get("", response_model=AgendaResponse)
async def get_agenda(
    view: AgendaViewDep,
    patient_id: str | None = None,
    status: str = "all",
    date_from: date | None = None,
    date_to: date | None = None,
):
    """Returns the appointments matching every given filter, grouped by day."""
    view.criteria = AppointmentFilter(
        patient_id=patient_id or None,
        status=_parse_status(status),
        date_from=date_from,
        date_to=date_to,
    )
    await mount(view)
    return _listing(view)


@router.post("/appointments", response_model=AgendaResponse, status_code=201)
async def create_appointment(
    form: AppointmentForm,
    view: AgendaViewDep,
    repository: AppointmentRepositoryDep,
    config: ConfigDep,
):
    """Schedules an appointment and returns the reloaded agenda."""
    dialog = _dialog(view, repository, config)
    dialog.open()
    dialog.draft = form
    await submit(dialog)
    logger.info("Appointment created", extra={"patient_id": form.patient_id, "day": form.day})
    return _listing(view)


@router.put("/appointments/{appointment_id}", response_model=AgendaResponse)
async def update_appointment(
    appointment_id: str,
    form: AppointmentForm,
    view: AgendaViewDep,
    repository: AppointmentRepositoryDep,
    config: ConfigDep,
):
    """Edits an appointment and returns the reloaded agenda."""
    await mount(view)
    appointment = view.appointment(appointment_id)
    if appointment is None:
        raise_not_found("Cita")

    dialog = _dialog(view, repository, config, appointment)
    dialog.open()
    dialog.draft = form
    await submit(dialog)
    logger.info("Appointment updated", extra={"appointment_id": appointment_id})
    return _listing(view)


@router.delete("/appointments/{appointment_id}", response_model=AgendaResponse)
async def delete_appointment(
    appointment_id: str, view: AgendaViewDep, confirm: bool = False
):
    """Cancels (deletes) an appointment once the practitioner has confirmed."""
    await mount(view)
    if view.appointment(appointment_id) is None:
        raise_not_found("Cita")
    if not await view.delete(appointment_id, PresetConfirmer(confirm)):
        if not confirm:
            raise_unconfirmed()
        raise_delete_failed(view)
    return _listing(view)
