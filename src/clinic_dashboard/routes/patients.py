"""Patient endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from clinic_dashboard.dependencies import PatientRepositoryDep, TodayDep
from clinic_dashboard.dialogs import PatientDialog
from clinic_dashboard.domain.forms import PatientForm
from clinic_dashboard.domain.models import Patient
from clinic_dashboard.infrastructure import PresetConfirmer
from clinic_dashboard.logging import setup_logging
from clinic_dashboard.response_models import PatientListResponse, PatientRow
from clinic_dashboard.routes.errors import (
    mount,
    raise_delete_failed,
    raise_not_found,
    raise_unconfirmed,
    submit,
)
from clinic_dashboard.views import PatientsView

logger = setup_logging()

router = APIRouter(prefix="/patients", tags=["patients"])


def _get_view(repository: PatientRepositoryDep) -> PatientsView:
    """Dependency that creates a patients view over the injected repository."""
    return PatientsView(repository)


PatientsViewDep = Annotated[PatientsView, Depends(_get_view)]


def _row(patient: Patient) -> PatientRow:
    return PatientRow(
        id=patient.id,
        full_name=patient.full_name,
        email=patient.email,
        phone=patient.phone,
        emergency_contact=patient.emergency_contact,
        birth_date=patient.birth_date.date().isoformat() if patient.birth_date else "",
        tags=patient.tags,
    )


def _listing(view: PatientsView) -> PatientListResponse:
    visible = view.visible_patients
    return PatientListResponse(
        total=len(visible),
        patients=[_row(p) for p in visible],
        error=view.error,
    )


@router.get("", response_model=PatientListResponse)
async def list_patients(view: PatientsViewDep, search: str = ""):
    """Returns patients matching `search` on name, email or phone."""
    view.search_term = search
    await mount(view)
    return _listing(view)


@router.post("", response_model=PatientListResponse, status_code=201)
async def create_patient(
    form: PatientForm,
    view: PatientsViewDep,
    repository: PatientRepositoryDep,
    today: TodayDep,
):
    """Creates a patient and returns the reloaded list."""
    dialog = PatientDialog(repository, on_success=view.reload, today=lambda: today)
    dialog.open()
    dialog.draft = form
    await submit(dialog)
    logger.info("Patient created")
    return _listing(view)


@router.put("/{patient_id}", response_model=PatientListResponse)
async def update_patient(
    patient_id: str,
    form: PatientForm,
    view: PatientsViewDep,
    repository: PatientRepositoryDep,
    today: TodayDep,
):
    """Updates a patient and returns the reloaded list."""
    await mount(view)
    patient = view.patient(patient_id)
    if patient is None:
        raise_not_found("Paciente")

    dialog = PatientDialog(
        repository, on_success=view.reload, today=lambda: today, patient=patient
    )
    dialog.open()
    dialog.draft = form
    await submit(dialog)
    logger.info("Patient updated", extra={"patient_id": patient_id})
    return _listing(view)


@router.delete("/{patient_id}", response_model=PatientListResponse)
async def delete_patient(patient_id: str, view: PatientsViewDep, confirm: bool = False):
    """Deletes a patient once the practitioner has confirmed."""
    await mount(view)
    if view.patient(patient_id) is None:
        raise_not_found("Paciente")
    if not await view.delete(patient_id, PresetConfirmer(confirm)):
        if not confirm:
            raise_unconfirmed()
        raise_delete_failed(view)
    return _listing(view)
