"""Create/edit patient dialog."""

from collections.abc import Callable
from datetime import date

from clinic_dashboard.dialogs.base import FormDialog, SuccessCallback
from clinic_dashboard.domain.forms import PatientForm
from clinic_dashboard.domain.models import Patient
from clinic_dashboard.repositories import PatientRepository


class PatientDialog(FormDialog):
    """Creates a patient, or edits `patient` when one is given."""

    def __init__(
        self,
        repository: PatientRepository,
        on_success: SuccessCallback,
        today: Callable[[], date],
        patient: Patient | None = None,
    ):
        self._repository = repository
        self._today = today
        self.patient = patient
        super().__init__(on_success)

    @property
    def failure_message(self) -> str:
        if self.patient:
            return "Error al actualizar el paciente"
        return "Error al crear el paciente"

    def _initial_draft(self) -> PatientForm:
        if self.patient:
            return PatientForm.from_patient(self.patient)
        return PatientForm()

    def _validate(self) -> None:
        self.draft.validate_draft(self._today())

    async def _send(self) -> None:
        if self.patient:
            await self._repository.update(self.patient.id, self.draft.to_update(self.patient))
        else:
            await self._repository.create(self.draft.to_create(self._today()))
