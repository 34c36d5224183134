"""Patient list with free-text search."""

from clinic_dashboard.domain.models import Patient
from clinic_dashboard.domain.projections import find_patient, search_patients
from clinic_dashboard.infrastructure.interfaces import Confirmer
from clinic_dashboard.repositories import PatientRepository
from clinic_dashboard.views.base import CollectionView


class PatientsView(CollectionView):
    load_error_message = "No se pudieron cargar los pacientes."
    delete_prompt = "¿Estás seguro de que deseas eliminar este paciente?"
    delete_error_message = "Error al eliminar el paciente"

    def __init__(self, patients: PatientRepository):
        super().__init__()
        self._repository = patients
        self.patients: list[Patient] = []
        self.search_term = ""

    async def _load(self) -> None:
        self.patients = await self._repository.list_all()

    @property
    def visible_patients(self) -> list[Patient]:
        return search_patients(self.patients, self.search_term)

    def patient(self, patient_id: str) -> Patient | None:
        return find_patient(self.patients, patient_id)

    def _remove(self, patient_id: str) -> None:
        self.patients = [p for p in self.patients if p.id != patient_id]

    async def delete(self, patient_id: str, confirmer: Confirmer) -> bool:
        return await self._delete(
            self._repository, patient_id, self.delete_prompt, confirmer, self._remove
        )
