"""Repository for patients (`/Pacientes`)."""

from clinic_dashboard.domain.models import Patient, PatientCreate, PatientUpdate
from clinic_dashboard.infrastructure.interfaces import ApiClient
from clinic_dashboard.repositories.base import ResourceRepository


class PatientRepository(ResourceRepository):
    def __init__(self, api: ApiClient):
        super().__init__(api, "/Pacientes")

    async def list_all(self) -> list[Patient]:
        return await self._list(Patient)

    async def create(self, patient: PatientCreate) -> None:
        await self._create(patient)

    async def update(self, patient_id: str, changes: PatientUpdate) -> None:
        await self._update(patient_id, changes)
