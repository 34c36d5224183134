"""Repository for appointments (`/Cita`)."""

from clinic_dashboard.domain.models import Appointment, AppointmentCreate, AppointmentUpdate
from clinic_dashboard.infrastructure.interfaces import ApiClient
from clinic_dashboard.repositories.base import ResourceRepository


class AppointmentRepository(ResourceRepository):
    def __init__(self, api: ApiClient):
        super().__init__(api, "/Cita")

    async def list_all(self) -> list[Appointment]:
        return await self._list(Appointment)

    async def create(self, appointment: AppointmentCreate) -> None:
        await self._create(appointment)

    async def update(self, appointment_id: str, changes: AppointmentUpdate) -> None:
        await self._update(appointment_id, changes)
