"""Schedule view: filtered appointments grouped by day."""

from datetime import tzinfo

from clinic_dashboard.domain.models import Appointment, Patient
from clinic_dashboard.domain.projections import (
    AppointmentFilter,
    DayGroup,
    filter_appointments,
    group_by_day,
    patient_full_name,
)
from clinic_dashboard.infrastructure.interfaces import Confirmer
from clinic_dashboard.repositories import AppointmentRepository, PatientRepository
from clinic_dashboard.views.base import CollectionView, fetch_all


class AgendaView(CollectionView):
    load_error_message = "Error al cargar la agenda."
    delete_prompt = "¿Estás seguro de que deseas cancelar esta cita?"
    delete_error_message = "Error al cancelar la cita"

    def __init__(
        self,
        appointments: AppointmentRepository,
        patients: PatientRepository,
        tz: tzinfo,
    ):
        super().__init__()
        self._appointments = appointments
        self._patients = patients
        self.tz = tz
        self.appointments: list[Appointment] = []
        self.patients: list[Patient] = []
        self.criteria = AppointmentFilter()

    async def _load(self) -> None:
        appointments, patients = await fetch_all(
            self._appointments.list_all(),
            self._patients.list_all(),
        )
        self.appointments = appointments
        self.patients = patients

    @property
    def filtered(self) -> list[Appointment]:
        return filter_appointments(self.appointments, self.criteria, self.tz)

    @property
    def day_groups(self) -> list[DayGroup]:
        return group_by_day(self.filtered, self.tz)

    def patient_name(self, appointment: Appointment) -> str:
        return patient_full_name(self.patients, appointment.patient_id)

    def appointment(self, appointment_id: str) -> Appointment | None:
        return next((a for a in self.appointments if a.id == appointment_id), None)

    def _remove(self, appointment_id: str) -> None:
        self.appointments = [a for a in self.appointments if a.id != appointment_id]

    async def delete(self, appointment_id: str, confirmer: Confirmer) -> bool:
        return await self._delete(
            self._appointments, appointment_id, self.delete_prompt, confirmer, self._remove
        )
