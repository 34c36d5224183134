"""Create/edit appointment dialog."""

from datetime import tzinfo

from clinic_dashboard.dialogs.base import FormDialog, SuccessCallback
from clinic_dashboard.domain.forms import DEFAULT_MIN_APPOINTMENT_MINUTES, AppointmentForm
from clinic_dashboard.domain.models import Appointment
from clinic_dashboard.repositories import AppointmentRepository


class AppointmentDialog(FormDialog):
    """Schedules an appointment, or edits `appointment` when one is given."""

    def __init__(
        self,
        repository: AppointmentRepository,
        on_success: SuccessCallback,
        tz: tzinfo,
        min_minutes: int = DEFAULT_MIN_APPOINTMENT_MINUTES,
        appointment: Appointment | None = None,
    ):
        self._repository = repository
        self._tz = tz
        self._min_minutes = min_minutes
        self.appointment = appointment
        super().__init__(on_success)

    @property
    def failure_message(self) -> str:
        if self.appointment:
            return "Error al actualizar la cita"
        return "Error al crear la cita"

    def _initial_draft(self) -> AppointmentForm:
        if self.appointment:
            return AppointmentForm.from_appointment(self.appointment, self._tz)
        return AppointmentForm()

    def _validate(self) -> None:
        self.draft.validate_draft(self._min_minutes, self._tz)

    async def _send(self) -> None:
        if self.appointment:
            await self._repository.update(self.appointment.id, self.draft.to_update(self._tz))
        else:
            await self._repository.create(self.draft.to_create(self._tz))
