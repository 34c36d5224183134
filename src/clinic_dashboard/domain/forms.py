"""Dialog drafts: local form state, validation, and conversion to DTOs."""

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo

from pydantic import BaseModel, Field

from clinic_dashboard.domain.attachments import Attachment, AttachmentInput
from clinic_dashboard.domain.encoding import decode_tags, encode_attachments, encode_tags
from clinic_dashboard.domain.enums import AppointmentMode, AppointmentStatus
from clinic_dashboard.domain.models import (
    Appointment,
    AppointmentCreate,
    AppointmentUpdate,
    Patient,
    PatientCreate,
    PatientUpdate,
    Session,
    SessionCreate,
    SessionUpdate,
)
from clinic_dashboard.exceptions import FormValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PHONE_LENGTH = 9
MAX_AGE_YEARS = 120
DEFAULT_MIN_APPOINTMENT_MINUTES = 15


def _parse_day(value: str) -> date | None:
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _parse_clock(value: str) -> time | None:
    try:
        return time.fromisoformat(value)
    except ValueError:
        return None


def _age_on(birth: date, today: date) -> int:
    before_birthday = (today.month, today.day) < (birth.month, birth.day)
    return today.year - birth.year - before_birthday


def _utc_midnight(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def _known_or(enum_type, value: int, default):
    try:
        return enum_type(value)
    except ValueError:
        return default


class PatientForm(BaseModel):
    """Draft of the create/edit patient dialog."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    emergency_contact: str = ""
    birth_date: str = Field("", description="YYYY-MM-DD, blank when unknown")
    tags: list[str] = Field(default_factory=list)

    @classmethod
    def from_patient(cls, patient: Patient) -> "PatientForm":
        return cls(
            first_name=patient.first_name,
            last_name=patient.last_name,
            email=patient.email,
            phone=patient.phone,
            emergency_contact=patient.emergency_contact,
            birth_date=patient.birth_date.date().isoformat() if patient.birth_date else "",
            tags=decode_tags(patient.tags_json),
        )

    def add_tag(self, tag: str) -> None:
        tag = tag.strip()
        if tag and tag not in self.tags:
            self.tags.append(tag)

    def remove_tag(self, tag: str) -> None:
        self.tags = [t for t in self.tags if t != tag]

    def validate_draft(self, today: date) -> None:
        """
        Checks the draft before it is submitted.

        Args:
            today: The practitioner's current local date.

        Raises:
            FormValidationError: On the first rule the draft breaks.
        """
        if not self.first_name.strip():
            raise FormValidationError("El nombre es obligatorio", field="nombre")
        if not self.last_name.strip():
            raise FormValidationError("Los apellidos son obligatorios", field="apellidos")
        if not EMAIL_PATTERN.match(self.email.strip()):
            raise FormValidationError("El email no es válido", field="email")
        if len(self.phone.strip()) < MIN_PHONE_LENGTH:
            raise FormValidationError(
                f"El teléfono debe tener al menos {MIN_PHONE_LENGTH} caracteres",
                field="telefono",
            )
        if len(self.emergency_contact.strip()) < MIN_PHONE_LENGTH:
            raise FormValidationError(
                "El contacto de emergencia debe tener al menos "
                f"{MIN_PHONE_LENGTH} caracteres",
                field="contactoEmergencia",
            )
        if self.birth_date:
            birth = _parse_day(self.birth_date)
            if birth is None:
                raise FormValidationError(
                    "La fecha de nacimiento no es válida", field="fechaNacimiento"
                )
            if birth > today:
                raise FormValidationError(
                    "La fecha de nacimiento no puede ser futura", field="fechaNacimiento"
                )
            if _age_on(birth, today) > MAX_AGE_YEARS:
                raise FormValidationError(
                    f"La edad no puede superar los {MAX_AGE_YEARS} años",
                    field="fechaNacimiento",
                )

    def to_create(self, today: date) -> PatientCreate:
        # blank birth date is sent as today
        birth = _parse_day(self.birth_date) or today
        return PatientCreate(
            first_name=self.first_name.strip(),
            last_name=self.last_name.strip(),
            email=self.email.strip(),
            phone=self.phone.strip(),
            emergency_contact=self.emergency_contact.strip(),
            tags_json=encode_tags(self.tags),
            birth_date=_utc_midnight(birth),
        )

    def to_update(self, original: Patient) -> PatientUpdate:
        birth = _parse_day(self.birth_date)
        return PatientUpdate(
            first_name=self.first_name.strip(),
            last_name=self.last_name.strip(),
            email=self.email.strip(),
            phone=self.phone.strip(),
            emergency_contact=self.emergency_contact.strip(),
            tags_json=encode_tags(self.tags),
            birth_date=_utc_midnight(birth) if birth else original.birth_date,
        )


class AppointmentForm(BaseModel):
    """Draft of the create/edit appointment dialog, in local wall-clock time."""

    patient_id: str = ""
    day: str = Field("", description="YYYY-MM-DD")
    start_time: str = "10:00"
    end_time: str = "11:00"
    mode: AppointmentMode = AppointmentMode.IN_PERSON
    status: AppointmentStatus = AppointmentStatus.PENDING
    location: str = ""
    notes: str = ""

    @classmethod
    def from_appointment(cls, appointment: Appointment, tz: tzinfo) -> "AppointmentForm":
        start = appointment.starts_at.astimezone(tz)
        end = appointment.ends_at.astimezone(tz)
        return cls(
            patient_id=appointment.patient_id,
            day=start.date().isoformat(),
            start_time=f"{start:%H:%M}",
            end_time=f"{end:%H:%M}",
            mode=_known_or(AppointmentMode, appointment.mode, AppointmentMode.IN_PERSON),
            status=_known_or(AppointmentStatus, appointment.status, AppointmentStatus.PENDING),
            location=appointment.location or "",
            notes=appointment.notes or "",
        )

    def _bounds(self, tz: tzinfo) -> tuple[datetime, datetime]:
        day = _parse_day(self.day)
        start = _parse_clock(self.start_time)
        end = _parse_clock(self.end_time)
        if day is None:
            raise FormValidationError("Selecciona una fecha", field="fecha")
        if start is None or end is None:
            raise FormValidationError("Indica la hora de inicio y de fin", field="hora")
        return (
            datetime.combine(day, start, tzinfo=tz),
            datetime.combine(day, end, tzinfo=tz),
        )

    def validate_draft(
        self, min_minutes: int = DEFAULT_MIN_APPOINTMENT_MINUTES, tz: tzinfo = timezone.utc
    ) -> None:
        """
        Checks the draft before it is submitted.

        Raises:
            FormValidationError: On the first rule the draft breaks.
        """
        if not self.patient_id:
            raise FormValidationError("Selecciona un paciente", field="pacienteId")
        if not self.day:
            raise FormValidationError("Selecciona una fecha", field="fecha")
        starts_at, ends_at = self._bounds(tz)
        if ends_at <= starts_at:
            raise FormValidationError(
                "La hora de fin debe ser posterior a la hora de inicio", field="horaFin"
            )
        if ends_at - starts_at < timedelta(minutes=min_minutes):
            raise FormValidationError(
                f"La cita debe durar al menos {min_minutes} minutos", field="horaFin"
            )
        if not self.location.strip():
            raise FormValidationError(
                "Indica la ubicación o el enlace de la videollamada",
                field="ubicacionLink",
            )

    def to_create(self, tz: tzinfo) -> AppointmentCreate:
        starts_at, ends_at = self._bounds(tz)
        return AppointmentCreate(
            patient_id=self.patient_id,
            starts_at=starts_at.astimezone(timezone.utc),
            ends_at=ends_at.astimezone(timezone.utc),
            mode=self.mode,
            status=self.status,
            location=self.location.strip() or None,
            notes=self.notes.strip() or None,
        )

    def to_update(self, tz: tzinfo) -> AppointmentUpdate:
        starts_at, ends_at = self._bounds(tz)
        return AppointmentUpdate(
            patient_id=self.patient_id,
            starts_at=starts_at.astimezone(timezone.utc),
            ends_at=ends_at.astimezone(timezone.utc),
            mode=self.mode,
            status=self.status,
            location=self.location.strip() or None,
            notes=self.notes.strip() or None,
        )


class SessionForm(BaseModel):
    """Draft of the new SOAP session dialog."""

    patient_id: str = ""
    appointment_id: str = ""
    subjective: str = ""
    objective: str = ""
    assessment: str = ""
    plan: str = ""
    attachments: list[Attachment] = Field(default_factory=list)

    def add_attachment(self, source: AttachmentInput) -> Attachment:
        """
        Adds an attachment from a validated input.

        Raises:
            InvalidAttachmentError: If the input is not a usable reference.
        """
        attachment = source.to_attachment()
        self.attachments.append(attachment)
        return attachment

    def remove_attachment(self, index: int) -> None:
        self.attachments = [a for i, a in enumerate(self.attachments) if i != index]

    def validate_draft(self) -> None:
        if not self.patient_id:
            raise FormValidationError("Por favor selecciona un paciente", field="pacienteId")

    def to_create(self) -> SessionCreate:
        return SessionCreate(
            patient_id=self.patient_id,
            appointment_id=self.appointment_id.strip() or None,
            subjective=self.subjective,
            objective=self.objective,
            assessment=self.assessment,
            plan=self.plan,
            attachments_json=encode_attachments(self.attachments),
        )


class SoapNoteForm(BaseModel):
    """Editable SOAP fields of an existing session."""

    subjective: str = ""
    objective: str = ""
    assessment: str = ""
    plan: str = ""

    @classmethod
    def from_session(cls, session: Session) -> "SoapNoteForm":
        return cls(
            subjective=session.subjective or "",
            objective=session.objective or "",
            assessment=session.assessment or "",
            plan=session.plan or "",
        )

    def to_update(self, session: Session) -> SessionUpdate:
        return SessionUpdate(
            patient_id=session.patient_id,
            subjective=self.subjective,
            objective=self.objective,
            assessment=self.assessment,
            plan=self.plan,
        )
