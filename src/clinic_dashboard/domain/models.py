"""Entities and DTOs exchanged with the clinic API."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clinic_dashboard.domain.attachments import Attachment
from clinic_dashboard.domain.encoding import decode_attachments, decode_tags
from clinic_dashboard.domain.enums import AppointmentMode, AppointmentStatus


class ApiModel(BaseModel):
    """Base for wire models: English attributes, API field names as aliases."""

    model_config = ConfigDict(populate_by_name=True)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Patient(ApiModel):
    id: str
    first_name: str = Field(alias="nombre")
    last_name: str = Field(alias="apellidos")
    email: str = ""
    phone: str = Field("", alias="telefono")
    emergency_contact: str = Field("", alias="contactoEmergencia")
    tags_json: str | None = Field(None, alias="tagsJson")
    birth_date: datetime | None = Field(None, alias="fechaNacimiento")

    _utc_birth_date = field_validator("birth_date")(_as_utc)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def tags(self) -> list[str]:
        return decode_tags(self.tags_json)


class PatientCreate(ApiModel):
    first_name: str = Field(alias="nombre")
    last_name: str = Field(alias="apellidos")
    email: str
    phone: str = Field(alias="telefono")
    emergency_contact: str = Field(alias="contactoEmergencia")
    tags_json: str = Field(alias="tagsJson")
    birth_date: datetime = Field(alias="fechaNacimiento")


class PatientUpdate(ApiModel):
    first_name: str | None = Field(None, alias="nombre")
    last_name: str | None = Field(None, alias="apellidos")
    email: str | None = None
    phone: str | None = Field(None, alias="telefono")
    emergency_contact: str | None = Field(None, alias="contactoEmergencia")
    tags_json: str | None = Field(None, alias="tagsJson")
    birth_date: datetime | None = Field(None, alias="fechaNacimiento")


class Appointment(ApiModel):
    id: str
    patient_id: str = Field(alias="pacienteId")
    starts_at: datetime = Field(alias="fechaInicio")
    ends_at: datetime = Field(alias="fechaFin")
    # integers outside the enums are kept as is and labelled "Desconocido"
    mode: AppointmentMode | int = Field(alias="modo", union_mode="left_to_right")
    status: AppointmentStatus | int = Field(alias="estado", union_mode="left_to_right")
    location: str | None = Field(None, alias="ubicacionLink")
    notes: str | None = Field(None, alias="notas")

    _utc_bounds = field_validator("starts_at", "ends_at")(_as_utc)


class AppointmentCreate(ApiModel):
    patient_id: str = Field(alias="pacienteId")
    starts_at: datetime = Field(alias="fechaInicio")
    ends_at: datetime = Field(alias="fechaFin")
    mode: AppointmentMode = Field(alias="modo")
    status: AppointmentStatus = Field(alias="estado")
    location: str | None = Field(None, alias="ubicacionLink")
    notes: str | None = Field(None, alias="notas")


class AppointmentUpdate(ApiModel):
    patient_id: str | None = Field(None, alias="pacienteId")
    starts_at: datetime | None = Field(None, alias="fechaInicio")
    ends_at: datetime | None = Field(None, alias="fechaFin")
    mode: AppointmentMode | None = Field(None, alias="modo")
    status: AppointmentStatus | None = Field(None, alias="estado")
    location: str | None = Field(None, alias="ubicacionLink")
    notes: str | None = Field(None, alias="notas")


class Session(ApiModel):
    """A SOAP clinical note, optionally tied to the appointment it documents."""

    id: str
    patient_id: str = Field(alias="pacienteId")
    appointment_id: str | None = Field(None, alias="citaId")
    subjective: str | None = Field(None, alias="soapSubj")
    objective: str | None = Field(None, alias="observaciones")
    # the backend column is spelled "analasis"
    assessment: str | None = Field(None, alias="analasis")
    plan: str | None = Field(None, alias="planAccion")
    attachments_json: str | None = Field(None, alias="archivosJson")

    @property
    def attachments(self) -> list[Attachment]:
        return decode_attachments(self.attachments_json)


class SessionCreate(ApiModel):
    patient_id: str = Field(alias="pacienteId")
    appointment_id: str | None = Field(None, alias="citaId")
    subjective: str = Field(alias="soapSubj")
    objective: str = Field(alias="observaciones")
    assessment: str = Field(alias="analasis")
    plan: str = Field(alias="planAccion")
    attachments_json: str | None = Field(None, alias="archivosJson")


class SessionUpdate(ApiModel):
    patient_id: str | None = Field(None, alias="pacienteId")
    appointment_id: str | None = Field(None, alias="citaId")
    subjective: str | None = Field(None, alias="soapSubj")
    objective: str | None = Field(None, alias="observaciones")
    assessment: str | None = Field(None, alias="analasis")
    plan: str | None = Field(None, alias="planAccion")
    attachments_json: str | None = Field(None, alias="archivosJson")


class DashboardSummary(ApiModel):
    """Aggregate counters served by `/dashboard/summary`."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    total_patients: int | None = Field(None, alias="totalPacientes")
    appointments_today: int | None = Field(None, alias="citasHoy")
    total_sessions: int | None = Field(None, alias="totalSesiones")
    next_appointment: Any = Field(None, alias="proximaCita")
