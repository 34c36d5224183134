"""Response models for the dashboard HTTP surface."""

from datetime import date, datetime

from pydantic import BaseModel

from clinic_dashboard.domain.attachments import Attachment
from clinic_dashboard.domain.projections import StatsCard
from clinic_dashboard.dialogs.session_dialog import SoapSection


class UpcomingAppointmentRow(BaseModel):
    """One line of the dashboard's next-appointments widget."""

    id: str
    patient_name: str
    starts_at: datetime
    when: str
    mode_label: str
    status_label: str


class DashboardResponse(BaseModel):
    stats: list[StatsCard]
    upcoming: list[UpcomingAppointmentRow]
    upcoming_error: str | None = None


class PatientRow(BaseModel):
    id: str
    full_name: str
    email: str
    phone: str
    emergency_contact: str
    birth_date: str
    tags: list[str]


class PatientListResponse(BaseModel):
    """Patients matching the search term, plus any reload error."""

    total: int
    patients: list[PatientRow]
    error: str | None = None


class PatientOption(BaseModel):
    id: str
    name: str


class AppointmentRow(BaseModel):
    id: str
    patient_id: str
    patient_name: str
    starts_at: datetime
    ends_at: datetime
    time_range: str
    mode: int
    mode_label: str
    status: int
    status_label: str
    location: str | None
    notes: str | None


class AgendaDay(BaseModel):
    day: date
    heading: str
    appointments: list[AppointmentRow]


class AgendaResponse(BaseModel):
    """Filtered schedule grouped by day, with the patient filter options."""

    total: int
    days: list[AgendaDay]
    patients: list[PatientOption]
    error: str | None = None


class SessionCard(BaseModel):
    id: str
    patient_id: str
    patient_name: str
    appointment_id: str | None
    subjective: str | None
    objective: str | None
    attachment_count: int


class SessionListResponse(BaseModel):
    total: int
    sessions: list[SessionCard]
    error: str | None = None


class SessionDetailResponse(BaseModel):
    """Full SOAP note with its attachments."""

    id: str
    title: str
    patient_name: str
    appointment_id: str | None
    sections: list[SoapSection]
    attachments: list[Attachment]
