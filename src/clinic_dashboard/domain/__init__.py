"""Domain layer exports."""

from clinic_dashboard.domain.attachments import (
    Attachment,
    AttachmentInput,
    FileAttachmentInput,
    UrlAttachmentInput,
    parse_attachment_input,
)
from clinic_dashboard.domain.enums import AppointmentMode, AppointmentStatus
from clinic_dashboard.domain.forms import (
    AppointmentForm,
    PatientForm,
    SessionForm,
    SoapNoteForm,
)
from clinic_dashboard.domain.models import (
    Appointment,
    AppointmentCreate,
    AppointmentUpdate,
    DashboardSummary,
    Patient,
    PatientCreate,
    PatientUpdate,
    Session,
    SessionCreate,
    SessionUpdate,
)
from clinic_dashboard.domain.projections import (
    AppointmentFilter,
    DayGroup,
    StatsCard,
)

__all__ = [
    "Appointment",
    "AppointmentCreate",
    "AppointmentFilter",
    "AppointmentForm",
    "AppointmentMode",
    "AppointmentStatus",
    "AppointmentUpdate",
    "Attachment",
    "AttachmentInput",
    "DashboardSummary",
    "DayGroup",
    "FileAttachmentInput",
    "Patient",
    "PatientCreate",
    "PatientForm",
    "PatientUpdate",
    "Session",
    "SessionCreate",
    "SessionForm",
    "SessionUpdate",
    "SoapNoteForm",
    "StatsCard",
    "UrlAttachmentInput",
    "parse_attachment_input",
]
