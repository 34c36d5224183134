"""Dialog exports."""

from clinic_dashboard.dialogs.appointment_dialog import AppointmentDialog
from clinic_dashboard.dialogs.patient_dialog import PatientDialog
from clinic_dashboard.dialogs.session_dialog import SessionDetailDialog, SessionDialog

__all__ = [
    "AppointmentDialog",
    "PatientDialog",
    "SessionDetailDialog",
    "SessionDialog",
]
