"""Repository exports."""

from clinic_dashboard.repositories.appointment_repository import AppointmentRepository
from clinic_dashboard.repositories.dashboard_repository import DashboardRepository
from clinic_dashboard.repositories.patient_repository import PatientRepository
from clinic_dashboard.repositories.session_repository import SessionRepository

__all__ = [
    "AppointmentRepository",
    "DashboardRepository",
    "PatientRepository",
    "SessionRepository",
]
