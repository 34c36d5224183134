"""View exports."""

from clinic_dashboard.views.agenda_view import AgendaView
from clinic_dashboard.views.dashboard_view import DashboardView
from clinic_dashboard.views.patients_view import PatientsView
from clinic_dashboard.views.sessions_view import SessionsView

__all__ = [
    "AgendaView",
    "DashboardView",
    "PatientsView",
    "SessionsView",
]
