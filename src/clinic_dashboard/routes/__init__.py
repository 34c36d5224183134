"""HTTP routers."""

from clinic_dashboard.routes.agenda import router as agenda_router
from clinic_dashboard.routes.dashboard import router as dashboard_router
from clinic_dashboard.routes.patients import router as patients_router
from clinic_dashboard.routes.sessions import router as sessions_router

__all__ = [
    "agenda_router",
    "dashboard_router",
    "patients_router",
    "sessions_router",
]
