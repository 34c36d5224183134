"""SOAP session list searchable by patient name."""

from clinic_dashboard.domain.models import Patient, Session
from clinic_dashboard.domain.projections import patient_full_name, search_sessions
from clinic_dashboard.infrastructure.interfaces import Confirmer
from clinic_dashboard.repositories import PatientRepository, SessionRepository
from clinic_dashboard.views.base import CollectionView, fetch_all


class SessionsView(CollectionView):
    load_error_message = "Error al cargar las sesiones."
    delete_prompt = "¿Estás seguro de que deseas eliminar esta sesión?"
    delete_error_message = "Error al eliminar la sesión"

    def __init__(self, sessions: SessionRepository, patients: PatientRepository):
        super().__init__()
        self._sessions = sessions
        self._patients = patients
        self.sessions: list[Session] = []
        self.patients: list[Patient] = []
        self.search_term = ""

    async def _load(self) -> None:
        sessions, patients = await fetch_all(
            self._sessions.list_all(),
            self._patients.list_all(),
        )
        self.sessions = sessions
        self.patients = patients

    @property
    def visible_sessions(self) -> list[Session]:
        return search_sessions(self.sessions, self.patients, self.search_term)

    def patient_name(self, session: Session) -> str:
        return patient_full_name(self.patients, session.patient_id)

    def session(self, session_id: str) -> Session | None:
        return next((s for s in self.sessions if s.id == session_id), None)

    def _remove(self, session_id: str) -> None:
        self.sessions = [s for s in self.sessions if s.id != session_id]

    async def delete(self, session_id: str, confirmer: Confirmer) -> bool:
        return await self._delete(
            self._sessions, session_id, self.delete_prompt, confirmer, self._remove
        )
