"""New SOAP session dialog and the session detail dialog."""

from pydantic import BaseModel

from clinic_dashboard.dialogs.base import FormDialog, SuccessCallback
from clinic_dashboard.domain.attachments import Attachment
from clinic_dashboard.domain.forms import SessionForm, SoapNoteForm
from clinic_dashboard.domain.models import Session
from clinic_dashboard.exceptions import API_ERRORS
from clinic_dashboard.logging import setup_logging
from clinic_dashboard.repositories import SessionRepository

logger = setup_logging()

EMPTY_SECTION = "Sin información"


class SessionDialog(FormDialog):
    failure_message = "Error al crear la sesión"

    def __init__(self, repository: SessionRepository, on_success: SuccessCallback):
        self._repository = repository
        super().__init__(on_success)

    def _initial_draft(self) -> SessionForm:
        return SessionForm()

    def _validate(self) -> None:
        self.draft.validate_draft()

    async def _send(self) -> None:
        await self._repository.create(self.draft.to_create())


class SoapSection(BaseModel):
    key: str
    title: str
    text: str


_SECTIONS = (
    ("S", "Subjetivo", "subjective"),
    ("O", "Objetivo", "objective"),
    ("A", "Análisis", "assessment"),
    ("P", "Plan", "plan"),
)


class SessionDetailDialog:
    """
    Shows a session's SOAP note and attachments, with an edit mode.

    Saving sends only the SOAP fields (plus the patient id) and then awaits
    `on_refresh` so the sessions view reloads.
    """

    def __init__(
        self,
        repository: SessionRepository,
        session: Session,
        patient_name: str,
        on_refresh: SuccessCallback,
    ):
        self._repository = repository
        self._on_refresh = on_refresh
        self.session = session
        self.patient_name = patient_name
        self.is_editing = False
        self.loading = False
        self.error: str | None = None
        self.draft = SoapNoteForm.from_session(session)
        self.attachments: list[Attachment] = session.attachments

    @property
    def title(self) -> str:
        return f"Sesión de {self.patient_name}"

    @property
    def sections(self) -> list[SoapSection]:
        return [
            SoapSection(
                key=key,
                title=title,
                text=getattr(self.draft, attribute) or EMPTY_SECTION,
            )
            for key, title, attribute in _SECTIONS
        ]

    def start_editing(self) -> None:
        self.is_editing = True

    def cancel_editing(self) -> None:
        self.draft = SoapNoteForm.from_session(self.session)
        self.is_editing = False

    async def save(self) -> bool:
        self.error = None
        self.loading = True
        try:
            await self._repository.update(self.session.id, self.draft.to_update(self.session))
        except API_ERRORS:
            logger.exception("Error updating session", extra={"session_id": self.session.id})
            self.error = "Error al actualizar la sesión"
            return False
        finally:
            self.loading = False

        self.is_editing = False
        await self._on_refresh()
        return True
