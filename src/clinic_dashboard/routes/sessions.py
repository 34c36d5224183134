"""SOAP session endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from clinic_dashboard.dependencies import PatientRepositoryDep, SessionRepositoryDep
from clinic_dashboard.dialogs import SessionDetailDialog, SessionDialog
from clinic_dashboard.domain.attachments import parse_attachment_input
from clinic_dashboard.domain.forms import SessionForm, SoapNoteForm
from clinic_dashboard.domain.models import Session
from clinic_dashboard.exceptions import InvalidAttachmentError
from clinic_dashboard.infrastructure import PresetConfirmer
from clinic_dashboard.logging import setup_logging
from clinic_dashboard.response_models import (
    SessionCard,
    SessionDetailResponse,
    SessionListResponse,
)
from clinic_dashboard.routes.errors import (
    mount,
    raise_delete_failed,
    raise_not_found,
    raise_unconfirmed,
    submit,
)
from clinic_dashboard.views import SessionsView

logger = setup_logging()

router = APIRouter(prefix="/sessions", tags=["sessions"])


class NewSessionRequest(BaseModel):
    """New session draft; attachments are raw URLs or file paths."""

    patient_id: str = ""
    appointment_id: str = ""
    subjective: str = ""
    objective: str = ""
    assessment: str = ""
    plan: str = ""
    attachments: list[str] = Field(default_factory=list)


def _get_view(
    sessions: SessionRepositoryDep, patients: PatientRepositoryDep
) -> SessionsView:
    """Dependency that creates a sessions view over injected repositories."""
    return SessionsView(sessions, patients)


SessionsViewDep = Annotated[SessionsView, Depends(_get_view)]


def _card(view: SessionsView, session: Session) -> SessionCard:
    return SessionCard(
        id=session.id,
        patient_id=session.patient_id,
        patient_name=view.patient_name(session),
        appointment_id=session.appointment_id,
        subjective=session.subjective,
        objective=session.objective,
        attachment_count=len(session.attachments),
    )


def _listing(view: SessionsView) -> SessionListResponse:
    visible = view.visible_sessions
    return SessionListResponse(
        total=len(visible),
        sessions=[_card(view, s) for s in visible],
        error=view.error,
    )


def _detail(dialog: SessionDetailDialog) -> SessionDetailResponse:
    return SessionDetailResponse(
        id=dialog.session.id,
        title=dialog.title,
        patient_name=dialog.patient_name,
        appointment_id=dialog.session.appointment_id,
        sections=dialog.sections,
        attachments=dialog.attachments,
    )


async def _find(view: SessionsView, session_id: str) -> Session:
    await mount(view)
    session = view.session(session_id)
    if session is None:
        raise_not_found("Sesión")
    return session


@router.get("", response_model=SessionListResponse)
async def list_sessions(view: SessionsViewDep, search: str = ""):
    """Returns the sessions whose patient name matches `search`."""
    view.search_term = search
    await mount(view)
    return _listing(view)


@router.post("", response_model=SessionListResponse, status_code=201)
async def create_session(
    request: NewSessionRequest,
    view: SessionsViewDep,
    repository: SessionRepositoryDep,
):
    """Records a new SOAP session and returns the reloaded list."""
    dialog = SessionDialog(repository, on_success=view.reload)
    dialog.open()
    dialog.draft = SessionForm(
        patient_id=request.patient_id,
        appointment_id=request.appointment_id,
        subjective=request.subjective,
        objective=request.objective,
        assessment=request.assessment,
        plan=request.plan,
    )
    try:
        for raw in request.attachments:
            dialog.draft.add_attachment(parse_attachment_input(raw))
    except InvalidAttachmentError as e:
        raise HTTPException(status_code=422, detail=e.message) from e

    await submit(dialog)
    logger.info(
        "Session created",
        extra={
            "patient_id": request.patient_id,
            "attachments": len(request.attachments),
        },
    )
    return _listing(view)


@router.get("/{session_id}", response_model=SessionDetailResponse)
async def get_session(
    session_id: str, view: SessionsViewDep, repository: SessionRepositoryDep
):
    """Returns a session's SOAP sections and attachments."""
    session = await _find(view, session_id)
    dialog = SessionDetailDialog(
        repository, session, view.patient_name(session), on_refresh=view.reload
    )
    return _detail(dialog)


@router.put("/{session_id}", response_model=SessionDetailResponse)
async def update_session(
    session_id: str,
    form: SoapNoteForm,
    view: SessionsViewDep,
    repository: SessionRepositoryDep,
):
    """Saves edited SOAP fields; the rest of the session is left as is."""
    session = await _find(view, session_id)
    dialog = SessionDetailDialog(
        repository, session, view.patient_name(session), on_refresh=view.reload
    )
    dialog.start_editing()
    dialog.draft = form
    if not await dialog.save():
        raise HTTPException(status_code=502, detail=dialog.error)

    refreshed = None if view.error else view.session(session_id)
    if refreshed is not None:
        dialog.session = refreshed
        dialog.cancel_editing()
    return _detail(dialog)


@router.delete("/{session_id}", response_model=SessionListResponse)
async def delete_session(session_id: str, view: SessionsViewDep, confirm: bool = False):
    """Deletes a session once the practitioner has confirmed."""
    await _find(view, session_id)
    if not await view.delete(session_id, PresetConfirmer(confirm)):
        if not confirm:
            raise_unconfirmed()
        raise_delete_failed(view)
    return _listing(view)
