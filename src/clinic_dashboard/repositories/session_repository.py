"""Repository for SOAP session notes (`/Sesion`)."""

from clinic_dashboard.domain.models import Session, SessionCreate, SessionUpdate
from clinic_dashboard.infrastructure.interfaces import ApiClient
from clinic_dashboard.repositories.base import ResourceRepository


class SessionRepository(ResourceRepository):
    def __init__(self, api: ApiClient):
        super().__init__(api, "/Sesion")

    async def list_all(self) -> list[Session]:
        return await self._list(Session)

    async def create(self, session: SessionCreate) -> None:
        await self._create(session)

    async def update(self, session_id: str, changes: SessionUpdate) -> None:
        await self._update(session_id, changes)
