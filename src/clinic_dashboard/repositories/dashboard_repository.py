"""Repository for the aggregate counters endpoint."""

from pydantic import TypeAdapter

from clinic_dashboard.domain.models import DashboardSummary
from clinic_dashboard.exceptions import MalformedResponseError
from clinic_dashboard.infrastructure.interfaces import ApiClient
from clinic_dashboard.repositories.base import ResourceRepository


class DashboardRepository(ResourceRepository):
    def __init__(self, api: ApiClient):
        super().__init__(api, "/dashboard/summary")

    async def summary(self) -> DashboardSummary | None:
        """
        Fetches patient/session totals.

        Returns:
            The summary, or None if the API sent no JSON body.

        Raises:
            MalformedResponseError: If the body is not a JSON object.
        """
        data = await self._api.get(self._path)
        if data is None:
            return None
        if not isinstance(data, dict):
            raise MalformedResponseError(self._path, "expected a JSON object")
        return self._decode(TypeAdapter(DashboardSummary), data)
