"""Abstract interface for the clinic REST API."""

from abc import ABC, abstractmethod
from typing import Any


class ApiClient(ABC):
    """Abstract base class for JSON request/response transports."""

    @abstractmethod
    async def get(self, path: str) -> Any:
        """
        Issues a GET request.

        Args:
            path: Endpoint path below `/api`, e.g. `/Pacientes`.

        Returns:
            The decoded JSON body, or None if the response is not JSON.

        Raises:
            ApiConnectionError: If the host cannot be reached.
            ApiRequestError: If the API answers with a non-success status.
            MalformedResponseError: If a JSON body cannot be decoded.
        """

    @abstractmethod
    async def post(self, path: str, body: Any) -> Any:
        """Issues a POST request with `body` serialized as JSON."""

    @abstractmethod
    async def put(self, path: str, body: Any) -> Any:
        """Issues a PUT request with `body` serialized as JSON."""

    @abstractmethod
    async def delete(self, path: str) -> Any:
        """Issues a DELETE request."""
