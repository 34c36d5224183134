"""httpx implementation of the clinic API client."""

import json
from typing import Any

import httpx

from clinic_dashboard.exceptions import (
    ApiConnectionError,
    ApiRequestError,
    MalformedResponseError,
)
from clinic_dashboard.infrastructure.interfaces import ApiClient
from clinic_dashboard.logging import setup_logging

logger = setup_logging()


class HttpApiClient(ApiClient):
    """
    Sends JSON requests to `{base_url}/api{path}`.

    One attempt per call: no retries and no timeout. The underlying
    `httpx.AsyncClient` is owned by the caller, which shares a single
    instance across the application and closes it on shutdown.
    """

    def __init__(self, client: httpx.AsyncClient, api_root: str):
        self._client = client
        self._api_root = api_root.rstrip("/")

    async def get(self, path: str) -> Any:
        return await self._request("GET", path)

    async def post(self, path: str, body: Any) -> Any:
        return await self._request("POST", path, body)

    async def put(self, path: str, body: Any) -> Any:
        return await self._request("PUT", path, body)

    async def delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    async def _request(self, method: str, path: str, body: Any = None) -> Any:
        url = f"{self._api_root}{path}"
        logger.info("API request", extra={"method": method, "url": url})

        content = json.dumps(body).encode("utf-8") if body is not None else None
        try:
            response = await self._client.request(
                method,
                url,
                content=content,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.exception(
                "API request failed", extra={"method": method, "url": url}
            )
            raise ApiConnectionError(method, path, cause=e) from e

        logger.info(
            "API response",
            extra={"method": method, "url": url, "status": response.status_code},
        )

        if not response.is_success:
            body_text = response.text or f"HTTP {response.status_code}"
            logger.error(
                "API error response",
                extra={
                    "method": method,
                    "url": url,
                    "status": response.status_code,
                    "body": body_text,
                },
            )
            raise ApiRequestError(method, path, response.status_code, body_text)

        if "application/json" not in response.headers.get("content-type", ""):
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.exception("Invalid JSON body", extra={"method": method, "url": url})
            raise MalformedResponseError(path, "invalid JSON", cause=e) from e
