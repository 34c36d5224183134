"""Shared response decoding for the resource repositories."""

from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from clinic_dashboard.exceptions import MalformedResponseError
from clinic_dashboard.infrastructure.interfaces import ApiClient
from clinic_dashboard.logging import setup_logging

logger = setup_logging()

ModelT = TypeVar("ModelT", bound=BaseModel)


class ResourceRepository:
    """
    Base for repositories over one REST collection.

    Encapsulates endpoint paths and response validation, keeping views free
    of HTTP concerns.
    """

    def __init__(self, api: ApiClient, path: str):
        self._api = api
        self._path = path

    def _item_path(self, item_id: str) -> str:
        return f"{self._path}/{item_id}"

    async def _list(self, model: type[ModelT]) -> list[ModelT]:
        """
        Fetches the whole collection.

        A response without a JSON body counts as an empty collection.

        Raises:
            MalformedResponseError: If the body is not a list of `model`.
        """
        data = await self._api.get(self._path)
        if data is None:
            return []
        if not isinstance(data, list):
            raise MalformedResponseError(self._path, "expected a JSON array")
        return self._decode(TypeAdapter(list[model]), data)

    def _decode(self, adapter: TypeAdapter, data: Any) -> Any:
        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            logger.exception("Response failed validation", extra={"path": self._path})
            raise MalformedResponseError(self._path, str(e), cause=e) from e

    async def _create(self, payload: BaseModel) -> Any:
        return await self._api.post(self._path, payload.model_dump(mode="json", by_alias=True))

    async def _update(self, item_id: str, payload: BaseModel) -> Any:
        return await self._api.put(
            self._item_path(item_id),
            payload.model_dump(mode="json", by_alias=True, exclude_unset=True),
        )

    async def delete(self, item_id: str) -> None:
        await self._api.delete(self._item_path(item_id))
