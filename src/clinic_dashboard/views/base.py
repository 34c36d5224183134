"""Shared load/delete lifecycle for collection views."""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable, Coroutine
from typing import Any

from clinic_dashboard.exceptions import API_ERRORS
from clinic_dashboard.infrastructure.interfaces import Confirmer
from clinic_dashboard.logging import setup_logging
from clinic_dashboard.repositories.base import ResourceRepository

logger = setup_logging()


async def fetch_all(*fetches: Coroutine[Any, Any, Any]) -> list[Any]:
    """
    Runs fetches concurrently and returns their results in order.

    The first failure cancels the fetches still in flight and is re-raised
    as is, so callers can catch the API errors directly.
    """
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(fetch) for fetch in fetches]
    except ExceptionGroup as failures:
        raise failures.exceptions[0]
    return [task.result() for task in tasks]


class CollectionView(ABC):
    """
    A view over one or more fetched collections.

    `reload()` is the only way collections are (re)populated: it runs once
    when the view is mounted and again after every create, update or delete.
    A failed load leaves the previous collections untouched and exposes a
    single message in `error`.
    """

    load_error_message = "Error al cargar los datos. Verifica que el servidor esté disponible."
    delete_error_message = "No se pudo eliminar el registro"

    def __init__(self):
        self.loading = False
        self.error: str | None = None

    @abstractmethod
    async def _load(self) -> None:
        """Fetches every collection the view needs and commits them together."""

    async def reload(self) -> bool:
        self.loading = True
        self.error = None
        try:
            await self._load()
            return True
        except API_ERRORS as e:
            logger.exception("View load failed", extra={"view": type(self).__name__})
            self.error = f"{self.load_error_message} Error: {e}"
            return False
        finally:
            self.loading = False

    async def _delete(
        self,
        repository: ResourceRepository,
        item_id: str,
        prompt: str,
        confirmer: Confirmer,
        remove: Callable[[str], None],
    ) -> bool:
        """
        Deletes a record after confirmation.

        The record leaves the local collection as soon as the API accepts the
        DELETE; the follow-up reload cannot bring it back if it fails.

        Returns:
            True if the record was deleted.
        """
        if not await confirmer.confirm(prompt):
            logger.info("Deletion declined", extra={"id": item_id})
            return False

        try:
            await repository.delete(item_id)
        except API_ERRORS:
            logger.exception("Deletion failed", extra={"id": item_id})
            self.error = self.delete_error_message
            return False

        remove(item_id)
        logger.info("Record deleted", extra={"id": item_id, "view": type(self).__name__})
        await self.reload()
        return True
