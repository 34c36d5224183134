"""Submit lifecycle shared by the create/edit dialogs."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

from clinic_dashboard.exceptions import API_ERRORS, FormValidationError
from clinic_dashboard.logging import setup_logging

logger = setup_logging()

SuccessCallback = Callable[[], Awaitable[Any]]


class FormDialog(ABC):
    """
    A dialog holding a draft that is validated and submitted to the API.

    On success the draft is reset, the dialog closes and `on_success` is
    awaited (the parent view's reload). On failure the dialog stays open and
    `error` holds the message shown to the practitioner.
    """

    failure_message = "Error al guardar"

    def __init__(self, on_success: SuccessCallback):
        self._on_success = on_success
        self.is_open = False
        self.loading = False
        self.last_error: Exception | None = None
        self.draft = self._initial_draft()

    @property
    def error(self) -> str | None:
        if self.last_error is None:
            return None
        if isinstance(self.last_error, FormValidationError):
            return self.last_error.message
        return self.failure_message

    def open(self) -> None:
        self.last_error = None
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    @abstractmethod
    def _initial_draft(self) -> Any:
        """Returns a fresh draft, pre-populated from the edited entity if any."""

    @abstractmethod
    def _validate(self) -> None:
        """Raises FormValidationError if the draft cannot be submitted."""

    @abstractmethod
    async def _send(self) -> None:
        """Sends the draft to the API."""

    async def submit(self) -> bool:
        """
        Validates and sends the draft.

        Returns:
            True if the API accepted it and the parent view was reloaded.
        """
        self.last_error = None
        try:
            self._validate()
        except FormValidationError as e:
            logger.info(
                "Form rejected",
                extra={"dialog": type(self).__name__, "field": e.field},
            )
            self.last_error = e
            return False

        self.loading = True
        try:
            await self._send()
        except API_ERRORS as e:
            logger.exception("Form submission failed", extra={"dialog": type(self).__name__})
            self.last_error = e
            return False
        finally:
            self.loading = False

        self.draft = self._initial_draft()
        self.close()
        await self._on_success()
        return True
