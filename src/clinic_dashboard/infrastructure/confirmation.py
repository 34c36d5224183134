"""Confirmer implementations."""

from clinic_dashboard.infrastructure.interfaces import Confirmer
from clinic_dashboard.logging import setup_logging

logger = setup_logging()


class PresetConfirmer(Confirmer):
    """
    Answers with a decision the practitioner already made.

    The HTTP surface collects the confirmation up front (a `confirm` query
    flag set by the front end after showing the prompt), so the answer is
    known before the view asks.
    """

    def __init__(self, answer: bool):
        self._answer = answer

    async def confirm(self, prompt: str) -> bool:
        logger.info("Deletion confirmation", extra={"prompt": prompt, "answer": self._answer})
        return self._answer
