"""Abstract interface for confirming destructive actions."""

from abc import ABC, abstractmethod


class Confirmer(ABC):
    """Asks the practitioner to confirm before something is deleted."""

    @abstractmethod
    async def confirm(self, prompt: str) -> bool:
        """
        Presents a confirmation prompt.

        Args:
            prompt: The question shown to the practitioner.

        Returns:
            True if the action may proceed.
        """
