"""Infrastructure interface exports."""

from clinic_dashboard.infrastructure.interfaces.api_client import ApiClient
from clinic_dashboard.infrastructure.interfaces.confirmation import Confirmer

__all__ = [
    "ApiClient",
    "Confirmer",
]
