"""Infrastructure layer exports."""

from clinic_dashboard.infrastructure.confirmation import PresetConfirmer
from clinic_dashboard.infrastructure.http_api_client import HttpApiClient

__all__ = [
    "HttpApiClient",
    "PresetConfirmer",
]
