from .base_client import AuthenticatedApiClient, compose_url
from .medications_client import EpicMedicationsClient

__all__ = ["AuthenticatedApiClient", "EpicMedicationsClient", "compose_url"]
