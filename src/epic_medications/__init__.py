"""Epic OAuth2 (JWT-bearer) token exchange and medication API client."""

import logging

from .api import AuthenticatedApiClient, EpicMedicationsClient, compose_url
from .auth import TokenProvider
from .config import (
    ClientCredentialsConfig,
    MedicationsClientConfig,
    client_credentials_from_env,
    load_client_credentials,
    load_medications_config,
    medications_config_from_env,
)
from .errors import (
    ApiError,
    ArgumentError,
    AuthenticationError,
    CancellationError,
    ConfigurationError,
    EmptyResponseError,
    EpicClientError,
    ResponseParseError,
)
from .factory import EpicClients, create_clients

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ApiError",
    "ArgumentError",
    "AuthenticatedApiClient",
    "AuthenticationError",
    "CancellationError",
    "ClientCredentialsConfig",
    "ConfigurationError",
    "EmptyResponseError",
    "EpicClientError",
    "EpicClients",
    "EpicMedicationsClient",
    "MedicationsClientConfig",
    "ResponseParseError",
    "TokenProvider",
    "client_credentials_from_env",
    "compose_url",
    "create_clients",
    "load_client_credentials",
    "load_medications_config",
    "medications_config_from_env",
]
