"""Wire a TokenProvider and an EpicMedicationsClient onto one shared session."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping

import requests

from .api.medications_client import EpicMedicationsClient
from .auth.token_provider import TokenProvider
from .config import client_credentials_from_env, medications_config_from_env


@dataclasses.dataclass
class EpicClients:
    """The token provider and medications client, sharing ``session``."""

    token_provider: TokenProvider
    medications: EpicMedicationsClient
    session: requests.Session
    owns_session: bool

    def close(self) -> None:
        self.token_provider.close()
        self.medications.close()
        if self.owns_session:
            self.session.close()

    def __enter__(self) -> "EpicClients":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def create_clients(
    session: requests.Session | None = None,
    environ: Mapping[str, str] | None = None,
) -> EpicClients:
    """Build both clients from environment configuration.

    Args:
        session: Transport to share. When omitted a new session is created
            and closed by EpicClients.close(); a supplied one is left open.
        environ: Mapping to read settings from instead of ``os.environ``.

    Raises:
        ConfigurationError: Settings are missing or invalid.
    """
    credentials = client_credentials_from_env(environ)
    medications_config = medications_config_from_env(environ)

    owns_session = session is None
    session = session or requests.Session()
    return EpicClients(
        token_provider=TokenProvider(credentials, session=session),
        medications=EpicMedicationsClient(medications_config, session=session),
        session=session,
        owns_session=owns_session,
    )
