"""Shared pytest fixtures, mock factories, and test markers.

Test tiers
----------
  unit        Fast, fully offline. MagicMock sessions stand in for the
              transport, so every network call can be counted.

  integration requests-mock transport. Exercises the token exchange and
              the medication calls end to end without a network.

  quality     Property-based tests (Hypothesis) over URL composition, JWT
              claims and wire serialization.

  live        Real Epic sandbox calls. Skipped unless the required
              environment variables are set. See tests/live/conftest.py.

Run specific tiers:
  pytest tests/unit tests/integration tests/quality   # offline only
  pytest tests/live -m live                           # live only
  pytest tests/ -v                                    # everything
"""

from __future__ import annotations

import json
from collections.abc import Callable
from unittest.mock import MagicMock

import pytest
import requests
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from epic_medications.config import ClientCredentialsConfig
from epic_medications.models import CurrentMedicationsRequest, Identifier, MedicationAdministrationRequest

CLIENT_ID = "test-client-id"
TOKEN_ENDPOINT = "https://fhir.epic.test/interconnect-fhir-oauth/oauth2/token"
BASE_URL = "https://fhir.epic.test/interconnect-fhir-oauth"


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------

def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast offline unit tests")
    config.addinivalue_line("markers", "integration: mock-based integration tests")
    config.addinivalue_line("markers", "quality: property-based tests")
    config.addinivalue_line("markers", "live: requires real credentials (skipped by default)")


# ---------------------------------------------------------------------------
# Key material: real RSA keys, generated once per test session
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_public_key(rsa_private_key: rsa.RSAPrivateKey) -> rsa.RSAPublicKey:
    return rsa_private_key.public_key()


@pytest.fixture(scope="session")
def private_key_pem(rsa_private_key: rsa.RSAPrivateKey) -> str:
    """PKCS#8, PEM-armored, unencrypted."""
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture(scope="session")
def credentials_config(private_key_pem: str) -> ClientCredentialsConfig:
    return ClientCredentialsConfig(
        client_id=CLIENT_ID,
        token_endpoint=TOKEN_ENDPOINT,
        private_key_pem=private_key_pem,
    )


@pytest.fixture
def auth_environ(private_key_pem: str) -> dict[str, str]:
    """EPIC_AUTH_* variables for a complete credentials config."""
    return {
        "EPIC_AUTH_CLIENT_ID": CLIENT_ID,
        "EPIC_AUTH_TOKEN_ENDPOINT": TOKEN_ENDPOINT,
        "EPIC_AUTH_PRIVATE_KEY": private_key_pem,
    }


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------

@pytest.fixture
def current_medications_request() -> CurrentMedicationsRequest:
    return CurrentMedicationsRequest(patient_id="eD3NT2C.bpwdHdPlWePHU5w3", lookback_days=30)


@pytest.fixture
def administration_request() -> MedicationAdministrationRequest:
    return MedicationAdministrationRequest(
        patient_id="eD3NT2C.bpwdHdPlWePHU5w3",
        contact_id="1234567",
        order_ids=[Identifier.internal("987"), Identifier.internal("654")],
    )


# ---------------------------------------------------------------------------
# Transport mocks
# ---------------------------------------------------------------------------

def _make_response(
    status_code: int = 200,
    text: str = "",
    headers: dict[str, str] | None = None,
) -> MagicMock:
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.text = text
    response.headers = headers or {}
    return response


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """Factory for MagicMock responses with status, text and headers set."""
    return _make_response


@pytest.fixture
def token_payload() -> dict:
    return {
        "access_token": "epic-test-token",
        "token_type": "Bearer",
        "expires_in": 3600,
        "scope": "system/Patient.read",
    }


@pytest.fixture
def mock_token_session(token_payload: dict) -> MagicMock:
    """A session whose POST always answers with a valid token payload."""
    session = MagicMock(spec=requests.Session)
    session.post.return_value = _make_response(200, json.dumps(token_payload))
    return session


@pytest.fixture
def mock_api_session() -> MagicMock:
    """A session whose request() answers 200 with an empty medication list."""
    session = MagicMock(spec=requests.Session)
    session.request.return_value = _make_response(
        200, '{"medicationOrders":[]}', {"Content-Type": "application/json"}
    )
    return session
