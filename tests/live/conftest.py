"""Skip guards for live tests.

Every live test that requires external credentials is guarded by a pytest.mark.skipif
that checks for the required environment variables. Tests skip when
credentials are absent; they never fail due to missing config.

Required environment variables:
  EPIC_AUTH_CLIENT_ID          Epic backend-services client id
  EPIC_AUTH_TOKEN_ENDPOINT     OAuth2 token URL of the Epic environment
  EPIC_AUTH_PRIVATE_KEY_PATH   RSA private key (PKCS#8 PEM) registered with Epic
  EPIC_BASE_URL                Server root, e.g. https://fhir.epic.com/interconnect-fhir-oauth
  EPIC_TEST_PATIENT_ID         FHIR id of a sandbox patient
  EPIC_TEST_CONTACT_ID         CSN of an encounter for that patient (administration tests)
  EPIC_TEST_ORDER_ID           Internal id of a medication order on that encounter

Set them in your shell before running:
  export EPIC_AUTH_CLIENT_ID=your_client_id
  pytest tests/live -v -m live
"""

from __future__ import annotations

import os

import pytest

from epic_medications import EpicClients, create_clients


def _skip_unless(*env_vars: str, reason: str | None = None):
    """Return a pytest.mark.skipif that skips when any of env_vars is not set."""
    msg = reason or f"Set {' + '.join(env_vars)} to run this test"
    return pytest.mark.skipif(not all(os.environ.get(v) for v in env_vars), reason=msg)


# Convenience marks; import these in live test files
skip_no_epic = _skip_unless(
    "EPIC_AUTH_CLIENT_ID",
    "EPIC_AUTH_TOKEN_ENDPOINT",
    "EPIC_AUTH_PRIVATE_KEY_PATH",
    "EPIC_BASE_URL",
    reason="Set EPIC_AUTH_* and EPIC_BASE_URL to run Epic sandbox tests",
)


@pytest.fixture(scope="session")
def epic_base_url() -> str:
    base_url = os.environ.get("EPIC_BASE_URL", "")
    if not base_url:
        pytest.skip("EPIC_BASE_URL not set")
    return base_url


@pytest.fixture(scope="session")
def epic_clients() -> EpicClients:
    if not os.environ.get("EPIC_AUTH_CLIENT_ID"):
        pytest.skip("EPIC_AUTH_CLIENT_ID not set")
    with create_clients() as clients:
        yield clients


@pytest.fixture(scope="session")
def epic_patient() -> dict:
    patient_id = os.environ.get("EPIC_TEST_PATIENT_ID", "")
    if not patient_id:
        pytest.skip("EPIC_TEST_PATIENT_ID not set")
    return {
        "patient_id": patient_id,
        "contact_id": os.environ.get("EPIC_TEST_CONTACT_ID", ""),
        "order_id": os.environ.get("EPIC_TEST_ORDER_ID", ""),
    }
