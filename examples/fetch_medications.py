"""Example: exchange a signed JWT for a token and (mock-)call both medication APIs.

A throwaway RSA key is generated so the client assertion is really signed; the
HTTP session is mocked, so nothing leaves the machine.

Usage:
    python examples/fetch_medications.py
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from unittest.mock import MagicMock

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from epic_medications import ClientCredentialsConfig, EpicMedicationsClient, TokenProvider
from epic_medications.models import (
    CurrentMedicationsRequest,
    CurrentMedicationsResponse,
    Identifier,
    MedicationAdministrationRequest,
    MedicationAdministrationResponse,
)

BASE_URL = "https://fhir.epic.com/interconnect-fhir-oauth"
TOKEN_URL = f"{BASE_URL}/oauth2/token"


def _response(status_code: int, body: dict) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = json.dumps(body)
    response.headers = {"Content-Type": "application/json"}
    return response


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    print("=== Epic Medication API Demo ===\n")

    # 1. Key material and configuration
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")
    config = ClientCredentialsConfig(client_id="demo-client-id", token_endpoint=TOKEN_URL, private_key_pem=pem)

    # 2. Mocked transport: one token response, then the two API responses
    mock_session = MagicMock()
    mock_session.post.return_value = _response(
        200, {"access_token": "mock-epic-token-xyz", "token_type": "Bearer", "expires_in": 3600}
    )
    mock_session.request.side_effect = [
        _response(
            200,
            {
                "isPatientAdmitted": True,
                "medicationOrders": [
                    {
                        "ids": [{"id": "987", "type": "Internal"}],
                        "name": "lisinopril 10 mg tablet",
                        "dose": "10 mg",
                    }
                ],
            },
        ),
        _response(
            200,
            {
                "Orders": [
                    {
                        "orderID": {"id": "987", "type": "Internal"},
                        "medicationAdministrations": [
                            {
                                "action": "Given",
                                "administrationInstant": "2025-01-19T08:02:00Z",
                                "dose": {"value": "10", "unit": "mg"},
                            }
                        ],
                    }
                ]
            },
        ),
    ]

    # 3. Token exchange
    provider = TokenProvider(config, session=mock_session)
    token = provider.request_token()
    assertion = mock_session.post.call_args[1]["data"]["client_assertion"]
    print(f"Client assertion header: {jwt.get_unverified_header(assertion)}")
    print(f"Token obtained: {token.access_token[:12]}... (expires in {token.expires_in_seconds}s)\n")

    # 4. Medication calls
    client = EpicMedicationsClient(session=mock_session)
    raw = client.get_current_medications(
        BASE_URL,
        CurrentMedicationsRequest(patient_id="eD3NT2C.bpwdHdPlWePHU5w3", lookback_days=30),
        token.access_token,
    )
    for order in CurrentMedicationsResponse.from_json(raw).medication_orders or []:
        print(f"Current order: {order.name} ({order.dose})")

    raw = client.get_medication_administration_history(
        BASE_URL,
        MedicationAdministrationRequest(
            patient_id="eD3NT2C.bpwdHdPlWePHU5w3",
            contact_id="1234567",
            order_ids=[Identifier.internal("987")],
        ),
        token.access_token,
    )
    for order in MedicationAdministrationResponse.from_json(raw).orders or []:
        for event in order.medication_administrations or []:
            print(f"Order {order.order_id.id}: {event.action} {event.dose.value} {event.dose.unit}")

    print("\nMedication demo complete.")


if __name__ == "__main__":
    main()
