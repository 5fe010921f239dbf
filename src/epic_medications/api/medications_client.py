"""Epic medication API client (GetCurrentMedications, GetMedicationAdministrationHistory).

These are Epic's proprietary JSON APIs, not FHIR. Both are POSTs against a
customer-specific server root with a bearer token from TokenProvider.
"""

from __future__ import annotations

import logging

import requests

from ..cancellation import CancelEvent
from ..config import MedicationsClientConfig
from ..constants import PHI_LOGGER_NAME
from ..errors import ArgumentError
from ..models.request_models import CurrentMedicationsRequest, MedicationAdministrationRequest
from .base_client import AuthenticatedApiClient

logger = logging.getLogger(__name__)
phi_logger = logging.getLogger(PHI_LOGGER_NAME)


class EpicMedicationsClient(AuthenticatedApiClient):
    """Client for Epic's custom medication endpoints."""

    def __init__(
        self,
        config: MedicationsClientConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._config = config or MedicationsClientConfig()
        super().__init__(session, timeout_seconds=self._config.timeout_seconds)

    @property
    def config(self) -> MedicationsClientConfig:
        return self._config

    def get_current_medications(
        self,
        base_url: str,
        body: CurrentMedicationsRequest,
        access_token: str,
        cancel_event: CancelEvent | None = None,
    ) -> str:
        """Fetch the patient's current medication orders.

        Args:
            base_url: Epic server root for the customer organisation.
            body: Patient and lookback window.
            access_token: Bearer token from TokenProvider.
            cancel_event: Optional cancellation signal.

        Returns:
            Raw JSON text; see CurrentMedicationsResponse.from_json().
        """
        if not isinstance(body, CurrentMedicationsRequest):
            raise ArgumentError("body must be a CurrentMedicationsRequest")

        logger.info("[%s] Calling Epic GetCurrentMedications", self._config.client_name)
        phi_logger.debug("GetCurrentMedications for patient %s", body.patient_id)
        return self.invoke(
            base_url,
            self._config.current_medications_path,
            body,
            access_token,
            cancel_event,
        )

    def get_medication_administration_history(
        self,
        base_url: str,
        body: MedicationAdministrationRequest,
        access_token: str,
        cancel_event: CancelEvent | None = None,
    ) -> str:
        """Fetch administration events for the given orders within one encounter.

        Args:
            base_url: Epic server root for the customer organisation.
            body: Patient, contact (encounter) and the orders of interest.
            access_token: Bearer token from TokenProvider.
            cancel_event: Optional cancellation signal.

        Returns:
            Raw JSON text; see MedicationAdministrationResponse.from_json().
        """
        if not isinstance(body, MedicationAdministrationRequest):
            raise ArgumentError("body must be a MedicationAdministrationRequest")

        logger.info(
            "[%s] Calling Epic GetMedicationAdministrationHistory with %d orders",
            self._config.client_name,
            len(body.order_ids),
        )
        phi_logger.debug(
            "GetMedicationAdministrationHistory for patient %s, contact %s",
            body.patient_id,
            body.contact_id,
        )
        return self.invoke(
            base_url,
            self._config.medication_administration_history_path,
            body,
            access_token,
            cancel_event,
        )
