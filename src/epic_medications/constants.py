"""Fixed wire conventions of Epic's proprietary medication APIs."""

from __future__ import annotations

# Patient identifiers are always sent as FHIR logical ids.
PATIENT_ID_TYPE = "FHIR"

# GetCurrentMedications view format.
PROFILE_VIEW = 2

# Contact Serial Number, used when an encounter carries no explicit id type.
DEFAULT_CONTACT_TYPE = "CSN"

INTERNAL_ORDER_ID_TYPE = "Internal"

CURRENT_MEDICATIONS_PATH = "/api/epic/2014/Clinical/Patient/GETMEDICATIONSV2/GetCurrentMedications"
MEDICATION_ADMINISTRATION_HISTORY_PATH = (
    "/api/epic/2014/Clinical/Patient/MEDICATIONADMINISTRATION/GetMedicationAdministrationHistory"
)

GRANT_TYPE = "client_credentials"
CLIENT_ASSERTION_TYPE = "urn:ietf:params:oauth:client-assertion-type:jwt-bearer"
JWT_ALGORITHM = "RS384"

DEFAULT_JWT_EXPIRATION_SECONDS = 240
DEFAULT_TIMEOUT_SECONDS = 30

# Logger that receives identifiers and response bodies. DEBUG only.
PHI_LOGGER_NAME = "epic_medications.phi"
