from .common import Identifier, MeasuredValue
from .token import AccessToken
from .request_models import (
    CurrentMedicationsRequest,
    MedicationAdministrationRequest,
    VendorApiRequest,
)
from .response_models import (
    CurrentMedicationsResponse,
    MedicationAdministration,
    MedicationAdministrationResponse,
    MedicationAdminOrder,
    MedicationOrder,
)

__all__ = [
    "AccessToken",
    "CurrentMedicationsRequest",
    "CurrentMedicationsResponse",
    "Identifier",
    "MeasuredValue",
    "MedicationAdministration",
    "MedicationAdministrationRequest",
    "MedicationAdministrationResponse",
    "MedicationAdminOrder",
    "MedicationOrder",
    "VendorApiRequest",
]
