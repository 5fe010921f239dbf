"""Request bodies for Epic's medication APIs.

Field names are Pythonic; the vendor's wire names are declared as aliases and
used by ``to_wire_json()``. Optional fields left unset are omitted from the
serialized body.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ..constants import DEFAULT_CONTACT_TYPE, PATIENT_ID_TYPE, PROFILE_VIEW
from .common import Identifier


def _require_text(value: str | None, field_name: str) -> str | None:
    if value is not None and not value.strip():
        raise ValueError(f"{field_name} must not be blank")
    return value


class VendorApiRequest(BaseModel):
    """Base for immutable, validated vendor request bodies."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    def to_wire(self) -> dict[str, Any]:
        """Return the body as a JSON-ready dict keyed by wire names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_wire_json(self) -> str:
        """Serialize the body to JSON text keyed by wire names."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class CurrentMedicationsRequest(VendorApiRequest):
    """Body of GetCurrentMedications."""

    patient_id: str = Field(..., alias="patientID", min_length=1)
    patient_id_type: str = Field(default=PATIENT_ID_TYPE, alias="patientIDType", min_length=1)
    user_id: str | None = Field(default=None, alias="userID", min_length=1)
    user_id_type: str | None = Field(default=None, alias="userIDType", min_length=1)
    profile_view: int = Field(default=PROFILE_VIEW, alias="profileView")
    lookback_days: int = Field(
        ...,
        alias="numberDaysToIncludeDiscontinuedAndEndedOrders",
        ge=0,
        description="Days back to include discontinued and ended orders",
    )

    @field_validator("patient_id", "patient_id_type", "user_id", "user_id_type")
    @classmethod
    def _not_blank(cls, value: str | None, info: ValidationInfo) -> str | None:
        return _require_text(value, info.field_name)


class MedicationAdministrationRequest(VendorApiRequest):
    """Body of GetMedicationAdministrationHistory."""

    patient_id: str = Field(..., alias="patientID", min_length=1)
    patient_id_type: str = Field(default=PATIENT_ID_TYPE, alias="patientIDType", min_length=1)
    contact_id: str = Field(..., alias="contactID", min_length=1)
    contact_id_type: str = Field(default=DEFAULT_CONTACT_TYPE, alias="contactIDType", min_length=1)
    order_ids: tuple[Identifier, ...] = Field(..., alias="orderIDs", min_length=1)

    @field_validator("patient_id", "patient_id_type", "contact_id", "contact_id_type")
    @classmethod
    def _not_blank(cls, value: str, info: ValidationInfo) -> str:
        return _require_text(value, info.field_name)

    @field_validator("order_ids")
    @classmethod
    def _orders_complete(cls, value: tuple[Identifier, ...]) -> tuple[Identifier, ...]:
        for position, order_id in enumerate(value):
            if not order_id.id or not order_id.type:
                raise ValueError(f"order_ids[{position}] needs both id and type")
        return value
