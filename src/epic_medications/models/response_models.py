"""Read-only reflections of Epic medication API responses.

The vendor guarantees nothing about which fields are present, so every field
is optional. Unknown fields are ignored. The API client returns raw text;
these models are for callers that want to parse it afterwards.
"""

from __future__ import annotations

from datetime import datetime
from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from .common import Identifier, MeasuredValue


class _VendorResponse(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @classmethod
    def from_json(cls, text: str | bytes) -> Self:
        """Parse a raw response body."""
        return cls.model_validate_json(text)


class MedicationOrder(_VendorResponse):
    ids: list[Identifier] | None = None
    name: str | None = None
    start_date_time: datetime | None = Field(default=None, alias="startDateTime")
    end_date_time: datetime | None = Field(default=None, alias="endDateTime")
    discontinue_instant: datetime | None = Field(default=None, alias="discontinueInstant")
    is_long_term: bool | None = Field(default=None, alias="isLongTerm")
    is_mixture: bool | None = Field(default=None, alias="isMixture")
    is_suspended: bool | None = Field(default=None, alias="isSuspended")
    dose: str | None = None
    ordered_dose: str | None = Field(default=None, alias="orderedDose")
    order_mode: str | None = Field(default=None, alias="orderMode")


class CurrentMedicationsResponse(_VendorResponse):
    """Response of GetCurrentMedications."""

    has_problem_loading_orders: bool | None = Field(default=None, alias="hasProblemLoadingOrders")
    problem_loading_orders_information: str | None = Field(
        default=None, alias="problemLoadingOrdersInformation"
    )
    include_discontinued_and_ended_orders_from_date: str | None = Field(
        default=None, alias="includeDiscontinuedAndEndedOrdersFromDate"
    )
    include_discontinued_and_ended_orders_to_date: str | None = Field(
        default=None, alias="includeDiscontinuedAndEndedOrdersToDate"
    )
    is_patient_admitted: bool | None = Field(default=None, alias="isPatientAdmitted")
    medication_orders: list[MedicationOrder] | None = Field(default=None, alias="medicationOrders")


class MedicationAdministration(_VendorResponse):
    """One administration event (given, held, rate change...) for an order."""

    action: str | None = None
    administration_instant: datetime | None = Field(default=None, alias="administrationInstant")
    dose: MeasuredValue | None = None
    rate: MeasuredValue | None = None
    mapped_action: str | None = Field(default=None, alias="mappedAction")
    linked_override_order_ids: list[Identifier] | None = Field(
        default=None, alias="linkedOverrideOrderID"
    )


class MedicationAdminOrder(_VendorResponse):
    order_id: Identifier | None = Field(default=None, alias="orderID")
    name: str | None = None
    is_active: bool | None = Field(default=None, alias="isActive")
    is_infusion: bool | None = Field(default=None, alias="isInfusion")
    is_mixture: bool | None = Field(default=None, alias="isMixture")
    linked_order_ids: list[Identifier] | None = Field(default=None, alias="linkedOrderIDs")
    linked_order_type: str | None = Field(default=None, alias="linkedOrderType")
    medication_administrations: list[MedicationAdministration] | None = Field(
        default=None, alias="medicationAdministrations"
    )


class MedicationAdministrationResponse(_VendorResponse):
    """Response of GetMedicationAdministrationHistory."""

    orders: list[MedicationAdminOrder] | None = Field(default=None, alias="Orders")
