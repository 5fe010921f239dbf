"""Small value types shared by request and response payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..constants import INTERNAL_ORDER_ID_TYPE


class Identifier(BaseModel):
    """A typed reference such as ``{"id": "123", "type": "Internal"}``."""

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(default=None, description="Identifier value")
    type: str | None = Field(default=None, description="Identifier type, e.g. Internal, CSN, FHIR")

    @classmethod
    def internal(cls, order_id: str) -> "Identifier":
        """Reference an order by its internal Epic id."""
        return cls(id=order_id, type=INTERNAL_ORDER_ID_TYPE)


class MeasuredValue(BaseModel):
    """A dose or rate. ``value`` stays a string exactly as the vendor sent it."""

    model_config = ConfigDict(frozen=True)

    value: str | None = Field(default=None, description="Numeric value, string-encoded")
    unit: str | None = Field(default=None, description="Unit of measure, e.g. mg, mL/hr")
