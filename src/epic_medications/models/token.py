"""OAuth2 token response model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class AccessToken(BaseModel):
    """Bearer token returned by the vendor token endpoint.

    A plain value: the caller decides whether and for how long to reuse it.
    Only ``access_token`` is required; a JSON null in the other fields falls
    back to the default.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    access_token: str = Field(..., min_length=1, repr=False)
    token_type: str = Field(default="Bearer")
    expires_in_seconds: int = Field(default=0, alias="expires_in")
    scope: str | None = Field(default=None)

    @field_validator("token_type", "expires_in_seconds", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    def auth_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}
