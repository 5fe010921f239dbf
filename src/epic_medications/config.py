"""Client configuration and the loaders that build it.

Settings are frozen pydantic models. Invalid values raise ConfigurationError
whether a model is constructed directly or built by a loader. The loaders
accept a flat mapping (or read the process environment) and also turn file
problems into ConfigurationError.

Environment variables (default prefixes):
  EPIC_AUTH_CLIENT_ID               Epic client id, used as JWT iss and sub
  EPIC_AUTH_TOKEN_ENDPOINT          OAuth2 token URL, used as JWT aud
  EPIC_AUTH_PRIVATE_KEY             PEM key text, or
  EPIC_AUTH_PRIVATE_KEY_PATH        path to a PEM file (PKCS#8 or PKCS#1)
  EPIC_AUTH_JWT_EXPIRATION_SECONDS  optional, 1-3600, default 240
  EPIC_AUTH_TIMEOUT_SECONDS         optional, 1-300, default 30

  EPIC_MEDICATIONS_CLIENT_NAME
  EPIC_MEDICATIONS_CURRENT_MEDICATIONS_PATH
  EPIC_MEDICATIONS_MEDICATION_ADMINISTRATION_HISTORY_PATH
  EPIC_MEDICATIONS_TIMEOUT_SECONDS
"""

from __future__ import annotations

import os
import urllib.parse
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import (
    CURRENT_MEDICATIONS_PATH,
    DEFAULT_JWT_EXPIRATION_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    MEDICATION_ADMINISTRATION_HISTORY_PATH,
)
from .errors import ConfigurationError


class _Settings(BaseModel):
    """Frozen settings whose validation failures raise ConfigurationError."""

    model_config = ConfigDict(frozen=True)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise _configuration_error(type(self), exc) from exc


class ClientCredentialsConfig(_Settings):
    """Identity and key material for the JWT-bearer client-credentials grant."""

    client_id: str = Field(..., min_length=1)
    token_endpoint: str = Field(..., min_length=1)
    private_key_pem: str = Field(..., min_length=1, repr=False)
    jwt_expiration_seconds: int = Field(default=DEFAULT_JWT_EXPIRATION_SECONDS, ge=1, le=3600)
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, ge=1, le=300)

    @field_validator("client_id", "private_key_pem")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("token_endpoint")
    @classmethod
    def _absolute_url(cls, value: str) -> str:
        parsed = urllib.parse.urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("must be an absolute http(s) URL")
        return value


class MedicationsClientConfig(_Settings):
    """Relative endpoint paths and transport settings for the medication APIs."""

    client_name: str = Field(default="EpicClient", min_length=1)
    current_medications_path: str = Field(default=CURRENT_MEDICATIONS_PATH, min_length=1)
    medication_administration_history_path: str = Field(
        default=MEDICATION_ADMINISTRATION_HISTORY_PATH, min_length=1
    )
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, ge=1, le=300)


def load_client_credentials(settings: Mapping[str, str | None]) -> ClientCredentialsConfig:
    """Build a ClientCredentialsConfig from a flat mapping.

    Args:
        settings: Keys ``client_id``, ``token_endpoint``, ``private_key`` or
            ``private_key_path``, and optionally ``jwt_expiration_seconds`` and
            ``timeout_seconds``. Empty values count as missing.

    Returns:
        The validated configuration.

    Raises:
        ConfigurationError: A required value is missing, unreadable or invalid.
    """
    values = {key: value for key, value in settings.items() if value not in (None, "")}

    private_key = values.pop("private_key", None)
    key_path = values.pop("private_key_path", None)
    if private_key is None and key_path is not None:
        try:
            private_key = Path(key_path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(f"Cannot read private key file {key_path}: {exc}") from exc
    if private_key is None:
        raise ConfigurationError("Provide private_key or private_key_path")
    values["private_key_pem"] = private_key

    return _validate(ClientCredentialsConfig, values)


def load_medications_config(settings: Mapping[str, str | None]) -> MedicationsClientConfig:
    """Build a MedicationsClientConfig from a flat mapping; missing keys use defaults."""
    values = {key: value for key, value in settings.items() if value not in (None, "")}
    return _validate(MedicationsClientConfig, values)


def client_credentials_from_env(
    environ: Mapping[str, str] | None = None,
    prefix: str = "EPIC_AUTH_",
) -> ClientCredentialsConfig:
    """Read ClientCredentialsConfig from environment variables."""
    keys = (
        "client_id",
        "token_endpoint",
        "private_key",
        "private_key_path",
        "jwt_expiration_seconds",
        "timeout_seconds",
    )
    return load_client_credentials(_section(environ, prefix, keys))


def medications_config_from_env(
    environ: Mapping[str, str] | None = None,
    prefix: str = "EPIC_MEDICATIONS_",
) -> MedicationsClientConfig:
    """Read MedicationsClientConfig from environment variables."""
    keys = (
        "client_name",
        "current_medications_path",
        "medication_administration_history_path",
        "timeout_seconds",
    )
    return load_medications_config(_section(environ, prefix, keys))


def _section(
    environ: Mapping[str, str] | None,
    prefix: str,
    keys: tuple[str, ...],
) -> dict[str, str | None]:
    environ = os.environ if environ is None else environ
    return {key: environ.get(f"{prefix}{key.upper()}") for key in keys}


def _validate(model: type[_Settings], values: dict) -> _Settings:
    try:
        return model.model_validate(values)
    except ValidationError as exc:
        raise _configuration_error(model, exc) from exc


def _configuration_error(model: type[BaseModel], exc: ValidationError) -> ConfigurationError:
    # loc and msg only; input values may hold key material
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return ConfigurationError(f"Invalid {model.__name__}: {problems}")
