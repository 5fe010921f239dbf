"""Epic OAuth2 token provider using the backend services (JWT-bearer) flow.

Epic's backend services flow:
  1. Build a JWT whose iss and sub are both the client id, aud is the token
     endpoint, signed RS384 with the client's registered RSA private key.
  2. POST it to the token endpoint as a client_credentials grant.
  3. Use the returned access token as Bearer on the vendor API calls.

Tokens are not cached: every request_token() call signs and exchanges anew.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from typing import Any

import jwt
import pydantic
import requests

from ..cancellation import CancelEvent, raise_if_cancelled
from ..config import ClientCredentialsConfig
from ..constants import CLIENT_ASSERTION_TYPE, GRANT_TYPE, JWT_ALGORITHM, PHI_LOGGER_NAME
from ..errors import AuthenticationError, ResponseParseError
from ..models.token import AccessToken
from .keys import load_rsa_private_key

logger = logging.getLogger(__name__)
phi_logger = logging.getLogger(PHI_LOGGER_NAME)


class TokenProvider:
    """Exchanges a signed client assertion for a bearer access token."""

    def __init__(
        self,
        config: ClientCredentialsConfig,
        session: requests.Session | None = None,
    ) -> None:
        """
        Args:
            config: Client identity, token endpoint and key material.
            session: Shared transport. When omitted the provider creates one,
                owns it, and closes it in close(). A supplied session is
                borrowed and never closed here.

        Raises:
            ConfigurationError: The private key cannot be decoded.
        """
        self._config = config
        self._private_key = load_rsa_private_key(config.private_key_pem)
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._closed = False

    @property
    def owns_session(self) -> bool:
        return self._owns_session

    def request_token(self, cancel_event: CancelEvent | None = None) -> AccessToken:
        """Sign a new client assertion and exchange it for an access token.

        Args:
            cancel_event: Checked before the request is sent and again once
                the response is in; if set, the call raises CancellationError.

        Returns:
            The AccessToken; ``access_token`` is always non-empty.

        Raises:
            AuthenticationError: The token endpoint returned a non-2xx status.
            ResponseParseError: A 2xx body was not a usable token payload.
            CancellationError: ``cancel_event`` was set.
        """
        self._ensure_open()
        raise_if_cancelled(cancel_event)

        assertion = self.build_client_assertion()
        logger.info("Requesting Epic access token for client %s", self._config.client_id)

        response = self._session.post(
            self._config.token_endpoint,
            data={
                "grant_type": GRANT_TYPE,
                "client_assertion_type": CLIENT_ASSERTION_TYPE,
                "client_assertion": assertion,
            },
            headers={"Content-Type": "application/x-www-form-urlencoded; charset=utf-8"},
            timeout=self._config.timeout_seconds,
        )
        body = response.text
        raise_if_cancelled(cancel_event)

        if not 200 <= response.status_code < 300:
            logger.warning("Epic token request failed with status %s", response.status_code)
            phi_logger.debug("Token endpoint error body: %s", body)
            raise AuthenticationError(response.status_code, body)

        token = _parse_token_response(body)
        logger.debug(
            "Received %s token expiring in %ss", token.token_type, token.expires_in_seconds
        )
        return token

    def build_client_assertion(self, now: int | None = None) -> str:
        """Build and sign the RS384 client assertion JWT.

        Args:
            now: Issue time as a Unix timestamp; defaults to the current time.

        Returns:
            The compact-serialized JWT.
        """
        now = int(time.time()) if now is None else now
        claims = {
            "iss": self._config.client_id,
            "sub": self._config.client_id,
            "aud": self._config.token_endpoint,
            "iat": now,
            "nbf": now,
            "exp": now + self._config.jwt_expiration_seconds,
            "jti": str(uuid.uuid4()),
        }
        return jwt.encode(
            claims,
            self._private_key,
            algorithm=JWT_ALGORITHM,
            headers={"typ": "JWT"},
        )

    def close(self) -> None:
        """Release the session if this provider created it."""
        if self._closed:
            return
        if self._owns_session:
            self._session.close()
        self._closed = True

    def __enter__(self) -> "TokenProvider":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("TokenProvider is closed")


def _parse_token_response(body: str) -> AccessToken:
    try:
        payload: Any = json.loads(body)
    except ValueError as exc:
        raise ResponseParseError("Token response is not valid JSON", body) from exc

    if not isinstance(payload, dict):
        raise ResponseParseError("Token response is not a JSON object", body)

    try:
        return AccessToken.model_validate(payload)
    except pydantic.ValidationError as exc:
        fields = sorted({str(error["loc"][0]) for error in exc.errors() if error["loc"]})
        raise ResponseParseError(
            f"Token response has missing or invalid fields: {', '.join(fields)}", body
        ) from exc
