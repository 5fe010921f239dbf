"""Authenticated dispatch and response classification for Epic's vendor APIs."""

from __future__ import annotations

import logging
import urllib.parse

import requests

from ..cancellation import CancelEvent, raise_if_cancelled
from ..constants import DEFAULT_TIMEOUT_SECONDS, PHI_LOGGER_NAME
from ..errors import ApiError, ArgumentError, EmptyResponseError
from ..models.request_models import VendorApiRequest

logger = logging.getLogger(__name__)
phi_logger = logging.getLogger(PHI_LOGGER_NAME)

_JSON_ACCEPT = "application/json, application/fhir+json"
_FHIR_ACCEPT = "application/fhir+json"
_JSON_CONTENT_TYPE = "application/json; charset=utf-8"

_STATUS_MESSAGES: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    500: "Internal server error",
    503: "Service unavailable",
}


def compose_url(base_url: str, relative_path: str) -> str:
    """Join a base URL and a relative path with exactly one slash.

    Trailing slashes on ``base_url`` and leading slashes on ``relative_path``
    are trimmed, so the result does not depend on how the caller wrote the
    boundary.

    Raises:
        ArgumentError: Either part is empty, or the result is not an absolute
            http(s) URL.
    """
    if not base_url:
        raise ArgumentError("base_url must not be empty")
    if not relative_path:
        raise ArgumentError("relative_path must not be empty")

    url = f"{base_url.rstrip('/')}/{relative_path.lstrip('/')}"

    parsed = urllib.parse.urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ArgumentError(f"Cannot build an absolute URL from base {base_url!r}")
    return url


class AuthenticatedApiClient:
    """Sends bearer-authenticated requests and classifies the responses.

    The raw response text is returned untouched. Turning it into domain
    objects is up to the caller.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._timeout = timeout_seconds
        self._closed = False

    @property
    def owns_session(self) -> bool:
        return self._owns_session

    def invoke(
        self,
        base_url: str,
        relative_path: str,
        body: VendorApiRequest,
        access_token: str,
        cancel_event: CancelEvent | None = None,
    ) -> str:
        """POST a vendor request body and return the raw response text.

        Args:
            base_url: Vendor server root, e.g. ``https://host/interconnect``.
            relative_path: Endpoint path below ``base_url``.
            body: A constructed request model; serialized with wire names.
            access_token: Bearer token from TokenProvider.
            cancel_event: Checked before sending and after the response.

        Returns:
            The response body, exactly as received.

        Raises:
            ArgumentError: A required argument is missing; nothing was sent.
            ApiError: The server returned a non-2xx status.
            EmptyResponseError: The server returned 2xx with an empty body.
            CancellationError: ``cancel_event`` was set.
        """
        if body is None:
            raise ArgumentError("body must not be None")
        if not isinstance(body, VendorApiRequest):
            raise ArgumentError(f"body must be a VendorApiRequest, got {type(body).__name__}")
        _require_token(access_token)
        url = compose_url(base_url, relative_path)

        headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": _JSON_ACCEPT,
            "Content-Type": _JSON_CONTENT_TYPE,
        }
        payload = body.to_wire_json()
        phi_logger.debug("POST %s body: %s", url, payload)
        return self._send("POST", url, headers, cancel_event, data=payload.encode("utf-8"))

    def get_fhir_resource(
        self,
        url: str,
        access_token: str,
        cancel_event: CancelEvent | None = None,
    ) -> str:
        """GET a FHIR resource or search URL and return the raw response text.

        Classification is the same as invoke().
        """
        if not url:
            raise ArgumentError("url must not be empty")
        _require_token(access_token)
        parsed = urllib.parse.urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ArgumentError("url must be an absolute http(s) URL")

        headers = {"Authorization": f"Bearer {access_token}", "Accept": _FHIR_ACCEPT}
        return self._send("GET", url, headers, cancel_event)

    def close(self) -> None:
        """Release the session if this client created it."""
        if self._closed:
            return
        if self._owns_session:
            self._session.close()
        self._closed = True

    def __enter__(self) -> "AuthenticatedApiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        cancel_event: CancelEvent | None,
        **kwargs,
    ) -> str:
        if self._closed:
            raise RuntimeError(f"{type(self).__name__} is closed")
        raise_if_cancelled(cancel_event)

        logger.debug("Sending %s request to %s", method, urllib.parse.urlparse(url).netloc)
        phi_logger.debug("%s %s", method, url)
        response = self._session.request(method, url, headers=headers, timeout=self._timeout, **kwargs)
        text = response.text
        raise_if_cancelled(cancel_event)

        return _classify(response, text)


def _classify(response: requests.Response, text: str) -> str:
    status = response.status_code
    headers = response.headers
    phi_logger.debug("Response status %s body: %s", status, text)

    if 200 <= status < 300:
        if not text:
            logger.error("Epic API returned status %s with an empty body", status)
            raise EmptyResponseError(status, headers)
        logger.debug("Received successful response from Epic API")
        return text

    message = _STATUS_MESSAGES.get(status, f"The HTTP status code of the response was not expected ({status})")
    logger.error("Epic API request failed: %s (HTTP %s)", message, status)
    raise ApiError(message, status, text, headers)


def _require_token(access_token: str) -> None:
    if not access_token or not access_token.strip():
        raise ArgumentError("access_token must not be empty")
