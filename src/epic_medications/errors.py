"""Exception taxonomy for the Epic token and medication clients.

Every error raised by this package derives from EpicClientError. Errors that
describe an HTTP exchange keep the raw status, body and headers as attributes
so callers can inspect them; header lookups are case-insensitive. Bodies can
carry PHI, so they are never part of the string form of an exception.
"""

from __future__ import annotations

from collections.abc import Mapping

from requests.structures import CaseInsensitiveDict


class EpicClientError(Exception):
    """Base class for all errors raised by epic_medications."""


class ConfigurationError(EpicClientError):
    """Client identity, endpoint or key material is missing or invalid."""


class ArgumentError(EpicClientError, ValueError):
    """A required call argument is missing or invalid. Raised before any I/O."""


class CancellationError(EpicClientError):
    """The caller's cancel event fired before the call completed."""


class AuthenticationError(EpicClientError):
    """The token endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Token request failed with status {status_code}")
        self.status_code = status_code
        self.body = body


class ResponseParseError(EpicClientError):
    """A 2xx token response could not be read as a token payload."""

    def __init__(self, message: str, body: str = "") -> None:
        super().__init__(message)
        self.body = body


class ApiError(EpicClientError):
    """A vendor endpoint answered with a status the client does not accept."""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: str,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(f"{message} (HTTP {status_code})")
        self.status_code = status_code
        self.body = body
        self.headers = CaseInsensitiveDict(headers or {})


class EmptyResponseError(ApiError):
    """A 2xx response arrived with an empty body."""

    def __init__(self, status_code: int, headers: Mapping[str, str] | None = None) -> None:
        super().__init__("Response was empty which was not expected", status_code, "", headers)
