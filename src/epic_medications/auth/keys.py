"""Decoding of PEM private keys (PKCS#8 or PKCS#1) for RS384 signing."""

from __future__ import annotations

import base64
import binascii
import re

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from ..errors import ConfigurationError

_PEM_ARMOR_RE = re.compile(r"-----(BEGIN|END)[A-Z0-9 ]*-----")
_WHITESPACE_RE = re.compile(r"\s+")


def load_rsa_private_key(pem: str) -> RSAPrivateKey:
    """Decode PEM-armored key text into an RSA private key.

    The DER body may be PKCS#8 (``BEGIN PRIVATE KEY``) or PKCS#1
    (``BEGIN RSA PRIVATE KEY``, as written by ``openssl genrsa``).

    The armor lines and all whitespace are stripped before base64 decoding,
    so keys pasted into environment variables with escaped or missing line
    breaks still load. Bare base64 without armor is accepted as well.

    Raises:
        ConfigurationError: The text is not base64, not PKCS#8 or PKCS#1 DER,
            encrypted, or not an RSA key.
    """
    body = _WHITESPACE_RE.sub("", _PEM_ARMOR_RE.sub("", pem.replace("\\n", "\n")))
    if not body:
        raise ConfigurationError("Private key material is empty")

    try:
        der = base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ConfigurationError(f"Private key is not valid base64: {exc}") from exc

    try:
        key = serialization.load_der_private_key(der, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise ConfigurationError(
            f"Private key is not an unencrypted PKCS#8 or PKCS#1 key: {exc}"
        ) from exc

    if not isinstance(key, RSAPrivateKey):
        raise ConfigurationError(
            f"RS384 signing needs an RSA private key, got {type(key).__name__}"
        )
    return key
