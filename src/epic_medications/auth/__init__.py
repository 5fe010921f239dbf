from .keys import load_rsa_private_key
from .token_provider import TokenProvider

__all__ = ["TokenProvider", "load_rsa_private_key"]
