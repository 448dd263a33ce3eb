"""CSRF state and PKCE generation"""

import base64
import hashlib
import secrets
from typing import NamedTuple

# 16 bytes = 128 bits of entropy
MIN_STATE_BYTES = 16
DEFAULT_STATE_BYTES = 32


class PKCEPair(NamedTuple):
    # RFC 7636: challenge = BASE64URL(SHA256(verifier)), unpadded
    verifier: str
    challenge: str


def generate_state(nbytes: int = DEFAULT_STATE_BYTES) -> str:
    """
    Generate a random state parameter for CSRF protection.

    Args:
        nbytes: Number of random bytes (at least MIN_STATE_BYTES)

    Returns:
        URL-safe base64 string without padding

    Raises:
        ValueError: If nbytes is below MIN_STATE_BYTES
    """
    if nbytes < MIN_STATE_BYTES:
        raise ValueError(
            f"State needs at least {MIN_STATE_BYTES} random bytes, got {nbytes}"
        )
    return secrets.token_urlsafe(nbytes)


def generate_pkce() -> PKCEPair:
    """Create a fresh S256 verifier/challenge pair for one authorization attempt."""
    verifier = generate_state()
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    return PKCEPair(verifier, base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii"))
