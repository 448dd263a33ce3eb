"""
Token result of a completed authorization flow.

Tokens are handed to the presentation sink and not kept by the client.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .exceptions import MalformedResponseError


def _mask(value: Optional[str]) -> str:
    if not value:
        return repr(value)
    return f"'{value[:4]}...'"


@dataclass(frozen=True)
class Tokens:
    """
    OAuth tokens returned by the token endpoint.

    Attributes:
        access_token: Short-lived access token for API calls
        refresh_token: Long-lived token for obtaining new access tokens
        expires_in: Access token lifetime in seconds, if reported
        token_type: Token type (typically "Bearer"), if reported
        id_token: OpenID Connect ID token, if reported
    """

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    token_type: Optional[str] = None
    id_token: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"Tokens(access_token={_mask(self.access_token)}, "
            f"refresh_token={_mask(self.refresh_token)}, "
            f"expires_in={self.expires_in!r}, token_type={self.token_type!r})"
        )

    @classmethod
    def from_response(cls, data: Any) -> "Tokens":
        """
        Build Tokens from a decoded token endpoint response.

        Args:
            data: Decoded JSON body

        Returns:
            Tokens instance

        Raises:
            MalformedResponseError: If the body is not an object or lacks access_token
        """
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Token response must be a JSON object, got {type(data).__name__}"
            )

        access_token = data.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise MalformedResponseError("Token response is missing 'access_token'")

        expires_in = data.get("expires_in")
        if expires_in is not None:
            try:
                expires_in = int(expires_in)
            except (TypeError, ValueError) as e:
                raise MalformedResponseError(
                    f"Invalid 'expires_in' in token response: {expires_in!r}"
                ) from e

        return cls(
            access_token=access_token,
            refresh_token=data.get("refresh_token"),
            expires_in=expires_in,
            token_type=data.get("token_type"),
            id_token=data.get("id_token"),
        )
