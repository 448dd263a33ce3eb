"""
Exception classes for the Tesla OAuth flow.

Every error here is terminal for the authorization attempt in progress.
A fresh attempt starts with a new call to ``OAuthClient.authorization_url()``.
"""

from typing import Optional


class TeslaAuthError(Exception):
    """Base exception for all Tesla auth errors."""

    pass


class ConfigError(TeslaAuthError):
    """Client configuration is missing or malformed."""

    pass


class AuthorizationError(TeslaAuthError):
    """
    The authorization step failed before a code could be exchanged.

    Attributes:
        error: OAuth error code (e.g. "access_denied"), if the provider sent one
        error_description: Human-readable description from the provider
    """

    def __init__(
        self,
        message: str,
        error: Optional[str] = None,
        error_description: Optional[str] = None,
    ):
        super().__init__(message)
        self.error = error
        self.error_description = error_description


class MissingParameterError(AuthorizationError):
    """The callback URL lacked the ``state`` or ``code`` query parameter."""

    def __init__(self, parameter: str):
        super().__init__(
            f"Callback URL is missing the '{parameter}' parameter",
            error="missing_parameter",
        )
        self.parameter = parameter


class CsrfMismatchError(AuthorizationError):
    """The callback ``state`` does not match the pending authorization."""

    def __init__(self, message: str = "State parameter does not match the pending authorization"):
        super().__init__(message, error="state_mismatch")


class AuthorizationExpiredError(AuthorizationError):
    """The pending authorization outlived the configured state TTL."""

    def __init__(self, age_seconds: float, ttl_seconds: float):
        super().__init__(
            f"Authorization attempt expired after {age_seconds:.0f}s "
            f"(limit {ttl_seconds:.0f}s)",
            error="expired",
        )
        self.age_seconds = age_seconds
        self.ttl_seconds = ttl_seconds


class TokenExchangeError(TeslaAuthError):
    """Failed to exchange the authorization code for tokens."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(TokenExchangeError):
    """Token endpoint answered, but the body lacked required fields."""

    pass
