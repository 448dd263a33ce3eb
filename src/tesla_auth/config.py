"""
OAuth client configuration for the Tesla identity provider.

Configuration can be provided programmatically or loaded from environment
variables. It is immutable once constructed.
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple
from urllib.parse import urlparse

from .exceptions import ConfigError

DEFAULT_CLIENT_ID = "ownerapi"
DEFAULT_AUTHORIZATION_URL = "https://auth.tesla.com/oauth2/v3/authorize"
DEFAULT_TOKEN_URL = "https://auth.tesla.com/oauth2/v3/token"
DEFAULT_REDIRECT_URI = "https://auth.tesla.com/void/callback"
DEFAULT_SCOPES: Tuple[str, ...] = ("openid", "email", "offline_access")

_FALSE_VALUES = {"0", "false", "no", "off"}


def _require_absolute_url(name: str, value: str) -> None:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"{name} must be an absolute http(s) URL, got {value!r}")


@dataclass(frozen=True)
class ClientConfig:
    """
    Configuration for the Tesla OAuth 2.0 Authorization Code flow.

    Attributes:
        client_id: OAuth client identifier (Tesla's owner app uses "ownerapi")
        client_secret: Client secret, if the provider requires one. Never logged.
        authorization_url: Provider authorization endpoint
        token_url: Provider token endpoint
        redirect_uri: Callback URL registered for the client
        scopes: Requested OAuth scopes
        use_pkce: Attach a PKCE S256 challenge to each attempt
        request_timeout: Seconds before the token exchange request gives up
        state_ttl_seconds: Reject callbacks for attempts older than this
            (None waits indefinitely)
    """

    client_id: str = DEFAULT_CLIENT_ID
    client_secret: Optional[str] = field(default=None, repr=False)

    # Tesla OAuth endpoints
    authorization_url: str = DEFAULT_AUTHORIZATION_URL
    token_url: str = DEFAULT_TOKEN_URL
    redirect_uri: str = DEFAULT_REDIRECT_URI

    scopes: Tuple[str, ...] = DEFAULT_SCOPES
    use_pkce: bool = True

    request_timeout: float = 30.0
    state_ttl_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.client_id:
            raise ConfigError("client_id cannot be empty")

        _require_absolute_url("authorization_url", self.authorization_url)
        _require_absolute_url("token_url", self.token_url)
        _require_absolute_url("redirect_uri", self.redirect_uri)

        if isinstance(self.scopes, str):
            # Accept "a b c" for convenience; frozen, so bypass __setattr__
            object.__setattr__(self, "scopes", tuple(self.scopes.split()))

        if not self.scopes:
            raise ConfigError("scopes cannot be empty")

        if self.request_timeout <= 0:
            raise ConfigError(
                f"request_timeout must be positive, got {self.request_timeout}"
            )

        if self.state_ttl_seconds is not None and self.state_ttl_seconds < 0:
            raise ConfigError("state_ttl_seconds cannot be negative")

    @property
    def scope(self) -> str:
        """Scopes as sent on the wire (space-delimited)."""
        return " ".join(self.scopes)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Load configuration from environment variables.

        Optional environment variables:
            TESLA_CLIENT_ID: OAuth client id (default: ownerapi)
            TESLA_CLIENT_SECRET: OAuth client secret (default: none)
            TESLA_AUTHORIZATION_URL: Authorization endpoint
            TESLA_TOKEN_URL: Token endpoint
            TESLA_REDIRECT_URI: Registered redirect URI
            TESLA_SCOPES: Space-separated scopes (default: openid email offline_access)
            TESLA_USE_PKCE: Set to 0/false/no to disable PKCE
            TESLA_REQUEST_TIMEOUT: Token request timeout in seconds (default: 30)
            TESLA_STATE_TTL: Attempt expiry in seconds (default: unbounded)

        Returns:
            ClientConfig instance

        Raises:
            ConfigError: If a value is malformed
        """
        try:
            request_timeout = float(os.environ.get("TESLA_REQUEST_TIMEOUT", "30"))
            ttl = os.environ.get("TESLA_STATE_TTL")
            state_ttl_seconds = float(ttl) if ttl else None
        except ValueError as e:
            raise ConfigError(f"Invalid numeric value in environment: {e}") from e

        scopes = os.environ.get("TESLA_SCOPES")

        return cls(
            client_id=os.environ.get("TESLA_CLIENT_ID", DEFAULT_CLIENT_ID),
            client_secret=os.environ.get("TESLA_CLIENT_SECRET") or None,
            authorization_url=os.environ.get(
                "TESLA_AUTHORIZATION_URL", DEFAULT_AUTHORIZATION_URL
            ),
            token_url=os.environ.get("TESLA_TOKEN_URL", DEFAULT_TOKEN_URL),
            redirect_uri=os.environ.get("TESLA_REDIRECT_URI", DEFAULT_REDIRECT_URI),
            scopes=tuple(scopes.split()) if scopes is not None else DEFAULT_SCOPES,
            use_pkce=os.environ.get("TESLA_USE_PKCE", "1").strip().lower()
            not in _FALSE_VALUES,
            request_timeout=request_timeout,
            state_ttl_seconds=state_ttl_seconds,
        )
