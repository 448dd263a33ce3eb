"""
OAuth 2.0 helper for the Tesla identity provider.

This package drives the Authorization Code flow against auth.tesla.com:
it builds the sign-in URL with a CSRF state (and PKCE challenge),
watches the URLs the browser visits for the /void/callback redirect,
exchanges the authorization code for tokens and hands them to a sink.

Public API:
    ClientConfig: OAuth configuration
    OAuthClient: Authorization state machine (IDLE/AWAITING/COMPLETED/FAILED)
    Tokens: Access/refresh token result
    AuthorizationCoordinator: Channel + consumer thread driving a full flow
    RedirectChannel: Ordered channel of observed URLs
    PastedUrlInterceptor: Reads callback URLs pasted into the terminal
    OAuthCallbackServer: Local callback server for localhost redirect URIs
    ConsoleSink: Prints the outcome

Exceptions:
    TeslaAuthError: Base exception
    ConfigError: Malformed configuration
    AuthorizationError: Provider rejected the authorization
    MissingParameterError: Callback lacked state or code
    CsrfMismatchError: Callback state did not match
    AuthorizationExpiredError: Attempt outlived its TTL
    TokenExchangeError: Token request failed
    MalformedResponseError: Token response lacked required fields
"""

from .auth_server import OAuthCallbackServer
from .authorization import build_authorization_url
from .client import ClientState, OAuthClient, PendingAuthorization
from .config import ClientConfig
from .coordinator import (
    AuthorizationCoordinator,
    FlowResult,
    RedirectChannel,
    RedirectInterceptor,
)
from .csrf import PKCEPair, generate_pkce, generate_state
from .exceptions import (
    AuthorizationError,
    AuthorizationExpiredError,
    ConfigError,
    CsrfMismatchError,
    MalformedResponseError,
    MissingParameterError,
    TeslaAuthError,
    TokenExchangeError,
)
from .interceptors import PastedUrlInterceptor
from .redirect import RedirectUrl, is_redirect_url, parse_redirect_url
from .sink import CollectingSink, ConsoleSink, PresentationSink
from .tokens import Tokens
from .transport import RequestsTransport, TokenTransport

__all__ = [
    # Configuration
    "ClientConfig",
    # State / PKCE
    "generate_state",
    "generate_pkce",
    "PKCEPair",
    # Authorization URL
    "build_authorization_url",
    # Redirects
    "RedirectUrl",
    "parse_redirect_url",
    "is_redirect_url",
    # Client
    "OAuthClient",
    "ClientState",
    "PendingAuthorization",
    "Tokens",
    # Transport
    "TokenTransport",
    "RequestsTransport",
    # Coordinator
    "AuthorizationCoordinator",
    "FlowResult",
    "RedirectChannel",
    "RedirectInterceptor",
    "PastedUrlInterceptor",
    "OAuthCallbackServer",
    # Sinks
    "PresentationSink",
    "ConsoleSink",
    "CollectingSink",
    # Exceptions
    "TeslaAuthError",
    "ConfigError",
    "AuthorizationError",
    "MissingParameterError",
    "CsrfMismatchError",
    "AuthorizationExpiredError",
    "TokenExchangeError",
    "MalformedResponseError",
]
