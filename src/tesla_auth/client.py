"""
OAuth client for the Tesla Authorization Code flow.

The client owns a single pending authorization attempt and moves through
these states:

    IDLE -> AWAITING -> COMPLETED
                     -> FAILED

``authorization_url()`` starts (or supersedes) an attempt. Every URL the
browser visits is fed to ``handle_url()``; URLs that are not the callback
are ignored. A callback whose ``state`` matches the pending attempt has
its code exchanged for tokens exactly once. Any error ends the attempt.
"""

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .authorization import build_authorization_url
from .config import ClientConfig
from .csrf import generate_pkce, generate_state
from .exceptions import (
    AuthorizationError,
    AuthorizationExpiredError,
    CsrfMismatchError,
    MissingParameterError,
    TeslaAuthError,
    TokenExchangeError,
)
from .redirect import RedirectUrl, is_redirect_url, parse_redirect_url
from .tokens import Tokens
from .transport import RequestsTransport, TokenTransport

logger = logging.getLogger(__name__)


class ClientState(Enum):
    """Lifecycle of an OAuthClient."""

    IDLE = "idle"
    AWAITING = "awaiting"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class PendingAuthorization:
    """
    The authorization attempt currently waiting for its callback.

    Attributes:
        state: CSRF state sent with the authorization URL
        created_at: time.monotonic() value when the attempt started
        code_verifier: PKCE verifier, if PKCE is in use
    """

    state: str
    created_at: float
    code_verifier: Optional[str] = None

    def age(self) -> float:
        return time.monotonic() - self.created_at


class OAuthClient:
    """
    OAuth 2.0 Authorization Code client with CSRF protection.

    One instance drives one login. Concurrent logins need separate
    instances.

    Example:
        client = OAuthClient(ClientConfig())
        url = client.authorization_url()
        # ... user signs in, browser lands on the callback ...
        tokens = client.handle_url(callback_url)
    """

    def __init__(
        self, config: ClientConfig, transport: Optional[TokenTransport] = None
    ):
        """
        Initialize OAuth client.

        Args:
            config: OAuth configuration
            transport: Token transport (creates a RequestsTransport if not provided)
        """
        self.config = config
        self.transport = transport or RequestsTransport(timeout=config.request_timeout)
        self._state = ClientState.IDLE
        self._pending: Optional[PendingAuthorization] = None
        self._error: Optional[TeslaAuthError] = None
        self._lock = threading.RLock()

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def pending(self) -> Optional[PendingAuthorization]:
        return self._pending

    @property
    def error(self) -> Optional[TeslaAuthError]:
        """Error that ended the last attempt, if any."""
        return self._error

    def authorization_url(self) -> str:
        """
        Start a new authorization attempt.

        Any attempt still awaiting its callback is superseded; its state
        will no longer be accepted.

        Returns:
            Authorization URL to open in the browser

        Raises:
            AuthorizationError: If the client already completed a flow
        """
        with self._lock:
            if self._state is ClientState.COMPLETED:
                raise AuthorizationError(
                    "Authorization already completed; create a new client to log in again"
                )

            if self._state is ClientState.AWAITING:
                logger.info("Superseding pending authorization attempt")

            state = generate_state()
            code_verifier = None
            code_challenge = None
            if self.config.use_pkce:
                code_verifier, code_challenge = generate_pkce()

            url = build_authorization_url(self.config, state, code_challenge)

            self._pending = PendingAuthorization(
                state=state,
                created_at=time.monotonic(),
                code_verifier=code_verifier,
            )
            self._error = None
            self._state = ClientState.AWAITING

            logger.debug(f"Awaiting callback for state {state[:6]}...")
            return url

    def is_redirect_url(self, url: str) -> bool:
        """Check whether ``url`` is the configured callback. No side effects."""
        return is_redirect_url(self.config, url)

    def handle_url(self, url: str) -> Optional[Tokens]:
        """
        Process a URL observed by the browser.

        Args:
            url: Visited URL

        Returns:
            Tokens if this URL completed the flow, None if it was ignored

        Raises:
            AuthorizationError: Provider reported an error on the callback
            MissingParameterError: Callback lacked state or code
            AuthorizationExpiredError: Attempt outlived state_ttl_seconds
            CsrfMismatchError: Callback state does not match the pending attempt
            TokenExchangeError: Code exchange failed
            MalformedResponseError: Token response lacked access_token
        """
        with self._lock:
            if self._state is not ClientState.AWAITING:
                logger.debug(f"Ignoring URL while {self._state.value}")
                return None

            if not self.is_redirect_url(url):
                return None

            redirect = parse_redirect_url(url)
            logger.info("Received OAuth callback")

            try:
                pending = self._validate_callback(redirect)
                # Single use: the state is spent whatever the exchange outcome
                self._pending = None
                tokens = self.retrieve_tokens(
                    redirect.get("code"), code_verifier=pending.code_verifier
                )
            except TeslaAuthError as e:
                self._fail(e)
                raise

            self._state = ClientState.COMPLETED
            logger.info("Authorization complete")
            return tokens

    def retrieve_tokens(
        self, code: str, code_verifier: Optional[str] = None
    ) -> Tokens:
        """
        Exchange an authorization code for tokens.

        Args:
            code: Authorization code from the callback
            code_verifier: PKCE verifier matching the challenge that was sent

        Returns:
            Tokens with access and refresh tokens

        Raises:
            TokenExchangeError: If the request fails
            MalformedResponseError: If the response lacks access_token
        """
        logger.info("Exchanging authorization code for tokens")

        data = {
            "grant_type": "authorization_code",
            "client_id": self.config.client_id,
            "code": code,
            "redirect_uri": self.config.redirect_uri,
        }
        if self.config.client_secret:
            data["client_secret"] = self.config.client_secret
        if code_verifier:
            data["code_verifier"] = code_verifier

        try:
            response = self.transport.post_form(self.config.token_url, data)
        except TeslaAuthError:
            raise
        except Exception as e:
            logger.error(f"Token request failed: {e}")
            raise TokenExchangeError(f"Token request failed: {e}") from e

        tokens = Tokens.from_response(response)

        logger.info("Successfully obtained tokens")
        return tokens

    def _validate_callback(self, redirect: RedirectUrl) -> PendingAuthorization:
        error = redirect.get("error")
        if error:
            description = redirect.get("error_description")
            logger.error(f"OAuth error: {error} - {description}")
            raise AuthorizationError(
                f"Authorization failed: {error}",
                error=error,
                error_description=description,
            )

        for name in ("state", "code"):
            if not redirect.get(name):
                logger.error(f"No {name} parameter in callback")
                raise MissingParameterError(name)

        pending = self._pending
        ttl = self.config.state_ttl_seconds
        if ttl is not None and pending.age() > ttl:
            raise AuthorizationExpiredError(pending.age(), ttl)

        if redirect.get("state") != pending.state:
            logger.error("State mismatch on callback, aborting authorization")
            raise CsrfMismatchError()

        return pending

    def _fail(self, error: TeslaAuthError) -> None:
        self._pending = None
        self._error = error
        self._state = ClientState.FAILED
