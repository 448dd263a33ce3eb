"""
Authorization URL construction.

Builds the URL the user opens in a browser to sign in with Tesla and
grant access. The provider later redirects back to ``redirect_uri`` with
the same ``state`` and an authorization ``code``.
"""

import logging
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from .config import ClientConfig
from .exceptions import ConfigError

logger = logging.getLogger(__name__)


def build_authorization_url(
    config: ClientConfig, state: str, code_challenge: Optional[str] = None
) -> str:
    """
    Generate the Tesla authorization URL.

    Args:
        config: OAuth configuration
        state: CSRF state for this attempt
        code_challenge: PKCE S256 challenge, if PKCE is in use

    Returns:
        Complete authorization URL with query parameters

    Raises:
        ConfigError: If the authorization endpoint is not an absolute URL
    """
    endpoint = urlparse(config.authorization_url)
    if endpoint.scheme not in ("http", "https") or not endpoint.netloc:
        raise ConfigError(
            f"Cannot build authorization URL from {config.authorization_url!r}"
        )

    params = {
        "client_id": config.client_id,
        "redirect_uri": config.redirect_uri,
        "response_type": "code",
        "scope": config.scope,
        "state": state,
    }
    if code_challenge:
        params["code_challenge"] = code_challenge
        params["code_challenge_method"] = "S256"

    # Keep any query the endpoint already carries
    query = parse_qsl(endpoint.query, keep_blank_values=True)
    query.extend(params.items())

    url = urlunparse(endpoint._replace(query=urlencode(query)))
    logger.debug(f"Generated authorization URL for {endpoint.netloc}{endpoint.path}")
    return url
